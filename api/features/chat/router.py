"""Router for the Chat feature.

Routes stay thin: validation plus delegation to the controller.
"""
from dependency_injector.wiring import Provide, inject
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.chat.controller import ChatController
from api.features.chat.dtos import ChatHistoryResponse, ChatResponse, SendMessageRequest
from api.shared.db import get_db_session
from di.container import ApplicationContainer as DependencyContainer

router = APIRouter()


@router.post("/message", response_model=ChatResponse)
@inject
async def send_message(
    request: SendMessageRequest,
    controller: ChatController = Depends(
        Provide[DependencyContainer.controllers.chat_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.send_message(
        message=request.message,
        session_id=request.session_id,
        db_session=db_session,
    )


@router.get("/{session_id}", response_model=ChatHistoryResponse)
@inject
async def get_session(
    session_id: str,
    controller: ChatController = Depends(
        Provide[DependencyContainer.controllers.chat_controller]
    ),
    db_session: AsyncSession = Depends(get_db_session),
):
    return await controller.get_session(session_id=session_id, db_session=db_session)
