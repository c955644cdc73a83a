"""Controller for the Chat feature.

``ChatServiceException`` propagates to the app-level handler, which renders
``{"error": error_code}`` with the exception's status.
"""
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.features.chat.dtos import ChatHistoryResponse, ChatMessageDTO, ChatResponse
from api.features.chat.service import ChatService
from api.shared.utils import to_iso8601
from llm.gateway import ProviderGateway


class ChatController:
    """Controller for sending messages and reading session history."""

    def __init__(self, gateway: ProviderGateway, history_limit: int):
        self.gateway = gateway
        self.history_limit = history_limit

    def _service(self, db_session: AsyncSession) -> ChatService:
        return ChatService(
            db_session=db_session,
            gateway=self.gateway,
            history_limit=self.history_limit,
        )

    async def send_message(
        self,
        *,
        message: str,
        session_id: Optional[str],
        db_session: AsyncSession,
    ) -> ChatResponse:
        result = await self._service(db_session).send(message, session_id)
        return ChatResponse(reply=result.reply, session_id=result.session_id)

    async def get_session(
        self,
        *,
        session_id: str,
        db_session: AsyncSession,
    ) -> ChatHistoryResponse:
        result = await self._service(db_session).get_session(session_id)
        return ChatHistoryResponse(
            reply=result.reply,
            session_id=result.session_id,
            messages=[
                ChatMessageDTO(
                    id=m.id,
                    direction=m.direction,
                    content=m.content,
                    created_at=to_iso8601(m.created_at),
                )
                for m in result.messages
            ],
        )
