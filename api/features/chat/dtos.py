"""DTOs for the Chat feature.

Field names on the wire are camelCase (``sessionId``, ``createdAt``) while the
Python attributes stay snake_case.
"""
from typing import List, Literal, Optional

from pydantic import Field

from api.shared.dtos import BaseDTO

MAX_MESSAGE_LENGTH = 4000


class SendMessageRequest(BaseDTO):
    """Send a user message, optionally continuing an existing session."""

    message: str = Field(
        min_length=1, max_length=MAX_MESSAGE_LENGTH, description="User message text"
    )
    session_id: Optional[str] = Field(
        default=None,
        alias="sessionId",
        min_length=1,
        description="Conversation/session identifier (server-generated)",
    )


class ChatResponse(BaseDTO):
    """Reply to a sent message."""

    reply: str = Field(description="Assistant reply text")
    session_id: str = Field(alias="sessionId", description="Session identifier")


class ChatMessageDTO(BaseDTO):
    """One persisted chat message."""

    id: str = Field(description="Message identifier")
    direction: Literal["inbound", "outbound"] = Field(description="Message direction")
    content: str = Field(description="Message text")
    created_at: str = Field(alias="createdAt", description="ISO-8601 creation time")


class ChatHistoryResponse(BaseDTO):
    """A session's full history plus its most recent reply."""

    reply: str = Field(description="Latest assistant reply, empty when none")
    session_id: str = Field(alias="sessionId", description="Session identifier")
    messages: List[ChatMessageDTO] = Field(description="Messages in chronological order")
