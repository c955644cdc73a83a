"""Chat orchestration: session resolution, persistence and reply generation.

The service is channel-agnostic. HTTP routes call it today; other channels
only need to map their events onto a session id and a message text.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.features.chat.entities.conversation import Conversation
from api.features.chat.entities.message import Direction, Message
from api.features.chat.exceptions import (
    ConversationNotFoundError,
    EmptyMessageError,
    InvalidSessionError,
)
from api.features.chat.repository import ConversationRepository, MessageRepository
from api.shared.exceptions import DatabaseError
from api.shared.utils import normalize_optional
from llm.gateway import ProviderGateway
from llm.history import to_turns

logger = structlog.get_logger("chat.service")

WEB_CHANNEL = "web"
WEB_SESSION_TITLE = "Web session"


@dataclass(frozen=True)
class SendMessageResult:
    reply: str
    session_id: str


@dataclass(frozen=True)
class ChatSessionResult:
    reply: str
    session_id: str
    messages: List[Message] = field(default_factory=list)


class ChatService:
    """Runs one chat request against one database session."""

    def __init__(
        self,
        *,
        db_session: AsyncSession,
        gateway: ProviderGateway,
        history_limit: int = 20,
    ) -> None:
        self.db_session = db_session
        self.gateway = gateway
        self.history_limit = history_limit
        self.conversations = ConversationRepository(db_session)
        self.messages = MessageRepository(db_session)

    async def resolve_session(self, session_id: Optional[str]) -> Conversation:
        """Return the session's conversation, creating one when no id is given."""
        normalized = normalize_optional(session_id)
        if normalized is None:
            conversation = await self.conversations.create_conversation(
                channel=WEB_CHANNEL, title=WEB_SESSION_TITLE
            )
            logger.info("chat.session.created", session_id=conversation.id)
            return conversation

        conversation = await self.conversations.get_by_id(normalized)
        if conversation is None:
            raise InvalidSessionError(normalized)
        return conversation

    async def send(self, message: str, session_id: Optional[str] = None) -> SendMessageResult:
        text = (message or "").strip()
        if not text:
            raise EmptyMessageError()

        conversation = await self.resolve_session(session_id)
        await self._append(conversation.id, Direction.INBOUND, text)
        # Release the transaction before the unbounded-latency provider call
        await self._commit()

        history = await self.messages.list_recent(conversation.id, limit=self.history_limit)
        generated = await self.gateway.generate_reply(to_turns(history))

        await self._append(
            conversation.id,
            Direction.OUTBOUND,
            generated.reply,
            metadata={"llm": generated.meta.to_metadata()},
        )
        await self._commit()

        logger.info(
            "chat.message.sent",
            session_id=conversation.id,
            history_turns=len(history),
            used_fallback=generated.meta.used_fallback,
            error_code=generated.meta.error_code,
        )
        return SendMessageResult(reply=generated.reply, session_id=conversation.id)

    async def get_session(self, session_id: str) -> ChatSessionResult:
        normalized = normalize_optional(session_id) or ""
        conversation = await self.conversations.get_by_id(normalized) if normalized else None
        if conversation is None:
            raise ConversationNotFoundError(session_id)

        messages = await self.messages.list_by_conversation(conversation.id)
        last_reply = next((m.content for m in reversed(messages) if m.is_outbound), "")
        return ChatSessionResult(
            reply=last_reply, session_id=conversation.id, messages=messages
        )

    async def _append(
        self,
        conversation_id: str,
        direction: Direction,
        content: str,
        metadata: Optional[dict] = None,
    ) -> Message:
        msg = await self.messages.create_message(
            conversation_id=conversation_id,
            direction=direction,
            content=content,
            metadata=metadata,
        )
        await self.conversations.touch(conversation_id)
        return msg

    async def _commit(self) -> None:
        try:
            await self.db_session.commit()
        except SQLAlchemyError as e:
            await self.db_session.rollback()
            raise DatabaseError(
                "Failed to persist chat message",
                details={"reason": e.__class__.__name__},
            ) from e
