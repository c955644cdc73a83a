"""Repositories for chat persistence: conversations and their messages."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError

from api.features.chat.entities.conversation import Conversation
from api.features.chat.entities.message import Direction, Message
from api.shared.base import BaseRepository
from api.shared.entities.base import monotonic_utcnow
from api.shared.exceptions import DatabaseError


class ConversationRepository(BaseRepository[Conversation]):
    model = Conversation

    async def create_conversation(
        self,
        *,
        channel: str,
        title: Optional[str] = None,
        external_conversation_id: Optional[str] = None,
    ) -> Conversation:
        return await self.create(
            Conversation(
                channel=channel,
                title=title,
                external_conversation_id=external_conversation_id,
            )
        )

    async def find_by_external_id(
        self, *, channel: str, external_conversation_id: str
    ) -> Optional[Conversation]:
        stmt = select(Conversation).where(
            Conversation.channel == channel,
            Conversation.external_conversation_id == external_conversation_id,
        )
        return await self._scalar_one_or_none(stmt)

    async def touch(self, conversation_id: str) -> None:
        """Bump ``updated_at`` for recency ordering."""
        try:
            await self.session.execute(
                update(Conversation)
                .where(Conversation.id == conversation_id)
                .values(updated_at=monotonic_utcnow())
            )
        except SQLAlchemyError as e:
            raise DatabaseError(
                "Failed to update Conversation",
                details={"reason": e.__class__.__name__},
            ) from e


class MessageRepository(BaseRepository[Message]):
    model = Message

    async def create_message(
        self,
        *,
        conversation_id: str,
        direction: Direction,
        content: str,
        metadata: Optional[Dict[str, Any]] = None,
        external_message_id: Optional[str] = None,
    ) -> Message:
        return await self.create(
            Message(
                conversation_id=conversation_id,
                direction=direction.value,
                content=content,
                meta=metadata,
                external_message_id=external_message_id,
            )
        )

    async def list_by_conversation(self, conversation_id: str) -> List[Message]:
        """All messages of a conversation, oldest first."""
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.asc(), Message.id.asc())
        )
        return await self._scalars(stmt)

    async def list_recent(self, conversation_id: str, *, limit: int) -> List[Message]:
        """The newest ``limit`` messages, returned oldest first.

        Reads newest-first with a LIMIT so the query stays bounded, then
        reverses in memory.
        """
        stmt = (
            select(Message)
            .where(Message.conversation_id == conversation_id)
            .order_by(Message.created_at.desc(), Message.id.desc())
            .limit(limit)
        )
        recent = await self._scalars(stmt)
        return list(reversed(recent))
