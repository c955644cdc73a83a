"""Message entity: one immutable inbound or outbound chat message."""
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import JSON, ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.shared.entities.base import BaseEntity

if TYPE_CHECKING:
    from api.features.chat.entities.conversation import Conversation


class Direction(str, Enum):
    """Which side of the conversation wrote the message."""

    INBOUND = "inbound"
    OUTBOUND = "outbound"


class Message(BaseEntity):
    """Message entity; never updated after insert."""

    __table_args__ = (
        UniqueConstraint(
            "conversation_id",
            "external_message_id",
            name="message_conversation_external_id_unique",
        ),
        Index("ix_message_conversation_id_created_at", "conversation_id", "created_at"),
    )

    conversation_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("conversation.id", ondelete="CASCADE"),
        nullable=False,
    )
    direction: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    external_message_id: Mapped[Optional[str]] = mapped_column(String(255))
    # Provider-safe debug info only; never credentials or raw provider errors
    meta: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata", JSON().with_variant(JSONB(), "postgresql")
    )

    conversation: Mapped["Conversation"] = relationship(back_populates="messages")

    @property
    def is_outbound(self) -> bool:
        return self.direction == Direction.OUTBOUND.value
