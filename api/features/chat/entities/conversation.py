"""Conversation entity: one chat thread on one channel."""
from datetime import datetime
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import DateTime, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from api.shared.entities.base import BaseEntity, monotonic_utcnow

if TYPE_CHECKING:
    from api.features.chat.entities.message import Message


class Conversation(BaseEntity):
    """A conversation owns its messages; deleting it deletes them."""

    __table_args__ = (
        UniqueConstraint(
            "channel",
            "external_conversation_id",
            name="conversation_channel_external_id_unique",
        ),
        Index("ix_conversation_channel_created_at", "channel", "created_at"),
    )

    # Free-form so new channels need no migration ("web", "whatsapp", ...)
    channel: Mapped[str] = mapped_column(String(50), nullable=False)
    external_conversation_id: Mapped[Optional[str]] = mapped_column(String(255))
    title: Mapped[Optional[str]] = mapped_column(String(500))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=monotonic_utcnow,
    )

    messages: Mapped[List["Message"]] = relationship(
        back_populates="conversation",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Message.created_at",
    )
