"""Add conversation and message tables for chat sessions

Revision ID: 20251220_add_chat_tables
Revises:
Create Date: 2025-12-20 17:00:00.000000

"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20251220_add_chat_tables"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "conversation",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("channel", sa.String(50), nullable=False),
        sa.Column("external_conversation_id", sa.String(255), nullable=True),
        sa.Column("title", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint(
            "channel",
            "external_conversation_id",
            name="conversation_channel_external_id_unique",
        ),
    )

    op.create_table(
        "message",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("conversation_id", sa.String(36), nullable=False),
        sa.Column("direction", sa.String(20), nullable=False),  # 'inbound' or 'outbound'
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("external_message_id", sa.String(255), nullable=True),
        sa.Column("metadata", postgresql.JSONB, nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint(
            "conversation_id",
            "external_message_id",
            name="message_conversation_external_id_unique",
        ),
    )

    op.create_foreign_key(
        "fk_message_conversation_id",
        "message",
        "conversation",
        ["conversation_id"],
        ["id"],
        ondelete="CASCADE",
    )

    op.create_index(
        "ix_conversation_channel_created_at", "conversation", ["channel", "created_at"]
    )
    op.create_index(
        "ix_message_conversation_id_created_at",
        "message",
        ["conversation_id", "created_at"],
    )


def downgrade() -> None:
    op.drop_index("ix_message_conversation_id_created_at", table_name="message")
    op.drop_index("ix_conversation_channel_created_at", table_name="conversation")

    op.drop_constraint("fk_message_conversation_id", "message", type_="foreignkey")

    op.drop_table("message")
    op.drop_table("conversation")
