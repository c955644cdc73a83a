#!/usr/bin/env python3
"""Seed one example conversation so there is something to query locally.

Safe to run repeatedly: an existing seeded conversation is left untouched.
"""
import asyncio

import structlog

from api.features.chat.entities.message import Direction
from api.features.chat.repository import ConversationRepository, MessageRepository
from core.logging import configure_logging
from core.settings import SETTINGS
from infra.resources import DatabaseResource

logger = structlog.get_logger("scripts.seed")

SEED_CHANNEL = "whatsapp"
SEED_EXTERNAL_ID = "example-thread-001"


async def seed(db: DatabaseResource) -> str:
    session = db.get_session()
    try:
        conversations = ConversationRepository(session)
        existing = await conversations.find_by_external_id(
            channel=SEED_CHANNEL, external_conversation_id=SEED_EXTERNAL_ID
        )
        if existing is not None:
            logger.info("seed.skipped", conversation_id=existing.id)
            return existing.id

        conversation = await conversations.create_conversation(
            channel=SEED_CHANNEL,
            title="Example conversation",
            external_conversation_id=SEED_EXTERNAL_ID,
        )
        messages = MessageRepository(session)
        await messages.create_message(
            conversation_id=conversation.id,
            direction=Direction.INBOUND,
            content="Hello! (seed message)",
            external_message_id="example-msg-001",
            metadata={"seeded": True},
        )
        await messages.create_message(
            conversation_id=conversation.id,
            direction=Direction.OUTBOUND,
            content="Hi! This is a placeholder reply.",
            external_message_id="example-msg-002",
            metadata={"seeded": True},
        )
        await session.commit()
        logger.info("seed.created", conversation_id=conversation.id, channel=SEED_CHANNEL, messages=2)
        return conversation.id
    finally:
        await session.close()


async def main() -> None:
    configure_logging(log_level=SETTINGS.APP.LOG_LEVEL, json_logs=SETTINGS.APP.JSON_LOGS)
    db = DatabaseResource(database_url=str(SETTINGS.DATABASE.DATABASE_URL))
    await db.init()
    try:
        await seed(db)
    finally:
        await db.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
