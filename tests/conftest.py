"""Pytest configuration for the chat service tests.

Runs against in-memory SQLite (aiosqlite) and fake completion clients, so no
PostgreSQL or OpenAI access is needed.
"""

import os

# Settings are read at import time; keep tests independent of the host env
os.environ["OPENAI_API_KEY"] = ""
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("JSON_LOGS", "false")

import asyncio
from types import SimpleNamespace

import pytest
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from api.shared.entities.registry import BaseEntity
from infra.resources import DatabaseResource
from llm.gateway import ProviderGateway

POSTGRES_VARS = (
    "POSTGRES_ENGINE",
    "POSTGRES_USER",
    "POSTGRES_PASSWORD",
    "POSTGRES_DB",
    "POSTGRES_HOST",
    "POSTGRES_PORT",
)


class FakeCompletions:
    """Stands in for ``AsyncOpenAI().chat.completions``."""

    def __init__(self, content="Happy to help!", error=None, delay=0.0):
        self.content = content
        self.error = error
        self.delay = delay
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return SimpleNamespace(
            choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))]
        )


class FakeClient:
    def __init__(self, **kwargs):
        self.completions = FakeCompletions(**kwargs)
        self.chat = SimpleNamespace(completions=self.completions)


@pytest.fixture
def fake_client():
    return FakeClient()


@pytest.fixture
def gateway(fake_client):
    return ProviderGateway(api_key="sk-test", client=fake_client)


@pytest.fixture
async def db():
    resource = DatabaseResource(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    await resource.init()

    @event.listens_for(resource.engine.sync_engine, "connect")
    def _enable_foreign_keys(dbapi_connection, _record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    async with resource.engine.begin() as conn:
        await conn.run_sync(BaseEntity.metadata.create_all)
    yield resource
    await resource.shutdown()


@pytest.fixture
async def db_session(db):
    session = db.get_session()
    try:
        yield session
    finally:
        await session.close()
