"""Infrastructure resources: database engine and session factory.

This module is part of the infra layer and must not import from application features.
"""
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from api.shared.exceptions import DatabaseError


class DatabaseResource:
    """Database resource for dependency injection."""

    def __init__(self, database_url: str, **engine_options):
        self.database_url = database_url
        self.engine_options = engine_options
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker[AsyncSession] | None = None

    async def init(self):
        """Initialize database connection."""
        if self.engine is not None:
            return self
        if not self.database_url:
            raise DatabaseError(
                "DATABASE_URL is not set. Configure it before calling endpoints "
                "that require persistence.",
                error_code="db_not_configured",
            )
        options = {"echo": False, "pool_pre_ping": True}
        if not self.database_url.startswith("sqlite"):
            options["pool_recycle"] = 3600
        options.update(self.engine_options)
        self.engine = create_async_engine(self.database_url, **options)
        self.session_factory = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        return self

    def get_session(self) -> AsyncSession:
        """Get database session (synchronous accessor)."""
        if self.session_factory is None:
            raise DatabaseError(
                "Database not initialized. Call init() first.",
                error_code="db_not_configured",
            )
        return self.session_factory()

    async def ping(self) -> None:
        """Run a trivial query to verify connectivity."""
        if self.engine is None:
            raise DatabaseError(
                "Database not initialized. Call init() first.",
                error_code="db_not_configured",
            )
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))

    async def shutdown(self):
        """Shutdown database connection."""
        if self.engine:
            await self.engine.dispose()
        self.engine = None
        self.session_factory = None
