"""Base repository pattern shared by feature repositories."""
from abc import ABC
from typing import Generic, List, Optional, Type, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.shared.entities.base import BaseEntity
from api.shared.exceptions import DatabaseError

T = TypeVar("T", bound=BaseEntity)


class BaseRepository(ABC, Generic[T]):
    """Base repository with the common CRUD operations.

    SQLAlchemy failures surface as ``DatabaseError`` so callers only deal with
    the API's own exception hierarchy.
    """

    model: Type[T]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entity: T) -> T:
        """Create new entity."""
        try:
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to create {self.model.__name__}",
                details={"reason": e.__class__.__name__},
            ) from e
        return entity

    async def get_by_id(self, entity_id: str) -> Optional[T]:
        """Get entity by ID."""
        stmt = select(self.model).where(self.model.id == entity_id)
        return await self._scalar_one_or_none(stmt)

    async def _scalar_one_or_none(self, stmt) -> Optional[T]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to query {self.model.__name__}",
                details={"reason": e.__class__.__name__},
            ) from e
        return result.scalar_one_or_none()

    async def _scalars(self, stmt) -> List[T]:
        try:
            result = await self.session.execute(stmt)
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Failed to query {self.model.__name__}",
                details={"reason": e.__class__.__name__},
            ) from e
        return list(result.scalars().all())
