"""Base repository with common CRUD operations."""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel, select

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseRepository(Generic[ModelType]):
    """Base repository providing common database operations.

    Repositories handle data access only. Transaction control (commit)
    is done by the caller.
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, id: Any) -> Optional[ModelType]:
        """Get a record by its primary key."""
        return await self.session.get(self.model, id)

    def add(self, entity: ModelType) -> ModelType:
        """Add entity to session (no flush/commit)."""
        self.session.add(entity)
        return entity

    async def delete(self, entity: ModelType) -> None:
        await self.session.delete(entity)
        await self.session.flush()

    async def count(self) -> int:
        result = await self.session.execute(select(func.count()).select_from(self.model))
        return int(result.scalar_one())
