"""Base repository: generic reads and committed writes for one ORM model."""

from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.domain.exceptions import MetadataWriteError
from app.infrastructure.persistence.database import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with get, list, create, save and remove.

    Writes are committed before returning so callers can rely on the row
    being durable. Any SQLAlchemyError during a write is rolled back and
    raised as MetadataWriteError.
    """

    def __init__(self, db: AsyncSession, model: type[ModelType]) -> None:
        self.db = db
        self.model = model

    async def get_model(self, entity_id: str) -> ModelType | None:
        """Return a single row by primary key, or None."""
        model: Any = self.model
        result = await self.db.execute(select(self.model).where(model.id == entity_id))
        return result.scalar_one_or_none()

    async def list_models(self, *order_by: Any) -> list[ModelType]:
        """Return every row, in the given order."""
        result = await self.db.execute(select(self.model).order_by(*order_by))
        return list(result.scalars().all())

    async def _commit(self, operation: str, obj: ModelType | None = None) -> None:
        try:
            await self.db.commit()
            if obj is not None:
                await self.db.refresh(obj)
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise MetadataWriteError(operation, str(e)) from e

    async def create(self, obj: ModelType) -> ModelType:
        """Insert a new row and commit."""
        try:
            self.db.add(obj)
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise MetadataWriteError("create", str(e)) from e
        await self._commit("create", obj)
        return obj

    async def save(self, obj: ModelType) -> ModelType:
        """Flush pending changes on an attached row and commit."""
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise MetadataWriteError("update", str(e)) from e
        await self._commit("update", obj)
        return obj

    async def remove(self, obj: ModelType) -> None:
        """Delete the row and commit."""
        try:
            await self.db.delete(obj)
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            raise MetadataWriteError("delete", str(e)) from e
        await self._commit("delete")
