"""
Base repository implementation with common CRUD operations.
"""

from contextlib import asynccontextmanager
from typing import Any, Generic, Optional, Type, TypeVar, Union
from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from translation_proxy.database.connection import Base
from translation_proxy.utils.exceptions import DatabaseError
from translation_proxy.utils.logging import TranslationLogger

logger = TranslationLogger(__name__, "repository")

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """Base repository with common CRUD operations."""

    def __init__(self, session: AsyncSession, model_class: Type[ModelType]):
        self.session = session
        self.model_class = model_class

    @property
    def entity_name(self) -> str:
        return self.model_class.__name__

    @asynccontextmanager
    async def _guard(self, operation: str, subject: Any = None):
        """Translate driver failures into DatabaseError."""
        try:
            yield
        except SQLAlchemyError as e:
            target = self.entity_name if subject is None else f"{self.entity_name} {subject}"
            logger.error(
                f"Error during {operation} of {target}: {str(e)}",
                event="repository_error",
                metadata={"operation": operation, "entity": self.entity_name},
                exc_info=True
            )
            raise DatabaseError(f"Failed to {operation} {self.entity_name}: {str(e)}", operation=operation)

    async def create(self, entity: ModelType) -> ModelType:
        """Insert an entity and load its server defaults."""
        async with self._guard("create"):
            self.session.add(entity)
            await self.session.flush()
            await self.session.refresh(entity)
            return entity

    async def get_by_id(self, entity_id: Union[UUID, str]) -> Optional[ModelType]:
        async with self._guard("get", entity_id):
            return await self.session.get(self.model_class, entity_id)

    async def update(self, entity: ModelType) -> ModelType:
        """Flush pending changes on an entity."""
        async with self._guard("update", getattr(entity, "id", None)):
            merged = await self.session.merge(entity)
            await self.session.flush()
            await self.session.refresh(merged)
            return merged

    async def delete(self, entity_id: Union[UUID, str]) -> bool:
        """Delete entity by ID; returns False when no row matched."""
        async with self._guard("delete", entity_id):
            result = await self.session.execute(
                delete(self.model_class).where(self.model_class.id == entity_id)
            )
            return result.rowcount > 0

    async def fetch_all(self, stmt: Select, operation: str = "list") -> list:
        async with self._guard(operation):
            result = await self.session.execute(stmt)
            return list(result.scalars().all())

    async def count(self, stmt: Select) -> int:
        """Count the rows a select statement would return."""
        async with self._guard("count"):
            result = await self.session.execute(
                select(func.count()).select_from(stmt.order_by(None).subquery())
            )
            return result.scalar() or 0
