"""Generic async repository for models deriving from ``BaseModel``."""

from collections.abc import Mapping
from typing import Any, Generic, TypeVar

from loguru import logger
from sqlalchemy import Select, select
from sqlalchemy import delete as sql_delete
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.base import BaseModel

DEFAULT_PAGINATION_LIMIT = 100

T = TypeVar("T", bound=BaseModel)


class BaseRepository(Generic[T]):
    """CRUD operations shared by all repositories.

    Repositories only flush; committing is left to the session owner, so
    several repository calls made while handling one request succeed or fail
    together.

    Args:
        session: The async session to use.
        model_class: The model class this repository manages.

    Example:
        class CostumeRepository(BaseRepository[Costume]):
            def __init__(self, session: AsyncSession) -> None:
                super().__init__(session, Costume)
    """

    def __init__(self, session: AsyncSession, model_class: type[T]) -> None:
        self.session = session
        self.model_class = model_class

    @property
    def _name(self) -> str:
        return self.model_class.__name__

    def _filtered(self, stmt: Select[Any], filters: Mapping[str, object]) -> Select[Any]:
        for field, value in filters.items():
            if hasattr(self.model_class, field):
                stmt = stmt.where(getattr(self.model_class, field) == value)
            else:
                logger.warning(
                    "Ignoring filter on non-existent field '{}' of {}", field, self._name
                )
        return stmt

    async def get_by_id(self, entity_id: str) -> T | None:
        """Fetch one instance by primary key.

        Returns:
            T | None: The instance, or None if it does not exist.
        """
        stmt = select(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        instance = result.scalar_one_or_none()
        logger.debug("{} {} found: {}", self._name, entity_id, instance is not None)
        return instance

    async def create(self, obj: T) -> T:
        """Insert an instance and load its server-generated columns.

        Returns:
            T: The same instance, with id and timestamps populated.
        """
        self.session.add(obj)
        await self.session.flush()
        await self.session.refresh(obj)
        logger.info("Created {} {}", self._name, obj.id)
        return obj

    async def delete(self, entity_id: str) -> bool:
        """Delete by primary key.

        Returns:
            bool: True if a row was deleted.
        """
        stmt = sql_delete(self.model_class).where(self.model_class.id == entity_id)
        result = await self.session.execute(stmt)
        deleted = bool(result.rowcount)
        if deleted:
            logger.info("Deleted {} {}", self._name, entity_id)
        return deleted

    async def filter_by(
        self,
        skip: int = 0,
        limit: int | None = None,
        **filters: object,
    ) -> list[T]:
        """Fetch instances matching all given field values."""
        stmt = self._filtered(select(self.model_class), filters)
        stmt = stmt.order_by(self.model_class.created_at, self.model_class.id)
        stmt = stmt.offset(skip)
        if limit is not None:
            stmt = stmt.limit(limit)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_one_by(self, **filters: object) -> T | None:
        """Fetch the first instance matching all given field values."""
        stmt = self._filtered(select(self.model_class), filters)
        stmt = stmt.order_by(self.model_class.created_at, self.model_class.id).limit(1)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
