"""FastAPI dependency that gives each request its own transactional session."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.infrastructure.database.session import get_async_session


async def get_db() -> AsyncGenerator[AsyncSession]:
    """Yield a session that commits after the handler succeeds.

    If the handler raises, the exception is re-raised into this generator and
    the session rolls back, so a request never leaves partial writes behind.

    Example:
        @router.get("/costumes")
        async def list_costumes(db: DatabaseSession) -> list[CostumeResponse]:
            ...
    """
    async with get_async_session() as session:
        yield session


DatabaseSession = Annotated[AsyncSession, Depends(get_db)]
