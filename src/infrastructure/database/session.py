"""Async engine and session lifecycle.

One engine per process, created lazily by ``_DatabaseManager``. Each unit of
work gets its own ``AsyncSession`` from ``get_async_session``, which commits
when the block succeeds and rolls back when it raises. HTTP handlers receive
their session through ``get_db`` so a whole request is one transaction.

PostgreSQL (asyncpg) is the production target. SQLite (aiosqlite) is accepted
for local runs and tests; it gets a single shared connection so an in-memory
database survives across sessions.
"""

import threading
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any
from weakref import WeakKeyDictionary

from loguru import logger
from sqlalchemy import event, text
from sqlalchemy.engine import Connection
from sqlalchemy.engine.interfaces import DBAPICursor, ExecutionContext
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.core.config import get_settings
from src.core.constants import MILLISECONDS_PER_SECOND
from src.core.context import RequestContext
from src.core.error_context import sanitize_sql_params
from src.infrastructure.constants import (
    COMMAND_TIMEOUT_SECONDS,
    MAX_LOGGED_STATEMENT_LENGTH,
    POOL_RECYCLE_SECONDS,
)

_query_start_times: WeakKeyDictionary[ExecutionContext, float] = WeakKeyDictionary()


def _before_cursor_execute(
    _conn: Connection,
    _cursor: DBAPICursor,
    _statement: str,
    _parameters: Any,  # noqa: ANN401 - DBAPI parameters
    context: ExecutionContext,
    _executemany: bool,
) -> None:
    _query_start_times[context] = time.perf_counter()


def _after_cursor_execute(
    _conn: Connection,
    cursor: DBAPICursor,
    statement: str,
    parameters: Any,  # noqa: ANN401 - DBAPI parameters
    context: ExecutionContext,
    executemany: bool,
) -> None:
    """Log statements slower than ``slow_query_threshold_ms``."""
    start_time = _query_start_times.pop(context, None)
    if start_time is None:
        return

    duration_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
    threshold_ms = get_settings().log_config.slow_query_threshold_ms
    if duration_ms < threshold_ms:
        return

    clean_statement = " ".join(statement.split())[:MAX_LOGGED_STATEMENT_LENGTH]
    logger.warning(
        "Slow query detected: {:.2f}ms",
        duration_ms,
        query=clean_statement,
        duration_ms=round(duration_ms, 2),
        rows_affected=getattr(cursor, "rowcount", -1),
        parameters=sanitize_sql_params(parameters),
        correlation_id=RequestContext.get_correlation_id(),
        executemany=executemany,
        threshold_ms=threshold_ms,
    )


def create_database_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine.

    Args:
        database_url: Overrides the configured database URL.

    Returns:
        AsyncEngine: Configured engine.
    """
    settings = get_settings()
    db_config = settings.database_config
    url = database_url or db_config.database_url

    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=db_config.echo, poolclass=StaticPool)
    else:
        engine = create_async_engine(
            url,
            pool_size=db_config.pool_size,
            max_overflow=db_config.max_overflow,
            pool_timeout=db_config.pool_timeout,
            pool_pre_ping=db_config.pool_pre_ping,
            pool_recycle=POOL_RECYCLE_SECONDS,
            echo=db_config.echo,
            connect_args={
                "server_settings": {"jit": "off"},
                "command_timeout": COMMAND_TIMEOUT_SECONDS,
            },
        )

    if settings.log_config.enable_sql_logging:
        event.listen(engine.sync_engine, "before_cursor_execute", _before_cursor_execute)
        event.listen(engine.sync_engine, "after_cursor_execute", _after_cursor_execute)
        logger.info("Registered slow query listeners")

    logger.info(
        "Created database engine for {} (sql_logging: {})",
        engine.dialect.name,
        settings.log_config.enable_sql_logging,
    )
    return engine


class _DatabaseManager:
    """Holds the process-wide engine and session factory."""

    def __init__(self) -> None:
        self._engine: AsyncEngine | None = None
        self._async_session_factory: async_sessionmaker[AsyncSession] | None = None
        self._lock = threading.Lock()

    def get_engine(self) -> AsyncEngine:
        if self._engine is None:
            with self._lock:
                if self._engine is None:
                    self._engine = create_database_engine()
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        if self._async_session_factory is None:
            engine = self.get_engine()
            with self._lock:
                if self._async_session_factory is None:
                    self._async_session_factory = async_sessionmaker(
                        engine,
                        class_=AsyncSession,
                        expire_on_commit=False,
                    )
        return self._async_session_factory

    async def close(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            logger.info("Database engine disposed")
        self.reset()

    def reset(self) -> None:
        """Forget the engine and factory without disposing them (tests)."""
        self._engine = None
        self._async_session_factory = None


_db_manager = _DatabaseManager()


def get_engine() -> AsyncEngine:
    """Get the process-wide engine, creating it on first use."""
    return _db_manager.get_engine()


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory."""
    return _db_manager.get_session_factory()


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession]:
    """Provide a transactional session.

    Commits when the block exits normally, rolls back and re-raises when it
    raises.

    Yields:
        AsyncSession: Session bound to the process-wide engine.

    Example:
        async with get_async_session() as session:
            costume = await CostumeRepository(session).get_by_id(costume_id)
    """
    async with get_session_factory()() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            logger.debug("Database session rolled back")
            raise


async def close_database() -> None:
    """Dispose the engine; called on application shutdown."""
    await _db_manager.close()


async def check_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1`` against the database.

    Returns:
        tuple[bool, str | None]: Whether the database answered, and the
            error message when it did not.
    """
    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        return False, str(e)
    else:
        return True, None
