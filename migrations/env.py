"""Alembic environment for the async engine.

The database URL always comes from application settings, never from
``alembic.ini``, so migrations and the running service target the same
database.
"""

import asyncio
from logging.config import fileConfig
from typing import Any

from alembic import context
from loguru import logger
from sqlalchemy import pool
from sqlalchemy.engine import make_url
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import async_engine_from_config

import src.domain.models  # noqa: F401 - registers tables on Base.metadata
from src.core.config import get_settings
from src.infrastructure.database.base import Base

config = context.config
if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = Base.metadata


def _configure(dialect_name: str, **kwargs: Any) -> None:  # noqa: ANN401 - forwarded to context.configure
    context.configure(
        target_metadata=target_metadata,
        compare_type=True,
        compare_server_default=True,
        # SQLite cannot ALTER constraints in place
        render_as_batch=dialect_name == "sqlite",
        **kwargs,
    )


def run_migrations_offline() -> None:
    """Emit SQL to stdout instead of executing it."""
    logger.info("Running migrations in offline mode")
    url = get_settings().database_config.database_url
    _configure(
        make_url(url).get_backend_name(),
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def do_run_migrations(connection: Connection) -> None:
    _configure(connection.dialect.name, connection=connection)

    with context.begin_transaction():
        context.run_migrations()


async def run_async_migrations() -> None:
    """Run migrations over a short-lived async engine."""
    logger.info("Running migrations in online mode with async engine")
    db_config = get_settings().database_config

    connectable = async_engine_from_config(
        {
            "sqlalchemy.url": db_config.database_url,
            "sqlalchemy.echo": db_config.echo,
        },
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    async with connectable.connect() as connection:
        await connection.run_sync(do_run_migrations)

    await connectable.dispose()


def run_migrations_online() -> None:
    asyncio.run(run_async_migrations())


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
