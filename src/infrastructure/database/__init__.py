"""Async SQLAlchemy persistence.

- **base**: declarative base and common columns
- **session**: engine, session lifecycle and health check
- **repository**: generic CRUD repository
- **dependencies**: FastAPI session dependency
"""

from src.infrastructure.database.base import Base, BaseModel
from src.infrastructure.database.dependencies import DatabaseSession, get_db
from src.infrastructure.database.repository import BaseRepository
from src.infrastructure.database.session import (
    check_database_connection,
    close_database,
    create_database_engine,
    get_async_session,
    get_engine,
    get_session_factory,
)

__all__ = [
    "Base",
    "BaseModel",
    "BaseRepository",
    "DatabaseSession",
    "check_database_connection",
    "close_database",
    "create_database_engine",
    "get_async_session",
    "get_db",
    "get_engine",
    "get_session_factory",
]
