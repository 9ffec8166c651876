"""Shared fixtures for integration tests.

Each test gets its own in-memory SQLite database and an application whose
``get_db`` dependency is bound to it, so tests never share rows.
"""

import uuid
from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from loguru import logger
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from src.api.main import create_app
from src.core.config import get_settings
from src.core.logging import _state
from src.domain.models import Costume, User
from src.domain.security import create_access_token, hash_password
from src.infrastructure.database.base import Base
from src.infrastructure.database.dependencies import get_db
from src.infrastructure.database.session import close_database
from tests.integration.factories import TEST_PASSWORD, CostumeFactory, UserFactory


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None]:
    """Keep app creation from installing stdout sinks during tests."""
    logger.remove()
    _state.configured = True
    yield
    logger.remove()


@pytest.fixture(autouse=True)
async def dispose_global_engine() -> AsyncGenerator[None]:
    """Drop the process-wide engine used by /health between tests."""
    yield
    await close_database()


@pytest.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine]:
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, expire_on_commit=False)


@pytest.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting data directly."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def app(session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    application = create_app()

    async def override_get_db() -> AsyncGenerator[AsyncSession]:
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_user(session_factory: async_sessionmaker[AsyncSession]) -> UserFactory:
    """Insert a user and return it with bearer headers for it."""

    async def _create(
        email: str = "ana@example.com", name: str = "Ana"
    ) -> tuple[User, dict[str, str]]:
        async with session_factory() as session:
            user = User(
                email=email,
                name=name,
                password_hash=hash_password(TEST_PASSWORD, rounds=4),
            )
            session.add(user)
            await session.commit()
        token = create_access_token(user.id, get_settings().auth_config)
        return user, {"Authorization": f"Bearer {token}"}

    return _create


@pytest.fixture
def create_costume(
    session_factory: async_sessionmaker[AsyncSession],
    create_user: UserFactory,
) -> CostumeFactory:
    """Insert a costume, creating an owner when none is given."""

    async def _create(owner: User | None = None, **fields: Any) -> Costume:  # noqa: ANN401
        if owner is None:
            owner, _ = await create_user(email=f"owner-{uuid.uuid4().hex[:12]}@example.com")
        values: dict[str, Any] = {
            "costume_name": "Vampire Cape",
            "category": "Halloween",
            "rental_fee": 24.5,
            "size": "M",
            "image_url": "https://cdn.example.com/cape.jpg",
            "description": "Floor-length satin cape",
            **fields,
        }
        async with session_factory() as session:
            costume = Costume(user_id=owner.id, **values)
            session.add(costume)
            await session.commit()
            await session.refresh(costume)
        return costume

    return _create


@pytest.fixture
async def user_and_headers(create_user: UserFactory) -> tuple[User, dict[str, str]]:
    return await create_user()


@pytest.fixture
def auth_headers(user_and_headers: tuple[User, dict[str, str]]) -> dict[str, str]:
    return user_and_headers[1]


@pytest.fixture
def current_user(user_and_headers: tuple[User, dict[str, str]]) -> User:
    return user_and_headers[0]
