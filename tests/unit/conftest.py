"""Shared fixtures for unit tests."""

from collections.abc import Generator

import pytest
from pytest_mock import MockerFixture, MockType

from src.core.config import AuthConfig
from src.core.error_context import _get_sensitive_fields


@pytest.fixture(autouse=True)
def clear_sensitive_fields_cache() -> Generator[None]:
    """Re-read configured sensitive fields for each test."""
    _get_sensitive_fields.cache_clear()
    yield
    _get_sensitive_fields.cache_clear()


@pytest.fixture
def auth_config() -> AuthConfig:
    """Auth settings with a fast bcrypt cost."""
    return AuthConfig(
        jwt_secret_key="unit-test-secret-key-0123456789abcdef",
        access_token_expire_minutes=15,
        bcrypt_rounds=4,
    )


@pytest.fixture
def mock_session(mocker: MockerFixture) -> MockType:
    """AsyncSession stand-in for services whose repositories are replaced."""
    return mocker.AsyncMock()
