"""Shared constants and type aliases for the integration fixtures."""

from collections.abc import Awaitable, Callable
from typing import TypeAlias

from src.domain.models import Costume, User

TEST_PASSWORD = "s3cret-pass"

UserFactory: TypeAlias = Callable[..., Awaitable[tuple[User, dict[str, str]]]]
CostumeFactory: TypeAlias = Callable[..., Awaitable[Costume]]
