"""User registration and credential checks."""

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.core.config import AuthConfig
from src.core.exceptions import (
    ConflictError,
    ErrorCode,
    UnauthorizedError,
    ValidationError,
)
from src.domain.models import User
from src.domain.repositories import UserRepository
from src.domain.security import (
    BCRYPT_MAX_PASSWORD_BYTES,
    hash_password,
    verify_password,
)


class UserService:
    """Creates users and verifies their passwords."""

    def __init__(self, session: AsyncSession, auth_config: AuthConfig) -> None:
        self.users = UserRepository(session)
        self.auth_config = auth_config

    async def register(self, email: str, name: str, password: str) -> User:
        """Create a user.

        Raises:
            ValidationError: If the password exceeds what bcrypt can hash.
            ConflictError: If the email is already registered.
        """
        if len(password.encode("utf-8")) > BCRYPT_MAX_PASSWORD_BYTES:
            raise ValidationError(
                f"Password must be at most {BCRYPT_MAX_PASSWORD_BYTES} bytes",
                ErrorCode.PASSWORD_TOO_LONG,
                context={"max_bytes": BCRYPT_MAX_PASSWORD_BYTES},
            )

        email = email.strip().lower()
        if await self.users.get_by_email(email) is not None:
            raise ConflictError(
                "Email is already registered",
                ErrorCode.EMAIL_ALREADY_REGISTERED,
                context={"email": email},
            )

        user = User(
            email=email,
            name=name,
            password_hash=hash_password(password, self.auth_config.bcrypt_rounds),
        )
        try:
            return await self.users.create(user)
        except IntegrityError as e:
            raise ConflictError(
                "Email is already registered",
                ErrorCode.EMAIL_ALREADY_REGISTERED,
                context={"email": email},
                cause=e,
            ) from e

    async def authenticate(self, email: str, password: str) -> User:
        """Return the user if the credentials match.

        Raises:
            UnauthorizedError: For an unknown email or a wrong password; the
                message is the same in both cases.
        """
        user = await self.users.get_by_email(email.strip())
        if user is None or not verify_password(password, user.password_hash):
            logger.info("Rejected login attempt")
            raise UnauthorizedError(
                "Invalid email or password", ErrorCode.INVALID_CREDENTIALS
            )
        return user
