"""Route dependencies: bearer authentication and service wiring."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from loguru import logger

from src.api.constants import BEARER_SCHEME_NAME
from src.core.config import Settings, get_settings
from src.core.context import RequestContext
from src.core.exceptions import ErrorCode, UnauthorizedError
from src.domain.models import User
from src.domain.repositories import UserRepository
from src.domain.security import decode_access_token
from src.domain.services import CartService, CostumeService, RentalService, UserService
from src.infrastructure.database.dependencies import DatabaseSession

bearer_scheme = HTTPBearer(
    auto_error=False,
    scheme_name=BEARER_SCHEME_NAME,
    bearerFormat="JWT",
    description="Access token from /auth/register or /auth/login",
)

AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: DatabaseSession,
    settings: AppSettings,
) -> User:
    """Resolve the user behind the bearer token.

    Raises:
        UnauthorizedError: If the header is missing, the token does not
            verify, or its user no longer exists.
    """
    if credentials is None:
        raise UnauthorizedError("Missing bearer token")

    payload = decode_access_token(credentials.credentials, settings.auth_config)
    user = await UserRepository(db).get_by_id(payload.subject)
    if user is None:
        raise UnauthorizedError(
            "Access token refers to an unknown user", ErrorCode.INVALID_TOKEN
        )

    RequestContext.set_user_id(user.id)
    logger.debug("Authenticated user {}", user.id)
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def get_user_service(db: DatabaseSession, settings: AppSettings) -> UserService:
    return UserService(db, settings.auth_config)


def get_costume_service(db: DatabaseSession) -> CostumeService:
    return CostumeService(db)


def get_cart_service(db: DatabaseSession) -> CartService:
    return CartService(db)


def get_rental_service(db: DatabaseSession) -> RentalService:
    return RentalService(db)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
CostumeServiceDep = Annotated[CostumeService, Depends(get_costume_service)]
CartServiceDep = Annotated[CartService, Depends(get_cart_service)]
RentalServiceDep = Annotated[RentalService, Depends(get_rental_service)]
