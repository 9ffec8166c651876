"""Registration and login."""

from fastapi import APIRouter, status

from src.api.dependencies import AppSettings, UserServiceDep
from src.api.schemas.auth import LoginRequest, RegisterRequest, TokenResponse, UserResponse
from src.api.schemas.errors import ErrorResponse
from src.core.config import Settings
from src.domain.models import User
from src.domain.security import create_access_token

router = APIRouter(prefix="/auth", tags=["auth"])


def _token_response(user: User, settings: Settings) -> TokenResponse:
    return TokenResponse(
        access_token=create_access_token(user.id, settings.auth_config),
        user=UserResponse.model_validate(user),
    )


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account",
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_409_CONFLICT: {"model": ErrorResponse},
    },
)
async def register(
    body: RegisterRequest, service: UserServiceDep, settings: AppSettings
) -> TokenResponse:
    user = await service.register(body.email, body.name, body.password)
    return _token_response(user, settings)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Exchange credentials for an access token",
    responses={status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse}},
)
async def login(
    body: LoginRequest, service: UserServiceDep, settings: AppSettings
) -> TokenResponse:
    user = await service.authenticate(body.email, body.password)
    return _token_response(user, settings)
