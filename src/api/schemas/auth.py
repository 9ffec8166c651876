"""Registration, login and token schemas.

Passwords are taken exactly as sent: the auth request models turn off the
whitespace trimming every other request model applies.
"""

from typing import Annotated, Literal

from pydantic import ConfigDict, EmailStr, Field, StringConstraints

from src.api.schemas.base import CamelModel

MIN_PASSWORD_LENGTH = 8

DisplayName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=100)
]


class RegisterRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    name: DisplayName
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH)


class LoginRequest(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    user_id: str
    email: str
    name: str


class TokenResponse(CamelModel):
    """Issued on registration and login."""

    access_token: str
    token_type: Literal["bearer"] = "bearer"
    user: UserResponse
