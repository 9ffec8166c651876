"""Password hashing (bcrypt) and bearer access tokens (JWT).

Tokens carry the user id in ``sub`` plus ``iat`` and ``exp``. Any decoding
problem, including expiry, surfaces as ``UnauthorizedError`` so the API
answers 401 without revealing which check failed.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt
from loguru import logger

from src.core.config import AuthConfig
from src.core.exceptions import ErrorCode, UnauthorizedError

# bcrypt only considers the first 72 bytes of a password
BCRYPT_MAX_PASSWORD_BYTES = 72


@dataclass(frozen=True)
class TokenPayload:
    """Claims extracted from a verified access token."""

    subject: str
    issued_at: datetime
    expires_at: datetime


def hash_password(password: str, rounds: int) -> str:
    """Hash a password with a fresh salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    encoded = password.encode("utf-8")
    if len(encoded) > BCRYPT_MAX_PASSWORD_BYTES:
        return False
    try:
        return bcrypt.checkpw(encoded, password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


def create_access_token(
    subject: str, config: AuthConfig, now: datetime | None = None
) -> str:
    """Issue a signed access token.

    Args:
        subject: The user id.
        config: Signing key, algorithm and lifetime.
        now: Issue time; defaults to the current UTC time.

    Returns:
        str: Encoded JWT.
    """
    issued_at = now or datetime.now(UTC)
    claims = {
        "sub": subject,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=config.access_token_expire_minutes),
    }
    return jwt.encode(claims, config.jwt_secret_key, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: AuthConfig) -> TokenPayload:
    """Verify a token's signature and expiry.

    Args:
        token: Encoded JWT from the Authorization header.
        config: Signing key and algorithm.

    Returns:
        TokenPayload: Verified claims.

    Raises:
        UnauthorizedError: If the token is expired, malformed or tampered with.
    """
    try:
        claims = jwt.decode(
            token,
            config.jwt_secret_key,
            algorithms=[config.jwt_algorithm],
            options={"require": ["sub", "exp", "iat"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise UnauthorizedError(
            "Access token has expired", ErrorCode.INVALID_TOKEN, cause=e
        ) from e
    except jwt.InvalidTokenError as e:
        raise UnauthorizedError(
            "Access token is invalid", ErrorCode.INVALID_TOKEN, cause=e
        ) from e

    return TokenPayload(
        subject=str(claims["sub"]),
        issued_at=datetime.fromtimestamp(claims["iat"], UTC),
        expires_at=datetime.fromtimestamp(claims["exp"], UTC),
    )
