"""Core application constants."""

import re
from re import Pattern
from typing import Final

MILLISECONDS_PER_SECOND: Final[int] = 1000

REDACTED: Final[str] = "[REDACTED]"

# Field names that always carry credentials, regardless of configuration
SENSITIVE_FIELD_PATTERN: Final[Pattern[str]] = re.compile(
    r"(password|passwd|secret|token|api[_-]?key|authorization|credential|"
    r"private[_-]?key|session|card[_-]?number|cvv)",
    re.IGNORECASE,
)

SENSITIVE_HEADERS: Final[frozenset[str]] = frozenset(
    {
        "authorization",
        "cookie",
        "set-cookie",
        "x-api-key",
        "x-auth-token",
        "proxy-authorization",
    }
)
