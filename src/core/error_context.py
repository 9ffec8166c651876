"""Redaction of credentials before data reaches logs or error responses.

Registration and login bodies carry passwords, and every authenticated
request carries a bearer token. Anything logged from a request, an error or a
SQL statement goes through these helpers first.

Sanitization works on copies; the original data is never modified.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Final, TypeAlias

from src.core.config import get_settings
from src.core.constants import REDACTED, SENSITIVE_FIELD_PATTERN, SENSITIVE_HEADERS

SanitizableValue: TypeAlias = (
    str | int | float | bool | None | dict[str, Any] | list[Any] | tuple[Any, ...]
)

MAX_DEPTH: Final[int] = 10


@lru_cache(maxsize=1)
def _get_sensitive_fields() -> tuple[str, ...]:
    """Configured sensitive field names, lower-cased."""
    return tuple(f.lower() for f in get_settings().log_config.sensitive_fields)


def is_sensitive_field(field_name: str) -> bool:
    """Check a field name against the built-in pattern and configured names."""
    if SENSITIVE_FIELD_PATTERN.search(field_name):
        return True

    field_lower = field_name.lower()
    return any(sensitive in field_lower for sensitive in _get_sensitive_fields())


def is_sensitive_header(header_name: str) -> bool:
    """Check a header name (case-insensitive)."""
    return header_name.lower() in SENSITIVE_HEADERS


def sanitize_value(
    value: SanitizableValue, field_name: str = "", depth: int = 0
) -> SanitizableValue:
    """Redact a value if its field name is sensitive, recursing into containers.

    Args:
        value: The value to sanitize.
        field_name: Name of the field holding the value.
        depth: Current recursion depth; past MAX_DEPTH everything is redacted.

    Returns:
        SanitizableValue: A sanitized copy.
    """
    if depth > MAX_DEPTH:
        return REDACTED

    if field_name and is_sensitive_field(field_name):
        return REDACTED

    if isinstance(value, dict):
        return {k: sanitize_value(v, str(k), depth + 1) for k, v in value.items()}

    if isinstance(value, list):
        return [sanitize_value(item, "", depth + 1) for item in value]

    if isinstance(value, tuple):
        return tuple(sanitize_value(item, "", depth + 1) for item in value)

    return value


def sanitize_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``data`` with sensitive values redacted."""
    return {key: sanitize_value(value, key) for key, value in data.items()}


def sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    """Return a copy of ``headers`` with credential headers redacted."""
    return {k: REDACTED if is_sensitive_header(k) else v for k, v in headers.items()}


def sanitize_error_context(
    error: Exception, context: dict[str, Any] | None = None
) -> dict[str, Any]:
    """Build a log-safe description of an exception.

    Args:
        error: The exception being handled.
        context: Extra request details to include.

    Returns:
        dict[str, Any]: Error type, message, sanitized context and the
            exception's public attributes.
    """
    error_context: dict[str, Any] = {
        "error_type": type(error).__name__,
        "error_message": str(error),
    }

    if context:
        error_context.update(sanitize_dict(context))

    # Stack traces are large and already captured by the logger
    error_attrs = {
        k: v
        for k, v in getattr(error, "__dict__", {}).items()
        if not k.startswith("_") and k != "stack_trace"
    }
    if error_attrs:
        error_context["error_attributes"] = sanitize_dict(error_attrs)

    return error_context


def sanitize_sql_params(params: object) -> object:
    """Sanitize SQLAlchemy statement parameters for slow query logs.

    Named parameters are sanitized by key. Positional parameters cannot be
    matched to a column name and are returned unchanged. Anything else is
    redacted.
    """
    if params is None:
        return None
    if isinstance(params, dict):
        return sanitize_dict(params)
    if isinstance(params, (list, tuple)):
        return params
    return REDACTED
