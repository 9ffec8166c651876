"""Request-scoped context: correlation IDs and the authenticated user."""

import uuid
from contextvars import ContextVar

_correlation_id_var: ContextVar[str | None] = ContextVar("correlation_id", default=None)
_user_id_var: ContextVar[str | None] = ContextVar("user_id", default=None)


class RequestContext:
    """Async-safe storage for data that lives as long as one request.

    Values are kept in contextvars, so concurrent requests handled on the same
    event loop never see each other's values.
    """

    @staticmethod
    def set_correlation_id(correlation_id: str) -> None:
        """Set the correlation ID for the current context."""
        _correlation_id_var.set(correlation_id)

    @staticmethod
    def get_correlation_id() -> str | None:
        """Get the correlation ID for the current context, if any."""
        return _correlation_id_var.get()

    @staticmethod
    def set_user_id(user_id: str) -> None:
        """Record the user authenticated by the bearer token."""
        _user_id_var.set(user_id)

    @staticmethod
    def get_user_id() -> str | None:
        """Get the authenticated user ID, or None for anonymous requests."""
        return _user_id_var.get()

    @staticmethod
    def clear() -> None:
        """Reset all request context values."""
        _correlation_id_var.set(None)
        _user_id_var.set(None)


def generate_correlation_id() -> str:
    """Generate a correlation ID (a UUID4 string).

    Examples:
        >>> len(generate_correlation_id())
        36
    """
    return str(uuid.uuid4())


def generate_request_id() -> str:
    """Generate a request ID in the form ``req-<uuid4>``.

    Examples:
        >>> generate_request_id().startswith("req-")
        True
    """
    return f"req-{uuid.uuid4()}"
