"""Adds browser security headers to every response."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.api.constants import DEFAULT_HSTS_MAX_AGE


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Set ``X-Content-Type-Options``, ``X-Frame-Options`` and HSTS.

    Args:
        app: The ASGI application to wrap.
        hsts_enabled: Whether to send ``Strict-Transport-Security``.
        hsts_max_age: HSTS max-age in seconds.
        hsts_include_subdomains: Whether HSTS covers subdomains.
        hsts_preload: Whether to add the ``preload`` directive.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        hsts_enabled: bool = True,
        hsts_max_age: int = DEFAULT_HSTS_MAX_AGE,
        hsts_include_subdomains: bool = True,
        hsts_preload: bool = False,
    ) -> None:
        super().__init__(app)
        self.hsts_enabled = hsts_enabled
        directives = [f"max-age={hsts_max_age}"]
        if hsts_include_subdomains:
            directives.append("includeSubDomains")
        if hsts_preload:
            directives.append("preload")
        self.hsts_header = "; ".join(directives)

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        response = await call_next(request)

        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-XSS-Protection"] = "1; mode=block"
        if self.hsts_enabled:
            response.headers["Strict-Transport-Security"] = self.hsts_header

        return response
