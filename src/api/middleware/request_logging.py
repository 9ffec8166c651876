"""Request/response logging with timing.

Each request gets a request ID (``X-Request-ID`` header or a generated
``req-<uuid>``), stored on ``request.state`` so error responses can quote it.
Paths listed in ``LogConfig.excluded_paths`` are passed through silently.
"""

import time
from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from src.api.constants import REQUEST_ID_HEADER, USER_AGENT_MAX_LENGTH
from src.core.config import LogConfig, get_settings
from src.core.constants import MILLISECONDS_PER_SECOND
from src.core.context import generate_request_id


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log request start, completion, failures and slow requests.

    Args:
        app: The ASGI application.
        log_config: Logging configuration.
    """

    def __init__(self, app: ASGIApp, *, log_config: LogConfig) -> None:
        super().__init__(app)
        self.log_config = log_config
        self.excluded_paths = set(log_config.excluded_paths)
        self.trust_proxy_headers = get_settings().environment == "production"

    def _get_client_ip(self, request: Request) -> str:
        # Proxy headers are only trusted behind the production load balancer
        if self.trust_proxy_headers:
            if forwarded_for := request.headers.get("x-forwarded-for"):
                return forwarded_for.split(",")[0].strip()
            if real_ip := request.headers.get("x-real-ip"):
                return real_ip.strip()

        if request.client:
            return request.client.host
        return "unknown"

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or generate_request_id()
        request.state.request_id = request_id

        if request.url.path in self.excluded_paths:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = request_id
            return response

        user_agent = request.headers.get("user-agent", "")[:USER_AGENT_MAX_LENGTH]
        with logger.contextualize(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            client_host=self._get_client_ip(request),
            user_agent=user_agent or "unknown",
        ):
            logger.info(
                "Request started",
                query_params=dict(request.query_params) or None,
            )
            start_time = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as exc:
                duration_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
                logger.error(
                    "Request failed",
                    duration_ms=round(duration_ms, 2),
                    error_type=type(exc).__name__,
                )
                raise

            duration_ms = (time.perf_counter() - start_time) * MILLISECONDS_PER_SECOND
            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round(duration_ms, 2),
            )
            if duration_ms > self.log_config.slow_request_threshold_ms:
                logger.warning(
                    "Slow request detected",
                    duration_ms=round(duration_ms, 2),
                    threshold_ms=self.log_config.slow_request_threshold_ms,
                )

            response.headers[REQUEST_ID_HEADER] = request_id
            return response
