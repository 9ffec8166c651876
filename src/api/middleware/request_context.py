"""Correlation ID propagation.

The ``X-Correlation-ID`` request header is reused when present, otherwise a
new ID is generated. It is stored in ``RequestContext``, bound to every log
record emitted while handling the request and echoed on the response.
"""

from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from src.api.constants import CORRELATION_ID_HEADER
from src.core.context import RequestContext, generate_correlation_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Set up the per-request context and clear it afterwards."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = (
            request.headers.get(CORRELATION_ID_HEADER) or generate_correlation_id()
        )
        RequestContext.set_correlation_id(correlation_id)

        try:
            with logger.contextualize(correlation_id=correlation_id):
                response = await call_next(request)
                response.headers[CORRELATION_ID_HEADER] = correlation_id
                return response
        finally:
            RequestContext.clear()
