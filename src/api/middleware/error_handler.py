"""Exception handlers that render every failure as an ``ErrorResponse``.

Domain exceptions map to status codes by class (see ``STATUS_BY_EXCEPTION``);
request validation failures become 422 with per-field messages; anything
unhandled becomes a 500 whose details are hidden in production.
"""

import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from src.api.schemas.errors import ErrorResponse, ServiceInfo
from src.api.utils.responses import ORJSONResponse
from src.core.config import Settings, get_settings
from src.core.context import RequestContext, generate_request_id
from src.core.error_context import sanitize_dict, sanitize_error_context
from src.core.exceptions import (
    BusinessRuleError,
    ConflictError,
    CostumeRentalError,
    ErrorCode,
    ForbiddenError,
    NotFoundError,
    Severity,
    UnauthorizedError,
    ValidationError,
)
from src.core.observability import add_span_attributes

STATUS_BY_EXCEPTION: tuple[tuple[type[CostumeRentalError], int], ...] = (
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ConflictError, status.HTTP_409_CONFLICT),
    (BusinessRuleError, status.HTTP_422_UNPROCESSABLE_ENTITY),
)

HTTP_ERROR_CODES: dict[int, tuple[ErrorCode, Severity]] = {
    status.HTTP_400_BAD_REQUEST: (ErrorCode.VALIDATION_ERROR, Severity.LOW),
    status.HTTP_401_UNAUTHORIZED: (ErrorCode.UNAUTHORIZED, Severity.HIGH),
    status.HTTP_403_FORBIDDEN: (ErrorCode.FORBIDDEN, Severity.HIGH),
    status.HTTP_404_NOT_FOUND: (ErrorCode.NOT_FOUND, Severity.LOW),
    status.HTTP_405_METHOD_NOT_ALLOWED: (ErrorCode.VALIDATION_ERROR, Severity.LOW),
    status.HTTP_409_CONFLICT: (ErrorCode.CONFLICT, Severity.MEDIUM),
}

BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_service_info(settings: Settings) -> ServiceInfo:
    """Describe this service for inclusion in error bodies."""
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def status_code_for(exc: CostumeRentalError) -> int:
    """HTTP status for a domain exception; 500 for unmapped classes."""
    for exception_class, status_code in STATUS_BY_EXCEPTION:
        if isinstance(exc, exception_class):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or generate_request_id()


async def costume_rental_error_handler(request: Request, exc: Exception) -> Response:
    """Handle ``CostumeRentalError`` and its subclasses.

    Raises:
        TypeError: If called with any other exception type.
    """
    if not isinstance(exc, CostumeRentalError):
        raise TypeError(f"Expected CostumeRentalError, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()
    status_code = status_code_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": request.url.path,
            "status_code": status_code,
        },
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {exception_type}: {message}",
        exception_type=type(exc).__name__,
        message=exc.message,
        fingerprint=exc.fingerprint,
        **error_context,
    )
    add_span_attributes(
        **{
            "error.code": exc.error_code,
            "error.severity": exc.severity.value,
            "error.fingerprint": exc.fingerprint,
        }
    )

    safe_context = sanitize_dict(exc.context) if exc.context else None
    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "error_context": safe_context,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    error_response = ErrorResponse(
        error_code=exc.error_code,
        message=exc.message,
        details=safe_context,
        correlation_id=correlation_id,
        request_id=_request_id(request),
        severity=exc.severity.value,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=BEARER_CHALLENGE if status_code == status.HTTP_401_UNAUTHORIZED else None,
    )


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle ``RequestValidationError`` with per-field messages.

    Body fields are reported by their wire (camelCase) name, e.g.
    ``{"costumeId": ["Field required"]}``.

    Raises:
        TypeError: If called with any other exception type.
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        # loc is ("body" | "query" | "path", field, ...)
        location = error.get("loc", ())
        field_name = ".".join(str(part) for part in location[1:]) or "root"
        field_errors.setdefault(field_name, []).append(
            error.get("msg", "Invalid value")
        )

    logger.warning(
        "Request validation failed",
        request_method=request.method,
        request_path=request.url.path,
        validation_errors=field_errors,
    )

    error_response = ErrorResponse(
        error_code=ErrorCode.VALIDATION_ERROR.value,
        message="Request validation failed",
        details={"validation_errors": field_errors},
        correlation_id=correlation_id,
        request_id=_request_id(request),
        severity=Severity.LOW.value,
        service_info=get_service_info(settings),
    )

    return ORJSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette ``HTTPException`` (unknown routes, wrong methods).

    Raises:
        TypeError: If called with any other exception type.
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    settings = get_settings()
    error_code, severity = HTTP_ERROR_CODES.get(
        exc.status_code,
        (
            ErrorCode.INTERNAL_ERROR,
            Severity.HIGH
            if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR
            else Severity.MEDIUM,
        ),
    )

    logger.warning(
        "HTTP exception {}: {}",
        exc.status_code,
        exc.detail,
        request_method=request.method,
        request_path=request.url.path,
    )

    error_response = ErrorResponse(
        error_code=error_code.value,
        message=str(exc.detail),
        correlation_id=RequestContext.get_correlation_id(),
        request_id=_request_id(request),
        severity=severity.value,
        service_info=get_service_info(settings),
    )

    return ORJSONResponse(
        status_code=exc.status_code,
        content=error_response.model_dump(mode="json"),
        headers=exc.headers,
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle anything not caught by a more specific handler.

    In production the response only says that an internal error occurred.
    """
    settings = get_settings()
    correlation_id = RequestContext.get_correlation_id()

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": request.url.path,
        },
    )
    logger.opt(exception=exc).error(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **error_context,
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    error_response = ErrorResponse(
        error_code=ErrorCode.INTERNAL_ERROR.value,
        message=message,
        details=details,
        correlation_id=correlation_id,
        request_id=_request_id(request),
        severity=Severity.CRITICAL.value,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )

    return ORJSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all handlers to the application."""
    app.add_exception_handler(CostumeRentalError, costume_rental_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.info("Exception handlers registered")
