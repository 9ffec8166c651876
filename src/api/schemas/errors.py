"""Error response body shared by every failing endpoint.

Field names stay snake_case: error bodies are produced by the exception
handlers, not by resource schemas, and clients match on ``error_code``.
"""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ServiceInfo(BaseModel):
    """Identifies the service instance that produced an error."""

    name: str = Field(..., description="Name of the service")
    version: str = Field(..., description="Version of the service")
    environment: str = Field(
        ...,
        description="Environment where the service is running",
        examples=["development", "staging", "production"],
    )


class ErrorResponse(BaseModel):
    """Standard error body."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "error_code": "COSTUME_NOT_FOUND",
                    "message": "Costume 3f1c2a9e-0d5b-4c57-9a43-1d2f0e6b7c88 was not found",
                    "details": {"costume_id": "3f1c2a9e-0d5b-4c57-9a43-1d2f0e6b7c88"},
                    "correlation_id": "550e8400-e29b-41d4-a716-446655440000",
                    "request_id": "req-660e8400-e29b-41d4-a716-446655440000",
                    "timestamp": "2026-10-31T12:00:00+00:00",
                    "severity": "LOW",
                    "service_info": {
                        "name": "Costume Rental API",
                        "version": "1.0.0",
                        "environment": "production",
                    },
                },
                {
                    "error_code": "VALIDATION_ERROR",
                    "message": "Request validation failed",
                    "details": {"validation_errors": {"userId": ["Field required"]}},
                    "timestamp": "2026-10-31T12:00:01+00:00",
                    "severity": "LOW",
                },
            ]
        }
    )

    error_code: str = Field(
        ...,
        description="Machine-readable error code",
        examples=["COSTUME_NOT_FOUND", "EMPTY_CART", "UNAUTHORIZED"],
    )
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] | None = Field(
        default=None,
        description="Additional details, such as field-level validation errors",
    )
    correlation_id: str | None = Field(
        default=None, description="Correlation ID shared across services"
    )
    request_id: str | None = Field(
        default=None, description="Identifier of this single request"
    )
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(UTC),
        description="When the error occurred (timezone-aware)",
    )
    severity: str | None = Field(
        default=None,
        description="Error severity (LOW, MEDIUM, HIGH, CRITICAL)",
    )
    service_info: ServiceInfo | None = Field(
        default=None, description="Service that produced the error"
    )
    debug_info: dict[str, Any] | None = Field(
        default=None,
        description="Stack trace and context; only populated in development",
    )
