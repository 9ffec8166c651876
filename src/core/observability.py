"""OpenTelemetry tracing setup.

Exporters:
- **console**: spans are written through Loguru at DEBUG level (development)
- **otlp**: spans go to an OTLP collector over gRPC (Jaeger, Tempo, ...)
- **none**: a tracer provider is installed but nothing is exported
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from typing import TYPE_CHECKING, Any, Final

from loguru import logger
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import OTLPSpanExporter
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from opentelemetry.instrumentation.sqlalchemy import SQLAlchemyInstrumentor
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import ReadableSpan, TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    SpanExporter,
    SpanExportResult,
)
from opentelemetry.sdk.trace.sampling import TraceIdRatioBased

from src.core.context import RequestContext

if TYPE_CHECKING:
    from collections.abc import Generator, Sequence

    from fastapi import FastAPI

    from src.core.config import Settings

SERVICE_NAME_KEY: Final[str] = "service.name"
SERVICE_VERSION_KEY: Final[str] = "service.version"
ENVIRONMENT_KEY: Final[str] = "deployment.environment"

EXCLUDED_URLS: Final[str] = "/health,/docs,/redoc,/openapi.json"
NOISY_SPAN_NAMES: Final[frozenset[str]] = frozenset(
    {"connect", "http send", "http receive", "cursor.execute"}
)


class LoguruSpanExporter(SpanExporter):
    """Span exporter that writes finished spans to the application log."""

    def export(self, spans: Sequence[ReadableSpan]) -> SpanExportResult:
        for span in spans:
            span_context = span.get_span_context()
            if not span_context or span.name in NOISY_SPAN_NAMES:
                continue

            attributes = dict(span.attributes or {})
            duration_ms = None
            if span.end_time and span.start_time:
                duration_ms = (span.end_time - span.start_time) // 1_000_000

            logger.bind(
                trace_id=f"0x{span_context.trace_id:032x}",
                span_id=f"0x{span_context.span_id:016x}",
                correlation_id=attributes.get(
                    "correlation_id", RequestContext.get_correlation_id()
                ),
                span_name=span.name,
                duration_ms=duration_ms,
                attributes=attributes,
                status=span.status.status_code.name,
            ).debug("Trace span completed: {}", span.name)

        return SpanExportResult.SUCCESS


def get_span_exporter(settings: Settings) -> SpanExporter | None:
    """Build the exporter selected by ``observability_config.exporter_type``.

    Args:
        settings: Application settings.

    Returns:
        SpanExporter | None: The exporter, or None when exporting is disabled.
    """
    config = settings.observability_config

    if config.exporter_type == "console":
        return LoguruSpanExporter()

    if config.exporter_type == "otlp":
        endpoint = config.exporter_endpoint or "http://localhost:4317"
        logger.info("Using OTLP span exporter at {}", endpoint)
        return OTLPSpanExporter(
            endpoint=endpoint,
            insecure=settings.environment == "development",
        )

    logger.info("Span export disabled")
    return None


@lru_cache(maxsize=8)
def get_tracer(name: str) -> trace.Tracer:
    """Get a tracer for a component, typically ``__name__``."""
    return trace.get_tracer(name)


def setup_tracing(settings: Settings) -> None:
    """Install a global tracer provider according to settings.

    Args:
        settings: Application settings.
    """
    config = settings.observability_config
    if not config.enable_tracing:
        logger.info("Tracing disabled by configuration")
        return

    resource = Resource.create(
        {
            SERVICE_NAME_KEY: settings.app_name,
            SERVICE_VERSION_KEY: settings.app_version,
            ENVIRONMENT_KEY: settings.environment,
        }
    )
    tracer_provider = TracerProvider(
        resource=resource,
        sampler=TraceIdRatioBased(config.trace_sample_rate),
    )

    if exporter := get_span_exporter(settings):
        tracer_provider.add_span_processor(BatchSpanProcessor(exporter))

    trace.set_tracer_provider(tracer_provider)
    logger.info(
        "Tracing configured",
        exporter_type=config.exporter_type,
        sample_rate=config.trace_sample_rate,
    )


def add_correlation_id_to_span(span: trace.Span, scope: dict[str, Any]) -> None:
    """Server request hook copying correlation and request IDs onto the span."""
    if correlation_id := RequestContext.get_correlation_id():
        span.set_attribute("correlation_id", correlation_id)

    headers = dict(scope.get("headers", []))
    if request_id := headers.get(b"x-request-id", b"").decode("utf-8"):
        span.set_attribute("request_id", request_id)


def instrument_app(app: FastAPI, settings: Settings) -> None:
    """Instrument FastAPI and SQLAlchemy when tracing is enabled.

    Args:
        app: FastAPI application to instrument.
        settings: Application settings.
    """
    if not settings.observability_config.enable_tracing:
        return

    FastAPIInstrumentor.instrument_app(
        app,
        excluded_urls=EXCLUDED_URLS,
        server_request_hook=add_correlation_id_to_span,
    )
    if not SQLAlchemyInstrumentor().is_instrumented_by_opentelemetry:
        SQLAlchemyInstrumentor().instrument(enable_commenter=False)

    logger.info("Application instrumented for tracing")


def add_span_attributes(**attributes: str | int | float | bool) -> None:
    """Set attributes on the current span if it is recording."""
    span = trace.get_current_span()
    if span.is_recording():
        for key, value in attributes.items():
            span.set_attribute(key, value)


@contextmanager
def trace_operation(
    name: str, **attributes: str | int | float | bool
) -> Generator[trace.Span]:
    """Run a block inside a new span.

    Args:
        name: Span name, e.g. ``cart.add``.
        **attributes: Initial span attributes.

    Yields:
        trace.Span: The active span.

    Example:
        >>> with trace_operation("checkout.confirm", user_id=user.id):
        ...     rentals = await service.checkout(user)
    """
    tracer = get_tracer(__name__)
    with tracer.start_as_current_span(name) as span:
        for key, value in attributes.items():
            span.set_attribute(key, value)
        if correlation_id := RequestContext.get_correlation_id():
            span.set_attribute("correlation_id", correlation_id)
        yield span
