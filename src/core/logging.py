"""Loguru-based logging with console and JSON output.

``setup_logging`` installs a single Loguru sink and routes the standard
library (uvicorn, SQLAlchemy, asyncio) through it, so every log line shares
the same format and the same request context.

Formatters:
- **console**: colourised single line with inline context (development)
- **json**: one JSON object per line for log collectors (staging/production)

Request-scoped fields (correlation_id, request_id, user_id, ...) are bound
by the middleware with ``logger.contextualize`` and show up in both formats.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from typing import Any, Final, Protocol, cast

import orjson
from loguru import logger

from src.core.constants import REDACTED
from src.core.error_context import is_sensitive_field


class _LoggingState:
    """Tracks whether logging has been configured."""

    def __init__(self) -> None:
        self.configured = False


_state = _LoggingState()


class LogConfigProtocol(Protocol):
    """Subset of LogConfig used here."""

    @property
    def log_level(self) -> str: ...

    @property
    def log_formatter_type(self) -> str | None: ...


class SettingsProtocol(Protocol):
    """Subset of Settings used by setup_logging."""

    @property
    def debug(self) -> bool: ...

    @property
    def log_config(self) -> LogConfigProtocol: ...


CORRELATION_ID_DISPLAY_LENGTH: Final[int] = 8
MAX_FIELD_VALUE_LENGTH: Final[int] = 100

# Fields shown first, in this order, by the console formatter
PRIORITY_FIELDS: Final[tuple[str, ...]] = (
    "correlation_id",
    "request_id",
    "user_id",
    "method",
    "path",
    "status_code",
    "duration_ms",
)


def _escape(value: object) -> str:
    """Escape braces and tags so Loguru does not parse them as markup."""
    return (
        str(value).replace("{", "{{").replace("}", "}}").replace("<", r"\<")
    )


def _format_priority_field(field: str, value: object) -> str:
    if field == "correlation_id":
        value = str(value)[:CORRELATION_ID_DISPLAY_LENGTH]
    elif field == "duration_ms":
        value = f"{value}ms"
    elif field == "status_code":
        colour = {"2": "green", "3": "yellow", "4": "red"}.get(str(value)[:1], "red")
        return f"<{colour}>{_escape(value)}</{colour}>"
    return _escape(value)


def _format_extra_field(key: str, value: object) -> str:
    str_value = REDACTED if is_sensitive_field(key) else str(value)
    if len(str_value) > MAX_FIELD_VALUE_LENGTH:
        str_value = str_value[: MAX_FIELD_VALUE_LENGTH - 3] + "..."
    return f"{_escape(key)}={_escape(str_value)}"


def format_console_with_context(record: dict[str, Any]) -> str:
    """Format a record for the console with all bound context inline.

    Args:
        record: Loguru record.

    Returns:
        str: Loguru format string for this record.
    """
    extra: dict[str, Any] = record.get("extra", {})

    context_parts = [
        f"<yellow>{_format_priority_field(field, extra[field])}</yellow>"
        for field in PRIORITY_FIELDS
        if extra.get(field) is not None
    ]
    context_parts.extend(
        f"<dim>{_format_extra_field(key, value)}</dim>"
        for key, value in extra.items()
        if key not in PRIORITY_FIELDS and not key.startswith("_") and value is not None
    )

    parts = [
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green>",
        "<level>{level: <8}</level>",
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan>",
    ]
    if context_parts:
        parts.append(" ".join(f"[{part}]" for part in context_parts))
    parts.append(_escape(record.get("message", "")))

    line = " | ".join(parts) + "\n"
    if record.get("exception"):
        line += "{exception}"
    return line


def serialize_for_json(record: dict[str, Any]) -> str:
    """Serialize a record as a single JSON line.

    Args:
        record: Loguru record.

    Returns:
        str: JSON document terminated by a newline.
    """
    log_entry: dict[str, Any] = {
        "timestamp": record["time"].isoformat(),
        "level": record["level"].name,
        "message": record["message"],
        "logger": record["name"],
        "function": record["function"],
        "line": record["line"],
    }

    for key, value in record.get("extra", {}).items():
        if not key.startswith("_"):
            log_entry[key] = REDACTED if is_sensitive_field(key) else value

    if exc := record.get("exception"):
        log_entry["exception"] = {
            "type": exc.type.__name__ if exc.type else None,
            "value": str(exc.value) if exc.value else None,
        }

    return orjson.dumps(log_entry, default=str).decode() + "\n"


class InterceptHandler(logging.Handler):
    """Forward standard library log records to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # Walk back to the frame that issued the logging call
        try:
            frame, depth = sys._getframe(6), 6
        except ValueError:
            frame, depth = None, 1
        while frame and frame.f_code.co_filename == logging.__file__:
            if frame.f_back is None:
                break
            frame = frame.f_back
            depth += 1

        logger.opt(depth=depth, exception=record.exc_info).log(
            level, record.getMessage()
        )


def _structured_sink(formatter: Callable[[dict[str, Any]], str]) -> Callable[..., None]:
    def sink(message: Any) -> None:  # noqa: ANN401 - loguru Message
        sys.stdout.write(formatter(message.record))
        sys.stdout.flush()

    return sink


def setup_logging(settings: SettingsProtocol) -> None:
    """Configure Loguru and intercept standard library logging.

    Safe to call more than once; only the first call has an effect.

    Args:
        settings: Application settings.
    """
    if _state.configured:
        return

    logger.remove()

    formatter_type = settings.log_config.log_formatter_type or "console"
    level = settings.log_config.log_level

    if formatter_type == "json":
        logger.add(
            _structured_sink(serialize_for_json),
            level=level,
            enqueue=True,
            diagnose=False,
            backtrace=False,
        )
    else:
        logger.add(
            sys.stdout,
            format=cast("Any", format_console_with_context),
            level=level,
            enqueue=True,
            colorize=True,
            diagnose=settings.debug,
            backtrace=settings.debug,
        )

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        std_logger = logging.getLogger(name)
        std_logger.handlers = [InterceptHandler()]
        std_logger.propagate = False

    logger.info(
        "Logging configured with {} formatter",
        formatter_type,
        log_level=level,
    )
    _state.configured = True
