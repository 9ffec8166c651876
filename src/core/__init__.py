"""Cross-cutting building blocks shared by every layer.

- **config**: environment-driven settings
- **context**: correlation ID and authenticated user per request
- **exceptions**: error codes, severities and the exception hierarchy
- **error_context**: redaction of credentials before logging
- **logging**: Loguru setup with console and JSON formatters
- **observability**: OpenTelemetry tracing
"""
