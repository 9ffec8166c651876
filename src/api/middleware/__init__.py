"""HTTP middleware and exception handlers.

Registration order in ``create_app`` (outermost first on the way in):
1. ``SecurityHeadersMiddleware``: nosniff, frame deny and HSTS headers
2. ``RequestContextMiddleware``: correlation ID in contextvars and logs
3. ``RequestLoggingMiddleware``: request timing and ``X-Request-ID``

Exception handlers are registered on the app itself and turn every error
into an ``ErrorResponse`` body.
"""
