"""API-related constants."""

# HTTP Headers
CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"
USER_AGENT_MAX_LENGTH = 200

# Pagination
MAX_PAGINATION_LIMIT = 100

# Security
DEFAULT_HSTS_MAX_AGE = 31536000  # 1 year in seconds
BEARER_SCHEME_NAME = "bearerAuth"
