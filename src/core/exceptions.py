"""Exception hierarchy for the costume rental service.

Every domain failure is raised as a ``CostumeRentalError`` subclass. The API
layer maps each subclass to an HTTP status code and renders it as an
``ErrorResponse``, so services never deal with HTTP concerns directly.

Key components:
- **ErrorCode**: machine-readable identifiers returned to clients
- **Severity**: classification used to pick log level and alerting
- **CostumeRentalError**: base exception with context, cause and fingerprint
- **Specialized exceptions**: one class per HTTP-facing failure category
"""

import hashlib
import traceback
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Error codes returned in the ``error_code`` field of error responses."""

    # Generic categories
    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""

    VALIDATION_ERROR = "VALIDATION_ERROR"
    """Input validation failed."""

    NOT_FOUND = "NOT_FOUND"
    """The requested resource does not exist."""

    UNAUTHORIZED = "UNAUTHORIZED"
    """Missing, malformed or expired bearer token."""

    FORBIDDEN = "FORBIDDEN"
    """Authenticated, but acting on another user's behalf."""

    CONFLICT = "CONFLICT"
    """The request conflicts with the current state of a resource."""

    BUSINESS_RULE_VIOLATION = "BUSINESS_RULE_VIOLATION"
    """The operation is well-formed but not allowed right now."""

    # Resource-specific codes
    COSTUME_NOT_FOUND = "COSTUME_NOT_FOUND"
    RENTAL_NOT_FOUND = "RENTAL_NOT_FOUND"
    CART_ITEM_NOT_FOUND = "CART_ITEM_NOT_FOUND"
    COSTUME_ALREADY_IN_CART = "COSTUME_ALREADY_IN_CART"
    EMPTY_CART = "EMPTY_CART"
    EMAIL_ALREADY_REGISTERED = "EMAIL_ALREADY_REGISTERED"
    INVALID_CREDENTIALS = "INVALID_CREDENTIALS"
    INVALID_TOKEN = "INVALID_TOKEN"
    PASSWORD_TOO_LONG = "PASSWORD_TOO_LONG"


class Severity(Enum):
    """Severity levels used for logging and alerting decisions."""

    LOW = "LOW"
    """Expected client mistakes (bad input, unknown ids)."""

    MEDIUM = "MEDIUM"
    """Expected but noteworthy (conflicts, rule violations)."""

    HIGH = "HIGH"
    """Security relevant or integrity impacting."""

    CRITICAL = "CRITICAL"
    """Unhandled failures needing immediate attention."""


class CostumeRentalError(Exception):
    """Base exception for the costume rental service.

    Args:
        error_code: Identifier of the error type (string or ErrorCode)
        message: Human-readable message, safe to show to clients
        severity: Severity level (defaults to MEDIUM)
        context: Structured details, returned as ``details`` to the client
        cause: The original exception, if this wraps one
    """

    def __init__(
        self,
        error_code: str | ErrorCode,
        message: str,
        severity: Severity = Severity.MEDIUM,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.error_code = (
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        )
        self.message = message
        self.severity = severity
        self.context = context or {}
        self.cause = cause

        self.stack_trace = traceback.format_stack()[:-1]
        self.fingerprint = self._generate_fingerprint()

        super().__init__(message)
        if cause:
            self.__cause__ = cause

    def _generate_fingerprint(self) -> str:
        """Hash the error type and raising location for grouping in log search.

        Returns:
            str: 16 hex characters
        """
        max_frames = 5
        fingerprint_data = f"{self.__class__.__name__}:{self.error_code}"

        for frame in self.stack_trace[-max_frames:]:
            if "site-packages" not in frame and "src/" in frame:
                fingerprint_data += f":{frame.strip().splitlines()[0]}"

        return hashlib.sha256(fingerprint_data.encode()).hexdigest()[:16]

    @property
    def is_expected(self) -> bool:
        """Whether the error is part of normal operation (LOW or MEDIUM)."""
        return self.severity in (Severity.LOW, Severity.MEDIUM)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"

    def __repr__(self) -> str:
        context_str = f", context={self.context}" if self.context else ""
        return (
            f"{self.__class__.__name__}(error_code='{self.error_code}', "
            f"message='{self.message}', severity={self.severity.value}{context_str})"
        )


class ValidationError(CostumeRentalError):
    """Input failed validation beyond what the request schema checks."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.VALIDATION_ERROR,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class NotFoundError(CostumeRentalError):
    """A costume, rental or cart entry does not exist for the caller."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.NOT_FOUND,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.LOW, context, cause)


class UnauthorizedError(CostumeRentalError):
    """Authentication failed.

    Raised for missing or invalid bearer tokens and for wrong credentials at
    login.
    """

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.UNAUTHORIZED,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context, cause)


class ForbiddenError(CostumeRentalError):
    """The authenticated user may not perform the action."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.FORBIDDEN,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.HIGH, context, cause)


class ConflictError(CostumeRentalError):
    """The request would create a duplicate or clash with existing state."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.CONFLICT,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.MEDIUM, context, cause)


class BusinessRuleError(CostumeRentalError):
    """A business rule forbids the operation (e.g. checking out an empty cart)."""

    def __init__(
        self,
        message: str,
        error_code: str | ErrorCode = ErrorCode.BUSINESS_RULE_VIOLATION,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(error_code, message, Severity.MEDIUM, context, cause)
