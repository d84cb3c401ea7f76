"""Error Hierarchy — typed, categorized exceptions for all Fintrack failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are recoverable; storage errors (503) are critical
    - with_prefix() keeps the concrete type, code and status; only the message grows
    - to_response() never includes stack traces or driver messages

Design Decisions:
    - Single hierarchy with FintrackError base: one FastAPI handler catches all
    - ErrorContext as dataclass: observability data without coupling to logging
"""

import copy
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    AUTHENTICATION = "authentication"
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Observability context attached to an error."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    external_user_id: str | None = None
    field_name: str | None = None
    debug_info: dict[str, Any] | None = None


class FintrackError(Exception):
    """Base exception for all Fintrack errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def with_prefix(self, prefix: str) -> "FintrackError":
        """Same-typed copy whose message reads '<prefix>: <message>'."""
        # Bypass subclass __init__ signatures; state is copied wholesale
        wrapped = type(self).__new__(type(self))
        wrapped.__dict__.update(self.__dict__)
        wrapped.message = f"{prefix}: {self.message}"
        Exception.__init__(wrapped, wrapped.message)
        if self.context.operation is None:
            wrapped.context = copy.copy(self.context)
            wrapped.context.operation = prefix
        return wrapped

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "field": self.context.field_name,
                },
            }
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class Unauthenticated(FintrackError):
    """No verified identity on the request."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHENTICATED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


class UserNotFound(FintrackError):
    """Identity verified, but no internal user record exists."""
    def __init__(self, external_user_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.external_user_id = external_user_id
        super().__init__(
            f"User not found in database with external id: {external_user_id}",
            "USER_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.external_user_id = external_user_id


class InvalidInput(FintrackError):
    """Malformed client input (e.g. a balance that is not a number)."""
    def __init__(self, message: str, field_name: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.field_name = field_name
        super().__init__(
            message, "INVALID_INPUT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field_name = field_name


class MissingProfileData(FintrackError):
    """Identity profile lacks data required to provision a user."""
    def __init__(self, missing: str, context: ErrorContext | None = None):
        super().__init__(
            f"User {missing} not found in identity provider data",
            "MISSING_PROFILE_DATA", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 422,
        )
        self.missing = missing


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageFailure(FintrackError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "STORAGE_FAILURE", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
