"""Error Hierarchy — typed, categorized exceptions for the statement gate shell.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Request errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope
    - No internal details leaked in user-facing messages
    - Statement conformance defects are NOT exceptions: they are Violations
      (core/violations.py) accumulated by the validator

Design Decisions:
    - Single hierarchy with StatementGateError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

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
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    request_path: str | None = None
    debug_info: dict[str, Any] | None = None


class StatementGateError(Exception):
    """Base exception for all statement gate errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.headers = headers

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
                    "request_path": self.context.request_path,
                },
            }
        }


# ─── Request Errors (400-level) ──────────────────────────────────

class MalformedPayloadError(StatementGateError):
    """Request body is empty or not parseable JSON."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "MALFORMED_PAYLOAD", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class AuthenticationError(StatementGateError):
    """Missing or wrong Basic credentials."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Unauthorized", "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
            headers={"WWW-Authenticate": "Basic"},
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StatementGateError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["context"]["operation"] = self.operation
        return response


class InternalError(StatementGateError):
    """Anything unexpected; the message never carries internal detail."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "An unexpected error occurred", "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, context, 500,
        )
