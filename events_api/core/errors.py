"""Error Hierarchy — typed, categorized exceptions for every Events API failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Client errors (400-level) are detected before any store call
    - to_response() produces the uniform {success: false, message, ...} envelope
    - No driver or stack detail is ever placed in a user-facing message

Design Decisions:
    - Single hierarchy with EventsApiError base: FastAPI global handler catches all
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone


GENERIC_FAILURE_MESSAGE = "An unexpected error occurred. Please try again later."


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
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    event_id: str | None = None
    operation: str | None = None


class EventsApiError(Exception):
    """Base exception for all Events API errors."""

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

    def to_response(self) -> dict:
        """Convert to the standardized REST error body."""
        return {"success": False, "message": self.message}

    def to_log_extra(self) -> dict:
        """Fields surfaced by the JSON log formatter."""
        return {
            "error_code": self.code,
            "event_id": self.context.event_id,
            "operation": self.context.operation,
        }


# ─── Client Errors (400-level) ──────────────────────────────────

class ValidationError(EventsApiError):
    """Input failed its schema. Carries every violation, in order."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Invalid input", "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.errors = list(errors)

    def to_response(self) -> dict:
        return {**super().to_response(), "errors": self.errors}


class AuthError(EventsApiError):
    """Bearer credential missing, malformed, or rejected by the verifier."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            f"Unauthorized: {message}", "UNAUTHORIZED",
            ErrorCategory.AUTHENTICATION, ErrorSeverity.WARNING, context, 401,
        )


class MissingTokenError(AuthError):
    def __init__(self, context: ErrorContext | None = None):
        super().__init__("No token provided.", context)


class InvalidTokenError(AuthError):
    def __init__(self, reason: str = "", context: ErrorContext | None = None):
        super().__init__("Invalid token.", context)
        self.reason = reason


class NotFoundError(EventsApiError):
    """Referenced event id is absent from the collection."""
    def __init__(self, event_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.event_id = event_id
        super().__init__(
            "Event not found", "EVENT_NOT_FOUND",
            ErrorCategory.RESOURCE_NOT_FOUND, ErrorSeverity.INFO, ctx, 404,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(EventsApiError):
    """Underlying store call failed. Driver detail is logged, never returned."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = ctx.operation or operation
        super().__init__(
            f"Store {operation} failed: {message}",
            "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation

    def to_response(self) -> dict:
        return {
            "success": False,
            "message": GENERIC_FAILURE_MESSAGE,
            "error": self.message,
        }
