"""Error Hierarchy: typed, categorized exceptions for all Gradbook failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - to_response() produces the REST envelope consumed by the API error handlers
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with GradbookError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: rich observability without coupling to logging framework
    - Core operations return OperationResult; errors are raised only at the API boundary
      or by slot backends (ADR: structured outcomes over error-as-side-effect)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    RESOURCE_NOT_FOUND = "resource_not_found"
    STORAGE = "storage"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    record_id: str | None = None
    storage_key: str | None = None
    operation: str | None = None
    debug_info: dict[str, Any] | None = None


class GradbookError(Exception):
    """Base exception for all Gradbook errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        details: list[str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.details = details or []

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "details": list(self.details),
                "context": {
                    "record_id": self.context.record_id,
                    "operation": self.context.operation,
                },
            }
        }


# ─── Domain Errors (400-level) ──────────────────────────────────

class RecordValidationError(GradbookError):
    """Candidate record violated one or more admission rules."""
    def __init__(self, errors: list[str], context: ErrorContext | None = None):
        super().__init__(
            "Record failed validation", "VALIDATION_ERROR",
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
            details=errors,
        )
        self.errors = errors


class RecordNotFoundError(GradbookError):
    """No record with the requested id exists in the collection."""
    def __init__(self, record_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.record_id = record_id
        super().__init__(
            f"Graduate '{record_id}' not found",
            "NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.record_id = record_id


class UnknownReportFieldError(GradbookError):
    """Report requested for a field outside the standard report set."""
    def __init__(self, field_name: str, allowed: list[str], context: ErrorContext | None = None):
        super().__init__(
            f"Unknown report field '{field_name}'. Expected one of: {', '.join(allowed)}",
            "UNKNOWN_REPORT_FIELD", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field_name = field_name


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StorageWriteError(GradbookError):
    """Persisting the collection failed; prior state is unchanged."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "WRITE_FAILED", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, context, 507,
        )


class StorageQuotaExceededError(GradbookError):
    """Slot write would exceed the backend's storage quota."""
    def __init__(self, key: str, size: int, quota: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.storage_key = key
        super().__init__(
            f"Storage quota exceeded for '{key}': {size} bytes > {quota} bytes",
            "QUOTA_EXCEEDED", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 507,
        )
        self.size = size
        self.quota = quota


class DatabaseError(GradbookError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.STORAGE,
            ErrorSeverity.CRITICAL, ctx, 503,
        )
        self.operation = operation


class InternalOperationError(GradbookError):
    """Unexpected failure inside a public operation, already logged."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            "An unexpected error occurred",
            "INTERNAL_ERROR", ErrorCategory.INTERNAL,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
