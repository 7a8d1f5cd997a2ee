"""Outcome Mapping: turns failed OperationResults into GradbookErrors for the HTTP layer.

Invariants:
    - ok results pass through unchanged
    - Each error_code maps to exactly one GradbookError subclass
    - Notices are logged here once; routes echo them in the response body
"""

import logging

from gradbook.core.errors import (
    ErrorContext,
    GradbookError,
    InternalOperationError,
    RecordNotFoundError,
    RecordValidationError,
    StorageWriteError,
)
from gradbook.core.results import OperationResult

logger = logging.getLogger(__name__)


def unwrap(
    result: OperationResult, operation: str, record_id: str | None = None,
) -> OperationResult:
    """Return result if ok, else raise the matching GradbookError."""
    for notice in result.notices:
        logger.warning(notice, extra={"operation": operation})
    if result.ok:
        return result
    raise to_error(result, operation, record_id)


def to_error(
    result: OperationResult, operation: str, record_id: str | None = None,
) -> GradbookError:
    context = ErrorContext(record_id=record_id, operation=operation)
    if result.error_code == "VALIDATION_ERROR":
        return RecordValidationError(list(result.errors), context)
    if result.error_code == "NOT_FOUND":
        return RecordNotFoundError(record_id or "", context)
    if result.error_code == "WRITE_FAILED":
        return StorageWriteError(
            result.errors[0] if result.errors else "Storage write failed", context,
        )
    return InternalOperationError(operation, context)
