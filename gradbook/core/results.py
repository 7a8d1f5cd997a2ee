"""Operation Results: structured outcomes returned by every public repository operation.

Invariants:
    - ok=True implies error_code is None and errors is empty
    - ok=False always carries an error_code; errors lists every human-readable violation
    - notices are non-fatal (e.g. corrupted storage was reset) and never flip ok

Design Decisions:
    - Frozen dataclass over dict: callers pattern-match on attributes, not string keys
    - The boundary layer decides how to surface outcomes (HTTP status, log, toast);
      the core stays free of presentation concerns (ADR: structured outcomes)
"""

from dataclasses import dataclass, field
from typing import Any


NOTICE_STORAGE_RESET = "Stored data was unreadable and has been reset to an empty list"


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validate_record: valid iff errors is empty."""
    errors: tuple[str, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a repository operation."""
    ok: bool
    value: Any = None
    error_code: str | None = None
    errors: tuple[str, ...] = ()
    notices: tuple[str, ...] = field(default=())

    @classmethod
    def success(cls, value: Any = None, notices: tuple[str, ...] = ()) -> "OperationResult":
        return cls(ok=True, value=value, notices=notices)

    @classmethod
    def failure(
        cls,
        error_code: str,
        errors: list[str] | tuple[str, ...],
        notices: tuple[str, ...] = (),
    ) -> "OperationResult":
        return cls(
            ok=False, error_code=error_code, errors=tuple(errors), notices=notices,
        )
