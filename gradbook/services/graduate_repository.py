"""Graduate Repository: validated upsert/remove/list and grouped reports over the record store.

Invariants:
    - At most one record per id: upsert replaces in place, otherwise appends
    - Invalid candidates never reach storage; every violation is returned
    - remove of an unknown id writes nothing and fails with NOT_FOUND
    - list_records returns the stored collection unmodified (insertion order)
    - Every public operation returns OperationResult and never raises
    - load-mutate-save cycles run under one re-entrant lock

Design Decisions:
    - Store injected via the RecordStore protocol: tests use an in-memory slot
    - Lock lives here, not in the store: the invariant spans load AND save
      (ADR: FastAPI runs sync routes on a thread pool)
    - Missing ids are generated on upsert so the id invariant holds for any caller
"""

import functools
import logging
import threading
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Mapping

from gradbook.core.domain_types import (
    FIELD_ID,
    MIN_GRADUATION_YEAR,
    Record,
    RecordCandidate,
    ReportField,
)
from gradbook.core.enforce_record import normalize_record, validate_record
from gradbook.core.record_ids import generate_record_id
from gradbook.core.report import compute_report
from gradbook.core.repository_protocols import RecordStore
from gradbook.core.results import NOTICE_STORAGE_RESET, OperationResult

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred"
WRITE_FAILED_MESSAGE = "Could not save changes: storage write failed"


def _guarded(operation: str) -> Callable:
    """Convert any unexpected exception into an INTERNAL_ERROR result."""
    def decorator(method: Callable[..., OperationResult]) -> Callable[..., OperationResult]:
        @functools.wraps(method)
        def wrapper(self, *args, **kwargs) -> OperationResult:
            try:
                return method(self, *args, **kwargs)
            except Exception:
                logger.error(
                    f"Unexpected failure in {operation}", exc_info=True,
                    extra={"operation": operation, "error_code": "INTERNAL_ERROR"},
                )
                return OperationResult.failure(
                    "INTERNAL_ERROR", [INTERNAL_ERROR_MESSAGE],
                )
        return wrapper
    return decorator


def _utc_year() -> int:
    return datetime.now(timezone.utc).year


class GraduateRepository:
    """Mutation/query facade combining the record store and admission rules."""

    def __init__(
        self,
        store: RecordStore,
        min_year: int = MIN_GRADUATION_YEAR,
        current_year: Callable[[], int] = _utc_year,
    ):
        self.store = store
        self.min_year = min_year
        self._current_year = current_year
        self._lock = threading.RLock()

    # ─── Mutations ──────────────────────────────────────────────

    @_guarded("upsert")
    def upsert(self, item: RecordCandidate) -> OperationResult:
        """Validate, then create or replace the record with the same id."""
        validation = validate_record(
            item, current_year=self._current_year(), min_year=self.min_year,
        )
        if not validation.valid:
            logger.info(
                f"Rejected record with {len(validation.errors)} violation(s)",
                extra={"operation": "upsert", "error_code": "VALIDATION_ERROR"},
            )
            return OperationResult.failure("VALIDATION_ERROR", validation.errors)

        record = normalize_record(item)
        if not record[FIELD_ID].strip():
            record[FIELD_ID] = generate_record_id()

        with self._lock:
            snapshot = self.store.load()
            items = list(snapshot.items)
            index = _index_of(items, record[FIELD_ID])
            if index is None:
                items.append(record)
            else:
                items[index] = record
            saved = self.store.save_all(items)

        notices = _notices(snapshot.corrupted)
        if not saved:
            return OperationResult.failure(
                "WRITE_FAILED", [WRITE_FAILED_MESSAGE], notices,
            )
        logger.info(
            "Updated graduate" if index is not None else "Created graduate",
            extra={"operation": "upsert", "record_id": record[FIELD_ID]},
        )
        return OperationResult.success(record, notices)

    @_guarded("remove")
    def remove(self, record_id: str) -> OperationResult:
        """Delete the record with record_id. Fails without writing when absent."""
        with self._lock:
            snapshot = self.store.load()
            kept = [x for x in snapshot.items if x.get(FIELD_ID) != record_id]
            notices = _notices(snapshot.corrupted)
            if len(kept) == len(snapshot.items):
                return OperationResult.failure(
                    "NOT_FOUND", [f"Graduate '{record_id}' not found"], notices,
                )
            saved = self.store.save_all(kept)

        if not saved:
            return OperationResult.failure(
                "WRITE_FAILED", [WRITE_FAILED_MESSAGE], notices,
            )
        logger.info(
            "Removed graduate", extra={"operation": "remove", "record_id": record_id},
        )
        return OperationResult.success(record_id, notices)

    @_guarded("seed")
    def seed_if_empty(self, candidates: Iterable[Mapping[str, Any]]) -> OperationResult:
        """Store candidates in one write when the collection is empty. Value: count written."""
        with self._lock:
            snapshot = self.store.load()
            if snapshot.items:
                return OperationResult.success(0)
            records = []
            for candidate in candidates:
                validation = validate_record(
                    candidate, current_year=self._current_year(), min_year=self.min_year,
                )
                if not validation.valid:
                    return OperationResult.failure("VALIDATION_ERROR", validation.errors)
                record = normalize_record(candidate)
                record[FIELD_ID] = record[FIELD_ID] or generate_record_id()
                records.append(record)
            if not records:
                return OperationResult.success(0)
            if not self.store.save_all(records):
                return OperationResult.failure("WRITE_FAILED", [WRITE_FAILED_MESSAGE])
        return OperationResult.success(len(records), _notices(snapshot.corrupted))

    # ─── Queries ────────────────────────────────────────────────

    @_guarded("list")
    def list_records(self) -> OperationResult:
        """The stored collection, unmodified."""
        snapshot = self.store.load()
        return OperationResult.success(snapshot.items, _notices(snapshot.corrupted))

    @_guarded("get")
    def get(self, record_id: str) -> OperationResult:
        snapshot = self.store.load()
        notices = _notices(snapshot.corrupted)
        index = _index_of(snapshot.items, record_id)
        if index is None:
            return OperationResult.failure(
                "NOT_FOUND", [f"Graduate '{record_id}' not found"], notices,
            )
        return OperationResult.success(snapshot.items[index], notices)

    @_guarded("report")
    def report(self, field_name: str) -> OperationResult:
        """Grouped counts over field_name. Value: list of (key, count)."""
        snapshot = self.store.load()
        return OperationResult.success(
            compute_report(snapshot.items, field_name), _notices(snapshot.corrupted),
        )

    @_guarded("standard_reports")
    def standard_reports(self) -> OperationResult:
        """Reports by year, major and status over one read of the collection."""
        snapshot = self.store.load()
        reports = {
            field.value: compute_report(snapshot.items, field.value)
            for field in ReportField
        }
        return OperationResult.success(reports, _notices(snapshot.corrupted))


def _index_of(items: list[Record], record_id: str) -> int | None:
    for i, item in enumerate(items):
        if item.get(FIELD_ID) == record_id:
            return i
    return None


def _notices(corrupted: bool) -> tuple[str, ...]:
    return (NOTICE_STORAGE_RESET,) if corrupted else ()
