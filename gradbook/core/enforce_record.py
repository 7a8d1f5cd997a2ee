"""Record Admission Rules: validates a candidate graduate record before it enters the collection.

Invariants:
    - validate_record is PURE: no IO, no clock reads when current_year is given
    - All rules are checked independently; every violation is collected, not just the first
    - Never raises: internal failures surface as a single generic error entry
    - Year bounds are inclusive: [min_year, current_year + 1]

Design Decisions:
    - Rules return human-readable strings, not codes: the only consumer is a person
      fixing a form (ADR: errors list is the UI contract)
    - normalize_record lives beside the rules: it defines the persisted shape that
      validation admits
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Mapping

from gradbook.core.domain_types import (
    FIELD_COMPANY,
    FIELD_FULL_NAME,
    FIELD_MAJOR,
    FIELD_POSITION,
    FIELD_YEAR,
    LENGTH_LIMITED_FIELDS,
    MAX_FIELD_LENGTH,
    MIN_FULL_NAME_LENGTH,
    MIN_GRADUATION_YEAR,
    RECORD_FIELDS,
    Record,
)
from gradbook.core.results import ValidationResult

logger = logging.getLogger(__name__)

GENERIC_VALIDATION_ERROR = "Record could not be validated"

_FIELD_LABELS = {
    FIELD_FULL_NAME: "Full name",
    FIELD_COMPANY: "Company",
    FIELD_POSITION: "Position",
}

_INTEGER = re.compile(r"[+-]?[0-9]+")


def validate_record(
    candidate: Any,
    current_year: int | None = None,
    min_year: int = MIN_GRADUATION_YEAR,
) -> ValidationResult:
    """Check a candidate against every admission rule. Pure, never raises."""
    try:
        if not isinstance(candidate, Mapping):
            return ValidationResult(errors=(GENERIC_VALIDATION_ERROR,))
        if current_year is None:
            current_year = datetime.now(timezone.utc).year
        errors = (
            _check_full_name(candidate)
            + _check_year(candidate, min_year, current_year + 1)
            + _check_major(candidate)
            + _check_lengths(candidate)
        )
        return ValidationResult(errors=tuple(errors))
    except Exception:
        logger.error("Unexpected failure while validating record", exc_info=True)
        return ValidationResult(errors=(GENERIC_VALIDATION_ERROR,))


def parse_year(value: Any) -> int | None:
    """Parse a string-encoded or integer year. Returns None when not an integer."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    return None


def normalize_record(candidate: Mapping[str, Any]) -> Record:
    """Project a validated candidate onto the persisted shape: known fields, all strings.

    Text is stripped and an integer year is stored in canonical form, so equal
    values group under one report key.
    """
    record = {}
    for name in RECORD_FIELDS:
        value = candidate.get(name)
        record[name] = "" if value is None else _as_text(value).strip()
    year = parse_year(candidate.get(FIELD_YEAR))
    if year is not None:
        record[FIELD_YEAR] = str(year)
    return record


# ─── Rules ───────────────────────────────────────────────────────

def _check_full_name(candidate: Mapping[str, Any]) -> list[str]:
    name = _as_text(candidate.get(FIELD_FULL_NAME))
    if name is None or len(name.strip()) < MIN_FULL_NAME_LENGTH:
        return [
            f"Full name is required and must be at least "
            f"{MIN_FULL_NAME_LENGTH} characters"
        ]
    return []


def _check_year(candidate: Mapping[str, Any], min_year: int, max_year: int) -> list[str]:
    raw = candidate.get(FIELD_YEAR)
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return ["Graduation year is required"]
    year = parse_year(raw)
    if year is None or not min_year <= year <= max_year:
        return [f"Graduation year must be a whole number between {min_year} and {max_year}"]
    return []


def _check_major(candidate: Mapping[str, Any]) -> list[str]:
    major = _as_text(candidate.get(FIELD_MAJOR))
    if major is None or not major.strip():
        return ["Major is required"]
    return []


def _check_lengths(candidate: Mapping[str, Any]) -> list[str]:
    errors = []
    for name in LENGTH_LIMITED_FIELDS:
        value = _as_text(candidate.get(name))
        if value is not None and len(value) > MAX_FIELD_LENGTH:
            errors.append(
                f"{_FIELD_LABELS[name]} must be at most {MAX_FIELD_LENGTH} characters"
            )
    return errors


def _as_text(value: Any) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)
