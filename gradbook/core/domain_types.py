"""Domain Types: record shape, field names and bounds shared across the codebase.

Invariants:
    - A persisted Record is a dict with exactly the RECORD_FIELDS keys, all string values
    - RecordId is the sole identity key for upsert/remove
    - NO_VALUE ("—") is the single placeholder for missing/empty report keys
    - Report fields encoded as an Enum, no raw string matching

Design Decisions:
    - Records stay plain dicts with camelCase keys: the persisted JSON layout is the
      domain model, no mapping layer between core and storage (ADR: one blob, one shape)
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import Any, NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", str)

Record = dict[str, str]
RecordCandidate = dict[str, Any]


# ─── Record Fields ───────────────────────────────────────────────

FIELD_ID = "id"
FIELD_FULL_NAME = "fullName"
FIELD_YEAR = "year"
FIELD_MAJOR = "major"
FIELD_COMPANY = "company"
FIELD_POSITION = "position"
FIELD_STATUS = "status"

RECORD_FIELDS: tuple[str, ...] = (
    FIELD_ID, FIELD_FULL_NAME, FIELD_YEAR, FIELD_MAJOR,
    FIELD_COMPANY, FIELD_POSITION, FIELD_STATUS,
)

# Fields subject to the 255-character ceiling
LENGTH_LIMITED_FIELDS: tuple[str, ...] = (
    FIELD_FULL_NAME, FIELD_COMPANY, FIELD_POSITION,
)


# ─── Bounds ──────────────────────────────────────────────────────

MIN_FULL_NAME_LENGTH: int = 2
MAX_FIELD_LENGTH: int = 255
MIN_GRADUATION_YEAR: int = 2000

DEFAULT_STORAGE_KEY: str = "ais_graduates_v1"
NO_VALUE: str = "—"


# ─── Enums ───────────────────────────────────────────────────────

class ReportField(str, Enum):
    """The three standard reports rendered after every change."""
    YEAR = FIELD_YEAR
    MAJOR = FIELD_MAJOR
    STATUS = FIELD_STATUS
