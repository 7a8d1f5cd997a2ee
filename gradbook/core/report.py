"""Grouped Reports: frequency counts over one field of the record collection.

Invariants:
    - compute_report is PURE and deterministic for a given input multiset
    - Missing, None or empty values are grouped under NO_VALUE ("—")
    - Output is sorted ascending by collation key; ties broken by the raw string
    - Never raises: non-sequence input yields [(NO_VALUE, 0)]

Design Decisions:
    - Collation via NFKD + accent stripping + casefold: locale-aware ordering without
      depending on the process locale (setlocale is global and not thread-safe)
"""

import unicodedata
from collections import Counter
from typing import Any, Mapping

from gradbook.core.domain_types import NO_VALUE

ReportRow = tuple[str, int]

NO_DATA: list[ReportRow] = [(NO_VALUE, 0)]


def compute_report(items: Any, field_name: str) -> list[ReportRow]:
    """Count records per distinct value of field_name, sorted by key."""
    if not isinstance(items, (list, tuple)):
        return list(NO_DATA)
    counts = Counter(_group_key(item, field_name) for item in items)
    return sorted(counts.items(), key=lambda row: collation_key(row[0]))


def collation_key(value: str) -> tuple[str, str]:
    """Sort key approximating locale-aware comparison: accents and case are secondary."""
    decomposed = unicodedata.normalize("NFKD", value)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), value


def _group_key(item: Any, field_name: str) -> str:
    if not isinstance(item, Mapping):
        return NO_VALUE
    value = item.get(field_name)
    if value is None or value == "":
        return NO_VALUE
    return str(value)
