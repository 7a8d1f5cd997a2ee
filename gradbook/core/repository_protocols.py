"""Boundary Protocols: contracts between core and shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Sync, not async: the record manager is single-threaded request/response work
      over one small blob, no operation suspends
"""

from dataclasses import dataclass, field
from typing import Protocol, Sequence

from gradbook.core.domain_types import Record


@dataclass
class StoreSnapshot:
    """Collection as read from the store, plus whether a corrupt blob was discarded."""
    items: list[Record] = field(default_factory=list)
    corrupted: bool = False


class KeyValueSlot(Protocol):
    """Contract for a persistent key-value backend holding serialized blobs."""
    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def remove(self, key: str) -> None: ...


class RecordStore(Protocol):
    """Contract for whole-collection persistence, implemented by shell."""
    def load(self) -> StoreSnapshot: ...
    def load_all(self) -> list[Record]: ...
    def save_all(self, items: Sequence[Record]) -> bool: ...
