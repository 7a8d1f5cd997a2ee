"""Record Store: the whole graduate collection as one JSON array in one slot.

Invariants:
    - load()/load_all() never raise; absent slot reads as []
    - A blob that is not JSON, not an array, or holds non-object entries is corruption:
      the slot is removed and [] returned
    - save_all() is one slot write; on any failure it returns False and the previously
      persisted blob is untouched
    - Only the slot under self.key is ever read or written

Design Decisions:
    - Outcomes as bool/StoreSnapshot, not exceptions: the repository composes them into
      OperationResult (ADR: structured outcomes)
    - ensure_ascii=False: Cyrillic names stay readable in the stored blob
"""

import json
import logging
from typing import Sequence

from gradbook.core.domain_types import DEFAULT_STORAGE_KEY, Record
from gradbook.core.repository_protocols import KeyValueSlot, StoreSnapshot

logger = logging.getLogger(__name__)


class JsonRecordStore:
    """Load/save the record collection through a KeyValueSlot."""

    def __init__(self, slot: KeyValueSlot, key: str = DEFAULT_STORAGE_KEY):
        self.slot = slot
        self.key = key

    def load(self) -> StoreSnapshot:
        """Read the collection, resetting the slot when its content is corrupt."""
        try:
            raw = self.slot.get(self.key)
        except Exception:
            logger.error(
                "Failed to read storage slot", exc_info=True,
                extra={"storage_key": self.key, "operation": "load"},
            )
            return StoreSnapshot()
        if raw is None:
            return StoreSnapshot()

        try:
            data = json.loads(raw)
        except ValueError:
            return self._reset("payload is not valid JSON")
        if not isinstance(data, list):
            return self._reset(f"payload is {type(data).__name__}, expected array")
        if not all(isinstance(item, dict) for item in data):
            return self._reset("array contains non-object entries")
        return StoreSnapshot(items=data)

    def load_all(self) -> list[Record]:
        return self.load().items

    def save_all(self, items: Sequence[Record]) -> bool:
        """Serialize and write the full collection. Returns False on any failure."""
        if not isinstance(items, (list, tuple)):
            logger.error(
                f"Refusing to save {type(items).__name__}, expected a sequence of records",
                extra={"storage_key": self.key, "operation": "save"},
            )
            return False
        try:
            blob = json.dumps(list(items), ensure_ascii=False)
        except (TypeError, ValueError) as e:
            logger.error(
                f"Failed to serialize records: {e}",
                extra={"storage_key": self.key, "operation": "save"},
            )
            return False
        try:
            self.slot.set(self.key, blob)
        except Exception as e:
            logger.error(
                f"Failed to write storage slot: {e}",
                extra={"storage_key": self.key, "operation": "save"},
            )
            return False
        return True

    def _reset(self, reason: str) -> StoreSnapshot:
        logger.warning(
            f"Stored records are corrupt ({reason}), resetting to empty",
            extra={"storage_key": self.key, "operation": "load"},
        )
        try:
            self.slot.remove(self.key)
        except Exception:
            logger.error(
                "Failed to clear corrupt storage slot", exc_info=True,
                extra={"storage_key": self.key, "operation": "reset"},
            )
        return StoreSnapshot(corrupted=True)
