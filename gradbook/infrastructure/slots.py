"""Key-Value Slots: persistent backends that hold one serialized blob per key.

Invariants:
    - set() replaces the whole value in a single write; readers never see a partial value
    - get() returns None for an absent key, never raises for absence
    - Failures propagate as exceptions; JsonRecordStore turns them into outcomes

Design Decisions:
    - Three backends behind the KeyValueSlot protocol: memory (tests, quota modelling),
      file (default, single-user desktop/server), SQL (shared database deployments)
    - FileSlot writes to a temp file then os.replace: atomic on POSIX and Windows
    - SqlSlot writes with one INSERT .. ON CONFLICT statement where the dialect has it
"""

import logging
import os
import re
import tempfile
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import delete
from sqlalchemy.dialects import postgresql, sqlite

from gradbook.core.errors import StorageQuotaExceededError
from gradbook.infrastructure.database import DatabaseSessionManager
from gradbook.models.storage_slot import StorageSlot

logger = logging.getLogger(__name__)

_SAFE_KEY = re.compile(r"[A-Za-z0-9_.-]+")

_UPSERT_INSERTS = {"sqlite": sqlite.insert, "postgresql": postgresql.insert}


class InMemorySlot:
    """Dict-backed slot with an optional byte quota across all keys."""

    def __init__(self, quota_bytes: int | None = None):
        self.quota_bytes = quota_bytes
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.quota_bytes is not None:
            others = sum(
                len(v.encode("utf-8")) for k, v in self._data.items() if k != key
            )
            size = others + len(value.encode("utf-8"))
            if size > self.quota_bytes:
                raise StorageQuotaExceededError(key, size, self.quota_bytes)
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class FileSlot:
    """One UTF-8 file per key inside a directory."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not _SAFE_KEY.fullmatch(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self.path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self.path_for(key)
        self.directory.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=self.directory, prefix=f".{key}.", suffix=".tmp",
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as fh:
                fh.write(value)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def remove(self, key: str) -> None:
        self.path_for(key).unlink(missing_ok=True)


class SqlSlot:
    """One row per key in the storage_slots table."""

    def __init__(self, db: DatabaseSessionManager):
        self.db = db

    def get(self, key: str) -> str | None:
        with self.db.session() as session:
            row = session.get(StorageSlot, key)
            return row.value if row else None

    def set(self, key: str, value: str) -> None:
        """INSERT .. ON CONFLICT DO UPDATE on SQLite/PostgreSQL; merge elsewhere."""
        with self.db.session() as session:
            insert = _UPSERT_INSERTS.get(session.get_bind().dialect.name)
            if insert is None:
                session.merge(StorageSlot(key=key, value=value))
            else:
                now = datetime.now(timezone.utc)
                stmt = insert(StorageSlot).values(key=key, value=value, updated_at=now)
                session.execute(stmt.on_conflict_do_update(
                    index_elements=["key"],
                    set_={"value": stmt.excluded.value, "updated_at": now},
                ))
            session.commit()

    def remove(self, key: str) -> None:
        with self.db.session() as session:
            session.execute(delete(StorageSlot).where(StorageSlot.key == key))
            session.commit()
