"""Key-Value Slots: tests for memory, file and SQL backends.

Tests cover:
    - get/set/remove round trip for each backend
    - InMemorySlot quota raises StorageQuotaExceededError and keeps the old value
    - FileSlot writes atomically (no temp files left) and rejects unsafe keys
    - SqlSlot upserts a single row per key
"""

import pytest

from sqlalchemy import event, func, select

from gradbook.core.errors import StorageQuotaExceededError
from gradbook.infrastructure.database import DatabaseSessionManager
from gradbook.infrastructure.slots import FileSlot, InMemorySlot, SqlSlot
from gradbook.models.storage_slot import StorageSlot


@pytest.fixture
def sql_slot():
    db = DatabaseSessionManager("sqlite://")
    db.create_all()
    yield SqlSlot(db)
    db.dispose()


@pytest.fixture(params=["memory", "file", "sql"])
def slot(request, tmp_path):
    if request.param == "memory":
        return InMemorySlot()
    if request.param == "file":
        return FileSlot(tmp_path / "store")
    return request.getfixturevalue("sql_slot")


def test_absent_key_reads_none(slot):
    assert slot.get("missing") is None


def test_set_then_get_returns_value(slot):
    slot.set("k", "[1, 2]")
    assert slot.get("k") == "[1, 2]"


def test_set_replaces_previous_value(slot):
    slot.set("k", "old")
    slot.set("k", "new")
    assert slot.get("k") == "new"


def test_remove_clears_value_and_is_idempotent(slot):
    slot.set("k", "v")
    slot.remove("k")
    slot.remove("k")
    assert slot.get("k") is None


def test_unicode_survives(slot):
    slot.set("k", '["Иванов Иван"]')
    assert slot.get("k") == '["Иванов Иван"]'


# ─── InMemorySlot ────────────────────────────────────────────────

def test_quota_exceeded_raises_and_keeps_old_value():
    slot = InMemorySlot(quota_bytes=10)
    slot.set("k", "12345")
    with pytest.raises(StorageQuotaExceededError):
        slot.set("k", "x" * 11)
    assert slot.get("k") == "12345"


def test_quota_counts_other_keys():
    slot = InMemorySlot(quota_bytes=10)
    slot.set("a", "123456")
    with pytest.raises(StorageQuotaExceededError):
        slot.set("b", "12345")


# ─── FileSlot ────────────────────────────────────────────────────

def test_file_slot_leaves_no_temp_files(tmp_path):
    slot = FileSlot(tmp_path)
    slot.set("graduates", "[]")
    assert [p.name for p in tmp_path.iterdir()] == ["graduates.json"]


def test_file_slot_rejects_path_traversal(tmp_path):
    slot = FileSlot(tmp_path)
    with pytest.raises(ValueError):
        slot.set("../escape", "[]")


# ─── SqlSlot ─────────────────────────────────────────────────────

def test_sql_slot_overwrite_is_one_statement_and_one_row(sql_slot):
    sql_slot.set("k", "old")
    statements = []

    def record(conn, cursor, statement, parameters, context, executemany):
        if not statement.lstrip().upper().startswith(("BEGIN", "COMMIT")):
            statements.append(statement)

    event.listen(sql_slot.db.engine, "before_cursor_execute", record)
    try:
        sql_slot.set("k", "new")
    finally:
        event.remove(sql_slot.db.engine, "before_cursor_execute", record)

    assert len(statements) == 1
    assert "ON CONFLICT" in statements[0].upper()
    with sql_slot.db.session() as session:
        assert session.scalar(select(func.count()).select_from(StorageSlot)) == 1
    assert sql_slot.get("k") == "new"
