"""Graduate Repository: upsert/remove/list/report over an in-memory store.

Tests cover:
    - Idempotent upsert: same record twice leaves exactly one equal copy
    - Update preserves position; create appends
    - Invalid candidates return every violation and leave storage untouched
    - Uniqueness of ids across arbitrary upsert sequences
    - remove of an unknown id fails with NOT_FOUND and writes nothing
    - Write failures surface as WRITE_FAILED with prior state unchanged
    - Corruption resets surface as notices, not failures
    - Unexpected exceptions become INTERNAL_ERROR results
"""

import threading

import pytest

from gradbook.core.domain_types import DEFAULT_STORAGE_KEY, NO_VALUE
from gradbook.core.results import NOTICE_STORAGE_RESET
from gradbook.infrastructure.record_store import JsonRecordStore
from gradbook.infrastructure.slots import InMemorySlot
from gradbook.services.graduate_repository import GraduateRepository

CURRENT_YEAR = 2026


def _record(record_id, name="Ann Lee", year="2023", major="CS", **extra):
    base = {
        "id": record_id, "fullName": name, "year": year, "major": major,
        "company": "", "position": "", "status": "",
    }
    base.update(extra)
    return base


@pytest.fixture
def slot():
    return InMemorySlot()


@pytest.fixture
def repo(slot):
    return GraduateRepository(JsonRecordStore(slot), current_year=lambda: CURRENT_YEAR)


class _FailingStore:
    """Store whose writes always fail after the first `allowed` saves."""

    def __init__(self, allowed=0):
        self.inner = JsonRecordStore(InMemorySlot())
        self.allowed = allowed

    def load(self):
        return self.inner.load()

    def load_all(self):
        return self.inner.load_all()

    def save_all(self, items):
        if self.allowed <= 0:
            return False
        self.allowed -= 1
        return self.inner.save_all(items)


# ─── upsert ──────────────────────────────────────────────────────

def test_upsert_twice_keeps_one_equal_record(repo):
    record = _record("g_1")
    assert repo.upsert(record).ok
    assert repo.upsert(record).ok
    assert repo.list_records().value == [record]


def test_upsert_appends_new_records_in_order(repo):
    repo.upsert(_record("g_1"))
    repo.upsert(_record("g_2", name="Bob Ray"))
    assert [r["id"] for r in repo.list_records().value] == ["g_1", "g_2"]


def test_update_preserves_position(repo):
    for rid in ("g_1", "g_2", "g_3"):
        repo.upsert(_record(rid))
    repo.upsert(_record("g_2", name="Changed Name"))
    items = repo.list_records().value
    assert [r["id"] for r in items] == ["g_1", "g_2", "g_3"]
    assert items[1]["fullName"] == "Changed Name"


def test_ids_stay_unique_across_upserts(repo):
    for i in range(20):
        repo.upsert(_record(f"g_{i % 5}", name=f"Name {i}"))
    ids = [r["id"] for r in repo.list_records().value]
    assert len(ids) == len(set(ids)) == 5


def test_upsert_returns_stored_record(repo):
    result = repo.upsert({"id": "g_1", "fullName": "Ann Lee", "year": 2024, "major": "CS"})
    assert result.ok
    assert result.value == _record("g_1", year="2024")


def test_upsert_without_id_generates_one(repo):
    result = repo.upsert({"fullName": "Ann Lee", "year": "2023", "major": "CS"})
    assert result.ok
    assert result.value["id"].startswith("g_")
    assert repo.list_records().value[0]["id"] == result.value["id"]


def test_invalid_upsert_reports_all_errors_and_skips_storage(repo, slot):
    result = repo.upsert({"id": "g_1"})
    assert not result.ok
    assert result.error_code == "VALIDATION_ERROR"
    assert len(result.errors) == 3
    assert slot.get(DEFAULT_STORAGE_KEY) is None


def test_year_bound_uses_injected_clock(repo):
    assert repo.upsert(_record("g_1", year=str(CURRENT_YEAR + 1))).ok
    assert not repo.upsert(_record("g_2", year=str(CURRENT_YEAR + 2))).ok


def test_write_failure_is_reported():
    repo = GraduateRepository(_FailingStore(allowed=1), current_year=lambda: CURRENT_YEAR)
    assert repo.upsert(_record("g_1")).ok
    result = repo.upsert(_record("g_2"))
    assert not result.ok
    assert result.error_code == "WRITE_FAILED"
    assert [r["id"] for r in repo.list_records().value] == ["g_1"]


def test_quota_exceeded_leaves_prior_state():
    slot = InMemorySlot(quota_bytes=400)
    repo = GraduateRepository(JsonRecordStore(slot), current_year=lambda: CURRENT_YEAR)
    assert repo.upsert(_record("g_1")).ok
    result = repo.upsert(_record("g_2", position="x" * 250))
    assert result.error_code == "WRITE_FAILED"
    assert repo.list_records().value == [_record("g_1")]


def test_upsert_over_corrupt_storage_adds_notice(repo, slot):
    slot.set(DEFAULT_STORAGE_KEY, "garbage")
    result = repo.upsert(_record("g_1"))
    assert result.ok
    assert result.notices == (NOTICE_STORAGE_RESET,)
    assert repo.list_records().value == [_record("g_1")]


# ─── remove ──────────────────────────────────────────────────────

def test_remove_deletes_matching_record(repo):
    repo.upsert(_record("g_1"))
    repo.upsert(_record("g_2"))
    assert repo.remove("g_1").ok
    assert [r["id"] for r in repo.list_records().value] == ["g_2"]


def test_remove_unknown_id_fails_without_writing(repo, slot):
    repo.upsert(_record("g_1"))
    before = slot.get(DEFAULT_STORAGE_KEY)
    result = repo.remove("nonexistent-id")
    assert not result.ok
    assert result.error_code == "NOT_FOUND"
    assert slot.get(DEFAULT_STORAGE_KEY) == before


def test_remove_write_failure_is_reported():
    store = _FailingStore(allowed=1)
    repo = GraduateRepository(store, current_year=lambda: CURRENT_YEAR)
    repo.upsert(_record("g_1"))
    result = repo.remove("g_1")
    assert result.error_code == "WRITE_FAILED"
    assert len(repo.list_records().value) == 1


# ─── queries ─────────────────────────────────────────────────────

def test_list_reports_corruption_as_notice(repo, slot):
    slot.set(DEFAULT_STORAGE_KEY, '{"not": "a list"}')
    result = repo.list_records()
    assert result.ok
    assert result.value == []
    assert result.notices == (NOTICE_STORAGE_RESET,)
    assert repo.list_records().notices == ()


def test_get_returns_record_or_not_found(repo):
    repo.upsert(_record("g_1"))
    assert repo.get("g_1").value["id"] == "g_1"
    assert repo.get("g_9").error_code == "NOT_FOUND"


def test_report_groups_by_field(repo):
    for i, year in enumerate(["2023", "2022", "2024", "2021"]):
        repo.upsert(_record(f"g_{i}", year=year))
    assert repo.report("year").value == [
        ("2021", 1), ("2022", 1), ("2023", 1), ("2024", 1),
    ]


def test_standard_reports_cover_year_major_status(repo):
    repo.upsert(_record("g_1", status="Employed"))
    repo.upsert(_record("g_2", major="Design"))
    reports = repo.standard_reports().value
    assert set(reports) == {"year", "major", "status"}
    assert reports["major"] == [("CS", 1), ("Design", 1)]
    assert reports["status"] == [("Employed", 1), (NO_VALUE, 1)]


# ─── failure boundary ────────────────────────────────────────────

def test_unexpected_exception_becomes_internal_error():
    class ExplodingStore:
        def load(self):
            raise RuntimeError("boom")

    repo = GraduateRepository(ExplodingStore())
    for result in (
        repo.list_records(), repo.remove("g_1"), repo.report("year"),
        repo.upsert(_record("g_1")),
    ):
        assert not result.ok
        assert result.error_code == "INTERNAL_ERROR"


def test_concurrent_upserts_keep_every_record(repo):
    def worker(start):
        for i in range(start, start + 25):
            repo.upsert(_record(f"g_{i}"))

    threads = [threading.Thread(target=worker, args=(n * 25,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(repo.list_records().value) == 100


# ─── seeding ─────────────────────────────────────────────────────

def test_seed_if_empty_writes_once(repo):
    candidates = [
        {"fullName": "Ann Lee", "year": "2023", "major": "CS"},
        {"fullName": "Bob Ray", "year": "2022", "major": "Math"},
    ]
    assert repo.seed_if_empty(candidates).value == 2
    assert repo.seed_if_empty(candidates).value == 0
    assert len(repo.list_records().value) == 2


def test_seed_rejects_invalid_candidates(repo):
    result = repo.seed_if_empty([{"fullName": "X"}])
    assert result.error_code == "VALIDATION_ERROR"
    assert repo.list_records().value == []


def test_padded_year_and_major_group_with_clean_values(repo):
    repo.upsert(_record("g_1", year="2023", major="CS"))
    repo.upsert(_record("g_2", year=" 2023 ", major="CS "))
    assert repo.report("year").value == [("2023", 2)]
    assert repo.report("major").value == [("CS", 2)]


def test_full_width_year_is_rejected(repo, slot):
    result = repo.upsert(_record("g_1", year="２０２３"))
    assert result.error_code == "VALIDATION_ERROR"
    assert slot.get(DEFAULT_STORAGE_KEY) is None
