"""API test fixtures: FastAPI test client over an in-memory record store.

Invariants:
    - Every test gets a fresh InMemorySlot
    - get_repository dependency overridden; the app lifespan does not run

Design Decisions:
    - Slot exposed as a fixture so tests can plant corrupt blobs directly
"""

import pytest
from httpx import ASGITransport, AsyncClient

from gradbook.api import dependencies
from gradbook.api.dependencies import get_repository
from gradbook.infrastructure.record_store import JsonRecordStore
from gradbook.infrastructure.slots import InMemorySlot
from gradbook.main import app
from gradbook.services.graduate_repository import GraduateRepository

CURRENT_YEAR = 2026


@pytest.fixture
def slot():
    return InMemorySlot()


@pytest.fixture
def repository(slot):
    return GraduateRepository(JsonRecordStore(slot), current_year=lambda: CURRENT_YEAR)


@pytest.fixture
async def client(repository, slot, monkeypatch):
    """FastAPI test client with the repository dependency overridden."""
    app.dependency_overrides[get_repository] = lambda: repository
    monkeypatch.setattr(dependencies, "repository", repository)
    monkeypatch.setattr(dependencies, "slot", slot)

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
def graduate_payload():
    return {
        "fullName": "Ann Lee",
        "year": "2023",
        "major": "CS",
        "company": "Acme",
        "position": "Engineer",
        "status": "Employed",
    }
