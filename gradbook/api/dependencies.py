"""Dependency Wiring: builds the configured slot backend and the repository singleton.

Invariants:
    - Exactly one GraduateRepository per process (initialized via init_repository)
    - The SQL backend creates its table on init; file and memory backends need no setup

Design Decisions:
    - Singleton initialized on startup: FastAPI lifespan manages lifecycle
      (ADR: no global import side effects)
    - get_repository is the FastAPI dependency; tests override it with an in-memory store
"""

import logging

from gradbook.config import Settings, get_settings
from gradbook.core.repository_protocols import KeyValueSlot
from gradbook.infrastructure.database import DatabaseSessionManager
from gradbook.infrastructure.record_store import JsonRecordStore
from gradbook.infrastructure.slots import FileSlot, InMemorySlot, SqlSlot
from gradbook.services.graduate_repository import GraduateRepository

logger = logging.getLogger(__name__)


# Singletons (initialized on startup)
repository: GraduateRepository | None = None
slot: KeyValueSlot | None = None
db_manager: DatabaseSessionManager | None = None


def build_slot(settings: Settings) -> KeyValueSlot:
    """Instantiate the slot backend named by settings.storage_backend."""
    global db_manager
    if settings.storage_backend == "memory":
        return InMemorySlot(quota_bytes=settings.memory_quota_bytes)
    if settings.storage_backend == "sql":
        db_manager = DatabaseSessionManager(settings.database_url)
        db_manager.create_all()
        return SqlSlot(db_manager)
    return FileSlot(settings.storage_dir)


def init_repository(settings: Settings) -> GraduateRepository:
    global repository, slot
    slot = build_slot(settings)
    store = JsonRecordStore(slot, key=settings.storage_key)
    repository = GraduateRepository(store, min_year=settings.min_graduation_year)
    logger.info(
        f"Storage initialized ({settings.storage_backend})",
        extra={"storage_key": settings.storage_key},
    )
    return repository


def close_repository() -> None:
    global repository, slot, db_manager
    if db_manager:
        db_manager.dispose()
    repository = None
    slot = None
    db_manager = None


def get_repository() -> GraduateRepository:
    """FastAPI dependency for the graduate repository."""
    if not repository:
        raise RuntimeError("Storage not initialized")
    return repository


def storage_ready() -> bool:
    """Readiness: the backing slot can be read."""
    if not repository or not slot:
        return False
    if db_manager:
        return db_manager.health_check()
    try:
        slot.get(get_settings().storage_key)
        return True
    except Exception as e:
        logger.error(f"Storage readiness check failed: {e}")
        return False
