"""Demo Seeding: fills an empty collection with sample graduates on startup.

Invariants:
    - Never touches a non-empty collection
    - All demo records are written in a single store write
"""

import logging

from gradbook.core.demo_data import DEMO_GRADUATES
from gradbook.services.graduate_repository import GraduateRepository

logger = logging.getLogger(__name__)


def seed_demo_records(repository: GraduateRepository) -> int:
    """Seed demo graduates if the collection is empty. Returns the number written."""
    result = repository.seed_if_empty(DEMO_GRADUATES)
    if not result.ok:
        logger.warning(
            f"Demo seeding skipped: {'; '.join(result.errors)}",
            extra={"operation": "seed", "error_code": result.error_code},
        )
        return 0
    if result.value:
        logger.info(f"Seeded {result.value} demo graduates", extra={"operation": "seed"})
    return result.value
