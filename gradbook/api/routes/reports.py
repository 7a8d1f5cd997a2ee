"""Report Routes: grouped counts by year, major and status.

Invariants:
    - Only the standard ReportField values are exposed over HTTP
    - Reports are read-only over whatever the store currently holds
"""

import logging

from fastapi import APIRouter, Depends

from gradbook.api.dependencies import get_repository
from gradbook.api.outcomes import unwrap
from gradbook.core.domain_types import ReportField
from gradbook.core.errors import UnknownReportFieldError
from gradbook.schemas.graduate import ReportEntry, ReportsResponse
from gradbook.services.graduate_repository import GraduateRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/reports", tags=["reports"])


def _entries(rows: list[tuple[str, int]]) -> list[ReportEntry]:
    return [ReportEntry(key=key, count=count) for key, count in rows]


@router.get("", response_model=ReportsResponse)
def get_standard_reports(repo: GraduateRepository = Depends(get_repository)):
    """All three standard reports from one read of the collection."""
    result = unwrap(repo.standard_reports(), "standard_reports")
    reports = result.value
    return ReportsResponse(
        year=_entries(reports[ReportField.YEAR.value]),
        major=_entries(reports[ReportField.MAJOR.value]),
        status=_entries(reports[ReportField.STATUS.value]),
        notices=list(result.notices),
    )


@router.get("/{field_name}", response_model=list[ReportEntry])
def get_report(field_name: str, repo: GraduateRepository = Depends(get_repository)):
    allowed = [f.value for f in ReportField]
    if field_name not in allowed:
        raise UnknownReportFieldError(field_name, allowed)
    result = unwrap(repo.report(field_name), "report")
    return _entries(result.value)
