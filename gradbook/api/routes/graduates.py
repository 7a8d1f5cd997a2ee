"""Graduate Routes: list, read, create, update and delete graduate records.

Invariants:
    - Every mutation goes through GraduateRepository (validation + single write)
    - POST assigns a fresh id when the body has none; PUT always uses the path id
    - Failures raise GradbookError via unwrap(); global handlers render the envelope

Design Decisions:
    - Plain def handlers: repository IO is synchronous, FastAPI runs them on its
      thread pool and the repository lock serializes load-mutate-save
    - Responses are normalized to the persisted shape so a hand-edited blob with
      missing or non-string fields still renders
"""

import logging

from fastapi import APIRouter, Depends, Response, status

from gradbook.api.dependencies import get_repository
from gradbook.api.outcomes import unwrap
from gradbook.core.enforce_record import normalize_record
from gradbook.core.record_ids import generate_record_id
from gradbook.schemas.graduate import GraduateInput, GraduateList, GraduateResponse
from gradbook.services.graduate_repository import GraduateRepository

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/graduates", tags=["graduates"])


def _to_response(record: dict) -> GraduateResponse:
    return GraduateResponse.model_validate(normalize_record(record))


@router.get("", response_model=GraduateList)
def list_graduates(repo: GraduateRepository = Depends(get_repository)):
    """Full collection in insertion order."""
    result = unwrap(repo.list_records(), "list")
    return GraduateList(
        items=[_to_response(item) for item in result.value],
        notices=list(result.notices),
    )


@router.get("/{record_id}", response_model=GraduateResponse)
def get_graduate(record_id: str, repo: GraduateRepository = Depends(get_repository)):
    """Single record, used to prefill the edit form."""
    result = unwrap(repo.get(record_id), "get", record_id)
    return _to_response(result.value)


@router.post(
    "", response_model=GraduateResponse, status_code=status.HTTP_201_CREATED,
)
def create_graduate(
    body: GraduateInput, repo: GraduateRepository = Depends(get_repository),
):
    """Create a graduate. An id in the body makes this an upsert."""
    candidate = body.to_candidate()
    candidate.setdefault("id", generate_record_id())
    result = unwrap(repo.upsert(candidate), "create", candidate["id"])
    return _to_response(result.value)


@router.put("/{record_id}", response_model=GraduateResponse)
def update_graduate(
    record_id: str,
    body: GraduateInput,
    repo: GraduateRepository = Depends(get_repository),
):
    """Replace the record with record_id, or create it if unseen."""
    candidate = body.to_candidate()
    candidate["id"] = record_id
    result = unwrap(repo.upsert(candidate), "update", record_id)
    return _to_response(result.value)


@router.delete("/{record_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_graduate(record_id: str, repo: GraduateRepository = Depends(get_repository)):
    unwrap(repo.remove(record_id), "remove", record_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
