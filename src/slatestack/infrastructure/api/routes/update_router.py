"""Update-check API routes."""

from fastapi import APIRouter, Query

from slatestack.infrastructure.api.dependencies import UpdateServiceDep
from slatestack.infrastructure.api.schemas import (
    ChangelogResponse,
    ErrorResponse,
    UpdateCheckResponse,
)

router = APIRouter()

_UPSTREAM_ERRORS = {
    429: {"model": ErrorResponse, "description": "Release API rate limit reached"},
    503: {"model": ErrorResponse, "description": "Release API unavailable"},
}


@router.get("/check", response_model=UpdateCheckResponse, responses=_UPSTREAM_ERRORS)
async def check_for_updates(service: UpdateServiceDep) -> UpdateCheckResponse:
    """Compare the running version with the latest published release."""
    result = await service.check_for_updates()
    return UpdateCheckResponse.from_result(result)


@router.get("/changelog", response_model=ChangelogResponse, responses=_UPSTREAM_ERRORS)
async def get_changelog(
    service: UpdateServiceDep,
    limit: int = Query(default=10, ge=1, le=50, description="Number of releases"),
) -> ChangelogResponse:
    """Return notes for the most recent stable releases."""
    notes = await service.get_changelog(limit=limit)
    return ChangelogResponse.from_notes(notes)
