"""Public content API routes.

Read-only access to published entries. Collections may be addressed by ID
or by name.
"""

from fastapi import APIRouter, Query

from slatestack.domain.entities import EntryStatus
from slatestack.infrastructure.api.dependencies import CollectionServiceDep, EntryServiceDep
from slatestack.infrastructure.api.schemas import EntryListResponse, EntryResponse, ErrorResponse

router = APIRouter()


@router.get(
    "/{collection}/entries",
    response_model=EntryListResponse,
    responses={404: {"model": ErrorResponse, "description": "Collection not found"}},
)
async def list_published_entries(
    collection: str,
    collections: CollectionServiceDep,
    service: EntryServiceDep,
    page: int = Query(default=1, ge=1, description="Page number"),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
) -> EntryListResponse:
    """List published entries of a collection."""
    resolved = await collections.resolve_collection(collection)
    entries, total = await service.list_entries(
        resolved.id, status=EntryStatus.PUBLISHED, page=page, limit=limit
    )
    return EntryListResponse.build(entries, page=page, limit=limit, total=total)


@router.get(
    "/{collection}/entries/{slug}",
    response_model=EntryResponse,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
)
async def get_published_entry(
    collection: str,
    slug: str,
    collections: CollectionServiceDep,
    service: EntryServiceDep,
) -> EntryResponse:
    """Get a published entry by slug."""
    resolved = await collections.resolve_collection(collection)
    entry = await service.get_published_entry(resolved.id, slug)
    return EntryResponse.from_entity(entry)
