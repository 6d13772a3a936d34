"""Entries API routes.

Admin endpoints for the entries of a collection. Mounted under the
collections prefix, so every path starts with ``/{collection_id}/entries``.
"""

from fastapi import APIRouter, Query, Response, status

from slatestack.domain.entities import EntryStatus
from slatestack.infrastructure.api.dependencies import EntryServiceDep
from slatestack.infrastructure.api.schemas import (
    CreateEntryRequest,
    EntryListResponse,
    EntryResponse,
    ErrorResponse,
    ReorderEntriesRequest,
    UpdateEntryRequest,
)

router = APIRouter()


@router.post(
    "/{collection_id}/entries",
    status_code=status.HTTP_201_CREATED,
    response_model=EntryResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Collection not found"},
        409: {"model": ErrorResponse, "description": "Slug taken by a concurrent write"},
    },
)
async def create_entry(
    collection_id: str,
    request: CreateEntryRequest,
    service: EntryServiceDep,
) -> EntryResponse:
    """Create an entry; status defaults to draft."""
    entry = await service.create_entry(collection_id, request.data, status=request.status)
    return EntryResponse.from_entity(entry)


@router.get(
    "/{collection_id}/entries",
    response_model=EntryListResponse,
    responses={404: {"model": ErrorResponse, "description": "Collection not found"}},
)
async def list_entries(
    collection_id: str,
    service: EntryServiceDep,
    entry_status: EntryStatus | None = Query(default=None, alias="status"),
    q: str | None = Query(default=None, description="Search slug and data"),
    page: int = Query(default=1, ge=1, description="Page number"),
    limit: int = Query(default=20, ge=1, le=100, description="Items per page"),
) -> EntryListResponse:
    """List entries by position, newest first within a position."""
    entries, total = await service.list_entries(
        collection_id, status=entry_status, search=q, page=page, limit=limit
    )
    return EntryListResponse.build(entries, page=page, limit=limit, total=total)


@router.post(
    "/{collection_id}/entries/reorder",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={
        400: {"model": ErrorResponse, "description": "An ID is listed more than once"},
        404: {"model": ErrorResponse, "description": "Collection or entry not found"},
    },
)
async def reorder_entries(
    collection_id: str,
    request: ReorderEntriesRequest,
    service: EntryServiceDep,
) -> Response:
    """Assign ``position = index`` to each listed entry in one transaction."""
    await service.reorder_entries(collection_id, request.ordered_ids)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{collection_id}/entries/{entry_id}",
    response_model=EntryResponse,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
)
async def get_entry(collection_id: str, entry_id: str, service: EntryServiceDep) -> EntryResponse:
    entry = await service.get_entry(collection_id, entry_id)
    return EntryResponse.from_entity(entry)


@router.patch(
    "/{collection_id}/entries/{entry_id}",
    response_model=EntryResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Validation failed"},
        404: {"model": ErrorResponse, "description": "Entry not found"},
        409: {"model": ErrorResponse, "description": "Slug taken by a concurrent write"},
    },
)
async def update_entry(
    collection_id: str,
    entry_id: str,
    request: UpdateEntryRequest,
    service: EntryServiceDep,
) -> EntryResponse:
    """Partially update an entry; ``data`` is merged onto the stored data."""
    entry = await service.update_entry(
        collection_id,
        entry_id,
        data=request.data,
        status=request.status,
        position=request.position,
    )
    return EntryResponse.from_entity(entry)


@router.delete(
    "/{collection_id}/entries/{entry_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Entry not found"}},
)
async def delete_entry(collection_id: str, entry_id: str, service: EntryServiceDep) -> Response:
    await service.delete_entry(collection_id, entry_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
