"""Pydantic schemas for entry endpoints.

Entry data is dynamic, shaped by the collection's field definitions, so
it is accepted as a free-form object here and validated by the service.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from slatestack.domain.entities import Entry, EntryStatus
from slatestack.infrastructure.api.schemas.common_schemas import CamelModel, PaginationMeta


class CreateEntryRequest(CamelModel):
    """Request body for creating an entry."""

    data: dict[str, Any]
    status: EntryStatus | None = None


class UpdateEntryRequest(CamelModel):
    """Request body for partially updating an entry."""

    data: dict[str, Any] | None = None
    status: EntryStatus | None = None
    position: int | None = Field(default=None, ge=0)


class ReorderEntriesRequest(CamelModel):
    """Request body for reordering entries."""

    ordered_ids: list[str]


class EntryResponse(CamelModel):
    """A single entry."""

    id: str
    collection_id: str
    slug: str
    data: dict[str, Any]
    status: EntryStatus
    position: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, entry: Entry) -> "EntryResponse":
        return cls(
            id=entry.id,
            collection_id=entry.collection_id,
            slug=entry.slug,
            data=entry.data,
            status=entry.status,
            position=entry.position,
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class EntryListResponse(CamelModel):
    """Paginated list of entries."""

    data: list[EntryResponse]
    meta: PaginationMeta

    @classmethod
    def build(cls, entries: list[Entry], page: int, limit: int, total: int) -> "EntryListResponse":
        return cls(
            data=[EntryResponse.from_entity(e) for e in entries],
            meta=PaginationMeta(
                page=page,
                limit=limit,
                total=total,
                total_pages=(total + limit - 1) // limit,
            ),
        )
