"""Pydantic schemas for API requests and responses."""

from slatestack.infrastructure.api.schemas.collection_schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    FieldDefinitionSchema,
    UpdateCollectionRequest,
)
from slatestack.infrastructure.api.schemas.common_schemas import (
    ErrorResponse,
    FieldErrorDetail,
    PaginationMeta,
)
from slatestack.infrastructure.api.schemas.entry_schemas import (
    CreateEntryRequest,
    EntryListResponse,
    EntryResponse,
    ReorderEntriesRequest,
    UpdateEntryRequest,
)
from slatestack.infrastructure.api.schemas.update_schemas import (
    ChangelogResponse,
    ReleaseNoteResponse,
    UpdateCheckResponse,
)

__all__ = [
    "ChangelogResponse",
    "CollectionResponse",
    "CreateCollectionRequest",
    "CreateEntryRequest",
    "EntryListResponse",
    "EntryResponse",
    "ErrorResponse",
    "FieldDefinitionSchema",
    "FieldErrorDetail",
    "PaginationMeta",
    "ReleaseNoteResponse",
    "ReorderEntriesRequest",
    "UpdateCheckResponse",
    "UpdateCollectionRequest",
    "UpdateEntryRequest",
]
