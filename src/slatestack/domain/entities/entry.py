"""Entry entity: one record of a collection's dynamic data."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from slatestack.domain.entities.collection import utcnow


class EntryStatus(str, Enum):
    """Workflow status of an entry."""

    DRAFT = "draft"
    PUBLISHED = "published"


@dataclass
class Entry:
    """Entry entity.

    Attributes:
        id: Unique identifier.
        collection_id: Owning collection; immutable after creation.
        slug: URL-safe identifier, unique within the collection.
        data: Field values keyed by field name.
        status: Draft or published.
        position: Manual ordering index.
        created_at: Creation timestamp.
        updated_at: Last modification timestamp.
    """

    id: str
    collection_id: str
    slug: str
    data: dict[str, Any] = field(default_factory=dict)
    status: EntryStatus = EntryStatus.DRAFT
    position: int = 0
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)
