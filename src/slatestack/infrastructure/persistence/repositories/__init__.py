"""Repositories for Slatestack persistence."""

from slatestack.infrastructure.persistence.repositories.collection_repository import (
    CollectionRepository,
)
from slatestack.infrastructure.persistence.repositories.entry_repository import (
    EntryRepository,
)

__all__ = [
    "CollectionRepository",
    "EntryRepository",
]
