"""Domain services for Slatestack.

Services contain business logic that doesn't naturally fit within a single entity.
"""

from slatestack.domain.services.collection_validator import (
    CollectionValidationError,
    CollectionValidator,
)
from slatestack.domain.services.entry_validator import (
    EntryValidationError,
    EntryValidationResult,
    EntryValidator,
)
from slatestack.domain.services.slug_generator import SlugGenerator
from slatestack.domain.services.collection_service import CollectionService
from slatestack.domain.services.entry_service import EntryService

__all__ = [
    "CollectionService",
    "CollectionValidationError",
    "CollectionValidator",
    "EntryService",
    "EntryValidationError",
    "EntryValidationResult",
    "EntryValidator",
    "SlugGenerator",
]
