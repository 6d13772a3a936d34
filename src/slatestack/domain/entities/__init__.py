"""Domain entities for Slatestack.

Entities are pure Python dataclasses that represent core business concepts.
They have no dependencies on infrastructure or external frameworks.
"""

from slatestack.domain.entities.collection import Collection
from slatestack.domain.entities.entry import Entry, EntryStatus
from slatestack.domain.entities.field_definition import (
    OPTION_TYPES,
    STRING_LIKE_TYPES,
    FieldDefinition,
    FieldType,
)

__all__ = [
    "Collection",
    "Entry",
    "EntryStatus",
    "FieldDefinition",
    "FieldType",
    "OPTION_TYPES",
    "STRING_LIKE_TYPES",
]
