"""Collection entity for dynamic content types.

A collection is a named content type with an ordered field schema.
Entries belonging to it store their data as free-form JSON, shaped
by these field definitions.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone

from slatestack.domain.entities.field_definition import FieldDefinition, FieldType


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Collection:
    """Collection entity.

    Attributes:
        id: Unique identifier.
        name: Unique collection name.
        fields: Ordered field definitions (display/form order).
        created_at: Timestamp when the collection was created.
        updated_at: Timestamp when the collection was last updated.
    """

    id: str
    name: str
    fields: list[FieldDefinition] = field(default_factory=list)
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self) -> None:
        """Validate collection data after initialization."""
        if not self.id:
            raise ValueError("Collection ID is required")
        if not self.name:
            raise ValueError("Collection name is required")

    @property
    def slug_field(self) -> FieldDefinition | None:
        """The first slug-typed field, which drives automatic slug generation."""
        return next((f for f in self.fields if f.type == FieldType.SLUG), None)

    @property
    def slug_source(self) -> str | None:
        """Name of the field entry slugs are derived from, if configured."""
        slug_field = self.slug_field
        return slug_field.generate_from if slug_field else None
