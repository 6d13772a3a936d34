"""Pydantic schemas for collection endpoints."""

from datetime import datetime
from typing import Any

from pydantic import Field, field_validator

from slatestack.domain.entities import Collection
from slatestack.infrastructure.api.schemas.common_schemas import CamelModel


class FieldDefinitionSchema(CamelModel):
    """Definition of a single field in a collection schema."""

    name: str = Field(..., description="Key of the value in entry data")
    label: str | None = Field(default=None, description="Display name")
    type: str = Field(
        ...,
        description=(
            "Field type: string, text, rich-text, number, boolean, date, "
            "select, multi-select, slug, media"
        ),
    )
    required: bool = Field(default=False)
    min_length: int | None = Field(default=None, description="Minimum length (string-like types)")
    max_length: int | None = Field(default=None, description="Maximum length (string-like types)")
    min: float | None = Field(default=None, description="Minimum value (number)")
    max: float | None = Field(default=None, description="Maximum value (number)")
    options: list[Any] | None = Field(default=None, description="Allowed values (select types)")
    generate_from: str | None = Field(default=None, description="Slug source field (slug)")

    @field_validator("type")
    @classmethod
    def normalize_type(cls, v: str) -> str:
        """Normalize field type to lowercase."""
        return v.lower()

    def to_stored(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class CreateCollectionRequest(CamelModel):
    """Request body for creating a collection."""

    name: str = Field(..., description="Unique collection name")
    fields: list[FieldDefinitionSchema] = Field(..., description="Ordered field definitions")


class UpdateCollectionRequest(CamelModel):
    """Request body for updating a collection."""

    name: str | None = None
    fields: list[FieldDefinitionSchema] | None = None


class CollectionResponse(CamelModel):
    """Collection with its field schema."""

    id: str
    name: str
    fields: list[dict[str, Any]]
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entity(cls, collection: Collection) -> "CollectionResponse":
        return cls(
            id=collection.id,
            name=collection.name,
            fields=[f.to_dict() for f in collection.fields],
            created_at=collection.created_at,
            updated_at=collection.updated_at,
        )
