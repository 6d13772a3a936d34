"""Field definition entity for collection schemas.

A collection's schema is an ordered list of field definitions. Each
definition names a key in an entry's ``data`` object and carries the
constraints the entry validator enforces for it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class FieldType(str, Enum):
    """Supported field types for collection schemas."""

    STRING = "string"
    TEXT = "text"
    RICH_TEXT = "rich-text"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    SELECT = "select"
    MULTI_SELECT = "multi-select"
    SLUG = "slug"
    MEDIA = "media"


# Types whose values are length-checked as strings
STRING_LIKE_TYPES = frozenset({FieldType.STRING, FieldType.TEXT, FieldType.SLUG})

# Types whose values are checked against the configured options in strict mode
OPTION_TYPES = frozenset({FieldType.SELECT, FieldType.MULTI_SELECT})


@dataclass
class FieldDefinition:
    """One field in a collection schema.

    Attributes:
        name: Key of the value in the entry data object.
        label: Display name, used in validation messages.
        type: Field type.
        required: Whether the value must be present and non-empty.
        min_length: Minimum string length (string, text, slug).
        max_length: Maximum string length (string, text, slug).
        min: Minimum numeric value (number).
        max: Maximum numeric value (number).
        options: Allowed values (select, multi-select).
        generate_from: Source field name for slug generation (slug).
    """

    name: str
    type: FieldType
    label: str = ""
    required: bool = False
    min_length: int | None = None
    max_length: int | None = None
    min: float | None = None
    max: float | None = None
    options: list[str] | None = None
    generate_from: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.label:
            self.label = self.name

    @property
    def display_name(self) -> str:
        return self.label or self.name

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FieldDefinition":
        """Build a field definition from its stored (camelCase) form.

        Raises:
            ValueError: If the type is not a known field type.
        """
        known = {
            "name", "label", "type", "required", "minLength", "maxLength",
            "min", "max", "options", "generateFrom",
        }
        return cls(
            name=data["name"],
            label=data.get("label") or data["name"],
            type=FieldType(str(data.get("type", "")).lower()),
            required=bool(data.get("required", False)),
            min_length=data.get("minLength"),
            max_length=data.get("maxLength"),
            min=data.get("min"),
            max=data.get("max"),
            options=data.get("options"),
            generate_from=data.get("generateFrom"),
            extra={k: v for k, v in data.items() if k not in known},
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the stored (camelCase) form, omitting unset constraints."""
        result: dict[str, Any] = {
            **self.extra,
            "name": self.name,
            "label": self.label,
            "type": self.type.value,
            "required": self.required,
        }
        optional = {
            "minLength": self.min_length,
            "maxLength": self.max_length,
            "min": self.min,
            "max": self.max,
            "options": self.options,
            "generateFrom": self.generate_from,
        }
        result.update({k: v for k, v in optional.items() if v is not None})
        return result
