"""Collection validation service for names and field schemas.

Field definitions are validated in their stored (camelCase dict) form,
before they are turned into FieldDefinition entities.
"""

import re
from typing import Any

from slatestack.domain.entities.field_definition import OPTION_TYPES, FieldType
from slatestack.domain.exceptions import FieldError

CollectionValidationError = FieldError

# Pattern for valid field names (used as data object keys)
FIELD_NAME_PATTERN = re.compile(r"^[a-zA-Z][a-zA-Z0-9_]*$")


class CollectionValidator:
    """Validator for collection definitions."""

    MAX_NAME_LENGTH = 100
    MAX_FIELD_NAME_LENGTH = 64

    @classmethod
    def validate_name(cls, name: str) -> list[CollectionValidationError]:
        """Validate a collection name."""
        if not name or not name.strip():
            return [
                CollectionValidationError(
                    field="name",
                    message="Collection name is required",
                    code="name_required",
                )
            ]
        if len(name) > cls.MAX_NAME_LENGTH:
            return [
                CollectionValidationError(
                    field="name",
                    message=f"Collection name must be at most {cls.MAX_NAME_LENGTH} characters",
                    code="name_too_long",
                )
            ]
        return []

    @classmethod
    def validate_field(cls, field: dict[str, Any], index: int) -> list[CollectionValidationError]:
        """Validate a single field definition.

        Args:
            field: The field definition dict with at least 'name' and 'type'.
            index: Index of the field in the schema (for error paths).

        Returns:
            List of validation errors (empty if valid).
        """
        errors = []
        path = f"fields[{index}]"

        name = field.get("name") or ""
        if not name:
            errors.append(
                CollectionValidationError(
                    field=f"{path}.name", message="Field name is required", code="field_name_required"
                )
            )
        elif len(name) > cls.MAX_FIELD_NAME_LENGTH or not FIELD_NAME_PATTERN.match(name):
            errors.append(
                CollectionValidationError(
                    field=f"{path}.name",
                    message=(
                        "Field name must start with a letter, contain only alphanumeric "
                        f"characters and underscores, and be at most {cls.MAX_FIELD_NAME_LENGTH} characters"
                    ),
                    code="field_name_invalid_format",
                )
            )

        raw_type = str(field.get("type") or "").lower()
        valid_types = [t.value for t in FieldType]
        if raw_type not in valid_types:
            errors.append(
                CollectionValidationError(
                    field=f"{path}.type",
                    message=f"Invalid field type '{raw_type}'. Valid types: {', '.join(valid_types)}",
                    code="field_type_invalid",
                )
            )
            return errors

        errors.extend(cls._validate_bounds(field, path, "minLength", "maxLength", non_negative=True))
        errors.extend(cls._validate_bounds(field, path, "min", "max"))

        options = field.get("options")
        if options is not None:
            if FieldType(raw_type) not in OPTION_TYPES:
                errors.append(
                    CollectionValidationError(
                        field=f"{path}.options",
                        message="Options are only supported on select and multi-select fields",
                        code="options_not_supported",
                    )
                )
            elif not isinstance(options, list) or not all(isinstance(o, str) for o in options):
                errors.append(
                    CollectionValidationError(
                        field=f"{path}.options",
                        message="Options must be a list of strings",
                        code="options_invalid",
                    )
                )

        return errors

    @staticmethod
    def _validate_bounds(
        field: dict[str, Any], path: str, low_key: str, high_key: str, non_negative: bool = False
    ) -> list[CollectionValidationError]:
        errors = []
        low, high = field.get(low_key), field.get(high_key)
        for key, value in ((low_key, low), (high_key, high)):
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                errors.append(
                    CollectionValidationError(
                        field=f"{path}.{key}", message=f"'{key}' must be a number", code="bound_invalid"
                    )
                )
            elif non_negative and value < 0:
                errors.append(
                    CollectionValidationError(
                        field=f"{path}.{key}", message=f"'{key}' must not be negative", code="bound_invalid"
                    )
                )
        if not errors and low is not None and high is not None and low > high:
            errors.append(
                CollectionValidationError(
                    field=f"{path}.{low_key}",
                    message=f"'{low_key}' must not exceed '{high_key}'",
                    code="bounds_inverted",
                )
            )
        return errors

    @classmethod
    def validate_fields(cls, fields: list[dict[str, Any]]) -> list[CollectionValidationError]:
        """Validate a whole field schema, including cross-field slug rules."""
        if not fields:
            return [
                CollectionValidationError(
                    field="fields",
                    message="Collection must define at least one field",
                    code="fields_empty",
                )
            ]

        errors = []
        seen_names: set[str] = set()
        for i, field in enumerate(fields):
            errors.extend(cls.validate_field(field, i))
            name = field.get("name") or ""
            if name and name in seen_names:
                errors.append(
                    CollectionValidationError(
                        field=f"fields[{i}].name",
                        message=f"Duplicate field name '{name}'",
                        code="field_name_duplicate",
                    )
                )
            seen_names.add(name)

        slug_indexes = [
            i for i, f in enumerate(fields) if str(f.get("type") or "").lower() == FieldType.SLUG.value
        ]
        for i in slug_indexes[1:]:
            errors.append(
                CollectionValidationError(
                    field=f"fields[{i}].type",
                    message="A collection may define only one slug field",
                    code="slug_field_duplicate",
                )
            )
        if slug_indexes:
            i = slug_indexes[0]
            source = fields[i].get("generateFrom")
            if source is not None:
                if source == fields[i].get("name"):
                    errors.append(
                        CollectionValidationError(
                            field=f"fields[{i}].generateFrom",
                            message="Slug field cannot be generated from itself",
                            code="slug_source_invalid",
                        )
                    )
                elif source not in seen_names:
                    errors.append(
                        CollectionValidationError(
                            field=f"fields[{i}].generateFrom",
                            message=f"Slug source field '{source}' does not exist",
                            code="slug_source_invalid",
                        )
                    )

        return errors

    @classmethod
    def validate(cls, name: str, fields: list[dict[str, Any]]) -> list[CollectionValidationError]:
        """Validate a complete collection definition."""
        return cls.validate_name(name) + cls.validate_fields(fields)
