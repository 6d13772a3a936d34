"""Entry validation service.

Validates an entry's data object against the owning collection's field
definitions. Each field is checked independently: required-ness first,
then type-specific bounds for present values.
"""

import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from slatestack.domain.entities.field_definition import (
    OPTION_TYPES,
    STRING_LIKE_TYPES,
    FieldDefinition,
    FieldType,
)
from slatestack.domain.exceptions import FieldError

EntryValidationError = FieldError


@dataclass
class EntryValidationResult:
    """Outcome of validating one data object."""

    errors: list[EntryValidationError] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors


def is_empty(value: Any) -> bool:
    """Absent, null and empty-string values count as empty."""
    return value is None or value == ""


def to_number(value: Any) -> float | None:
    """Coerce a value to a finite float, or None if it is not numeric."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    return number if math.isfinite(number) else None


def _format_bound(bound: float) -> str:
    return str(int(bound)) if float(bound).is_integer() else str(bound)


class EntryValidator:
    """Validator for entry data against collection field definitions.

    Select and multi-select values are accepted as-is unless
    ``strict_options`` is enabled, in which case they must be listed in
    the field's ``options``.
    """

    def __init__(self, strict_options: bool = False) -> None:
        self.strict_options = strict_options

    def validate(
        self, fields: Sequence[FieldDefinition], data: Mapping[str, Any]
    ) -> EntryValidationResult:
        result = EntryValidationResult()
        for definition in fields:
            result.errors.extend(self.validate_field(definition, data.get(definition.name)))
        return result

    def validate_field(
        self, definition: FieldDefinition, value: Any
    ) -> list[EntryValidationError]:
        if is_empty(value):
            if definition.required:
                return [self._error(definition, "is required", "required")]
            return []

        if definition.type == FieldType.NUMBER:
            return self._validate_number(definition, value)
        if definition.type in STRING_LIKE_TYPES:
            return self._validate_length(definition, str(value))
        if self.strict_options and definition.type in OPTION_TYPES:
            return self._validate_options(definition, value)
        return []

    def _validate_number(
        self, definition: FieldDefinition, value: Any
    ) -> list[EntryValidationError]:
        number = to_number(value)
        if number is None:
            return [self._error(definition, "must be a valid number", "invalid_number")]

        errors = []
        if definition.min is not None and number < definition.min:
            errors.append(
                self._error(
                    definition,
                    f"must be at least {_format_bound(definition.min)}",
                    "min_value",
                )
            )
        if definition.max is not None and number > definition.max:
            errors.append(
                self._error(
                    definition,
                    f"must be at most {_format_bound(definition.max)}",
                    "max_value",
                )
            )
        return errors

    def _validate_length(
        self, definition: FieldDefinition, text: str
    ) -> list[EntryValidationError]:
        errors = []
        if definition.min_length is not None and len(text) < definition.min_length:
            errors.append(
                self._error(
                    definition,
                    f"must be at least {definition.min_length} characters",
                    "min_length",
                )
            )
        if definition.max_length is not None and len(text) > definition.max_length:
            errors.append(
                self._error(
                    definition,
                    f"must be at most {definition.max_length} characters",
                    "max_length",
                )
            )
        return errors

    def _validate_options(
        self, definition: FieldDefinition, value: Any
    ) -> list[EntryValidationError]:
        allowed = list(definition.options or [])
        if definition.type == FieldType.MULTI_SELECT:
            values = value if isinstance(value, list) else [value]
        else:
            values = [value]

        invalid = [v for v in values if v not in allowed]
        if not invalid:
            return []
        listed = ", ".join(str(v) for v in invalid)
        return [self._error(definition, f"has invalid option(s): {listed}", "invalid_option")]

    @staticmethod
    def _error(definition: FieldDefinition, reason: str, code: str) -> EntryValidationError:
        return EntryValidationError(
            field=definition.name,
            message=f"{definition.display_name} {reason}",
            code=code,
        )
