"""Shared Pydantic schemas for API responses."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model exchanging camelCase JSON while using snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FieldErrorDetail(BaseModel):
    """A single field-level error."""

    field: str = Field(..., description="Field that failed validation")
    message: str = Field(..., description="Human-readable error message")
    code: str = Field(..., description="Machine-readable error code")


class ErrorResponse(BaseModel):
    """Error body returned for all handled failures."""

    error: str = Field(..., description="Machine-readable error type")
    message: str = Field(..., description="Human-readable message")
    details: list[FieldErrorDetail] | None = Field(
        default=None, description="Field-level errors for validation failures"
    )


class PaginationMeta(CamelModel):
    """Pagination metadata for list responses."""

    page: int
    limit: int
    total: int
    total_pages: int
