"""Exceptions raised by the content services.

Every exception carries a machine-readable ``error`` string and the HTTP
status it is rendered with by the API exception handlers.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class FieldError:
    """A single field-level error."""

    field: str
    message: str
    code: str


class ContentError(Exception):
    """Base class for all content service errors."""

    error = "content_error"
    status_code = 400

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class CollectionNotFoundError(ContentError):
    """Raised when a collection does not exist."""

    error = "collection_not_found"
    status_code = 404

    def __init__(self, collection_id: str) -> None:
        self.collection_id = collection_id
        super().__init__(f"Collection '{collection_id}' not found")


class EntryNotFoundError(ContentError):
    """Raised when an entry does not exist in the given collection."""

    error = "entry_not_found"
    status_code = 404

    def __init__(self, entry_id: str, collection_id: str | None = None) -> None:
        self.entry_id = entry_id
        self.collection_id = collection_id
        super().__init__(f"Entry '{entry_id}' not found")


class ValidationFailedError(ContentError):
    """Raised when submitted data fails validation."""

    error = "validation_failed"
    status_code = 400

    def __init__(self, details: list[FieldError], message: str = "Validation failed") -> None:
        self.details = list(details)
        super().__init__(message)


class EntryValidationFailedError(ValidationFailedError):
    """Entry data does not satisfy the collection's field definitions."""


class CollectionValidationFailedError(ValidationFailedError):
    """Collection definition is invalid."""


class MissingSlugSourceError(ContentError):
    """Raised when the configured slug source field has no value."""

    error = "missing_slug_source"
    status_code = 400

    def __init__(self, field_name: str) -> None:
        self.field_name = field_name
        super().__init__(f"Slug source field '{field_name}' is required")


class CollectionConflictError(ContentError):
    """Raised when a collection name is already taken."""

    error = "collection_conflict"
    status_code = 409


class SlugConflictError(ContentError):
    """Raised when the store rejects a slug that another writer claimed first."""

    error = "storage_conflict"
    status_code = 409

    def __init__(self, collection_id: str, slug: str) -> None:
        self.collection_id = collection_id
        self.slug = slug
        super().__init__(f"Slug '{slug}' is already in use in this collection")


class UpstreamUnavailableError(ContentError):
    """Raised when the upstream release API cannot be reached or answers with an error."""

    error = "upstream_unavailable"
    status_code = 503


class UpstreamRateLimitedError(UpstreamUnavailableError):
    """Raised when the upstream release API rate-limits requests."""

    error = "upstream_rate_limited"
    status_code = 429
