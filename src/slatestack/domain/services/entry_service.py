"""Entry service for business logic.

Orchestrates validation, slug generation and persistence of entries.
Slug uniqueness is checked here before writing, but the unique constraint
on ``(collection_id, slug)`` is what finally decides; a lost race surfaces
as SlugConflictError.
"""

import uuid
from typing import Any, Literal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from slatestack.core.logging import get_logger
from slatestack.domain.entities import Collection, Entry, EntryStatus
from slatestack.domain.entities.collection import utcnow
from slatestack.domain.exceptions import (
    EntryNotFoundError,
    EntryValidationFailedError,
    FieldError,
    MissingSlugSourceError,
    SlugConflictError,
    ValidationFailedError,
)
from slatestack.domain.services.collection_service import CollectionService
from slatestack.domain.services.entry_validator import EntryValidator, is_empty
from slatestack.domain.services.slug_generator import SlugGenerator
from slatestack.infrastructure.persistence.models import EntryModel
from slatestack.infrastructure.persistence.repositories import EntryRepository
from slatestack.infrastructure.persistence.repositories.entry_repository import encode_data

logger = get_logger(__name__)


class EntryService:
    """Service for entry business logic.

    Args:
        session: SQLAlchemy async session.
        validator: Entry validator; defaults to the lenient validator.
        insert_position: ``"end"`` appends new entries after the last
            position, ``"start"`` places them at position 0.
    """

    def __init__(
        self,
        session: AsyncSession,
        validator: EntryValidator | None = None,
        insert_position: Literal["start", "end"] = "end",
    ) -> None:
        self.session = session
        self.validator = validator or EntryValidator()
        self.insert_position = insert_position
        self.repository = EntryRepository(session)
        self.collections = CollectionService(session)

    async def create_entry(
        self,
        collection_id: str,
        data: dict[str, Any],
        status: EntryStatus | None = None,
    ) -> Entry:
        """Validate and insert a new entry.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
            EntryValidationFailedError: If the data is invalid.
            MissingSlugSourceError: If the slug source field is empty.
            SlugConflictError: If a concurrent writer claimed the slug.
        """
        collection = await self.collections.get_collection(collection_id)
        self._validate(collection, data)

        slug = await self._derive_slug(collection, data)
        position = await self._initial_position(collection_id)
        now = utcnow()

        model = EntryModel(
            id=str(uuid.uuid4()),
            collection_id=collection_id,
            slug=slug,
            data=encode_data(data),
            status=(status or EntryStatus.DRAFT).value,
            position=position,
            created_at=now,
            updated_at=now,
        )
        try:
            await self.repository.create(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            logger.warning(
                "Entry creation lost slug race",
                collection_id=collection_id,
                slug=slug,
            )
            raise SlugConflictError(collection_id, slug) from e

        logger.info(
            "Entry created",
            collection_id=collection_id,
            entry_id=model.id,
            slug=slug,
            position=position,
        )
        return EntryRepository.to_entity(model)

    async def get_entry(self, collection_id: str, entry_id: str) -> Entry:
        """Get an entry by ID.

        Raises:
            EntryNotFoundError: If it does not exist in the collection.
        """
        model = await self.repository.get_by_id(collection_id, entry_id)
        if model is None:
            raise EntryNotFoundError(entry_id, collection_id)
        return EntryRepository.to_entity(model)

    async def get_published_entry(self, collection_id: str, slug: str) -> Entry:
        """Get a published entry by slug.

        Raises:
            EntryNotFoundError: If no published entry has that slug.
        """
        model = await self.repository.get_by_slug(
            collection_id, slug, status=EntryStatus.PUBLISHED.value
        )
        if model is None:
            raise EntryNotFoundError(slug, collection_id)
        return EntryRepository.to_entity(model)

    async def list_entries(
        self,
        collection_id: str,
        status: EntryStatus | None = None,
        search: str | None = None,
        page: int = 1,
        limit: int | None = None,
    ) -> tuple[list[Entry], int]:
        """List entries ordered by position, newest first within a position.

        Args:
            collection_id: The owning collection.
            status: Optional status filter.
            search: Optional substring search over slug and data.
            page: 1-based page number (ignored when ``limit`` is None).
            limit: Page size, or None for all entries.

        Returns:
            A tuple of (entries, total matching entries).

        Raises:
            CollectionNotFoundError: If the collection does not exist.
        """
        await self.collections.get_collection(collection_id)
        skip = (page - 1) * limit if limit else 0
        models, total = await self.repository.find_all(
            collection_id,
            status=status.value if status else None,
            search=search,
            skip=skip,
            limit=limit,
        )
        return [EntryRepository.to_entity(m) for m in models], total

    async def update_entry(
        self,
        collection_id: str,
        entry_id: str,
        data: dict[str, Any] | None = None,
        status: EntryStatus | None = None,
        position: int | None = None,
    ) -> Entry:
        """Partially update an entry.

        ``data`` is shallow-merged onto the stored data and the merged
        object is validated. The slug is regenerated only when the update
        changes the collection's slug source field.

        Raises:
            EntryNotFoundError: If the entry does not exist.
            EntryValidationFailedError: If the merged data is invalid.
            MissingSlugSourceError: If the slug source is cleared.
            SlugConflictError: If a concurrent writer claimed the new slug.
        """
        model = await self.repository.get_by_id(collection_id, entry_id)
        if model is None:
            raise EntryNotFoundError(entry_id, collection_id)
        existing = EntryRepository.to_entity(model)

        values: dict[str, Any] = {}
        if data is not None:
            collection = await self.collections.get_collection(collection_id)
            merged = {**existing.data, **data}
            self._validate(collection, merged)
            values["data"] = merged

            source = collection.slug_source
            if source and source in data and data[source] != existing.data.get(source):
                values["slug"] = await self._derive_slug(
                    collection, merged, exclude_entry_id=entry_id
                )
        if status is not None:
            values["status"] = status.value
        if position is not None:
            values["position"] = position
        values["updated_at"] = utcnow()

        try:
            await self.repository.update(model, values)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise SlugConflictError(collection_id, values.get("slug", existing.slug)) from e

        logger.info(
            "Entry updated",
            collection_id=collection_id,
            entry_id=entry_id,
            fields=sorted(values),
        )
        return EntryRepository.to_entity(model)

    async def delete_entry(self, collection_id: str, entry_id: str) -> None:
        """Delete an entry.

        Raises:
            EntryNotFoundError: If no entry matched.
        """
        deleted = await self.repository.delete(collection_id, entry_id)
        if not deleted:
            await self.session.rollback()
            raise EntryNotFoundError(entry_id, collection_id)
        await self.session.commit()
        logger.info("Entry deleted", collection_id=collection_id, entry_id=entry_id)

    async def reorder_entries(self, collection_id: str, ordered_ids: list[str]) -> None:
        """Set ``position = index`` for each ID, all in one transaction.

        Entries not listed keep their positions. Nothing is written if any
        ID is duplicated or does not belong to the collection.

        Raises:
            CollectionNotFoundError: If the collection does not exist.
            ValidationFailedError: If an ID is listed twice.
            EntryNotFoundError: If an ID is not an entry of the collection.
        """
        await self.collections.get_collection(collection_id)

        seen: set[str] = set()
        duplicates = []
        for entry_id in ordered_ids:
            if entry_id in seen:
                duplicates.append(entry_id)
            seen.add(entry_id)
        if duplicates:
            raise ValidationFailedError(
                [
                    FieldError(
                        field="orderedIds",
                        message=f"Entry '{entry_id}' is listed more than once",
                        code="duplicate_id",
                    )
                    for entry_id in duplicates
                ]
            )

        existing = await self.repository.existing_ids(collection_id, ordered_ids)
        missing = [entry_id for entry_id in ordered_ids if entry_id not in existing]
        if missing:
            raise EntryNotFoundError(missing[0], collection_id)

        try:
            await self.repository.set_positions(collection_id, ordered_ids, utcnow())
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise

        logger.info("Entries reordered", collection_id=collection_id, count=len(ordered_ids))

    async def ensure_unique_slug(
        self, collection_id: str, base_slug: str, exclude_entry_id: str | None = None
    ) -> str:
        """Return ``base_slug`` or the first ``base_slug-N`` unused in the collection.

        The entry identified by ``exclude_entry_id`` does not count as a user
        of its own slug.
        """
        taken = await self.repository.find_slugs(collection_id, base_slug, exclude_entry_id)
        return SlugGenerator.next_available(base_slug, taken)

    def _validate(self, collection: Collection, data: dict[str, Any]) -> None:
        result = self.validator.validate(collection.fields, data)
        if not result.valid:
            logger.info(
                "Entry validation failed",
                collection_id=collection.id,
                error_count=len(result.errors),
            )
            raise EntryValidationFailedError(result.errors)

    async def _derive_slug(
        self,
        collection: Collection,
        data: dict[str, Any],
        exclude_entry_id: str | None = None,
    ) -> str:
        source = collection.slug_source
        if source:
            value = data.get(source)
            if is_empty(value):
                raise MissingSlugSourceError(source)
            base_slug = SlugGenerator.generate(str(value))
        else:
            title = data.get("title")
            base_slug = "" if is_empty(title) else SlugGenerator.generate(str(title))

        if not base_slug:
            base_slug = SlugGenerator.random()
        return await self.ensure_unique_slug(collection.id, base_slug, exclude_entry_id)

    async def _initial_position(self, collection_id: str) -> int:
        if self.insert_position == "start":
            return 0
        highest = await self.repository.max_position(collection_id)
        return 0 if highest is None else highest + 1
