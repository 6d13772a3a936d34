"""Repository for entry operations.

Entries store their dynamic data as a JSON document; this repository
handles the encoding and scopes every query to a collection.
"""

import json
from datetime import datetime
from typing import Any

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from slatestack.core.logging import get_logger
from slatestack.domain.entities import Entry, EntryStatus
from slatestack.infrastructure.persistence.models import EntryModel
from slatestack.infrastructure.persistence.repositories.collection_repository import as_utc

logger = get_logger(__name__)


class EntryRepository:
    """Repository for entry database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, entry: EntryModel) -> EntryModel:
        """Add a new entry and flush it.

        Raises:
            IntegrityError: If the slug is already used in the collection.
        """
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def get_by_id(self, collection_id: str, entry_id: str) -> EntryModel | None:
        """Get an entry by ID, scoped to its collection."""
        result = await self.session.execute(
            select(EntryModel).where(
                EntryModel.id == entry_id,
                EntryModel.collection_id == collection_id,
            ).execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def get_by_slug(
        self, collection_id: str, slug: str, status: str | None = None
    ) -> EntryModel | None:
        """Get an entry by slug, optionally requiring a status."""
        query = select(EntryModel).where(
            EntryModel.collection_id == collection_id,
            EntryModel.slug == slug,
        )
        if status is not None:
            query = query.where(EntryModel.status == status)
        result = await self.session.execute(query.execution_options(populate_existing=True))
        return result.scalar_one_or_none()

    async def find_all(
        self,
        collection_id: str,
        status: str | None = None,
        search: str | None = None,
        skip: int = 0,
        limit: int | None = None,
    ) -> tuple[list[EntryModel], int]:
        """Find entries in a collection.

        Ordered by ascending position, newest first within a position.

        Args:
            collection_id: The owning collection.
            status: Optional status filter.
            search: Optional case-insensitive substring matched against slug and data.
            skip: Number of entries to skip.
            limit: Maximum number of entries to return (None for all).

        Returns:
            A tuple of (entries, total count matching the filters).
        """
        conditions = [EntryModel.collection_id == collection_id]
        if status is not None:
            conditions.append(EntryModel.status == status)
        if search:
            conditions.append(
                or_(
                    EntryModel.slug.icontains(search, autoescape=True),
                    EntryModel.data.icontains(search, autoescape=True),
                )
            )

        count_result = await self.session.execute(
            select(func.count()).select_from(EntryModel).where(*conditions)
        )
        total = count_result.scalar_one()

        query = (
            select(EntryModel)
            .where(*conditions)
            .order_by(EntryModel.position.asc(), EntryModel.created_at.desc())
            .offset(skip)
            .execution_options(populate_existing=True)
        )
        if limit is not None:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    async def find_slugs(
        self, collection_id: str, base_slug: str, exclude_entry_id: str | None = None
    ) -> list[str]:
        """Find slugs equal to ``base_slug`` or of the form ``base_slug-*``."""
        query = select(EntryModel.slug).where(
            EntryModel.collection_id == collection_id,
            or_(
                EntryModel.slug == base_slug,
                EntryModel.slug.startswith(f"{base_slug}-", autoescape=True),
            ),
        )
        if exclude_entry_id is not None:
            query = query.where(EntryModel.id != exclude_entry_id)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def max_position(self, collection_id: str) -> int | None:
        """Highest position in the collection, or None if it has no entries."""
        result = await self.session.execute(
            select(func.max(EntryModel.position)).where(
                EntryModel.collection_id == collection_id
            )
        )
        return result.scalar_one_or_none()

    async def update(self, entry: EntryModel, values: dict[str, Any]) -> EntryModel:
        """Apply column values to an entry and flush.

        ``data`` is given as a dict and encoded here.

        Raises:
            IntegrityError: If a new slug is already used in the collection.
        """
        for key, value in values.items():
            if key == "data":
                value = encode_data(value)
            setattr(entry, key, value)
        await self.session.flush()
        return entry

    async def delete(self, collection_id: str, entry_id: str) -> bool:
        """Delete an entry.

        Returns:
            True if a row was deleted.
        """
        result = await self.session.execute(
            delete(EntryModel).where(
                EntryModel.id == entry_id,
                EntryModel.collection_id == collection_id,
            )
        )
        return result.rowcount > 0

    async def existing_ids(self, collection_id: str, entry_ids: list[str]) -> set[str]:
        """Return the subset of ``entry_ids`` that belong to the collection."""
        if not entry_ids:
            return set()
        result = await self.session.execute(
            select(EntryModel.id).where(
                EntryModel.collection_id == collection_id,
                EntryModel.id.in_(entry_ids),
            )
        )
        return set(result.scalars().all())

    async def set_positions(
        self, collection_id: str, ordered_ids: list[str], updated_at: datetime
    ) -> int:
        """Assign ``position = index`` to each entry in a single statement.

        Returns:
            Number of rows updated.
        """
        if not ordered_ids:
            return 0
        positions = {entry_id: index for index, entry_id in enumerate(ordered_ids)}
        result = await self.session.execute(
            update(EntryModel)
            .where(
                EntryModel.collection_id == collection_id,
                EntryModel.id.in_(ordered_ids),
            )
            .values(
                position=case(positions, value=EntryModel.id),
                updated_at=updated_at,
            )
            .execution_options(synchronize_session=False)
        )
        logger.debug(
            "Entry positions updated",
            collection_id=collection_id,
            count=result.rowcount,
        )
        return result.rowcount

    @staticmethod
    def to_entity(model: EntryModel) -> Entry:
        """Convert an entry row into an Entry entity."""
        return Entry(
            id=model.id,
            collection_id=model.collection_id,
            slug=model.slug,
            data=decode_data(model.data),
            status=EntryStatus(model.status),
            position=model.position,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )


def encode_data(data: dict[str, Any]) -> str:
    return json.dumps(data, ensure_ascii=False)


def decode_data(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    return json.loads(raw)
