"""Repository for collection operations.

Provides CRUD operations for the collections table and conversion of
rows into Collection entities.
"""

import json
from datetime import timezone

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from slatestack.domain.entities import Collection, FieldDefinition
from slatestack.infrastructure.persistence.models import CollectionModel, EntryModel


class CollectionRepository:
    """Repository for collection database operations."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session

    async def create(self, collection: CollectionModel) -> CollectionModel:
        """Add a new collection and flush it."""
        self.session.add(collection)
        await self.session.flush()
        return collection

    async def get_by_id(self, collection_id: str) -> CollectionModel | None:
        """Get a collection by ID."""
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.scalar_one_or_none()

    async def get_by_name(self, name: str) -> CollectionModel | None:
        """Get a collection by name."""
        result = await self.session.execute(
            select(CollectionModel).where(CollectionModel.name == name)
        )
        return result.scalar_one_or_none()

    async def name_exists(self, name: str, exclude_id: str | None = None) -> bool:
        """Check if a collection with the given name exists.

        Args:
            name: The collection name to check.
            exclude_id: Collection ID to ignore (for renames).
        """
        query = select(CollectionModel.id).where(CollectionModel.name == name)
        if exclude_id is not None:
            query = query.where(CollectionModel.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def list_all(self) -> list[CollectionModel]:
        """List all collections ordered by name."""
        result = await self.session.execute(
            select(CollectionModel).order_by(CollectionModel.name)
        )
        return list(result.scalars().all())

    async def delete(self, collection_id: str) -> bool:
        """Delete a collection and its entries.

        Returns:
            True if a collection row was deleted.
        """
        await self.session.execute(
            delete(EntryModel).where(EntryModel.collection_id == collection_id)
        )
        result = await self.session.execute(
            delete(CollectionModel).where(CollectionModel.id == collection_id)
        )
        return result.rowcount > 0

    @staticmethod
    def to_entity(model: CollectionModel) -> Collection:
        """Convert a collection row into a Collection entity."""
        fields = [FieldDefinition.from_dict(f) for f in json.loads(model.fields)]
        return Collection(
            id=model.id,
            name=model.name,
            fields=fields,
            created_at=as_utc(model.created_at),
            updated_at=as_utc(model.updated_at),
        )


def as_utc(value):
    """SQLite drops tzinfo; stored timestamps are always UTC."""
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
