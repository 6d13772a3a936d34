"""Collection service for business logic.

Handles validation and persistence of collection definitions.
"""

import json
import uuid
from typing import Any

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from slatestack.core.logging import get_logger
from slatestack.domain.entities import Collection, FieldDefinition
from slatestack.domain.entities.collection import utcnow
from slatestack.domain.exceptions import (
    CollectionConflictError,
    CollectionNotFoundError,
    CollectionValidationFailedError,
)
from slatestack.domain.services.collection_validator import CollectionValidator
from slatestack.infrastructure.persistence.models import CollectionModel
from slatestack.infrastructure.persistence.repositories import CollectionRepository

logger = get_logger(__name__)


def normalize_fields(fields: list[dict[str, Any]]) -> str:
    """Encode validated field dicts in their canonical stored form."""
    return json.dumps([FieldDefinition.from_dict(f).to_dict() for f in fields])


class CollectionService:
    """Service for collection business logic."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize the service.

        Args:
            session: SQLAlchemy async session.
        """
        self.session = session
        self.repository = CollectionRepository(session)

    async def create_collection(self, name: str, fields: list[dict[str, Any]]) -> Collection:
        """Create a new collection.

        Args:
            name: Collection name.
            fields: Field definitions in stored (camelCase) form.

        Raises:
            CollectionValidationFailedError: If the definition is invalid.
            CollectionConflictError: If the name is taken.
        """
        errors = CollectionValidator.validate(name, fields)
        if errors:
            raise CollectionValidationFailedError(errors)

        if await self.repository.name_exists(name):
            raise CollectionConflictError(f"Collection '{name}' already exists")

        now = utcnow()
        model = CollectionModel(
            id=str(uuid.uuid4()),
            name=name,
            fields=normalize_fields(fields),
            created_at=now,
            updated_at=now,
        )
        try:
            await self.repository.create(model)
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise CollectionConflictError(f"Collection '{name}' already exists") from e

        logger.info("Collection created", collection_id=model.id, collection_name=name)
        return CollectionRepository.to_entity(model)

    async def get_collection(self, collection_id: str) -> Collection:
        """Get a collection by ID.

        Raises:
            CollectionNotFoundError: If it does not exist.
        """
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise CollectionNotFoundError(collection_id)
        return CollectionRepository.to_entity(model)

    async def resolve_collection(self, id_or_name: str) -> Collection:
        """Get a collection by ID, falling back to its name."""
        model = await self.repository.get_by_id(id_or_name)
        if model is None:
            model = await self.repository.get_by_name(id_or_name)
        if model is None:
            raise CollectionNotFoundError(id_or_name)
        return CollectionRepository.to_entity(model)

    async def list_collections(self) -> list[Collection]:
        models = await self.repository.list_all()
        return [CollectionRepository.to_entity(m) for m in models]

    async def update_collection(
        self,
        collection_id: str,
        name: str | None = None,
        fields: list[dict[str, Any]] | None = None,
    ) -> Collection:
        """Rename a collection and/or replace its field schema.

        Existing entries are not rewritten; they are validated against the
        new schema the next time their data is updated.

        Raises:
            CollectionNotFoundError: If it does not exist.
            CollectionValidationFailedError: If the new definition is invalid.
            CollectionConflictError: If the new name is taken.
        """
        model = await self.repository.get_by_id(collection_id)
        if model is None:
            raise CollectionNotFoundError(collection_id)

        errors = []
        if name is not None:
            errors.extend(CollectionValidator.validate_name(name))
        if fields is not None:
            errors.extend(CollectionValidator.validate_fields(fields))
        if errors:
            raise CollectionValidationFailedError(errors)

        if name is not None and await self.repository.name_exists(name, exclude_id=collection_id):
            raise CollectionConflictError(f"Collection '{name}' already exists")

        if name is not None:
            model.name = name
        if fields is not None:
            model.fields = normalize_fields(fields)
        model.updated_at = utcnow()

        try:
            await self.session.flush()
            await self.session.commit()
        except IntegrityError as e:
            await self.session.rollback()
            raise CollectionConflictError(f"Collection '{name}' already exists") from e

        logger.info("Collection updated", collection_id=collection_id)
        return CollectionRepository.to_entity(model)

    async def delete_collection(self, collection_id: str) -> None:
        """Delete a collection together with all of its entries.

        Raises:
            CollectionNotFoundError: If it does not exist.
        """
        deleted = await self.repository.delete(collection_id)
        if not deleted:
            await self.session.rollback()
            raise CollectionNotFoundError(collection_id)
        await self.session.commit()
        logger.info("Collection deleted", collection_id=collection_id)
