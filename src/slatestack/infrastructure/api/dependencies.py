"""FastAPI dependencies that build services for a request."""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from slatestack.core.config import get_settings
from slatestack.domain.services import CollectionService, EntryService, EntryValidator
from slatestack.infrastructure.persistence.database import get_db_session
from slatestack.infrastructure.services.update_service import UpdateService


async def get_collection_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> CollectionService:
    return CollectionService(session)


async def get_entry_service(
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> EntryService:
    """Build an entry service configured from application settings."""
    settings = get_settings()
    return EntryService(
        session,
        validator=EntryValidator(strict_options=settings.strict_select_options),
        insert_position=settings.entry_insert_position,
    )


def get_update_service(request: Request) -> UpdateService:
    """Build an update service sharing the application-wide release cache."""
    return UpdateService.from_settings(get_settings(), request.app.state.release_cache)


CollectionServiceDep = Annotated[CollectionService, Depends(get_collection_service)]
EntryServiceDep = Annotated[EntryService, Depends(get_entry_service)]
UpdateServiceDep = Annotated[UpdateService, Depends(get_update_service)]
