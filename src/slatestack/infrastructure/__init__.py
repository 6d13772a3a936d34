"""Infrastructure layer - External dependencies and implementations.

This layer contains the database adapters (SQLAlchemy), the API
(FastAPI) and the client for the upstream release API (httpx).
"""

from slatestack.infrastructure.persistence.database import (
    Base,
    DatabaseManager,
    close_database,
    get_db_manager,
    get_db_session,
    init_database,
)

__all__ = [
    "Base",
    "DatabaseManager",
    "get_db_manager",
    "get_db_session",
    "init_database",
    "close_database",
]
