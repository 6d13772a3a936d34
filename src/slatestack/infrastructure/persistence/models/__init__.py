"""SQLAlchemy models for Slatestack tables.

All models inherit from the Base class defined in database.py and are
automatically created on application startup in development mode.
"""

from slatestack.infrastructure.persistence.models.collection import CollectionModel
from slatestack.infrastructure.persistence.models.entry import EntryModel

__all__ = [
    "CollectionModel",
    "EntryModel",
]
