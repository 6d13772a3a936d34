"""API Routes for Slatestack."""

from .collections_router import router as collections_router
from .content_router import router as content_router
from .entries_router import router as entries_router
from .update_router import router as update_router

__all__ = [
    "collections_router",
    "content_router",
    "entries_router",
    "update_router",
]
