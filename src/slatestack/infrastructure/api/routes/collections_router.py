"""Collections API routes.

Provides admin endpoints for defining collections and their field schemas.
"""

from fastapi import APIRouter, Response, status

from slatestack.infrastructure.api.dependencies import CollectionServiceDep
from slatestack.infrastructure.api.schemas import (
    CollectionResponse,
    CreateCollectionRequest,
    ErrorResponse,
    UpdateCollectionRequest,
)

router = APIRouter()


@router.get("", response_model=list[CollectionResponse])
async def list_collections(service: CollectionServiceDep) -> list[CollectionResponse]:
    """List all collections ordered by name."""
    collections = await service.list_collections()
    return [CollectionResponse.from_entity(c) for c in collections]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CollectionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid collection definition"},
        409: {"model": ErrorResponse, "description": "Collection name already exists"},
    },
)
async def create_collection(
    request: CreateCollectionRequest,
    service: CollectionServiceDep,
) -> CollectionResponse:
    """Create a new collection."""
    collection = await service.create_collection(
        request.name, [f.to_stored() for f in request.fields]
    )
    return CollectionResponse.from_entity(collection)


@router.get(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={404: {"model": ErrorResponse, "description": "Collection not found"}},
)
async def get_collection(collection_id: str, service: CollectionServiceDep) -> CollectionResponse:
    collection = await service.get_collection(collection_id)
    return CollectionResponse.from_entity(collection)


@router.patch(
    "/{collection_id}",
    response_model=CollectionResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Invalid collection definition"},
        404: {"model": ErrorResponse, "description": "Collection not found"},
        409: {"model": ErrorResponse, "description": "Collection name already exists"},
    },
)
async def update_collection(
    collection_id: str,
    request: UpdateCollectionRequest,
    service: CollectionServiceDep,
) -> CollectionResponse:
    """Rename a collection and/or replace its field schema."""
    fields = None if request.fields is None else [f.to_stored() for f in request.fields]
    collection = await service.update_collection(collection_id, name=request.name, fields=fields)
    return CollectionResponse.from_entity(collection)


@router.delete(
    "/{collection_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse, "description": "Collection not found"}},
)
async def delete_collection(collection_id: str, service: CollectionServiceDep) -> Response:
    """Delete a collection and all of its entries."""
    await service.delete_collection(collection_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
