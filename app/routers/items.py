# =============================================================================
# app/routers/items.py - Item CRUD Endpoints
# =============================================================================
# List, create, read, rename and delete items.
# Mutations are broadcast on the /ws/items feed after they succeed. Their
# store calls run in the threadpool so a remote store never blocks the loop.
#
# Mounted twice in main.py: at /items (the paths the frontend calls) and at
# /api/v1/items.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query, Response, status
from fastapi.concurrency import run_in_threadpool

from app.config import settings
from app.dependencies import ItemServiceDep
from app.websocket import (
    publish_item_created,
    publish_item_deleted,
    publish_item_updated,
)
from core.models.item import Item, ItemCreate, ItemDeleteResponse, ItemUpdate

router = APIRouter()

ItemId = Annotated[int, Path(ge=1, description="Item id")]


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=list[Item])
def list_items(
    response: Response,
    service: ItemServiceDep,
    offset: Annotated[int, Query(ge=0, description="Number of items to skip")] = 0,
    limit: Annotated[
        int | None,
        Query(ge=1, le=settings.MAX_PAGE_SIZE, description="Max items to return (default: all)"),
    ] = None,
):
    """
    List items in ascending id order.

    Returns a plain JSON array so a frontend can render it directly.
    The total number of items is sent in the X-Total-Count header.
    """
    items = service.list_items(offset=offset, limit=limit)
    response.headers["X-Total-Count"] = str(service.count())
    return items


@router.post("", response_model=Item, status_code=status.HTTP_201_CREATED)
async def create_item(request: ItemCreate, service: ItemServiceDep):
    """
    Create a new item.

    The store assigns the id; ids are never reused.
    """
    item = await run_in_threadpool(service.create_item, request)
    await publish_item_created(item)
    return item


@router.get("/{item_id}", response_model=Item)
def get_item(item_id: ItemId, service: ItemServiceDep):
    """
    Get one item.

    Returns 404 ITEM_NOT_FOUND if the id doesn't exist.
    """
    return service.get_item(item_id)


@router.put("/{item_id}", response_model=Item)
async def update_item(item_id: ItemId, request: ItemUpdate, service: ItemServiceDep):
    """
    Rename an item.

    Returns 404 ITEM_NOT_FOUND if the id doesn't exist.
    """
    item = await run_in_threadpool(service.update_item, item_id, request)
    await publish_item_updated(item)
    return item


@router.delete("/{item_id}", response_model=ItemDeleteResponse)
async def delete_item(item_id: ItemId, service: ItemServiceDep):
    """
    Delete an item.

    Deleting an id that doesn't exist is a no-op: the response says
    `deleted: false` and nothing is broadcast.
    """
    deleted = await run_in_threadpool(service.delete_item, item_id)

    if deleted:
        await publish_item_deleted(item_id)

    return ItemDeleteResponse(
        id=item_id,
        deleted=deleted,
        message="Item deleted" if deleted else "Item not found, nothing to delete",
    )
