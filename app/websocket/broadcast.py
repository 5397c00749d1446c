# =============================================================================
# app/websocket/broadcast.py - Item Event Publishing
# =============================================================================
# Helpers the item routes call after a successful mutation. Each one builds
# the event payload and hands it to the connection manager.
#
# Events:
#   - item_created: {"type", "item"}
#   - item_updated: {"type", "item"}
#   - item_deleted: {"type", "item_id"}
# =============================================================================

import logging
from typing import Any

from app.websocket.manager import websocket_manager
from core.models.item import Item

logger = logging.getLogger(__name__)

ITEMS_CHANNEL = "items"


async def publish_event(event_type: str, data: dict[str, Any]) -> int:
    """
    Broadcast an event to every client on the items channel.

    A failed broadcast never fails the request that caused it.

    Returns:
        int: Number of clients that received the event
    """
    try:
        return await websocket_manager.broadcast(
            ITEMS_CHANNEL,
            {"type": event_type, **data},
        )
    except Exception as e:
        logger.error(f"Failed to publish {event_type} event: {e}")
        return 0


async def publish_item_created(item: Item) -> int:
    return await publish_event("item_created", {"item": item.model_dump(mode="json")})


async def publish_item_updated(item: Item) -> int:
    return await publish_event("item_updated", {"item": item.model_dump(mode="json")})


async def publish_item_deleted(item_id: int) -> int:
    return await publish_event("item_deleted", {"item_id": item_id})
