# =============================================================================
# app/websocket/__init__.py - WebSocket Module
# =============================================================================
# Provides real-time notifications of item changes.
#
# Usage:
#   from app.websocket import publish_item_created
#
#   await publish_item_created(item)
# =============================================================================

from app.websocket.manager import ConnectionManager, websocket_manager
from app.websocket.broadcast import (
    ITEMS_CHANNEL,
    publish_event,
    publish_item_created,
    publish_item_deleted,
    publish_item_updated,
)

__all__ = [
    "ConnectionManager",
    "websocket_manager",
    "ITEMS_CHANNEL",
    "publish_event",
    "publish_item_created",
    "publish_item_deleted",
    "publish_item_updated",
]
