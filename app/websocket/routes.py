# =============================================================================
# app/websocket/routes.py - WebSocket Routes
# =============================================================================
# WebSocket endpoint for real-time item changes.
#
# Connect: ws://host/ws/items
#
# Events:
#   - {"type": "item_created", "item": {...}}
#   - {"type": "item_updated", "item": {...}}
#   - {"type": "item_deleted", "item_id": 3}
# =============================================================================

import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect
from fastapi.concurrency import run_in_threadpool

from app.dependencies import ItemServiceDep
from app.exceptions import ItemstackException
from app.websocket.broadcast import ITEMS_CHANNEL
from app.websocket.manager import websocket_manager

logger = logging.getLogger(__name__)

router = APIRouter()


@router.websocket("/ws/items")
async def items_websocket(websocket: WebSocket, service: ItemServiceDep):
    """
    WebSocket endpoint for item change notifications.

    No authentication: the feed only carries what GET /items already exposes.

    Connection URL:
        ws://localhost:8000/ws/items

    If the item store cannot answer, the client gets an {"type": "error", ...}
    message and the socket is closed with code 1011.

    Example event:
        {
            "type": "item_created",
            "item": {"id": 4, "name": "Buy milk", "created_at": "..."}
        }
    """
    await websocket_manager.connect(ITEMS_CHANNEL, websocket)

    try:
        try:
            item_count = await run_in_threadpool(service.count)
        except ItemstackException as exc:
            logger.warning(f"WebSocket closed, item store unavailable: {exc.message}")
            await websocket.send_json({"type": "error", **exc.to_dict()})
            await websocket.close(code=1011, reason=exc.code)
            return

        await websocket.send_json({
            "type": "connected",
            "channel": ITEMS_CHANNEL,
            "item_count": item_count,
        })

        # Keep connection alive and answer keepalive pings
        while True:
            data = await websocket.receive_text()
            if data == "ping":
                await websocket.send_text("pong")
            else:
                logger.debug(f"WebSocket received: {data[:100]}")

    except WebSocketDisconnect:
        logger.info("WebSocket client disconnected from item feed")
    finally:
        websocket_manager.disconnect(ITEMS_CHANNEL, websocket)


@router.get("/ws/status")
async def websocket_status():
    """
    Get WebSocket connection statistics.

    Returns:
        dict: Connection counts and active channels
    """
    channels = websocket_manager.get_active_channels()
    return {
        "total_connections": websocket_manager.get_connection_count(),
        "active_channels": channels,
        "channel_count": len(channels),
    }
