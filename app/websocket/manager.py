# =============================================================================
# app/websocket/manager.py - WebSocket Connection Manager
# =============================================================================
# Manages WebSocket connections per channel and handles broadcasting.
#
# Usage:
#   from app.websocket import websocket_manager
#
#   # Connect a client
#   await websocket_manager.connect("items", websocket)
#
#   # Broadcast to all clients on a channel
#   await websocket_manager.broadcast("items", {"type": "item_created", ...})
#
#   # Disconnect a client
#   websocket_manager.disconnect("items", websocket)
# =============================================================================

import logging
from typing import Dict, Set

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class ConnectionManager:
    """
    Manages WebSocket connections organized by channel name.

    Each channel can have multiple connected clients (e.g., multiple browser tabs).
    When an event occurs on a channel, it's broadcast to all connected clients.
    """

    def __init__(self):
        # channel -> set of WebSocket connections
        self.connections: Dict[str, Set[WebSocket]] = {}
        self._total_connections = 0

    async def connect(self, channel: str, websocket: WebSocket) -> None:
        """
        Accept a new WebSocket connection and track it.

        Args:
            channel: The channel this connection is watching
            websocket: The WebSocket connection
        """
        await websocket.accept()

        self.connections.setdefault(channel, set()).add(websocket)
        self._total_connections += 1

        logger.info(
            f"WebSocket connected to channel {channel}. "
            f"Total connections: {self._total_connections}"
        )

    def disconnect(self, channel: str, websocket: WebSocket) -> None:
        """
        Remove a WebSocket connection from tracking.

        Safe to call for a connection that was already dropped by broadcast().
        """
        sockets = self.connections.get(channel)
        if sockets and websocket in sockets:
            sockets.discard(websocket)
            self._total_connections -= 1

            if not sockets:
                del self.connections[channel]

            logger.info(
                f"WebSocket disconnected from channel {channel}. "
                f"Total connections: {self._total_connections}"
            )

    async def broadcast(self, channel: str, message: dict) -> int:
        """
        Broadcast a message to all connections on a channel.

        Args:
            channel: The channel to broadcast to
            message: The message dict to send (will be JSON encoded)

        Returns:
            int: Number of clients the message was sent to
        """
        if channel not in self.connections:
            logger.debug(f"No connections for channel {channel}, skipping broadcast")
            return 0

        dead_connections: Set[WebSocket] = set()
        sent_count = 0

        # Copy: a send can yield and let a disconnect mutate the set
        for websocket in list(self.connections[channel]):
            try:
                await websocket.send_json(message)
                sent_count += 1
            except Exception as e:
                logger.warning(f"Failed to send to WebSocket: {e}")
                dead_connections.add(websocket)

        for ws in dead_connections:
            self.disconnect(channel, ws)

        if dead_connections:
            logger.info(f"Cleaned up {len(dead_connections)} dead connections")

        logger.debug(
            f"Broadcast to channel {channel}: "
            f"type={message.get('type')}, sent to {sent_count} clients"
        )

        return sent_count

    def get_connection_count(self, channel: str | None = None) -> int:
        """
        Get the number of active connections.

        Args:
            channel: If provided, count for that channel. Otherwise total.
        """
        if channel:
            return len(self.connections.get(channel, set()))
        return self._total_connections

    def get_active_channels(self) -> list[str]:
        """Channels with at least one connection."""
        return list(self.connections.keys())


# Global singleton instance
websocket_manager = ConnectionManager()
