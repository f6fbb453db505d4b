"""
WebSocket connection manager.
Registry of subscribers that receive every order update.

One instance is created by the application lifespan, stored on
app.state and shut down on exit.
"""

from __future__ import annotations

import asyncio
from typing import Any

from fastapi import WebSocket
from starlette.websockets import WebSocketState

from shared.config.logging import ws_gateway_logger as logger


def _is_ws_connected(ws: WebSocket) -> bool:
    """True if the connection is ready to send/receive messages."""
    return ws.client_state == WebSocketState.CONNECTED and ws.application_state == WebSocketState.CONNECTED


class ConnectionManager:
    """
    Manages WebSocket connections for real-time order notifications.

    Delivery is broadcast: every subscriber gets every update and
    filters by order id client-side.
    Uses asyncio.Lock for registry modifications.
    """

    def __init__(self, accept_timeout: float = 5.0):
        self._shutdown = False
        self._connections: set[WebSocket] = set()
        self._lock = asyncio.Lock()
        self._accept_timeout = accept_timeout

    async def connect(self, websocket: WebSocket) -> None:
        """
        Accept a WebSocket connection and register it.

        Raises:
            ConnectionError: during shutdown or if the handshake times out.
        """
        if self._shutdown:
            raise ConnectionError("Server is shutting down")

        try:
            await asyncio.wait_for(websocket.accept(), timeout=self._accept_timeout)
        except asyncio.TimeoutError:
            raise ConnectionError("WebSocket accept timed out")

        async with self._lock:
            self._connections.add(websocket)

    async def disconnect(self, websocket: WebSocket) -> None:
        """Remove a connection. Unknown sockets are ignored."""
        async with self._lock:
            self._connections.discard(websocket)

    async def broadcast(self, payload: dict[str, Any]) -> int:
        """
        Send a message to all connected clients.

        Sockets that are not open are skipped. A socket whose send fails
        is logged and dropped; the remaining sockets still get the message.

        Returns:
            Number of connections that received the message.
        """
        async with self._lock:
            connections = list(self._connections)

        sent = 0
        failed: list[WebSocket] = []
        for ws in connections:
            if not _is_ws_connected(ws):
                logger.debug("Skipping send to disconnected socket")
                continue
            try:
                await ws.send_json(payload)
                sent += 1
            except Exception as e:
                logger.warning("Failed to broadcast message", error=str(e))
                failed.append(ws)

        if failed:
            async with self._lock:
                self._connections.difference_update(failed)

        return sent

    @property
    def total_connections(self) -> int:
        """Get total number of registered connections."""
        return len(self._connections)

    def get_stats(self) -> dict[str, Any]:
        """Get connection statistics."""
        return {
            "total_connections": self.total_connections,
            "shutting_down": self._shutdown,
        }

    async def shutdown(self) -> int:
        """
        Graceful shutdown: reject new connections, close and clear existing ones.

        Returns:
            Number of connections closed.
        """
        self._shutdown = True
        logger.info("WebSocket manager shutting down")

        async with self._lock:
            connections = list(self._connections)
            self._connections.clear()

        closed = 0
        for ws in connections:
            try:
                await ws.close(code=1001, reason="Server shutdown")
                closed += 1
            except Exception as e:
                logger.warning("Failed to close connection during shutdown", error=str(e))

        logger.info("WebSocket shutdown complete", closed=closed)
        return closed

    def is_shutting_down(self) -> bool:
        """Check if the manager is in shutdown mode."""
        return self._shutdown
