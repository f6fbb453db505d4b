"""
Tests for the WebSocket connection registry and broadcast.
"""

import pytest
from starlette.websockets import WebSocketState

from rest_api.services.events import publish_event
from ws_gateway.connection_manager import ConnectionManager


class TestConnectionManager:
    """Test connect, broadcast and shutdown."""

    @pytest.mark.asyncio
    async def test_connect_accepts_and_registers(self, hub, make_websocket):
        ws = make_websocket()
        await hub.connect(ws)

        assert ws.client_state == WebSocketState.CONNECTED
        assert hub.total_connections == 1

    @pytest.mark.asyncio
    async def test_broadcast_reaches_every_connected_socket(self, hub, make_websocket):
        sockets = [make_websocket() for _ in range(3)]
        for ws in sockets:
            await hub.connect(ws)

        sent = await hub.broadcast({"type": "orderUpdate", "order": {"id": 1}})

        assert sent == 3
        assert all(ws.sent == [{"type": "orderUpdate", "order": {"id": 1}}] for ws in sockets)

    @pytest.mark.asyncio
    async def test_broadcast_skips_closed_sockets(self, hub, make_websocket):
        open_ws, closing_ws = make_websocket(), make_websocket()
        await hub.connect(open_ws)
        await hub.connect(closing_ws)
        closing_ws.application_state = WebSocketState.DISCONNECTED

        assert await hub.broadcast({"type": "orderUpdate"}) == 1
        assert closing_ws.sent == []

    @pytest.mark.asyncio
    async def test_failed_send_drops_socket_and_continues(self, hub, make_websocket):
        broken, healthy = make_websocket(fail_on_send=True), make_websocket()
        await hub.connect(broken)
        await hub.connect(healthy)

        sent = await hub.broadcast({"type": "orderUpdate"})

        assert sent == 1
        assert healthy.sent == [{"type": "orderUpdate"}]
        assert hub.total_connections == 1

    @pytest.mark.asyncio
    async def test_disconnect_unregisters(self, hub, make_websocket):
        ws = make_websocket()
        await hub.connect(ws)
        await hub.disconnect(ws)
        await hub.disconnect(ws)

        assert hub.total_connections == 0
        assert await hub.broadcast({"type": "orderUpdate"}) == 0

    @pytest.mark.asyncio
    async def test_shutdown_closes_all_and_rejects_new(self, hub, make_websocket):
        sockets = [make_websocket(), make_websocket()]
        for ws in sockets:
            await hub.connect(ws)

        assert await hub.shutdown() == 2
        assert all(ws.closed_with == 1001 for ws in sockets)
        assert hub.total_connections == 0
        assert hub.is_shutting_down()

        with pytest.raises(ConnectionError):
            await hub.connect(make_websocket())


class TestPublishEvent:
    @pytest.mark.asyncio
    async def test_hub_failure_is_swallowed(self):
        class ExplodingHub(ConnectionManager):
            async def broadcast(self, payload):
                raise RuntimeError("hub down")

        assert await publish_event(ExplodingHub(), {"type": "orderUpdate", "order": {"id": 5}}) == 0
