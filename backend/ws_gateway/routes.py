"""
WebSocket endpoint for order tracking.

Anonymous clients connect to /ws and receive every
{"type": "orderUpdate", "order": {...}} frame. The only client
message handled is the "ping" heartbeat.
"""

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from shared.config.logging import ws_gateway_logger as logger
from shared.config.settings import settings
from ws_gateway.connection_manager import ConnectionManager

router = APIRouter(tags=["realtime"])

PING_MESSAGES = {"ping", '{"type":"ping"}'}


def get_broadcast_hub(websocket: WebSocket) -> ConnectionManager:
    return websocket.app.state.broadcast_hub


@router.websocket("/ws")
async def orders_websocket(websocket: WebSocket):
    """
    Order update stream.

    Closes with 1009 when a client frame exceeds WS_MAX_MESSAGE_SIZE.
    Binary frames and unknown text are ignored.
    """
    manager = get_broadcast_hub(websocket)
    try:
        await manager.connect(websocket)
    except ConnectionError as e:
        logger.warning("WebSocket connection rejected", reason=str(e))
        return

    logger.info("Order subscriber connected", connections=manager.total_connections)

    try:
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                logger.info("Order subscriber disconnected", code=message.get("code"))
                break

            text = message.get("text")
            frame = text if text is not None else message.get("bytes") or b""
            if len(frame) > settings.ws_max_message_size:
                logger.warning(
                    "Message size exceeded limit",
                    size=len(frame),
                    max_size=settings.ws_max_message_size,
                )
                await websocket.close(code=1009, reason="Message too large")
                break

            if text is None:
                logger.debug("Ignoring binary client frame", size=len(frame))
            elif text in PING_MESSAGES:
                await websocket.send_text("pong")
            else:
                logger.debug("Ignoring client message", message=text[:100])

    except WebSocketDisconnect:
        logger.info("Order subscriber disconnected")
    finally:
        await manager.disconnect(websocket)
