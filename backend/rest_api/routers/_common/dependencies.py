"""
Dependencies for the process-wide objects created in the lifespan.
"""

from fastapi import Request

from rest_api.services.events import OrderProgressSimulator
from ws_gateway.connection_manager import ConnectionManager


def get_broadcast_hub(request: Request) -> ConnectionManager:
    return request.app.state.broadcast_hub


def get_order_simulator(request: Request) -> OrderProgressSimulator:
    return request.app.state.order_simulator
