"""
Common utilities shared across routers.
"""

from .dependencies import get_broadcast_hub, get_order_simulator
from .pagination import Pagination, get_pagination

__all__ = [
    "get_broadcast_hub",
    "get_order_simulator",
    "Pagination",
    "get_pagination",
]
