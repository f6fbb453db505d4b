"""
Event Services - Real-time order updates and simulated progression.

Provides:
- build_order_event / publish_event: broadcast of order changes
- Scheduler / AsyncioScheduler: deferred task seam
- OrderProgressSimulator: stand-in for kitchen/dispatch progression
"""

from .publisher import (
    build_order_event,
    publish_event,
)

from .scheduler import (
    Scheduler,
    AsyncioScheduler,
)

from .order_simulator import OrderProgressSimulator

__all__ = [
    "build_order_event",
    "publish_event",
    "Scheduler",
    "AsyncioScheduler",
    "OrderProgressSimulator",
]
