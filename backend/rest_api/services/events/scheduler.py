"""
Deferred task scheduling.

Scheduler is the seam between the status simulator and real time:
production uses AsyncioScheduler, tests substitute a fake that runs
callbacks on demand.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Protocol

from shared.config.logging import get_logger

logger = get_logger(__name__)

AsyncCallback = Callable[[], Awaitable[object]]


class Scheduler(Protocol):
    def schedule(self, delay: float, callback: AsyncCallback) -> None:
        """Run callback once, delay seconds from now."""
        ...


class AsyncioScheduler:
    """
    Runs each callback as its own asyncio task after asyncio.sleep(delay).

    Callback failures are logged and never propagate, so one failed
    firing does not affect the others. Nothing survives a restart.
    """

    def __init__(self):
        self._tasks: set[asyncio.Task] = set()
        self._closed = False

    def schedule(self, delay: float, callback: AsyncCallback) -> None:
        if self._closed:
            logger.warning("Scheduler closed, dropping task", delay=delay)
            return

        task = asyncio.get_running_loop().create_task(self._run(delay, callback))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)

    async def _run(self, delay: float, callback: AsyncCallback) -> None:
        await asyncio.sleep(delay)
        try:
            await callback()
        except Exception as e:
            logger.error("Scheduled task failed", error=str(e), exc_info=True)

    @property
    def pending(self) -> int:
        return len(self._tasks)

    async def shutdown(self) -> int:
        """Cancel every pending task. Returns how many were cancelled."""
        self._closed = True
        tasks = list(self._tasks)
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        self._tasks.clear()

        logger.info("Scheduler stopped", cancelled=len(tasks))
        return len(tasks)
