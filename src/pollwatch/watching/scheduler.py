"""Asyncio-based fixed-interval scheduler.

Each timer is a task that sleeps for the interval and then runs the
callback synchronously, so a slow callback delays the next tick instead of
overlapping with it.
"""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable

from pollwatch.logging import get_logger

log = get_logger("watching.scheduler")


class AsyncioScheduler:
    """Scheduler backed by asyncio tasks.

    ``tick()`` must be called while an event loop is running.
    """

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._tasks: dict[int, asyncio.Task[None]] = {}

    @property
    def active_count(self) -> int:
        return len(self._tasks)

    def tick(self, interval: float, callback: Callable[[], None]) -> int:
        timer_id = next(self._ids)
        self._tasks[timer_id] = asyncio.create_task(
            self._run(timer_id, interval, callback),
            name=f"pollwatch-timer-{timer_id}",
        )
        log.debug("Timer %d started (interval=%.1fs)", timer_id, interval)
        return timer_id

    async def _run(self, timer_id: int, interval: float, callback: Callable[[], None]) -> None:
        try:
            while True:
                await asyncio.sleep(interval)
                try:
                    callback()
                except Exception:
                    log.exception("Timer %d callback failed", timer_id)
        except asyncio.CancelledError:
            log.debug("Timer %d cancelled", timer_id)
            raise

    def clear(self, timer_id: int) -> None:
        task = self._tasks.pop(timer_id, None)
        if task is not None and not task.done():
            task.cancel()

    def clear_all(self) -> None:
        for timer_id in list(self._tasks):
            self.clear(timer_id)
