"""Notification sinks shipped with pollwatch."""

from __future__ import annotations

import asyncio
from collections.abc import Callable


class QueueSink:
    """Pushes paths into an unbounded asyncio.Queue.

    Example:
        queue: asyncio.Queue[str] = asyncio.Queue()
        watcher.watch(QueueSink(queue))
        path = await queue.get()
    """

    def __init__(self, queue: asyncio.Queue[str] | None = None) -> None:
        self.queue: asyncio.Queue[str] = queue if queue is not None else asyncio.Queue()

    def push(self, path: str) -> None:
        self.queue.put_nowait(path)


class CallbackSink:
    """Forwards each path to a plain callable."""

    def __init__(self, callback: Callable[[str], None]) -> None:
        self._callback = callback

    def push(self, path: str) -> None:
        self._callback(path)
