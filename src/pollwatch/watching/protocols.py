"""Contracts between watchers and their collaborators.

- Scheduler: invokes a callback at a fixed interval
- NotificationSink: receives one file path per notification
- Watcher: a watch strategy that pushes paths into a sink
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class NotificationSink(Protocol):
    """Push target for added/changed file paths."""

    def push(self, path: str) -> None: ...


@runtime_checkable
class Scheduler(Protocol):
    """Fixed-interval timer.

    Implementations must not start a tick while the previous callback is
    still running.
    """

    def tick(self, interval: float, callback: Callable[[], None]) -> int:
        """Run ``callback`` every ``interval`` seconds; return a timer id."""
        ...

    def clear(self, timer_id: int) -> None:
        """Stop the timer registered under ``timer_id``."""
        ...


@runtime_checkable
class Watcher(Protocol):
    """A watch strategy selected by driver name."""

    def watch(self, sink: NotificationSink) -> None:
        """Register with the scheduler and start pushing paths to ``sink``."""
        ...

    def stop(self) -> None: ...
