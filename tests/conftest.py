"""Root pytest configuration for all tests."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Callable
from pathlib import Path

import pytest

from pollwatch.logging import reset_logging

pytest_plugins = ("pytest_asyncio",)

# Fixed base timestamp so tests never depend on filesystem mtime resolution
BASE_MTIME_NS = 1_700_000_000_000_000_000


def md5_of(data: bytes) -> str:
    return hashlib.md5(data).hexdigest()


def real(path: Path | str) -> str:
    """Resolved string path, the identity key the scanner uses."""
    return os.path.realpath(path)


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo handlers/levels installed by setup_logging."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def write_file() -> Callable[..., Path]:
    """Write a file and pin its modification time.

    ``write_file(path, content, tick)`` writes ``content`` (if not None)
    and sets mtime to BASE_MTIME_NS + tick seconds.
    """

    def _write(path: Path, content: bytes | str | None = None, tick: int = 0) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        if content is not None:
            if isinstance(content, str):
                content = content.encode("utf-8")
            path.write_bytes(content)
        mtime = BASE_MTIME_NS + tick * 1_000_000_000
        os.utime(path, ns=(mtime, mtime))
        return path

    return _write


class FakeScheduler:
    """Scheduler double that records registrations and fires on demand."""

    def __init__(self) -> None:
        self.timers: dict[int, tuple[float, Callable[[], None]]] = {}
        self.cleared: list[int] = []
        self._next_id = 1

    def tick(self, interval: float, callback: Callable[[], None]) -> int:
        timer_id = self._next_id
        self._next_id += 1
        self.timers[timer_id] = (interval, callback)
        return timer_id

    def clear(self, timer_id: int) -> None:
        self.timers.pop(timer_id, None)
        self.cleared.append(timer_id)

    def fire(self) -> None:
        for _interval, callback in list(self.timers.values()):
            callback()


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()
