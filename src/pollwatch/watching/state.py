"""Two-generation snapshot store for the scan watcher.

``last`` is the baseline confirmed by the previous successful cycle and
``current`` is assembled by the cycle in progress. Only ``promote()`` moves
``current`` into ``last``, so a cycle that fails part-way leaves the
baseline untouched.
"""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterable
from dataclasses import dataclass

_CHUNK_SIZE = 64 * 1024


def file_digest(path: str) -> str:
    """MD5 hex digest of the full file content."""
    digest = hashlib.md5(usedforsecurity=False)
    with open(path, "rb") as f:
        while chunk := f.read(_CHUNK_SIZE):
            digest.update(chunk)
    return digest.hexdigest()


def file_mtime(path: str) -> int:
    return os.stat(path).st_mtime_ns


@dataclass(slots=True)
class FileRecord:
    """Observed state of one file; identity is ``path``."""

    path: str
    mtime: int
    digest: str | None = None


Snapshot = dict[str, FileRecord]


class StateStore:
    """Owns the ``last`` and ``current`` snapshots."""

    def __init__(self, last: Snapshot | None = None) -> None:
        self.last: Snapshot = dict(last) if last else {}
        self.current: Snapshot = {}

    def seed(self, paths: Iterable[str], with_digest: bool = True) -> None:
        """Establish the baseline from files that exist right now.

        Stats (and unless ``with_digest`` is False, hashes) every path into
        ``last``. Used once at startup; produces no classification results.
        """
        for path in paths:
            digest = file_digest(path) if with_digest else None
            self.last[path] = FileRecord(path, file_mtime(path), digest)

    def begin_cycle(self) -> None:
        self.current = {}

    def record_observed(self, path: str, mtime: int, digest: str | None = None) -> FileRecord:
        """Insert or overwrite ``path`` in the current snapshot."""
        record = FileRecord(path, mtime, digest)
        self.current[path] = record
        return record

    def baseline(self, path: str) -> FileRecord | None:
        return self.last.get(path)

    def observed(self, path: str) -> FileRecord | None:
        return self.current.get(path)

    def deleted_paths(self) -> set[str]:
        """Paths in the baseline that the current cycle did not observe."""
        return self.last.keys() - self.current.keys()

    def promote(self) -> None:
        """Make ``current`` the new baseline and start an empty ``current``.

        Call only after a cycle completed without error.
        """
        self.last = self.current
        self.current = {}
