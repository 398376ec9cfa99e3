"""Scan-and-diff engine.

Walks explicit files and watched directories, classifying every observed
file against the baseline held by a StateStore:

1. Path missing from the baseline -> added (hashed now).
2. Modification time differs -> hash it; a different digest means changed,
   an identical digest (touch, no-op rewrite) is carried forward silently.
3. Modification time equal -> baseline digest carried forward, no hashing.

Deletions are the baseline paths the cycle never observed.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum

from pollwatch.logging import TRACE, get_logger
from pollwatch.watching.state import StateStore, file_digest, file_mtime

log = get_logger("watching.scanner")


class Classification(Enum):
    """Outcome of classifying one observed file."""

    ADDED = "added"
    CHANGED = "changed"
    UNCHANGED = "unchanged"


@dataclass
class ScanResult:
    """Everything one scan cycle found."""

    changed: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    deleted: set[str] = field(default_factory=set)
    total: int = 0  # Files observed this cycle


def file_extension(name: str) -> str:
    """Text after the last dot of a file name, or "" when there is none."""
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


class Scanner:
    """Classifies watch targets against a StateStore.

    Args:
        store: Snapshot owner; ``scan()`` fills its ``current`` generation.
        extensions: Allowed extensions (no leading dot) for files found
            inside watched directories.
        files: Explicit files; never filtered.
        dirs: Directories walked recursively.
        verify_content: Confirm mtime changes with a content digest. When
            False any mtime change counts as a change and nothing is hashed.
    """

    def __init__(
        self,
        store: StateStore,
        extensions: Iterable[str],
        files: Iterable[str] = (),
        dirs: Iterable[str] = (),
        verify_content: bool = True,
    ) -> None:
        self.store = store
        self.extensions = frozenset(extensions)
        self.files = list(files)
        self.dirs = list(dirs)
        self.verify_content = verify_content

    def accepts(self, name: str) -> bool:
        return file_extension(name) in self.extensions

    def walk(self, directory: str) -> Iterator[tuple[str, int]]:
        """Yield ``(resolved_path, mtime_ns)`` for filtered-in files.

        Subdirectories are always descended into. Each directory is entered
        at most once per walk, keyed by its resolved path, so symlink loops
        terminate. Listing and stat errors propagate.
        """
        visited: set[str] = set()
        stack = [directory]
        while stack:
            current = stack.pop()
            real = os.path.realpath(current)
            if real in visited:
                log.log(TRACE, "Skipping already walked directory %s", current)
                continue
            visited.add(real)

            subdirs: list[str] = []
            with os.scandir(current) as entries:
                for entry in entries:
                    if entry.is_dir():
                        subdirs.append(entry.path)
                    elif entry.is_file() and self.accepts(entry.name):
                        yield os.path.realpath(entry.path), entry.stat().st_mtime_ns
            # Reversed so subdirectories pop in enumeration order
            stack.extend(reversed(subdirs))

    def watched_paths(self) -> Iterator[str]:
        """All paths a scan would observe right now, without duplicates."""
        seen: set[str] = set()
        for path in self.files:
            if path not in seen:
                seen.add(path)
                yield path
        for directory in self.dirs:
            for path, _mtime in self.walk(directory):
                if path not in seen:
                    seen.add(path)
                    yield path

    def classify(self, path: str, mtime: int) -> Classification:
        """Record ``path`` into the current snapshot and classify it."""
        store = self.store
        record = store.record_observed(path, mtime)
        previous = store.baseline(path)

        if previous is None:
            if self.verify_content:
                record.digest = file_digest(path)
            return Classification.ADDED

        if previous.mtime == mtime:
            record.digest = previous.digest
            return Classification.UNCHANGED

        if not self.verify_content:
            return Classification.CHANGED

        record.digest = file_digest(path)
        if previous.digest is None or record.digest != previous.digest:
            return Classification.CHANGED
        log.log(TRACE, "mtime moved but content identical: %s", path)
        return Classification.UNCHANGED

    def _collect(self, path: str, mtime: int, result: ScanResult) -> None:
        # A file reachable twice (explicit and under a watched dir) counts once
        if self.store.observed(path) is not None:
            return
        outcome = self.classify(path, mtime)
        if outcome is Classification.ADDED:
            result.added.append(path)
        elif outcome is Classification.CHANGED:
            result.changed.append(path)

    def scan_files(self, paths: Iterable[str], result: ScanResult) -> ScanResult:
        """Classify explicit files into ``result``."""
        for path in paths:
            self._collect(path, file_mtime(path), result)
        return result

    def scan_dir(self, directory: str, result: ScanResult) -> ScanResult:
        """Classify every filtered-in file below ``directory`` into ``result``."""
        for path, mtime in self.walk(directory):
            self._collect(path, mtime, result)
        return result

    def scan(self) -> ScanResult:
        """Run one full classification pass.

        Explicit files first, then each watched directory. Leaves the
        observed state in ``store.current``; promotion is the caller's job.
        """
        self.store.begin_cycle()
        result = ScanResult()
        self.scan_files(self.files, result)
        for directory in self.dirs:
            self.scan_dir(directory, result)
        result.deleted = self.store.deleted_paths()
        result.total = len(self.store.current)
        return result
