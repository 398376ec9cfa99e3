"""Polling watcher built on the scan-and-diff engine.

Each scheduler tick runs one cycle:
1. Scan explicit files, then watched directories
2. Push added paths to the sink
3. Push changed paths, unless something was deleted (then warn instead)
4. Promote the observed snapshot to the new baseline

A cycle that raises is logged at CRITICAL and not promoted, so the next
tick compares against the last good baseline again.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from pollwatch.config.schema import WatcherConfig
from pollwatch.errors import WatchConfigError
from pollwatch.logging import get_logger
from pollwatch.watching.protocols import NotificationSink, Scheduler
from pollwatch.watching.scanner import Scanner, ScanResult
from pollwatch.watching.state import StateStore

DELETION_WARNING = "Deleted files must be restarted manually to take effect."


class ScanFileWatcher:
    """Watches files by periodic scanning with content-hash confirmation.

    The baseline is seeded in the constructor, so a missing watch target
    fails immediately with WatchConfigError.

    Example:
        scheduler = AsyncioScheduler()
        watcher = ScanFileWatcher(config.watcher, scheduler)
        watcher.watch(QueueSink(queue))
    """

    def __init__(
        self,
        config: WatcherConfig,
        scheduler: Scheduler,
        store: StateStore | None = None,
        logger: logging.Logger | None = None,
        verify_content: bool = True,
    ) -> None:
        """Resolve targets and seed the baseline.

        Args:
            config: Watch targets, extension filter and interval.
            scheduler: Timer that will drive ``run_cycle``.
            store: Pre-built snapshot store; when given, seeding is skipped.
            logger: Logger for cycle summaries and failures.
            verify_content: Confirm mtime changes with a content digest.

        Raises:
            WatchConfigError: A target is missing or cannot be read, or the
                interval is invalid.
        """
        config.validate()
        self.verify_content = verify_content
        self._config = config
        self._scheduler = scheduler
        self._log = logger or get_logger("watching.scan")
        self._timer_id: int | None = None

        files = [str(p) for p in config.resolved_files()]
        dirs = [str(p) for p in config.resolved_dirs()]
        _check_targets(files, dirs)

        self.store = store if store is not None else StateStore()
        self.scanner = Scanner(
            self.store,
            config.normalized_extensions(),
            files=[os.path.realpath(f) for f in files],
            dirs=dirs,
            verify_content=self.verify_content,
        )
        if store is None:
            try:
                self.store.seed(self.scanner.watched_paths(), with_digest=verify_content)
            except OSError as e:
                raise WatchConfigError(f"Cannot establish baseline: {e}") from e
        self._log.info(
            "%s seeded %d files (%d dirs, %d explicit files)",
            type(self).__name__,
            len(self.store.last),
            len(dirs),
            len(files),
        )

    @property
    def interval(self) -> float:
        return float(self._config.scan_interval)

    @property
    def is_watching(self) -> bool:
        return self._timer_id is not None

    def watch(self, sink: NotificationSink) -> None:
        """Register one scan cycle per interval with the scheduler."""
        if self._timer_id is not None:
            self._log.warning("%s already watching", type(self).__name__)
            return
        self._timer_id = self._scheduler.tick(self.interval, lambda: self.run_cycle(sink))

    def stop(self) -> None:
        if self._timer_id is not None:
            self._scheduler.clear(self._timer_id)
            self._timer_id = None

    def run_cycle(self, sink: NotificationSink) -> ScanResult | None:
        """Scan, notify and promote once.

        Returns:
            The cycle's ScanResult, or None when the cycle failed and the
            baseline was left as it was.
        """
        try:
            result = self.scanner.scan()
            self._log.debug(
                "%s watching: total=%d changed=%d added=%d deleted=%d",
                type(self).__name__,
                result.total,
                len(result.changed),
                len(result.added),
                len(result.deleted),
                extra={
                    "total": result.total,
                    "changed": len(result.changed),
                    "added": len(result.added),
                    "deleted": len(result.deleted),
                },
            )
            for path in result.added:
                sink.push(path)
            if result.deleted:
                self._log.warning(DELETION_WARNING)
            else:
                for path in result.changed:
                    sink.push(path)
        except Exception:
            self._log.critical("Scan cycle failed; baseline kept", exc_info=True)
            return None

        self.store.promote()
        return result


def _check_targets(files: list[str], dirs: list[str]) -> None:
    for path in files:
        if not Path(path).is_file():
            raise WatchConfigError(f"Watched file does not exist: {path}")
    for path in dirs:
        if not Path(path).is_dir():
            raise WatchConfigError(f"Watched directory does not exist: {path}")
