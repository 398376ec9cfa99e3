"""Polling-based file watching for pollwatch.

A scan watcher walks the configured files and directories once per
scheduler tick, reports added and changed files to a notification sink,
and asks for a manual restart when files disappear.
"""

from pollwatch.watching.driver import DELETION_WARNING, ScanFileWatcher
from pollwatch.watching.protocols import NotificationSink, Scheduler, Watcher
from pollwatch.watching.registry import (
    available_drivers,
    create_watcher,
    get_driver,
    register_driver,
    unregister_driver,
)
from pollwatch.watching.scanner import Classification, Scanner, ScanResult
from pollwatch.watching.scheduler import AsyncioScheduler
from pollwatch.watching.sinks import CallbackSink, QueueSink
from pollwatch.watching.state import FileRecord, Snapshot, StateStore, file_digest

__all__ = [
    "AsyncioScheduler",
    "CallbackSink",
    "Classification",
    "DELETION_WARNING",
    "FileRecord",
    "NotificationSink",
    "QueueSink",
    "ScanFileWatcher",
    "ScanResult",
    "Scanner",
    "Scheduler",
    "Snapshot",
    "StateStore",
    "Watcher",
    "available_drivers",
    "create_watcher",
    "file_digest",
    "get_driver",
    "register_driver",
    "unregister_driver",
]
