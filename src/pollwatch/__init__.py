"""pollwatch: portable polling file watcher with content-hash confirmation."""

__version__ = "0.1.0"

from pollwatch.config import Config, WatcherConfig, load_config
from pollwatch.errors import WatchConfigError
from pollwatch.watching import (
    AsyncioScheduler,
    CallbackSink,
    NotificationSink,
    QueueSink,
    ScanFileWatcher,
    ScanResult,
    Scheduler,
    StateStore,
    Watcher,
    create_watcher,
)

__all__ = [
    "__version__",
    # Config
    "Config",
    "WatcherConfig",
    "load_config",
    # Watching
    "AsyncioScheduler",
    "CallbackSink",
    "NotificationSink",
    "QueueSink",
    "ScanFileWatcher",
    "ScanResult",
    "Scheduler",
    "StateStore",
    "Watcher",
    "create_watcher",
    # Errors
    "WatchConfigError",
]
