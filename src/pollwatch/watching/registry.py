"""Driver registry: maps a configured driver name to a Watcher factory.

Built-in drivers:
- scan_file: scan with content-hash confirmation (default)
- mtime: scan trusting modification times alone; touches count as changes
"""

from __future__ import annotations

from collections.abc import Callable

from pollwatch.config.schema import WatcherConfig
from pollwatch.errors import WatchConfigError
from pollwatch.logging import get_logger
from pollwatch.watching.driver import ScanFileWatcher
from pollwatch.watching.protocols import Scheduler, Watcher

log = get_logger("watching.registry")

WatcherFactory = Callable[[WatcherConfig, Scheduler], Watcher]

_drivers: dict[str, WatcherFactory] = {}


def register_driver(name: str, factory: WatcherFactory) -> None:
    """Register ``factory`` under ``name``, replacing any previous entry."""
    if name in _drivers:
        log.debug("Replacing driver %s", name)
    _drivers[name] = factory


def unregister_driver(name: str) -> None:
    _drivers.pop(name, None)


def get_driver(name: str) -> WatcherFactory:
    """Look up a driver factory.

    Raises:
        WatchConfigError: If no driver is registered under ``name``.
    """
    try:
        return _drivers[name]
    except KeyError:
        known = ", ".join(available_drivers()) or "none"
        raise WatchConfigError(f"Unknown watcher driver {name!r} (available: {known})") from None


def available_drivers() -> list[str]:
    return sorted(_drivers)


def create_watcher(config: WatcherConfig, scheduler: Scheduler) -> Watcher:
    """Build the watcher named by ``config.driver``."""
    return get_driver(config.driver)(config, scheduler)


def _mtime_watcher(config: WatcherConfig, scheduler: Scheduler) -> Watcher:
    return ScanFileWatcher(config, scheduler, verify_content=False)


register_driver("scan_file", ScanFileWatcher)
register_driver("mtime", _mtime_watcher)
