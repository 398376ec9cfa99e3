"""Configuration file loading.

Handles:
- YAML file parsing
- Cascading system -> user -> project -> explicit file -> environment
- Conversion from the merged dict to the typed Config dataclass
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from pollwatch.config.paths import get_config_paths
from pollwatch.config.schema import (
    DEFAULT_DRIVER,
    DEFAULT_SCAN_INTERVAL,
    Config,
    LoggingConfig,
    WatcherConfig,
)
from pollwatch.logging import LOG_ENV_VAR

_log = logging.getLogger("pollwatch.config")

INTERVAL_ENV_VAR = "POLLWATCH_SCAN_INTERVAL"


def load_yaml_file(path: Path) -> dict[str, Any]:
    """Load a YAML file, returning empty dict if not found or invalid."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        _log.warning("Invalid YAML in %s: %s", path, e)
        return {}
    except OSError as e:
        _log.warning("Error reading %s: %s", path, e)
        return {}
    return data if isinstance(data, dict) else {}


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Merge ``override`` onto a copy of ``base``.

    Nested dicts merge recursively, lists and scalars are replaced, and
    ``None`` in ``override`` leaves the base value untouched.
    """
    merged = dict(base)
    for key, value in override.items():
        if value is None:
            continue
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def merge_configs(*configs: dict[str, Any]) -> dict[str, Any]:
    """Merge config dicts in order; later ones win."""
    result: dict[str, Any] = {}
    for config in configs:
        if config:
            result = deep_merge(result, config)
    return result


def env_overrides() -> dict[str, Any]:
    """Build a config dict from POLLWATCH_* environment variables."""
    overrides: dict[str, Any] = {}

    log_path = os.environ.get(LOG_ENV_VAR)
    if log_path:
        overrides.setdefault("logging", {})["file"] = log_path

    interval = os.environ.get(INTERVAL_ENV_VAR)
    if interval:
        try:
            overrides.setdefault("watcher", {})["scan_interval"] = float(interval)
        except ValueError:
            _log.warning("Ignoring non-numeric %s=%r", INTERVAL_ENV_VAR, interval)

    return overrides


def _string_list(value: Any) -> list[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if isinstance(item, (str, int))]


def dict_to_config(data: dict[str, Any]) -> Config:
    """Convert a merged dict to the typed Config."""
    watcher_data = data.get("watcher") or {}
    watcher = WatcherConfig(
        driver=watcher_data.get("driver", DEFAULT_DRIVER),
        scan_interval=watcher_data.get("scan_interval", DEFAULT_SCAN_INTERVAL),
        extensions=_string_list(watcher_data.get("extensions")),
        watch_dirs=_string_list(watcher_data.get("watch_dirs")),
        watch_files=_string_list(watcher_data.get("watch_files")),
        base_dir=watcher_data.get("base_dir"),
    )

    log_data = data.get("logging") or {}
    logging_config = LoggingConfig(
        level=log_data.get("level"),
        verbose=log_data.get("verbose"),
        file=log_data.get("file"),
    )

    known_keys = {"watcher", "logging"}
    extra = {k: v for k, v in data.items() if k not in known_keys}

    return Config(watcher=watcher, logging=logging_config, extra=extra)


def load_config(
    base_dir: str | Path | None = None,
    config_path: Path | None = None,
    overrides: dict[str, Any] | None = None,
) -> Config:
    """Load and merge config from all sources.

    Priority order (highest to lowest):
    1. ``overrides`` (command-line flags)
    2. Environment variables
    3. Explicit ``config_path``
    4. Project config ($base_dir/.pollwatch/config.yaml)
    5. User config
    6. System config

    Args:
        base_dir: Project directory; also the default base for relative
            watch paths.
        config_path: Extra config file layered above the cascade.
        overrides: Dict merged last.

    Returns:
        Merged Config object.
    """
    configs: list[dict[str, Any]] = []

    paths = get_config_paths(base_dir)
    if config_path is not None:
        paths.append(config_path)

    for path in paths:
        config_data = load_yaml_file(path)
        if config_data:
            _log.debug("Loaded config from %s", path)
            configs.append(config_data)

    configs.append(env_overrides())
    if overrides:
        configs.append(overrides)

    merged = merge_configs(*configs)
    if base_dir is not None:
        merged = deep_merge({"watcher": {"base_dir": str(base_dir)}}, merged)

    return dict_to_config(merged)
