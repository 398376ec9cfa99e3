"""Configuration management for pollwatch.

Provides hierarchical YAML-based configuration with:
- System-level config (/etc/pollwatch/ or %PROGRAMDATA%)
- User-level config (~/.config/pollwatch/, ~/.pollwatch/ or %APPDATA%)
- Project-level config ($base_dir/.pollwatch/)
- Environment variable overrides (POLLWATCH_LOG, POLLWATCH_SCAN_INTERVAL)

Example usage:
    from pollwatch.config import load_config

    config = load_config(base_dir="/path/to/project")
    print(config.watcher.watch_dirs)
    print(config.watcher.scan_interval)
"""

from pollwatch.config.loader import (
    deep_merge,
    dict_to_config,
    load_config,
    merge_configs,
)
from pollwatch.config.paths import (
    get_config_paths,
    get_project_config_path,
    get_system_config_path,
    get_user_config_path,
)
from pollwatch.config.schema import (
    Config,
    LoggingConfig,
    WatcherConfig,
)

__all__ = [
    "Config",
    "LoggingConfig",
    "WatcherConfig",
    "load_config",
    "dict_to_config",
    "deep_merge",
    "merge_configs",
    "get_config_paths",
    "get_system_config_path",
    "get_user_config_path",
    "get_project_config_path",
]
