"""Where pollwatch looks for config.yaml.

Lowest to highest priority:
- System: /etc/pollwatch/ (Windows: %PROGRAMDATA%\\pollwatch\\)
- User: $XDG_CONFIG_HOME/pollwatch/, ~/.config/pollwatch/ when ~/.config
  exists, otherwise ~/.pollwatch/ (Windows: %APPDATA%\\pollwatch\\)
- Project: $base_dir/.pollwatch/, next to the sources being watched
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

CONFIG_FILENAME = "config.yaml"
APP_NAME = "pollwatch"
PROJECT_DIRNAME = ".pollwatch"


def _windows_dir(env_var: str) -> Path | None:
    # Unset on stripped-down service accounts; skip that layer then
    root = os.environ.get(env_var)
    return Path(root) / APP_NAME if root else None


def get_system_config_path() -> Path | None:
    """Machine-wide config shared by every project on the host.

    Returns None on Windows when %PROGRAMDATA% is unset. The file may not
    exist.
    """
    if sys.platform == "win32":
        directory = _windows_dir("PROGRAMDATA")
    else:
        directory = Path("/etc") / APP_NAME
    return directory / CONFIG_FILENAME if directory else None


def get_user_config_path() -> Path | None:
    """Per-user defaults, e.g. a preferred scan interval or driver.

    Returns None on Windows when %APPDATA% is unset. The file may not exist.
    """
    if sys.platform == "win32":
        directory = _windows_dir("APPDATA")
        return directory / CONFIG_FILENAME if directory else None

    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config) / APP_NAME / CONFIG_FILENAME

    # Follow the XDG default only on hosts that already use it; a bare
    # home directory gets the dot-directory instead of a new ~/.config
    home = Path.home()
    if (home / ".config").exists():
        return home / ".config" / APP_NAME / CONFIG_FILENAME
    return home / PROJECT_DIRNAME / CONFIG_FILENAME


def get_project_config_path(base_dir: str | Path) -> Path:
    """Config checked in with the project; watch paths in it are relative
    to ``base_dir``."""
    return Path(base_dir) / PROJECT_DIRNAME / CONFIG_FILENAME


def get_config_paths(base_dir: str | Path | None = None) -> list[Path]:
    """Config files to merge, lowest priority first.

    Layers that cannot be located on this platform are left out. The
    project layer is included only when ``base_dir`` is given.
    """
    candidates = [get_system_config_path(), get_user_config_path()]
    if base_dir:
        candidates.append(get_project_config_path(base_dir))
    return [path for path in candidates if path is not None]
