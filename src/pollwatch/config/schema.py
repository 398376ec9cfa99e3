"""Configuration schema dataclasses for pollwatch.

Defines the structure of configuration at all levels (system, user, project).
All fields have defaults so partial configs merge together.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pollwatch.errors import WatchConfigError

DEFAULT_DRIVER = "scan_file"
DEFAULT_SCAN_INTERVAL = 2.0


@dataclass
class WatcherConfig:
    """Watch targets and polling options.

    Example config.yaml:
        watcher:
          driver: scan_file
          scan_interval: 2
          extensions: [".py", "yaml"]
          watch_dirs: ["src", "/opt/shared/lib"]
          watch_files: [".env"]
    """

    driver: str = DEFAULT_DRIVER
    scan_interval: float = DEFAULT_SCAN_INTERVAL  # Seconds between scan cycles
    extensions: list[str] = field(default_factory=list)  # Dot prefix optional
    watch_dirs: list[str] = field(default_factory=list)  # Relative to base_dir
    watch_files: list[str] = field(default_factory=list)  # Relative to base_dir
    base_dir: str | None = None  # Default: current working directory

    def normalized_extensions(self) -> frozenset[str]:
        """Return the extension filter with leading dots stripped."""
        return frozenset(ext[1:] if ext.startswith(".") else ext for ext in self.extensions)

    def resolve_base_dir(self) -> Path:
        return Path(self.base_dir).expanduser() if self.base_dir else Path.cwd()

    def resolved_dirs(self) -> list[Path]:
        """Watched directories as absolute paths."""
        base = self.resolve_base_dir()
        return [(base / Path(d).expanduser()).absolute() for d in self.watch_dirs]

    def resolved_files(self) -> list[Path]:
        """Explicit watched files as absolute paths."""
        base = self.resolve_base_dir()
        return [(base / Path(f).expanduser()).absolute() for f in self.watch_files]

    def validate(self) -> None:
        """Reject settings that make a scan schedule impossible.

        Raises:
            WatchConfigError: If the scan interval is not a positive number.
        """
        if isinstance(self.scan_interval, bool) or not isinstance(
            self.scan_interval, (int, float)
        ):
            raise WatchConfigError(f"scan_interval must be a number, got {self.scan_interval!r}")
        if self.scan_interval <= 0:
            raise WatchConfigError(f"scan_interval must be positive, got {self.scan_interval}")


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str | None = None  # DEBUG, INFO, WARNING, ERROR
    verbose: int | None = None  # 0..4, overrides level
    file: str | None = None  # Log file path


@dataclass
class Config:
    """Root configuration object."""

    watcher: WatcherConfig = field(default_factory=WatcherConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    # Unknown top-level sections, kept for extensions
    extra: dict[str, Any] = field(default_factory=dict)
