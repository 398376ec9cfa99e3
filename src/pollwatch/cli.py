"""Command-line interface for pollwatch."""

from __future__ import annotations

import argparse
import asyncio
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.markup import escape

from pollwatch import __version__
from pollwatch.config import Config, load_config
from pollwatch.errors import WatchConfigError
from pollwatch.logging import get_logger, setup_logging
from pollwatch.watching import (
    AsyncioScheduler,
    QueueSink,
    available_drivers,
    create_watcher,
)

console = Console()
err_console = Console(stderr=True)

log = get_logger("cli")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="pollwatch",
        description="Poll files and directories and print the paths that were added or changed",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="count",
        default=None,
        help="Increase verbosity (repeat up to 4 times)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Extra config file layered above system/user/project config",
    )
    parser.add_argument(
        "--base-dir",
        type=Path,
        default=None,
        help="Base for relative watch paths and project config (default: cwd)",
    )
    parser.add_argument(
        "-d", "--dir",
        dest="watch_dirs",
        action="append",
        help="Directory to watch recursively (repeatable)",
    )
    parser.add_argument(
        "-f", "--file",
        dest="watch_files",
        action="append",
        help="Single file to watch, relative to the base dir (repeatable)",
    )
    parser.add_argument(
        "-e", "--ext",
        dest="extensions",
        action="append",
        help="File extension to watch inside directories, e.g. py or .py (repeatable)",
    )
    parser.add_argument(
        "-i", "--interval",
        dest="scan_interval",
        type=float,
        help="Seconds between scans",
    )
    parser.add_argument(
        "--driver",
        help="Watcher driver (default: scan_file)",
    )
    parser.add_argument(
        "--list-drivers",
        action="store_true",
        help="Print the available drivers and exit",
    )
    return parser


def cli_overrides(parsed: argparse.Namespace) -> dict[str, Any]:
    """Turn parsed flags into a config dict; unset flags are omitted."""
    watcher = {
        key: getattr(parsed, key)
        for key in ("watch_dirs", "watch_files", "extensions", "scan_interval", "driver")
        if getattr(parsed, key) is not None
    }
    overrides: dict[str, Any] = {}
    if watcher:
        overrides["watcher"] = watcher
    if parsed.verbose is not None:
        overrides["logging"] = {"verbose": parsed.verbose}
    return overrides


async def run_watch(config: Config) -> int:
    """Seed the configured watcher and print notifications until cancelled."""
    scheduler = AsyncioScheduler()
    watcher = create_watcher(config.watcher, scheduler)
    sink = QueueSink()
    watcher.watch(sink)
    console.print(
        f"[dim]Watching with {config.watcher.driver} "
        f"every {config.watcher.scan_interval}s (Ctrl+C to stop)[/dim]"
    )
    try:
        while True:
            path = await sink.queue.get()
            console.print(f"[green]reload[/green] {escape(path)}")
    finally:
        watcher.stop()
        scheduler.clear_all()


def run_cli(args: Sequence[str]) -> int:
    """Run the CLI with the given arguments."""
    parser = create_parser()
    parsed = parser.parse_args(args)

    if parsed.list_drivers:
        for name in available_drivers():
            console.print(name)
        return 0

    config = load_config(
        base_dir=parsed.base_dir or Path.cwd(),
        config_path=parsed.config,
        overrides=cli_overrides(parsed),
    )
    setup_logging(config.logging)

    if not config.watcher.watch_dirs and not config.watcher.watch_files:
        err_console.print("[red]error:[/red] nothing to watch (use --dir/--file or a config file)")
        return 2

    try:
        return asyncio.run(run_watch(config))
    except WatchConfigError as e:
        err_console.print(f"[red]error:[/red] {escape(str(e))}")
        return 2
    except KeyboardInterrupt:
        log.info("Interrupted")
        return 0


def main() -> None:
    import sys

    sys.exit(run_cli(sys.argv[1:]))
