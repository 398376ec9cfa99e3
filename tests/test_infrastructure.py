"""Tests for infrastructure components (logging, command line).

Tests coverage for:
- src/pollwatch/logging.py
- src/pollwatch/cli.py
"""

from __future__ import annotations

import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from pollwatch.cli import cli_overrides, create_parser, run_cli
from pollwatch.config.schema import LoggingConfig
from pollwatch.logging import TRACE, VERBOSE, get_logger, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("POLLWATCH_LOG", raising=False)
    monkeypatch.delenv("POLLWATCH_SCAN_INTERVAL", raising=False)


# =============================================================================
# Logging Tests
# =============================================================================


class TestLogging:
    """Tests for logging setup."""

    def test_get_logger_children(self) -> None:
        """Test that named loggers hang off the pollwatch logger."""
        assert get_logger().name == "pollwatch"
        assert get_logger("watching.scan").name == "pollwatch.watching.scan"

    @pytest.mark.parametrize(
        ("config", "expected"),
        [
            (None, logging.INFO),
            (LoggingConfig(level="debug"), logging.DEBUG),
            (LoggingConfig(level="bogus"), logging.INFO),
            (LoggingConfig(verbose=0), logging.ERROR),
            (LoggingConfig(verbose=3), VERBOSE),
            (LoggingConfig(verbose=4), logging.DEBUG),
            (LoggingConfig(verbose=9), TRACE),
            (LoggingConfig(level="ERROR", verbose=2), logging.INFO),
        ],
    )
    def test_resolve_level(self, config, expected: int) -> None:
        """Test level resolution from level and verbose settings."""
        assert resolve_level(config) == expected

    def test_file_handler_from_config(self, tmp_path: Path) -> None:
        """Test logging to the file named in config."""
        log_file = tmp_path / "watch.log"
        setup_logging(LoggingConfig(level="DEBUG", file=str(log_file)))

        get_logger("watching.scan").debug("hello %s", "file")
        for handler in get_logger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "debug pollwatch.watching.scan: hello file" in content

    def test_file_handler_from_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test logging to the file named in POLLWATCH_LOG."""
        log_file = tmp_path / "env.log"
        monkeypatch.setenv("POLLWATCH_LOG", str(log_file))

        setup_logging()
        get_logger().warning("from env")
        for handler in get_logger().handlers:
            handler.flush()

        assert "from env" in log_file.read_text(encoding="utf-8")

    def test_setup_is_idempotent(self, tmp_path: Path) -> None:
        """Test that repeated setup installs handlers once."""
        config = LoggingConfig(file=str(tmp_path / "once.log"))
        setup_logging(config)
        setup_logging(config)
        assert len(get_logger().handlers) == 1

    def test_unopenable_log_file_falls_back_to_stderr(self, tmp_path: Path) -> None:
        """Test stderr fallback when the log file cannot be opened."""
        setup_logging(LoggingConfig(file=str(tmp_path / "missing-dir" / "x.log")))
        handlers = get_logger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.StreamHandler)
        assert not isinstance(handlers[0], logging.FileHandler)


# =============================================================================
# CLI Tests
# =============================================================================


class TestParser:
    """Tests for argument parsing."""

    def test_repeatable_targets(self) -> None:
        """Test that target flags accumulate."""
        parsed = create_parser().parse_args(
            ["-d", "src", "--dir", "config", "-f", ".env", "-e", "php", "--ext", ".inc"]
        )
        assert parsed.watch_dirs == ["src", "config"]
        assert parsed.watch_files == [".env"]
        assert parsed.extensions == ["php", ".inc"]

    def test_overrides_only_contain_given_flags(self) -> None:
        """Test that only given flags become overrides."""
        parsed = create_parser().parse_args(["-i", "0.5", "-vv"])
        assert cli_overrides(parsed) == {
            "watcher": {"scan_interval": 0.5},
            "logging": {"verbose": 2},
        }

    def test_no_flags_no_overrides(self) -> None:
        """Test that no flags means no overrides."""
        assert cli_overrides(create_parser().parse_args([])) == {}


class TestRunCli:
    """Tests for run_cli exit codes."""

    def test_list_drivers(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Test that --list-drivers prints the registry."""
        assert run_cli(["--list-drivers"]) == 0
        out = capsys.readouterr().out
        assert "scan_file" in out
        assert "mtime" in out

    def test_nothing_to_watch(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """Test exit code 2 when no targets are configured."""
        assert run_cli(["--base-dir", str(tmp_path)]) == 2
        assert "nothing to watch" in capsys.readouterr().err

    def test_missing_directory_exits_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test exit code 2 for a missing watched directory."""
        code = run_cli(["--base-dir", str(tmp_path), "--dir", "absent", "--ext", "py"])
        assert code == 2
        assert "does not exist" in capsys.readouterr().err

    def test_unknown_driver_exits_2(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Test exit code 2 for an unknown driver."""
        (tmp_path / "src").mkdir()
        code = run_cli(["--base-dir", str(tmp_path), "--dir", "src", "--driver", "fsevents"])
        assert code == 2
        assert "fsevents" in capsys.readouterr().err

    def test_interrupt_exits_0(self, tmp_path: Path) -> None:
        """Test that Ctrl+C exits cleanly."""
        (tmp_path / "src").mkdir()

        def interrupted(coro):
            coro.close()
            raise KeyboardInterrupt

        with patch("pollwatch.cli.asyncio.run", side_effect=interrupted):
            assert run_cli(["--base-dir", str(tmp_path), "--dir", "src"]) == 0

    def test_project_config_supplies_targets(self, tmp_path: Path) -> None:
        """Test that targets can come from project config alone."""
        (tmp_path / ".pollwatch").mkdir()
        (tmp_path / ".pollwatch" / "config.yaml").write_text(
            "watcher:\n  watch_dirs: [src]\n  extensions: [py]\n"
        )
        with (
            patch("pollwatch.cli.run_watch", new=MagicMock(return_value="coro")) as run_watch,
            patch("pollwatch.cli.asyncio.run", return_value=0) as run,
        ):
            assert run_cli(["--base-dir", str(tmp_path)]) == 0

        run.assert_called_once_with("coro")
        config = run_watch.call_args.args[0]
        assert config.watcher.watch_dirs == ["src"]
        assert config.watcher.extensions == ["py"]
