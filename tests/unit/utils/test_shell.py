"""Unit tests for shell execution utilities."""

import subprocess
from unittest.mock import MagicMock, patch

from plugpin.utils.shell import (
    CommandResult,
    command_exists,
    get_command_version,
    is_tmux_installed,
    run_command,
)


class TestRunCommand:
    """Tests for run_command function."""

    @patch("plugpin.utils.shell.subprocess.run")
    def test_captures_output(self, mock_run: MagicMock) -> None:
        """run_command returns stdout, stderr and exit code."""
        mock_run.return_value = MagicMock(stdout="out", stderr="err", returncode=2)

        result = run_command(["tool"])

        assert result == CommandResult(stdout="out", stderr="err", returncode=2)
        assert result.success is False
        assert mock_run.call_args.kwargs["capture_output"] is True


class TestCommandExists:
    """Tests for command_exists function."""

    @patch("plugpin.utils.shell.shutil.which", return_value="/usr/bin/tmux")
    def test_found(self, _mock_which: MagicMock) -> None:
        """True when the command is on PATH."""
        assert command_exists("tmux") is True

    @patch("plugpin.utils.shell.shutil.which", return_value=None)
    def test_missing(self, _mock_which: MagicMock) -> None:
        """False when the command is not on PATH."""
        assert command_exists("tmux") is False


class TestGetCommandVersion:
    """Tests for get_command_version function."""

    @patch("plugpin.utils.shell.run_command")
    def test_returns_trimmed_output(self, mock_run: MagicMock) -> None:
        """Version output is stripped."""
        mock_run.return_value = CommandResult(stdout="1.2.3\n", stderr="", returncode=0)

        assert get_command_version(["opencode", "--version"]) == "1.2.3"

    @patch("plugpin.utils.shell.run_command")
    def test_failed_command(self, mock_run: MagicMock) -> None:
        """A non-zero exit yields None."""
        mock_run.return_value = CommandResult(stdout="", stderr="boom", returncode=1)

        assert get_command_version(["opencode", "--version"]) is None

    @patch("plugpin.utils.shell.run_command")
    def test_missing_command(self, mock_run: MagicMock) -> None:
        """A missing executable yields None."""
        mock_run.side_effect = FileNotFoundError("opencode")

        assert get_command_version(["opencode", "--version"]) is None

    @patch("plugpin.utils.shell.run_command")
    def test_timeout(self, mock_run: MagicMock) -> None:
        """A hanging command yields None."""
        mock_run.side_effect = subprocess.TimeoutExpired(["opencode"], 10)

        assert get_command_version(["opencode", "--version"]) is None


class TestIsTmuxInstalled:
    """Tests for is_tmux_installed function."""

    @patch("plugpin.utils.shell.run_command")
    def test_installed(self, mock_run: MagicMock) -> None:
        """True when tmux -V succeeds."""
        mock_run.return_value = CommandResult(stdout="tmux 3.4\n", stderr="", returncode=0)

        assert is_tmux_installed() is True
        mock_run.assert_called_once_with(["tmux", "-V"], timeout=10.0)

    @patch("plugpin.utils.shell.run_command")
    def test_not_installed(self, mock_run: MagicMock) -> None:
        """False when tmux cannot be run."""
        mock_run.side_effect = OSError("not found")

        assert is_tmux_installed() is False
