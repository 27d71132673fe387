"""Shell execution utilities.

Provides safe subprocess execution and checks for the host CLI and tmux.
"""

import shutil
import subprocess
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CommandResult:
    """Result of a shell command execution.

    Attributes:
        stdout: Standard output from the command.
        stderr: Standard error from the command.
        returncode: Exit code of the command.
    """

    stdout: str
    stderr: str
    returncode: int

    @property
    def success(self) -> bool:
        """Check if command executed successfully."""
        return self.returncode == 0


def run_command(
    args: list[str],
    *,
    check: bool = False,
    timeout: float | None = 60.0,
    cwd: str | None = None,
) -> CommandResult:
    """Execute a shell command and return the result.

    Args:
        args: Command and arguments to execute.
        check: If True, raise CalledProcessError on non-zero exit.
        timeout: Maximum time in seconds to wait for command.
        cwd: Working directory for the command. If None, uses current directory.

    Returns:
        CommandResult with stdout, stderr, and returncode.

    Raises:
        subprocess.CalledProcessError: If check=True and command fails.
        subprocess.TimeoutExpired: If command exceeds timeout.
        FileNotFoundError: If command executable is not found.
    """
    result = subprocess.run(
        args,
        capture_output=True,
        text=True,
        check=check,
        timeout=timeout,
        cwd=cwd,
    )
    return CommandResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
    )


def command_exists(name: str) -> bool:
    """Check if a command exists in the system PATH.

    Args:
        name: Command name to check.

    Returns:
        True if command exists, False otherwise.
    """
    return shutil.which(name) is not None


def _try_command(args: list[str]) -> CommandResult | None:
    try:
        return run_command(args, timeout=10.0)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired):
        return None


def get_command_version(args: list[str]) -> str | None:
    """Run a version command and return its trimmed output.

    Args:
        args: Version command, e.g. ``["opencode", "--version"]``.

    Returns:
        Version output, or None if the command is missing or failed.
    """
    result = _try_command(args)
    if result is None or not result.success:
        return None
    return result.stdout.strip()


def is_tmux_installed() -> bool:
    """Check whether tmux runs (``tmux -V`` exits 0)."""
    result = _try_command(["tmux", "-V"])
    return result is not None and result.success
