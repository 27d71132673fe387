"""CLI commands for plugpin.

This package contains all subcommand implementations.
"""

from plugpin.cli.commands import check, config, doctor, install, status, strip

__all__ = ["check", "config", "doctor", "install", "status", "strip"]
