"""Shared types and utilities for CLI commands.

This module provides common enums and helper functions used across
multiple CLI command modules to avoid code duplication.
"""

from enum import Enum
from pathlib import Path

import typer

from plugpin.core.settings import Settings, SettingsError, load_settings
from plugpin.utils.formatting import print_error


class OutputFormat(str, Enum):
    """Output format options for reporting commands."""

    TABLE = "table"
    JSON = "json"


def get_settings(ctx: typer.Context) -> Settings:
    """Load settings for a command, honoring the global ``--settings`` option.

    Args:
        ctx: Typer context carrying the root options.

    Returns:
        Validated Settings.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    settings_path: Path | None = obj.get("settings_path")
    try:
        return load_settings(settings_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def resolve_directory(directory: Path | None) -> Path:
    """Return the project directory to search, defaulting to the cwd."""
    return (directory or Path.cwd()).resolve()
