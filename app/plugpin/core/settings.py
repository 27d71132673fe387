"""plugpin settings.

Every component receives a ``Settings`` instance explicitly, so the package
name, registry URL and timeout can be swapped in tests without touching the
real filesystem or network.

Settings are stored in ~/.config/plugpin/settings.toml
"""

import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from plugpin.core.paths import ensure_config_dir, get_settings_path

DEFAULT_PACKAGE_NAME = "oh-my-opencode-slim"
DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"


class Settings(BaseModel):
    """Configuration shared by every plugpin component.

    Attributes:
        package_name: npm package name of the managed plugin.
        host_name: Host application name, used for its config/cache dirs.
        config_name: Base name of the host config file (without extension).
        registry_url: Base URL of the npm-compatible registry.
        fetch_timeout_seconds: Upper bound for a single registry request.
        server_port: Port written to ``server.port`` for tmux integration.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    package_name: Annotated[
        str,
        Field(min_length=1, description="npm package name of the plugin"),
    ] = DEFAULT_PACKAGE_NAME
    host_name: Annotated[
        str,
        Field(min_length=1, description="Host application name"),
    ] = "opencode"
    config_name: Annotated[
        str,
        Field(min_length=1, description="Host config file base name"),
    ] = "opencode"
    registry_url: Annotated[
        str,
        Field(description="npm registry base URL"),
    ] = DEFAULT_REGISTRY_URL
    fetch_timeout_seconds: Annotated[
        float,
        Field(ge=0.5, le=60.0, description="Registry timeout in seconds (0.5-60)"),
    ] = 5.0
    server_port: Annotated[
        int,
        Field(ge=1, le=65535, description="Host server port for tmux integration"),
    ] = 4096


class SettingsError(Exception):
    """Base exception for settings errors."""


class SettingsParseError(SettingsError):
    """Raised when the settings file cannot be parsed."""


def load_settings(path: Path | None = None) -> Settings:
    """Load settings from a TOML file.

    A missing file is not an error: defaults are returned.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated Settings object.

    Raises:
        SettingsParseError: If the TOML syntax is invalid.
        SettingsError: If the file cannot be read or fails validation.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return Settings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read settings: {e}") from e

    try:
        return Settings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings: {e}") from e


def save_settings(settings: Settings, path: Path | None = None) -> Path:
    """Save settings to a TOML file.

    Args:
        settings: Settings to persist.
        path: Target path. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    if path is None:
        try:
            ensure_config_dir()
        except RuntimeError as e:
            raise SettingsError(str(e)) from e
        settings_path = get_settings_path()
    else:
        settings_path = path
        settings_path.parent.mkdir(parents=True, exist_ok=True)

    try:
        with open(settings_path, "wb") as f:
            tomli_w.dump(settings.model_dump(), f)
    except OSError as e:
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
