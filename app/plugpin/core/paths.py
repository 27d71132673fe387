"""XDG-compliant path management for plugpin and its host application.

This module provides standardized paths following the XDG Base Directory
Specification, both for plugpin's own settings and for the configuration
files of the host application whose plugin entry plugpin maintains.

XDG defaults:
- plugpin config: ~/.config/plugpin/
- Host config: ~/.config/<host>/ (e.g. ~/.config/opencode/)
- Host cache: ~/.cache/<host>/
"""

from __future__ import annotations

import os
import sys
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from plugpin.core.settings import Settings

# Application identifier for directory naming
APP_NAME = "plugpin"


def _get_xdg_base(env_var: str, default_subdir: str) -> Path:
    """Get an XDG base directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the XDG base directory (not application specific).
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base)
    return Path.home() / default_subdir


def _is_windows() -> bool:
    return sys.platform == "win32"


def get_config_dir() -> Path:
    """Get plugpin's own configuration directory.

    Returns:
        Path to ~/.config/plugpin/ (or XDG_CONFIG_HOME/plugpin/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / APP_NAME


def get_settings_path() -> Path:
    """Get the plugpin settings file path.

    Returns:
        Path to ~/.config/plugpin/settings.toml.
    """
    return get_config_dir() / "settings.toml"


# =============================================================================
# Host application paths
# =============================================================================


def get_host_config_dir(settings: Settings) -> Path:
    """Get the host application's user-global configuration directory.

    Args:
        settings: Active plugpin settings (provides the host name).

    Returns:
        Path to ~/.config/<host>/ (or XDG_CONFIG_HOME/<host>/).
    """
    return _get_xdg_base("XDG_CONFIG_HOME", ".config") / settings.host_name


def get_host_config_json(settings: Settings) -> Path:
    """Get the user-global ``<config>.json`` path of the host."""
    return get_host_config_dir(settings) / f"{settings.config_name}.json"


def get_host_config_jsonc(settings: Settings) -> Path:
    """Get the user-global ``<config>.jsonc`` path of the host."""
    return get_host_config_dir(settings) / f"{settings.config_name}.jsonc"


def get_existing_config_path(settings: Settings) -> Path:
    """Get the user-global host config path that should be read and written.

    Prefers an existing ``.json`` file, then an existing ``.jsonc`` file,
    and falls back to the ``.json`` path when neither exists yet.

    Args:
        settings: Active plugpin settings.

    Returns:
        Path to the host configuration file.
    """
    json_path = get_host_config_json(settings)
    if json_path.exists():
        return json_path

    jsonc_path = get_host_config_jsonc(settings)
    if jsonc_path.exists():
        return jsonc_path

    return json_path


def get_lite_config_path(settings: Settings) -> Path:
    """Get the plugin's own config file path inside the host config dir.

    Returns:
        Path to ~/.config/<host>/<package>.json.
    """
    return get_host_config_dir(settings) / f"{settings.package_name}.json"


def get_host_cache_dir(settings: Settings) -> Path:
    """Get the host application's cache directory.

    Returns:
        Path to ~/.cache/<host>/ (or XDG_CACHE_HOME/<host>/).
    """
    return _get_xdg_base("XDG_CACHE_HOME", ".cache") / settings.host_name


def get_installed_package_json(settings: Settings) -> Path:
    """Get the manifest path of the plugin as installed by the host.

    Returns:
        Path to ~/.cache/<host>/node_modules/<package>/package.json.
    """
    return get_host_cache_dir(settings) / "node_modules" / settings.package_name / "package.json"


def get_config_paths(directory: Path, settings: Settings) -> list[Path]:
    """Get candidate host config files in precedence order.

    Order:
    1. ``<directory>/.<host>/<config>.json``
    2. ``<directory>/.<host>/<config>.jsonc``
    3. user-global ``<config>.json``
    4. user-global ``<config>.jsonc``
    5. on Windows only, the same two files under the alternate of
       ``~/.config`` and ``%APPDATA%``

    Args:
        directory: Project directory to search first.
        settings: Active plugpin settings.

    Returns:
        Ordered list of candidate paths (not necessarily existing).
    """
    project_dir = directory / f".{settings.host_name}"
    paths = [
        project_dir / f"{settings.config_name}.json",
        project_dir / f"{settings.config_name}.jsonc",
        get_host_config_json(settings),
        get_host_config_jsonc(settings),
    ]

    if _is_windows():
        cross_platform_dir = Path.home() / ".config"
        appdata = os.environ.get("APPDATA")
        appdata_dir = Path(appdata) if appdata else Path.home() / "AppData" / "Roaming"
        user_base = get_host_config_dir(settings).parent
        alternate_base = appdata_dir if user_base == cross_platform_dir else cross_platform_dir

        for suffix in ("json", "jsonc"):
            alternate = alternate_base / settings.host_name / f"{settings.config_name}.{suffix}"
            if alternate not in paths:
                paths.append(alternate)

    return paths


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create plugpin's configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_host_config_dir(settings: Settings) -> Path:
    """Create the host's configuration directory if it doesn't exist.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_host_config_dir(settings), f"{settings.host_name} config")
