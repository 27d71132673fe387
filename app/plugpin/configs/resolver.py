"""Resolve the plugin entry and install state from host config files.

Candidate files are tried strictly in precedence order and the first
match wins; configurations are never merged. Missing and malformed files
are skipped so a broken project-local config cannot hide a valid global one.
"""

import logging
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, TypeVar
from urllib.parse import urlparse
from urllib.request import url2pathname

from plugpin.configs.models import DetectedConfig, PluginEntry
from plugpin.core.paths import (
    get_config_paths,
    get_existing_config_path,
    get_installed_package_json,
    get_lite_config_path,
)
from plugpin.core.settings import Settings
from plugpin.jsonc.loader import read_config, read_jsonc_file

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

# Ancestor directories searched for the plugin's package.json.
MANIFEST_SEARCH_DEPTH = 10

ANTIGRAVITY_PLUGIN = "opencode-antigravity-auth"


def first_match(candidates: Iterable[T], lookup: Callable[[T], R | None]) -> R | None:
    """Return the first non-None lookup result over ordered candidates.

    Args:
        candidates: Candidates in precedence order.
        lookup: Function returning a result, or None to try the next one.

    Returns:
        The first result, or None if no candidate matched.
    """
    for candidate in candidates:
        result = lookup(candidate)
        if result is not None:
            return result
    return None


def get_plugin_list(config: dict[str, Any]) -> list[str]:
    """Return the string entries of a config's ``plugin`` array."""
    plugins = config.get("plugin")
    if not isinstance(plugins, list):
        return []
    return [p for p in plugins if isinstance(p, str)]


def parse_plugin_entry(entry: str, package_name: str, config_path: Path) -> PluginEntry | None:
    """Interpret a single ``plugin`` array entry.

    Args:
        entry: Raw entry string.
        package_name: Managed package name.
        config_path: File the entry came from.

    Returns:
        PluginEntry if the entry refers to the package, None otherwise.
    """
    if entry == package_name:
        return PluginEntry(
            entry=entry,
            is_pinned=False,
            pinned_version=None,
            config_path=config_path,
        )

    prefix = f"{package_name}@"
    if entry.startswith(prefix):
        version = entry[len(prefix) :]
        is_pinned = version != "latest"
        return PluginEntry(
            entry=entry,
            is_pinned=is_pinned,
            pinned_version=version if is_pinned else None,
            config_path=config_path,
        )

    return None


def find_plugin_entry(directory: Path, settings: Settings) -> PluginEntry | None:
    """Find the managed plugin's entry in the highest-precedence config.

    Args:
        directory: Project directory searched before the user-global config.
        settings: Active plugpin settings.

    Returns:
        PluginEntry of the first matching file, or None.
    """

    def lookup(path: Path) -> PluginEntry | None:
        config = read_jsonc_file(path)
        if config is None:
            return None
        for entry in get_plugin_list(config):
            found = parse_plugin_entry(entry, settings.package_name, path)
            if found is not None:
                return found
        return None

    return first_match(get_config_paths(directory, settings), lookup)


def _file_url_to_path(url: str) -> Path:
    parsed = urlparse(url)
    if parsed.netloc not in ("", "localhost"):
        return Path(url.removeprefix("file://"))
    return Path(url2pathname(parsed.path))


def get_local_dev_path(directory: Path, settings: Settings) -> Path | None:
    """Find a ``file://`` plugin entry pointing at a local development copy.

    Args:
        directory: Project directory searched first.
        settings: Active plugpin settings.

    Returns:
        Filesystem path of the local copy, or None.
    """

    def lookup(path: Path) -> Path | None:
        config = read_jsonc_file(path)
        if config is None:
            return None
        for entry in get_plugin_list(config):
            if entry.startswith("file://") and settings.package_name in entry:
                return _file_url_to_path(entry)
        return None

    return first_match(get_config_paths(directory, settings), lookup)


def find_manifest_up(
    start: Path,
    package_name: str,
    max_depth: int = MANIFEST_SEARCH_DEPTH,
) -> Path | None:
    """Walk upward from ``start`` to the package's ``package.json``.

    Args:
        start: File or directory to start from. Must exist.
        package_name: Required value of the manifest's ``name`` field.
        max_depth: Maximum number of directories to inspect.

    Returns:
        Path to the matching manifest, or None.
    """
    try:
        if not start.exists():
            return None
        directory = start if start.is_dir() else start.parent
    except OSError:
        return None

    for _ in range(max_depth):
        candidate = directory / "package.json"
        manifest = read_jsonc_file(candidate)
        if manifest is not None and manifest.get("name") == package_name:
            return candidate

        parent = directory.parent
        if parent == directory:
            break
        directory = parent

    return None


def _manifest_version(path: Path) -> str | None:
    manifest = read_jsonc_file(path)
    if manifest is None:
        return None
    version = manifest.get("version")
    return version if isinstance(version, str) and version else None


def get_local_dev_version(directory: Path, settings: Settings) -> str | None:
    """Read the version of a local development copy, if one is configured.

    Args:
        directory: Project directory searched first.
        settings: Active plugpin settings.

    Returns:
        Version from the local copy's ``package.json``, or None.
    """
    local_path = get_local_dev_path(directory, settings)
    if local_path is None:
        return None

    manifest_path = find_manifest_up(local_path, settings.package_name)
    if manifest_path is None:
        logger.debug("No %s package.json above %s", settings.package_name, local_path)
        return None
    return _manifest_version(manifest_path)


def get_cached_version(settings: Settings) -> str | None:
    """Read the version of the plugin as installed in the host's cache.

    Returns:
        Installed version, or None if the plugin has not been fetched yet.
    """
    return _manifest_version(get_installed_package_json(settings))


def detect_current_config(settings: Settings) -> DetectedConfig:
    """Derive the current install state from the host and plugin configs.

    Args:
        settings: Active plugpin settings.

    Returns:
        DetectedConfig snapshot. All flags are False when no config exists.
    """
    config = read_config(get_existing_config_path(settings))
    if config is None:
        return DetectedConfig()

    plugins = get_plugin_list(config)
    is_installed = any(p.startswith(settings.package_name) for p in plugins)
    has_antigravity = any(p.startswith(ANTIGRAVITY_PLUGIN) for p in plugins)
    has_openai = False
    has_cerebras = False
    has_tmux = False

    lite_config = read_config(get_lite_config_path(settings))
    if lite_config is not None:
        agents = lite_config.get("agents")
        if isinstance(agents, dict):
            models = [
                a.get("model")
                for a in agents.values()
                if isinstance(a, dict) and isinstance(a.get("model"), str)
            ]
            has_openai = any(m.startswith("openai/") for m in models)
            has_cerebras = any(m.startswith("cerebras/") for m in models)

        tmux = lite_config.get("tmux")
        if isinstance(tmux, dict):
            has_tmux = tmux.get("enabled") is True

    return DetectedConfig(
        is_installed=is_installed,
        has_antigravity=has_antigravity,
        has_openai=has_openai,
        has_cerebras=has_cerebras,
        has_tmux=has_tmux,
    )
