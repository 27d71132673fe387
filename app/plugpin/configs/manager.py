"""Structured merges into the host config and the plugin's own config.

These helpers operate on parsed objects and write the whole file back as
pretty-printed JSON. Comments in a ``.jsonc`` file do not survive this
path; pinned-version updates go through :mod:`plugpin.configs.operator`
instead, which edits the raw text.
"""

import json
import logging
from collections.abc import Callable
from pathlib import Path
from typing import Any

from plugpin.configs.models import ConfigMergeResult, InstallConfig
from plugpin.configs.resolver import ANTIGRAVITY_PLUGIN, get_plugin_list
from plugpin.core.paths import (
    ensure_host_config_dir,
    get_existing_config_path,
    get_host_config_dir,
    get_lite_config_path,
)
from plugpin.core.settings import Settings
from plugpin.jsonc.loader import read_config
from plugpin.registry.client import RegistryClient

logger = logging.getLogger(__name__)

_MODEL_LIMITS_GEMINI = {"context": 1048576, "output": 65536}
_MODEL_LIMITS_CLAUDE = {"context": 200000, "output": 32000}
_MODALITIES = {"input": ["text", "image", "pdf"], "output": ["text"]}

# Google models served through the Antigravity auth plugin.
GOOGLE_PROVIDER_CONFIG: dict[str, Any] = {
    "name": "Google",
    "models": {
        "gemini-3-pro-high": {
            "name": "Gemini 3 Pro High",
            "thinking": True,
            "attachment": True,
            "limit": {"context": 1048576, "output": 65535},
            "modalities": _MODALITIES,
        },
        "gemini-3-flash": {
            "name": "Gemini 3 Flash",
            "attachment": True,
            "limit": _MODEL_LIMITS_GEMINI,
            "modalities": _MODALITIES,
        },
        "claude-opus-4-5-thinking": {
            "name": "Claude Opus 4.5 Thinking",
            "attachment": True,
            "limit": _MODEL_LIMITS_CLAUDE,
            "modalities": _MODALITIES,
        },
        "claude-sonnet-4-5-thinking": {
            "name": "Claude Sonnet 4.5 Thinking",
            "attachment": True,
            "limit": _MODEL_LIMITS_CLAUDE,
            "modalities": _MODALITIES,
        },
    },
}

_AGENTS = (
    "orchestrator",
    "code-simplicity-reviewer",
    "oracle",
    "librarian",
    "explore",
    "frontend-ui-ux-engineer",
    "document-writer",
    "multimodal-looker",
)


def _mapping(heavy: str, light: str) -> dict[str, str]:
    heavy_agents = {"orchestrator", "code-simplicity-reviewer", "oracle"}
    return {agent: heavy if agent in heavy_agents else light for agent in _AGENTS}


# Agent model mappings by provider priority.
MODEL_MAPPINGS: dict[str, dict[str, str]] = {
    "antigravity": _mapping("google/claude-opus-4-5-thinking", "google/gemini-3-flash"),
    "openai": _mapping("openai/gpt-5.2-codex", "openai/gpt-4.1-mini"),
    "cerebras": _mapping("cerebras/zai-glm-4.6", "cerebras/zai-glm-4.6"),
}


def render_json(config: dict[str, Any]) -> str:
    """Serialize a config object with 2-space indent and one trailing newline."""
    return json.dumps(config, indent=2) + "\n"


def write_config(config_path: Path, config: dict[str, Any]) -> None:
    """Write a config object as pretty-printed JSON.

    Raises:
        OSError: If the file cannot be written.
    """
    if config_path.suffix == ".jsonc":
        logger.warning("Writing to .jsonc file %s - comments will not be preserved", config_path)
    config_path.write_text(render_json(config), encoding="utf-8")


def _has_content(path: Path) -> bool:
    return path.is_file() and bool(path.read_text(encoding="utf-8").strip())


def _merge_host_config(
    settings: Settings,
    mutate: Callable[[dict[str, Any]], None],
    action: str,
) -> ConfigMergeResult:
    """Load the host config, apply ``mutate`` and write it back.

    Args:
        settings: Active plugpin settings.
        mutate: In-place modification of the parsed config.
        action: Description used in error messages.

    An existing file that does not parse to an object is never replaced.

    Returns:
        ConfigMergeResult, never raises for filesystem errors.
    """
    try:
        ensure_host_config_dir(settings)
    except RuntimeError as e:
        return ConfigMergeResult(
            success=False,
            config_path=get_host_config_dir(settings),
            error=f"Failed to create config directory: {e}",
        )

    config_path = get_existing_config_path(settings)
    try:
        config = read_config(config_path)
        if config is None and _has_content(config_path):
            logger.warning("Refusing to overwrite unparsable config %s", config_path)
            return ConfigMergeResult(
                success=False,
                config_path=config_path,
                error=f"Failed to {action}: {config_path} is not a valid JSON object",
            )
        config = config or {}
        mutate(config)
        write_config(config_path, config)
    except OSError as e:
        return ConfigMergeResult(
            success=False,
            config_path=config_path,
            error=f"Failed to {action}: {e}",
        )

    return ConfigMergeResult(success=True, config_path=config_path)


def add_plugin_to_config(settings: Settings) -> ConfigMergeResult:
    """Register the plugin in the host config as a bare (unpinned) entry.

    Any existing ``name`` or ``name@version`` entries are replaced.
    """
    name = settings.package_name

    def mutate(config: dict[str, Any]) -> None:
        plugins = [p for p in get_plugin_list(config) if p != name and not p.startswith(f"{name}@")]
        plugins.append(name)
        config["plugin"] = plugins

    return _merge_host_config(settings, mutate, "update host config")


async def add_auth_plugins(
    install_config: InstallConfig,
    settings: Settings,
    registry: RegistryClient,
) -> ConfigMergeResult:
    """Add the Antigravity auth plugin when Google models are selected.

    The entry is pinned to the latest published version, or to the
    ``latest`` tag when the registry is unreachable.
    """
    plugin_entry: str | None = None
    if install_config.has_antigravity:
        version = await registry.get_latest_version(package_name=ANTIGRAVITY_PLUGIN)
        plugin_entry = f"{ANTIGRAVITY_PLUGIN}@{version or 'latest'}"

    def mutate(config: dict[str, Any]) -> None:
        plugins = get_plugin_list(config)
        if plugin_entry and not any(p.startswith(ANTIGRAVITY_PLUGIN) for p in plugins):
            plugins.append(plugin_entry)
        config["plugin"] = plugins

    return _merge_host_config(settings, mutate, "add auth plugins")


def add_provider_config(install_config: InstallConfig, settings: Settings) -> ConfigMergeResult:
    """Add the Google provider block when Antigravity is selected."""

    def mutate(config: dict[str, Any]) -> None:
        if install_config.has_antigravity:
            providers = config.get("provider")
            if not isinstance(providers, dict):
                providers = {}
            providers["google"] = GOOGLE_PROVIDER_CONFIG
            config["provider"] = providers

    return _merge_host_config(settings, mutate, "add provider config")


def add_server_config(install_config: InstallConfig, settings: Settings) -> ConfigMergeResult:
    """Set ``server.port`` for tmux integration unless a port is configured."""

    def mutate(config: dict[str, Any]) -> None:
        if install_config.has_tmux:
            server = config.get("server")
            if not isinstance(server, dict):
                server = {}
            server.setdefault("port", settings.server_port)
            config["server"] = server

    return _merge_host_config(settings, mutate, "add server config")


def disable_default_agents(settings: Settings) -> ConfigMergeResult:
    """Disable the host's built-in subagents replaced by the plugin."""

    def mutate(config: dict[str, Any]) -> None:
        agent = config.get("agent")
        if not isinstance(agent, dict):
            agent = {}
        agent["explore"] = {"disable": True}
        agent["general"] = {"disable": True}
        config["agent"] = agent

    return _merge_host_config(settings, mutate, "disable default agents")


def generate_lite_config(install_config: InstallConfig) -> dict[str, Any]:
    """Build the plugin's own config for the selected providers.

    The base provider is chosen by priority (antigravity, openai, cerebras);
    mixed selections override individual agents.
    """
    if install_config.has_antigravity:
        base_provider: str | None = "antigravity"
    elif install_config.has_openai:
        base_provider = "openai"
    elif install_config.has_cerebras:
        base_provider = "cerebras"
    else:
        base_provider = None

    config: dict[str, Any] = {"agents": {}}

    if base_provider:
        agents = {agent: {"model": model} for agent, model in MODEL_MAPPINGS[base_provider].items()}
        if install_config.has_antigravity:
            if install_config.has_openai:
                agents["oracle"] = {"model": MODEL_MAPPINGS["openai"]["oracle"]}
            if install_config.has_cerebras:
                agents["explore"] = {"model": MODEL_MAPPINGS["cerebras"]["explore"]}
        elif install_config.has_openai and install_config.has_cerebras:
            agents["explore"] = {"model": MODEL_MAPPINGS["cerebras"]["explore"]}
        config["agents"] = agents

    if install_config.has_tmux:
        config["tmux"] = {"enabled": True, "layout": "main-vertical", "main_pane_size": 60}

    return config


def write_lite_config(install_config: InstallConfig, settings: Settings) -> ConfigMergeResult:
    """Write the plugin's own config file, replacing any previous one."""
    config_path = get_lite_config_path(settings)

    try:
        ensure_host_config_dir(settings)
        config_path.write_text(render_json(generate_lite_config(install_config)), encoding="utf-8")
    except (OSError, RuntimeError) as e:
        return ConfigMergeResult(
            success=False,
            config_path=config_path,
            error=f"Failed to write plugin config: {e}",
        )

    return ConfigMergeResult(success=True, config_path=config_path)
