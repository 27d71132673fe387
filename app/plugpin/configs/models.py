"""Config domain models.

This module defines the value types derived from host configuration files:
the resolved plugin entry, install choices, detected install state, and
the result of a structured config write.
"""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class PluginEntry:
    """The managed plugin's entry inside a host config ``plugin`` array.

    This is a view over the document text; it is recomputed on every scan.

    Attributes:
        entry: Raw entry string (``name`` or ``name@version``).
        is_pinned: True when the entry names an exact version or tag.
        pinned_version: Version after ``@`` when pinned, None otherwise.
        config_path: File the entry was found in.
    """

    entry: str
    is_pinned: bool
    pinned_version: str | None
    config_path: Path


@dataclass(frozen=True, slots=True)
class InstallConfig:
    """Integrations selected for installation.

    Attributes:
        has_antigravity: Use Google models through the Antigravity auth plugin.
        has_openai: Use OpenAI models.
        has_cerebras: Use Cerebras models.
        has_tmux: Enable tmux pane integration.
    """

    has_antigravity: bool = False
    has_openai: bool = False
    has_cerebras: bool = False
    has_tmux: bool = False


@dataclass(frozen=True, slots=True)
class DetectedConfig:
    """Snapshot of the current install state, derived from config files.

    Attributes:
        is_installed: The plugin appears in the host ``plugin`` array.
        has_antigravity: The Antigravity auth plugin is configured.
        has_openai: Some agent uses an ``openai/`` model.
        has_cerebras: Some agent uses a ``cerebras/`` model.
        has_tmux: The plugin config has ``tmux.enabled = true``.
    """

    is_installed: bool = False
    has_antigravity: bool = False
    has_openai: bool = False
    has_cerebras: bool = False
    has_tmux: bool = False


@dataclass(frozen=True, slots=True)
class ConfigMergeResult:
    """Result of a structured config write.

    Attributes:
        success: Whether the write completed.
        config_path: File (or directory) that was operated on.
        error: Error message if the operation failed, None otherwise.
    """

    success: bool
    config_path: Path
    error: str | None = None
