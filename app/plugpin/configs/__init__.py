"""Host config resolution, merging and pinned-version updates.

This module resolves the plugin entry across the config search path,
detects the install state, merges install-time settings, and patches a
pinned entry in place.
"""

from plugpin.configs.models import ConfigMergeResult, DetectedConfig, InstallConfig, PluginEntry
from plugpin.configs.operator import PatchOutcome, PinUpdater
from plugpin.configs.resolver import (
    detect_current_config,
    find_plugin_entry,
    first_match,
    get_cached_version,
    get_local_dev_version,
)

__all__ = [
    "ConfigMergeResult",
    "DetectedConfig",
    "InstallConfig",
    "PatchOutcome",
    "PinUpdater",
    "PluginEntry",
    "detect_current_config",
    "find_plugin_entry",
    "first_match",
    "get_cached_version",
    "get_local_dev_version",
]
