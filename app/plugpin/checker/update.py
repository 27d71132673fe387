"""Update check for the managed plugin.

One ``UpdateChecker`` performs at most one registry lookup per run:

    UNCHECKED -> CHECKING -> UP_TO_DATE | UPDATE_AVAILABLE | CHECK_FAILED

Two short-circuits skip the lookup entirely: NOT_INSTALLED when no config
references the plugin, and LOCAL_DEV when the plugin points at a local
``file://`` copy. A failed lookup is final for the run and never raises.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from plugpin.configs.models import PluginEntry
from plugpin.configs.operator import PatchOutcome, PinUpdater
from plugpin.configs.resolver import find_plugin_entry, get_cached_version, get_local_dev_version
from plugpin.core.settings import Settings
from plugpin.registry.client import RegistryClient
from plugpin.versioning.channels import extract_channel, is_dist_tag

logger = logging.getLogger(__name__)


class CheckState(str, Enum):
    """State of an update check."""

    UNCHECKED = "unchecked"
    CHECKING = "checking"
    UP_TO_DATE = "up_to_date"
    UPDATE_AVAILABLE = "update_available"
    CHECK_FAILED = "check_failed"
    NOT_INSTALLED = "not_installed"
    LOCAL_DEV = "local_dev"


@dataclass(frozen=True, slots=True)
class UpdateCheckResult:
    """Outcome of an update check.

    Attributes:
        state: Terminal state reached by the check.
        channel: Release channel compared against.
        current_version: Pinned, cached or local version (None if unknown).
        latest_version: Version published on the channel (None if unknown).
        entry: Resolved plugin entry, None if not installed.
        message: Human-readable detail for failed or skipped checks.
    """

    state: CheckState
    channel: str
    current_version: str | None = None
    latest_version: str | None = None
    entry: PluginEntry | None = None
    message: str | None = None

    @property
    def can_apply(self) -> bool:
        """Whether applying the update would rewrite a pinned entry.

        Entries pinned to a dist-tag already follow their channel and are
        never replaced with a fixed version.
        """
        return (
            self.state is CheckState.UPDATE_AVAILABLE
            and self.entry is not None
            and _pins_version(self.entry)
            and self.latest_version is not None
        )


def _pins_version(entry: PluginEntry) -> bool:
    return entry.pinned_version is not None and not is_dist_tag(entry.pinned_version)


class UpdateChecker:
    """Checks the registry for a newer plugin version and applies it.

    Attributes:
        state: Current CheckState.
    """

    def __init__(
        self,
        settings: Settings,
        directory: Path,
        *,
        registry: RegistryClient | None = None,
        updater: PinUpdater | None = None,
    ) -> None:
        """Initialize the UpdateChecker.

        Args:
            settings: Active plugpin settings.
            directory: Project directory searched before the global config.
            registry: Registry client. Defaults to one built from settings.
            updater: Pin updater. Defaults to one built from settings.
        """
        self._settings = settings
        self._directory = directory
        self._registry = registry or RegistryClient(settings)
        self._updater = updater or PinUpdater(settings)
        self._result: UpdateCheckResult | None = None
        self.state = CheckState.UNCHECKED

    async def check(self, channel: str | None = None) -> UpdateCheckResult:
        """Run the update check once.

        Later calls return the first result without another lookup.

        Args:
            channel: Channel to compare against. Defaults to the channel of
                the pinned version (``latest`` for unpinned entries).

        Returns:
            UpdateCheckResult in a terminal state.
        """
        if self._result is not None:
            return self._result

        self._result = await self._run(channel)
        self.state = self._result.state
        return self._result

    async def _run(self, channel: str | None) -> UpdateCheckResult:
        local_version = get_local_dev_version(self._directory, self._settings)
        if local_version is not None:
            logger.info("Local development copy %s in use, skipping update check", local_version)
            return UpdateCheckResult(
                state=CheckState.LOCAL_DEV,
                channel=channel or extract_channel(local_version),
                current_version=local_version,
                message="Plugin is loaded from a local development copy",
            )

        entry = find_plugin_entry(self._directory, self._settings)
        if entry is None:
            logger.info("%s not found in any config", self._settings.package_name)
            return UpdateCheckResult(
                state=CheckState.NOT_INSTALLED,
                channel=channel or extract_channel(None),
                message=f"{self._settings.package_name} is not in any plugin list",
            )

        resolved_channel = channel or extract_channel(entry.pinned_version)
        if _pins_version(entry):
            current = entry.pinned_version
        else:
            # Unpinned and dist-tag entries resolve to whatever the host cached.
            current = get_cached_version(self._settings)

        self.state = CheckState.CHECKING
        latest = await self._registry.get_latest_version(resolved_channel)

        if latest is None:
            logger.info("No version available for channel %s", resolved_channel)
            return UpdateCheckResult(
                state=CheckState.CHECK_FAILED,
                channel=resolved_channel,
                current_version=current,
                entry=entry,
                message="Registry lookup failed",
            )

        if current is None:
            return UpdateCheckResult(
                state=CheckState.CHECK_FAILED,
                channel=resolved_channel,
                latest_version=latest,
                entry=entry,
                message="Installed version is unknown",
            )

        state = CheckState.UP_TO_DATE if current == latest else CheckState.UPDATE_AVAILABLE
        logger.debug("Channel %s: current=%s latest=%s", resolved_channel, current, latest)
        return UpdateCheckResult(
            state=state,
            channel=resolved_channel,
            current_version=current,
            latest_version=latest,
            entry=entry,
        )

    def apply(self, result: UpdateCheckResult) -> PatchOutcome | None:
        """Rewrite the pinned entry to the available version.

        Unpinned and dist-tag entries resolve at install time and are left
        untouched.

        Args:
            result: Result returned by :meth:`check`.

        Returns:
            PatchOutcome, or None when there is nothing to apply.
        """
        entry = result.entry
        if not result.can_apply or entry is None or result.latest_version is None:
            return None
        return self._updater.update_pinned_version(
            entry.config_path,
            entry.entry,
            result.latest_version,
        )
