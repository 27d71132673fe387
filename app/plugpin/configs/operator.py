"""Pinned-version updates written back to host config files.

Patches the ``plugin`` array in the raw file text so comments and
formatting survive, and only rewrites the file when the patch changed it.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

from plugpin.core.settings import Settings
from plugpin.jsonc.patcher import PatchStatus, replace_entry

logger = logging.getLogger(__name__)

PLUGIN_KEY = "plugin"


@dataclass(frozen=True, slots=True)
class PatchOutcome:
    """Result of a single pinned-version update.

    Attributes:
        path: Config file that was operated on.
        success: Whether the file now holds the new entry.
        status: Patch status, None if the file could not be read.
        old_entry: Entry that was searched for.
        new_entry: Entry that replaced it.
        error: Error message if the operation failed, None otherwise.
        dry_run: Whether this was a dry-run (no file written).
    """

    path: Path
    success: bool
    status: PatchStatus | None
    old_entry: str
    new_entry: str
    error: str | None = None
    dry_run: bool = False


class PinUpdater:
    """Rewrites a pinned plugin entry to a new version.

    Attributes:
        _settings: Active plugpin settings (provides the package name).
        _dry_run: If True, compute the patch without writing the file.
    """

    def __init__(self, settings: Settings, *, dry_run: bool = False) -> None:
        """Initialize the PinUpdater.

        Args:
            settings: Active plugpin settings.
            dry_run: If True, report what would be done without doing it.
        """
        self._settings = settings
        self._dry_run = dry_run

    def update_pinned_version(
        self,
        config_path: Path,
        old_entry: str,
        new_version: str,
    ) -> PatchOutcome:
        """Replace ``old_entry`` with ``<package>@<new_version>``.

        The file is re-read here, so an entry that disappeared since it was
        resolved yields ENTRY_NOT_FOUND instead of a blind write.

        Args:
            config_path: Host config file holding the entry.
            old_entry: Current entry string (e.g. ``pkg@1.0.0``).
            new_version: Version to pin.

        Returns:
            PatchOutcome describing what happened.
        """
        new_entry = f"{self._settings.package_name}@{new_version}"

        try:
            with open(config_path, encoding="utf-8", newline="") as f:
                content = f.read()
        except OSError as e:
            logger.warning("Failed to read config file %s: %s", config_path, e)
            return PatchOutcome(
                path=config_path,
                success=False,
                status=None,
                old_entry=old_entry,
                new_entry=new_entry,
                error=f"Failed to read config: {e}",
            )

        result = replace_entry(content, PLUGIN_KEY, old_entry, new_entry)

        if result.status is PatchStatus.NO_ARRAY:
            logger.info('No "%s" array found in %s', PLUGIN_KEY, config_path)
            return self._outcome(config_path, old_entry, new_entry, result.status, success=False)

        if result.status is PatchStatus.ENTRY_NOT_FOUND:
            logger.info(
                'Entry "%s" not found in %s array of %s', old_entry, PLUGIN_KEY, config_path
            )
            return self._outcome(config_path, old_entry, new_entry, result.status, success=False)

        if result.status is PatchStatus.UNCHANGED:
            logger.info("No changes made to %s", config_path)
            return self._outcome(config_path, old_entry, new_entry, result.status, success=True)

        if self._dry_run:
            logger.info("Dry-run: would update %s: %s -> %s", config_path, old_entry, new_entry)
            return self._outcome(config_path, old_entry, new_entry, result.status, success=True)

        try:
            with open(config_path, "w", encoding="utf-8", newline="") as f:
                f.write(result.text)
        except OSError as e:
            logger.warning("Failed to write config file %s: %s", config_path, e)
            return PatchOutcome(
                path=config_path,
                success=False,
                status=result.status,
                old_entry=old_entry,
                new_entry=new_entry,
                error=f"Failed to write config: {e}",
            )

        logger.info("Updated %s: %s -> %s", config_path, old_entry, new_entry)
        return self._outcome(config_path, old_entry, new_entry, result.status, success=True)

    def _outcome(
        self,
        path: Path,
        old_entry: str,
        new_entry: str,
        status: PatchStatus,
        *,
        success: bool,
    ) -> PatchOutcome:
        return PatchOutcome(
            path=path,
            success=success,
            status=status,
            old_entry=old_entry,
            new_entry=new_entry,
            dry_run=self._dry_run,
        )
