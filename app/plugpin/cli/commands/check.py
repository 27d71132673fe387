"""Check command implementation.

Compares the installed plugin version with the registry and optionally
rewrites a pinned entry in place.
"""

import asyncio
from pathlib import Path
from typing import Annotated

import typer

from plugpin.checker.update import CheckState, UpdateChecker, UpdateCheckResult
from plugpin.cli.types import get_settings, resolve_directory
from plugpin.configs.operator import PatchOutcome, PinUpdater
from plugpin.jsonc.patcher import PatchStatus
from plugpin.utils.formatting import print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Check the registry for a newer plugin version.",
    invoke_without_command=True,
)


def _report(result: UpdateCheckResult) -> None:
    """Print a one-line summary of a check result."""
    if result.state is CheckState.NOT_INSTALLED:
        print_info(result.message or "Plugin is not installed.")
    elif result.state is CheckState.LOCAL_DEV:
        print_info(f"Local development copy ({result.current_version}), update check skipped.")
    elif result.state is CheckState.CHECK_FAILED:
        print_warning(f"Could not check for updates: {result.message}")
    elif result.state is CheckState.UP_TO_DATE:
        print_success(f"Up to date: {result.current_version} ({result.channel})")
    else:
        print_info(
            f"Update available on {result.channel}: "
            f"{result.current_version} -> {result.latest_version}"
        )


def _report_patch(outcome: PatchOutcome) -> None:
    if outcome.error:
        print_error(f"{outcome.path}: {outcome.error}")
    elif outcome.status is PatchStatus.NO_ARRAY:
        print_error(f'No "plugin" array found in {outcome.path}')
    elif outcome.status is PatchStatus.ENTRY_NOT_FOUND:
        print_error(f"Entry {outcome.old_entry} no longer present in {outcome.path}")
    elif outcome.status is PatchStatus.UNCHANGED:
        print_info(f"No changes made to {outcome.path}")
    elif outcome.dry_run:
        print_info(
            f"Dry-run: would update {outcome.path}: {outcome.old_entry} -> {outcome.new_entry}"
        )
    else:
        print_success(f"Updated {outcome.path}: {outcome.old_entry} -> {outcome.new_entry}")


@app.callback(invoke_without_command=True)
def check(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Project directory to search (default: current directory).",
        ),
    ] = None,
    channel: Annotated[
        str | None,
        typer.Option(
            "--channel",
            "-c",
            help="Release channel to compare against (default: from pinned version).",
        ),
    ] = None,
    apply: Annotated[
        bool,
        typer.Option("--apply", help="Rewrite a pinned entry to the available version."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="With --apply, show the change without writing."),
    ] = False,
) -> None:
    """Check for a newer version of the plugin.

    A failed registry lookup is reported but never fails the command.

    Examples:
        plugpin check
        plugpin check --channel beta
        plugpin check --apply
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)
    checker = UpdateChecker(
        settings,
        resolve_directory(directory),
        updater=PinUpdater(settings, dry_run=dry_run),
    )
    result = asyncio.run(checker.check(channel))
    _report(result)

    if not apply or result.state is not CheckState.UPDATE_AVAILABLE:
        return

    outcome = checker.apply(result)
    if outcome is None:
        tag = result.entry.pinned_version if result.entry else None
        if tag:
            print_info(f"Entry follows the {tag} dist-tag; the host resolves it at install time.")
        else:
            print_info("Entry is not pinned; the host resolves the newest version at install time.")
        return

    _report_patch(outcome)
    if not outcome.success:
        raise typer.Exit(code=1)
