"""Status command implementation.

Shows where the plugin entry was resolved, whether it is pinned, which
channel it follows, and which integrations are configured.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer

from plugpin.cli.types import OutputFormat, get_settings, resolve_directory
from plugpin.configs.resolver import (
    detect_current_config,
    find_plugin_entry,
    get_cached_version,
    get_local_dev_version,
)
from plugpin.utils.formatting import console, create_table
from plugpin.versioning.channels import extract_channel

app = typer.Typer(
    help="Show the plugin's install and pin state.",
    invoke_without_command=True,
)


def _yes_no(value: bool) -> str:
    return "[success]yes[/]" if value else "[muted]no[/]"


@app.callback(invoke_without_command=True)
def status(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Project directory to search (default: current directory).",
        ),
    ] = None,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
) -> None:
    """Show the resolved plugin entry and detected install state."""
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)
    project_dir = resolve_directory(directory)

    entry = find_plugin_entry(project_dir, settings)
    detected = detect_current_config(settings)
    local_version = get_local_dev_version(project_dir, settings)
    cached_version = get_cached_version(settings)
    channel = extract_channel(entry.pinned_version if entry else None)

    if output_format == OutputFormat.JSON:
        data: dict[str, Any] = {
            "package": settings.package_name,
            "entry": entry.entry if entry else None,
            "config_path": str(entry.config_path) if entry else None,
            "is_pinned": entry.is_pinned if entry else False,
            "pinned_version": entry.pinned_version if entry else None,
            "channel": channel,
            "cached_version": cached_version,
            "local_dev_version": local_version,
            "is_installed": detected.is_installed,
            "has_antigravity": detected.has_antigravity,
            "has_openai": detected.has_openai,
            "has_cerebras": detected.has_cerebras,
            "has_tmux": detected.has_tmux,
        }
        console.print_json(json.dumps(data))
        return

    table = create_table(f"{settings.package_name} Status")
    table.add_column("Property", style="bold")
    table.add_column("Value")

    if entry is None:
        table.add_row("Entry", "[warning]not found in any config[/]")
    else:
        table.add_row("Entry", entry.entry)
        table.add_row("Config file", str(entry.config_path))
        if entry.is_pinned:
            table.add_row("Pinned", f"[pinned]{entry.pinned_version}[/]")
        else:
            table.add_row("Pinned", "[unpinned]no (follows registry)[/]")
    table.add_row("Channel", channel)
    table.add_row("Cached version", cached_version or "-")
    table.add_row("Local dev version", local_version or "-")
    table.add_row("Antigravity", _yes_no(detected.has_antigravity))
    table.add_row("OpenAI", _yes_no(detected.has_openai))
    table.add_row("Cerebras", _yes_no(detected.has_cerebras))
    table.add_row("tmux", _yes_no(detected.has_tmux))

    console.print(table)
