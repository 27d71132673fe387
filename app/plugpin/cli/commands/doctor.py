"""Doctor command implementation.

Reports whether the host CLI and tmux are available and where plugpin
looks for configuration.
"""

from pathlib import Path
from typing import Annotated

import typer

from plugpin.cli.types import get_settings, resolve_directory
from plugpin.core.paths import get_config_paths, get_settings_path
from plugpin.utils.formatting import console, create_table
from plugpin.utils.shell import command_exists, get_command_version, is_tmux_installed

app = typer.Typer(
    help="Check the host CLI, tmux and config search paths.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def doctor(
    ctx: typer.Context,
    directory: Annotated[
        Path | None,
        typer.Option(
            "--dir",
            "-d",
            help="Project directory to search (default: current directory).",
        ),
    ] = None,
) -> None:
    """Report tool availability and config search paths."""
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)

    tools = create_table("Tools")
    tools.add_column("Tool", style="bold")
    tools.add_column("Status")

    host_version = get_command_version([settings.host_name, "--version"])
    if host_version is not None:
        tools.add_row(settings.host_name, f"[success]{host_version}[/]")
    elif command_exists(settings.host_name):
        tools.add_row(settings.host_name, "[warning]found but --version failed[/]")
    else:
        tools.add_row(settings.host_name, "[error]not installed[/]")

    tmux_status = "[success]installed[/]" if is_tmux_installed() else "[muted]not installed[/]"
    tools.add_row("tmux", tmux_status)
    console.print(tools)

    paths = create_table("Config Search Paths")
    paths.add_column("#", justify="right", width=3)
    paths.add_column("Path")
    paths.add_column("Exists", justify="center", width=8)

    candidates = get_config_paths(resolve_directory(directory), settings)
    for index, path in enumerate(candidates, start=1):
        exists = "[success]yes[/]" if path.is_file() else "[muted]no[/]"
        paths.add_row(str(index), str(path), exists)
    console.print(paths)

    console.print(f"[dim]Settings file: {get_settings_path()}[/dim]")
