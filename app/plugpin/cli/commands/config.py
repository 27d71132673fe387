"""Config command implementation.

Shows the active plugpin settings and updates individual fields in the
settings file.
"""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError

from plugpin.cli.types import OutputFormat, get_settings
from plugpin.core.settings import Settings, SettingsError, save_settings
from plugpin.utils.formatting import console, create_table, print_error, print_success

app = typer.Typer(
    help="Show or change plugpin settings.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def config(
    ctx: typer.Context,
    package_name: Annotated[
        str | None,
        typer.Option("--package", help="npm package name of the managed plugin."),
    ] = None,
    host_name: Annotated[
        str | None,
        typer.Option("--host", help="Host application name."),
    ] = None,
    registry_url: Annotated[
        str | None,
        typer.Option("--registry", help="npm registry base URL."),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option("--timeout", help="Registry timeout in seconds (0.5-60)."),
    ] = None,
    server_port: Annotated[
        int | None,
        typer.Option("--port", help="Host server port for tmux integration."),
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
    """Show the active settings, or save the given changes.

    Examples:
        plugpin config
        plugpin config --registry https://registry.example.com --timeout 10
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)
    changes: dict[str, Any] = {
        key: value
        for key, value in {
            "package_name": package_name,
            "host_name": host_name,
            "registry_url": registry_url,
            "fetch_timeout_seconds": timeout,
            "server_port": server_port,
        }.items()
        if value is not None
    }

    if changes:
        settings = _save_changes(ctx, settings, changes)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps(settings.model_dump()))
        return

    table = create_table("plugpin Settings")
    table.add_column("Setting", style="bold")
    table.add_column("Value")
    for key, value in settings.model_dump().items():
        table.add_row(key, str(value))
    console.print(table)


def _save_changes(ctx: typer.Context, settings: Settings, changes: dict[str, Any]) -> Settings:
    obj = ctx.obj if isinstance(ctx.obj, dict) else {}
    settings_path: Path | None = obj.get("settings_path")

    try:
        updated = Settings.model_validate({**settings.model_dump(), **changes})
    except ValidationError as e:
        print_error(f"Invalid settings: {e}")
        raise typer.Exit(code=1) from e

    try:
        saved_path = save_settings(updated, settings_path)
    except SettingsError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Saved settings to {saved_path}")
    return updated
