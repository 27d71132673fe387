"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.logging import RichHandler

from plugpin import __version__
from plugpin.cli.commands import check, config, doctor, install, status, strip
from plugpin.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="plugpin",
    help="Install and keep a host application's plugin entry up to date.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"plugpin version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through Rich on stderr.

    Args:
        verbose: Log DEBUG and above when True, WARNING and above otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
    settings_path: Annotated[
        Path | None,
        typer.Option(
            "--settings",
            help="Settings file (default: ~/.config/plugpin/settings.toml).",
        ),
    ] = None,
) -> None:
    """plugpin - keep a host application's plugin entry installed and pinned.

    Edits JSON and JSONC host configs in place, preserving comments and
    formatting, and follows the plugin's release channel on the registry.
    """
    configure_logging(verbose)

    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["settings_path"] = settings_path


# Register commands
app.add_typer(install.app, name="install")
app.add_typer(status.app, name="status")
app.add_typer(check.app, name="check")
app.add_typer(strip.app, name="strip")
app.add_typer(doctor.app, name="doctor")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
