"""Strip command implementation.

Prints the strict-JSON form of a JSONC file, useful for piping a host
config into tools that do not understand comments.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from plugpin.jsonc.stripper import strip_jsonc
from plugpin.utils.formatting import print_error

app = typer.Typer(
    help="Print a JSONC file without comments and trailing commas.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def strip(
    ctx: typer.Context,
    file: Annotated[
        Path,
        typer.Option(
            "--file",
            "-f",
            help="JSONC file to strip.",
            exists=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    validate: Annotated[
        bool,
        typer.Option("--validate", help="Fail if the result is not valid JSON."),
    ] = False,
) -> None:
    """Strip comments and trailing commas from a JSONC file."""
    if ctx.invoked_subcommand is not None:
        return

    try:
        content = file.read_text(encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to read {file}: {e}")
        raise typer.Exit(code=1) from e

    stripped = strip_jsonc(content)

    if validate:
        try:
            json.loads(stripped)
        except json.JSONDecodeError as e:
            print_error(f"{file} is not valid JSONC: {e}")
            raise typer.Exit(code=1) from e

    typer.echo(stripped, nl=not stripped.endswith("\n"))
