"""Install command implementation.

Registers the plugin in the host config and writes the plugin's own
config for the selected providers.
"""

import asyncio
import json
from collections.abc import Callable
from typing import Annotated

import typer

from plugpin.cli.types import get_settings
from plugpin.configs.manager import (
    add_auth_plugins,
    add_plugin_to_config,
    add_provider_config,
    add_server_config,
    disable_default_agents,
    generate_lite_config,
    write_lite_config,
)
from plugpin.configs.models import ConfigMergeResult, InstallConfig
from plugpin.core.settings import Settings
from plugpin.registry.client import RegistryClient
from plugpin.utils.formatting import console, create_table, print_info, print_success, print_warning

app = typer.Typer(
    help="Install the plugin into the host configuration.",
    invoke_without_command=True,
)

Step = tuple[str, Callable[[], ConfigMergeResult]]


def _plan_steps(install_config: InstallConfig, settings: Settings) -> list[Step]:
    """Build the ordered install steps for the selected integrations."""
    steps: list[Step] = [("Register plugin", lambda: add_plugin_to_config(settings))]

    if install_config.has_antigravity:
        registry = RegistryClient(settings)
        steps.append(
            (
                "Add auth plugin",
                lambda: asyncio.run(add_auth_plugins(install_config, settings, registry)),
            )
        )
        steps.append(("Add Google provider", lambda: add_provider_config(install_config, settings)))

    if install_config.has_tmux:
        steps.append(("Configure server port", lambda: add_server_config(install_config, settings)))

    steps.append(("Disable default agents", lambda: disable_default_agents(settings)))
    steps.append(("Write plugin config", lambda: write_lite_config(install_config, settings)))
    return steps


@app.callback(invoke_without_command=True)
def install(
    ctx: typer.Context,
    antigravity: Annotated[
        bool,
        typer.Option("--antigravity", help="Use Google models via Antigravity auth."),
    ] = False,
    openai: Annotated[
        bool,
        typer.Option("--openai", help="Use OpenAI models."),
    ] = False,
    cerebras: Annotated[
        bool,
        typer.Option("--cerebras", help="Use Cerebras models."),
    ] = False,
    tmux: Annotated[
        bool,
        typer.Option("--tmux", help="Enable tmux pane integration."),
    ] = False,
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be written."),
    ] = False,
) -> None:
    """Install the plugin and write provider-specific settings.

    Examples:
        plugpin install --openai
        plugpin install --antigravity --tmux
        plugpin install --cerebras --dry-run
    """
    if ctx.invoked_subcommand is not None:
        return

    settings = get_settings(ctx)
    install_config = InstallConfig(
        has_antigravity=antigravity,
        has_openai=openai,
        has_cerebras=cerebras,
        has_tmux=tmux,
    )
    steps = _plan_steps(install_config, settings)

    if dry_run:
        print_info("Dry-run: the following steps would run:")
        for label, _ in steps:
            console.print(f"  - {label}")
        console.print_json(json.dumps(generate_lite_config(install_config)))
        return

    table = create_table("Install Results")
    table.add_column("Step")
    table.add_column("Status", width=8, justify="center")
    table.add_column("File / Error", style="muted")

    failures = 0
    for label, run in steps:
        result = run()
        if result.success:
            table.add_row(label, "[success]OK[/]", str(result.config_path))
        else:
            failures += 1
            table.add_row(label, "[error]FAIL[/]", result.error or str(result.config_path))

    console.print(table)

    if failures:
        print_warning(f"{failures} of {len(steps)} step(s) failed")
        raise typer.Exit(code=1)

    print_success(f"{settings.package_name} installed.")
