"""Config inspection commands."""

from __future__ import annotations

import typer

from exerplan.commands.common import get_state, print_json_payload
from exerplan.core.config import DEFAULT_CONFIG, save_config

app = typer.Typer(help="Show or initialise configuration")


@app.command("show")
def show_command(ctx: typer.Context) -> None:
    """Print the effective configuration."""
    state = get_state(ctx)
    payload = {"path": str(state.config_path), "config": state.config}
    if state.machine_output:
        print_json_payload(state, payload)
        return
    state.console.print(f"Config file: {state.config_path}")
    state.console.print_json(data=state.config)


@app.command("init")
def init_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", help="Overwrite an existing config file"),
) -> None:
    """Write the default configuration to the config path."""
    state = get_state(ctx)
    if state.config_path.exists() and not force:
        typer.echo(f"Config already exists at {state.config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)
    path = save_config(DEFAULT_CONFIG, state.config_path)
    if state.json_output:
        print_json_payload(state, {"status": "written", "path": str(path)})
        return
    state.console.print(f"Wrote default config to {path}")
