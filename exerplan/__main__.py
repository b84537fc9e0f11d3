"""Entry point for exerplan."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from exerplan import __version__
from exerplan.commands import config as config_commands
from exerplan.commands.estimate import estimate_command, match_command
from exerplan.commands.importing import import_command
from exerplan.core.config import ConfigError, default_config_path, load_config
from exerplan.core.state import CLIState

app = typer.Typer(
    add_completion=False,
    help="Import strength programs and estimate working loads",
    invoke_without_command=True,
)


def configure_logging(console: Console, verbose: bool, quiet: bool) -> None:
    """Send exerplan log records to a rich handler."""
    level = logging.DEBUG if verbose else logging.ERROR if quiet else logging.WARNING
    handler = RichHandler(console=console, show_time=False, show_path=verbose, markup=False)
    root = logging.getLogger("exerplan")
    root.handlers = [handler]
    root.setLevel(level)
    root.propagate = False


@app.callback()
def main_callback(
    ctx: typer.Context,
    json_output: bool = typer.Option(False, "--json", help="Output JSON where available"),
    plain_output: bool = typer.Option(
        False,
        "--plain",
        help="Output plain text (no rich formatting/tables)",
    ),
    config: Optional[Path] = typer.Option(None, "--config", help="Path to config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Quiet output"),
    version: bool = typer.Option(False, "--version", help="Show version and exit"),
) -> None:
    """Initialize global CLI state."""
    if version:
        typer.echo(__version__)
        raise typer.Exit(code=0)

    if json_output and plain_output:
        typer.echo("Options --json and --plain are mutually exclusive.")
        raise typer.Exit(code=2)

    cfg_path = (config or default_config_path()).expanduser().resolve()
    try:
        cfg = load_config(cfg_path)
    except ConfigError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    console = Console(
        quiet=quiet,
        no_color=plain_output,
        log_time=False,
        log_path=False,
    )
    log_console = Console(stderr=True, no_color=plain_output)
    configure_logging(log_console, verbose=verbose, quiet=quiet)
    ctx.obj = CLIState(
        json_output=(json_output and not plain_output),
        plain_output=plain_output,
        verbose=verbose,
        quiet=quiet,
        config_path=cfg_path,
        config=cfg,
        console=console,
        log_console=log_console,
    )

    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


# Top-level commands
app.command("import")(import_command)
app.command("estimate")(estimate_command)
app.command("match")(match_command)
app.add_typer(config_commands.app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
