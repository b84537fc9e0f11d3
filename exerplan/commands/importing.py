"""Program import command."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from exerplan.commands.common import build_estimator, get_state, print_json_payload, read_personal_bests
from exerplan.core.config import resolve_output_dir
from exerplan.core.models import BlockImport, DaySchedule, ImportResult, ImportStatus
from exerplan.core.state import CLIState
from exerplan.exporters.json_export import program_to_dict, write_json
from exerplan.exporters.markdown import Estimator, program_to_markdown, write_program_markdown
from exerplan.importers import Dialect, import_program, multiweek_options_from_config
from exerplan.utils.formatting import format_load, format_reps
from exerplan.utils.text import slugify

FAILED_STATUSES = {ImportStatus.UNREADABLE, ImportStatus.MALFORMED}


def read_program(path: Path, dialect: Dialect, name: str, config: Dict[str, Any]) -> ImportResult[Any]:
    """Open ``path`` and import it; an unopenable file is an ``unreadable`` result."""
    options = multiweek_options_from_config(config) if dialect is Dialect.MULTIWEEK else None
    empty: Any = BlockImport(name=name) if dialect is Dialect.MULTIWEEK else []
    try:
        with path.open("rb") as stream:
            return import_program(stream, dialect, name=name, options=options)
    except OSError as exc:
        return ImportResult(value=empty, status=ImportStatus.UNREADABLE, issues=[str(exc)])


def _schedules(program: Any) -> List[DaySchedule]:
    if isinstance(program, BlockImport):
        return [program.days]
    return [week.days for week in program]


def _print_summary(state: CLIState, title: str, program: Any, estimator: Optional[Estimator]) -> None:
    table = Table(title=escape(title))
    table.add_column("#", justify="right")
    table.add_column("Day")
    table.add_column("Type")
    table.add_column("Exercise")
    table.add_column("Reps")
    table.add_column("Load", justify="right")
    table.add_column("RPE")

    for days in _schedules(program):
        for day, workouts in days.items():
            number = str(day.day) if day.day is not None else ""
            if not workouts:
                table.add_row(number, day.name, day.day_type.value.lower(), "", "", "", "")
                continue
            for index, workout in enumerate(workouts):
                estimate = estimator(workout) if estimator and workout.load is None else None
                table.add_row(
                    number if index == 0 else "",
                    day.name if index == 0 else "",
                    day.day_type.value.lower() if index == 0 else "",
                    workout.exercise_name,
                    format_reps(workout),
                    format_load(workout.load, estimate),
                    workout.rpe,
                )
    state.console.print(table)


def _print_plain(title: str, result: ImportResult[Any]) -> None:
    typer.echo(f"status\t{result.status.value}")
    typer.echo(f"program\t{title}")
    for days in _schedules(result.value):
        for day, workouts in days.items():
            number = "" if day.day is None else str(day.day)
            typer.echo(f"{number}\t{day.name}\t{day.day_type.value}\t{len(workouts)}")


def _print_issues(state: CLIState, issues: List[str]) -> None:
    console = state.log_console or state.console
    for issue in issues:
        if state.plain_output:
            console.print(f"warning: {issue}", markup=False, highlight=False)
        else:
            console.print(f"[yellow]warning:[/yellow] {escape(issue)}")


def import_command(
    ctx: typer.Context,
    file: Path = typer.Argument(..., help="Program file to import"),
    dialect: Dialect = typer.Option(..., "--dialect", "-d", help="Source layout: weekly|multiweek|spreadsheet"),
    name: Optional[str] = typer.Option(None, help="Plan/block name (defaults to the file name)"),
    output_format: str = typer.Option("summary", "--format", help="summary|json|markdown"),
    output: Optional[Path] = typer.Option(None, help="Write json/markdown output into this directory"),
    bests: Optional[Path] = typer.Option(None, help="JSON/YAML personal bests for load estimates"),
    rewrite: bool = typer.Option(False, help="Overwrite existing output files"),
) -> None:
    """Import a training program export into the canonical plan model."""
    state = get_state(ctx)
    if output_format not in {"summary", "json", "markdown"}:
        raise typer.BadParameter("--format must be summary, json, or markdown")

    title = name or file.stem
    try:
        result = read_program(file, dialect, title, state.config)
    except ValueError as exc:
        typer.echo(f"Config error: {exc}")
        raise typer.Exit(code=2)

    estimator = build_estimator(state, read_personal_bests(bests))
    payload: Dict[str, Any] = {
        "status": result.status.value,
        "issues": list(result.issues),
        "dialect": dialect.value,
        **program_to_dict(result.value),
    }

    if output is not None and output_format != "summary":
        out_dir = resolve_output_dir(state.config, output)
        if output_format == "json":
            out_path = out_dir / f"{slugify(title)}.json"
            if rewrite or not out_path.exists():
                write_json(out_path, payload)
        else:
            out_path = write_program_markdown(
                out_dir,
                result.value,
                title,
                estimator=estimator,
                frontmatter=bool(state.section("export").get("markdown_frontmatter", True)),
                rewrite=rewrite,
            )
        if state.json_output:
            print_json_payload(state, {"status": result.status.value, "path": str(out_path)})
        else:
            state.console.print(f"Imported {escape(title)} ({result.status.value})")
            state.console.print(f"Exported to: {out_path}")
    elif state.json_output or output_format == "json":
        print_json_payload(state, payload)
    elif output_format == "markdown":
        typer.echo(program_to_markdown(result.value, title, estimator=estimator, frontmatter=False))
    elif state.plain_output:
        _print_plain(title, result)
        _print_issues(state, result.issues)
    else:
        _print_summary(state, title, result.value, estimator)
        state.console.print(f"Status: {result.status.value}")
        _print_issues(state, result.issues)

    if result.status in FAILED_STATUSES:
        raise typer.Exit(code=1)
