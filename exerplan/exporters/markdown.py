"""Markdown export of imported programs."""

from __future__ import annotations

from pathlib import Path
from typing import Callable, List, Optional

from exerplan.core.constants import DAY_TYPE_LABELS
from exerplan.core.models import BlockImport, Day, DaySchedule, DayType, Workout
from exerplan.exporters.json_export import Program
from exerplan.utils.formatting import escape_cell, format_load, format_reps, format_sets
from exerplan.utils.text import slugify

Estimator = Callable[[Workout], Optional[float]]

_TABLE_HEADER = [
    "| Exercise | Sets | Reps | Load | RPE | Rest | Notes |",
    "|----------|------|------|------|-----|------|-------|",
]


def _day_heading(day: Day) -> str:
    prefix = f"{day.day}. " if day.day is not None else ""
    label = DAY_TYPE_LABELS.get(day.day_type.value, day.day_type.value)
    return f"### {prefix}{day.name} ({label})"


def _workout_row(workout: Workout, estimator: Optional[Estimator]) -> str:
    estimate = None
    if workout.load is None and estimator is not None:
        estimate = estimator(workout)
    cells = [
        escape_cell(workout.exercise_name),
        format_sets(workout),
        escape_cell(format_reps(workout)),
        format_load(workout.load, estimate),
        escape_cell(workout.rpe) or "-",
        escape_cell(workout.rest) or "-",
        escape_cell(workout.notes),
    ]
    return "| " + " | ".join(cells) + " |"


def schedule_to_markdown(days: DaySchedule, estimator: Optional[Estimator] = None) -> List[str]:
    lines: List[str] = []
    for day, workouts in days.items():
        lines.append(_day_heading(day))
        lines.append("")
        if day.day_type is DayType.REST and not workouts:
            lines.append("_Rest_")
        elif not workouts:
            lines.append("_No exercises_")
        else:
            lines.extend(_TABLE_HEADER)
            lines.extend(_workout_row(workout, estimator) for workout in workouts)
        lines.append("")
    return lines


def _notes_section(notes: List[str]) -> List[str]:
    if not notes:
        return []
    return ["**Goals:**", ""] + [f"- {note}" for note in notes] + [""]


def program_to_markdown(
    program: Program,
    title: str,
    estimator: Optional[Estimator] = None,
    frontmatter: bool = True,
) -> str:
    """Render an imported program as markdown, one table per day."""
    lines: List[str] = []
    if isinstance(program, BlockImport):
        blocks = [(program.name, program.notes, program.days)]
    else:
        blocks = [(week.plan.name, week.plan.notes, week.days) for week in program]

    if frontmatter:
        title_yaml = title.replace('"', '\\"')
        day_count = sum(len(days) for _, _, days in blocks)
        lines.extend(["---", f'title: "{title_yaml}"', f"blocks: {len(blocks)}", f"days: {day_count}", "---", ""])

    lines.extend([f"# {title}", ""])
    for name, notes, days in blocks:
        lines.extend([f"## {name}", ""])
        lines.extend(_notes_section(notes))
        lines.extend(schedule_to_markdown(days, estimator))

    return "\n".join(lines).rstrip() + "\n"


def write_program_markdown(
    output_dir: Path,
    program: Program,
    title: str,
    estimator: Optional[Estimator] = None,
    frontmatter: bool = True,
    rewrite: bool = False,
) -> Path:
    """Write the program to ``<output_dir>/<slug>.md`` and return the path."""
    out_path = output_dir / f"{slugify(title)}.md"
    if out_path.exists() and not rewrite:
        return out_path
    output_dir.mkdir(parents=True, exist_ok=True)
    out_path.write_text(program_to_markdown(program, title, estimator=estimator, frontmatter=frontmatter))
    return out_path
