"""Formatting helpers used by exports and console output."""

from __future__ import annotations

from typing import Optional

from exerplan.core.models import Workout


def format_number(value: float) -> str:
    """Drop a trailing ``.0`` from whole numbers."""
    return f"{value:g}"


def format_load(load: Optional[float], estimate: Optional[float] = None) -> str:
    """Render a load: ``0`` is bodyweight, ``None`` falls back to an estimate."""
    if load == 0.0:
        return "BW"
    if load is not None and load > 0:
        return format_number(load)
    if estimate is not None:
        return f"Est. {format_number(estimate)}"
    return "-"


def format_reps(workout: Workout) -> str:
    if workout.time:
        return workout.time
    if workout.reps is not None:
        return str(workout.reps)
    if workout.notes.startswith("AMRAP"):
        return "AMRAP"
    return "-"


def format_sets(workout: Workout) -> str:
    if workout.warm_up_sets:
        return f"{workout.sets} ({workout.warm_up_sets}+{workout.working_sets})"
    return str(workout.sets)


def escape_cell(value: str) -> str:
    """Make text safe for a markdown table cell."""
    return (value or "").replace("|", "\\|").replace("\n", " ")
