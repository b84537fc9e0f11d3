"""Weekly-block CSV importer.

Programs in this dialect list weeks one after another down a single label
column (index 1). Each week opens with a ``Week ...`` label, may carry goal
lines, then day headings followed by exercise rows.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from functools import reduce
from typing import List, Optional, Tuple

from exerplan.core.constants import (
    WEEKLY_DAY_HEADINGS,
    WEEKLY_REST_HEADING,
    WEEKLY_SKIP_NAMES,
    WEEKLY_SKIP_PREFIXES,
)
from exerplan.core.models import Day, DayType, ImportResult, Plan, WeekImport, Workout
from exerplan.importers.common import import_lines
from exerplan.utils.parsing import Source, cell, digits_int, leading_int, tokenize_line

LABEL_COLUMN = 1
NAME_COLUMN = 2
WARM_UP_SETS_COLUMN = 3
WORKING_SETS_COLUMN = 4
REPS_COLUMN = 5
RPE_COLUMN = 8
REST_COLUMN = 9
NOTES_COLUMN = 10


class Phase(str, Enum):
    IDLE = "idle"
    IN_WEEK = "in-week"
    IN_DAY = "in-day"


@dataclass(frozen=True)
class WeeklyState:
    """Immutable accumulator threaded through the lines of one document."""

    phase: Phase = Phase.IDLE
    week_name: str = ""
    week_notes: Tuple[str, ...] = ()
    days: Tuple[Tuple[Day, Tuple[Workout, ...]], ...] = ()
    day: Optional[Day] = None
    workouts: Tuple[Workout, ...] = ()
    weeks: Tuple[WeekImport, ...] = ()


def is_week_label(label: str) -> bool:
    return label.lower().startswith("week")


def is_day_heading(label: str) -> bool:
    upper = label.upper()
    return any(heading in upper for heading in WEEKLY_DAY_HEADINGS)


def is_exercise_name(name: str) -> bool:
    if not name or name in WEEKLY_SKIP_NAMES:
        return False
    lowered = name.lower()
    return not any(lowered.startswith(prefix.lower()) for prefix in WEEKLY_SKIP_PREFIXES)


def parse_exercise(cells: List[str]) -> Workout:
    """Build a workout from one exercise row."""
    warm_up_sets = digits_int(cell(cells, WARM_UP_SETS_COLUMN)) or 0
    working_sets = digits_int(cell(cells, WORKING_SETS_COLUMN)) or 0
    reps_raw = cell(cells, REPS_COLUMN)
    notes = cell(cells, NOTES_COLUMN)

    amrap = "amrap" in reps_raw.lower()
    return Workout(
        exercise_name=cell(cells, NAME_COLUMN),
        sets=warm_up_sets + working_sets,
        warm_up_sets=warm_up_sets,
        working_sets=working_sets,
        reps=None if amrap else leading_int(reps_raw),
        rpe=cell(cells, RPE_COLUMN),
        rest=cell(cells, REST_COLUMN),
        notes=f"AMRAP. {notes}".strip() if amrap else notes,
    )


def close_day(state: WeeklyState) -> WeeklyState:
    if state.day is None:
        return state
    return replace(
        state,
        phase=Phase.IN_WEEK,
        days=state.days + ((state.day, state.workouts),),
        day=None,
        workouts=(),
    )


def close_week(state: WeeklyState) -> WeeklyState:
    state = close_day(state)
    weeks = state.weeks
    if state.week_name:
        plan = Plan(name=state.week_name, notes=list(state.week_notes))
        schedule = {day: list(workouts) for day, workouts in state.days}
        weeks = weeks + (WeekImport(plan=plan, days=schedule),)
    return WeeklyState(weeks=weeks)


def advance(state: WeeklyState, cells: List[str]) -> WeeklyState:
    """Apply one tokenized line to the accumulator."""
    label = cell(cells, LABEL_COLUMN)

    if is_week_label(label):
        return replace(close_week(state), phase=Phase.IN_WEEK, week_name=label)

    if is_day_heading(label):
        if state.phase is Phase.IDLE:
            return state
        day_type = DayType.REST if WEEKLY_REST_HEADING in label.upper() else DayType.WORKING
        return replace(close_day(state), phase=Phase.IN_DAY, day=Day(name=label, day_type=day_type))

    if state.phase is Phase.IN_DAY:
        if is_exercise_name(cell(cells, NAME_COLUMN)):
            return replace(state, workouts=state.workouts + (parse_exercise(cells),))
        return state

    if state.phase is Phase.IN_WEEK and label:
        return replace(state, week_notes=state.week_notes + (label,))

    return state


def finish(state: WeeklyState) -> List[WeekImport]:
    return list(close_week(state).weeks)


def parse_weekly_lines(lines: List[str], issues: Optional[List[str]] = None) -> List[WeekImport]:
    """Parse the lines of a weekly-block document into one import per week."""
    weeks = finish(reduce(advance, (tokenize_line(line) for line in lines), WeeklyState()))
    if issues is not None:
        issues.extend(f"{week.plan.name}: no day headings" for week in weeks if not week.days)
    return weeks


def import_weekly_csv(source: Source) -> ImportResult[List[WeekImport]]:
    """Import a weekly-block CSV. Never raises; see ``ImportResult.status``."""
    return import_lines(source, parse_weekly_lines, empty=list, is_empty=lambda weeks: not weeks)
