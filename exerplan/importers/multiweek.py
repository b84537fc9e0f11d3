"""Multi-week offset CSV importer.

Each week of the program sits in its own column group of the same rows. The
importer finds each group's starting column, reads that week's days, and
flattens every week into one ordered block. A rest day follows every second
working day counted across the whole program.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from exerplan.core.constants import (
    MULTIWEEK_DEFAULT_REST,
    MULTIWEEK_GOAL_PREFIXES,
    MULTIWEEK_STRUCTURAL_PREFIXES,
)
from exerplan.core.models import BlockImport, Day, DaySchedule, DayType, ImportResult, Workout
from exerplan.importers.common import import_lines
from exerplan.utils.parsing import Source, cell, digits_int, parse_float, strict_int, tokenize_line

logger = logging.getLogger(__name__)

GOAL_COLUMN = 1
RPE_HEADER_SHIFT = 4
WORKING_DAYS_PER_REST_DAY = 2

DISCOVERY_STRATEGIES = ("header-row", "column-scan")


@dataclass(frozen=True)
class WeekColumns:
    """Where one week's column group lives.

    ``start_row`` is the first row read for days and exercises; ``probe_row``
    is the sub-header checked for an RPE column.
    """

    offset: int
    start_row: int
    probe_row: int


OffsetDiscovery = Callable[[List[List[str]]], List[WeekColumns]]


def discover_header_row(rows: List[List[str]]) -> List[WeekColumns]:
    """Find the first row mentioning ``WEEK 1`` and take every ``WEEK`` cell in it."""
    header_index = next(
        (index for index, row in enumerate(rows) if any("WEEK 1" in value.upper() for value in row)),
        None,
    )
    if header_index is None:
        return []
    start = header_index + 1
    return [
        WeekColumns(offset=offset, start_row=start, probe_row=start)
        for offset, value in enumerate(rows[header_index])
        if "WEEK" in value.upper()
    ]


def discover_column_scan(first_column: int = 1, stride: int = 7, max_rows: int = 10) -> OffsetDiscovery:
    """Build a discovery step that probes every ``stride``-th column of the top rows.

    A column counts as a week when one of the first ``max_rows`` rows holds a
    ``WEEK`` marker (days start on the next row) or a ``Day 1`` label (days
    start on that row).
    """

    def _discover(rows: List[List[str]]) -> List[WeekColumns]:
        head = rows[:max_rows]
        width = max((len(row) for row in head), default=0)
        weeks: List[WeekColumns] = []
        for column in range(first_column, width, max(stride, 1)):
            for index, row in enumerate(head):
                value = cell(row, column)
                if "WEEK" in value.upper():
                    weeks.append(WeekColumns(offset=column, start_row=index + 1, probe_row=index + 1))
                    break
                if value.lower().startswith("day 1"):
                    weeks.append(WeekColumns(offset=column, start_row=index, probe_row=index))
                    break
        return weeks

    return _discover


def resolve_discovery(
    name: str,
    first_column: int = 1,
    stride: int = 7,
    max_rows: int = 10,
) -> OffsetDiscovery:
    """Map a configured strategy name to a discovery step."""
    if name == "header-row":
        return discover_header_row
    if name == "column-scan":
        return discover_column_scan(first_column=first_column, stride=stride, max_rows=max_rows)
    raise ValueError(f"Unknown offset discovery strategy: {name}")


@dataclass
class MultiWeekOptions:
    discovery: OffsetDiscovery = discover_header_row
    bodyweight_as_zero: bool = False
    default_rest: str = MULTIWEEK_DEFAULT_REST


@dataclass
class _Counters:
    working_days: int = 0
    next_day: int = 1
    schedule: DaySchedule = field(default_factory=dict)


def collect_goals(rows: List[List[str]]) -> List[str]:
    """Numbered goal lines (``1.``, ``2.``, ``3.``) from anywhere in the document."""
    goals = []
    for row in rows:
        text = cell(row, GOAL_COLUMN)
        if text.startswith(MULTIWEEK_GOAL_PREFIXES):
            goals.append(text)
    return goals


def has_rpe_column(rows: List[List[str]], week: WeekColumns) -> bool:
    if week.probe_row >= len(rows):
        return False
    return cell(rows[week.probe_row], week.offset + RPE_HEADER_SHIFT).lower() == "rpe"


def is_exercise_label(label: str) -> bool:
    if not label or label == "Sets" or "focused" in label.lower():
        return False
    upper = label.upper()
    return not any(upper.startswith(prefix) for prefix in MULTIWEEK_STRUCTURAL_PREFIXES)


def parse_load(raw: str, bodyweight_as_zero: bool = False) -> Optional[float]:
    """``BW`` and ``0`` mean bodyweight; anything else non-numeric is unspecified."""
    value = parse_float(raw)
    if "bw" in raw.lower() or value == 0.0:
        return 0.0 if bodyweight_as_zero else None
    return value


def parse_exercise(
    cells: List[str],
    offset: int,
    with_rpe: bool,
    options: MultiWeekOptions,
    issues: List[str],
) -> Workout:
    name = cells[offset]
    sets_raw = cell(cells, offset + 1)
    sets = strict_int(sets_raw)
    if sets is None and sets_raw:
        issues.append(f"{name}: sets {sets_raw!r} is not a whole number, using 0")

    reps_raw = cell(cells, offset + 2)
    reps: Optional[int] = None
    time: Optional[str] = None
    if ":" in reps_raw:
        time = reps_raw
    else:
        reps = digits_int(reps_raw)

    if with_rpe:
        rpe = cell(cells, offset + 4)
        notes = cell(cells, offset + 5)
    else:
        rpe = ""
        notes = cell(cells, offset + 4)
    if "side" in reps_raw.lower():
        notes = f"{notes} (Per side)".strip()

    return Workout(
        exercise_name=name,
        sets=sets or 0,
        reps=reps,
        time=time,
        load=parse_load(cell(cells, offset + 3), options.bodyweight_as_zero),
        rpe=rpe,
        rest=options.default_rest,
        notes=notes,
    )


def read_week(
    rows: List[List[str]],
    week: WeekColumns,
    week_number: int,
    options: MultiWeekOptions,
    issues: List[str],
) -> List[Tuple[str, List[Workout]]]:
    """Collect ``(day name, workouts)`` for one week's column group, in row order."""
    with_rpe = has_rpe_column(rows, week)
    days: List[Tuple[str, List[Workout]]] = []
    active_day = ""
    workouts: List[Workout] = []

    for cells in rows[week.start_row:]:
        if len(cells) <= week.offset:
            continue
        label = cells[week.offset]

        if label.lower().startswith("day"):
            if active_day:
                days.append((active_day, workouts))
            active_day = f"W{week_number} {label}"
            workouts = []
        elif active_day and is_exercise_label(label):
            workouts.append(parse_exercise(cells, week.offset, with_rpe, options, issues))

    if active_day:
        days.append((active_day, workouts))
    return days


def _append_week(
    counters: _Counters,
    week_number: int,
    days: List[Tuple[str, List[Workout]]],
) -> None:
    for name, workouts in days:
        counters.schedule[Day(name=name, day_type=DayType.WORKING, day=counters.next_day)] = workouts
        counters.next_day += 1
        counters.working_days += 1

        if counters.working_days % WORKING_DAYS_PER_REST_DAY == 0:
            rest_number = counters.working_days // WORKING_DAYS_PER_REST_DAY
            rest_day = Day(
                name=f"W{week_number} Rest Day {rest_number}",
                day_type=DayType.REST,
                day=counters.next_day,
            )
            counters.schedule[rest_day] = []
            counters.next_day += 1


def parse_multiweek_lines(
    lines: List[str],
    issues: Optional[List[str]] = None,
    block_name: str = "Imported Block",
    options: Optional[MultiWeekOptions] = None,
) -> BlockImport:
    """Parse a multi-week offset document into one flattened block."""
    options = options or MultiWeekOptions()
    issues = issues if issues is not None else []
    rows = [tokenize_line(line) for line in lines]

    weeks = options.discovery(rows)
    if not weeks:
        issues.append("No week columns found")
    logger.debug("Discovered week offsets: %s", [week.offset for week in weeks])

    counters = _Counters()
    for week_number, week in enumerate(weeks, start=1):
        _append_week(counters, week_number, read_week(rows, week, week_number, options, issues))

    return BlockImport(name=block_name, notes=collect_goals(rows), days=counters.schedule)


def import_multiweek_csv(
    source: Source,
    block_name: str = "Imported Block",
    options: Optional[MultiWeekOptions] = None,
) -> ImportResult[BlockImport]:
    """Import a multi-week offset CSV as one block. Never raises."""
    return import_lines(
        source,
        lambda lines, issues: parse_multiweek_lines(lines, issues, block_name=block_name, options=options),
        empty=lambda: BlockImport(name=block_name),
        is_empty=lambda block: not block.days,
    )
