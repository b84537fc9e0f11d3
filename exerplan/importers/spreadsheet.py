"""Row-oriented spreadsheet importer (first sheet of an .xlsx workbook).

Rows starting with ``DAY`` or ``WEEK`` open a day; other rows are exercises
laid out as name, sets, reps, load, RPE, rest, notes in columns A-G.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Any, Iterable, List, Optional, Sequence, Union

import openpyxl

from exerplan.core.constants import SPREADSHEET_DAY_PREFIXES
from exerplan.core.models import Day, DayType, ImportResult, ImportStatus, Plan, WeekImport, Workout

logger = logging.getLogger(__name__)

WorkbookSource = Union[str, Path, IO[bytes]]


def cell_text(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def cell_number(row: Sequence[Any], index: int) -> Optional[float]:
    """Numeric cell value; blank is ``None`` and text raises ``ValueError``."""
    if index >= len(row):
        return None
    value = row[index]
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"expected a number, got {value!r}")
    return float(value)


def parse_workout_row(row: Sequence[Any]) -> Workout:
    sets = cell_number(row, 1)
    reps = cell_number(row, 2)
    load = cell_number(row, 3)
    return Workout(
        exercise_name=cell_text(row, 0),
        sets=int(sets or 0),
        warm_up_sets=0,
        working_sets=int(sets or 0),
        reps=int(reps) if reps is not None else None,
        # Zero is unspecified here, not bodyweight.
        load=None if load == 0.0 else load,
        rpe=cell_text(row, 4),
        rest=cell_text(row, 5),
        notes=cell_text(row, 6),
    )


def parse_rows(
    rows: Iterable[Sequence[Any]],
    plan_name: str = "Imported Plan",
    issues: Optional[List[str]] = None,
) -> WeekImport:
    """Build a plan and its day schedule from spreadsheet rows."""
    issues = issues if issues is not None else []
    week = WeekImport(plan=Plan(name=plan_name))
    current_day: Optional[Day] = None
    workouts: List[Workout] = []

    for number, row in enumerate(rows, start=1):
        first = cell_text(row, 0)
        if first.upper().startswith(SPREADSHEET_DAY_PREFIXES):
            if current_day is not None:
                week.days[current_day] = workouts
            current_day = Day(name=first, day_type=DayType.WORKING)
            workouts = []
        elif first and current_day is not None:
            try:
                workouts.append(parse_workout_row(row))
            except ValueError as exc:
                issues.append(f"row {number}: skipped ({exc})")

    if current_day is not None:
        week.days[current_day] = workouts
    return week


def import_workbook(source: WorkbookSource, plan_name: str = "Imported Plan") -> ImportResult[List[WeekImport]]:
    """Import the first sheet of a workbook. Never raises."""
    try:
        workbook = openpyxl.load_workbook(source, read_only=True, data_only=True)
    except Exception as exc:  # noqa: BLE001 - openpyxl raises several unrelated types
        logger.warning("Could not open workbook: %s", exc)
        return ImportResult(value=[], status=ImportStatus.UNREADABLE, issues=[str(exc)])

    issues: List[str] = []
    try:
        if not workbook.worksheets:
            return ImportResult(value=[], status=ImportStatus.EMPTY)
        rows = list(workbook.worksheets[0].iter_rows(values_only=True))
        if not any(any(value not in (None, "") for value in row) for row in rows):
            return ImportResult(value=[], status=ImportStatus.EMPTY)
        week = parse_rows(rows, plan_name=plan_name, issues=issues)
    except Exception as exc:  # noqa: BLE001 - importers report, never raise
        logger.exception("Workbook import failed")
        return ImportResult(value=[], status=ImportStatus.MALFORMED, issues=issues + [str(exc)])
    finally:
        workbook.close()

    if not week.days:
        return ImportResult(value=[week], status=ImportStatus.MALFORMED, issues=issues)
    return ImportResult(value=[week], issues=issues)
