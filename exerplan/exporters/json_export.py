"""JSON export helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Union

from exerplan.core.models import BlockImport, DaySchedule, WeekImport, day_to_dict

Program = Union[BlockImport, List[WeekImport]]


def schedule_to_list(days: DaySchedule) -> List[Dict[str, Any]]:
    return [day_to_dict(day, workouts) for day, workouts in days.items()]


def program_to_dict(program: Program) -> Dict[str, Any]:
    """Convert an import payload into plain JSON-ready data."""
    if isinstance(program, BlockImport):
        return {
            "block": {
                "name": program.name,
                "notes": list(program.notes),
                "days": schedule_to_list(program.days),
            }
        }
    return {
        "weeks": [
            {
                "plan": {
                    "name": week.plan.name,
                    "isPrimary": week.plan.is_primary,
                    "notes": list(week.plan.notes),
                },
                "days": schedule_to_list(week.days),
            }
            for week in program
        ]
    }


def write_json(path: Path, payload: Any) -> Path:
    """Write payload as pretty JSON and return path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(payload, indent=2) + "\n")
    return path
