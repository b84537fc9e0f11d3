"""Canonical program model shared by every importer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Generic, List, Optional, TypeVar

T = TypeVar("T")


class DayType(str, Enum):
    WORKING = "WORKING"
    REST = "REST"


@dataclass
class Plan:
    """Top-level program container."""

    name: str
    id: Optional[int] = None
    is_primary: bool = False
    notes: List[str] = field(default_factory=list)


@dataclass
class Block:
    """Named run of consecutive days within a plan."""

    name: str
    plan_id: Optional[int] = None
    notes: List[str] = field(default_factory=list)
    is_completed: bool = False


@dataclass(eq=False)
class Day:
    """A training or rest day.

    Days compare and hash by identity so they can key an ordered mapping even
    when two headings share a name.
    """

    name: str
    day_type: DayType = DayType.WORKING
    day: Optional[int] = None
    plan_id: Optional[int] = None
    block_id: Optional[int] = None
    is_completed: bool = False


@dataclass
class Workout:
    """A prescribed lift. ``load`` of ``None`` means unspecified, ``0.0`` means bodyweight."""

    exercise_name: str
    sets: int = 0
    warm_up_sets: int = 0
    working_sets: int = 0
    reps: Optional[int] = None
    time: Optional[str] = None
    load: Optional[float] = None
    rpe: str = ""
    rest: str = ""
    notes: str = ""
    is_completed: bool = False


@dataclass(frozen=True)
class PersonalBestLift:
    exercise_name: str
    load: float
    rep_count: int


DaySchedule = Dict[Day, List[Workout]]


@dataclass
class WeekImport:
    """One week unit: a plan header and its ordered day schedule."""

    plan: Plan
    days: DaySchedule = field(default_factory=dict)


@dataclass
class BlockImport:
    """A flattened multi-week block."""

    name: str
    notes: List[str] = field(default_factory=list)
    days: DaySchedule = field(default_factory=dict)


class ImportStatus(str, Enum):
    OK = "ok"
    EMPTY = "empty"
    MALFORMED = "malformed"
    UNREADABLE = "unreadable"


@dataclass
class ImportResult(Generic[T]):
    """Outcome of an import. Importers return this instead of raising."""

    value: T
    status: ImportStatus = ImportStatus.OK
    issues: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status is ImportStatus.OK


def attach_block(plan_id: int, block_import: BlockImport, block_id: Optional[int] = None) -> Block:
    """Assign parent ids on an unattached block import and return its Block.

    Parsers never fabricate plan ids; this is the caller-side step that hands a
    parsed block to storage.
    """
    block = Block(name=block_import.name, plan_id=plan_id, notes=list(block_import.notes))
    for day in block_import.days:
        day.plan_id = plan_id
        day.block_id = block_id
    return block


def weekly_block_names(weeks: List[WeekImport], custom_name: Optional[str] = None) -> List[str]:
    """Block names for a weekly import: ``Week n`` when several weeks, else one name."""
    if len(weeks) > 1:
        if custom_name:
            return [f"{custom_name} - Week {index}" for index in range(1, len(weeks) + 1)]
        return [f"Week {index}" for index in range(1, len(weeks) + 1)]
    return [custom_name or "Imported Block" for _ in weeks]


def workout_to_dict(workout: Workout) -> Dict[str, object]:
    return {
        "exerciseName": workout.exercise_name,
        "sets": workout.sets,
        "warmUpSets": workout.warm_up_sets,
        "workingSets": workout.working_sets,
        "reps": workout.reps,
        "time": workout.time,
        "load": workout.load,
        "rpe": workout.rpe,
        "rest": workout.rest,
        "notes": workout.notes,
        "isCompleted": workout.is_completed,
    }


def day_to_dict(day: Day, workouts: List[Workout]) -> Dict[str, object]:
    return {
        "name": day.name,
        "dayType": day.day_type.value,
        "day": day.day,
        "isCompleted": day.is_completed,
        "workouts": [workout_to_dict(workout) for workout in workouts],
    }
