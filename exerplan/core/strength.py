"""One-rep-max projection and its inverse for load suggestions.

Uses the Epley form ``1RM = weight * (1 + reps / divisor)``. The divisor
defaults to 30; some older programs assume 24, which callers can pass in.
"""

from __future__ import annotations

import math
import re
from typing import Iterable, List, Optional, Sequence

from exerplan.core.constants import (
    DEFAULT_MATCH_THRESHOLD,
    DEFAULT_PR_TYPES,
    EPLEY_DIVISOR,
    KEYWORD_FALLBACKS,
)
from exerplan.core.matcher import find_best_match
from exerplan.core.models import PersonalBestLift, Workout
from exerplan.utils.text import normalize_name

_RPE_RANGE_RE = re.compile(r"(\d+\.?\d*)\s*-\s*(\d+\.?\d*)")
_RPE_SINGLE_RE = re.compile(r"(\d+\.?\d*)")


def round_to_half(value: float) -> float:
    """Round half-up to the nearest 0.5."""
    return math.floor(value * 2.0 + 0.5) / 2.0


def one_rep_max(weight: float, reps: int, divisor: float = EPLEY_DIVISOR) -> float:
    """Estimate a one-rep max from a weight lifted for ``reps``."""
    if reps <= 0:
        return 0.0
    if reps == 1:
        return weight
    return weight * (1.0 + reps / divisor)


def estimate_load(
    one_rm: float,
    target_reps: int,
    target_rpe: float,
    divisor: float = EPLEY_DIVISOR,
) -> float:
    """Predict the load for ``target_reps`` at ``target_rpe`` from a one-rep max.

    Reps in reserve (``10 - rpe``) are added to the target reps before the
    one-rep-max formula is inverted. Results are rounded to the nearest 0.5.
    """
    reps_in_reserve = 10.0 - target_rpe
    effective_reps = target_reps + reps_in_reserve
    if effective_reps <= 1.0:
        return round_to_half(one_rm)
    return round_to_half(one_rm / (1.0 + effective_reps / divisor))


def parse_rpe(text: Optional[str]) -> Optional[float]:
    """Parse RPE text like ``"8"``, ``"8.5"`` or ``"7-9"`` (mean of the range)."""
    if not text or not text.strip() or "n/a" in text.lower():
        return None

    range_match = _RPE_RANGE_RE.search(text)
    if range_match:
        return (float(range_match.group(1)) + float(range_match.group(2))) / 2.0

    single_match = _RPE_SINGLE_RE.search(text)
    return float(single_match.group(1)) if single_match else None


def candidate_pool(
    personal_bests: Iterable[PersonalBestLift],
    extra_names: Sequence[str] = (),
) -> List[str]:
    """Distinct personal-best names, then defaults and extras, in first-seen order."""
    names: List[str] = []
    for name in [pb.exercise_name for pb in personal_bests] + list(DEFAULT_PR_TYPES) + list(extra_names):
        if name not in names:
            names.append(name)
    return names


def keyword_fallback(exercise_name: str) -> Optional[str]:
    """Map an exercise name to a canonical lift by keyword containment."""
    lowered = normalize_name(exercise_name)
    for keyword, canonical in KEYWORD_FALLBACKS:
        if keyword in lowered:
            return canonical
    return None


def resolve_exercise(
    exercise_name: str,
    personal_bests: Sequence[PersonalBestLift],
    extra_names: Sequence[str] = (),
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    algorithm: str = "token",
    use_keyword_fallback: bool = True,
) -> Optional[str]:
    """Resolve a free-text exercise name to a personal-best or canonical name."""
    pool = candidate_pool(personal_bests, extra_names)
    match = find_best_match(exercise_name, pool, threshold=threshold, algorithm=algorithm)
    if match is None and use_keyword_fallback:
        match = keyword_fallback(exercise_name)
    return match


def best_one_rep_max(
    personal_bests: Iterable[PersonalBestLift],
    exercise_name: str,
    divisor: float = EPLEY_DIVISOR,
) -> Optional[float]:
    projections = [
        one_rep_max(pb.load, pb.rep_count, divisor=divisor)
        for pb in personal_bests
        if pb.exercise_name == exercise_name
    ]
    return max(projections) if projections else None


def estimate_workout_load(
    workout: Workout,
    personal_bests: Sequence[PersonalBestLift],
    extra_names: Sequence[str] = (),
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    divisor: float = EPLEY_DIVISOR,
    algorithm: str = "token",
    use_keyword_fallback: bool = True,
) -> Optional[float]:
    """Suggest a working load for ``workout`` from matching personal bests.

    Returns ``None`` when the RPE or rep target is missing or nothing matches.
    """
    target_rpe = parse_rpe(workout.rpe)
    if target_rpe is None or workout.reps is None:
        return None

    match = resolve_exercise(
        workout.exercise_name,
        personal_bests,
        extra_names=extra_names,
        threshold=threshold,
        algorithm=algorithm,
        use_keyword_fallback=use_keyword_fallback,
    )
    if match is None:
        return None

    one_rm = best_one_rep_max(personal_bests, match, divisor=divisor)
    if one_rm is None:
        return None
    return estimate_load(one_rm, workout.reps, target_rpe, divisor=divisor)
