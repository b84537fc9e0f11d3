"""Shared command helpers."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import typer
import yaml

from exerplan.core.models import PersonalBestLift, Workout
from exerplan.core.state import CLIState
from exerplan.core.strength import estimate_workout_load
from exerplan.exporters.markdown import Estimator
from exerplan.utils.parsing import load_personal_bests


def get_state(ctx: typer.Context) -> CLIState:
    """Extract validated CLI state from Typer context."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=2)
    return state


def print_json_payload(state: CLIState, payload: Any) -> None:
    """Print JSON payload with plain-mode fallback for piping."""
    if state.plain_output:
        typer.echo(json.dumps(payload, separators=(",", ":")))
        return
    state.console.print_json(data=payload)


def estimation_settings(config: Dict[str, Any], candidates: Sequence[str] = ()) -> Dict[str, Any]:
    """Keyword arguments for the strength helpers, taken from config."""
    matcher_cfg = config.get("matcher", {})
    strength_cfg = config.get("strength", {})
    extra_names: List[str] = [str(name) for name in matcher_cfg.get("extra_candidates", [])]
    extra_names.extend(candidates)
    return {
        "extra_names": extra_names,
        "threshold": float(matcher_cfg.get("threshold", 0.5)),
        "algorithm": str(matcher_cfg.get("algorithm", "token")),
        "divisor": float(strength_cfg.get("epley_divisor", 30.0)),
        "use_keyword_fallback": bool(strength_cfg.get("keyword_fallback", True)),
    }


def read_personal_bests(path: Optional[Path]) -> List[PersonalBestLift]:
    """Load personal bests for a command, turning bad files into a usage error."""
    if path is None:
        return []
    try:
        return load_personal_bests(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Could not read personal bests from {path}: {exc}") from exc


def build_estimator(state: CLIState, personal_bests: List[PersonalBestLift]) -> Optional[Estimator]:
    if not personal_bests:
        return None
    settings = estimation_settings(state.config)

    def _estimate(workout: Workout) -> Optional[float]:
        return estimate_workout_load(workout, personal_bests, **settings)

    return _estimate
