"""Exercise matching and load estimation commands."""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer
from rich.markup import escape
from rich.table import Table

from exerplan.commands.common import estimation_settings, get_state, print_json_payload, read_personal_bests
from exerplan.core.constants import DEFAULT_PR_TYPES
from exerplan.core.matcher import find_best_match_with_score, score_candidates
from exerplan.core.models import Workout
from exerplan.core.strength import best_one_rep_max, estimate_workout_load, parse_rpe, resolve_exercise
from exerplan.utils.formatting import format_number


def estimate_command(
    ctx: typer.Context,
    exercise: str = typer.Argument(..., help="Exercise name as written in the program"),
    reps: int = typer.Option(..., help="Target reps"),
    rpe: str = typer.Option(..., help="Target RPE, e.g. 8 or 7-9"),
    bests: Path = typer.Option(..., help="JSON/YAML file with personal bests"),
    candidate: List[str] = typer.Option([], "--candidate", help="Extra canonical exercise name (repeatable)"),
) -> None:
    """Suggest a working load from personal bests."""
    state = get_state(ctx)
    personal_bests = read_personal_bests(bests)
    settings = estimation_settings(state.config, candidate)

    workout = Workout(exercise_name=exercise, reps=reps, rpe=rpe)
    load = estimate_workout_load(workout, personal_bests, **settings)
    match = resolve_exercise(
        exercise,
        personal_bests,
        extra_names=settings["extra_names"],
        threshold=settings["threshold"],
        algorithm=settings["algorithm"],
        use_keyword_fallback=settings["use_keyword_fallback"],
    )
    one_rm = best_one_rep_max(personal_bests, match, divisor=settings["divisor"]) if match else None

    payload = {
        "exercise": exercise,
        "match": match,
        "reps": reps,
        "rpe": parse_rpe(rpe),
        "oneRepMax": round(one_rm, 2) if one_rm is not None else None,
        "estimatedLoad": load,
    }

    if state.json_output:
        print_json_payload(state, payload)
        return

    if state.plain_output:
        for key, value in payload.items():
            typer.echo(f"{key}\t{'' if value is None else value}")
        return

    if load is None:
        reason = "no matching personal best" if match is None or one_rm is None else "missing RPE"
        state.console.print(f"No estimate for {escape(exercise)} ({reason})")
        return
    state.console.print(
        f"{escape(exercise)} -> {escape(match)}: {reps} reps @ RPE {format_number(payload['rpe'])} "
        f"= [bold]{format_number(load)}[/bold] (1RM {format_number(round(one_rm, 1))})"
    )


def match_command(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Exercise name to resolve"),
    candidate: List[str] = typer.Option([], "--candidate", help="Candidate name (repeatable)"),
    threshold: Optional[float] = typer.Option(None, help="Minimum similarity (default from config)"),
    show_scores: bool = typer.Option(False, "--scores", help="Show every candidate's score"),
) -> None:
    """Resolve an exercise name against canonical lift names."""
    state = get_state(ctx)
    settings = estimation_settings(state.config)
    candidates = list(candidate) or list(DEFAULT_PR_TYPES) + settings["extra_names"]
    limit = settings["threshold"] if threshold is None else threshold

    match, score = find_best_match_with_score(query, candidates, threshold=limit, algorithm=settings["algorithm"])
    scores = score_candidates(query, candidates, algorithm=settings["algorithm"])

    if state.json_output:
        payload = {"query": query, "match": match, "score": round(score, 4), "threshold": limit}
        if show_scores:
            payload["scores"] = {name: round(value, 4) for name, value in scores}
        print_json_payload(state, payload)
        return

    if state.plain_output:
        typer.echo(f"match\t{match or ''}")
        typer.echo(f"score\t{score:.4f}")
        if show_scores:
            for name, value in scores:
                typer.echo(f"{name}\t{value:.4f}")
        return

    if match is None:
        state.console.print(f"No match for {escape(query)} (best score {score:.2f} < {limit:.2f})")
    else:
        state.console.print(f"{escape(query)} -> [bold]{escape(match)}[/bold] ({score:.2f})")

    if show_scores:
        table = Table(title="Candidate scores")
        table.add_column("Candidate")
        table.add_column("Score", justify="right")
        for name, value in sorted(scores, key=lambda item: item[1], reverse=True):
            table.add_row(name, f"{value:.3f}")
        state.console.print(table)
