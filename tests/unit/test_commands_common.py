from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List

import pytest
import typer
from rich.console import Console

from exerplan.commands.common import build_estimator, estimation_settings, get_state, read_personal_bests
from exerplan.core.config import DEFAULT_CONFIG
from exerplan.core.models import PersonalBestLift, Workout
from exerplan.core.state import CLIState


@dataclass
class FakeContext:
    obj: Any


def _state(config: Dict[str, Any] | None = None) -> CLIState:
    return CLIState(
        json_output=False,
        plain_output=True,
        verbose=False,
        quiet=False,
        config_path=Path("/tmp/config.toml"),
        config=config or DEFAULT_CONFIG,
        console=Console(record=True),
    )


def test_get_state_returns_cli_state() -> None:
    state = _state()
    assert get_state(FakeContext(obj=state)) is state


def test_get_state_raises_on_invalid_obj() -> None:
    with pytest.raises(typer.Exit):
        get_state(FakeContext(obj={"not": "state"}))


def test_estimation_settings_from_defaults() -> None:
    assert estimation_settings(DEFAULT_CONFIG) == {
        "extra_names": [],
        "threshold": 0.5,
        "algorithm": "token",
        "divisor": 30.0,
        "use_keyword_fallback": True,
    }


def test_estimation_settings_appends_candidates() -> None:
    config = {
        "matcher": {"algorithm": "levenshtein", "threshold": 0.6, "extra_candidates": ["Safety Bar Squat"]},
        "strength": {"epley_divisor": 24, "keyword_fallback": False},
    }
    settings = estimation_settings(config, ["Pause Squat"])
    assert settings["extra_names"] == ["Safety Bar Squat", "Pause Squat"]
    assert settings["algorithm"] == "levenshtein"
    assert settings["divisor"] == 24.0
    assert settings["use_keyword_fallback"] is False
    assert config["matcher"]["extra_candidates"] == ["Safety Bar Squat"]


def test_read_personal_bests(write_text_file) -> None:
    assert read_personal_bests(None) == []

    path = write_text_file("bests.yaml", "- exercise_name: Deadlift\n  load: 405\n  rep_count: 1\n")
    assert read_personal_bests(path) == [PersonalBestLift(exercise_name="Deadlift", load=405.0, rep_count=1)]


def test_read_personal_bests_bad_file_is_usage_error(write_text_file, tmp_path: Path) -> None:
    with pytest.raises(typer.BadParameter):
        read_personal_bests(tmp_path / "missing.json")

    broken = write_text_file("broken.json", "{not json")
    with pytest.raises(typer.BadParameter):
        read_personal_bests(broken)


def test_build_estimator(personal_bests: List[PersonalBestLift]) -> None:
    assert build_estimator(_state(), []) is None

    estimator = build_estimator(_state(), personal_bests)
    assert estimator is not None
    assert estimator(Workout(exercise_name="SSB squat", reps=5, rpe="8")) == 267.5
    assert estimator(Workout(exercise_name="SSB squat", reps=5)) is None


def test_state_helpers() -> None:
    state = _state()
    assert state.machine_output
    assert state.section("import")["offset_discovery"] == "header-row"
    assert state.section("missing") == {}
