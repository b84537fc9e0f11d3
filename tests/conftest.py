from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Any, List, Sequence

import openpyxl
import pytest
from typer.testing import CliRunner

from exerplan.core.models import PersonalBestLift


@pytest.fixture()
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    path = tmp_path / "config" / "config.toml"
    monkeypatch.setenv("EXERPLAN_CONFIG_FILE", str(path))
    monkeypatch.delenv("EXERPLAN_OUTPUT_DIR", raising=False)
    return path


@pytest.fixture()
def core_lifts() -> List[str]:
    return [
        "Back Squat",
        "Bench Press",
        "Deadlift",
        "Overhead Press",
        "Front Squat",
        "Clean",
        "Snatch",
    ]


@pytest.fixture()
def weekly_csv() -> str:
    return textwrap.dedent(
        """\
        ,Jeff Nippard's Powerbuilding
        ,Week 1
        ,Build a base of volume
        ,FULL BODY 1: Squat
        ,,Exercise,Warm-up Sets,Working Sets,Reps,Load,%,RPE,Rest,Notes
        ,,Back Squat,3,1,1,,,8,3-5 min,Top set
        ,,Back Squat,3,4,5-6,,,7-9,3-5 min,"Keep back tight, brace"
        ,REST DAY
        ,FULL BODY 2
        ,,Pull-up,1,3,AMRAP,,,9,2 min,Bodyweight
        ,Week 2
        ,FULL BODY 1: Squat
        ,,Front Squat,2,3,3,,,8,3 min,
        """
    )


@pytest.fixture()
def multiweek_csv() -> str:
    return textwrap.dedent(
        """\
        ,GOALS FOR BLOCK ONE
        ,1. Maximize strength
        ,2. Drive hypertrophy

        ,WEEK 1,,,,,,,WEEK 2,,,,,,WEEK 3
        ,Day 1 - Squat,Sets,Reps,Load,RPE,Notes,,Day 1 - Squat,Sets,Reps,Load,Notes,,Day 1 - Squat,Sets,Reps,Load,Notes

        ,SSB squat,5,5,,8,,,SSB squat,5,5,0,,,SSB squat,5,5,0

        ,Day 2 - Press,Sets,Reps,Load,RPE,Notes,,Day 2 - Press,Sets,Reps,Load,Notes,,Day 2 - Press,Sets,Reps,Load,Notes

        ,Bench press,5,5,,8,,,Bench press,5,5,0,,,Bench press,5,5,0

        ,Day 3 - Hinge,Sets,Reps,Load,RPE,Notes,,Day 3 - Hinge,Sets,Reps,Load,Notes,,Day 3 - Hinge,Sets,Reps,Load,Notes

        ,RDL,5,5,,8,,,RDL,5,5,0,,,RDL,5,5,0

        ,Day 4 - Pull,Sets,Reps,Load,RPE,Notes,,Day 4 - Pull,Sets,Reps,Load,Notes,,Day 4 - Pull,Sets,Reps,Load,Notes

        ,Pull ups,5,3,,8,,,Pull ups,5,3,2.5,,,Pull ups,5,3,5
        """
    )


@pytest.fixture()
def personal_bests() -> List[PersonalBestLift]:
    return [
        PersonalBestLift(exercise_name="Back Squat", load=300.0, rep_count=3),
        PersonalBestLift(exercise_name="Back Squat", load=320.0, rep_count=1),
        PersonalBestLift(exercise_name="Bench Press", load=200.0, rep_count=5),
    ]


@pytest.fixture()
def write_workbook(tmp_path: Path):
    def _write(name: str, rows: Sequence[Sequence[Any]]) -> Path:
        workbook = openpyxl.Workbook()
        sheet = workbook.active
        for row in rows:
            sheet.append(list(row))
        path = tmp_path / name
        workbook.save(path)
        return path

    return _write


@pytest.fixture()
def write_text_file(tmp_path: Path):
    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content)
        return path

    return _write
