from __future__ import annotations

from pathlib import Path

from exerplan.core.models import BlockImport, Day, DayType, Plan, WeekImport, Workout
from exerplan.exporters.json_export import program_to_dict, write_json
from exerplan.exporters.markdown import program_to_markdown, write_program_markdown


def _block() -> BlockImport:
    days = {
        Day(name="W1 Day 1 - Squat", day=1): [
            Workout(exercise_name="SSB squat", sets=5, reps=5, rpe="8", rest="3-5 min"),
            Workout(exercise_name="Pull ups", sets=3, reps=8, load=0.0, notes="Strict | dead hang"),
            Workout(exercise_name="Plank", sets=3, time="0:45"),
        ],
        Day(name="W1 Rest Day 1", day_type=DayType.REST, day=2): [],
    }
    return BlockImport(name="Block One", notes=["1. Maximize strength"], days=days)


def test_block_markdown_layout() -> None:
    content = program_to_markdown(_block(), "Powerbuilding Block")

    assert content.startswith("---\n")
    assert 'title: "Powerbuilding Block"' in content
    assert "blocks: 1" in content
    assert "days: 2" in content
    assert "# Powerbuilding Block" in content
    assert "## Block One" in content
    assert "**Goals:**" in content
    assert "- 1. Maximize strength" in content
    assert "### 1. W1 Day 1 - Squat (Working)" in content
    assert "### 2. W1 Rest Day 1 (Rest)" in content
    assert "_Rest_" in content


def test_load_rendering() -> None:
    content = program_to_markdown(_block(), "Block", estimator=lambda workout: 267.5, frontmatter=False)

    assert not content.startswith("---")
    assert "| SSB squat | 5 | 5 | Est. 267.5 | 8 | 3-5 min |  |" in content
    assert "| Pull ups | 3 | 8 | BW | - | - | Strict \\| dead hang |" in content
    assert "| Plank | 3 | 0:45 | Est. 267.5 |" in content


def test_missing_estimate_renders_dash() -> None:
    content = program_to_markdown(_block(), "Block", estimator=lambda workout: None)
    assert "| SSB squat | 5 | 5 | - | 8 |" in content


def test_weekly_markdown_shows_warm_ups_and_amrap() -> None:
    day = Day(name="FULL BODY 2")
    weeks = [
        WeekImport(
            plan=Plan(name="Week 1", notes=["Build a base"]),
            days={
                day: [
                    Workout(
                        exercise_name="Pull-up",
                        sets=4,
                        warm_up_sets=1,
                        working_sets=3,
                        notes="AMRAP. Bodyweight",
                    )
                ]
            },
        ),
        WeekImport(plan=Plan(name="Week 2"), days={Day(name="FULL BODY 1"): []}),
    ]
    content = program_to_markdown(weeks, "Weekly")
    assert "blocks: 2" in content
    assert "### FULL BODY 2 (Working)" in content
    assert "| Pull-up | 4 (1+3) | AMRAP | - |" in content
    assert "_No exercises_" in content


def test_write_program_markdown_respects_rewrite(tmp_path: Path) -> None:
    path = write_program_markdown(tmp_path / "out", _block(), "Block One: Strength")
    assert path.name == "block-one-strength.md"
    assert "## Block One" in path.read_text()

    path.write_text("edited")
    write_program_markdown(tmp_path / "out", _block(), "Block One: Strength")
    assert path.read_text() == "edited"

    write_program_markdown(tmp_path / "out", _block(), "Block One: Strength", rewrite=True)
    assert path.read_text().startswith("---")


def test_program_to_dict_shapes(tmp_path: Path) -> None:
    block_payload = program_to_dict(_block())
    assert block_payload["block"]["name"] == "Block One"
    assert [day["name"] for day in block_payload["block"]["days"]] == ["W1 Day 1 - Squat", "W1 Rest Day 1"]
    assert block_payload["block"]["days"][1]["dayType"] == "REST"

    weeks_payload = program_to_dict([WeekImport(plan=Plan(name="Week 1"))])
    assert weeks_payload == {"weeks": [{"plan": {"name": "Week 1", "isPrimary": False, "notes": []}, "days": []}]}

    path = write_json(tmp_path / "nested" / "program.json", block_payload)
    assert path.read_text().endswith("\n")
