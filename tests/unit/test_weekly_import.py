from exerplan.core.models import DayType, ImportStatus
from exerplan.importers.weekly import (
    Phase,
    WeeklyState,
    advance,
    finish,
    import_weekly_csv,
    parse_weekly_lines,
)
from exerplan.utils.parsing import tokenize_line


def _advance(state: WeeklyState, line: str) -> WeeklyState:
    return advance(state, tokenize_line(line))


def test_import_weekly_csv_splits_weeks(weekly_csv: str) -> None:
    result = import_weekly_csv(weekly_csv.encode("utf-8"))
    assert result.status is ImportStatus.OK
    weeks = result.value
    assert [week.plan.name for week in weeks] == ["Week 1", "Week 2"]
    assert weeks[0].plan.notes == ["Build a base of volume"]
    assert weeks[1].plan.notes == []


def test_weekly_days_and_types(weekly_csv: str) -> None:
    week_one = parse_weekly_lines(weekly_csv.splitlines())[0]
    days = list(week_one.days)
    assert [day.name for day in days] == ["FULL BODY 1: Squat", "REST DAY", "FULL BODY 2"]
    assert [day.day_type for day in days] == [DayType.WORKING, DayType.REST, DayType.WORKING]
    assert all(day.day is None and day.plan_id is None for day in days)
    assert week_one.days[days[1]] == []


def test_weekly_exercise_rows(weekly_csv: str) -> None:
    week_one = parse_weekly_lines(weekly_csv.splitlines())[0]
    top_set, back_off = list(week_one.days.values())[0]

    assert top_set.exercise_name == "Back Squat"
    assert (top_set.sets, top_set.warm_up_sets, top_set.working_sets) == (4, 3, 1)
    assert top_set.reps == 1
    assert top_set.rpe == "8"
    assert top_set.rest == "3-5 min"
    assert top_set.notes == "Top set"
    assert top_set.load is None

    assert back_off.reps == 5
    assert back_off.rpe == "7-9"
    assert back_off.notes == "Keep back tight, brace"


def test_weekly_amrap_suppresses_reps(weekly_csv: str) -> None:
    week_one = parse_weekly_lines(weekly_csv.splitlines())[0]
    pull_up = list(week_one.days.values())[2][0]
    assert pull_up.reps is None
    assert pull_up.notes == "AMRAP. Bodyweight"
    assert pull_up.sets == 4


def test_duplicate_day_names_are_kept_apart() -> None:
    lines = [",Week 1", ",REST DAY", ",REST DAY", ",FULL BODY 1", ",,Squat,1,2,3,,,8,2 min,"]
    days = list(parse_weekly_lines(lines)[0].days)
    assert [day.name for day in days] == ["REST DAY", "REST DAY", "FULL BODY 1"]


def test_content_before_first_week_is_dropped() -> None:
    lines = [",FULL BODY 1", ",,Squat,1,2,3,,,8,2 min,", ",Week 1", ",FULL BODY 2", ",,Bench,1,2,3,,,8,2 min,"]
    weeks = parse_weekly_lines(lines)
    assert len(weeks) == 1
    assert [day.name for day in weeks[0].days] == ["FULL BODY 2"]


def test_malformed_numbers_default() -> None:
    lines = [",Week 1", ",FULL BODY 1", ",,Squat,x,,heavy,,,8,,"]
    workout = list(parse_weekly_lines(lines)[0].days.values())[0][0]
    assert workout.sets == 0
    assert workout.reps is None


def test_phase_transitions() -> None:
    state = WeeklyState()
    assert state.phase is Phase.IDLE

    state = _advance(state, ",Week 1")
    assert state.phase is Phase.IN_WEEK
    assert state.week_name == "Week 1"

    state = _advance(state, ",Focus on bar speed")
    assert state.week_notes == ("Focus on bar speed",)

    state = _advance(state, ",FULL BODY 1")
    assert state.phase is Phase.IN_DAY
    assert state.day is not None

    state = _advance(state, ",,Deadlift,2,3,5,,,8,3 min,")
    assert len(state.workouts) == 1

    state = _advance(state, ",Not a note once a day is open")
    assert state.week_notes == ("Focus on bar speed",)

    state = _advance(state, ",Week 2")
    assert state.phase is Phase.IN_WEEK
    assert len(state.weeks) == 1
    assert state.days == ()

    weeks = finish(state)
    assert [week.plan.name for week in weeks] == ["Week 1", "Week 2"]


def test_advance_does_not_mutate_previous_state() -> None:
    start = _advance(WeeklyState(), ",Week 1")
    _advance(start, ",FULL BODY 1")
    assert start.phase is Phase.IN_WEEK
    assert start.day is None


def test_import_weekly_empty_and_unrecognised() -> None:
    assert import_weekly_csv("").status is ImportStatus.EMPTY
    assert import_weekly_csv("\n  \n").status is ImportStatus.EMPTY
    result = import_weekly_csv("just,some,text\nmore,text")
    assert result.status is ImportStatus.MALFORMED
    assert result.value == []


class _BrokenStream:
    def read(self) -> bytes:
        raise OSError("device not ready")


def test_import_weekly_unreadable_source() -> None:
    result = import_weekly_csv(_BrokenStream())
    assert result.status is ImportStatus.UNREADABLE
    assert result.value == []
    assert "device not ready" in result.issues[0]


def test_import_weekly_undecodable_bytes() -> None:
    result = import_weekly_csv(b"\xff\xfe\xfa")
    assert result.status is ImportStatus.UNREADABLE


def test_week_without_days_is_reported() -> None:
    result = import_weekly_csv(",Week 1\n,Just a note\n,Week 2\n,FULL BODY 1\n,,Squat,1,3,5,,,8,2 min,\n")
    assert result.ok
    assert [week.plan.name for week in result.value] == ["Week 1", "Week 2"]
    assert result.issues == ["Week 1: no day headings"]
