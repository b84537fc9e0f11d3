"""Static vocabularies and defaults for exerplan."""

from __future__ import annotations

# Lifts offered as match candidates even when no personal best exists yet.
DEFAULT_PR_TYPES = [
    "Back Squat",
    "Front Squat",
    "Deadlift",
    "Bench Press",
    "Clean",
    "Clean and Jerk",
    "Snatch",
]

POWER_WORDS = frozenset(
    {"squat", "bench", "deadlift", "press", "snatch", "clean", "row", "pullup", "dip", "rdl"}
)

# Bidirectional token synonyms.
SYNONYMS = {
    "rdl": ("deadlift",),
    "deadlift": ("rdl",),
}

PREFERRED_CANDIDATES = frozenset({"back squat", "bench press", "deadlift"})

POWER_WORD_MIN_SCORE = 0.3
POWER_WORD_BOOST = 1.3
PREFERRED_CANDIDATE_BONUS = 0.05
DEFAULT_MATCH_THRESHOLD = 0.5

# Checked in order after fuzzy matching fails.
KEYWORD_FALLBACKS = [
    ("squat", "Back Squat"),
    ("bench", "Bench Press"),
    ("rdl", "Deadlift"),
    ("deadlift", "Deadlift"),
    ("snatch", "Snatch"),
    ("clean", "Clean"),
]

EPLEY_DIVISOR = 30.0

# Weekly-block dialect.
WEEKLY_DAY_HEADINGS = ("FULL BODY", "REST DAY", "TEST")
WEEKLY_REST_HEADING = "REST DAY"
WEEKLY_SKIP_NAMES = ("Exercise",)
WEEKLY_SKIP_PREFIXES = ("Jeff Nippard",)

# Multi-week offset dialect.
MULTIWEEK_STRUCTURAL_PREFIXES = ("WEEK", "GOALS", "NOTES")
MULTIWEEK_GOAL_PREFIXES = ("1.", "2.", "3.")
MULTIWEEK_DEFAULT_REST = "3-5 min"

# Spreadsheet dialect.
SPREADSHEET_DAY_PREFIXES = ("DAY", "WEEK")

DAY_TYPE_LABELS = {
    "WORKING": "Working",
    "REST": "Rest",
}
