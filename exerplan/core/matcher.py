"""Fuzzy resolution of free-text exercise names to canonical lifts."""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Set, Tuple

from rapidfuzz.distance import Levenshtein

from exerplan.core.constants import (
    DEFAULT_MATCH_THRESHOLD,
    POWER_WORD_BOOST,
    POWER_WORD_MIN_SCORE,
    POWER_WORDS,
    PREFERRED_CANDIDATE_BONUS,
    PREFERRED_CANDIDATES,
    SYNONYMS,
)
from exerplan.utils.text import name_tokens, normalize_name

ALGORITHMS = ("token", "levenshtein")


def _expand_synonyms(tokens: Set[str]) -> Set[str]:
    expanded = set(tokens)
    for token in tokens:
        expanded.update(SYNONYMS.get(token, ()))
    return expanded


def levenshtein_similarity(first: str, second: str) -> float:
    """Normalized edit-distance score in [0, 1] on already-normalized strings."""
    max_len = max(len(first), len(second))
    if max_len == 0:
        return 1.0
    return (max_len - Levenshtein.distance(first, second)) / max_len


def _token_scores(first: str, second: str) -> Optional[Tuple[float, Set[str]]]:
    words_first = name_tokens(first)
    words_second = name_tokens(second)
    if not words_first or not words_second:
        return None

    expanded_first = _expand_synonyms(words_first)
    expanded_second = _expand_synonyms(words_second)
    common = expanded_first & expanded_second
    union = expanded_first | expanded_second

    jaccard = len(common) / len(union)
    containment = len(common) / min(len(expanded_first), len(expanded_second))
    return max(jaccard, containment), common


def similarity(first: str, second: str, algorithm: str = "token") -> float:
    """Score how alike two exercise names are, from 0.0 to 1.0.

    ``second`` is treated as the candidate side. The ``token`` algorithm takes
    the best of edit distance and synonym-aware token overlap, boosts shared
    power words and nudges the most common canonical lifts ahead on ties.
    ``levenshtein`` is the plain edit-distance score.
    """
    str1 = normalize_name(first)
    str2 = normalize_name(second)

    if str1 == str2:
        return 1.0
    if not str1 or not str2:
        return 0.0

    lev = levenshtein_similarity(str1, str2)
    if algorithm == "levenshtein":
        return lev

    token_result = _token_scores(str1, str2)
    if token_result is None:
        return lev

    token_score, common = token_result
    score = max(lev, token_score)

    if score > POWER_WORD_MIN_SCORE and common & POWER_WORDS:
        score *= POWER_WORD_BOOST

    if str2 in PREFERRED_CANDIDATES:
        score += PREFERRED_CANDIDATE_BONUS

    return min(max(score, 0.0), 1.0)


def score_candidates(
    query: str,
    candidates: Iterable[str],
    algorithm: str = "token",
) -> Sequence[Tuple[str, float]]:
    """Score every candidate against ``query``, keeping candidate order."""
    return [(candidate, similarity(query, candidate, algorithm=algorithm)) for candidate in candidates]


def find_best_match_with_score(
    query: str,
    candidates: Iterable[str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    algorithm: str = "token",
) -> Tuple[Optional[str], float]:
    """Return ``(best_candidate, score)``; the name is ``None`` below ``threshold``."""
    best: Optional[str] = None
    best_score = -1.0

    for candidate, score in score_candidates(query, candidates, algorithm=algorithm):
        # Strictly greater keeps the first-seen candidate on ties.
        if score > best_score:
            best, best_score = candidate, score

    if best is None:
        return None, 0.0
    if best_score >= threshold:
        return best, best_score
    return None, best_score


def find_best_match(
    query: str,
    candidates: Iterable[str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
    algorithm: str = "token",
) -> Optional[str]:
    """Return the closest candidate at or above ``threshold``, else ``None``."""
    match, _ = find_best_match_with_score(query, candidates, threshold=threshold, algorithm=algorithm)
    return match
