"""Text helpers for exercise names and file names."""

from __future__ import annotations

import re
from typing import Set

_TOKEN_SPLIT_RE = re.compile(r"[^a-zA-Z0-9]+")


def normalize_name(value: str) -> str:
    """Lower-case and trim an exercise name for comparison."""
    return (value or "").lower().strip()


def name_tokens(value: str) -> Set[str]:
    """Word tokens of a name, ignoring single characters such as ``1"`` or ``x``."""
    return {token for token in _TOKEN_SPLIT_RE.split(value) if len(token) > 1}


def slugify(value: str, max_len: int = 50) -> str:
    """Generate filesystem-safe slug."""
    slug = re.sub(r"[^a-z0-9]+", "-", value.lower()).strip("-")
    if not slug:
        slug = "untitled"
    return slug[:max_len]
