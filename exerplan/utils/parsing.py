"""Parsing helpers shared by the program importers."""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

import yaml

from exerplan.core.models import PersonalBestLift

Source = Union[str, bytes, IO[str], IO[bytes]]

_DIGITS_RE = re.compile(r"\D+")


def tokenize_line(line: str) -> List[str]:
    """Split one comma-delimited line into trimmed fields.

    Double quotes group a field, ``""`` inside quotes is a literal quote, and an
    unterminated quote runs to the end of the line. Always returns at least one
    field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False
    index = 0
    length = len(line)

    while index < length:
        char = line[index]
        if char == '"':
            if in_quotes and index + 1 < length and line[index + 1] == '"':
                current.append('"')
                index += 1
            else:
                in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            fields.append("".join(current).strip())
            current = []
        else:
            current.append(char)
        index += 1

    fields.append("".join(current).strip())
    return fields


def cell(cells: List[str], index: int) -> str:
    """Return the cell at ``index`` or an empty string."""
    return cells[index] if 0 <= index < len(cells) else ""


def digits_int(value: str) -> Optional[int]:
    """Keep only the digits of ``value`` and parse them, e.g. ``'~3'`` -> 3."""
    digits = _DIGITS_RE.sub("", value or "")
    return int(digits) if digits else None


def leading_int(value: str, separator: str = "-") -> Optional[int]:
    """Parse the digits before ``separator``, e.g. ``'8-10'`` -> 8."""
    return digits_int((value or "").split(separator, 1)[0])


def strict_int(value: str) -> Optional[int]:
    try:
        return int((value or "").strip())
    except ValueError:
        return None


def parse_float(value: str) -> Optional[float]:
    try:
        return float((value or "").strip())
    except ValueError:
        return None


def read_text(source: Source) -> str:
    """Read a whole character or byte source into text.

    Bytes are decoded as UTF-8 with an optional BOM. The caller owns and closes
    any stream it passes in.
    """
    if isinstance(source, str):
        return source
    if isinstance(source, bytes):
        return source.decode("utf-8-sig")
    raw = source.read()
    if isinstance(raw, bytes):
        return raw.decode("utf-8-sig")
    return raw


def read_lines(source: Source) -> List[str]:
    return read_text(source).splitlines()


def _personal_best_from_dict(item: Dict[str, Any]) -> Optional[PersonalBestLift]:
    name = item.get("exercise_name") or item.get("exerciseName") or item.get("exercise")
    load = item.get("load")
    reps = item.get("rep_count", item.get("repCount", item.get("reps")))
    if not name or load is None or reps is None:
        return None
    try:
        return PersonalBestLift(exercise_name=str(name), load=float(load), rep_count=int(reps))
    except (TypeError, ValueError):
        return None


def load_personal_bests(file_path: Path) -> List[PersonalBestLift]:
    """Load personal-best records from a JSON or YAML file.

    Accepts a single object or a list; entries missing a name, load or rep
    count are dropped.
    """
    text = file_path.read_text()
    raw_data: Any
    if file_path.suffix.lower() in {".yaml", ".yml"}:
        raw_data = yaml.safe_load(text)
    else:
        raw_data = json.loads(text)

    if isinstance(raw_data, dict):
        raw_data = raw_data.get("personal_bests", [raw_data])
    if not isinstance(raw_data, list):
        return []

    records: List[PersonalBestLift] = []
    for item in raw_data:
        if not isinstance(item, dict):
            continue
        record = _personal_best_from_dict(item)
        if record is not None:
            records.append(record)
    return records
