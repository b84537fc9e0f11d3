"""Shared plumbing for program importers."""

from __future__ import annotations

import logging
from typing import Callable, List, TypeVar

from exerplan.core.models import ImportResult, ImportStatus
from exerplan.utils.parsing import Source, read_lines

logger = logging.getLogger(__name__)

T = TypeVar("T")


def import_lines(
    source: Source,
    parse: Callable[[List[str], List[str]], T],
    empty: Callable[[], T],
    is_empty: Callable[[T], bool],
) -> ImportResult[T]:
    """Read ``source`` and run ``parse(lines, issues)`` without ever raising.

    Read failures become ``unreadable``; a blank source is ``empty``; content
    that yields nothing, or an unexpected parse failure, is ``malformed``.
    """
    try:
        lines = read_lines(source)
    except (OSError, UnicodeDecodeError, ValueError) as exc:
        logger.warning("Could not read import source: %s", exc)
        return ImportResult(value=empty(), status=ImportStatus.UNREADABLE, issues=[str(exc)])

    if not any(line.strip() for line in lines):
        return ImportResult(value=empty(), status=ImportStatus.EMPTY)

    issues: List[str] = []
    try:
        value = parse(lines, issues)
    except Exception as exc:  # noqa: BLE001 - importers report, never raise
        logger.exception("Import failed while parsing")
        return ImportResult(value=empty(), status=ImportStatus.MALFORMED, issues=issues + [str(exc)])

    if is_empty(value):
        return ImportResult(value=value, status=ImportStatus.MALFORMED, issues=issues)
    return ImportResult(value=value, issues=issues)
