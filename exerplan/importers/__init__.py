"""Program importers, one per supported source dialect."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Union

from exerplan.core.models import BlockImport, ImportResult, WeekImport
from exerplan.importers.multiweek import MultiWeekOptions, import_multiweek_csv, resolve_discovery
from exerplan.importers.spreadsheet import import_workbook
from exerplan.importers.weekly import import_weekly_csv


class Dialect(str, Enum):
    WEEKLY = "weekly"
    MULTIWEEK = "multiweek"
    SPREADSHEET = "spreadsheet"


def multiweek_options_from_config(config: Dict[str, Any]) -> MultiWeekOptions:
    """Build multi-week options from the ``[import]`` config table."""
    cfg = config.get("import", {})
    discovery = resolve_discovery(
        str(cfg.get("offset_discovery", "header-row")),
        first_column=int(cfg.get("first_column", 1)),
        stride=int(cfg.get("column_stride", 7)),
        max_rows=int(cfg.get("scan_rows", 10)),
    )
    return MultiWeekOptions(
        discovery=discovery,
        bodyweight_as_zero=bool(cfg.get("bodyweight_as_zero", False)),
        default_rest=str(cfg.get("default_rest", "3-5 min")),
    )


def import_program(
    source: Any,
    dialect: Union[Dialect, str],
    name: Optional[str] = None,
    options: Optional[MultiWeekOptions] = None,
) -> ImportResult[Any]:
    """Import ``source`` with an explicitly chosen dialect."""
    dialect = Dialect(dialect)
    if dialect is Dialect.WEEKLY:
        return import_weekly_csv(source)
    if dialect is Dialect.MULTIWEEK:
        return import_multiweek_csv(source, block_name=name or "Imported Block", options=options)
    return import_workbook(source, plan_name=name or "Imported Plan")


__all__ = [
    "BlockImport",
    "Dialect",
    "WeekImport",
    "import_multiweek_csv",
    "import_program",
    "import_weekly_csv",
    "import_workbook",
    "multiweek_options_from_config",
]
