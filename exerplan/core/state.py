"""Runtime state container for CLI context."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from rich.console import Console


@dataclass
class CLIState:
    """Global output flags, the loaded config and where output goes.

    ``console`` receives command output; ``log_console`` is the stderr console
    the log handler writes to.
    """

    json_output: bool
    plain_output: bool
    verbose: bool
    quiet: bool
    config_path: Path
    config: Dict[str, Any]
    console: Console
    log_console: Optional[Console] = None

    @property
    def machine_output(self) -> bool:
        return self.json_output or self.plain_output

    def section(self, name: str) -> Dict[str, Any]:
        """One config table, or an empty dict when it is missing."""
        return self.config.get(name, {})
