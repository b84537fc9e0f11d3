"""Configuration loading and persistence."""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib  # type: ignore[attr-defined]
except ModuleNotFoundError:  # Python 3.9-3.10
    import tomli as tomllib  # type: ignore[no-redef]

from exerplan.core.constants import DEFAULT_MATCH_THRESHOLD, EPLEY_DIVISOR, MULTIWEEK_DEFAULT_REST


class ConfigError(RuntimeError):
    """Raised when config file parsing fails."""


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def expand_path(path_str: str) -> Path:
    """Expand user/env vars and return absolute path."""
    return Path(os.path.expandvars(path_str)).expanduser().resolve()


def default_config_path() -> Path:
    """Get default config file path."""
    raw = os.getenv("EXERPLAN_CONFIG_FILE", "~/.config/exerplan/config.toml")
    return expand_path(raw)


def _default_config() -> Dict[str, Any]:
    return {
        "matcher": {
            "algorithm": "token",
            "threshold": DEFAULT_MATCH_THRESHOLD,
            "extra_candidates": [],
        },
        "strength": {
            "epley_divisor": EPLEY_DIVISOR,
            "keyword_fallback": True,
        },
        "import": {
            "offset_discovery": "header-row",
            "first_column": 1,
            "column_stride": 7,
            "scan_rows": 10,
            "bodyweight_as_zero": False,
            "default_rest": MULTIWEEK_DEFAULT_REST,
        },
        "export": {
            "default_directory": "./imports",
            "markdown_frontmatter": True,
        },
    }


DEFAULT_CONFIG: Dict[str, Any] = _default_config()


def _read_config(path: Path) -> Dict[str, Any]:
    suffix = path.suffix.lower()
    text = path.read_text()
    try:
        if suffix in {".toml", ""}:
            loaded = tomllib.loads(text)
        else:
            loaded = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config file {path}: {exc}") from exc
    except Exception as exc:
        if suffix in {".toml", ""}:
            raise ConfigError(f"Invalid TOML in config file {path}: {exc}") from exc
        raise ConfigError(f"Failed to parse config file {path}: {exc}") from exc

    if not isinstance(loaded, dict):
        raise ConfigError(f"Config file {path} must contain an object/table at the root")
    return loaded


def _validate(cfg: Dict[str, Any]) -> None:
    algorithm = cfg["matcher"].get("algorithm")
    if algorithm not in ("token", "levenshtein"):
        raise ConfigError(f"matcher.algorithm must be 'token' or 'levenshtein', got {algorithm!r}")
    discovery = cfg["import"].get("offset_discovery")
    if discovery not in ("header-row", "column-scan"):
        raise ConfigError(
            f"import.offset_discovery must be 'header-row' or 'column-scan', got {discovery!r}"
        )
    try:
        divisor = float(cfg["strength"].get("epley_divisor"))
    except (TypeError, ValueError) as exc:
        raise ConfigError("strength.epley_divisor must be a number") from exc
    if divisor <= 0:
        raise ConfigError("strength.epley_divisor must be positive")


def load_config(path: Optional[Path] = None) -> Dict[str, Any]:
    """Load configuration from disk, merged with defaults."""
    cfg_path = path or default_config_path()
    cfg = _default_config()

    if cfg_path.exists():
        cfg = _deep_merge(cfg, _read_config(cfg_path))

    _validate(cfg)
    return cfg


def _toml_literal(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    if isinstance(value, list):
        items = ", ".join(_toml_literal(item) for item in value if item is not None)
        return f"[{items}]"
    raise TypeError(f"Unsupported TOML value type: {type(value)!r}")


def _dict_to_toml(data: Dict[str, Any], prefix: Optional[str] = None) -> str:
    lines = []
    plain_keys = []
    nested_keys = []

    for key, value in data.items():
        if value is None:
            continue
        if isinstance(value, dict):
            nested_keys.append((key, value))
        else:
            plain_keys.append((key, value))

    if prefix is not None:
        lines.append(f"[{prefix}]")

    for key, value in plain_keys:
        lines.append(f"{key} = {_toml_literal(value)}")

    if plain_keys and nested_keys:
        lines.append("")

    for index, (key, value) in enumerate(nested_keys):
        table_name = key if prefix is None else f"{prefix}.{key}"
        lines.append(_dict_to_toml(value, prefix=table_name))
        if index != len(nested_keys) - 1:
            lines.append("")

    return "\n".join(lines)


def save_config(config: Dict[str, Any], path: Optional[Path] = None) -> Path:
    """Save configuration to disk as TOML (default) or JSON."""
    cfg_path = path or default_config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)

    if cfg_path.suffix.lower() == ".json":
        cfg_path.write_text(json.dumps(config, indent=2) + "\n")
        return cfg_path

    cfg_path.write_text(_dict_to_toml(config).strip() + "\n")
    return cfg_path


def resolve_output_dir(config: Dict[str, Any], explicit: Optional[Path] = None) -> Path:
    """Resolve output directory with CLI override first."""
    if explicit is not None:
        return explicit.expanduser().resolve()
    raw = os.getenv("EXERPLAN_OUTPUT_DIR") or config.get("export", {}).get(
        "default_directory",
        "./imports",
    )
    return expand_path(raw)
