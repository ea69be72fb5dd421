"""Configuration loading utilities for TechHub."""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import tzinfo
from pathlib import Path
from typing import Mapping, MutableMapping, Optional

import yaml

DEFAULT_CONFIG = {
    "timezone": "UTC",
    "seed_path": "data/roster.xlsx",
    "report_path": "reports",
    "log_path": "logs/techhub.log",
    "log_level": "INFO",
    "csv_export": False,
    "lock_timeout": 30,
}


@dataclass(frozen=True)
class AppConfig:
    """Typed configuration container with default fallbacks."""

    timezone: tzinfo
    seed_path: Optional[Path]
    report_path: Path
    log_path: Path
    log_level: str
    csv_export: bool = False
    lock_timeout: float = 30.0

    extra: Mapping[str, object] = field(default_factory=dict)


def _parse_timezone(name: str) -> tzinfo:
    from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone '{name}'") from exc


def _load_file(path: Path) -> MutableMapping[str, object]:
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in {".yaml", ".yml"}:
        data = yaml.safe_load(text) or {}
    elif path.suffix.lower() == ".json":
        data = json.loads(text or "{}")
    else:
        raise ValueError(f"Unsupported config format: {path.suffix}")
    if not isinstance(data, MutableMapping):
        raise ValueError("Config root must be a mapping")
    return data


def load_config(path: Optional[str | Path] = None, overrides: Optional[Mapping[str, object]] = None) -> AppConfig:
    """Load application configuration merging defaults, file values and overrides."""

    merged: MutableMapping[str, object] = dict(DEFAULT_CONFIG)
    if path:
        merged.update(_load_file(Path(path)))
    if overrides:
        merged.update(overrides)

    tz = _parse_timezone(str(merged.get("timezone", DEFAULT_CONFIG["timezone"])))

    seed_value = merged.get("seed_path")
    seed_path = Path(str(seed_value)).expanduser() if seed_value else None
    report_path = Path(str(merged.get("report_path", DEFAULT_CONFIG["report_path"]))).expanduser()
    log_path = Path(str(merged.get("log_path", DEFAULT_CONFIG["log_path"]))).expanduser()
    log_level = str(merged.get("log_level", DEFAULT_CONFIG["log_level"])).upper()

    csv_export = bool(merged.get("csv_export", DEFAULT_CONFIG["csv_export"]))

    lock_timeout_value = merged.get("lock_timeout", DEFAULT_CONFIG["lock_timeout"])
    try:
        lock_timeout = float(lock_timeout_value)
    except (TypeError, ValueError) as exc:
        raise ValueError("lock_timeout must be numeric") from exc

    return AppConfig(
        timezone=tz,
        seed_path=seed_path,
        report_path=report_path,
        log_path=log_path,
        log_level=log_level,
        csv_export=csv_export,
        lock_timeout=lock_timeout,
        extra={k: v for k, v in merged.items() if k not in DEFAULT_CONFIG},
    )


__all__ = ["AppConfig", "DEFAULT_CONFIG", "load_config"]
