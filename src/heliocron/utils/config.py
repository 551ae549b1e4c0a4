"""Config file helpers."""

from __future__ import annotations

import math
import tomllib
from datetime import timedelta
from pathlib import Path
from typing import Any

from heliocron.errors import ConfigError, InvalidTomlFile


def load_toml(path: str | Path) -> dict[str, Any]:
    try:
        with Path(path).open("rb") as fh:
            return tomllib.load(fh)
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigError(InvalidTomlFile()) from exc


def parse_config_bool(value: Any, *, default: bool, field_name: str) -> bool:
    """TOML booleans, or the quoted spellings hand-edited files tend to use."""
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on"}:
            return True
        if lowered in {"false", "no", "off"}:
            return False
    raise ValueError(
        f"{field_name} must be a TOML boolean or one of: true/false/yes/no/on/off"
    )


def parse_tolerance_seconds(value: Any, *, field_name: str) -> timedelta:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"{field_name} must be a number of seconds")
    if not math.isfinite(value) or value < 0:
        raise ValueError(f"{field_name} must be a finite number of seconds >= 0")
    try:
        return timedelta(seconds=value)
    except (OverflowError, ValueError) as exc:
        raise ValueError(f"{field_name} is too large: {value!r}") from exc
