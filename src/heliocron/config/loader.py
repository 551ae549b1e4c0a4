"""Layered configuration: TOML file first, explicit values on top."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timedelta
from pathlib import Path
from typing import Any, Callable

from heliocron.errors import ConfigError, InvalidEvent, InvalidTomlFile, ParseAltitude
from heliocron.utils.config import load_toml, parse_config_bool, parse_tolerance_seconds
from heliocron.utils.time_utils import local_time_zone, utc_now

from .models import DEFAULT_COORDINATES, DEFAULT_TOLERANCE, Config, Coordinates
from .parsing import (
    DEFAULT_DATE_FORMAT,
    parse_altitude,
    parse_date,
    parse_event,
    parse_latitude,
    parse_longitude,
    parse_offset,
    parse_time_zone,
)

CONFIG_ENV_VAR = "HELIOCRON_CONFIG"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileSettings:
    latitude: Any = None
    longitude: Any = None
    tolerance: timedelta | None = None
    run_missed_task: bool | None = None


def default_config_path() -> Path:
    return Path.home() / ".config" / "heliocron.toml"


def resolve_config_path(explicit: str | Path | None = None) -> Path | None:
    """An explicit path must exist; the home-directory default is optional."""
    if explicit:
        return Path(explicit)
    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)
    default = default_config_path()
    return default if default.is_file() else None


def load_file_settings(path: str | Path) -> FileSettings:
    raw = load_toml(path)
    for key in ("latitude", "longitude"):
        value = raw.get(key)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (str, int, float))):
            raise ConfigError(InvalidTomlFile())

    wait_cfg = raw.get("wait") or {}
    if not isinstance(wait_cfg, dict):
        raise ConfigError(InvalidTomlFile())

    tolerance = None
    raw_tolerance = wait_cfg.get("tolerance_seconds")
    try:
        if raw_tolerance is not None:
            tolerance = parse_tolerance_seconds(raw_tolerance, field_name="wait.tolerance_seconds")
        run_missed_task = (
            None
            if wait_cfg.get("run_missed_task") is None
            else parse_config_bool(
                wait_cfg.get("run_missed_task"),
                default=False,
                field_name="wait.run_missed_task",
            )
        )
    except ValueError as exc:
        raise ConfigError(InvalidTomlFile()) from exc

    logger.debug("loaded config file %s", path)
    return FileSettings(
        latitude=raw.get("latitude"),
        longitude=raw.get("longitude"),
        tolerance=tolerance,
        run_missed_task=run_missed_task,
    )


def build_config(
    *,
    date: str | None = None,
    date_format: str = DEFAULT_DATE_FORMAT,
    time_zone: str | None = None,
    latitude: Any = None,
    longitude: Any = None,
    event: str | None = None,
    offset: str | None = None,
    altitude: Any = None,
    tolerance: timedelta | None = None,
    run_missed_task: bool | None = None,
    config_path: str | Path | None = None,
    require_event: bool = False,
    now_fn: Callable[[], datetime] = utc_now,
) -> Config:
    """Validate every input and return an immutable :class:`Config`.

    Raises :class:`ConfigError` on the first invalid value; nothing else is
    touched apart from reading the config file.
    """
    if tolerance is not None and tolerance < timedelta(0):
        raise ConfigError(InvalidTomlFile())

    path = resolve_config_path(config_path)
    settings = load_file_settings(path) if path is not None else FileSettings()

    lat_raw = latitude if latitude is not None else settings.latitude
    lon_raw = longitude if longitude is not None else settings.longitude
    lat = parse_latitude(lat_raw) if lat_raw is not None else DEFAULT_COORDINATES.latitude
    lon = parse_longitude(lon_raw) if lon_raw is not None else DEFAULT_COORDINATES.longitude

    tz = parse_time_zone(time_zone) if time_zone is not None else local_time_zone()
    day = parse_date(date, date_format) if date is not None else now_fn().astimezone(tz).date()

    event_kind = parse_event(event) if event is not None else None
    if require_event and event_kind is None:
        raise ConfigError(InvalidEvent())
    custom_altitude = parse_altitude(altitude) if altitude is not None else None
    if event_kind is not None and event_kind.is_custom and custom_altitude is None:
        raise ConfigError(ParseAltitude())

    wait_offset = parse_offset(offset) if offset is not None else timedelta()

    if tolerance is None:
        tolerance = settings.tolerance if settings.tolerance is not None else DEFAULT_TOLERANCE
    if run_missed_task is None:
        run_missed_task = bool(settings.run_missed_task)

    return Config(
        date=day,
        time_zone=tz,
        coordinates=Coordinates(latitude=lat, longitude=lon),
        event=event_kind,
        offset=wait_offset,
        custom_altitude=custom_altitude,
        tolerance=tolerance,
        run_missed_task=run_missed_task,
    )
