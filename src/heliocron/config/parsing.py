"""Parsers from raw strings to validated config values.

Every failure is raised as :class:`~heliocron.errors.ConfigError` so callers
can stop before anything is computed or awaited.
"""

from __future__ import annotations

import math
import re
from datetime import date, datetime, timedelta, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import pandas as pd

from heliocron.errors import (
    ConfigError,
    InvalidCoordinates,
    InvalidEvent,
    ParseAltitude,
    ParseOffset,
    config_error_from_parse,
)

from .models import Coordinates, EventKind

DEFAULT_DATE_FORMAT = "%Y-%m-%d"

LATITUDE_RANGE_REASON = "Latitude must be between -90.0 and 90.0 degrees."
LONGITUDE_RANGE_REASON = "Longitude must be between -180.0 and 180.0 degrees."
LATITUDE_FORMAT_REASON = "Latitude must be a number, optionally suffixed with N or S."
LONGITUDE_FORMAT_REASON = "Longitude must be a number, optionally suffixed with E or W."

_OFFSET_RE = re.compile(r"^(?P<sign>-)?(?P<h>\d{1,2}):(?P<m>[0-5]\d)(?::(?P<s>[0-5]\d))?$")
_COORD_RE = re.compile(r"^(?P<value>[+-]?\d+(?:\.\d+)?)\s*(?P<hemi>[A-Za-z])?$")


def _parse_coordinate(
    value: Any,
    *,
    positive: str,
    negative: str,
    limit: float,
    range_reason: str,
    format_reason: str,
) -> float:
    if isinstance(value, bool):
        raise ConfigError(InvalidCoordinates(format_reason))
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        match = _COORD_RE.match(str(value).strip())
        if match is None:
            raise ConfigError(InvalidCoordinates(format_reason))
        number = float(match.group("value"))
        hemi = match.group("hemi")
        if hemi is not None:
            hemi = hemi.upper()
            if hemi not in (positive, negative) or match.group("value")[0] in "+-":
                raise ConfigError(InvalidCoordinates(format_reason))
            if hemi == negative:
                number = -number
    if not math.isfinite(number):
        raise ConfigError(InvalidCoordinates(format_reason))
    if not -limit <= number <= limit:
        raise ConfigError(InvalidCoordinates(range_reason))
    return number


def parse_latitude(value: Any) -> float:
    return _parse_coordinate(
        value,
        positive="N",
        negative="S",
        limit=90.0,
        range_reason=LATITUDE_RANGE_REASON,
        format_reason=LATITUDE_FORMAT_REASON,
    )


def parse_longitude(value: Any) -> float:
    return _parse_coordinate(
        value,
        positive="E",
        negative="W",
        limit=180.0,
        range_reason=LONGITUDE_RANGE_REASON,
        format_reason=LONGITUDE_FORMAT_REASON,
    )


def parse_coordinates(latitude: Any, longitude: Any) -> Coordinates:
    return Coordinates(latitude=parse_latitude(latitude), longitude=parse_longitude(longitude))


def parse_date(text: str, date_format: str = DEFAULT_DATE_FORMAT) -> date:
    try:
        parsed = pd.to_datetime(str(text).strip(), format=date_format, errors="coerce")
    except (TypeError, ValueError) as exc:
        raise config_error_from_parse(exc) from exc
    if pd.isna(parsed):
        raise config_error_from_parse(ValueError(f"unparseable date: {text!r}"))
    return parsed.date()


def parse_time_zone(text: str) -> tzinfo:
    """Accept fixed offsets such as ``+01:00`` or IANA names such as ``Europe/London``."""
    value = str(text).strip()
    try:
        parsed = datetime.strptime(value, "%z").tzinfo
    except ValueError:
        parsed = None
    if parsed is not None:
        return parsed
    try:
        return ZoneInfo(value)
    except (ZoneInfoNotFoundError, ValueError, OSError) as exc:
        raise config_error_from_parse(exc) from exc


def parse_altitude(value: Any) -> float:
    if isinstance(value, bool):
        raise ConfigError(ParseAltitude())
    try:
        altitude = float(value)
    except (TypeError, ValueError) as exc:
        raise ConfigError(ParseAltitude()) from exc
    if not -90.0 <= altitude <= 90.0:
        raise ConfigError(ParseAltitude())
    return altitude


def parse_offset(text: str) -> timedelta:
    match = _OFFSET_RE.match(str(text).strip())
    if match is None:
        raise ConfigError(ParseOffset())
    offset = timedelta(
        hours=int(match.group("h")),
        minutes=int(match.group("m")),
        seconds=int(match.group("s") or 0),
    )
    return -offset if match.group("sign") else offset


def parse_event(text: str) -> EventKind:
    try:
        return EventKind(str(text).strip().lower().replace("-", "_"))
    except ValueError as exc:
        raise ConfigError(InvalidEvent()) from exc
