from .loader import CONFIG_ENV_VAR, FileSettings, build_config, load_file_settings, resolve_config_path
from .models import (
    DEFAULT_COORDINATES,
    DEFAULT_TOLERANCE,
    REPORT_EVENTS,
    Config,
    Coordinates,
    EventKind,
)
from .parsing import (
    DEFAULT_DATE_FORMAT,
    parse_altitude,
    parse_coordinates,
    parse_date,
    parse_event,
    parse_latitude,
    parse_longitude,
    parse_offset,
    parse_time_zone,
)

__all__ = [
    "CONFIG_ENV_VAR",
    "Config",
    "Coordinates",
    "DEFAULT_COORDINATES",
    "DEFAULT_DATE_FORMAT",
    "DEFAULT_TOLERANCE",
    "EventKind",
    "FileSettings",
    "REPORT_EVENTS",
    "build_config",
    "load_file_settings",
    "parse_altitude",
    "parse_coordinates",
    "parse_date",
    "parse_event",
    "parse_latitude",
    "parse_longitude",
    "parse_offset",
    "parse_time_zone",
    "resolve_config_path",
]
