from .config import load_toml, parse_config_bool, parse_tolerance_seconds
from .time_utils import local_time_zone, utc_now

__all__ = ["load_toml", "parse_config_bool", "parse_tolerance_seconds", "local_time_zone", "utc_now"]
