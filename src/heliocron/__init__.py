"""Wait until a solar event, then exit."""

from .errors import ConfigError, HeliocronError, RuntimeFailure, render

__version__ = "0.1.0"

__all__ = ["ConfigError", "HeliocronError", "RuntimeFailure", "render", "__version__"]
