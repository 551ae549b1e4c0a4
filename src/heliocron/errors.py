"""Two-tier error taxonomy for configuration and runtime failures."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class InvalidCoordinates:
    reason: str


@dataclass(frozen=True)
class InvalidTomlFile:
    pass


@dataclass(frozen=True)
class ParseDate:
    pass


@dataclass(frozen=True)
class ParseAltitude:
    pass


@dataclass(frozen=True)
class ParseOffset:
    pass


@dataclass(frozen=True)
class InvalidEvent:
    pass


@dataclass(frozen=True)
class NonOccurringEvent:
    pass


@dataclass(frozen=True)
class PastEvent:
    pass


@dataclass(frozen=True)
class EventMissed:
    """Measured drift between wake time and target, in whole signed seconds."""

    by_seconds: int


@dataclass(frozen=True)
class SleepError:
    """Opaque failure of the sleep primitive; only its message is exposed."""

    cause: BaseException

    @property
    def message(self) -> str:
        return str(self.cause)


ConfigErrorKind = (
    InvalidCoordinates | InvalidTomlFile | ParseDate | ParseAltitude | ParseOffset | InvalidEvent
)
RuntimeErrorKind = NonOccurringEvent | PastEvent | EventMissed | SleepError

_CONFIG_MESSAGES: dict[type, str] = {
    InvalidTomlFile: "Error parsing TOML file. Ensure that it is of the correct format.",
    ParseDate: "Error parsing date. Ensure the date and timezone formats are correct.",
    ParseAltitude: "Error parsing altitude. Must be a number which is <= 90.0 and >= -90.0.",
    ParseOffset: "Error parsing offset. Expected a string in the format HH:MM:SS or HH:MM.",
    InvalidEvent: "Error parsing event.",
}

_RUNTIME_MESSAGES: dict[type, str] = {
    NonOccurringEvent: "The chosen event does not occur on this day.",
    PastEvent: "The chosen event occurred in the past; cannot wait a negative amount of time.",
}


def describe_config_kind(kind: ConfigErrorKind) -> str:
    if isinstance(kind, InvalidCoordinates):
        return f"Invalid coordinates - {kind.reason}"
    try:
        return _CONFIG_MESSAGES[type(kind)]
    except KeyError:
        raise TypeError(f"unknown config error kind: {kind!r}") from None


def describe_runtime_kind(kind: RuntimeErrorKind) -> str:
    if isinstance(kind, EventMissed):
        return f"Event missed by {kind.by_seconds}s"
    if isinstance(kind, SleepError):
        return kind.message
    try:
        return _RUNTIME_MESSAGES[type(kind)]
    except KeyError:
        raise TypeError(f"unknown runtime error kind: {kind!r}") from None


class HeliocronError(RuntimeError):
    """Base failure surfaced to callers; carries a tier and a closed kind."""

    tier = ""

    def __init__(self, kind: ConfigErrorKind | RuntimeErrorKind):
        self.kind = kind
        super().__init__(self.describe())

    def describe(self) -> str:
        raise NotImplementedError

    def render(self) -> str:
        return f"{self.tier} error: {self.describe()}"

    def __str__(self) -> str:
        return self.render()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeliocronError):
            return NotImplemented
        return type(self) is type(other) and self.kind == other.kind

    def __hash__(self) -> int:
        return hash((type(self), self.kind))


class ConfigError(HeliocronError):
    """Input or validation failure; nothing has been computed or awaited."""

    tier = "Config"

    def __init__(self, kind: ConfigErrorKind):
        super().__init__(kind)

    def describe(self) -> str:
        return describe_config_kind(self.kind)


class RuntimeFailure(HeliocronError):
    """Failure discovered while resolving, during, or after a wait."""

    tier = "Runtime"

    def __init__(self, kind: RuntimeErrorKind):
        super().__init__(kind)

    def describe(self) -> str:
        return describe_runtime_kind(self.kind)


def render(error: HeliocronError) -> str:
    return error.render()


def config_error_from_parse(exc: Exception) -> ConfigError:
    """Date and time zone parse failures all collapse into ``ParseDate``."""
    _ = exc
    return ConfigError(ParseDate())


def sleep_error_from(exc: BaseException) -> RuntimeFailure:
    return RuntimeFailure(SleepError(exc))
