"""Validated configuration values."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, timedelta, tzinfo
from enum import Enum

SUNRISE_ALTITUDE = -0.833
CIVIL_ALTITUDE = -6.0
NAUTICAL_ALTITUDE = -12.0
ASTRONOMICAL_ALTITUDE = -18.0

DEFAULT_TOLERANCE = timedelta(seconds=30)


class EventKind(Enum):
    SUNRISE = "sunrise"
    SUNSET = "sunset"
    CIVIL_DAWN = "civil_dawn"
    CIVIL_DUSK = "civil_dusk"
    NAUTICAL_DAWN = "nautical_dawn"
    NAUTICAL_DUSK = "nautical_dusk"
    ASTRONOMICAL_DAWN = "astronomical_dawn"
    ASTRONOMICAL_DUSK = "astronomical_dusk"
    CUSTOM_AM = "custom_am"
    CUSTOM_PM = "custom_pm"
    SOLAR_NOON = "solar_noon"

    @property
    def is_morning(self) -> bool:
        return self in _MORNING_EVENTS

    @property
    def is_custom(self) -> bool:
        return self in (EventKind.CUSTOM_AM, EventKind.CUSTOM_PM)

    def altitude(self, custom_altitude: float | None = None) -> float | None:
        """Sun altitude in degrees that defines the event; ``None`` for solar noon."""
        if self is EventKind.SOLAR_NOON:
            return None
        if self.is_custom:
            return custom_altitude
        return _FIXED_ALTITUDES[self]


_MORNING_EVENTS = frozenset(
    {
        EventKind.SUNRISE,
        EventKind.CIVIL_DAWN,
        EventKind.NAUTICAL_DAWN,
        EventKind.ASTRONOMICAL_DAWN,
        EventKind.CUSTOM_AM,
    }
)

_FIXED_ALTITUDES = {
    EventKind.SUNRISE: SUNRISE_ALTITUDE,
    EventKind.SUNSET: SUNRISE_ALTITUDE,
    EventKind.CIVIL_DAWN: CIVIL_ALTITUDE,
    EventKind.CIVIL_DUSK: CIVIL_ALTITUDE,
    EventKind.NAUTICAL_DAWN: NAUTICAL_ALTITUDE,
    EventKind.NAUTICAL_DUSK: NAUTICAL_ALTITUDE,
    EventKind.ASTRONOMICAL_DAWN: ASTRONOMICAL_ALTITUDE,
    EventKind.ASTRONOMICAL_DUSK: ASTRONOMICAL_ALTITUDE,
}

REPORT_EVENTS = (
    EventKind.ASTRONOMICAL_DAWN,
    EventKind.NAUTICAL_DAWN,
    EventKind.CIVIL_DAWN,
    EventKind.SUNRISE,
    EventKind.SOLAR_NOON,
    EventKind.SUNSET,
    EventKind.CIVIL_DUSK,
    EventKind.NAUTICAL_DUSK,
    EventKind.ASTRONOMICAL_DUSK,
)


@dataclass(frozen=True)
class Coordinates:
    """Decimal degrees, north and east positive."""

    latitude: float
    longitude: float


DEFAULT_COORDINATES = Coordinates(latitude=51.4769, longitude=-0.0005)


@dataclass(frozen=True)
class Config:
    date: date
    time_zone: tzinfo
    coordinates: Coordinates = DEFAULT_COORDINATES
    event: EventKind | None = None
    offset: timedelta = field(default_factory=timedelta)
    custom_altitude: float | None = None
    tolerance: timedelta = DEFAULT_TOLERANCE
    run_missed_task: bool = False
