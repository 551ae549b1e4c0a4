"""Daily table of solar events."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any

from heliocron.config.models import REPORT_EVENTS, Config, Coordinates, EventKind

from .calc import SolarCalculator

_TIME_FORMAT = "%Y-%m-%d %H:%M:%S %z"


@dataclass
class DayReport:
    date: date
    coordinates: Coordinates
    events: dict[EventKind, datetime | None]
    day_length: timedelta

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "location": {
                "latitude": self.coordinates.latitude,
                "longitude": self.coordinates.longitude,
            },
            "day_length": _format_duration(self.day_length),
            "events": {
                event.value: (stamp.isoformat(timespec="seconds") if stamp is not None else None)
                for event, stamp in self.events.items()
            },
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, ensure_ascii=False)

    def to_text(self) -> str:
        lat = self.coordinates.latitude
        lon = self.coordinates.longitude
        lines = [
            f"LOCATION: {abs(lat):.4f}{'N' if lat >= 0 else 'S'}, "
            f"{abs(lon):.4f}{'E' if lon >= 0 else 'W'}",
            f"DATE: {self.date.isoformat()}",
            "",
        ]
        width = max(len(_label(event)) for event in self.events)
        for event, stamp in self.events.items():
            shown = stamp.strftime(_TIME_FORMAT) if stamp is not None else "Never"
            lines.append(f"{_label(event).ljust(width)}  {shown}")
        lines.append("")
        lines.append(f"{'Day length'.ljust(width)}  {_format_duration(self.day_length)}")
        return "\n".join(lines)


def build_report(config: Config) -> DayReport:
    calculator = SolarCalculator(config.coordinates, config.date, config.time_zone)
    return DayReport(
        date=config.date,
        coordinates=config.coordinates,
        events=calculator.event_times(REPORT_EVENTS),
        day_length=calculator.day_length(),
    )


def _label(event: EventKind) -> str:
    return event.value.replace("_", " ").capitalize()


def _format_duration(value: timedelta) -> str:
    total = int(value.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours}h {minutes:02d}m {seconds:02d}s"
