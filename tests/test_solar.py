from __future__ import annotations

import json
from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from heliocron.config import Config, Coordinates, EventKind
from heliocron.errors import NonOccurringEvent, RuntimeFailure
from heliocron.solar import SolarCalculator, SolarEventResolver, build_report

GREENWICH = Coordinates(51.4769, -0.0005)
TROMSO = Coordinates(69.6492, 18.9553)
UTC = timezone.utc


def _utc(day: date, hour: int, minute: int) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, tzinfo=UTC)


def test_greenwich_equinox_events_are_plausible() -> None:
    day = date(2024, 3, 20)
    times = SolarCalculator(GREENWICH, day, UTC).event_times(
        [EventKind.SUNRISE, EventKind.SOLAR_NOON, EventKind.SUNSET]
    )

    assert _utc(day, 5, 55) < times[EventKind.SUNRISE] < _utc(day, 6, 10)
    assert _utc(day, 12, 0) < times[EventKind.SOLAR_NOON] < _utc(day, 12, 15)
    assert _utc(day, 18, 5) < times[EventKind.SUNSET] < _utc(day, 18, 20)


def test_twilight_events_are_ordered() -> None:
    calc = SolarCalculator(GREENWICH, date(2024, 3, 20), UTC)
    morning = [
        EventKind.ASTRONOMICAL_DAWN,
        EventKind.NAUTICAL_DAWN,
        EventKind.CIVIL_DAWN,
        EventKind.SUNRISE,
    ]
    evening = [
        EventKind.SUNSET,
        EventKind.CIVIL_DUSK,
        EventKind.NAUTICAL_DUSK,
        EventKind.ASTRONOMICAL_DUSK,
    ]
    times = calc.event_times(morning + evening)

    ordered = [times[event] for event in morning + evening]
    assert ordered == sorted(ordered)


def test_custom_altitude_matches_named_event() -> None:
    calc = SolarCalculator(GREENWICH, date(2024, 3, 20), UTC)

    custom = calc.event_time(EventKind.CUSTOM_AM, custom_altitude=-6.0)
    civil = calc.event_time(EventKind.CIVIL_DAWN)

    assert custom == civil


def test_hour_angles_are_nan_where_altitude_is_never_reached() -> None:
    calc = SolarCalculator(TROMSO, date(2024, 6, 21), UTC)
    angles = calc.hour_angles(np.array([-0.833, 40.0]))

    assert np.isnan(angles[0])
    assert not np.isnan(angles[1])


def test_time_zone_does_not_change_the_instant() -> None:
    day = date(2024, 3, 20)
    utc_rise = SolarCalculator(GREENWICH, day, UTC).event_time(EventKind.SUNRISE)
    local_rise = SolarCalculator(
        GREENWICH, day, timezone(timedelta(hours=1))
    ).event_time(EventKind.SUNRISE)

    assert local_rise.utcoffset() == timedelta(hours=1)
    assert abs((local_rise - utc_rise).total_seconds()) < 60


def test_polar_day_and_night_lengths() -> None:
    assert SolarCalculator(TROMSO, date(2024, 6, 21), UTC).day_length() == timedelta(days=1)
    assert SolarCalculator(TROMSO, date(2024, 12, 21), UTC).day_length() == timedelta(0)

    equinox = SolarCalculator(GREENWICH, date(2024, 3, 20), UTC).day_length()
    assert timedelta(hours=11, minutes=50) < equinox < timedelta(hours=12, minutes=30)


def test_resolver_applies_offset() -> None:
    cfg = Config(date=date(2024, 3, 20), time_zone=UTC, coordinates=GREENWICH, event=EventKind.SUNSET)
    shifted = Config(
        date=cfg.date,
        time_zone=UTC,
        coordinates=GREENWICH,
        event=EventKind.SUNSET,
        offset=timedelta(hours=-1, minutes=-30),
    )
    now = _utc(cfg.date, 0, 0)

    resolver = SolarEventResolver()
    assert resolver.resolve(cfg, now) - resolver.resolve(shifted, now) == timedelta(minutes=90)


def test_resolver_reports_non_occurring_event() -> None:
    cfg = Config(date=date(2024, 6, 21), time_zone=UTC, coordinates=TROMSO, event=EventKind.SUNRISE)

    with pytest.raises(RuntimeFailure) as excinfo:
        SolarEventResolver().resolve(cfg, _utc(cfg.date, 0, 0))

    assert excinfo.value.kind == NonOccurringEvent()


def test_resolver_requires_an_event() -> None:
    cfg = Config(date=date(2024, 3, 20), time_zone=UTC)

    with pytest.raises(ValueError):
        SolarEventResolver().resolve(cfg, _utc(cfg.date, 0, 0))


def test_report_text_and_json() -> None:
    cfg = Config(date=date(2024, 6, 21), time_zone=UTC, coordinates=TROMSO)
    report = build_report(cfg)

    payload = json.loads(report.to_json())
    assert payload["date"] == "2024-06-21"
    assert payload["events"]["sunrise"] is None
    assert payload["events"]["solar_noon"] is not None
    assert payload["day_length"] == "24h 00m 00s"

    text = report.to_text()
    assert "LOCATION: 69.6492N, 18.9553E" in text
    assert "Sunrise" in text
    assert "Never" in text
