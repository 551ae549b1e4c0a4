"""Sun event times from the NOAA solar calculation spreadsheet.

All quantities are evaluated once at local noon of the requested date. Event
times are returned as fractions of the local day, ``NaN`` where the sun never
reaches the requested altitude.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo

import numpy as np

from heliocron.config.models import Coordinates, EventKind

_JULIAN_EPOCH_OFFSET = 1721424.5
_J2000 = 2451545.0
_MINUTES_PER_DAY = 1440.0


class SolarCalculator:
    def __init__(self, coordinates: Coordinates, day: date, time_zone: tzinfo):
        self.coordinates = coordinates
        self.day = day
        self.time_zone = time_zone
        offset = time_zone.utcoffset(datetime.combine(day, time(12)))
        self.utc_offset = offset if offset is not None else timedelta(0)
        self._midnight = datetime.combine(day, time(0), tzinfo=timezone(self.utc_offset))
        self._compute()

    def _compute(self) -> None:
        offset_hours = self.utc_offset.total_seconds() / 3600.0
        jd = self.day.toordinal() + _JULIAN_EPOCH_OFFSET + 0.5 - offset_hours / 24.0
        jc = (jd - _J2000) / 36525.0

        mean_long = np.mod(280.46646 + jc * (36000.76983 + jc * 0.0003032), 360.0)
        mean_anom = 357.52911 + jc * (35999.05029 - 0.0001537 * jc)
        eccent = 0.016708634 - jc * (0.000042037 + 0.0000001267 * jc)
        m_rad = np.radians(mean_anom)
        eq_of_ctr = (
            np.sin(m_rad) * (1.914602 - jc * (0.004817 + 0.000014 * jc))
            + np.sin(2 * m_rad) * (0.019993 - 0.000101 * jc)
            + np.sin(3 * m_rad) * 0.000289
        )
        omega = np.radians(125.04 - 1934.136 * jc)
        app_long = mean_long + eq_of_ctr - 0.00569 - 0.00478 * np.sin(omega)
        mean_obliq = 23.0 + (26.0 + (21.448 - jc * (46.815 + jc * (0.00059 - jc * 0.001813))) / 60.0) / 60.0
        obliq = mean_obliq + 0.00256 * np.cos(omega)

        self.declination = float(
            np.degrees(np.arcsin(np.sin(np.radians(obliq)) * np.sin(np.radians(app_long))))
        )

        var_y = np.tan(np.radians(obliq / 2.0)) ** 2
        l_rad = np.radians(mean_long)
        self.equation_of_time = float(
            4.0
            * np.degrees(
                var_y * np.sin(2 * l_rad)
                - 2 * eccent * np.sin(m_rad)
                + 4 * eccent * var_y * np.sin(m_rad) * np.cos(2 * l_rad)
                - 0.5 * var_y * var_y * np.sin(4 * l_rad)
                - 1.25 * eccent * eccent * np.sin(2 * m_rad)
            )
        )
        self.solar_noon_fraction = float(
            (720.0 - 4.0 * self.coordinates.longitude - self.equation_of_time + offset_hours * 60.0)
            / _MINUTES_PER_DAY
        )

    def cos_hour_angle(self, altitudes: np.ndarray) -> np.ndarray:
        lat = np.radians(self.coordinates.latitude)
        dec = np.radians(self.declination)
        alt = np.radians(np.asarray(altitudes, dtype=float))
        return (np.sin(alt) - np.sin(lat) * np.sin(dec)) / (np.cos(lat) * np.cos(dec))

    def hour_angles(self, altitudes: np.ndarray) -> np.ndarray:
        """Hour angle in degrees per altitude; ``NaN`` where the altitude is never crossed."""
        cos_ha = self.cos_hour_angle(altitudes)
        reachable = np.abs(cos_ha) <= 1.0
        return np.where(reachable, np.degrees(np.arccos(np.clip(cos_ha, -1.0, 1.0))), np.nan)

    def crossing_fractions(self, altitudes: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """Morning and evening crossings of each altitude, as fractions of the day."""
        span = self.hour_angles(altitudes) * 4.0 / _MINUTES_PER_DAY
        return self.solar_noon_fraction - span, self.solar_noon_fraction + span

    def fraction_to_datetime(self, fraction: float) -> datetime:
        return (self._midnight + timedelta(days=fraction)).astimezone(self.time_zone)

    def event_time(self, event: EventKind, custom_altitude: float | None = None) -> datetime | None:
        return self.event_times([event], custom_altitude)[event]

    def event_times(
        self,
        events: list[EventKind] | tuple[EventKind, ...],
        custom_altitude: float | None = None,
    ) -> dict[EventKind, datetime | None]:
        crossing = [e for e in events if e is not EventKind.SOLAR_NOON]
        altitudes = np.array([e.altitude(custom_altitude) for e in crossing], dtype=float)
        morning, evening = self.crossing_fractions(altitudes)

        result: dict[EventKind, datetime | None] = {}
        for idx, event in enumerate(crossing):
            fraction = morning[idx] if event.is_morning else evening[idx]
            result[event] = None if np.isnan(fraction) else self.fraction_to_datetime(float(fraction))
        if EventKind.SOLAR_NOON in events:
            result[EventKind.SOLAR_NOON] = self.fraction_to_datetime(self.solar_noon_fraction)
        return result

    def day_length(self) -> timedelta:
        """Time the sun spends above the sunrise altitude; 0 or 24h at polar latitudes."""
        cos_ha = float(self.cos_hour_angle(np.array([EventKind.SUNRISE.altitude()]))[0])
        if cos_ha > 1.0:
            return timedelta(0)
        if cos_ha < -1.0:
            return timedelta(days=1)
        hour_angle = float(np.degrees(np.arccos(cos_ha)))
        return timedelta(minutes=8.0 * hour_angle)
