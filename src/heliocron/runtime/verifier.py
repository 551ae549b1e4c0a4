"""Post-wake check that the wait actually landed on its target."""

from __future__ import annotations

from datetime import datetime, timedelta

from heliocron.errors import EventMissed, RuntimeFailure


def measure_drift(target: datetime, woke_at: datetime) -> int:
    """Signed whole seconds; positive means the wake was late."""
    return int((woke_at - target).total_seconds())


def verify(target: datetime, woke_at: datetime, tolerance: timedelta) -> None:
    """Judge the same whole-second drift that a miss reports."""
    drift_seconds = measure_drift(target, woke_at)
    if abs(drift_seconds) <= tolerance.total_seconds():
        return
    raise RuntimeFailure(EventMissed(drift_seconds))
