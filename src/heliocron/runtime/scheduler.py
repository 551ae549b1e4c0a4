"""Turn a target instant into a single sleep and track its state."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta
from enum import Enum

from heliocron.errors import PastEvent, RuntimeFailure, sleep_error_from

from .sleep import SleepBackend

logger = logging.getLogger(__name__)


class WaitState(Enum):
    NOT_STARTED = "not_started"
    SLEEPING = "sleeping"
    WOKE = "woke"
    FAILED = "failed"


def schedule_wait(target: datetime, now: datetime) -> timedelta:
    """Duration from ``now`` until ``target``; an already-passed target is a hard stop."""
    if target < now:
        raise RuntimeFailure(PastEvent())
    return target - now


class WaitScheduler:
    def __init__(self, backend: SleepBackend):
        self.backend = backend
        self.state = WaitState.NOT_STARTED
        self.woke_at: datetime | None = None

    def run(self, duration: timedelta, now: datetime) -> datetime:
        if self.state is not WaitState.NOT_STARTED:
            raise RuntimeError(f"wait already {self.state.value}")
        if duration < timedelta(0):
            raise ValueError("cannot wait a negative duration")

        deadline = now + duration
        self.state = WaitState.SLEEPING
        logger.debug("sleeping until %s", deadline.isoformat())
        try:
            woke_at = self.backend.sleep_until(deadline)
        except Exception as exc:  # noqa: BLE001
            self.state = WaitState.FAILED
            logger.debug("sleep backend failed: %s", exc)
            raise sleep_error_from(exc) from exc

        self.state = WaitState.WOKE
        self.woke_at = woke_at
        return woke_at


def run_wait(duration: timedelta, backend: SleepBackend, now: datetime) -> datetime:
    return WaitScheduler(backend).run(duration, now)
