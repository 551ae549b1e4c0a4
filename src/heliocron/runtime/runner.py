"""End-to-end wait: resolve, schedule, sleep, verify."""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any, Callable

from heliocron.config.models import Config
from heliocron.errors import EventMissed, RuntimeFailure
from heliocron.solar.resolver import EventResolver, SolarEventResolver
from heliocron.utils.time_utils import utc_now

from .scheduler import WaitScheduler, schedule_wait
from .sleep import SleepBackend, WallClockSleeper
from .verifier import measure_drift, verify

logger = logging.getLogger(__name__)


@dataclass
class WaitOutcome:
    event: str
    target: str
    woke_at: str
    drift_seconds: int
    status: str = "success"
    missed_by: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class WaitRunner:
    def __init__(
        self,
        resolver: EventResolver | None = None,
        backend: SleepBackend | None = None,
        clock: Callable[[], datetime] = utc_now,
        progress_callback: Callable[[str], None] | None = None,
    ):
        self.resolver = resolver or SolarEventResolver()
        self._clock = clock
        self.backend = backend or WallClockSleeper(now_fn=clock)
        self._progress_callback = progress_callback

    def run(self, config: Config) -> WaitOutcome:
        event_name = config.event.value if config.event is not None else "unknown"
        now = self._clock()
        target = self.resolver.resolve(config, now)
        self._emit(f"{event_name} resolved to {target.isoformat()}")

        duration = schedule_wait(target, now)
        self._emit(f"sleeping for {duration} until {target.isoformat()}")
        woke_at = WaitScheduler(self.backend).run(duration, now)
        self._emit(f"woke at {woke_at.isoformat()}")

        outcome = WaitOutcome(
            event=event_name,
            target=target.isoformat(),
            woke_at=woke_at.isoformat(),
            drift_seconds=measure_drift(target, woke_at),
        )
        try:
            verify(target, woke_at, config.tolerance)
        except RuntimeFailure as exc:
            if not (config.run_missed_task and isinstance(exc.kind, EventMissed)):
                raise
            logger.warning("%s; running the task anyway", exc.describe())
            outcome.status = "missed"
            outcome.missed_by = exc.kind.by_seconds
            return outcome

        self._emit("event reached")
        return outcome

    def _emit(self, message: str) -> None:
        logger.info(message)
        if self._progress_callback is not None:
            self._progress_callback(message)
