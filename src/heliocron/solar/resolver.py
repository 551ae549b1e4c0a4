"""Resolve a configured event to the instant the wait should end."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from heliocron.config.models import Config
from heliocron.errors import NonOccurringEvent, RuntimeFailure

from .calc import SolarCalculator

logger = logging.getLogger(__name__)


class EventResolver(Protocol):
    def resolve(self, config: Config, now: datetime) -> datetime:
        """Return the target instant or raise ``RuntimeFailure(NonOccurringEvent)``."""


class SolarEventResolver:
    def resolve(self, config: Config, now: datetime) -> datetime:
        _ = now
        if config.event is None:
            raise ValueError("config has no event to resolve")
        calculator = SolarCalculator(config.coordinates, config.date, config.time_zone)
        instant = calculator.event_time(config.event, config.custom_altitude)
        if instant is None:
            logger.info("%s does not occur on %s", config.event.value, config.date.isoformat())
            raise RuntimeFailure(NonOccurringEvent())
        return instant + config.offset
