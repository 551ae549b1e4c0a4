from .calc import SolarCalculator
from .report import DayReport, build_report
from .resolver import EventResolver, SolarEventResolver

__all__ = ["DayReport", "EventResolver", "SolarCalculator", "SolarEventResolver", "build_report"]
