from .runner import WaitOutcome, WaitRunner
from .scheduler import WaitScheduler, WaitState, run_wait, schedule_wait
from .sleep import (
    SleepBackend,
    SleepInterrupted,
    WallClockSleeper,
    install_signal_cancellation,
    restore_signal_handlers,
)
from .verifier import measure_drift, verify

__all__ = [
    "SleepBackend",
    "SleepInterrupted",
    "WaitOutcome",
    "WaitRunner",
    "WaitScheduler",
    "WaitState",
    "WallClockSleeper",
    "install_signal_cancellation",
    "measure_drift",
    "restore_signal_handlers",
    "run_wait",
    "schedule_wait",
    "verify",
]
