"""Sleep primitives that track the wall clock and can be cancelled."""

from __future__ import annotations

import signal
import threading
from datetime import datetime
from typing import Any, Callable, Iterable, Protocol

from heliocron.utils.time_utils import utc_now

DEFAULT_POLL_INTERVAL_SEC = 60.0


class SleepInterrupted(RuntimeError):
    """Sleep was cancelled before the deadline."""


class SleepBackend(Protocol):
    def sleep_until(self, deadline: datetime) -> datetime:
        """Block until ``deadline`` and return the wall-clock time of waking."""


class WallClockSleeper:
    """Sleep in bounded chunks, re-reading the wall clock after each one.

    A monotonic sleep does not advance while the machine is suspended, so a
    single long sleep could overshoot the deadline by the suspended time.
    Re-checking the wall clock every ``poll_interval_sec`` bounds that error.
    """

    def __init__(
        self,
        now_fn: Callable[[], datetime] = utc_now,
        wait_fn: Callable[[float], bool] | None = None,
        poll_interval_sec: float = DEFAULT_POLL_INTERVAL_SEC,
    ):
        if poll_interval_sec <= 0:
            raise ValueError("poll_interval_sec must be positive")
        self.poll_interval_sec = float(poll_interval_sec)
        self._now_fn = now_fn
        self._cancelled = threading.Event()
        self._wait_fn = wait_fn or self._cancelled.wait

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def sleep_until(self, deadline: datetime) -> datetime:
        if deadline.tzinfo is None:
            raise ValueError("deadline must be timezone-aware")
        while True:
            if self._cancelled.is_set():
                raise SleepInterrupted("Sleep was cancelled before the event was reached.")
            now = self._now_fn()
            remaining = (deadline - now).total_seconds()
            if remaining <= 0:
                return now
            if self._wait_fn(min(remaining, self.poll_interval_sec)) or self._cancelled.is_set():
                raise SleepInterrupted("Sleep was cancelled before the event was reached.")


def _default_signals() -> list[signal.Signals]:
    names = ("SIGINT", "SIGTERM", "SIGHUP")
    return [getattr(signal, name) for name in names if hasattr(signal, name)]


def install_signal_cancellation(
    sleeper: WallClockSleeper,
    signals: Iterable[signal.Signals] | None = None,
) -> dict[signal.Signals, Any]:
    """Route termination signals to ``sleeper.cancel``; returns the previous handlers."""

    def _handler(signum: int, frame: Any) -> None:
        _ = (signum, frame)
        sleeper.cancel()

    previous: dict[signal.Signals, Any] = {}
    for sig in signals if signals is not None else _default_signals():
        previous[sig] = signal.signal(sig, _handler)
    return previous


def restore_signal_handlers(previous: dict[signal.Signals, Any]) -> None:
    for sig, handler in previous.items():
        signal.signal(sig, handler)
