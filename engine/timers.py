"""
timers.py — Repeating Timers for Playback
==========================================
A controller never sleeps itself; it asks a scheduler for one repeating
timer and cancels it when playback stops.

Two schedulers:

    ManualScheduler   time only moves when the owner says so
                      (advance(ms) / advance_to(now_ms)).  Tests use it
                      directly; the web app advances it from
                      time.monotonic() on every request
                      (tick-from-the-event-loop).

    ThreadScheduler   one daemon thread per live timer, waiting on a
                      threading.Event so cancel() wakes it immediately.

Both hand out TimerHandle objects; cancel() is idempotent.
"""

import itertools
import logging
import math
import threading
from typing import Callable, List, Optional

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Handle
# ---------------------------------------------------------------------------
class TimerHandle:
    def __init__(self, on_cancel: Optional[Callable[[], None]] = None):
        self._active    = True
        self._on_cancel = on_cancel

    @property
    def active(self) -> bool:
        return self._active

    def cancel(self) -> None:
        if not self._active:
            return
        self._active = False
        if self._on_cancel is not None:
            self._on_cancel()


# ---------------------------------------------------------------------------
# Manual clock
# ---------------------------------------------------------------------------
class _ManualTimer:
    __slots__ = ("seq", "interval", "callback", "due", "handle")

    def __init__(self, seq: int, interval: float, callback: Callable[[], None], due: float):
        self.seq      = seq
        self.interval = interval
        self.callback = callback
        self.due      = due
        self.handle   = TimerHandle()


class ManualScheduler:
    """Deterministic scheduler driven by an explicit clock in milliseconds."""

    def __init__(self, now_ms: float = 0.0):
        self._now_ms: float             = now_ms
        self._timers: List[_ManualTimer] = []
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        return self._now_ms

    @property
    def active_timers(self) -> int:
        return sum(1 for t in self._timers if t.handle.active)

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        _check_interval(interval_ms)
        timer = _ManualTimer(next(self._seq), interval_ms, callback, self._now_ms + interval_ms)
        self._timers.append(timer)
        return timer.handle

    def advance(self, ms: float) -> None:
        self.advance_to(self._now_ms + ms)

    def advance_to(self, now_ms: float) -> None:
        """Move the clock forward, firing every timer that falls due, in order."""
        while True:
            self._timers = [t for t in self._timers if t.handle.active]
            due = [t for t in self._timers if t.due <= now_ms]
            if not due:
                break
            timer = min(due, key=lambda t: (t.due, t.seq))
            self._now_ms = timer.due
            timer.due += timer.interval
            timer.callback()
        self._now_ms = max(self._now_ms, now_ms)


# ---------------------------------------------------------------------------
# Wall clock
# ---------------------------------------------------------------------------
class ThreadScheduler:
    """Real-time scheduler: each timer runs on its own daemon thread."""

    def call_every(self, interval_ms: float, callback: Callable[[], None]) -> TimerHandle:
        _check_interval(interval_ms)
        stop = threading.Event()
        handle = TimerHandle(stop.set)
        seconds = interval_ms / 1000.0

        def loop() -> None:
            while not stop.wait(seconds):
                callback()

        thread = threading.Thread(target=loop, name=f"playback-timer-{interval_ms:g}ms", daemon=True)
        thread.start()
        log.debug("Started timer thread %s", thread.name)
        return handle


def _check_interval(interval_ms: float) -> None:
    if not math.isfinite(interval_ms) or interval_ms <= 0:
        raise ValueError(f"interval must be positive and finite, got {interval_ms}")
