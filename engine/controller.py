"""
controller.py — Step-by-Step Playback Engine
=============================================
The PlaybackController is the ONLY object a front end talks to during a
run.  It owns a finished list of Steps, a cursor into it, and at most one
repeating timer, and exposes a play/pause/stop/next/previous/jump/speed API.

State machine:
    IDLE       →  play()            →  PLAYING
    PLAYING    →  pause()           →  PAUSED
    PLAYING    →  (reaches last)    →  COMPLETED   (timer released, on_complete fired)
    any        →  stop()            →  IDLE        (index back to 0)
    any        →  destroy()         →  dead; every call is a no-op

Notifications:
    on_step_change(index, total)  – every time the cursor actually moves
                                    (and always on stop()).
    on_complete()                 – once per automatic play-through.

Threading:
  With a ManualScheduler everything runs on the caller's thread.  With a
  ThreadScheduler ticks arrive on a timer thread; all public methods take
  the controller's lock, so ticks and user actions never interleave.
"""

import logging
import math
import threading
from enum import Enum
from numbers import Real
from typing import Callable, Optional, Sequence, Tuple

from algorithms.step import Step
from config import DEFAULT_SPEED_MS, MIN_SPEED_MS
from engine.timers import ManualScheduler, TimerHandle

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    IDLE      = "idle"
    PLAYING   = "playing"
    PAUSED    = "paused"
    COMPLETED = "completed"


# ---------------------------------------------------------------------------
# Controller
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        steps          : Tuple of all Steps (fixed for the controller's life).
        current_index  : Cursor into `steps`.
        speed_ms       : Milliseconds between auto-advance ticks.
        on_step_change : Optional callback(index, total).
        on_complete    : Optional callback() when auto-play reaches the end.
    """

    def __init__(
        self,
        steps: Sequence[Step],
        speed_ms: float = DEFAULT_SPEED_MS,
        on_step_change: Optional[Callable[[int, int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
        scheduler=None,
    ):
        self._steps:     Tuple[Step, ...]      = tuple(steps)
        self._index:     int                   = 0
        self._speed_ms:  float                 = clamp_speed(speed_ms, DEFAULT_SPEED_MS)
        self._timer:     Optional[TimerHandle] = None
        self._completed: bool                  = False
        self._destroyed: bool                  = False
        self._lock = threading.RLock()
        self._scheduler = scheduler if scheduler is not None else ManualScheduler()
        self.on_step_change = on_step_change
        self.on_complete    = on_complete

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        with self._lock:
            if self._destroyed or self._timer is not None or self.is_at_end:
                return
            self._completed = False
            self._start_timer()
            log.debug("play from %d/%d every %gms", self._index, self.total_steps, self._speed_ms)

    def pause(self) -> None:
        with self._lock:
            if self._destroyed:
                return
            if self._cancel_timer():
                log.debug("paused at %d", self._index)

    def toggle_play(self) -> None:
        with self._lock:
            if self.is_playing:
                self.pause()
            else:
                self.play()

    def stop(self) -> None:
        with self._lock:
            if self._destroyed or not self._steps:
                return
            self._cancel_timer()
            self._completed = False
            self._index = 0
            self._notify()

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next(self) -> None:
        with self._lock:
            if self._destroyed or self._index >= self.total_steps - 1:
                return
            self._move(self._index + 1)

    def previous(self) -> None:
        with self._lock:
            if self._destroyed or self._index <= 0:
                return
            self._move(self._index - 1)

    def jump_to(self, index: int) -> None:
        """Jump to any valid index; anything else is silently ignored."""
        with self._lock:
            if self._destroyed:
                return
            if isinstance(index, bool) or not isinstance(index, int):
                return
            if 0 <= index < self.total_steps:
                self._move(index)

    def rewind(self) -> None:
        self.jump_to(0)

    def jump_to_end(self) -> None:
        self.jump_to(self.total_steps - 1)

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed_ms: float) -> None:
        with self._lock:
            if self._destroyed:
                return
            self._speed_ms = clamp_speed(speed_ms, self._speed_ms)
            if self._timer is not None:
                # restart so the new interval governs the very next tick
                self._cancel_timer()
                self._start_timer()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def destroy(self) -> None:
        with self._lock:
            self._cancel_timer()
            if not self._destroyed:
                self._destroyed = True
                log.debug("controller destroyed at %d/%d", self._index, self.total_steps)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def steps(self) -> Tuple[Step, ...]:
        return self._steps

    @property
    def current_step(self) -> Optional[Step]:
        if 0 <= self._index < len(self._steps):
            return self._steps[self._index]
        return None

    @property
    def current_index(self) -> int:
        return self._index

    @property
    def total_steps(self) -> int:
        return len(self._steps)

    @property
    def speed_ms(self) -> float:
        return self._speed_ms

    @property
    def is_playing(self) -> bool:
        return self._timer is not None

    @property
    def is_at_start(self) -> bool:
        return self._index == 0

    @property
    def is_at_end(self) -> bool:
        return self._index >= self.total_steps - 1

    @property
    def is_destroyed(self) -> bool:
        return self._destroyed

    @property
    def state(self) -> PlaybackState:
        if self._timer is not None:
            return PlaybackState.PLAYING
        if self._completed:
            return PlaybackState.COMPLETED
        if self._index == 0:
            return PlaybackState.IDLE
        return PlaybackState.PAUSED

    def to_dict(self) -> dict:
        step = self.current_step
        return {
            "state":        self.state.value,
            "currentIndex": self._index,
            "totalSteps":   self.total_steps,
            "isPlaying":    self.is_playing,
            "isAtStart":    self.is_at_start,
            "isAtEnd":      self.is_at_end,
            "speedMs":      self._speed_ms,
            "step":         step.to_dict() if step is not None else None,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _start_timer(self) -> None:
        handle: Optional[TimerHandle] = None

        def fire() -> None:
            self._tick(handle)

        handle = self._scheduler.call_every(self._speed_ms, fire)
        self._timer = handle

    def _cancel_timer(self) -> bool:
        if self._timer is None:
            return False
        self._timer.cancel()
        self._timer = None
        return True

    def _tick(self, handle: Optional[TimerHandle]) -> None:
        with self._lock:
            # a tick from a timer we already released
            if self._destroyed or handle is None or handle is not self._timer:
                return
            if not self.is_at_end:
                self._index += 1
                self._notify()
            if self.is_at_end:
                self._cancel_timer()
                self._completed = True
                log.debug("playback complete at %d/%d", self._index, self.total_steps)
                if self.on_complete is not None:
                    self.on_complete()

    def _move(self, index: int) -> None:
        self._index = index
        self._completed = False
        self._notify()

    def _notify(self) -> None:
        if self.on_step_change is not None:
            self.on_step_change(self._index, self.total_steps)


def clamp_speed(value, fallback: float) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        return fallback
    return max(float(MIN_SPEED_MS), float(value))
