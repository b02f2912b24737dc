"""
session.py — Current-Run Ownership
===================================
A PlaybackSession is "whatever the learner is looking at right now": one
algorithm, one input, one controller.  Opening a new run always destroys
the previous controller first, so at most one timer per session exists.

Usage:
    session = PlaybackSession()
    ctl = session.open("bfs")          # default input
    ctl.play()
    session.open("sjf", my_input)      # old controller is dead now
    session.close()
"""

import logging
from typing import Any, Callable, Mapping, Optional

from algorithms import REGISTRY, AlgorithmDescriptor, require_algorithm
from config import DEFAULT_SPEED_MS
from engine.controller import PlaybackController, clamp_speed

log = logging.getLogger(__name__)


class PlaybackSession:
    def __init__(
        self,
        registry: Mapping[str, AlgorithmDescriptor] = REGISTRY,
        scheduler=None,
        speed_ms: float = DEFAULT_SPEED_MS,
        on_step_change: Optional[Callable[[int, int], None]] = None,
        on_complete: Optional[Callable[[], None]] = None,
    ):
        self.registry        = registry
        self.scheduler       = scheduler
        self.speed_ms        = speed_ms
        self.on_step_change  = on_step_change
        self.on_complete     = on_complete
        self.descriptor:      Optional[AlgorithmDescriptor] = None
        self.algorithm_input: Any                           = None
        self.controller:      Optional[PlaybackController]  = None

    @property
    def is_open(self) -> bool:
        return self.controller is not None

    def open(self, algorithm_id: str, algorithm_input: Any = None) -> PlaybackController:
        """
        Build the step list for `algorithm_id` and wrap it in a fresh
        controller.  Raises UnknownAlgorithmError before touching the
        current run, so a bad id leaves the old run intact.
        """
        descriptor = require_algorithm(algorithm_id, self.registry)
        if algorithm_input is None:
            algorithm_input = descriptor.default_input
        steps = descriptor.generate_steps(algorithm_input)

        self.close()
        self.descriptor      = descriptor
        self.algorithm_input = algorithm_input
        self.controller = PlaybackController(
            steps,
            speed_ms=self.speed_ms,
            on_step_change=self.on_step_change,
            on_complete=self.on_complete,
            scheduler=self.scheduler,
        )
        log.info("Opened %s with %d steps", descriptor.id, len(steps))
        return self.controller

    def close(self) -> None:
        if self.controller is not None:
            self.controller.destroy()
            log.debug("Closed %s", self.descriptor.id if self.descriptor else "?")
        self.controller      = None
        self.descriptor      = None
        self.algorithm_input = None

    def set_speed(self, speed_ms: float) -> None:
        """Remember the speed for later runs and apply it to the live one."""
        if self.controller is not None:
            self.controller.set_speed(speed_ms)
            self.speed_ms = self.controller.speed_ms
        else:
            self.speed_ms = clamp_speed(speed_ms, self.speed_ms)

    def to_dict(self) -> dict:
        if self.controller is None:
            return {"algorithm": None, "speedMs": self.speed_ms}
        data = self.controller.to_dict()
        data["algorithm"] = self.descriptor.summary()
        return data
