"""
errors.py — Visualizer Exceptions
==================================
Step generators never raise: bad input becomes a minimal step run.
These exceptions come from the code around them: lookups and request
parsing on the way in, verification on the way out.
"""

from typing import Any


class VisualizerError(Exception):
    """Base class for every error raised by this package."""


class UnknownAlgorithmError(VisualizerError, KeyError):
    def __init__(self, algorithm_id: str):
        self.algorithm_id = algorithm_id
        super().__init__(f"Unknown algorithm: {algorithm_id}")

    def __str__(self) -> str:
        return self.args[0]


class InputError(VisualizerError, ValueError):
    """A request payload could not be turned into algorithm input."""


class VerificationError(VisualizerError, AssertionError):
    """A step generator's terminal state disagrees with its reference result."""

    def __init__(self, algorithm_id: str, algorithm_input: Any, final: Any, expected: Any):
        self.algorithm_id    = algorithm_id
        self.algorithm_input = algorithm_input
        self.final           = final
        self.expected        = expected
        super().__init__(
            f"{algorithm_id}: terminal state does not match reference for input "
            f"{algorithm_input!r} (got {final!r}, expected {expected!r})"
        )
