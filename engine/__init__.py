"""
engine/
-------
Playback & verification layer.

    from engine import PlaybackController, PlaybackSession, verify
"""

from engine.timers       import ManualScheduler, ThreadScheduler, TimerHandle
from engine.controller   import PlaybackController, PlaybackState
from engine.session      import PlaybackSession
from engine.verification import VerificationResult, verify, assert_verified, verify_registry

__all__ = [
    "ManualScheduler",
    "ThreadScheduler",
    "TimerHandle",
    "PlaybackController",
    "PlaybackState",
    "PlaybackSession",
    "VerificationResult",
    "verify",
    "assert_verified",
    "verify_registry",
]
