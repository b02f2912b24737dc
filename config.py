"""
config.py — Runtime Settings
=============================
Speed presets, playback limits and environment-driven settings.

Environment variables (all optional):
    ALGOVIZ_SPEED_MS         default playback interval in ms     (400)
    ALGOVIZ_LOG_LEVEL        logging level name                  (INFO)
    ALGOVIZ_HOST             HTTP bind address                   (0.0.0.0)
    ALGOVIZ_PORT             HTTP port                           (5000)
    ALGOVIZ_DEBUG            "1" / "true" enables Flask debug    (false)
    ALGOVIZ_SESSION_IDLE_S   seconds before an idle client run   (1800)
                             is dropped
    ALGOVIZ_MAX_SESSIONS     client runs kept in memory          (500)
"""

import logging
import math
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1000,   # teaching mode
    "medium": 400,
    "fast":   150,    # demo mode
    "turbo":  50,
}

DEFAULT_SPEED_MS = SPEED_PRESETS["medium"]
MIN_SPEED_MS     = 20

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass
class Settings:
    speed_ms:       float = DEFAULT_SPEED_MS
    log_level:      str   = "INFO"
    host:           str   = "0.0.0.0"
    port:           int   = 5000
    debug:          bool  = False
    session_idle_s: float = 1800
    max_sessions:   int   = 500


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from ALGOVIZ_* variables; unparsable values keep the default."""
    env = os.environ if environ is None else environ
    settings = Settings()

    speed = resolve_speed(env.get("ALGOVIZ_SPEED_MS", ""))
    if speed is not None:
        settings.speed_ms = speed
    settings.log_level = env.get("ALGOVIZ_LOG_LEVEL", settings.log_level).upper()
    settings.host = env.get("ALGOVIZ_HOST", settings.host)
    port = env.get("ALGOVIZ_PORT", "")
    if port.isdigit():
        settings.port = int(port)
    settings.debug = env.get("ALGOVIZ_DEBUG", "").strip().lower() in ("1", "true", "yes", "on")
    idle = env.get("ALGOVIZ_SESSION_IDLE_S", "")
    if idle.isdigit() and int(idle) > 0:
        settings.session_idle_s = int(idle)
    max_sessions = env.get("ALGOVIZ_MAX_SESSIONS", "")
    if max_sessions.isdigit() and int(max_sessions) > 0:
        settings.max_sessions = int(max_sessions)
    return settings


def resolve_speed(value: Union[str, int, float, None]) -> Optional[float]:
    """
    Accept a preset name ("fast") or a number of milliseconds.
    Returns the clamped interval, or None when the value means nothing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip().lower()
        if value in SPEED_PRESETS:
            return float(SPEED_PRESETS[value])
        try:
            value = float(value)
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return None
    return max(float(MIN_SPEED_MS), float(value))


def configure_logging(level: Optional[str] = None) -> None:
    level_name = (level or load_settings().log_level).upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format=LOG_FORMAT,
    )
