"""
main.py — Algorithm Step Visualizer Flask App
==============================================
JSON API over the algorithm registry and the playback engine, plus a
small command line.

Routes:
  GET  /api/algorithms             – list descriptors (?category=sorting)
  GET  /api/algorithms/<id>        – one descriptor + its default input
  POST /api/run                    – {algorithm, input?} → open a new run
  POST /api/step/next              – advance one step
  POST /api/step/prev              – rewind one step
  POST /api/step/goto              – {index} jump to step N
  POST /api/step/play              – start auto-play
  POST /api/step/pause             – pause auto-play
  POST /api/step/stop              – pause and rewind to step 0
  POST /api/config/speed           – {speed: "fast" | ms}
  GET  /api/state                  – current run (for polling)
  POST /api/verify                 – {algorithm?, input?} → reference check

State management:
  Each browser gets a token in the Flask session; the token keys a
  server-side PlaybackSession (in-memory).  Auto-play uses a
  ManualScheduler per client that is advanced to the wall clock at the
  start of every request, so polling /api/state is what moves playback.
  Idle sessions, and the least recently used ones beyond a cap, are
  closed and dropped.

Command line:
  python main.py serve [--host H] [--port P] [--debug]
  python main.py verify [--algorithm ID]      exit status 1 on any mismatch
"""

import argparse
import logging
import secrets
import sys
import threading
import time
from collections import OrderedDict
from typing import Callable, Dict, Mapping, Optional

from flask import Flask, jsonify, request, session

from algorithms import REGISTRY, AlgorithmDescriptor, list_algorithms, algorithms_by_category, require_algorithm
from algorithms.errors import InputError, UnknownAlgorithmError
from config import configure_logging, load_settings, resolve_speed, Settings
from engine import ManualScheduler, PlaybackSession, verify, verify_registry
from engine.verification import to_jsonable

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Per-client playback sessions
# ---------------------------------------------------------------------------
class SessionStore:
    """
    token → PlaybackSession, each with its own ManualScheduler.

    Kept in least-recently-used order.  A session idle for longer than
    `idle_ms`, or pushed past `max_sessions`, is closed and dropped; a
    client coming back afterwards starts with no run.
    """

    def __init__(self, registry: Mapping[str, AlgorithmDescriptor], speed_ms: float,
                 clock: Callable[[], float], idle_ms: float = 30 * 60 * 1000,
                 max_sessions: int = 500):
        self.registry     = registry
        self.speed_ms     = speed_ms
        self.clock        = clock
        self.idle_ms      = idle_ms
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PlaybackSession]" = OrderedDict()
        self._last_seen: Dict[str, float] = {}
        self._lock = threading.Lock()

    def get(self, token: str) -> PlaybackSession:
        with self._lock:
            now = self.clock()
            self._evict_idle(now)
            playback = self._sessions.get(token)
            if playback is None:
                playback = PlaybackSession(
                    registry=self.registry,
                    scheduler=ManualScheduler(now_ms=now),
                    speed_ms=self.speed_ms,
                )
                self._sessions[token] = playback
            self._sessions.move_to_end(token)
            self._last_seen[token] = now
            while len(self._sessions) > self.max_sessions:
                self._drop(next(iter(self._sessions)))
            # catch auto-play up with the wall clock
            playback.scheduler.advance_to(now)
        return playback

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, token: str) -> bool:
        return token in self._sessions

    def _evict_idle(self, now: float) -> None:
        # oldest first, so stop at the first session still in use
        for token in list(self._sessions):
            if now - self._last_seen[token] <= self.idle_ms:
                break
            self._drop(token)

    def _drop(self, token: str) -> None:
        self._sessions.pop(token).close()
        del self._last_seen[token]
        log.debug("Dropped playback session %s…", token[:6])


def _monotonic_ms() -> float:
    return time.monotonic() * 1000


# ---------------------------------------------------------------------------
# App factory
# ---------------------------------------------------------------------------
def create_app(
    registry: Optional[Mapping[str, AlgorithmDescriptor]] = None,
    settings: Optional[Settings] = None,
    clock: Callable[[], float] = _monotonic_ms,
) -> Flask:
    registry = REGISTRY if registry is None else registry
    settings = settings or load_settings()

    app = Flask(__name__)
    app.secret_key = secrets.token_hex(32)
    app.config.from_prefixed_env("ALGOVIZ")
    store = SessionStore(registry, settings.speed_ms, clock,
                         idle_ms=settings.session_idle_s * 1000,
                         max_sessions=settings.max_sessions)
    app.extensions["playback_sessions"] = store

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def current_playback() -> PlaybackSession:
        if "token" not in session:
            session["token"] = secrets.token_hex(16)
        return store.get(session["token"])

    def running_playback():
        playback = current_playback()
        if playback.controller is None:
            raise InputError("No algorithm running; POST /api/run first")
        return playback

    def body() -> dict:
        data = request.get_json(silent=True)
        return data if isinstance(data, dict) else {}

    @app.errorhandler(UnknownAlgorithmError)
    def handle_unknown(e):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(InputError)
    def handle_input(e):
        return jsonify({"error": str(e)}), 400

    # ------------------------------------------------------------------
    # Registry
    # ------------------------------------------------------------------
    @app.route("/api/algorithms")
    def api_algorithms():
        category = request.args.get("category")
        algos = algorithms_by_category(category, registry) if category else list_algorithms(registry)
        return jsonify({"algorithms": [a.summary() for a in algos]})

    @app.route("/api/algorithms/<algo_id>")
    def api_algorithm(algo_id: str):
        info = require_algorithm(algo_id, registry)
        data = info.summary()
        data["defaultInput"] = to_jsonable(info.default_input)
        return jsonify(data)

    # ------------------------------------------------------------------
    # Run
    # ------------------------------------------------------------------
    @app.route("/api/run", methods=["POST"])
    def api_run():
        data = body()
        algo_id = data.get("algorithm")
        if not algo_id:
            raise InputError("Missing 'algorithm'")
        info = require_algorithm(algo_id, registry)
        algo_input = info.parse_input(data["input"]) if data.get("input") is not None else None

        playback = current_playback()
        playback.open(info.id, algo_input)
        return jsonify(playback.to_dict())

    # ------------------------------------------------------------------
    # Playback
    # ------------------------------------------------------------------
    @app.route("/api/step/next", methods=["POST"])
    def api_step_next():
        playback = running_playback()
        playback.controller.next()
        return jsonify(playback.to_dict())

    @app.route("/api/step/prev", methods=["POST"])
    def api_step_prev():
        playback = running_playback()
        playback.controller.previous()
        return jsonify(playback.to_dict())

    @app.route("/api/step/goto", methods=["POST"])
    def api_step_goto():
        playback = running_playback()
        idx = body().get("index")
        if isinstance(idx, bool) or not isinstance(idx, int) \
                or not 0 <= idx < playback.controller.total_steps:
            raise InputError("Invalid step index")
        playback.controller.jump_to(idx)
        return jsonify(playback.to_dict())

    @app.route("/api/step/play", methods=["POST"])
    def api_step_play():
        playback = running_playback()
        playback.controller.play()
        return jsonify(playback.to_dict())

    @app.route("/api/step/pause", methods=["POST"])
    def api_step_pause():
        playback = running_playback()
        playback.controller.pause()
        return jsonify(playback.to_dict())

    @app.route("/api/step/stop", methods=["POST"])
    def api_step_stop():
        playback = running_playback()
        playback.controller.stop()
        return jsonify(playback.to_dict())

    @app.route("/api/state")
    def api_state():
        return jsonify(current_playback().to_dict())

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------
    @app.route("/api/config/speed", methods=["POST"])
    def api_config_speed():
        speed = resolve_speed(body().get("speed"))
        if speed is None:
            raise InputError("'speed' must be a preset name or a number of milliseconds")
        playback = current_playback()
        playback.set_speed(speed)
        return jsonify({"speedMs": playback.speed_ms})

    # ------------------------------------------------------------------
    # Verification
    # ------------------------------------------------------------------
    @app.route("/api/verify", methods=["POST"])
    def api_verify():
        data = body()
        if data.get("algorithm"):
            info = require_algorithm(data["algorithm"], registry)
            algo_input = info.parse_input(data["input"]) if data.get("input") is not None else None
            results = [verify(info, algo_input)]
        else:
            results = verify_registry(registry)
        return jsonify({
            "passed":  all(r.passed for r in results),
            "results": [r.to_dict() for r in results],
        })

    return app


# ---------------------------------------------------------------------------
# Command line
# ---------------------------------------------------------------------------
def run_verify(algorithm: Optional[str] = None) -> int:
    if algorithm:
        results = [verify(require_algorithm(algorithm))]
    else:
        results = verify_registry()
    for r in results:
        status = "OK  " if r.passed else "FAIL"
        log.info("%s %-15s %4d steps  %.2fms", status, r.algorithm_id, r.total_steps, r.wall_time_ms)
    return 0 if all(r.passed for r in results) else 1


def main(argv=None) -> int:
    settings = load_settings()
    parser = argparse.ArgumentParser(description="Algorithm step visualizer")
    sub = parser.add_subparsers(dest="command")

    serve = sub.add_parser("serve", help="Run the JSON API")
    serve.add_argument("--host", type=str, default=settings.host, help="Bind address")
    serve.add_argument("--port", type=int, default=settings.port, help="Port")
    serve.add_argument("--debug", action="store_true", default=settings.debug, help="Flask debug mode")

    check = sub.add_parser("verify", help="Check every algorithm against its reference implementation")
    check.add_argument("--algorithm", type=str, default=None, help="Only verify this algorithm id")

    args = parser.parse_args(argv)
    configure_logging(settings.log_level)

    if args.command == "verify":
        try:
            return run_verify(args.algorithm)
        except UnknownAlgorithmError as e:
            log.error("%s", e)
            return 2

    app = create_app(settings=settings)
    app.run(
        debug=getattr(args, "debug", settings.debug),
        host=getattr(args, "host", settings.host),
        port=getattr(args, "port", settings.port),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
