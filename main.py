"""
main.py — Pattern Visualizer Flask App
=======================================
JSON API over the simulation engine.  The browser front end renders
whatever these routes return; no HTML is produced here.

Routes:
  GET  /api/patterns            – registry cards (source, examples, defaults)
  POST /api/run                 – start a run {algorithm, input?, target?, example?}
  GET  /api/state[?step=n]      – state at the current (or given) step
  GET  /api/trace[?upto=n]      – trace entries up to the current (or given) step
  POST /api/step/next           – advance one step
  POST /api/step/prev           – rewind one step
  POST /api/step/goto           – jump to step N {index}
  POST /api/play                – start / resume playback
  POST /api/pause               – pause playback
  POST /api/tick                – advance if the playback interval elapsed
  POST /api/reset               – back to step 0, trace cleared
  POST /api/speed               – set playback speed {speed}

State management:
  Each browser session gets a Simulator held in a process-local
  registry; the Flask session only carries its id.
"""

import logging
import secrets
import threading
from collections import OrderedDict
from contextlib import contextmanager
from typing import Iterator, Optional

from flask import Flask, jsonify, request, session

from algorithms import list_algorithms
from config import get_settings
from engine import Simulator, get_state, get_trace
from errors import InvalidInputError, PatternEngineError, UnsupportedAlgorithmError


logger = logging.getLogger(__name__)

settings = get_settings()

app = Flask(__name__)
app.secret_key = settings.secret_key or secrets.token_hex(32)

# least recently used first; capped at settings.max_sessions
_simulators: "OrderedDict[str, Simulator]" = OrderedDict()
_simulators_lock = threading.Lock()


# ---------------------------------------------------------------------------
# Session State Helpers
# ---------------------------------------------------------------------------
def get_simulator() -> Simulator:
    """Return this session's Simulator, creating it on first use."""
    sid = session.get("sid")
    if sid is None:
        sid = secrets.token_hex(16)
        session["sid"] = sid
    with _simulators_lock:
        sim = _simulators.get(sid)
        if sim is None:
            sim = Simulator(settings=settings)
            _simulators[sid] = sim
            while len(_simulators) > settings.max_sessions:
                evicted, _ = _simulators.popitem(last=False)
                logger.debug("evicted simulator for session %s", evicted)
        else:
            _simulators.move_to_end(sid)
    return sim


@contextmanager
def session_simulator() -> Iterator[Simulator]:
    """This session's Simulator, locked for the whole command."""
    sim = get_simulator()
    with sim.lock:
        yield sim


def json_body() -> dict:
    return request.get_json(silent=True) or {}


def int_arg(name: str) -> Optional[int]:
    """Query argument as int; None when absent, InvalidInputError when malformed."""
    raw = request.args.get(name)
    if raw is None:
        return None
    try:
        return int(raw)
    except ValueError:
        raise InvalidInputError(f"{name} must be an integer", details={name: raw}) from None


def snapshot(sim: Simulator):
    data = sim.run.to_dict()
    data["example"] = sim.example_id
    data["summary"] = sim.run.summary()
    return jsonify(data)


@app.errorhandler(PatternEngineError)
def handle_engine_error(exc: PatternEngineError):
    status = 404 if isinstance(exc, UnsupportedAlgorithmError) else 400
    logger.info("request rejected: %s", exc.message)
    return jsonify(exc.to_dict()), status


# ---------------------------------------------------------------------------
# API: Patterns
# ---------------------------------------------------------------------------
@app.route("/api/patterns")
def api_patterns():
    return jsonify({"patterns": [info.to_dict() for info in list_algorithms()]})


# ---------------------------------------------------------------------------
# API: Run
# ---------------------------------------------------------------------------
@app.route("/api/run", methods=["POST"])
def api_run():
    data = json_body()
    with session_simulator() as sim:
        algorithm = data.get("algorithm", sim.run.algorithm.value)
        example   = data.get("example")

        if example is not None:
            sim.select_example(example, algorithm=algorithm, target=data.get("target"))
        else:
            sim.load(algorithm, data.get("input"), data.get("target"))

        return snapshot(sim)


@app.route("/api/state")
def api_state():
    step = int_arg("step")
    with session_simulator() as sim:
        if step is None:
            return jsonify(sim.run.state.to_dict())
        return jsonify(get_state(sim.run, step).to_dict())


@app.route("/api/trace")
def api_trace():
    upto = int_arg("upto")
    with session_simulator() as sim:
        if upto is None:
            upto = sim.run.playback.step_index
        return jsonify({"trace": [e.to_dict() for e in get_trace(sim.run, upto)]})


# ---------------------------------------------------------------------------
# API: Step Navigation
# ---------------------------------------------------------------------------
@app.route("/api/step/next", methods=["POST"])
def api_step_next():
    with session_simulator() as sim:
        if sim.run.playback.is_playing:
            return jsonify({"error": "Pause playback before stepping"}), 409
        if not sim.run.playback.step_forward():
            return jsonify({"error": "Already at last step"}), 400
        return snapshot(sim)


@app.route("/api/step/prev", methods=["POST"])
def api_step_prev():
    with session_simulator() as sim:
        if sim.run.playback.is_playing:
            return jsonify({"error": "Pause playback before stepping"}), 409
        if not sim.run.playback.step_backward():
            return jsonify({"error": "Already at first step"}), 400
        return snapshot(sim)


@app.route("/api/step/goto", methods=["POST"])
def api_step_goto():
    idx = json_body().get("index", 0)
    if isinstance(idx, bool) or not isinstance(idx, int):
        return jsonify({"error": "index must be an integer"}), 400
    with session_simulator() as sim:
        sim.run.playback.seek(idx)
        return snapshot(sim)


# ---------------------------------------------------------------------------
# API: Playback
# ---------------------------------------------------------------------------
@app.route("/api/play", methods=["POST"])
def api_play():
    with session_simulator() as sim:
        sim.run.playback.play()
        return snapshot(sim)


@app.route("/api/pause", methods=["POST"])
def api_pause():
    with session_simulator() as sim:
        sim.run.playback.pause()
        return snapshot(sim)


@app.route("/api/tick", methods=["POST"])
def api_tick():
    with session_simulator() as sim:
        sim.run.playback.tick()
        return snapshot(sim)


@app.route("/api/reset", methods=["POST"])
def api_reset():
    with session_simulator() as sim:
        sim.run.playback.reset()
        return snapshot(sim)


@app.route("/api/speed", methods=["POST"])
def api_speed():
    speed = json_body().get("speed")
    with session_simulator() as sim:
        sim.set_speed(speed)
        return jsonify({"speed": sim.speed})


# ---------------------------------------------------------------------------
# Run
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    logging.basicConfig(level=getattr(logging, settings.log_level.upper(), logging.INFO))
    logger.info("Pattern Visualizer listening on http://%s:%d", settings.host, settings.port)
    app.run(debug=settings.debug, host=settings.host, port=settings.port)
