"""
engine/
-------
Evaluation, playback & trace layer.

    from engine import evaluate, create_run, get_state, get_trace, Simulator
"""

from engine.evaluator import evaluate, timeline, total_steps
from engine.stepper   import PlaybackController, PlaybackState, SPEED_PRESETS
from engine.trace     import TraceEntry, TraceLog
from engine.run       import Run, create_run, get_state, get_trace
from engine.simulator import Simulator

__all__ = [
    "evaluate",
    "timeline",
    "total_steps",
    "PlaybackController",
    "PlaybackState",
    "SPEED_PRESETS",
    "TraceEntry",
    "TraceLog",
    "Run",
    "create_run",
    "get_state",
    "get_trace",
    "Simulator",
]
