"""
run.py — Run & In-Process API
==============================
A Run is one execution of a pattern over one input: it owns the
memoised per-step states, the Trace Log and its own PlaybackController.
Changing the algorithm, input or target means building a new Run.

Usage:
    run = create_run("sliding-window", [2, 1, 5, 1, 3, 2])
    run.playback.step_forward()
    state = get_state(run, 4)            # any step, any order
    trace = get_trace(run, run.playback.step_index)
    run.summary()                        # results card
"""

import logging
import warnings
from typing import Any, Dict, Iterable, List, Optional, Union

from algorithms import Algorithm, SimulationState, get_algorithm
from config import VisualizerSettings, get_settings
from engine.evaluator import evaluate, resolve_target, validate_input, check_step
from engine.stepper import PlaybackController
from engine.trace import TraceEntry, TraceLog
from errors import PreconditionViolation


logger = logging.getLogger(__name__)


class Run:
    """
    Attributes:
        info        : PatternInfo of the algorithm.
        input       : Validated input tuple.
        target      : Resolved target (the pattern default when not given).
        total_steps : Last legal step index.
        trace       : TraceLog with one entry per step reached.
        playback    : This Run's PlaybackController.
    """

    def __init__(
        self,
        algorithm: Union[str, Algorithm],
        data: Iterable[int],
        target: Optional[int] = None,
        settings: Optional[VisualizerSettings] = None,
        speed: Optional[float] = None,
    ):
        settings = settings or get_settings()

        self.info        = get_algorithm(algorithm)
        self.input       = validate_input(self.info, data)
        self.target      = resolve_target(self.info, target)
        self.total_steps = self.info.total_steps(len(self.input))
        self.trace       = TraceLog()

        # per-step memo, keyed by step index
        self._states: List[Optional[SimulationState]] = [None] * (self.total_steps + 1)

        self.playback = PlaybackController(
            self.total_steps,
            base_interval=settings.base_interval,
            speed=settings.default_speed if speed is None else speed,
            on_step=self._on_step,
            on_reset=self.trace.clear,
        )

        self._check_preconditions()
        self._fill_trace(0)
        logger.debug(
            "new %s run: n=%d target=%d total_steps=%d",
            self.algorithm.value, len(self.input), self.target, self.total_steps,
        )

    @property
    def algorithm(self) -> Algorithm:
        return self.info.key

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    def state_at(self, step_index: int) -> SimulationState:
        check_step(step_index, self.total_steps)
        state = self._states[step_index]
        if state is None:
            state = evaluate(self.algorithm, self.input, self.target, step_index)
            self._states[step_index] = state
        return state

    @property
    def state(self) -> SimulationState:
        """State at the controller's current step."""
        return self.state_at(self.playback.step_index)

    def trace_upto(self, upto_step: int) -> List[TraceEntry]:
        upto_step = min(upto_step, self.total_steps)
        if upto_step < 0:
            return []
        self._fill_trace(upto_step)
        return self.trace.visible_entries(upto_step)

    def visible_trace(self) -> List[TraceEntry]:
        return self.trace_upto(self.playback.step_index)

    # ------------------------------------------------------------------
    # Results card
    # ------------------------------------------------------------------
    def summary(self) -> Dict[str, Any]:
        state = self.state
        result = list(state.result) if isinstance(state.result, tuple) else state.result
        return {
            "algorithm":        self.algorithm.value,
            "label":            self.info.label,
            "complexity_time":  self.info.complexity_time,
            "complexity_space": self.info.complexity_space,
            "is_complete":      state.is_complete,
            "found":            state.found,
            "result":           result,
            "step_index":       state.step_index,
            "total_steps":      self.total_steps,
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "algorithm":   self.algorithm.value,
            "label":       self.info.label,
            "input":       list(self.input),
            "target":      self.target,
            "total_steps": self.total_steps,
            "playback":    self.playback.to_dict(),
            "state":       self.state.to_dict(),
            "trace":       [e.to_dict() for e in self.visible_trace()],
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _on_step(self, step_index: int) -> None:
        self._fill_trace(step_index)

    def _fill_trace(self, upto_step: int) -> None:
        # entries are created in step order, so creation order == step order
        for idx in range(upto_step + 1):
            if not self.trace.has(idx):
                self.trace.record(self.state_at(idx))

    def _check_preconditions(self) -> None:
        if not self.info.requires_sorted:
            return
        if any(a > b for a, b in zip(self.input, self.input[1:])):
            msg = f"{self.info.label} expects input sorted ascending; the result is unspecified"
            logger.warning("%s (input=%s)", msg, list(self.input))
            warnings.warn(
                PreconditionViolation(msg, details={"algorithm": self.algorithm.value}),
                stacklevel=3,
            )


# ---------------------------------------------------------------------------
# Module-level API
# ---------------------------------------------------------------------------
def create_run(
    algorithm: Union[str, Algorithm],
    data: Iterable[int],
    target: Optional[int] = None,
    settings: Optional[VisualizerSettings] = None,
    speed: Optional[float] = None,
) -> Run:
    """Raises InvalidInputError / UnsupportedAlgorithmError."""
    return Run(algorithm, data, target, settings=settings, speed=speed)


def get_state(run: Run, step_index: int) -> SimulationState:
    """Raises OutOfRangeError."""
    return run.state_at(step_index)


def get_trace(run: Run, upto_step: int) -> List[TraceEntry]:
    return run.trace_upto(upto_step)
