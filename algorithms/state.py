"""
state.py — Simulation State Snapshot
=====================================
Every pattern is a generator that yields SimulationState objects.
A SimulationState is a frozen-in-time picture of everything the
visualizer needs to render one frame:

    • Where the named pointers sit (left / right / mid)
    • The running aggregates (window sum, best sum so far)
    • Which array cells and which source lines to highlight
    • The coarse phase of the run (init → priming → iterating → complete)
    • A plain-English message plus the variables touched this step
      (the Trace Log is built from these)

Design decisions:
  - SimulationState is a frozen dataclass. The pattern generator is the
    only writer; the evaluator / run / renderer are pure readers.
  - Highlights are frozensets so two snapshots of the same step compare
    equal regardless of insertion order.
  - StateBuilder is the mutable scratch-pad generators use between yields.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, FrozenSet, Iterable, Optional, Tuple


# ---------------------------------------------------------------------------
# Algorithm — closed set of supported patterns
# ---------------------------------------------------------------------------
class Algorithm(str, Enum):
    SLIDING_WINDOW = "sliding-window"
    TWO_POINTERS   = "two-pointers"
    BINARY_SEARCH  = "binary-search"


# ---------------------------------------------------------------------------
# Phase — small per-run state machine
# ---------------------------------------------------------------------------
class Phase(Enum):
    INIT      = "init"
    PRIMING   = "priming"
    ITERATING = "iterating"
    COMPLETE  = "complete"

    @property
    def rank(self) -> int:
        return _PHASE_ORDER.index(self)


_PHASE_ORDER = [Phase.INIT, Phase.PRIMING, Phase.ITERATING, Phase.COMPLETE]


@dataclass(frozen=True)
class SimulationState:
    """
    Attributes:
        algorithm           : Registry key of the pattern (Algorithm member).
        input               : The run's input, immutable.
        target              : Target value (two pointers / binary search).
        pointers            : {name: index} — left / right, plus mid for binary search.
        window_sum          : Running window sum (sliding window only).
        max_sum             : Best window sum so far (sliding window only).
        highlighted_indices : Array cells emphasised at this step.
        highlighted_lines   : 0-based source lines executing at this step.
        phase               : Coarse lifecycle stage.
        step_index          : The step this snapshot corresponds to.
        total_steps         : Steps in the whole run.
        found               : True once the target / pair has been located.
        result              : The answer, set once phase is COMPLETE.
        message             : Human-readable "what happened" text.
        variables           : Variables touched at this step, for the trace.
    """

    algorithm:           Algorithm
    input:              Tuple[int, ...]
    target:              int                   = 0
    pointers:            Dict[str, int]        = field(default_factory=dict)
    window_sum:          int                   = 0
    max_sum:             int                   = 0
    highlighted_indices: FrozenSet[int]        = frozenset()
    highlighted_lines:   FrozenSet[int]        = frozenset()
    phase:               Phase                 = Phase.INIT
    step_index:          int                   = 0
    total_steps:         int                   = 1
    found:               bool                  = False
    result:              Any                   = None
    message:             str                   = ""
    variables:           Dict[str, Any]        = field(default_factory=dict)

    @property
    def is_complete(self) -> bool:
        return self.phase is Phase.COMPLETE

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view (sets become sorted lists)."""
        result = list(self.result) if isinstance(self.result, tuple) else self.result
        return {
            "algorithm":           self.algorithm.value,
            "input":               list(self.input),
            "target":              self.target,
            "pointers":            dict(self.pointers),
            "window_sum":          self.window_sum,
            "max_sum":             self.max_sum,
            "highlighted_indices": sorted(self.highlighted_indices),
            "highlighted_lines":   sorted(self.highlighted_lines),
            "phase":               self.phase.value,
            "step_index":          self.step_index,
            "total_steps":         self.total_steps,
            "found":               self.found,
            "result":              result,
            "message":             self.message,
            "variables":           dict(self.variables),
        }


# ---------------------------------------------------------------------------
# Convenience builder so generators don't have to spell out every kwarg
# ---------------------------------------------------------------------------
class StateBuilder:
    """
    Mutable scratch-pad that pattern generators use to construct states.

    Usage inside a generator:
        sb = StateBuilder(Algorithm.BINARY_SEARCH, data, target, total)
        sb.move(left=0, right=len(data) - 1)
        sb.highlight(mid)
        sb.lines = LINES["compare"]
        sb.message = "Compare arr[4] = 5 with target 7."
        yield sb.build(step_index=1)

    Pointers and aggregates persist across build() calls; highlights,
    lines, message and variables are per-step and cleared by next_step().
    """

    def __init__(self, algorithm: Algorithm, data: Tuple[int, ...], target: int, total_steps: int):
        self.algorithm   = algorithm
        self.input       = data
        self.target      = target
        self.total_steps = total_steps

        self.pointers:   Dict[str, int] = {}
        self.window_sum: int            = 0
        self.max_sum:    int            = 0
        self.phase:      Phase          = Phase.INIT
        self.found:      bool           = False
        self.result:     Any            = None
        self.next_step()

    def next_step(self) -> None:
        self.indices:   set            = set()
        self.lines:     Iterable[int]  = ()
        self.message:   str            = ""
        self.variables: Dict[str, Any] = {}

    # -- helpers --
    def move(self, **pointers: int) -> None:
        self.pointers.update(pointers)

    def highlight(self, *indices: int) -> None:
        self.indices.update(i for i in indices if 0 <= i < len(self.input))

    def enter(self, phase: Phase) -> None:
        # phases never move backwards within one pass
        if phase.rank > self.phase.rank:
            self.phase = phase

    def complete(self, result: Any, found: Optional[bool] = None) -> None:
        self.enter(Phase.COMPLETE)
        self.result = result
        if found is not None:
            self.found = found

    def build(self, step_index: int) -> SimulationState:
        return SimulationState(
            algorithm=self.algorithm,
            input=self.input,
            target=self.target,
            pointers=dict(self.pointers),
            window_sum=self.window_sum,
            max_sum=self.max_sum,
            highlighted_indices=frozenset(self.indices),
            highlighted_lines=frozenset(self.lines),
            phase=self.phase,
            step_index=step_index,
            total_steps=self.total_steps,
            found=self.found,
            result=self.result,
            message=self.message,
            variables=dict(self.variables),
        )
