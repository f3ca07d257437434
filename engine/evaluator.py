"""
evaluator.py — Step Evaluator
==============================
Pure entry point that turns (algorithm, input, target, step_index) into
the SimulationState at that step.

Nothing here carries state between calls: every evaluation replays the
pattern generator from step 0 and stops at the requested index, so
jumping straight to step 5 gives exactly what stepping 0 → 5 would.
Runs are short, so the replay is cheap; the Run memoises per step.

Dispatch goes through the registry: the Algorithm member selects the
PatternInfo, and its generator does the work.
"""

import logging
from dataclasses import replace
from itertools import islice
from typing import Iterable, List, Optional, Tuple, Union

from algorithms import Algorithm, PatternInfo, SimulationState, get_algorithm
from errors import InvalidInputError, OutOfRangeError


logger = logging.getLogger(__name__)

AlgorithmKey = Union[str, Algorithm]


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------
def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def validate_input(info: PatternInfo, data: Iterable[int]) -> Tuple[int, ...]:
    """Freeze the input into a tuple, rejecting anything the pattern can't run on."""
    if data is None or isinstance(data, (str, bytes, dict)):
        raise InvalidInputError("Input must be a sequence of integers")
    items = tuple(data)
    if not items:
        raise InvalidInputError("Input must not be empty", details={"algorithm": info.key.value})
    bad = [i for i, item in enumerate(items) if not _is_int(item)]
    if bad:
        raise InvalidInputError(
            "Input must contain only integers",
            details={"algorithm": info.key.value, "positions": bad},
        )
    if len(items) < info.min_length:
        raise InvalidInputError(
            f"{info.label} needs at least {info.min_length} elements, got {len(items)}",
            details={"algorithm": info.key.value, "min_length": info.min_length, "length": len(items)},
        )
    return items


def resolve_target(info: PatternInfo, target: Optional[int]) -> int:
    """None means the pattern's default target."""
    if target is None:
        return info.default_target
    if not _is_int(target):
        raise InvalidInputError("Target must be an integer", details={"target": repr(target)})
    return target


def check_step(step_index: int, total: int) -> None:
    if not _is_int(step_index) or not 0 <= step_index <= total:
        raise OutOfRangeError(step_index, total)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def total_steps(algorithm: AlgorithmKey, length: int) -> int:
    """Step count for a run; depends only on the algorithm and input length."""
    info = get_algorithm(algorithm)
    if length < max(1, info.min_length):
        raise InvalidInputError(
            f"{info.label} needs at least {max(1, info.min_length)} elements, got {length}",
            details={"algorithm": info.key.value, "length": length},
        )
    return info.total_steps(length)


def evaluate(
    algorithm: AlgorithmKey,
    data: Iterable[int],
    target: Optional[int],
    step_index: int,
) -> SimulationState:
    """
    Return the SimulationState at step_index.

    Raises:
        UnsupportedAlgorithmError : unknown algorithm key.
        InvalidInputError         : empty / non-integer / too-short input.
        OutOfRangeError           : step_index outside [0, total_steps].
    """
    info   = get_algorithm(algorithm)
    items  = validate_input(info, data)
    target = resolve_target(info, target)
    total  = info.total_steps(len(items))
    check_step(step_index, total)

    # the last generated step is final; step `total` repeats it
    state = next(islice(info.fn(items, target), min(step_index, total - 1), None))
    if state.step_index != step_index:
        state = replace(state, step_index=step_index)
    logger.debug("evaluated %s step %d/%d phase=%s", info.key.value, step_index, total, state.phase.value)
    return state


def timeline(
    algorithm: AlgorithmKey,
    data: Iterable[int],
    target: Optional[int] = None,
) -> List[SimulationState]:
    """Every state of a run, indexed by step (length total_steps + 1)."""
    info   = get_algorithm(algorithm)
    items  = validate_input(info, data)
    target = resolve_target(info, target)
    total  = info.total_steps(len(items))

    states = list(info.fn(items, target))
    if len(states) != total:
        raise RuntimeError(
            f"{info.label} generated {len(states)} steps, expected {total}"
        )
    states.append(replace(states[-1], step_index=total))
    return states
