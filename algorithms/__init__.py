"""
algorithms/__init__.py — Pattern Registry
==========================================
Single source of truth for every pattern the visualizer knows about.

    from algorithms import REGISTRY, get_algorithm, Algorithm

REGISTRY is a dict:
    {
        Algorithm.SLIDING_WINDOW: PatternInfo(key, label, fn, source, total_steps, …),
        …
    }

PatternInfo is a lightweight dataclass.  The evaluator, run and web layer
all consume it, so adding a new pattern is: add an Algorithm member,
write the generator module, add one entry here.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Union

from algorithms.state import Algorithm, Phase, SimulationState, StateBuilder
from algorithms import sliding_window as _sw
from algorithms import two_pointers as _tp
from algorithms import binary_search as _bs
from errors import InvalidInputError, UnsupportedAlgorithmError


# ---------------------------------------------------------------------------
# Example — one canned input from the pattern page
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Example:
    id:          str
    name:        str
    description: str
    data:        List[int]

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name, "description": self.description, "data": list(self.data)}


def _examples(raw: List[Dict[str, Any]]) -> List[Example]:
    return [Example(**item) for item in raw]


# ---------------------------------------------------------------------------
# PatternInfo — metadata card for each pattern
# ---------------------------------------------------------------------------
@dataclass
class PatternInfo:
    key:              Algorithm
    label:            str                          # human label, e.g. "Sliding Window"
    fn:               Callable                     # the generator function
    source:           List[str]                    # solution lines for the code panel
    total_steps:      Callable[[int], int]         # len(input) -> step count
    default_input:    List[int]
    default_target:   int
    examples:         List[Example] = field(default_factory=list)
    min_length:       int      = 1                 # shortest legal input
    uses_target:      bool     = True
    requires_sorted:  bool     = False
    complexity_time:  str      = ""
    complexity_space: str      = ""
    description:      str      = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key":              self.key.value,
            "label":            self.label,
            "source":           list(self.source),
            "default_input":    list(self.default_input),
            "default_target":   self.default_target,
            "examples":         [e.to_dict() for e in self.examples],
            "min_length":       self.min_length,
            "uses_target":      self.uses_target,
            "requires_sorted":  self.requires_sorted,
            "complexity_time":  self.complexity_time,
            "complexity_space": self.complexity_space,
            "description":      self.description,
        }


# ---------------------------------------------------------------------------
# THE REGISTRY
# ---------------------------------------------------------------------------
REGISTRY: Dict[Algorithm, PatternInfo] = {

    Algorithm.SLIDING_WINDOW: PatternInfo(
        key=Algorithm.SLIDING_WINDOW, label="Sliding Window",
        fn=_sw.sliding_window, source=_sw.SOURCE, total_steps=_sw.total_steps,
        default_input=_sw.DEFAULT_INPUT, default_target=_sw.DEFAULT_TARGET,
        examples=_examples(_sw.EXAMPLES),
        min_length=_sw.WINDOW_SIZE, uses_target=False,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Maintain a fixed-size window and update its sum in O(1) per slide.",
    ),

    Algorithm.TWO_POINTERS: PatternInfo(
        key=Algorithm.TWO_POINTERS, label="Two Pointers",
        fn=_tp.two_pointers, source=_tp.SOURCE, total_steps=_tp.total_steps,
        default_input=_tp.DEFAULT_INPUT, default_target=_tp.DEFAULT_TARGET,
        examples=_examples(_tp.EXAMPLES),
        requires_sorted=True,
        complexity_time="O(n)", complexity_space="O(1)",
        description="Walk inward from both ends of a sorted array to find a pair with the target sum.",
    ),

    Algorithm.BINARY_SEARCH: PatternInfo(
        key=Algorithm.BINARY_SEARCH, label="Binary Search",
        fn=_bs.binary_search, source=_bs.SOURCE, total_steps=_bs.total_steps,
        default_input=_bs.DEFAULT_INPUT, default_target=_bs.DEFAULT_TARGET,
        examples=_examples(_bs.EXAMPLES),
        requires_sorted=True,
        complexity_time="O(log n)", complexity_space="O(1)",
        description="Halve a sorted search range each step until the target is found or the range is empty.",
    ),
}


# ---------------------------------------------------------------------------
# Lookup helpers
# ---------------------------------------------------------------------------
def parse_algorithm(key: Union[str, Algorithm]) -> Algorithm:
    """Accept an Algorithm member or its string value."""
    try:
        return Algorithm(key)
    except (ValueError, TypeError):
        raise UnsupportedAlgorithmError(key) from None


def get_algorithm(key: Union[str, Algorithm]) -> PatternInfo:
    """Return PatternInfo by key; raises UnsupportedAlgorithmError."""
    algorithm = parse_algorithm(key)
    try:
        return REGISTRY[algorithm]
    except KeyError:
        raise UnsupportedAlgorithmError(key) from None


def list_algorithms() -> List[PatternInfo]:
    """Return all registered patterns in insertion order."""
    return list(REGISTRY.values())


def find_example(key: Union[str, Algorithm], example_id: str) -> Example:
    info = get_algorithm(key)
    for example in info.examples:
        if example.id == example_id:
            return example
    raise InvalidInputError(
        f"Unknown example {example_id!r} for {info.label}",
        details={"algorithm": info.key.value, "example": example_id},
    )


__all__ = [
    "Algorithm",
    "Phase",
    "SimulationState",
    "StateBuilder",
    "Example",
    "PatternInfo",
    "REGISTRY",
    "parse_algorithm",
    "get_algorithm",
    "list_algorithms",
    "find_example",
]
