"""
trace.py — Trace Log
=====================
Timestamped, human-readable record of what happened at each step.

The log is keyed by step index: recording a step that already has an
entry is a no-op, so seeking back and forth never grows it.  Entries are
never edited after creation and only disappear on clear().
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional

from algorithms.state import SimulationState


@dataclass(frozen=True)
class TraceEntry:
    step_index: int
    message:    str
    variables:  Dict[str, Any] = field(default_factory=dict)
    timestamp:  datetime       = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_state(cls, state: SimulationState) -> "TraceEntry":
        return cls(
            step_index=state.step_index,
            message=state.message,
            variables=dict(state.variables),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "step_index": self.step_index,
            "message":    self.message,
            "variables":  dict(self.variables),
            "timestamp":  self.timestamp.isoformat(),
        }


class TraceLog:
    """Ordered entries, at most one per step index."""

    def __init__(self):
        self._entries: Dict[int, TraceEntry] = {}

    def record(self, state: SimulationState) -> TraceEntry:
        """Add the entry for state's step, or return the one already there."""
        entry = self._entries.get(state.step_index)
        if entry is None:
            entry = TraceEntry.from_state(state)
            self._entries[state.step_index] = entry
        return entry

    def has(self, step_index: int) -> bool:
        return step_index in self._entries

    def visible_entries(self, current_step: int) -> List[TraceEntry]:
        """Entries with step_index <= current_step, in step order."""
        return sorted(
            (e for e in self._entries.values() if e.step_index <= current_step),
            key=lambda e: e.step_index,
        )

    def latest(self, current_step: int) -> Optional[TraceEntry]:
        visible = self.visible_entries(current_step)
        return visible[-1] if visible else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[TraceEntry]:
        return iter(sorted(self._entries.values(), key=lambda e: e.step_index))
