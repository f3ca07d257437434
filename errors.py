"""Exception hierarchy for the pattern simulation engine."""

from typing import Any, Dict, Optional


class PatternEngineError(Exception):
    """Base exception for all engine errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON responses."""
        return {
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class InvalidInputError(PatternEngineError, ValueError):
    """Empty input, non-integer items, or input shorter than the pattern needs."""


class UnsupportedAlgorithmError(PatternEngineError, KeyError):
    """Unknown algorithm key."""

    def __init__(self, key: Any):
        super().__init__(f"Unknown algorithm: {key!r}", details={"algorithm": str(key)})
        self.key = key


class OutOfRangeError(PatternEngineError, IndexError):
    """Step index outside [0, total_steps]."""

    def __init__(self, step_index: int, total_steps: int):
        super().__init__(
            f"Step {step_index} is outside [0, {total_steps}]",
            details={"step_index": step_index, "total_steps": total_steps},
        )
        self.step_index = step_index
        self.total_steps = total_steps


class InvalidSpeedError(PatternEngineError, ValueError):
    """Playback speed outside the supported presets."""


class PreconditionViolation(PatternEngineError, UserWarning):
    """Input breaks an assumption the pattern relies on (e.g. unsorted binary search).

    Issued through ``warnings.warn``; the run still proceeds and its result
    is unspecified.
    """
