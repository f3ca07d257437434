"""
stepper.py — Playback Controller
=================================
Owns the current step of one Run and the play / pause / speed state.
It never computes simulation state itself: every time the step changes
it fires on_step(index) and the Run derives the state for that index.

State machine:
    STOPPED →  play()   →  PLAYING
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (reached total_steps) → STOPPED
    any     →  reset()  →  STOPPED at step 0

Timing:
  There is no background thread.  The host calls tick() from its timer
  or event loop; when base_interval / speed seconds have passed since
  the previous advance, tick() moves one step.  Every command finishes
  its update before returning, so a tick can never see half of one.

Thread safety:
  NOT thread-safe.  One controller per Run, driven from one thread.
"""

import logging
import time
from enum import Enum
from typing import Any, Callable, Dict, Optional

from errors import InvalidSpeedError


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class PlaybackState(Enum):
    STOPPED = "stopped"
    PLAYING = "playing"
    PAUSED  = "paused"


# ---------------------------------------------------------------------------
# Speed presets (multipliers of the base interval rate)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   0.5,
    "normal": 1.0,
    "fast":   1.5,
    "turbo":  2.0,
}


# ---------------------------------------------------------------------------
# PlaybackController
# ---------------------------------------------------------------------------
class PlaybackController:
    """
    Attributes:
        state         : Current PlaybackState.
        step_index    : Step currently displayed, in [0, total_steps].
        total_steps   : Last legal step index.
        speed         : One of SPEED_PRESETS' values.
        base_interval : Seconds per step at 1x.
        on_step       : Optional callback(step_index) fired on every step change.
        on_reset      : Optional callback() fired by reset() before on_step(0).
    """

    def __init__(
        self,
        total_steps: int,
        base_interval: float = 1.0,
        speed: float = 1.0,
        on_step: Optional[Callable[[int], None]] = None,
        on_reset: Optional[Callable[[], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        if total_steps < 1:
            raise ValueError(f"total_steps must be >= 1, got {total_steps}")
        if base_interval <= 0:
            raise ValueError(f"base_interval must be > 0, got {base_interval}")

        self.total_steps:   int                          = total_steps
        self.base_interval: float                        = base_interval
        self.step_index:    int                          = 0
        self.state:         PlaybackState                = PlaybackState.STOPPED
        self.on_step:       Optional[Callable[[int], None]] = on_step
        self.on_reset:      Optional[Callable[[], None]] = on_reset
        self._clock                                      = clock
        self.speed:         float                        = 1.0
        self.set_speed(speed)

        # for auto-play timing
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self, now: Optional[float] = None) -> None:
        if self.state == PlaybackState.PLAYING:
            return
        if self.step_index >= self.total_steps:
            self._goto(0)
        self.state      = PlaybackState.PLAYING
        self._last_tick = self._now(now)
        logger.debug("playback started at step %d (interval %.3fs)", self.step_index, self.interval)

    def pause(self) -> bool:
        if self.state != PlaybackState.PLAYING:
            return False
        self.state = PlaybackState.PAUSED
        logger.debug("playback paused at step %d", self.step_index)
        return True

    def toggle_play(self, now: Optional[float] = None) -> None:
        if self.state == PlaybackState.PLAYING:
            self.pause()
        else:
            self.play(now)

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self, now: Optional[float] = None) -> bool:
        """
        If playing and a full interval has elapsed, advance one step.
        Returns True if a step was taken.
        """
        if self.state != PlaybackState.PLAYING:
            return False
        now = self._now(now)
        if now - self._last_tick < self.interval:
            return False
        self._last_tick = now
        self._goto(self.step_index + 1)
        if self.step_index >= self.total_steps:
            self.state = PlaybackState.STOPPED
            logger.debug("playback finished at step %d", self.step_index)
        return True

    def due_in(self, now: Optional[float] = None) -> Optional[float]:
        """Seconds until the next tick would advance; None when not playing."""
        if self.state != PlaybackState.PLAYING:
            return None
        return max(0.0, self.interval - (self._now(now) - self._last_tick))

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def step_forward(self) -> bool:
        """Advance one step.  Returns False while playing or at the end."""
        if self.state == PlaybackState.PLAYING or self.step_index >= self.total_steps:
            return False
        self._goto(self.step_index + 1)
        return True

    def step_backward(self) -> bool:
        """Rewind one step.  Returns False while playing or at the start."""
        if self.state == PlaybackState.PLAYING or self.step_index <= 0:
            return False
        self._goto(self.step_index - 1)
        return True

    def seek(self, idx: int, now: Optional[float] = None) -> int:
        """Jump to any step (clamped to [0, total_steps]); returns the new index."""
        idx = max(0, min(int(idx), self.total_steps))
        self._goto(idx)
        if self.state == PlaybackState.PLAYING:
            if idx >= self.total_steps:
                self.state = PlaybackState.STOPPED
            else:
                self._last_tick = self._now(now)
        return idx

    def reset(self) -> None:
        """Back to step 0, STOPPED; the Run clears its trace via on_reset."""
        self.state      = PlaybackState.STOPPED
        self.step_index = 0
        if self.on_reset:
            self.on_reset()
        self._notify(0)
        logger.debug("playback reset")

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, speed: float) -> None:
        """Accepts only the preset multipliers; anything else is rejected."""
        if isinstance(speed, bool) or speed not in SPEED_PRESETS.values():
            raise InvalidSpeedError(
                f"Unsupported speed {speed!r}",
                details={"allowed": sorted(SPEED_PRESETS.values())},
            )
        self.speed = float(speed)

    def set_speed_preset(self, preset: str) -> None:
        if preset not in SPEED_PRESETS:
            raise InvalidSpeedError(
                f"Unknown speed preset {preset!r}",
                details={"allowed": list(SPEED_PRESETS)},
            )
        self.set_speed(SPEED_PRESETS[preset])

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def interval(self) -> float:
        return self.base_interval / self.speed

    @property
    def is_playing(self) -> bool:
        return self.state == PlaybackState.PLAYING

    @property
    def is_finished(self) -> bool:
        return self.step_index >= self.total_steps

    def to_dict(self) -> Dict[str, Any]:
        return {
            "state":       self.state.value,
            "step_index":  self.step_index,
            "total_steps": self.total_steps,
            "speed":       self.speed,
            "interval":    self.interval,
        }

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _now(self, now: Optional[float]) -> float:
        return self._clock() if now is None else now

    def _goto(self, idx: int) -> None:
        self.step_index = idx
        self._notify(idx)

    def _notify(self, idx: int) -> None:
        if self.on_step:
            self.on_step(idx)
