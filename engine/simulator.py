"""
simulator.py — Active Run Holder
=================================
What one pattern page holds: the selected algorithm, the input (an
example or a custom array), the target and the Run built from them.
Any change to those three throws the Run away and starts a fresh one at
step 0; the playback speed survives the switch.
"""

import logging
import threading
from typing import Iterable, Optional, Union

from algorithms import Algorithm, find_example, get_algorithm
from config import VisualizerSettings, get_settings
from engine.run import Run, create_run


logger = logging.getLogger(__name__)


class Simulator:

    def __init__(
        self,
        algorithm: Union[str, Algorithm] = Algorithm.SLIDING_WINDOW,
        settings: Optional[VisualizerSettings] = None,
    ):
        # held by the web layer for the whole of each command
        self.lock       = threading.Lock()
        self.settings   = settings or get_settings()
        self.speed      = self.settings.default_speed
        self.example_id: Optional[str] = None
        self.run: Run   = self._load_defaults(algorithm)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_algorithm(self, algorithm: Union[str, Algorithm]) -> Run:
        """Switch pattern; input and target go back to the pattern's defaults."""
        self.run = self._load_defaults(algorithm)
        return self.run

    def select_example(
        self,
        example_id: str,
        algorithm: Union[str, Algorithm, None] = None,
        target: Optional[int] = None,
    ) -> Run:
        """Load an example, optionally for another pattern and with a custom target.

        Nothing changes unless the example resolves and the run builds.
        """
        if algorithm is None:
            info = get_algorithm(self.run.algorithm)
            if target is None:
                target = self.run.target
        else:
            info = get_algorithm(algorithm)
        example = find_example(info.key, example_id)
        run = self._restart(info.key, example.data, target)
        self.run, self.example_id = run, example.id
        return self.run

    def set_input(self, data: Iterable[int]) -> Run:
        self.run = self._restart(self.run.algorithm, data, self.run.target)
        self.example_id = None
        return self.run

    def set_target(self, target: int) -> Run:
        self.run = self._restart(self.run.algorithm, self.run.input, target)
        return self.run

    def load(
        self,
        algorithm: Union[str, Algorithm],
        data: Optional[Iterable[int]] = None,
        target: Optional[int] = None,
    ) -> Run:
        """Start a run for algorithm; missing input / target fall back to defaults."""
        info = get_algorithm(algorithm)
        if data is None:
            return self._load_defaults(info.key, target)
        self.run = self._restart(info.key, data, target)
        self.example_id = None
        return self.run

    def set_speed(self, speed: float) -> None:
        self.run.playback.set_speed(speed)
        self.speed = self.run.playback.speed

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _load_defaults(self, algorithm: Union[str, Algorithm], target: Optional[int] = None) -> Run:
        info = get_algorithm(algorithm)
        if info.examples:
            data, example_id = info.examples[0].data, info.examples[0].id
        else:
            data, example_id = info.default_input, None
        self.run = self._restart(info.key, data, target)
        self.example_id = example_id
        return self.run

    def _restart(self, algorithm: Algorithm, data: Iterable[int], target: Optional[int]) -> Run:
        # build first so a rejected input leaves the current run untouched
        run = create_run(algorithm, data, target, settings=self.settings, speed=self.speed)
        logger.info("started %s run over %d elements", run.algorithm.value, len(run.input))
        return run
