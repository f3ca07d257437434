"""Shared test fixtures."""

import pytest

from config import VisualizerSettings
from engine import create_run


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 100.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> VisualizerSettings:
    return VisualizerSettings(base_interval=1.0, default_speed=1.0, secret_key="test")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def window_run(settings):
    return create_run("sliding-window", [2, 1, 5, 1, 3, 2], settings=settings)


@pytest.fixture
def pair_run(settings):
    return create_run("two-pointers", [1, 2, 3, 4, 6], target=6, settings=settings)


@pytest.fixture
def search_run(settings):
    return create_run("binary-search", [1, 2, 3, 4, 5, 6, 7, 8, 9], target=7, settings=settings)
