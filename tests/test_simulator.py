"""Tests for the active-run holder."""

import pytest

from algorithms import Algorithm
from engine import Simulator
from errors import InvalidInputError, InvalidSpeedError


@pytest.fixture
def sim(settings):
    return Simulator(settings=settings)


def test_starts_with_first_example(sim):
    assert sim.run.algorithm is Algorithm.SLIDING_WINDOW
    assert list(sim.run.input) == [2, 1, 5, 1, 3, 2]
    assert sim.example_id == "max-sum-subarray"


def test_select_algorithm_uses_pattern_defaults(sim):
    run = sim.select_algorithm("binary-search")
    assert run.algorithm is Algorithm.BINARY_SEARCH
    assert run.target == 5
    assert run.playback.step_index == 0


def test_changing_input_starts_fresh_run(sim):
    old = sim.run
    old.playback.seek(4)
    new = sim.set_input([3, 3, 3, 3])
    assert new is not old
    assert new.playback.step_index == 0
    assert len(new.trace) == 1
    assert new.total_steps == 7
    assert sim.example_id is None


def test_rejected_input_keeps_current_run(sim):
    old = sim.run
    with pytest.raises(InvalidInputError):
        sim.set_input([1])
    assert sim.run is old


def test_set_target_restarts(sim):
    sim.select_algorithm("two-pointers")
    sim.run.playback.seek(2)
    run = sim.set_target(7)
    assert run.target == 7
    assert run.playback.step_index == 0


def test_select_example(sim):
    sim.select_algorithm("two-pointers")
    run = sim.select_example("remove-duplicates")
    assert list(run.input) == [2, 3, 3, 3, 6, 9, 9]
    assert sim.example_id == "remove-duplicates"


def test_speed_survives_restart(sim):
    sim.set_speed(2)
    sim.select_algorithm("two-pointers")
    assert sim.run.playback.speed == 2.0
    with pytest.raises(InvalidSpeedError):
        sim.set_speed(4)
    assert sim.speed == 2.0


def test_load_with_custom_input(sim):
    run = sim.load("binary-search", [10, 20, 30], 30)
    assert run.target == 30
    assert run.state_at(run.total_steps).result == 2


def test_unknown_example_keeps_current_run(sim):
    sim.select_algorithm("two-pointers")
    old = sim.run
    old.playback.seek(3)
    with pytest.raises(InvalidInputError):
        sim.select_example("nope", algorithm="binary-search")
    assert sim.run is old
    assert sim.run.playback.step_index == 3
    assert sim.example_id == "pair-with-target-sum"


def test_example_for_another_pattern(sim):
    run = sim.select_example("remove-duplicates", algorithm="two-pointers", target=9)
    assert run.algorithm is Algorithm.TWO_POINTERS
    assert run.target == 9
    assert sim.example_id == "remove-duplicates"


def test_example_with_bad_target_keeps_current_run(sim):
    old = sim.run
    with pytest.raises(InvalidInputError):
        sim.select_example("remove-duplicates", algorithm="two-pointers", target="nine")
    assert sim.run is old
    assert sim.example_id == "max-sum-subarray"
