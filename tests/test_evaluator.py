"""Tests for the pure step evaluator."""

import pytest

from algorithms import Algorithm, Phase
from engine import evaluate, timeline, total_steps
from errors import InvalidInputError, OutOfRangeError, UnsupportedAlgorithmError


CASES = [
    ("sliding-window", [2, 1, 5, 1, 3, 2], None),
    ("sliding-window", [1, 2, 1, 3, 2, 2, 1, 2], None),
    ("two-pointers", [1, 2, 3, 4, 6], 6),
    ("two-pointers", [2, 3, 3, 3, 6, 9, 9], 12),
    ("binary-search", [1, 2, 3, 4, 5, 6, 7, 8, 9], 7),
    ("binary-search", [1, 2, 3, 4, 5, 6, 7, 8, 9], 10),
]


@pytest.mark.parametrize("algorithm, data, target", CASES)
def test_evaluate_is_deterministic(algorithm, data, target):
    total = total_steps(algorithm, len(data))
    for step in range(total + 1):
        assert evaluate(algorithm, data, target, step) == evaluate(algorithm, data, target, step)


@pytest.mark.parametrize("algorithm, data, target", CASES)
def test_direct_evaluation_matches_sequential_replay(algorithm, data, target):
    states = timeline(algorithm, data, target)
    assert len(states) == total_steps(algorithm, len(data)) + 1
    # walk backwards so no step is ever evaluated after its predecessor
    for step in reversed(range(len(states))):
        assert evaluate(algorithm, data, target, step) == states[step]


def test_last_step_repeats_final_state():
    total = total_steps("sliding-window", 6)
    final = evaluate("sliding-window", [2, 1, 5, 1, 3, 2], None, total - 1)
    end = evaluate("sliding-window", [2, 1, 5, 1, 3, 2], None, total)
    assert end.step_index == total
    assert end.phase is Phase.COMPLETE
    assert end.result == final.result == 9


def test_sliding_window_example():
    assert total_steps(Algorithm.SLIDING_WINDOW, 6) == 9
    state = evaluate("sliding-window", [2, 1, 5, 1, 3, 2], None, 9)
    assert state.max_sum == 9
    assert state.total_steps == 9


def test_two_pointers_example():
    total = total_steps("two-pointers", 5)
    state = evaluate("two-pointers", [1, 2, 3, 4, 6], 6, total)
    assert state.found
    assert state.result == (1, 3)
    assert (state.input[1], state.input[3]) == (2, 4)


def test_binary_search_examples():
    data = [1, 2, 3, 4, 5, 6, 7, 8, 9]
    total = total_steps("binary-search", len(data))
    found = evaluate("binary-search", data, 7, total)
    assert found.found and found.result == 6 and found.pointers["mid"] == 6
    missing = evaluate("binary-search", data, 10, total)
    assert not missing.found and missing.result == -1


def test_default_target_used_when_none():
    state = evaluate("binary-search", [1, 2, 3, 4, 5, 6, 7, 8, 9], None, 0)
    assert state.target == 5


@pytest.mark.parametrize("algorithm", [a.value for a in Algorithm])
def test_empty_input_rejected(algorithm):
    with pytest.raises(InvalidInputError):
        evaluate(algorithm, [], 1, 0)


@pytest.mark.parametrize("data", [[1], [1, 2]])
def test_sliding_window_needs_full_window(data):
    with pytest.raises(InvalidInputError):
        evaluate("sliding-window", data, None, 0)
    with pytest.raises(InvalidInputError):
        total_steps("sliding-window", len(data))


@pytest.mark.parametrize("data", [[1, "2", 3], [1.5, 2, 3], [True, 2, 3], "123", None])
def test_non_integer_input_rejected(data):
    with pytest.raises(InvalidInputError):
        evaluate("two-pointers", data, 3, 0)


def test_non_integer_target_rejected():
    with pytest.raises(InvalidInputError):
        evaluate("binary-search", [1, 2, 3], "2", 0)


@pytest.mark.parametrize("step", [-1, 10, 100])
def test_step_out_of_range(step):
    with pytest.raises(OutOfRangeError) as exc:
        evaluate("sliding-window", [2, 1, 5, 1, 3, 2], None, step)
    assert exc.value.total_steps == 9


def test_unknown_algorithm():
    with pytest.raises(UnsupportedAlgorithmError) as exc:
        evaluate("merge-intervals", [1, 2, 3], None, 0)
    assert exc.value.to_dict()["error"] == "UnsupportedAlgorithmError"
