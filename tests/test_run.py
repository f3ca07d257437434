"""Tests for Run, its trace log and the in-process API."""

import warnings

import pytest

from algorithms import Phase
from engine import TraceLog, create_run, evaluate, get_state, get_trace
from errors import (
    InvalidInputError,
    OutOfRangeError,
    PreconditionViolation,
    UnsupportedAlgorithmError,
)


class TestCreateRun:
    def test_total_steps_fixed_at_creation(self, window_run):
        assert window_run.total_steps == 9
        assert window_run.playback.total_steps == 9
        assert window_run.state.phase is Phase.INIT

    def test_default_target(self, settings):
        run = create_run("two-pointers", [1, 2, 3, 4, 6], settings=settings)
        assert run.target == 6

    @pytest.mark.parametrize("algorithm", ["sliding-window", "two-pointers", "binary-search"])
    def test_empty_input(self, algorithm, settings):
        with pytest.raises(InvalidInputError):
            create_run(algorithm, [], settings=settings)

    def test_short_window(self, settings):
        with pytest.raises(InvalidInputError):
            create_run("sliding-window", [1, 2], settings=settings)

    def test_unknown_algorithm(self, settings):
        with pytest.raises(UnsupportedAlgorithmError):
            create_run("cyclic-sort", [1, 2, 3], settings=settings)

    def test_unsorted_binary_search_warns_but_runs(self, settings):
        with pytest.warns(PreconditionViolation):
            run = create_run("binary-search", [4, 5, 6, 7, 0, 1, 2], target=0, settings=settings)
        assert get_state(run, run.total_steps).phase is Phase.COMPLETE

    def test_sorted_input_does_not_warn(self, settings):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            create_run("binary-search", [1, 2, 2, 3], target=2, settings=settings)

    def test_speed_carried_into_playback(self, settings):
        run = create_run("two-pointers", [1, 2, 3], target=4, settings=settings, speed=1.5)
        assert run.playback.speed == 1.5


class TestGetState:
    def test_matches_evaluator(self, pair_run):
        for step in range(pair_run.total_steps + 1):
            assert get_state(pair_run, step) == evaluate("two-pointers", [1, 2, 3, 4, 6], 6, step)

    @pytest.mark.parametrize("step", [-1, 6])
    def test_out_of_range(self, pair_run, step):
        with pytest.raises(OutOfRangeError):
            get_state(pair_run, step)

    def test_seek_end_then_start_matches_fresh_run(self, search_run, settings):
        search_run.playback.seek(search_run.total_steps)
        assert search_run.state.is_complete
        search_run.playback.seek(0)
        fresh = create_run("binary-search", [1, 2, 3, 4, 5, 6, 7, 8, 9], target=7, settings=settings)
        assert search_run.state == fresh.state
        assert search_run.state.phase is Phase.INIT

    def test_backward_step_recomputes_aggregates(self, window_run):
        for _ in range(6):
            window_run.playback.step_forward()
        assert window_run.state.window_sum == 9
        window_run.playback.step_backward()
        assert window_run.state.window_sum == 7
        assert window_run.state.max_sum == 8


class TestTrace:
    def test_one_entry_per_step_reached(self, window_run):
        assert [e.step_index for e in window_run.visible_trace()] == [0]
        window_run.playback.step_forward()
        window_run.playback.step_forward()
        assert [e.step_index for e in window_run.visible_trace()] == [0, 1, 2]

    def test_messages_come_from_states(self, pair_run):
        entries = get_trace(pair_run, 3)
        for entry in entries:
            state = get_state(pair_run, entry.step_index)
            assert entry.message == state.message
            assert entry.variables == state.variables

    def test_prefix_monotonicity(self, search_run):
        for n in range(search_run.total_steps):
            shorter = get_trace(search_run, n)
            longer = get_trace(search_run, n + 1)
            assert longer[: len(shorter)] == shorter
            assert len(longer) == len(shorter) + 1

    def test_repeated_seeks_do_not_grow_log(self, window_run):
        for _ in range(20):
            window_run.playback.seek(5)
            window_run.playback.seek(2)
        assert len(window_run.trace) == 6

    def test_seek_fills_earlier_steps_in_order(self, window_run):
        window_run.playback.seek(4)
        entries = list(window_run.trace)
        assert [e.step_index for e in entries] == [0, 1, 2, 3, 4]
        stamps = [e.timestamp for e in entries]
        assert stamps == sorted(stamps)

    def test_visible_entries_filtered_by_current_step(self, window_run):
        window_run.playback.seek(6)
        window_run.playback.seek(2)
        assert [e.step_index for e in window_run.visible_trace()] == [0, 1, 2]
        assert len(window_run.trace) == 7

    def test_reset_clears_trace(self, window_run):
        window_run.playback.seek(5)
        window_run.playback.reset()
        assert [e.step_index for e in window_run.trace] == [0]

    def test_trace_upto_clamps(self, window_run):
        assert len(get_trace(window_run, 100)) == 10
        assert get_trace(window_run, -1) == []


class TestTraceLog:
    def test_record_is_idempotent(self, pair_run):
        log = TraceLog()
        state = get_state(pair_run, 2)
        first = log.record(state)
        second = log.record(state)
        assert first is second
        assert len(log) == 1

    def test_latest(self, pair_run):
        log = TraceLog()
        for step in (0, 1, 2):
            log.record(get_state(pair_run, step))
        assert log.latest(1).step_index == 1
        assert log.latest(10).step_index == 2

    def test_entry_to_dict(self, pair_run):
        entry = TraceLog().record(get_state(pair_run, 1))
        data = entry.to_dict()
        assert data["step_index"] == 1
        assert data["variables"]["current_sum"] == 7
        assert "T" in data["timestamp"]


def test_summary_and_to_dict(pair_run):
    assert pair_run.summary()["is_complete"] is False
    pair_run.playback.seek(pair_run.total_steps)
    summary = pair_run.summary()
    assert summary["is_complete"] is True
    assert summary["result"] == [1, 3]
    assert summary["complexity_time"] == "O(n)"

    data = pair_run.to_dict()
    assert data["algorithm"] == "two-pointers"
    assert data["state"]["result"] == [1, 3]
    assert data["state"]["phase"] == "complete"
    assert len(data["trace"]) == pair_run.total_steps + 1
