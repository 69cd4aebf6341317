"""
Wave scheduler tests - chunking, bounded concurrency, failure isolation
"""

import threading
import time

import pytest

from site_activity.extract.waves import chunked, run_in_waves


def test_chunked_splits_in_order():
    assert chunked([1, 2, 3, 4, 5], 2) == [[1, 2], [3, 4], [5]]
    assert chunked([], 3) == []


def test_chunked_rejects_zero_size():
    with pytest.raises(ValueError):
        chunked([1], 0)


def test_run_in_waves_rejects_zero_concurrency():
    with pytest.raises(ValueError):
        run_in_waves([1], lambda item: item, 0)


def test_empty_items_never_calls_fn():
    calls = []
    assert run_in_waves([], calls.append, 2) == {}
    assert calls == []


def test_values_and_errors_are_collected_per_item():
    def work(item):
        if item == 3:
            raise RuntimeError("boom")
        return item * 10

    outcomes = run_in_waves([1, 2, 3, 4], work, 2)

    assert outcomes[1].value == 10
    assert outcomes[4].value == 40
    assert not outcomes[3].ok
    assert isinstance(outcomes[3].error, RuntimeError)


def test_waves_bound_in_flight_calls_and_settle_before_next():
    lock = threading.Lock()
    state = {"in_flight": 0, "peak": 0}
    waves_seen = []

    def work(item):
        with lock:
            state["in_flight"] += 1
            state["peak"] = max(state["peak"], state["in_flight"])
        time.sleep(0.02)
        with lock:
            state["in_flight"] -= 1
        return item

    def on_wave_complete(index, settled):
        # nothing from this wave may still be running
        assert state["in_flight"] == 0
        waves_seen.append((index, sorted(o.item for o in settled)))

    run_in_waves(range(7), work, 3, on_wave_complete=on_wave_complete)

    assert state["peak"] <= 3
    assert waves_seen == [(1, [0, 1, 2]), (2, [3, 4, 5]), (3, [6])]
