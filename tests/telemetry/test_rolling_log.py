from __future__ import annotations

import pytest

from bitmeter.telemetry.rolling_log import DEFAULT_HISTORY_CAPACITY, RollingSampleLog

from tests.helpers import push_all


def test_fill_then_wrap_scenario() -> None:
    log = push_all(RollingSampleLog(4), [0.0, 1.0, 2.0, 3.0])

    assert log.sample_at(0) == 3.0
    assert log.sample_at(3) == 0.0
    assert log.snapshot() == [0.0, 1.0, 2.0, 3.0]
    assert log.delta(3) == 3.0

    log.push(4.0)

    assert log.sample_at(0) == 4.0
    assert log.sample_at(3) == 1.0
    assert log.snapshot() == [1.0, 2.0, 3.0, 4.0]


@pytest.mark.parametrize("pushes", [5, 8, 13, 40])
def test_lookups_survive_repeated_wraparound(pushes: int) -> None:
    capacity = 5
    values = [float(index * index) for index in range(pushes)]
    log = push_all(RollingSampleLog(capacity), values)

    assert log.sample_at(0) == values[-1]
    assert log.sample_at(capacity - 1) == values[-capacity]
    for lookback in range(capacity):
        assert log.sample_at(lookback) == values[-1 - lookback]
    assert log.cursor == pushes % capacity


def test_snapshot_has_fixed_length_and_ends_with_latest() -> None:
    log = RollingSampleLog(6)
    assert log.snapshot() == [0.0] * 6

    for value in (2.0, 4.0, 8.0):
        log.push(value)
        snapshot = log.snapshot()
        assert len(snapshot) == 6
        assert snapshot[-1] == log.sample_at(0)

    assert log.snapshot() == [0.0, 0.0, 0.0, 2.0, 4.0, 8.0]


def test_delta_spans_latest_lookback_plus_one_samples() -> None:
    samples = [3.0, 5.0, 11.0, 12.0, 20.0]
    log = push_all(RollingSampleLog(8), samples)

    for k in range(len(samples)):
        assert log.delta(k) == samples[-1] - samples[-1 - k]
    assert log.delta(len(samples) - 1) == samples[-1] - samples[0]


def test_warm_up_state_is_tracked() -> None:
    log = RollingSampleLog(3)
    assert log.filled == 0
    assert log.available_lookback == -1
    assert not log.is_warm

    log.push(1.0)
    log.push(2.0)
    assert log.filled == 2
    assert log.available_lookback == 1
    assert not log.is_warm
    # Unwritten slots read as zero placeholders.
    assert log.sample_at(2) == 0.0

    log.push(3.0)
    log.push(4.0)
    assert log.filled == 3
    assert log.is_warm
    assert log.available_lookback == 2


def test_clear_resets_history() -> None:
    log = push_all(RollingSampleLog(3), [1.0, 2.0, 3.0, 4.0])

    log.clear()

    assert log.snapshot() == [0.0, 0.0, 0.0]
    assert log.cursor == 0
    assert log.filled == 0


@pytest.mark.parametrize("lookback", [-1, 4, 10])
def test_out_of_range_lookback_is_a_contract_violation(lookback: int) -> None:
    log = push_all(RollingSampleLog(4), [1.0, 2.0])

    with pytest.raises(AssertionError):
        log.sample_at(lookback)
    with pytest.raises(AssertionError):
        log.delta(lookback)


@pytest.mark.parametrize("capacity", [0, -3])
def test_capacity_must_be_positive(capacity: int) -> None:
    with pytest.raises(ValueError):
        RollingSampleLog(capacity)


def test_default_capacity_and_container_protocol() -> None:
    log = RollingSampleLog()
    assert log.capacity == DEFAULT_HISTORY_CAPACITY == 600
    assert len(log) == 600

    small = push_all(RollingSampleLog(2), [7.0, 9.0, 11.0])
    assert list(small) == [9.0, 11.0]
    assert "capacity=2" in repr(small)
