"""Tests for the timing helpers."""

from __future__ import annotations

import pytest

from rasterlab.utils.profiler import TimerAccumulator, timer


def test_timer_fills_elapsed() -> None:
    with timer("work") as sw:
        sum(range(1000))
    assert sw.elapsed_ns > 0
    assert sw.elapsed_s == pytest.approx(sw.elapsed_ns / 1e9)


def test_timer_sink_called_on_error() -> None:
    seen = []
    with pytest.raises(RuntimeError):
        with timer("boom", sink=lambda name, ns: seen.append((name, ns))):
            raise RuntimeError("x")
    assert len(seen) == 1
    assert seen[0][0] == "boom"


def test_accumulator() -> None:
    acc = TimerAccumulator("dda")
    assert acc.mean_ns() == 0.0
    for _ in range(3):
        with acc.measure():
            pass
    assert len(acc.samples_ns) == 3
    assert acc.mean_ns() >= 0
    assert "n=3" in repr(acc)
    acc.reset()
    assert acc.samples_ns == []
