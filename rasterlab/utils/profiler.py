"""Lightweight wall-clock timing for the request boundary.

Provides:
    - timer(): Context manager for wall-clock timing with optional sink
    - TimerAccumulator: running mean over repeated measurements

Used to measure:
    - Rasterization time reported in draw responses (nanoseconds)
    - Per-algorithm averages in the benchmark mode of scripts/draw.py

The rasterizers themselves never time anything; elapsed time is assigned by
the caller around the dispatcher call.
"""

import time
from contextlib import contextmanager
from typing import Callable, List, Optional


class Stopwatch:
    """Elapsed-time holder yielded by timer()."""

    __slots__ = ("start_ns", "elapsed_ns")

    def __init__(self) -> None:
        self.start_ns = time.perf_counter_ns()
        self.elapsed_ns = 0

    @property
    def elapsed_s(self) -> float:
        return self.elapsed_ns / 1e9


@contextmanager
def timer(name: str, sink: Optional[Callable[[str, int], None]] = None):
    """Context manager for wall-clock timing in nanoseconds.

    Parameters
    ----------
    name : str
        Timer name (passed to the sink)
    sink : Optional[Callable[[str, int], None]]
        Optional callback(name, elapsed_ns), called on exit

    Yields
    ------
    Stopwatch
        Its ``elapsed_ns`` is filled in when the block exits

    Examples
    --------
    >>> with timer("dda") as sw:
    ...     samples = dda_line(0, 0, 10, 3)
    >>> sw.elapsed_ns > 0
    True
    """
    sw = Stopwatch()
    try:
        yield sw
    finally:
        sw.elapsed_ns = time.perf_counter_ns() - sw.start_ns
        if sink is not None:
            sink(name, sw.elapsed_ns)


class TimerAccumulator:
    """Accumulate multiple timing measurements for averaging.

    Examples
    --------
    >>> acc = TimerAccumulator("bresenham-line")
    >>> for _ in range(100):
    ...     with acc.measure():
    ...         bresenham_line(0, 0, 50, 20)
    >>> acc.mean_ns()
    """

    def __init__(self, name: str):
        self.name = name
        self.samples_ns: List[int] = []

    @contextmanager
    def measure(self):
        start = time.perf_counter_ns()
        try:
            yield
        finally:
            self.samples_ns.append(time.perf_counter_ns() - start)

    def mean_ns(self) -> float:
        if not self.samples_ns:
            return 0.0
        return sum(self.samples_ns) / len(self.samples_ns)

    def reset(self) -> None:
        self.samples_ns.clear()

    def __repr__(self) -> str:
        return f"TimerAccumulator({self.name!r}, n={len(self.samples_ns)}, mean={self.mean_ns():.0f} ns)"
