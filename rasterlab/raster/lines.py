"""Opaque line rasterizers: stepwise, DDA, Bresenham.

All three share one contract: two integer endpoints in, an ordered list of
pixels out, every sample with alpha 1.0.  They differ in how they decide
which pixel is closest to the ideal segment:

    stepwise_line()   explicit equation y = k*x + b (or x = (y - b)/k when steep)
    dda_line()        real-valued increments along the dominant axis
    bresenham_line()  integer-only error term, no division at all

Direction is never canonicalized: the walk starts at (x1, y1) and ends at
(x2, y2), except for the vertical special case of stepwise_line(), which
always ascends in y.

Rounding is half away from zero (geometry.round_half_away), not Python's
round(), so 0.5 positions land on the same pixel regardless of direction.
"""

from __future__ import annotations

from rasterlab.raster.types import PixelSample
from rasterlab.utils.geometry import round_half_away


def _step(a: int, b: int) -> int:
    """Unit step from a toward b (1 when equal)."""
    return -1 if b < a else 1


# ---------------------------------------------------------------------------
# Stepwise (slope-intercept)
# ---------------------------------------------------------------------------


def stepwise_line(x1: int, y1: int, x2: int, y2: int) -> list[PixelSample]:
    """Rasterize a segment from its slope-intercept equation.

    Parameters
    ----------
    x1, y1, x2, y2 : int
        Endpoints.

    Returns
    -------
    list[PixelSample]
        ``|dx| + 1`` samples for shallow lines, ``|dy| + 1`` for steep ones.

    Notes
    -----
    Vertical lines (``dx == 0``) have no slope; every y between the
    endpoints is emitted in ascending order at x1.  This also covers the
    single-point case.

    In the steep branch ``|dx| < |dy|`` with ``dx != 0`` implies
    ``dy != 0``, so ``k`` is never zero there and ``(y - b) / k`` is safe.
    """
    dx = x2 - x1
    dy = y2 - y1

    if dx == 0:
        lo, hi = min(y1, y2), max(y1, y2)
        return [PixelSample(x1, y) for y in range(lo, hi + 1)]

    k = dy / dx
    b = y1 - k * x1

    if abs(dx) >= abs(dy):
        step = _step(x1, x2)
        return [
            PixelSample(x, round_half_away(k * x + b))
            for x in range(x1, x2 + step, step)
        ]

    step = _step(y1, y2)
    return [
        PixelSample(round_half_away((y - b) / k), y)
        for y in range(y1, y2 + step, step)
    ]


# ---------------------------------------------------------------------------
# DDA (digital differential analyzer)
# ---------------------------------------------------------------------------


def dda_line(x1: int, y1: int, x2: int, y2: int) -> list[PixelSample]:
    """Rasterize a segment by incremental real-valued stepping.

    ``steps = max(|dx|, |dy|)``; the position starts at (x1, y1) and is
    advanced by ``(dx/steps, dy/steps)`` after each emission, giving
    ``steps + 1`` samples.  Each sample is rounded at emission time; the
    running position itself stays real-valued, so accumulated error may
    place a pixel differently from Bresenham on long lines.

    A zero-length segment yields the single pixel (x1, y1).
    """
    dx = x2 - x1
    dy = y2 - y1
    steps = max(abs(dx), abs(dy))

    if steps == 0:
        return [PixelSample(x1, y1)]

    x_inc = dx / steps
    y_inc = dy / steps

    x = float(x1)
    y = float(y1)
    samples = []
    for _ in range(steps + 1):
        samples.append(PixelSample(round_half_away(x), round_half_away(y)))
        x += x_inc
        y += y_inc
    return samples


# ---------------------------------------------------------------------------
# Bresenham
# ---------------------------------------------------------------------------


def bresenham_line(x1: int, y1: int, x2: int, y2: int) -> list[PixelSample]:
    """Rasterize a segment with the symmetric integer error-term algorithm.

    Parameters
    ----------
    x1, y1, x2, y2 : int
        Endpoints.

    Returns
    -------
    list[PixelSample]
        Starts exactly at (x1, y1), ends exactly at (x2, y2).

    Notes
    -----
    ``err = dx - dy`` tracks the signed distance to the ideal line.  Per
    step, ``e2 = 2*err``; x advances when ``e2 > -dy`` and y advances when
    ``e2 < dx``.  Both may fire in the same step, which is a diagonal move.

    Reversing the endpoints yields the same pixel set, except where the
    ideal line passes exactly halfway between two pixels: ties break
    toward the direction of travel.
    """
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = -1 if x1 > x2 else 1
    sy = -1 if y1 > y2 else 1
    err = dx - dy

    x, y = x1, y1
    samples = []
    while True:
        samples.append(PixelSample(x, y))
        if x == x2 and y == y2:
            break
        e2 = 2 * err
        if e2 > -dy:
            err -= dy
            x += sx
        if e2 < dx:
            err += dx
            y += sy
    return samples
