"""Bresenham midpoint circle with 8-way symmetry.

Only the octant from 12 o'clock clockwise to 45 degrees is walked; each
(x, y) found there is mirrored into the other seven octants.  Output is
emitted one batch of eight per step, so it is NOT ordered by angle.
Callers that need angular order must sort.

Decision variable: ``d = 3 - 2r`` initially.  Each step increments x; if
``d > 0`` the midpoint lies outside the circle, so y also decrements and
``d += 4(x - y) + 10``, otherwise ``d += 4x + 6``.
"""

from __future__ import annotations

from rasterlab.raster.types import PixelSample


def _octants(xc: int, yc: int, x: int, y: int) -> list[PixelSample]:
    """The eight reflections of (x, y) around (xc, yc), in emission order."""
    return [
        PixelSample(xc + x, yc + y), PixelSample(xc - x, yc + y),
        PixelSample(xc + x, yc - y), PixelSample(xc - x, yc - y),
        PixelSample(xc + y, yc + x), PixelSample(xc - y, yc + x),
        PixelSample(xc + y, yc - x), PixelSample(xc - y, yc - x),
    ]


def bresenham_circle(xc: int, yc: int, r: int) -> list[PixelSample]:
    """Rasterize a circle outline.

    Parameters
    ----------
    xc, yc : int
        Center.
    r : int
        Radius, >= 0.

    Returns
    -------
    list[PixelSample]
        Batches of eight mirrored samples; duplicates where reflections
        coincide (on the axes and diagonals) are kept.

    Raises
    ------
    ValueError
        If r is negative.

    Notes
    -----
    ``r == 0`` returns exactly one batch: eight copies of the center.  The
    general loop would take one more step and emit (±1, ±1) neighbours.

    The loop runs while ``y >= x`` and emits after updating, so the final
    batch may sit just past the 45 degree diagonal.
    """
    if r < 0:
        raise ValueError(f"Circle radius must be >= 0, got {r}")

    x = 0
    y = r
    d = 3 - 2 * r

    samples = _octants(xc, yc, x, y)
    if r == 0:
        return samples

    while y >= x:
        x += 1
        if d > 0:
            y -= 1
            d += 4 * (x - y) + 10
        else:
            d += 4 * x + 6
        samples.extend(_octants(xc, yc, x, y))
    return samples
