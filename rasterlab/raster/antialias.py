"""Xiaolin Wu's antialiased line.

For every step along the major axis the ideal line crosses two pixel rows;
both are emitted, weighted by how close the line passes to each:

    alpha(floor(intery))     = 1 - fpart(intery)
    alpha(floor(intery) + 1) = fpart(intery)

so each interior pair sums to 1.  The two endpoints are handled first and
additionally scaled by their horizontal gap weight.

Emission order: start pair, end pair, then the interior pairs from left to
right (in the canonical, possibly transposed, frame).

Steep lines (|dy| > |dx|) are walked with x and y swapped and transposed
back on emission.  Endpoints are swapped when needed so the walk always
runs toward increasing major-axis coordinate.

All splits use floor-based ipart/fpart, so negative coordinates split the
same way positive ones do.
"""

from __future__ import annotations

from rasterlab.raster.types import PixelSample
from rasterlab.utils.geometry import fpart, ipart, rfpart, round_half_up


def wu_line(x1: int, y1: int, x2: int, y2: int) -> list[PixelSample]:
    """Rasterize an antialiased segment as pixel pairs with coverage.

    Parameters
    ----------
    x1, y1, x2, y2 : int
        Endpoints.

    Returns
    -------
    list[PixelSample]
        Two samples per major-axis step; alphas in [0, 1].

    Notes
    -----
    ``gradient`` is forced to 1.0 when ``dx == 0`` in the canonical frame,
    which only happens for a single-point segment.  The result is then the
    start and end pairs on the same pixel.

    Endpoint coverage includes the gap weight of ``x + 0.5``, which is 0.5
    for integer input; a horizontal line thus starts and ends at half
    intensity while every interior pixel of its row gets 1.0.
    """
    steep = abs(y2 - y1) > abs(x2 - x1)
    if steep:
        x1, y1 = y1, x1
        x2, y2 = y2, x2
    if x1 > x2:
        x1, x2 = x2, x1
        y1, y2 = y2, y1

    dx = float(x2 - x1)
    dy = float(y2 - y1)
    gradient = 1.0 if dx == 0.0 else dy / dx

    samples: list[PixelSample] = []

    def plot(x: int, y: int, alpha: float) -> None:
        if steep:
            samples.append(PixelSample(y, x, alpha))
        else:
            samples.append(PixelSample(x, y, alpha))

    # start point
    x_end = round_half_up(x1)
    y_end = y1 + gradient * (x_end - x1)
    x_gap = rfpart(x1 + 0.5)
    x_pixel1 = x_end
    y_pixel1 = ipart(y_end)
    plot(x_pixel1, y_pixel1, rfpart(y_end) * x_gap)
    plot(x_pixel1, y_pixel1 + 1, fpart(y_end) * x_gap)
    intery = y_end + gradient

    # end point
    x_end = round_half_up(x2)
    y_end = y2 + gradient * (x_end - x2)
    x_gap = fpart(x2 + 0.5)
    x_pixel2 = x_end
    y_pixel2 = ipart(y_end)
    plot(x_pixel2, y_pixel2, rfpart(y_end) * x_gap)
    plot(x_pixel2, y_pixel2 + 1, fpart(y_end) * x_gap)

    for x in range(x_pixel1 + 1, x_pixel2):
        plot(x, ipart(intery), rfpart(intery))
        plot(x, ipart(intery) + 1, fpart(intery))
        intery += gradient

    return samples
