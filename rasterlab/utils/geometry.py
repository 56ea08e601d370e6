"""Scalar rounding and fractional-part helpers shared by the rasterizers.

Provides:
    - round_half_away(): nearest integer, ties away from zero
    - round_half_up(): nearest integer, ties toward +inf (floor(x + 0.5))
    - ipart() / fpart() / rfpart(): floor-based integer/fractional split
    - clamp() / clamp_int(): bound a value to a closed range
    - lerp(): linear interpolation between two scalars

Used by:
    - Line rasterizers: stepwise and DDA round with round_half_away()
    - Curve rasterizer: lerp() for de Casteljau levels, round_half_away() at emission
    - Wu rasterizer: round_half_up(), ipart(), fpart(), rfpart()
    - Preview canvas: clamp_int() on gray levels

Python's built-in round() uses banker's rounding (ties to even), which would
shift pixels on exact .5 positions (e.g. round(2.5) == 2). None of the
rasterizers use it.

The fractional split is floor-based, so it stays continuous for negative
coordinates: fpart(-1.25) == 0.75 and ipart(-1.25) == -2.
"""

import math


def round_half_away(x: float) -> int:
    """Round to nearest integer, ties away from zero.

    Parameters
    ----------
    x : float
        Value to round

    Returns
    -------
    int
        Nearest integer; 2.5 → 3, -2.5 → -3

    Examples
    --------
    >>> round_half_away(0.5), round_half_away(-0.5), round_half_away(1.49)
    (1, -1, 1)
    """
    # x - trunc(x) is exact in binary floating point; floor(x + 0.5) is not
    t = math.trunc(x)
    if abs(x - t) >= 0.5:
        t += int(math.copysign(1.0, x))
    return int(t)


def round_half_up(x: float) -> int:
    """Round to nearest integer, ties toward positive infinity.

    Parameters
    ----------
    x : float
        Value to round

    Returns
    -------
    int
        floor(x + 0.5); 2.5 → 3, -2.5 → -2
    """
    return int(math.floor(x + 0.5))


def ipart(x: float) -> int:
    """Integer part of x (floor, not truncation)."""
    return int(math.floor(x))


def fpart(x: float) -> float:
    """Fractional part of x in [0, 1), floor-based."""
    return x - math.floor(x)


def rfpart(x: float) -> float:
    """Complement of the fractional part, 1 - fpart(x), in (0, 1]."""
    return 1.0 - fpart(x)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp value to [lo, hi].

    Raises
    ------
    ValueError
        If lo > hi
    """
    if lo > hi:
        raise ValueError(f"Empty clamp range: lo={lo} > hi={hi}")
    return max(lo, min(hi, value))


def clamp_int(value: float, lo: int, hi: int) -> int:
    """Round half away from zero, then clamp to [lo, hi]."""
    return int(clamp(round_half_away(value), lo, hi))


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation a + (b - a) * t."""
    return a + (b - a) * t
