"""Cubic Bézier rasterization by de Casteljau evaluation.

Each sample reduces the four control points to one by three levels of
linear interpolation at parameter t:

    Q0 = lerp(P1, P2, t)   Q1 = lerp(P2, P3, t)   Q2 = lerp(P3, P4, t)
    R0 = lerp(Q0, Q1, t)   R1 = lerp(Q1, Q2, t)
    B  = lerp(R0, R1, t)

t walks [0, 1] with a fixed step of 0.005, i.e. 201 samples.  There is no
arc-length reparametrization, so pixel density varies along the curve and
consecutive samples may repeat a pixel or leave a gap on long curves.

t is computed as ``i * step`` rather than accumulated, so the last sample
lands on t == 1.0 exactly and the sample count never depends on float drift.
"""

from __future__ import annotations

from rasterlab.raster.types import PixelSample
from rasterlab.utils.geometry import lerp, round_half_away

CURVE_STEP = 0.005
CURVE_SAMPLES = 201


def de_casteljau_point(
    p1: tuple[float, float],
    p2: tuple[float, float],
    p3: tuple[float, float],
    p4: tuple[float, float],
    t: float,
) -> tuple[float, float]:
    """Evaluate the cubic Bézier at t by repeated linear interpolation."""
    q0 = (lerp(p1[0], p2[0], t), lerp(p1[1], p2[1], t))
    q1 = (lerp(p2[0], p3[0], t), lerp(p2[1], p3[1], t))
    q2 = (lerp(p3[0], p4[0], t), lerp(p3[1], p4[1], t))

    r0 = (lerp(q0[0], q1[0], t), lerp(q0[1], q1[1], t))
    r1 = (lerp(q1[0], q2[0], t), lerp(q1[1], q2[1], t))

    return (lerp(r0[0], r1[0], t), lerp(r0[1], r1[1], t))


def de_casteljau_curve(
    x1: int, y1: int,
    x2: int, y2: int,
    x3: int, y3: int,
    x4: int, y4: int,
) -> list[PixelSample]:
    """Rasterize a cubic Bézier at 201 evenly spaced parameter values.

    Parameters
    ----------
    x1, y1 : int
        Start point (t = 0).
    x2, y2, x3, y3 : int
        Inner control points.
    x4, y4 : int
        End point (t = 1).

    Returns
    -------
    list[PixelSample]
        Exactly 201 samples; the first is (x1, y1), the last (x4, y4).
        Coincident control points give 201 copies of the same pixel.
    """
    p1, p2, p3, p4 = (x1, y1), (x2, y2), (x3, y3), (x4, y4)

    samples = []
    for i in range(CURVE_SAMPLES):
        bx, by = de_casteljau_point(p1, p2, p3, p4, i * CURVE_STEP)
        samples.append(PixelSample(round_half_away(bx), round_half_away(by)))
    return samples
