"""Tests for de Casteljau cubic Bézier rasterization.

Validates sample count, endpoint interpolation, agreement with the Bernstein
form, and degenerate (coincident / collinear) control points.
"""

from __future__ import annotations

import pytest

from rasterlab.raster.curve import (
    CURVE_SAMPLES,
    de_casteljau_curve,
    de_casteljau_point,
)


def bernstein(p1, p2, p3, p4, t: float) -> tuple[float, float]:
    u = 1.0 - t
    b = (u ** 3, 3 * u * u * t, 3 * u * t * t, t ** 3)
    pts = (p1, p2, p3, p4)
    return (
        sum(w * p[0] for w, p in zip(b, pts)),
        sum(w * p[1] for w, p in zip(b, pts)),
    )


class TestEvaluation:
    def test_midpoint_of_symmetric_arch(self) -> None:
        assert de_casteljau_point((0, 0), (0, 10), (10, 10), (10, 0), 0.5) == (5.0, 7.5)

    @pytest.mark.parametrize("t", [0.0, 0.1, 0.333, 0.5, 0.8, 1.0])
    def test_matches_bernstein_form(self, t: float) -> None:
        ctrl = ((3, -4), (20, 15), (-8, 30), (40, 2))
        got = de_casteljau_point(*ctrl, t)
        want = bernstein(*ctrl, t)
        assert got[0] == pytest.approx(want[0], abs=1e-9)
        assert got[1] == pytest.approx(want[1], abs=1e-9)

    def test_endpoints_interpolated(self) -> None:
        ctrl = ((1, 2), (9, -9), (4, 4), (7, 8))
        assert de_casteljau_point(*ctrl, 0.0) == (1.0, 2.0)
        assert de_casteljau_point(*ctrl, 1.0) == (7.0, 8.0)


class TestRasterization:
    def test_sample_count(self) -> None:
        assert CURVE_SAMPLES == 201
        assert len(de_casteljau_curve(0, 0, 10, 40, 60, -20, 100, 0)) == 201

    def test_first_and_last_samples_are_end_points(self) -> None:
        samples = de_casteljau_curve(-5, 3, 10, 40, 60, -20, 100, 7)
        assert (samples[0].x, samples[0].y) == (-5, 3)
        assert (samples[-1].x, samples[-1].y) == (100, 7)

    def test_coincident_control_points(self) -> None:
        samples = de_casteljau_curve(10, 10, 10, 10, 10, 10, 10, 10)
        assert len(samples) == 201
        assert all((s.x, s.y) == (10, 10) for s in samples)

    def test_collinear_control_points_stay_on_line(self) -> None:
        samples = de_casteljau_curve(0, 0, 10, 0, 20, 0, 30, 0)
        xs = [s.x for s in samples]
        assert all(s.y == 0 for s in samples)
        assert xs == sorted(xs)
        assert xs[0] == 0 and xs[-1] == 30

    def test_density_is_not_uniform(self) -> None:
        # Inner control points bunched near the start: samples crowd there
        samples = de_casteljau_curve(0, 0, 0, 0, 0, 0, 90, 0)
        xs = [s.x for s in samples]
        first_half = sum(1 for x in xs if x < 45)
        assert first_half > len(xs) // 2

    def test_alpha_opaque(self) -> None:
        assert all(s.alpha == 1.0 for s in de_casteljau_curve(0, 0, 5, 5, 10, -5, 15, 0))

    def test_idempotent(self) -> None:
        args = (0, 0, 13, 27, 44, -9, 61, 5)
        assert de_casteljau_curve(*args) == de_casteljau_curve(*args)
