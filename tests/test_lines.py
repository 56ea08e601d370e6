"""Tests for the opaque line rasterizers (stepwise, DDA, Bresenham).

Validates exact outputs on hand-checked segments, sample counts, endpoint
placement, degenerate segments, direction handling and idempotence.
"""

from __future__ import annotations

import pytest

from rasterlab.raster.lines import bresenham_line, dda_line, stepwise_line
from rasterlab.raster.types import PixelSample


def xy(samples: list[PixelSample]) -> list[tuple[int, int]]:
    return [(s.x, s.y) for s in samples]


SEGMENTS = [
    (0, 0, 3, 0),
    (0, 0, 7, 3),
    (0, 0, 3, 7),
    (5, 5, -4, 1),
    (-3, 8, 2, -6),
    (2, -3, 2, 6),
    (-5, -5, 5, 5),
    (10, 0, -10, 1),
]

LINE_FUNCS = [stepwise_line, dda_line, bresenham_line]


# ---------------------------------------------------------------------------
# Stepwise
# ---------------------------------------------------------------------------


class TestStepwise:
    def test_vertical_ascends_regardless_of_direction(self) -> None:
        expected = [(2, 1), (2, 2), (2, 3), (2, 4), (2, 5)]
        assert xy(stepwise_line(2, 5, 2, 1)) == expected
        assert xy(stepwise_line(2, 1, 2, 5)) == expected

    def test_single_point(self) -> None:
        assert xy(stepwise_line(3, 3, 3, 3)) == [(3, 3)]

    def test_horizontal(self) -> None:
        assert xy(stepwise_line(0, 0, 3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]

    def test_shallow_rounds_half_away(self) -> None:
        assert xy(stepwise_line(0, 0, 4, 2)) == [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2)]

    def test_shallow_reversed_walks_backwards(self) -> None:
        assert xy(stepwise_line(4, 2, 0, 0)) == [(4, 2), (3, 2), (2, 1), (1, 1), (0, 0)]

    def test_negative_half_ties(self) -> None:
        assert xy(stepwise_line(0, 0, -4, -2)) == [
            (0, 0), (-1, -1), (-2, -1), (-3, -2), (-4, -2),
        ]

    def test_steep_uses_inverse_equation(self) -> None:
        assert xy(stepwise_line(0, 0, 2, 4)) == [(0, 0), (1, 1), (1, 2), (2, 3), (2, 4)]

    def test_steep_steps_one_row_at_a_time(self) -> None:
        samples = stepwise_line(1, -6, 3, 6)
        assert [s.y for s in samples] == list(range(-6, 7))

    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_length(self, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        dx, dy = abs(x2 - x1), abs(y2 - y1)
        assert len(stepwise_line(*seg)) == max(dx, dy) + 1


# ---------------------------------------------------------------------------
# DDA
# ---------------------------------------------------------------------------


class TestDDA:
    def test_zero_length_single_point(self) -> None:
        assert xy(dda_line(4, -2, 4, -2)) == [(4, -2)]

    def test_horizontal(self) -> None:
        assert xy(dda_line(0, 0, 5, 0)) == [(x, 0) for x in range(6)]

    def test_half_increments(self) -> None:
        assert xy(dda_line(0, 0, 4, 2)) == [(0, 0), (1, 1), (2, 1), (3, 2), (4, 2)]

    def test_diagonal_negative(self) -> None:
        assert xy(dda_line(0, 0, -3, -3)) == [(0, 0), (-1, -1), (-2, -2), (-3, -3)]

    def test_vertical_keeps_direction(self) -> None:
        assert xy(dda_line(1, 3, 1, 0)) == [(1, 3), (1, 2), (1, 1), (1, 0)]

    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_sample_count_is_steps_plus_one(self, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        assert len(dda_line(*seg)) == max(abs(x2 - x1), abs(y2 - y1)) + 1

    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_unit_steps(self, seg: tuple[int, int, int, int]) -> None:
        pts = xy(dda_line(*seg))
        for (ax, ay), (bx, by) in zip(pts, pts[1:]):
            assert abs(bx - ax) <= 1 and abs(by - ay) <= 1


# ---------------------------------------------------------------------------
# Bresenham
# ---------------------------------------------------------------------------


class TestBresenham:
    def test_horizontal_exact(self) -> None:
        assert xy(bresenham_line(0, 0, 3, 0)) == [(0, 0), (1, 0), (2, 0), (3, 0)]

    def test_single_point_terminates(self) -> None:
        assert xy(bresenham_line(0, 0, 0, 0)) == [(0, 0)]

    def test_shallow_exact(self) -> None:
        assert xy(bresenham_line(0, 0, 7, 3)) == [
            (0, 0), (1, 0), (2, 1), (3, 1), (4, 2), (5, 2), (6, 3), (7, 3),
        ]

    def test_steep_is_transpose_of_shallow(self) -> None:
        shallow = xy(bresenham_line(0, 0, 7, 3))
        steep = xy(bresenham_line(0, 0, 3, 7))
        assert steep == [(y, x) for x, y in shallow]

    def test_diagonal_moves_both_axes(self) -> None:
        assert xy(bresenham_line(0, 0, 3, 3)) == [(0, 0), (1, 1), (2, 2), (3, 3)]

    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_endpoints_exact(self, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        pts = xy(bresenham_line(*seg))
        assert pts[0] == (x1, y1)
        assert pts[-1] == (x2, y2)

    @pytest.mark.parametrize(
        "seg",
        [(0, 0, 7, 3), (0, 0, 3, 7), (0, 0, 5, 5), (-4, 0, 4, 0), (2, -3, 2, 6), (1, 1, -6, -2)],
    )
    def test_reversal_gives_same_pixel_set(self, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        forward = xy(bresenham_line(x1, y1, x2, y2))
        backward = xy(bresenham_line(x2, y2, x1, y1))
        assert set(forward) == set(backward)
        assert len(forward) == len(backward)

    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_eight_connected(self, seg: tuple[int, int, int, int]) -> None:
        pts = xy(bresenham_line(*seg))
        for (ax, ay), (bx, by) in zip(pts, pts[1:]):
            assert max(abs(bx - ax), abs(by - ay)) == 1


# ---------------------------------------------------------------------------
# Shared contract
# ---------------------------------------------------------------------------


class TestLineContract:
    @pytest.mark.parametrize("func", LINE_FUNCS)
    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_endpoints_within_one_pixel(self, func, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        pts = xy(func(*seg))
        first = min(pts, key=lambda p: abs(p[0] - x1) + abs(p[1] - y1))
        last = min(pts, key=lambda p: abs(p[0] - x2) + abs(p[1] - y2))
        assert abs(first[0] - x1) <= 1 and abs(first[1] - y1) <= 1
        assert abs(last[0] - x2) <= 1 and abs(last[1] - y2) <= 1

    @pytest.mark.parametrize("func", [dda_line, bresenham_line])
    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_walk_starts_and_ends_at_endpoints(self, func, seg: tuple[int, int, int, int]) -> None:
        x1, y1, x2, y2 = seg
        pts = xy(func(*seg))
        assert abs(pts[0][0] - x1) <= 1 and abs(pts[0][1] - y1) <= 1
        assert abs(pts[-1][0] - x2) <= 1 and abs(pts[-1][1] - y2) <= 1

    @pytest.mark.parametrize("func", LINE_FUNCS)
    def test_alpha_always_opaque(self, func) -> None:
        assert all(s.alpha == 1.0 for s in func(-3, 8, 2, -6))

    @pytest.mark.parametrize("func", LINE_FUNCS)
    @pytest.mark.parametrize("seg", SEGMENTS)
    def test_idempotent(self, func, seg: tuple[int, int, int, int]) -> None:
        assert func(*seg) == func(*seg)
