"""Tests for algorithm name resolution and field routing."""

from __future__ import annotations

import pytest

from rasterlab.raster import dispatcher
from rasterlab.raster.circle import bresenham_circle
from rasterlab.raster.curve import de_casteljau_curve
from rasterlab.raster.lines import bresenham_line, dda_line, stepwise_line
from rasterlab.raster.antialias import wu_line
from rasterlab.raster.types import (
    CircleRequest,
    InvalidAlgorithm,
    LineRequest,
    RasterError,
    RasterResult,
    UnsupportedAlgorithm,
)

LINE = {"x1": -3, "y1": 2, "x2": 8, "y2": -5}
CURVE = {"x1": 0, "y1": 0, "x2": 10, "y2": 40, "x3": 60, "y3": -20, "x4": 100, "y4": 0}


class TestRegistry:
    def test_canonical_names_in_order(self) -> None:
        assert dispatcher.available_algorithms() == [
            "stepwise",
            "dda",
            "bresenham-line",
            "bresenham-circle",
            "bezier-cubic",
            "wu-antialiased",
        ]

    @pytest.mark.parametrize(
        "alias, canonical",
        [
            ("step", "stepwise"),
            ("bresenham_line", "bresenham-line"),
            ("bresenham_circle", "bresenham-circle"),
            ("casteljau", "bezier-cubic"),
            ("wu", "wu-antialiased"),
            ("dda", "dda"),
        ],
    )
    def test_aliases_resolve(self, alias: str, canonical: str) -> None:
        assert dispatcher.get_algorithm(alias).name == canonical

    def test_surrounding_whitespace_ignored(self) -> None:
        assert dispatcher.get_algorithm("  dda \n").name == "dda"

    def test_only_wu_is_antialiased(self) -> None:
        flagged = [n for n in dispatcher.available_algorithms() if dispatcher.get_algorithm(n).antialiased]
        assert flagged == ["wu-antialiased"]


class TestUnknownAlgorithm:
    @pytest.mark.parametrize("name", ["", "bogus", "Bresenham-Line", "wu-antialiased2"])
    def test_raises(self, name: str) -> None:
        with pytest.raises(UnsupportedAlgorithm) as excinfo:
            dispatcher.rasterize(name, LINE)
        assert excinfo.value.name == name
        assert "bresenham-line" in excinfo.value.known

    def test_error_hierarchy(self) -> None:
        assert InvalidAlgorithm is UnsupportedAlgorithm
        assert issubclass(UnsupportedAlgorithm, RasterError)
        assert issubclass(UnsupportedAlgorithm, ValueError)

    def test_message_lists_choices(self) -> None:
        with pytest.raises(UnsupportedAlgorithm, match="expected one of: stepwise, dda"):
            dispatcher.get_algorithm("nope")

    def test_non_string_name(self) -> None:
        with pytest.raises(UnsupportedAlgorithm):
            dispatcher.get_algorithm(None)  # type: ignore[arg-type]


class TestRouting:
    @pytest.mark.parametrize(
        "name, func",
        [
            ("stepwise", stepwise_line),
            ("dda", dda_line),
            ("bresenham-line", bresenham_line),
            ("wu-antialiased", wu_line),
        ],
    )
    def test_line_kinds_pass_output_through(self, name: str, func) -> None:
        assert dispatcher.rasterize(name, LINE) == func(-3, 2, 8, -5)

    def test_circle_uses_first_point_and_radius(self) -> None:
        fields = {"x1": 4, "y1": -1, "x2": 99, "y2": 99, "r": 6}
        assert dispatcher.rasterize("bresenham-circle", fields) == bresenham_circle(4, -1, 6)

    def test_curve_uses_all_four_points(self) -> None:
        assert dispatcher.rasterize("bezier-cubic", CURVE) == de_casteljau_curve(
            0, 0, 10, 40, 60, -20, 100, 0,
        )

    def test_missing_fields_default_to_zero(self) -> None:
        assert dispatcher.rasterize("dda", {"x2": 3}) == dda_line(0, 0, 3, 0)
        assert len(dispatcher.rasterize("bresenham-circle", {})) == 8

    def test_extra_fields_ignored(self) -> None:
        fields = dict(LINE, r=12, x3=7, y4=-1)
        assert dispatcher.rasterize("bresenham-line", fields) == bresenham_line(-3, 2, 8, -5)

    def test_build_request_types(self) -> None:
        assert isinstance(dispatcher.get_algorithm("dda").build_request(LINE), LineRequest)
        req = dispatcher.get_algorithm("bresenham-circle").build_request({"x1": 1, "y1": 2, "r": 3})
        assert req == CircleRequest(1, 2, 3)

    def test_negative_radius_rejected(self) -> None:
        with pytest.raises(ValueError):
            dispatcher.rasterize("bresenham-circle", {"r": -2})

    def test_float_coordinate_rejected(self) -> None:
        with pytest.raises(ValueError):
            dispatcher.rasterize("dda", {"x1": 0.5, "x2": 4})


class TestRun:
    def test_result_matches_rasterize(self) -> None:
        result = dispatcher.run("wu", LINE)
        assert isinstance(result, RasterResult)
        assert result.algorithm == "wu-antialiased"
        assert list(result.samples) == dispatcher.rasterize("wu", LINE)
        assert result.elapsed_ns >= 0

    def test_response_shape(self) -> None:
        body = dispatcher.run("bresenham-line", {"x1": 0, "y1": 0, "x2": 3, "y2": 0}).to_response()
        assert set(body) == {"points", "elapsed"}
        assert body["points"] == [
            {"x": 0, "y": 0, "alpha": 1.0},
            {"x": 1, "y": 0, "alpha": 1.0},
            {"x": 2, "y": 0, "alpha": 1.0},
            {"x": 3, "y": 0, "alpha": 1.0},
        ]
        assert isinstance(body["elapsed"], int)

    def test_len(self) -> None:
        assert len(dispatcher.run("casteljau", CURVE)) == 201
