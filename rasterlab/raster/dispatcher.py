"""Algorithm registry and dispatch.

Maps an algorithm name to its rasterizer and routes the generic request
fields (x1..y4, r) to the subset that rasterizer needs:

    line kinds     (x1, y1) - (x2, y2)
    circle         center (x1, y1), radius r
    curve          control points (x1, y1) .. (x4, y4)

Missing fields default to 0.  Fields the algorithm does not use are ignored.
The sample list produced by the rasterizer is returned unmodified.

Canonical names and their accepted aliases:

    stepwise          step
    dda
    bresenham-line    bresenham_line
    bresenham-circle  bresenham_circle
    bezier-cubic      casteljau
    wu-antialiased    wu

Usage::

    from rasterlab.raster import dispatcher
    samples = dispatcher.rasterize("dda", {"x1": 0, "y1": 0, "x2": 9, "y2": 4})
    result = dispatcher.run("wu", {"x1": 0, "y1": 0, "x2": 9, "y2": 4})
    result.elapsed_ns
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Literal, Mapping, Union

from rasterlab.raster.antialias import wu_line
from rasterlab.raster.circle import bresenham_circle
from rasterlab.raster.curve import de_casteljau_curve
from rasterlab.raster.lines import bresenham_line, dda_line, stepwise_line
from rasterlab.raster.types import (
    CircleRequest,
    CurveRequest,
    LineRequest,
    PixelSample,
    RasterResult,
    UnsupportedAlgorithm,
)
from rasterlab.utils.profiler import timer

logger = logging.getLogger(__name__)

Request = Union[LineRequest, CircleRequest, CurveRequest]
Kind = Literal["line", "circle", "curve"]


@dataclass(frozen=True, slots=True)
class Algorithm:
    """Registry entry: one rasterizer and how to feed it."""

    name: str
    kind: Kind
    func: Callable[..., list[PixelSample]]
    antialiased: bool = False
    aliases: tuple[str, ...] = ()
    description: str = ""

    def build_request(self, fields: Mapping[str, int]) -> Request:
        f = {key: fields.get(key, 0) for key in ("x1", "y1", "x2", "y2", "x3", "y3", "x4", "y4", "r")}
        if self.kind == "line":
            return LineRequest(f["x1"], f["y1"], f["x2"], f["y2"])
        if self.kind == "circle":
            return CircleRequest(f["x1"], f["y1"], f["r"])
        return CurveRequest(
            f["x1"], f["y1"], f["x2"], f["y2"], f["x3"], f["y3"], f["x4"], f["y4"],
        )

    def __call__(self, request: Request) -> list[PixelSample]:
        if self.kind == "line":
            return self.func(request.x1, request.y1, request.x2, request.y2)
        if self.kind == "circle":
            return self.func(request.xc, request.yc, request.r)
        return self.func(
            request.x1, request.y1, request.x2, request.y2,
            request.x3, request.y3, request.x4, request.y4,
        )


_REGISTRY: tuple[Algorithm, ...] = (
    Algorithm("stepwise", "line", stepwise_line, aliases=("step",),
              description="Slope-intercept equation, rounded per step"),
    Algorithm("dda", "line", dda_line,
              description="Digital differential analyzer, real-valued increments"),
    Algorithm("bresenham-line", "line", bresenham_line, aliases=("bresenham_line",),
              description="Integer error-term line"),
    Algorithm("bresenham-circle", "circle", bresenham_circle, aliases=("bresenham_circle",),
              description="Midpoint circle with 8-way symmetry"),
    Algorithm("bezier-cubic", "curve", de_casteljau_curve, aliases=("casteljau",),
              description="Cubic Bézier via de Casteljau, 201 samples"),
    Algorithm("wu-antialiased", "line", wu_line, antialiased=True, aliases=("wu",),
              description="Xiaolin Wu antialiased line with coverage alpha"),
)

_BY_NAME: dict[str, Algorithm] = {}
for _algo in _REGISTRY:
    for _name in (_algo.name, *_algo.aliases):
        _BY_NAME[_name] = _algo


def available_algorithms() -> list[str]:
    """Canonical algorithm names in registration order."""
    return [algo.name for algo in _REGISTRY]


def get_algorithm(name: str) -> Algorithm:
    """Resolve a canonical name or alias.

    Raises
    ------
    UnsupportedAlgorithm
        If the name (after stripping whitespace) is not registered.
    """
    key = name.strip() if isinstance(name, str) else name
    try:
        return _BY_NAME[key]
    except (KeyError, TypeError):
        raise UnsupportedAlgorithm(name, available_algorithms()) from None


def rasterize(algorithm: str, fields: Mapping[str, int]) -> list[PixelSample]:
    """Run the named rasterizer on the matching subset of fields.

    Parameters
    ----------
    algorithm : str
        Canonical name or alias.
    fields : Mapping[str, int]
        Any of x1..y4 and r; missing keys default to 0.

    Returns
    -------
    list[PixelSample]
        The rasterizer's output, unmodified.

    Raises
    ------
    UnsupportedAlgorithm
        Unknown algorithm name.
    ValueError
        Structurally invalid geometry (negative radius, non-int field).
    """
    algo = get_algorithm(algorithm)
    request = algo.build_request(fields)
    samples = algo(request)
    logger.debug("%s produced %d samples from %s", algo.name, len(samples), request)
    return samples


def run(algorithm: str, fields: Mapping[str, int]) -> RasterResult:
    """rasterize() plus wall-clock timing, packaged as a RasterResult.

    Only the rasterizer call is timed; name resolution and request
    construction happen before the clock starts.
    """
    algo = get_algorithm(algorithm)
    request = algo.build_request(fields)
    with timer(algo.name) as sw:
        samples = algo(request)
    logger.debug("%s produced %d samples in %d ns", algo.name, len(samples), sw.elapsed_ns)
    return RasterResult.from_samples(algo.name, samples, elapsed_ns=sw.elapsed_ns)
