"""
Rasterization core.

Pure functions converting integer geometry into ordered pixel samples.
No I/O, no shared state; every call is independent.

    lines       stepwise_line, dda_line, bresenham_line
    circle      bresenham_circle
    curve       de_casteljau_curve
    antialias   wu_line
    dispatcher  name → rasterizer routing
    canvas      preview compositing (numpy)
"""

from rasterlab.raster.antialias import wu_line
from rasterlab.raster.circle import bresenham_circle
from rasterlab.raster.curve import de_casteljau_curve
from rasterlab.raster.dispatcher import available_algorithms, rasterize, run
from rasterlab.raster.lines import bresenham_line, dda_line, stepwise_line
from rasterlab.raster.types import (
    CircleRequest,
    CurveRequest,
    InvalidAlgorithm,
    LineRequest,
    PixelSample,
    RasterError,
    RasterResult,
    UnsupportedAlgorithm,
)

__all__ = [
    "PixelSample",
    "LineRequest",
    "CircleRequest",
    "CurveRequest",
    "RasterResult",
    "RasterError",
    "UnsupportedAlgorithm",
    "InvalidAlgorithm",
    "stepwise_line",
    "dda_line",
    "bresenham_line",
    "bresenham_circle",
    "de_casteljau_curve",
    "wu_line",
    "available_algorithms",
    "rasterize",
    "run",
]
