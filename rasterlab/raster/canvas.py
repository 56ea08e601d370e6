"""Preview compositing: draw pixel samples onto a grayscale image.

Used by scripts/draw.py to visualize a rasterization.  Samples are painted in
generation order; each blends the foreground gray over whatever is already
there with its own alpha:

    out = alpha * foreground + (1 - alpha) * current

so overlapping Wu pairs and repeated circle/curve samples accumulate the way
they would on a real canvas.

Image coordinates: row = y - origin_y, column = x - origin_x.  Samples that
fall outside the image are skipped; the rasterizer output itself is never
clipped.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Sequence, Union

import numpy as np

from rasterlab.raster.types import PixelSample
from rasterlab.utils import fs
from rasterlab.utils.geometry import clamp_int

logger = logging.getLogger(__name__)


def bounding_box(samples: Sequence[PixelSample]) -> tuple[int, int, int, int]:
    """Inclusive (xmin, ymin, xmax, ymax) of the samples.

    Raises
    ------
    ValueError
        If samples is empty.
    """
    if not samples:
        raise ValueError("Cannot compute bounding box of zero samples")
    xs = [s.x for s in samples]
    ys = [s.y for s in samples]
    return (min(xs), min(ys), max(xs), max(ys))


def fit_canvas(
    samples: Sequence[PixelSample], margin: int = 2,
) -> tuple[int, int, tuple[int, int]]:
    """Size a canvas around the samples.

    Returns
    -------
    (width, height, origin)
        origin is the (x, y) that maps to pixel (0, 0).
    """
    if margin < 0:
        raise ValueError(f"margin must be >= 0, got {margin}")
    xmin, ymin, xmax, ymax = bounding_box(samples)
    origin = (xmin - margin, ymin - margin)
    return (xmax - xmin + 1 + 2 * margin, ymax - ymin + 1 + 2 * margin, origin)


def render_samples(
    samples: Iterable[PixelSample],
    width: int,
    height: int,
    *,
    background: int = 255,
    foreground: int = 0,
    origin: tuple[int, int] = (0, 0),
) -> np.ndarray:
    """Composite samples onto a fresh (height, width) uint8 image.

    Parameters
    ----------
    samples : Iterable[PixelSample]
        In generation order.
    width, height : int
        Image size in pixels, both > 0.
    background, foreground : int
        Gray levels, clamped to [0, 255].
    origin : tuple[int, int]
        Sample coordinate that maps to image pixel (0, 0).

    Returns
    -------
    np.ndarray
        (height, width) uint8.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Canvas size must be positive, got {width}x{height}")

    bg = clamp_int(background, 0, 255)
    fg = float(clamp_int(foreground, 0, 255))
    canvas = np.full((height, width), float(bg), dtype=np.float32)

    ox, oy = origin
    skipped = 0
    for s in samples:
        col = s.x - ox
        row = s.y - oy
        if not (0 <= col < width and 0 <= row < height):
            skipped += 1
            continue
        canvas[row, col] = s.alpha * fg + (1.0 - s.alpha) * canvas[row, col]

    if skipped:
        logger.debug("Skipped %d samples outside %dx%d canvas", skipped, width, height)

    return np.clip(np.rint(canvas), 0, 255).astype(np.uint8)


def save_preview(
    samples: Sequence[PixelSample],
    path: Union[str, Path],
    width: int | None = None,
    height: int | None = None,
    *,
    background: int = 255,
    foreground: int = 0,
    margin: int = 2,
    scale: int = 1,
) -> Path:
    """Render samples and write a PNG atomically.

    With width/height omitted the canvas is fitted around the samples;
    otherwise the canvas spans [0, width) x [0, height) in sample space.
    ``scale`` enlarges each pixel to a scale x scale block for viewing.
    """
    if scale < 1:
        raise ValueError(f"scale must be >= 1, got {scale}")

    if width is None or height is None:
        width, height, origin = fit_canvas(samples, margin)
    else:
        origin = (0, 0)

    img = render_samples(
        samples, width, height,
        background=background, foreground=foreground, origin=origin,
    )
    if scale > 1:
        img = np.kron(img, np.ones((scale, scale), dtype=np.uint8))

    path = Path(path)
    fs.atomic_save_image(img, path)
    logger.info("Wrote %dx%d preview to %s", img.shape[1], img.shape[0], path)
    return path
