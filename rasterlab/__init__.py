"""RasterLab: classical rasterization of lines, circles and Bézier curves.

This package converts integer geometry (segment endpoints, circle center and
radius, four Bézier control points) into ordered pixel samples, using one of
several textbook algorithms, and exposes them over a small HTTP service.

Architecture layers (strict one-way dependency):
    scripts/ → rasterlab/service/ → rasterlab/{raster,configs}/ → rasterlab/utils/

Key invariants:
    - Rasterizers are pure functions: same input, same sample sequence
    - Sample order is generation order (never sorted after the fact)
    - Alpha is 1.0 except for the antialiased (Wu) line
    - Degenerate input (zero length, zero radius) yields a valid result, never an error
    - YAML-only configs
"""

__version__ = "1.0.0"
