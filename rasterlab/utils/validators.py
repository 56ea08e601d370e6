"""Draw request/response schemas and request-file loading.

Provides centralized validation for everything crossing the boundary, using
pydantic:
    - Draw request (draw.v1): algorithm name, up to four integer points, radius
    - Draw response: ordered points with alpha, elapsed nanoseconds
    - Request files (YAML) used by scripts/draw.py --request-file

Algorithm names are NOT validated here; the dispatcher owns the registry and
raises UnsupportedAlgorithm. This keeps utils/ free of upward imports.

Units:
    - Coordinates: integer pixels, any sign
    - Radius: non-negative integer pixels
    - Alpha: [0.0, 1.0]
    - Elapsed: integer nanoseconds

Usage:
    from rasterlab.utils import validators

    req = validators.DrawRequestV1(algorithm="dda", x1=0, y1=0, x2=10, y2=4)
    validators.check_request_limits(req, max_coordinate=100_000, max_radius=100_000)
"""

from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


COORDINATE_FIELDS = ('x1', 'y1', 'x2', 'y2', 'x3', 'y3', 'x4', 'y4')


# ============================================================================
# DRAW REQUEST V1
# ============================================================================

class DrawRequestV1(BaseModel):
    """Single draw request.

    Fields beyond what the selected algorithm needs are ignored by the
    dispatcher; unknown JSON keys are dropped.
    """
    model_config = ConfigDict(extra='ignore')

    algorithm: str = Field(..., min_length=1, description="Rasterizer name, e.g. 'bresenham-line'")
    x1: int = Field(0, description="Point 1 x (line start, circle center, curve start)")
    y1: int = Field(0, description="Point 1 y")
    x2: int = Field(0, description="Point 2 x (line end, first curve control point)")
    y2: int = Field(0, description="Point 2 y")
    x3: int = Field(0, description="Point 3 x (second curve control point)")
    y3: int = Field(0, description="Point 3 y")
    x4: int = Field(0, description="Point 4 x (curve end)")
    y4: int = Field(0, description="Point 4 y")
    r: int = Field(0, ge=0, description="Circle radius (px)")

    @field_validator('algorithm')
    @classmethod
    def strip_algorithm(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("algorithm must be a non-empty name")
        return v

    def fields(self) -> Dict[str, int]:
        """Geometry fields as a plain dict (what the dispatcher consumes)."""
        return {name: getattr(self, name) for name in COORDINATE_FIELDS + ('r',)}


# ============================================================================
# DRAW RESPONSE V1
# ============================================================================

class PointV1(BaseModel):
    """One emitted pixel."""
    x: int
    y: int
    alpha: float = Field(1.0, ge=0.0, le=1.0, description="Coverage; 1.0 unless antialiased")


class DrawResponseV1(BaseModel):
    """Ordered pixel samples plus computation time."""
    points: List[PointV1] = Field(default_factory=list, description="Generation order")
    elapsed: int = Field(..., ge=0, description="Rasterization time (ns)")


# ============================================================================
# PUBLIC API
# ============================================================================

def check_request_limits(
    req: DrawRequestV1,
    max_coordinate: int,
    max_radius: int
) -> None:
    """Reject requests whose coordinates or radius exceed configured bounds.

    Parameters
    ----------
    req : DrawRequestV1
        Parsed request
    max_coordinate : int
        Largest accepted absolute value of any coordinate
    max_radius : int
        Largest accepted radius

    Raises
    ------
    ValueError
        Naming the first offending field
    """
    for name in COORDINATE_FIELDS:
        value = getattr(req, name)
        if abs(value) > max_coordinate:
            raise ValueError(
                f"{name}={value} out of bounds [-{max_coordinate}, {max_coordinate}]"
            )
    if req.r > max_radius:
        raise ValueError(f"r={req.r} exceeds max radius {max_radius}")


def load_request_file(path: Union[str, Path]) -> List[DrawRequestV1]:
    """Load and validate draw requests from YAML.

    The file holds either one request mapping or a list of them under
    ``requests:``.

    Parameters
    ----------
    path : Union[str, Path]
        Path to request YAML file

    Returns
    -------
    List[DrawRequestV1]
        Validated requests, in file order

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ValueError
        If the YAML is malformed or validation fails (with the request index)
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Request file not found: {path}")

    try:
        data: Any = fs.load_yaml(path)
    except yaml.YAMLError as e:
        raise ValueError(f"Request file {path} is not valid YAML: {e}") from e
    if isinstance(data, dict) and 'requests' in data:
        items = data['requests']
    else:
        items = [data]

    if not isinstance(items, list) or not items:
        raise ValueError(f"Request file {path} holds no requests")

    requests = []
    for idx, item in enumerate(items):
        if not isinstance(item, dict):
            raise ValueError(f"Request #{idx} in {path} is not a mapping: {item!r}")
        try:
            requests.append(DrawRequestV1(**item))
        except ValidationError as e:
            raise ValueError(f"Request #{idx} in {path} failed validation: {e}") from e
    return requests
