"""Value types shared by the rasterizers.

Every request and every emitted sample is an immutable, slotted dataclass.
Requests carry integer pixel coordinates only; rasterizers never see
floats on input.

Lifecycle
---------
All objects are request-scoped: built per invocation, discarded once the
response is serialized. Nothing here holds mutable state between calls.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

# ---------------------------------------------------------------------------
# Exceptions
# ---------------------------------------------------------------------------


class RasterError(Exception):
    """Base class for rasterization errors."""

    pass


class UnsupportedAlgorithm(RasterError, ValueError):
    """Raised when the dispatcher gets an algorithm name it does not know.

    Parameters
    ----------
    name : str
        The offending name, as received.
    known : Sequence[str]
        Canonical names that would have been accepted.
    """

    def __init__(self, name: str, known: Sequence[str] = ()) -> None:
        self.name = name
        self.known = tuple(known)
        msg = f"Unknown algorithm {name!r}"
        if self.known:
            msg += f"; expected one of: {', '.join(self.known)}"
        super().__init__(msg)


InvalidAlgorithm = UnsupportedAlgorithm


def _require_ints(owner: str, **values: object) -> None:
    for name, value in values.items():
        # bool is an int subclass but never a coordinate
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"{owner}.{name} must be an int, got {value!r}")


# ---------------------------------------------------------------------------
# Samples
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class PixelSample:
    """One emitted pixel.

    Parameters
    ----------
    x, y : int
        Pixel coordinates.
    alpha : float
        Coverage in [0, 1].  1.0 for every opaque rasterizer; fractional
        only for the Wu antialiased line.
    """

    x: int
    y: int
    alpha: float = 1.0

    def as_dict(self) -> dict:
        return {"x": self.x, "y": self.y, "alpha": self.alpha}


# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class LineRequest:
    """Segment (x1, y1)-(x2, y2).  Any direction; may be a single point."""

    x1: int
    y1: int
    x2: int
    y2: int

    def __post_init__(self) -> None:
        _require_ints("LineRequest", x1=self.x1, y1=self.y1, x2=self.x2, y2=self.y2)

    @property
    def is_degenerate(self) -> bool:
        return self.x1 == self.x2 and self.y1 == self.y2


@dataclass(frozen=True, slots=True)
class CircleRequest:
    """Circle centered at (xc, yc) with non-negative radius r."""

    xc: int
    yc: int
    r: int

    def __post_init__(self) -> None:
        _require_ints("CircleRequest", xc=self.xc, yc=self.yc, r=self.r)
        if self.r < 0:
            raise ValueError(f"CircleRequest.r must be >= 0, got {self.r}")

    @property
    def is_degenerate(self) -> bool:
        return self.r == 0


@dataclass(frozen=True, slots=True)
class CurveRequest:
    """Cubic Bézier with control points (x1, y1) .. (x4, y4).

    Coincident or collinear control points are allowed and simply produce a
    degenerate curve.
    """

    x1: int
    y1: int
    x2: int
    y2: int
    x3: int
    y3: int
    x4: int
    y4: int

    def __post_init__(self) -> None:
        _require_ints(
            "CurveRequest",
            x1=self.x1, y1=self.y1, x2=self.x2, y2=self.y2,
            x3=self.x3, y3=self.y3, x4=self.x4, y4=self.y4,
        )

    @property
    def control_points(self) -> tuple[tuple[int, int], ...]:
        return ((self.x1, self.y1), (self.x2, self.y2), (self.x3, self.y3), (self.x4, self.y4))

    @property
    def is_degenerate(self) -> bool:
        return len(set(self.control_points)) == 1


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class RasterResult:
    """Samples in generation order plus boundary-assigned elapsed time.

    ``elapsed_ns`` is filled in by whoever timed the rasterizer call; the
    rasterizers themselves never set it.
    """

    algorithm: str
    samples: tuple[PixelSample, ...]
    elapsed_ns: int = 0

    @classmethod
    def from_samples(
        cls, algorithm: str, samples: Iterable[PixelSample], elapsed_ns: int = 0,
    ) -> RasterResult:
        return cls(algorithm=algorithm, samples=tuple(samples), elapsed_ns=elapsed_ns)

    def __len__(self) -> int:
        return len(self.samples)

    def to_response(self) -> dict:
        """Wire form: ``{"points": [{x, y, alpha}], "elapsed": ns}``."""
        return {
            "points": [s.as_dict() for s in self.samples],
            "elapsed": self.elapsed_ns,
        }
