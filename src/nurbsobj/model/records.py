"""
Codec Records
=============
Plain data exchanged between the scanner, the decoders/encoders and the
dimension adaptation layer.

Control points are always held in 3-component homogeneous storage here.
Narrowing to the caller's dimension happens in `nurbsobj.io.adapt`.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from nurbsobj.config import DEFAULT_WEIGHT, HOMOGENEOUS_DIMENSION
from nurbsobj.model.errors import StructuralMismatchError

if TYPE_CHECKING:
    import numpy.typing as npt


@dataclass(frozen=True)
class RawVertex:
    """A single `v` line: position plus homogeneous weight."""
    x: float
    y: float
    z: float
    w: float = DEFAULT_WEIGHT

    def to_array(self) -> npt.NDArray[np.float64]:
        return np.array([self.x, self.y, self.z])


def _empty_points() -> npt.NDArray[np.float64]:
    return np.empty((0, HOMOGENEOUS_DIMENSION), dtype=np.float64)


def _empty_vector() -> npt.NDArray[np.float64]:
    return np.empty(0, dtype=np.float64)


def _empty_grid() -> npt.NDArray[np.float64]:
    return np.empty((0, 0, HOMOGENEOUS_DIMENSION), dtype=np.float64)


@dataclass
class CurveRecord:
    """
    Resolved curve data.

    Attributes:
        degree: Polynomial degree.
        knots: Knot vector, shape (n + degree + 1,).
        control_points: Shape (n, 3).
        weights: Shape (n,).
        rational: Whether the file declared `cstype rat bspline`.
    """
    degree: int = 0
    knots: npt.NDArray[np.float64] = field(default_factory=_empty_vector)
    control_points: npt.NDArray[np.float64] = field(default_factory=_empty_points)
    weights: npt.NDArray[np.float64] = field(default_factory=_empty_vector)
    rational: bool = False

    @property
    def num_control_points(self) -> int:
        return len(self.control_points)


@dataclass
class SurfaceRecord:
    """
    Resolved surface data.

    The control-point grid is indexed (u, v): rows follow u, columns follow v.

    Attributes:
        degree_u: Degree along u.
        degree_v: Degree along v.
        knots_u: Knot vector along u.
        knots_v: Knot vector along v.
        control_points: Shape (n_u, n_v, 3).
        weights: Shape (n_u, n_v).
        rational: Whether the file declared `cstype rat bspline`.
    """
    degree_u: int = 0
    degree_v: int = 0
    knots_u: npt.NDArray[np.float64] = field(default_factory=_empty_vector)
    knots_v: npt.NDArray[np.float64] = field(default_factory=_empty_vector)
    control_points: npt.NDArray[np.float64] = field(default_factory=_empty_grid)
    weights: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 0), dtype=np.float64))
    rational: bool = False

    @property
    def shape(self) -> tuple[int, int]:
        """Number of control points along (u, v)."""
        return self.control_points.shape[0], self.control_points.shape[1]


def knot_domain(knots: npt.ArrayLike, degree: int) -> tuple[float, float]:
    """
    Parametric domain of a knot vector: knots[degree] and knots[n - degree - 1].

    Raises:
        StructuralMismatchError: The knot vector is too short for the degree.
    """
    knots = np.asarray(knots, dtype=np.float64)
    degree = int(degree)
    if degree < 0 or len(knots) < degree + 1:
        raise StructuralMismatchError(
            f"A degree {degree} knot vector needs at least {degree + 1} knots, got {len(knots)}."
        )
    return float(knots[degree]), float(knots[len(knots) - degree - 1])
