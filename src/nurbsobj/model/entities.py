"""
Geometry Entities
=================
Containers for the curves and surfaces that get saved and loaded.

These classes hold data only. Evaluation, knot insertion and the rest of the
NURBS mathematics live elsewhere; the codec only fills and reads these fields.

Classes:
    Curve: Non-rational B-spline curve.
    RationalCurve: Curve with per-control-point weights.
    Surface: Non-rational B-spline surface.
    RationalSurface: Surface with a weight grid.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Union, TYPE_CHECKING

import numpy as np

from nurbsobj.config import SUPPORTED_DIMENSIONS

if TYPE_CHECKING:
    import numpy.typing as npt


def _check_dimension(dim: int) -> None:
    if dim not in SUPPORTED_DIMENSIONS:
        raise ValueError(f"Unsupported dimension {dim}, expected one of {SUPPORTED_DIMENSIONS}.")


@dataclass(kw_only=True)
class Curve:
    """A B-spline curve in 2 or 3 dimensions."""
    degree: int = 0
    knots: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0))
    control_points: Optional[npt.NDArray[np.float64]] = None
    dim: int = 3

    def __post_init__(self) -> None:
        _check_dimension(self.dim)
        self.knots = np.asarray(self.knots, dtype=np.float64)
        if self.control_points is None:
            self.control_points = np.empty((0, self.dim), dtype=np.float64)
        self.control_points = np.asarray(self.control_points, dtype=np.float64)
        if self.control_points.ndim != 2 or self.control_points.shape[1] != self.dim:
            raise ValueError(
                f"Expected control points of shape (n, {self.dim}), got {self.control_points.shape}."
            )

    @property
    def num_control_points(self) -> int:
        return len(self.control_points)


@dataclass(kw_only=True)
class RationalCurve(Curve):
    """A NURBS curve: a Curve whose control points carry weights."""
    weights: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.weights = np.asarray(self.weights, dtype=np.float64)


@dataclass(kw_only=True)
class Surface:
    """A B-spline surface. Control points are a (n_u, n_v, dim) grid."""
    degree_u: int = 0
    degree_v: int = 0
    knots_u: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0))
    knots_v: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty(0))
    control_points: Optional[npt.NDArray[np.float64]] = None
    dim: int = 3

    def __post_init__(self) -> None:
        _check_dimension(self.dim)
        self.knots_u = np.asarray(self.knots_u, dtype=np.float64)
        self.knots_v = np.asarray(self.knots_v, dtype=np.float64)
        if self.control_points is None:
            self.control_points = np.empty((0, 0, self.dim), dtype=np.float64)
        self.control_points = np.asarray(self.control_points, dtype=np.float64)
        if self.control_points.ndim != 3 or self.control_points.shape[2] != self.dim:
            raise ValueError(
                f"Expected control point grid of shape (n_u, n_v, {self.dim}), "
                f"got {self.control_points.shape}."
            )

    @property
    def shape(self) -> tuple[int, int]:
        return self.control_points.shape[0], self.control_points.shape[1]


@dataclass(kw_only=True)
class RationalSurface(Surface):
    """A NURBS surface: a Surface with a (n_u, n_v) weight grid."""
    weights: npt.NDArray[np.float64] = field(default_factory=lambda: np.empty((0, 0)))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.weights = np.asarray(self.weights, dtype=np.float64)


# Union types for dispatch and type hinting
CurveEntity = Union[Curve, RationalCurve]
SurfaceEntity = Union[Surface, RationalSurface]
GeometryEntity = Union[Curve, RationalCurve, Surface, RationalSurface]
