"""
Dimension adaptation between the 3-component homogeneous buffers used by the
codec and the caller's 2- or 3-dimensional points.
"""
from __future__ import annotations

from typing import Tuple, Union, TYPE_CHECKING

import numpy as np

from nurbsobj.config import DEFAULT_WEIGHT, HOMOGENEOUS_DIMENSION, SUPPORTED_DIMENSIONS

if TYPE_CHECKING:
    import numpy.typing as npt


def _check_dimension(dim: int) -> None:
    if dim not in SUPPORTED_DIMENSIONS:
        raise ValueError(f"Unsupported dimension {dim}, expected one of {SUPPORTED_DIMENSIONS}.")


def narrow_points(buffer: npt.ArrayLike, dim: int) -> npt.NDArray[np.float64]:
    """
    Drop the components beyond `dim` from homogeneous storage.

    Args:
        buffer: Array with a trailing axis of length 3, e.g. (n, 3) or (n_u, n_v, 3).
        dim: Target dimension (2 or 3).

    Returns:
        A new array with a trailing axis of length `dim`.
    """
    _check_dimension(dim)
    arr = np.asarray(buffer, dtype=np.float64)
    if arr.shape[-1] != HOMOGENEOUS_DIMENSION:
        raise ValueError(f"Expected trailing axis of length {HOMOGENEOUS_DIMENSION}, got {arr.shape}.")
    return arr[..., :dim].copy()


def widen_points(points: npt.ArrayLike, dim: int) -> npt.NDArray[np.float64]:
    """
    Zero-fill `dim`-component points up to homogeneous storage.

    Args:
        points: Array with a trailing axis of length `dim`.
        dim: Source dimension (2 or 3).

    Returns:
        A new array with a trailing axis of length 3.
    """
    _check_dimension(dim)
    arr = np.asarray(points, dtype=np.float64)
    if arr.shape[-1] != dim:
        raise ValueError(f"Expected trailing axis of length {dim}, got {arr.shape}.")
    widened = np.zeros(arr.shape[:-1] + (HOMOGENEOUS_DIMENSION,), dtype=np.float64)
    widened[..., :dim] = arr
    return widened


def unit_weights(shape: Union[int, Tuple[int, ...]]) -> npt.NDArray[np.float64]:
    """Weights for non-rational data: 1.0 everywhere."""
    return np.full(shape, DEFAULT_WEIGHT, dtype=np.float64)
