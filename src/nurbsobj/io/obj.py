"""
Input/Output Manager (Wavefront OBJ freeform geometry)
Handles saving and loading curves and surfaces to .obj files.
"""
from __future__ import annotations

import logging
import os
from typing import IO, Iterable, Union

from nurbsobj.config import FILE_ENCODING, READ_ERRORS
from nurbsobj.io.adapt import narrow_points, unit_weights, widen_points
from nurbsobj.io.curve import decode_curve, encode_curve
from nurbsobj.io.surface import decode_surface, encode_surface
from nurbsobj.model.entities import (
    Curve,
    CurveEntity,
    GeometryEntity,
    RationalCurve,
    RationalSurface,
    Surface,
    SurfaceEntity,
)
from nurbsobj.model.errors import FileUnavailableError
from nurbsobj.model.records import CurveRecord, SurfaceRecord

# Get module logger
logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


def _open(filename: PathLike, mode: str) -> IO[str]:
    """Open a text file, turning OS failures into FileUnavailableError."""
    errors = READ_ERRORS if mode == "r" else "strict"
    try:
        return open(filename, mode, encoding=FILE_ENCODING, errors=errors)
    except OSError as e:
        raise FileUnavailableError(os.fspath(filename), e.strerror or str(e)) from e


def _write_lines(filename: PathLike, lines: Iterable[str]) -> None:
    # Encode fully before truncating the target
    text = "".join(f"{line}\n" for line in lines)
    with _open(filename, "w") as f:
        f.write(text)


# --- RECORD LEVEL ---

def read_curve_record(filename: PathLike) -> CurveRecord:
    with _open(filename, "r") as f:
        return decode_curve(f)


def write_curve_record(filename: PathLike, record: CurveRecord) -> None:
    _write_lines(filename, encode_curve(record))


def read_surface_record(filename: PathLike) -> SurfaceRecord:
    with _open(filename, "r") as f:
        return decode_surface(f)


def write_surface_record(filename: PathLike, record: SurfaceRecord) -> None:
    _write_lines(filename, encode_surface(record))


# --- ENTITY LEVEL ---

def curve_read_obj(filename: PathLike, crv: CurveEntity) -> CurveEntity:
    """
    Read curve data from a Wavefront OBJ file and populate a curve object.

    Coordinates beyond `crv.dim` are dropped. Weights are kept only for a
    RationalCurve. The curve is left untouched when reading fails.

    Args:
        filename: Name of the file.
        crv: Curve or RationalCurve to populate.

    Returns:
        The populated `crv`.
    """
    record = read_curve_record(filename)
    crv.degree = record.degree
    crv.knots = record.knots
    crv.control_points = narrow_points(record.control_points, crv.dim)
    if isinstance(crv, RationalCurve):
        crv.weights = record.weights
    return crv


def curve_save_obj(filename: PathLike, crv: CurveEntity) -> None:
    """
    Save a curve to a Wavefront OBJ file.

    Non-rational curves are written with weight 1 for every control point.
    """
    control_points = widen_points(crv.control_points, crv.dim)
    if isinstance(crv, RationalCurve):
        weights, rational = crv.weights, True
    else:
        weights, rational = unit_weights(len(control_points)), False
    record = CurveRecord(
        degree=crv.degree,
        knots=crv.knots,
        control_points=control_points,
        weights=weights,
        rational=rational,
    )
    write_curve_record(filename, record)


def surface_read_obj(filename: PathLike, srf: SurfaceEntity) -> SurfaceEntity:
    """
    Read surface data from a Wavefront OBJ file and populate a surface object.

    Args:
        filename: Name of the file.
        srf: Surface or RationalSurface to populate.

    Returns:
        The populated `srf`.
    """
    record = read_surface_record(filename)
    srf.degree_u = record.degree_u
    srf.degree_v = record.degree_v
    srf.knots_u = record.knots_u
    srf.knots_v = record.knots_v
    srf.control_points = narrow_points(record.control_points, srf.dim)
    if isinstance(srf, RationalSurface):
        srf.weights = record.weights
    return srf


def surface_save_obj(filename: PathLike, srf: SurfaceEntity) -> None:
    """Save a surface to a Wavefront OBJ file."""
    control_points = widen_points(srf.control_points, srf.dim)
    if isinstance(srf, RationalSurface):
        weights, rational = srf.weights, True
    else:
        weights, rational = unit_weights(control_points.shape[:2]), False
    record = SurfaceRecord(
        degree_u=srf.degree_u,
        degree_v=srf.degree_v,
        knots_u=srf.knots_u,
        knots_v=srf.knots_v,
        control_points=control_points,
        weights=weights,
        rational=rational,
    )
    write_surface_record(filename, record)


def read_obj(filename: PathLike, entity: GeometryEntity) -> GeometryEntity:
    """Populate any curve or surface entity from a file."""
    if isinstance(entity, Surface):
        return surface_read_obj(filename, entity)
    if isinstance(entity, Curve):
        return curve_read_obj(filename, entity)
    raise TypeError(f"Cannot read OBJ geometry into {type(entity).__name__}.")


def save_obj(filename: PathLike, entity: GeometryEntity) -> None:
    """Save any curve or surface entity to a file."""
    if isinstance(entity, Surface):
        surface_save_obj(filename, entity)
    elif isinstance(entity, Curve):
        curve_save_obj(filename, entity)
    else:
        raise TypeError(f"Cannot write {type(entity).__name__} as OBJ geometry.")


class ObjIOManager:
    """Application-facing wrapper that logs every file operation."""

    @staticmethod
    def save(entity: GeometryEntity, filepath: PathLike) -> None:
        logger.info(f"Saving {type(entity).__name__} to: {filepath}")
        try:
            save_obj(filepath, entity)
        except Exception as e:
            logger.exception(f"Failed to save {type(entity).__name__}: {e}")
            raise
        logger.info(f"{type(entity).__name__} saved to: {filepath}")

    @staticmethod
    def load(entity: GeometryEntity, filepath: PathLike) -> GeometryEntity:
        logger.info(f"Loading {type(entity).__name__} from: {filepath}")
        try:
            read_obj(filepath, entity)
        except Exception as e:
            logger.exception(f"Failed to load {type(entity).__name__}: {e}")
            raise
        logger.info(f"{type(entity).__name__} loaded from: {filepath}")
        return entity
