"""
Wavefront OBJ freeform geometry I/O for NURBS curves and surfaces.
"""
from importlib.metadata import version, PackageNotFoundError

from .io.obj import (
    ObjIOManager,
    curve_read_obj,
    curve_save_obj,
    read_obj,
    save_obj,
    surface_read_obj,
    surface_save_obj,
)
from .model.entities import Curve, RationalCurve, RationalSurface, Surface
from .model.errors import (
    FileUnavailableError,
    MalformedDirectiveError,
    MissingDirectiveError,
    ObjError,
    StructuralMismatchError,
)
from .logging_config import setup_logging

try:
    __version__ = version("nurbsobj")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

__all__ = [
    "ObjIOManager",
    "curve_read_obj",
    "curve_save_obj",
    "surface_read_obj",
    "surface_save_obj",
    "read_obj",
    "save_obj",
    "Curve",
    "RationalCurve",
    "Surface",
    "RationalSurface",
    "ObjError",
    "FileUnavailableError",
    "MissingDirectiveError",
    "StructuralMismatchError",
    "MalformedDirectiveError",
    "setup_logging",
]
