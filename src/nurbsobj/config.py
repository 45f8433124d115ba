"""
Configuration & Format Constants
================================
This module serves as the central registry for the OBJ freeform vocabulary
and global constants.

Why is this file needed?
------------------------
1. Abstraction: It prevents directive names and magic tokens ("\\", "rat",
   "bspline") being scattered throughout the scanner and the encoders.
2. Symmetry: The readers and the writers share the same constants, so what is
   written is exactly what is read back.

Exports:
    Directive (StrEnum): Leading tokens recognised by the scanner.
    CONTINUATION_TOKEN (str): Trailing token that joins the next physical line.
    CONTINUED_DIRECTIVES (frozenset): Directives allowed to use the continuation token.
    DEFAULT_WEIGHT (float): Weight of a vertex without a 4th field.
    FILE_ENCODING (str): Text encoding for all reads and writes.
    SUPPORTED_DIMENSIONS (tuple): Point dimensions the entities may use.
"""
from enum import StrEnum
from typing import Union

import numpy as np


class Directive(StrEnum):
    VERTEX = "v"
    CSTYPE = "cstype"
    DEGREE = "deg"
    CURVE = "curv"
    SURFACE = "surf"
    PARAMETER = "parm"
    END = "end"


# Global Constants
CONTINUATION_TOKEN: str = "\\"
DEFAULT_WEIGHT: float = 1.0
FILE_ENCODING: str = "utf-8"

# Undecodable bytes (e.g. Latin-1 comments) survive reading and only fail
# when they land in a numeric field
READ_ERRORS: str = "surrogateescape"

# Only these directives may continue onto the next physical line
CONTINUED_DIRECTIVES: frozenset[str] = frozenset({Directive.CURVE, Directive.SURFACE, Directive.PARAMETER})

# Homogeneous storage is always 3 components wide
HOMOGENEOUS_DIMENSION: int = 3
SUPPORTED_DIMENSIONS: tuple[int, ...] = (2, 3)

# cstype vocabulary
CSTYPE_BSPLINE: str = "bspline"
CSTYPE_RATIONAL: str = "rat"

# parm directions
PARAMETER_U: str = "u"
PARAMETER_V: str = "v"


def format_number(value: Union[float, int, np.floating, np.integer]) -> str:
    """
    Format a coordinate, weight or knot for output.

    Floats use the shortest representation that reads back to the same value.
    """
    if isinstance(value, (int, np.integer)):
        return str(int(value))
    return repr(float(value))
