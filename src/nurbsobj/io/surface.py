"""
Surface codec: `surf` records to and from SurfaceRecord.

Control points travel u-fastest: the k-th index of a `surf` line is the grid
cell (k mod n_u, k // n_u).
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

import numpy as np

from nurbsobj.config import (
    CSTYPE_BSPLINE,
    CSTYPE_RATIONAL,
    PARAMETER_U,
    PARAMETER_V,
    Directive,
    format_number,
)
from nurbsobj.io.scanner import LogicalLine, RecordBuilder, parse_int, stop_at_blank_line
from nurbsobj.model.errors import MalformedDirectiveError, StructuralMismatchError
from nurbsobj.model.records import SurfaceRecord, knot_domain

logger = logging.getLogger(__name__)


class SurfaceBuilder(RecordBuilder):
    INDEX_DIRECTIVE = Directive.SURFACE
    DOMAIN_BOUNDS = 4
    terminates = staticmethod(stop_at_blank_line)

    def __init__(self) -> None:
        super().__init__()
        self.degree_u: int = 0
        self.degree_v: int = 0
        self.knots_u: List[float] = []
        self.knots_v: List[float] = []

    def _on_degree(self, line: LogicalLine) -> None:
        if len(line.args) < 2:
            raise MalformedDirectiveError(line.directive, line.line_number, "needs a u and a v degree")
        self.degree_u = parse_int(line.args[0], line.directive, line.line_number)
        self.degree_v = parse_int(line.args[1], line.directive, line.line_number)
        self.observed.add(Directive.DEGREE)

    def _on_parameter(self, line: LogicalLine) -> None:
        direction = line.args[0] if line.args else None
        if direction == PARAMETER_U:
            self.knots_u.extend(self._parse_knots(line))
        elif direction == PARAMETER_V:
            self.knots_v.extend(self._parse_knots(line))
        self.observed.add(Directive.PARAMETER)

    def build(self) -> SurfaceRecord:
        self.require_complete()

        num_cp_u = len(self.knots_u) - self.degree_u - 1
        num_cp_v = len(self.knots_v) - self.degree_v - 1
        self.require_index_count(num_cp_u, num_cp_v)

        control_points = np.empty((num_cp_u, num_cp_v, 3), dtype=np.float64)
        weights = np.empty((num_cp_u, num_cp_v), dtype=np.float64)
        for k, index in enumerate(self.indices):
            vertex = self.vertex_at(index)
            i, j = k % num_cp_u, k // num_cp_u
            control_points[i, j] = vertex.to_array()
            weights[i, j] = vertex.w

        return SurfaceRecord(
            degree_u=self.degree_u,
            degree_v=self.degree_v,
            knots_u=np.array(self.knots_u, dtype=np.float64),
            knots_v=np.array(self.knots_v, dtype=np.float64),
            control_points=control_points,
            weights=weights,
            rational=self.rational,
        )


def decode_surface(lines: Iterable[str]) -> SurfaceRecord:
    """
    Decode a surface from OBJ text lines.

    Scanning stops at `end` or at the first blank line, whichever comes first.

    Raises:
        MissingDirectiveError: cstype, deg, surf or parm never appeared.
        StructuralMismatchError: The index list does not fit the knots or vertex pool.
        MalformedDirectiveError: A numeric field could not be parsed.
    """
    builder = SurfaceBuilder()
    builder.consume(lines)
    record = builder.build()
    n_u, n_v = record.shape
    logger.debug(
        f"Decoded surface: degree=({record.degree_u}, {record.degree_v}), "
        f"{n_u}x{n_v} control points, rational={record.rational}"
    )
    return record


def encode_surface(record: SurfaceRecord) -> Iterator[str]:
    """
    Yield the OBJ lines for a surface, without line terminators.

    Yields nothing for an empty control point grid.

    Raises:
        StructuralMismatchError: The weight grid does not match the control
            points, or a knot vector is too short to give a domain.
    """
    n_u, n_v = record.shape
    if n_u == 0 or n_v == 0:
        logger.warning("Surface has an empty control point grid, nothing to write.")
        return
    if np.shape(record.weights) != (n_u, n_v):
        raise StructuralMismatchError(
            f"Surface has a {n_u}x{n_v} control point grid but weights of shape "
            f"{np.shape(record.weights)}."
        )
    degree_u, degree_v = int(record.degree_u), int(record.degree_v)
    domain = knot_domain(record.knots_u, degree_u) + knot_domain(record.knots_v, degree_v)

    # u varies fastest, matching the decoder's index mapping
    for j in range(n_v):
        for i in range(n_u):
            point = record.control_points[i, j]
            yield f"{Directive.VERTEX} " + " ".join(
                format_number(c) for c in (*point[:3], record.weights[i, j])
            )

    cstype = f"{CSTYPE_RATIONAL} {CSTYPE_BSPLINE}" if record.rational else CSTYPE_BSPLINE
    yield f"{Directive.CSTYPE} {cstype}"
    yield f"{Directive.DEGREE} {degree_u} {degree_v}"

    knots_u, knots_v = record.knots_u, record.knots_v
    yield " ".join(
        [str(Directive.SURFACE)]
        + [format_number(k) for k in domain]
        + [str(i) for i in range(1, n_u * n_v + 1)]
    )
    yield " ".join([str(Directive.PARAMETER), PARAMETER_U] + [format_number(k) for k in knots_u])
    yield " ".join([str(Directive.PARAMETER), PARAMETER_V] + [format_number(k) for k in knots_v])
    yield str(Directive.END)
