"""
Curve codec: `curv` records to and from CurveRecord.
"""
from __future__ import annotations

import logging
from typing import Iterable, Iterator, List

import numpy as np

from nurbsobj.config import (
    CSTYPE_BSPLINE,
    CSTYPE_RATIONAL,
    PARAMETER_U,
    Directive,
    format_number,
)
from nurbsobj.io.scanner import LogicalLine, RecordBuilder, parse_int, skip_blank_lines
from nurbsobj.model.errors import MalformedDirectiveError, StructuralMismatchError
from nurbsobj.model.records import CurveRecord, knot_domain

logger = logging.getLogger(__name__)


class CurveBuilder(RecordBuilder):
    INDEX_DIRECTIVE = Directive.CURVE
    DOMAIN_BOUNDS = 2
    terminates = staticmethod(skip_blank_lines)

    def __init__(self) -> None:
        super().__init__()
        self.degree: int = 0
        self.knots: List[float] = []

    def _on_degree(self, line: LogicalLine) -> None:
        if not line.args:
            raise MalformedDirectiveError(line.directive, line.line_number, "needs a degree")
        self.degree = parse_int(line.args[0], line.directive, line.line_number)
        self.observed.add(Directive.DEGREE)

    def _on_parameter(self, line: LogicalLine) -> None:
        # A curve only has a u direction; other parm lines still count as seen
        if line.args[:1] == [PARAMETER_U]:
            self.knots.extend(self._parse_knots(line))
        self.observed.add(Directive.PARAMETER)

    def build(self) -> CurveRecord:
        self.require_complete()

        num_cp = len(self.knots) - self.degree - 1
        self.require_index_count(num_cp)

        control_points = np.empty((num_cp, 3), dtype=np.float64)
        weights = np.empty(num_cp, dtype=np.float64)
        for i, index in enumerate(self.indices):
            vertex = self.vertex_at(index)
            control_points[i] = vertex.to_array()
            weights[i] = vertex.w

        return CurveRecord(
            degree=self.degree,
            knots=np.array(self.knots, dtype=np.float64),
            control_points=control_points,
            weights=weights,
            rational=self.rational,
        )


def decode_curve(lines: Iterable[str]) -> CurveRecord:
    """
    Decode a curve from OBJ text lines.

    Raises:
        MissingDirectiveError: cstype, deg, curv or parm never appeared.
        StructuralMismatchError: The index list does not fit the knots or vertex pool.
        MalformedDirectiveError: A numeric field could not be parsed.
    """
    builder = CurveBuilder()
    builder.consume(lines)
    record = builder.build()
    logger.debug(
        f"Decoded curve: degree={record.degree}, {record.num_control_points} control points, "
        f"{len(builder.vertices)} vertices, rational={record.rational}"
    )
    return record


def encode_curve(record: CurveRecord) -> Iterator[str]:
    """
    Yield the OBJ lines for a curve, without line terminators.

    The vertex order matches the index list `1..n`, so `decode_curve` reads
    back the same control points.

    Raises:
        StructuralMismatchError: The weights do not match the control points,
            or the knot vector is too short to give a domain.
    """
    if np.shape(record.weights) != (record.num_control_points,):
        raise StructuralMismatchError(
            f"Curve has {record.num_control_points} control points but weights of shape "
            f"{np.shape(record.weights)}."
        )
    domain = knot_domain(record.knots, record.degree)

    for point, weight in zip(record.control_points, record.weights, strict=True):
        yield f"{Directive.VERTEX} " + " ".join(format_number(c) for c in (*point[:3], weight))

    cstype = f"{CSTYPE_RATIONAL} {CSTYPE_BSPLINE}" if record.rational else CSTYPE_BSPLINE
    yield f"{Directive.CSTYPE} {cstype}"
    yield f"{Directive.DEGREE} {format_number(int(record.degree))}"

    knots = record.knots
    indices = range(1, record.num_control_points + 1)
    yield " ".join(
        [str(Directive.CURVE)]
        + [format_number(k) for k in domain]
        + [str(i) for i in indices]
    )
    yield " ".join([str(Directive.PARAMETER), PARAMETER_U] + [format_number(k) for k in knots])
    yield str(Directive.END)
