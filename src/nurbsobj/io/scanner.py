"""
Text Scanner & Directive Parser
===============================
Turns physical OBJ lines into logical directives and accumulates the state
shared by curve and surface records: the vertex pool, the index list and the
cstype flag.

Why is this file needed?
------------------------
1. Continuation: A `curv`, `surf` or `parm` line ending in a lone backslash
   token continues on the next physical line. Joining happens here, so the
   directive handlers only ever see complete token lists.
2. Termination: Curves and surfaces disagree on blank lines. The two policies
   are the named predicates `skip_blank_lines` and `stop_at_blank_line`.
3. Builder state: The accumulators live on a `RecordBuilder` instance created
   per read call, never at module level.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple

from nurbsobj.config import (
    CONTINUATION_TOKEN,
    CONTINUED_DIRECTIVES,
    CSTYPE_BSPLINE,
    CSTYPE_RATIONAL,
    DEFAULT_WEIGHT,
    Directive,
)
from nurbsobj.model.errors import (
    MalformedDirectiveError,
    MissingDirectiveError,
    StructuralMismatchError,
)
from nurbsobj.model.records import RawVertex

logger = logging.getLogger(__name__)


@dataclass
class LogicalLine:
    """One directive, possibly assembled from several physical lines."""
    line_number: int
    tokens: List[str] = field(default_factory=list)

    @property
    def is_blank(self) -> bool:
        return not self.tokens

    @property
    def directive(self) -> str:
        return self.tokens[0] if self.tokens else ""

    @property
    def args(self) -> List[str]:
        return self.tokens[1:]


# Termination predicates: return True when the line ends the record.
TerminationPredicate = Callable[[LogicalLine], bool]


def skip_blank_lines(line: LogicalLine) -> bool:
    """Curve policy: blank lines are skipped and scanning continues."""
    return False


def stop_at_blank_line(line: LogicalLine) -> bool:
    """Surface policy: the first blank line ends the record."""
    return line.is_blank


def iter_logical_lines(lines: Iterable[str]) -> Iterator[LogicalLine]:
    """
    Split physical lines into tokens and join continuation lines.

    For `curv`, `surf` and `parm` a trailing `\\` token is dropped and the
    next physical line's tokens are appended to the current directive. A
    continuation at end of input simply ends the directive. Comments,
    vertices and unknown directives never continue, so a backslash ending a
    comment cannot swallow the following directive.
    """
    current: Optional[LogicalLine] = None
    for line_number, raw in enumerate(lines, start=1):
        tokens = raw.split()
        if current is None:
            current = LogicalLine(line_number=line_number)
        current.tokens.extend(tokens)

        if (
            current.tokens
            and current.tokens[-1] == CONTINUATION_TOKEN
            and current.tokens[0] in CONTINUED_DIRECTIVES
        ):
            current.tokens.pop()
            continue

        yield current
        current = None

    if current is not None:
        yield current


def scan_directives(
    lines: Iterable[str],
    terminates: TerminationPredicate = skip_blank_lines
) -> Iterator[LogicalLine]:
    """
    Yield non-blank logical lines up to (excluding) `end` or termination.

    Args:
        lines: Physical lines, e.g. an open text file.
        terminates: Blank-line policy, see `skip_blank_lines` / `stop_at_blank_line`.
    """
    for line in iter_logical_lines(lines):
        if terminates(line):
            logger.debug(f"Record terminated by blank line {line.line_number}.")
            return
        if line.is_blank:
            continue
        if line.directive == Directive.END:
            return
        yield line


def parse_float(token: str, directive: str, line_number: Optional[int]) -> float:
    try:
        return float(token)
    except ValueError:
        raise MalformedDirectiveError(directive, line_number, f"has a non-numeric field '{token}'") from None


def parse_int(token: str, directive: str, line_number: Optional[int]) -> int:
    # Indices and degrees may be written as floats ("2.0")
    try:
        return int(float(token))
    except (ValueError, OverflowError):
        raise MalformedDirectiveError(directive, line_number, f"has a non-integer field '{token}'") from None


def parse_vertex(line: LogicalLine) -> RawVertex:
    """Parse `v x y z [w]`. Missing coordinates are zero, a missing weight is 1."""
    values = [0.0, 0.0, 0.0, DEFAULT_WEIGHT]
    for i, token in enumerate(line.args[:4]):
        values[i] = parse_float(token, line.directive, line.line_number)
    return RawVertex(*values)


class RecordBuilder:
    """
    Per-call accumulator for one freeform record.

    Subclasses declare the directive that carries the index list, how many
    domain bounds precede the indices, the blank-line policy and a handler
    for `deg` and `parm`.
    """
    INDEX_DIRECTIVE: ClassVar[Directive]
    DOMAIN_BOUNDS: ClassVar[int]
    terminates: ClassVar[TerminationPredicate] = staticmethod(skip_blank_lines)

    def __init__(self) -> None:
        self.vertices: List[RawVertex] = []
        self.indices: List[int] = []
        self.rational: bool = False
        self.observed: set[str] = set()
        self._handlers: Dict[str, Callable[[LogicalLine], None]] = {
            Directive.VERTEX: self._on_vertex,
            Directive.CSTYPE: self._on_cstype,
            Directive.DEGREE: self._on_degree,
            self.INDEX_DIRECTIVE: self._on_index_list,
            Directive.PARAMETER: self._on_parameter,
        }

    def consume(self, lines: Iterable[str]) -> None:
        """Feed every directive of the record into the builder."""
        for line in scan_directives(lines, type(self).terminates):
            handler = self._handlers.get(line.directive)
            if handler is None:
                logger.debug(f"Ignoring '{line.directive}' on line {line.line_number}.")
                continue
            handler(line)

    # --- SHARED DIRECTIVES ---

    def _on_vertex(self, line: LogicalLine) -> None:
        self.vertices.append(parse_vertex(line))

    def _on_cstype(self, line: LogicalLine) -> None:
        args = line.args
        if args[:1] == [CSTYPE_BSPLINE]:
            self.rational = False
            self.observed.add(Directive.CSTYPE)
        elif args[:2] == [CSTYPE_RATIONAL, CSTYPE_BSPLINE]:
            self.rational = True
            self.observed.add(Directive.CSTYPE)
        else:
            logger.debug(f"Unsupported cstype '{' '.join(args)}' on line {line.line_number} ignored.")

    def _on_index_list(self, line: LogicalLine) -> None:
        args = line.args
        if len(args) < self.DOMAIN_BOUNDS:
            raise MalformedDirectiveError(
                line.directive, line.line_number, f"needs {self.DOMAIN_BOUNDS} domain bounds"
            )
        # Domain bounds are validated but not kept
        for token in args[:self.DOMAIN_BOUNDS]:
            parse_float(token, line.directive, line.line_number)
        self.indices.extend(
            parse_int(token, line.directive, line.line_number) for token in args[self.DOMAIN_BOUNDS:]
        )
        self.observed.add(self.INDEX_DIRECTIVE)

    def _parse_knots(self, line: LogicalLine) -> List[float]:
        return [parse_float(token, line.directive, line.line_number) for token in line.args[1:]]

    def _on_degree(self, line: LogicalLine) -> None:
        raise NotImplementedError("`_on_degree` must be implemented in subclass.")

    def _on_parameter(self, line: LogicalLine) -> None:
        raise NotImplementedError("`_on_parameter` must be implemented in subclass.")

    # --- COMPLETENESS & RESOLUTION ---

    def require_complete(self) -> None:
        """Raise MissingDirectiveError for the first mandatory directive not seen."""
        messages: Tuple[Tuple[str, str], ...] = (
            (Directive.CSTYPE, "'cstype bspline / cstype rat bspline' line missing in file"),
            (Directive.DEGREE, "'deg' line missing/incomplete in file"),
            (self.INDEX_DIRECTIVE, f"'{self.INDEX_DIRECTIVE}' line missing/incomplete in file"),
            (Directive.PARAMETER, "'parm' line missing/incomplete in file"),
        )
        for directive, message in messages:
            if directive not in self.observed:
                raise MissingDirectiveError(str(directive), message)

    def require_index_count(self, *counts: int) -> int:
        """Check the index list against the knot-implied control point count(s)."""
        if any(count < 0 for count in counts):
            raise StructuralMismatchError(
                f"Knot vectors imply a negative control point count {counts}."
            )
        expected = math.prod(counts)
        if len(self.indices) != expected:
            raise StructuralMismatchError(
                f"'{self.INDEX_DIRECTIVE}' lists {len(self.indices)} indices, "
                f"but the knot vectors imply {expected} control points."
            )
        return expected

    def vertex_at(self, index: int) -> RawVertex:
        """Look up a 1-based vertex reference."""
        if not 1 <= index <= len(self.vertices):
            raise StructuralMismatchError(
                f"Vertex index {index} is out of range (1..{len(self.vertices)})."
            )
        return self.vertices[index - 1]
