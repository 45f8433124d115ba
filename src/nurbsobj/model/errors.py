"""
Error taxonomy for the OBJ freeform codec.

Every failure aborts the whole read or write; no partial geometry is returned.
"""
from __future__ import annotations

from typing import Optional


class ObjError(Exception):
    """Base class for all codec failures."""


class FileUnavailableError(ObjError):
    """The file could not be opened for reading or writing."""

    def __init__(self, filename: str, reason: str) -> None:
        super().__init__(f"Cannot open '{filename}': {reason}")
        self.filename = filename


class MissingDirectiveError(ObjError, ValueError):
    """A mandatory directive never appeared before the record terminated."""

    def __init__(self, directive: str, message: str) -> None:
        super().__init__(message)
        self.directive = directive


class StructuralMismatchError(ObjError, ValueError):
    """The index list does not fit the knot vectors or the vertex pool."""


class MalformedDirectiveError(ObjError, ValueError):
    """A directive carries a field that cannot be parsed."""

    def __init__(self, directive: str, line_number: Optional[int], message: str) -> None:
        location = f"line {line_number}: " if line_number is not None else ""
        super().__init__(f"{location}'{directive}' {message}")
        self.directive = directive
        self.line_number = line_number
