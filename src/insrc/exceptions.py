"""Error kinds raised by insrc checks."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

BUILTIN_ORIGIN = "<built-in>"


class InsrcError(Exception):
    """Base class for every insrc error."""


class NoApplicableImplementation(InsrcError, LookupError):
    """No concrete implementation matches the call."""

    def __init__(self, message: str, *, target: object, arg_types: Sequence[type] = ()):
        super().__init__(message)
        self.target = target
        self.arg_types = tuple(arg_types)


class ModuleSourceUnresolvable(InsrcError, LookupError):
    """A module has no installed source file to derive a boundary from."""

    def __init__(self, message: str, *, module: object):
        super().__init__(message)
        self.module = module


class BoundaryViolation(InsrcError, AssertionError):
    """A resolved implementation sits on the wrong side of a boundary.

    Subclasses ``AssertionError`` so test runners report it as a failed
    assertion. ``origin_path`` is empty for built-in implementations.
    """

    relation = ""

    def __init__(self, *, construct: str, qualname: str, origin_path: str, boundary: Path):
        self.construct = construct
        self.qualname = qualname
        self.origin_path = origin_path
        self.boundary = boundary
        origin = origin_path or BUILTIN_ORIGIN
        super().__init__(
            f"{construct}: {qualname} defined in '{origin}', {self.relation} '{boundary}'."
        )


class NotInBoundaryError(BoundaryViolation):
    relation = "not in"


class UnexpectedlyInBoundaryError(BoundaryViolation):
    relation = "which is under"
