"""insrc package root."""

from insrc.checks import (
    Classification,
    classify,
    in_module,
    in_src,
    is_in_module,
    is_in_src,
    not_in_module,
    not_in_src,
)
from insrc.dispatch import CallExpression, ResolvedImplementation, call, method_call, resolve
from insrc.exceptions import (
    BoundaryViolation,
    InsrcError,
    ModuleSourceUnresolvable,
    NoApplicableImplementation,
    NotInBoundaryError,
    UnexpectedlyInBoundaryError,
)

__all__ = [
    "__version__",
    "BoundaryViolation",
    "CallExpression",
    "Classification",
    "InsrcError",
    "ModuleSourceUnresolvable",
    "NoApplicableImplementation",
    "NotInBoundaryError",
    "ResolvedImplementation",
    "UnexpectedlyInBoundaryError",
    "call",
    "classify",
    "in_module",
    "in_src",
    "is_in_module",
    "is_in_src",
    "method_call",
    "not_in_module",
    "not_in_src",
    "resolve",
]

__version__ = "0.1.0"
