"""Fixture types for exercising insrc checks.

These live inside the package source tree so that a test directory next to
``src/`` sees their registered implementations as inside the boundary, while
the built-in fallbacks of the generic operations stay outside.
"""

from insrc.testing.matrix import AMatrix, prod, product, total
from insrc.testing.predicates import all_nonzero, any_nonzero, anynonzero

__all__ = [
    "AMatrix",
    "all_nonzero",
    "any_nonzero",
    "anynonzero",
    "prod",
    "product",
    "total",
]
