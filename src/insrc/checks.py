"""Checks that a call dispatches to an implementation inside (or outside) a source tree.

The ``*_src`` forms classify against the ``src`` directory next to the
directory of the calling file, so ``tests/test_x.py`` checks against
``src/``. The ``*_module`` forms classify against the directory of a named
module's top-level source file.

``is_in_src`` never calls the function. ``in_src`` and ``not_in_src`` call it
exactly once, and only after the check passed::

    assert is_in_src(total, m)
    assert in_src(total, m) == 9
    assert not_in_src(product, m) == 1
"""

from __future__ import annotations

from dataclasses import dataclass
import inspect
import logging
from pathlib import Path
from types import ModuleType
from typing import Any

from insrc.boundary import default_boundary, module_boundary
from insrc.dispatch import CallExpression, ResolvedImplementation, resolve
from insrc.exceptions import NotInBoundaryError, UnexpectedlyInBoundaryError
from insrc.paths import is_same_or_subdirectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Classification:
    resolved: ResolvedImplementation
    boundary: Path
    inside: bool


def classify(call_expr: CallExpression, boundary: Path) -> Classification:
    resolved = resolve(call_expr)
    inside = bool(resolved.origin_dir) and is_same_or_subdirectory(
        boundary, resolved.origin_dir
    )
    logger.debug("%s is %s %s", resolved.qualname, "inside" if inside else "outside", boundary)
    return Classification(resolved=resolved, boundary=boundary, inside=inside)


def _call_expression(
    func: Any, args: tuple[Any, ...], kwargs: dict[str, Any]
) -> CallExpression:
    if isinstance(func, CallExpression):
        if args or kwargs:
            raise TypeError("a CallExpression takes no further arguments")
        return func
    return CallExpression.of(func, args, kwargs)


def _caller_file() -> str:
    # Two frames up: past this helper and past the public check.
    frame = inspect.currentframe()
    try:
        caller = frame.f_back.f_back
        return caller.f_code.co_filename
    finally:
        del frame


def _require(
    construct: str, call_expr: CallExpression, boundary: Path, *, inside: bool
) -> Any:
    result = classify(call_expr, boundary)
    if result.inside != inside:
        error = NotInBoundaryError if inside else UnexpectedlyInBoundaryError
        raise error(
            construct=construct,
            qualname=result.resolved.qualname,
            origin_path=result.resolved.origin_path,
            boundary=boundary,
        )
    return call_expr.evaluate()


def is_in_src(func: Any, /, *args: Any, **kwargs: Any) -> bool:
    """Return whether ``func(*args, **kwargs)`` would run code under ``../src``.

    The call is not evaluated.
    """
    boundary = default_boundary(_caller_file())
    return classify(_call_expression(func, args, kwargs), boundary).inside


def in_src(func: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Evaluate ``func(*args, **kwargs)`` if it dispatches to code under ``../src``.

    Otherwise raise :class:`~insrc.exceptions.NotInBoundaryError` without
    evaluating.
    """
    boundary = default_boundary(_caller_file())
    return _require("in_src", _call_expression(func, args, kwargs), boundary, inside=True)


def not_in_src(func: Any, /, *args: Any, **kwargs: Any) -> Any:
    """The converse of :func:`in_src`: raise if the implementation *is* under ``../src``."""
    boundary = default_boundary(_caller_file())
    return _require("not_in_src", _call_expression(func, args, kwargs), boundary, inside=False)


def is_in_module(module: ModuleType | str, func: Any, /, *args: Any, **kwargs: Any) -> bool:
    """Return whether ``func(*args, **kwargs)`` would run code in ``module``'s source tree."""
    boundary = module_boundary(module)
    return classify(_call_expression(func, args, kwargs), boundary).inside


def in_module(module: ModuleType | str, func: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Like :func:`in_src`, against ``module``'s source tree."""
    boundary = module_boundary(module)
    return _require("in_module", _call_expression(func, args, kwargs), boundary, inside=True)


def not_in_module(module: ModuleType | str, func: Any, /, *args: Any, **kwargs: Any) -> Any:
    """Like :func:`not_in_src`, against ``module``'s source tree."""
    boundary = module_boundary(module)
    return _require(
        "not_in_module", _call_expression(func, args, kwargs), boundary, inside=False
    )
