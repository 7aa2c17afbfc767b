"""Path-segment algebra for boundary membership."""

from __future__ import annotations

import os
from pathlib import PurePath
from typing import TypeAlias

PathLike: TypeAlias = str | os.PathLike[str]


def path_parts(path: PathLike) -> tuple[str, ...]:
    """Return the normalized segments of ``path``.

    ``.`` and ``..`` are collapsed and trailing separators dropped, so
    ``/a/b/`` and ``/a/./c/../b`` both yield ``('/', 'a', 'b')``.
    """
    return PurePath(os.path.normpath(os.fspath(path))).parts


def is_subdirectory(parent: PathLike, candidate: PathLike) -> bool:
    """Return ``True`` if ``candidate`` is strictly nested under ``parent``.

    Equal paths are not subdirectories of each other; use
    :func:`is_same_or_subdirectory` for membership tests.
    """
    parent_parts = path_parts(parent)
    candidate_parts = path_parts(candidate)
    if len(candidate_parts) <= len(parent_parts):
        return False
    return candidate_parts[: len(parent_parts)] == parent_parts


def is_same_or_subdirectory(parent: PathLike, candidate: PathLike) -> bool:
    if path_parts(parent) == path_parts(candidate):
        return True
    return is_subdirectory(parent, candidate)
