"""Boundary directories that resolved implementations are classified against."""

from __future__ import annotations

import os
from pathlib import Path
import sys
from types import ModuleType

from insrc.exceptions import ModuleSourceUnresolvable
from insrc.paths import PathLike

DEFAULT_SRC_DIR = "src"


def source_root(project_root: PathLike, *, src_dir: str = DEFAULT_SRC_DIR) -> Path:
    root = Path(os.path.abspath(os.fspath(project_root)))
    return Path(os.path.normpath(root / src_dir))


def default_boundary(current_file: PathLike, *, src_dir: str = DEFAULT_SRC_DIR) -> Path:
    """Return the source tree next to the directory holding ``current_file``.

    For ``<project>/tests/test_x.py`` this is ``<project>/src``. The
    directory is only compared against, so it need not exist.
    """
    test_dir = Path(os.path.abspath(os.fspath(current_file))).parent
    return source_root(test_dir.parent, src_dir=src_dir)


def _loaded_module(module: ModuleType | str) -> ModuleType:
    if isinstance(module, ModuleType):
        return module
    loaded = sys.modules.get(module)
    if loaded is None:
        raise ModuleSourceUnresolvable(f"module {module!r} is not loaded", module=module)
    return loaded


def module_boundary(module: ModuleType | str) -> Path:
    """Return the directory holding the top-level source file of ``module``.

    Submodules map to their root package, so ``pkg.sub`` and ``pkg`` share
    a boundary.
    """
    loaded = _loaded_module(module)
    root_name = loaded.__name__.partition(".")[0]
    root = sys.modules.get(root_name, loaded)
    source = getattr(root, "__file__", None)
    if not source:
        raise ModuleSourceUnresolvable(
            f"module {root_name!r} has no source file", module=module
        )
    return Path(os.path.dirname(os.path.abspath(source)))
