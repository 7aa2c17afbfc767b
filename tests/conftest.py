from __future__ import annotations

from dataclasses import dataclass
import importlib.util
import sys
import textwrap
from pathlib import Path
from types import ModuleType

ROOT = Path(__file__).resolve().parents[1]
for _path in (ROOT / "src", ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))


import pytest

_GENERIC_OPS = """
from functools import singledispatch

CALLS = []


@singledispatch
def area(shape):
    CALLS.append(("generic", shape))
    return 0


class Circle:
    def __init__(self, radius):
        self.radius = radius
"""

_SHAPES = """
import insrc_fixture_generic_ops as generic_ops


class Square:
    def __init__(self, side):
        self.side = side


@generic_ops.area.register(Square)
def _square_area(shape):
    generic_ops.CALLS.append(("square", shape))
    return shape.side ** 2
"""

_CHECKS = """
import insrc_fixture_generic_ops as generic_ops
import insrc_fixture_shapes as shapes
from insrc import in_module, in_src, is_in_module, is_in_src, not_in_module, not_in_src


def query(shape):
    return is_in_src(generic_ops.area, shape)


def require(shape):
    return in_src(generic_ops.area, shape)


def forbid(shape):
    return not_in_src(generic_ops.area, shape)


def query_module(module, shape):
    return is_in_module(module, generic_ops.area, shape)


def require_module(module, shape):
    return in_module(module, generic_ops.area, shape)


def forbid_module(module, shape):
    return not_in_module(module, generic_ops.area, shape)
"""


@dataclass(frozen=True)
class SyntheticProject:
    root: Path
    generic_ops: ModuleType
    shapes: ModuleType
    checks: ModuleType


def _load(name: str, path: Path) -> ModuleType:
    spec = importlib.util.spec_from_file_location(name, path)
    module = importlib.util.module_from_spec(spec)
    sys.modules[name] = module
    spec.loader.exec_module(module)
    return module


@pytest.fixture
def synthetic_project(tmp_path: Path):
    """A project with ``lib/`` (generic fallback), ``src/`` and ``tests/``."""
    files = {
        tmp_path / "lib" / "generic_ops.py": _GENERIC_OPS,
        tmp_path / "src" / "shapes.py": _SHAPES,
        tmp_path / "tests" / "check_shapes.py": _CHECKS,
    }
    for path, text in files.items():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(text), encoding="utf-8")
    names = (
        "insrc_fixture_generic_ops",
        "insrc_fixture_shapes",
        "insrc_fixture_checks",
    )
    try:
        generic_ops = _load(names[0], tmp_path / "lib" / "generic_ops.py")
        shapes = _load(names[1], tmp_path / "src" / "shapes.py")
        checks = _load(names[2], tmp_path / "tests" / "check_shapes.py")
        yield SyntheticProject(
            root=tmp_path,
            generic_ops=generic_ops,
            shapes=shapes,
            checks=checks,
        )
    finally:
        for name in names:
            sys.modules.pop(name, None)
