"""Source directory name for the ``insrc where`` command."""

from __future__ import annotations

import os
from pathlib import Path
import tomllib

from insrc.boundary import DEFAULT_SRC_DIR

DEFAULT_CONFIG_NAME = "insrc.toml"
PYPROJECT_NAME = "pyproject.toml"
SRC_DIR_ENV = "INSRC_SRC_DIR"


def _load_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError):
        return {}


def _table(data: object, *keys: str) -> dict[str, object]:
    for key in keys:
        data = data.get(key, {}) if isinstance(data, dict) else {}
    return data if isinstance(data, dict) else {}


def boundary_defaults(root: Path) -> dict[str, object]:
    """Return the ``[boundary]`` table.

    ``insrc.toml`` wins over ``[tool.insrc.boundary]`` in ``pyproject.toml``.
    """
    section = _table(_load_toml(root / DEFAULT_CONFIG_NAME), "boundary")
    if section:
        return section
    return _table(_load_toml(root / PYPROJECT_NAME), "tool", "insrc", "boundary")


def source_dir_name(root: Path) -> str:
    override = os.getenv(SRC_DIR_ENV, "").strip()
    if override:
        return override
    value = boundary_defaults(root).get("src_dir")
    if isinstance(value, str) and value.strip():
        return value.strip()
    return DEFAULT_SRC_DIR
