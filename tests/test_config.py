from __future__ import annotations

from pathlib import Path

from insrc import config
from tests.env_helpers import env_scope


def test_boundary_defaults_missing_or_invalid_is_empty(tmp_path: Path) -> None:
    assert config.boundary_defaults(tmp_path) == {}
    (tmp_path / "insrc.toml").write_text("[boundary\n", encoding="utf-8")
    assert config.boundary_defaults(tmp_path) == {}


def test_boundary_defaults_prefers_insrc_toml(tmp_path: Path) -> None:
    (tmp_path / "insrc.toml").write_text('[boundary]\nsrc_dir = "lib"\n', encoding="utf-8")
    (tmp_path / "pyproject.toml").write_text(
        '[tool.insrc.boundary]\nsrc_dir = "python"\n', encoding="utf-8"
    )
    assert config.boundary_defaults(tmp_path) == {"src_dir": "lib"}


def test_boundary_defaults_reads_pyproject_tool_table(tmp_path: Path) -> None:
    (tmp_path / "pyproject.toml").write_text(
        '[project]\nname = "demo"\n\n[tool.insrc.boundary]\nsrc_dir = "python"\n',
        encoding="utf-8",
    )
    assert config.boundary_defaults(tmp_path) == {"src_dir": "python"}


def test_source_dir_name_precedence(tmp_path: Path) -> None:
    with env_scope({config.SRC_DIR_ENV: None}):
        assert config.source_dir_name(tmp_path) == "src"
        (tmp_path / "insrc.toml").write_text('[boundary]\nsrc_dir = " lib "\n', encoding="utf-8")
        assert config.source_dir_name(tmp_path) == "lib"
    with env_scope({config.SRC_DIR_ENV: "source"}):
        assert config.source_dir_name(tmp_path) == "source"


def test_source_dir_name_ignores_blank_values(tmp_path: Path) -> None:
    (tmp_path / "insrc.toml").write_text('[boundary]\nsrc_dir = ""\n', encoding="utf-8")
    with env_scope({config.SRC_DIR_ENV: "  "}):
        assert config.source_dir_name(tmp_path) == "src"
