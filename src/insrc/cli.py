from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import importlib
import json

import typer

from insrc.boundary import module_boundary, source_root
from insrc.config import source_dir_name
from insrc.checks import classify
from insrc.dispatch import CallExpression
from insrc.exceptions import InsrcError
from insrc.schema import WhereReportDTO

app = typer.Typer(add_completion=False)

_REQUIRE_CHOICES = ("inside", "outside")


def load_object(spec: str) -> object:
    """Import ``module:qualname`` and return the named attribute."""
    module_name, sep, qualname = spec.partition(":")
    if not sep or not module_name or not qualname:
        raise typer.BadParameter(f"expected 'module:qualname', got {spec!r}")
    try:
        obj: object = importlib.import_module(module_name)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import {module_name!r}: {exc}") from exc
    for part in qualname.split("."):
        try:
            obj = getattr(obj, part)
        except AttributeError as exc:
            raise typer.BadParameter(f"{spec!r} has no attribute {part!r}") from exc
    return obj


def _load_type(spec: str) -> type:
    obj = load_object(spec)
    if not isinstance(obj, type):
        raise typer.BadParameter(f"{spec!r} is not a type")
    return obj


def _boundary(root: Path, module: Optional[str]) -> Path:
    if module is None:
        return source_root(root, src_dir=source_dir_name(root))
    try:
        loaded = importlib.import_module(module)
    except ImportError as exc:
        raise typer.BadParameter(f"cannot import {module!r}: {exc}") from exc
    try:
        return module_boundary(loaded)
    except InsrcError as exc:
        raise typer.BadParameter(str(exc)) from exc


@app.command()
def where(
    target: str = typer.Argument(..., help="Callable (or class with --method) as module:qualname."),
    types: Optional[List[str]] = typer.Option(None, "--type", help="Argument type as module:qualname."),
    method: Optional[str] = typer.Option(None, "--method", help="Resolve this method on TARGET."),
    root: Path = typer.Option(Path("."), "--root"),
    module: Optional[str] = typer.Option(
        None, "--module", help="Classify against this module's source tree instead of ROOT/src."
    ),
    require: Optional[str] = typer.Option(
        None, "--require", help="Exit 1 unless the implementation is 'inside' or 'outside'."
    ),
) -> None:
    """Report which implementation a call would dispatch to, and where it lives."""
    types = list(types or [])
    if require is not None and require not in _REQUIRE_CHOICES:
        raise typer.BadParameter("require must be 'inside' or 'outside'")
    call_expr = CallExpression.from_types(
        load_object(target),
        tuple(_load_type(spec) for spec in types),
        method_name=method,
    )
    boundary = _boundary(root, module)
    try:
        result = classify(call_expr, boundary)
    except InsrcError as exc:
        raise typer.BadParameter(str(exc)) from exc
    report = WhereReportDTO(
        target=target if method is None else f"{target}.{method}",
        arg_types=list(types),
        implementation=result.resolved.qualname,
        via=result.resolved.via,
        origin_path=result.resolved.origin_path,
        boundary=str(result.boundary),
        inside=result.inside,
    )
    typer.echo(json.dumps(report.model_dump(), indent=2, sort_keys=True))
    if require is not None and result.inside != (require == "inside"):
        raise typer.Exit(code=1)


@app.callback()
def _root() -> None:
    """Inspect where dispatched implementations are defined."""


def main() -> None:
    app()
