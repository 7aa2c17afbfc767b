"""Dispatch resolution without evaluation.

A :class:`CallExpression` is a deferred call: it records the callable, the
argument values the test supplies and their types. :func:`resolve` reads the
types only and reports which concrete implementation a live call would run,
along with the source file that implementation was defined in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import functools
import inspect
import logging
import os
import types
from typing import Any, Callable, Mapping

from insrc.exceptions import NoApplicableImplementation

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallExpression:
    target: Any
    args: tuple[Any, ...] = ()
    kwargs: Mapping[str, Any] = field(default_factory=dict)
    arg_types: tuple[type, ...] = ()
    method_name: str | None = None
    evaluable: bool = True

    @classmethod
    def of(
        cls,
        func: Callable[..., Any],
        args: tuple[Any, ...] = (),
        kwargs: Mapping[str, Any] | None = None,
    ) -> "CallExpression":
        return cls(
            target=func,
            args=tuple(args),
            kwargs=dict(kwargs or {}),
            arg_types=tuple(type(arg) for arg in args),
        )

    @classmethod
    def method(cls, obj: Any, name: str, *args: Any, **kwargs: Any) -> "CallExpression":
        """Defer ``obj.name(*args, **kwargs)``.

        The method is looked up statically on ``obj`` so that descriptors
        are not triggered while resolving.
        """
        return cls(
            target=obj,
            args=args,
            kwargs=kwargs,
            arg_types=tuple(type(arg) for arg in args),
            method_name=name,
        )

    @classmethod
    def from_types(
        cls,
        func: Any,
        arg_types: tuple[type, ...] = (),
        *,
        method_name: str | None = None,
    ) -> "CallExpression":
        return cls(
            target=func,
            arg_types=tuple(arg_types),
            method_name=method_name,
            evaluable=False,
        )

    def evaluate(self) -> Any:
        if not self.evaluable:
            raise TypeError(f"{self.describe()} was built from types and cannot be evaluated")
        func = self.target
        if self.method_name is not None:
            func = getattr(self.target, self.method_name)
        return func(*self.args, **self.kwargs)

    def describe(self) -> str:
        arg_names = ", ".join(arg_type.__name__ for arg_type in self.arg_types)
        if self.method_name is not None:
            owner = self.target if inspect.isclass(self.target) else type(self.target)
            return f"{owner.__qualname__}.{self.method_name}({arg_names})"
        if inspect.isclass(self.target) or inspect.isroutine(self.target):
            name = self.target.__qualname__
        else:
            name = type(self.target).__qualname__
        return f"{name}({arg_names})"


def call(func: Callable[..., Any], /, *args: Any, **kwargs: Any) -> CallExpression:
    return CallExpression.of(func, args, kwargs)


def method_call(obj: Any, name: str, /, *args: Any, **kwargs: Any) -> CallExpression:
    return CallExpression.method(obj, name, *args, **kwargs)


@dataclass(frozen=True)
class ResolvedImplementation:
    implementation: Any
    origin_path: str
    via: str

    @property
    def qualname(self) -> str:
        name = getattr(self.implementation, "__qualname__", None)
        if name is None:
            name = getattr(self.implementation, "__name__", repr(self.implementation))
        module = getattr(self.implementation, "__module__", None)
        if module and module != "builtins":
            return f"{module}.{name}"
        return str(name)

    @property
    def origin_dir(self) -> str:
        if not self.origin_path:
            return ""
        return os.path.dirname(self.origin_path)


def _is_singledispatch(obj: object) -> bool:
    # functools.singledispatch wrappers are plain functions exposing their
    # registry as a read-only mappingproxy.
    return inspect.isfunction(obj) and isinstance(
        inspect.getattr_static(obj, "registry", None), types.MappingProxyType
    )


def _singledispatchmethod_of(obj: object) -> functools.singledispatchmethod | None:
    # Accessing a singledispatchmethod through an instance hands back either a
    # function whose ``register`` is bound to the descriptor, or a getter
    # object holding the descriptor as ``_unbound``.
    if inspect.isfunction(obj):
        register = inspect.getattr_static(obj, "register", None)
        owner = register.__self__ if inspect.ismethod(register) else None
    else:
        owner = inspect.getattr_static(obj, "_unbound", None)
    if isinstance(owner, functools.singledispatchmethod):
        return owner
    return None


def _first_arg_type(target: object, arg_types: tuple[type, ...]) -> type:
    if not arg_types:
        raise NoApplicableImplementation(
            f"{target!r} dispatches on its first positional argument, but none was given",
            target=target,
            arg_types=arg_types,
        )
    return arg_types[0]


def _unwrap_descriptor(raw: object) -> object:
    if isinstance(raw, (staticmethod, classmethod)):
        return raw.__func__
    return raw


def _mro_lookup(owner: type, names: tuple[str, ...]) -> tuple[type, object] | None:
    for name in names:
        for klass in inspect.getmro(owner):
            if klass is object:
                continue
            if name in vars(klass):
                return klass, vars(klass)[name]
    return None


def _resolve_callable(target: Any, arg_types: tuple[type, ...]) -> tuple[object, str]:
    if isinstance(target, functools.partial):
        bound_types = tuple(type(arg) for arg in target.args)
        return _resolve_callable(target.func, bound_types + arg_types)
    if inspect.isclass(target):
        found = _mro_lookup(target, ("__init__", "__new__"))
        if found is None:
            return object.__init__, "constructor"
        _klass, raw = found
        return _unwrap_descriptor(raw), "constructor"
    method = _singledispatchmethod_of(target)
    if method is not None:
        impl = method.dispatcher.dispatch(_first_arg_type(target, arg_types))
        return _unwrap_descriptor(impl), "singledispatchmethod"
    if _is_singledispatch(target):
        return target.dispatch(_first_arg_type(target, arg_types)), "singledispatch"
    if inspect.ismethod(target):
        return target.__func__, "bound_method"
    if inspect.isroutine(target):
        return target, "function"
    if callable(target):
        found = _mro_lookup(type(target), ("__call__",))
        if found is not None:
            _klass, raw = found
            return _unwrap_descriptor(raw), "call_operator"
    raise NoApplicableImplementation(
        f"{target!r} is not callable",
        target=target,
        arg_types=arg_types,
    )


def _resolve_method(call_expr: CallExpression) -> tuple[object, str]:
    name = call_expr.method_name
    try:
        raw = inspect.getattr_static(call_expr.target, name)
    except AttributeError as exc:
        raise NoApplicableImplementation(
            f"no method {name!r} for {call_expr.describe()}",
            target=call_expr.target,
            arg_types=call_expr.arg_types,
        ) from exc
    if isinstance(raw, functools.singledispatchmethod):
        impl = raw.dispatcher.dispatch(_first_arg_type(raw, call_expr.arg_types))
        return _unwrap_descriptor(impl), "singledispatchmethod"
    raw = _unwrap_descriptor(raw)
    if inspect.isfunction(raw):
        return raw, "method"
    impl, _via = _resolve_callable(raw, call_expr.arg_types)
    return impl, "method"


def origin_path(implementation: object) -> str:
    """Return the absolute source file of ``implementation``, or ``""``.

    Built-ins and implementations compiled from strings have no origin.
    """
    try:
        source = inspect.getsourcefile(implementation)
    except TypeError:
        return ""
    if not source:
        return ""
    return os.path.abspath(source)


def resolve(call_expr: CallExpression) -> ResolvedImplementation:
    """Resolve ``call_expr`` to the implementation a live call would run.

    Raises :class:`NoApplicableImplementation` when nothing matches.
    """
    if call_expr.method_name is not None:
        impl, via = _resolve_method(call_expr)
    else:
        impl, via = _resolve_callable(call_expr.target, call_expr.arg_types)
    impl = inspect.unwrap(impl, stop=_is_singledispatch)
    resolved = ResolvedImplementation(
        implementation=impl,
        origin_path=origin_path(impl),
        via=via,
    )
    logger.debug(
        "resolved %s via %s to %s (%s)",
        call_expr.describe(),
        via,
        resolved.qualname,
        resolved.origin_path or "no source",
    )
    return resolved
