#!/usr/bin/env python3

"""Per-class member scanning with a grow-only scan cache.

Each class in a hierarchy is scanned once for the members its own body
declares. Classification rules:

- annotated names are instance fields, or static fields when wrapped in ``ClassVar``
- ``__slots__`` entries are instance fields
- ``self.<name>`` assignments in the class's own ``__init__`` are instance fields
- ``property`` / ``static_property`` objects are instance / static properties
- plain functions are instance methods; ``staticmethod`` and ``classmethod`` are static
- remaining plain, non-callable, non-dunder class attributes are static fields
"""

import ast
import inspect
import textwrap
import threading
import types
import typing
from dataclasses import InitVar, dataclass
from typing import Any, ClassVar

from ....infrastructure.config import get_config
from ....infrastructure.logging import get_logger, log_timing
from ...models.member_descriptor import (
    MemberDescriptor,
    explicit_prefixes,
    is_public_name,
    trim_explicit_name,
)
from ...models.member_kind import MemberKind
from ...models.parameter_info import ParameterInfo
from ...models.ref import is_ref_annotation
from ...models.static_property import static_property

logger = get_logger(__name__)

_CONSTRUCTOR_NAMES = frozenset({"__init__", "__new__"})
# Compiler-generated annotation hook (3.14+)
_GENERATED_NAMES = frozenset({"__annotate__"})
# Implicitly static or class-bound hooks the interpreter calls itself
_IMPLICIT_HOOKS = frozenset({"__new__", "__init_subclass__", "__class_getitem__"})
_SLOT_EXCLUDES = frozenset({"__dict__", "__weakref__"})
_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class TypeScan:
    """Members declared directly in one class body."""

    type: type
    members: tuple[MemberDescriptor, ...]

    def of_kind(self, kind: MemberKind) -> list[MemberDescriptor]:
        return [m for m in self.members if m.kind is kind]


def _normalize(annotation: Any) -> Any:
    if annotation is inspect.Parameter.empty or isinstance(annotation, str):
        return Any
    return annotation


def _is_classvar(annotation: Any) -> bool:
    if isinstance(annotation, str):
        return annotation.startswith(("ClassVar", "typing.ClassVar"))
    return annotation is ClassVar or typing.get_origin(annotation) is ClassVar


def _classvar_inner(annotation: Any) -> Any:
    args = typing.get_args(annotation) if not isinstance(annotation, str) else ()
    return args[0] if args else Any


def _is_initvar(annotation: Any) -> bool:
    return annotation is InitVar or isinstance(annotation, InitVar)


def _is_dunder(name: str) -> bool:
    return len(name) > 4 and name.startswith("__") and name.endswith("__")


def _class_annotations(cls: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(cls, eval_str=True))
    except Exception as e:
        logger.debug(f"Could not evaluate annotations of {cls.__qualname__}: {e}")
        return dict(inspect.get_annotations(cls))


def _function_hints(func: Any) -> dict[str, Any]:
    try:
        return typing.get_type_hints(func)
    except Exception as e:
        logger.debug(f"Could not evaluate hints of {getattr(func, '__qualname__', func)}: {e}")
        return dict(getattr(func, "__annotations__", {}) or {})


def _slot_names(cls: type) -> list[str]:
    slots = cls.__dict__.get("__slots__", ())
    if isinstance(slots, str):
        slots = (slots,)
    return [name for name in slots if name not in _SLOT_EXCLUDES]


def _mangle(cls: type, name: str) -> str:
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name


def _attribute_targets(node: ast.AST, receiver: str) -> list[str]:
    if isinstance(node, (ast.Tuple, ast.List)):
        return [name for element in node.elts for name in _attribute_targets(element, receiver)]
    if isinstance(node, ast.Starred):
        return _attribute_targets(node.value, receiver)
    if (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == receiver
    ):
        return [node.attr]
    return []


def _init_assignments(cls: type) -> list[str]:
    """
    Attribute names assigned on ``self`` inside the class's own ``__init__``.

    Classes without retrievable source (builtins, generated dataclass
    initializers, classes defined in a REPL) yield no names.

    Args:
        cls: Class whose ``__init__`` body is read

    Returns:
        Assigned names in source order, without duplicates
    """
    init = cls.__dict__.get("__init__")
    if not isinstance(init, types.FunctionType):
        return []

    try:
        tree = ast.parse(textwrap.dedent(inspect.getsource(init)))
    except (OSError, TypeError, SyntaxError) as e:
        logger.debug(f"No __init__ source for {cls.__qualname__}: {e}")
        return []

    func = tree.body[0] if tree.body else None
    if not isinstance(func, (ast.FunctionDef, ast.AsyncFunctionDef)):
        return []
    positional = func.args.posonlyargs + func.args.args
    if not positional:
        return []
    receiver = positional[0].arg

    names: list[str] = []
    for node in ast.walk(func):
        if isinstance(node, ast.Assign):
            targets = node.targets
        elif isinstance(node, (ast.AnnAssign, ast.AugAssign)):
            targets = [node.target]
        else:
            continue
        for target in targets:
            for name in _attribute_targets(target, receiver):
                if name not in names:
                    names.append(name)
    return names


def build_parameters(
    signature: inspect.Signature,
    hints: dict[str, Any],
    skip_first: bool,
    fallback_hints: dict[str, Any] | None = None,
) -> tuple[ParameterInfo, ...]:
    """
    Convert a signature into positional ParameterInfo entries.

    Args:
        signature: Signature of the callable
        hints: Evaluated type hints of the callable
        skip_first: Drop the leading self/cls parameter
        fallback_hints: Hints consulted when the callable has none for a name

    Returns:
        Tuple of ParameterInfo in positional order (keyword-only parameters excluded)
    """
    params = list(signature.parameters.values())
    if skip_first and params and params[0].kind in _POSITIONAL:
        params = params[1:]

    infos = []
    for param in params:
        if param.kind not in _POSITIONAL and param.kind is not inspect.Parameter.VAR_POSITIONAL:
            continue
        annotation = hints.get(param.name, param.annotation)
        if (annotation is inspect.Parameter.empty or isinstance(annotation, str)) and fallback_hints:
            annotation = fallback_hints.get(param.name, annotation)
        annotation = _normalize(annotation)
        infos.append(
            ParameterInfo(
                name=param.name,
                annotation=annotation,
                by_ref=is_ref_annotation(annotation),
                has_default=param.default is not inspect.Parameter.empty,
                variadic=param.kind is inspect.Parameter.VAR_POSITIONAL,
            )
        )
    return tuple(infos)


class TypeScanner:
    """Scans class bodies into member descriptors and caches the result per class.

    The cache is shared, grow-only, and safe for concurrent use: lookups read a
    plain dict without locking, inserts go through ``setdefault`` under a lock so
    racing scans of the same class converge on one stored result.
    """

    def __init__(self, enable_cache: bool | None = None):
        if enable_cache is None:
            enable_cache = bool(get_config()["ENABLE_SCAN_CACHE"])
        self.enable_cache = enable_cache
        self._scans: dict[type, TypeScan] = {}
        self._constructors: dict[type, MemberDescriptor | None] = {}
        self._lock = threading.Lock()

    def hierarchy(self, cls: type, declared_only: bool = False) -> tuple[type, ...]:
        """Classes to search, most derived first; ``object`` is never scanned."""
        if declared_only:
            return (cls,)
        return tuple(c for c in cls.__mro__ if c is not object)

    def scan(self, cls: type) -> TypeScan:
        """Get the declared members of ``cls``, scanning on first use."""
        cached = self._scans.get(cls)
        if cached is not None:
            return cached

        result = self._scan_class(cls)
        if not self.enable_cache:
            return result
        with self._lock:
            return self._scans.setdefault(cls, result)

    def declared_members(self, cls: type, kind: MemberKind) -> list[MemberDescriptor]:
        return self.scan(cls).of_kind(kind)

    def constructor(self, cls: type) -> MemberDescriptor | None:
        """Get the effective constructor of ``cls``, or None if it has no signature."""
        if cls in self._constructors:
            return self._constructors[cls]

        result = self._scan_constructor(cls)
        if not self.enable_cache:
            return result
        with self._lock:
            return self._constructors.setdefault(cls, result)

    def clear(self) -> None:
        with self._lock:
            self._scans.clear()
            self._constructors.clear()

    def stats(self) -> dict[str, int]:
        return {"scanned_types": len(self._scans), "constructors": len(self._constructors)}

    @log_timing
    def _scan_class(self, cls: type) -> TypeScan:
        namespace = cls.__dict__
        prefixes = explicit_prefixes(cls.__mro__)
        annotations = _class_annotations(cls)
        members: list[MemberDescriptor] = []
        seen: set[str] = set()

        def add(kind: MemberKind, name: str, declared: Any, is_static: bool,
                member: Any = None, parameters: tuple[ParameterInfo, ...] = ()) -> None:
            seen.add(name)
            members.append(
                MemberDescriptor(
                    owner_type=cls,
                    kind=kind,
                    name=name,
                    declared_type=declared,
                    declaring_type=cls,
                    is_public=is_public_name(name),
                    is_static=is_static,
                    parameters=parameters,
                    simple_name=trim_explicit_name(name, prefixes),
                    member=member,
                )
            )

        for name, annotation in annotations.items():
            raw = namespace.get(name)
            if isinstance(raw, (property, static_property)) or inspect.isroutine(raw):
                continue
            if isinstance(raw, (staticmethod, classmethod)) or _is_initvar(annotation):
                continue
            if _is_classvar(annotation):
                add(MemberKind.FIELD, name, _normalize(_classvar_inner(annotation)), True)
            else:
                add(MemberKind.FIELD, name, _normalize(annotation), False)

        for slot in _slot_names(cls):
            name = _mangle(cls, slot)
            if name not in seen:
                add(MemberKind.FIELD, name, Any, False)

        inherited = self._inherited_field_names(cls)
        for attr in _init_assignments(cls):
            name = _mangle(cls, attr)
            if name in seen or name in inherited:
                continue
            # assignments through a property setter are not storage
            declared = inspect.getattr_static(cls, name, None)
            if isinstance(declared, (property, static_property)) or inspect.isroutine(declared):
                continue
            add(MemberKind.FIELD, name, Any, False)

        for name, raw in namespace.items():
            if name in seen:
                continue
            if isinstance(raw, property):
                add(MemberKind.PROPERTY, name, self._property_type(raw.fget, raw.fset, False), False, raw)
            elif isinstance(raw, static_property):
                add(MemberKind.PROPERTY, name, self._property_type(raw.fget, raw.fset, True), True, raw)
            elif isinstance(raw, (staticmethod, classmethod)):
                if name in _IMPLICIT_HOOKS:
                    continue
                func = raw.__func__
                built = self._callable_parameters(func, skip_first=isinstance(raw, classmethod))
                if built is not None:
                    params, returns = built
                    add(MemberKind.METHOD, name, returns, True, raw, params)
            elif isinstance(raw, types.FunctionType):
                if name in _CONSTRUCTOR_NAMES or name in _GENERATED_NAMES:
                    continue
                built = self._callable_parameters(raw, skip_first=True)
                if built is not None:
                    params, returns = built
                    add(MemberKind.METHOD, name, returns, False, raw, params)
            elif _is_dunder(name) or isinstance(raw, types.MemberDescriptorType):
                continue
            elif callable(raw) or hasattr(type(raw), "__get__"):
                # nested classes, partials, third-party descriptors
                continue
            else:
                add(MemberKind.FIELD, name, Any, True)

        logger.debug(
            f"Scanned {cls.__qualname__}: "
            + ", ".join(f"{len([m for m in members if m.kind is k])} {k.value}s" for k in MemberKind)
        )
        return TypeScan(type=cls, members=tuple(members))

    def _inherited_field_names(self, cls: type) -> set[str]:
        names: set[str] = set()
        for base in cls.__mro__[1:]:
            if base is object:
                continue
            names.update(m.name for m in self.scan(base).of_kind(MemberKind.FIELD) if not m.is_static)
        return names

    def _property_type(self, fget: Any, fset: Any, is_static: bool) -> Any:
        if fget is not None:
            returns = _function_hints(fget).get("return")
            if returns is not None:
                return _normalize(returns)
        if fset is not None:
            try:
                params = list(inspect.signature(fset).parameters.values())
            except (TypeError, ValueError):
                return Any
            if len(params) >= 2:
                return _normalize(_function_hints(fset).get(params[1].name, params[1].annotation))
        return Any

    def _callable_parameters(
        self, func: Any, skip_first: bool
    ) -> tuple[tuple[ParameterInfo, ...], Any] | None:
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError) as e:
            logger.debug(f"Skipping {getattr(func, '__qualname__', func)}: no signature ({e})")
            return None
        hints = _function_hints(func)
        params = build_parameters(signature, hints, skip_first)
        return params, _normalize(hints.get("return", signature.return_annotation))

    def _scan_constructor(self, cls: type) -> MemberDescriptor | None:
        declaring = next(
            (c for c in cls.__mro__ if _CONSTRUCTOR_NAMES & c.__dict__.keys()),
            object,
        )
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as e:
            logger.debug(f"{cls.__qualname__} has no introspectable constructor: {e}")
            return None

        init = declaring.__dict__.get("__init__") or declaring.__dict__.get("__new__")
        if isinstance(init, staticmethod):
            init = init.__func__
        hints = _function_hints(init) if isinstance(init, types.FunctionType) else {}
        try:
            class_hints = typing.get_type_hints(cls)
        except Exception as e:
            logger.debug(f"Could not evaluate class hints of {cls.__qualname__}: {e}")
            class_hints = {}

        return MemberDescriptor(
            owner_type=cls,
            kind=MemberKind.CONSTRUCTOR,
            name="__init__",
            declared_type=cls,
            declaring_type=declaring,
            is_public=True,
            is_static=False,
            parameters=build_parameters(signature, hints, skip_first=False, fallback_hints=class_hints),
            member=init,
        )
