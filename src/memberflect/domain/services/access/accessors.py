#!/usr/bin/env python3

"""Compiled accessors bound to one resolved member.

Every variant exposes the same four operations (get, set, invoke, construct)
and raises UnsupportedOperationError for the ones its member kind lacks, so
callers can drive fields, properties, methods and constructors through the
same call sites. Accessors hold no mutable state after construction.
"""

from collections.abc import Callable, Sequence
from typing import Any

from ...models.errors import UnsupportedOperationError
from ...models.member_descriptor import MemberDescriptor
from ...models.ref import Ref
from ..resolution.type_compat import check_value, coerce_argument


def _require_instance(instance: Any, label: str) -> Any:
    if instance is None:
        raise TypeError(f"'{label}' is an instance member and needs an instance")
    return instance


class Accessor:
    """Uniform capability surface over a resolved member."""

    operations: frozenset[str] = frozenset()

    def __init__(self, descriptor: MemberDescriptor):
        self.descriptor = descriptor
        self.label = descriptor.qualified_name()

    def supports(self, operation: str) -> bool:
        return operation in self.operations

    def get(self, instance: Any = None) -> Any:
        raise UnsupportedOperationError(self.label, "get")

    def set(self, instance: Any, value: Any) -> None:
        raise UnsupportedOperationError(self.label, "set")

    def invoke(self, instance: Any = None, args: Sequence[Any] = ()) -> Any:
        raise UnsupportedOperationError(self.label, "invoke")

    def construct(self, args: Sequence[Any] = ()) -> Any:
        raise UnsupportedOperationError(self.label, "construct")

    def check_value(self, value: Any) -> None:
        """Validate a value for ``set`` without storing it."""
        raise UnsupportedOperationError(self.label, "set")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.label})"


class FieldAccessor(Accessor):
    """Reads and writes raw attribute storage.

    Static fields live on the declaring class. Instance fields are written with
    ``object.__setattr__``, bypassing ``__setattr__`` overrides and frozen
    dataclass guards.
    """

    operations = frozenset({"get", "set"})

    def __init__(self, descriptor: MemberDescriptor):
        super().__init__(descriptor)
        name = descriptor.name
        label = self.label

        if descriptor.is_static:
            holder = descriptor.declaring_type
            self._getter: Callable[[Any], Any] = lambda instance: getattr(holder, name)
            self._setter: Callable[[Any, Any], None] = (
                lambda instance, value: setattr(holder, name, value)
            )
        else:
            self._getter = lambda instance: getattr(_require_instance(instance, label), name)
            self._setter = lambda instance, value: object.__setattr__(
                _require_instance(instance, label), name, value
            )

    def get(self, instance: Any = None) -> Any:
        return self._getter(instance)

    def set(self, instance: Any, value: Any) -> None:
        self.check_value(value)
        self._setter(instance, value)

    def check_value(self, value: Any) -> None:
        check_value(value, self.descriptor.declared_type, self.label)


class PropertyAccessor(Accessor):
    """Calls a property's getter and setter.

    Static properties pass the owner type (the type the lookup was issued
    against) where an instance property would receive the instance.
    """

    def __init__(self, descriptor: MemberDescriptor):
        super().__init__(descriptor)
        prop = descriptor.member
        fget, fset = prop.fget, prop.fset
        label = self.label

        self._getter: Callable[[Any], Any] | None = None
        self._setter: Callable[[Any, Any], Any] | None = None
        if descriptor.is_static:
            owner = descriptor.owner_type
            if fget is not None:
                self._getter = lambda instance: fget(owner)
            if fset is not None:
                self._setter = lambda instance, value: fset(owner, value)
        else:
            if fget is not None:
                self._getter = lambda instance: fget(_require_instance(instance, label))
            if fset is not None:
                self._setter = lambda instance, value: fset(_require_instance(instance, label), value)

        self.operations = frozenset(
            op for op, fn in (("get", self._getter), ("set", self._setter)) if fn is not None
        )

    def get(self, instance: Any = None) -> Any:
        if self._getter is None:
            raise UnsupportedOperationError(self.label, "get")
        return self._getter(instance)

    def set(self, instance: Any, value: Any) -> None:
        self.check_value(value)
        self._setter(instance, value)  # type: ignore[misc]

    def check_value(self, value: Any) -> None:
        if self._setter is None:
            raise UnsupportedOperationError(self.label, "set")
        check_value(value, self.descriptor.declared_type, self.label)


class _ArgumentBinder:
    """Prepares positional arguments: numeric widening and by-ref cells."""

    def __init__(self, descriptor: MemberDescriptor):
        fixed = [p for p in descriptor.parameters if not p.variadic]
        variadic = next((p for p in descriptor.parameters if p.variadic), None)
        self._fixed_types = tuple(p.annotation for p in fixed)
        self._variadic_type = variadic.annotation if variadic is not None else Any
        self._by_ref_slots = tuple(i for i, p in enumerate(fixed) if p.by_ref)

    def bind(self, args: Sequence[Any]) -> tuple[list[Any], list[tuple[int, Ref]]]:
        """
        Build the call argument list.

        Args:
            args: Caller's arguments

        Returns:
            Tuple of (call arguments, [(slot, cell)] needing write-back)

        Raises:
            TypeError: If a by-ref slot needs write-back but args is not a list
        """
        call_args = [
            coerce_argument(arg, self._fixed_types[i] if i < len(self._fixed_types) else self._variadic_type)
            for i, arg in enumerate(args)
        ]

        cells: list[tuple[int, Ref]] = []
        for slot in self._by_ref_slots:
            if slot >= len(call_args) or isinstance(call_args[slot], Ref):
                continue
            cell = Ref(call_args[slot])
            call_args[slot] = cell
            cells.append((slot, cell))

        if cells and not isinstance(args, list):
            raise TypeError("by-reference arguments require a mutable list of arguments")
        return call_args, cells

    @staticmethod
    def write_back(args: Sequence[Any], cells: list[tuple[int, Ref]]) -> None:
        for slot, cell in cells:
            args[slot] = cell.value  # type: ignore[index]


class MethodInvoker(Accessor):
    """Invokes a method with a positional argument list.

    By-ref parameters (annotated ``Ref``) see a fresh cell when the caller
    passes a plain value; after the call the cell's value replaces that
    argument in the caller's list. The result is returned as produced, so a
    covariant return keeps its concrete type.
    """

    operations = frozenset({"invoke"})

    def __init__(self, descriptor: MemberDescriptor):
        super().__init__(descriptor)
        self._binder = _ArgumentBinder(descriptor)
        raw = descriptor.member
        label = self.label

        if isinstance(raw, staticmethod):
            func = raw.__func__
            self._call: Callable[[Any, list[Any]], Any] = lambda instance, call_args: func(*call_args)
        elif isinstance(raw, classmethod):
            func = raw.__func__
            owner = descriptor.owner_type
            self._call = lambda instance, call_args: func(owner, *call_args)
        else:
            self._call = lambda instance, call_args: raw(_require_instance(instance, label), *call_args)

    def invoke(self, instance: Any = None, args: Sequence[Any] = ()) -> Any:
        call_args, cells = self._binder.bind(args)
        result = self._call(instance, call_args)
        self._binder.write_back(args, cells)
        return result

    def __call__(self, instance: Any = None, *args: Any) -> Any:
        return self.invoke(instance, list(args))


class ConstructorInvoker(Accessor):
    """Creates instances of the owner type with the same argument rules as methods."""

    operations = frozenset({"construct"})

    def __init__(self, descriptor: MemberDescriptor):
        super().__init__(descriptor)
        self._binder = _ArgumentBinder(descriptor)
        self._factory = descriptor.owner_type

    def construct(self, args: Sequence[Any] = ()) -> Any:
        call_args, cells = self._binder.bind(args)
        instance = self._factory(*call_args)
        self._binder.write_back(args, cells)
        return instance

    def __call__(self, *args: Any) -> Any:
        return self.construct(list(args))
