"""Module-level convenience functions backed by one shared Reflector.

The shared instance owns the process-wide accessor and scan caches. Binding
flags are always an explicit argument with a fixed default; nothing here reads
flags from mutable global state.
"""

import threading
from collections.abc import Iterable, Sequence
from typing import Any

from ..domain.models import BindingFlags, MapSpec, MemberDescriptor, MemberKind
from ..domain.services.access import (
    ConstructorInvoker,
    FieldAccessor,
    MethodInvoker,
    PropertyAccessor,
)
from ..domain.services.mapping import MapPlan
from .reflector import Reflector

_shared: Reflector | None = None
_shared_lock = threading.Lock()

DEFAULT = BindingFlags.DEFAULT
MAP_DEFAULT = BindingFlags.INSTANCE_ANY_VISIBILITY


def get_reflector() -> Reflector:
    """Get the process-wide Reflector, creating it on first use."""
    global _shared
    if _shared is None:
        with _shared_lock:
            if _shared is None:
                _shared = Reflector()
    return _shared


def get_field_value(target: Any, name: str, flags: BindingFlags = DEFAULT) -> Any:
    return get_reflector().get_field_value(target, name, flags)


def set_field_value(target: Any, name: str, value: Any, flags: BindingFlags = DEFAULT) -> Any:
    return get_reflector().set_field_value(target, name, value, flags)


def get_property_value(target: Any, name: str, flags: BindingFlags = DEFAULT) -> Any:
    return get_reflector().get_property_value(target, name, flags)


def set_property_value(target: Any, name: str, value: Any, flags: BindingFlags = DEFAULT) -> Any:
    return get_reflector().set_property_value(target, name, value, flags)


def call_method(
    target: Any,
    name: str,
    *args: Any,
    flags: BindingFlags = DEFAULT,
    param_types: Iterable[Any] | None = None,
) -> Any:
    """Invoke a method with positional arguments.

    By-ref results are not visible through ``*args``; use :func:`invoke_method`
    with a list when the caller needs them.
    """
    return get_reflector().call_method(target, name, list(args), param_types, flags)


def invoke_method(
    target: Any,
    name: str,
    args: Sequence[Any],
    *,
    flags: BindingFlags = DEFAULT,
    param_types: Iterable[Any] | None = None,
) -> Any:
    """Invoke a method with an argument list that receives by-ref write-back."""
    return get_reflector().call_method(target, name, args, param_types, flags)


def create_instance(
    cls: type,
    *args: Any,
    flags: BindingFlags = DEFAULT,
    param_types: Iterable[Any] | None = None,
) -> Any:
    return get_reflector().create_instance(cls, list(args), param_types, flags)


def find_field(target_type: type, name: str, flags: BindingFlags = DEFAULT) -> MemberDescriptor:
    return get_reflector().find_field(target_type, name, flags)


def find_property(target_type: type, name: str, flags: BindingFlags = DEFAULT) -> MemberDescriptor:
    return get_reflector().find_property(target_type, name, flags)


def find_method(
    target_type: type,
    name: str,
    param_types: Iterable[Any] | None = None,
    flags: BindingFlags = DEFAULT,
) -> MemberDescriptor:
    return get_reflector().find_method(target_type, name, param_types, flags)


def find_constructor(
    target_type: type,
    param_types: Iterable[Any] | None = None,
    flags: BindingFlags = DEFAULT,
) -> MemberDescriptor:
    return get_reflector().find_constructor(target_type, param_types, flags)


def fields(target_type: type, flags: BindingFlags = DEFAULT) -> list[MemberDescriptor]:
    return get_reflector().fields(target_type, flags)


def properties(target_type: type, flags: BindingFlags = DEFAULT) -> list[MemberDescriptor]:
    return get_reflector().properties(target_type, flags)


def methods(target_type: type, flags: BindingFlags = DEFAULT) -> list[MemberDescriptor]:
    return get_reflector().methods(target_type, flags)


def field_accessor(target_type: type, name: str, flags: BindingFlags = DEFAULT) -> FieldAccessor:
    return get_reflector().field_accessor(target_type, name, flags)


def property_accessor(target_type: type, name: str, flags: BindingFlags = DEFAULT) -> PropertyAccessor:
    return get_reflector().property_accessor(target_type, name, flags)


def method_invoker(
    target_type: type,
    name: str,
    param_types: Iterable[Any] | None = None,
    flags: BindingFlags = DEFAULT,
) -> MethodInvoker:
    return get_reflector().method_invoker(target_type, name, param_types, flags)


def constructor_invoker(
    target_type: type,
    param_types: Iterable[Any] | None = None,
    flags: BindingFlags = DEFAULT,
) -> ConstructorInvoker:
    return get_reflector().constructor_invoker(target_type, param_types, flags)


def map_objects(source: Any, target: Any, spec: MapSpec | None = None) -> Any:
    return get_reflector().map(source, target, spec)


def map_plan(source_type: type, target_type: type, spec: MapSpec | None = None) -> MapPlan:
    return get_reflector().map_plan(source_type, target_type, spec)


def _map(source: Any, target: Any, source_kind: MemberKind, target_kind: MemberKind,
         names: tuple[str, ...], flags: BindingFlags) -> Any:
    spec = MapSpec.create(source_kind, target_kind, names, flags)
    return get_reflector().map(source, target, spec)


def map_fields(source: Any, target: Any, *names: str, flags: BindingFlags = MAP_DEFAULT) -> Any:
    """Copy fields onto same-named fields; all fields when no names are given."""
    return _map(source, target, MemberKind.FIELD, MemberKind.FIELD, names, flags)


def map_properties(source: Any, target: Any, *names: str, flags: BindingFlags = MAP_DEFAULT) -> Any:
    """Copy properties onto same-named properties."""
    return _map(source, target, MemberKind.PROPERTY, MemberKind.PROPERTY, names, flags)


def map_fields_to_properties(source: Any, target: Any, *names: str,
                             flags: BindingFlags = MAP_DEFAULT) -> Any:
    """Copy fields onto same-named properties."""
    return _map(source, target, MemberKind.FIELD, MemberKind.PROPERTY, names, flags)


def map_properties_to_fields(source: Any, target: Any, *names: str,
                             flags: BindingFlags = MAP_DEFAULT) -> Any:
    """Copy properties onto same-named fields."""
    return _map(source, target, MemberKind.PROPERTY, MemberKind.FIELD, names, flags)
