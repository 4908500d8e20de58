"""memberflect - cached member access and object mapping for Python classes."""

import logging

from .application import Reflector, configure
from .application.api import (
    call_method,
    constructor_invoker,
    create_instance,
    field_accessor,
    fields,
    find_constructor,
    find_field,
    find_method,
    find_property,
    get_field_value,
    get_property_value,
    get_reflector,
    invoke_method,
    map_fields,
    map_fields_to_properties,
    map_objects,
    map_plan,
    map_properties,
    map_properties_to_fields,
    method_invoker,
    methods,
    properties,
    property_accessor,
    set_field_value,
    set_property_value,
)
from .domain.models import (
    AmbiguousMatchError,
    BindingFlags,
    MapSpec,
    MemberAccessError,
    MemberDescriptor,
    MemberKind,
    MemberNotFoundError,
    NullAssignmentError,
    Ref,
    TypeMismatchError,
    UnsupportedOperationError,
    static_property,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AmbiguousMatchError",
    "BindingFlags",
    "MapSpec",
    "MemberAccessError",
    "MemberDescriptor",
    "MemberKind",
    "MemberNotFoundError",
    "NullAssignmentError",
    "Ref",
    "Reflector",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "call_method",
    "configure",
    "constructor_invoker",
    "create_instance",
    "field_accessor",
    "fields",
    "find_constructor",
    "find_field",
    "find_method",
    "find_property",
    "get_field_value",
    "get_property_value",
    "get_reflector",
    "invoke_method",
    "map_fields",
    "map_fields_to_properties",
    "map_objects",
    "map_plan",
    "map_properties",
    "map_properties_to_fields",
    "method_invoker",
    "methods",
    "properties",
    "property_accessor",
    "set_field_value",
    "set_property_value",
    "static_property",
]
