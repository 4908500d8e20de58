#!/usr/bin/env python3

"""Domain models for member resolution and mapping."""

from .binding_flags import BindingFlags
from .binding_query import BindingQuery, CacheKey
from .errors import (
    AmbiguousMatchError,
    MemberAccessError,
    MemberNotFoundError,
    NullAssignmentError,
    TypeMismatchError,
    UnsupportedOperationError,
)
from .map_spec import MapPlanKey, MapSpec
from .member_descriptor import MemberDescriptor, is_public_name
from .member_kind import MemberKind
from .parameter_info import ParameterInfo
from .ref import Ref, is_ref_annotation, ref_inner_type
from .static_property import static_property

__all__ = [
    "AmbiguousMatchError",
    "BindingFlags",
    "BindingQuery",
    "CacheKey",
    "MapPlanKey",
    "MapSpec",
    "MemberAccessError",
    "MemberDescriptor",
    "MemberKind",
    "MemberNotFoundError",
    "NullAssignmentError",
    "ParameterInfo",
    "Ref",
    "TypeMismatchError",
    "UnsupportedOperationError",
    "is_public_name",
    "is_ref_annotation",
    "ref_inner_type",
    "static_property",
]
