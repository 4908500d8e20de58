#!/usr/bin/env python3

"""Assignability rules between runtime types and declared annotations.

Two callers with different strictness use this module:

- method/constructor resolution, where numeric widening (``int`` to ``float``)
  is an allowed implicit conversion that counts against a candidate;
- field/property assignment, where no widening is applied at all.

A conversion cost of ``0`` means an exact match, ``1`` one implicit
conversion, and ``None`` that the type is not assignable.
"""

import types
import typing
from typing import Any

from ...models.errors import NullAssignmentError, TypeMismatchError
from ...models.ref import Ref, is_ref_annotation, ref_inner_type

NoneType = type(None)

# Implicit numeric widening; narrowing is never implicit
NUMERIC_WIDENING: dict[type, tuple[type, ...]] = {
    int: (float, complex),
    float: (complex,),
}


def _is_union(annotation: Any) -> bool:
    origin = typing.get_origin(annotation)
    return origin is typing.Union or origin is types.UnionType


def _unwrap_annotated(annotation: Any) -> Any:
    while typing.get_origin(annotation) is typing.Annotated:
        annotation = typing.get_args(annotation)[0]
    return annotation


def admits_none(declared: Any) -> bool:
    """Whether a member declared as ``declared`` can hold ``None``."""
    declared = _unwrap_annotated(declared)
    if declared in (Any, object, None, NoneType) or isinstance(declared, str):
        return True
    if is_ref_annotation(declared):
        return True
    if isinstance(declared, typing.TypeVar):
        return declared.__bound__ is None or admits_none(declared.__bound__)
    if _is_union(declared):
        return any(admits_none(arg) for arg in typing.get_args(declared))
    return False


def _class_cost(source: type, target: type, allow_widening: bool) -> int | None:
    if source is target:
        return 0
    try:
        if issubclass(source, target):
            return 1
    except TypeError:
        # Non-runtime-checkable protocols cannot be verified structurally
        return 1
    if allow_widening and target in NUMERIC_WIDENING.get(source, ()):
        return 1
    return None


def conversion_cost(source: Any, declared: Any, allow_widening: bool = True) -> int | None:
    """
    Cost of passing a value of type ``source`` where ``declared`` is expected.

    Args:
        source: Runtime type of the value (or a caller-supplied parameter type)
        declared: Declared annotation of the parameter or member
        allow_widening: Whether implicit numeric widening is permitted

    Returns:
        0 for an exact match, 1 for one implicit conversion, None if not assignable
    """
    if source == declared:
        return 0

    declared = _unwrap_annotated(declared)
    source = _unwrap_annotated(source)

    if source is None or source is NoneType:
        if declared is None or declared is NoneType:
            return 0
        return 1 if admits_none(declared) else None

    if declared is Any or declared is object or isinstance(declared, str):
        return 1

    if declared is None or declared is NoneType:
        return None

    if is_ref_annotation(declared):
        inner = ref_inner_type(declared)
        if source is Ref or typing.get_origin(source) is Ref:
            source_inner = ref_inner_type(source)
            if source_inner is Any:
                return 1
            return conversion_cost(source_inner, inner, allow_widening)
        cost = conversion_cost(source, inner, allow_widening)
        return None if cost is None else 1

    if _is_union(declared):
        costs = [conversion_cost(source, arg, allow_widening) for arg in typing.get_args(declared)]
        valid = [c for c in costs if c is not None]
        return max(1, min(valid)) if valid else None

    if isinstance(declared, typing.TypeVar):
        if declared.__bound__ is None:
            return 1
        cost = conversion_cost(source, declared.__bound__, allow_widening)
        return None if cost is None else 1

    declared_class = typing.get_origin(declared) or declared
    source_class = typing.get_origin(source) or source

    if isinstance(declared_class, type) and isinstance(source_class, type):
        cost = _class_cost(source_class, declared_class, allow_widening)
        if cost == 0 and declared_class is not declared:
            # Parameterized generics are only checked at the origin level
            return 1
        return cost

    # Literal, special forms and anything else we cannot check statically
    return 1


def check_value(value: Any, declared: Any, member: str) -> None:
    """
    Validate an assignment to a field or property.

    Args:
        value: Value about to be stored
        declared: Declared type of the member
        member: Qualified member name for error messages

    Raises:
        NullAssignmentError: If value is None and the declared type cannot hold it
        TypeMismatchError: If the value's type is not assignable without widening
    """
    if value is None:
        if not admits_none(declared):
            raise NullAssignmentError(member, declared)
        return

    if conversion_cost(type(value), declared, allow_widening=False) is None:
        raise TypeMismatchError(member, declared, type(value))


def coerce_argument(value: Any, declared: Any) -> Any:
    """Apply numeric widening to an argument bound for a plain numeric parameter."""
    targets = NUMERIC_WIDENING.get(type(value))
    if targets and declared in targets:
        return declared(value)
    return value
