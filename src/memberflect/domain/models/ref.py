"""By-reference parameter support."""

from __future__ import annotations

import typing
from typing import Any, Generic, TypeVar

T = TypeVar("T")


class Ref(Generic[T]):
    """A mutable one-slot cell for output and by-reference parameters.

    A parameter annotated ``Ref[float]`` receives a ``Ref``; whatever the callee
    stores in ``value`` is written back into the caller's argument list.
    """

    __slots__ = ("value",)

    def __init__(self, value: T | None = None):
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Ref):
            return self.value == other.value
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]


def is_ref_annotation(annotation: Any) -> bool:
    """True for ``Ref`` and parameterized ``Ref[T]`` annotations."""
    return annotation is Ref or typing.get_origin(annotation) is Ref


def ref_inner_type(annotation: Any) -> Any:
    """The ``T`` of ``Ref[T]``; ``Any`` for a bare ``Ref``."""
    args = typing.get_args(annotation)
    return args[0] if args else Any
