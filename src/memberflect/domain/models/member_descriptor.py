#!/usr/bin/env python3

"""Resolved member description."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any

from .member_kind import MemberKind
from .parameter_info import ParameterInfo

_DUNDER = re.compile(r"^__\w+__$")


def is_public_name(name: str) -> bool:
    """Underscore-prefixed names are non-public, except dunders."""
    return not name.startswith("_") or bool(_DUNDER.match(name))


def explicit_prefixes(mro: tuple[type, ...]) -> tuple[str, ...]:
    """Name-mangling prefixes (``_Qualifier__``) for every class in an MRO."""
    prefixes = []
    for cls in mro:
        stem = cls.__name__.lstrip("_")
        if stem:
            prefixes.append(f"_{stem}__")
    return tuple(prefixes)


def trim_explicit_name(name: str, prefixes: tuple[str, ...]) -> str:
    """Strip an explicit-implementation prefix, leaving the simple name.

    ``_Swimmer__swim`` becomes ``swim`` when ``Swimmer`` is in the owner's MRO.
    Names that carry no known prefix are returned unchanged.
    """
    for prefix in prefixes:
        if name.startswith(prefix) and len(name) > len(prefix) and not name.endswith("__"):
            return name[len(prefix):]
    return name


@dataclass(frozen=True)
class MemberDescriptor:
    """An immutable description of one resolved member.

    ``owner_type`` is the type the lookup was issued against; ``declaring_type``
    is the class in the hierarchy whose body defines the member. ``member`` is
    the raw object taken from the declaring class (function, property, ...).
    """

    owner_type: type
    kind: MemberKind
    name: str
    declared_type: Any
    declaring_type: type
    is_public: bool
    is_static: bool
    parameters: tuple[ParameterInfo, ...] = ()
    simple_name: str = ""
    member: Any = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if not self.simple_name:
            object.__setattr__(self, "simple_name", self.name)

    @property
    def parameter_types(self) -> tuple[Any, ...]:
        """Declared parameter types, in positional order."""
        return tuple(p.annotation for p in self.parameters)

    @property
    def is_explicit(self) -> bool:
        """True for explicitly implemented (prefix-qualified) members."""
        return self.simple_name != self.name

    @property
    def has_by_ref_parameters(self) -> bool:
        return any(p.by_ref for p in self.parameters)

    def with_owner(self, owner_type: type) -> MemberDescriptor:
        """Rebind a scanned descriptor to the type the lookup was issued against."""
        if owner_type is self.owner_type:
            return self
        return MemberDescriptor(
            owner_type=owner_type,
            kind=self.kind,
            name=self.name,
            declared_type=self.declared_type,
            declaring_type=self.declaring_type,
            is_public=self.is_public,
            is_static=self.is_static,
            parameters=self.parameters,
            simple_name=self.simple_name,
            member=self.member,
        )

    def qualified_name(self) -> str:
        """``Declaring.name`` for log and error messages."""
        return f"{self.declaring_type.__qualname__}.{self.name}"
