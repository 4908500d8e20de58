#!/usr/bin/env python3

"""Resolution requests and the structural keys derived from them."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .binding_flags import BindingFlags
from .member_kind import MemberKind


@dataclass(frozen=True)
class CacheKey:
    """Structural identity of a compiled accessor.

    Types hash and compare by identity, so two distinct classes that happen to
    share a name never collide.
    """

    owner_type: type
    kind: MemberKind
    name: str
    flags: BindingFlags
    param_types: tuple[Any, ...] | None = None


@dataclass(frozen=True)
class BindingQuery:
    """A member resolution request.

    ``param_types`` only applies to methods and constructors; ``None`` means the
    argument list is not used to narrow candidates.
    """

    target_type: type
    kind: MemberKind
    name: str
    flags: BindingFlags = BindingFlags.DEFAULT
    param_types: tuple[Any, ...] | None = None

    @classmethod
    def create(
        cls,
        target_type: type,
        kind: MemberKind,
        name: str,
        flags: BindingFlags = BindingFlags.DEFAULT,
        param_types: Iterable[Any] | None = None,
    ) -> BindingQuery:
        """Build a query, normalizing ``param_types`` to a tuple."""
        if not isinstance(target_type, type):
            raise TypeError(f"target_type must be a class, got {target_type!r}")
        types = tuple(param_types) if param_types is not None else None
        return cls(target_type, kind, name, BindingFlags(flags), types)

    def cache_key(self) -> CacheKey:
        return CacheKey(self.target_type, self.kind, self.name, self.flags, self.param_types)

    def describe(self) -> str:
        """Short form used in log and error messages."""
        text = f"{self.kind.display_name()} '{self.name}' on {self.target_type.__qualname__}"
        if self.param_types is not None:
            names = ", ".join(getattr(t, "__name__", repr(t)) for t in self.param_types)
            text += f"({names})"
        return f"{text} [{self.flags!r}]"
