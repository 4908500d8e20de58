#!/usr/bin/env python3

"""Member resolution over class hierarchies.

Resolution walks the MRO from the most derived class upward and stops at the
first class that declares at least one surviving candidate, so a derived
declaration always hides a base declaration of the same name. Within that
class, methods and constructors are ranked by the number of implicit argument
conversions they need; a tie that survives ranking is reported as ambiguous
rather than settled by declaration order.
"""

from typing import Any

from ....infrastructure.logging import get_logger
from ...models.binding_flags import BindingFlags
from ...models.binding_query import BindingQuery
from ...models.errors import AmbiguousMatchError, MemberNotFoundError
from ...models.member_descriptor import MemberDescriptor
from ...models.member_kind import MemberKind
from .type_compat import conversion_cost
from .type_scanner import TypeScanner

logger = get_logger(__name__)


def argument_cost(descriptor: MemberDescriptor, param_types: tuple[Any, ...]) -> int | None:
    """
    Total implicit-conversion cost of calling ``descriptor`` with ``param_types``.

    Args:
        descriptor: Method or constructor candidate
        param_types: Types of the supplied positional arguments

    Returns:
        Sum of per-argument conversion costs, or None if the call cannot bind
    """
    fixed = [p for p in descriptor.parameters if not p.variadic]
    variadic = next((p for p in descriptor.parameters if p.variadic), None)
    required = sum(1 for p in fixed if not p.has_default)

    if len(param_types) < required:
        return None
    if len(param_types) > len(fixed) and variadic is None:
        return None

    total = 0
    for index, supplied in enumerate(param_types):
        parameter = fixed[index] if index < len(fixed) else variadic
        cost = conversion_cost(supplied, parameter.annotation, allow_widening=True)
        if cost is None:
            return None
        total += cost
    return total


class MemberResolver:
    """Resolves binding queries to member descriptors."""

    def __init__(self, scanner: TypeScanner | None = None):
        self.scanner = scanner or TypeScanner()

    def resolve(self, query: BindingQuery) -> MemberDescriptor:
        """
        Resolve a query to exactly one member.

        Args:
            query: Resolution request

        Returns:
            Descriptor rebound to ``query.target_type``

        Raises:
            MemberNotFoundError: If no member survives filtering at any level
            AmbiguousMatchError: If several candidates tie after ranking
        """
        if query.kind is MemberKind.CONSTRUCTOR:
            candidates = self._constructor_candidates(query)
        else:
            candidates = []
            for cls in self.scanner.hierarchy(query.target_type, self._declared_only(query.flags)):
                candidates = [
                    d for d in self.scanner.declared_members(cls, query.kind)
                    if self._name_matches(d, query) and query.flags.admits(d.is_public, d.is_static)
                ]
                # a member literally named like the query beats a trimmed one
                exact = [d for d in candidates if d.name == query.name]
                if exact:
                    candidates = exact
                if query.kind is MemberKind.METHOD:
                    candidates = self._rank(candidates, query.param_types)
                if candidates:
                    break

        if not candidates:
            logger.debug(f"Resolution failed: {query.describe()}")
            raise MemberNotFoundError(query.kind, query.target_type, query.name, query.flags)

        if len(candidates) > 1:
            logger.debug(
                f"Ambiguous resolution for {query.describe()}: "
                f"{[c.qualified_name() for c in candidates]}"
            )
            raise AmbiguousMatchError(query.kind, query.target_type, query.name, candidates)

        resolved = candidates[0].with_owner(query.target_type)
        logger.debug(f"Resolved {query.describe()} -> {resolved.qualified_name()}")
        return resolved

    def members(
        self, target_type: type, kind: MemberKind, flags: BindingFlags
    ) -> list[MemberDescriptor]:
        """
        List every member of ``kind`` reachable on ``target_type`` under ``flags``.

        Derived declarations hide base declarations with the same (simple) name.
        Under trimming, a member declared under its plain name hides explicit
        implementations in the same class that trim to that name.

        Args:
            target_type: Type to enumerate
            kind: Member kind to collect
            flags: Binding constraints

        Returns:
            Descriptors in most-derived-first order, rebound to ``target_type``
        """
        if kind is MemberKind.CONSTRUCTOR:
            ctor = self.scanner.constructor(target_type)
            return [ctor] if ctor is not None and flags.admits(True, False) else []

        trim = bool(flags & BindingFlags.TRIM_EXPLICITLY_IMPLEMENTED)
        found: list[MemberDescriptor] = []
        hidden: set[str] = set()
        for cls in self.scanner.hierarchy(target_type, self._declared_only(flags)):
            level_names: set[str] = set()
            plain: set[str] = set()
            declared = self.scanner.declared_members(cls, kind)
            if trim:
                declared = sorted(declared, key=lambda d: d.name != d.simple_name)
            for descriptor in declared:
                name = descriptor.simple_name if trim else descriptor.name
                if name in hidden or not flags.admits(descriptor.is_public, descriptor.is_static):
                    continue
                if name in plain and descriptor.name != name:
                    continue
                if descriptor.name == name:
                    plain.add(name)
                level_names.add(name)
                found.append(descriptor.with_owner(target_type))
            hidden |= level_names
        return found

    def _constructor_candidates(self, query: BindingQuery) -> list[MemberDescriptor]:
        if not query.flags.admits(True, False):
            return []
        ctor = self.scanner.constructor(query.target_type)
        if ctor is None:
            return []
        if self._declared_only(query.flags) and ctor.declaring_type is not query.target_type:
            return []
        return self._rank([ctor], query.param_types)

    def _rank(
        self, candidates: list[MemberDescriptor], param_types: tuple[Any, ...] | None
    ) -> list[MemberDescriptor]:
        """Keep the candidates with the lowest argument conversion cost."""
        if param_types is None or not candidates:
            return candidates

        scored = []
        for candidate in candidates:
            cost = argument_cost(candidate, param_types)
            if cost is not None:
                scored.append((cost, candidate))
        if not scored:
            return []

        best = min(cost for cost, _ in scored)
        return [candidate for cost, candidate in scored if cost == best]

    @staticmethod
    def _declared_only(flags: BindingFlags) -> bool:
        return bool(flags & BindingFlags.DECLARED_ONLY)

    @staticmethod
    def _name_matches(descriptor: MemberDescriptor, query: BindingQuery) -> bool:
        if descriptor.name == query.name:
            return True
        return bool(query.flags & BindingFlags.TRIM_EXPLICITLY_IMPLEMENTED) and (
            descriptor.simple_name == query.name
        )
