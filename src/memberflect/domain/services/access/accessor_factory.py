"""Accessor compilation from resolved descriptors."""

from ....infrastructure.logging import get_logger
from ...models.binding_query import BindingQuery
from ...models.member_descriptor import MemberDescriptor
from ...models.member_kind import MemberKind
from ...repositories.cache import AccessorCache
from ..resolution.member_resolver import MemberResolver
from .accessors import (
    Accessor,
    ConstructorInvoker,
    FieldAccessor,
    MethodInvoker,
    PropertyAccessor,
)

logger = get_logger(__name__)

ACCESSOR_TYPES: dict[MemberKind, type[Accessor]] = {
    MemberKind.FIELD: FieldAccessor,
    MemberKind.PROPERTY: PropertyAccessor,
    MemberKind.METHOD: MethodInvoker,
    MemberKind.CONSTRUCTOR: ConstructorInvoker,
}


def compile_accessor(descriptor: MemberDescriptor) -> Accessor:
    """
    Build the accessor variant matching the descriptor's kind.

    Pure: compiling the same descriptor twice yields interchangeable accessors.

    Args:
        descriptor: Resolved member

    Returns:
        Accessor bound to the member
    """
    accessor = ACCESSOR_TYPES[descriptor.kind](descriptor)
    logger.debug(f"Compiled {accessor!r} for owner {descriptor.owner_type.__qualname__}")
    return accessor


def cached_accessor(resolver: MemberResolver, cache: AccessorCache, query: BindingQuery) -> Accessor:
    """
    Get the accessor for a query, resolving and compiling only on a cache miss.

    Resolution failures propagate and leave nothing cached.

    Args:
        resolver: Resolver used on a miss
        cache: Shared accessor cache
        query: Resolution request

    Returns:
        The canonical cached accessor for the query's key
    """
    return cache.get_or_compile(
        query.cache_key(), lambda: compile_accessor(resolver.resolve(query))
    )
