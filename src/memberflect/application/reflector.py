#!/usr/bin/env python3

"""Facade over resolution, accessor caching and mapping."""

from collections.abc import Iterable, Sequence
from typing import Any

from ..domain.models import (
    BindingFlags,
    BindingQuery,
    MapSpec,
    MemberDescriptor,
    MemberKind,
)
from ..domain.repositories.cache import AccessorCache
from ..domain.services.access import (
    Accessor,
    ConstructorInvoker,
    FieldAccessor,
    MethodInvoker,
    PropertyAccessor,
    cached_accessor,
)
from ..domain.services.mapping import MapPlan, Mapper
from ..domain.services.resolution import MemberResolver, TypeScanner
from ..infrastructure.logging import get_logger

logger = get_logger(__name__)


class Reflector:
    """Entry point combining the resolver, the accessor cache and the mapper.

    Operations that take a ``target`` treat a class as a static access on that
    class (``INSTANCE`` is dropped from the flags) and anything else as an
    instance access on ``type(target)``.
    """

    def __init__(
        self,
        scanner: TypeScanner | None = None,
        cache: AccessorCache | None = None,
        validate_before_write: bool | None = None,
    ):
        """Initialize the facade.

        Args:
            scanner: Type scanner (and its scan cache) to use
            cache: Accessor cache to use
            validate_before_write: Mapping atomicity; see Mapper
        """
        self.scanner = scanner or TypeScanner()
        self.resolver = MemberResolver(self.scanner)
        self.cache = cache or AccessorCache()
        self.mapper = Mapper(self.resolver, self.cache, validate_before_write)

    @staticmethod
    def _split_target(target: Any, flags: BindingFlags) -> tuple[type, Any, BindingFlags]:
        """Return (query type, instance or None, effective flags) for a target."""
        flags = BindingFlags(flags)
        if isinstance(target, type):
            return target, None, flags.without(BindingFlags.INSTANCE)
        return type(target), target, flags

    # Lookup

    def find(
        self,
        target_type: type,
        kind: MemberKind,
        name: str,
        flags: BindingFlags = BindingFlags.DEFAULT,
        param_types: Iterable[Any] | None = None,
    ) -> MemberDescriptor:
        """Resolve one member without compiling an accessor."""
        return self.resolver.resolve(BindingQuery.create(target_type, kind, name, flags, param_types))

    def find_field(self, target_type: type, name: str,
                   flags: BindingFlags = BindingFlags.DEFAULT) -> MemberDescriptor:
        return self.find(target_type, MemberKind.FIELD, name, flags)

    def find_property(self, target_type: type, name: str,
                      flags: BindingFlags = BindingFlags.DEFAULT) -> MemberDescriptor:
        return self.find(target_type, MemberKind.PROPERTY, name, flags)

    def find_method(self, target_type: type, name: str,
                    param_types: Iterable[Any] | None = None,
                    flags: BindingFlags = BindingFlags.DEFAULT) -> MemberDescriptor:
        return self.find(target_type, MemberKind.METHOD, name, flags, param_types)

    def find_constructor(self, target_type: type,
                         param_types: Iterable[Any] | None = None,
                         flags: BindingFlags = BindingFlags.DEFAULT) -> MemberDescriptor:
        return self.find(target_type, MemberKind.CONSTRUCTOR, "__init__", flags, param_types)

    def fields(self, target_type: type,
               flags: BindingFlags = BindingFlags.DEFAULT) -> list[MemberDescriptor]:
        return self.resolver.members(target_type, MemberKind.FIELD, BindingFlags(flags))

    def properties(self, target_type: type,
                   flags: BindingFlags = BindingFlags.DEFAULT) -> list[MemberDescriptor]:
        return self.resolver.members(target_type, MemberKind.PROPERTY, BindingFlags(flags))

    def methods(self, target_type: type,
                flags: BindingFlags = BindingFlags.DEFAULT) -> list[MemberDescriptor]:
        return self.resolver.members(target_type, MemberKind.METHOD, BindingFlags(flags))

    # Cached accessors

    def accessor(
        self,
        target_type: type,
        kind: MemberKind,
        name: str,
        flags: BindingFlags = BindingFlags.DEFAULT,
        param_types: Iterable[Any] | None = None,
    ) -> Accessor:
        """Get the cached accessor for a query, compiling it on first use."""
        query = BindingQuery.create(target_type, kind, name, flags, param_types)
        return cached_accessor(self.resolver, self.cache, query)

    def field_accessor(self, target_type: type, name: str,
                       flags: BindingFlags = BindingFlags.DEFAULT) -> FieldAccessor:
        return self.accessor(target_type, MemberKind.FIELD, name, flags)  # type: ignore[return-value]

    def property_accessor(self, target_type: type, name: str,
                          flags: BindingFlags = BindingFlags.DEFAULT) -> PropertyAccessor:
        return self.accessor(target_type, MemberKind.PROPERTY, name, flags)  # type: ignore[return-value]

    def method_invoker(self, target_type: type, name: str,
                       param_types: Iterable[Any] | None = None,
                       flags: BindingFlags = BindingFlags.DEFAULT) -> MethodInvoker:
        return self.accessor(target_type, MemberKind.METHOD, name, flags, param_types)  # type: ignore[return-value]

    def constructor_invoker(self, target_type: type,
                            param_types: Iterable[Any] | None = None,
                            flags: BindingFlags = BindingFlags.DEFAULT) -> ConstructorInvoker:
        return self.accessor(  # type: ignore[return-value]
            target_type, MemberKind.CONSTRUCTOR, "__init__", flags, param_types
        )

    # Direct operations

    def get_field_value(self, target: Any, name: str,
                        flags: BindingFlags = BindingFlags.DEFAULT) -> Any:
        target_type, instance, flags = self._split_target(target, flags)
        return self.accessor(target_type, MemberKind.FIELD, name, flags).get(instance)

    def set_field_value(self, target: Any, name: str, value: Any,
                        flags: BindingFlags = BindingFlags.DEFAULT) -> Any:
        """Set a field and return the target so calls can be chained."""
        target_type, instance, flags = self._split_target(target, flags)
        self.accessor(target_type, MemberKind.FIELD, name, flags).set(instance, value)
        return target

    def get_property_value(self, target: Any, name: str,
                           flags: BindingFlags = BindingFlags.DEFAULT) -> Any:
        target_type, instance, flags = self._split_target(target, flags)
        return self.accessor(target_type, MemberKind.PROPERTY, name, flags).get(instance)

    def set_property_value(self, target: Any, name: str, value: Any,
                           flags: BindingFlags = BindingFlags.DEFAULT) -> Any:
        """Set a property and return the target so calls can be chained."""
        target_type, instance, flags = self._split_target(target, flags)
        self.accessor(target_type, MemberKind.PROPERTY, name, flags).set(instance, value)
        return target

    def call_method(
        self,
        target: Any,
        name: str,
        args: Sequence[Any] = (),
        param_types: Iterable[Any] | None = None,
        flags: BindingFlags = BindingFlags.DEFAULT,
    ) -> Any:
        """
        Invoke a method by name.

        Args:
            target: Instance, or class for static methods
            name: Method name
            args: Positional arguments; pass a list to observe by-ref write-back
            param_types: Parameter types to match; defaults to the runtime argument types
            flags: Binding constraints

        Returns:
            The method's result
        """
        target_type, instance, flags = self._split_target(target, flags)
        if param_types is None:
            param_types = [type(arg) for arg in args]
        invoker = self.accessor(target_type, MemberKind.METHOD, name, flags, param_types)
        return invoker.invoke(instance, args)

    def create_instance(
        self,
        cls: type,
        args: Sequence[Any] = (),
        param_types: Iterable[Any] | None = None,
        flags: BindingFlags = BindingFlags.DEFAULT,
    ) -> Any:
        """Construct ``cls`` through its resolved constructor."""
        if param_types is None:
            param_types = [type(arg) for arg in args]
        invoker = self.accessor(cls, MemberKind.CONSTRUCTOR, "__init__", flags, param_types)
        return invoker.construct(args)

    # Mapping

    def map(self, source: Any, target: Any, spec: MapSpec | None = None) -> Any:
        return self.mapper.map(source, target, spec)

    def map_plan(self, source_type: type, target_type: type,
                 spec: MapSpec | None = None) -> MapPlan:
        return self.mapper.plan(source_type, target_type, spec or MapSpec())

    # Housekeeping

    def stats(self) -> dict[str, Any]:
        return {"accessors": self.cache.stats(), "scans": self.scanner.stats()}

    def clear(self) -> None:
        """Drop cached accessors, plans and scans."""
        self.cache.clear()
        self.scanner.clear()
        logger.debug("Cleared accessor and scan caches")
