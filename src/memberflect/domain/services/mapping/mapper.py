#!/usr/bin/env python3

"""Name-matched copying of member values between two objects."""

from typing import Any

from ....infrastructure.config import get_config
from ....infrastructure.logging import get_logger, log_timing
from ...models.binding_flags import BindingFlags
from ...models.binding_query import BindingQuery
from ...models.map_spec import MapPlanKey, MapSpec
from ...repositories.cache import AccessorCache
from ..access.accessor_factory import cached_accessor
from ..resolution.member_resolver import MemberResolver
from .map_plan import MapPlan, MemberPair

logger = get_logger(__name__)


class Mapper:
    """Builds and runs map plans.

    Member accessors come from the shared accessor cache, and so do the
    compiled plans (under a direction-sensitive MapPlanKey).
    """

    def __init__(
        self,
        resolver: MemberResolver,
        cache: AccessorCache,
        validate_before_write: bool | None = None,
    ):
        """Initialize mapper.

        Args:
            resolver: Resolver for both sides of each pair
            cache: Shared accessor cache
            validate_before_write: Stage and check all values before writing;
                defaults to MAP_VALIDATE_BEFORE_WRITE
        """
        self.resolver = resolver
        self.cache = cache
        if validate_before_write is None:
            validate_before_write = bool(get_config()["MAP_VALIDATE_BEFORE_WRITE"])
        self.validate_before_write = validate_before_write

    def map(self, source: Any, target: Any, spec: MapSpec | None = None) -> Any:
        """
        Copy members from source onto target.

        Args:
            source: Object to read from
            target: Object to write to
            spec: Kinds, filter and flags; defaults to all fields, any visibility

        Returns:
            The target, for call chaining

        Raises:
            MemberNotFoundError: If a name cannot be resolved on either side
            TypeMismatchError: If a value is not assignable to the target member
            NullAssignmentError: If None is mapped onto a member that cannot hold it
        """
        plan = self.plan(type(source), type(target), spec or MapSpec())
        return plan.execute(source, target)

    def plan(self, source_type: type, target_type: type, spec: MapSpec) -> MapPlan:
        """Get the cached plan for a (source type, target type, spec) triple."""
        key = MapPlanKey(source_type, target_type, spec)
        return self.cache.get_or_compile(key, lambda: self._build_plan(source_type, target_type, spec))

    @log_timing
    def _build_plan(self, source_type: type, target_type: type, spec: MapSpec) -> MapPlan:
        names = self._source_names(source_type, spec)
        if not names:
            logger.warning(
                f"No {spec.source_kind.value}s to map on {source_type.__qualname__}; the plan copies nothing"
            )

        pairs = []
        for name in names:
            source_accessor = cached_accessor(
                self.resolver, self.cache,
                BindingQuery.create(source_type, spec.source_kind, name, spec.flags),
            )
            target_accessor = cached_accessor(
                self.resolver, self.cache,
                BindingQuery.create(target_type, spec.target_kind, name, spec.flags),
            )
            pairs.append(MemberPair(name, source_accessor, target_accessor))

        logger.debug(
            f"Planned {spec.source_kind.value}->{spec.target_kind.value} map "
            f"{source_type.__qualname__} -> {target_type.__qualname__}: {list(names)}"
        )
        return MapPlan(
            source_type=source_type,
            target_type=target_type,
            spec=spec,
            pairs=tuple(pairs),
            validate_before_write=self.validate_before_write,
        )

    def _source_names(self, source_type: type, spec: MapSpec) -> list[str]:
        if spec.names is not None:
            # Sorted so plans built from equal filters list members identically
            return sorted(spec.names)

        trim = bool(spec.flags & BindingFlags.TRIM_EXPLICITLY_IMPLEMENTED)
        seen: set[str] = set()
        names = []
        for descriptor in self.resolver.members(source_type, spec.source_kind, spec.flags):
            name = descriptor.simple_name if trim else descriptor.name
            if name not in seen:
                seen.add(name)
                names.append(name)
        return names
