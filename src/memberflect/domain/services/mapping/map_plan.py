"""Compiled, reusable mapping between two concrete types."""

from dataclasses import dataclass
from typing import Any

from ....infrastructure.logging import get_logger
from ...models.map_spec import MapSpec
from ..access.accessors import Accessor

logger = get_logger(__name__)


@dataclass(frozen=True)
class MemberPair:
    """Source and target accessors for one mapped name."""

    name: str
    source: Accessor
    target: Accessor


@dataclass(frozen=True)
class MapPlan:
    """Every accessor pair needed to map ``source_type`` onto ``target_type``.

    All pairs are resolved when the plan is built, so executing a plan never
    fails on a missing member. With ``validate_before_write`` every value is
    read and type-checked before the first write; only exceptions raised by
    setter code itself can leave the target partially updated.
    """

    source_type: type
    target_type: type
    spec: MapSpec
    pairs: tuple[MemberPair, ...]
    validate_before_write: bool = True

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(pair.name for pair in self.pairs)

    def execute(self, source: Any, target: Any) -> Any:
        """
        Copy every planned member from source to target.

        Args:
            source: Object to read from
            target: Object to write to

        Returns:
            The target, for call chaining
        """
        if self.validate_before_write:
            staged = []
            for pair in self.pairs:
                value = pair.source.get(source)
                pair.target.check_value(value)
                staged.append((pair, value))
            for pair, value in staged:
                pair.target.set(target, value)
        else:
            for pair in self.pairs:
                pair.target.set(target, pair.source.get(source))

        logger.debug(
            f"Mapped {len(self.pairs)} members {self.source_type.__qualname__} -> "
            f"{self.target_type.__qualname__}"
        )
        return target

    def __call__(self, source: Any, target: Any) -> Any:
        return self.execute(source, target)
