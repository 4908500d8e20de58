"""Class-level property descriptor."""

from collections.abc import Callable
from typing import Any, Optional


class static_property:
    """A property whose getter and setter receive the owning class.

    Reading works through the class or any instance. Plain class attribute
    assignment replaces the descriptor, so writes go through
    ``set_property_value`` or a property accessor, which call ``fset`` directly.
    """

    def __init__(
        self,
        fget: Optional[Callable[[type], Any]] = None,
        fset: Optional[Callable[[type, Any], None]] = None,
        doc: Optional[str] = None,
    ):
        self.fget = fget
        self.fset = fset
        self.__doc__ = doc if doc is not None else getattr(fget, "__doc__", None)
        self.__name__ = getattr(fget, "__name__", "")

    def __set_name__(self, owner: type, name: str) -> None:
        self.__name__ = name

    def __get__(self, instance: Any, owner: Optional[type] = None) -> Any:
        if owner is None:
            owner = type(instance)
        if self.fget is None:
            raise AttributeError(f"static property '{self.__name__}' has no getter")
        return self.fget(owner)

    def setter(self, fset: Callable[[type, Any], None]) -> "static_property":
        return type(self)(self.fget, fset, self.__doc__)
