"""Member kinds understood by the resolver."""

from enum import Enum


class MemberKind(Enum):
    """Categories of class members that can be resolved and accessed."""

    FIELD = "field"
    PROPERTY = "property"
    METHOD = "method"
    CONSTRUCTOR = "constructor"

    @property
    def is_invocable(self) -> bool:
        """Methods and constructors take argument lists."""
        return self in (MemberKind.METHOD, MemberKind.CONSTRUCTOR)

    @property
    def is_value(self) -> bool:
        """Fields and properties carry a gettable/settable value."""
        return self in (MemberKind.FIELD, MemberKind.PROPERTY)

    def display_name(self) -> str:
        """Human-readable name for log and error messages."""
        return self.value
