"""Error kinds raised by resolution, access, and mapping."""

from typing import Any, Optional

from .binding_flags import BindingFlags
from .member_kind import MemberKind


def _type_name(tp: Any) -> str:
    return getattr(tp, "__qualname__", None) or repr(tp)


class MemberAccessError(Exception):
    """Base exception for all member resolution and access errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self.__class__.__name__.upper()
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary format."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return self.message


class MemberNotFoundError(MemberAccessError, LookupError):
    """No member satisfies the binding query.

    ``kind`` tells a missing field or property apart from a missing method or
    constructor.
    """

    def __init__(self, kind: MemberKind, owner: type, name: str, flags: BindingFlags):
        self.kind = kind
        self.type = owner
        self.name = name
        self.flags = flags
        super().__init__(
            f"No {kind.display_name()} '{name}' found on {_type_name(owner)} "
            f"matching {flags!r}",
            error_code=f"{kind.name}_NOT_FOUND",
            details={"kind": kind.value, "type": _type_name(owner), "name": name},
        )


class AmbiguousMatchError(MemberAccessError):
    """More than one equally good candidate remains after tie-breaking."""

    def __init__(self, kind: MemberKind, owner: type, name: str, candidates: list[Any]):
        self.kind = kind
        self.type = owner
        self.name = name
        self.candidates = candidates
        listed = ", ".join(c.qualified_name() for c in candidates)
        super().__init__(
            f"Ambiguous {kind.display_name()} '{name}' on {_type_name(owner)}: {listed}",
            error_code="AMBIGUOUS_MATCH",
            details={"kind": kind.value, "type": _type_name(owner), "name": name},
        )


class TypeMismatchError(MemberAccessError, TypeError):
    """A value is not assignable to the member's declared type."""

    def __init__(self, member: str, expected: Any, actual: type):
        self.member = member
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Cannot assign {_type_name(actual)} to '{member}' declared as {_type_name(expected)}",
            error_code="TYPE_MISMATCH",
            details={"member": member, "expected": _type_name(expected), "actual": _type_name(actual)},
        )


class NullAssignmentError(MemberAccessError, TypeError):
    """``None`` assigned to a member whose declared type cannot hold it."""

    def __init__(self, member: str, expected: Any):
        self.member = member
        self.expected = expected
        super().__init__(
            f"Cannot assign None to '{member}' declared as {_type_name(expected)}",
            error_code="NULL_ASSIGNMENT",
            details={"member": member, "expected": _type_name(expected)},
        )


class UnsupportedOperationError(MemberAccessError, AttributeError):
    """The requested operation is not defined for this member."""

    def __init__(self, member: str, operation: str):
        self.member = member
        self.operation = operation
        super().__init__(
            f"'{member}' does not support {operation}",
            error_code="UNSUPPORTED_OPERATION",
            details={"member": member, "operation": operation},
        )
