#!/usr/bin/env python3

"""Binding flags that narrow member resolution."""

from enum import IntFlag


class BindingFlags(IntFlag):
    """Bitwise-composable constraints applied while resolving a member.

    Visibility (``PUBLIC``/``NON_PUBLIC``) and static-ness (``INSTANCE``/``STATIC``)
    are admission sets: a member is only reachable when its own visibility and
    static-ness are both present in the flags.
    """

    NONE = 0
    PUBLIC = 1 << 0
    NON_PUBLIC = 1 << 1
    INSTANCE = 1 << 2
    STATIC = 1 << 3
    DECLARED_ONLY = 1 << 4
    TRIM_EXPLICITLY_IMPLEMENTED = 1 << 5

    INSTANCE_ANY_VISIBILITY = PUBLIC | NON_PUBLIC | INSTANCE
    STATIC_ANY_VISIBILITY = PUBLIC | NON_PUBLIC | STATIC
    STATIC_INSTANCE_ANY_VISIBILITY = PUBLIC | NON_PUBLIC | STATIC | INSTANCE
    DEFAULT = STATIC_INSTANCE_ANY_VISIBILITY

    def admits(self, is_public: bool, is_static: bool) -> bool:
        """Check whether a member with the given visibility and static-ness is reachable."""
        visibility = BindingFlags.PUBLIC if is_public else BindingFlags.NON_PUBLIC
        scope = BindingFlags.STATIC if is_static else BindingFlags.INSTANCE
        return bool(self & visibility) and bool(self & scope)

    def without(self, other: "BindingFlags") -> "BindingFlags":
        """Return a copy of these flags with ``other`` cleared."""
        return BindingFlags(self & ~other)
