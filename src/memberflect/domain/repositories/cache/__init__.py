#!/usr/bin/env python3

"""Cache implementations for compiled accessors."""

from .accessor_cache import AccessorCache

__all__ = [
    "AccessorCache",
]
