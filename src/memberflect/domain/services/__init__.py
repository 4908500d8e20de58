#!/usr/bin/env python3

"""Domain services layer."""

from . import access, mapping, resolution

__all__ = [
    "access",
    "mapping",
    "resolution",
]
