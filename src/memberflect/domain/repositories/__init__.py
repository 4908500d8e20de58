#!/usr/bin/env python3

"""Repositories holding process-wide engine state."""

from . import cache

__all__ = [
    "cache",
]
