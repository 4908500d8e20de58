#!/usr/bin/env python3

"""Object-to-object mapping services."""

from .map_plan import MapPlan, MemberPair
from .mapper import Mapper

__all__ = [
    "MapPlan",
    "Mapper",
    "MemberPair",
]
