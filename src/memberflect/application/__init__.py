#!/usr/bin/env python3

"""Application layer: the Reflector facade and convenience API."""

from . import api
from .bootstrap import configure
from .reflector import Reflector

__all__ = [
    "Reflector",
    "api",
    "configure",
]
