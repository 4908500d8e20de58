#!/usr/bin/env python3

"""Domain layer containing resolution, access and mapping logic."""

from . import models, repositories, services

__all__ = [
    "models",
    "repositories",
    "services",
]
