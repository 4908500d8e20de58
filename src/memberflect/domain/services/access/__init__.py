#!/usr/bin/env python3

"""Accessor variants and their compiler."""

from .accessor_factory import cached_accessor, compile_accessor
from .accessors import (
    Accessor,
    ConstructorInvoker,
    FieldAccessor,
    MethodInvoker,
    PropertyAccessor,
)

__all__ = [
    "Accessor",
    "ConstructorInvoker",
    "FieldAccessor",
    "MethodInvoker",
    "PropertyAccessor",
    "cached_accessor",
    "compile_accessor",
]
