#!/usr/bin/env python3

"""Parameter information model for methods and constructors."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ParameterInfo:
    """Information about one positional parameter."""

    name: str
    annotation: Any = Any
    by_ref: bool = False  # annotated as Ref / Ref[T]
    has_default: bool = False
    variadic: bool = False  # *args
