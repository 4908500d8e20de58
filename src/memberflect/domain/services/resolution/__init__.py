#!/usr/bin/env python3

"""Member resolution services."""

from .member_resolver import MemberResolver, argument_cost
from .type_compat import admits_none, check_value, coerce_argument, conversion_cost
from .type_scanner import TypeScan, TypeScanner

__all__ = [
    "MemberResolver",
    "TypeScan",
    "TypeScanner",
    "admits_none",
    "argument_cost",
    "check_value",
    "coerce_argument",
    "conversion_cost",
]
