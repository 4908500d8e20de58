#!/usr/bin/env python3

"""Logging infrastructure for the engine."""

from .logger_setup import PACKAGE_LOGGER, LoggerSetup
from .utils import get_logger, log_timing

__all__ = [
    "LoggerSetup",
    "PACKAGE_LOGGER",
    "get_logger",
    "log_timing",
]
