#!/usr/bin/env python3

"""Logging helpers shared by every engine module."""

import logging
from collections.abc import Callable
from functools import wraps
from time import perf_counter
from typing import Any, TypeVar, cast

F = TypeVar("F", bound=Callable[..., Any])


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the given module name.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance under the ``memberflect`` hierarchy
    """
    return logging.getLogger(name)


def log_timing(func: F) -> F:
    """
    Decorator to log execution time of once-per-type work.

    Only failures are logged above DEBUG; the exception is re-raised untouched.

    Args:
        func: Function to decorate

    Returns:
        Wrapped function that logs timing
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        logger = get_logger(func.__module__)
        func_name = func.__qualname__

        start_time = perf_counter()
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            elapsed_ms = (perf_counter() - start_time) * 1000
            logger.debug(f"Failed {func_name} after {elapsed_ms:.3f}ms: {e}")
            raise

        if logger.isEnabledFor(logging.DEBUG):
            elapsed_ms = (perf_counter() - start_time) * 1000
            logger.debug(f"Completed {func_name} in {elapsed_ms:.3f}ms")
        return result

    return cast("F", wrapper)
