#!/usr/bin/env python3

"""Tunables for the resolution and mapping engine."""

import os
from typing import Any

ENV_PREFIX = "MEMBERFLECT_"

DEFAULT_CONFIG: dict[str, Any] = {
    # Caching
    "ENABLE_ACCESSOR_CACHE": True,
    "ENABLE_SCAN_CACHE": True,

    # Mapping
    "MAP_VALIDATE_BEFORE_WRITE": True,  # read and type-check every member before the first write
}

_TRUE_VALUES = ("true", "1", "yes", "on")


def is_truthy(raw: str) -> bool:
    return raw.strip().lower() in _TRUE_VALUES


def get_config() -> dict[str, Any]:
    """Get engine configuration with environment variable overrides.

    Each key can be overridden with ``MEMBERFLECT_<KEY>``; the value is coerced
    to the type of the default. Unparseable numbers keep the default.

    Returns:
        Configuration dictionary
    """
    config = DEFAULT_CONFIG.copy()

    for key, default in config.items():
        env_value = os.getenv(f"{ENV_PREFIX}{key}")
        if env_value is None:
            continue

        # bool before int: bool is an int subclass
        if isinstance(default, bool):
            config[key] = is_truthy(env_value)
        elif isinstance(default, int):
            try:
                config[key] = int(env_value)
            except ValueError:
                pass
        elif isinstance(default, float):
            try:
                config[key] = float(env_value)
            except ValueError:
                pass
        else:
            config[key] = env_value

    return config
