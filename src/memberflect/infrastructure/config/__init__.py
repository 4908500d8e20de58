"""Infrastructure configuration module."""

from .application_config import Config
from .engine_config import DEFAULT_CONFIG, ENV_PREFIX, get_config

__all__ = ["Config", "DEFAULT_CONFIG", "ENV_PREFIX", "get_config"]
