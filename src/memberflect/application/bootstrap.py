"""Host-side setup: configuration loading and logging initialization."""

from ..infrastructure.config import Config
from ..infrastructure.logging import LoggerSetup, get_logger


def configure(config: Config | None = None) -> Config:
    """
    Initialize engine logging for a host process.

    Args:
        config: Configuration to apply; loaded from the environment when omitted

    Returns:
        The configuration that was applied

    Raises:
        ValueError: If the configuration is invalid
    """
    if config is None:
        config = Config.from_env()
    config.validate()
    config.ensure_log_dir()

    LoggerSetup.initialize(config.log_dir, verbose=config.verbose)
    get_logger(__name__).debug(f"memberflect configured: {config}")
    return config
