"""Host-level configuration for logging output."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .engine_config import ENV_PREFIX, is_truthy


@dataclass
class Config:
    """Where and how loudly ``configure()`` writes engine logs."""

    verbose: bool = False
    log_dir: Path = Path("logs")

    @classmethod
    def from_env(cls, env_path: Optional[Path] = None) -> "Config":
        """
        Read ``MEMBERFLECT_VERBOSE`` and ``MEMBERFLECT_LOG_DIR``.

        A .env file, when present, fills in variables the process environment
        does not already define.

        Args:
            env_path: .env file to load (defaults to .env in current directory)

        Returns:
            Config object
        """
        dotenv_file = env_path or Path.cwd() / ".env"
        if dotenv_file.exists():
            load_dotenv(dotenv_file)

        defaults = cls()
        return cls(
            verbose=is_truthy(os.getenv(f"{ENV_PREFIX}VERBOSE", str(defaults.verbose))),
            log_dir=Path(os.getenv(f"{ENV_PREFIX}LOG_DIR", str(defaults.log_dir))),
        )

    def validate(self) -> None:
        """
        Validate the configuration.

        Raises:
            ValueError: If the log directory path points at a file
        """
        if self.log_dir.exists() and not self.log_dir.is_dir():
            raise ValueError(f"Log directory is not a directory: {self.log_dir}")

    def ensure_log_dir(self) -> None:
        self.log_dir.mkdir(parents=True, exist_ok=True)
