"""Configuration for MCP Git Tool"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

WORKING_DIR_ENV = "GIT_TOOL_WORKING_DIR"
TIMEOUT_ENV = "GIT_TOOL_TIMEOUT"
LOG_LEVEL_ENV = "LOG_LEVEL"


class AdapterConfig(BaseModel):
    """Immutable settings fixed when the adapter is constructed"""

    model_config = ConfigDict(frozen=True)

    working_dir: Path = Field(default_factory=Path.cwd)
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @field_validator("working_dir", mode="before")
    @classmethod
    def _default_working_dir(cls, value):
        # An empty working directory means the process current directory
        if value is None or value == "":
            return Path.cwd()
        return value

    @field_validator("timeout")
    @classmethod
    def _positive_timeout(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("timeout must be positive")
        return value

    @classmethod
    def from_env(
        cls,
        working_dir: Optional[Path] = None,
        timeout: Optional[float] = None,
        log_level: Optional[str] = None,
    ) -> "AdapterConfig":
        """Build a config from explicit values, falling back to the environment"""
        return cls(
            working_dir=working_dir or os.getenv(WORKING_DIR_ENV) or None,
            timeout=timeout if timeout is not None else os.getenv(TIMEOUT_ENV) or None,
            log_level=log_level or os.getenv(LOG_LEVEL_ENV, "INFO"),
        )


def load_environment_variables(working_dir: Path | None = None) -> list[str]:
    """Load environment variables from .env files.

    The project .env (current directory) is read first, then the one in the
    working directory. Variables already present in the environment are never
    overridden.

    Returns:
        The .env files that were loaded
    """
    logger = logging.getLogger(__name__)
    loaded_files: list[str] = []

    candidates = [Path.cwd() / ".env"]
    if working_dir:
        candidates.append(Path(working_dir) / ".env")

    for env_file in candidates:
        if not env_file.exists() or str(env_file) in loaded_files:
            continue
        try:
            load_dotenv(env_file, override=False)
            loaded_files.append(str(env_file))
            logger.info(f"Loaded environment variables from {env_file}")
        except OSError as e:
            logger.warning(f"Failed to load .env file {env_file}: {e}")

    return loaded_files
