"""Runtime configuration — env-driven, resolved once at startup.

Centralized config using pydantic-settings. Reads from a .env file and
GROVE_* environment variables. The build mode decides which sink the
startup hook installs.
"""

from __future__ import annotations

from enum import Enum

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildMode(str, Enum):
    """Which sink the application installs at startup."""

    DEBUG = "debug"
    RELEASE = "release"


class GroveConfig(BaseSettings):
    """Grove configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export GROVE_BUILD_MODE=release
        export GROVE_LOG_LEVEL=DEBUG

    Or via .env file::

        GROVE_BUILD_MODE=release
        GROVE_DEBUG_MAX_TAG_LENGTH=23
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GROVE_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    build_mode: BuildMode = BuildMode.DEBUG

    # Level for grove's own diagnostic loggers (not a filter on events)
    log_level: str = "INFO"

    # Debug sink
    debug_max_tag_length: int | None = Field(default=None, gt=0)
    debug_chunk_size: int = Field(default=4000, gt=0)

    # Crash-reporting sink
    crash_include_traceback: bool = True
    crash_logger_name: str = "grove.crash"

    @property
    def is_release(self) -> bool:
        """Whether the crash-reporting sink should be installed."""
        return self.build_mode is BuildMode.RELEASE


# Module-level singleton — import as `from grove.config import config`
config = GroveConfig()
