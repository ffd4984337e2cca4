"""Runtime settings for service actors.

Configuration is loaded from:
- environment variables prefixed with `SERVICE_ACTOR_`
- and a local `.env` file (if present)

Notes:
    Pydantic-settings supports overriding the env file in tests via:
    `ActorSettings(_env_file=path_to_env)`.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ActorSettings(BaseSettings):
    """Settings shared by every actor in the process.

    Environment variables:
    - SERVICE_ACTOR_LOG_LEVEL        (optional)
    - SERVICE_ACTOR_LOG_FORMAT       (optional, "text" or "json")
    - SERVICE_ACTOR_ARGUMENT_ERRORS  (optional, "all" or "first")
    """

    log_level: str = Field(
        default="WARNING",
        description="Level applied to the root logger by configure_logging()",
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Plain text lines or one JSON object per record",
    )
    argument_errors: Literal["all", "first"] = Field(
        default="all",
        description=(
            "Whether an argument error reports every failed check of an actor "
            "or only the first one found"
        ),
    )

    model_config = SettingsConfigDict(
        env_prefix="SERVICE_ACTOR_",
        env_file=".env",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache(maxsize=1)
def get_settings() -> ActorSettings:
    """Process-wide settings, loaded once. Call `get_settings.cache_clear()` to reload."""

    return ActorSettings()
