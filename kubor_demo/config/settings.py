"""Typed runtime settings with dotenv support and startup validation."""

import logging
from datetime import timedelta
from typing import Any

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .durations import DURATION_MAX, config_format_duration, config_parse_duration, config_parse_listen_address

DEFAULT_BRANCH = "development"
DEFAULT_REVISION = "latest"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Process settings for the lifecycle, the HTTP responder and logging.

    Environment variable names map directly to field names in uppercase.
    Example: `ready_after` reads from `READY_AFTER`. Command-line flags are
    applied on top as constructor overrides.

    Attributes:
        ready_after: Delay before the readiness flag flips to true.
        exit_after: Delay after becoming ready before self-exit; zero never exits.
        exit_code: Process exit code used when the lifecycle completes.
        listen: HTTP bind address in `host:port` form.
        log_level: Logging threshold name.
        branch: Build-time branch identity.
        revision: Build-time revision identity.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    ready_after: timedelta = Field(default=timedelta(0))
    exit_after: timedelta = Field(default=timedelta(0))
    exit_code: int = Field(default=1, ge=0, le=255)
    listen: str = Field(default=":8080")
    log_level: str = Field(default="INFO")
    branch: str = Field(default=DEFAULT_BRANCH, min_length=1)
    revision: str = Field(default=DEFAULT_REVISION, min_length=1)

    @field_validator("ready_after", "exit_after", mode="before")
    @classmethod
    def _parse_duration_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return config_parse_duration(value)
        return value

    @field_validator("ready_after", "exit_after")
    @classmethod
    def _validate_duration_range(cls, value: timedelta) -> timedelta:
        if value < timedelta(0):
            raise ValueError("duration must not be negative")
        if value > DURATION_MAX:
            raise ValueError(f"duration must not exceed {config_format_duration(DURATION_MAX)}")
        return value

    @field_validator("listen")
    @classmethod
    def _validate_listen_address(cls, value: str) -> str:
        stripped_value = value.strip()
        config_parse_listen_address(stripped_value)
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        level_name = value.strip().upper()
        if not isinstance(logging.getLevelName(level_name), int):
            raise ValueError(f"unknown log level {value!r}")
        return level_name

    @field_validator("branch", "revision")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @property
    def listen_host(self) -> str:
        """Return the host part of the listen address (empty for all interfaces)."""

        return config_parse_listen_address(self.listen)[0]

    @property
    def listen_port(self) -> int:
        """Return the TCP port of the listen address."""

        return config_parse_listen_address(self.listen)[1]


def config_load_settings(overrides: dict[str, Any] | None = None) -> AppSettings:
    """Load and validate runtime settings from environment, dotenv and overrides.

    Args:
        overrides: Optional field values that take precedence over the environment.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are missing or invalid.
    """

    try:
        return AppSettings(**(overrides or {}))
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Check flags or environment variables. Details: {error}"
        ) from error
