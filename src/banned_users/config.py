"""Runtime settings read from the environment.

Settings use ``pydantic-settings`` so that every value comes from a
``BANNED_USERS_*`` environment variable or an optional local ``.env``
file, with defaults suitable for a local SQLite database.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError as PydanticValidationError
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from banned_users.exceptions import ConfigurationError

DEFAULT_DATABASE_URL = "sqlite:///banned_users.sqlite3"
DEFAULT_OUTPUT_SEPARATOR = ";"
DEFAULT_OUTPUT_FILENAME = "banned_users.csv"
DEFAULT_LOG_LEVEL = "WARNING"


class Settings(BaseSettings):
    """Environment-backed configuration for one CLI run."""

    model_config = SettingsConfigDict(
        env_prefix="BANNED_USERS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    database_url: str = DEFAULT_DATABASE_URL
    output_separator: str = DEFAULT_OUTPUT_SEPARATOR
    output_filename: str = DEFAULT_OUTPUT_FILENAME
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("database_url", "output_filename")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be empty")
        return stripped

    @field_validator("output_separator")
    @classmethod
    def _single_character(cls, value: str) -> str:
        if len(value) != 1:
            raise ValueError("must be exactly one character")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        normalized = value.strip().upper()
        if not isinstance(logging.getLevelName(normalized), int):
            raise ValueError(f"unknown log level {value!r}")
        return normalized


def load_settings(**overrides: str) -> Settings:
    """Build :class:`Settings`, mapping pydantic failures to our hierarchy.

    Keyword *overrides* take precedence over the environment (used by
    CLI flags such as ``--database-url``).
    """
    clean = {key: value for key, value in overrides.items() if value is not None}
    try:
        return Settings(**clean)
    except PydanticValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        )
        raise ConfigurationError(
            f"Invalid configuration: {problems}",
            hint="Check the BANNED_USERS_* environment variables or your .env file.",
        ) from exc
