"""
Process-level settings loaded from environment variables.
It centralizes cross-cutting values such as project name, environment label, and log level.
Database and HTTP runtime options live in the API config module instead.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

SETTINGS_DEFAULTS: Final[dict[str, str]] = {
    "PROJECT_NAME": "debtor-status-api",
    "ENV": "local",
    "LOG_LEVEL": "INFO",
}

_LOG_LEVELS: Final[frozenset[str]] = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"Unknown log level: {value!r}")
        return level


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    values = {key: os.getenv(key) or default for key, default in SETTINGS_DEFAULTS.items()}
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
