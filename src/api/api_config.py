# This file defines runtime settings for the API layer in one place.
# It exists so the database connection, SSL mode, pool sizing, and listener can be configured without code edits.
# The config loader reads environment variables and applies safe defaults for local development.
# Hosting platforms that expose `postgres://` URLs are normalized to the psycopg2 driver URL.

from __future__ import annotations

import os
from functools import lru_cache

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Older deployments expose the connection string under the dashboard database name.
LEGACY_DATABASE_URL_ENV = "twdf_dashboard"


class ApiConfig(BaseModel):
    """Typed API runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    api_name: str = "Debtor Status API"
    host: str = "0.0.0.0"
    port: int = 8080
    environment: str = "local"
    database_url: str
    db_ssl: bool = False
    db_pool_size: int = 5
    db_max_overflow: int = 10
    allowed_origins: list[str] = Field(default_factory=list)
    app_version: str = "0.1.0"

    @field_validator("database_url")
    @classmethod
    def normalize_database_url(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("database_url must not be empty.")
        if value.startswith("postgres://"):
            return "postgresql+psycopg2://" + value[len("postgres://") :]
        if value.startswith("postgresql://"):
            return "postgresql+psycopg2://" + value[len("postgresql://") :]
        return value

    @field_validator("port", "db_pool_size")
    @classmethod
    def validate_positive_ints(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("Value must be greater than 0.")
        return value

    @field_validator("db_max_overflow")
    @classmethod
    def validate_non_negative(cls, value: int) -> int:
        if value < 0:
            raise ValueError("db_max_overflow must not be negative.")
        return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in {"1", "true", "yes", "y", "on"}:
        return True
    if value in {"0", "false", "no", "n", "off"}:
        return False
    raise ValueError(f"{name} must be boolean-like, got {raw!r}")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return int(raw)


def _env_list(name: str, default: list[str] | None = None) -> list[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default or [])
    return [item.strip() for item in raw.split(",") if item.strip()]


def load_api_config(*, load_env: bool = True) -> ApiConfig:
    """Load API configuration from `.env` and process environment."""

    if load_env:
        load_dotenv()

    database_url = os.getenv("DATABASE_URL") or os.getenv(LEGACY_DATABASE_URL_ENV, "")
    if not database_url.strip():
        raise RuntimeError("DATABASE_URL is required for API startup.")

    config_values: dict[str, object] = {
        "api_name": os.getenv("API_NAME", "Debtor Status API"),
        "host": os.getenv("API_HOST", "0.0.0.0"),
        "port": _env_int("PORT", 8080),
        "environment": os.getenv("ENV", "local"),
        "database_url": database_url,
        "db_ssl": _env_bool("DB_SSL", False),
        "db_pool_size": _env_int("DB_POOL_SIZE", 5),
        "db_max_overflow": _env_int("DB_MAX_OVERFLOW", 10),
        "allowed_origins": _env_list("API_ALLOWED_ORIGINS", []),
        "app_version": os.getenv("APP_VERSION", "0.1.0"),
    }

    return ApiConfig.model_validate(config_values)


@lru_cache(maxsize=1)
def get_api_config() -> ApiConfig:
    """Cached accessor for API config."""

    return load_api_config()
