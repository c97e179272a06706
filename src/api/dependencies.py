# This file provides dependency factories for FastAPI routes and middleware.
# It exists so the pooled database client is created once and shared through dependency injection.
# Services receive the client through `Depends`, so endpoint tests can swap it in one place.

from __future__ import annotations

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from src.api.api_config import ApiConfig, get_api_config
from src.api.db_access import DatabaseClient
from src.api.services.debtor_status_service import DebtorStatusService


@lru_cache(maxsize=1)
def get_database_client() -> DatabaseClient:
    config = get_api_config()
    return DatabaseClient(
        database_url=config.database_url,
        ssl=config.db_ssl,
        pool_size=config.db_pool_size,
        max_overflow=config.db_max_overflow,
    )


def get_debtor_status_service(
    db: Annotated[DatabaseClient, Depends(get_database_client)],
) -> DebtorStatusService:
    return DebtorStatusService(db=db)


def get_config() -> ApiConfig:
    return get_api_config()
