# This file defines the root banner, liveness, readiness, and database check endpoints.
# It exists so hosting platforms and operators can verify the service quickly.
# Readiness and the database check borrow a pooled connection the same way lookups do.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api.api_config import ApiConfig
from src.api.db_access import DatabaseClient
from src.api.dependencies import get_config, get_database_client
from src.api.error_handlers import APIError
from src.api.schemas.health_schemas import DatabaseCheckResponse, HealthResponse, ReadinessResponse

logger = logging.getLogger(__name__)

ROOT_MESSAGE = "API is running. Use /debtor_status_info for queries."

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
DBDep = Annotated[DatabaseClient, Depends(get_database_client)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@router.get("/", response_class=PlainTextResponse)
def root() -> str:
    return ROOT_MESSAGE


@router.get("/health", response_model=HealthResponse)
def health(config: ConfigDep) -> dict[str, object]:
    return {
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(db: DBDep) -> dict[str, object]:
    is_ready = db.can_connect()
    return {
        "ready": is_ready,
        "database": "reachable" if is_ready else "unreachable",
        "timestamp": _utc_now(),
    }


@router.get("/check_db", response_model=DatabaseCheckResponse)
def check_db(db: DBDep) -> dict[str, object]:
    try:
        database_name = db.current_database()
    except SQLAlchemyError as exc:
        logger.exception("Database check failed")
        raise APIError(status_code=500, message="Failed to connect to database.") from exc

    return {
        "message": "Connected to database successfully!",
        "database_name": database_name,
    }
