# This file defines response schemas for health, readiness, and database check endpoints.
# It exists to keep operational status contracts explicit for platform consumers.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    status: str
    environment: str
    service_name: str
    version: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    ready: bool
    database: str
    timestamp: datetime


class DatabaseCheckResponse(BaseModel):
    message: str
    database_name: str
