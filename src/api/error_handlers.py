# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same `{"error": ...}` shape on failure.
# The handlers translate validation, HTTP, and unexpected failures into safe client messages.
# Internal details such as SQL text and driver messages only ever reach the server log.

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal Server Error"


class APIError(Exception):
    """Error type carrying the status code and client-safe message."""

    def __init__(self, *, status_code: int, message: str) -> None:
        self.status_code = status_code
        self.message = message
        super().__init__(message)


def error_body(message: str) -> dict[str, Any]:
    return {"error": message}


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    """Log an unhandled failure and return the generic 500 body."""

    logger.error(
        "Unhandled error for %s %s (request_id=%s)",
        request.method,
        request.url.path,
        _request_id(request),
        exc_info=exc,
    )
    return JSONResponse(status_code=500, content=error_body(INTERNAL_ERROR_MESSAGE))


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(_: Request, exc: APIError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(exc.message))

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(_: Request, __: RequestValidationError) -> JSONResponse:
        return JSONResponse(status_code=422, content=error_body("Invalid request parameters."))

    @app.exception_handler(HTTPException)
    async def http_exception_handler(_: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content=error_body(str(exc.detail)))

    # The request middleware normally answers first; this covers apps mounted without it.
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        return internal_error_response(request, exc)
