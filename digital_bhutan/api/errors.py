"""
digital_bhutan.api.errors — ``{"message": ...}`` error envelope
================================================================

Every failure the API returns has the same body shape.  Domain errors
carry their own status code; request validation is a 400 and anything
unexpected is a logged 500.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from digital_bhutan.services.errors import PlatformError

logger = logging.getLogger(__name__)


def _envelope(message: str, status_code: int, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(content={"message": message}, status_code=status_code, headers=headers)


async def platform_error_handler(request: Request, exc: PlatformError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _envelope(exc.message, exc.status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return _envelope(message, exc.status_code, getattr(exc, "headers", None))


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Invalid request to %s: %s", request.url.path, exc.errors())
    return _envelope("Invalid request data", 400)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _envelope("Internal server error", 500)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(PlatformError, platform_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
