# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Mapping of domain errors to HTTP responses."""

import logging
from typing import Any

from fastapi import Request, status
from fastapi.responses import JSONResponse

from schoolverse.domains.content import ContentServiceError, ErrorKind
from schoolverse.infrastructure.database import DatabaseError
from schoolverse.models import ErrorResponse

logger = logging.getLogger(__name__)

STATUS_FOR_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.BACKEND_UNAVAILABLE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def content_error_handler(request: Request, exc: ContentServiceError) -> JSONResponse:
    """Render a ContentServiceError as ``{"detail", "error"}``."""
    status_code = STATUS_FOR_KIND[exc.kind]
    if status_code >= 500:
        logger.warning("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "error": exc.kind.value},
    )


async def database_error_handler(request: Request, exc: DatabaseError) -> JSONResponse:
    """Render an unhandled DatabaseError as BACKEND_UNAVAILABLE."""
    logger.error("%s %s database failure: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "detail": "Database unavailable",
            "error": ErrorKind.BACKEND_UNAVAILABLE.value,
        },
    )


# OpenAPI documentation for the error bodies rendered above
ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    status.HTTP_404_NOT_FOUND: {"model": ErrorResponse, "description": "Record not found"},
    status.HTTP_503_SERVICE_UNAVAILABLE: {"model": ErrorResponse, "description": "Backend unavailable"},
}
