# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI Application Factory.

This module provides the main application factory for the SchoolVerse API.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator
from urllib.parse import urlparse

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from schoolverse import __version__
from schoolverse.api.errors import content_error_handler, database_error_handler
from schoolverse.api.middleware import RequestContextMiddleware
from schoolverse.api.routes import health
from schoolverse.api.v1 import router as v1_router
from schoolverse.core.config import get_settings
from schoolverse.domains.content import ContentServiceError
from schoolverse.infrastructure.database import (
    DatabaseError,
    close_database,
    get_engine,
    get_session,
    init_database,
)
from schoolverse.infrastructure.database.migrations.runner import run_migrations
from schoolverse.infrastructure.database.seeds import seed_content_database
from schoolverse.infrastructure.storage import create_storage
from schoolverse.utils.logging import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events for the application.
    Initializes and cleans up:
    - Logging configuration
    - Database connection, schema migrations and default content
    - Object storage backend

    Args:
        app: The FastAPI application instance.

    Yields:
        None during application runtime.
    """
    settings = get_settings()
    setup_logging(settings)
    logger.info(
        "Starting SchoolVerse API",
        extra={"environment": settings.environment, "debug": settings.debug},
    )

    # =========================================================================
    # Startup
    # =========================================================================

    await init_database(settings)
    logger.info("Database connection initialized")

    if settings.api.create_schema:
        applied = await run_migrations(get_engine())
        if applied:
            logger.info("Applied migrations: %s", ", ".join(applied))
        try:
            async with get_session() as session:
                seeded = await seed_content_database(session)
            logger.info("Default content checked: %s", seeded)
        except DatabaseError as e:
            logger.warning("Failed to seed default content: %s", str(e))

    app.state.storage = create_storage(settings)
    logger.info("Object storage initialized: %s", app.state.storage.name)

    yield

    # =========================================================================
    # Shutdown
    # =========================================================================

    try:
        await app.state.storage.close()
        logger.info("Object storage closed")
    except Exception as e:
        logger.warning("Error closing object storage: %s", str(e))

    await close_database()
    logger.info("Shutting down SchoolVerse API")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    This factory function creates a new FastAPI instance with all
    middleware, routes, and configurations applied.

    Returns:
        Configured FastAPI application instance.
    """
    settings = get_settings()

    app = FastAPI(
        title="SchoolVerse API",
        description="School website content management backend",
        version=__version__,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        # Disable automatic redirects from /path to /path/
        redirect_slashes=False,
    )

    # =========================================================================
    # Exception handlers
    # =========================================================================
    app.add_exception_handler(ContentServiceError, content_error_handler)
    app.add_exception_handler(DatabaseError, database_error_handler)

    # =========================================================================
    # Middleware (order matters - last added is first executed)
    # =========================================================================
    app.add_middleware(RequestContextMiddleware)

    # CORS middleware (should be last to execute first)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins_list,
        allow_credentials=settings.cors.allow_credentials,
        allow_methods=settings.cors.allow_methods,
        allow_headers=settings.cors.allow_headers,
    )

    # =========================================================================
    # Routes
    # =========================================================================
    app.include_router(health.router, tags=["Health"])
    app.include_router(v1_router)

    if settings.storage.backend == "local":
        media_path = urlparse(settings.storage.public_base_url).path.rstrip("/") or "/media"
        app.mount(
            media_path,
            StaticFiles(directory=settings.storage.media_dir, check_dir=False),
            name="media",
        )

    return app
