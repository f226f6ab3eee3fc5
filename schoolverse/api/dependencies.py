# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""FastAPI dependency injection definitions.

This module provides dependency functions for FastAPI endpoints.
Dependencies are used to:
- Get database sessions
- Get the object storage backend and upload gateway
- Get service instances
- Guard admin endpoints with the shared admin key

Example:
    @router.post("", dependencies=[Depends(require_admin)])
    async def create_announcement(
        service: ContentService = Depends(get_content_service),
    ):
        ...
"""

import logging
import secrets
from typing import Annotated, AsyncGenerator

from fastapi import Depends, Header, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from schoolverse.core.config import Settings, get_settings
from schoolverse.domains.content import ContentService
from schoolverse.domains.dashboard import StatisticsAggregator
from schoolverse.domains.gallery import GalleryService
from schoolverse.domains.uploads import UploadGateway
from schoolverse.infrastructure.database import get_session, get_sessionmaker
from schoolverse.infrastructure.storage import ObjectStorage

logger = logging.getLogger(__name__)

ADMIN_KEY_HEADER = "X-Admin-Key"


# =============================================================================
# Infrastructure
# =============================================================================


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Get a database session for the current request.

    Yields:
        AsyncSession committed when the request succeeds.
    """
    async with get_session() as session:
        yield session


def get_storage(request: Request) -> ObjectStorage:
    """Get the object storage backend created at startup.

    Raises:
        HTTPException: 503 if storage has not been initialized.
    """
    storage = getattr(request.app.state, "storage", None)
    if storage is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Object storage is not initialized",
        )
    return storage


# =============================================================================
# Services
# =============================================================================


def get_content_service(db: Annotated[AsyncSession, Depends(get_db)]) -> ContentService:
    return ContentService(db)


def get_upload_gateway(
    storage: Annotated[ObjectStorage, Depends(get_storage)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> UploadGateway:
    return UploadGateway.from_settings(storage, settings)


def get_gallery_service(db: Annotated[AsyncSession, Depends(get_db)]) -> GalleryService:
    """Gallery service without upload support (listing and deletes)."""
    return GalleryService(db)


def get_gallery_uploader(
    db: Annotated[AsyncSession, Depends(get_db)],
    gateway: Annotated[UploadGateway, Depends(get_upload_gateway)],
) -> GalleryService:
    """Gallery service wired to the upload gateway for batch uploads."""
    return GalleryService(db, gateway)


def get_statistics_aggregator() -> StatisticsAggregator:
    return StatisticsAggregator(get_sessionmaker())


# =============================================================================
# Admin guard
# =============================================================================


def require_admin(
    settings: Annotated[Settings, Depends(get_settings)],
    admin_key: Annotated[str | None, Header(alias=ADMIN_KEY_HEADER)] = None,
) -> None:
    """Reject requests without a valid admin key.

    Raises:
        HTTPException: 401 if the header is missing or does not match.
    """
    expected = settings.admin.api_key.get_secret_value()
    if not admin_key or not secrets.compare_digest(
        admin_key.encode(), expected.encode()
    ):
        logger.info("Rejected admin request: invalid or missing %s", ADMIN_KEY_HEADER)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or missing admin key",
            headers={"WWW-Authenticate": ADMIN_KEY_HEADER},
        )
