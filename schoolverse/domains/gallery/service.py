# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gallery service for event albums.

This module provides the GalleryService that handles:
- Listing gallery groups with their item counts
- Deleting a group together with its items
- Batch uploading photos into a group with a per-item manifest

Batch policy: uploads run concurrently and each file is reported
individually. A failed file never undoes the files that succeeded; the
batch as a whole only fails when the group does not exist or the request
carries no files.

Example:
    >>> service = GalleryService(db, gateway)
    >>> manifest = (await service.batch_upload(group_id, files, title="Sports Day")).unwrap()
    >>> manifest.succeeded, manifest.failed
    (9, 1)
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from schoolverse.domains.content.entities import GALLERY_GROUPS, GALLERY_ITEMS
from schoolverse.domains.content.repository import ContentRepository, Record
from schoolverse.domains.content.result import ContentServiceError, ErrorKind, Result
from schoolverse.domains.uploads.gateway import UploadedFile, UploadGateway
from schoolverse.infrastructure.database.models import GalleryGroup, GroupGalleryItem
from schoolverse.infrastructure.events import EventBus, get_event_bus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchFile:
    """One file of a batch upload."""

    data: bytes
    content_type: str
    filename: str


@dataclass
class BatchItemOutcome:
    """Result for one file of a batch upload.

    Attributes:
        index: Position of the file in the request.
        filename: Original client filename.
        ok: Whether the file was stored and its row inserted.
        record: Inserted gallery_items row when ok.
        error: Human-readable failure reason when not ok.
        error_kind: Failure category when not ok.
    """

    index: int
    filename: str
    ok: bool
    record: Record | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "filename": self.filename,
            "ok": self.ok,
            "record": self.record,
            "error": self.error,
            "error_kind": self.error_kind.value if self.error_kind else None,
        }


@dataclass
class BatchUploadManifest:
    """Per-item outcome list of a batch upload."""

    group_id: str
    items: list[BatchItemOutcome] = field(default_factory=list)

    @property
    def succeeded(self) -> int:
        return sum(1 for item in self.items if item.ok)

    @property
    def failed(self) -> int:
        return len(self.items) - self.succeeded

    @property
    def failed_indexes(self) -> list[int]:
        return [item.index for item in self.items if not item.ok]

    def to_dict(self) -> dict[str, Any]:
        return {
            "group_id": self.group_id,
            "total": len(self.items),
            "succeeded": self.succeeded,
            "failed": self.failed,
            "items": [item.to_dict() for item in self.items],
        }


class GalleryService:
    """Service for gallery groups and their photos.

    Attributes:
        _db: Async database session.
        _gateway: Upload gateway used by batch uploads.
    """

    def __init__(
        self,
        db: AsyncSession,
        gateway: UploadGateway | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        """Initialize the gallery service.

        Args:
            db: Async database session.
            gateway: Upload gateway, required for batch uploads.
            event_bus: Optional event bus (process singleton by default).
        """
        self._db = db
        self._gateway = gateway
        events = event_bus or get_event_bus()
        self._groups = ContentRepository(db, GALLERY_GROUPS, events)
        self._items = ContentRepository(db, GALLERY_ITEMS, events)

    async def list_groups_with_counts(self, active_only: bool = False) -> Result[list[Record]]:
        """List gallery groups, each with an ``item_count`` field.

        Args:
            active_only: Only include groups with is_active set.

        Returns:
            Result with groups ordered by display_order, newest first on ties.
        """
        item_count = func.count(GroupGalleryItem.id).label("item_count")
        query = (
            select(GalleryGroup, item_count)
            .outerjoin(GroupGalleryItem, GroupGalleryItem.group_id == GalleryGroup.id)
            .group_by(GalleryGroup.id)
            .order_by(GalleryGroup.display_order.asc(), GalleryGroup.created_at.desc())
        )
        if active_only:
            query = query.where(GalleryGroup.is_active.is_(True))

        try:
            rows = (await self._db.execute(query)).all()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error("Failed to list gallery groups: %s", str(e), exc_info=True)
            return Result.failure(
                ErrorKind.BACKEND_UNAVAILABLE,
                "Could not list gallery_groups: database unavailable",
            )

        groups = []
        for group, count in rows:
            record = group.to_dict()
            record["item_count"] = int(count)
            groups.append(record)
        return Result.success(groups)

    async def list_group_items(self, group_id: str, active_only: bool = False) -> Result[list[Record]]:
        """Photos of one group ordered by display_order."""
        filters: dict[str, Any] = {"group_id": group_id}
        if active_only:
            filters["is_active"] = True
        return await self._items.list(filters)

    async def delete_group(self, group_id: str) -> Result[dict[str, Any]]:
        """Delete a group and every photo in it.

        Items are deleted first, then the group, as two separate commits.

        Returns:
            Result with ``group_id`` and ``deleted_items`` count.
        """
        group = await self._groups.get(group_id)
        if not group.ok:
            return Result.failure(group.error, group.message)

        deleted_items = await self._items.delete_where({"group_id": group_id})
        if not deleted_items.ok:
            return Result.failure(deleted_items.error, deleted_items.message)

        deleted = await self._groups.delete(group_id)
        if not deleted.ok:
            return Result.failure(deleted.error, deleted.message)

        logger.info(
            "Deleted gallery group %s with %d items",
            group_id,
            len(deleted_items.value),
        )
        return Result.success({"group_id": group_id, "deleted_items": len(deleted_items.value)})

    async def batch_upload(
        self,
        group_id: str,
        files: list[BatchFile],
        title: str | None = None,
        description: str | None = None,
        alt_text: str | None = None,
        folder: str = "gallery",
        max_size_mb: float | None = None,
    ) -> Result[BatchUploadManifest]:
        """Upload photos concurrently and insert one gallery_items row per success.

        Args:
            group_id: Target gallery group.
            files: Files in display order.
            title: Shared title; ``"Image {n}"`` when omitted.
            description: Shared description.
            alt_text: Shared alt text; falls back to the title.
            folder: Storage folder for the photos.
            max_size_mb: Per-file size ceiling override.

        Returns:
            Result with the manifest, or NOT_FOUND / VALIDATION_FAILED when
            the batch is rejected before any upload.
        """
        if not files:
            return Result.failure(ErrorKind.VALIDATION_FAILED, "No files to upload")
        if self._gateway is None:
            return Result.failure(
                ErrorKind.BACKEND_UNAVAILABLE,
                "Upload gateway is not configured",
            )

        group = await self._groups.get(group_id)
        if not group.ok:
            return Result.failure(group.error, group.message)

        logger.info("Uploading %d photos into gallery group %s", len(files), group_id)
        uploads = await asyncio.gather(
            *[
                self._gateway.upload_image(
                    file.data,
                    file.content_type,
                    file.filename,
                    folder=folder,
                    max_size_mb=max_size_mb,
                )
                for file in files
            ],
            return_exceptions=True,
        )

        manifest = BatchUploadManifest(group_id=group_id)
        for index, (file, outcome) in enumerate(zip(files, uploads)):
            if isinstance(outcome, ContentServiceError):
                logger.warning("Batch item %d (%s) failed: %s", index, file.filename, outcome.message)
                manifest.items.append(
                    BatchItemOutcome(
                        index=index,
                        filename=file.filename,
                        ok=False,
                        error=outcome.message,
                        error_kind=outcome.kind,
                    )
                )
                continue
            if isinstance(outcome, BaseException):
                raise outcome

            manifest.items.append(
                await self._insert_item(group_id, index, file, outcome, title, description, alt_text)
            )

        logger.info(
            "Batch upload into %s finished: %d succeeded, %d failed",
            group_id,
            manifest.succeeded,
            manifest.failed,
        )
        return Result.success(manifest)

    async def _insert_item(
        self,
        group_id: str,
        index: int,
        file: BatchFile,
        uploaded: UploadedFile,
        title: str | None,
        description: str | None,
        alt_text: str | None,
    ) -> BatchItemOutcome:
        default_title = f"Image {index + 1}"
        created = await self._items.create(
            {
                "group_id": group_id,
                "title": title or default_title,
                "description": description or None,
                "image_url": uploaded.url,
                "alt_text": alt_text or title or default_title,
                "display_order": index,
                "is_active": True,
            }
        )
        if not created.ok:
            logger.warning(
                "Stored %s but could not insert gallery item: %s",
                uploaded.path,
                created.message,
            )
            return BatchItemOutcome(
                index=index,
                filename=file.filename,
                ok=False,
                error=created.message,
                error_kind=created.error,
            )
        return BatchItemOutcome(index=index, filename=file.filename, ok=True, record=created.value)
