# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gallery group endpoints beyond CRUD.

This module provides:
- GET /gallery-groups/summary - Groups with their photo counts
- GET /gallery-groups/{group_id}/items - Photos of one group
- DELETE /gallery-groups/{group_id} - Delete a group and its photos (admin)
- POST /gallery-groups/{group_id}/items/batch - Upload many photos (admin)

Batch uploads answer 200 with a per-file manifest even when some files
fail; check ``failed`` and each item's ``ok`` flag.

Example:
    POST /api/v1/gallery-groups/{group_id}/items/batch
    Content-Type: multipart/form-data
    files=@a.jpg files=@b.png title="Sports Day"
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status

from schoolverse.api.dependencies import get_gallery_service, get_gallery_uploader, require_admin
from schoolverse.domains.gallery import BatchFile, GalleryService
from schoolverse.models import (
    BatchUploadResponse,
    GalleryGroupSummary,
    GroupGalleryItemResponse,
    ListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/summary",
    response_model=ListResponse[GalleryGroupSummary],
    summary="List gallery groups with counts",
)
async def list_groups_with_counts(
    active_only: Annotated[bool, Query(description="Only active groups")] = False,
    service: GalleryService = Depends(get_gallery_service),
) -> dict[str, Any]:
    groups = (await service.list_groups_with_counts(active_only=active_only)).unwrap()
    return {"items": groups, "total": len(groups)}


@router.get(
    "/{group_id}/items",
    response_model=ListResponse[GroupGalleryItemResponse],
    summary="List photos of a gallery group",
)
async def list_group_items(
    group_id: str,
    active_only: Annotated[bool, Query(description="Only active photos")] = False,
    service: GalleryService = Depends(get_gallery_service),
) -> dict[str, Any]:
    items = (await service.list_group_items(group_id, active_only=active_only)).unwrap()
    return {"items": items, "total": len(items)}


@router.delete(
    "/{group_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete gallery group",
    description="Delete every photo of the group, then the group itself.",
    dependencies=[Depends(require_admin)],
)
async def delete_group(
    group_id: str,
    service: GalleryService = Depends(get_gallery_service),
) -> None:
    logger.info("Deleting gallery group %s", group_id)
    (await service.delete_group(group_id)).unwrap()


@router.post(
    "/{group_id}/items/batch",
    response_model=BatchUploadResponse,
    summary="Batch upload photos",
    description="Upload photos concurrently; each file is reported individually.",
    dependencies=[Depends(require_admin)],
)
async def batch_upload(
    group_id: str,
    files: Annotated[list[UploadFile], File(description="Image files in display order")],
    title: Annotated[str | None, Form()] = None,
    description: Annotated[str | None, Form()] = None,
    alt_text: Annotated[str | None, Form()] = None,
    folder: Annotated[str, Form()] = "gallery",
    max_size_mb: Annotated[float | None, Form(gt=0)] = None,
    service: GalleryService = Depends(get_gallery_uploader),
) -> dict[str, Any]:
    """Upload photos into a gallery group.

    Args:
        group_id: Target group.
        files: Uploaded image files.
        title: Shared title for the new photos.
        description: Shared description.
        alt_text: Shared alt text.
        folder: Storage folder.
        max_size_mb: Per-file size ceiling override.
        service: Gallery service with upload support.

    Returns:
        Manifest with one entry per file.
    """
    batch = [
        BatchFile(
            data=await upload.read(),
            content_type=upload.content_type or "",
            filename=upload.filename or "upload",
        )
        for upload in files
    ]
    manifest = (
        await service.batch_upload(
            group_id,
            batch,
            title=title,
            description=description,
            alt_text=alt_text,
            folder=folder,
            max_size_mb=max_size_mb,
        )
    ).unwrap()
    return manifest.to_dict()
