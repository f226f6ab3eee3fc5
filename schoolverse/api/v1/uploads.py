# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""File upload endpoints.

This module provides:
- POST /uploads/image - Store an image (jpeg, png, webp, gif)
- POST /uploads/material - Store a learning material document

Files are validated before anything is sent to storage.
"""

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, File, Form, UploadFile

from schoolverse.api.dependencies import get_upload_gateway, require_admin
from schoolverse.domains.uploads import UploadGateway, UploadKind
from schoolverse.models import UploadResponse

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])

DEFAULT_FOLDERS = {
    UploadKind.IMAGE: "images",
    UploadKind.MATERIAL: "materials",
}


@router.post(
    "/{kind}",
    response_model=UploadResponse,
    summary="Upload a file",
    description="Validate and store one file, returning its public URL.",
)
async def upload_file(
    kind: UploadKind,
    file: Annotated[UploadFile, File(description="File to store")],
    folder: Annotated[str | None, Form()] = None,
    max_size_mb: Annotated[float | None, Form(gt=0)] = None,
    fallback_url: Annotated[str | None, Form()] = None,
    gateway: UploadGateway = Depends(get_upload_gateway),
) -> dict[str, Any]:
    """Upload one file.

    Args:
        kind: ``image`` or ``material``.
        file: Uploaded file.
        folder: Storage folder; ``images`` or ``materials`` by default.
        max_size_mb: Size ceiling override in MB.
        fallback_url: Placeholder URL returned if storage fails.
        gateway: Upload gateway.

    Returns:
        Stored file descriptor.
    """
    data = await file.read()
    filename = file.filename or "upload"
    logger.info("Upload request: kind=%s, filename=%s, size=%d", kind.value, filename, len(data))

    uploaded = await gateway.upload(
        kind,
        data,
        file.content_type or "",
        filename,
        folder or DEFAULT_FOLDERS[kind],
        max_size_mb=max_size_mb,
        fallback_url=fallback_url,
    )
    return uploaded.to_dict()
