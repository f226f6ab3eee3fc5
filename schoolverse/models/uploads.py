# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload response models."""

from pydantic import BaseModel, Field

from schoolverse.models.content import GroupGalleryItemResponse


class UploadResponse(BaseModel):
    """Stored file descriptor returned after an upload."""

    url: str = Field(description="Public URL of the stored object")
    path: str = Field(description="Object path inside the bucket")
    bucket: str
    filename: str
    content_type: str
    size_bytes: int
    size_label: str = Field(description='Human readable size, e.g. "2.00 MB"')
    file_type: str = Field(description="Short type label, e.g. PDF or Other")
    is_fallback: bool = False


class BatchItemResponse(BaseModel):
    """Outcome of one file in a batch upload."""

    index: int
    filename: str
    ok: bool
    record: GroupGalleryItemResponse | None = None
    error: str | None = None
    error_kind: str | None = None


class BatchUploadResponse(BaseModel):
    """Per-item manifest of a batch upload."""

    group_id: str
    total: int
    succeeded: int
    failed: int
    items: list[BatchItemResponse]
