# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload domain package: validation and storage of images and materials."""

from schoolverse.domains.uploads.gateway import (
    IMAGE_MIME_TYPES,
    MATERIAL_MIME_TYPES,
    UploadedFile,
    UploadError,
    UploadGateway,
    UploadKind,
    UploadValidationError,
    build_object_path,
    file_type_label,
    format_size,
)

__all__ = [
    "IMAGE_MIME_TYPES",
    "MATERIAL_MIME_TYPES",
    "UploadedFile",
    "UploadError",
    "UploadGateway",
    "UploadKind",
    "UploadValidationError",
    "build_object_path",
    "file_type_label",
    "format_size",
]
