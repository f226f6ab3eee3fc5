# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Gallery domain package: grouped albums and batch photo uploads."""

from schoolverse.domains.gallery.service import (
    BatchFile,
    BatchItemOutcome,
    BatchUploadManifest,
    GalleryService,
)

__all__ = [
    "BatchFile",
    "BatchItemOutcome",
    "BatchUploadManifest",
    "GalleryService",
]
