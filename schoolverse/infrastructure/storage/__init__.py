# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Object storage backends.

Example:
    from schoolverse.infrastructure.storage import create_storage

    storage = create_storage(settings)
    path = await storage.upload("site-images", "hero/1_x.png", data, "image/png")
"""

from typing import TYPE_CHECKING

from schoolverse.infrastructure.storage.base import ObjectStorage, StorageError
from schoolverse.infrastructure.storage.http import HttpObjectStorage
from schoolverse.infrastructure.storage.local import LocalObjectStorage

if TYPE_CHECKING:
    from schoolverse.core.config.settings import Settings


def create_storage(settings: "Settings") -> ObjectStorage:
    """Build the storage backend selected by ``STORAGE_BACKEND``."""
    storage = settings.storage
    if storage.backend == "http":
        return HttpObjectStorage(
            base_url=storage.url,
            service_key=storage.service_key.get_secret_value(),
            timeout=storage.timeout,
            cache_control=storage.cache_control,
        )
    return LocalObjectStorage(storage.media_dir, storage.public_base_url)


__all__ = [
    "HttpObjectStorage",
    "LocalObjectStorage",
    "ObjectStorage",
    "StorageError",
    "create_storage",
]
