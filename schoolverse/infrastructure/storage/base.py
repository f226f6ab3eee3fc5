# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Object storage abstraction.

Backends store binary objects in named buckets under slash-separated
paths and expose a public URL for each stored object.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Raised when an object storage operation fails.

    Attributes:
        message: Human-readable error description.
        status_code: HTTP status code from the storage API, if any.
        details: Optional dictionary with additional error context.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.status_code is not None:
            return f"{self.message} (HTTP {self.status_code})"
        return self.message


class ObjectStorage(ABC):
    """Interface implemented by every storage backend."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name used in logs and health output."""

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
    ) -> str:
        """Store an object.

        Args:
            bucket: Bucket name.
            path: Object path inside the bucket.
            data: Object bytes.
            content_type: MIME type recorded with the object.

        Returns:
            The stored object path.

        Raises:
            StorageError: If the object could not be stored.
        """

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Public URL under which the object is served."""

    @abstractmethod
    async def remove(self, bucket: str, paths: list[str]) -> None:
        """Remove objects from a bucket.

        Raises:
            StorageError: If the removal request fails.
        """

    async def close(self) -> None:
        """Release backend resources."""
