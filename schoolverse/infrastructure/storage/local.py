# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Filesystem storage backend for development.

Objects are written to ``{media_dir}/{bucket}/{path}`` and served from
``{public_base_url}/{bucket}/{path}`` (the API mounts ``media_dir`` as
static files).
"""

import asyncio
import logging
from pathlib import Path

from schoolverse.infrastructure.storage.base import ObjectStorage, StorageError

logger = logging.getLogger(__name__)


class LocalObjectStorage(ObjectStorage):
    """Store objects as plain files under a media directory."""

    def __init__(self, media_dir: str | Path, public_base_url: str) -> None:
        self.media_dir = Path(media_dir)
        self.public_base_url = public_base_url.rstrip("/")

    @property
    def name(self) -> str:
        return "local"

    def _resolve(self, bucket: str, path: str) -> Path:
        root = (self.media_dir / bucket).resolve()
        target = (root / path).resolve()
        if not target.is_relative_to(root):
            raise StorageError(f"Object path escapes bucket: {path}")
        return target

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
    ) -> str:
        target = self._resolve(bucket, path)
        if target.exists():
            raise StorageError(f"Object already exists: {bucket}/{path}", status_code=409)

        def _write() -> None:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(data)

        try:
            await asyncio.to_thread(_write)
        except OSError as e:
            raise StorageError(f"Failed to write object {bucket}/{path}: {e}") from e

        logger.info("Stored object locally: %s (%s, %d bytes)", target, content_type, len(data))
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.public_base_url}/{bucket}/{path}"

    async def remove(self, bucket: str, paths: list[str]) -> None:
        targets = [self._resolve(bucket, path) for path in paths]

        def _unlink() -> None:
            for target in targets:
                target.unlink(missing_ok=True)

        try:
            await asyncio.to_thread(_unlink)
        except OSError as e:
            raise StorageError(f"Failed to remove objects from {bucket}: {e}") from e

        logger.info("Removed %d local objects from bucket %s", len(targets), bucket)
