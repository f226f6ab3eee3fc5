# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Upload gateway for images and learning materials.

Files are validated (MIME type allow-list and size ceiling) before any
request reaches the object store, then stored under
``{folder}/{epoch_ms}_{random}.{ext}`` and exposed by public URL.

Example:
    >>> gateway = UploadGateway.from_settings(storage, settings)
    >>> uploaded = await gateway.upload_image(data, "image/png", "banner.png", folder="hero")
    >>> uploaded.url
    'http://localhost:34000/media/site-images/hero/1736950000000_k3j9x0qa.png'
"""

import logging
import secrets
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

from schoolverse.domains.content.result import ContentServiceError, ErrorKind
from schoolverse.infrastructure.storage import ObjectStorage, StorageError
from schoolverse.utils.datetime import epoch_millis

if TYPE_CHECKING:
    from schoolverse.core.config.settings import Settings

logger = logging.getLogger(__name__)

BYTES_PER_MB = 1024 * 1024

IMAGE_MIME_TYPES = frozenset(
    {
        "image/jpeg",
        "image/png",
        "image/webp",
        "image/gif",
    }
)

MATERIAL_MIME_TYPES = frozenset(
    {
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        "application/vnd.ms-powerpoint",
        "application/vnd.openxmlformats-officedocument.presentationml.presentation",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        "application/zip",
        "text/plain",
    }
)

_FILE_TYPE_LABELS = {
    "pdf": "PDF",
    "doc": "DOC",
    "docx": "DOC",
    "ppt": "PPT",
    "pptx": "PPT",
    "xls": "XLS",
    "xlsx": "XLS",
    "zip": "ZIP",
    "txt": "TXT",
    "jpg": "JPEG",
    "jpeg": "JPEG",
    "png": "PNG",
    "gif": "GIF",
    "webp": "WEBP",
}

_BASE36 = "0123456789abcdefghijklmnopqrstuvwxyz"


class UploadKind(str, Enum):
    """Upload categories with their own allow-list, bucket and ceiling."""

    IMAGE = "image"
    MATERIAL = "material"


class UploadError(ContentServiceError):
    """Raised when the object store rejects or fails an upload.

    Attributes:
        details: Optional dictionary with additional error context.
    """

    kind = ErrorKind.BACKEND_UNAVAILABLE

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class UploadValidationError(UploadError):
    """Raised when a file fails validation; no network request was made."""

    kind = ErrorKind.VALIDATION_FAILED


@dataclass(frozen=True)
class UploadedFile:
    """Outcome of a successful (or explicitly degraded) upload.

    Attributes:
        url: Public URL of the stored object.
        path: Object path inside the bucket.
        bucket: Bucket the object was stored in.
        filename: Original client filename.
        content_type: Declared MIME type.
        size_bytes: Object size in bytes.
        size_label: Human-readable size, e.g. ``"2.00 MB"``.
        file_type: Short type label derived from the extension.
        is_fallback: True when ``url`` is a caller-supplied placeholder.
    """

    url: str
    path: str
    bucket: str
    filename: str
    content_type: str
    size_bytes: int
    size_label: str
    file_type: str
    is_fallback: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "path": self.path,
            "bucket": self.bucket,
            "filename": self.filename,
            "content_type": self.content_type,
            "size_bytes": self.size_bytes,
            "size_label": self.size_label,
            "file_type": self.file_type,
            "is_fallback": self.is_fallback,
        }


def file_extension(filename: str) -> str:
    """Lower-cased extension without the dot, or empty string."""
    if "." not in filename:
        return ""
    return filename.rsplit(".", 1)[1].lower()


def file_type_label(filename: str) -> str:
    """Map a filename to PDF/DOC/PPT/XLS/ZIP/TXT/JPEG/PNG/GIF/WEBP or Other."""
    return _FILE_TYPE_LABELS.get(file_extension(filename), "Other")


def format_size(size_bytes: int) -> str:
    """Format a byte count in megabytes with two decimals."""
    return f"{size_bytes / BYTES_PER_MB:.2f} MB"


def _random_suffix(length: int = 11) -> str:
    return "".join(secrets.choice(_BASE36) for _ in range(length))


def build_object_path(folder: str, filename: str) -> str:
    """Unique object path ``{folder}/{epoch_ms}_{random}.{ext}``.

    Raises:
        UploadValidationError: If the folder is empty or climbs directories.
    """
    clean_folder = folder.strip().strip("/")
    if not clean_folder or ".." in clean_folder.split("/"):
        raise UploadValidationError(f"Invalid upload folder: {folder!r}")
    extension = file_extension(filename) or "bin"
    return f"{clean_folder}/{epoch_millis()}_{_random_suffix()}.{extension}"


class UploadGateway:
    """Validates files and stores them in the object store.

    Attributes:
        storage: Storage backend.
        image_bucket: Bucket for images.
        material_bucket: Bucket for learning materials.
        max_image_mb: Default image size ceiling.
        max_material_mb: Default material size ceiling.
    """

    def __init__(
        self,
        storage: ObjectStorage,
        image_bucket: str,
        material_bucket: str,
        max_image_mb: float = 10.0,
        max_material_mb: float = 50.0,
    ) -> None:
        self.storage = storage
        self.image_bucket = image_bucket
        self.material_bucket = material_bucket
        self.max_image_mb = max_image_mb
        self.max_material_mb = max_material_mb

    @classmethod
    def from_settings(cls, storage: ObjectStorage, settings: "Settings") -> "UploadGateway":
        return cls(
            storage=storage,
            image_bucket=settings.storage.image_bucket,
            material_bucket=settings.storage.material_bucket,
            max_image_mb=settings.upload.max_image_mb,
            max_material_mb=settings.upload.max_material_mb,
        )

    def bucket_for(self, kind: UploadKind) -> str:
        return self.image_bucket if kind is UploadKind.IMAGE else self.material_bucket

    def validate(
        self,
        kind: UploadKind,
        size_bytes: int,
        content_type: str,
        max_size_mb: float | None = None,
    ) -> None:
        """Check MIME type and size against the limits for ``kind``.

        Args:
            kind: Upload category.
            size_bytes: File size in bytes.
            content_type: Declared MIME type.
            max_size_mb: Ceiling in MB; the configured default when None.

        Raises:
            UploadValidationError: If the file is empty, too large or of a
                type outside the allow-list.
        """
        allowed = IMAGE_MIME_TYPES if kind is UploadKind.IMAGE else MATERIAL_MIME_TYPES
        if content_type not in allowed:
            raise UploadValidationError(
                f"Unsupported {kind.value} type: {content_type or 'unknown'}",
                details={"content_type": content_type, "allowed": sorted(allowed)},
            )

        if size_bytes <= 0:
            raise UploadValidationError("File is empty")

        if max_size_mb is None:
            max_size_mb = self.max_image_mb if kind is UploadKind.IMAGE else self.max_material_mb
        if size_bytes / BYTES_PER_MB > max_size_mb:
            raise UploadValidationError(
                f"File size {format_size(size_bytes)} exceeds the {max_size_mb:g} MB limit",
                details={"size_bytes": size_bytes, "max_size_mb": max_size_mb},
            )

    async def upload(
        self,
        kind: UploadKind,
        data: bytes,
        content_type: str,
        filename: str,
        folder: str,
        max_size_mb: float | None = None,
        fallback_url: str | None = None,
    ) -> UploadedFile:
        """Validate and store one file.

        Validation failures always raise. Storage failures raise unless
        ``fallback_url`` is given, in which case the placeholder is
        returned with ``is_fallback=True`` and a warning is logged.

        Args:
            kind: Upload category.
            data: File bytes.
            content_type: Declared MIME type.
            filename: Original client filename.
            folder: Logical folder inside the bucket.
            max_size_mb: Size ceiling override in MB.
            fallback_url: Placeholder URL for graceful degradation.

        Returns:
            UploadedFile describing the stored object.

        Raises:
            UploadValidationError: If the file is rejected.
            UploadError: If storage fails and no fallback was supplied.
        """
        self.validate(kind, len(data), content_type, max_size_mb)

        bucket = self.bucket_for(kind)
        path = build_object_path(folder, filename)
        size_label = format_size(len(data))
        file_type = file_type_label(filename)

        try:
            stored_path = await self.storage.upload(bucket, path, data, content_type)
        except StorageError as e:
            if fallback_url is not None:
                logger.warning(
                    "Upload of %s to %s/%s failed, using placeholder %s: %s",
                    filename,
                    bucket,
                    path,
                    fallback_url,
                    e,
                )
                return UploadedFile(
                    url=fallback_url,
                    path="",
                    bucket=bucket,
                    filename=filename,
                    content_type=content_type,
                    size_bytes=len(data),
                    size_label=size_label,
                    file_type=file_type,
                    is_fallback=True,
                )
            logger.error("Upload of %s to %s/%s failed: %s", filename, bucket, path, e)
            raise UploadError(
                f"Failed to upload {filename}: {e.message}",
                details={"bucket": bucket, "path": path, "status_code": e.status_code},
            ) from e

        logger.info("Uploaded %s to %s/%s (%s)", filename, bucket, stored_path, size_label)
        return UploadedFile(
            url=self.storage.public_url(bucket, stored_path),
            path=stored_path,
            bucket=bucket,
            filename=filename,
            content_type=content_type,
            size_bytes=len(data),
            size_label=size_label,
            file_type=file_type,
        )

    async def upload_image(
        self,
        data: bytes,
        content_type: str,
        filename: str,
        folder: str = "images",
        max_size_mb: float | None = None,
        fallback_url: str | None = None,
    ) -> UploadedFile:
        """Store an image (jpeg, png, webp or gif)."""
        return await self.upload(
            UploadKind.IMAGE,
            data,
            content_type,
            filename,
            folder,
            max_size_mb=max_size_mb,
            fallback_url=fallback_url,
        )

    async def upload_material(
        self,
        data: bytes,
        content_type: str,
        filename: str,
        folder: str = "materials",
        max_size_mb: float | None = None,
    ) -> UploadedFile:
        """Store a learning material document."""
        return await self.upload(
            UploadKind.MATERIAL,
            data,
            content_type,
            filename,
            folder,
            max_size_mb=max_size_mb,
        )

    async def delete(self, bucket: str, path: str) -> None:
        """Remove a stored object.

        Raises:
            UploadError: If the object store rejects the removal.
        """
        try:
            await self.storage.remove(bucket, [path])
        except StorageError as e:
            logger.error("Failed to delete %s/%s: %s", bucket, path, e)
            raise UploadError(
                f"Failed to delete {path}: {e.message}",
                details={"bucket": bucket, "path": path},
            ) from e
