# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the upload gateway."""

import re
from unittest.mock import AsyncMock, MagicMock

import pytest

from schoolverse.domains.content import ErrorKind
from schoolverse.domains.uploads import (
    UploadError,
    UploadGateway,
    UploadKind,
    UploadValidationError,
    build_object_path,
    file_type_label,
    format_size,
)
from schoolverse.infrastructure.storage import StorageError

MB = 1024 * 1024
PDF = "application/pdf"


@pytest.fixture
def mock_storage():
    """Create mock object storage that echoes the stored path."""
    storage = MagicMock()
    storage.name = "mock"
    storage.upload = AsyncMock(side_effect=lambda bucket, path, data, content_type: path)
    storage.remove = AsyncMock()
    storage.public_url = MagicMock(
        side_effect=lambda bucket, path: f"https://cdn.test/{bucket}/{path}"
    )
    return storage


@pytest.fixture
def gateway(mock_storage):
    """Create gateway with default ceilings."""
    return UploadGateway(
        storage=mock_storage,
        image_bucket="site-images",
        material_bucket="learning-materials",
    )


@pytest.mark.unit
class TestHelpers:
    """Tests for path and label helpers."""

    def test_object_path_format(self):
        path = build_object_path("gallery/sports", "Team Photo.JPG")

        assert re.fullmatch(r"gallery/sports/\d{13}_[0-9a-z]{11}\.jpg", path)

    def test_object_paths_are_unique(self):
        paths = {build_object_path("images", "a.png") for _ in range(50)}
        assert len(paths) == 50

    def test_object_path_without_extension(self):
        assert build_object_path("docs", "README").endswith(".bin")

    @pytest.mark.parametrize("folder", ["", "  ", "../secrets", "a/../../b"])
    def test_object_path_rejects_bad_folder(self, folder):
        with pytest.raises(UploadValidationError):
            build_object_path(folder, "a.png")

    @pytest.mark.parametrize(
        ("filename", "label"),
        [
            ("notes.pdf", "PDF"),
            ("essay.docx", "DOC"),
            ("slides.PPTX", "PPT"),
            ("marks.xls", "XLS"),
            ("bundle.zip", "ZIP"),
            ("readme.txt", "TXT"),
            ("photo.jpg", "JPEG"),
            ("clip.webp", "WEBP"),
            ("archive.tar", "Other"),
            ("noextension", "Other"),
        ],
    )
    def test_file_type_label(self, filename, label):
        assert file_type_label(filename) == label

    def test_format_size(self):
        assert format_size(2 * MB) == "2.00 MB"
        assert format_size(1536 * 1024) == "1.50 MB"


@pytest.mark.unit
class TestValidation:
    """Tests for validation before any storage request."""

    @pytest.mark.asyncio
    async def test_two_mb_image_under_ten_mb_ceiling_succeeds(self, gateway, mock_storage):
        uploaded = await gateway.upload_image(
            b"x" * (2 * MB), "image/png", "hero.png", folder="hero", max_size_mb=10
        )

        mock_storage.upload.assert_awaited_once()
        assert uploaded.bucket == "site-images"
        assert uploaded.path.startswith("hero/")
        assert uploaded.url == f"https://cdn.test/site-images/{uploaded.path}"
        assert uploaded.size_label == "2.00 MB"
        assert uploaded.file_type == "PNG"
        assert uploaded.is_fallback is False

    @pytest.mark.asyncio
    async def test_fifteen_mb_image_rejected_before_network(self, gateway, mock_storage):
        with pytest.raises(UploadValidationError) as exc_info:
            await gateway.upload_image(
                b"x" * (15 * MB), "image/png", "huge.png", max_size_mb=10
            )

        assert exc_info.value.kind is ErrorKind.VALIDATION_FAILED
        assert "10 MB" in exc_info.value.message
        mock_storage.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_default_image_ceiling_applies(self, gateway, mock_storage):
        with pytest.raises(UploadValidationError):
            await gateway.upload_image(b"x" * (11 * MB), "image/jpeg", "big.jpg")
        mock_storage.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_material_ceiling_is_larger(self, gateway, mock_storage):
        uploaded = await gateway.upload_material(b"x" * (20 * MB), PDF, "syllabus.pdf")

        assert uploaded.bucket == "learning-materials"
        assert uploaded.path.startswith("materials/")
        assert uploaded.file_type == "PDF"

    @pytest.mark.asyncio
    async def test_disallowed_image_type(self, gateway, mock_storage):
        with pytest.raises(UploadValidationError, match="Unsupported image type"):
            await gateway.upload_image(b"<svg/>", "image/svg+xml", "logo.svg")
        mock_storage.upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_image_type_not_accepted_as_material(self, gateway):
        with pytest.raises(UploadValidationError):
            await gateway.upload_material(b"x", "image/png", "scan.png")

    @pytest.mark.asyncio
    async def test_empty_file_rejected(self, gateway, mock_storage):
        with pytest.raises(UploadValidationError, match="empty"):
            await gateway.upload_image(b"", "image/png", "empty.png")
        mock_storage.upload.assert_not_awaited()


@pytest.mark.unit
class TestStorageFailures:
    """Tests for storage error propagation and fallback."""

    @pytest.mark.asyncio
    async def test_storage_error_propagates(self, gateway, mock_storage):
        mock_storage.upload.side_effect = StorageError("bucket not found", status_code=404)

        with pytest.raises(UploadError) as exc_info:
            await gateway.upload_image(b"x" * 100, "image/png", "a.png")

        assert exc_info.value.kind is ErrorKind.BACKEND_UNAVAILABLE
        assert "bucket not found" in exc_info.value.message
        assert not isinstance(exc_info.value, UploadValidationError)

    @pytest.mark.asyncio
    async def test_fallback_url_used_only_when_given(self, gateway, mock_storage):
        mock_storage.upload.side_effect = StorageError("timeout")

        uploaded = await gateway.upload_image(
            b"x" * 100,
            "image/png",
            "a.png",
            fallback_url="https://placeholder.test/hero.png",
        )

        assert uploaded.is_fallback is True
        assert uploaded.url == "https://placeholder.test/hero.png"
        assert uploaded.path == ""

    @pytest.mark.asyncio
    async def test_fallback_does_not_bypass_validation(self, gateway):
        with pytest.raises(UploadValidationError):
            await gateway.upload_image(
                b"x", "text/html", "a.html", fallback_url="https://placeholder.test/x.png"
            )

    @pytest.mark.asyncio
    async def test_delete_removes_object(self, gateway, mock_storage):
        await gateway.delete("site-images", "hero/1_a.png")

        mock_storage.remove.assert_awaited_once_with("site-images", ["hero/1_a.png"])

    @pytest.mark.asyncio
    async def test_delete_failure_raises(self, gateway, mock_storage):
        mock_storage.remove.side_effect = StorageError("denied", status_code=403)

        with pytest.raises(UploadError):
            await gateway.delete("site-images", "hero/1_a.png")


@pytest.mark.unit
def test_from_settings_uses_configured_buckets(mock_storage, test_settings):
    gateway = UploadGateway.from_settings(mock_storage, test_settings)

    assert gateway.bucket_for(UploadKind.IMAGE) == test_settings.storage.image_bucket
    assert gateway.bucket_for(UploadKind.MATERIAL) == test_settings.storage.material_bucket
    assert gateway.max_image_mb == test_settings.upload.max_image_mb
