# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""HTTP client for the managed backend's storage REST API.

Endpoints used (relative to ``{base_url}/storage/v1``):
- ``POST /object/{bucket}/{path}``: upload an object
- ``DELETE /object/{bucket}``: remove objects listed in ``prefixes``
- ``/object/public/{bucket}/{path}``: public download URL
"""

import logging

import httpx

from schoolverse.infrastructure.storage.base import ObjectStorage, StorageError

logger = logging.getLogger(__name__)


class HttpObjectStorage(ObjectStorage):
    """Async HTTP client for bucket storage.

    Attributes:
        base_url: Base URL of the managed backend.
        timeout: Request timeout in seconds.

    Example:
        storage = HttpObjectStorage("https://project.example.co", service_key)
        path = await storage.upload("site-images", "hero/1_ab.png", data, "image/png")
        url = storage.public_url("site-images", path)
    """

    def __init__(
        self,
        base_url: str,
        service_key: str,
        timeout: float = 30.0,
        cache_control: int = 3600,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the storage client.

        Args:
            base_url: Base URL of the managed backend.
            service_key: Key sent as bearer token and ``apikey`` header.
            timeout: Request timeout in seconds.
            cache_control: max-age in seconds applied to uploaded objects.
            transport: Optional transport, used to stub the API in tests.
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._service_key = service_key
        self._cache_control = cache_control
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def name(self) -> str:
        return "http"

    @property
    def storage_url(self) -> str:
        return f"{self.base_url}/storage/v1"

    def _get_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._service_key}",
            "apikey": self._service_key,
        }

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._get_headers(),
                transport=self._transport,
            )
        return self._client

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text or default
        if isinstance(data, dict):
            return str(data.get("message") or data.get("error") or default)
        return default

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: str,
    ) -> str:
        logger.debug("Uploading object: bucket=%s, path=%s, size=%d", bucket, path, len(data))

        try:
            response = await self._get_client().post(
                f"{self.storage_url}/object/{bucket}/{path}",
                content=data,
                headers={
                    "Content-Type": content_type,
                    "Cache-Control": f"max-age={self._cache_control}",
                    "x-upsert": "false",
                },
            )
        except httpx.HTTPError as e:
            logger.error("Storage API connection error: %s", str(e))
            raise StorageError(
                f"Failed to connect to storage API: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code not in (200, 201):
            raise StorageError(
                self._error_message(response, "Failed to upload object"),
                status_code=response.status_code,
                details={"bucket": bucket, "path": path},
            )

        logger.info("Uploaded object: bucket=%s, path=%s", bucket, path)
        return path

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self.storage_url}/object/public/{bucket}/{path}"

    async def remove(self, bucket: str, paths: list[str]) -> None:
        if not paths:
            return

        try:
            response = await self._get_client().request(
                "DELETE",
                f"{self.storage_url}/object/{bucket}",
                json={"prefixes": paths},
            )
        except httpx.HTTPError as e:
            logger.error("Storage API connection error: %s", str(e))
            raise StorageError(
                f"Failed to connect to storage API: {e}",
                details={"error_type": type(e).__name__},
            ) from e

        if response.status_code != 200:
            raise StorageError(
                self._error_message(response, "Failed to remove objects"),
                status_code=response.status_code,
                details={"bucket": bucket, "paths": paths},
            )

        logger.info("Removed %d objects from bucket %s", len(paths), bucket)

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None
