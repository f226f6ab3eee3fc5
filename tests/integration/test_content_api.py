# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for the content API.

Requests go through the full application (middleware, exception
handlers, routers) against an in-memory SQLite database and a local
storage directory.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from schoolverse.api import create_app
from schoolverse.api.dependencies import (
    get_db,
    get_statistics_aggregator,
    get_storage,
)
from schoolverse.api.middleware import REQUEST_ID_HEADER
from schoolverse.core.config import get_settings
from schoolverse.domains.dashboard import DashboardStatistics
from schoolverse.infrastructure.database.seeds import seed_content_database
from schoolverse.infrastructure.storage import LocalObjectStorage, ObjectStorage, StorageError

pytestmark = pytest.mark.integration

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 512


@pytest.fixture
def storage(tmp_path):
    return LocalObjectStorage(tmp_path / "media", "http://testserver/media")


@pytest.fixture
def app(db_sessionmaker, test_settings, storage):
    """Application wired to the test database, settings and storage."""
    app = create_app()

    async def override_get_db():
        async with db_sessionmaker() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_storage] = lambda: storage
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest_asyncio.fixture
async def seeded(db_sessionmaker):
    async with db_sessionmaker() as session:
        await seed_content_database(session)
        await session.commit()


class TestRouting:
    """Tests for route registration."""

    def test_routes_registered(self, app):
        routes = {route.path for route in app.routes}

        assert "/health" in routes
        assert "/api/v1/health" in routes
        assert "/api/v1/sections/hero" in routes
        assert "/api/v1/announcements" in routes
        assert "/api/v1/announcements/{record_id}" in routes
        assert "/api/v1/footer/reorder" in routes
        assert "/api/v1/footer/{section_id}/toggle" in routes
        assert "/api/v1/footer/public" in routes
        assert "/api/v1/materials/{material_id}/download" in routes
        assert "/api/v1/gallery-groups/summary" in routes
        assert "/api/v1/gallery-groups/{group_id}/items/batch" in routes
        assert "/api/v1/uploads/{kind}" in routes
        assert "/api/v1/stats" in routes

    def test_mutations_require_admin_key(self, app):
        client = TestClient(app)

        responses = [
            client.post("/api/v1/announcements", json={"title": "a", "content": "b"}),
            client.put("/api/v1/sections/hero", json={"title": "x"}),
            client.delete("/api/v1/staff/some-id"),
            client.post("/api/v1/footer/reorder", json={"section_ids": ["a"]}),
            client.get("/api/v1/stats"),
        ]

        for response in responses:
            assert response.status_code == 401
            assert response.headers["WWW-Authenticate"] == "X-Admin-Key"

    def test_wrong_admin_key(self, app):
        client = TestClient(app)

        response = client.get("/api/v1/stats", headers={"X-Admin-Key": "guess"})

        assert response.status_code == 401

    def test_non_ascii_admin_key_rejected(self, app):
        client = TestClient(app)

        response = client.get(
            "/api/v1/stats",
            headers={"X-Admin-Key": "cl\xe9".encode("latin-1")},
        )

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "X-Admin-Key"


class TestHealth:
    """Tests for health endpoints."""

    @pytest.mark.asyncio
    async def test_health_reports_components(self, client):
        response = await client.get("/health")

        assert response.status_code == 200
        body = response.json()
        assert set(body["components"]) == {"database", "storage"}
        assert body["version"]

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        response = await client.get("/api/v1/health", headers={REQUEST_ID_HEADER: "req-123"})

        assert response.headers[REQUEST_ID_HEADER] == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_generated(self, client):
        response = await client.get("/health")

        assert response.headers[REQUEST_ID_HEADER]


class TestSections:
    """Tests for singleton section endpoints."""

    @pytest.mark.asyncio
    async def test_unsaved_section_returns_defaults(self, client):
        response = await client.get("/api/v1/sections/hero")

        assert response.status_code == 200
        body = response.json()
        assert body["id"] == "main"
        assert body["title"] == "Welcome to St. G. D. Convent School"

    @pytest.mark.asyncio
    async def test_put_then_get(self, client, admin_headers):
        saved = await client.put(
            "/api/v1/sections/about",
            json={"title": "About Us", "school_founded_year": 2015, "features": ["Smart classes"]},
            headers=admin_headers,
        )
        fetched = await client.get("/api/v1/sections/about")

        assert saved.status_code == 200
        assert fetched.json()["school_founded_year"] == 2015
        assert fetched.json()["features"] == ["Smart classes"]

    @pytest.mark.asyncio
    async def test_put_last_write_wins(self, client, admin_headers):
        await client.put("/api/v1/sections/vision", json={"title": "First"}, headers=admin_headers)
        await client.put("/api/v1/sections/vision", json={"title": "Second"}, headers=admin_headers)

        assert (await client.get("/api/v1/sections/vision")).json()["title"] == "Second"

    @pytest.mark.asyncio
    async def test_put_out_of_range_year(self, client, admin_headers):
        response = await client.put(
            "/api/v1/sections/about",
            json={"school_founded_year": 1500},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestCollections:
    """Tests for the generic collection endpoints."""

    @pytest.mark.asyncio
    async def test_announcement_crud(self, client, admin_headers):
        created = await client.post(
            "/api/v1/announcements",
            json={"title": "PTM", "content": "Saturday 10am", "category": "event"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        announcement_id = created.json()["id"]

        listed = await client.get("/api/v1/announcements")
        assert listed.json()["total"] == 1

        updated = await client.patch(
            f"/api/v1/announcements/{announcement_id}",
            json={"content": "Saturday 11am"},
            headers=admin_headers,
        )
        assert updated.json()["content"] == "Saturday 11am"
        assert updated.json()["title"] == "PTM"

        deleted = await client.delete(f"/api/v1/announcements/{announcement_id}", headers=admin_headers)
        assert deleted.status_code == 204

        missing = await client.get(f"/api/v1/announcements/{announcement_id}")
        assert missing.status_code == 404
        assert missing.json()["error"] == "not_found"

    @pytest.mark.asyncio
    async def test_missing_required_field(self, client, admin_headers):
        response = await client.post(
            "/api/v1/announcements",
            json={"title": "No content"},
            headers=admin_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_blanking_required_field(self, client, admin_headers):
        created = await client.post(
            "/api/v1/announcements",
            json={"title": "PTM", "content": "Saturday"},
            headers=admin_headers,
        )

        response = await client.patch(
            f"/api/v1/announcements/{created.json()['id']}",
            json={"content": " "},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    @pytest.mark.asyncio
    async def test_downloads_not_writable(self, client, admin_headers):
        response = await client.post(
            "/api/v1/materials",
            json={
                "title": "Fractions",
                "subject": "Mathematics",
                "class_level": "Class 4",
                "file_type": "PDF",
                "file_url": "https://cdn.test/fractions.pdf",
                "downloads": 50,
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["downloads"] == 0

    @pytest.mark.asyncio
    async def test_staff_listing_is_admin_only(self, client, admin_headers):
        await client.post(
            "/api/v1/staff",
            json={"name": "A. Verma", "position": "Teacher", "is_active": False},
            headers=admin_headers,
        )

        anonymous = await client.get("/api/v1/staff")
        admin = await client.get("/api/v1/staff", headers=admin_headers)
        public = await client.get("/api/v1/staff/public")

        assert anonymous.status_code == 401
        assert admin.json()["total"] == 1
        assert public.json() == {"items": [], "total": 0}


class TestFooter:
    """Tests for footer endpoints."""

    @pytest.mark.asyncio
    async def test_toggle_and_public_listing(self, client, admin_headers, seeded):
        sections = (await client.get("/api/v1/footer", headers=admin_headers)).json()["items"]
        target = sections[0]["id"]

        toggled = await client.post(f"/api/v1/footer/{target}/toggle", headers=admin_headers)
        public = (await client.get("/api/v1/footer/public")).json()

        assert toggled.json()["is_active"] is False
        assert public["total"] == 3
        assert target not in [s["id"] for s in public["items"]]

    @pytest.mark.asyncio
    async def test_reorder(self, client, admin_headers, seeded):
        sections = (await client.get("/api/v1/footer", headers=admin_headers)).json()["items"]
        new_order = [s["id"] for s in reversed(sections)]

        response = await client.post(
            "/api/v1/footer/reorder",
            json={"section_ids": new_order},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert [s["id"] for s in response.json()["items"]] == new_order
        assert [s["display_order"] for s in response.json()["items"]] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_reorder_unknown_section(self, client, admin_headers, seeded):
        response = await client.post(
            "/api/v1/footer/reorder",
            json={"section_ids": ["ghost"]},
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_contact_content_shape(self, client, admin_headers):
        response = await client.post(
            "/api/v1/footer",
            json={
                "title": "Reach us",
                "section_type": "contact",
                "content": {"phone": "0562-000000"},
            },
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["content"] == {"address": "", "phone": "0562-000000", "email": ""}

    async def create_contact(self, client, admin_headers):
        response = await client.post(
            "/api/v1/footer",
            json={"title": "Contact", "section_type": "contact", "content": {"phone": "1"}},
            headers=admin_headers,
        )
        return response.json()["id"]

    @pytest.mark.asyncio
    async def test_patch_content_checked_against_stored_type(self, client, admin_headers):
        section_id = await self.create_contact(client, admin_headers)

        response = await client.patch(
            f"/api/v1/footer/{section_id}",
            json={"content": {"items": "not-a-list", "bogus": 1}},
            headers=admin_headers,
        )
        stored = await client.get(f"/api/v1/footer/{section_id}")

        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"
        assert stored.json()["content"] == {"address": "", "phone": "1", "email": ""}

    @pytest.mark.asyncio
    async def test_patch_type_checked_against_stored_content(self, client, admin_headers):
        section_id = await self.create_contact(client, admin_headers)

        response = await client.patch(
            f"/api/v1/footer/{section_id}",
            json={"section_type": "social"},
            headers=admin_headers,
        )
        stored = await client.get(f"/api/v1/footer/{section_id}")

        assert response.status_code == 422
        assert stored.json()["section_type"] == "contact"

    @pytest.mark.asyncio
    async def test_patch_partial_content_is_normalized(self, client, admin_headers):
        section_id = await self.create_contact(client, admin_headers)

        response = await client.patch(
            f"/api/v1/footer/{section_id}",
            json={"content": {"email": "office@school.test"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["content"] == {
            "address": "",
            "phone": "",
            "email": "office@school.test",
        }

    @pytest.mark.asyncio
    async def test_patch_type_with_matching_content(self, client, admin_headers):
        section_id = await self.create_contact(client, admin_headers)

        response = await client.patch(
            f"/api/v1/footer/{section_id}",
            json={"section_type": "custom", "content": {"text": "Est. 2015"}},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["section_type"] == "custom"
        assert response.json()["content"] == {"text": "Est. 2015"}

    @pytest.mark.asyncio
    async def test_invalid_section_type(self, client, admin_headers):
        response = await client.post(
            "/api/v1/footer",
            json={"title": "Banner", "section_type": "banner"},
            headers=admin_headers,
        )

        assert response.status_code == 422


class TestMaterials:
    """Tests for learning material downloads."""

    @pytest.mark.asyncio
    async def test_download_counter_is_public(self, client, admin_headers):
        created = await client.post(
            "/api/v1/materials",
            json={
                "title": "Periodic Table",
                "subject": "Chemistry",
                "class_level": "Class 9",
                "file_type": "PDF",
                "file_url": "https://cdn.test/periodic.pdf",
            },
            headers=admin_headers,
        )
        material_id = created.json()["id"]

        await client.post(f"/api/v1/materials/{material_id}/download")
        response = await client.post(f"/api/v1/materials/{material_id}/download")

        assert response.status_code == 200
        assert response.json()["downloads"] == 2

    @pytest.mark.asyncio
    async def test_download_missing_material(self, client):
        response = await client.post("/api/v1/materials/ghost/download")

        assert response.status_code == 404


class TestGallery:
    """Tests for gallery group endpoints."""

    async def create_group(self, client, admin_headers, title="Annual Day"):
        response = await client.post("/api/v1/gallery-groups", json={"title": title}, headers=admin_headers)
        return response.json()["id"]

    @pytest.mark.asyncio
    async def test_item_needs_existing_group(self, client, admin_headers):
        group_id = await self.create_group(client, admin_headers)
        created = await client.post(
            "/api/v1/gallery-items",
            json={"group_id": group_id, "image_url": "https://cdn.test/1.jpg"},
            headers=admin_headers,
        )

        orphan = await client.post(
            "/api/v1/gallery-items",
            json={"group_id": "ghost", "image_url": "https://cdn.test/2.jpg"},
            headers=admin_headers,
        )
        moved = await client.patch(
            f"/api/v1/gallery-items/{created.json()['id']}",
            json={"group_id": "ghost"},
            headers=admin_headers,
        )

        assert created.status_code == 201
        assert orphan.status_code == 422
        assert moved.status_code == 422
        assert (await client.get("/api/v1/gallery-items")).json()["total"] == 1

    @pytest.mark.asyncio
    async def test_batch_upload_and_summary(self, client, admin_headers, storage):
        group_id = await self.create_group(client, admin_headers)
        files = [
            ("files", ("one.png", PNG, "image/png")),
            ("files", ("notes.txt", b"not an image", "text/plain")),
            ("files", ("two.png", PNG, "image/png")),
        ]

        response = await client.post(
            f"/api/v1/gallery-groups/{group_id}/items/batch",
            files=files,
            data={"title": "Annual Day"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        manifest = response.json()
        assert (manifest["total"], manifest["succeeded"], manifest["failed"]) == (3, 2, 1)
        assert manifest["items"][1]["error_kind"] == "validation_failed"
        stored_url = manifest["items"][0]["record"]["image_url"]
        assert stored_url.startswith("http://testserver/media/site-images/gallery/")
        assert any((storage.media_dir / "site-images" / "gallery").iterdir())

        summary = (await client.get("/api/v1/gallery-groups/summary")).json()
        assert summary["items"][0]["item_count"] == 2

    @pytest.mark.asyncio
    async def test_batch_into_missing_group(self, client, admin_headers):
        response = await client.post(
            "/api/v1/gallery-groups/ghost/items/batch",
            files=[("files", ("one.png", PNG, "image/png"))],
            headers=admin_headers,
        )

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_delete_group_cascades(self, client, admin_headers):
        group_id = await self.create_group(client, admin_headers)
        await client.post(
            "/api/v1/gallery-items",
            json={"group_id": group_id, "image_url": "https://cdn.test/a.png"},
            headers=admin_headers,
        )

        deleted = await client.delete(f"/api/v1/gallery-groups/{group_id}", headers=admin_headers)
        items = await client.get(f"/api/v1/gallery-groups/{group_id}/items")

        assert deleted.status_code == 204
        assert items.json()["total"] == 0
        assert (await client.get(f"/api/v1/gallery-groups/{group_id}")).status_code == 404


class TestUploads:
    """Tests for single file uploads."""

    @pytest.mark.asyncio
    async def test_upload_material(self, client, admin_headers):
        response = await client.post(
            "/api/v1/uploads/material",
            files={"file": ("syllabus.pdf", b"%PDF-1.4 test", "application/pdf")},
            headers=admin_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert body["bucket"] == "learning-materials"
        assert body["path"].startswith("materials/")
        assert body["file_type"] == "PDF"
        assert body["is_fallback"] is False

    @pytest.mark.asyncio
    async def test_oversized_image_rejected(self, client, admin_headers):
        response = await client.post(
            "/api/v1/uploads/image",
            files={"file": ("big.png", PNG, "image/png")},
            data={"max_size_mb": "0.0001"},
            headers=admin_headers,
        )

        assert response.status_code == 422
        assert response.json()["error"] == "validation_failed"

    @pytest.mark.asyncio
    async def test_unknown_kind(self, client, admin_headers):
        response = await client.post(
            "/api/v1/uploads/video",
            files={"file": ("clip.mp4", b"\x00", "video/mp4")},
            headers=admin_headers,
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_storage_failure_with_fallback(self, app, client, admin_headers):
        failing = MagicMock(spec=ObjectStorage)
        failing.upload = AsyncMock(side_effect=StorageError("Service unavailable", status_code=503))
        app.dependency_overrides[get_storage] = lambda: failing

        degraded = await client.post(
            "/api/v1/uploads/image",
            files={"file": ("hero.png", PNG, "image/png")},
            data={"fallback_url": "/placeholder.svg"},
            headers=admin_headers,
        )
        failed = await client.post(
            "/api/v1/uploads/image",
            files={"file": ("hero.png", PNG, "image/png")},
            headers=admin_headers,
        )

        assert degraded.json()["url"] == "/placeholder.svg"
        assert degraded.json()["is_fallback"] is True
        assert failed.status_code == 503
        assert failed.json()["error"] == "backend_unavailable"


class TestStatistics:
    """Tests for the dashboard statistics endpoint."""

    @pytest.mark.asyncio
    async def test_statistics(self, app, client, admin_headers):
        aggregator = MagicMock()
        aggregator.collect = AsyncMock(
            return_value=DashboardStatistics(
                total_announcements=4,
                total_gallery_items=2,
                total_group_gallery_items=5,
                failed_tables=["leadership_team"],
            )
        )
        app.dependency_overrides[get_statistics_aggregator] = lambda: aggregator

        response = await client.get("/api/v1/stats", headers=admin_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["total_announcements"] == 4
        assert body["total_images"] == 7
        assert body["total_leadership_members"] == 0
        assert body["failed_tables"] == ["leadership_team"]
