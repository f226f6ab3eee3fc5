# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""API v1 routes package.

This package contains all v1 API endpoint definitions.
Each module provides a FastAPI router for a specific area.

Modules:
    sections: Singleton page sections (hero, about, vision, history).
    collections: CRUD routers for every multi-row content table.
    public: Active-only listings for staff, facilities and footer.
    footer: Footer toggle and reorder.
    materials: Learning material download counter.
    gallery: Gallery group summary, cascade delete and batch upload.
    uploads: Single file uploads.
    stats: Admin dashboard statistics.

Specialized routers are included before the generic collection routers
so their fixed paths (e.g. /footer/public) win over /{record_id}.
"""

from fastapi import APIRouter

from schoolverse.api.errors import ERROR_RESPONSES
from schoolverse.api.routes import health
from schoolverse.api.v1 import footer, gallery, materials, public, sections, stats, uploads
from schoolverse.api.v1.collections import collection_routers

# Create the main v1 router
router = APIRouter(prefix="/api/v1", responses=ERROR_RESPONSES)

router.include_router(health.router, tags=["Health"])
router.include_router(sections.router, prefix="/sections", tags=["Sections"])

# Specialized routes
router.include_router(public.router, tags=["Public"])
router.include_router(footer.router, prefix="/footer", tags=["Footer"])
router.include_router(materials.router, prefix="/materials", tags=["Learning Materials"])
router.include_router(gallery.router, prefix="/gallery-groups", tags=["Gallery"])
router.include_router(uploads.router, prefix="/uploads", tags=["Uploads"])
router.include_router(stats.router, prefix="/stats", tags=["Dashboard"])

# Generic collection CRUD
for _slug, _collection_router in collection_routers():
    router.include_router(_collection_router, prefix=f"/{_slug}", tags=["Content"])

__all__ = ["router"]
