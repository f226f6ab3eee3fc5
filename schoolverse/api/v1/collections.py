# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Collection CRUD endpoints.

Every multi-row content table exposes the same five endpoints, built by
build_collection_router():
- GET / - List records
- POST / - Create a record (admin)
- GET /{record_id} - Get one record
- PATCH /{record_id} - Update the supplied fields (admin)
- DELETE /{record_id} - Delete a record (admin)

Tables with inactive rows (staff, facilities, footer) only list to
admins; their public listings live in the public module. Footer updates
and gallery group deletion are served by their own routers.
"""

import logging
from dataclasses import dataclass
from typing import Any

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from schoolverse.api.dependencies import get_content_service, require_admin
from schoolverse.domains.content import COLLECTION_SLUGS, ContentService, EntitySpec
from schoolverse.models import (
    AnnouncementCreate,
    AnnouncementFields,
    AnnouncementResponse,
    FacilityCreate,
    FacilityFields,
    FacilityResponse,
    FooterSectionCreate,
    FooterSectionFields,
    FooterSectionResponse,
    GalleryGroupCreate,
    GalleryGroupFields,
    GalleryGroupResponse,
    GalleryItemCreate,
    GalleryItemFields,
    GalleryItemResponse,
    GroupGalleryItemCreate,
    GroupGalleryItemFields,
    GroupGalleryItemResponse,
    LeadershipMemberCreate,
    LeadershipMemberFields,
    LeadershipMemberResponse,
    LearningMaterialCreate,
    LearningMaterialFields,
    LearningMaterialResponse,
    ListResponse,
    StaffMemberCreate,
    StaffMemberFields,
    StaffMemberResponse,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CollectionModels:
    """Request and response models of one collection."""

    create: type[BaseModel]
    update: type[BaseModel]
    response: type[BaseModel]
    admin_list: bool = False


COLLECTION_MODELS: dict[str, CollectionModels] = {
    "announcements": CollectionModels(AnnouncementCreate, AnnouncementFields, AnnouncementResponse),
    "gallery": CollectionModels(GalleryItemCreate, GalleryItemFields, GalleryItemResponse),
    "gallery-groups": CollectionModels(
        GalleryGroupCreate, GalleryGroupFields, GalleryGroupResponse
    ),
    "gallery-items": CollectionModels(
        GroupGalleryItemCreate, GroupGalleryItemFields, GroupGalleryItemResponse
    ),
    "materials": CollectionModels(
        LearningMaterialCreate, LearningMaterialFields, LearningMaterialResponse
    ),
    "staff": CollectionModels(
        StaffMemberCreate, StaffMemberFields, StaffMemberResponse, admin_list=True
    ),
    "facilities": CollectionModels(
        FacilityCreate, FacilityFields, FacilityResponse, admin_list=True
    ),
    "leadership": CollectionModels(
        LeadershipMemberCreate, LeadershipMemberFields, LeadershipMemberResponse
    ),
    "footer": CollectionModels(
        FooterSectionCreate, FooterSectionFields, FooterSectionResponse, admin_list=True
    ),
}


def build_collection_router(
    spec: EntitySpec,
    models: CollectionModels,
    include_update: bool = True,
    include_delete: bool = True,
) -> APIRouter:
    """Build the CRUD router for one collection.

    Args:
        spec: Entity the router operates on.
        models: Request and response models.
        include_update: Register PATCH /{record_id}; False when a
            specialized router owns updates.
        include_delete: Register DELETE /{record_id}; False when a
            specialized router owns deletion.

    Returns:
        Router to be included under the collection's URL prefix.
    """
    router = APIRouter()
    create_model = models.create
    update_model = models.update
    list_dependencies = [Depends(require_admin)] if models.admin_list else []

    async def list_records(
        service: ContentService = Depends(get_content_service),
    ) -> dict[str, Any]:
        records = (await service.repository(spec).list()).unwrap()
        return {"items": records, "total": len(records)}

    async def create_record(
        data: create_model,  # type: ignore[valid-type]
        service: ContentService = Depends(get_content_service),
    ) -> Any:
        logger.info("Creating %s record", spec.name)
        return (await service.repository(spec).create(data.model_dump(exclude_unset=True))).unwrap()

    async def get_record(
        record_id: str,
        service: ContentService = Depends(get_content_service),
    ) -> Any:
        return (await service.repository(spec).get(record_id)).unwrap()

    async def update_record(
        record_id: str,
        data: update_model,  # type: ignore[valid-type]
        service: ContentService = Depends(get_content_service),
    ) -> Any:
        logger.info("Updating %s record %s", spec.name, record_id)
        changes = data.model_dump(exclude_unset=True)
        return (await service.repository(spec).update(record_id, changes)).unwrap()

    async def delete_record(
        record_id: str,
        service: ContentService = Depends(get_content_service),
    ) -> None:
        logger.info("Deleting %s record %s", spec.name, record_id)
        (await service.repository(spec).delete(record_id)).unwrap()

    router.add_api_route(
        "",
        list_records,
        methods=["GET"],
        response_model=ListResponse[models.response],  # type: ignore[name-defined]
        summary=f"List {spec.name}",
        dependencies=list_dependencies,
        name=f"list_{spec.name}",
    )
    router.add_api_route(
        "",
        create_record,
        methods=["POST"],
        response_model=models.response,
        status_code=status.HTTP_201_CREATED,
        summary=f"Create {spec.name} record",
        dependencies=[Depends(require_admin)],
        name=f"create_{spec.name}",
    )
    router.add_api_route(
        "/{record_id}",
        get_record,
        methods=["GET"],
        response_model=models.response,
        summary=f"Get {spec.name} record",
        name=f"get_{spec.name}",
    )
    if include_update:
        router.add_api_route(
            "/{record_id}",
            update_record,
            methods=["PATCH"],
            response_model=models.response,
            summary=f"Update {spec.name} record",
            description="Replace only the supplied fields.",
            dependencies=[Depends(require_admin)],
            name=f"update_{spec.name}",
        )
    if include_delete:
        router.add_api_route(
            "/{record_id}",
            delete_record,
            methods=["DELETE"],
            status_code=status.HTTP_204_NO_CONTENT,
            summary=f"Delete {spec.name} record",
            dependencies=[Depends(require_admin)],
            name=f"delete_{spec.name}",
        )
    return router


def collection_routers() -> list[tuple[str, APIRouter]]:
    """Routers for every collection, paired with their URL slug."""
    return [
        (
            slug,
            build_collection_router(
                COLLECTION_SLUGS[slug],
                models,
                include_update=slug != "footer",
                include_delete=slug != "gallery-groups",
            ),
        )
        for slug, models in COLLECTION_MODELS.items()
    ]
