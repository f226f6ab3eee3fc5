# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Public listings of active content.

These endpoints return only rows with is_active set, ordered by
display_order:
- GET /staff/public
- GET /facilities/public
- GET /footer/public
"""

from typing import Any

from fastapi import APIRouter, Depends

from schoolverse.api.dependencies import get_content_service
from schoolverse.domains.content import ContentService
from schoolverse.models import (
    FacilityResponse,
    FooterSectionResponse,
    ListResponse,
    StaffMemberResponse,
)

router = APIRouter()


def _listing(records: list[dict[str, Any]]) -> dict[str, Any]:
    return {"items": records, "total": len(records)}


@router.get(
    "/staff/public",
    response_model=ListResponse[StaffMemberResponse],
    summary="Active staff members",
)
async def list_public_staff(
    service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    return _listing((await service.public_staff()).unwrap())


@router.get(
    "/facilities/public",
    response_model=ListResponse[FacilityResponse],
    summary="Active facilities",
)
async def list_public_facilities(
    service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    return _listing((await service.public_facilities()).unwrap())


@router.get(
    "/footer/public",
    response_model=ListResponse[FooterSectionResponse],
    summary="Active footer sections",
)
async def list_public_footer(
    service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    return _listing((await service.public_footer_sections()).unwrap())
