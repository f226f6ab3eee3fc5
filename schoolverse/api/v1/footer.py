# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Footer section management endpoints.

This module provides the footer operations beyond plain CRUD:
- PATCH /footer/{section_id} - Update fields, checking content against section_type
- POST /footer/{section_id}/toggle - Flip is_active
- POST /footer/reorder - Assign display_order 1..n in the given order
"""

import logging
from typing import Any

from fastapi import APIRouter, Depends

from schoolverse.api.dependencies import get_content_service, require_admin
from schoolverse.domains.content import ContentService
from schoolverse.models import (
    FooterReorderRequest,
    FooterSectionFields,
    FooterSectionResponse,
    ListResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post(
    "/reorder",
    response_model=ListResponse[FooterSectionResponse],
    summary="Reorder footer sections",
    description="Set display_order to the position of each id in the list, starting at 1.",
)
async def reorder_footer_sections(
    data: FooterReorderRequest,
    service: ContentService = Depends(get_content_service),
) -> dict[str, Any]:
    """Reorder footer sections.

    Args:
        data: Section ids in their new order.
        service: Content service.

    Returns:
        The reordered sections.
    """
    logger.info("Reordering %d footer sections", len(data.section_ids))
    sections = (await service.reorder_footer_sections(data.section_ids)).unwrap()
    return {"items": sections, "total": len(sections)}


@router.post(
    "/{section_id}/toggle",
    response_model=FooterSectionResponse,
    summary="Toggle footer section",
    description="Activate an inactive section or deactivate an active one.",
)
async def toggle_footer_section(
    section_id: str,
    service: ContentService = Depends(get_content_service),
) -> Any:
    logger.info("Toggling footer section %s", section_id)
    return (await service.toggle_footer_section(section_id)).unwrap()


@router.patch(
    "/{section_id}",
    response_model=FooterSectionResponse,
    summary="Update footer section",
    description=(
        "Replace only the supplied fields. Content is validated against the "
        "section type after merging with the stored section."
    ),
)
async def update_footer_section(
    section_id: str,
    data: FooterSectionFields,
    service: ContentService = Depends(get_content_service),
) -> Any:
    logger.info("Updating footer section %s", section_id)
    changes = data.model_dump(exclude_unset=True)
    return (await service.update_footer_section(section_id, changes)).unwrap()
