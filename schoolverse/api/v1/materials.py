# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Learning material endpoints beyond CRUD."""

from typing import Any

from fastapi import APIRouter, Depends

from schoolverse.api.dependencies import get_content_service
from schoolverse.domains.content import ContentService
from schoolverse.models import LearningMaterialResponse

router = APIRouter()


@router.post(
    "/{material_id}/download",
    response_model=LearningMaterialResponse,
    summary="Record a download",
    description="Increment the download counter and return the material with its file URL.",
)
async def record_download(
    material_id: str,
    service: ContentService = Depends(get_content_service),
) -> Any:
    return (await service.record_download(material_id)).unwrap()
