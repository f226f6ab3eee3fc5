# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Singleton section API endpoints.

This module provides endpoints for the four single-row page sections:
- GET /sections/{hero|about|vision|history} - Read the section
- PUT /sections/{hero|about|vision|history} - Write the section (admin)

A section that has never been saved is returned with its default values.

Example:
    PUT /api/v1/sections/hero
    X-Admin-Key: ...
    {
        "title": "Welcome",
        "subtitle": "Learning together"
    }
"""

import copy
import logging
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from schoolverse.api.dependencies import get_content_service, require_admin
from schoolverse.domains.content import SECTION_SLUGS, ContentService, EntitySpec, ErrorKind
from schoolverse.infrastructure.database.models import SINGLETON_ID
from schoolverse.models import (
    AboutFields,
    AboutResponse,
    HeroFields,
    HeroResponse,
    HistoryFields,
    HistoryResponse,
    VisionFields,
    VisionResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter()

SECTION_MODELS: dict[str, tuple[type[BaseModel], type[BaseModel]]] = {
    "hero": (HeroFields, HeroResponse),
    "about": (AboutFields, AboutResponse),
    "vision": (VisionFields, VisionResponse),
    "history": (HistoryFields, HistoryResponse),
}


def _default_record(spec: EntitySpec) -> dict[str, Any]:
    record = copy.deepcopy(spec.defaults)
    record["id"] = SINGLETON_ID
    return record


def _register_section(
    slug: str,
    spec: EntitySpec,
    fields_model: type[BaseModel],
    response_model: type[BaseModel],
) -> None:
    async def read_section(
        service: ContentService = Depends(get_content_service),
    ) -> Any:
        result = await service.repository(spec).get_singleton()
        if result.error is ErrorKind.NOT_FOUND:
            return _default_record(spec)
        return result.unwrap()

    async def write_section(
        data: fields_model,  # type: ignore[valid-type]
        service: ContentService = Depends(get_content_service),
    ) -> Any:
        logger.info("Saving %s section", slug)
        result = await service.repository(spec).upsert_singleton(
            data.model_dump(exclude_unset=True)
        )
        return result.unwrap()

    router.add_api_route(
        f"/{slug}",
        read_section,
        methods=["GET"],
        response_model=response_model,
        summary=f"Get {slug} section",
        name=f"get_{slug}_section",
    )
    router.add_api_route(
        f"/{slug}",
        write_section,
        methods=["PUT"],
        response_model=response_model,
        summary=f"Save {slug} section",
        description="Create or replace the section. Blank required fields keep their defaults.",
        dependencies=[Depends(require_admin)],
        name=f"put_{slug}_section",
    )


for _slug, (_fields, _response) in SECTION_MODELS.items():
    _register_section(_slug, SECTION_SLUGS[_slug], _fields, _response)
