# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content service for website sections and collections.

This module provides the ContentService that handles:
- Repository access for every content entity
- Footer section updates, toggling and reordering
- Learning material download counting
- Public (active-only) listings for staff, facilities and footer

Example:
    >>> service = ContentService(db_session)
    >>> hero = await service.repository("hero_section").get_singleton()
    >>> await service.toggle_footer_section(section_id)
"""

import logging
from typing import Any

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from schoolverse.domains.content.entities import (
    FACILITIES,
    FOOTER,
    MATERIALS,
    STAFF,
    EntitySpec,
    get_entity,
)
from schoolverse.domains.content.repository import ContentRepository, Record
from schoolverse.domains.content.result import ErrorKind, Result
from schoolverse.infrastructure.events import EventBus, get_event_bus
from schoolverse.models.content import normalize_footer_content

logger = logging.getLogger(__name__)


class ContentService:
    """Facade over the per-entity content repositories.

    Attributes:
        _db: Async database session.
        _events: Event bus receiving change notifications.
    """

    def __init__(self, db: AsyncSession, event_bus: EventBus | None = None) -> None:
        """Initialize the content service.

        Args:
            db: Async database session.
            event_bus: Optional event bus (process singleton by default).
        """
        self._db = db
        self._events = event_bus or get_event_bus()

    def repository(self, entity: EntitySpec | str) -> ContentRepository:
        """Repository for an entity given by spec or table name.

        Raises:
            KeyError: If no entity has the given name.
        """
        spec = entity if isinstance(entity, EntitySpec) else get_entity(entity)
        return ContentRepository(self._db, spec, self._events)

    # =========================================================================
    # Footer
    # =========================================================================

    async def update_footer_section(self, section_id: str, changes: dict[str, Any]) -> Result[Record]:
        """Update a footer section, keeping its content keyed by section_type.

        When either section_type or content changes, the changes are merged
        with the stored row and the resulting content is checked against
        the resulting type, so sending only one of the two cannot leave
        them mismatched.

        Args:
            section_id: Footer section to update.
            changes: Fields to replace.

        Returns:
            Result with the updated section; VALIDATION_FAILED when the
            content does not fit the section type.
        """
        repo = self.repository(FOOTER)
        if "section_type" not in changes and "content" not in changes:
            return await repo.update(section_id, changes)

        current = await repo.get(section_id)
        if not current.ok:
            return current
        section_type = changes.get("section_type", current.value["section_type"])
        content = changes.get("content", current.value["content"])
        try:
            normalized = normalize_footer_content(section_type, content or {})
        except (KeyError, ValidationError) as e:
            logger.info("Rejected footer section %s update: %s", section_id, e)
            return Result.failure(
                ErrorKind.VALIDATION_FAILED,
                f"Footer content does not match section type '{section_type}'",
            )
        return await repo.update(section_id, {**changes, "content": normalized})

    async def toggle_footer_section(self, section_id: str) -> Result[Record]:
        """Flip the is_active flag of a footer section."""
        repo = self.repository(FOOTER)
        current = await repo.get(section_id)
        if not current.ok:
            return current
        return await repo.update(section_id, {"is_active": not current.value["is_active"]})

    async def reorder_footer_sections(self, section_ids: list[str]) -> Result[list[Record]]:
        """Assign display_order 1..n following the given id order.

        Every id must exist and appear once; otherwise nothing is written.

        Args:
            section_ids: Footer section ids in their new order.

        Returns:
            Result with the reordered sections.
        """
        if not section_ids:
            return Result.failure(ErrorKind.VALIDATION_FAILED, "No footer sections to reorder")
        if len(set(section_ids)) != len(section_ids):
            return Result.failure(ErrorKind.VALIDATION_FAILED, "Duplicate footer section ids")

        repo = self.repository(FOOTER)
        existing = await repo.list()
        if not existing.ok:
            return existing
        known = {section["id"] for section in existing.value}
        missing = [section_id for section_id in section_ids if section_id not in known]
        if missing:
            return Result.failure(
                ErrorKind.NOT_FOUND,
                f"Footer sections not found: {', '.join(missing)}",
            )

        reordered = []
        for position, section_id in enumerate(section_ids, start=1):
            result = await repo.update(section_id, {"display_order": position})
            if not result.ok:
                return Result.failure(result.error, result.message)
            reordered.append(result.value)

        logger.info("Reordered %d footer sections", len(reordered))
        return Result.success(reordered)

    async def public_footer_sections(self) -> Result[list[Record]]:
        """Active footer sections ordered by display_order."""
        return await self.repository(FOOTER).list({"is_active": True})

    # =========================================================================
    # Learning materials
    # =========================================================================

    async def record_download(self, material_id: str) -> Result[Record]:
        """Increment the download counter of a learning material."""
        result = await self.repository(MATERIALS).increment(material_id, "downloads")
        if result.ok:
            logger.debug(
                "Material %s downloaded (%d total)",
                material_id,
                result.value["downloads"],
            )
        return result

    # =========================================================================
    # Public listings
    # =========================================================================

    async def public_staff(self) -> Result[list[Record]]:
        """Active staff members ordered by display_order."""
        return await self.repository(STAFF).list({"is_active": True})

    async def public_facilities(self) -> Result[list[Record]]:
        """Active facilities ordered by display_order."""
        return await self.repository(FACILITIES).list({"is_active": True})
