# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard statistics aggregation.

One count query per tracked table runs concurrently, each on its own
session. A failed count contributes 0 and is listed in ``failed_tables``.
Counts are read independently, so the summary is not a consistent
snapshot, and nothing is cached.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from schoolverse.domains.content.entities import (
    ANNOUNCEMENTS,
    FACILITIES,
    FOOTER,
    GALLERY,
    GALLERY_GROUPS,
    GALLERY_ITEMS,
    LEADERSHIP,
    MATERIALS,
    STAFF,
    EntitySpec,
)
from schoolverse.domains.content.repository import ContentRepository
from schoolverse.utils.datetime import format_iso, utc_now

logger = logging.getLogger(__name__)

# Summary field -> counted entity
TRACKED_TABLES: dict[str, EntitySpec] = {
    "total_announcements": ANNOUNCEMENTS,
    "total_gallery_items": GALLERY,
    "total_gallery_groups": GALLERY_GROUPS,
    "total_group_gallery_items": GALLERY_ITEMS,
    "total_learning_materials": MATERIALS,
    "total_footer_sections": FOOTER,
    "total_staff_members": STAFF,
    "total_facilities": FACILITIES,
    "total_leadership_members": LEADERSHIP,
}


@dataclass
class DashboardStatistics:
    """Flat summary of content counts for the admin dashboard."""

    total_announcements: int = 0
    total_gallery_items: int = 0
    total_gallery_groups: int = 0
    total_group_gallery_items: int = 0
    total_learning_materials: int = 0
    total_footer_sections: int = 0
    total_staff_members: int = 0
    total_facilities: int = 0
    total_leadership_members: int = 0
    generated_at: datetime = field(default_factory=utc_now)
    failed_tables: list[str] = field(default_factory=list)

    @property
    def total_images(self) -> int:
        """Single gallery photos plus photos inside groups."""
        return self.total_gallery_items + self.total_group_gallery_items

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {name: getattr(self, name) for name in TRACKED_TABLES}
        data["total_images"] = self.total_images
        data["generated_at"] = format_iso(self.generated_at)
        data["failed_tables"] = list(self.failed_tables)
        return data


class StatisticsAggregator:
    """Collects dashboard counts concurrently.

    Example:
        >>> aggregator = StatisticsAggregator(get_sessionmaker())
        >>> stats = await aggregator.collect()
        >>> stats.total_announcements
        12
    """

    def __init__(self, sessionmaker: async_sessionmaker[AsyncSession]) -> None:
        self._sessionmaker = sessionmaker

    async def _count(self, spec: EntitySpec) -> int:
        async with self._sessionmaker() as session:
            result = await ContentRepository(session, spec).count()
        return result.unwrap()

    async def collect(self) -> DashboardStatistics:
        """Run every count and assemble the summary."""
        fields = list(TRACKED_TABLES)
        counts = await asyncio.gather(
            *[self._count(TRACKED_TABLES[name]) for name in fields],
            return_exceptions=True,
        )

        stats = DashboardStatistics()
        for name, count in zip(fields, counts):
            if isinstance(count, Exception):
                table = TRACKED_TABLES[name].name
                logger.warning("Count failed for %s, reporting 0: %s", table, count)
                stats.failed_tables.append(table)
                continue
            if isinstance(count, BaseException):
                raise count
            setattr(stats, name, count)

        logger.debug("Dashboard statistics collected (%d failed)", len(stats.failed_tables))
        return stats
