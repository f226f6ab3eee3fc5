# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content database seed data.

This module provides default content for a fresh database:
- Singleton sections: hero, about, vision and history rows with id "main"
- Footer sections: about text, quick links, contact details, social links

Seeding is idempotent: singleton rows are only inserted when missing and
footer sections only when the footer table is empty.
"""

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from schoolverse.infrastructure.database.models import (
    SINGLETON_ID,
    AboutSection,
    Base,
    FooterSection,
    HeroSection,
    SchoolHistory,
    VisionSection,
)

logger = logging.getLogger(__name__)

SINGLETON_DEFAULTS: dict[str, dict[str, Any]] = {
    "hero_section": {
        "title": "Welcome to St. G. D. Convent School",
        "subtitle": "Empowering students through innovative education",
    },
    "about_section": {
        "title": "About Our School",
    },
    "vision_section": {
        "title": "Our Vision & Mission",
    },
    "school_history": {
        "title": "Our History",
        "content_paragraphs": [],
    },
}

DEFAULT_FOOTER_SECTIONS: list[dict[str, Any]] = [
    {
        "title": "About St.G.D Convent School",
        "section_type": "custom",
        "content": {
            "text": (
                "Empowering students through innovative education and "
                "comprehensive learning experiences since 2015."
            ),
        },
        "display_order": 1,
        "is_active": True,
    },
    {
        "title": "Quick Links",
        "section_type": "links",
        "content": {
            "items": [
                {"label": "Home", "url": "/"},
                {"label": "About Us", "url": "/about"},
                {"label": "Gallery", "url": "/gallery"},
                {"label": "Learning Materials", "url": "/materials"},
                {"label": "Admin Portal", "url": "/admin"},
            ],
        },
        "display_order": 2,
        "is_active": True,
    },
    {
        "title": "Contact Us",
        "section_type": "contact",
        "content": {
            "address": "Siroli, Road Dhanouli, Agra, Uttar Pradesh",
            "phone": "8077422014, 9084792142",
            "email": "st.g.dconventschool1@gmail.com",
        },
        "display_order": 3,
        "is_active": True,
    },
    {
        "title": "Follow Us",
        "section_type": "social",
        "content": {
            "platforms": [
                {"name": "Facebook", "url": "https://facebook.com/stgdconventschool", "icon": "facebook"},
                {"name": "Twitter", "url": "https://twitter.com/stgdconventschool", "icon": "twitter"},
                {"name": "Instagram", "url": "https://instagram.com/stgdconventschool", "icon": "instagram"},
                {"name": "YouTube", "url": "https://youtube.com/stgdconventschool", "icon": "youtube"},
            ],
        },
        "display_order": 4,
        "is_active": True,
    },
]

_SINGLETON_MODELS: list[type[Base]] = [HeroSection, AboutSection, VisionSection, SchoolHistory]


async def seed_singletons(session: AsyncSession) -> list[str]:
    """Insert default singleton rows that do not exist yet.

    Args:
        session: Database session.

    Returns:
        Table names that received a default row.
    """
    seeded = []
    for model in _SINGLETON_MODELS:
        existing = await session.get(model, SINGLETON_ID)
        if existing is not None:
            continue
        table = model.__tablename__
        session.add(model(id=SINGLETON_ID, **SINGLETON_DEFAULTS[table]))
        seeded.append(table)

    await session.flush()
    if seeded:
        logger.info("Seeded singleton sections: %s", ", ".join(seeded))
    return seeded


async def seed_footer_sections(session: AsyncSession) -> list[FooterSection]:
    """Insert the default footer sections into an empty footer table.

    Args:
        session: Database session.

    Returns:
        List of created footer sections (empty if the table had rows).
    """
    count = await session.scalar(select(func.count()).select_from(FooterSection))
    if count:
        logger.debug("Footer sections already present (%d), skipping seed", count)
        return []

    sections = [FooterSection(**data) for data in DEFAULT_FOOTER_SECTIONS]
    session.add_all(sections)
    await session.flush()
    logger.info("Seeded %d footer sections", len(sections))
    return sections


async def seed_content_database(session: AsyncSession) -> dict[str, int]:
    """Seed all default content.

    Args:
        session: Database session.

    Returns:
        Number of rows created per seed group.
    """
    singletons = await seed_singletons(session)
    footer = await seed_footer_sections(session)
    return {"singletons": len(singletons), "footer_sections": len(footer)}
