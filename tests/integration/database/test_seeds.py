# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Integration tests for database seed scripts."""

import pytest
from sqlalchemy import func, select

from schoolverse.infrastructure.database.models import (
    SINGLETON_ID,
    FooterSection,
    HeroSection,
    SchoolHistory,
)
from schoolverse.infrastructure.database.seeds import (
    seed_content_database,
    seed_footer_sections,
    seed_singletons,
)

pytestmark = pytest.mark.integration


class TestContentSeeds:
    """Test content database seeds."""

    @pytest.mark.asyncio
    async def test_seed_creates_defaults(self, db_session):
        counts = await seed_content_database(db_session)
        await db_session.commit()

        assert counts == {"singletons": 4, "footer_sections": 4}
        hero = await db_session.get(HeroSection, SINGLETON_ID)
        assert hero.title == "Welcome to St. G. D. Convent School"
        history = await db_session.get(SchoolHistory, SINGLETON_ID)
        assert history.content_paragraphs == []

    @pytest.mark.asyncio
    async def test_footer_types_and_order(self, db_session):
        sections = await seed_footer_sections(db_session)

        assert [s.section_type for s in sections] == ["custom", "links", "contact", "social"]
        assert [s.display_order for s in sections] == [1, 2, 3, 4]
        assert all(s.is_active for s in sections)

    @pytest.mark.asyncio
    async def test_seed_is_idempotent(self, db_session):
        await seed_content_database(db_session)
        await db_session.commit()

        counts = await seed_content_database(db_session)

        assert counts == {"singletons": 0, "footer_sections": 0}
        total = await db_session.scalar(select(func.count()).select_from(FooterSection))
        assert total == 4

    @pytest.mark.asyncio
    async def test_existing_singleton_untouched(self, db_session):
        db_session.add(HeroSection(id=SINGLETON_ID, title="Custom", subtitle="Kept"))
        await db_session.commit()

        seeded = await seed_singletons(db_session)

        assert "hero_section" not in seeded
        hero = await db_session.get(HeroSection, SINGLETON_ID)
        assert hero.title == "Custom"
