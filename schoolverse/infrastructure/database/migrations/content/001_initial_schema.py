# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Initial content schema.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2025-01-15

Creates every website content table. Column types are portable so the
same revision runs on PostgreSQL and SQLite.
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = ("content",)
depends_on: Union[str, Sequence[str], None] = None

JSON_TYPE = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column("id", sa.String(64), primary_key=True)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    ]


def _ordering() -> list[sa.Column]:
    return [
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
    ]


def upgrade() -> None:
    """Create content tables."""
    # ==========================================================================
    # Singleton sections
    # ==========================================================================
    op.create_table(
        "hero_section",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(500), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("image_description", sa.String(500), nullable=True),
        sa.Column("primary_button_text", sa.String(100), nullable=True),
        sa.Column("primary_button_link", sa.String(1024), nullable=True),
        sa.Column("secondary_button_text", sa.String(100), nullable=True),
        sa.Column("secondary_button_link", sa.String(1024), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "about_section",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(500), nullable=True),
        sa.Column("main_content", JSON_TYPE, nullable=True),
        sa.Column("principal_message", sa.Text, nullable=True),
        sa.Column("principal_name", sa.String(255), nullable=True),
        sa.Column("principal_title", sa.String(255), nullable=True),
        sa.Column("principal_image_url", sa.String(1024), nullable=True),
        sa.Column("school_founded_year", sa.Integer, nullable=True),
        sa.Column("school_description", sa.Text, nullable=True),
        sa.Column("features", JSON_TYPE, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "vision_section",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(500), nullable=True),
        sa.Column("main_content", sa.Text, nullable=True),
        sa.Column("principal_message", sa.Text, nullable=True),
        sa.Column("principal_name", sa.String(255), nullable=True),
        sa.Column("principal_title", sa.String(255), nullable=True),
        sa.Column("features", JSON_TYPE, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "school_history",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("subtitle", sa.String(500), nullable=True),
        sa.Column("main_image_url", sa.String(1024), nullable=True),
        sa.Column("content_paragraphs", JSON_TYPE, nullable=True),
        *_timestamps(),
    )

    # ==========================================================================
    # Announcements and gallery
    # ==========================================================================
    op.create_table(
        "announcements",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text, nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("type", sa.String(50), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_announcements_created_at", "announcements", ["created_at"])

    op.create_table(
        "school_life_gallery",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("date_taken", sa.Date, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "gallery_groups",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("cover_image_url", sa.String(1024), nullable=True),
        sa.Column("category", sa.String(50), nullable=True),
        sa.Column("date_taken", sa.Date, nullable=True),
        *_ordering(),
        *_timestamps(),
    )

    op.create_table(
        "gallery_items",
        _id(),
        sa.Column(
            "group_id",
            sa.String(64),
            sa.ForeignKey("gallery_groups.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=True),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=False),
        sa.Column("alt_text", sa.String(500), nullable=True),
        *_ordering(),
        *_timestamps(),
    )
    op.create_index("ix_gallery_items_group_id", "gallery_items", ["group_id"])

    # ==========================================================================
    # Materials, people, facilities, footer
    # ==========================================================================
    op.create_table(
        "learning_materials",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("subject", sa.String(100), nullable=False),
        sa.Column("class_level", sa.String(50), nullable=False),
        sa.Column("file_type", sa.String(20), nullable=False),
        sa.Column("file_url", sa.String(1024), nullable=False),
        sa.Column("file_size", sa.String(32), nullable=True),
        sa.Column("downloads", sa.Integer, nullable=False, server_default="0"),
        *_timestamps(),
    )

    op.create_table(
        "staff_members",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("department", sa.String(255), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        *_ordering(),
        *_timestamps(),
    )

    op.create_table(
        "school_facilities",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text, nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        *_ordering(),
        *_timestamps(),
    )

    op.create_table(
        "leadership_team",
        _id(),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("position", sa.String(255), nullable=False),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("qualifications", sa.Text, nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("image_url", sa.String(1024), nullable=True),
        sa.Column("display_order", sa.Integer, nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "footer_sections",
        _id(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("section_type", sa.String(20), nullable=False),
        sa.Column("content", JSON_TYPE, nullable=False),
        *_ordering(),
        *_timestamps(),
        sa.CheckConstraint(
            "section_type IN ('links', 'contact', 'social', 'custom')",
            name="valid_footer_section_type",
        ),
    )


def downgrade() -> None:
    """Drop content tables."""
    for table in (
        "footer_sections",
        "leadership_team",
        "school_facilities",
        "staff_members",
        "learning_materials",
        "gallery_items",
        "gallery_groups",
        "school_life_gallery",
        "announcements",
        "school_history",
        "vision_section",
        "about_section",
        "hero_section",
    ):
        op.drop_table(table)
