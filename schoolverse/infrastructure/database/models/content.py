# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Website content tables.

Singleton sections (hero, about, vision, history) hold one row with
id ``"main"``. Every other table is an independent collection keyed by
a UUID string.
"""

from datetime import date
from typing import Any

from sqlalchemy import Boolean, CheckConstraint, Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from schoolverse.infrastructure.database.models.base import (
    Base,
    IdMixin,
    JSONType,
    TimestampMixin,
)


# =============================================================================
# Singleton sections
# =============================================================================


class HeroSection(IdMixin, TimestampMixin, Base):
    """Landing page hero banner."""

    __tablename__ = "hero_section"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(1024))
    image_description: Mapped[str | None] = mapped_column(String(500))
    primary_button_text: Mapped[str | None] = mapped_column(String(100))
    primary_button_link: Mapped[str | None] = mapped_column(String(1024))
    secondary_button_text: Mapped[str | None] = mapped_column(String(100))
    secondary_button_link: Mapped[str | None] = mapped_column(String(1024))


class AboutSection(IdMixin, TimestampMixin, Base):
    """About-the-school section with principal message."""

    __tablename__ = "about_section"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(500))
    main_content: Mapped[Any | None] = mapped_column(JSONType)
    principal_message: Mapped[str | None] = mapped_column(Text)
    principal_name: Mapped[str | None] = mapped_column(String(255))
    principal_title: Mapped[str | None] = mapped_column(String(255))
    principal_image_url: Mapped[str | None] = mapped_column(String(1024))
    school_founded_year: Mapped[int | None] = mapped_column(Integer)
    school_description: Mapped[str | None] = mapped_column(Text)
    features: Mapped[list[Any] | None] = mapped_column()
    image_url: Mapped[str | None] = mapped_column(String(1024))


class VisionSection(IdMixin, TimestampMixin, Base):
    """Vision and mission statement."""

    __tablename__ = "vision_section"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(500))
    main_content: Mapped[str | None] = mapped_column(Text)
    principal_message: Mapped[str | None] = mapped_column(Text)
    principal_name: Mapped[str | None] = mapped_column(String(255))
    principal_title: Mapped[str | None] = mapped_column(String(255))
    features: Mapped[list[Any] | None] = mapped_column()


class SchoolHistory(IdMixin, TimestampMixin, Base):
    """School history page."""

    __tablename__ = "school_history"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    subtitle: Mapped[str | None] = mapped_column(String(500))
    main_image_url: Mapped[str | None] = mapped_column(String(1024))
    content_paragraphs: Mapped[list[Any] | None] = mapped_column()


# =============================================================================
# Collections
# =============================================================================


class Announcement(IdMixin, TimestampMixin, Base):
    """Notice-board announcement."""

    __tablename__ = "announcements"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(50))
    type: Mapped[str | None] = mapped_column(String(50))


class GalleryItem(IdMixin, TimestampMixin, Base):
    """Single ungrouped school-life photo."""

    __tablename__ = "school_life_gallery"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    category: Mapped[str | None] = mapped_column(String(50))
    date_taken: Mapped[date | None] = mapped_column(Date)


class GalleryGroup(IdMixin, TimestampMixin, Base):
    """Event album holding many gallery_items."""

    __tablename__ = "gallery_groups"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    cover_image_url: Mapped[str | None] = mapped_column(String(1024))
    category: Mapped[str | None] = mapped_column(String(50))
    date_taken: Mapped[date | None] = mapped_column(Date)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class GroupGalleryItem(IdMixin, TimestampMixin, Base):
    """Photo belonging to a gallery group."""

    __tablename__ = "gallery_items"

    group_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("gallery_groups.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title: Mapped[str | None] = mapped_column(String(255))
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    alt_text: Mapped[str | None] = mapped_column(String(500))
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class LearningMaterial(IdMixin, TimestampMixin, Base):
    """Downloadable study material (uploaded file or external link)."""

    __tablename__ = "learning_materials"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    subject: Mapped[str] = mapped_column(String(100), nullable=False)
    class_level: Mapped[str] = mapped_column(String(50), nullable=False)
    file_type: Mapped[str] = mapped_column(String(20), nullable=False)
    file_url: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_size: Mapped[str | None] = mapped_column(String(32))
    downloads: Mapped[int] = mapped_column(Integer, default=0, nullable=False)


class StaffMember(IdMixin, TimestampMixin, Base):
    """Teaching or administrative staff profile."""

    __tablename__ = "staff_members"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    department: Mapped[str | None] = mapped_column(String(255))
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    bio: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(1024))
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class SchoolFacility(IdMixin, TimestampMixin, Base):
    """Campus facility card."""

    __tablename__ = "school_facilities"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    image_url: Mapped[str | None] = mapped_column(String(1024))
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)


class LeadershipMember(IdMixin, TimestampMixin, Base):
    """Member of the school leadership team."""

    __tablename__ = "leadership_team"

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    position: Mapped[str] = mapped_column(String(255), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text)
    qualifications: Mapped[str | None] = mapped_column(Text)
    email: Mapped[str | None] = mapped_column(String(255))
    phone: Mapped[str | None] = mapped_column(String(50))
    image_url: Mapped[str | None] = mapped_column(String(1024))
    display_order: Mapped[int | None] = mapped_column(Integer)


class FooterSection(IdMixin, TimestampMixin, Base):
    """Footer column; content shape depends on section_type."""

    __tablename__ = "footer_sections"
    __table_args__ = (
        CheckConstraint(
            "section_type IN ('links', 'contact', 'social', 'custom')",
            name="valid_footer_section_type",
        ),
    )

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    section_type: Mapped[str] = mapped_column(String(20), nullable=False)
    content: Mapped[dict[str, Any]] = mapped_column(default=dict, nullable=False)
    display_order: Mapped[int] = mapped_column(Integer, default=0, nullable=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)
