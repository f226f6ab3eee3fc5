# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""SQLAlchemy models for SchoolVerse content."""

from schoolverse.infrastructure.database.models.base import (
    SINGLETON_ID,
    Base,
    IdMixin,
    JSONType,
    TimestampMixin,
    generate_id,
)
from schoolverse.infrastructure.database.models.content import (
    AboutSection,
    Announcement,
    FooterSection,
    GalleryGroup,
    GalleryItem,
    GroupGalleryItem,
    HeroSection,
    LeadershipMember,
    LearningMaterial,
    SchoolFacility,
    SchoolHistory,
    StaffMember,
    VisionSection,
)

__all__ = [
    # Base
    "Base",
    "IdMixin",
    "TimestampMixin",
    "JSONType",
    "SINGLETON_ID",
    "generate_id",
    # Singletons
    "HeroSection",
    "AboutSection",
    "VisionSection",
    "SchoolHistory",
    # Collections
    "Announcement",
    "GalleryItem",
    "GalleryGroup",
    "GroupGalleryItem",
    "LearningMaterial",
    "StaffMember",
    "SchoolFacility",
    "LeadershipMember",
    "FooterSection",
]
