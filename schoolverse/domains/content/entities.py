# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Entity schemas for the generic content repository.

Each EntitySpec describes one table: its model, required fields, defaults
applied on create, list ordering, whether it is a singleton section,
fields restricted to a fixed set of values, and fields that reference
rows of another table.
"""

from dataclasses import dataclass, field
from typing import Any

from schoolverse.infrastructure.database.models import (
    AboutSection,
    Announcement,
    Base,
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
from schoolverse.infrastructure.database.seeds import SINGLETON_DEFAULTS

# Columns the server assigns; never accepted from callers
SERVER_FIELDS = frozenset({"id", "created_at", "updated_at"})

FOOTER_SECTION_TYPES = ("links", "contact", "social", "custom")


@dataclass(frozen=True)
class OrderBy:
    """One ORDER BY term."""

    column: str
    descending: bool = False
    nulls_last: bool = False


@dataclass(frozen=True)
class EntitySpec:
    """Schema of one content entity.

    Attributes:
        name: Table name, also used as the entity name in events.
        model: SQLAlchemy model class.
        required: Fields that must be present and non-empty.
        defaults: Values applied on create when a field is missing.
        order_by: List ordering.
        singleton: Whether the table holds the single row ``"main"``.
        choices: Fields restricted to a fixed set of values.
        read_only: Fields callers may not write (beyond server fields).
        references: Fields holding the id of a row in another table; the
            row must exist when the field is written.
    """

    name: str
    model: type[Base]
    required: tuple[str, ...] = ()
    defaults: dict[str, Any] = field(default_factory=dict)
    order_by: tuple[OrderBy, ...] = (OrderBy("created_at", descending=True),)
    singleton: bool = False
    choices: dict[str, tuple[str, ...]] = field(default_factory=dict)
    read_only: frozenset[str] = frozenset()
    references: dict[str, type[Base]] = field(default_factory=dict)

    @property
    def columns(self) -> frozenset[str]:
        return frozenset(column.key for column in self.model.__table__.columns)

    @property
    def writable(self) -> frozenset[str]:
        return self.columns - SERVER_FIELDS - self.read_only


_BY_DISPLAY_ORDER = (OrderBy("display_order"), OrderBy("created_at"))

HERO = EntitySpec(
    name="hero_section",
    model=HeroSection,
    required=("title", "subtitle"),
    defaults=SINGLETON_DEFAULTS["hero_section"],
    singleton=True,
)
ABOUT = EntitySpec(
    name="about_section",
    model=AboutSection,
    required=("title",),
    defaults=SINGLETON_DEFAULTS["about_section"],
    singleton=True,
)
VISION = EntitySpec(
    name="vision_section",
    model=VisionSection,
    required=("title",),
    defaults=SINGLETON_DEFAULTS["vision_section"],
    singleton=True,
)
HISTORY = EntitySpec(
    name="school_history",
    model=SchoolHistory,
    required=("title",),
    defaults=SINGLETON_DEFAULTS["school_history"],
    singleton=True,
)

ANNOUNCEMENTS = EntitySpec(
    name="announcements",
    model=Announcement,
    required=("title", "content"),
)
GALLERY = EntitySpec(
    name="school_life_gallery",
    model=GalleryItem,
    required=("title", "image_url"),
)
GALLERY_GROUPS = EntitySpec(
    name="gallery_groups",
    model=GalleryGroup,
    required=("title",),
    defaults={"display_order": 0, "is_active": True},
    order_by=(OrderBy("display_order"), OrderBy("created_at", descending=True)),
)
GALLERY_ITEMS = EntitySpec(
    name="gallery_items",
    model=GroupGalleryItem,
    required=("group_id", "image_url"),
    defaults={"display_order": 0, "is_active": True},
    order_by=_BY_DISPLAY_ORDER,
    references={"group_id": GalleryGroup},
)
MATERIALS = EntitySpec(
    name="learning_materials",
    model=LearningMaterial,
    required=("title", "subject", "class_level", "file_type", "file_url"),
    read_only=frozenset({"downloads"}),
)
STAFF = EntitySpec(
    name="staff_members",
    model=StaffMember,
    required=("name", "position"),
    defaults={"display_order": 0, "is_active": True},
    order_by=_BY_DISPLAY_ORDER,
)
FACILITIES = EntitySpec(
    name="school_facilities",
    model=SchoolFacility,
    required=("title",),
    defaults={"display_order": 0, "is_active": True},
    order_by=_BY_DISPLAY_ORDER,
)
LEADERSHIP = EntitySpec(
    name="leadership_team",
    model=LeadershipMember,
    required=("name", "position"),
    order_by=(OrderBy("display_order", nulls_last=True), OrderBy("created_at")),
)
FOOTER = EntitySpec(
    name="footer_sections",
    model=FooterSection,
    required=("title", "section_type"),
    defaults={"content": {}, "display_order": 0, "is_active": True},
    order_by=_BY_DISPLAY_ORDER,
    choices={"section_type": FOOTER_SECTION_TYPES},
)

ENTITIES: dict[str, EntitySpec] = {
    spec.name: spec
    for spec in (
        HERO,
        ABOUT,
        VISION,
        HISTORY,
        ANNOUNCEMENTS,
        GALLERY,
        GALLERY_GROUPS,
        GALLERY_ITEMS,
        MATERIALS,
        STAFF,
        FACILITIES,
        LEADERSHIP,
        FOOTER,
    )
}

# URL slugs used by the HTTP API
SECTION_SLUGS: dict[str, EntitySpec] = {
    "hero": HERO,
    "about": ABOUT,
    "vision": VISION,
    "history": HISTORY,
}
COLLECTION_SLUGS: dict[str, EntitySpec] = {
    "announcements": ANNOUNCEMENTS,
    "gallery": GALLERY,
    "gallery-groups": GALLERY_GROUPS,
    "gallery-items": GALLERY_ITEMS,
    "materials": MATERIALS,
    "staff": STAFF,
    "facilities": FACILITIES,
    "leadership": LEADERSHIP,
    "footer": FOOTER,
}


def get_entity(name: str) -> EntitySpec:
    """Look up an entity by table name.

    Raises:
        KeyError: If no entity has that name.
    """
    return ENTITIES[name]
