# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Centralized event type definitions for SchoolVerse.

Content events are named ``content.<entity>.<action>`` where ``entity`` is
the table name of the changed record and ``action`` is one of
``created``, ``updated`` or ``deleted``.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from schoolverse.utils.datetime import utc_now

CONTENT_PREFIX = "content"


class ContentAction(str, Enum):
    """Kind of mutation applied to a content record."""

    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"


def content_event_type(entity: str, action: ContentAction | str) -> str:
    """Build the event type string for an entity mutation.

    Args:
        entity: Table name of the changed entity.
        action: Mutation kind.

    Returns:
        Event type, e.g. ``content.footer_sections.updated``.
    """
    action_value = action.value if isinstance(action, ContentAction) else action
    return f"{CONTENT_PREFIX}.{entity}.{action_value}"


class EventTypes:
    """All event types in SchoolVerse organized by entity."""

    class Content:
        """Content table mutations."""

        HERO_UPDATED = content_event_type("hero_section", ContentAction.UPDATED)
        ABOUT_UPDATED = content_event_type("about_section", ContentAction.UPDATED)
        VISION_UPDATED = content_event_type("vision_section", ContentAction.UPDATED)
        HISTORY_UPDATED = content_event_type("school_history", ContentAction.UPDATED)

        ANNOUNCEMENT_CREATED = content_event_type("announcements", ContentAction.CREATED)
        ANNOUNCEMENT_UPDATED = content_event_type("announcements", ContentAction.UPDATED)
        ANNOUNCEMENT_DELETED = content_event_type("announcements", ContentAction.DELETED)

        GALLERY_GROUP_DELETED = content_event_type("gallery_groups", ContentAction.DELETED)
        GALLERY_ITEM_CREATED = content_event_type("gallery_items", ContentAction.CREATED)

        FOOTER_UPDATED = content_event_type("footer_sections", ContentAction.UPDATED)


class EventPatterns:
    """Wildcard patterns for subscribing to multiple events.

    The EventBus supports fnmatch patterns, so ``content.announcements.*``
    matches every announcement mutation.
    """

    ALL_CONTENT = f"{CONTENT_PREFIX}.*"
    ALL_CREATED = f"{CONTENT_PREFIX}.*.created"
    ALL_UPDATED = f"{CONTENT_PREFIX}.*.updated"
    ALL_DELETED = f"{CONTENT_PREFIX}.*.deleted"

    ALL = "*"

    @staticmethod
    def for_entity(entity: str) -> str:
        """Pattern matching every mutation of one entity."""
        return f"{CONTENT_PREFIX}.{entity}.*"


@dataclass(frozen=True)
class ContentChanged:
    """Typed payload describing one content mutation.

    Attributes:
        entity: Table name of the changed entity.
        action: Mutation kind.
        record_id: Identifier of the changed record.
        occurred_at: When the mutation was committed to the session.
    """

    entity: str
    action: ContentAction
    record_id: str
    occurred_at: datetime = field(default_factory=utc_now)

    @property
    def event_type(self) -> str:
        return content_event_type(self.entity, self.action)

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity": self.entity,
            "action": self.action.value,
            "record_id": self.record_id,
            "occurred_at": self.occurred_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ContentChanged":
        """Rebuild a change from its dictionary form."""
        return cls(
            entity=data["entity"],
            action=ContentAction(data["action"]),
            record_id=data["record_id"],
            occurred_at=datetime.fromisoformat(data["occurred_at"]),
        )
