# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Event infrastructure module for SchoolVerse.

Components:
- EventBus: In-memory pub/sub with pattern matching
- ContentChanged: Typed payload for content mutations
- EventTypes / EventPatterns: Centralized event names

Quick Start:
    from schoolverse.infrastructure.events import get_event_bus, EventPatterns

    event_bus = get_event_bus()
    event_bus.subscribe(EventPatterns.ALL_CONTENT, my_handler)
"""

from schoolverse.infrastructure.events.bus import (
    EventBus,
    EventData,
    EventHandler,
    get_event_bus,
    reset_event_bus,
)
from schoolverse.infrastructure.events.types import (
    ContentAction,
    ContentChanged,
    EventPatterns,
    EventTypes,
    content_event_type,
)

__all__ = [
    # Event Bus
    "EventBus",
    "EventData",
    "EventHandler",
    "get_event_bus",
    "reset_event_bus",
    # Event Types
    "ContentAction",
    "ContentChanged",
    "EventPatterns",
    "EventTypes",
    "content_event_type",
]
