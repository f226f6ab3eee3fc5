# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the content change event bus."""

from unittest.mock import AsyncMock

import pytest

from schoolverse.infrastructure.events import (
    ContentAction,
    ContentChanged,
    EventBus,
    EventPatterns,
    EventTypes,
    content_event_type,
    get_event_bus,
    reset_event_bus,
)


@pytest.mark.unit
class TestEventTypes:
    """Tests for event naming."""

    def test_event_type_format(self):
        assert content_event_type("footer_sections", ContentAction.UPDATED) == (
            "content.footer_sections.updated"
        )

    def test_constants_follow_format(self):
        assert EventTypes.Content.ANNOUNCEMENT_CREATED == "content.announcements.created"
        assert EventTypes.Content.HERO_UPDATED == "content.hero_section.updated"

    def test_entity_pattern(self):
        assert EventPatterns.for_entity("gallery_items") == "content.gallery_items.*"

    def test_content_changed_round_trip(self):
        change = ContentChanged("announcements", ContentAction.DELETED, "a-1")

        restored = ContentChanged.from_dict(change.to_dict())

        assert restored == change
        assert restored.event_type == "content.announcements.deleted"


@pytest.mark.unit
class TestEventBus:
    """Tests for subscription and delivery."""

    @pytest.mark.asyncio
    async def test_exact_subscription_receives_event(self):
        bus = EventBus()
        handler = AsyncMock()
        bus.subscribe("content.announcements.created", handler)

        await bus.publish_change(ContentChanged("announcements", ContentAction.CREATED, "a-1"))

        handler.assert_awaited_once()
        event = handler.await_args.args[0]
        assert event.event_type == "content.announcements.created"
        assert event.change.record_id == "a-1"
        assert event.change.action is ContentAction.CREATED

    @pytest.mark.asyncio
    async def test_wildcard_subscriptions(self):
        bus = EventBus()
        entity_handler = AsyncMock()
        all_handler = AsyncMock()
        deleted_handler = AsyncMock()
        bus.subscribe(EventPatterns.for_entity("footer_sections"), entity_handler)
        bus.subscribe(EventPatterns.ALL_CONTENT, all_handler)
        bus.subscribe(EventPatterns.ALL_DELETED, deleted_handler)

        await bus.publish_change(ContentChanged("footer_sections", ContentAction.UPDATED, "f-1"))
        await bus.publish_change(ContentChanged("staff_members", ContentAction.DELETED, "s-1"))

        assert entity_handler.await_count == 1
        assert all_handler.await_count == 2
        assert deleted_handler.await_count == 1

    @pytest.mark.asyncio
    async def test_non_matching_subscription_not_called(self):
        bus = EventBus()
        handler = AsyncMock()
        bus.subscribe("content.announcements.*", handler)

        await bus.publish_change(ContentChanged("staff_members", ContentAction.CREATED, "s-1"))

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_handler_error_does_not_reach_publisher_or_other_handlers(self):
        bus = EventBus()
        failing = AsyncMock(side_effect=RuntimeError("listener broke"))
        healthy = AsyncMock()
        bus.subscribe("content.*", failing)
        bus.subscribe("content.*", healthy)

        event = await bus.publish_change(
            ContentChanged("announcements", ContentAction.CREATED, "a-1")
        )

        assert event.event_type == "content.announcements.created"
        failing.assert_awaited_once()
        healthy.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_late_subscriber_misses_earlier_events(self):
        bus = EventBus()
        await bus.publish_change(ContentChanged("announcements", ContentAction.CREATED, "a-1"))

        handler = AsyncMock()
        bus.subscribe("content.*", handler)

        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unsubscribe(self):
        bus = EventBus()
        handler = AsyncMock()
        bus.subscribe("content.*", handler)

        assert bus.unsubscribe("content.*", handler) is True
        assert bus.unsubscribe("content.*", handler) is False

        await bus.publish("content.announcements.created", {"record_id": "a-1"})
        handler.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_stats(self):
        bus = EventBus()
        bus.subscribe("content.announcements.created", AsyncMock())
        bus.subscribe("content.*", AsyncMock())
        await bus.publish("content.announcements.created", {})

        stats = bus.get_stats()

        assert stats["exact_subscriptions"] == 1
        assert stats["pattern_subscriptions"] == 1
        assert stats["total_handlers"] == 2
        assert stats["events_published"] == 1


@pytest.mark.unit
class TestEventBusSingleton:
    """Tests for the process-wide bus."""

    def test_singleton_is_reused(self):
        assert get_event_bus() is get_event_bus()

    def test_reset_creates_new_instance(self):
        first = get_event_bus()
        reset_event_bus()
        assert get_event_bus() is not first
