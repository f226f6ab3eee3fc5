# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures.

This module provides fixtures used across all test types:
- An in-memory SQLite content database with every table created
- A fresh event bus per test
- Settings with a known admin key
"""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from schoolverse.core.config import (
    AdminSettings,
    DatabaseSettings,
    Settings,
    StorageSettings,
    clear_settings_cache,
)
from schoolverse.infrastructure.database.models import Base
from schoolverse.infrastructure.events import EventBus, reset_event_bus

TEST_ADMIN_KEY = "test-admin-key"
MEMORY_DB_URL = "sqlite+aiosqlite:///:memory:"


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test (database or HTTP stack)"
    )


# =============================================================================
# Environment Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def clean_globals() -> Generator[None, None, None]:
    """Reset process-wide singletons around every test."""
    reset_event_bus()
    clear_settings_cache()
    yield
    reset_event_bus()
    clear_settings_cache()


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings pointing at an in-memory database and a temporary media dir."""
    return Settings(
        environment="development",
        debug=True,
        log_level="DEBUG",
        database=DatabaseSettings(url_override=MEMORY_DB_URL),
        storage=StorageSettings(
            backend="local",
            media_dir=str(tmp_path / "media"),
            public_base_url="http://testserver/media",
        ),
        admin=AdminSettings(api_key=TEST_ADMIN_KEY),
    )


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Headers accepted by admin endpoints."""
    return {"X-Admin-Key": TEST_ADMIN_KEY}


# =============================================================================
# Database Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def db_engine() -> AsyncGenerator[AsyncEngine, None]:
    """In-memory SQLite engine with all content tables."""
    engine = create_async_engine(
        MEMORY_DB_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def db_sessionmaker(db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def db_session(
    db_sessionmaker: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Session bound to the in-memory engine."""
    async with db_sessionmaker() as session:
        yield session


@pytest.fixture
def event_bus() -> EventBus:
    """Fresh event bus isolated from the process singleton."""
    return EventBus()


@pytest.fixture
def recorded_events(event_bus: EventBus) -> list[Any]:
    """List receiving every content event published on ``event_bus``."""
    received: list[Any] = []

    async def record(event: Any) -> None:
        received.append(event)

    event_bus.subscribe("content.*", record)
    return received
