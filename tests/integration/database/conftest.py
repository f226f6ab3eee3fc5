# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest fixtures for database integration tests.

Provides a file-backed SQLite engine for tests that need several
independent connections at once.
"""

from typing import AsyncGenerator

import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from schoolverse.infrastructure.database.models import Base


@pytest_asyncio.fixture
async def file_db_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """SQLite engine on a temporary file with all content tables."""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'content.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def file_db_sessionmaker(file_db_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(file_db_engine, class_=AsyncSession, expire_on_commit=False)
