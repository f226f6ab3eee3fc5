# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Declarative base and shared column mixins for content models."""

from datetime import datetime
from typing import Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from schoolverse.utils.datetime import utc_now

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in tests)
JSONType = JSON().with_variant(JSONB(), "postgresql")

SINGLETON_ID = "main"


def generate_id() -> str:
    """Generate a new record identifier."""
    return str(uuid4())


class Base(DeclarativeBase):
    """Declarative base for all SchoolVerse tables."""

    type_annotation_map = {
        dict[str, Any]: JSONType,
        list[Any]: JSONType,
    }

    def to_dict(self) -> dict[str, Any]:
        """Column values keyed by column name."""
        return {column.key: getattr(self, column.key) for column in self.__table__.columns}


class IdMixin:
    """String primary key, UUID by default or a fixed literal for singletons."""

    id: Mapped[str] = mapped_column(String(64), primary_key=True, default=generate_id)


class TimestampMixin:
    """created_at / updated_at maintained on the client side."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
