# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Shared API models."""

from datetime import datetime
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class RecordMeta(BaseModel):
    """Server-assigned fields present on every stored record."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Record identifier")
    created_at: datetime | None = Field(None, description="Creation timestamp")
    updated_at: datetime | None = Field(None, description="Last update timestamp")


class ListResponse(BaseModel, Generic[T]):
    """List of records with a total count."""

    items: list[T]
    total: int


class ErrorResponse(BaseModel):
    """Error body returned for failed operations."""

    detail: str
    error: str | None = Field(None, description="Error kind")
