# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Content domain package.

This package provides website content management including:
- Entity schemas for every content table
- The generic ContentRepository with Result-based errors
- ContentService with footer, materials and public listing helpers
"""

from schoolverse.domains.content.entities import (
    COLLECTION_SLUGS,
    ENTITIES,
    SECTION_SLUGS,
    EntitySpec,
    OrderBy,
    get_entity,
)
from schoolverse.domains.content.repository import ContentRepository, Record
from schoolverse.domains.content.result import (
    BackendUnavailableError,
    ContentServiceError,
    ErrorKind,
    NotFoundError,
    Result,
    ValidationFailedError,
    error_for,
)
from schoolverse.domains.content.service import ContentService

__all__ = [
    # Entities
    "COLLECTION_SLUGS",
    "ENTITIES",
    "SECTION_SLUGS",
    "EntitySpec",
    "OrderBy",
    "get_entity",
    # Repository
    "ContentRepository",
    "Record",
    "ContentService",
    # Results and errors
    "Result",
    "ErrorKind",
    "ContentServiceError",
    "NotFoundError",
    "ValidationFailedError",
    "BackendUnavailableError",
    "error_for",
]
