# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pydantic request and response models for the HTTP API."""

from schoolverse.models.common import ErrorResponse, ListResponse, RecordMeta
from schoolverse.models.content import (
    AboutFields,
    AboutResponse,
    AnnouncementCreate,
    AnnouncementFields,
    AnnouncementResponse,
    FacilityCreate,
    FacilityFields,
    FacilityResponse,
    FooterReorderRequest,
    FooterSectionCreate,
    FooterSectionFields,
    FooterSectionResponse,
    GalleryGroupCreate,
    GalleryGroupFields,
    GalleryGroupResponse,
    GalleryGroupSummary,
    GalleryItemCreate,
    GalleryItemFields,
    GalleryItemResponse,
    GroupGalleryItemCreate,
    GroupGalleryItemFields,
    GroupGalleryItemResponse,
    HeroFields,
    HeroResponse,
    HistoryFields,
    HistoryResponse,
    LeadershipMemberCreate,
    LeadershipMemberFields,
    LeadershipMemberResponse,
    LearningMaterialCreate,
    LearningMaterialFields,
    LearningMaterialResponse,
    StaffMemberCreate,
    StaffMemberFields,
    StaffMemberResponse,
    VisionFields,
    VisionResponse,
    normalize_footer_content,
)
from schoolverse.models.dashboard import StatisticsResponse
from schoolverse.models.uploads import BatchItemResponse, BatchUploadResponse, UploadResponse

__all__ = [
    # Common
    "RecordMeta",
    "ListResponse",
    "ErrorResponse",
    # Sections
    "HeroFields",
    "HeroResponse",
    "AboutFields",
    "AboutResponse",
    "VisionFields",
    "VisionResponse",
    "HistoryFields",
    "HistoryResponse",
    # Collections
    "AnnouncementFields",
    "AnnouncementCreate",
    "AnnouncementResponse",
    "GalleryItemFields",
    "GalleryItemCreate",
    "GalleryItemResponse",
    "GalleryGroupFields",
    "GalleryGroupCreate",
    "GalleryGroupResponse",
    "GalleryGroupSummary",
    "GroupGalleryItemFields",
    "GroupGalleryItemCreate",
    "GroupGalleryItemResponse",
    "LearningMaterialFields",
    "LearningMaterialCreate",
    "LearningMaterialResponse",
    "StaffMemberFields",
    "StaffMemberCreate",
    "StaffMemberResponse",
    "FacilityFields",
    "FacilityCreate",
    "FacilityResponse",
    "LeadershipMemberFields",
    "LeadershipMemberCreate",
    "LeadershipMemberResponse",
    "FooterSectionFields",
    "FooterSectionCreate",
    "FooterSectionResponse",
    "FooterReorderRequest",
    "normalize_footer_content",
    # Uploads
    "UploadResponse",
    "BatchItemResponse",
    "BatchUploadResponse",
    # Dashboard
    "StatisticsResponse",
]
