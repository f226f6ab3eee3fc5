# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Dashboard response models."""

from datetime import datetime

from pydantic import BaseModel, Field


class StatisticsResponse(BaseModel):
    """Content counts shown on the admin dashboard."""

    total_announcements: int
    total_gallery_items: int
    total_gallery_groups: int
    total_group_gallery_items: int
    total_learning_materials: int
    total_footer_sections: int
    total_staff_members: int
    total_facilities: int
    total_leadership_members: int
    total_images: int = Field(description="Single gallery photos plus grouped photos")
    generated_at: datetime
    failed_tables: list[str] = Field(
        default_factory=list,
        description="Tables whose count failed and is reported as 0",
    )
