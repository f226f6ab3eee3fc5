# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Request and response models for website content.

Each entity has three models:
- ``XFields``: every writable field, all optional (used for PATCH)
- ``XCreate``: required fields made mandatory
- ``XResponse``: fields plus id and timestamps
"""

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

from schoolverse.models.common import RecordMeta

FooterSectionType = Literal["links", "contact", "social", "custom"]


# =============================================================================
# Singleton sections
# =============================================================================


class HeroFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=500)
    description: str | None = None
    image_url: str | None = None
    image_description: str | None = Field(None, max_length=500)
    primary_button_text: str | None = Field(None, max_length=100)
    primary_button_link: str | None = None
    secondary_button_text: str | None = Field(None, max_length=100)
    secondary_button_link: str | None = None


class HeroResponse(HeroFields, RecordMeta):
    pass


class AboutFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=500)
    main_content: Any = None
    principal_message: str | None = None
    principal_name: str | None = Field(None, max_length=255)
    principal_title: str | None = Field(None, max_length=255)
    principal_image_url: str | None = None
    school_founded_year: int | None = Field(None, ge=1800, le=2100)
    school_description: str | None = None
    features: list[Any] | None = None
    image_url: str | None = None


class AboutResponse(AboutFields, RecordMeta):
    pass


class VisionFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=500)
    main_content: str | None = None
    principal_message: str | None = None
    principal_name: str | None = Field(None, max_length=255)
    principal_title: str | None = Field(None, max_length=255)
    features: list[Any] | None = None


class VisionResponse(VisionFields, RecordMeta):
    pass


class HistoryFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    subtitle: str | None = Field(None, max_length=500)
    main_image_url: str | None = None
    content_paragraphs: list[Any] | None = None


class HistoryResponse(HistoryFields, RecordMeta):
    pass


# =============================================================================
# Announcements and gallery
# =============================================================================


class AnnouncementFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = None
    category: str | None = Field(None, max_length=50)
    type: str | None = Field(None, max_length=50)


class AnnouncementCreate(AnnouncementFields):
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)


class AnnouncementResponse(AnnouncementFields, RecordMeta):
    pass


class GalleryItemFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = None
    category: str | None = Field(None, max_length=50)
    date_taken: date | None = None


class GalleryItemCreate(GalleryItemFields):
    title: str = Field(min_length=1, max_length=255)
    image_url: str = Field(min_length=1)


class GalleryItemResponse(GalleryItemFields, RecordMeta):
    pass


class GalleryGroupFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    cover_image_url: str | None = None
    category: str | None = Field(None, max_length=50)
    date_taken: date | None = None
    display_order: int | None = None
    is_active: bool | None = None


class GalleryGroupCreate(GalleryGroupFields):
    title: str = Field(min_length=1, max_length=255)


class GalleryGroupResponse(GalleryGroupFields, RecordMeta):
    pass


class GalleryGroupSummary(GalleryGroupResponse):
    item_count: int = 0


class GroupGalleryItemFields(BaseModel):
    group_id: str | None = None
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = None
    alt_text: str | None = Field(None, max_length=500)
    display_order: int | None = None
    is_active: bool | None = None


class GroupGalleryItemCreate(GroupGalleryItemFields):
    group_id: str = Field(min_length=1)
    image_url: str = Field(min_length=1)


class GroupGalleryItemResponse(GroupGalleryItemFields, RecordMeta):
    pass


# =============================================================================
# Materials, people, facilities
# =============================================================================


class LearningMaterialFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    subject: str | None = Field(None, max_length=100)
    class_level: str | None = Field(None, max_length=50)
    file_type: str | None = Field(None, max_length=20)
    file_url: str | None = None
    file_size: str | None = Field(None, max_length=32)


class LearningMaterialCreate(LearningMaterialFields):
    title: str = Field(min_length=1, max_length=255)
    subject: str = Field(min_length=1, max_length=100)
    class_level: str = Field(min_length=1, max_length=50)
    file_type: str = Field(min_length=1, max_length=20)
    file_url: str = Field(min_length=1)


class LearningMaterialResponse(LearningMaterialFields, RecordMeta):
    downloads: int = 0


class StaffMemberFields(BaseModel):
    name: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    department: str | None = Field(None, max_length=255)
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    bio: str | None = None
    image_url: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class StaffMemberCreate(StaffMemberFields):
    name: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)


class StaffMemberResponse(StaffMemberFields, RecordMeta):
    pass


class FacilityFields(BaseModel):
    title: str | None = Field(None, max_length=255)
    description: str | None = None
    image_url: str | None = None
    display_order: int | None = None
    is_active: bool | None = None


class FacilityCreate(FacilityFields):
    title: str = Field(min_length=1, max_length=255)


class FacilityResponse(FacilityFields, RecordMeta):
    pass


class LeadershipMemberFields(BaseModel):
    name: str | None = Field(None, max_length=255)
    position: str | None = Field(None, max_length=255)
    bio: str | None = None
    qualifications: str | None = None
    email: str | None = Field(None, max_length=255)
    phone: str | None = Field(None, max_length=50)
    image_url: str | None = None
    display_order: int | None = None


class LeadershipMemberCreate(LeadershipMemberFields):
    name: str = Field(min_length=1, max_length=255)
    position: str = Field(min_length=1, max_length=255)


class LeadershipMemberResponse(LeadershipMemberFields, RecordMeta):
    pass


# =============================================================================
# Footer
# =============================================================================


class FooterLink(BaseModel):
    label: str
    url: str


class FooterLinksContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    items: list[FooterLink] = Field(default_factory=list)


class FooterContactContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    address: str = ""
    phone: str = ""
    email: str = ""


class SocialPlatform(BaseModel):
    name: str
    url: str
    icon: str


class FooterSocialContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    platforms: list[SocialPlatform] = Field(default_factory=list)


class FooterCustomContent(BaseModel):
    model_config = ConfigDict(extra="forbid")

    text: str = ""


FOOTER_CONTENT_MODELS: dict[str, type[BaseModel]] = {
    "links": FooterLinksContent,
    "contact": FooterContactContent,
    "social": FooterSocialContent,
    "custom": FooterCustomContent,
}


def normalize_footer_content(section_type: str, content: dict[str, Any]) -> dict[str, Any]:
    """Validate footer content against the shape of its section type.

    Missing keys take their defaults; keys belonging to another section
    type are rejected.

    Raises:
        KeyError: If the section type is unknown.
        pydantic.ValidationError: If the content does not match.
    """
    model = FOOTER_CONTENT_MODELS[section_type]
    return model.model_validate(content).model_dump()


class FooterSectionBase(BaseModel):
    title: str | None = Field(None, max_length=255)
    section_type: FooterSectionType | None = None
    content: dict[str, Any] | None = None
    display_order: int | None = None
    is_active: bool | None = None


class FooterSectionFields(FooterSectionBase):
    """Footer fields; content is checked here only when the type is also sent.

    Partial updates are merged with the stored row and checked by
    ContentService.update_footer_section.
    """

    @model_validator(mode="after")
    def check_content_shape(self) -> "FooterSectionFields":
        if self.section_type is not None and self.content is not None:
            self.content = normalize_footer_content(self.section_type, self.content)
        return self


class FooterSectionCreate(FooterSectionFields):
    title: str = Field(min_length=1, max_length=255)
    section_type: FooterSectionType


class FooterSectionResponse(FooterSectionBase, RecordMeta):
    pass


class FooterReorderRequest(BaseModel):
    section_ids: list[str] = Field(min_length=1, description="Footer section ids in display order")
