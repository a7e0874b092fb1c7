"""Pydantic schemas for Profile API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from domain.entities.profile import Profile, ProfilePage


class ProfileCreate(BaseModel):
    """Schema for creating a Profile.

    Field rules are enforced by the domain validator so that every
    violation is reported with its own error code.
    """

    name: str | None = None
    email: str | None = None


class ProfileUpdate(ProfileCreate):
    """Schema for replacing a Profile's name and email."""

    id: UUID | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "name": "John Doe",
                "email": "john@example.com",
                "created_at": "2026-01-28T10:00:00Z",
                "updated_at": None,
            }
        },
    )

    id: UUID
    name: str
    email: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_entity(cls, profile: Profile) -> "ProfileResponse":
        return cls.model_validate(profile)


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ProfileListResponse(BaseModel):
    """Schema for a page of Profiles."""

    data: list[ProfileResponse]
    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_page(cls, page: ProfilePage) -> "ProfileListResponse":
        return cls(
            data=[ProfileResponse.from_entity(p) for p in page.items],
            page=page.page,
            page_size=page.page_size,
            total_count=page.total_count,
            total_pages=page.total_pages,
            has_next_page=page.has_next_page,
            has_previous_page=page.has_previous_page,
        )
