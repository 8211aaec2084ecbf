"""Pydantic schemas for Profile API."""

from datetime import date, datetime
from uuid import UUID

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class ProfileUpsert(BaseModel):
    """Schema for creating or updating the caller's profile.

    ``skills`` may be sent as a comma-separated string or a list.
    """

    status: str = Field(..., min_length=1, max_length=100)
    skills: str | list[str]
    company: str | None = Field(None, max_length=255)
    website: str | None = Field(None, max_length=500)
    location: str | None = Field(None, max_length=255)
    bio: str | None = None
    github_username: str | None = Field(None, max_length=100)
    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None

    @field_validator("skills")
    @classmethod
    def validate_skills(cls, v: str | list[str]) -> str | list[str]:
        items = v.split(",") if isinstance(v, str) else v
        if not any(item.strip() for item in items):
            raise ValueError("Skills is required")
        return v


class ExperienceCreate(BaseModel):
    """Schema for adding an experience entry."""

    title: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    location: str | None = None
    from_date: date = Field(..., validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None


class EducationCreate(BaseModel):
    """Schema for adding an education entry."""

    school: str = Field(..., min_length=1, max_length=255)
    degree: str = Field(..., min_length=1, max_length=255)
    field_of_study: str = Field(
        ...,
        min_length=1,
        max_length=255,
        validation_alias=AliasChoices("fieldofstudy", "field_of_study"),
    )
    from_date: date = Field(..., validation_alias=AliasChoices("from", "from_date"))
    to_date: date | None = Field(None, validation_alias=AliasChoices("to", "to_date"))
    current: bool = False
    description: str | None = None


class SocialLinksResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    youtube: str | None = None
    twitter: str | None = None
    facebook: str | None = None
    linkedin: str | None = None
    instagram: str | None = None


class ExperienceResponse(BaseModel):
    """Schema for an experience entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    title: str
    company: str
    location: str | None = None
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class EducationResponse(BaseModel):
    """Schema for an education entry."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: UUID
    school: str
    degree: str
    field_of_study: str
    from_date: date = Field(alias="from")
    to_date: date | None = Field(None, alias="to")
    current: bool
    description: str | None = None


class ProfileResponse(BaseModel):
    """Schema for Profile response."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    company: str | None = None
    website: str | None = None
    location: str | None = None
    status: str | None = None
    bio: str | None = None
    github_username: str | None = None
    skills: list[str] = []
    social: SocialLinksResponse
    experience: list[ExperienceResponse] = []
    education: list[EducationResponse] = []
    created_at: datetime
    updated_at: datetime
    version: int


class ProfileListResponse(BaseModel):
    """Schema for list of Profiles."""

    data: list[ProfileResponse]


class ProfileDetailResponse(BaseModel):
    """Schema for single Profile."""

    data: ProfileResponse


class ExperienceListResponse(BaseModel):
    """Experience entries of a profile, newest first."""

    data: list[ExperienceResponse]


class EducationListResponse(BaseModel):
    """Education entries of a profile, newest first."""

    data: list[EducationResponse]


class AccountDeletionResponse(BaseModel):
    """Result of deleting the caller's account."""

    message: str
    posts_deleted: int
