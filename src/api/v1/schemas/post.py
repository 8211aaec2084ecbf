"""Pydantic schemas for Post API."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class PostCreate(BaseModel):
    """Schema for creating a Post."""

    text: str = Field(..., min_length=1, max_length=5000)


class CommentCreate(BaseModel):
    """Schema for commenting on a Post."""

    text: str = Field(..., min_length=1, max_length=2000)


class LikeResponse(BaseModel):
    """Schema for a like."""

    model_config = ConfigDict(from_attributes=True)

    user_id: UUID


class CommentResponse(BaseModel):
    """Schema for a comment."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    created_at: datetime


class PostResponse(BaseModel):
    """Schema for Post response."""

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "123e4567-e89b-12d3-a456-426614174000",
                "user_id": "456e4567-e89b-12d3-a456-426614174000",
                "text": "Hello developers",
                "name": "Jane",
                "avatar": None,
                "likes": [{"user_id": "789e4567-e89b-12d3-a456-426614174000"}],
                "comments": [],
                "created_at": "2026-01-28T10:00:00",
                "version": 1,
            }
        },
    )

    id: UUID
    user_id: UUID
    text: str
    name: str
    avatar: str | None = None
    likes: list[LikeResponse] = []
    comments: list[CommentResponse] = []
    created_at: datetime
    version: int


class PostListResponse(BaseModel):
    """Schema for list of Posts."""

    data: list[PostResponse]


class PostDetailResponse(BaseModel):
    """Schema for single Post."""

    data: PostResponse


class LikeListResponse(BaseModel):
    """Likes of a post after a toggle."""

    data: list[LikeResponse]


class CommentListResponse(BaseModel):
    """Comments of a post, newest first."""

    data: list[CommentResponse]
