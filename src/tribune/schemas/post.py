# src/tribune/schemas/post.py
"""Post and comment Pydantic schemas shared by the store and the client."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tribune.db.time import ensure_aware

ReactionKind = Literal["likes", "dislikes"]


class CommentRow(BaseModel):
    """Comment as returned by the table store."""

    id: str
    post_id: str
    content: str
    user_name: str
    user_id: str | None = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at")
    @classmethod
    def _aware_timestamp(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class PostRow(BaseModel):
    """Post with its nested comments, as returned by the table store."""

    id: str
    title: str
    content: str
    image_url: str | None = None
    user_name: str
    user_id: str | None = None
    likes: int = Field(0, ge=0)
    dislikes: int = Field(0, ge=0)
    created_at: datetime
    updated_at: datetime
    chat_comments: list[CommentRow] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)

    @field_validator("created_at", "updated_at")
    @classmethod
    def _aware_timestamps(cls, value: datetime) -> datetime:
        return ensure_aware(value)


class PostInsert(BaseModel):
    """Row inserted into ``chat_posts``."""

    title: str = Field(..., min_length=1, description="Topic title")
    content: str = Field(..., min_length=1, description="Body text, newlines preserved")
    image_url: str | None = Field(None, description="Inline data URI or remote URL")
    user_name: str = Field(..., min_length=1, description="Author display name snapshot")
    user_id: str | None = Field(None, description="Owning account, null for guests")


class PostPatch(BaseModel):
    """Partial update of a ``chat_posts`` row; only supplied columns change."""

    title: str | None = Field(None, min_length=1)
    content: str | None = Field(None, min_length=1)
    image_url: str | None = None
    likes: int | None = Field(None, ge=0)
    dislikes: int | None = Field(None, ge=0)
    updated_at: datetime | None = None


class CommentInsert(BaseModel):
    """Row inserted into ``chat_comments``."""

    post_id: str
    content: str = Field(..., min_length=1)
    user_name: str = Field(..., min_length=1)
    user_id: str | None = None
