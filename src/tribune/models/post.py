# src/tribune/models/post.py
"""SQLAlchemy models for board posts and their comments."""

from __future__ import annotations

import uuid
from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tribune.db.session import Base
from tribune.db.time import utcnow


def _new_id() -> str:
    return str(uuid.uuid4())


class ChatPost(Base):
    """Top-level discussion topic.

    ``user_name`` is a snapshot of the author's display identity at creation
    time; ``user_id`` is null for guest authors.
    """

    __tablename__ = "chat_posts"
    __table_args__ = (
        CheckConstraint("likes >= 0", name="ck_chat_posts_likes"),
        CheckConstraint("dislikes >= 0", name="ck_chat_posts_dislikes"),
        Index("ix_chat_posts_created_at", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Inline data URI or remote URL.
    image_url: Mapped[str | None] = mapped_column(Text, nullable=True)
    user_name: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True, index=True)
    likes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    dislikes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    # No ordering here: clients sort comments themselves.
    chat_comments: Mapped[list[ChatComment]] = relationship(
        "ChatComment",
        back_populates="post",
        cascade="all, delete-orphan",
    )


class ChatComment(Base):
    """Reply attached to exactly one post."""

    __tablename__ = "chat_comments"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    post_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("chat_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    user_name: Mapped[str] = mapped_column(Text, nullable=False)
    user_id: Mapped[str | None] = mapped_column(String(64), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )

    post: Mapped[ChatPost] = relationship("ChatPost", back_populates="chat_comments")
