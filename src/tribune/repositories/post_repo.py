"""Data access helpers for working with posts, comments and profiles."""
from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from tribune.models import ChatComment, ChatPost, Profile

__all__ = ["PostRepository"]


class PostRepository:
    """Thin wrapper around database access for board entities."""

    def __init__(self, session: Session) -> None:
        """Initialize the repository with a SQLAlchemy session."""
        self.session = session

    def get_by_id(self, post_id: str) -> ChatPost | None:
        """Return a post (with comments loaded) by identifier."""
        result = self.session.execute(
            select(ChatPost)
            .options(selectinload(ChatPost.chat_comments))
            .where(ChatPost.id == post_id)
        )
        return result.scalars().first()

    def list_with_comments(self, *, ascending: bool = False) -> list[ChatPost]:
        """Return every post with nested comments ordered by creation time."""
        order = ChatPost.created_at.asc() if ascending else ChatPost.created_at.desc()
        result = self.session.execute(
            select(ChatPost).options(selectinload(ChatPost.chat_comments)).order_by(order)
        )
        return list(result.scalars())

    def create(
        self,
        *,
        title: str,
        content: str,
        image_url: str | None,
        user_name: str,
        user_id: str | None,
    ) -> ChatPost:
        """Insert a new post with zeroed reaction counters."""
        post = ChatPost(
            title=title,
            content=content,
            image_url=image_url,
            user_name=user_name,
            user_id=user_id,
            likes=0,
            dislikes=0,
        )
        self.session.add(post)
        self.session.commit()
        self.session.refresh(post)
        return post

    def update(self, post: ChatPost, values: dict[str, Any]) -> ChatPost:
        """Apply column values to a post and persist them."""
        for column, value in values.items():
            setattr(post, column, value)
        self.session.commit()
        self.session.refresh(post)
        return post

    def delete(self, post: ChatPost) -> None:
        """Hard delete a post; its comments go with it."""
        self.session.delete(post)
        self.session.commit()

    def get_comment(self, comment_id: str) -> ChatComment | None:
        """Return a comment by identifier."""
        return self.session.get(ChatComment, comment_id)

    def add_comment(
        self,
        *,
        post_id: str,
        content: str,
        user_name: str,
        user_id: str | None,
    ) -> ChatComment:
        """Insert a comment under an existing post."""
        comment = ChatComment(
            post_id=post_id,
            content=content,
            user_name=user_name,
            user_id=user_id,
        )
        self.session.add(comment)
        self.session.commit()
        self.session.refresh(comment)
        return comment

    def delete_comment(self, comment: ChatComment) -> None:
        """Hard delete a single comment."""
        self.session.delete(comment)
        self.session.commit()

    def get_profile(self, user_id: str) -> Profile | None:
        """Return the profile for an account, if one has been created."""
        return self.session.get(Profile, user_id)

    def upsert_profile(self, user_id: str, full_name: str | None) -> Profile:
        """Create or replace the profile of an account."""
        profile = self.session.get(Profile, user_id)
        if profile is None:
            profile = Profile(user_id=user_id, full_name=full_name)
            self.session.add(profile)
        else:
            profile.full_name = full_name
        self.session.commit()
        self.session.refresh(profile)
        return profile
