# src/tribune/api/v1/endpoints/posts.py
"""Table endpoints for ``chat_posts``."""

import logging
from typing import Literal

from fastapi import APIRouter, HTTPException, Query, Response, status

from tribune.api.v1.dependencies import RepositoryDep
from tribune.db.time import utcnow
from tribune.models import ChatPost
from tribune.repositories.post_repo import PostRepository
from tribune.schemas.post import PostInsert, PostPatch, PostRow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat_posts", tags=["posts"])


def _get_post_or_404(repo: PostRepository, post_id: str) -> ChatPost:
    post = repo.get_by_id(post_id)
    if post is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    return post


@router.get("", response_model=list[PostRow])
async def list_posts(
    repo: RepositoryDep,
    order: Literal["created_at.desc", "created_at.asc"] = Query(
        "created_at.desc", description="Sort order on creation time"
    ),
) -> list[ChatPost]:
    """Return every post joined to its comments.

    Comments are returned in storage order; clients sort them.
    """
    return repo.list_with_comments(ascending=order == "created_at.asc")


@router.get("/{post_id}", response_model=PostRow)
async def get_post(post_id: str, repo: RepositoryDep) -> ChatPost:
    """Return a single post with its comments."""
    return _get_post_or_404(repo, post_id)


@router.post("", response_model=PostRow, status_code=status.HTTP_201_CREATED)
async def insert_post(payload: PostInsert, repo: RepositoryDep) -> ChatPost:
    """Insert a post row; counters always start at zero."""
    post = repo.create(
        title=payload.title,
        content=payload.content,
        image_url=payload.image_url,
        user_name=payload.user_name,
        user_id=payload.user_id,
    )
    logger.info("Inserted post %s by %s", post.id, post.user_name)
    return post


@router.patch("/{post_id}", response_model=PostRow)
async def update_post(post_id: str, payload: PostPatch, repo: RepositoryDep) -> ChatPost:
    """Update the supplied columns of a post.

    Owner and author name are not patchable.
    """
    post = _get_post_or_404(repo, post_id)
    values = payload.model_dump(exclude_unset=True)
    for column in ("title", "content", "likes", "dislikes"):
        if column in values and values[column] is None:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail=f"Column {column} cannot be null",
            )
    if values.get("updated_at") is None:
        values["updated_at"] = utcnow()
    return repo.update(post, values)


@router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(post_id: str, repo: RepositoryDep) -> Response:
    """Hard delete a post and its comments."""
    post = _get_post_or_404(repo, post_id)
    repo.delete(post)
    logger.info("Deleted post %s", post_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
