# src/tribune/api/v1/endpoints/comments.py
"""Table endpoints for ``chat_comments``."""

import logging

from fastapi import APIRouter, HTTPException, Response, status

from tribune.api.v1.dependencies import RepositoryDep
from tribune.models import ChatComment
from tribune.schemas.post import CommentInsert, CommentRow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/chat_comments", tags=["comments"])


@router.post("", response_model=CommentRow, status_code=status.HTTP_201_CREATED)
async def insert_comment(payload: CommentInsert, repo: RepositoryDep) -> ChatComment:
    """Insert a comment under an existing post."""
    if repo.get_by_id(payload.post_id) is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Post not found")
    comment = repo.add_comment(
        post_id=payload.post_id,
        content=payload.content,
        user_name=payload.user_name,
        user_id=payload.user_id,
    )
    logger.info("Inserted comment %s on post %s", comment.id, comment.post_id)
    return comment


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(comment_id: str, repo: RepositoryDep) -> Response:
    """Hard delete a comment."""
    comment = repo.get_comment(comment_id)
    if comment is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Comment not found")
    repo.delete_comment(comment)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
