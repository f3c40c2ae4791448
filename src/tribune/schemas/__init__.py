"""
Pydantic schemas for table store rows and payloads.

These schemas are shared by the store endpoints and the board client.
"""

from .post import CommentInsert, CommentRow, PostInsert, PostPatch, PostRow, ReactionKind
from .user import AuthUser, ProfileRow, ProfileUpsert

__all__ = [
    "CommentInsert", "CommentRow",
    "PostInsert", "PostPatch", "PostRow",
    "ReactionKind",
    "AuthUser", "ProfileRow", "ProfileUpsert",
]
