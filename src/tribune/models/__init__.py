# src/tribune/models/__init__.py
"""SQLAlchemy models for the Tribune table store."""

from .post import ChatComment, ChatPost
from .profile import Profile

__all__ = ["ChatComment", "ChatPost", "Profile"]
