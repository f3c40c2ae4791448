"""create board tables

Revision ID: 3f1c2a9d7e10
Revises:
Create Date: 2026-10-19 09:12:40.512204

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7e10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create posts, comments and profiles."""
    op.create_table(
        "chat_posts",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("user_name", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("likes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("dislikes", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("likes >= 0", name="ck_chat_posts_likes"),
        sa.CheckConstraint("dislikes >= 0", name="ck_chat_posts_dislikes"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_posts_created_at", "chat_posts", ["created_at"])
    op.create_index("ix_chat_posts_user_id", "chat_posts", ["user_id"])

    op.create_table(
        "chat_comments",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("post_id", sa.String(length=36), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("user_name", sa.Text(), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["post_id"], ["chat_posts.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_chat_comments_post_id", "chat_comments", ["post_id"])

    op.create_table(
        "profiles",
        sa.Column("user_id", sa.String(length=64), nullable=False),
        sa.Column("full_name", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Drop the board tables."""
    op.drop_table("profiles")
    op.drop_index("ix_chat_comments_post_id", table_name="chat_comments")
    op.drop_table("chat_comments")
    op.drop_index("ix_chat_posts_user_id", table_name="chat_posts")
    op.drop_index("ix_chat_posts_created_at", table_name="chat_posts")
    op.drop_table("chat_posts")
