# src/tribune/models/profile.py
"""Profile records keyed by authenticated account id."""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tribune.db.session import Base


class Profile(Base):
    """Public profile of an authenticated account."""

    __tablename__ = "profiles"

    user_id: Mapped[str] = mapped_column(String(64), primary_key=True)
    full_name: Mapped[str | None] = mapped_column(Text, nullable=True)
