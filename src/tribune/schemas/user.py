# src/tribune/schemas/user.py
"""Identity and profile Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class ProfileRow(BaseModel):
    """Profile as returned by the table store."""

    user_id: str
    full_name: str | None = None

    model_config = ConfigDict(from_attributes=True)


class ProfileUpsert(BaseModel):
    """Payload for creating or replacing a profile."""

    full_name: str | None = None


class AuthUser(BaseModel):
    """Account identity reported by the identity endpoint."""

    id: str
    email: str | None = None
