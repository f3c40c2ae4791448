# src/tribune/api/v1/endpoints/auth.py
"""Read-only identity endpoint."""

from fastapi import APIRouter

from tribune.api.v1.dependencies import CurrentUserDep
from tribune.schemas.user import AuthUser

router = APIRouter(prefix="/auth", tags=["authentication"])


@router.get("/user", response_model=AuthUser)
async def current_user(user: CurrentUserDep) -> AuthUser:
    """Return the ``{id, email}`` identity carried by the bearer token."""
    return user
