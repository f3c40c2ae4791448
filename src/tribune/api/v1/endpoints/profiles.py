# src/tribune/api/v1/endpoints/profiles.py
"""Table endpoints for ``profiles``."""

from fastapi import APIRouter, HTTPException, status

from tribune.api.v1.dependencies import CurrentUserDep, RepositoryDep
from tribune.models import Profile
from tribune.schemas.user import ProfileRow, ProfileUpsert

router = APIRouter(prefix="/profiles", tags=["profiles"])


@router.get("/{user_id}", response_model=ProfileRow)
async def get_profile(user_id: str, repo: RepositoryDep) -> Profile:
    """Return the profile of an account."""
    profile = repo.get_profile(user_id)
    if profile is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found")
    return profile


@router.put("/me", response_model=ProfileRow)
async def put_own_profile(
    payload: ProfileUpsert,
    current_user: CurrentUserDep,
    repo: RepositoryDep,
) -> Profile:
    """Create or replace the caller's own profile."""
    return repo.upsert_profile(current_user.id, payload.full_name)
