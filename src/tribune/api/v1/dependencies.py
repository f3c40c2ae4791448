"""Shared API dependencies for authentication and data access."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from tribune.core.security import InvalidTokenError, decode_access_token
from tribune.db.session import get_db
from tribune.repositories.post_repo import PostRepository
from tribune.schemas.user import AuthUser

# HTTP Bearer scheme for JWT authentication
bearer_scheme = HTTPBearer()

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_repository(db: SessionDep) -> PostRepository:
    """Return a repository bound to the request session."""
    return PostRepository(db)


RepositoryDep = Annotated[PostRepository, Depends(get_repository)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials, Depends(bearer_scheme)],
) -> AuthUser:
    """Get the account identity carried by the bearer token.

    Raises:
        HTTPException: If the token is invalid or expired.
    """
    try:
        payload = decode_access_token(credentials.credentials)
    except InvalidTokenError as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err
    return AuthUser(id=str(payload["sub"]), email=payload.get("email"))


# Type alias for current user dependency
CurrentUserDep = Annotated[AuthUser, Depends(get_current_user)]
