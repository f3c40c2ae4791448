"""Bearer token helpers for the identity endpoint."""
from __future__ import annotations

from datetime import timedelta
from typing import Any

from jose import JWTError, jwt

from tribune.core.settings import settings
from tribune.db.time import utcnow


class InvalidTokenError(ValueError):
    """Raised when a bearer token cannot be decoded or lacks a subject."""


def create_access_token(user_id: str, email: str | None = None) -> str:
    """Issue a signed access token for the given account.

    Args:
        user_id: Account identifier stored in the ``sub`` claim.
        email: Optional account email carried alongside the subject.

    Returns:
        Encoded JWT string.
    """
    expires = utcnow() + timedelta(minutes=settings.access_token_expire_minutes)
    claims: dict[str, Any] = {"sub": user_id, "exp": expires}
    if email is not None:
        claims["email"] = email
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Decode a token and return its claims.

    Raises:
        InvalidTokenError: If the signature, expiry or subject is invalid.
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as err:
        raise InvalidTokenError("Could not validate credentials") from err
    if not payload.get("sub"):
        raise InvalidTokenError("Could not validate credentials")
    return payload
