"""Acting-user identity resolution.

Authenticated users are named after their profile, falling back to the local
part of their email and then to a fixed label. Guests get a randomly
numbered name that is generated once and persisted in durable storage, so
every post and comment from the same profile carries the same name.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from tribune.client.errors import RepositoryError
from tribune.client.storage import KeyValueStore

logger = logging.getLogger(__name__)

GUEST_NAME_KEY = "communication_user_name"

ProfileLookup = Callable[[str], Awaitable[str | None]]


@dataclass(frozen=True)
class AuthUser:
    """Account identity as reported by the identity provider."""

    id: str
    email: str | None = None


@dataclass(frozen=True)
class AuthState:
    """Current authentication state; ``user`` is None for guests."""

    user: AuthUser | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


ANONYMOUS = AuthState()


@dataclass(frozen=True)
class Identity:
    """Display identity used to attribute posts and comments."""

    display_name: str
    user_id: str | None

    @property
    def initial(self) -> str:
        return self.display_name[:1].upper() or "U"


def can_modify(
    owner_id: str | None,
    actor_id: str | None,
    *,
    anonymous_editable: bool = True,
) -> bool:
    """Return True when the actor may edit or delete content owned by ``owner_id``.

    Content without an owner was written by a guest and, unless
    ``anonymous_editable`` is turned off, is open to every actor.
    """
    if owner_id is None:
        return anonymous_editable
    return actor_id is not None and owner_id == actor_id


class IdentityResolver:
    """Resolve the acting user's display identity."""

    def __init__(
        self,
        store: KeyValueStore,
        *,
        profile_lookup: ProfileLookup | None = None,
        guest_prefix: str = "Fan de Foot",
        fallback_name: str = "Anonyme",
        rng: random.Random | None = None,
    ) -> None:
        self._store = store
        self._profile_lookup = profile_lookup
        self._guest_prefix = guest_prefix
        self._fallback_name = fallback_name
        self._rng = rng or random.Random()

    def get_or_create_guest_name(self) -> str:
        """Return the persisted guest name, creating and storing one if absent."""
        name = self._store.get(GUEST_NAME_KEY)
        if not name:
            name = f"{self._guest_prefix} {self._rng.randrange(1000)}"
            self._store.set(GUEST_NAME_KEY, name)
            logger.debug("Generated guest name %r", name)
        return name

    async def _profile_name(self, user_id: str) -> str | None:
        if self._profile_lookup is None:
            return None
        try:
            return await self._profile_lookup(user_id)
        except RepositoryError as exc:
            # The profile row may not exist yet right after sign-up.
            logger.warning("Profile lookup for %s failed: %s", user_id, exc)
            return None

    async def resolve(self, auth_state: AuthState) -> Identity:
        """Return the display identity for the given authentication state."""
        user = auth_state.user
        if user is None:
            return Identity(display_name=self.get_or_create_guest_name(), user_id=None)

        full_name = await self._profile_name(user.id)
        if full_name:
            return Identity(display_name=full_name, user_id=user.id)

        handle = (user.email or "").split("@", 1)[0]
        return Identity(display_name=handle or self._fallback_name, user_id=user.id)
