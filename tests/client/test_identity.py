# tests/client/test_identity.py
"""Tests for identity resolution and the ownership gate."""

import random
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from tribune.client.errors import RepositoryError
from tribune.client.identity import (
    GUEST_NAME_KEY,
    AuthState,
    AuthUser,
    IdentityResolver,
    can_modify,
)
from tribune.client.storage import JsonFileStore, MemoryStore


class TestGuestIdentity:
    """Guests get a generated, persisted name."""

    @pytest.mark.asyncio
    async def test_generates_and_persists_name(self) -> None:
        store = MemoryStore()
        resolver = IdentityResolver(store, rng=random.Random(7))

        identity = await resolver.resolve(AuthState())

        assert identity.user_id is None
        assert identity.display_name.startswith("Fan de Foot ")
        number = int(identity.display_name.rsplit(" ", 1)[1])
        assert 0 <= number < 1000
        assert store.get(GUEST_NAME_KEY) == identity.display_name

    @pytest.mark.asyncio
    async def test_resolving_twice_is_idempotent(self) -> None:
        resolver = IdentityResolver(MemoryStore())
        first = await resolver.resolve(AuthState())
        second = await resolver.resolve(AuthState())
        assert first == second

    @pytest.mark.asyncio
    async def test_reuses_stored_name(self, guest_store: MemoryStore) -> None:
        identity = await IdentityResolver(guest_store).resolve(AuthState())
        assert identity.display_name == "Fan de Foot 42"

    @pytest.mark.asyncio
    async def test_name_survives_new_session(self, tmp_path: Path) -> None:
        path = tmp_path / "profile" / "storage.json"
        first = await IdentityResolver(JsonFileStore(path)).resolve(AuthState())
        second = await IdentityResolver(JsonFileStore(path)).resolve(AuthState())
        assert first.display_name == second.display_name

    @pytest.mark.asyncio
    async def test_cleared_storage_yields_new_name(self) -> None:
        store = MemoryStore()
        resolver = IdentityResolver(store, rng=random.Random(1))
        await resolver.resolve(AuthState())
        store.delete(GUEST_NAME_KEY)
        assert store.get(GUEST_NAME_KEY) is None
        await resolver.resolve(AuthState())
        assert store.get(GUEST_NAME_KEY) is not None

    def test_custom_prefix(self) -> None:
        resolver = IdentityResolver(MemoryStore(), guest_prefix="Supporter")
        assert resolver.get_or_create_guest_name().startswith("Supporter ")


class TestAuthenticatedIdentity:
    """Members are named after their profile, then their email."""

    @pytest.mark.asyncio
    async def test_profile_full_name(self) -> None:
        lookup = AsyncMock(return_value="Awa Diop")
        resolver = IdentityResolver(MemoryStore(), profile_lookup=lookup)

        identity = await resolver.resolve(AuthState(AuthUser("user-awa", "awa@example.com")))

        assert identity.display_name == "Awa Diop"
        assert identity.user_id == "user-awa"
        lookup.assert_awaited_once_with("user-awa")

    @pytest.mark.asyncio
    async def test_email_handle_when_no_profile(self) -> None:
        resolver = IdentityResolver(MemoryStore(), profile_lookup=AsyncMock(return_value=None))
        identity = await resolver.resolve(AuthState(AuthUser("user-awa", "awa.diop@example.com")))
        assert identity.display_name == "awa.diop"

    @pytest.mark.asyncio
    async def test_fallback_label_without_email(self) -> None:
        resolver = IdentityResolver(MemoryStore(), profile_lookup=AsyncMock(return_value=None))
        identity = await resolver.resolve(AuthState(AuthUser("user-awa")))
        assert identity.display_name == "Anonyme"
        assert identity.user_id == "user-awa"

    @pytest.mark.asyncio
    async def test_failing_lookup_falls_back(self) -> None:
        lookup = AsyncMock(side_effect=RepositoryError("boom", status_code=500))
        resolver = IdentityResolver(MemoryStore(), profile_lookup=lookup)
        identity = await resolver.resolve(AuthState(AuthUser("user-awa", "awa@example.com")))
        assert identity.display_name == "awa"

    @pytest.mark.asyncio
    async def test_members_do_not_touch_guest_storage(self) -> None:
        store = MemoryStore()
        resolver = IdentityResolver(store, profile_lookup=AsyncMock(return_value="Awa"))
        await resolver.resolve(AuthState(AuthUser("user-awa")))
        assert store.get(GUEST_NAME_KEY) is None


class TestOwnershipGate:
    def test_owner_may_modify(self) -> None:
        assert can_modify("user-awa", "user-awa")

    def test_other_member_may_not_modify(self) -> None:
        assert not can_modify("user-awa", "user-moussa")

    def test_guest_may_not_modify_member_content(self) -> None:
        assert not can_modify("user-awa", None)

    def test_ownerless_content_is_open_to_everyone(self) -> None:
        assert can_modify(None, "user-moussa")
        assert can_modify(None, None)

    def test_ownerless_content_can_be_closed(self) -> None:
        assert not can_modify(None, "user-moussa", anonymous_editable=False)


def test_json_store_tolerates_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "storage.json"
    path.write_text("{not json", encoding="utf-8")
    store = JsonFileStore(path)
    assert store.get(GUEST_NAME_KEY) is None
    store.set(GUEST_NAME_KEY, "Fan de Foot 3")
    assert JsonFileStore(path).get(GUEST_NAME_KEY) == "Fan de Foot 3"
