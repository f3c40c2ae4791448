"""Board facade wiring storage, identity, repository, mutations and feed."""

from __future__ import annotations

import logging
from datetime import datetime, timedelta

import httpx

from tribune.client.feed import FeedPresenter, FeedView
from tribune.client.identity import ANONYMOUS, AuthState, Identity, IdentityResolver
from tribune.client.mutations import MutationOrchestrator
from tribune.client.notifications import LoggingNotifier, Notifier
from tribune.client.repository import BoardRepository
from tribune.client.storage import JsonFileStore, KeyValueStore
from tribune.core.settings import Settings, settings as default_settings

logger = logging.getLogger(__name__)


class CommunityBoard:
    """Single entry point for a board session.

    The acting identity is resolved once in :meth:`open` (and again on
    :meth:`set_auth_state`) and injected into the orchestrator; nothing else
    reads the guest name from storage.
    """

    def __init__(
        self,
        repository: BoardRepository,
        resolver: IdentityResolver,
        orchestrator: MutationOrchestrator,
        presenter: FeedPresenter,
        auth_state: AuthState = ANONYMOUS,
    ) -> None:
        self.repository = repository
        self.resolver = resolver
        self.mutations = orchestrator
        self.presenter = presenter
        self.auth_state = auth_state

    @classmethod
    async def open(
        cls,
        config: Settings | None = None,
        *,
        store: KeyValueStore | None = None,
        notifier: Notifier | None = None,
        access_token: str | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> CommunityBoard:
        """Build a board from configuration and resolve the acting identity."""
        config = config or default_settings
        repository = BoardRepository(
            config.api_base_url,
            access_token=access_token,
            timeout_seconds=config.http_timeout_seconds,
            client=http_client,
        )
        resolver = IdentityResolver(
            store if store is not None else JsonFileStore(config.storage_path),
            profile_lookup=repository.fetch_profile,
            guest_prefix=config.guest_name_prefix,
            fallback_name=config.fallback_display_name,
        )
        auth_state = await repository.fetch_current_user()
        identity = await resolver.resolve(auth_state)
        logger.info("Board opened as %s", identity.display_name)
        orchestrator = MutationOrchestrator(
            repository,
            identity,
            notifier or LoggingNotifier(),
            max_image_bytes=config.max_image_bytes,
            anonymous_content_editable=config.anonymous_content_editable,
        )
        presenter = FeedPresenter(
            locale=config.locale,
            relative_window=timedelta(days=config.relative_time_days),
            anonymous_content_editable=config.anonymous_content_editable,
            guest_label=config.sidebar_guest_label,
        )
        return cls(repository, resolver, orchestrator, presenter, auth_state)

    @property
    def identity(self) -> Identity:
        return self.mutations.identity

    async def set_auth_state(self, auth_state: AuthState, access_token: str | None = None) -> Identity:
        """Re-resolve the acting identity after a sign-in or sign-out."""
        self.repository.set_access_token(access_token)
        self.auth_state = auth_state
        self.mutations.identity = await self.resolver.resolve(auth_state)
        return self.mutations.identity

    async def refresh(self) -> None:
        """Load the feed if it is not cached."""
        await self.repository.feed()

    async def view(self, now: datetime | None = None) -> FeedView:
        """Return the current feed projected for the acting identity."""
        posts = await self.repository.feed()
        return self.presenter.build(
            posts,
            self.identity,
            now,
            editing_id=self.mutations.editing_id,
        )

    async def close(self) -> None:
        await self.repository.close()

    async def __aenter__(self) -> CommunityBoard:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()
