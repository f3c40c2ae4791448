"""HTTP client for the board's table store.

Every call is a plain request/response round trip. Reads of the feed go
through a :class:`QueryCache`; every successful write invalidates the feed
key so the next read refetches. There is no optimistic patching: until the
refetch completes, callers see the previous list.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable, Mapping
from typing import Any, get_args

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as SchemaValidationError

from tribune.client.cache import QueryCache, QueryKey
from tribune.client.errors import RepositoryError
from tribune.client.identity import AuthState, AuthUser
from tribune.db.time import utcnow
from tribune.schemas.post import CommentRow, PostRow, ReactionKind

logger = logging.getLogger(__name__)

FEED_QUERY_KEY: QueryKey = ("chat_posts",)

HTTP_NOT_FOUND = 404
HTTP_UNAUTHORIZED = 401

_POST_LIST = TypeAdapter(list[PostRow])
REACTION_KINDS: tuple[str, ...] = get_args(ReactionKind)


def sort_comments(comments: Iterable[CommentRow]) -> list[CommentRow]:
    """Return comments ordered oldest first, whatever order they arrived in."""
    return sorted(comments, key=lambda comment: comment.created_at)


def _with_sorted_comments(post: PostRow) -> PostRow:
    return post.model_copy(update={"chat_comments": sort_comments(post.chat_comments)})


def _error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        payload = None
    detail = payload.get("detail") if isinstance(payload, dict) else None
    if isinstance(detail, str) and detail:
        return detail
    if isinstance(detail, list):
        messages = [str(item.get("msg", item)) if isinstance(item, dict) else str(item) for item in detail]
        if messages:
            return "; ".join(messages)
    return response.text or response.reason_phrase or f"HTTP {response.status_code}"


class BoardRepository:
    """Async client for posts, comments and profiles."""

    def __init__(
        self,
        base_url: str,
        *,
        access_token: str | None = None,
        timeout_seconds: float | None = None,
        client: httpx.AsyncClient | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.cache = cache or QueryCache()
        self._access_token = access_token
        self._timeout_seconds = timeout_seconds
        self._client = client
        self._owns_client = client is None
        self._client_lock = asyncio.Lock()

    async def __aenter__(self) -> BoardRepository:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    def set_access_token(self, token: str | None) -> None:
        """Swap the bearer token used for identity requests."""
        self._access_token = token

    async def _ensure_client(self) -> httpx.AsyncClient:
        async with self._client_lock:
            if self._client is None:
                self._client = httpx.AsyncClient(
                    base_url=self.base_url,
                    timeout=httpx.Timeout(self._timeout_seconds),
                )
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self._access_token:
            headers["Authorization"] = f"Bearer {self._access_token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json_data: Any | None = None,
        params: Mapping[str, Any] | None = None,
    ) -> httpx.Response:
        client = await self._ensure_client()
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await client.request(
                method,
                url,
                json=json_data,
                params=params,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            raise RepositoryError(f"Request to table store failed: {exc}") from exc

        if response.is_error:
            message = _error_message(response)
            logger.debug("%s %s -> %s %s", method, url, response.status_code, message)
            raise RepositoryError(message, status_code=response.status_code)
        return response

    def invalidate_feed(self) -> None:
        self.cache.invalidate(FEED_QUERY_KEY)

    # Reads

    async def list_posts(self) -> list[PostRow]:
        """Fetch all posts, newest first, each with comments oldest first."""
        response = await self._request(
            "GET", "/chat_posts", params={"order": "created_at.desc"}
        )
        try:
            posts = _POST_LIST.validate_python(response.json())
        except (ValueError, SchemaValidationError) as exc:
            raise RepositoryError(f"Malformed post list: {exc}") from exc
        return [_with_sorted_comments(post) for post in posts]

    async def feed(self) -> list[PostRow]:
        """Return the cached feed, refetching it if it has been invalidated."""
        return await self.cache.fetch(FEED_QUERY_KEY, self.list_posts)

    def cached_feed(self) -> list[PostRow] | None:
        return self.cache.get(FEED_QUERY_KEY)

    async def get_post(self, post_id: str) -> PostRow:
        response = await self._request("GET", f"/chat_posts/{post_id}")
        return _with_sorted_comments(PostRow.model_validate(response.json()))

    async def fetch_profile(self, user_id: str) -> str | None:
        """Return the profile's full name, or None when no profile exists."""
        try:
            response = await self._request("GET", f"/profiles/{user_id}")
        except RepositoryError as exc:
            if exc.status_code == HTTP_NOT_FOUND:
                return None
            raise
        return response.json().get("full_name")

    async def fetch_current_user(self) -> AuthState:
        """Return the identity carried by the access token, if any.

        Any failure, a rejected token included, leaves the caller a guest.
        """
        if not self._access_token:
            return AuthState()
        try:
            response = await self._request("GET", "/auth/user")
        except RepositoryError as exc:
            if exc.status_code == HTTP_UNAUTHORIZED:
                logger.warning("Access token rejected; continuing as guest")
            else:
                logger.warning("Identity lookup failed (%s); continuing as guest", exc)
            return AuthState()
        payload = response.json()
        return AuthState(user=AuthUser(id=str(payload["id"]), email=payload.get("email")))

    # Writes

    async def create_post(
        self,
        *,
        title: str,
        content: str,
        image_url: str | None,
        author_name: str,
        author_id: str | None,
    ) -> None:
        await self._request(
            "POST",
            "/chat_posts",
            json_data={
                "title": title,
                "content": content,
                "image_url": image_url,
                "user_name": author_name,
                "user_id": author_id,
            },
        )
        self.invalidate_feed()

    async def update_post(
        self,
        post_id: str,
        *,
        title: str,
        content: str,
        image_url: str | None,
    ) -> None:
        """Replace the editable fields of a post; counters and owner are untouched."""
        await self._request(
            "PATCH",
            f"/chat_posts/{post_id}",
            json_data={
                "title": title,
                "content": content,
                "image_url": image_url,
                "updated_at": utcnow().isoformat(),
            },
        )
        self.invalidate_feed()

    async def delete_post(self, post_id: str) -> None:
        await self._request("DELETE", f"/chat_posts/{post_id}")
        self.invalidate_feed()

    async def react(self, post_id: str, kind: ReactionKind) -> None:
        """Increment a reaction counter by reading it and writing it back.

        Two clients reacting at the same moment can both read the same count,
        in which case one increment is lost.
        """
        if kind not in REACTION_KINDS:
            raise ValueError(f"Unknown reaction kind: {kind!r}")
        post = await self.get_post(post_id)
        current = getattr(post, kind)
        await self._request("PATCH", f"/chat_posts/{post_id}", json_data={kind: current + 1})
        self.invalidate_feed()

    async def create_comment(
        self,
        *,
        post_id: str,
        content: str,
        author_name: str,
        author_id: str | None,
    ) -> None:
        await self._request(
            "POST",
            "/chat_comments",
            json_data={
                "post_id": post_id,
                "content": content,
                "user_name": author_name,
                "user_id": author_id,
            },
        )
        self.invalidate_feed()

    async def delete_comment(self, comment_id: str) -> None:
        await self._request("DELETE", f"/chat_comments/{comment_id}")
        self.invalidate_feed()
