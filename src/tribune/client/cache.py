"""Keyed query cache with invalidate-and-refetch semantics."""

from __future__ import annotations

import asyncio
from collections import defaultdict
from collections.abc import Awaitable, Callable
from typing import Any

QueryKey = tuple[str, ...]


class QueryCache:
    """Cache of query results keyed by tuples.

    Concurrent fetches of one key share a single in-flight load. Invalidating
    a key while its load is in flight discards that load's result and makes
    waiters fetch again, so overlapping mutations settle on one fresh read.
    """

    def __init__(self) -> None:
        self._data: dict[QueryKey, Any] = {}
        self._versions: dict[QueryKey, int] = defaultdict(int)
        self._inflight: dict[QueryKey, asyncio.Task[None]] = {}

    def get(self, key: QueryKey) -> Any | None:
        """Return the cached value for ``key`` without fetching."""
        return self._data.get(key)

    def is_cached(self, key: QueryKey) -> bool:
        return key in self._data

    def is_fetching(self, key: QueryKey) -> bool:
        return key in self._inflight

    async def fetch(self, key: QueryKey, loader: Callable[[], Awaitable[Any]]) -> Any:
        """Return the cached value, loading it with ``loader`` when stale."""
        while key not in self._data:
            task = self._inflight.get(key)
            if task is None:
                task = asyncio.ensure_future(self._load(key, loader))
                self._inflight[key] = task
            # A cancelled caller must not cancel the load other readers share.
            await asyncio.shield(task)
        return self._data[key]

    async def _load(self, key: QueryKey, loader: Callable[[], Awaitable[Any]]) -> None:
        version = self._versions[key]
        try:
            result = await loader()
        finally:
            self._inflight.pop(key, None)
        if self._versions[key] == version:
            self._data[key] = result

    def invalidate(self, prefix: QueryKey) -> None:
        """Mark every key starting with ``prefix`` as stale."""
        for key in set(self._data) | set(self._inflight) | {prefix}:
            if key[: len(prefix)] == prefix:
                self._data.pop(key, None)
                self._versions[key] += 1
