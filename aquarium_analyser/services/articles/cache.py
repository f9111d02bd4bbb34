"""Process-lifetime article cache with single-flight population."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable, Hashable
from typing import Generic, TypeVar

logger = logging.getLogger(__name__)

KeyT = TypeVar("KeyT", bound=Hashable)
ValueT = TypeVar("ValueT")


class ArticleCache(Generic[KeyT, ValueT]):
    """Write-once cache keyed by topic.

    An entry goes from empty to populated exactly once and is never
    invalidated; fresh content needs a process restart. Concurrent misses
    for the same key share one in-flight build. A failed build stores
    nothing, so the next request retries.
    """

    def __init__(self) -> None:
        self._entries: dict[KeyT, ValueT] = {}
        self._in_flight: dict[KeyT, asyncio.Task[ValueT]] = {}

    def peek(self, key: KeyT) -> ValueT | None:
        return self._entries.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    async def get_or_build(
        self,
        key: KeyT,
        build: Callable[[KeyT], Awaitable[ValueT]],
    ) -> ValueT:
        """Return the cached value, building it at most once concurrently."""
        cached = self._entries.get(key)
        if cached is not None:
            logger.debug("Article cache hit", extra={"key": str(key)})
            return cached

        task = self._in_flight.get(key)
        if task is None:
            logger.info("Article cache miss, building", extra={"key": str(key)})
            task = asyncio.create_task(self._populate(key, build))
            self._in_flight[key] = task
        else:
            logger.info("Article cache miss, joining in-flight build", extra={"key": str(key)})

        # Shield so one cancelled request does not cancel the shared build.
        return await asyncio.shield(task)

    async def _populate(
        self,
        key: KeyT,
        build: Callable[[KeyT], Awaitable[ValueT]],
    ) -> ValueT:
        try:
            value = await build(key)
            self._entries[key] = value
            return value
        finally:
            self._in_flight.pop(key, None)
