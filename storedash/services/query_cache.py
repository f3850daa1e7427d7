"""
Keyed cache for backend queries.

Results stay cached until a mutation invalidates their key; nothing refetches
in the background. Concurrent fetches of the same key share one load, and
failed loads are never cached.
"""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, Optional

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

logger = structlog.get_logger(__name__)

Loader = Callable[[], Awaitable[Any]]


class QueryCache:
    """
    Query results keyed by screen.

    Args:
        retries: Extra attempts for loads that fail with a transport error (0 disables)
        wait: tenacity wait strategy between attempts
    """

    def __init__(self, retries: int = 0, wait: Optional[Any] = None):
        self.retries = retries
        self.wait = wait or wait_exponential(multiplier=0.5, min=0.5, max=10)
        self._values: Dict[Hashable, Any] = {}
        self._inflight: Dict[Hashable, asyncio.Task] = {}
        self._generations: Dict[Hashable, int] = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    async def fetch(self, key: Hashable, loader: Loader) -> Any:
        """Return the cached value for ``key``, loading it once if absent."""
        if key in self._values:
            logger.debug("Query cache hit", key=key)
            return self._values[key]

        task = self._inflight.get(key)
        if task is None:
            generation = self._generations.get(key, 0)
            task = asyncio.ensure_future(self._load(key, loader, generation))
            self._inflight[key] = task
            task.add_done_callback(lambda t, key=key: self._forget(key, t))

        # A cancelled caller must not cancel the load other callers share
        return await asyncio.shield(task)

    def invalidate(self, *keys: Hashable) -> None:
        """Drop cached results for ``keys``, or for every key when none are given."""
        targets = keys or tuple(set(self._values) | set(self._inflight))
        for key in targets:
            self._values.pop(key, None)
            self._inflight.pop(key, None)
            self._generations[key] = self._generations.get(key, 0) + 1
        logger.debug("Query cache invalidated", keys=list(targets))

    def _forget(self, key: Hashable, task: asyncio.Task) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]

    async def _load(self, key: Hashable, loader: Loader, generation: int) -> Any:
        logger.debug("Query cache miss", key=key)
        value = await self._run(loader)
        # Results of loads started before an invalidation are stale
        if self._generations.get(key, 0) == generation:
            self._values[key] = value
        return value

    async def _run(self, loader: Loader) -> Any:
        if self.retries <= 0:
            return await loader()

        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(self.retries + 1),
            wait=self.wait,
            retry=retry_if_exception_type(httpx.TransportError),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        ):
            with attempt:
                return await loader()
