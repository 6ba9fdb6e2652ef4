"""Fetch-or-serve orchestration in front of the upstream API."""

import asyncio
import copy
import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime

from spoonacular_proxy.adapters.spoonacular_client import SpoonacularClient
from spoonacular_proxy.domain.upstream import Locator
from spoonacular_proxy.services.cache import Cache, utc_now

_logger = logging.getLogger(__name__)

_MISS = object()


@dataclass
class CachedFetcher:
    """Serve cached payloads or fetch them from the upstream API.

    Concurrent misses on one key each issue their own upstream call unless
    ``single_flight`` is enabled, in which case they share the first call.
    """

    client: SpoonacularClient
    cache: Cache
    clock: Callable[[], datetime] = utc_now
    single_flight: bool = False
    _in_flight: dict[str, "asyncio.Future[object]"] = field(
        default_factory=dict, init=False, repr=False
    )

    async def fetch_with_cache(
        self, key: str, locator: Locator, ttl_seconds: int
    ) -> dict[str, object]:
        """Return the cached payload for a key, fetching it on a miss."""
        cached = self.cache.get(key, _MISS)
        if cached is not _MISS:
            _logger.debug("Serving from cache: %s", key)
            return self._annotate(cached, from_cache=True)

        if self.single_flight:
            payload = await self._fetch_shared(key, locator, ttl_seconds)
        else:
            payload = await self._fetch_and_store(key, locator, ttl_seconds)
        return self._annotate(payload, from_cache=False)

    async def forward(self, locator: Locator) -> dict[str, object]:
        """Perform an upstream call without touching the cache."""
        payload = await self.client.send(locator)
        return self._annotate(payload, from_cache=False)

    async def _fetch_and_store(
        self, key: str, locator: Locator, ttl_seconds: int
    ) -> object:
        _logger.info("Fetching from API: %s %s", locator.method, locator.path)
        payload = await self.client.send(locator)
        self.cache.set(key, payload, ttl_seconds)
        _logger.debug("Cached: %s (ttl=%ss)", key, ttl_seconds)
        return payload

    async def _fetch_shared(
        self, key: str, locator: Locator, ttl_seconds: int
    ) -> object:
        pending = self._in_flight.get(key)
        if pending is not None:
            _logger.debug("Joining in-flight fetch: %s", key)
            return copy.deepcopy(await asyncio.shield(pending))

        future: asyncio.Future[object] = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            payload = await self._fetch_and_store(key, locator, ttl_seconds)
        except Exception as exc:
            future.set_exception(exc)
            # Mark retrieved so a failure nobody joined is not logged by asyncio.
            future.exception()
            raise
        else:
            future.set_result(copy.deepcopy(payload))
            return payload
        finally:
            if not future.done():
                future.cancel()
            self._in_flight.pop(key, None)

    def _annotate(self, payload: object, *, from_cache: bool) -> dict[str, object]:
        body = dict(payload) if isinstance(payload, dict) else {"data": payload}
        body["fromCache"] = from_cache
        body["timestamp"] = format_timestamp(self.clock())
        return body


def format_timestamp(moment: datetime) -> str:
    """Format a UTC datetime as ISO-8601 with milliseconds and a Z suffix."""
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")
