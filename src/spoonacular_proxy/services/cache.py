"""Simple cache abstractions."""

import copy
from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str, default: object = None) -> object:
        """Return a cached value if present and not expired, else ``default``."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""

    def keys(self) -> list[str]:
        """Return the keys of all live entries."""

    def flush_all(self) -> None:
        """Remove every entry."""


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """In-process cache with lazy expiry.

    Values are deep copied on the way in and out, so mutating a returned
    payload never changes what the next caller sees.
    """

    _entries: dict[str, _CacheEntry]
    _clock: Callable[[], datetime]

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._entries = {}
        self._clock = clock

    def get(self, key: str, default: object = None) -> object:
        """Return a cached value if it hasn't expired.

        Stored ``None`` values are returned as is, so callers that need to
        tell a miss apart pass their own ``default``.
        """
        entry = self._entries.get(key)
        if entry is None:
            return default
        if self._clock() >= entry.expires_at:
            self._entries.pop(key, None)
            return default
        return copy.deepcopy(entry.value)

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL."""
        expires_at = self._clock() + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(
            value=copy.deepcopy(value), expires_at=expires_at
        )

    def keys(self) -> list[str]:
        """Return a snapshot of non-expired keys."""
        now = self._clock()
        return [key for key, entry in self._entries.items() if now < entry.expires_at]

    def flush_all(self) -> None:
        """Drop every entry."""
        self._entries.clear()

    def purge_expired(self) -> int:
        """Remove expired entries and return how many were dropped."""
        now = self._clock()
        expired = [
            key for key, entry in self._entries.items() if now >= entry.expires_at
        ]
        for key in expired:
            del self._entries[key]
        return len(expired)

    def __len__(self) -> int:
        return len(self._entries)
