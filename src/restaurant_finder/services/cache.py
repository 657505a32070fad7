"""Restaurant result cache abstractions."""

import threading
from collections import OrderedDict
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

from restaurant_finder.domain.restaurants import RestaurantSummary

DEFAULT_TTL = timedelta(minutes=30)
DEFAULT_MAX_ENTRIES = 1000
DEFAULT_SHARD_COUNT = 16


def utc_now() -> datetime:
    """Return the current time in UTC."""
    return datetime.now(tz=UTC)


class RestaurantCache(Protocol):
    """Cache interface mapping normalized postcodes to restaurant lists."""

    ttl: timedelta

    def get(self, key: str) -> tuple[RestaurantSummary, ...] | None:
        """Return a cached value if present and not expired."""

    def put(self, key: str, value: Sequence[RestaurantSummary]) -> None:
        """Insert or overwrite a value, stamping it with the current time."""

    def evict_expired(self, cutoff: datetime) -> int:
        """Remove entries written at or before cutoff and return the count."""

    def invalidate(self, key: str) -> None:
        """Remove a single entry."""


@dataclass(frozen=True)
class CacheEntry:
    """Cached restaurants for one postcode."""

    key: str
    value: tuple[RestaurantSummary, ...]
    written_at: datetime


class _Shard:
    """Slice of the cache entries guarded by its own lock."""

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.entries: dict[str, CacheEntry] = {}


class InMemoryRestaurantCache(RestaurantCache):
    """Process-local cache with write-time expiry and a hard size bound.

    Entries live in independently locked shards so reads for unrelated
    postcodes never wait on each other. Writers also take a cache-wide
    lock that guards the global write order; a put that would take the
    cache above ``max_entries`` evicts the oldest write in the whole
    cache first.

    Expired entries are not removed on read. Call :meth:`evict_expired`
    after writes to reclaim them.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        shard_count: int = DEFAULT_SHARD_COUNT,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        if ttl <= timedelta(0):
            raise ValueError("ttl must be positive")
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        if shard_count < 1:
            raise ValueError("shard_count must be at least 1")
        self.ttl = ttl
        self.max_entries = max_entries
        self._clock = clock
        self._shards = [_Shard() for _ in range(shard_count)]
        # Keys in write order, oldest first. Lock order: _write_lock, then shard.
        self._write_order: OrderedDict[str, None] = OrderedDict()
        self._write_lock = threading.Lock()

    def __len__(self) -> int:
        with self._write_lock:
            return len(self._write_order)

    def get(self, key: str) -> tuple[RestaurantSummary, ...] | None:
        """Return the cached restaurants if written within the TTL."""
        shard = self._shard_for(key)
        with shard.lock:
            entry = shard.entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.written_at > self.ttl:
            return None
        return entry.value

    def put(self, key: str, value: Sequence[RestaurantSummary]) -> None:
        """Store restaurants for a postcode; last write wins."""
        entry = CacheEntry(key=key, value=tuple(value), written_at=self._clock())
        shard = self._shard_for(key)
        with self._write_lock:
            self._write_order.pop(key, None)
            while len(self._write_order) >= self.max_entries:
                oldest, _ = self._write_order.popitem(last=False)
                oldest_shard = self._shard_for(oldest)
                with oldest_shard.lock:
                    oldest_shard.entries.pop(oldest, None)
            self._write_order[key] = None
            with shard.lock:
                shard.entries[key] = entry

    def evict_expired(self, cutoff: datetime) -> int:
        """Drop every entry written at or before ``cutoff``."""
        removed = 0
        with self._write_lock:
            for shard in self._shards:
                with shard.lock:
                    stale = [
                        key
                        for key, entry in shard.entries.items()
                        if entry.written_at <= cutoff
                    ]
                    for key in stale:
                        del shard.entries[key]
                for key in stale:
                    self._write_order.pop(key, None)
                removed += len(stale)
        return removed

    def invalidate(self, key: str) -> None:
        """Remove a postcode from the cache, if present."""
        shard = self._shard_for(key)
        with self._write_lock:
            self._write_order.pop(key, None)
            with shard.lock:
                shard.entries.pop(key, None)

    def _shard_for(self, key: str) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]
