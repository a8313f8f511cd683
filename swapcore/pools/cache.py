"""Time-bounded memoization of pool snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from swapcore.models.pool import Pool

# Unordered normalized coin pair plus network
PoolKey = tuple[frozenset[str], str]


@dataclass(frozen=True)
class CacheEntry:
    """A pool snapshot and the monotonic time it was fetched."""

    pool: Pool
    fetched_at: float

    def is_fresh(self, now: float, ttl: float) -> bool:
        return now - self.fetched_at < ttl


class PoolCache:
    """In-memory pool snapshots keyed by unordered pair and network.

    Entries older than the TTL read as absent. Only successful lookups are
    stored, so a pool created after a miss is found on the next lookup.
    """

    def __init__(self, ttl: float) -> None:
        self.ttl = ttl
        self._entries: dict[PoolKey, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: PoolKey, now: float) -> Pool | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if not entry.is_fresh(now, self.ttl):
            del self._entries[key]
            return None
        return entry.pool

    def put(self, key: PoolKey, pool: Pool, now: float) -> None:
        self._entries[key] = CacheEntry(pool=pool, fetched_at=now)

    def discard(self, key: PoolKey) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
