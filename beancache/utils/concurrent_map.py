from __future__ import annotations

import threading
from typing import Any, Container, Generic, Hashable, TypeVar

"""
Lock-striped dictionary for caches shared between poll threads.

Keys are routed to one of N shards by hash; each shard is a plain dict with its
own lock. No operation ever holds two shard locks, so lookups and inserts for
keys that land in different shards proceed in parallel, and a sweep only ever
blocks the shard it is currently visiting.
"""

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")

DEFAULT_SHARDS = 16


class _Shard:
    __slots__ = ("lock", "data", "hits", "misses", "inserts", "evictions")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.data: dict[Any, Any] = {}
        self.hits = 0
        self.misses = 0
        self.inserts = 0
        self.evictions = 0


class ConcurrentMap(Generic[K, V]):
    """
    Thread-safe mapping partitioned into independently locked shards.

    Values are published whole: a value becomes visible to other threads only
    once `put_if_absent` stores the fully built object, so readers never see a
    partially constructed entry.

    Args:
        shards: Number of stripes (must be >= 1)
    """

    def __init__(self, shards: int = DEFAULT_SHARDS) -> None:
        if shards < 1:
            raise ValueError(f"shards must be >= 1, got {shards}")
        self._shards = tuple(_Shard() for _ in range(shards))

    def _shard_for(self, key: K) -> _Shard:
        return self._shards[hash(key) % len(self._shards)]

    def get(self, key: K, default: V | None = None) -> V | None:
        """Return the stored value or `default`, counting a hit or miss."""
        shard = self._shard_for(key)
        with shard.lock:
            if key in shard.data:
                shard.hits += 1
                return shard.data[key]
            shard.misses += 1
            return default

    def put_if_absent(self, key: K, value: V) -> V:
        """
        Store `value` unless the key is already present.

        Returns:
            The value held by the map after the call: `value` if it was
            inserted, otherwise the one another thread stored first.
        """
        shard = self._shard_for(key)
        with shard.lock:
            existing = shard.data.get(key, _MISSING)
            if existing is not _MISSING:
                return existing
            shard.data[key] = value
            shard.inserts += 1
            return value

    def remove(self, key: K) -> bool:
        shard = self._shard_for(key)
        with shard.lock:
            if key in shard.data:
                del shard.data[key]
                shard.evictions += 1
                return True
            return False

    def retain(self, keep: Container[K]) -> int:
        """
        Drop every key that is not in `keep`, one shard at a time.

        Args:
            keep: Keys to keep (anything supporting `in`)

        Returns:
            Number of entries removed
        """
        removed = 0
        for shard in self._shards:
            with shard.lock:
                stale = [key for key in shard.data if key not in keep]
                for key in stale:
                    del shard.data[key]
                shard.evictions += len(stale)
            removed += len(stale)
        return removed

    def clear(self) -> int:
        removed = 0
        for shard in self._shards:
            with shard.lock:
                count = len(shard.data)
                shard.data.clear()
                shard.evictions += count
            removed += count
        return removed

    def snapshot(self) -> dict[K, V]:
        """Copy of the current contents (not an atomic cut across shards)."""
        result: dict[K, V] = {}
        for shard in self._shards:
            with shard.lock:
                result.update(shard.data)
        return result

    def stats(self) -> dict[str, int]:
        totals = {"hits": 0, "misses": 0, "inserts": 0, "evictions": 0, "size": 0}
        for shard in self._shards:
            with shard.lock:
                totals["hits"] += shard.hits
                totals["misses"] += shard.misses
                totals["inserts"] += shard.inserts
                totals["evictions"] += shard.evictions
                totals["size"] += len(shard.data)
        return totals

    @property
    def shard_count(self) -> int:
        return len(self._shards)

    def __contains__(self, key: object) -> bool:
        shard = self._shards[hash(key) % len(self._shards)]
        with shard.lock:
            return key in shard.data

    def __len__(self) -> int:
        return sum(len(shard.data) for shard in self._shards)


_MISSING: Any = object()

__all__ = ["ConcurrentMap", "DEFAULT_SHARDS"]
