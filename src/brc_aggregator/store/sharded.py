"""Lock-partitioned result store keyed by record key."""

import threading
import zlib

from brc_aggregator.records.types import Statistics


class Shard:
    """One lock-guarded partition of the result store."""

    __slots__ = ("data", "lock")

    def __init__(self) -> None:
        self.data: dict[bytes, Statistics] = {}
        self.lock = threading.Lock()


class ShardedResultStore:
    """
    Concurrency-safe mapping from key to merged statistics.

    Keys are routed to a fixed shard by a stable hash, so the same key is
    always merged under the same lock regardless of which worker produced it.
    A lock is held for a single key's combine, never for a whole accumulator.
    """

    def __init__(self, shard_count: int):
        if shard_count < 1:
            raise ValueError(f"shard_count must be >= 1, got {shard_count}")
        self._shards = [Shard() for _ in range(shard_count)]

    @property
    def shard_count(self) -> int:
        return len(self._shards)

    def shard_index(self, key: bytes) -> int:
        # Stable across processes and runs, unlike the builtin hash().
        return zlib.crc32(key) % len(self._shards)

    def combine(self, key: bytes, stats: Statistics) -> None:
        """Insert `stats` for `key`, or combine it into the existing entry."""
        shard = self._shards[self.shard_index(key)]
        with shard.lock:
            existing = shard.data.get(key)
            if existing is None:
                shard.data[key] = stats
            else:
                existing.combine(stats)

    def snapshot(self) -> dict[bytes, Statistics]:
        """Drain every shard, one lock at a time, into a single plain dict."""
        merged: dict[bytes, Statistics] = {}
        for shard in self._shards:
            with shard.lock:
                merged.update(shard.data)
        return merged

    def __len__(self) -> int:
        total = 0
        for shard in self._shards:
            with shard.lock:
                total += len(shard.data)
        return total
