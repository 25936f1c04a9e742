"""
Bounded in-memory block cache.

Maps block ids to block bytes and keeps a running size tally. When an
insertion pushes the tally above max_size, entries are dropped in the order
chosen by the eviction policy until the tally is at or below max_size // 2.
The hysteresis keeps a cache sitting at its bound from evicting on every
insertion.
"""
from __future__ import annotations

import logging
import threading
from collections import OrderedDict
from typing import Dict, Iterator, Optional, Protocol

from .errors import ConfigurationError
from .stats import StatsCounter

__all__ = [
    "EvictionPolicy",
    "LeastRecentlyUsed",
    "InsertionOrder",
    "BlockCache",
    "policy_for",
]

logger = logging.getLogger(__name__)


class EvictionPolicy(Protocol):
    """
    Tracks key order for a BlockCache.

    The cache calls these hooks while holding its own lock, so policies
    need no locking of their own.
    """

    def inserted(self, key: str) -> None:
        """Key was inserted or overwritten."""
        ...

    def accessed(self, key: str) -> None:
        """Key was read."""
        ...

    def removed(self, key: str) -> None:
        """Key left the cache."""
        ...

    def victims(self) -> Iterator[str]:
        """Yield keys in eviction order, first victim first."""
        ...

    def clear(self) -> None:
        ...


class InsertionOrder:
    """Evict the oldest insertion first; reads do not change the order."""

    def __init__(self) -> None:
        self._order: OrderedDict[str, None] = OrderedDict()

    def inserted(self, key: str) -> None:
        self._order[key] = None
        self._order.move_to_end(key)

    def accessed(self, key: str) -> None:
        pass

    def removed(self, key: str) -> None:
        self._order.pop(key, None)

    def victims(self) -> Iterator[str]:
        return iter(list(self._order))

    def clear(self) -> None:
        self._order.clear()


class LeastRecentlyUsed(InsertionOrder):
    """Evict the entry whose last insert or read is oldest."""

    def accessed(self, key: str) -> None:
        if key in self._order:
            self._order.move_to_end(key)


def policy_for(name: str) -> EvictionPolicy:
    """
    Create an eviction policy by name.

    Raises:
        ConfigurationError: For unknown policy names
    """
    if name == "lru":
        return LeastRecentlyUsed()
    elif name == "fifo":
        return InsertionOrder()
    raise ConfigurationError(f"Unknown eviction policy: {name}. Supported values: lru, fifo")


class BlockCache:
    """
    Size-bounded block cache.

    A single lock guards the map, the policy order and the size tally.
    Reads take the lock too, since a read under LRU reorders keys.

    Hits and misses are counted on the attached StatsCounter when present.
    get() never falls through to the content store; that is the caller's job.
    """

    def __init__(
        self,
        max_size: int,
        *,
        policy: Optional[EvictionPolicy] = None,
        stats: Optional[StatsCounter] = None,
    ) -> None:
        if max_size <= 0:
            raise ConfigurationError(f"cache max_size must be positive, got {max_size}")
        self._max_size = max_size
        self._policy = policy if policy is not None else LeastRecentlyUsed()
        self._stats = stats
        self._blocks: Dict[str, bytes] = {}
        self._current_size = 0
        self._lock = threading.Lock()

    @property
    def max_size(self) -> int:
        return self._max_size

    @property
    def current_size(self) -> int:
        with self._lock:
            return self._current_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._blocks)

    def __contains__(self, block_id: object) -> bool:
        with self._lock:
            return block_id in self._blocks

    def get(self, block_id: str) -> Optional[bytes]:
        """Return cached bytes for block_id, or None on a miss."""
        with self._lock:
            data = self._blocks.get(block_id)
            if data is not None:
                self._policy.accessed(block_id)

        if self._stats is not None:
            if data is None:
                self._stats.record_cache_miss()
            else:
                self._stats.record_cache_hit()
        return data

    def put(self, block_id: str, data: bytes) -> None:
        """Insert or overwrite an entry, evicting if the bound is exceeded."""
        data = bytes(data)
        with self._lock:
            previous = self._blocks.get(block_id)
            if previous is not None:
                self._current_size -= len(previous)
            self._blocks[block_id] = data
            self._current_size += len(data)
            self._policy.inserted(block_id)

            if self._current_size > self._max_size:
                self._evict_locked()

    def evict(self) -> int:
        """Run eviction now if over the bound. Returns the number of entries dropped."""
        with self._lock:
            if self._current_size <= self._max_size:
                return 0
            return self._evict_locked()

    def clear(self) -> None:
        with self._lock:
            self._blocks.clear()
            self._policy.clear()
            self._current_size = 0

    def _evict_locked(self) -> int:
        target = self._max_size // 2
        dropped = 0
        for block_id in self._policy.victims():
            if self._current_size <= target:
                break
            data = self._blocks.pop(block_id, None)
            self._policy.removed(block_id)
            if data is None:
                continue
            self._current_size -= len(data)
            dropped += 1

        if not self._blocks:
            logger.warning(f"Block cache emptied by eviction ({dropped} entries, bound {self._max_size} bytes)")
        else:
            logger.debug(
                f"Evicted {dropped} blocks, cache now {self._current_size}/{self._max_size} bytes"
            )
        return dropped
