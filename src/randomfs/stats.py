"""
Process statistics for a RandomFS instance.
"""
from __future__ import annotations

import threading
from dataclasses import asdict, dataclass
from typing import Dict

__all__ = ["Stats", "StatsCounter"]


@dataclass(frozen=True)
class Stats:
    """Point-in-time copy of the counters."""
    files_stored: int = 0
    blocks_generated: int = 0
    total_size: int = 0
    cache_hits: int = 0
    cache_misses: int = 0

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)


class StatsCounter:
    """
    Thread-safe monotonically increasing counters.

    Owned by one RandomFS instance and shared with its block cache; there is
    no process-wide singleton.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._files_stored = 0
        self._blocks_generated = 0
        self._total_size = 0
        self._cache_hits = 0
        self._cache_misses = 0

    def record_store(self, blocks: int, size: int) -> None:
        """Account for one completed store operation."""
        if blocks < 0 or size < 0:
            raise ValueError("store counters cannot decrease")
        with self._lock:
            self._files_stored += 1
            self._blocks_generated += blocks
            self._total_size += size

    def record_cache_hit(self) -> None:
        with self._lock:
            self._cache_hits += 1

    def record_cache_miss(self) -> None:
        with self._lock:
            self._cache_misses += 1

    def record_cache_lookups(self, hits: int, misses: int) -> None:
        """Account for the block lookups of one completed retrieve."""
        if hits < 0 or misses < 0:
            raise ValueError("cache counters cannot decrease")
        with self._lock:
            self._cache_hits += hits
            self._cache_misses += misses

    def snapshot(self) -> Stats:
        with self._lock:
            return Stats(
                files_stored=self._files_stored,
                blocks_generated=self._blocks_generated,
                total_size=self._total_size,
                cache_hits=self._cache_hits,
                cache_misses=self._cache_misses,
            )
