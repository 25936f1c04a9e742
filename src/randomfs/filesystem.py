"""
RandomFS representation manager.

Implements store_file() and retrieve_file(): the orchestration that turns a
payload into masked blocks plus a representation record in the content store,
and back again.
"""
from __future__ import annotations

import logging
import os
import time
from pathlib import Path
from typing import List, Optional, Tuple

from .blocks import chunk, mask, select_block_size, unmask
from .cache import BlockCache, policy_for
from .errors import ConfigurationError, RandomFSError, ReconstructionFailed
from .models import FileRepresentation
from .settings import Settings
from .stats import Stats, StatsCounter
from .storage.base import ContentStore
from .storage.ipfs import IpfsContentStore
from .url import DEFAULT_HOST, PROTOCOL_VERSION, SCHEME, RandomURL, parse_random_url

__all__ = ["RandomFS", "create_randomfs", "DEFAULT_CONTENT_TYPE"]

logger = logging.getLogger(__name__)

DEFAULT_CONTENT_TYPE = "application/octet-stream"


class RandomFS:
    """
    Block-randomizing file store over a content-addressable backend.

    One instance per running process, passed to whatever serves requests.
    Shared state is the block cache and the statistics counters, each with
    its own lock; store and retrieve otherwise run without a global lock, so
    concurrent callers do not serialize each other's block I/O.
    """

    def __init__(
        self,
        settings: Settings,
        store: ContentStore,
        *,
        cache: Optional[BlockCache] = None,
        stats: Optional[StatsCounter] = None,
    ) -> None:
        """
        Args:
            settings: Instance configuration
            store: Content store for blocks and records
            cache: Block cache (built from settings if None)
            stats: Counters to update (fresh if None)
        """
        self.settings = settings
        self.store = store
        self._stats = stats or StatsCounter()
        # lookups are counted per completed retrieve, not on the cache itself
        self.cache = cache or BlockCache(
            settings.cache_size,
            policy=policy_for(settings.eviction_policy),
        )

    def store_file(self, filename: str, data: bytes, content_type: str = DEFAULT_CONTENT_TYPE) -> RandomURL:
        """
        Store a file as randomized blocks.

        Blocks are stored in file order. A failure part way leaves the blocks
        already stored in the content store; they are not rolled back.

        Args:
            filename: Original name (reduced to its base name)
            data: File content
            content_type: MIME type recorded for retrieval

        Returns:
            Locator of the stored representation

        Raises:
            StoreUnavailable: If the content store cannot be reached
            StoreRejected: If the content store refuses a block or the record
        """
        file_size = len(data)
        block_size = select_block_size(file_size)

        block_ids: List[str] = []
        randomizer_ids: List[str] = []
        for piece in chunk(data, block_size):
            masked = mask(piece, block_size)
            randomizer_ids.append(self._store_block(masked.randomizer))
            block_ids.append(self._store_block(masked.block))

        rep = FileRepresentation(
            filename=os.path.basename(filename.replace("\\", "/")),
            file_size=file_size,
            block_ids=block_ids,
            randomizer_ids=randomizer_ids,
            block_size=block_size,
            created_at=int(time.time()),
            content_type=content_type or DEFAULT_CONTENT_TYPE,
            format_version=PROTOCOL_VERSION,
        )
        rep_hash = self.store.put(rep.to_json())

        self._stats.record_store(blocks=len(block_ids), size=file_size)

        logger.info(
            f"Stored file {filename} ({file_size} bytes) with {len(block_ids)} blocks, "
            f"representation hash: {rep_hash}"
        )

        return RandomURL(
            scheme=SCHEME,
            host=DEFAULT_HOST,
            version=rep.format_version,
            file_size=rep.file_size,
            file_name=rep.filename,
            timestamp=rep.created_at,
            rep_hash=rep_hash,
        )

    def retrieve_file(self, rep_hash: str) -> Tuple[bytes, FileRepresentation]:
        """
        Reconstruct a file from its representation hash.

        Returns:
            (file bytes, representation)

        Raises:
            NotFound: If no record exists under rep_hash
            StoreUnavailable: If the content store cannot be reached for the record
            ReconstructionFailed: If the record is invalid or any block cannot be fetched
        """
        rep_data = self.store.get(rep_hash)

        try:
            rep = FileRepresentation.from_json(rep_data)
        except ValueError as e:
            raise ReconstructionFailed(f"failed to parse representation {rep_hash}: {e}") from e

        reconstructed = bytearray()
        hits = misses = 0
        for index, (block_id, randomizer_id) in enumerate(zip(rep.block_ids, rep.randomizer_ids)):
            try:
                block, block_hit = self._fetch_block(block_id)
                randomizer, randomizer_hit = self._fetch_block(randomizer_id)
            except RandomFSError as e:
                raise ReconstructionFailed(
                    f"failed to retrieve block {index}: {e}", block_index=index
                ) from e
            hits += block_hit + randomizer_hit
            misses += 2 - block_hit - randomizer_hit

            try:
                reconstructed += unmask(block, randomizer, rep.chunk_length(index))
            except ValueError as e:
                raise ReconstructionFailed(f"block {index} is malformed: {e}", block_index=index) from e

        if len(reconstructed) != rep.file_size:
            raise ReconstructionFailed(
                f"reconstructed {len(reconstructed)} bytes, representation says {rep.file_size}"
            )

        self._stats.record_cache_lookups(hits=hits, misses=misses)

        logger.info(f"Retrieved file {rep.filename} ({rep.file_size} bytes) from {len(rep.block_ids)} blocks")

        return bytes(reconstructed), rep

    def retrieve_url(self, raw_url: str) -> Tuple[bytes, FileRepresentation]:
        """Parse an rd:// locator and reconstruct the file it names."""
        return self.retrieve_file(self.parse_url(raw_url).rep_hash)

    @staticmethod
    def parse_url(raw_url: str) -> RandomURL:
        """Parse an rd:// locator."""
        return parse_random_url(raw_url)

    def get_stats(self) -> Stats:
        """Snapshot of the instance counters."""
        return self._stats.snapshot()

    def _store_block(self, block: bytes) -> str:
        block_id = self.store.put(block)
        self.cache.put(block_id, block)
        return block_id

    def _fetch_block(self, block_id: str) -> Tuple[bytes, bool]:
        """Cache-first fetch. Returns (bytes, whether the cache had them)."""
        cached = self.cache.get(block_id)
        if cached is not None:
            return cached, True

        block = self.store.get(block_id)
        if self.settings.cache_on_retrieve:
            self.cache.put(block_id, block)
        return block, False


def create_randomfs(settings: Settings, *, store: Optional[ContentStore] = None) -> RandomFS:
    """
    Build a RandomFS instance for a running process.

    Creates the data directory and, when no store is supplied, connects to
    the IPFS daemon from settings and verifies it responds.

    Raises:
        ConfigurationError: If the data directory cannot be created
        StoreUnavailable: If the IPFS daemon is unreachable
    """
    try:
        Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ConfigurationError(f"failed to create data directory {settings.data_dir}: {e}") from e

    if store is None:
        ipfs = IpfsContentStore(settings)
        ipfs.check_connection()
        store = ipfs

    logger.info(
        f"RandomFS initialized with data dir {settings.data_dir}, "
        f"cache {settings.cache_size} bytes ({settings.eviction_policy})"
    )
    return RandomFS(settings, store)
