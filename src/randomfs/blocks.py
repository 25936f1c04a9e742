"""
Block codec for RandomFS.

Splits payloads into fixed-size chunks and turns each chunk into a masked
block by XOR with a single-use random pad (the "randomizer"). The pad is
stored next to the block, so recovery needs both. Pads are never shared
between files, which means this scheme offers no cross-file deduplication
and no deniability benefit over storing the pads privately.
"""
from __future__ import annotations

import secrets
from dataclasses import dataclass
from typing import List

__all__ = [
    "NANO_BLOCK_SIZE",
    "MINI_BLOCK_SIZE",
    "BLOCK_SIZE",
    "NANO_THRESHOLD",
    "MINI_THRESHOLD",
    "MaskedBlock",
    "select_block_size",
    "chunk",
    "mask",
    "unmask",
    "xor_bytes",
]

# Block sizes per file category
NANO_BLOCK_SIZE = 1024          # 1 KiB for small files
MINI_BLOCK_SIZE = 64 * 1024     # 64 KiB for medium files
BLOCK_SIZE = 1024 * 1024        # 1 MiB for large files

# Upper bounds (inclusive) for each tier
NANO_THRESHOLD = 100 * 1024         # 100 KiB
MINI_THRESHOLD = 10 * 1024 * 1024   # 10 MiB


@dataclass(frozen=True)
class MaskedBlock:
    """
    A masked block and the pad that produced it.

    Invariants:
    - len(block) == len(randomizer) == block size
    - block[i] == chunk[i] ^ randomizer[i] for i < len(chunk)
    - block[i] == randomizer[i] for the padding tail
    """
    block: bytes
    randomizer: bytes


def select_block_size(file_size: int) -> int:
    """
    Pick the block size tier for a file.

    Sizes exactly at a threshold resolve to the smaller tier.

    Raises:
        ValueError: If file_size is negative
    """
    if file_size < 0:
        raise ValueError(f"file_size must be non-negative, got {file_size}")
    if file_size <= NANO_THRESHOLD:
        return NANO_BLOCK_SIZE
    if file_size <= MINI_THRESHOLD:
        return MINI_BLOCK_SIZE
    return BLOCK_SIZE


def chunk(payload: bytes, block_size: int) -> List[bytes]:
    """Split payload into consecutive block_size slices; the last may be short."""
    if block_size <= 0:
        raise ValueError(f"block_size must be positive, got {block_size}")
    view = memoryview(payload)
    return [bytes(view[offset:offset + block_size]) for offset in range(0, len(payload), block_size)]


def xor_bytes(left: bytes, right: bytes) -> bytes:
    """XOR two equal-length byte strings."""
    if len(left) != len(right):
        raise ValueError(f"length mismatch: {len(left)} != {len(right)}")
    n = len(left)
    return (int.from_bytes(left, "big") ^ int.from_bytes(right, "big")).to_bytes(n, "big")


def mask(data: bytes, block_size: int) -> MaskedBlock:
    """
    Mask a chunk with fresh random data.

    Draws block_size bytes from the OS CSPRNG, XORs the first len(data)
    bytes with the chunk and leaves the rest as random padding.

    Args:
        data: Chunk to mask (at most block_size bytes)
        block_size: Length of the produced block

    Returns:
        MaskedBlock holding the block and its randomizer

    Raises:
        ValueError: If the chunk is longer than block_size
        OSError: If the random source is unavailable
    """
    if len(data) > block_size:
        raise ValueError(f"chunk of {len(data)} bytes does not fit block size {block_size}")

    randomizer = secrets.token_bytes(block_size)
    head = xor_bytes(data, randomizer[:len(data)])
    return MaskedBlock(block=head + randomizer[len(data):], randomizer=randomizer)


def unmask(block: bytes, randomizer: bytes, original_length: int) -> bytes:
    """
    Recover the first original_length bytes of a masked block.

    Raises:
        ValueError: If either input is shorter than original_length
    """
    if original_length < 0:
        raise ValueError(f"original_length must be non-negative, got {original_length}")
    if len(block) < original_length or len(randomizer) < original_length:
        raise ValueError(
            f"block ({len(block)} bytes) or randomizer ({len(randomizer)} bytes) "
            f"shorter than requested {original_length} bytes"
        )
    return xor_bytes(block[:original_length], randomizer[:original_length])
