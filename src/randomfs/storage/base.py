"""
Content store interface for RandomFS.

This protocol defines the boundary between the representation manager and
the remote content-addressable store, enabling clean dependency injection
and testing with fakes.
"""
from __future__ import annotations

from typing import Protocol, runtime_checkable

__all__ = ["ContentStore"]


@runtime_checkable
class ContentStore(Protocol):
    """Protocol for content-addressable "put bytes, get id" storage."""

    def put(self, data: bytes) -> str:
        """
        Store bytes and return the identifier the store assigned.

        Args:
            data: Raw content bytes

        Returns:
            Content identifier (e.g. an IPFS CID)

        Raises:
            StoreUnavailable: If the store cannot be reached
            StoreRejected: If the store answers with an error status
        """
        ...

    def get(self, content_id: str) -> bytes:
        """
        Fetch bytes by identifier.

        Args:
            content_id: Identifier previously returned by put()

        Returns:
            Stored content bytes

        Raises:
            NotFound: If nothing is stored under content_id
            StoreUnavailable: If the store cannot be reached
            StoreRejected: If the store answers with another error status
        """
        ...
