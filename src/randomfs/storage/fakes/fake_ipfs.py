"""
Fake content store implementation for testing.

This implementation explicitly subclasses ContentStore to ensure interface changes
break CI immediately, preventing silent drift.
"""
from __future__ import annotations

import hashlib
import threading
from typing import Dict

from ...errors import NotFound
from ..base import ContentStore

__all__ = ["FakeContentStore"]


class FakeContentStore(ContentStore):
    """
    In-memory content-addressable store for testing.

    This is a test double; not for production use.
    Ids are the SHA256 hex digest of the content.
    """

    def __init__(self) -> None:
        self._objects: Dict[str, bytes] = {}
        self._lock = threading.Lock()
        self.put_calls = 0
        self.get_calls = 0

    def put(self, data: bytes) -> str:
        """Store content and return its digest."""
        content_id = hashlib.sha256(data).hexdigest()
        with self._lock:
            self._objects[content_id] = bytes(data)
            self.put_calls += 1
        return content_id

    def get(self, content_id: str) -> bytes:
        """Retrieve content by digest."""
        with self._lock:
            self.get_calls += 1
            if content_id not in self._objects:
                raise NotFound(f"Content not found: {content_id}", ref=content_id)
            return self._objects[content_id]

    def __contains__(self, content_id: object) -> bool:
        return content_id in self._objects

    def __len__(self) -> int:
        return len(self._objects)

    def clear(self) -> None:
        """Clear all stored data (test utility)."""
        with self._lock:
            self._objects.clear()
