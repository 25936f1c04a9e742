"""
RandomFS error classes.

Provides a clear taxonomy of errors that can occur while storing and
reconstructing files. Content store failures are mapped from HTTP status
codes and transport exceptions so callers see the same error kinds
regardless of the underlying store implementation.
"""
from __future__ import annotations

from typing import Optional


class RandomFSError(Exception):
    """Base class for all RandomFS errors."""
    pass


class ConfigurationError(RandomFSError, ValueError):
    """
    Invalid construction-time configuration.

    Raised when:
    - Settings fail validation (bad cache size, timeout, policy name)
    - The data directory cannot be created
    """
    pass


class StoreUnavailable(RandomFSError):
    """
    Content store could not be reached.

    Raised when:
    - Connection refused, DNS failure, or timeout talking to the store
    - Startup connectivity check fails
    """
    pass


class StoreRejected(RandomFSError):
    """
    Content store answered with a non-success status.

    Raised when:
    - add/cat returns an HTTP error status other than not-found
    - add returns a body without an assigned identifier
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class NotFound(RandomFSError):
    """
    Requested block or representation id is absent from the store.
    """

    def __init__(self, message: str, ref: Optional[str] = None):
        super().__init__(message)
        self.ref = ref


class MalformedLocator(RandomFSError, ValueError):
    """
    An rd:// locator failed structural or numeric validation.
    """
    pass


class ReconstructionFailed(RandomFSError):
    """
    A file could not be reassembled from its representation.

    Raised when:
    - The representation record is not valid JSON or breaks its invariants
    - Any block or randomizer fetch fails (the cause is chained)
    - A fetched block is shorter than the bytes it must supply
    """

    def __init__(self, message: str, block_index: Optional[int] = None):
        super().__init__(message)
        self.block_index = block_index


__all__ = [
    "RandomFSError",
    "ConfigurationError",
    "StoreUnavailable",
    "StoreRejected",
    "NotFound",
    "MalformedLocator",
    "ReconstructionFailed",
]
