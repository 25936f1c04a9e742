"""Content store adapters."""
from .base import ContentStore
from .ipfs import IpfsContentStore

__all__ = ["ContentStore", "IpfsContentStore"]
