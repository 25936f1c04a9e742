"""
Settings and configuration for RandomFS.

Centralizes configuration values and provides validation with fail-fast behavior.
Loads settings from environment variables at construction time.
"""
from __future__ import annotations

import os
import re
from dataclasses import dataclass

from .errors import ConfigurationError

__all__ = ["Settings", "create_settings_from_env", "DEFAULT_IPFS_API", "EVICTION_POLICIES"]

DEFAULT_IPFS_API = "http://localhost:5001"
DEFAULT_CACHE_SIZE = 500 * 1024 * 1024

EVICTION_POLICIES = ("lru", "fifo")


@dataclass(frozen=True)
class Settings:
    """
    Configuration settings for a RandomFS instance.

    Content Store Settings:
        ipfs_api: IPFS HTTP API endpoint
        http_timeout_s: HTTP request timeout in seconds
        connect_attempts: Attempts for the startup connectivity check (1=no retry)

    Local Settings:
        data_dir: Working directory, created on startup
        cache_size: Block cache bound in bytes
        cache_on_retrieve: Populate the cache with blocks fetched on retrieve
        eviction_policy: Cache eviction order ("lru" or "fifo")
    """
    ipfs_api: str = DEFAULT_IPFS_API
    data_dir: str = "./data"
    cache_size: int = DEFAULT_CACHE_SIZE
    http_timeout_s: float = 30.0
    connect_attempts: int = 1
    cache_on_retrieve: bool = True
    eviction_policy: str = "lru"

    def __post_init__(self):
        """Validate settings on construction."""
        if not self.ipfs_api:
            raise ConfigurationError("ipfs_api is required")

        url_pattern = r"^https?://[a-zA-Z0-9.-]+(?::[0-9]+)?(?:/.*)?$"
        if not re.match(url_pattern, self.ipfs_api):
            raise ConfigurationError(f"Invalid ipfs_api format: {self.ipfs_api}")

        if not self.data_dir:
            raise ConfigurationError("data_dir is required")

        if self.cache_size <= 0:
            raise ConfigurationError(f"cache_size must be positive, got {self.cache_size}")

        if self.http_timeout_s <= 0:
            raise ConfigurationError(f"http_timeout_s must be positive, got {self.http_timeout_s}")

        if self.connect_attempts < 1:
            raise ConfigurationError(f"connect_attempts must be at least 1, got {self.connect_attempts}")

        if self.eviction_policy not in EVICTION_POLICIES:
            raise ConfigurationError(
                f"Unknown eviction_policy: {self.eviction_policy}. "
                f"Supported values: {', '.join(EVICTION_POLICIES)}"
            )


def create_settings_from_env() -> Settings:
    """
    Load settings from environment variables.

    Environment Variables:
        - RANDOMFS_IPFS_API (default: http://localhost:5001)
        - RANDOMFS_DATA_DIR (default: ./data)
        - RANDOMFS_CACHE_SIZE (default: 524288000)
        - RANDOMFS_HTTP_TIMEOUT (default: 30.0)
        - RANDOMFS_CONNECT_ATTEMPTS (default: 1)
        - RANDOMFS_CACHE_ON_RETRIEVE (default: true)
        - RANDOMFS_EVICTION_POLICY (default: lru)

    Returns:
        Settings object with validated configuration

    Raises:
        ConfigurationError: If a value is malformed or fails validation

    Note:
        Creates a fresh Settings instance every time (no caching).
    """
    def str_to_bool(value: str) -> bool:
        return value.lower() in ('true', '1', 'yes', 'on')

    def get_float(key: str, default: float) -> float:
        value = os.getenv(key)
        try:
            return float(value) if value else default
        except ValueError:
            raise ConfigurationError(f"{key} must be a number, got {value!r}")

    def get_int(key: str, default: int) -> int:
        value = os.getenv(key)
        try:
            return int(value) if value else default
        except ValueError:
            raise ConfigurationError(f"{key} must be an integer, got {value!r}")

    return Settings(
        ipfs_api=os.getenv("RANDOMFS_IPFS_API") or DEFAULT_IPFS_API,
        data_dir=os.getenv("RANDOMFS_DATA_DIR") or "./data",
        cache_size=get_int("RANDOMFS_CACHE_SIZE", DEFAULT_CACHE_SIZE),
        http_timeout_s=get_float("RANDOMFS_HTTP_TIMEOUT", 30.0),
        connect_attempts=get_int("RANDOMFS_CONNECT_ATTEMPTS", 1),
        cache_on_retrieve=str_to_bool(os.getenv("RANDOMFS_CACHE_ON_RETRIEVE", "true")),
        eviction_policy=os.getenv("RANDOMFS_EVICTION_POLICY", "lru").lower(),
    )
