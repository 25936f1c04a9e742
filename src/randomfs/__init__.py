"""
RandomFS: block-randomizing file storage over a content-addressable store.
"""
from .errors import (
    ConfigurationError,
    MalformedLocator,
    NotFound,
    RandomFSError,
    ReconstructionFailed,
    StoreRejected,
    StoreUnavailable,
)
from .filesystem import RandomFS, create_randomfs
from .models import FileRepresentation
from .settings import Settings, create_settings_from_env
from .stats import Stats
from .url import RandomURL, parse_random_url

__version__ = "0.1.0"

__all__ = [
    "RandomFS",
    "create_randomfs",
    "FileRepresentation",
    "RandomURL",
    "parse_random_url",
    "Settings",
    "create_settings_from_env",
    "Stats",
    "RandomFSError",
    "ConfigurationError",
    "StoreUnavailable",
    "StoreRejected",
    "NotFound",
    "MalformedLocator",
    "ReconstructionFailed",
]
