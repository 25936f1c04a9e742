"""
rd:// locator parsing and serialization.

A locator names the representation record of a stored file:

    rd://<host>/<version>/<fileSize>/<fileName>/<timestamp>/<repHash>

Segments are positional. The file name is percent-encoded on the way out so
that no character in it can shift the segments that follow.
"""
from __future__ import annotations

import base64
import binascii
import re
from dataclasses import dataclass
from urllib.parse import quote, unquote

from .errors import MalformedLocator

__all__ = [
    "SCHEME",
    "DEFAULT_HOST",
    "PROTOCOL_VERSION",
    "RandomURL",
    "parse_random_url",
    "serialize",
    "encode_url_path",
    "decode_url_path",
]

SCHEME = "rd"
DEFAULT_HOST = "randomfs"
PROTOCOL_VERSION = "v4"

_PATH_SEGMENTS = 5
_INTEGER = re.compile(r"-?[0-9]+")


@dataclass(frozen=True)
class RandomURL:
    """
    Parsed components of an rd:// locator.

    Attributes:
        scheme: Always "rd"
        host: Namespace field ("randomfs" for locators built here)
        version: Format version tag of the referenced record
        file_size: Original file size in bytes
        file_name: Original base file name
        timestamp: Unix timestamp the file was stored at
        rep_hash: Content store id of the representation record
    """
    scheme: str
    host: str
    version: str
    file_size: int
    file_name: str
    timestamp: int
    rep_hash: str

    def __str__(self) -> str:
        return (
            f"{self.scheme}://{self.host}/{self.version}/{self.file_size}/"
            f"{quote(self.file_name, safe='')}/{self.timestamp}/{self.rep_hash}"
        )


def serialize(url: RandomURL) -> str:
    """Render a locator in its string form."""
    return str(url)


def parse_random_url(raw: str) -> RandomURL:
    """
    Parse and validate an rd:// locator.

    Args:
        raw: Locator string

    Returns:
        RandomURL with validated components

    Raises:
        MalformedLocator: If the scheme is wrong, segments are missing or
            extra, or numeric fields are not integers

    Examples:
        >>> parse_random_url("rd://randomfs/v4/1024/example.txt/1700000000/QmAbc").file_size
        1024
    """
    if not raw:
        raise MalformedLocator("Locator cannot be empty")

    prefix = f"{SCHEME}://"
    if not raw.startswith(prefix):
        scheme = raw.split("://", 1)[0] if "://" in raw else ""
        raise MalformedLocator(f"invalid scheme: expected '{SCHEME}', got '{scheme}'")

    host, _, path = raw[len(prefix):].partition("/")
    if not host:
        raise MalformedLocator(f"Locator host cannot be empty: {raw}")

    parts = path.strip("/").split("/") if path.strip("/") else []
    if len(parts) != _PATH_SEGMENTS:
        raise MalformedLocator(
            f"invalid rd:// URL format, expected {_PATH_SEGMENTS} path segments, got {len(parts)}: {raw}"
        )

    version, size_part, name_part, timestamp_part, rep_hash = parts

    # ASCII decimal only; no "+", underscores or surrounding whitespace
    if not _INTEGER.fullmatch(size_part) or int(size_part) < 0:
        raise MalformedLocator(f"invalid file size: {size_part!r}")
    file_size = int(size_part)

    if not _INTEGER.fullmatch(timestamp_part):
        raise MalformedLocator(f"invalid timestamp: {timestamp_part!r}")
    timestamp = int(timestamp_part)

    if not version:
        raise MalformedLocator(f"Locator version cannot be empty: {raw}")
    if not rep_hash:
        raise MalformedLocator(f"Locator representation id cannot be empty: {raw}")

    return RandomURL(
        scheme=SCHEME,
        host=host,
        version=version,
        file_size=file_size,
        file_name=unquote(name_part),
        timestamp=timestamp,
        rep_hash=rep_hash,
    )


def encode_url_path(url: RandomURL | str) -> str:
    """Wrap a locator in URL-safe base64 for use as a single web path segment."""
    return base64.urlsafe_b64encode(str(url).encode("utf-8")).decode("ascii")


def decode_url_path(encoded: str) -> RandomURL:
    """
    Unwrap a base64-encoded locator and parse it.

    Raises:
        MalformedLocator: If the segment is not valid base64 or not a locator
    """
    try:
        raw = base64.urlsafe_b64decode(encoded.encode("ascii")).decode("utf-8")
    except (binascii.Error, UnicodeError, ValueError) as e:
        raise MalformedLocator(f"Invalid encoded URL: {e}") from e
    return parse_random_url(raw)
