"""
Representation record model.

The representation is the reconstruction manifest of one stored file. It is
serialized as JSON and stored in the content store like any other blob; its
content id is the "representation hash" carried in rd:// locators.
"""
from __future__ import annotations

import json
from typing import List

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .url import PROTOCOL_VERSION

__all__ = ["FileRepresentation", "SUPPORTED_VERSIONS", "UnsupportedVersion"]

SUPPORTED_VERSIONS = frozenset({PROTOCOL_VERSION})


class UnsupportedVersion(ValueError):
    """Record carries a format version this reader does not understand."""
    pass


class FileRepresentation(BaseModel):
    """
    Metadata needed to reconstruct a file from its blocks.

    Field names follow Python conventions; the JSON keys (aliases) are the
    wire format shared with other readers.
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    filename: str = Field(..., description="Original base file name")
    file_size: int = Field(..., alias="filesize", ge=0, description="Exact original byte length")
    block_ids: List[str] = Field(..., alias="block_hashes", description="Masked block ids in file order")
    randomizer_ids: List[str] = Field(..., alias="randomizer_hashes", description="Pad ids, parallel to block_ids")
    block_size: int = Field(..., gt=0, description="Mask size used for every block")
    created_at: int = Field(..., alias="timestamp", description="Unix timestamp of the store")
    content_type: str = Field(default="application/octet-stream", description="MIME type")
    format_version: str = Field(default=PROTOCOL_VERSION, alias="version", description="Record format tag")

    @field_validator("filename")
    @classmethod
    def validate_base_name(cls, v: str) -> str:
        if "/" in v or "\\" in v or v in (".", ".."):
            raise ValueError(f"filename must be a base name, got {v!r}")
        return v

    @model_validator(mode="after")
    def validate_block_layout(self) -> FileRepresentation:
        """Block count must match the size and the two id lists must pair up."""
        expected = -(-self.file_size // self.block_size)
        if len(self.block_ids) != expected:
            raise ValueError(
                f"{self.file_size} bytes at block size {self.block_size} needs {expected} blocks, "
                f"record lists {len(self.block_ids)}"
            )
        if len(self.randomizer_ids) != len(self.block_ids):
            raise ValueError(
                f"randomizer count {len(self.randomizer_ids)} does not match block count {len(self.block_ids)}"
            )
        return self

    def chunk_length(self, index: int) -> int:
        """Payload bytes carried by the block at index."""
        if index < 0 or index >= len(self.block_ids):
            raise IndexError(index)
        if index < len(self.block_ids) - 1:
            return self.block_size
        return self.file_size - self.block_size * index

    def to_json(self) -> bytes:
        """Serialize with wire keys, sorted and without whitespace."""
        data = self.model_dump(by_alias=True)
        return json.dumps(data, sort_keys=True, separators=(',', ':'), ensure_ascii=True).encode("utf-8")

    @classmethod
    def from_json(cls, payload: bytes) -> FileRepresentation:
        """
        Parse a serialized record, checking the format version first.

        Raises:
            UnsupportedVersion: If the version tag is missing or unknown
            ValueError: If the payload is not JSON or fails validation
        """
        try:
            data = json.loads(payload)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ValueError(f"representation is not valid JSON: {e}") from e

        if not isinstance(data, dict):
            raise ValueError("representation must be a JSON object")

        version = data.get("version")
        if not isinstance(version, str) or version not in SUPPORTED_VERSIONS:
            raise UnsupportedVersion(f"unsupported representation version: {version!r}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"invalid representation: {e}") from e
