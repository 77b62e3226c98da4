# storage/dto.py
from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel


class FileMetadata(BaseModel):
    """
    Canonical description of a stored file, independent of the
    provider-specific response it was built from.

    `version` is only known for listings and metadata lookups; `contents`
    and `visibility` are only filled in by writes.
    """

    type: Literal["file", "dir"] = "file"
    path: str
    size: int
    timestamp: int
    version: Optional[int] = None
    contents: Optional[bytes] = None
    visibility: Optional[Literal["public"]] = None


class DirectoryResult(BaseModel):
    path: str
    type: Literal["dir"] = "dir"


class ReadResult(BaseModel):
    contents: bytes


class StreamResult(BaseModel):
    stream: bytes


class MimetypeResult(BaseModel):
    mimetype: str


def parse_timestamp(value: str) -> int:
    """
    Converts a provider `created_at` string (ISO-8601, e.g. "2024-01-01T00:00:00Z")
    into Unix epoch seconds. Strings without an offset are read as UTC.
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return int(parsed.timestamp())
