"""Prefix listing with optional client-side filtering."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

from botocore.exceptions import BotoCoreError, ClientError

from storage import object_store

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FileMetadata:
    """Read-only view of a stored object's attributes."""

    bucket: str
    name: str
    size: int = 0
    etag: Optional[str] = None
    last_modified: Optional[datetime] = None
    storage_class: Optional[str] = None

    @classmethod
    def from_listing(cls, bucket: str, entry: dict[str, Any]) -> "FileMetadata":
        """Build from one entry of a list_objects_v2 "Contents" array."""
        etag = entry.get("ETag")
        return cls(
            bucket=bucket,
            name=entry["Key"],
            size=int(entry.get("Size", 0)),
            etag=etag.strip('"') if etag else None,
            last_modified=entry.get("LastModified"),
            storage_class=entry.get("StorageClass"),
        )

    @property
    def file_name(self) -> str:
        """Last slash-delimited segment of the key ("" for directory markers)."""
        return self.name.split("/")[-1]

    @property
    def uri(self) -> str:
        return object_store.uri_for(self.bucket, self.name)

    def get(self) -> bytes:
        """Fetch the referenced object's bytes."""
        return object_store.get_bytes(self.bucket, self.name)


def files_at_path(
    bucket: str,
    prefix: str,
    predicate: Optional[Callable[[FileMetadata], bool]] = None,
) -> list[FileMetadata]:
    """
    List objects whose key starts with prefix.

    Every result page is followed, so the caller sees one ordered list.
    Keys ending in "/" (directory markers) are skipped.

    Args:
        bucket: Bucket name
        prefix: Key prefix, e.g. "reports/2024/"
        predicate: Optional filter; only entries it accepts are returned,
            in listing order

    Raises:
        StorageTransportError: If a listing request fails
        OperationTimeoutError: If a listing request exceeds its deadline
    """
    entries: list[FileMetadata] = []
    try:
        client = object_store._get_s3_client(object_store.list_timeout())
        paginator = client.get_paginator("list_objects_v2")
        for page in paginator.paginate(Bucket=bucket, Prefix=prefix):
            for entry in page.get("Contents", []):
                metadata = FileMetadata.from_listing(bucket, entry)
                if metadata.file_name:
                    entries.append(metadata)
    except (ClientError, BotoCoreError) as exc:
        object_store.raise_storage_error(exc, "list", bucket, prefix)

    logger.debug("Listed %d objects under s3://%s/%s", len(entries), bucket, prefix)
    if predicate is None:
        return entries
    return [entry for entry in entries if predicate(entry)]
