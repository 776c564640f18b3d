"""Error kinds raised by the storage helpers.

Callers can catch ObjectStoreError for any failure originating in this package.
Exceptions raised by caller-supplied callbacks are never wrapped.
"""

from typing import Optional


class ObjectStoreError(Exception):
    """Base class for object storage failures."""

    def __init__(self, message: str, bucket: Optional[str] = None, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.bucket = bucket
        self.key = key


class ObjectNotFoundError(ObjectStoreError):
    """No object exists at the requested bucket/key."""


class StorageTransportError(ObjectStoreError):
    """Session, network, authentication or permission failure."""


class OperationTimeoutError(ObjectStoreError):
    """The operation did not complete within its deadline."""


class ArchiveError(ObjectStoreError):
    """Archive bytes could not be encoded or decoded."""


class NetworkFetchError(ObjectStoreError):
    """An HTTP fetch failed or returned a non-2xx status."""

    def __init__(self, message: str, url: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code
