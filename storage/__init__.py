"""Helpers for S3-compatible object storage."""

from .errors import (
    ArchiveError,
    NetworkFetchError,
    ObjectNotFoundError,
    ObjectStoreError,
    OperationTimeoutError,
    StorageTransportError,
)
from .object_store import (
    close_clients,
    delete_object,
    get_bytes,
    object_exists,
    put_bytes,
    uri_for,
)
from .listing import FileMetadata, files_at_path
from .transforms import process_and_update_file, process_file
from .network import save_network_file
from .archive import unzip_files, zip_files

__all__ = [
    "ArchiveError",
    "FileMetadata",
    "NetworkFetchError",
    "ObjectNotFoundError",
    "ObjectStoreError",
    "OperationTimeoutError",
    "StorageTransportError",
    "close_clients",
    "delete_object",
    "files_at_path",
    "get_bytes",
    "object_exists",
    "process_and_update_file",
    "process_file",
    "put_bytes",
    "save_network_file",
    "unzip_files",
    "uri_for",
    "zip_files",
]
