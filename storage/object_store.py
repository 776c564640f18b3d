"""
Object store helpers for S3-compatible storage (AWS S3, MinIO, GCS interop).

This module provides blob transfer, existence checks and deletes against
any S3-compatible endpoint. A single client is kept per timeout profile and
reused by every call until close_clients() is invoked.

Environment Variables:
    STORAGE_ENDPOINT_URL: Custom S3-compatible endpoint (optional)
    STORAGE_FORCE_PATH_STYLE: Use path-style addressing (default: true)
    STORAGE_REGION: Region name (default: us-east-1)
    STORAGE_TIMEOUT_SECONDS: Read deadline for transfer calls (default: 60)
    STORAGE_CONNECT_TIMEOUT_SECONDS: Connect deadline (default: 10)
    STORAGE_DEFAULT_CONTENT_TYPE: Content type for uploads (default: application/octet-stream)
    AWS_ACCESS_KEY_ID: Access key
    AWS_SECRET_ACCESS_KEY: Secret key
"""

import logging
import threading
from functools import lru_cache
from typing import NoReturn, Optional, Union

import boto3
from botocore.client import BaseClient
from botocore.config import Config
from botocore.exceptions import (
    BotoCoreError,
    ClientError,
    ConnectTimeoutError,
    ReadTimeoutError,
)

from config.settings_helpers import (
    get_bool_setting,
    get_float_setting,
    get_setting,
)
from storage.errors import (
    ObjectNotFoundError,
    OperationTimeoutError,
    StorageTransportError,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0
DEFAULT_LIST_TIMEOUT_SECONDS = 30.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

_NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})

_open_clients: list[BaseClient] = []
_clients_lock = threading.Lock()

BytesLike = Union[bytes, bytearray, memoryview]


def transfer_timeout() -> float:
    return get_float_setting("STORAGE_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)


def list_timeout() -> float:
    return get_float_setting("STORAGE_LIST_TIMEOUT_SECONDS", DEFAULT_LIST_TIMEOUT_SECONDS)


def _get_s3_client(read_timeout: float) -> BaseClient:
    """Get or create the shared S3 client for the given read deadline."""
    # boto3's default session is not safe for concurrent client creation
    with _clients_lock:
        return _build_s3_client(read_timeout)


@lru_cache
def _build_s3_client(read_timeout: float) -> BaseClient:
    """
    Build a boto3 S3 client for the given read deadline. Callers hold _clients_lock.

    Configuration is determined by environment variables:
    - STORAGE_ENDPOINT_URL: If set, uses a custom S3-compatible endpoint
    - STORAGE_FORCE_PATH_STYLE: If true, uses path-style addressing
    - STORAGE_REGION: Region (default: us-east-1)
    - STORAGE_CONNECT_TIMEOUT_SECONDS: Connect deadline
    - AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY: Explicit credentials

    Automatic retries are disabled; callers decide whether to retry.
    """
    endpoint_url = get_setting("STORAGE_ENDPOINT_URL", None)
    force_path_style = get_bool_setting("STORAGE_FORCE_PATH_STYLE", True)
    region = get_setting("STORAGE_REGION", "us-east-1")
    access_key = get_setting("AWS_ACCESS_KEY_ID", None)
    secret_key = get_setting("AWS_SECRET_ACCESS_KEY", None)
    connect_timeout = get_float_setting(
        "STORAGE_CONNECT_TIMEOUT_SECONDS", DEFAULT_CONNECT_TIMEOUT_SECONDS
    )

    config_kwargs = {
        "signature_version": "s3v4",
        "connect_timeout": connect_timeout,
        "read_timeout": read_timeout,
        "retries": {"total_max_attempts": 1, "mode": "standard"},
    }
    # Path-style addressing is required for MinIO
    if force_path_style:
        config_kwargs["s3"] = {"addressing_style": "path"}

    client_kwargs = {"config": Config(**config_kwargs)}
    if endpoint_url:
        client_kwargs["endpoint_url"] = endpoint_url
    if access_key and secret_key:
        client_kwargs["aws_access_key_id"] = access_key
        client_kwargs["aws_secret_access_key"] = secret_key

    client = boto3.client("s3", region_name=region, **client_kwargs)
    _open_clients.append(client)
    return client


def close_clients() -> None:
    """Close every cached client. The next call builds fresh ones."""
    with _clients_lock:
        clients = list(_open_clients)
        _open_clients.clear()
        _build_s3_client.cache_clear()
    for client in clients:
        client.close()


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


def is_not_found(exc: BaseException) -> bool:
    """Return True if exc is the store's "object does not exist" response."""
    return isinstance(exc, ClientError) and _error_code(exc) in _NOT_FOUND_CODES


def raise_storage_error(exc: Exception, action: str, bucket: str, key: Optional[str] = None) -> NoReturn:
    """Translate a botocore failure into an ObjectStoreError and raise it."""
    location = f"s3://{bucket}/{key}" if key is not None else f"s3://{bucket}"
    if isinstance(exc, (ConnectTimeoutError, ReadTimeoutError)):
        logger.warning("Timed out during %s of %s: %s", action, location, exc)
        raise OperationTimeoutError(f"S3 {action} timed out: {exc}", bucket, key) from exc
    if is_not_found(exc):
        logger.warning("Object not found during %s: %s", action, location)
        raise ObjectNotFoundError(f"Object not found: {location}", bucket, key) from exc
    logger.error("Failed %s of %s: %s", action, location, exc)
    raise StorageTransportError(f"S3 {action} failed: {exc}", bucket, key) from exc


def put_bytes(bucket: str, key: str, data: BytesLike, content_type: Optional[str] = None) -> str:
    """
    Upload bytes to object storage, replacing any existing object.

    Args:
        bucket: Bucket name
        key: Object key (path)
        data: Bytes to upload
        content_type: MIME type; defaults to STORAGE_DEFAULT_CONTENT_TYPE

    Returns:
        Full URI in format s3://bucket/key

    Raises:
        StorageTransportError: If the upload fails
        OperationTimeoutError: If the upload exceeds its deadline
    """
    content_type = content_type or get_setting(
        "STORAGE_DEFAULT_CONTENT_TYPE", "application/octet-stream"
    )
    try:
        client = _get_s3_client(transfer_timeout())
        client.put_object(
            Bucket=bucket,
            Key=key,
            Body=bytes(data),
            ContentType=content_type,
        )
    except (ClientError, BotoCoreError) as exc:
        raise_storage_error(exc, "upload", bucket, key)
    uri = uri_for(bucket, key)
    logger.info("%s saved to %s", key, uri)
    return uri


def get_bytes(bucket: str, key: str) -> bytes:
    """
    Download bytes from object storage.

    Args:
        bucket: Bucket name
        key: Object key (path)

    Returns:
        Object contents as bytes

    Raises:
        ObjectNotFoundError: If no object exists at bucket/key
        StorageTransportError: If the download fails
        OperationTimeoutError: If the download exceeds its deadline
    """
    try:
        client = _get_s3_client(transfer_timeout())
        response = client.get_object(Bucket=bucket, Key=key)
        body = response["Body"]
        try:
            data = body.read()
        finally:
            body.close()
    except (ClientError, BotoCoreError) as exc:
        raise_storage_error(exc, "download", bucket, key)
    logger.info("%s retrieved from %s", key, uri_for(bucket, key))
    return data


def object_exists(bucket: str, key: str) -> bool:
    """
    Check if an object exists.

    Only the store's not-found response maps to False. Any other failure
    (credentials, permissions, network) is raised so it is never mistaken
    for absence. HEAD responses carry no error code, so a missing bucket
    also answers 404; the bucket is checked before reporting False.

    Raises:
        StorageTransportError: If the metadata request fails or the bucket does not exist
        OperationTimeoutError: If the request exceeds its deadline
    """
    try:
        client = _get_s3_client(transfer_timeout())
        client.head_object(Bucket=bucket, Key=key)
        return True
    except ClientError as exc:
        if not is_not_found(exc):
            raise_storage_error(exc, "head_object", bucket, key)
    except BotoCoreError as exc:
        raise_storage_error(exc, "head_object", bucket, key)

    try:
        client.head_bucket(Bucket=bucket)
    except (ClientError, BotoCoreError) as exc:
        if is_not_found(exc):
            logger.error("Bucket does not exist: s3://%s", bucket)
            raise StorageTransportError(f"Bucket does not exist: s3://{bucket}", bucket, key) from exc
        raise_storage_error(exc, "head_bucket", bucket, key)
    return False


def delete_object(bucket: str, key: str) -> None:
    """Delete an object. Deleting a missing key is not an error."""
    try:
        client = _get_s3_client(transfer_timeout())
        client.delete_object(Bucket=bucket, Key=key)
    except (ClientError, BotoCoreError) as exc:
        if is_not_found(exc):
            return
        raise_storage_error(exc, "delete", bucket, key)
    logger.debug("Deleted %s", uri_for(bucket, key))


def uri_for(bucket: str, key: str) -> str:
    """
    Generate a full URI for an object in object storage.

    Uses the s3:// scheme for every S3-compatible backend.
    The actual endpoint is determined by configuration, not the URI.
    """
    return f"s3://{bucket}/{key}"
