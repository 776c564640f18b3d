"""
Network import: fetch a file over HTTP and store it in object storage.

Environment Variables:
    STORAGE_NETWORK_TIMEOUT_SECONDS: Deadline for the HTTP fetch (default: 60)
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

import httpx

from config.settings_helpers import get_float_setting
from storage import object_store
from storage.errors import NetworkFetchError, OperationTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_NETWORK_TIMEOUT_SECONDS = 60.0


def _build_http_client(timeout: float) -> httpx.Client:
    return httpx.Client(timeout=timeout, follow_redirects=True)


def fetch_bytes(
    url: str,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> httpx.Response:
    """
    Issue a GET for url and return the fully read response.

    Raises:
        NetworkFetchError: If the request fails or the status is not 2xx
        OperationTimeoutError: If the request exceeds its deadline
    """
    if timeout is None:
        timeout = get_float_setting(
            "STORAGE_NETWORK_TIMEOUT_SECONDS", DEFAULT_NETWORK_TIMEOUT_SECONDS
        )
    try:
        with _build_http_client(timeout) as client:
            response = client.get(url, headers=dict(headers or {}))
    except httpx.TimeoutException as exc:
        logger.warning("Timed out fetching %s: %s", url, exc)
        raise OperationTimeoutError(f"GET {url} timed out: {exc}") from exc
    except (httpx.HTTPError, httpx.InvalidURL, UnicodeEncodeError) as exc:
        # Malformed URLs and non-ASCII header values fail while the request is built
        logger.warning("Failed to fetch %s: %s", url, exc)
        raise NetworkFetchError(f"GET {url} failed: {exc}", url) from exc

    if not response.is_success:
        logger.warning("GET %s returned %d", url, response.status_code)
        raise NetworkFetchError(
            f"GET {url} returned HTTP {response.status_code}",
            url,
            status_code=response.status_code,
        )
    return response


def save_network_file(
    url: str,
    bucket: str,
    key: str,
    headers: Optional[Mapping[str, str]] = None,
    timeout: Optional[float] = None,
) -> bytes:
    """
    Fetch url and store the response body at bucket/key.

    Non-2xx responses are rejected and nothing is stored.

    Args:
        url: Source URL
        bucket: Destination bucket
        key: Destination key
        headers: Extra request headers
        timeout: Fetch deadline in seconds; defaults to STORAGE_NETWORK_TIMEOUT_SECONDS

    Returns:
        The response body

    Raises:
        NetworkFetchError: If the fetch fails or returns a non-2xx status
        OperationTimeoutError: If the fetch or the upload exceeds its deadline
        StorageTransportError: If the upload fails
    """
    response = fetch_bytes(url, headers=headers, timeout=timeout)
    body = response.content
    content_type = response.headers.get("content-type")
    object_store.put_bytes(bucket, key, body, content_type=content_type)
    logger.info("Imported %s (%d bytes) to %s", url, len(body), object_store.uri_for(bucket, key))
    return body
