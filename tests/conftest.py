"""Shared test fixtures for storage helper tests."""

import sys
from pathlib import Path

# Add project root to path so imports work without PYTHONPATH
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from typing import Generator
from unittest.mock import patch

import pytest
from s3_fakes import FakeS3Client

TEST_BUCKET = "storage-package-test"

STORAGE_ENV_VARS = (
    "STORAGE_ENDPOINT_URL",
    "STORAGE_FORCE_PATH_STYLE",
    "STORAGE_REGION",
    "STORAGE_TIMEOUT_SECONDS",
    "STORAGE_LIST_TIMEOUT_SECONDS",
    "STORAGE_CONNECT_TIMEOUT_SECONDS",
    "STORAGE_NETWORK_TIMEOUT_SECONDS",
    "STORAGE_DEFAULT_CONTENT_TYPE",
    "STORAGE_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def storage_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Isolate tests from the host's storage settings and cached clients."""
    from storage import object_store

    for name in STORAGE_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    object_store.close_clients()
    yield
    object_store.close_clients()


@pytest.fixture
def fake_s3() -> Generator[FakeS3Client, None, None]:
    """Patch the cached S3 client with an in-memory fake."""
    client = FakeS3Client(buckets=[TEST_BUCKET])
    with patch("storage.object_store._get_s3_client", return_value=client):
        yield client
