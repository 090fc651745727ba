"""Shared pytest fixtures for registry/services tests."""

import logging
import tempfile
from pathlib import Path

import httpx
import pytest

from registry.lib.logging_config import record_context
from registry.services.minio import MinIOConfig
from registry.services.settings import RegistrySettings
from registry.services.tests.fakes import FakeAssetStore


# =============================================================================
# Mock Factories
# =============================================================================


def create_mock_transport(
    statuses: dict[str, int] | None = None,
    default_status: int = 200,
    errors: dict[str, Exception] | None = None,
    content: bytes = b"ok",
    calls: list[httpx.Request] | None = None,
) -> httpx.MockTransport:
    """Create an httpx transport answering by exact URL.

    Args:
        statuses: Dict mapping URL to status code
        default_status: Status for URLs not in statuses
        errors: Dict mapping URL to an exception raised for it
        content: Response body
        calls: Optional list that receives every request

    Returns:
        MockTransport usable with httpx.Client and httpx.AsyncClient
    """
    statuses = statuses or {}
    errors = errors or {}

    def handler(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        url = str(request.url)
        if url in errors:
            raise errors[url]
        return httpx.Response(statuses.get(url, default_status), content=content)

    return httpx.MockTransport(handler)


# =============================================================================
# Pytest Fixtures
# =============================================================================


@pytest.fixture
def temp_dir():
    """Temporary directory for tests.

    Automatically cleaned up after test completes.
    """
    with tempfile.TemporaryDirectory(ignore_cleanup_errors=True) as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def apps_dir(temp_dir):
    path = temp_dir / "apps"
    path.mkdir()
    return path


@pytest.fixture
def data_dir(temp_dir):
    return temp_dir / "data"


@pytest.fixture
def hosting_config():
    """Hosted store config with real-looking credentials."""
    return MinIOConfig(
        url="https://assets.example.com",
        access_key="test-access-key",
        secret_key="test-secret-key",
        bucket="dapp-registry",
    )


@pytest.fixture
def settings(hosting_config):
    """Settings with hosting and signing enabled."""
    return RegistrySettings(hosting=hosting_config, hmac_secret="test-hmac-secret")


@pytest.fixture
def unconfigured_settings():
    """Settings with neither hosting nor signing configured."""
    return RegistrySettings()


@pytest.fixture
def fake_store(hosting_config):
    """In-memory asset store sharing the hosted URL prefix of hosting_config."""
    return FakeAssetStore(hosting_config)


@pytest.fixture
def make_transport():
    """Factory fixture for httpx mock transports."""
    return create_mock_transport


@pytest.fixture
def log_contexts(caplog):
    """Capture INFO+ logs; call with a message fragment to get context fields.

    Example:
        >>> assert log_contexts("Link inaccessible.")[0]["statusCode"] == 404
    """
    caplog.set_level(logging.INFO)

    def _contexts(message: str) -> list[dict]:
        return [record_context(r) for r in caplog.records if message in r.getMessage()]

    return _contexts
