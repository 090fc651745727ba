"""Tests for the MinIO logo store wrapper and its configuration.

Run with: uv run pytest registry/services/tests/unit/test_minio_client.py
"""

import json
from unittest.mock import MagicMock

import pytest
from minio.error import S3Error

from registry.services.minio import HostedAsset, MinIOClient, MinIOConfig


def s3_error(code: str) -> S3Error:
    return S3Error(
        code=code,
        message=f"{code} message",
        resource="resource",
        request_id="request-id",
        host_id="host-id",
        response=MagicMock(),
    )


@pytest.fixture
def mock_minio():
    return MagicMock()


@pytest.fixture
def client(hosting_config, mock_minio):
    return MinIOClient(hosting_config, client=mock_minio)


# -----------------------------------------------------------------------------
# MinIOConfig
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestMinIOConfig:
    """Derived connection properties."""

    def test_endpoint_and_tls_from_scheme(self):
        cfg = MinIOConfig(url="https://assets.example.com/")
        assert cfg.endpoint == "assets.example.com"
        assert cfg.secure is True
        assert MinIOConfig(url="http://localhost:9000").secure is False

    def test_public_base_defaults_to_url(self, hosting_config):
        assert hosting_config.public_base == "https://assets.example.com/dapp-registry/"

    def test_public_url_overrides(self):
        cfg = MinIOConfig(url="http://minio:9000", public_url="https://cdn.example.com/", bucket="b")
        assert cfg.public_base == "https://cdn.example.com/b/"
        assert cfg.is_hosted_url("https://cdn.example.com/b/dapp-store-logos/x")
        assert not cfg.is_hosted_url("http://minio:9000/b/dapp-store-logos/x")

    def test_configured(self, hosting_config):
        assert hosting_config.configured is True
        assert MinIOConfig().configured is False
        assert MinIOConfig(
            url="https://a.example.com", access_key="your_access_key", secret_key="s"
        ).configured is False

    def test_unset_url_never_hosted(self):
        assert MinIOConfig().is_hosted_url("https://example.com/logo.png") is False


# -----------------------------------------------------------------------------
# MinIOClient
# -----------------------------------------------------------------------------


@pytest.mark.unit
class TestLookup:
    """stat_object results and not-found handling."""

    def test_returns_hash_from_metadata(self, client, mock_minio):
        mock_minio.stat_object.return_value = MagicMock(metadata={"x-amz-meta-file-hash": "abc"})

        asset = client.lookup("dapp-store-logos/dapp1")

        mock_minio.stat_object.assert_called_once_with("dapp-registry", "dapp-store-logos/dapp1")
        assert asset == HostedAsset(
            path="dapp-store-logos/dapp1",
            url="https://assets.example.com/dapp-registry/dapp-store-logos/dapp1",
            file_hash="abc",
        )

    def test_missing_hash_is_none(self, client, mock_minio):
        mock_minio.stat_object.return_value = MagicMock(metadata=None)
        assert client.lookup("p").file_hash is None

    def test_not_found_returns_none(self, client, mock_minio):
        mock_minio.stat_object.side_effect = s3_error("NoSuchKey")
        assert client.lookup("p") is None

    def test_other_errors_propagate(self, client, mock_minio):
        mock_minio.stat_object.side_effect = s3_error("AccessDenied")
        with pytest.raises(S3Error):
            client.lookup("p")


@pytest.mark.unit
class TestUpload:
    """put_object arguments."""

    def test_upload_sets_metadata(self, client, mock_minio):
        asset = client.upload("dapp-store-logos/dapp1", b"png", "image/png", file_hash="abc")

        args, kwargs = mock_minio.put_object.call_args
        assert args[0] == "dapp-registry"
        assert args[1] == "dapp-store-logos/dapp1"
        assert args[2].read() == b"png"
        assert args[3] == 3
        assert kwargs["content_type"] == "image/png"
        assert kwargs["metadata"] == {"Cache-Control": "no-cache", "file-hash": "abc"}
        assert asset.url.endswith("/dapp-registry/dapp-store-logos/dapp1")

    def test_upload_without_hash(self, client, mock_minio):
        client.upload("p", b"x")
        assert mock_minio.put_object.call_args.kwargs["metadata"] == {"Cache-Control": "no-cache"}


@pytest.mark.unit
def test_ensure_bucket_creates_missing(client, mock_minio):
    mock_minio.bucket_exists.return_value = False
    client.ensure_bucket()
    mock_minio.make_bucket.assert_called_once_with("dapp-registry")

    mock_minio.reset_mock()
    mock_minio.bucket_exists.return_value = True
    client.ensure_bucket()
    mock_minio.make_bucket.assert_not_called()


@pytest.mark.unit
@pytest.mark.parametrize("exists", [False, True])
def test_ensure_bucket_allows_anonymous_logo_reads(client, mock_minio, exists):
    mock_minio.bucket_exists.return_value = exists
    client.ensure_bucket()

    mock_minio.set_bucket_policy.assert_called_once()
    bucket, policy_json = mock_minio.set_bucket_policy.call_args.args
    assert bucket == "dapp-registry"
    [statement] = json.loads(policy_json)["Statement"]
    assert statement["Effect"] == "Allow"
    assert statement["Principal"] == {"AWS": ["*"]}
    assert statement["Action"] == ["s3:GetObject"]
    assert statement["Resource"] == ["arn:aws:s3:::dapp-registry/dapp-store-logos/*"]
