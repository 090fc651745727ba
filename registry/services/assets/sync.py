"""Keep each entry's logo mirrored in the hosted asset store.

The synchronizer is fail-open: whatever goes wrong, callers get back a
usable logo reference (the hosted URL, or the original reference) and the
rest of the catalog keeps distilling.
"""

import hashlib
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import httpx

from registry.lib.logging_config import log_with_context
from registry.services.minio import HostedAsset, create_minio_client
from registry.services.settings import LOGO_FOLDER, RegistrySettings

from .protocols import AssetStore

logger = logging.getLogger(__name__)


@dataclass
class SyncResult:
    """Outcome of one synchronization attempt.

    Attributes:
        hosted_url: URL callers should use (original reference on failure)
        succeeded: Whether hosted_url points at the hosted store
        uploaded: Whether bytes were sent during this attempt
        error: Failure description if not succeeded
    """

    hosted_url: str
    succeeded: bool
    uploaded: bool = False
    error: Optional[str] = None

    @classmethod
    def ok(cls, hosted_url: str, uploaded: bool = False) -> "SyncResult":
        return cls(hosted_url=hosted_url, succeeded=True, uploaded=uploaded)

    @classmethod
    def fallback(cls, image_ref: str, error: str) -> "SyncResult":
        return cls(hosted_url=image_ref, succeeded=False, error=error)


def _read_local(path: str) -> Optional[bytes]:
    try:
        return Path(path).read_bytes()
    except OSError:
        return None


class AssetSynchronizer:
    """Ensures a hosted copy of a logo exists and is current."""

    def __init__(
        self,
        settings: RegistrySettings,
        store: Optional[AssetStore] = None,
        http_client: Optional[httpx.Client] = None,
    ):
        """Initialize the synchronizer.

        Args:
            settings: Run settings (hosting credentials, timeouts)
            store: Asset store; a MinIO client is created on first use if None
            http_client: Client used to fetch remote source images
        """
        self.settings = settings
        self._store = store
        self._http_client = http_client

    @property
    def store(self) -> AssetStore:
        if self._store is None:
            self._store = create_minio_client(self.settings.hosting)
        return self._store

    def is_hosted_url(self, url: str) -> bool:
        return self.settings.hosting.is_hosted_url(url)

    def sync(self, image_ref: str, key: str, force_overwrite: bool = False) -> str:
        """Return the hosted URL for image_ref, uploading when needed.

        Never raises; on any failure the original image_ref is returned.

        Args:
            image_ref: Local file path or remote URL of the source image
            key: Stable entry key (the slug)
            force_overwrite: Upload even when the hosted copy looks current

        Returns:
            Hosted URL, or image_ref unchanged
        """
        return self.try_sync(image_ref, key, force_overwrite).hosted_url

    def try_sync(
        self, image_ref: str, key: str, force_overwrite: bool = False
    ) -> SyncResult:
        """Like sync(), but reports whether the hosted store was reached."""
        if not self.settings.hosting_configured:
            logger.warning(
                "Hosted asset store credentials not properly configured. "
                "Image uploads will be skipped."
            )
            return SyncResult.fallback(image_ref, "hosted asset store not configured")

        try:
            return self._sync(image_ref, key, force_overwrite)
        except Exception as e:
            log_with_context(
                logger,
                "error",
                "Error uploading to hosted asset store.",
                imageRef=image_ref,
                key=key,
                error=str(e),
            )
            return SyncResult.fallback(image_ref, f"{type(e).__name__}: {e}")

    def _sync(self, image_ref: str, key: str, force_overwrite: bool) -> SyncResult:
        is_local = not image_ref.startswith("http")
        local_bytes = _read_local(image_ref) if is_local else None
        file_hash = hashlib.md5(local_bytes).hexdigest() if local_bytes is not None else None

        path = f"{LOGO_FOLDER}/{key}"
        existing = self._lookup(path)

        if existing and not force_overwrite:
            if is_local and file_hash:
                if existing.file_hash == file_hash:
                    log_with_context(logger, "info", "Image unchanged, skipping upload", slug=key)
                    return SyncResult.ok(existing.url)
                log_with_context(logger, "info", "Image changed, will overwrite", slug=key)
            else:
                log_with_context(
                    logger, "info", "Image already exists in hosted store, skipping upload", slug=key
                )
                return SyncResult.ok(existing.url)

        if is_local:
            data = local_bytes if local_bytes is not None else Path(image_ref).read_bytes()
            content_type = mimetypes.guess_type(image_ref)[0] or "application/octet-stream"
        else:
            data, content_type = self._fetch_remote(image_ref)

        asset = self.store.upload(path, data, content_type=content_type, file_hash=file_hash)
        log_with_context(
            logger, "info", "Image uploaded to hosted asset store", slug=key, hostedUrl=asset.url
        )
        return SyncResult.ok(asset.url, uploaded=True)

    def _lookup(self, path: str) -> Optional[HostedAsset]:
        # Lookup failures mean "unknown", which is handled as "needs upload"
        try:
            return self.store.lookup(path)
        except Exception as e:
            logger.debug(f"Lookup of {path} failed, treating as absent: {e}")
            return None

    def _fetch_remote(self, url: str) -> tuple[bytes, str]:
        if self._http_client is not None:
            response = self._http_client.get(url)
        else:
            with httpx.Client(timeout=self.settings.probe_timeout, follow_redirects=True) as client:
                response = client.get(url)
        response.raise_for_status()
        content_type = response.headers.get("content-type", "application/octet-stream")
        return response.content, content_type.split(";")[0].strip()
