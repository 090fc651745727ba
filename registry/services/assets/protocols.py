"""Protocol definitions for the hosted asset store.

Lets the synchronizer run against MinIO in production and an in-memory
fake in tests.
"""

from typing import Optional, Protocol

from registry.services.minio import HostedAsset


class AssetStore(Protocol):
    """Remote object store holding hosted logos, keyed by object path."""

    def lookup(self, path: str) -> Optional[HostedAsset]:
        """Return the stored object, or None if absent."""
        ...

    def upload(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        file_hash: Optional[str] = None,
    ) -> HostedAsset:
        """Store data under path, overwriting any previous object."""
        ...
