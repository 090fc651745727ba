"""Factory functions for creating MinIO service instances."""

from typing import Optional

from .client import MinIOClient
from .config import MinIOConfig


def create_minio_client(config: Optional[MinIOConfig] = None) -> MinIOClient:
    """Create and initialize a MinIO client.

    Loads configuration from environment variables when none is given and
    ensures the bucket exists.

    Returns:
        Initialized MinIOClient instance.
    """
    config = config or MinIOConfig.from_config()
    client = MinIOClient(config)
    client.ensure_bucket()
    return client
