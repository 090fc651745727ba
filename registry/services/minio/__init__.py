"""MinIO service module for hosted logo storage."""

from .config import MinIOConfig
from .client import LOGO_FOLDER, HostedAsset, MinIOClient
from .factory import create_minio_client

__all__ = ["LOGO_FOLDER", "MinIOConfig", "MinIOClient", "HostedAsset", "create_minio_client"]
