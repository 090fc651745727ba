"""MinIO client wrapper for hosted logo storage."""

import json
from dataclasses import dataclass
from io import BytesIO
from typing import Optional

from minio import Minio
from minio.error import S3Error

from .config import MinIOConfig

FILE_HASH_META = "file-hash"
NOT_FOUND_CODES = {"NoSuchKey", "NoSuchObject", "ResourceNotFound"}
LOGO_FOLDER = "dapp-store-logos"


@dataclass
class HostedAsset:
    """A stored object as seen through its public URL.

    Attributes:
        path: Object path in bucket
        url: Public URL of the object
        file_hash: Content hash recorded at upload time, if any
    """

    path: str
    url: str
    file_hash: Optional[str] = None


class MinIOClient:
    """Client for storing and looking up hosted logos in MinIO."""

    def __init__(self, config: MinIOConfig, client: Optional[Minio] = None):
        """Initialize MinIO client.

        Args:
            config: MinIOConfig instance with connection details.
            client: Optional pre-built Minio client (tests).
        """
        self.config = config
        self.client = client or Minio(
            config.endpoint,
            access_key=config.access_key,
            secret_key=config.secret_key,
            secure=config.secure,
        )
        self.bucket = config.bucket

    def ensure_bucket(self) -> None:
        """Create bucket if it doesn't exist and open the logo folder for anonymous reads.

        The policy is applied on every call so an existing private bucket
        still serves the hosted logo URLs.
        """
        if not self.client.bucket_exists(self.bucket):
            self.client.make_bucket(self.bucket)
        self.client.set_bucket_policy(self.bucket, json.dumps(self.public_read_policy()))

    def public_read_policy(self, prefix: str = LOGO_FOLDER) -> dict:
        """Bucket policy granting anonymous GetObject under prefix."""
        return {
            "Version": "2012-10-17",
            "Statement": [
                {
                    "Effect": "Allow",
                    "Principal": {"AWS": ["*"]},
                    "Action": ["s3:GetObject"],
                    "Resource": [f"arn:aws:s3:::{self.bucket}/{prefix}/*"],
                }
            ],
        }

    def object_url(self, path: str) -> str:
        """Public URL for an object path."""
        return f"{self.config.public_base}{path}"

    def lookup(self, path: str) -> Optional[HostedAsset]:
        """Look up an object and its recorded hash.

        Args:
            path: Object path in bucket.

        Returns:
            HostedAsset, or None if the object does not exist.
        """
        try:
            stat = self.client.stat_object(self.bucket, path)
        except S3Error as e:
            if e.code in NOT_FOUND_CODES:
                return None
            raise

        metadata = stat.metadata or {}
        file_hash = metadata.get(f"x-amz-meta-{FILE_HASH_META}")
        return HostedAsset(path=path, url=self.object_url(path), file_hash=file_hash)

    def upload(
        self,
        path: str,
        data: bytes,
        content_type: str = "application/octet-stream",
        file_hash: Optional[str] = None,
    ) -> HostedAsset:
        """Store bytes under path, replacing any previous object.

        Args:
            path: Object path in bucket.
            data: Object content.
            content_type: MIME type served to clients.
            file_hash: Optional content hash kept as object metadata.

        Returns:
            HostedAsset for the stored object.
        """
        # no-cache makes CDN edges revalidate the replaced object
        metadata = {"Cache-Control": "no-cache"}
        if file_hash:
            metadata[FILE_HASH_META] = file_hash

        self.client.put_object(
            self.bucket,
            path,
            BytesIO(data),
            len(data),
            content_type=content_type,
            metadata=metadata,
        )
        return HostedAsset(path=path, url=self.object_url(path), file_hash=file_hash)
