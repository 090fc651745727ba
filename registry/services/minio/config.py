"""Hosted asset store configuration."""

from dataclasses import dataclass
from typing import Optional

from registry.lib.config_manager import ConfigManager, config as default_config
from registry.lib.defaults import is_placeholder


@dataclass
class MinIOConfig:
    """Connection details for the MinIO / S3-compatible logo store.

    Attributes:
        url: API endpoint (scheme decides TLS)
        access_key: Access key ID
        secret_key: Secret access key
        bucket: Bucket holding hosted logos
        public_url: Public base URL for hosted objects (defaults to url)
    """

    url: str = ""
    access_key: str = ""
    secret_key: str = ""
    bucket: str = "dapp-registry"
    public_url: str = ""

    @classmethod
    def from_config(cls, cfg: Optional[ConfigManager] = None) -> "MinIOConfig":
        """Build configuration from the environment-backed config manager."""
        cfg = cfg or default_config
        return cls(
            url=cfg.get("HOSTED_ASSET_URL"),
            access_key=cfg.get("HOSTED_ASSET_ACCESS_KEY"),
            secret_key=cfg.get("HOSTED_ASSET_SECRET_KEY"),
            bucket=cfg.get("HOSTED_ASSET_BUCKET"),
            public_url=cfg.get("HOSTED_ASSET_PUBLIC_URL"),
        )

    @property
    def configured(self) -> bool:
        """True when every credential is present and none is a placeholder."""
        return bool(self.url and self.bucket) and not (
            is_placeholder("HOSTED_ASSET_ACCESS_KEY", self.access_key)
            or is_placeholder("HOSTED_ASSET_SECRET_KEY", self.secret_key)
        )

    @property
    def secure(self) -> bool:
        return self.url.startswith("https://")

    @property
    def endpoint(self) -> str:
        return self.url.replace("http://", "").replace("https://", "").rstrip("/")

    @property
    def public_base(self) -> str:
        """Prefix shared by every hosted object URL."""
        base = (self.public_url or self.url).rstrip("/")
        return f"{base}/{self.bucket}/"

    def is_hosted_url(self, url: str) -> bool:
        """Check whether a URL already points into the hosted store."""
        if not (self.url or self.public_url):
            return False
        return url.startswith(self.public_base)
