"""Per-run settings shared by the pipelines.

Built once at the start of a run and passed explicitly to the asset
synchronizer and the pipelines, so "provider not configured" is an input
rather than ambient process state.
"""

from dataclasses import dataclass, field
from typing import Optional

from registry.lib.config_manager import ConfigManager, config as default_config
from registry.lib.defaults import is_placeholder
from registry.services.minio import LOGO_FOLDER, MinIOConfig

PROBE_TIMEOUT_SECONDS = 5.0


@dataclass
class RegistrySettings:
    """Settings for one distillation / validation / link-check run.

    Attributes:
        hosting: Hosted asset store connection details
        hmac_secret: Secret for artifact signing and webhook verification
        probe_timeout: Timeout in seconds for every outbound request
    """

    hosting: MinIOConfig = field(default_factory=MinIOConfig)
    hmac_secret: str = ""
    probe_timeout: float = PROBE_TIMEOUT_SECONDS

    @classmethod
    def from_config(cls, cfg: Optional[ConfigManager] = None) -> "RegistrySettings":
        cfg = cfg or default_config
        return cls(
            hosting=MinIOConfig.from_config(cfg),
            hmac_secret=cfg.get("HMAC_SECRET"),
        )

    @property
    def hosting_configured(self) -> bool:
        return self.hosting.configured

    @property
    def signing_configured(self) -> bool:
        return not is_placeholder("HMAC_SECRET", self.hmac_secret)
