"""Default configuration values for the registry toolkit.

All hardcoded defaults live here. Distillation, validation and link checks
are fully functional with these defaults; logo hosting and artifact signing
stay disabled until real credentials are provided.

Config hierarchy: .env → these defaults
"""

from typing import Any

# =============================================================================
# Configuration Defaults
# =============================================================================

DEFAULTS: dict[str, Any] = {
    # -------------------------------------------------------------------------
    # Catalog layout
    # -------------------------------------------------------------------------
    "APPS_DIR": "data/apps",
    "DATA_DIR": "data",

    # -------------------------------------------------------------------------
    # Hosted asset store (MinIO / S3 compatible, empty = not configured)
    # -------------------------------------------------------------------------
    "HOSTED_ASSET_URL": "",
    "HOSTED_ASSET_PUBLIC_URL": "",
    "HOSTED_ASSET_ACCESS_KEY": "",
    "HOSTED_ASSET_SECRET_KEY": "",
    "HOSTED_ASSET_BUCKET": "dapp-registry",

    # -------------------------------------------------------------------------
    # Integrity signing and webhook verification (empty = not configured)
    # -------------------------------------------------------------------------
    "HMAC_SECRET": "",

    # -------------------------------------------------------------------------
    # Webhook server
    # -------------------------------------------------------------------------
    "PORT": 3000,

    # -------------------------------------------------------------------------
    # Logging
    # -------------------------------------------------------------------------
    "LOG_LEVEL": "INFO",
    "LOG_FORMAT": "json",
}

# Keys whose values must never be logged or displayed in full
SENSITIVE_KEYS: set[str] = {
    "HOSTED_ASSET_ACCESS_KEY",
    "HOSTED_ASSET_SECRET_KEY",
    "HMAC_SECRET",
}

# Values shipped in example .env files; treated the same as "not set"
PLACEHOLDER_VALUES: dict[str, set[str]] = {
    "HOSTED_ASSET_ACCESS_KEY": {"your_api_key", "your_access_key"},
    "HOSTED_ASSET_SECRET_KEY": {"your_api_secret", "your_secret_key"},
    "HMAC_SECRET": {"super_secret_hmac_key"},
}


def get_default(key: str) -> Any:
    """Get default value for a config key.

    Args:
        key: Configuration key

    Returns:
        Default value or None if key not found
    """
    return DEFAULTS.get(key)


def is_placeholder(key: str, value: Any) -> bool:
    """Check whether a value is empty or a known example placeholder."""
    if value is None or value == "":
        return True
    return str(value) in PLACEHOLDER_VALUES.get(key, set())
