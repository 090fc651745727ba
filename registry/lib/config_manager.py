"""Configuration lookup: process env, then .env files, then built-in defaults.

Process environment always wins, so CI can inject secrets without touching
files. `.env.local` and `.env` at the project root fill in anything the
environment leaves unset; `registry.lib.defaults` covers the rest.

Usage:
    from registry.lib.config_manager import config

    secret = config.get("HMAC_SECRET")
    print(config.env_status(["HMAC_SECRET", "HOSTED_ASSET_ACCESS_KEY"]))
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from registry.lib.defaults import DEFAULTS, SENSITIVE_KEYS, get_default

logger = logging.getLogger(__name__)

ENV_FILES = (".env.local", ".env")
TRUTHY = {"true", "1", "yes", "on"}


def _find_project_root(start: Optional[Path] = None) -> Path:
    """Nearest ancestor holding a .git folder, or start itself."""
    start = (start or Path.cwd()).resolve()
    for candidate in (start, *start.parents):
        if (candidate / ".git").exists():
            return candidate
    return start


def _coerce_type(value: str, default: Any) -> Any:
    """Convert a raw env string to the type of its default.

    Unparseable integers fall back to the default itself.
    """
    if isinstance(default, bool):
        return value.strip().lower() in TRUTHY
    if isinstance(default, int):
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Ignoring non-integer value {value!r}, using {default}")
            return default
    return value


class ConfigManager:
    """Resolves configuration keys for one process.

    Dotenv files are read once, on construction, and never override values
    already present in the process environment.
    """

    def __init__(self, root: Optional[Path] = None):
        """Load dotenv files from root (the project root when omitted)."""
        self.root = root or _find_project_root()
        self.loaded_files: list[Path] = []
        for name in ENV_FILES:
            env_path = self.root / name
            if env_path.is_file():
                load_dotenv(dotenv_path=env_path, override=False)
                self.loaded_files.append(env_path)
                logger.debug(f"Loaded {env_path}")

    def get(self, key: str, default: Any = None) -> Any:
        """Resolve key, coercing env strings to the default's type.

        Args:
            key: Configuration key
            default: Fallback used instead of the built-in default

        Returns:
            Resolved value, or None for unknown keys without a fallback
        """
        fallback = get_default(key) if default is None else default
        raw = os.getenv(key)
        if raw is None:
            return fallback
        return raw if fallback is None else _coerce_type(raw, fallback)

    def get_all(self) -> dict[str, Any]:
        """Resolved value of every key that has a built-in default."""
        return {key: self.get(key) for key in DEFAULTS}

    def masked(self) -> dict[str, str]:
        """Like get_all(), with sensitive values masked for logging."""
        return {key: self.mask_value(key, value) for key, value in self.get_all().items()}

    def env_status(self, keys: list[str]) -> dict[str, str]:
        """Report which keys are set in the environment without revealing values."""
        return {key: "✓ SET" if os.getenv(key) else "✗ NOT SET" for key in keys}

    def is_sensitive(self, key: str) -> bool:
        return key in SENSITIVE_KEYS

    def mask_value(self, key: str, value: Any) -> str:
        """Hide the middle of sensitive values; short ones are hidden entirely."""
        text = "" if value is None else str(value)
        if not self.is_sensitive(key) or not text:
            return text
        if len(text) <= 8:
            return "*" * len(text)
        hidden = "*" * (len(text) - 8)
        return f"{text[:4]}{hidden}{text[-4:]}"


config = ConfigManager()
