"""HMAC-SHA256 helpers for artifact signatures and webhook verification."""

import hashlib
import hmac
from typing import Optional, Union

SIGNATURE_PREFIX = "sha256="


def _as_bytes(value: Union[str, bytes]) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else value


def sign(secret: str, payload: Union[str, bytes]) -> str:
    """Hex HMAC-SHA256 of payload under secret."""
    return hmac.new(_as_bytes(secret), _as_bytes(payload), hashlib.sha256).hexdigest()


def signature_header(secret: str, payload: Union[str, bytes]) -> str:
    """Value of an x-hub-signature-256 header for payload."""
    return f"{SIGNATURE_PREFIX}{sign(secret, payload)}"


def verify_signature(secret: str, payload: Union[str, bytes], header: Optional[str]) -> bool:
    """Constant-time check of a sha256=<hex> header against payload."""
    if not header:
        return False
    return hmac.compare_digest(header, signature_header(secret, payload))
