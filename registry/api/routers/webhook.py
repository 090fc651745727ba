"""Webhook endpoint for catalog revalidation.

Endpoints:
- POST /revalidate - Verify an HMAC-SHA256 signed payload

The signature arrives in `x-hub-signature-256` as `sha256=<hex>`, computed
over the raw request body with the shared HMAC secret.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Request
from fastapi.responses import JSONResponse

from registry.lib.signing import verify_signature
from registry.services.settings import RegistrySettings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])


# =============================================================================
# Dependencies
# =============================================================================


def get_settings() -> RegistrySettings:
    """Settings for the current request, read from the environment."""
    return RegistrySettings.from_config()


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/revalidate")
async def revalidate(
    request: Request,
    x_hub_signature_256: Optional[str] = Header(default=None),
    settings: RegistrySettings = Depends(get_settings),
):
    """Accept a webhook only when its signature matches the shared secret."""
    if not settings.signing_configured:
        logger.error("HMAC_SECRET is not configured. Cannot verify webhook.")
        return JSONResponse(status_code=500, content={"error": "Server configuration error."})

    if not x_hub_signature_256:
        logger.warning("Missing x-hub-signature-256 header.")
        return JSONResponse(status_code=401, content={"error": "Missing signature."})

    body = await request.body()
    if not verify_signature(settings.hmac_secret, body, x_hub_signature_256):
        logger.warning("Webhook signature verification failed.")
        return JSONResponse(status_code=401, content={"error": "Invalid signature."})

    logger.info("Webhook signature verified successfully.")
    return {"message": "Webhook received and signature verified."}
