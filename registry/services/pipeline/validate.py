"""Catalog validation: schema, slug/folder match, relations, logo presence.

Read-only. Every entry is checked and every issue logged before the
run decides pass/fail.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import httpx
from pydantic import ValidationError

from registry.lib.logging_config import log_with_context
from registry.services.metadata import DappMeta, MetadataStore
from registry.services.settings import PROBE_TIMEOUT_SECONDS

from .errors import ValidationFailedError
from .probe import open_client, probe_url

logger = logging.getLogger(__name__)


async def validate(
    apps_dir: Union[str, Path],
    http_client: Optional[httpx.AsyncClient] = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> None:
    """Validate every entry in the catalog.

    Args:
        apps_dir: Catalog directory (one folder per entry)
        http_client: Client for hosted-logo probes (created if None)
        timeout: Per-probe timeout in seconds

    Raises:
        OSError: If the catalog directory cannot be listed
        ValidationFailedError: If any issue was found
    """
    metadata = MetadataStore(apps_dir)

    try:
        all_slugs = metadata.list_slugs()
    except OSError as e:
        log_with_context(
            logger,
            "error",
            f"Could not read {apps_dir}. Ensure the directory exists.",
            error=str(e),
        )
        raise

    known = set(all_slugs)
    issues = 0
    async with open_client(http_client, timeout) as client:
        for slug in all_slugs:
            issues += await _validate_entry(metadata, client, slug, known, timeout)

    if issues:
        logger.error(f"Validation failed with {issues} issue(s). Please fix the errors above.")
        raise ValidationFailedError()

    logger.info("Validation successful.")


async def _validate_entry(
    metadata: MetadataStore,
    client: httpx.AsyncClient,
    slug: str,
    known: set[str],
    timeout: float,
) -> int:
    """Check one entry and return the number of issues logged."""
    meta_path = str(metadata.meta_path(slug))

    try:
        meta = DappMeta.model_validate(metadata.read_raw(slug))
    except ValidationError as e:
        log_with_context(
            logger,
            "error",
            "Schema validation failed.",
            metaPath=meta_path,
            issues=e.errors(include_url=False),
        )
        return 1
    except (OSError, ValueError) as e:
        log_with_context(
            logger, "error", "Error reading or parsing meta.json.", metaPath=meta_path, error=str(e)
        )
        return 1

    issues = await _check_logo(metadata, client, slug, meta, meta_path, timeout)

    if meta.slug != slug:
        log_with_context(
            logger,
            "error",
            "Slug does not match folder name.",
            metaPath=meta_path,
            expectedSlug=slug,
            actualSlug=meta.slug,
        )
        issues += 1

    for relation in meta.relations.all():
        if relation not in known:
            log_with_context(
                logger,
                "error",
                "Relation does not exist in the catalog.",
                metaPath=meta_path,
                relation=relation,
            )
            issues += 1

    return issues


async def _check_logo(
    metadata: MetadataStore,
    client: httpx.AsyncClient,
    slug: str,
    meta: DappMeta,
    meta_path: str,
    timeout: float,
) -> int:
    logo_url = meta.logo_url

    if logo_url.startswith("./"):
        logo_path = metadata.entry_dir(slug) / logo_url
        if not logo_path.is_file():
            log_with_context(
                logger,
                "error",
                "Local logo file does not exist.",
                metaPath=meta_path,
                logoPath=str(logo_path),
            )
            return 1
        return 0

    if logo_url.startswith(("http://", "https://")):
        result = await probe_url(client, logo_url, method="HEAD", timeout=timeout)
        if result.ok:
            return 0
        if result.status_code is not None:
            log_with_context(
                logger,
                "error",
                "Hosted logo URL is not accessible or returned an error status.",
                metaPath=meta_path,
                logoUrl=logo_url,
                status=result.status_code,
            )
        else:
            log_with_context(
                logger,
                "error",
                "Failed to access hosted logo URL (network error or timeout).",
                metaPath=meta_path,
                logoUrl=logo_url,
                error=result.error,
            )
        return 1

    log_with_context(
        logger,
        "error",
        "Logo URL is neither a local path nor a valid hosted URL.",
        metaPath=meta_path,
        logoUrl=logo_url,
    )
    return 1
