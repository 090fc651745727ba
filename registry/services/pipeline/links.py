"""External link audit.

Collects every outbound URL in the selected entries, probes them all
concurrently, and fails only after every probe has settled.
"""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Sequence, Union

import httpx

from registry.lib.logging_config import log_with_context
from registry.services.metadata import DappMeta, MetadataStore
from registry.services.minio import MinIOConfig
from registry.services.settings import PROBE_TIMEOUT_SECONDS, RegistrySettings

from .errors import LinkCheckFailedError
from .probe import BROWSER_HEADERS, ProbeResult, open_client, probe_url

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LinkTarget:
    """One URL to probe.

    Attributes:
        dapp_slug: Entry the URL belongs to
        url: URL to probe
        type: "logoUrl" or "link:<channel>"
    """

    dapp_slug: str
    url: str
    type: str


def extract_targets(slug: str, meta: DappMeta, hosting: Optional[MinIOConfig] = None) -> list[LinkTarget]:
    """List the outbound URLs of an entry.

    Logos already in the hosted store are ours and are not probed.
    """
    targets = []
    logo_url = meta.logo_url
    if logo_url.startswith("http") and not (hosting and hosting.is_hosted_url(logo_url)):
        targets.append(LinkTarget(dapp_slug=slug, url=logo_url, type="logoUrl"))

    for channel, url in meta.links.channels():
        if url.startswith("http"):
            targets.append(LinkTarget(dapp_slug=slug, url=url, type=f"link:{channel}"))
    return targets


async def check_links(
    apps_dir: Union[str, Path],
    only_slugs: Optional[Sequence[str]] = None,
    http_client: Optional[httpx.AsyncClient] = None,
    settings: Optional[RegistrySettings] = None,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> list[tuple[LinkTarget, ProbeResult]]:
    """Probe every external link in the catalog (or in only_slugs).

    Args:
        apps_dir: Catalog directory (one folder per entry)
        only_slugs: Entries to audit; all entries when empty or None
        http_client: Client used for probes (created if None)
        settings: Run settings, used to recognise hosted logos
        timeout: Per-probe timeout in seconds

    Returns:
        (target, result) pairs for every probed link

    Raises:
        LinkCheckFailedError: If any link is inaccessible or any entry unreadable
    """
    logger.info("Starting link accessibility check...")
    settings = settings or RegistrySettings.from_config()
    metadata = MetadataStore(apps_dir)
    has_broken_links = False

    try:
        slugs = list(only_slugs) if only_slugs else metadata.list_slugs()
    except OSError as e:
        log_with_context(
            logger, "error", "Error reading the catalog directory for link checking.", error=str(e)
        )
        slugs = []
        has_broken_links = True

    targets: list[LinkTarget] = []
    for slug in slugs:
        try:
            meta = metadata.read(slug)
        except (OSError, ValueError) as e:
            log_with_context(
                logger,
                "error",
                "Error processing meta.json for link extraction.",
                metaPath=str(metadata.meta_path(slug)),
                error=str(e),
            )
            has_broken_links = True
            continue
        targets.extend(extract_targets(slug, meta, settings.hosting))

    async with open_client(http_client, timeout) as client:
        results = await asyncio.gather(
            *(_check_target(client, target, timeout) for target in targets)
        )

    pairs = list(zip(targets, results))
    if any(not result.ok for result in results):
        has_broken_links = True

    if has_broken_links:
        logger.error("Link accessibility check failed: Some links are inaccessible.")
        raise LinkCheckFailedError()

    logger.info("All external links are accessible.")
    return pairs


async def _check_target(client: httpx.AsyncClient, target: LinkTarget, timeout: float) -> ProbeResult:
    result = await probe_url(client, target.url, headers=BROWSER_HEADERS, timeout=timeout)
    if result.ok:
        log_with_context(
            logger,
            "info",
            "Link accessible.",
            dappSlug=target.dapp_slug,
            type=target.type,
            url=target.url,
            statusCode=result.status_code,
        )
    else:
        log_with_context(
            logger,
            "error",
            "Link inaccessible.",
            dappSlug=target.dapp_slug,
            type=target.type,
            url=target.url,
            statusCode=result.status_code,
            error=result.error,
        )
    return result
