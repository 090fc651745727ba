"""Distillation: compact every entry into apps.min.json and slugs.json.

Flow per run:
1. Load the existing aggregate (empty if absent)
2. Pick the work set (given slugs, or every entry folder)
3. Per entry, sequentially: validate, mirror the logo, rewrite meta.json
   when the logo moved, upsert the summary
4. Persist both artifacts, even when some entries failed
5. Sign apps.min.json when a signing secret is configured

One bad entry is logged and skipped; it never aborts the batch.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union

from registry.lib.logging_config import log_with_context
from registry.lib.signing import sign
from registry.services.assets import AssetSynchronizer
from registry.services.index import APPS_MIN_FILENAME, AggregateIndex
from registry.services.metadata import AppSummary, MetadataStore
from registry.services.settings import RegistrySettings

logger = logging.getLogger(__name__)


@dataclass
class DistillReport:
    """Summary of a distillation run.

    Attributes:
        processed: Slugs whose summary was upserted
        failed: Slugs skipped because of per-entry errors
        uploaded: Slugs whose logo was sent to the hosted store
        total_apps: Number of summaries in the persisted aggregate
        signature: HMAC-SHA256 of apps.min.json, if signing is configured
    """

    processed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    uploaded: list[str] = field(default_factory=list)
    total_apps: int = 0
    signature: Optional[str] = None


def distill(
    apps_dir: Union[str, Path],
    data_dir: Union[str, Path],
    only_slugs: Optional[Sequence[str]] = None,
    settings: Optional[RegistrySettings] = None,
    synchronizer: Optional[AssetSynchronizer] = None,
) -> DistillReport:
    """Distill the catalog into the aggregate artifacts.

    Args:
        apps_dir: Catalog directory (one folder per entry)
        data_dir: Directory for apps.min.json and slugs.json
        only_slugs: Entries to reprocess; all entries when empty or None
        settings: Run settings (read from the environment if None)
        synchronizer: Logo synchronizer (built from settings if None)

    Returns:
        DistillReport for the run

    Raises:
        OSError: If the catalog directory cannot be listed
    """
    settings = settings or RegistrySettings.from_config()
    synchronizer = synchronizer or AssetSynchronizer(settings)
    metadata = MetadataStore(apps_dir)
    report = DistillReport()

    data_dir = Path(data_dir)
    data_dir.mkdir(parents=True, exist_ok=True)

    index = AggregateIndex.load(data_dir)

    dir_slugs = metadata.list_slugs()
    if only_slugs:
        slugs = list(only_slugs)
        logger.info(f"Processing only changed dapps: {', '.join(slugs)}")
    else:
        slugs = dir_slugs
        logger.info("Processing all dapps (full rebuild).")

    for slug in slugs:
        meta_path = metadata.meta_path(slug)
        try:
            summary, uploaded = _distill_entry(metadata, synchronizer, slug)
        except Exception as e:
            log_with_context(
                logger,
                "error",
                "Error processing meta.json.",
                metaPath=str(meta_path),
                error=str(e),
            )
            report.failed.append(slug)
            continue

        if index.upsert(summary):
            log_with_context(logger, "info", f"Updated existing app in {APPS_MIN_FILENAME}", slug=summary.slug)
        else:
            log_with_context(logger, "info", f"Added new app to {APPS_MIN_FILENAME}", slug=summary.slug)
        index.track_slug(summary.slug)

        report.processed.append(summary.slug)
        if uploaded:
            report.uploaded.append(summary.slug)

    apps_min_content = index.persist()
    report.total_apps = len(index.summaries)

    if settings.signing_configured:
        report.signature = sign(settings.hmac_secret, apps_min_content)
        log_with_context(
            logger,
            "info",
            f"Generated HMAC-SHA256 signature for {APPS_MIN_FILENAME}.",
            signature=report.signature,
        )
    else:
        logger.warning(
            "HMAC_SECRET is not set or is a placeholder. Skipping HMAC signature generation."
        )

    logger.info(
        f"Distillation complete: {len(report.processed)} processed, {len(report.failed)} failed"
    )
    return report


def _distill_entry(
    metadata: MetadataStore, synchronizer: AssetSynchronizer, slug: str
) -> tuple[AppSummary, bool]:
    """Validate one entry, mirror its logo and build its summary.

    Returns:
        (summary, whether the logo was uploaded during this run)
    """
    meta = metadata.read(slug)
    logo_url = meta.logo_url
    uploaded = False

    if synchronizer.is_hosted_url(logo_url):
        log_with_context(logger, "info", "Already using hosted URL, skipping upload", slug=meta.slug)
        return AppSummary.from_meta(meta, logo_url), uploaded

    source = metadata.logo_source(slug, logo_url)
    logger.info(f"Processing image for {meta.slug}: {source}")
    result = synchronizer.try_sync(source, slug)

    if result.succeeded and synchronizer.is_hosted_url(result.hosted_url):
        logo_url = result.hosted_url
        uploaded = result.uploaded
        if metadata.update_logo_url(slug, logo_url):
            log_with_context(
                logger,
                "info",
                "Updated meta.json with hosted URL.",
                slug=meta.slug,
                metaPath=str(metadata.meta_path(slug)),
                logoUrl=logo_url,
            )
    else:
        log_with_context(
            logger,
            "warning",
            "Hosted upload skipped or failed. Keeping original logoUrl.",
            slug=meta.slug,
            originalLogoUrl=meta.logo_url,
        )

    return AppSummary.from_meta(meta, logo_url), uploaded
