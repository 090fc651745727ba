#!/usr/bin/env python
"""
Distill the dapp catalog into data/apps.min.json and data/slugs.json.

Logos are mirrored to the hosted asset store when it is configured, and
meta.json files are rewritten to point at the hosted copy.

Usage:
    registry-distill [SLUG ...] [--apps-dir DIR] [--data-dir DIR]

Examples:
    # Full rebuild
    registry-distill

    # Only the entries touched by a commit
    registry-distill uniswap aave
"""

import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from registry.cli.base import resolve_dirs, setup_script_environment
from registry.lib.config_manager import config
from registry.lib.logging_config import log_with_context
from registry.services.pipeline import distill

app = typer.Typer(help="Distill the dapp catalog into aggregate index files")
console = Console(stderr=True, width=120)
logger = logging.getLogger("registry.cli.distill")

ENV_KEYS = [
    "HOSTED_ASSET_URL",
    "HOSTED_ASSET_ACCESS_KEY",
    "HOSTED_ASSET_SECRET_KEY",
    "HMAC_SECRET",
]


@app.command()
def main(
    slugs: Optional[list[str]] = typer.Argument(None, help="Only reprocess these slugs"),
    apps_dir: Optional[Path] = typer.Option(None, "--apps-dir", help="Catalog directory"),
    data_dir: Optional[Path] = typer.Option(None, "--data-dir", help="Output directory"),
):
    """Run distillation (full rebuild unless slugs are given)."""
    setup_script_environment("distill")
    apps_dir, data_dir = resolve_dirs(apps_dir, data_dir)

    logger.info("Starting distillation process...")
    log_with_context(logger, "info", "Working directories", apps_dir=str(apps_dir), data_dir=str(data_dir))
    log_with_context(logger, "info", "Environment variables status", **config.env_status(ENV_KEYS))
    log_with_context(logger, "debug", "Resolved configuration", **config.masked())

    try:
        report = distill(apps_dir, data_dir, only_slugs=list(slugs) if slugs else None)
    except Exception as e:
        log_with_context(logger, "error", "Distillation failed with error", error=str(e))
        raise typer.Exit(1)

    table = Table(title="Distillation Summary")
    table.add_column("Status", style="bold")
    table.add_column("Count", justify="right")
    table.add_row("Processed", f"[green]{len(report.processed)}[/]")
    table.add_row("Logos uploaded", f"[cyan]{len(report.uploaded)}[/]")
    table.add_row("Failed", f"[red]{len(report.failed)}[/]")
    table.add_row("Total apps", str(report.total_apps))
    console.print(table)

    logger.info("Distillation completed successfully")


if __name__ == "__main__":
    app()
