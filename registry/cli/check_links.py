#!/usr/bin/env python
"""
Check that every external link in the dapp catalog is reachable.

Usage:
    registry-check-links [SLUG ...] [--apps-dir DIR]

Examples:
    # Whole catalog
    registry-check-links

    # Only entries touched by a commit
    registry-check-links uniswap aave
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from registry.cli.base import resolve_dirs, setup_script_environment
from registry.services.pipeline import LinkCheckFailedError, check_links

app = typer.Typer(help="Audit external links of dapp catalog entries")


@app.command()
def main(
    slugs: Optional[list[str]] = typer.Argument(None, help="Only check these slugs"),
    apps_dir: Optional[Path] = typer.Option(None, "--apps-dir", help="Catalog directory"),
):
    """Probe all outbound links concurrently."""
    setup_script_environment("check-links")
    apps_dir, _ = resolve_dirs(apps_dir)

    try:
        asyncio.run(check_links(apps_dir, only_slugs=list(slugs) if slugs else None))
    except LinkCheckFailedError:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
