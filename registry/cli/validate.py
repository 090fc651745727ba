#!/usr/bin/env python
"""
Validate every entry in the dapp catalog.

Exits non-zero when any issue is found; each issue is logged first.

Usage:
    registry-validate [--apps-dir DIR]
"""

import asyncio
from pathlib import Path
from typing import Optional

import typer

from registry.cli.base import resolve_dirs, setup_script_environment
from registry.services.pipeline import ValidationFailedError, validate

app = typer.Typer(help="Validate dapp catalog metadata")


@app.command()
def main(
    apps_dir: Optional[Path] = typer.Option(None, "--apps-dir", help="Catalog directory"),
):
    """Run schema, slug, relation and logo checks."""
    setup_script_environment("validate")
    apps_dir, _ = resolve_dirs(apps_dir)

    try:
        asyncio.run(validate(apps_dir))
    except (ValidationFailedError, OSError):
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
