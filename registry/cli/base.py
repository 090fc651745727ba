"""Base utilities for the registry command-line scripts.

Usage:
    >>> from registry.cli.base import setup_script_environment
    >>> setup_script_environment("distill")
"""

import uuid
from pathlib import Path
from typing import Optional

from registry.lib.config_manager import config
from registry.lib.logging_config import RunFilter, setup_logging


def setup_script_environment(service_name: str) -> RunFilter:
    """Configure logging for a script run and tag it with a run ID.

    Log level and format come from LOG_LEVEL and LOG_FORMAT.

    Args:
        service_name: Name reported in structured logs

    Returns:
        RunFilter carrying the generated run ID
    """
    run_filter = setup_logging(
        service_name,
        level=config.get("LOG_LEVEL"),
        fmt=config.get("LOG_FORMAT"),
    )
    run_filter.set_run_id(uuid.uuid4().hex[:12])
    return run_filter


def resolve_dirs(
    apps_dir: Optional[Path] = None, data_dir: Optional[Path] = None
) -> tuple[Path, Path]:
    """Catalog and output directories, defaulting to APPS_DIR / DATA_DIR."""
    return (
        apps_dir or Path(config.get("APPS_DIR")),
        data_dir or Path(config.get("DATA_DIR")),
    )
