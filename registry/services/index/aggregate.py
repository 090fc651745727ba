"""Persisted aggregate of distilled entries (apps.min.json + slugs.json).

Read once at the start of a run, merged in memory, written once at the end.
A crash in between loses only the current run; the previous files stay
intact because both artifacts are replaced atomically.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from registry.lib.fileio import atomic_write_text, dump_json
from registry.services.metadata import AppSummary

logger = logging.getLogger(__name__)

APPS_MIN_FILENAME = "apps.min.json"
SLUGS_FILENAME = "slugs.json"


def _load_list(path: Path) -> Optional[list]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError):
        return None
    return data if isinstance(data, list) else None


class AggregateIndex:
    """In-memory view of the two aggregate artifacts.

    Attributes:
        data_dir: Directory holding the artifacts
        summaries: Summary objects in first-insertion order
        slugs: Known slugs, append-only
    """

    def __init__(
        self,
        data_dir: Union[str, Path],
        summaries: Optional[list[dict[str, Any]]] = None,
        slugs: Optional[list[str]] = None,
    ):
        self.data_dir = Path(data_dir)
        self.summaries: list[dict[str, Any]] = summaries if summaries is not None else []
        self.slugs: list[str] = slugs if slugs is not None else []

    @property
    def apps_min_path(self) -> Path:
        return self.data_dir / APPS_MIN_FILENAME

    @property
    def slugs_path(self) -> Path:
        return self.data_dir / SLUGS_FILENAME

    @classmethod
    def load(cls, data_dir: Union[str, Path]) -> "AggregateIndex":
        """Load both artifacts; a missing or unreadable file yields an empty list."""
        index = cls(data_dir)

        summaries = _load_list(index.apps_min_path)
        if summaries is None:
            logger.info(f"No existing {APPS_MIN_FILENAME} found, creating new one")
        else:
            index.summaries = summaries
            logger.info(f"Loaded existing {APPS_MIN_FILENAME} with {len(summaries)} apps")

        slugs = _load_list(index.slugs_path)
        if slugs is None:
            logger.info(f"No existing {SLUGS_FILENAME} found, creating new one")
        else:
            index.slugs = slugs

        return index

    def upsert(self, entry: AppSummary) -> bool:
        """Replace the summary with the same slug in place, else append.

        Returns:
            True if an existing summary was replaced
        """
        data = entry.to_json()
        for i, existing in enumerate(self.summaries):
            if isinstance(existing, dict) and existing.get("slug") == entry.slug:
                self.summaries[i] = data
                return True
        self.summaries.append(data)
        return False

    def track_slug(self, slug: str) -> None:
        if slug not in self.slugs:
            self.slugs.append(slug)

    def persist(self) -> str:
        """Write both artifacts, replacing previous contents.

        Returns:
            The serialized apps.min.json text exactly as written
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)

        apps_min_content = dump_json(self.summaries)
        atomic_write_text(self.apps_min_path, apps_min_content)
        logger.info(f"Generated {APPS_MIN_FILENAME} ({len(self.summaries)} total apps)")

        atomic_write_text(self.slugs_path, dump_json(self.slugs))
        logger.info(f"Generated {SLUGS_FILENAME}")

        return apps_min_content
