"""Filesystem access to the entry catalog (apps_dir/<slug>/meta.json)."""

import json
from pathlib import Path
from typing import Any, Union

from registry.lib.fileio import atomic_write_text, dump_json

from .models import DappMeta

META_FILENAME = "meta.json"


class MetadataStore:
    """Reads, parses and validates entry metadata from a catalog directory.

    The store never holds state between calls; every read goes to disk.
    """

    def __init__(self, apps_dir: Union[str, Path]):
        """Initialize metadata store.

        Args:
            apps_dir: Directory holding one folder per entry
        """
        self.apps_dir = Path(apps_dir)

    def list_slugs(self) -> list[str]:
        """List entry folders in the catalog, sorted by name.

        Raises:
            OSError: If the catalog directory cannot be listed
        """
        return sorted(p.name for p in self.apps_dir.iterdir() if p.is_dir())

    def entry_dir(self, slug: str) -> Path:
        return self.apps_dir / slug

    def meta_path(self, slug: str) -> Path:
        return self.entry_dir(slug) / META_FILENAME

    def read_raw(self, slug: str) -> dict[str, Any]:
        """Read meta.json as plain JSON without schema validation.

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If the file is not valid JSON
        """
        with open(self.meta_path(slug), "r", encoding="utf-8") as f:
            return json.load(f)

    def read(self, slug: str) -> DappMeta:
        """Read and schema-validate an entry's metadata.

        Raises:
            OSError: If the file cannot be read
            json.JSONDecodeError: If the file is not valid JSON
            pydantic.ValidationError: If the document violates the schema
        """
        return DappMeta.model_validate(self.read_raw(slug))

    def logo_source(self, slug: str, logo_url: str) -> str:
        """Resolve logoUrl to a fetchable URL or a local file path."""
        if logo_url.startswith("http"):
            return logo_url
        return str(self.entry_dir(slug) / logo_url)

    def update_logo_url(self, slug: str, logo_url: str) -> bool:
        """Rewrite logoUrl in meta.json, leaving every other field untouched.

        Args:
            slug: Entry slug
            logo_url: New logo URL

        Returns:
            True if the file was rewritten, False if it already held logo_url
        """
        raw = self.read_raw(slug)
        if raw.get("logoUrl") == logo_url:
            return False

        raw["logoUrl"] = logo_url
        atomic_write_text(self.meta_path(slug), dump_json(raw))
        return True
