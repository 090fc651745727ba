"""Entry metadata: schema models and the on-disk catalog store.

Example usage:
    >>> from registry.services.metadata import MetadataStore
    >>>
    >>> store = MetadataStore("data/apps")
    >>> for slug in store.list_slugs():
    ...     meta = store.read(slug)
"""

from .models import AppSummary, DappContent, DappLinks, DappMeta, DappRelations, DappSource
from .store import META_FILENAME, MetadataStore

__all__ = [
    # Models
    "DappMeta",
    "DappContent",
    "DappLinks",
    "DappRelations",
    "DappSource",
    "AppSummary",
    # Store
    "MetadataStore",
    "META_FILENAME",
]
