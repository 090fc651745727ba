"""Batch pipelines over the entry catalog.

- distill: build apps.min.json / slugs.json and mirror logos
- validate: schema, slug, relation and logo checks
- check_links: concurrent reachability audit of outbound links
"""

from .distill import DistillReport, distill
from .errors import LinkCheckFailedError, RegistryError, ValidationFailedError
from .links import LinkTarget, check_links, extract_targets
from .probe import ProbeResult, probe_url
from .validate import validate

__all__ = [
    # Pipelines
    "distill",
    "validate",
    "check_links",
    # Results
    "DistillReport",
    "LinkTarget",
    "ProbeResult",
    "extract_targets",
    "probe_url",
    # Errors
    "RegistryError",
    "ValidationFailedError",
    "LinkCheckFailedError",
]
