"""Failure signals raised by the batch pipelines.

They carry no detail: every issue is logged individually before one of
these is raised, and callers only need pass/fail.
"""


class RegistryError(Exception):
    """Base class for pipeline failure signals."""


class ValidationFailedError(RegistryError):
    def __init__(self):
        super().__init__("Validation failed")


class LinkCheckFailedError(RegistryError):
    def __init__(self):
        super().__init__("Link accessibility check failed")
