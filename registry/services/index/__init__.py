"""Aggregate index of distilled entries."""

from .aggregate import APPS_MIN_FILENAME, SLUGS_FILENAME, AggregateIndex

__all__ = ["AggregateIndex", "APPS_MIN_FILENAME", "SLUGS_FILENAME"]
