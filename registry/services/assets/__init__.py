"""Hosted logo synchronization."""

from .protocols import AssetStore
from .sync import AssetSynchronizer, SyncResult

__all__ = ["AssetStore", "AssetSynchronizer", "SyncResult"]
