"""
Core Cache Module

Provides the in-process cache building blocks:
- BoundedCache: thread-safe, capacity-limited LRU store
- SnapshotList: atomically replaced, read-only ordered list
"""

from boardcache.core.cache.bounded import BoundedCache, CacheStats
from boardcache.core.cache.snapshot import SnapshotList

__all__ = [
    'BoundedCache',
    'CacheStats',
    'SnapshotList'
]
