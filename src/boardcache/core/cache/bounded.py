"""
Bounded Object Cache

Thread-safe, capacity-limited key/value store with least-recently-used
eviction. The article facade keeps one instance for article records and one
for article abstracts.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, Optional

from cachetools import LRUCache

from boardcache.core.exceptions import ConfigurationError, ErrorCode
from boardcache.core.monitoring.metrics import MetricsCollector


logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass
class CacheStats:
    """Cache performance statistics."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class _EvictionTrackingLRUCache(LRUCache):
    """LRUCache that reports every entry it drops to make room."""

    def __init__(self, maxsize: int, on_evict: Callable[[Hashable, Any], None]):
        super().__init__(maxsize=maxsize)
        self._on_evict = on_evict

    def popitem(self):
        key, value = super().popitem()
        self._on_evict(key, value)
        return key, value


class BoundedCache:
    """
    Capacity-limited cache with LRU eviction.

    Reads mark a key as most recently used. Inserting a new key while the
    cache is full evicts the least recently used entry; keys that were never
    read since insertion leave in insertion order. Overwriting an existing
    key never evicts. Every operation is serialized by a re-entrant lock.

    Values are stored as given; callers that need isolation copy at their
    own boundary.
    """

    def __init__(self, name: str, maxsize: int,
                 metrics: Optional[MetricsCollector] = None):
        """
        Initialize bounded cache.

        Args:
            name: Cache name, used in logs and metric names
            maxsize: Maximum number of entries, must be at least 1
            metrics: Optional collector receiving hit/miss/eviction counters

        Raises:
            ConfigurationError: If maxsize is smaller than 1
        """
        if isinstance(maxsize, bool) or not isinstance(maxsize, int) or maxsize < 1:
            raise ConfigurationError(
                f"Cache '{name}' capacity must be a positive integer, got {maxsize!r}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                config_key=f"{name}.maxsize",
                config_value=maxsize
            )

        self.name = name
        self.stats = CacheStats()
        self._lock = threading.RLock()
        self._cache = _EvictionTrackingLRUCache(maxsize, self._record_eviction)

        self._metrics = metrics
        if self._metrics:
            self._setup_metrics()

    def _setup_metrics(self) -> None:
        """Register cache metrics."""
        self._metrics.counter(self._metric_name("hits"), f"{self.name} cache hits")
        self._metrics.counter(self._metric_name("misses"), f"{self.name} cache misses")
        self._metrics.counter(self._metric_name("evictions"), f"{self.name} cache evictions")
        self._metrics.gauge(self._metric_name("size"), f"{self.name} cache size")

    def _metric_name(self, suffix: str) -> str:
        return f"cache.{self.name}.{suffix}"

    def _record_eviction(self, key: Hashable, value: Any) -> None:
        # Called from inside put(), lock already held
        self.stats.evictions += 1
        logger.debug(f"Evicted {key!r} from {self.name} cache")
        if self._metrics:
            self._metrics.increment(self._metric_name("evictions"))

    @property
    def maxsize(self) -> int:
        """Configured maximum number of entries."""
        return self._cache.maxsize

    def get(self, key: Hashable, default: Any = None) -> Any:
        """
        Get value from cache.

        Args:
            key: Cache key
            default: Value returned when the key is not cached

        Returns:
            Cached value or default
        """
        with self._lock:
            if key in self._cache:
                value = self._cache[key]
                self.stats.hits += 1
                if self._metrics:
                    self._metrics.increment(self._metric_name("hits"))
                return value

            self.stats.misses += 1
            if self._metrics:
                self._metrics.increment(self._metric_name("misses"))
            return default

    def put(self, key: Hashable, value: Any) -> None:
        """
        Insert or overwrite a value, evicting the LRU entry when full.

        Args:
            key: Cache key
            value: Value to cache
        """
        with self._lock:
            self._cache[key] = value
            if self._metrics:
                self._metrics.set_gauge(self._metric_name("size"), len(self._cache))

    def remove(self, key: Hashable) -> bool:
        """
        Delete an entry if present.

        Returns:
            True if an entry was removed
        """
        with self._lock:
            found = self._cache.pop(key, _MISSING) is not _MISSING
            if found and self._metrics:
                self._metrics.set_gauge(self._metric_name("size"), len(self._cache))
            return found

    def clear(self) -> None:
        """Drop all entries and reset statistics, including the counters in metrics."""
        with self._lock:
            # MutableMapping.clear() pops item by item and would count evictions
            self._cache = _EvictionTrackingLRUCache(self._cache.maxsize, self._record_eviction)
            self.stats = CacheStats()
            if self._metrics:
                for counter in ("hits", "misses", "evictions"):
                    self._metrics.reset(self._metric_name(counter))
                self._metrics.set_gauge(self._metric_name("size"), 0)

        logger.info(f"Cleared {self.name} cache")

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._cache

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def get_cache_info(self) -> Dict[str, Any]:
        """Get cache configuration and statistics."""
        with self._lock:
            return {
                "name": self.name,
                "current_size": len(self._cache),
                "max_size": self._cache.maxsize,
                "utilization": len(self._cache) / self._cache.maxsize,
                "stats": {
                    "hits": self.stats.hits,
                    "misses": self.stats.misses,
                    "hit_rate": self.stats.hit_rate,
                    "evictions": self.stats.evictions
                }
            }
