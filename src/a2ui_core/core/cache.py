"""Generic LRU cache with statistics.

Used by the function evaluator to keep compiled regex patterns across
evaluations. Safe to share between reader threads.
"""

import threading
from typing import Callable, Generic, Hashable, TypeVar, Any
from collections import OrderedDict
from dataclasses import dataclass

T = TypeVar("T")


@dataclass
class Stats:
    """Cache statistics."""

    size: int = 0
    max_size: int = 0
    hits: int = 0
    misses: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate hit rate (0.0 to 1.0)."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> dict[str, Any]:
        """Export as dictionary."""
        return {
            "size": self.size,
            "max_size": self.max_size,
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "hit_rate": self.hit_rate,
        }


class LRUCache(Generic[T]):
    """
    LRU cache keyed by the key itself, with statistics tracking.

    Examples:
        >>> cache = LRUCache[str](max_size=100)
        >>> cache.set("key", "value")
        >>> cache.get("key")
        'value'
        >>> cache.stats.hit_rate
        1.0
    """

    def __init__(self, max_size: int = 100):
        """
        Initialize LRU cache.

        Args:
            max_size: Maximum number of entries
        """
        if max_size <= 0:
            raise ValueError("max_size must be positive")

        self.max_size = max_size
        self._cache: OrderedDict[Hashable, T] = OrderedDict()
        self._stats = Stats(max_size=max_size)
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> T | None:
        """
        Get cached value if available.

        Args:
            key: Cache key

        Returns:
            Cached value or None if not found
        """
        with self._lock:
            if key not in self._cache:
                self._stats.misses += 1
                return None

            # Hit - move to end (most recently used)
            self._cache.move_to_end(key)
            self._stats.hits += 1
            return self._cache[key]

    def set(self, key: Hashable, value: T) -> None:
        """
        Cache value, evicting the least recently used entry when full.

        Args:
            key: Cache key
            value: Value to cache
        """
        with self._lock:
            self._cache.pop(key, None)
            self._cache[key] = value

            if len(self._cache) > self.max_size:
                self._cache.popitem(last=False)
                self._stats.evictions += 1

            self._stats.size = len(self._cache)

    def get_or_set(self, key: Hashable, factory: Callable[[], T]) -> T:
        """
        Return the cached value, computing and storing it on a miss.

        Args:
            key: Cache key
            factory: Called without arguments to build the value on a miss;
                exceptions propagate and nothing is cached

        Returns:
            Cached or freshly built value
        """
        value = self.get(key)
        if value is None:
            value = factory()
            self.set(key, value)
        return value

    @property
    def stats(self) -> Stats:
        """Get cache statistics."""
        return self._stats

    def __len__(self) -> int:
        return len(self._cache)

    def __contains__(self, key: Hashable) -> bool:
        """Check if key exists (doesn't update LRU order)."""
        return key in self._cache


__all__ = ["LRUCache", "Stats"]
