"""
One-rep-max cache - optional size-bounded memoization of 1RM estimates.

The cache is never global: callers that want it create one and pass it
to the strength functions (the calculator does so when
``ONE_RM_CACHE_SIZE`` is set).
"""
from collections import OrderedDict
from threading import Lock
from typing import Callable, Optional, Tuple

from liftstats.core.logging import get_logger

logger = get_logger(__name__)

CacheKey = Tuple[float, int]


class OneRepMaxCache:
    """
    Thread-safe LRU cache keyed by (weight, reps).

    Stored values may be None (estimate not available), which is a
    legitimate cached result.
    """

    def __init__(self, max_size: int = 256):
        """
        Initialize the cache.

        Args:
            max_size: Maximum number of entries kept before evicting the
                least recently used one
        """
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")

        self._entries: "OrderedDict[CacheKey, Optional[float]]" = OrderedDict()
        self._lock = Lock()
        self._max_size = max_size
        self.hits = 0
        self.misses = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    def get_or_compute(
        self,
        weight: float,
        reps: int,
        compute: Callable[[float, int], Optional[float]],
    ) -> Optional[float]:
        """
        Return the cached estimate for (weight, reps), computing it on a miss.

        Args:
            weight: Set weight in kg
            reps: Set repetitions
            compute: Function producing the estimate on a miss

        Returns:
            Estimated 1RM or None
        """
        key = (weight, reps)

        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
                self.hits += 1
                return self._entries[key]

        value = compute(weight, reps)

        with self._lock:
            self.misses += 1
            self._entries[key] = value
            self._entries.move_to_end(key)
            while len(self._entries) > self._max_size:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug("Evicted 1RM cache entry", weight=evicted[0], reps=evicted[1])

        return value

    def clear(self) -> None:
        """Drop all entries and reset counters."""
        with self._lock:
            self._entries.clear()
            self.hits = 0
            self.misses = 0

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: CacheKey) -> bool:
        with self._lock:
            return key in self._entries
