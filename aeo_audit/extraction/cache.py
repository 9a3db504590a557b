"""In-process TTL cache for derived per-URL values.

Entries are pure functions of their key, so concurrent writers may
race; the last writer wins and both computed the same value.
"""

import threading
import time
from collections.abc import Callable, Hashable
from typing import Generic, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

# Default cache TTL: 1 hour
DEFAULT_CACHE_TTL_SECONDS = 3600
DEFAULT_CACHE_MAX_SIZE = 256


class TTLCache(Generic[T]):
    """
    Get-or-compute cache with a fixed time-to-live.

    Values older than the TTL are dropped on the next lookup. Once
    max_size entries are held, the oldest is evicted on insert.
    """

    def __init__(
        self,
        ttl_seconds: float = DEFAULT_CACHE_TTL_SECONDS,
        max_size: int = DEFAULT_CACHE_MAX_SIZE,
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Time-to-live for cache entries
            max_size: Maximum number of entries held
            clock: Monotonic clock, replaceable in tests
        """
        if max_size < 1:
            raise ValueError(f"max_size must be at least 1, got {max_size}")
        self.ttl_seconds = ttl_seconds
        self.max_size = max_size
        self._clock = clock
        self._entries: dict[Hashable, tuple[float, T]] = {}
        self._lock = threading.Lock()

    def get(self, key: Hashable) -> T | None:
        """Return a fresh cached value, or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            stored_at, value = entry
            if self._clock() - stored_at >= self.ttl_seconds:
                del self._entries[key]
                logger.debug("cache_expired", key=str(key))
                return None
            return value

    def set(self, key: Hashable, value: T) -> None:
        with self._lock:
            # re-inserting keeps dict order equal to age order
            self._entries.pop(key, None)
            while len(self._entries) >= self.max_size:
                oldest = next(iter(self._entries))
                del self._entries[oldest]
                logger.debug("cache_evicted", key=str(oldest))
            self._entries[key] = (self._clock(), value)

    def get_or_compute(self, key: Hashable, factory: Callable[[], T]) -> T:
        """Return the cached value for key, computing and storing it when stale."""
        value = self.get(key)
        if value is not None:
            return value
        value = factory()
        self.set(key, value)
        return value

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
