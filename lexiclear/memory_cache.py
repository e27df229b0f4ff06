"""
In-memory caches with TTL support.
"""

import hashlib
import random
import time
from typing import Any, Callable, Dict, Optional, Tuple


class TermCache:
    """
    Process-local cache keyed by legal term.

    Stores values with their creation time and treats entries older
    than the TTL as absent. Age is checked on every read; there is no
    background eviction.
    """

    def __init__(self, ttl: float, ttl_jitter: float = 0, clock: Callable[[], float] = time.time):
        """
        Initialize cache.

        Args:
            ttl: Time-to-live in seconds
            ttl_jitter: Maximum jitter in seconds to randomize expiration.
                        For example, 360 means ±360 seconds (±6 minutes).
            clock: Source of the current time in seconds
        """
        self.ttl = ttl
        self.ttl_jitter = ttl_jitter
        self._clock = clock
        # key -> (value, created_at, lifetime)
        self._entries: Dict[str, Tuple[Any, float, float]] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def _key(self, term: str) -> str:
        return term.strip().lower()

    def _lifetime(self) -> float:
        """Lifetime for a new entry; jitter spreads out expiries of entries written together."""
        if not self.ttl_jitter:
            return self.ttl
        return self.ttl + random.uniform(-self.ttl_jitter, self.ttl_jitter)

    def get(self, term: str) -> Optional[Any]:
        """
        Get cached value if not expired.

        Args:
            term: Cache key before normalization

        Returns:
            Cached value or None if not found/expired
        """
        key = self._key(term)
        entry = self._entries.get(key)
        if entry is None:
            return None

        value, created_at, lifetime = entry
        if self._clock() - created_at >= lifetime:
            self._entries.pop(key, None)
            return None

        return value

    def put(self, term: str, value: Any):
        """
        Store a value with the current timestamp, replacing any previous entry.

        The entry's lifetime (TTL plus jitter) is fixed here, so every
        read of the same entry agrees on whether it has expired.

        Args:
            term: Cache key before normalization
            value: Value to cache
        """
        self._entries[self._key(term)] = (value, self._clock(), self._lifetime())

    def clear_all(self):
        """Clear all cache entries."""
        self._entries.clear()


class DocumentCache(TermCache):
    """TermCache keyed by the SHA-256 of the trimmed document text."""

    def _key(self, text: str) -> str:
        return hashlib.sha256(text.strip().encode("utf-8")).hexdigest()
