"""
Read-through TTL cache for search responses.

Keyed by SearchFilters.cache_key(). A TTL of 0 disables caching.
"""

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from search.models import SearchResponse


class SearchCache:
    """Thread-safe TTL cache of SearchResponse objects."""

    def __init__(
        self,
        ttl_seconds: float,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: Dict[str, Tuple[float, SearchResponse]] = {}
        self._lock = threading.Lock()

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    def get(self, key: str) -> Optional[SearchResponse]:
        if not self.enabled:
            return None
        cached = self._entries.get(key)
        if cached is None:
            return None
        cached_at, response = cached
        if self._clock() - cached_at >= self.ttl_seconds:
            with self._lock:
                self._entries.pop(key, None)
            return None
        return response.model_copy(deep=True)

    def set(self, key: str, response: SearchResponse) -> None:
        if not self.enabled:
            return
        now = self._clock()
        with self._lock:
            if len(self._entries) >= self.max_entries and key not in self._entries:
                # Evict the oldest entry
                oldest = min(self._entries, key=lambda k: self._entries[k][0])
                del self._entries[oldest]
            self._entries[key] = (now, response.model_copy(deep=True))

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
