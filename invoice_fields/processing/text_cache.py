"""
Text Cache Module.

Keeps acquired document text for a bounded freshness window so repeated
extraction attempts on the same document do not re-run OCR.

Author: ML Engineering Team
"""

import threading
import time
from collections import OrderedDict
from typing import Any, Callable, Optional, Tuple

from config import get_config
from invoice_fields.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)


class TextCache:
    """
    TTL cache keyed by document id.

    Entries older than ttl_seconds are evicted when touched. When the
    cache is full the oldest entry is evicted to make room.

    Attributes:
        ttl_seconds: Freshness window
        max_entries: Capacity
        clock: Monotonic time source in seconds

    Example:
        >>> cache = TextCache(ttl_seconds=600, max_entries=100)
        >>> cache.put("doc-1", acquired)
        >>> cache.get("doc-1") is acquired
        True
    """

    def __init__(
        self,
        ttl_seconds: Optional[float] = None,
        max_entries: Optional[int] = None,
        clock: Optional[Callable[[], float]] = None
    ) -> None:
        self.ttl_seconds = float(
            ttl_seconds if ttl_seconds is not None
            else get_config("processing.text_cache.ttl_seconds", 600)
        )
        self.max_entries = int(
            max_entries if max_entries is not None
            else get_config("processing.text_cache.max_entries", 256)
        )
        if self.max_entries < 1:
            raise ValueError("max_entries must be at least 1")

        self.clock = clock or time.monotonic
        self._entries: "OrderedDict[str, Tuple[float, Any]]" = OrderedDict()
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """Return the cached value, or None when missing or expired."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None

            stored_at, value = entry
            if self._is_expired(stored_at):
                del self._entries[key]
                logger.debug(f"Text cache entry expired: {key}")
                return None

            return value

    def put(self, key: str, value: Any) -> None:
        """Store a value, restarting its freshness window."""
        with self._lock:
            self._entries.pop(key, None)
            self._evict_expired()

            while len(self._entries) >= self.max_entries:
                evicted, _ = self._entries.popitem(last=False)
                logger.debug(f"Text cache full, evicted: {evicted}")

            self._entries[key] = (self.clock(), value)

    def invalidate(self, key: str) -> bool:
        """Drop one entry. Returns whether it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            self._evict_expired()
            return len(self._entries)

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def _is_expired(self, stored_at: float) -> bool:
        return self.clock() - stored_at >= self.ttl_seconds

    def _evict_expired(self) -> None:
        expired = [key for key, (stored_at, _) in self._entries.items() if self._is_expired(stored_at)]
        for key in expired:
            del self._entries[key]
