"""In-process freshness window for repeated provider requests."""
import threading
import time
from typing import Any, Callable, Dict, Optional

from cachetools import TTLCache


class ResponseCache:
    """Bounded thread-safe cache keyed by request signature.

    Entries live in one ``cachetools.TTLCache`` per TTL, each holding at most
    ``max_entries`` items, so expired and least recently used entries are
    evicted instead of accumulating.
    """

    def __init__(
        self,
        default_ttl: int = 600,
        max_entries: int = 1024,
        timer: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self.max_entries = max_entries
        self._timer = timer
        self._buckets: Dict[int, TTLCache] = {}
        self._lock = threading.Lock()

    def _bucket(self, ttl: int) -> TTLCache:
        bucket = self._buckets.get(ttl)
        if bucket is None:
            bucket = TTLCache(maxsize=self.max_entries, ttl=ttl, timer=self._timer)
            self._buckets[ttl] = bucket
        return bucket

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            for bucket in self._buckets.values():
                value = bucket.get(key)
                if value is not None:
                    return value
        return None

    def set(self, key: str, value: Any, ttl_seconds: Optional[int] = None) -> None:
        ttl = self.default_ttl if ttl_seconds is None else ttl_seconds
        if ttl <= 0:
            return
        with self._lock:
            # A key lives in exactly one bucket
            for other_ttl, bucket in self._buckets.items():
                if other_ttl != ttl:
                    bucket.pop(key, None)
            self._bucket(ttl)[key] = value

    def delete(self, key: str) -> None:
        with self._lock:
            for bucket in self._buckets.values():
                bucket.pop(key, None)

    def clear(self) -> None:
        with self._lock:
            for bucket in self._buckets.values():
                bucket.clear()

    def __len__(self) -> int:
        with self._lock:
            for bucket in self._buckets.values():
                bucket.expire()
            return sum(len(bucket) for bucket in self._buckets.values())
