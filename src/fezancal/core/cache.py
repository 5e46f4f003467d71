# src/fezancal/core/cache.py
from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from datetime import date, datetime
from typing import Callable, Dict, Generic, Optional, TypeVar

from .errors import CacheConfigError

log = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class _Entry(Generic[T]):
    value: T
    inserted_at: float


class LRUCache(Generic[T]):
    """
    Bounded LRU with a time-to-live.

    - every hit or write moves the key to the most-recent end
    - a hit also restarts the entry's TTL (sliding expiry)
    - expired entries are dropped lazily, when read
    - at capacity, writing a new key evicts the least recently used one
    - a hit returns the stored object itself, not a copy

    One lock guards each read/write sequence; FastAPI runs sync handlers on
    a thread pool.
    """

    def __init__(
        self,
        max_size: int = 365,
        ttl_seconds: float = 24 * 60 * 60,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_size < 1:
            raise CacheConfigError(f"Cache max_size must be at least 1 (got {max_size})")
        self.max_size = int(max_size)
        self.ttl_seconds = float(ttl_seconds)
        self._clock = clock
        self._data: "OrderedDict[str, _Entry[T]]" = OrderedDict()
        self._lock = threading.RLock()

    def get_or_compute(self, key: str, compute: Callable[[], T]) -> T:
        with self._lock:
            cached = self._get_locked(key)
            if cached is not None:
                return cached
            log.debug("cache miss: %s", key)
            value = compute()
            self._set_locked(key, value)
            return value

    def get(self, key: str) -> Optional[T]:
        with self._lock:
            return self._get_locked(key)

    def set(self, key: str, value: T) -> None:
        with self._lock:
            self._set_locked(key, value)

    def delete(self, key: str) -> bool:
        with self._lock:
            return self._data.pop(key, None) is not None

    def clear(self) -> None:
        with self._lock:
            self._data.clear()

    def stats(self) -> Dict[str, float]:
        with self._lock:
            size = len(self._data)
        return {
            "size": size,
            "max_size": self.max_size,
            "utilization_percent": size / self.max_size * 100.0,
        }

    def keys(self) -> list:
        """Keys from least to most recently used (no recency update)."""
        with self._lock:
            return list(self._data.keys())

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._data

    def _get_locked(self, key: str) -> Optional[T]:
        entry = self._data.get(key)
        if entry is None:
            return None
        now = self._clock()
        if now - entry.inserted_at > self.ttl_seconds:
            log.debug("cache expired: %s", key)
            del self._data[key]
            return None
        self._data[key] = _Entry(value=entry.value, inserted_at=now)
        self._data.move_to_end(key)
        return entry.value

    def _set_locked(self, key: str, value: T) -> None:
        if key not in self._data and len(self._data) >= self.max_size:
            lru_key, _ = self._data.popitem(last=False)
            log.debug("cache evict: %s", lru_key)
        self._data[key] = _Entry(value=value, inserted_at=self._clock())
        self._data.move_to_end(key)


def date_to_key(d: date | datetime) -> str:
    """Cache key of a calendar day: "YYYY-M-D" (no zero padding)."""
    return f"{d.year}-{d.month}-{d.day}"
