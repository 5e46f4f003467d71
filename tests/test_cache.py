from __future__ import annotations

from datetime import date, datetime

import pytest

from fezancal.core.cache import LRUCache, date_to_key
from fezancal.core.errors import CacheConfigError, ErrorKind


class FakeClock:
    def __init__(self) -> None:
        self.now = 1000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def test_get_or_compute_computes_once():
    cache: LRUCache[object] = LRUCache(max_size=4)
    calls = []

    def compute():
        calls.append(1)
        return object()

    a = cache.get_or_compute("k", compute)
    b = cache.get_or_compute("k", compute)
    assert a is b
    assert len(calls) == 1


def test_lru_eviction():
    cache: LRUCache[int] = LRUCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.get("a") == 1  # "a" is now most recent
    cache.set("c", 3)
    assert "b" not in cache
    assert cache.keys() == ["a", "c"]


def test_overwrite_does_not_evict():
    cache: LRUCache[int] = LRUCache(max_size=2)
    cache.set("a", 1)
    cache.set("b", 2)
    cache.set("a", 10)
    assert len(cache) == 2
    assert cache.get("a") == 10
    assert cache.get("b") == 2


def test_size_never_exceeds_max():
    cache: LRUCache[int] = LRUCache(max_size=3)
    for i in range(20):
        cache.set(str(i), i)
        assert len(cache) <= 3
    assert cache.keys() == ["17", "18", "19"]


def test_entries_expire():
    clock = FakeClock()
    cache: LRUCache[int] = LRUCache(max_size=4, ttl_seconds=60, clock=clock)
    cache.set("a", 1)
    clock.advance(61)
    assert cache.get("a") is None
    assert "a" not in cache


def test_hit_restarts_ttl():
    clock = FakeClock()
    cache: LRUCache[int] = LRUCache(max_size=4, ttl_seconds=60, clock=clock)
    cache.set("a", 1)
    clock.advance(45)
    assert cache.get("a") == 1
    clock.advance(45)
    assert cache.get("a") == 1
    clock.advance(61)
    assert cache.get("a") is None


def test_expired_entry_is_recomputed():
    clock = FakeClock()
    cache: LRUCache[list] = LRUCache(max_size=4, ttl_seconds=10, clock=clock)
    first = cache.get_or_compute("k", list)
    clock.advance(11)
    second = cache.get_or_compute("k", list)
    assert first is not second


def test_delete_and_clear():
    cache: LRUCache[int] = LRUCache()
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.delete("a") is True
    assert cache.delete("a") is False
    cache.clear()
    assert len(cache) == 0


def test_stats():
    cache: LRUCache[int] = LRUCache(max_size=4)
    cache.set("a", 1)
    s = cache.stats()
    assert s["size"] == 1
    assert s["max_size"] == 4
    assert s["utilization_percent"] == pytest.approx(25.0)


@pytest.mark.parametrize("size", [0, -5])
def test_invalid_size(size):
    with pytest.raises(CacheConfigError) as ei:
        LRUCache(max_size=size)
    assert ei.value.kind is ErrorKind.CACHE_CONFIG


def test_date_to_key():
    assert date_to_key(date(2025, 1, 5)) == "2025-1-5"
    assert date_to_key(datetime(2025, 12, 20, 23, 59)) == "2025-12-20"


class CountingLock:
    def __init__(self) -> None:
        self.entered = 0

    def __enter__(self):
        self.entered += 1
        return self

    def __exit__(self, *exc):
        return False


def test_len_and_contains_take_the_lock():
    cache: LRUCache[int] = LRUCache(max_size=4)
    cache.set("a", 1)
    lock = CountingLock()
    cache._lock = lock  # type: ignore[assignment]
    assert len(cache) == 1
    assert "a" in cache
    assert lock.entered == 2
