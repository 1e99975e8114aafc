# tests/test_result_cache.py
from smart_autocomplete.core.result_cache import ResultCache


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_put_get_exists():
    cache = ResultCache(3)
    cache.put("a", ["apple", "apricot"])
    assert cache.exists("a")
    assert cache.get("a") == ["apple", "apricot"]
    assert "a" in cache


def test_miss_returns_none():
    cache = ResultCache(5)
    assert cache.get("nonexistent") is None
    assert not cache.exists("test")


def test_eviction_of_oldest_when_untouched():
    cache = ResultCache(2)
    cache.put("a", ["apple"])
    cache.put("b", ["banana"])
    cache.put("c", ["cherry"])
    assert not cache.exists("a")
    assert cache.exists("b") and cache.exists("c")


def test_recency_not_insertion_governs_eviction():
    cache = ResultCache(3)
    cache.put("a", ["apple"])
    cache.put("b", ["banana"])
    cache.put("c", ["cherry"])
    cache.get("a")
    cache.put("d", ["date"])
    assert cache.exists("a")
    assert not cache.exists("b")
    assert cache.exists("c") and cache.exists("d")


def test_exists_does_not_refresh():
    cache = ResultCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.exists("a")
    cache.put("c", 3)
    assert not cache.exists("a")


def test_put_existing_updates_and_refreshes():
    cache = ResultCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.put("a", 10)
    cache.put("c", 3)
    assert cache.get("a") == 10
    assert not cache.exists("b")
    assert cache.keys() == ["c", "a"]


def test_clear():
    cache = ResultCache(3)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.clear()
    assert len(cache) == 0
    assert cache.keys() == []


def test_ttl_expiry():
    clock = FakeClock()
    cache = ResultCache(3, ttl=10, clock=clock)
    cache.put("a", 1)
    clock.now = 5
    assert cache.get("a") == 1
    clock.now = 10
    assert cache.get("a") is None
    assert len(cache) == 0


def test_capacity_clamped():
    cache = ResultCache(0)
    cache.put("a", 1)
    cache.put("b", 2)
    assert len(cache) == 1
    assert cache.exists("b")


def test_hit_miss_counters():
    cache = ResultCache(2)
    cache.get("x")
    cache.put("x", 1)
    cache.get("x")
    assert cache.stats() == {"size": 1, "capacity": 2, "hits": 1, "misses": 1}


def test_discard():
    cache = ResultCache(3)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.discard("a")
    assert not cache.discard("a")
    assert cache.keys() == ["b"]
    assert cache.stats()["hits"] == 0 and cache.stats()["misses"] == 0
