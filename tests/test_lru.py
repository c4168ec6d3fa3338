import pytest

from granitedb.lru import LruCache


def test_put_and_get():
    cache = LruCache(2)
    assert cache.put("a", 1) is None
    assert cache.get("a") == 1
    assert len(cache) == 1


def test_evicts_least_recently_used():
    cache = LruCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    cache.get("a")
    cache.put("c", 3)
    assert "b" not in cache
    assert cache.get("a") == 1
    assert cache.get("c") == 3
    assert len(cache) == 2


def test_update_returns_old_value_without_eviction():
    cache = LruCache(2)
    cache.put("a", 1)
    cache.put("b", 2)
    assert cache.put("a", 10) == 1
    assert len(cache) == 2
    assert cache.get("a") == 10
    cache.put("c", 3)
    assert "b" not in cache
    assert "a" in cache


def test_remove():
    cache = LruCache(3)
    cache.put("a", 1)
    assert cache.remove("a") == 1
    assert cache.remove("a") is None
    assert cache.is_empty()
    assert cache.get("a") is None


def test_hit_rate_and_stats():
    cache = LruCache(4)
    assert cache.hit_rate() == 0.0
    cache.put("x", 1)
    cache.get("x")
    cache.get("x")
    cache.get("y")
    assert cache.stats() == (2, 1)
    assert cache.hit_rate() == pytest.approx(2 / 3)


def test_never_exceeds_capacity():
    cache = LruCache(3)
    for i in range(20):
        cache.put(i, i * i)
        assert len(cache) <= 3
    assert [cache.get(i) for i in (17, 18, 19)] == [289, 324, 361]


def test_negative_capacity_rejected():
    with pytest.raises(ValueError):
        LruCache(-1)