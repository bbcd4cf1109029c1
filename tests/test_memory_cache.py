import threading
import time

from app.services.memory_cache import MemoryCache


def test_missing_key_returns_none(cache):
    assert cache.get("nope") is None


def test_round_trip_isolation(cache):
    obj = {"a": [1, 2, 3]}
    cache.set("k", obj)

    out = cache.get("k")
    out["a"].append(4)
    assert cache.get("k")["a"] == [1, 2, 3]

    obj["a"].append(5)
    assert cache.get("k")["a"] == [1, 2, 3]


def test_get_never_returns_same_reference(cache):
    cache.set("k", {"nested": {"x": 1}})
    first = cache.get("k")
    second = cache.get("k")
    assert first == second
    assert first is not second
    assert first["nested"] is not second["nested"]


def test_scalars_round_trip(cache):
    cache.set("n", 3)
    cache.set("s", "shop")
    assert cache.get("n") == 3
    assert cache.get("s") == "shop"


def test_expiry_with_real_clock():
    cache = MemoryCache()
    cache.set("k", 1, 10)
    assert cache.get("k") == 1
    time.sleep(0.015)
    assert cache.get("k") is None


def test_expired_entry_is_purged_on_read(clock):
    cache = MemoryCache(default_ttl=1_000, clock=clock)
    cache.set("k", {"v": 1}, 50)
    clock.advance(49)
    assert cache.get("k") == {"v": 1}
    clock.advance(1)
    assert len(cache) == 1
    assert cache.get("k") is None
    assert len(cache) == 0


def test_missing_or_invalid_ttl_uses_default(clock):
    cache = MemoryCache(default_ttl=100, clock=clock)
    for i, ttl in enumerate([None, 0, -5, "30", True, float("nan")]):
        cache.set(f"k{i}", i, ttl)
    clock.advance(99)
    assert all(f"k{i}" in cache for i in range(6))
    clock.advance(1)
    assert not any(f"k{i}" in cache for i in range(6))


def test_default_ttl_is_sixty_seconds(clock):
    cache = MemoryCache(clock=clock)
    cache.set("k", "v")
    clock.advance(59_999)
    assert cache.get("k") == "v"
    clock.advance(1)
    assert cache.get("k") is None


def test_zero_default_ttl_never_expires(clock):
    cache = MemoryCache(default_ttl=0, clock=clock)
    cache.set("k", "v")
    clock.advance(10 ** 12)
    assert cache.get("k") == "v"
    cache.set("short", "v", 5)
    clock.advance(5)
    assert cache.get("short") is None


def test_set_overwrites_value_and_expiry(clock):
    cache = MemoryCache(clock=clock)
    cache.set("k", "old", 10)
    clock.advance(5)
    cache.set("k", "new", 100)
    clock.advance(50)
    assert cache.get("k") == "new"


def test_delete_and_clear(cache):
    cache.set("a", 1)
    cache.set("b", 2)
    cache.delete("a")
    cache.delete("missing")
    assert cache.get("a") is None
    assert cache.get("b") == 2
    cache.clear()
    assert len(cache) == 0


def test_invalidate_prefix(cache):
    cache.set("shops:list:a", 1)
    cache.set("shops:list:b", 2)
    cache.set("orders:1", 3)
    assert cache.invalidate_prefix("shops:") == 2
    assert cache.get("shops:list:a") is None
    assert cache.get("shops:list:b") is None
    assert cache.get("orders:1") == 3


def test_invalidate_prefix_is_literal(cache):
    cache.set("shops.*", 1)
    cache.set("shopsX", 2)
    cache.invalidate_prefix("shops.*")
    assert cache.get("shops.*") is None
    assert cache.get("shopsX") == 2


def test_empty_prefix_is_noop(cache):
    cache.set("a", 1)
    cache.set("b", 2)
    assert cache.invalidate_prefix("") == 0
    cache.invalidate_prefix(None)
    assert cache.get("a") == 1
    assert cache.get("b") == 2


class _NoDeepCopy(dict):
    def __deepcopy__(self, memo):
        raise TypeError("not deep-copyable")


def test_clone_falls_back_to_json():
    value = _NoDeepCopy(a=[1, 2])
    cloned = MemoryCache.clone(value)
    assert cloned == {"a": [1, 2]}
    assert type(cloned) is dict
    assert cloned["a"] is not value["a"]


def test_unclonable_value_is_stored_as_is(cache):
    value = {"lock": threading.Lock()}
    cache.set("k", value)
    assert cache.get("k") is value


def test_concurrent_writers(cache):
    def writer(n):
        for i in range(200):
            cache.set(f"w{n}:{i}", {"i": i})
            cache.get(f"w{n}:{i}")
        cache.invalidate_prefix(f"w{n}:")

    threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(cache) == 0
