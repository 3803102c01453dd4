"""Tests for the expiring cache."""

import threading
from datetime import timedelta

from sla_checker.shared.infrastructure.cache import ExpiringCache


def test_set_then_get_returns_value(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)

    cache.set("k", "v")

    assert cache.get("k") == ("v", True)


def test_value_survives_until_ttl_elapses(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)
    cache.set("key1", "value1")

    clock.advance(seconds=2)
    assert cache.get("key1") == ("value1", True)

    # Still live at the exact expiry instant
    clock.advance(seconds=3)
    assert cache.get("key1") == ("value1", True)


def test_expired_value_is_not_found(clock):
    cache = ExpiringCache(timedelta(seconds=2), clock=clock)
    cache.set("k", "v")

    clock.advance(seconds=3)

    assert cache.get("k") == (None, False)


def test_miss_does_not_mutate(clock):
    cache = ExpiringCache(timedelta(seconds=2), clock=clock)
    cache.set("k", "v")
    clock.advance(seconds=3)

    assert cache.get("missing") == (None, False)
    assert cache.get("k") == (None, False)
    assert len(cache) == 1


def test_set_overwrites_and_resets_expiry(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)
    cache.set("k", "old")

    clock.advance(seconds=4)
    cache.set("k", "new")
    clock.advance(seconds=4)

    assert cache.get("k") == ("new", True)


def test_delete_removes_entry(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)
    cache.set("key1", "value1")

    cache.delete("key1")

    assert cache.get("key1") == (None, False)
    assert len(cache) == 0


def test_delete_missing_key_is_noop(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)

    cache.delete("nope")

    assert len(cache) == 0


def test_clear(clock):
    cache = ExpiringCache(timedelta(seconds=5), clock=clock)
    cache.set("a", 1)
    cache.set("b", 2)

    cache.clear()

    assert len(cache) == 0


def test_default_clock_uses_wall_time():
    cache = ExpiringCache(timedelta(minutes=1))
    cache.set("holidays", [1, 2, 3])

    assert cache.get("holidays") == ([1, 2, 3], True)


def test_concurrent_access_from_many_threads():
    cache = ExpiringCache(timedelta(minutes=1))
    errors = []

    def worker(n: int) -> None:
        for i in range(200):
            key = f"{n}_{i}"
            cache.set(key, i)
            value, found = cache.get(key)
            if not found or value != i:
                errors.append(key)
            if i % 2:
                cache.delete(key)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert errors == []
    assert len(cache) == 8 * 100
