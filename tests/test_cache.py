"""Tests for the tenant lookup cache."""

from notifier.infrastructure.cache import NotificationCache


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


def test_entries_expire_after_ttl() -> None:
    clock = FakeClock()
    cache = NotificationCache(ttl_seconds=10, clock=clock)
    calls = []

    def loader():
        calls.append(1)
        return len(calls)

    assert cache.get_or_load(("triggers", 5), loader) == 1
    assert cache.get_or_load(("triggers", 5), loader) == 1
    clock.now += 11
    assert cache.get_or_load(("triggers", 5), loader) == 2


def test_invalidate_tenant_only_drops_that_tenant() -> None:
    cache = NotificationCache(ttl_seconds=60)
    cache.get_or_load(("provider", 5), lambda: "a")
    cache.get_or_load(("triggers", 5), lambda: "b")
    cache.get_or_load(("provider", 6), lambda: "c")

    cache.invalidate_tenant(5)

    assert len(cache) == 1
    assert cache.get_or_load(("provider", 6), lambda: "other") == "c"
    assert cache.get_or_load(("provider", 5), lambda: "fresh") == "fresh"


def test_zero_ttl_disables_caching() -> None:
    cache = NotificationCache(ttl_seconds=0)
    values = iter(["first", "second"])

    assert cache.get_or_load(("provider", 5), lambda: next(values)) == "first"
    assert cache.get_or_load(("provider", 5), lambda: next(values)) == "second"
    assert len(cache) == 0


def test_clear_removes_everything() -> None:
    cache = NotificationCache(ttl_seconds=60)
    cache.get_or_load(("provider", 5), lambda: "a")

    cache.clear()

    assert len(cache) == 0
