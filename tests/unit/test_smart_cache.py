"""Unit tests for the smart cache."""

import pytest

from appforge.services import smart_cache
from appforge.services.smart_cache import SmartCache, content_hash, get_smart_cache


class FakeClock:
    def __init__(self, now: float = 1_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestSmartCache:
    """Tests for SmartCache."""

    @pytest.fixture
    def clock(self) -> FakeClock:
        return FakeClock()

    @pytest.fixture
    def cache(self, clock: FakeClock) -> SmartCache:
        return SmartCache(max_entries=2, ttl_hours=1, clock=clock)

    def test_set_and_get(self, cache: SmartCache):
        cache.set("component", "button", "code", domain="saas")

        assert cache.get("component", "button") == "code"
        assert cache.get("component", "button", domain="saas") == "code"
        assert cache.get("component", "button", domain="blog") is None

    def test_lru_eviction(self, cache: SmartCache):
        cache.set("page", "a", "1")
        cache.set("page", "b", "2")
        cache.get("page", "a")
        cache.set("page", "c", "3")

        assert cache.has("page", "a")
        assert not cache.has("page", "b")
        assert cache.get_metrics().evictions == 1

    def test_types_are_independent(self, cache: SmartCache):
        cache.set("page", "a", "1")
        cache.set("page", "b", "2")
        cache.set("config", "a", "3")

        assert cache.get("page", "a") == "1"
        assert cache.get("config", "a") == "3"

    def test_ttl_expiry(self, cache: SmartCache, clock: FakeClock):
        cache.set("domain", "saas-Dashboard", "x")
        clock.now += 3601

        assert cache.get("domain", "saas-Dashboard") is None
        assert cache.get_metrics().misses == 1

    def test_get_or_set_computes_once(self, cache: SmartCache):
        calls = []

        def factory() -> str:
            calls.append(1)
            return "value"

        assert cache.get_or_set("domain", "k", factory) == "value"
        assert cache.get_or_set("domain", "k", factory) == "value"
        assert len(calls) == 1

        metrics = cache.get_metrics()
        assert metrics.hits == 1
        assert metrics.hit_rate == 50.0

    def test_invalidate_by_pattern_and_domain(self, clock: FakeClock):
        cache = SmartCache(clock=clock)
        cache.set("component", "saas-card", "1", domain="saas")
        cache.set("component", "blog-card", "2", domain="blog")
        cache.set("page", "saas-home", "3", domain="saas")

        assert cache.invalidate(pattern="^saas-") == 2
        assert cache.invalidate(domain="blog") == 1
        assert cache.get_metrics().entries == 0

    def test_unknown_type(self, cache: SmartCache):
        with pytest.raises(ValueError):
            cache.set("widget", "a", "1")

    def test_persistence(self, tmp_path, clock: FakeClock):
        path = tmp_path / "smart-cache.json"
        cache = SmartCache(path=path, clock=clock)
        cache.set("config", "tailwind", "module.exports = {};")
        cache.save()

        reloaded = SmartCache(path=path, clock=clock)
        assert reloaded.get("config", "tailwind") == "module.exports = {};"

    def test_content_hash_is_short_and_stable(self):
        assert content_hash("abc") == content_hash("abc")
        assert len(content_hash("abc")) == 16


class TestGetSmartCache:
    """Tests for the smart cache singleton."""

    def test_single_module_instance(self, monkeypatch):
        monkeypatch.setattr(smart_cache, "_smart_cache", None)

        first = get_smart_cache()

        assert get_smart_cache() is first
        assert smart_cache._smart_cache is first

        monkeypatch.setattr(smart_cache, "_smart_cache", None)
        assert get_smart_cache() is not first
