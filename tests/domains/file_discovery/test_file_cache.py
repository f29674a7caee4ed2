"""
Tests for the dedup caches and the cache factory.
"""

from unittest.mock import MagicMock

import pytest

from forage.config import Settings
from forage.core.exceptions import ConfigurationError
from forage.domains.file_discovery.file_cache import (
    BoundedFileCache,
    ExpiringFileCache,
    FileCache,
    MemoryFileCache,
    create_file_cache,
)


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


class TestMemoryFileCache:

    @pytest.mark.asyncio
    async def test_unknown_path_is_not_contained(self):
        cache = MemoryFileCache()

        assert await cache.contains("/data/a.jpg") is False

    @pytest.mark.asyncio
    async def test_added_path_is_contained(self):
        cache = MemoryFileCache()
        await cache.add("/data/a.jpg")

        assert await cache.contains("/data/a.jpg") is True
        assert await cache.contains("/data/b.jpg") is False

    @pytest.mark.asyncio
    async def test_add_is_idempotent(self):
        cache = MemoryFileCache()
        await cache.add("/data/a.jpg")
        await cache.add("/data/a.jpg")

        assert len(cache) == 1

    def test_is_a_file_cache(self):
        assert isinstance(MemoryFileCache(), FileCache)

    def test_file_cache_is_abstract(self):
        with pytest.raises(TypeError):
            FileCache()


class TestBoundedFileCache:

    @pytest.mark.asyncio
    async def test_evicts_oldest_path_when_full(self):
        cache = BoundedFileCache(max_entries=2)
        await cache.add("/data/1")
        await cache.add("/data/2")
        await cache.add("/data/3")

        assert len(cache) == 2
        assert await cache.contains("/data/1") is False
        assert await cache.contains("/data/2") is True
        assert await cache.contains("/data/3") is True

    @pytest.mark.asyncio
    async def test_re_adding_known_path_does_not_evict(self):
        cache = BoundedFileCache(max_entries=2)
        await cache.add("/data/1")
        await cache.add("/data/2")
        await cache.add("/data/2")

        assert await cache.contains("/data/1") is True
        assert len(cache) == 2

    def test_rejects_non_positive_bound(self):
        with pytest.raises(ConfigurationError):
            BoundedFileCache(max_entries=0)


class TestExpiringFileCache:

    @pytest.mark.asyncio
    async def test_entry_expires_after_ttl(self):
        clock = FakeClock()
        cache = ExpiringFileCache(ttl_seconds=10, clock=clock)
        await cache.add("/data/a.jpg")

        clock.now = 9.9
        assert await cache.contains("/data/a.jpg") is True

        clock.now = 10.0
        assert await cache.contains("/data/a.jpg") is False
        assert len(cache) == 0

    @pytest.mark.asyncio
    async def test_re_adding_does_not_refresh_expiry(self):
        clock = FakeClock()
        cache = ExpiringFileCache(ttl_seconds=10, clock=clock)
        await cache.add("/data/a.jpg")
        clock.now = 5
        await cache.add("/data/a.jpg")

        clock.now = 11
        assert await cache.contains("/data/a.jpg") is False

    def test_rejects_non_positive_ttl(self):
        with pytest.raises(ConfigurationError):
            ExpiringFileCache(ttl_seconds=0)


class TestCreateFileCache:

    def test_default_is_memory(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)

        assert isinstance(create_file_cache(Settings()), MemoryFileCache)

    def test_bounded_uses_max_entries(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings(cache_backend="bounded", cache_max_entries=7)

        cache = create_file_cache(settings)

        assert isinstance(cache, BoundedFileCache)
        assert cache.max_entries == 7

    def test_expiring_uses_ttl(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        settings = Settings(cache_backend="expiring", cache_ttl_seconds=30)

        cache = create_file_cache(settings)

        assert isinstance(cache, ExpiringFileCache)
        assert cache.ttl_seconds == 30

    def test_unknown_backend(self):
        settings = MagicMock(spec=Settings)
        settings.cache_backend = "redis"

        with pytest.raises(ConfigurationError):
            create_file_cache(settings)
