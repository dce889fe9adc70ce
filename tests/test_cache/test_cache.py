"""Tests for the DiskCacheStore module."""

from __future__ import annotations

import sqlite3
import time
from unittest.mock import patch

import pytest

from irdb.cache import CacheStore, DiskCacheStore
from irdb.exceptions import CacheReadError, CacheWriteError
from irdb.models import CacheConfig


@pytest.fixture()
def cache(tmp_path):
    """Create a DiskCacheStore with default config pointing at tmp_path."""
    c = DiskCacheStore(tmp_path, CacheConfig(enabled=True))
    yield c
    c.close()


@pytest.fixture()
def disabled_cache(tmp_path):
    """Create a disabled DiskCacheStore."""
    c = DiskCacheStore(tmp_path, CacheConfig(enabled=False))
    yield c
    c.close()


PAYLOAD = '[{"id": 1, "manufacturer": "Sony"}]'


# ------------------------------------------------------------------ #
# Core get/put behaviour
# ------------------------------------------------------------------ #


class TestGetPut:
    def test_put_and_get(self, cache: DiskCacheStore) -> None:
        cache.put("irdb", "k1", PAYLOAD)
        assert cache.get("irdb", "k1") == PAYLOAD

    def test_miss_returns_none(self, cache: DiskCacheStore) -> None:
        assert cache.get("irdb", "missing") is None

    def test_namespaces_are_separate(self, cache: DiskCacheStore) -> None:
        cache.put("app-a", "k1", "[]")
        assert cache.get("app-b", "k1") is None
        assert cache.get("app-a", "k1") == "[]"

    def test_put_overwrites(self, cache: DiskCacheStore) -> None:
        cache.put("irdb", "k1", "[]")
        cache.put("irdb", "k1", PAYLOAD)
        assert cache.get("irdb", "k1") == PAYLOAD

    def test_persists_across_instances(self, tmp_path) -> None:
        first = DiskCacheStore(tmp_path, CacheConfig())
        first.put("irdb", "k1", PAYLOAD)
        first.close()

        second = DiskCacheStore(tmp_path, CacheConfig())
        try:
            assert second.get("irdb", "k1") == PAYLOAD
        finally:
            second.close()

    def test_satisfies_protocol(self, cache: DiskCacheStore) -> None:
        assert isinstance(cache, CacheStore)


# ------------------------------------------------------------------ #
# TTL expiry
# ------------------------------------------------------------------ #


class TestTTL:
    def test_ttl_expiry(self, tmp_path) -> None:
        """Entries expire after ttl_seconds."""
        c = DiskCacheStore(tmp_path, CacheConfig(enabled=True, ttl_seconds=1))
        try:
            c.put("irdb", "k1", PAYLOAD)
            assert c.get("irdb", "k1") == PAYLOAD
            time.sleep(1.5)
            assert c.get("irdb", "k1") is None
        finally:
            c.close()


# ------------------------------------------------------------------ #
# Disabled cache
# ------------------------------------------------------------------ #


class TestDisabled:
    def test_disabled_get_returns_none(self, disabled_cache: DiskCacheStore) -> None:
        assert disabled_cache.get("irdb", "k1") is None

    def test_disabled_put_is_noop(self, disabled_cache: DiskCacheStore) -> None:
        disabled_cache.put("irdb", "k1", PAYLOAD)
        assert disabled_cache.get("irdb", "k1") is None

    def test_disabled_stats(self, disabled_cache: DiskCacheStore) -> None:
        assert disabled_cache.stats() == {"enabled": False}


# ------------------------------------------------------------------ #
# Backend failures
# ------------------------------------------------------------------ #


class TestBackendErrors:
    def test_read_failure_raises_cache_read_error(self, cache: DiskCacheStore) -> None:
        with patch.object(cache._cache, "get", side_effect=sqlite3.OperationalError("locked")):
            with pytest.raises(CacheReadError):
                cache.get("irdb", "k1")

    def test_write_failure_raises_cache_write_error(self, cache: DiskCacheStore) -> None:
        with patch.object(cache._cache, "set", side_effect=OSError("disk full")):
            with pytest.raises(CacheWriteError):
                cache.put("irdb", "k1", PAYLOAD)


# ------------------------------------------------------------------ #
# Invalidate, clear, stats
# ------------------------------------------------------------------ #


class TestMaintenance:
    def test_invalidate_removes_specific_entry(self, cache: DiskCacheStore) -> None:
        cache.put("irdb", "a", "[]")
        cache.put("irdb", "b", "[]")
        cache.invalidate("irdb", "a")
        assert cache.get("irdb", "a") is None
        assert cache.get("irdb", "b") == "[]"

    def test_clear_removes_all_entries(self, cache: DiskCacheStore) -> None:
        cache.put("irdb", "a", "[]")
        cache.put("other", "b", "[]")
        cache.clear()
        assert cache.get("irdb", "a") is None
        assert cache.get("other", "b") is None

    def test_stats_after_inserts(self, cache: DiskCacheStore, tmp_path) -> None:
        cache.put("irdb", "a", "[]")
        cache.put("irdb", "b", "[]")
        s = cache.stats()
        assert s == {
            "enabled": True,
            "size": 2,
            "directory": str(tmp_path / "responses"),
            "ttl_seconds": None,
        }

    def test_double_close(self, tmp_path) -> None:
        c = DiskCacheStore(tmp_path, CacheConfig())
        c.close()
        c.close()
