"""Disk-based caching of raw catalog payloads.

Uses :mod:`diskcache` to persist response bodies on the filesystem.
Entries live until evicted by :mod:`diskcache` or, when
:attr:`~irdb.models.CacheConfig.ttl_seconds` is set, until they expire.

Backend failures are raised as :class:`~irdb.exceptions.CacheReadError`
and :class:`~irdb.exceptions.CacheWriteError`; the query engine turns the
former into a miss and ignores the latter.

See Also:
    :class:`~irdb.models.CacheConfig` -- the Pydantic model that
    controls ``enabled`` and ``ttl_seconds``.
"""

from __future__ import annotations

import sqlite3
from pathlib import Path
from typing import Any, Optional, Protocol, runtime_checkable

import diskcache

from irdb.exceptions import CacheReadError, CacheWriteError
from irdb.models import CacheConfig


@runtime_checkable
class CacheStore(Protocol):
    """Key/value text store partitioned by namespace."""

    def get(self, namespace: str, key: str) -> Optional[str]:
        """Return the cached text for *key*, or ``None`` on a miss."""
        ...

    def put(self, namespace: str, key: str, value: str) -> None:
        """Store *value* under *key*."""
        ...


class DiskCacheStore:
    """Disk-backed :class:`CacheStore` for raw catalog payloads.

    Args:
        cache_dir: Root directory for the cache.  A ``responses/``
            subdirectory is created inside it.
        config: Cache configuration (``enabled`` flag and ``ttl_seconds``).

    Example::

        from irdb.cache import DiskCacheStore
        from irdb.models import CacheConfig

        store = DiskCacheStore("/tmp/irdb-cache", CacheConfig())
        store.put("irdb", "abc123", '[{"id": 1}]')
        store.get("irdb", "abc123")
    """

    def __init__(self, cache_dir: str | Path, config: CacheConfig) -> None:
        self._config = config
        self._cache: Optional[diskcache.Cache] = None
        self._cache_dir = Path(cache_dir)
        if config.enabled:
            self._cache = diskcache.Cache(str(self._cache_dir / "responses"))

    def get(self, namespace: str, key: str) -> Optional[str]:
        """Look up a cached payload.

        Returns:
            The cached text, or ``None`` on a miss or when caching is
            disabled.

        Raises:
            CacheReadError: If the backend cannot be read.
        """
        if self._cache is None:
            return None
        try:
            return self._cache.get(self._make_key(namespace, key))
        except (diskcache.Timeout, sqlite3.Error, OSError) as exc:
            raise CacheReadError(f"Cannot read cache entry {namespace}:{key}: {exc}") from exc

    def put(self, namespace: str, key: str, value: str) -> None:
        """Store a payload.  A no-op when caching is disabled.

        Raises:
            CacheWriteError: If the backend cannot be written.
        """
        if self._cache is None:
            return
        try:
            self._cache.set(
                self._make_key(namespace, key), value, expire=self._config.ttl_seconds
            )
        except (diskcache.Timeout, sqlite3.Error, OSError) as exc:
            raise CacheWriteError(f"Cannot write cache entry {namespace}:{key}: {exc}") from exc

    def invalidate(self, namespace: str, key: str) -> None:
        """Remove a single entry."""
        if self._cache is None:
            return
        self._cache.delete(self._make_key(namespace, key))

    def clear(self) -> None:
        """Remove all entries from the cache."""
        if self._cache is not None:
            self._cache.clear()

    def stats(self) -> dict[str, Any]:
        """Return cache statistics.

        Returns:
            A ``dict`` with ``enabled`` (bool), and when enabled:
            ``size`` (number of entries), ``directory`` (str path), and
            ``ttl_seconds`` (int or ``None``).
        """
        if self._cache is None:
            return {"enabled": False}
        return {
            "enabled": True,
            "size": len(self._cache),
            "directory": str(self._cache_dir / "responses"),
            "ttl_seconds": self._config.ttl_seconds,
        }

    def close(self) -> None:
        """Close the underlying :class:`diskcache.Cache` and release resources."""
        if self._cache is not None:
            self._cache.close()

    def _make_key(self, namespace: str, key: str) -> str:
        return f"{namespace}:{key}"
