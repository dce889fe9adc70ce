"""Catalog response caching for irdb.

This package provides the :class:`CacheStore` protocol that
:class:`~irdb.engine.QueryEngine` depends on, and :class:`DiskCacheStore`,
its default implementation backed by :mod:`diskcache`.  Raw catalog
payloads are stored as text keyed by an application namespace and a
:attr:`~irdb.models.RequestDescriptor.cache_key`.

The cache is controlled by the ``cache`` section of the global
configuration (:class:`~irdb.models.CacheConfig`).
"""

from irdb.cache.cache import CacheStore, DiskCacheStore

__all__ = ["CacheStore", "DiskCacheStore"]
