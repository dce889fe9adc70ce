"""irdb -- cached client for a remote IR code catalog.

The package fetches typed record collections (manufacturers, device
types, codesets, IR codes) from a catalog service, keeping raw responses
in a local cache so repeated queries never touch the network.

Typical library use::

    from irdb.cache import DiskCacheStore
    from irdb.client import HttpTransport
    from irdb.engine import QueryEngine
    from irdb.models import CacheConfig, RequestDescriptor

    engine = QueryEngine(DiskCacheStore("/tmp/irdb", CacheConfig()), HttpTransport(),
                         listener=lambda kind, records: print(kind, records))
    engine.query(RequestDescriptor.codesets("42", "3"))

Modules:
    engine: Single-slot query engine (cache -> fetch -> decode -> listener).
    models: Pydantic models shared across the package.
    decoder: Target-kind to record-collection decoding.
    config: XDG-aware configuration and precedence resolution.
    exceptions: Exception hierarchy with exit-code mapping.
    output: stdout/stderr formatting for the ``irdb`` CLI.
"""

__version__ = "0.1.0"
