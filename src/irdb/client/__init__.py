"""HTTP transport for irdb.

Provides the :class:`Transport` protocol that
:class:`~irdb.engine.QueryEngine` depends on, and :class:`HttpTransport`,
a blocking implementation backed by :class:`httpx.Client`.

Example::

    from irdb.client import HttpTransport
    from irdb.models import RequestConfig

    with HttpTransport(RequestConfig(timeout=10)) as transport:
        text = transport.fetch("https://irdb.globalcache.com:8081/api/manufacturers")
"""

from irdb.client.transport import HttpTransport, Transport

__all__ = ["HttpTransport", "Transport"]
