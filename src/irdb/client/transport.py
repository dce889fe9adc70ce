"""Blocking HTTP GET transport for catalog fetches.

This module provides :class:`HttpTransport`, a thin wrapper around
:class:`httpx.Client` that fetches a fully formed URL and returns the
response body as text.  Every failure -- connection problems, timeouts,
non-2xx statuses, undecodable bodies -- is raised as
:class:`~irdb.exceptions.TransportError`.  There is no retry: a failed
fetch is reported once and the caller decides what to do.
"""

from __future__ import annotations

import logging
from typing import Optional, Protocol, runtime_checkable

import httpx

from irdb.exceptions import TransportError
from irdb.models import RequestConfig

logger = logging.getLogger(__name__)


@runtime_checkable
class Transport(Protocol):
    """Anything that can GET a URL and return its body as text."""

    def fetch(self, url: str) -> str:
        """Return the full response body of *url*.

        Raises:
            TransportError: On any I/O or protocol failure.
        """
        ...


class HttpTransport:
    """:class:`Transport` backed by :class:`httpx.Client`.

    The underlying client is created on first use, so the transport works
    both as a context manager and as a long-lived object shared with a
    :class:`~irdb.engine.QueryEngine` worker thread.  Call :meth:`close`
    (or leave the ``with`` block) to release the connection pool.

    Args:
        config: Timeout and SSL verification settings.
        transport: Optional :class:`httpx.BaseTransport` handed to the
            client, e.g. :class:`httpx.MockTransport` in tests.
    """

    def __init__(
        self,
        config: Optional[RequestConfig] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self._config = config or RequestConfig()
        self._transport = transport
        self._client: Optional[httpx.Client] = None

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> HttpTransport:
        self._ensure_client()
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying client, if one was opened."""
        if self._client:
            self._client.close()
            self._client = None

    # ------------------------------------------------------------------ #
    # Fetch
    # ------------------------------------------------------------------ #

    def fetch(self, url: str) -> str:
        """GET *url* and return the body decoded as UTF-8.

        Raises:
            TransportError: On connection or timeout errors, on any
                non-2xx status (``status_code`` is set), or when the body
                is not valid UTF-8.
        """
        client = self._ensure_client()
        logger.info("GET %s", url)
        try:
            response = client.get(url, headers={"Accept": "application/json"})
        except httpx.TimeoutException as exc:
            raise TransportError(f"Timed out fetching {url}: {exc}") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Request to {url} failed: {exc}") from exc

        if not response.is_success:
            raise TransportError(
                f"HTTP {response.status_code} from {url}",
                status_code=response.status_code,
            )

        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise TransportError(f"Response from {url} is not valid UTF-8: {exc}") from exc

    def _ensure_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                timeout=self._config.timeout,
                verify=self._config.verify_ssl,
                follow_redirects=True,
                transport=self._transport,
            )
        return self._client
