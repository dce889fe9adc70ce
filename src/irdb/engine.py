"""Single-slot query engine: cache lookup, fetch, decode, and delivery.

:class:`QueryEngine` runs one catalog query at a time on a background
worker.  Each call to :meth:`QueryEngine.query` supersedes the previous
one: the old :class:`QueryTask` is cancelled and a new one is submitted.
A task works through four steps on the worker thread:

1. look the descriptor's cache key up in the :class:`~irdb.cache.CacheStore`;
2. on a miss, fetch the descriptor's URL through the
   :class:`~irdb.client.Transport` and store the body in the cache;
3. decode the raw payload with :func:`~irdb.decoder.decode`;
4. hand ``(target, records)`` to the listener, unless the task was
   cancelled in the meantime.

No failure reaches the caller.  A cache read error is a miss, a cache
write error is ignored, and a transport or decode error is delivered as
``records=None`` so the listener can tell "no data" from an empty list.

Example::

    def on_receive_data(kind, records):
        print(kind, records)

    with QueryEngine(store, transport, listener=on_receive_data) as engine:
        engine.query(RequestDescriptor.device_types("42"))
"""

from __future__ import annotations

import enum
import functools
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Callable, Optional

from irdb.cache import CacheStore
from irdb.client import Transport
from irdb.decoder import decode
from irdb.exceptions import DecodeError
from irdb.models import DEFAULT_BASE_URL, Record, RequestDescriptor, TargetKind

logger = logging.getLogger(__name__)

Listener = Callable[[TargetKind, Optional[list[Record]]], None]
"""Receives the target kind and the decoded records, or ``None`` on failure."""

Deliver = Callable[[Callable[[], None]], None]
"""Schedules a zero-argument callable on the caller's context."""


def _deliver_inline(fn: Callable[[], None]) -> None:
    fn()


class TaskState(str, enum.Enum):
    """Lifecycle of a :class:`QueryTask`."""

    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    FAILED = "failed"


class QueryTask:
    """Handle to one in-flight query.

    Created and owned by :class:`QueryEngine`; callers only observe it.
    Cancellation is advisory: a task already fetching keeps fetching, and
    its result is dropped at the last check before the listener is called.
    A cancel that arrives once the listener is running has no effect.
    """

    def __init__(self, descriptor: RequestDescriptor) -> None:
        self.descriptor = descriptor
        self.state = TaskState.PENDING
        self._cancelled = threading.Event()
        self._finished = threading.Event()
        self._future: Optional[Future[None]] = None

    def __repr__(self) -> str:
        return f"QueryTask(target={self.descriptor.target.value!r}, state={self.state.value!r})"

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def done(self) -> bool:
        """Whether the task reached a final state."""
        return self._finished.is_set()

    def cancel(self) -> bool:
        """Mark the task cancelled.

        A task still waiting for the worker is dropped from the queue
        right away; a running one finishes its I/O and then stops.

        Returns:
            ``False`` if the task had already finished, ``True`` otherwise.
        """
        if self.done:
            return False
        self._cancelled.set()
        if self._future is not None and self._future.cancel():
            self._finish(TaskState.CANCELLED)
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until the task finishes.  Returns ``False`` on timeout."""
        return self._finished.wait(timeout)

    def _finish(self, state: TaskState) -> None:
        # First final state wins.
        if self._finished.is_set():
            return
        self.state = state
        self._finished.set()


class QueryEngine:
    """Fetches typed catalog collections through a cache, one query at a time.

    Args:
        cache: Store for raw payloads, keyed by *namespace* and
            :attr:`~irdb.models.RequestDescriptor.cache_key`.
        transport: Performs the blocking GET on a cache miss.
        listener: Initial result callback; see :meth:`set_listener`.
        base_url: Catalog root that descriptors resolve their URLs against.
        namespace: Cache partition owned by the calling application.
        deliver: Runs the listener notification on the caller's context,
            e.g. ``loop.call_soon_threadsafe``.  By default the listener is
            called on the worker thread.
    """

    def __init__(
        self,
        cache: CacheStore,
        transport: Transport,
        *,
        listener: Optional[Listener] = None,
        base_url: str = DEFAULT_BASE_URL,
        namespace: str = "irdb",
        deliver: Optional[Deliver] = None,
    ) -> None:
        self._cache = cache
        self._transport = transport
        self._listener = listener
        self._base_url = base_url
        self._namespace = namespace
        self._deliver = deliver or _deliver_inline
        # Guards the current-task slot and the cancelled check before notify.
        self._lock = threading.Lock()
        self._current: Optional[QueryTask] = None
        self._closed = False
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="irdb-query")

    # ------------------------------------------------------------------ #
    # Context manager
    # ------------------------------------------------------------------ #

    def __enter__(self) -> QueryEngine:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()

    # ------------------------------------------------------------------ #
    # Public API
    # ------------------------------------------------------------------ #

    @property
    def current_task(self) -> Optional[QueryTask]:
        return self._current

    def set_listener(self, listener: Optional[Listener]) -> None:
        """Replace the listener.  Only one is active; ``None`` clears it."""
        self._listener = listener

    def query(self, descriptor: Optional[RequestDescriptor] = None) -> QueryTask:
        """Start a query, superseding any query still in flight.

        Returns immediately.  The result arrives through the listener; the
        returned task is only a handle for waiting or inspection.  After
        :meth:`close` the task comes back already cancelled and the
        listener is never called.

        Args:
            descriptor: What to fetch.  ``None`` queries the manufacturer
                list.
        """
        if descriptor is None:
            descriptor = RequestDescriptor()
        task = QueryTask(descriptor)
        with self._lock:
            if self._closed:
                logger.warning("Ignoring %s query on a closed engine", descriptor.target.value)
                task.cancel()
                task._finish(TaskState.CANCELLED)
                return task
            if self._current is not None:
                self._current.cancel()
            self._current = task
            task._future = self._executor.submit(self._run, task)
        logger.debug("Queued %s query (params=%s)", descriptor.target.value, descriptor.params)
        return task

    def cancel_query(self) -> None:
        """Cancel the current query, if it has not finished yet."""
        with self._lock:
            if self._current is not None and self._current.cancel():
                logger.debug("Cancelled %s query", self._current.descriptor.target.value)

    def close(self) -> None:
        """Cancel the current query and stop the worker.

        Waits for a fetch already in progress to return.  Further calls to
        :meth:`query` return cancelled tasks.
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            if self._current is not None:
                self._current.cancel()
        self._executor.shutdown(wait=True)

    # ------------------------------------------------------------------ #
    # Worker
    # ------------------------------------------------------------------ #

    def _run(self, task: QueryTask) -> None:
        descriptor = task.descriptor
        if task.cancelled:
            logger.debug("Skipping cancelled %s query", descriptor.target.value)
            task._finish(TaskState.CANCELLED)
            return

        raw = self._load(descriptor)
        records: Optional[list[Record]] = None
        if raw is not None:
            try:
                records = decode(descriptor.target, raw)
            except DecodeError as exc:
                logger.warning("Discarding %s payload: %s", descriptor.target.value, exc)

        try:
            self._deliver(functools.partial(self._notify, task, records))
        except Exception:
            logger.exception("Could not deliver %s result", descriptor.target.value)
            task._finish(TaskState.FAILED)

    def _load(self, descriptor: RequestDescriptor) -> Optional[str]:
        """Return the raw payload from the cache or the network, or ``None``."""
        key = descriptor.cache_key
        try:
            cached = self._cache.get(self._namespace, key)
        except Exception as exc:
            logger.warning("Cache read failed for %s, treating as miss: %s", key, exc)
            cached = None
        if cached is not None:
            logger.debug("Returning cached %s payload (%s)", descriptor.target.value, key)
            return cached

        url = descriptor.request_url(self._base_url)
        try:
            text = self._transport.fetch(url)
        except Exception as exc:
            logger.warning("Query to %s failed: %s", url, exc)
            return None

        try:
            self._cache.put(self._namespace, key, text)
        except Exception as exc:
            logger.warning("Cache write failed for %s: %s", key, exc)
        return text

    def _notify(self, task: QueryTask, records: Optional[list[Record]]) -> None:
        with self._lock:
            if task.cancelled:
                logger.debug("Suppressing result of cancelled %s query", task.descriptor.target.value)
                task._finish(TaskState.CANCELLED)
                return
            listener = self._listener

        # Outside the lock: query() and cancel_query() must not wait on the listener.
        state = TaskState.COMPLETED if records is not None else TaskState.FAILED
        try:
            if listener is not None:
                listener(task.descriptor.target, records)
        except Exception:
            logger.exception("Listener raised on %s result", task.descriptor.target.value)
            state = TaskState.FAILED
        task._finish(state)
