"""Shared test fixtures for irdb.

Provides isolated config environments, output state management, and in-memory
stand-ins for the engine collaborators.  Discovered by pytest automatically.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Optional

import pytest

from irdb.exceptions import TransportError
from irdb.output import OutputFormat, OutputManager, reset_output, set_output


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time, which go stale once CliRunner restores the streams.
    """
    yield
    reset_output()


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a quiet PLAIN-format OutputManager for the test."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration and cache to a temporary directory.

    Points XDG_CONFIG_HOME, XDG_CACHE_HOME, and XDG_DATA_HOME at
    subdirectories of tmp_path, forces the XDG code path, and clears the
    IRDB_* environment variables.
    """
    monkeypatch.setattr("irdb.config._is_xdg_platform", lambda: True)
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_CACHE_HOME", str(tmp_path / "cache"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in ["IRDB_BASE_URL", "IRDB_NO_CACHE"]:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Collaborator fakes
# ---------------------------------------------------------------------------


class MemoryCache:
    """Dict-backed CacheStore that records every call."""

    def __init__(self) -> None:
        self.data: dict[tuple[str, str], str] = {}
        self.gets: list[tuple[str, str]] = []
        self.puts: list[tuple[str, str, str]] = []

    def get(self, namespace: str, key: str) -> Optional[str]:
        self.gets.append((namespace, key))
        return self.data.get((namespace, key))

    def put(self, namespace: str, key: str, value: str) -> None:
        self.puts.append((namespace, key, value))
        self.data[(namespace, key)] = value


class FakeTransport:
    """Transport returning canned bodies per URL.

    A URL mapped to an exception instance raises it.  When ``gate`` is set,
    every fetch blocks until the event is set, which lets tests hold a task
    in its network step.
    """

    def __init__(self, responses: Optional[dict[str, object]] = None) -> None:
        self.responses: dict[str, object] = dict(responses or {})
        self.calls: list[str] = []
        self.gate: Optional[threading.Event] = None
        self.started = threading.Event()

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        self.started.set()
        if self.gate is not None:
            self.gate.wait(5)
        body = self.responses.get(url)
        if body is None:
            raise TransportError(f"HTTP 404 from {url}", status_code=404)
        if isinstance(body, Exception):
            raise body
        return str(body)


class RecordingListener:
    """Listener that records deliveries and signals each one."""

    def __init__(self) -> None:
        self.calls: list[tuple[object, object]] = []
        self.received = threading.Event()

    def __call__(self, kind: object, records: object) -> None:
        self.calls.append((kind, records))
        self.received.set()


@pytest.fixture
def memory_cache() -> MemoryCache:
    return MemoryCache()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def listener() -> RecordingListener:
    return RecordingListener()
