"""Exception hierarchy for irdb.

All exceptions inherit from :class:`IrdbError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`irdb.exit_codes`.
The :class:`~irdb.engine.QueryEngine` never lets these escape to its
caller: cache errors become misses, transport and decode errors become a
``None`` delivery.  The CLI entry point in :func:`irdb.app.main` catches
``IrdbError`` and exits with the matching code.

Subclass hierarchy::

    IrdbError (exit 1)
    +-- ConfigError         (exit 1)
    +-- CacheError          (exit 1)
    |   +-- CacheReadError
    |   +-- CacheWriteError
    +-- TransportError      (exit 1, never reaches the CLI)
    +-- DecodeError         (exit 1, never reaches the CLI)
    +-- NoResultError       (exit 4)
"""

from __future__ import annotations

from typing import Optional

from irdb.exit_codes import EXIT_GENERIC_FAILURE, EXIT_NO_RESULT


class IrdbError(Exception):
    """Base exception for all irdb errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class ConfigError(IrdbError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


class CacheError(IrdbError):
    """Base class for cache backend failures."""


class CacheReadError(CacheError):
    """Raised when the cache backend cannot be read. Treated as a miss."""


class CacheWriteError(CacheError):
    """Raised when the cache backend cannot be written. Ignored by the engine."""


class TransportError(IrdbError):
    """Raised on network, timeout, or protocol failures while fetching a URL.

    Args:
        message: Human-readable error description.
        status_code: HTTP status of the failed response, when there was one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class DecodeError(IrdbError):
    """Raised when a payload is not valid JSON or does not match the record shape."""


class NoResultError(IrdbError):
    """Raised by the CLI when a query delivered no result."""

    exit_code = EXIT_NO_RESULT
