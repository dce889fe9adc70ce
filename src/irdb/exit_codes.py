"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~irdb.exceptions.IrdbError` subclass or CLI command.
Shell scripts wrapping ``irdb`` can inspect the exit code to tell a query
that produced nothing from a broken configuration.

Example::

    $ irdb codes 1234
    $ echo $?
    4   # EXIT_NO_RESULT -- the catalog could not be reached or decoded
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an unknown config key."""

EXIT_NO_RESULT = 4
"""The query finished but produced no result (fetch or decode failed)."""
