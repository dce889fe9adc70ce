"""Built-in CLI command groups for irdb.

Each module defines the commands of one group and is registered on the
root Typer application in :func:`irdb.app.main`:

* :mod:`irdb.commands.catalog` -- ``manufacturers``, ``device-types``,
  ``codesets``, and ``codes`` queries.
* :mod:`irdb.commands.cache` -- ``irdb cache`` inspection and clearing.
* :mod:`irdb.commands.config` -- ``irdb config`` viewing and editing.
"""
