"""Cache commands -- inspect and clear the catalog response cache."""

from __future__ import annotations

import typer

from irdb.cache import DiskCacheStore
from irdb.config import get_cache_dir
from irdb.models import GlobalConfig
from irdb.output import format_response, info, success


cache_app = typer.Typer(no_args_is_help=True)


@cache_app.command("stats")
def cache_stats(ctx: typer.Context) -> None:
    """Show cache location, entry count, and TTL.

    Example::

        irdb cache stats
        irdb --json cache stats
    """
    config: GlobalConfig = ctx.obj["config"]
    store = DiskCacheStore(get_cache_dir(), config.cache)
    try:
        format_response(store.stats())
    finally:
        store.close()


@cache_app.command("clear")
def cache_clear(ctx: typer.Context) -> None:
    """Remove every cached catalog response."""
    config: GlobalConfig = ctx.obj["config"]
    if not config.cache.enabled:
        info("Cache is disabled; nothing to clear.")
        return
    store = DiskCacheStore(get_cache_dir(), config.cache)
    try:
        store.clear()
    finally:
        store.close()
    success("Cache cleared.")
