"""Catalog query commands -- one command per target kind.

Every command builds a :class:`~irdb.models.RequestDescriptor`, runs it
through a :class:`~irdb.engine.QueryEngine` wired to the disk cache and
the HTTP transport, waits for the listener, and prints the records.
A query that delivers no result exits with
:data:`~irdb.exit_codes.EXIT_NO_RESULT`.
"""

from __future__ import annotations

from typing import Any, Optional

import typer

from irdb.cache import DiskCacheStore
from irdb.client import HttpTransport
from irdb.config import get_cache_dir
from irdb.engine import QueryEngine
from irdb.exceptions import IrdbError, NoResultError
from irdb.models import GlobalConfig, Record, RequestDescriptor, TargetKind
from irdb.output import OutputFormat, debug, error, format_response, get_output, info, print_table, suggest


def fetch_records(config: GlobalConfig, descriptor: RequestDescriptor) -> list[Record]:
    """Run *descriptor* to completion and return its records.

    Raises:
        NoResultError: If the fetch or the decode failed.
    """
    received: dict[str, Any] = {}

    def _on_receive_data(kind: TargetKind, records: Optional[list[Record]]) -> None:
        received["records"] = records

    store = DiskCacheStore(get_cache_dir(), config.cache)
    try:
        with HttpTransport(config.request) as transport, QueryEngine(
            store,
            transport,
            listener=_on_receive_data,
            base_url=config.catalog.base_url,
            namespace=config.catalog.namespace,
        ) as engine:
            debug(f"GET {descriptor.request_url(config.catalog.base_url)}")
            engine.query(descriptor).wait()
    finally:
        store.close()

    records = received.get("records")
    if records is None:
        raise NoResultError(f"No {descriptor.target.value} data received from the catalog")
    return records


def _render(records: list[Record], title: str) -> None:
    if get_output().format == OutputFormat.JSON:
        format_response([r.model_dump(mode="json", by_alias=True) for r in records])
        return
    if not records:
        info(f"No {title.lower()} found.")
        return
    headers = list(type(records[0]).model_fields)
    rows = [
        ["" if v is None else str(v) for v in r.model_dump().values()]
        for r in records
    ]
    print_table(headers, rows, title=title)


def _run(ctx: typer.Context, descriptor: RequestDescriptor, title: str) -> None:
    config: GlobalConfig = ctx.obj["config"]
    try:
        records = fetch_records(config, descriptor)
    except IrdbError as exc:
        error(str(exc))
        suggest("Run with --verbose to see why the fetch or decode failed.")
        raise typer.Exit(code=exc.exit_code) from None
    _render(records, title)


def manufacturers_command(ctx: typer.Context) -> None:
    """List all manufacturers in the catalog.

    Example::

        irdb manufacturers
        irdb --json manufacturers
    """
    _run(ctx, RequestDescriptor.manufacturers(), "Manufacturers")


def device_types_command(
    ctx: typer.Context,
    manufacturer: str = typer.Argument(help="Manufacturer id."),
) -> None:
    """List the device types of a manufacturer."""
    _run(ctx, RequestDescriptor.device_types(manufacturer), "Device types")


def codesets_command(
    ctx: typer.Context,
    manufacturer: str = typer.Argument(help="Manufacturer id."),
    device_type: str = typer.Argument(help="Device type id."),
) -> None:
    """List the codesets for a manufacturer and device type."""
    _run(ctx, RequestDescriptor.codesets(manufacturer, device_type), "Codesets")


def codes_command(
    ctx: typer.Context,
    codeset: str = typer.Argument(help="Codeset id."),
) -> None:
    """List the IR codes of a codeset."""
    _run(ctx, RequestDescriptor.ir_codes(codeset), "IR codes")
