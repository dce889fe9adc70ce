"""Decode raw catalog payloads into typed record collections.

Each :class:`~irdb.models.TargetKind` maps to a Pydantic
:class:`~pydantic.TypeAdapter` that parses a JSON array of objects into a
list of the matching record model.  :func:`decode` looks the adapter up in
:data:`DECODERS` and converts every failure -- malformed JSON, a payload
that is not an array, objects of the wrong shape, or a kind without an
adapter -- into :class:`~irdb.exceptions.DecodeError`.
"""

from __future__ import annotations

from typing import Any

from pydantic import TypeAdapter, ValidationError

from irdb.exceptions import DecodeError
from irdb.models import Codeset, DeviceType, IrCode, Manufacturer, Record, TargetKind

DECODERS: dict[TargetKind, TypeAdapter[Any]] = {
    TargetKind.MANUFACTURER: TypeAdapter(list[Manufacturer]),
    TargetKind.DEVICE_TYPE: TypeAdapter(list[DeviceType]),
    TargetKind.CODESET: TypeAdapter(list[Codeset]),
    TargetKind.IR_CODE: TypeAdapter(list[IrCode]),
}


def decode(kind: TargetKind, text: str) -> list[Record]:
    """Parse *text* as the record collection for *kind*.

    Args:
        kind: The target kind the payload was requested for.
        text: Raw JSON text, fetched or cached.

    Returns:
        The decoded records.  An empty JSON array yields an empty list.

    Raises:
        DecodeError: If *kind* has no decoder or *text* does not parse
            into a list of the kind's records.
    """
    adapter = DECODERS.get(kind)
    if adapter is None:
        raise DecodeError(f"No decoder registered for {kind!r}")
    try:
        return adapter.validate_json(text)
    except ValidationError as exc:
        raise DecodeError(
            f"Cannot decode {TargetKind(kind).value} payload: {exc.error_count()} error(s), "
            f"first: {exc.errors()[0]['msg']}"
        ) from exc
