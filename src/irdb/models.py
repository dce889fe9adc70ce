"""Canonical Pydantic models shared across all irdb modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Query models** -- what the caller asks for:
    :class:`TargetKind` and :class:`RequestDescriptor`.

**Record models** -- what the catalog returns, one per target kind:
    :class:`Manufacturer`, :class:`DeviceType`, :class:`Codeset`, and
    :class:`IrCode`.

**Configuration models** -- serialised as JSON in the user's config directory:
    :class:`CatalogConfig`, :class:`RequestConfig`, :class:`CacheConfig`,
    :class:`OutputConfig`, and :class:`GlobalConfig`.

Record models accept the catalog's camelCase keys through aliases and ignore
keys they do not know, so that additions on the server side never break
decoding.  Only ``id`` is required on every record.
"""

from __future__ import annotations

import enum
import hashlib
import json
import re
from typing import Optional, Union
from urllib.parse import quote, urlencode

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DEFAULT_BASE_URL = "https://irdb.globalcache.com:8081/api"
"""Root of the remote IR code catalog."""


# --- Query models ---


class TargetKind(str, enum.Enum):
    """Which typed record collection a request concerns.

    The value doubles as the stable name used in cache keys and log lines.
    """

    MANUFACTURER = "manufacturer"
    DEVICE_TYPE = "device_type"
    CODESET = "codeset"
    IR_CODE = "ir_code"


_PATH_TEMPLATES: dict[TargetKind, str] = {
    TargetKind.MANUFACTURER: "manufacturers",
    TargetKind.DEVICE_TYPE: "manufacturers/{manufacturer}/devicetypes",
    TargetKind.CODESET: "manufacturers/{manufacturer}/devicetypes/{deviceType}/codesets",
    TargetKind.IR_CODE: "codesets/{codeset}",
}

_PLACEHOLDER_RE = re.compile(r"\{(\w+)\}")


class RequestDescriptor(BaseModel):
    """Immutable description of one catalog query.

    A descriptor names the :class:`TargetKind` to fetch and the parameters
    needed to reach it.  From those two values it derives the
    :attr:`cache_key` and the endpoint :attr:`path`, both deterministic and
    independent of parameter order.  Construction never fails: a parameter
    the path template needs but the caller left out renders as an empty
    segment, and the server's rejection is reported like any other failed
    fetch.

    Example::

        d = RequestDescriptor.codesets("42", "3")
        d.request_url("https://irdb.example.com/api")
        # 'https://irdb.example.com/api/manufacturers/42/devicetypes/3/codesets'
    """

    model_config = ConfigDict(frozen=True)

    target: TargetKind = TargetKind.MANUFACTURER
    params: dict[str, str] = Field(default_factory=dict)

    @classmethod
    def manufacturers(cls) -> RequestDescriptor:
        return cls(target=TargetKind.MANUFACTURER)

    @classmethod
    def device_types(cls, manufacturer: str) -> RequestDescriptor:
        return cls(target=TargetKind.DEVICE_TYPE, params={"manufacturer": manufacturer})

    @classmethod
    def codesets(cls, manufacturer: str, device_type: str) -> RequestDescriptor:
        return cls(
            target=TargetKind.CODESET,
            params={"manufacturer": manufacturer, "deviceType": device_type},
        )

    @classmethod
    def ir_codes(cls, codeset: str) -> RequestDescriptor:
        return cls(target=TargetKind.IR_CODE, params={"codeset": codeset})

    @property
    def cache_key(self) -> str:
        """SHA-256 of ``target|sorted_params`` (params omitted when empty)."""
        parts = [self.target.value]
        if self.params:
            parts.append(json.dumps(self.params, sort_keys=True))
        raw = "|".join(parts)
        return hashlib.sha256(raw.encode()).hexdigest()

    @property
    def path(self) -> str:
        """Endpoint path relative to the catalog root.

        Template placeholders are filled from :attr:`params` (URL-quoted);
        any remaining parameters become a sorted query string.
        """
        template = _PATH_TEMPLATES[self.target]
        used = set(_PLACEHOLDER_RE.findall(template))
        path = _PLACEHOLDER_RE.sub(
            lambda m: quote(self.params.get(m.group(1), ""), safe=""), template
        )
        extra = sorted((k, v) for k, v in self.params.items() if k not in used)
        if extra:
            path = f"{path}?{urlencode(extra)}"
        return path

    def request_url(self, base_url: str = DEFAULT_BASE_URL) -> str:
        """Return the full URL of this query under *base_url*."""
        return f"{base_url.rstrip('/')}/{self.path}"


# --- Record models ---


class _Record(BaseModel):
    """Common configuration for catalog records."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: int


class Manufacturer(_Record):
    """A device brand listed by the catalog."""

    manufacturer: str = ""


class DeviceType(_Record):
    """A class of device (TV, receiver, ...) offered by one manufacturer."""

    manufacturer_id: Optional[int] = None
    device_type: str = ""


class Codeset(_Record):
    """A set of IR codes for one manufacturer and device type."""

    manufacturer_id: Optional[int] = None
    device_type_id: Optional[int] = None
    codeset: str = ""


class IrCode(_Record):
    """A single IR function of a codeset, in Global Caché and hex notation."""

    codeset_id: Optional[int] = None
    function: str = ""
    code1: str = ""
    hex_code1: str = ""
    code2: Optional[str] = None
    hex_code2: Optional[str] = None


Record = Union[Manufacturer, DeviceType, Codeset, IrCode]


# --- Configuration models ---


class CatalogConfig(BaseModel):
    """Where the catalog lives and how its responses are partitioned in the cache."""

    base_url: str = Field(default=DEFAULT_BASE_URL, description="Catalog API root URL")
    namespace: str = Field(default="irdb", description="Cache namespace for this application")


class RequestConfig(BaseModel):
    """HTTP settings applied to every catalog fetch."""

    timeout: int = Field(default=30, description="Request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Verify SSL certificates")


class CacheConfig(BaseModel):
    """Catalog response cache settings stored in :class:`GlobalConfig`."""

    enabled: bool = Field(default=True, description="Enable response caching")
    ttl_seconds: Optional[int] = Field(
        default=None, description="Cache TTL in seconds; unset keeps entries forever"
    )


class OutputConfig(BaseModel):
    """Default output format preferences stored in :class:`GlobalConfig`."""

    format: str = Field(
        default="auto", description="Output format: auto, json, plain, rich"
    )


class GlobalConfig(BaseModel):
    """User-wide configuration persisted at ``~/.config/irdb/config.json``.

    Loaded and saved by :func:`~irdb.config.load_global_config` and
    :func:`~irdb.config.save_global_config`.  Environment variables and CLI
    flags take precedence; see :func:`~irdb.config.resolve_config`.
    """

    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    request: RequestConfig = Field(default_factory=RequestConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
