"""Tests for RequestDescriptor key/URL derivation and the record models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from irdb.models import (
    DEFAULT_BASE_URL,
    Codeset,
    GlobalConfig,
    IrCode,
    RequestDescriptor,
    TargetKind,
)


BASE = "https://irdb.example.com/api"


# ------------------------------------------------------------------ #
# Defaults
# ------------------------------------------------------------------ #


class TestDefaults:
    def test_default_descriptor_is_manufacturer_list(self) -> None:
        d = RequestDescriptor()
        assert d.target == TargetKind.MANUFACTURER
        assert d.params == {}

    def test_default_descriptor_url(self) -> None:
        assert RequestDescriptor().request_url() == f"{DEFAULT_BASE_URL}/manufacturers"

    def test_descriptor_is_immutable(self) -> None:
        d = RequestDescriptor()
        with pytest.raises(ValidationError):
            d.target = TargetKind.CODESET  # type: ignore[misc]


# ------------------------------------------------------------------ #
# URL construction
# ------------------------------------------------------------------ #


class TestRequestURL:
    @pytest.mark.parametrize(
        "descriptor, expected",
        [
            (RequestDescriptor.manufacturers(), "manufacturers"),
            (RequestDescriptor.device_types("42"), "manufacturers/42/devicetypes"),
            (
                RequestDescriptor.codesets("42", "3"),
                "manufacturers/42/devicetypes/3/codesets",
            ),
            (RequestDescriptor.ir_codes("1234"), "codesets/1234"),
        ],
    )
    def test_paths_per_kind(self, descriptor: RequestDescriptor, expected: str) -> None:
        assert descriptor.request_url(BASE) == f"{BASE}/{expected}"

    def test_trailing_slash_on_base_is_ignored(self) -> None:
        d = RequestDescriptor.ir_codes("7")
        assert d.request_url(BASE + "/") == d.request_url(BASE)

    def test_values_are_url_quoted(self) -> None:
        d = RequestDescriptor.device_types("Bang & Olufsen/DK")
        assert d.path == "manufacturers/Bang%20%26%20Olufsen%2FDK/devicetypes"

    def test_missing_param_renders_empty_segment(self) -> None:
        d = RequestDescriptor(target=TargetKind.IR_CODE)
        assert d.path == "codesets/"

    def test_extra_params_become_sorted_query(self) -> None:
        d = RequestDescriptor(
            target=TargetKind.MANUFACTURER, params={"page": "2", "limit": "50"}
        )
        assert d.path == "manufacturers?limit=50&page=2"


# ------------------------------------------------------------------ #
# Cache keys
# ------------------------------------------------------------------ #


class TestCacheKey:
    def test_key_deterministic(self) -> None:
        assert RequestDescriptor.codesets("42", "3").cache_key == RequestDescriptor.codesets("42", "3").cache_key

    def test_key_param_order_independent(self) -> None:
        a = RequestDescriptor(target=TargetKind.CODESET, params={"manufacturer": "42", "deviceType": "3"})
        b = RequestDescriptor(target=TargetKind.CODESET, params={"deviceType": "3", "manufacturer": "42"})
        assert a.cache_key == b.cache_key

    def test_key_varies_with_params(self) -> None:
        assert RequestDescriptor.ir_codes("1").cache_key != RequestDescriptor.ir_codes("2").cache_key

    def test_key_varies_with_target(self) -> None:
        a = RequestDescriptor(target=TargetKind.MANUFACTURER)
        b = RequestDescriptor(target=TargetKind.DEVICE_TYPE)
        assert a.cache_key != b.cache_key

    def test_key_is_hex_digest(self) -> None:
        key = RequestDescriptor().cache_key
        assert len(key) == 64
        int(key, 16)


# ------------------------------------------------------------------ #
# Records and config
# ------------------------------------------------------------------ #


class TestRecords:
    def test_camel_case_aliases(self) -> None:
        c = Codeset.model_validate({"id": 1, "manufacturerId": 42, "deviceTypeId": 3, "codeset": "X"})
        assert c.manufacturer_id == 42
        assert c.device_type_id == 3

    def test_unknown_keys_ignored(self) -> None:
        code = IrCode.model_validate({"id": 5, "function": "POWER", "brandNew": True})
        assert code.function == "POWER"
        assert not hasattr(code, "brandNew")

    def test_id_required(self) -> None:
        with pytest.raises(ValidationError):
            Codeset.model_validate({"codeset": "X"})

    def test_dump_by_alias(self) -> None:
        code = IrCode(id=1, hex_code1="0000 006D")
        assert code.model_dump(by_alias=True)["hexCode1"] == "0000 006D"


class TestGlobalConfig:
    def test_defaults(self) -> None:
        config = GlobalConfig()
        assert config.catalog.base_url == DEFAULT_BASE_URL
        assert config.catalog.namespace == "irdb"
        assert config.cache.enabled is True
        assert config.cache.ttl_seconds is None
        assert config.request.timeout == 30
