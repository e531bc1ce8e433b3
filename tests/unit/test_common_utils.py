"""Unit tests for address, hex and time helpers."""

import pytest

from src.ds_common.addresses import ZERO_ADDRESS, normalize_address
from src.ds_common.datetime_utils import epoch_to_iso
from src.ds_common.errors import InvalidAddressError
from src.ds_common.hex_utils import UINT256_MAX, parse_hex_bytes, parse_uint256, to_hex
from src.ds_gateway.middleware.rate_limit import endpoint_group

MIXED = "0x52908400098527886E0F7030069857D2E4169EE7"


class TestAddresses:
    def test_checksums_lowercase(self) -> None:
        assert normalize_address(MIXED.lower()) == MIXED

    def test_zero_address(self) -> None:
        assert normalize_address(ZERO_ADDRESS) == ZERO_ADDRESS

    @pytest.mark.parametrize("value", ["", "0x123", "hello", "0x" + "g" * 40])
    def test_rejects_malformed(self, value: str) -> None:
        with pytest.raises(InvalidAddressError):
            normalize_address(value)


class TestHex:
    def test_parse_uint256(self) -> None:
        assert parse_uint256("0xff") == 255
        assert parse_uint256("255") == 255
        assert parse_uint256(7) == 7
        assert parse_uint256(hex(UINT256_MAX)) == UINT256_MAX

    @pytest.mark.parametrize("value", [-1, UINT256_MAX + 1, "0xzz", True])
    def test_parse_uint256_rejects(self, value) -> None:
        with pytest.raises(ValueError):
            parse_uint256(value)

    def test_hex_bytes(self) -> None:
        assert parse_hex_bytes("0xdead") == b"\xde\xad"
        assert parse_hex_bytes("beef") == b"\xbe\xef"
        assert to_hex(b"\x01\x02") == "0x0102"
        with pytest.raises(ValueError):
            parse_hex_bytes("0xabc")


def test_epoch_to_iso() -> None:
    assert epoch_to_iso(0) == "1970-01-01T00:00:00+00:00"


def test_endpoint_group() -> None:
    assert endpoint_group("/api/v1/markets/3/buy") == "markets"
    assert endpoint_group("/api/v1/admin/fees/withdraw") == "admin"
    assert endpoint_group("/health") == "health"
