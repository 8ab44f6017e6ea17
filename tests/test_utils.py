"""Unit tests for utils.py functions."""

from __future__ import annotations

import pytest

from suiscope.utils import (
    address_to_bytes,
    b64decode,
    b64encode,
    blake2b256,
    normalize_sui_address,
)


class TestBlake2b256:
    """Tests for blake2b256 function."""

    def test_empty_bytes(self) -> None:
        result = blake2b256(b"")
        assert result.hex() == "0e5751c026e543b2e8ab2eb06099daa1d1e5df47778f7787faab45cdf12fe3a8"

    def test_digest_size(self) -> None:
        assert len(blake2b256(b"sui")) == 32


class TestBase64:
    """Tests for base64 helpers."""

    def test_round_trip(self) -> None:
        data = bytes([0x00, 0xFB, 0xFF, 0xFE])
        assert b64decode(b64encode(data)) == data

    def test_standard_alphabet(self) -> None:
        assert b64encode(bytes([0xFB, 0xFF])) == "+/8="

    def test_invalid_characters(self) -> None:
        with pytest.raises(ValueError):
            b64decode("not*base64")


class TestNormalizeSuiAddress:
    """Tests for normalize_sui_address function."""

    def test_short_address_padded(self) -> None:
        assert normalize_sui_address("0x6") == "0x" + "0" * 63 + "6"

    def test_uppercase_and_missing_prefix(self) -> None:
        assert normalize_sui_address("ABC") == "0x" + "0" * 61 + "abc"

    def test_full_length_unchanged(self) -> None:
        address = "0x" + "ab" * 32
        assert normalize_sui_address(address) == address

    @pytest.mark.parametrize("value", ["", "0x", "0x" + "a" * 65, "0xzz"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            normalize_sui_address(value)

    def test_address_to_bytes(self) -> None:
        assert address_to_bytes("0x2") == bytes(31) + b"\x02"
