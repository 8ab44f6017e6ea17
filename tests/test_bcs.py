"""Unit tests for BCS schemas."""

from __future__ import annotations

import pytest

from suiscope.pneuma import bcs
from suiscope.pneuma.bcs import DecodeError, encode_uleb128, schema_for, split_type

ID_BYTES = bytes.fromhex("5c25935a0ff22c00de921ac499ce7d8a8087f6d21f01275a1f51d5c9fcf5f48a")


class TestPrimitives:
    def test_bool(self) -> None:
        assert bcs.Bool.parse(b"\x01") is True
        assert bcs.Bool.parse(b"\x00") is False
        assert bcs.Bool.serialize(True) == b"\x01"

    def test_invalid_bool_byte(self) -> None:
        with pytest.raises(DecodeError):
            bcs.Bool.parse(b"\x02")

    def test_bool_width_mismatch(self) -> None:
        with pytest.raises(DecodeError):
            bcs.Bool.parse(b"\x01\x00")
        with pytest.raises(DecodeError):
            bcs.Bool.parse(b"")

    def test_integers_are_little_endian(self) -> None:
        assert bcs.U16.serialize(0x0102) == b"\x02\x01"
        assert bcs.U64.parse(b"\x2a" + bytes(7)) == 42
        assert bcs.U256.parse(b"\xff" * 32) == 2**256 - 1

    def test_integer_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            bcs.U8.serialize(256)
        with pytest.raises(ValueError):
            bcs.U64.serialize(-1)

    def test_u64_short_input(self) -> None:
        with pytest.raises(DecodeError):
            bcs.U64.parse(bytes(7))


class TestAddresses:
    def test_id_parses_to_hex(self) -> None:
        assert bcs.ID.parse(ID_BYTES) == "0x" + ID_BYTES.hex()

    def test_address_serializes_short_form(self) -> None:
        assert bcs.Address.serialize("0x6") == bytes(31) + b"\x06"

    def test_id_wrong_width(self) -> None:
        with pytest.raises(DecodeError, match="32 bytes"):
            bcs.ID.parse(ID_BYTES[:31])
        with pytest.raises(DecodeError):
            bcs.ID.parse(ID_BYTES + b"\x00")

    def test_fixed_bytes_returned_unchanged(self) -> None:
        assert bcs.FixedBytes(32).parse(ID_BYTES) == ID_BYTES


class TestVariableLength:
    def test_string(self) -> None:
        data = bcs.String.serialize("mywhitelist.sui")
        assert data[0] == 15
        assert bcs.String.parse(data) == "mywhitelist.sui"

    def test_string_invalid_utf8(self) -> None:
        with pytest.raises(DecodeError):
            bcs.String.parse(b"\x01\xff")

    def test_string_trailing_bytes(self) -> None:
        with pytest.raises(DecodeError, match="trailing"):
            bcs.String.parse(b"\x01a\x00")

    def test_vector(self) -> None:
        schema = bcs.Vector(bcs.U16)
        assert schema.serialize([1, 2]) == b"\x02\x01\x00\x02\x00"
        assert schema.parse(b"\x02\x01\x00\x02\x00") == [1, 2]

    def test_vector_truncated(self) -> None:
        with pytest.raises(DecodeError):
            bcs.Vector(bcs.U16).parse(b"\x02\x01\x00")

    def test_option(self) -> None:
        schema = bcs.Option(bcs.U8)
        assert schema.parse(b"\x00") is None
        assert schema.parse(b"\x01\x07") == 7
        assert schema.serialize(None) == b"\x00"
        with pytest.raises(DecodeError):
            schema.parse(b"\x02")

    def test_struct(self) -> None:
        schema = bcs.Struct("Entry", [("id", bcs.ID), ("active", bcs.Bool)])
        assert schema.fixed_width == 33
        assert schema.parse(ID_BYTES + b"\x01") == {"id": "0x" + ID_BYTES.hex(), "active": True}
        with pytest.raises(DecodeError):
            schema.parse(ID_BYTES)

    def test_struct_with_variable_field_has_no_fixed_width(self) -> None:
        schema = bcs.Struct("Named", [("name", bcs.String)])
        assert schema.fixed_width is None


class TestUleb128:
    def test_encode(self) -> None:
        assert encode_uleb128(0) == b"\x00"
        assert encode_uleb128(127) == b"\x7f"
        assert encode_uleb128(300) == b"\xac\x02"

    def test_decode_long_length(self) -> None:
        payload = b"a" * 300
        assert bcs.Bytes.parse(b"\xac\x02" + payload) == payload

    def test_non_canonical(self) -> None:
        with pytest.raises(DecodeError):
            bcs.Bytes.parse(b"\x80\x00")

    def test_overflow(self) -> None:
        with pytest.raises(DecodeError):
            bcs.Bytes.parse(b"\xff\xff\xff\xff\xff\x01")


class TestSchemaFor:
    def test_primitives(self) -> None:
        assert schema_for("bool") is bcs.Bool
        assert schema_for("u64") is bcs.U64
        assert schema_for("address") is bcs.Address

    def test_vector_of_u8_is_bytes(self) -> None:
        assert schema_for("vector<u8>") is bcs.Bytes
        assert isinstance(schema_for("vector<u64>"), bcs.Vector)

    def test_full_length_struct_addresses(self) -> None:
        assert schema_for("0x0000000000000000000000000000000000000000000000000000000000000002::object::ID") is bcs.ID
        assert schema_for("0x1::string::String") is bcs.String

    def test_option(self) -> None:
        schema = schema_for("0x1::option::Option<0x2::object::ID>")
        assert isinstance(schema, bcs.Option)
        assert schema.element is bcs.ID

    def test_unknown_struct(self) -> None:
        with pytest.raises(ValueError):
            schema_for("0x2::coin::Coin<0x2::sui::SUI>")


class TestSplitType:
    def test_nested(self) -> None:
        assert split_type("0x2::table::Table<address, vector<u8>>") == (
            "0x2::table::Table",
            ["address", "vector<u8>"],
        )

    def test_unbalanced(self) -> None:
        with pytest.raises(ValueError):
            split_type("vector<u8")
