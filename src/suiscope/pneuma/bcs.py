"""
BCS (Binary Canonical Serialization) schemas.

Each schema object serializes a Python value and strictly parses bytes back:
a parse that leaves bytes unread, or runs out of bytes, fails with
``DecodeError``.  Move return values from ``devInspect`` are decoded with
these.

    >>> Bool.parse(b"\\x01")
    True
    >>> Vector(U8).serialize([1, 2])
    b'\\x02\\x01\\x02'
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from ..utils import SUI_ADDRESS_LENGTH, normalize_sui_address

MAX_ULEB128_U32 = 0xFFFFFFFF


class DecodeError(ValueError):
    pass


class BcsReader:
    def __init__(self, data: bytes) -> None:
        self.data = bytes(data)
        self.pos = 0

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def read(self, n: int) -> bytes:
        if n > self.remaining:
            raise DecodeError(
                f"Unexpected end of input: need {n} bytes at offset {self.pos}, "
                f"have {self.remaining}"
            )
        chunk = self.data[self.pos:self.pos + n]
        self.pos += n
        return chunk

    def read_uleb128(self) -> int:
        value = 0
        shift = 0
        while True:
            byte = self.read(1)[0]
            value |= (byte & 0x7F) << shift
            if not byte & 0x80:
                if byte == 0 and shift > 0:
                    raise DecodeError("Non-canonical ULEB128 encoding")
                break
            shift += 7
            if shift > 28:
                raise DecodeError("ULEB128 value overflows u32")
        if value > MAX_ULEB128_U32:
            raise DecodeError("ULEB128 value overflows u32")
        return value


def encode_uleb128(value: int) -> bytes:
    if value < 0 or value > MAX_ULEB128_U32:
        raise ValueError(f"ULEB128 value out of range: {value}")
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


class BcsType(ABC):
    name: str = ""

    @abstractmethod
    def write(self, value: Any, out: bytearray) -> None:
        ...

    @abstractmethod
    def read(self, reader: BcsReader) -> Any:
        ...

    @property
    def fixed_width(self) -> Optional[int]:
        """Encoded size in bytes, or None for variable-length layouts."""
        return None

    def serialize(self, value: Any) -> bytes:
        out = bytearray()
        self.write(value, out)
        return bytes(out)

    def parse(self, data: bytes) -> Any:
        width = self.fixed_width
        if width is not None and len(data) != width:
            raise DecodeError(f"{self.name} expects {width} bytes, got {len(data)}")
        reader = BcsReader(data)
        value = self.read(reader)
        if reader.remaining:
            raise DecodeError(
                f"{self.name} left {reader.remaining} trailing bytes unread"
            )
        return value

    def __repr__(self) -> str:
        return f"<bcs {self.name}>"


class _UInt(BcsType):
    def __init__(self, name: str, size: int) -> None:
        self.name = name
        self.size = size

    @property
    def fixed_width(self) -> int:
        return self.size

    def write(self, value: Any, out: bytearray) -> None:
        value = int(value)
        if value < 0 or value >= 1 << (8 * self.size):
            raise ValueError(f"{value} does not fit in {self.name}")
        out += value.to_bytes(self.size, "little")

    def read(self, reader: BcsReader) -> int:
        return int.from_bytes(reader.read(self.size), "little")


class _Bool(BcsType):
    name = "bool"

    @property
    def fixed_width(self) -> int:
        return 1

    def write(self, value: Any, out: bytearray) -> None:
        out.append(1 if value else 0)

    def read(self, reader: BcsReader) -> bool:
        byte = reader.read(1)[0]
        if byte not in (0, 1):
            raise DecodeError(f"Invalid bool byte: {byte:#04x}")
        return byte == 1


class FixedBytes(BcsType):
    def __init__(self, size: int, name: Optional[str] = None) -> None:
        self.size = size
        self.name = name or f"bytes[{size}]"

    @property
    def fixed_width(self) -> int:
        return self.size

    def write(self, value: Any, out: bytearray) -> None:
        value = bytes(value)
        if len(value) != self.size:
            raise ValueError(f"{self.name} needs {self.size} bytes, got {len(value)}")
        out += value

    def read(self, reader: BcsReader) -> bytes:
        return reader.read(self.size)


class _Address(FixedBytes):
    """32-byte account or object address, exposed as ``0x`` hex."""

    def __init__(self, name: str) -> None:
        super().__init__(SUI_ADDRESS_LENGTH, name)

    def write(self, value: Any, out: bytearray) -> None:
        if isinstance(value, str):
            value = bytes.fromhex(normalize_sui_address(value)[2:])
        super().write(value, out)

    def read(self, reader: BcsReader) -> str:
        return "0x" + reader.read(self.size).hex()


class _Bytes(BcsType):
    name = "vector<u8>"

    def write(self, value: Any, out: bytearray) -> None:
        value = bytes(value)
        out += encode_uleb128(len(value))
        out += value

    def read(self, reader: BcsReader) -> bytes:
        return reader.read(reader.read_uleb128())


class _String(BcsType):
    name = "string"

    def write(self, value: Any, out: bytearray) -> None:
        _Bytes().write(str(value).encode("utf-8"), out)

    def read(self, reader: BcsReader) -> str:
        raw = reader.read(reader.read_uleb128())
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise DecodeError(f"Invalid UTF-8 in string: {exc}") from exc


class Vector(BcsType):
    def __init__(self, element: BcsType) -> None:
        self.element = element
        self.name = f"vector<{element.name}>"

    def write(self, value: Any, out: bytearray) -> None:
        items = list(value)
        out += encode_uleb128(len(items))
        for item in items:
            self.element.write(item, out)

    def read(self, reader: BcsReader) -> list[Any]:
        return [self.element.read(reader) for _ in range(reader.read_uleb128())]


class Option(BcsType):
    def __init__(self, element: BcsType) -> None:
        self.element = element
        self.name = f"option<{element.name}>"

    def write(self, value: Any, out: bytearray) -> None:
        if value is None:
            out.append(0)
        else:
            out.append(1)
            self.element.write(value, out)

    def read(self, reader: BcsReader) -> Any:
        tag = reader.read(1)[0]
        if tag == 0:
            return None
        if tag == 1:
            return self.element.read(reader)
        raise DecodeError(f"Invalid option tag: {tag:#04x}")


class Struct(BcsType):
    """Fields encoded back to back, in declaration order."""

    def __init__(self, name: str, fields: Sequence[tuple[str, BcsType]]) -> None:
        self.name = name
        self.fields = list(fields)

    @property
    def fixed_width(self) -> Optional[int]:
        widths = [t.fixed_width for _, t in self.fields]
        if any(w is None for w in widths):
            return None
        return sum(widths)

    def write(self, value: Any, out: bytearray) -> None:
        for field_name, field_type in self.fields:
            field_type.write(value[field_name], out)

    def read(self, reader: BcsReader) -> dict[str, Any]:
        return {field_name: field_type.read(reader) for field_name, field_type in self.fields}


Bool = _Bool()
U8 = _UInt("u8", 1)
U16 = _UInt("u16", 2)
U32 = _UInt("u32", 4)
U64 = _UInt("u64", 8)
U128 = _UInt("u128", 16)
U256 = _UInt("u256", 32)
Address = _Address("address")
ID = _Address("ID")
String = _String()
Bytes = _Bytes()

INTEGERS = (U8, U16, U32, U64, U128, U256)

_PRIMITIVES: dict[str, BcsType] = {
    "bool": Bool,
    "u8": U8,
    "u16": U16,
    "u32": U32,
    "u64": U64,
    "u128": U128,
    "u256": U256,
    "address": Address,
}

_KNOWN_STRUCTS: dict[str, BcsType] = {
    "0x1::string::String": String,
    "0x1::ascii::String": String,
    "0x2::object::ID": ID,
    "0x2::object::UID": ID,
}


def split_type(type_str: str) -> tuple[str, list[str]]:
    """Split ``head<p1, p2<...>>`` into ``("head", ["p1", "p2<...>"])``."""
    text = type_str.strip()
    if "<" not in text:
        return text, []
    if not text.endswith(">"):
        raise ValueError(f"Unbalanced type string: {type_str}")

    head, inner = text.split("<", 1)
    inner = inner[:-1]
    params: list[str] = []
    depth = 0
    start = 0
    for i, ch in enumerate(inner):
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth < 0:
                raise ValueError(f"Unbalanced type string: {type_str}")
        elif ch == "," and depth == 0:
            params.append(inner[start:i].strip())
            start = i + 1
    if depth != 0:
        raise ValueError(f"Unbalanced type string: {type_str}")
    params.append(inner[start:].strip())
    if any(not p for p in params):
        raise ValueError(f"Empty type parameter in: {type_str}")
    return head.strip(), params


def normalize_struct_name(name: str) -> str:
    """Shorten the address of ``addr::module::Name`` to its minimal hex form."""
    parts = name.split("::")
    if len(parts) != 3:
        raise ValueError(f"Invalid struct name: {name}")
    address = normalize_sui_address(parts[0])
    short = "0x" + (address[2:].lstrip("0") or "0")
    return f"{short}::{parts[1]}::{parts[2]}"


def schema_for(type_str: str) -> BcsType:
    """
    Build a schema from a Move type string.

    Supports primitives, ``vector<T>``, ``0x1::option::Option<T>``, strings
    and object IDs; other structs need an explicit ``Struct`` schema.
    """
    head, params = split_type(type_str)

    if head in _PRIMITIVES and not params:
        return _PRIMITIVES[head]
    if head == "vector" and len(params) == 1:
        element = schema_for(params[0])
        return Bytes if element is U8 else Vector(element)

    if "::" in head:
        struct = normalize_struct_name(head)
        if struct == "0x1::option::Option" and len(params) == 1:
            return Option(schema_for(params[0]))
        if struct in _KNOWN_STRUCTS and not params:
            return _KNOWN_STRUCTS[struct]

    raise ValueError(f"No BCS schema for type: {type_str}")
