"""
Programmable transaction kind builder.

Encodes a single-MoveCall ``TransactionKind::ProgrammableTransaction`` in
BCS, which is all ``sui_devInspectTransactionBlock`` needs.  No gas data,
no sender and no signatures: the result is never executable on its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional, Sequence, Union

import base58

from ..utils import address_to_bytes, normalize_sui_address
from . import bcs
from .bcs import encode_uleb128, split_type

# Well-known shared system objects that only accept immutable references.
CLOCK_OBJECT_ID = normalize_sui_address("0x6")
RANDOM_OBJECT_ID = normalize_sui_address("0x8")
IMMUTABLE_SYSTEM_OBJECTS = frozenset({CLOCK_OBJECT_ID, RANDOM_OBJECT_ID})

_PRIMITIVE_TYPE_TAGS = {
    "bool": 0,
    "u8": 1,
    "u64": 2,
    "u128": 3,
    "address": 4,
    "signer": 5,
    "u16": 8,
    "u32": 9,
    "u256": 10,
}
_VECTOR_TAG = 6
_STRUCT_TAG = 7


@dataclass(frozen=True)
class Pure:
    """A pure (non-object) argument, BCS-encoded with ``schema``."""

    schema: bcs.BcsType
    value: Any

    def to_bytes(self) -> bytes:
        return self.schema.serialize(self.value)

    @classmethod
    def address(cls, value: str) -> "Pure":
        return cls(bcs.Address, value)

    @classmethod
    def string(cls, value: str) -> "Pure":
        return cls(bcs.String, value)

    @classmethod
    def bool(cls, value: bool) -> "Pure":
        return cls(bcs.Bool, value)

    @classmethod
    def u64(cls, value: int) -> "Pure":
        return cls(bcs.U64, value)


@dataclass(frozen=True)
class ObjectInput:
    """An object argument by ID; version/ownership are looked up on chain."""

    object_id: str
    mutable: Optional[bool] = None

    @property
    def normalized_id(self) -> str:
        return normalize_sui_address(self.object_id)

    @property
    def is_mutable(self) -> bool:
        return bool(self.mutable)


@dataclass(frozen=True)
class ImmOrOwnedRef:
    object_id: str
    version: int
    digest: str


@dataclass(frozen=True)
class SharedRef:
    object_id: str
    initial_shared_version: int
    mutable: bool


CallInput = Union[Pure, ObjectInput]
ResolvedInput = Union[Pure, ImmOrOwnedRef, SharedRef]


@dataclass(frozen=True)
class MoveCall:
    package: str
    module: str
    function: str
    arguments: Sequence[CallInput] = ()
    type_arguments: Sequence[str] = field(default_factory=tuple)


def parse_target(target: str) -> tuple[str, str, str]:
    """Split ``package::module::function``."""
    parts = target.split("::")
    if len(parts) != 3 or not all(p.strip() for p in parts):
        raise ValueError(f"Invalid Move call target: {target!r}")
    package, module, function = (p.strip() for p in parts)
    return package, module, function


def object_ref_from_response(obj: ObjectInput, data: dict[str, Any]) -> Union[ImmOrOwnedRef, SharedRef]:
    """
    Turn a ``sui_getObject`` ``data`` payload into a resolved object argument.

    Shared objects become ``SharedRef``; address-owned, object-owned and
    immutable objects become ``ImmOrOwnedRef``.
    """
    owner = data.get("owner")
    if isinstance(owner, dict) and "Shared" in owner:
        return SharedRef(
            object_id=obj.normalized_id,
            initial_shared_version=int(owner["Shared"]["initial_shared_version"]),
            mutable=obj.is_mutable and obj.normalized_id not in IMMUTABLE_SYSTEM_OBJECTS,
        )
    return ImmOrOwnedRef(
        object_id=obj.normalized_id,
        version=int(data["version"]),
        digest=data["digest"],
    )


def encode_type_tag(type_str: str) -> bytes:
    head, params = split_type(type_str)

    if head in _PRIMITIVE_TYPE_TAGS and not params:
        return bytes([_PRIMITIVE_TYPE_TAGS[head]])
    if head == "vector" and len(params) == 1:
        return bytes([_VECTOR_TAG]) + encode_type_tag(params[0])

    parts = head.split("::")
    if len(parts) != 3:
        raise ValueError(f"Invalid type tag: {type_str}")
    address, module, name = parts
    out = bytearray([_STRUCT_TAG])
    out += address_to_bytes(address)
    out += bcs.String.serialize(module)
    out += bcs.String.serialize(name)
    out += encode_uleb128(len(params))
    for param in params:
        out += encode_type_tag(param)
    return bytes(out)


def _encode_call_arg(arg: ResolvedInput) -> bytes:
    if isinstance(arg, Pure):
        return b"\x00" + bcs.Bytes.serialize(arg.to_bytes())
    if isinstance(arg, ImmOrOwnedRef):
        digest = base58.b58decode(arg.digest)
        return (
            b"\x01\x00"
            + address_to_bytes(arg.object_id)
            + bcs.U64.serialize(arg.version)
            + bcs.Bytes.serialize(digest)
        )
    if isinstance(arg, SharedRef):
        return (
            b"\x01\x01"
            + address_to_bytes(arg.object_id)
            + bcs.U64.serialize(arg.initial_shared_version)
            + bcs.Bool.serialize(arg.mutable)
        )
    raise TypeError(f"Unresolved call argument: {arg!r}")


def build_move_call_kind(call: MoveCall, inputs: Sequence[ResolvedInput]) -> bytes:
    """
    Encode a one-command programmable transaction kind.

    Args:
        call: The Move call; ``call.package`` must already be a hex ID.
        inputs: ``call.arguments`` with objects resolved, same order.

    Returns:
        BCS bytes of ``TransactionKind``
    """
    if len(inputs) != len(call.arguments):
        raise ValueError("Every call argument needs exactly one resolved input")

    out = bytearray(b"\x00")  # TransactionKind::ProgrammableTransaction
    out += encode_uleb128(len(inputs))
    for arg in inputs:
        out += _encode_call_arg(arg)

    out += encode_uleb128(1)
    out += b"\x00"  # Command::MoveCall
    out += address_to_bytes(call.package)
    out += bcs.String.serialize(call.module)
    out += bcs.String.serialize(call.function)
    out += encode_uleb128(len(call.type_arguments))
    for type_arg in call.type_arguments:
        out += encode_type_tag(type_arg)
    out += encode_uleb128(len(inputs))
    for index in range(len(inputs)):
        out += b"\x01" + bcs.U16.serialize(index)  # Argument::Input
    return bytes(out)
