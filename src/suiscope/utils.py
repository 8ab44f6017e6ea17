from __future__ import annotations

import base64
import binascii
import hashlib
import string

SUI_ADDRESS_LENGTH = 32


def blake2b256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def b64encode(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def b64decode(value: str) -> bytes:
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"Invalid base64: {exc}") from exc


def normalize_sui_address(value: str) -> str:
    """Lowercase, 0x-prefixed, left-padded to 32 bytes."""
    raw = value.strip().lower()
    if raw.startswith("0x"):
        raw = raw[2:]
    if not raw or len(raw) > SUI_ADDRESS_LENGTH * 2:
        raise ValueError(f"Invalid Sui address: {value!r}")
    if any(c not in string.hexdigits for c in raw):
        raise ValueError(f"Invalid Sui address: {value!r}")
    return "0x" + raw.rjust(SUI_ADDRESS_LENGTH * 2, "0")


def address_to_bytes(value: str) -> bytes:
    return bytes.fromhex(normalize_sui_address(value)[2:])
