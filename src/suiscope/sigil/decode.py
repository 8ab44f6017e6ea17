"""
Private key (de)serialization.

A serialized key is ``flag || secret`` where ``flag`` is the
``SignatureScheme`` byte.  Two textual envelopes are accepted:

- Bech32 with HRP ``suiprivkey`` (what ``sui keytool export`` prints)
- standard base64 (one ``sui.keystore`` entry)
"""

from __future__ import annotations

from typing import Union

import bech32

from ..utils import b64decode, b64encode
from .keys import (
    KEY_TYPES,
    InvalidKeyError,
    SignatureScheme,
    SigningKey,
    UnsupportedSchemeError,
)

SUI_PRIVATE_KEY_PREFIX = "suiprivkey"

SerializedKey = Union[str, bytes]


def decode_private_key(serialized: SerializedKey) -> SigningKey:
    """
    Decode a serialized private key into a typed signing key.

    Args:
        serialized: Raw ``flag || secret`` bytes, a ``suiprivkey1...`` string
                    or a base64 keystore entry.

    Returns:
        The ``SigningKey`` variant matching the embedded scheme flag.

    Raises:
        InvalidKeyError: If the input cannot be decoded or is empty.
        UnsupportedSchemeError: If the flag is not a supported scheme.
    """
    raw = _to_bytes(serialized)
    if not raw:
        raise InvalidKeyError("Serialized private key is empty.")

    flag = raw[0]
    try:
        scheme = SignatureScheme(flag)
    except ValueError:
        raise UnsupportedSchemeError(flag) from None

    return KEY_TYPES[scheme](raw[1:])


def serialize_private_key(key: SigningKey) -> bytes:
    return bytes([key.scheme]) + key.secret_key


def encode_private_key(key: SigningKey) -> str:
    """Encode as a Bech32 ``suiprivkey1...`` string."""
    data = bech32.convertbits(serialize_private_key(key), 8, 5)
    return bech32.bech32_encode(SUI_PRIVATE_KEY_PREFIX, data)


def to_keystore_entry(key: SigningKey) -> str:
    """Encode as a base64 ``sui.keystore`` entry."""
    return b64encode(serialize_private_key(key))


def _to_bytes(serialized: SerializedKey) -> bytes:
    if isinstance(serialized, (bytes, bytearray)):
        return bytes(serialized)

    text = serialized.strip()
    if text.lower().startswith(SUI_PRIVATE_KEY_PREFIX):
        return _decode_bech32(text)
    try:
        return b64decode(text)
    except ValueError as exc:
        raise InvalidKeyError(f"Private key is neither Bech32 nor base64: {exc}") from exc


def _decode_bech32(text: str) -> bytes:
    hrp, data = bech32.bech32_decode(text)
    if hrp != SUI_PRIVATE_KEY_PREFIX or data is None:
        raise InvalidKeyError("Invalid suiprivkey Bech32 string.")
    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None:
        raise InvalidKeyError("Invalid suiprivkey Bech32 payload.")
    return bytes(decoded)
