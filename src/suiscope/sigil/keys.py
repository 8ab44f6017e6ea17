"""
Sui signing keys.

One ``SigningKey`` variant per signature scheme Sui accepts for user
accounts.  The scheme flag is the leading byte of every serialized private
key, serialized signature and address preimage.

Addresses are ``blake2b-256(flag || public_key)``.
"""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from enum import IntEnum
from typing import ClassVar

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import ec, ed25519
from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from ..utils import b64encode, blake2b256

SECRET_KEY_LENGTH = 32

# Intent prefix for transaction data: (scope=TransactionData, version=V0, app=Sui)
TRANSACTION_INTENT = bytes([0, 0, 0])


class CredentialError(ValueError):
    pass


class InvalidKeyError(CredentialError):
    pass


class UnsupportedSchemeError(CredentialError):
    def __init__(self, flag: int) -> None:
        super().__init__(f"Unsupported key scheme flag: {flag:#04x}")
        self.flag = flag


class KeyNotFoundError(CredentialError):
    def __init__(self, target: str) -> None:
        super().__init__(f"Keypair not found for sender: {target}")
        self.target = target


class SignatureScheme(IntEnum):
    ED25519 = 0x00
    SECP256K1 = 0x01
    SECP256R1 = 0x02

    @property
    def label(self) -> str:
        return _SCHEME_LABELS[self]

    @classmethod
    def from_label(cls, label: str) -> "SignatureScheme":
        for scheme, name in _SCHEME_LABELS.items():
            if name.lower() == label.lower():
                return scheme
        raise ValueError(f"Unknown signature scheme: {label}")


_SCHEME_LABELS = {
    SignatureScheme.ED25519: "ED25519",
    SignatureScheme.SECP256K1: "Secp256k1",
    SignatureScheme.SECP256R1: "Secp256r1",
}


class SigningKey(ABC):
    """A private key that can sign and derive its Sui address."""

    scheme: ClassVar[SignatureScheme]

    def __init__(self, secret_key: bytes) -> None:
        if len(secret_key) != SECRET_KEY_LENGTH:
            raise InvalidKeyError(
                f"{self.scheme.label} secret key must be {SECRET_KEY_LENGTH} bytes, "
                f"got {len(secret_key)}"
            )
        self._secret_key = bytes(secret_key)

    @property
    def secret_key(self) -> bytes:
        return self._secret_key

    @classmethod
    def generate(cls) -> "SigningKey":
        return cls(os.urandom(SECRET_KEY_LENGTH))

    @abstractmethod
    def public_key_bytes(self) -> bytes:
        ...

    @abstractmethod
    def sign(self, data: bytes) -> bytes:
        ...

    @abstractmethod
    def verify(self, data: bytes, signature: bytes) -> bool:
        ...

    def derive_account_id(self) -> bytes:
        return blake2b256(bytes([self.scheme]) + self.public_key_bytes())

    def to_sui_address(self) -> str:
        return "0x" + self.derive_account_id().hex()

    def sign_transaction(self, tx_bytes: bytes) -> str:
        """Sign BCS ``TransactionData`` bytes.

        Returns:
            Base64 serialized signature: ``flag || signature || public_key``.
        """
        digest = blake2b256(TRANSACTION_INTENT + tx_bytes)
        signature = self.sign(digest)
        return b64encode(bytes([self.scheme]) + signature + self.public_key_bytes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SigningKey):
            return NotImplemented
        return self.scheme == other.scheme and self._secret_key == other._secret_key

    def __hash__(self) -> int:
        return hash((self.scheme, self._secret_key))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(address={self.to_sui_address()})"


class Ed25519Key(SigningKey):
    scheme = SignatureScheme.ED25519

    def __init__(self, secret_key: bytes) -> None:
        super().__init__(secret_key)
        self._key = ed25519.Ed25519PrivateKey.from_private_bytes(self._secret_key)

    def public_key_bytes(self) -> bytes:
        return self._key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )

    def sign(self, data: bytes) -> bytes:
        return self._key.sign(data)

    def verify(self, data: bytes, signature: bytes) -> bool:
        try:
            self._key.public_key().verify(signature, data)
        except InvalidSignature:
            return False
        return True


class _EcdsaKey(SigningKey):
    """ECDSA over SHA-256 with compact, low-s ``r || s`` signatures."""

    curve: ClassVar[ec.EllipticCurve]
    order: ClassVar[int]

    def __init__(self, secret_key: bytes) -> None:
        super().__init__(secret_key)
        private_value = int.from_bytes(self._secret_key, "big")
        if not 0 < private_value < self.order:
            raise InvalidKeyError(f"{self.scheme.label} secret key is out of range")
        try:
            self._key = ec.derive_private_key(private_value, self.curve)
        except ValueError as exc:
            raise InvalidKeyError(f"Invalid {self.scheme.label} secret key: {exc}") from exc

    @classmethod
    def generate(cls) -> "SigningKey":
        private_value = ec.generate_private_key(cls.curve).private_numbers().private_value
        return cls(private_value.to_bytes(SECRET_KEY_LENGTH, "big"))

    def public_key_bytes(self) -> bytes:
        return self._key.public_key().public_bytes(
            encoding=serialization.Encoding.X962,
            format=serialization.PublicFormat.CompressedPoint,
        )

    def sign(self, data: bytes) -> bytes:
        der = self._key.sign(data, ec.ECDSA(hashes.SHA256()))
        r, s = decode_dss_signature(der)
        if s > self.order // 2:
            s = self.order - s
        return r.to_bytes(32, "big") + s.to_bytes(32, "big")

    def verify(self, data: bytes, signature: bytes) -> bool:
        if len(signature) != 64:
            return False
        r = int.from_bytes(signature[:32], "big")
        s = int.from_bytes(signature[32:], "big")
        try:
            self._key.public_key().verify(
                encode_dss_signature(r, s), data, ec.ECDSA(hashes.SHA256())
            )
        except InvalidSignature:
            return False
        return True


class Secp256k1Key(_EcdsaKey):
    scheme = SignatureScheme.SECP256K1
    curve = ec.SECP256K1()
    order = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


class Secp256r1Key(_EcdsaKey):
    scheme = SignatureScheme.SECP256R1
    curve = ec.SECP256R1()
    order = 0xFFFFFFFF00000000FFFFFFFFFFFFFFFFBCE6FAADA7179E84F3B9CAC2FC632551


KEY_TYPES: dict[SignatureScheme, type[SigningKey]] = {
    SignatureScheme.ED25519: Ed25519Key,
    SignatureScheme.SECP256K1: Secp256k1Key,
    SignatureScheme.SECP256R1: Secp256r1Key,
}


def generate_key(scheme: SignatureScheme = SignatureScheme.ED25519) -> SigningKey:
    return KEY_TYPES[scheme].generate()
