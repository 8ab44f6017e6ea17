"""Unit tests for sigil/keys.py signing keys."""

from __future__ import annotations

import base64
import hashlib

import pytest

from suiscope.sigil.keys import (
    KEY_TYPES,
    Ed25519Key,
    InvalidKeyError,
    Secp256k1Key,
    Secp256r1Key,
    SignatureScheme,
    generate_key,
)

ALL_SCHEMES = list(SignatureScheme)


def _expected_address(flag: int, public_key: bytes) -> str:
    return "0x" + hashlib.blake2b(bytes([flag]) + public_key, digest_size=32).hexdigest()


class TestSignatureScheme:
    def test_flags(self) -> None:
        assert SignatureScheme.ED25519 == 0
        assert SignatureScheme.SECP256K1 == 1
        assert SignatureScheme.SECP256R1 == 2

    def test_labels_round_trip(self) -> None:
        for scheme in ALL_SCHEMES:
            assert SignatureScheme.from_label(scheme.label) is scheme
        assert SignatureScheme.from_label("ed25519") is SignatureScheme.ED25519

    def test_unknown_label(self) -> None:
        with pytest.raises(ValueError):
            SignatureScheme.from_label("bls12381")


class TestPublicKeysAndAddresses:
    def test_ed25519_public_key_is_raw_32_bytes(self) -> None:
        key = Ed25519Key(bytes(32))
        assert len(key.public_key_bytes()) == 32

    @pytest.mark.parametrize("key_type", [Secp256k1Key, Secp256r1Key])
    def test_secp_public_key_is_compressed(self, key_type: type) -> None:
        key = key_type.generate()
        pk = key.public_key_bytes()
        assert len(pk) == 33
        assert pk[0] in (2, 3)

    @pytest.mark.parametrize("scheme", ALL_SCHEMES)
    def test_address_is_blake2b_of_flag_and_public_key(self, scheme: SignatureScheme) -> None:
        key = generate_key(scheme)
        address = key.to_sui_address()
        assert address == _expected_address(scheme, key.public_key_bytes())
        assert key.derive_account_id() == bytes.fromhex(address[2:])
        assert len(key.derive_account_id()) == 32

    def test_same_secret_different_scheme_gives_different_address(self) -> None:
        secret = bytes(range(1, 33))
        addresses = {KEY_TYPES[s](secret).to_sui_address() for s in ALL_SCHEMES}
        assert len(addresses) == 3


class TestSigning:
    @pytest.mark.parametrize("scheme", ALL_SCHEMES)
    def test_sign_and_verify(self, scheme: SignatureScheme) -> None:
        key = generate_key(scheme)
        sig = key.sign(b"hello sui")
        assert len(sig) == 64
        assert key.verify(b"hello sui", sig)
        assert not key.verify(b"hello sue", sig)

    @pytest.mark.parametrize("key_type", [Secp256k1Key, Secp256r1Key])
    def test_secp_signatures_are_low_s(self, key_type: type) -> None:
        key = key_type.generate()
        for i in range(8):
            sig = key.sign(bytes([i]) * 10)
            s = int.from_bytes(sig[32:], "big")
            assert s <= key_type.order // 2

    @pytest.mark.parametrize("scheme", ALL_SCHEMES)
    def test_sign_transaction_serialization(self, scheme: SignatureScheme) -> None:
        key = generate_key(scheme)
        tx_bytes = b"\x00\x01\x02transaction"
        serialized = base64.b64decode(key.sign_transaction(tx_bytes))

        pk = key.public_key_bytes()
        assert serialized[0] == scheme
        assert serialized[65:] == pk

        digest = hashlib.blake2b(b"\x00\x00\x00" + tx_bytes, digest_size=32).digest()
        assert key.verify(digest, serialized[1:65])


class TestValidation:
    @pytest.mark.parametrize("scheme", ALL_SCHEMES)
    def test_wrong_length_rejected(self, scheme: SignatureScheme) -> None:
        with pytest.raises(InvalidKeyError):
            KEY_TYPES[scheme](b"\x01" * 31)

    @pytest.mark.parametrize("key_type", [Secp256k1Key, Secp256r1Key])
    def test_zero_secp_scalar_rejected(self, key_type: type) -> None:
        with pytest.raises(InvalidKeyError):
            key_type(bytes(32))

    def test_scalar_above_order_rejected(self) -> None:
        with pytest.raises(InvalidKeyError):
            Secp256k1Key(b"\xff" * 32)

    def test_equality_by_scheme_and_secret(self) -> None:
        secret = bytes(range(1, 33))
        assert Ed25519Key(secret) == Ed25519Key(secret)
        assert Ed25519Key(secret) != Secp256k1Key(secret)
        assert hash(Ed25519Key(secret)) == hash(Ed25519Key(secret))
