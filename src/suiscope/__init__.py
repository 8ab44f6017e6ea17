__all__ = [
    # Keys
    "SignatureScheme",
    "SigningKey",
    "Ed25519Key",
    "Secp256k1Key",
    "Secp256r1Key",
    "generate_key",
    # Credential errors
    "CredentialError",
    "InvalidKeyError",
    "UnsupportedSchemeError",
    "KeyNotFoundError",
    # Key material
    "decode_private_key",
    "encode_private_key",
    "to_keystore_entry",
    # Keystore + signer
    "CredentialStore",
    "SuiConfig",
    "find_key",
    "resolve_signer",
    "get_signer",
    "load_explicit_key",
    # Simulated calls
    "ObjectInput",
    "Pure",
    "RpcSimulator",
    "SimulatedCallRequest",
    "SimulatedCallResult",
    "SimulationError",
    "Simulator",
    "query",
    # BCS
    "DecodeError",
    "bcs",
    # RPC
    "RpcError",
]

from .sigil.keys import (
    CredentialError,
    Ed25519Key,
    InvalidKeyError,
    KeyNotFoundError,
    Secp256k1Key,
    Secp256r1Key,
    SignatureScheme,
    SigningKey,
    UnsupportedSchemeError,
    generate_key,
)
from .sigil.decode import decode_private_key, encode_private_key, to_keystore_entry
from .sigil.keystore import CredentialStore, SuiConfig, find_key
from .sigil.signer import get_signer, load_explicit_key, resolve_signer
from .pneuma import bcs
from .pneuma.bcs import DecodeError
from .pneuma.inspect import (
    RpcSimulator,
    SimulatedCallRequest,
    SimulatedCallResult,
    SimulationError,
    Simulator,
    query,
)
from .pneuma.ptb import ObjectInput, Pure
from .pneuma.rpc import RpcError
