"""
Signer resolution.

Priority order:
1. ``PRIVATE_KEY`` (environment, or ``~/.suiscope/.env``) in any format
   accepted by ``decode_private_key``
2. the keystore entry matching the Sui CLI's active address
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

from .decode import SerializedKey, decode_private_key
from .keys import SigningKey
from .keystore import CredentialStore, SuiConfig, find_key

logger = logging.getLogger(__name__)

# Default config directory
SUISCOPE_DIR = Path.home() / ".suiscope"
SUISCOPE_ENV = SUISCOPE_DIR / ".env"


def load_explicit_key(env_path: Optional[Path] = None) -> Optional[str]:
    """
    Load an explicitly supplied private key, if any.

    Args:
        env_path: Path to .env file (default: ~/.suiscope/.env)

    Returns:
        The ``PRIVATE_KEY`` value, or None when it is not set
    """
    env_path = env_path or SUISCOPE_ENV

    if env_path.exists():
        load_dotenv(env_path, override=False)

    private_key = os.environ.get("PRIVATE_KEY", "").strip()
    return private_key or None


def resolve_signer(
    explicit_key: Optional[SerializedKey],
    store: CredentialStore,
) -> SigningKey:
    """
    Resolve the key used to sign on behalf of this client.

    An explicit key always wins and the store is never consulted for it;
    otherwise the keystore is scanned for the store's active address.

    Raises:
        UnsupportedSchemeError: Explicit key with an unknown scheme flag.
        KeyNotFoundError: No keystore entry matches the active address.
    """
    if explicit_key:
        logger.info("Using supplied private key.")
        return decode_private_key(explicit_key)

    sender = store.read_active_address()
    logger.info("Scanning keystore for active address %s", sender)
    return find_key(store.read_keystore_entries(), sender)


def get_signer(
    env_path: Optional[Path] = None,
    store: Optional[CredentialStore] = None,
) -> SigningKey:
    """Resolve the signer from the environment and the local Sui config."""
    return resolve_signer(load_explicit_key(env_path), store or SuiConfig())
