"""
Local Sui keystore access.

The Sui CLI keeps its configuration in ``~/.sui/sui_config``:

- ``sui.keystore``: JSON array of base64 ``flag || secret`` entries
- ``client.yaml``: client config, including ``active_address``

``find_key`` scans the keystore for the entry whose derived address matches
a target.  Only Ed25519 entries are scanned unless the caller widens
``scan_schemes``; other schemes have to be supplied explicitly.
"""

from __future__ import annotations

import json
import logging
import os
import subprocess
from pathlib import Path
from typing import Iterable, Optional, Protocol

import yaml

from ..utils import b64decode, normalize_sui_address
from .keys import KEY_TYPES, CredentialError, KeyNotFoundError, SignatureScheme, SigningKey

logger = logging.getLogger(__name__)

DEFAULT_SUI_CONFIG_DIR = Path.home() / ".sui" / "sui_config"
KEYSTORE_FILENAME = "sui.keystore"
CLIENT_CONFIG_FILENAME = "client.yaml"

DEFAULT_SCAN_SCHEMES = (SignatureScheme.ED25519,)


class CredentialStore(Protocol):
    def read_active_address(self) -> str:
        ...

    def read_keystore_entries(self) -> list[str]:
        ...


def get_sui_config_dir() -> Path:
    """Get the Sui config directory from environment or default."""
    configured = os.environ.get("SUI_CONFIG_DIR")
    return Path(configured).expanduser() if configured else DEFAULT_SUI_CONFIG_DIR


def get_sui_binary() -> str:
    return os.environ.get("SUI_BINARY", "sui")


class SuiConfig:
    """Credential store backed by the Sui CLI config directory."""

    def __init__(self, config_dir: Optional[Path] = None, sui_binary: Optional[str] = None) -> None:
        self.config_dir = config_dir or get_sui_config_dir()
        self.sui_binary = sui_binary or get_sui_binary()

    @property
    def keystore_path(self) -> Path:
        return self.config_dir / KEYSTORE_FILENAME

    @property
    def client_config_path(self) -> Path:
        return self.config_dir / CLIENT_CONFIG_FILENAME

    def read_keystore_entries(self) -> list[str]:
        path = self.keystore_path
        if not path.exists():
            raise CredentialError(f"Keystore not found: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                entries = json.load(f)
        except json.JSONDecodeError as exc:
            raise CredentialError(f"Keystore is not valid JSON: {path}") from exc

        if not isinstance(entries, list) or not all(isinstance(e, str) for e in entries):
            raise CredentialError(f"Keystore must be a JSON array of strings: {path}")
        return entries

    def read_active_address(self) -> str:
        address = self._active_address_from_config() or self._active_address_from_cli()
        try:
            return normalize_sui_address(address)
        except ValueError as exc:
            raise CredentialError(f"Invalid active address: {exc}") from exc

    def _active_address_from_config(self) -> Optional[str]:
        path = self.client_config_path
        if not path.exists():
            return None
        try:
            with path.open("r", encoding="utf-8") as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise CredentialError(f"Invalid client config: {path}") from exc
        if not isinstance(config, dict):
            return None
        address = config.get("active_address")
        if address is not None and not isinstance(address, str):
            # unquoted hex is read by YAML as an integer
            raise CredentialError(f"active_address must be a quoted string in {path}")
        return address

    def _active_address_from_cli(self) -> str:
        logger.debug("Reading active address via %s client active-address", self.sui_binary)
        try:
            completed = subprocess.run(
                [self.sui_binary, "client", "active-address"],
                capture_output=True,
                text=True,
                check=True,
            )
        except (OSError, subprocess.CalledProcessError) as exc:
            raise CredentialError(f"Could not read active address: {exc}") from exc
        return completed.stdout.strip()


def find_key(
    entries: Iterable[str],
    target: str,
    scan_schemes: Iterable[SignatureScheme] = DEFAULT_SCAN_SCHEMES,
) -> SigningKey:
    """
    Find the keystore entry that derives to ``target``.

    Args:
        entries: Base64 keystore entries, in file order.
        target: Sui address to match.
        scan_schemes: Scheme flags to consider; all others are skipped.

    Returns:
        The first matching signing key.

    Raises:
        KeyNotFoundError: If no entry derives to ``target``.
    """
    wanted = normalize_sui_address(target)
    flags = {int(s) for s in scan_schemes}

    for index, entry in enumerate(entries):
        try:
            raw = b64decode(entry)
        except ValueError:
            logger.debug("Skipping keystore entry %d: not base64", index)
            continue

        if not raw or raw[0] not in flags:
            continue

        key = KEY_TYPES[SignatureScheme(raw[0])](raw[1:])
        if key.to_sui_address() == wanted:
            logger.debug("Keystore entry %d matches %s", index, wanted)
            return key

    raise KeyNotFoundError(wanted)
