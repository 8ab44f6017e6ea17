"""
Move Registry (MVR) name resolution.

Turns named packages such as ``@tonymysten/sample`` into package IDs so
call targets can be written as ``@org/name::module::function``.
"""

from __future__ import annotations

from typing import Optional
from urllib.parse import quote

import httpx

from ..utils import normalize_sui_address
from .rpc import DEFAULT_TIMEOUT, RpcError

MVR_URLS = {
    "mainnet": "https://mainnet.mvr.mystenlabs.com",
    "testnet": "https://testnet.mvr.mystenlabs.com",
}


def is_named_package(package: str) -> bool:
    return package.startswith("@") or ".sui/" in package


def resolve_named_package(
    name: str,
    network: str,
    client: Optional[httpx.Client] = None,
) -> str:
    """
    Resolve a named package to its on-chain package ID.

    Args:
        name: MVR name (e.g., "@tonymysten/sample")
        network: "mainnet" or "testnet"
        client: Optional pre-built httpx client

    Returns:
        Normalized 0x-prefixed package ID

    Raises:
        RpcError: If the network has no registry or the name is unknown
    """
    base = MVR_URLS.get(network)
    if base is None:
        raise RpcError(f"No package registry for network {network!r}")

    url = f"{base}/v1/resolution/{quote(name, safe='@/.')}"
    owns_client = client is None
    client = client or httpx.Client(timeout=DEFAULT_TIMEOUT)
    try:
        response = client.get(url)
        if response.status_code == 404:
            raise RpcError(f"Named package not found: {name}")
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise RpcError(f"Registry returned invalid JSON for {name}") from exc
    finally:
        if owns_client:
            client.close()

    package_id = data.get("package_id") if isinstance(data, dict) else None
    if not package_id:
        raise RpcError(f"Registry returned no package_id for {name}")
    return normalize_sui_address(package_id)
