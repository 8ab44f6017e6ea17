"""
JSON-RPC client for Sui full nodes.

Lightweight alternative to a full SDK: uses httpx for HTTP and nothing else.
Supports the read-only calls a devInspect query needs.
"""

from __future__ import annotations

import os
from typing import Any, Optional

import httpx

# Default RPC endpoints
FULLNODE_URLS = {
    "mainnet": "https://fullnode.mainnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "localnet": "http://127.0.0.1:9000",
}
DEFAULT_NETWORK = "testnet"
DEFAULT_TIMEOUT = 30.0


class RpcError(RuntimeError):
    pass


def get_network() -> str:
    """Get the network name from environment or default."""
    return os.environ.get("SUI_NETWORK", DEFAULT_NETWORK)


def get_rpc_url(network: Optional[str] = None) -> str:
    """Get the RPC URL: ``RPC_URL`` wins, otherwise the network's full node."""
    configured = os.environ.get("RPC_URL")
    if configured:
        return configured

    network = network or get_network()
    try:
        return FULLNODE_URLS[network]
    except KeyError:
        raise ValueError(
            f"Unknown network {network!r}; expected one of {sorted(FULLNODE_URLS)}"
        ) from None


def _rpc_call(
    method: str,
    params: list,
    rpc_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> Any:
    """
    Make a JSON-RPC call.

    Args:
        method: RPC method name (e.g., "sui_getObject")
        params: RPC parameters
        rpc_url: RPC endpoint URL
        timeout: Request timeout in seconds

    Returns:
        Result field from the RPC response

    Raises:
        RpcError: If the RPC reports an error or the response is malformed
        httpx.HTTPError: On transport failures and timeouts
    """
    url = rpc_url or get_rpc_url()
    payload = {
        "jsonrpc": "2.0",
        "method": method,
        "params": params,
        "id": 1,
    }

    with httpx.Client(timeout=timeout) as client:
        response = client.post(url, json=payload)
        response.raise_for_status()
        try:
            data = response.json()
        except ValueError as exc:
            raise RpcError(f"RPC returned invalid JSON for {method}") from exc

    if "error" in data:
        error = data["error"]
        message = error.get("message", error) if isinstance(error, dict) else error
        raise RpcError(f"RPC error from {method}: {message}")

    return data.get("result")


def get_object(object_id: str, rpc_url: Optional[str] = None) -> dict[str, Any]:
    """
    Fetch an object's ref and owner.

    Returns:
        The ``data`` section (objectId, version, digest, owner)

    Raises:
        RpcError: If the object does not exist or was deleted
    """
    result = _rpc_call(
        "sui_getObject",
        [object_id, {"showOwner": True}],
        rpc_url=rpc_url,
    )
    if not result or "data" not in result:
        error = (result or {}).get("error", "no data")
        raise RpcError(f"Object {object_id} not available: {error}")
    return result["data"]


def dev_inspect_transaction_block(
    sender: str,
    tx_kind_b64: str,
    rpc_url: Optional[str] = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> dict[str, Any]:
    """
    Simulate a transaction kind without signatures or gas.

    Args:
        sender: Address the call is simulated as
        tx_kind_b64: Base64 BCS ``TransactionKind``

    Returns:
        The raw ``DevInspectResults`` JSON
    """
    return _rpc_call(
        "sui_devInspectTransactionBlock",
        [sender, tx_kind_b64, None, None],
        rpc_url=rpc_url,
        timeout=timeout,
    )


def get_reference_gas_price(rpc_url: Optional[str] = None) -> int:
    """
    Get the current reference gas price.

    Returns:
        Gas price in MIST
    """
    result = _rpc_call("suix_getReferenceGasPrice", [], rpc_url=rpc_url)
    return int(result)
