"""
Theurgy Whitelist - Query the SuiNS workshop whitelist.

Two chained reads against the ``suins_workshop`` package:
- whitelist-id:   domain name -> ID of its Whitelist object
- is-whitelisted: (Whitelist, address) -> bool
"""

from __future__ import annotations

from typing import Optional

import click

from ..pneuma import bcs
from ..pneuma.ptb import ObjectInput, Pure
from .inspect import format_value, run_query

DEFAULT_PACKAGE = "@tonymysten/sample"
MODULE = "suins_workshop"


@click.command("whitelist-id")
@click.option("--suins", required=True, help="SuiNS shared object ID")
@click.option("--domain", required=True, help="Domain name (e.g. mywhitelist.sui)")
@click.option("--package", default=DEFAULT_PACKAGE, show_default=True, help="Workshop package ID or MVR name")
@click.option("--sender", envvar="SUI_SENDER", default=None, help="Simulated sender (default: active address)")
@click.option("--network", envvar="SUI_NETWORK", default="testnet", help="Sui network")
@click.option("--rpc-url", envvar="RPC_URL", default=None, help="Full node RPC URL")
def whitelist_id(
    suins: str,
    domain: str,
    package: str,
    sender: Optional[str],
    network: str,
    rpc_url: Optional[str],
) -> None:
    """Look up the Whitelist object ID registered for a domain."""
    value = run_query(
        f"{package}::{MODULE}::whitelist_id",
        [ObjectInput(suins), Pure.string(domain)],
        bcs.ID,
        sender,
        rpc_url,
        network,
    )
    click.echo(format_value(value))


@click.command("is-whitelisted")
@click.option("--whitelist", "whitelist_object", required=True, help="Whitelist object ID")
@click.option("--address", required=True, help="Address to check")
@click.option("--package", default=DEFAULT_PACKAGE, show_default=True, help="Workshop package ID or MVR name")
@click.option("--sender", envvar="SUI_SENDER", default=None, help="Simulated sender (default: active address)")
@click.option("--network", envvar="SUI_NETWORK", default="testnet", help="Sui network")
@click.option("--rpc-url", envvar="RPC_URL", default=None, help="Full node RPC URL")
def is_whitelisted(
    whitelist_object: str,
    address: str,
    package: str,
    sender: Optional[str],
    network: str,
    rpc_url: Optional[str],
) -> None:
    """Check whether an address is on a whitelist."""
    value = run_query(
        f"{package}::{MODULE}::is_whitelisted",
        [ObjectInput(whitelist_object), Pure.address(address)],
        bcs.Bool,
        sender,
        rpc_url,
        network,
    )
    click.echo(f"isWhitelisted: {str(value).lower()}")
