"""
suiscope CLI

Command-line interface for resolving Sui signers and running read-only
Move calls through transaction simulation.

Commands:
  whoami          - Show the resolved signer
  info            - Show configuration
  keytool         - Decode / generate private keys
  inspect         - Simulate a Move call and decode its return value
  whitelist-id    - Look up a domain's whitelist object
  is-whitelisted  - Check an address against a whitelist
"""

from __future__ import annotations

import logging
import sys

import click

from .sigil.decode import decode_private_key, encode_private_key, to_keystore_entry
from .sigil.keys import CredentialError, SignatureScheme, generate_key
from .sigil.keystore import get_sui_config_dir
from .sigil.signer import SUISCOPE_ENV, get_signer


# ============ Constants ============

VERSION = "0.3.0"


# ============ Main CLI Group ============


@click.group()
@click.version_option(version=VERSION, prog_name="suiscope")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """suiscope: Sui signer resolution and devInspect queries."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


# ============ Top-level Commands ============

from .theurgy.inspect import inspect
from .theurgy.whitelist import is_whitelisted, whitelist_id

cli.add_command(inspect)
cli.add_command(whitelist_id)
cli.add_command(is_whitelisted)


# ============ Identity ============


@cli.command()
def whoami() -> None:
    """Show the signer this client would use."""
    try:
        key = get_signer()
    except CredentialError as exc:
        click.secho(f"ERROR: No signer found: {exc}", fg="red")
        click.echo("Set PRIVATE_KEY or configure the Sui CLI keystore.")
        sys.exit(1)

    click.echo(f"Scheme:  {key.scheme.label}")
    click.echo(f"Address: {key.to_sui_address()}")


# ============ Info ============


@cli.command()
@click.option("--network", envvar="SUI_NETWORK", default="testnet", help="Sui network")
@click.option("--rpc-url", envvar="RPC_URL", default=None, help="Full node RPC URL")
@click.option("--check-rpc", is_flag=True, help="Query the reference gas price to test the RPC")
def info(network: str, rpc_url: str, check_rpc: bool) -> None:
    """Show configuration information."""
    from .pneuma.rpc import RpcError, get_reference_gas_price, get_rpc_url

    try:
        url = rpc_url or get_rpc_url(network)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"suiscope v{VERSION}")
    click.echo(f"  Sui config:  {get_sui_config_dir()}")
    click.echo(f"  Env file:    {SUISCOPE_ENV}")
    click.echo(f"  Network:     {network}")
    click.echo(f"  RPC URL:     {url}")

    if check_rpc:
        import httpx

        try:
            price = get_reference_gas_price(rpc_url=url)
            click.secho(f"  Gas price:   {price} MIST", fg="green")
        except (RpcError, httpx.HTTPError) as exc:
            click.secho(f"  RPC check failed: {exc}", fg="red")
            sys.exit(1)


# ============ Keytool ============


@cli.group()
def keytool() -> None:
    """Inspect and generate private keys."""
    pass


@keytool.command("decode")
@click.argument("private_key")
def keytool_decode(private_key: str) -> None:
    """Show scheme and address of a serialized private key."""
    try:
        key = decode_private_key(private_key)
    except CredentialError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"Scheme:  {key.scheme.label}")
    click.echo(f"Address: {key.to_sui_address()}")


@keytool.command("generate")
@click.option(
    "--scheme",
    type=click.Choice([s.label for s in SignatureScheme], case_sensitive=False),
    default=SignatureScheme.ED25519.label,
    show_default=True,
)
def keytool_generate(scheme: str) -> None:
    """Generate a new private key."""
    key = generate_key(SignatureScheme.from_label(scheme))
    click.echo(f"Address:        {key.to_sui_address()}")
    click.echo(f"Private key:    {encode_private_key(key)}")
    click.echo(f"Keystore entry: {to_keystore_entry(key)}")


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
