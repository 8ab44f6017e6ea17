"""
Theurgy Inspect - Generic read-only Move call.

Simulates ``package::module::function`` with the given arguments and prints
the first return value decoded with ``--schema``.
"""

from __future__ import annotations

import sys
from typing import Any, Optional

import click

from ..pneuma import bcs
from ..pneuma.bcs import DecodeError
from ..pneuma.inspect import RpcSimulator, SimulationError, query
from ..pneuma.ptb import CallInput, ObjectInput, Pure
from ..sigil.keys import CredentialError
from ..sigil.keystore import SuiConfig

# Short names for struct types whose full name would contain ":".
_ALIASES = {"string": bcs.String, "id": bcs.ID}


def parse_call_arg(text: str) -> CallInput:
    """
    Parse a ``TYPE:VALUE`` command-line argument.

    ``object:ID`` and ``object-mut:ID`` become object inputs; any other type
    is a Move type string whose BCS schema encodes ``VALUE`` as a pure input.
    """
    kind, sep, raw = text.partition(":")
    if not sep:
        raise click.BadParameter(f"Expected TYPE:VALUE, got {text!r}")

    if kind == "object":
        return ObjectInput(raw)
    if kind == "object-mut":
        return ObjectInput(raw, mutable=True)

    try:
        schema = _ALIASES.get(kind) or bcs.schema_for(kind)
    except ValueError as exc:
        raise click.BadParameter(str(exc)) from exc
    return Pure(schema, _coerce(schema, raw))


def _coerce(schema: bcs.BcsType, raw: str) -> Any:
    # vector<T> values are comma-separated, e.g. "vector<u64>:1,2,3"
    if isinstance(schema, bcs.Vector):
        if not raw:
            return []
        return [_coerce(schema.element, item.strip()) for item in raw.split(",")]
    if isinstance(schema, bcs.Option):
        return None if raw.lower() == "none" else _coerce(schema.element, raw)
    if schema is bcs.Bool:
        if raw.lower() not in ("true", "false"):
            raise click.BadParameter(f"Expected true/false, got {raw!r}")
        return raw.lower() == "true"
    try:
        if schema in bcs.INTEGERS:
            return int(raw, 0)
        if schema is bcs.Bytes:
            return bytes.fromhex(raw.removeprefix("0x"))
    except ValueError as exc:
        raise click.BadParameter(f"Invalid {schema.name} value {raw!r}") from exc
    return raw


def format_value(value: Any) -> str:
    if isinstance(value, bytes):
        return "0x" + value.hex()
    return str(value)


def resolve_sender(sender: Optional[str]) -> str:
    if sender:
        return sender
    return SuiConfig().read_active_address()


def run_query(
    target: str,
    args: list[CallInput],
    schema: Any,
    sender: Optional[str],
    rpc_url: Optional[str],
    network: str,
    type_args: tuple[str, ...] = (),
) -> Any:
    """Run a query for a CLI command; errors exit with status 1."""
    try:
        simulator = RpcSimulator(rpc_url=rpc_url, network=network)
        return query(
            target,
            args,
            sender=resolve_sender(sender),
            schema=schema,
            simulator=simulator,
            type_arguments=type_args,
        )
    except (SimulationError, DecodeError, CredentialError, ValueError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)


@click.command()
@click.option("--target", required=True, help="package::module::function")
@click.option("--arg", "call_args", multiple=True, help="Argument as TYPE:VALUE (repeatable)")
@click.option("--type-arg", "type_args", multiple=True, help="Move type argument (repeatable)")
@click.option("--schema", required=True, help="Move type of the first return value")
@click.option("--sender", envvar="SUI_SENDER", default=None, help="Simulated sender (default: active address)")
@click.option("--network", envvar="SUI_NETWORK", default="testnet", help="Sui network")
@click.option("--rpc-url", envvar="RPC_URL", default=None, help="Full node RPC URL")
def inspect(
    target: str,
    call_args: tuple[str, ...],
    type_args: tuple[str, ...],
    schema: str,
    sender: Optional[str],
    network: str,
    rpc_url: Optional[str],
) -> None:
    """Simulate a Move call and print its first return value."""
    args = [parse_call_arg(a) for a in call_args]
    value = run_query(target, args, _ALIASES.get(schema, schema), sender, rpc_url, network, type_args)
    click.echo(format_value(value))
