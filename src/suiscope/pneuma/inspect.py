"""
Read-only Move calls through transaction simulation.

Sui has no view-function RPC.  A read is performed by simulating a one-call
transaction with ``sui_devInspectTransactionBlock`` and decoding the first
return value of the first command with an explicit BCS schema:

    whitelist_id = query(
        "@tonymysten/sample::suins_workshop::whitelist_id",
        [ObjectInput(suins), Pure.string("mywhitelist.sui")],
        sender=address,
        schema=bcs.ID,
    )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional, Protocol, Sequence, Union

import httpx

from ..utils import b64encode, normalize_sui_address
from . import rpc
from .bcs import BcsType, schema_for
from .mvr import is_named_package, resolve_named_package
from .ptb import (
    CallInput,
    MoveCall,
    ObjectInput,
    ResolvedInput,
    build_move_call_kind,
    object_ref_from_response,
    parse_target,
)
from .rpc import RpcError

logger = logging.getLogger(__name__)


class SimulationError(RuntimeError):
    pass


@dataclass(frozen=True)
class SimulatedCallRequest:
    target: str
    arguments: tuple[CallInput, ...]
    sender: str
    type_arguments: tuple[str, ...] = ()


@dataclass(frozen=True)
class SimulatedCallResult:
    # One entry per executed command; each a list of (bcs_bytes, move_type).
    results: list[list[tuple[bytes, str]]] = field(default_factory=list)
    error: Optional[str] = None
    status: str = "success"


class Simulator(Protocol):
    def simulate(self, request: SimulatedCallRequest) -> SimulatedCallResult:
        ...


def parse_dev_inspect_response(data: dict[str, Any]) -> SimulatedCallResult:
    """Convert raw ``DevInspectResults`` JSON into a ``SimulatedCallResult``."""
    status_info = (data.get("effects") or {}).get("status") or {}
    status = status_info.get("status", "success")
    error = data.get("error") or status_info.get("error")

    results = []
    for command in data.get("results") or []:
        values = []
        for raw, type_str in command.get("returnValues") or []:
            values.append((bytes(raw), type_str))
        results.append(values)

    return SimulatedCallResult(results=results, error=error, status=status)


class RpcSimulator:
    """Simulator backed by a Sui full node."""

    def __init__(
        self,
        rpc_url: Optional[str] = None,
        network: Optional[str] = None,
        timeout: float = rpc.DEFAULT_TIMEOUT,
    ) -> None:
        self.network = network or rpc.get_network()
        self.rpc_url = rpc_url or rpc.get_rpc_url(self.network)
        self.timeout = timeout

    def simulate(self, request: SimulatedCallRequest) -> SimulatedCallResult:
        package, module, function = parse_target(request.target)
        if is_named_package(package):
            package = resolve_named_package(package, self.network)

        call = MoveCall(
            package=package,
            module=module,
            function=function,
            arguments=request.arguments,
            type_arguments=request.type_arguments,
        )
        inputs = [self._resolve_input(arg) for arg in request.arguments]
        tx_kind = build_move_call_kind(call, inputs)

        response = rpc.dev_inspect_transaction_block(
            normalize_sui_address(request.sender),
            b64encode(tx_kind),
            rpc_url=self.rpc_url,
            timeout=self.timeout,
        )
        return parse_dev_inspect_response(response or {})

    def _resolve_input(self, arg: CallInput) -> ResolvedInput:
        if not isinstance(arg, ObjectInput):
            return arg
        data = rpc.get_object(arg.normalized_id, rpc_url=self.rpc_url)
        return object_ref_from_response(arg, data)


def query(
    target: str,
    arguments: Sequence[CallInput],
    sender: str,
    schema: Union[BcsType, str],
    *,
    simulator: Optional[Simulator] = None,
    type_arguments: Sequence[str] = (),
) -> Any:
    """
    Simulate a Move call and decode its first return value.

    Args:
        target: ``package::module::function``; package may be an MVR name
        arguments: Pure values and object inputs, in call order
        sender: Address to simulate the call as
        schema: BCS schema (or Move type string) of the first return value
        simulator: Simulation backend (default: ``RpcSimulator()``)
        type_arguments: Move type arguments

    Returns:
        The decoded return value

    Raises:
        SimulationError: If the round trip fails or the call aborts
        DecodeError: If the returned bytes do not match ``schema``
    """
    if isinstance(schema, str):
        schema = schema_for(schema)
    simulator = simulator or RpcSimulator()

    request = SimulatedCallRequest(
        target=target,
        arguments=tuple(arguments),
        sender=sender,
        type_arguments=tuple(type_arguments),
    )
    logger.debug("Simulating %s as %s", target, sender)

    try:
        result = simulator.simulate(request)
    except (RpcError, httpx.HTTPError, TimeoutError, ValueError) as exc:
        raise SimulationError(f"Simulation of {target} failed: {exc}") from exc

    if result.error or result.status != "success":
        raise SimulationError(
            f"Simulated call {target} failed: {result.error or result.status}"
        )
    if not result.results:
        raise SimulationError(f"Simulation of {target} returned no results")

    return_values = result.results[0]
    if not return_values:
        raise SimulationError(f"{target} returned no values")

    payload, move_type = return_values[0]
    logger.debug("Decoding %d bytes of %s as %s", len(payload), move_type, schema.name)
    return schema.parse(payload)
