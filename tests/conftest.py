from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import pytest

from suiscope.pneuma.inspect import SimulatedCallRequest, SimulatedCallResult
from suiscope.sigil.keys import Ed25519Key, SigningKey


class UnreachableStore:
    """Credential store that fails the test if it is touched at all."""

    def read_active_address(self) -> str:
        raise AssertionError("credential store must not be consulted")

    def read_keystore_entries(self) -> list[str]:
        raise AssertionError("credential store must not be consulted")


@dataclass
class FakeStore:
    active_address: str
    entries: list[str]
    reads: int = 0

    def read_active_address(self) -> str:
        return self.active_address

    def read_keystore_entries(self) -> list[str]:
        self.reads += 1
        return list(self.entries)


@dataclass
class FakeSimulator:
    result: Optional[SimulatedCallResult] = None
    error: Optional[Exception] = None
    requests: list[SimulatedCallRequest] = field(default_factory=list)

    def simulate(self, request: SimulatedCallRequest) -> SimulatedCallResult:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        assert self.result is not None
        return self.result


@pytest.fixture()
def ed25519_key() -> SigningKey:
    return Ed25519Key(bytes(range(1, 33)))


@pytest.fixture()
def sender() -> str:
    return "0x5710140c577ed0d6071af1648e9ada06b6894e5c7056360bc8b5992466a1ae6a"


@pytest.fixture()
def unreachable_store() -> UnreachableStore:
    return UnreachableStore()


@pytest.fixture()
def make_store() -> type[FakeStore]:
    return FakeStore


@pytest.fixture()
def make_simulator() -> type[FakeSimulator]:
    return FakeSimulator
