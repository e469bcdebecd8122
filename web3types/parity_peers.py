"""Peer information reported by a Parity/OpenEthereum node."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from web3types.block import _list_of, _mapping, _optional, _required
from web3types.primitives import U256


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type: {type(value).__name__}, expected a string")
    return value


def _unsigned(bits: int, name: str) -> Callable[[Any], int]:
    limit = 1 << bits

    def parse(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"invalid type: {type(value).__name__}, expected {name}")
        if not 0 <= value < limit:
            raise ValueError(f"invalid value: integer {value}, expected {name}")
        return value

    return parse


_usize = _unsigned(64, "usize")
_u32 = _unsigned(32, "u32")


@dataclass
class PeerNetworkInfo:
    """Remote and local addresses of a connection."""

    remote_address: str
    local_address: str

    @classmethod
    def from_json(cls, data: Any) -> PeerNetworkInfo:
        data = _mapping(data)
        return cls(
            remote_address=_required(data, "remoteAddress", _string),
            local_address=_required(data, "localAddress", _string),
        )

    def to_json(self) -> dict[str, Any]:
        return {"remoteAddress": self.remote_address, "localAddress": self.local_address}


@dataclass
class EthProtocolInfo:
    """Version, difficulty and chain head of a peer speaking eth."""

    version: int
    head: str
    difficulty: U256 | None = None

    @classmethod
    def from_json(cls, data: Any) -> EthProtocolInfo:
        data = _mapping(data)
        return cls(
            version=_required(data, "version", _u32),
            difficulty=_optional(data, "difficulty", U256.from_json),
            head=_required(data, "head", _string),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": None if self.difficulty is None else self.difficulty.to_json(),
            "head": self.head,
        }


@dataclass
class PipProtocolInfo:
    """Version, difficulty and chain head of a peer speaking pip."""

    version: int
    difficulty: U256
    head: str

    @classmethod
    def from_json(cls, data: Any) -> PipProtocolInfo:
        data = _mapping(data)
        return cls(
            version=_required(data, "version", _u32),
            difficulty=_required(data, "difficulty", U256.from_json),
            head=_required(data, "head", _string),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "difficulty": self.difficulty.to_json(),
            "head": self.head,
        }


@dataclass
class PeerProtocolsInfo:
    """The protocols a peer speaks."""

    eth: EthProtocolInfo | None = None
    pip: PipProtocolInfo | None = None

    @classmethod
    def from_json(cls, data: Any) -> PeerProtocolsInfo:
        data = _mapping(data)
        return cls(
            eth=_optional(data, "eth", EthProtocolInfo.from_json),
            pip=_optional(data, "pip", PipProtocolInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "eth": None if self.eth is None else self.eth.to_json(),
            "pip": None if self.pip is None else self.pip.to_json(),
        }


@dataclass
class ParityPeerInfo:
    """Details of one peer."""

    name: str
    network: PeerNetworkInfo
    protocols: PeerProtocolsInfo
    caps: list[str] = field(default_factory=list)
    id: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> ParityPeerInfo:
        data = _mapping(data)
        return cls(
            id=_optional(data, "id", _string),
            name=_required(data, "name", _string),
            caps=_required(data, "caps", _list_of(_string)),
            network=_required(data, "network", PeerNetworkInfo.from_json),
            protocols=_required(data, "protocols", PeerProtocolsInfo.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "caps": list(self.caps),
            "network": self.network.to_json(),
            "protocols": self.protocols.to_json(),
        }


@dataclass
class ParityPeerType:
    """Peer counts and the list of peers of a node."""

    active: int
    connected: int
    max: int
    peers: list[ParityPeerInfo] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> ParityPeerType:
        data = _mapping(data)
        return cls(
            active=_required(data, "active", _usize),
            connected=_required(data, "connected", _usize),
            max=_required(data, "max", _u32),
            peers=_required(data, "peers", _list_of(ParityPeerInfo.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "active": self.active,
            "connected": self.connected,
            "max": self.max,
            "peers": [peer.to_json() for peer in self.peers],
        }