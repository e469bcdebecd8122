"""Transactions, their receipts and access lists."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from web3types.block import _list_of, _mapping, _optional, _required
from web3types.log import Log
from web3types.primitives import H160, H256, H2048, U64, U256, Bytes


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


def _defaulted(
    data: Mapping[str, Any], key: str, parse: Callable[[Any], Any], default: Any
) -> Any:
    """Parse ``key`` if present; a missing key gives ``default``."""
    if key not in data:
        return default
    return parse(data[key])


@dataclass(kw_only=True)
class AccessListItem:
    """An address and the storage keys of it that a transaction touches."""

    address: H160 = field(default_factory=H160)
    storage_keys: list[H256] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> AccessListItem:
        data = _mapping(data)
        return cls(
            address=_required(data, "address", H160.from_json),
            storage_keys=_required(data, "storageKeys", _list_of(H256.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "storageKeys": [key.to_json() for key in self.storage_keys],
        }


_parse_access_list = _list_of(AccessListItem.from_json)


def _access_list_json(items: list[AccessListItem]) -> list[dict[str, Any]]:
    return [item.to_json() for item in items]


@dataclass(kw_only=True)
class Transaction:
    """A transaction, pending or in the chain."""

    hash: H256 = field(default_factory=H256)
    nonce: U256 = field(default_factory=U256)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_index: U64 | None = None
    from_address: H160 | None = None
    to: H160 | None = None
    value: U256 = field(default_factory=U256)
    gas_price: U256 | None = None
    gas: U256 = field(default_factory=U256)
    input: Bytes = field(default_factory=Bytes)
    v: U64 | None = None
    r: U256 | None = None
    s: U256 | None = None
    raw: Bytes | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None
    max_fee_per_gas: U256 | None = None
    max_priority_fee_per_gas: U256 | None = None

    @classmethod
    def from_json(cls, data: Any) -> Transaction:
        data = _mapping(data)
        return cls(
            hash=_required(data, "hash", H256.from_json),
            nonce=_required(data, "nonce", U256.from_json),
            block_hash=_optional(data, "blockHash", H256.from_json),
            block_number=_optional(data, "blockNumber", U64.from_json),
            transaction_index=_optional(data, "transactionIndex", U64.from_json),
            from_address=_optional(data, "from", H160.from_json),
            to=_optional(data, "to", H160.from_json),
            value=_required(data, "value", U256.from_json),
            gas_price=_optional(data, "gasPrice", U256.from_json),
            gas=_required(data, "gas", U256.from_json),
            input=_required(data, "input", Bytes.from_json),
            v=_optional(data, "v", U64.from_json),
            r=_optional(data, "r", U256.from_json),
            s=_optional(data, "s", U256.from_json),
            raw=_optional(data, "raw", Bytes.from_json),
            transaction_type=_optional(data, "type", U64.from_json),
            access_list=_optional(data, "accessList", _parse_access_list),
            max_fee_per_gas=_optional(data, "maxFeePerGas", U256.from_json),
            max_priority_fee_per_gas=_optional(data, "maxPriorityFeePerGas", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "hash": self.hash.to_json(),
            "nonce": self.nonce.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "transactionIndex": _json_or_none(self.transaction_index),
        }
        if self.from_address is not None:
            out["from"] = self.from_address.to_json()
        out.update(
            {
                "to": _json_or_none(self.to),
                "value": self.value.to_json(),
                "gasPrice": _json_or_none(self.gas_price),
                "gas": self.gas.to_json(),
                "input": self.input.to_json(),
            }
        )
        optional = {
            "v": self.v,
            "r": self.r,
            "s": self.s,
            "raw": self.raw,
            "type": self.transaction_type,
        }
        out.update({key: value.to_json() for key, value in optional.items() if value is not None})
        if self.access_list is not None:
            out["accessList"] = _access_list_json(self.access_list)
        if self.max_fee_per_gas is not None:
            out["maxFeePerGas"] = self.max_fee_per_gas.to_json()
        if self.max_priority_fee_per_gas is not None:
            out["maxPriorityFeePerGas"] = self.max_priority_fee_per_gas.to_json()
        return out


@dataclass(kw_only=True)
class Receipt:
    """Details of the execution of a transaction."""

    transaction_hash: H256 = field(default_factory=H256)
    transaction_index: U64 = field(default_factory=U64)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    from_address: H160 = field(default_factory=H160)
    to: H160 | None = None
    cumulative_gas_used: U256 = field(default_factory=U256)
    gas_used: U256 | None = None
    contract_address: H160 | None = None
    logs: list[Log] = field(default_factory=list)
    status: U64 | None = None
    root: H256 | None = None
    logs_bloom: H2048 = field(default_factory=H2048)
    transaction_type: U64 | None = None
    effective_gas_price: U256 = field(default_factory=U256)

    @classmethod
    def from_json(cls, data: Any) -> Receipt:
        """Decode a receipt; a missing ``from`` gives the zero address."""
        data = _mapping(data)
        return cls(
            transaction_hash=_required(data, "transactionHash", H256.from_json),
            transaction_index=_required(data, "transactionIndex", U64.from_json),
            block_hash=_optional(data, "blockHash", H256.from_json),
            block_number=_optional(data, "blockNumber", U64.from_json),
            from_address=_defaulted(data, "from", H160.from_json, H160()),
            to=_optional(data, "to", H160.from_json),
            cumulative_gas_used=_required(data, "cumulativeGasUsed", U256.from_json),
            gas_used=_optional(data, "gasUsed", U256.from_json),
            contract_address=_optional(data, "contractAddress", H160.from_json),
            logs=_required(data, "logs", _list_of(Log.from_json)),
            status=_optional(data, "status", U64.from_json),
            root=_optional(data, "root", H256.from_json),
            logs_bloom=_required(data, "logsBloom", H2048.from_json),
            transaction_type=_optional(data, "type", U64.from_json),
            effective_gas_price=_defaulted(
                data, "effectiveGasPrice", U256.from_json, U256()
            ),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "transactionHash": self.transaction_hash.to_json(),
            "transactionIndex": self.transaction_index.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "from": self.from_address.to_json(),
            "to": _json_or_none(self.to),
            "cumulativeGasUsed": self.cumulative_gas_used.to_json(),
            "gasUsed": _json_or_none(self.gas_used),
            "contractAddress": _json_or_none(self.contract_address),
            "logs": [log.to_json() for log in self.logs],
            "status": _json_or_none(self.status),
            "root": _json_or_none(self.root),
            "logsBloom": self.logs_bloom.to_json(),
        }
        if self.transaction_type is not None:
            out["type"] = self.transaction_type.to_json()
        out["effectiveGasPrice"] = self.effective_gas_price.to_json()
        return out


@dataclass(kw_only=True)
class RawTransaction:
    """A signed transaction that has not been sent, with its details."""

    raw: Bytes = field(default_factory=Bytes)
    tx: Transaction = field(default_factory=Transaction)

    @classmethod
    def from_json(cls, data: Any) -> RawTransaction:
        data = _mapping(data)
        return cls(
            raw=_required(data, "raw", Bytes.from_json),
            tx=_required(data, "tx", Transaction.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"raw": self.raw.to_json(), "tx": self.tx.to_json()}