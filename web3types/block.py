"""Blocks, block headers and the ways of naming a block."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from web3types.primitives import H64, H160, H256, H2048, U64, U256, Bytes

_HEX_NUMBER = re.compile(r"[0-9a-fA-F]+\Z")


def _mapping(data: Any) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"invalid type: {type(data).__name__}, expected a JSON object")
    return data


def _required(data: Mapping[str, Any], key: str, parse: Callable[[Any], Any]) -> Any:
    try:
        raw = data[key]
    except KeyError:
        raise ValueError(f"missing field `{key}`") from None
    return parse(raw)


def _optional(data: Mapping[str, Any], key: str, parse: Callable[[Any], Any]) -> Any:
    raw = data.get(key)
    return None if raw is None else parse(raw)


def _plain_list(raw: Any) -> list:
    if not isinstance(raw, list):
        raise ValueError(f"invalid type: {type(raw).__name__}, expected a sequence")
    return list(raw)


def _list_of(parse: Callable[[Any], Any]) -> Callable[[Any], list]:
    def parse_list(raw: Any) -> list:
        return [parse(item) for item in _plain_list(raw)]

    return parse_list


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


def _default_transaction_json(value: Any) -> Any:
    to_json = getattr(value, "to_json", None)
    return to_json() if callable(to_json) else value


class BlockTag(str, Enum):
    """A named block."""

    LATEST = "latest"
    EARLIEST = "earliest"
    PENDING = "pending"


@dataclass(frozen=True)
class BlockNumber:
    """A block named by tag or by its number in the canonical chain."""

    tag: BlockTag | None = None
    value: U64 | None = None

    def __post_init__(self) -> None:
        if (self.tag is None) == (self.value is None):
            raise ValueError("a block number is either a tag or a number")
        if self.tag is not None:
            object.__setattr__(self, "tag", BlockTag(self.tag))
        else:
            object.__setattr__(self, "value", U64(self.value))

    @classmethod
    def number(cls, value: int) -> BlockNumber:
        return cls(value=U64(value))

    @classmethod
    def from_json(cls, value: Any) -> BlockNumber:
        if not isinstance(value, str):
            raise ValueError(f"invalid type: {type(value).__name__}, expected a string")
        try:
            return cls(tag=BlockTag(value))
        except ValueError:
            pass
        if not value.startswith("0x"):
            raise ValueError("invalid block number: missing 0x prefix")
        digits = value[2:]
        if not _HEX_NUMBER.match(digits):
            raise ValueError(f"invalid block number: invalid hex digits {digits!r}")
        number = int(digits, 16)
        if number >= 1 << U64.BITS:
            raise ValueError("invalid block number: the number is too large for the type")
        return cls.number(number)

    def to_json(self) -> str:
        if self.tag is not None:
            return self.tag.value
        return f"0x{self.value:x}"


@dataclass(frozen=True)
class BlockId:
    """A block identified by hash or by number."""

    block_hash: H256 | None = None
    number: BlockNumber | None = None

    def __post_init__(self) -> None:
        if (self.block_hash is None) == (self.number is None):
            raise ValueError("a block id is either a hash or a number")

    @classmethod
    def from_hash(cls, block_hash: H256) -> BlockId:
        return cls(block_hash=block_hash)

    @classmethod
    def from_number(cls, number: BlockNumber | BlockTag | int) -> BlockId:
        if isinstance(number, BlockTag):
            number = BlockNumber(tag=number)
        elif not isinstance(number, BlockNumber):
            number = BlockNumber.number(number)
        return cls(number=number)

    def to_json(self) -> Any:
        if self.block_hash is not None:
            return {"blockHash": self.block_hash.to_json()}
        return self.number.to_json()


@dataclass(kw_only=True)
class BlockHeader:
    """A block header as returned by RPC calls."""

    hash: H256 | None = None
    parent_hash: H256
    uncles_hash: H256
    author: H160 = field(default_factory=H160)
    state_root: H256
    transactions_root: H256
    receipts_root: H256
    number: U64 | None = None
    gas_used: U256
    gas_limit: U256
    base_fee_per_gas: U256 | None = None
    extra_data: Bytes
    logs_bloom: H2048
    timestamp: U256
    difficulty: U256
    mix_hash: H256 | None = None
    nonce: H64 | None = None

    @classmethod
    def from_json(cls, data: Any) -> BlockHeader:
        data = _mapping(data)
        return cls(
            hash=_optional(data, "hash", H256.from_json),
            parent_hash=_required(data, "parentHash", H256.from_json),
            uncles_hash=_required(data, "sha3Uncles", H256.from_json),
            author=_optional(data, "miner", H160.from_json) or H160(),
            state_root=_required(data, "stateRoot", H256.from_json),
            transactions_root=_required(data, "transactionsRoot", H256.from_json),
            receipts_root=_required(data, "receiptsRoot", H256.from_json),
            number=_optional(data, "number", U64.from_json),
            gas_used=_required(data, "gasUsed", U256.from_json),
            gas_limit=_required(data, "gasLimit", U256.from_json),
            base_fee_per_gas=_optional(data, "baseFeePerGas", U256.from_json),
            extra_data=_required(data, "extraData", Bytes.from_json),
            logs_bloom=_required(data, "logsBloom", H2048.from_json),
            timestamp=_required(data, "timestamp", U256.from_json),
            difficulty=_required(data, "difficulty", U256.from_json),
            mix_hash=_optional(data, "mixHash", H256.from_json),
            nonce=_optional(data, "nonce", H64.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "hash": _json_or_none(self.hash),
            "parentHash": self.parent_hash.to_json(),
            "sha3Uncles": self.uncles_hash.to_json(),
            "miner": self.author.to_json(),
            "stateRoot": self.state_root.to_json(),
            "transactionsRoot": self.transactions_root.to_json(),
            "receiptsRoot": self.receipts_root.to_json(),
            "number": _json_or_none(self.number),
            "gasUsed": self.gas_used.to_json(),
            "gasLimit": self.gas_limit.to_json(),
        }
        if self.base_fee_per_gas is not None:
            out["baseFeePerGas"] = self.base_fee_per_gas.to_json()
        out.update(
            {
                "extraData": self.extra_data.to_json(),
                "logsBloom": self.logs_bloom.to_json(),
                "timestamp": self.timestamp.to_json(),
                "difficulty": self.difficulty.to_json(),
                "mixHash": _json_or_none(self.mix_hash),
                "nonce": _json_or_none(self.nonce),
            }
        )
        return out


@dataclass(kw_only=True)
class Block:
    """A block as returned by RPC calls; transactions are of any one kind."""

    hash: H256 | None = None
    parent_hash: H256 = field(default_factory=H256)
    uncles_hash: H256 = field(default_factory=H256)
    author: H160 = field(default_factory=H160)
    state_root: H256 = field(default_factory=H256)
    transactions_root: H256 = field(default_factory=H256)
    receipts_root: H256 = field(default_factory=H256)
    number: U64 | None = None
    gas_used: U256 = field(default_factory=U256)
    gas_limit: U256 = field(default_factory=U256)
    base_fee_per_gas: U256 | None = None
    extra_data: Bytes = field(default_factory=Bytes)
    logs_bloom: H2048 | None = None
    timestamp: U256 = field(default_factory=U256)
    difficulty: U256 = field(default_factory=U256)
    total_difficulty: U256 | None = None
    seal_fields: list[Bytes] = field(default_factory=list)
    uncles: list[H256] = field(default_factory=list)
    transactions: list[Any] = field(default_factory=list)
    size: U256 | None = None
    mix_hash: H256 | None = None
    nonce: H64 | None = None

    @classmethod
    def from_json(
        cls, data: Any, transaction_parser: Callable[[Any], Any] | None = None
    ) -> Block:
        """Decode a block; each transaction goes through ``transaction_parser``."""
        data = _mapping(data)
        parse_transactions = (
            _list_of(transaction_parser) if transaction_parser is not None else _plain_list
        )
        return cls(
            hash=_optional(data, "hash", H256.from_json),
            parent_hash=_required(data, "parentHash", H256.from_json),
            uncles_hash=_required(data, "sha3Uncles", H256.from_json),
            author=_optional(data, "miner", H160.from_json) or H160(),
            state_root=_required(data, "stateRoot", H256.from_json),
            transactions_root=_required(data, "transactionsRoot", H256.from_json),
            receipts_root=_required(data, "receiptsRoot", H256.from_json),
            number=_optional(data, "number", U64.from_json),
            gas_used=_required(data, "gasUsed", U256.from_json),
            gas_limit=_required(data, "gasLimit", U256.from_json),
            base_fee_per_gas=_optional(data, "baseFeePerGas", U256.from_json),
            extra_data=_required(data, "extraData", Bytes.from_json),
            logs_bloom=_optional(data, "logsBloom", H2048.from_json),
            timestamp=_required(data, "timestamp", U256.from_json),
            difficulty=_required(data, "difficulty", U256.from_json),
            total_difficulty=_optional(data, "totalDifficulty", U256.from_json),
            seal_fields=(
                _list_of(Bytes.from_json)(data["sealFields"]) if "sealFields" in data else []
            ),
            uncles=_required(data, "uncles", _list_of(H256.from_json)),
            transactions=_required(data, "transactions", parse_transactions),
            size=_optional(data, "size", U256.from_json),
            mix_hash=_optional(data, "mixHash", H256.from_json),
            nonce=_optional(data, "nonce", H64.from_json),
        )

    def to_json(
        self, transaction_serializer: Callable[[Any], Any] | None = None
    ) -> dict[str, Any]:
        """Encode the block; each transaction goes through ``transaction_serializer``."""
        serialize_tx = transaction_serializer or _default_transaction_json
        out: dict[str, Any] = {
            "hash": _json_or_none(self.hash),
            "parentHash": self.parent_hash.to_json(),
            "sha3Uncles": self.uncles_hash.to_json(),
            "miner": self.author.to_json(),
            "stateRoot": self.state_root.to_json(),
            "transactionsRoot": self.transactions_root.to_json(),
            "receiptsRoot": self.receipts_root.to_json(),
            "number": _json_or_none(self.number),
            "gasUsed": self.gas_used.to_json(),
            "gasLimit": self.gas_limit.to_json(),
        }
        if self.base_fee_per_gas is not None:
            out["baseFeePerGas"] = self.base_fee_per_gas.to_json()
        out.update(
            {
                "extraData": self.extra_data.to_json(),
                "logsBloom": _json_or_none(self.logs_bloom),
                "timestamp": self.timestamp.to_json(),
                "difficulty": self.difficulty.to_json(),
                "totalDifficulty": _json_or_none(self.total_difficulty),
                "sealFields": [seal.to_json() for seal in self.seal_fields],
                "uncles": [uncle.to_json() for uncle in self.uncles],
                "transactions": [serialize_tx(tx) for tx in self.transactions],
                "size": _json_or_none(self.size),
                "mixHash": _json_or_none(self.mix_hash),
                "nonce": _json_or_none(self.nonce),
            }
        )
        return out