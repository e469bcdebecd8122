"""Event logs and the filters used to query them."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, Union

from web3types.block import BlockNumber, _list_of, _mapping, _optional, _required
from web3types.primitives import H160, H256, U64, U256, Bytes, FixedHash


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type: {type(value).__name__}, expected a string")
    return value


def _boolean(value: Any) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"invalid type: {type(value).__name__}, expected a boolean")
    return value


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


@dataclass(kw_only=True)
class Log:
    """A log produced by a transaction."""

    address: H160
    topics: list[H256] = field(default_factory=list)
    data: Bytes = field(default_factory=Bytes)
    block_hash: H256 | None = None
    block_number: U64 | None = None
    transaction_hash: H256 | None = None
    transaction_index: U64 | None = None
    log_index: U256 | None = None
    transaction_log_index: U256 | None = None
    log_type: str | None = None
    removed: bool | None = None

    @classmethod
    def from_json(cls, data: Any) -> Log:
        data = _mapping(data)
        return cls(
            address=_required(data, "address", H160.from_json),
            topics=_required(data, "topics", _list_of(H256.from_json)),
            data=_required(data, "data", Bytes.from_json),
            block_hash=_optional(data, "blockHash", H256.from_json),
            block_number=_optional(data, "blockNumber", U64.from_json),
            transaction_hash=_optional(data, "transactionHash", H256.from_json),
            transaction_index=_optional(data, "transactionIndex", U64.from_json),
            log_index=_optional(data, "logIndex", U256.from_json),
            transaction_log_index=_optional(data, "transactionLogIndex", U256.from_json),
            log_type=_optional(data, "logType", _string),
            removed=_optional(data, "removed", _boolean),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "topics": [topic.to_json() for topic in self.topics],
            "data": self.data.to_json(),
            "blockHash": _json_or_none(self.block_hash),
            "blockNumber": _json_or_none(self.block_number),
            "transactionHash": _json_or_none(self.transaction_hash),
            "transactionIndex": _json_or_none(self.transaction_index),
            "logIndex": _json_or_none(self.log_index),
            "transactionLogIndex": _json_or_none(self.transaction_log_index),
            "logType": self.log_type,
            "removed": self.removed,
        }

    def is_removed(self) -> bool:
        """True if the log has been removed from the chain."""
        if self.removed is not None:
            return self.removed
        return self.log_type == "removed"


def _value_or_array(items: Sequence[FixedHash]) -> Any:
    """Encode no item as null, one item as itself and more as an array."""
    if not items:
        return None
    if len(items) == 1:
        return items[0].to_json()
    return [item.to_json() for item in items]


@dataclass(frozen=True)
class Filter:
    """A log filter as sent to the node."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    block_hash: H256 | None = None
    address: tuple[H160, ...] | None = None
    topics: tuple[tuple[H256, ...] | None, ...] | None = None
    limit: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.block_hash is not None:
            out["blockHash"] = self.block_hash.to_json()
        if self.address is not None:
            out["address"] = _value_or_array(self.address)
        if self.topics is not None:
            out["topics"] = [
                None if topic is None else _value_or_array(topic) for topic in self.topics
            ]
        if self.limit is not None:
            out["limit"] = self.limit
        return out


Topic = Union[None, H256, Sequence[H256]]


@dataclass(frozen=True)
class TopicFilter:
    """Topic constraints: None matches any, a hash matches it, a sequence matches one of it."""

    topic0: Topic = None
    topic1: Topic = None
    topic2: Topic = None
    topic3: Topic = None


def _topic_to_option(topic: Topic) -> tuple[H256, ...] | None:
    if topic is None:
        return None
    if isinstance(topic, FixedHash):
        return (topic,)
    return tuple(topic)


@dataclass(frozen=True)
class FilterBuilder:
    """Builds a :class:`Filter`; every step returns a new builder."""

    filter: Filter = field(default_factory=Filter)

    def _with(self, **changes: Any) -> FilterBuilder:
        return FilterBuilder(replace(self.filter, **changes))

    def from_block(self, block: BlockNumber) -> FilterBuilder:
        """Set the first block; clears any block hash."""
        return self._with(block_hash=None, from_block=block)

    def to_block(self, block: BlockNumber) -> FilterBuilder:
        """Set the last block; clears any block hash."""
        return self._with(block_hash=None, to_block=block)

    def block_hash(self, block_hash: H256) -> FilterBuilder:
        """Set the block hash; clears the block range."""
        return self._with(from_block=None, to_block=None, block_hash=block_hash)

    def address(self, addresses: Iterable[H160]) -> FilterBuilder:
        return self._with(address=tuple(addresses))

    def topics(
        self,
        topic1: Iterable[H256] | None = None,
        topic2: Iterable[H256] | None = None,
        topic3: Iterable[H256] | None = None,
        topic4: Iterable[H256] | None = None,
    ) -> FilterBuilder:
        """Set the topics; trailing unconstrained topics are dropped."""
        topics = [None if t is None else tuple(t) for t in (topic1, topic2, topic3, topic4)]
        while topics and topics[-1] is None:
            topics.pop()
        return self._with(topics=tuple(topics))

    def topic_filter(self, topic_filter: TopicFilter) -> FilterBuilder:
        return self.topics(
            _topic_to_option(topic_filter.topic0),
            _topic_to_option(topic_filter.topic1),
            _topic_to_option(topic_filter.topic2),
            _topic_to_option(topic_filter.topic3),
        )

    def limit(self, limit: int) -> FilterBuilder:
        if isinstance(limit, bool) or not isinstance(limit, int) or limit < 0:
            raise ValueError(f"limit must be a non-negative integer, got {limit!r}")
        return self._with(limit=limit)

    def build(self) -> Filter:
        return self.filter