"""Types of the trace filtering API."""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Union

from web3types.block import BlockNumber, _list_of, _mapping, _optional, _required
from web3types.primitives import H160, H256, U256, Bytes

_U64_LIMIT = 1 << 64


def _unsigned(name: str) -> Callable[[Any], int]:
    def parse(value: Any) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValueError(f"invalid type: {type(value).__name__}, expected {name}")
        if not 0 <= value < _U64_LIMIT:
            raise ValueError(f"invalid value: integer {value}, expected {name}")
        return value

    return parse


_usize = _unsigned("usize")
_u64 = _unsigned("u64")


def _string(value: Any) -> str:
    if not isinstance(value, str):
        raise ValueError(f"invalid type: {type(value).__name__}, expected a string")
    return value


def _enum_parser(kind: type[Enum]) -> Callable[[Any], Any]:
    def parse(value: Any) -> Any:
        if not isinstance(value, str):
            raise ValueError(f"invalid type: {type(value).__name__}, expected a string")
        try:
            return kind(value)
        except ValueError:
            expected = ", ".join(f"`{member.value}`" for member in kind)
            raise ValueError(f"unknown variant `{value}`, expected one of {expected}") from None

    return parse


@dataclass(frozen=True)
class TraceFilter:
    """A filter for ``trace_filter``."""

    from_block: BlockNumber | None = None
    to_block: BlockNumber | None = None
    from_address: tuple[H160, ...] | None = None
    to_address: tuple[H160, ...] | None = None
    after: int | None = None
    count: int | None = None

    def to_json(self) -> dict[str, Any]:
        out: dict[str, Any] = {}
        if self.from_block is not None:
            out["fromBlock"] = self.from_block.to_json()
        if self.to_block is not None:
            out["toBlock"] = self.to_block.to_json()
        if self.from_address is not None:
            out["fromAddress"] = [address.to_json() for address in self.from_address]
        if self.to_address is not None:
            out["toAddress"] = [address.to_json() for address in self.to_address]
        if self.after is not None:
            out["after"] = self.after
        if self.count is not None:
            out["count"] = self.count
        return out


@dataclass(frozen=True)
class TraceFilterBuilder:
    """Builds a :class:`TraceFilter`; every step returns a new builder."""

    filter: TraceFilter = field(default_factory=TraceFilter)

    def _with(self, **changes: Any) -> TraceFilterBuilder:
        return TraceFilterBuilder(replace(self.filter, **changes))

    def from_block(self, block: BlockNumber) -> TraceFilterBuilder:
        return self._with(from_block=block)

    def to_block(self, block: BlockNumber) -> TraceFilterBuilder:
        return self._with(to_block=block)

    def to_address(self, addresses: Iterable[H160]) -> TraceFilterBuilder:
        return self._with(to_address=tuple(addresses))

    def from_address(self, addresses: Iterable[H160]) -> TraceFilterBuilder:
        return self._with(from_address=tuple(addresses))

    def after(self, after: int) -> TraceFilterBuilder:
        """Skip this many traces."""
        return self._with(after=_usize(after))

    def count(self, count: int) -> TraceFilterBuilder:
        """Return at most this many traces."""
        return self._with(count=_usize(count))

    def build(self) -> TraceFilter:
        return self.filter


class ActionType(str, Enum):
    """The kind of an external action."""

    CALL = "call"
    CREATE = "create"
    SUICIDE = "suicide"
    REWARD = "reward"


class CallType(str, Enum):
    """The kind of a call."""

    NONE = "none"
    CALL = "call"
    CALL_CODE = "callcode"
    DELEGATE_CALL = "delegatecall"
    STATIC_CALL = "staticcall"


class RewardType(str, Enum):
    """The kind of a reward."""

    BLOCK = "block"
    UNCLE = "uncle"
    EMPTY_STEP = "emptyStep"
    EXTERNAL = "external"


_parse_call_type = _enum_parser(CallType)
_parse_reward_type = _enum_parser(RewardType)
_parse_action_type = _enum_parser(ActionType)


@dataclass(kw_only=True)
class Call:
    """A contract call."""

    from_address: H160 = field(default_factory=H160)
    to: H160 = field(default_factory=H160)
    value: U256 = field(default_factory=U256)
    gas: U256 = field(default_factory=U256)
    input: Bytes = field(default_factory=Bytes)
    call_type: CallType = CallType.NONE

    @classmethod
    def from_json(cls, data: Any) -> Call:
        data = _mapping(data)
        return cls(
            from_address=_required(data, "from", H160.from_json),
            to=_required(data, "to", H160.from_json),
            value=_required(data, "value", U256.from_json),
            gas=_required(data, "gas", U256.from_json),
            input=_required(data, "input", Bytes.from_json),
            call_type=_required(data, "callType", _parse_call_type),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address.to_json(),
            "to": self.to.to_json(),
            "value": self.value.to_json(),
            "gas": self.gas.to_json(),
            "input": self.input.to_json(),
            "callType": self.call_type.value,
        }


@dataclass(kw_only=True)
class Create:
    """A contract creation."""

    from_address: H160 = field(default_factory=H160)
    value: U256 = field(default_factory=U256)
    gas: U256 = field(default_factory=U256)
    init: Bytes = field(default_factory=Bytes)

    @classmethod
    def from_json(cls, data: Any) -> Create:
        data = _mapping(data)
        return cls(
            from_address=_required(data, "from", H160.from_json),
            value=_required(data, "value", U256.from_json),
            gas=_required(data, "gas", U256.from_json),
            init=_required(data, "init", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "from": self.from_address.to_json(),
            "value": self.value.to_json(),
            "gas": self.gas.to_json(),
            "init": self.init.to_json(),
        }


@dataclass(kw_only=True)
class Suicide:
    """A contract self-destruct."""

    address: H160 = field(default_factory=H160)
    refund_address: H160 = field(default_factory=H160)
    balance: U256 = field(default_factory=U256)

    @classmethod
    def from_json(cls, data: Any) -> Suicide:
        data = _mapping(data)
        return cls(
            address=_required(data, "address", H160.from_json),
            refund_address=_required(data, "refundAddress", H160.from_json),
            balance=_required(data, "balance", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "address": self.address.to_json(),
            "refundAddress": self.refund_address.to_json(),
            "balance": self.balance.to_json(),
        }


@dataclass(kw_only=True)
class Reward:
    """A block or uncle reward."""

    author: H160
    value: U256
    reward_type: RewardType

    @classmethod
    def from_json(cls, data: Any) -> Reward:
        data = _mapping(data)
        return cls(
            author=_required(data, "author", H160.from_json),
            value=_required(data, "value", U256.from_json),
            reward_type=_required(data, "rewardType", _parse_reward_type),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "author": self.author.to_json(),
            "value": self.value.to_json(),
            "rewardType": self.reward_type.value,
        }


@dataclass(kw_only=True)
class CallResult:
    """The outcome of a call."""

    gas_used: U256 = field(default_factory=U256)
    output: Bytes = field(default_factory=Bytes)

    @classmethod
    def from_json(cls, data: Any) -> CallResult:
        data = _mapping(data)
        return cls(
            gas_used=_required(data, "gasUsed", U256.from_json),
            output=_required(data, "output", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"gasUsed": self.gas_used.to_json(), "output": self.output.to_json()}


@dataclass(kw_only=True)
class CreateResult:
    """The outcome of a contract creation."""

    gas_used: U256 = field(default_factory=U256)
    code: Bytes = field(default_factory=Bytes)
    address: H160 = field(default_factory=H160)

    @classmethod
    def from_json(cls, data: Any) -> CreateResult:
        data = _mapping(data)
        return cls(
            gas_used=_required(data, "gasUsed", U256.from_json),
            code=_required(data, "code", Bytes.from_json),
            address=_required(data, "address", H160.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "gasUsed": self.gas_used.to_json(),
            "code": self.code.to_json(),
            "address": self.address.to_json(),
        }


Action = Union[Call, Create, Suicide, Reward]
Res = Union[CallResult, CreateResult, None]

_ACTION_KINDS: tuple[type, ...] = (Call, Create, Suicide, Reward)
_RESULT_KINDS: tuple[type, ...] = (CallResult, CreateResult)


def parse_action(data: Any) -> Action:
    """Decode an action by trying call, create, suicide and reward in turn."""
    for kind in _ACTION_KINDS:
        try:
            return kind.from_json(data)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum Action")


def action_to_json(action: Action) -> dict[str, Any]:
    return action.to_json()


def parse_result(data: Any) -> Res:
    """Decode a result: a call result, a create result, or null."""
    if data is None:
        return None
    for kind in _RESULT_KINDS:
        try:
            return kind.from_json(data)
        except ValueError:
            continue
    raise ValueError("data did not match any variant of untagged enum Res")


def result_to_json(result: Res) -> dict[str, Any] | None:
    return None if result is None else result.to_json()


@dataclass(kw_only=True)
class Trace:
    """A trace located in a block and transaction."""

    action: Action
    result: Res = None
    trace_address: list[int] = field(default_factory=list)
    subtraces: int = 0
    transaction_position: int | None = None
    transaction_hash: H256 | None = None
    block_number: int
    block_hash: H256
    action_type: ActionType
    error: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> Trace:
        data = _mapping(data)
        return cls(
            action=_required(data, "action", parse_action),
            result=_optional(data, "result", parse_result),
            trace_address=_required(data, "traceAddress", _list_of(_usize)),
            subtraces=_required(data, "subtraces", _usize),
            transaction_position=_optional(data, "transactionPosition", _usize),
            transaction_hash=_optional(data, "transactionHash", H256.from_json),
            block_number=_required(data, "blockNumber", _u64),
            block_hash=_required(data, "blockHash", H256.from_json),
            action_type=_required(data, "type", _parse_action_type),
            error=_optional(data, "error", _string),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "action": action_to_json(self.action),
            "result": result_to_json(self.result),
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "transactionPosition": self.transaction_position,
            "transactionHash": (
                None if self.transaction_hash is None else self.transaction_hash.to_json()
            ),
            "blockNumber": self.block_number,
            "blockHash": self.block_hash.to_json(),
            "type": self.action_type.value,
            "error": self.error,
        }