"""Types of the ad-hoc trace API: call traces, VM traces and state diffs."""

from __future__ import annotations

import json
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from web3types.block import _list_of, _mapping, _optional, _required
from web3types.primitives import H160, H256, U256, Bytes
from web3types.trace_filtering import (
    Action,
    ActionType,
    Res,
    _enum_parser,
    _string,
    _u64,
    _usize,
    action_to_json,
    parse_action,
    parse_result,
    result_to_json,
)


class TraceType(str, Enum):
    """The kind of trace to make."""

    TRACE = "trace"
    VM_TRACE = "vmTrace"
    STATE_DIFF = "stateDiff"


def serialize_trace_types(trace_types: Iterable[TraceType]) -> str:
    """Compact JSON array naming the requested trace kinds."""
    names = [TraceType(kind).value for kind in trace_types]
    return json.dumps(names, separators=(",", ":"))


def _to_json(value: Any) -> Any:
    return value.to_json()


def _json_or_none(value: Any) -> Any:
    return None if value is None else value.to_json()


# ---------------- State diff ----------------


class DiffKind(str, Enum):
    """How a value changed."""

    SAME = "="
    BORN = "+"
    DIED = "-"
    CHANGED = "*"


@dataclass(frozen=True)
class ChangedType:
    """The previous and current value of a changed entry."""

    from_value: Any
    to: Any


@dataclass(frozen=True)
class Diff:
    """A change of one value: unchanged, set, removed, or changed from one value to another."""

    kind: DiffKind
    value: Any = None

    def __post_init__(self) -> None:
        kind = DiffKind(self.kind)
        object.__setattr__(self, "kind", kind)
        if kind is DiffKind.SAME:
            if self.value is not None:
                raise ValueError("an unchanged diff carries no value")
        elif kind is DiffKind.CHANGED:
            if not isinstance(self.value, ChangedType):
                raise ValueError("a changed diff carries a ChangedType")
        elif self.value is None:
            raise ValueError(f"a `{kind.value}` diff carries a value")

    @classmethod
    def from_json(cls, value: Any, parser: Callable[[Any], Any]) -> Diff:
        """Decode ``"="`` or a one-key object tagged ``+``, ``-`` or ``*``."""
        if isinstance(value, str):
            if value == DiffKind.SAME.value:
                return cls(DiffKind.SAME)
            raise ValueError(f"unknown variant `{value}`, expected `=`")
        data = _mapping(value)
        if len(data) != 1:
            raise ValueError("expected a diff object with exactly one key")
        ((key, inner),) = data.items()
        try:
            kind = DiffKind(key)
        except ValueError:
            raise ValueError(
                f"unknown variant `{key}`, expected one of `=`, `+`, `-`, `*`"
            ) from None
        if kind is DiffKind.SAME:
            if inner is not None:
                raise ValueError("invalid type: expected unit variant `=`")
            return cls(kind)
        if kind is DiffKind.CHANGED:
            change = _mapping(inner)
            return cls(
                kind,
                ChangedType(
                    from_value=_required(change, "from", parser),
                    to=_required(change, "to", parser),
                ),
            )
        return cls(kind, parser(inner))

    def to_json(self, serializer: Callable[[Any], Any] | None = None) -> Any:
        encode = serializer or _to_json
        if self.kind is DiffKind.SAME:
            return DiffKind.SAME.value
        if self.kind is DiffKind.CHANGED:
            return {
                DiffKind.CHANGED.value: {
                    "from": encode(self.value.from_value),
                    "to": encode(self.value.to),
                }
            }
        return {self.kind.value: encode(self.value)}


def _diff_parser(parser: Callable[[Any], Any]) -> Callable[[Any], Diff]:
    def parse(value: Any) -> Diff:
        return Diff.from_json(value, parser)

    return parse


_u256_diff = _diff_parser(U256.from_json)
_bytes_diff = _diff_parser(Bytes.from_json)
_h256_diff = _diff_parser(H256.from_json)


@dataclass
class AccountDiff:
    """Changes to one account."""

    balance: Diff
    nonce: Diff
    code: Diff
    storage: dict[H256, Diff] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> AccountDiff:
        data = _mapping(data)
        storage = _mapping(_required(data, "storage", lambda value: value))
        return cls(
            balance=_required(data, "balance", _u256_diff),
            nonce=_required(data, "nonce", _u256_diff),
            code=_required(data, "code", _bytes_diff),
            storage={H256.from_json(key): _h256_diff(diff) for key, diff in storage.items()},
        )

    def to_json(self) -> dict[str, Any]:
        entries = sorted(
            ((key.to_json(), diff) for key, diff in self.storage.items()),
            key=lambda item: item[0],
        )
        return {
            "balance": self.balance.to_json(),
            "nonce": self.nonce.to_json(),
            "code": self.code.to_json(),
            "storage": {key: diff.to_json() for key, diff in entries},
        }


@dataclass
class StateDiff:
    """Changes to every touched account, keyed by address."""

    accounts: dict[H160, AccountDiff] = field(default_factory=dict)

    @classmethod
    def from_json(cls, data: Any) -> StateDiff:
        data = _mapping(data)
        return cls(
            {H160.from_json(key): AccountDiff.from_json(diff) for key, diff in data.items()}
        )

    def to_json(self) -> dict[str, Any]:
        entries = sorted(
            ((key.to_json(), diff) for key, diff in self.accounts.items()),
            key=lambda item: item[0],
        )
        return {key: diff.to_json() for key, diff in entries}


# ---------------- Transaction trace ----------------

_parse_action_type = _enum_parser(ActionType)


@dataclass(kw_only=True)
class TransactionTrace:
    """One call or creation within a transaction."""

    trace_address: list[int] = field(default_factory=list)
    subtraces: int = 0
    action: Action
    action_type: ActionType
    result: Res = None
    error: str | None = None

    @classmethod
    def from_json(cls, data: Any) -> TransactionTrace:
        data = _mapping(data)
        return cls(
            trace_address=_required(data, "traceAddress", _list_of(_usize)),
            subtraces=_required(data, "subtraces", _usize),
            action=_required(data, "action", parse_action),
            action_type=_required(data, "type", _parse_action_type),
            result=_optional(data, "result", parse_result),
            error=_optional(data, "error", _string),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "traceAddress": list(self.trace_address),
            "subtraces": self.subtraces,
            "action": action_to_json(self.action),
            "type": self.action_type.value,
            "result": result_to_json(self.result),
            "error": self.error,
        }


# ---------------- VM trace ----------------


@dataclass
class MemoryDiff:
    """A changed chunk of memory."""

    off: int = 0
    data: Bytes = field(default_factory=Bytes)

    @classmethod
    def from_json(cls, data: Any) -> MemoryDiff:
        data = _mapping(data)
        return cls(
            off=_required(data, "off", _usize),
            data=_required(data, "data", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"off": self.off, "data": self.data.to_json()}


@dataclass
class StorageDiff:
    """A changed storage slot."""

    key: U256 = field(default_factory=U256)
    val: U256 = field(default_factory=U256)

    @classmethod
    def from_json(cls, data: Any) -> StorageDiff:
        data = _mapping(data)
        return cls(
            key=_required(data, "key", U256.from_json),
            val=_required(data, "val", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {"key": self.key.to_json(), "val": self.val.to_json()}


@dataclass
class VMExecutedOperation:
    """The effects of one executed operation."""

    used: int = 0
    push: list[U256] = field(default_factory=list)
    mem: MemoryDiff | None = None
    store: StorageDiff | None = None

    @classmethod
    def from_json(cls, data: Any) -> VMExecutedOperation:
        data = _mapping(data)
        return cls(
            used=_required(data, "used", _u64),
            push=_required(data, "push", _list_of(U256.from_json)),
            mem=_optional(data, "mem", MemoryDiff.from_json),
            store=_optional(data, "store", StorageDiff.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "used": self.used,
            "push": [item.to_json() for item in self.push],
            "mem": _json_or_none(self.mem),
            "store": _json_or_none(self.store),
        }


@dataclass
class VMOperation:
    """One operation executed by the VM."""

    pc: int = 0
    cost: int = 0
    ex: VMExecutedOperation | None = None
    sub: VMTrace | None = None

    @classmethod
    def from_json(cls, data: Any) -> VMOperation:
        data = _mapping(data)
        return cls(
            pc=_required(data, "pc", _usize),
            cost=_required(data, "cost", _u64),
            ex=_optional(data, "ex", VMExecutedOperation.from_json),
            sub=_optional(data, "sub", VMTrace.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "pc": self.pc,
            "cost": self.cost,
            "ex": _json_or_none(self.ex),
            "sub": _json_or_none(self.sub),
        }


@dataclass
class VMTrace:
    """The full VM trace of a call or creation."""

    code: Bytes = field(default_factory=Bytes)
    ops: list[VMOperation] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Any) -> VMTrace:
        data = _mapping(data)
        return cls(
            code=_required(data, "code", Bytes.from_json),
            ops=_required(data, "ops", _list_of(VMOperation.from_json)),
        )

    def to_json(self) -> dict[str, Any]:
        return {"code": self.code.to_json(), "ops": [op.to_json() for op in self.ops]}


# ---------------- Block trace ----------------


@dataclass(kw_only=True)
class BlockTrace:
    """The result of replaying a transaction with the requested trace kinds."""

    output: Bytes = field(default_factory=Bytes)
    trace: list[TransactionTrace] | None = None
    vm_trace: VMTrace | None = None
    state_diff: StateDiff | None = None
    transaction_hash: H256 | None = None

    @classmethod
    def from_json(cls, data: Any) -> BlockTrace:
        data = _mapping(data)
        return cls(
            output=_required(data, "output", Bytes.from_json),
            trace=_optional(data, "trace", _list_of(TransactionTrace.from_json)),
            vm_trace=_optional(data, "vmTrace", VMTrace.from_json),
            state_diff=_optional(data, "stateDiff", StateDiff.from_json),
            transaction_hash=_optional(data, "transactionHash", H256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "output": self.output.to_json(),
            "trace": None if self.trace is None else [t.to_json() for t in self.trace],
            "vmTrace": _json_or_none(self.vm_trace),
            "stateDiff": _json_or_none(self.state_diff),
            "transactionHash": _json_or_none(self.transaction_hash),
        }