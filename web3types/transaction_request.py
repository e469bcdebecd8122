"""Requests for ``eth_call``, ``eth_estimateGas`` and ``eth_sendTransaction``."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from web3types.block import _list_of, _mapping, _optional, _required
from web3types.primitives import H160, U64, U256, Bytes
from web3types.transaction import AccessListItem

_U64_LIMIT = 1 << 64

_parse_access_list = _list_of(AccessListItem.from_json)


def _u64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type: {type(value).__name__}, expected u64")
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"invalid value: integer {value}, expected u64")
    return value


def _encode(value: Any) -> Any:
    if isinstance(value, list):
        return [item.to_json() for item in value]
    return value.to_json()


def _encode_present(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    """Encode every pair whose value is set; unset values are left out."""
    return {key: _encode(value) for key, value in pairs if value is not None}


@dataclass(frozen=True)
class TransactionCondition:
    """A minimum block number or unix time before which a transaction is not valid."""

    block: int | None = None
    timestamp: int | None = None

    def __post_init__(self) -> None:
        if (self.block is None) == (self.timestamp is None):
            raise ValueError("a transaction condition is either a block or a time")
        _u64(self.block if self.block is not None else self.timestamp)

    @classmethod
    def from_json(cls, data: Any) -> TransactionCondition:
        data = _mapping(data)
        if len(data) != 1:
            raise ValueError("expected an object with exactly one key, `block` or `time`")
        ((key, raw),) = data.items()
        if key == "block":
            return cls(block=_u64(raw))
        if key == "time":
            return cls(timestamp=_u64(raw))
        raise ValueError(f"unknown variant `{key}`, expected `block` or `time`")

    def to_json(self) -> dict[str, int]:
        if self.block is not None:
            return {"block": self.block}
        return {"time": self.timestamp}


@dataclass(kw_only=True)
class CallRequest:
    """A contract call; for ``eth_call`` the recipient must be set."""

    from_address: H160 | None = None
    to: H160 | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None
    max_fee_per_gas: U256 | None = None
    max_priority_fee_per_gas: U256 | None = None

    @classmethod
    def builder(cls) -> CallRequestBuilder:
        return CallRequestBuilder()

    @classmethod
    def from_json(cls, data: Any) -> CallRequest:
        data = _mapping(data)
        return cls(
            from_address=_optional(data, "from", H160.from_json),
            to=_optional(data, "to", H160.from_json),
            gas=_optional(data, "gas", U256.from_json),
            gas_price=_optional(data, "gasPrice", U256.from_json),
            value=_optional(data, "value", U256.from_json),
            data=_optional(data, "data", Bytes.from_json),
            transaction_type=_optional(data, "type", U64.from_json),
            access_list=_optional(data, "accessList", _parse_access_list),
            max_fee_per_gas=_optional(data, "maxFeePerGas", U256.from_json),
            max_priority_fee_per_gas=_optional(data, "maxPriorityFeePerGas", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return _encode_present(
            [
                ("from", self.from_address),
                ("to", self.to),
                ("gas", self.gas),
                ("gasPrice", self.gas_price),
                ("value", self.value),
                ("data", self.data),
                ("type", self.transaction_type),
                ("accessList", self.access_list),
                ("maxFeePerGas", self.max_fee_per_gas),
                ("maxPriorityFeePerGas", self.max_priority_fee_per_gas),
            ]
        )


@dataclass(frozen=True)
class CallRequestBuilder:
    """Builds a :class:`CallRequest`; every step returns a new builder."""

    call_request: CallRequest = field(default_factory=CallRequest)

    def _with(self, **changes: Any) -> CallRequestBuilder:
        return CallRequestBuilder(replace(self.call_request, **changes))

    def from_address(self, address: H160) -> CallRequestBuilder:
        return self._with(from_address=address)

    def to(self, address: H160) -> CallRequestBuilder:
        return self._with(to=address)

    def gas(self, gas: int) -> CallRequestBuilder:
        return self._with(gas=U256(gas))

    def gas_price(self, gas_price: int) -> CallRequestBuilder:
        return self._with(gas_price=U256(gas_price))

    def value(self, value: int) -> CallRequestBuilder:
        return self._with(value=U256(value))

    def data(self, data: bytes) -> CallRequestBuilder:
        return self._with(data=Bytes(data))

    def transaction_type(self, transaction_type: int) -> CallRequestBuilder:
        return self._with(transaction_type=U64(transaction_type))

    def access_list(self, access_list: list[AccessListItem]) -> CallRequestBuilder:
        return self._with(access_list=list(access_list))

    def build(self) -> CallRequest:
        return replace(self.call_request)


@dataclass(kw_only=True)
class TransactionRequest:
    """Parameters of a transaction to be sent by the node."""

    from_address: H160 = field(default_factory=H160)
    to: H160 | None = None
    gas: U256 | None = None
    gas_price: U256 | None = None
    value: U256 | None = None
    data: Bytes | None = None
    nonce: U256 | None = None
    condition: TransactionCondition | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None
    max_fee_per_gas: U256 | None = None
    max_priority_fee_per_gas: U256 | None = None

    @classmethod
    def builder(cls) -> TransactionRequestBuilder:
        return TransactionRequestBuilder()

    @classmethod
    def from_json(cls, data: Any) -> TransactionRequest:
        data = _mapping(data)
        return cls(
            from_address=_required(data, "from", H160.from_json),
            to=_optional(data, "to", H160.from_json),
            gas=_optional(data, "gas", U256.from_json),
            gas_price=_optional(data, "gasPrice", U256.from_json),
            value=_optional(data, "value", U256.from_json),
            data=_optional(data, "data", Bytes.from_json),
            nonce=_optional(data, "nonce", U256.from_json),
            condition=_optional(data, "condition", TransactionCondition.from_json),
            transaction_type=_optional(data, "type", U64.from_json),
            access_list=_optional(data, "accessList", _parse_access_list),
            max_fee_per_gas=_optional(data, "maxFeePerGas", U256.from_json),
            max_priority_fee_per_gas=_optional(data, "maxPriorityFeePerGas", U256.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return _encode_present(
            [
                ("from", self.from_address),
                ("to", self.to),
                ("gas", self.gas),
                ("gasPrice", self.gas_price),
                ("value", self.value),
                ("data", self.data),
                ("nonce", self.nonce),
                ("condition", self.condition),
                ("type", self.transaction_type),
                ("accessList", self.access_list),
                ("maxFeePerGas", self.max_fee_per_gas),
                ("maxPriorityFeePerGas", self.max_priority_fee_per_gas),
            ]
        )


@dataclass(frozen=True)
class TransactionRequestBuilder:
    """Builds a :class:`TransactionRequest`; every step returns a new builder."""

    transaction_request: TransactionRequest = field(default_factory=TransactionRequest)

    def _with(self, **changes: Any) -> TransactionRequestBuilder:
        return TransactionRequestBuilder(replace(self.transaction_request, **changes))

    def from_address(self, address: H160) -> TransactionRequestBuilder:
        return self._with(from_address=address)

    def to(self, address: H160) -> TransactionRequestBuilder:
        return self._with(to=address)

    def gas(self, gas: int) -> TransactionRequestBuilder:
        return self._with(gas=U256(gas))

    def value(self, value: int) -> TransactionRequestBuilder:
        return self._with(value=U256(value))

    def data(self, data: bytes) -> TransactionRequestBuilder:
        return self._with(data=Bytes(data))

    def nonce(self, nonce: int) -> TransactionRequestBuilder:
        return self._with(nonce=U256(nonce))

    def condition(self, condition: TransactionCondition) -> TransactionRequestBuilder:
        return self._with(condition=condition)

    def transaction_type(self, transaction_type: int) -> TransactionRequestBuilder:
        return self._with(transaction_type=U64(transaction_type))

    def access_list(self, access_list: list[AccessListItem]) -> TransactionRequestBuilder:
        return self._with(access_list=list(access_list))

    def build(self) -> TransactionRequest:
        return replace(self.transaction_request)