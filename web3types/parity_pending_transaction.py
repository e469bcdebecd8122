"""Filters for pending transactions of a Parity/OpenEthereum node."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from web3types.primitives import H160, U64, U256, Uint


class FilterOp(str, Enum):
    """How a field is compared with the filter value."""

    LOWER_THAN = "lt"
    EQUAL = "eq"
    GREATER_THAN = "gt"


@dataclass(frozen=True)
class FilterCondition:
    """A comparison of a transaction field with a value."""

    op: FilterOp
    value: Any

    def __post_init__(self) -> None:
        object.__setattr__(self, "op", FilterOp(self.op))

    def to_json(self) -> dict[str, Any]:
        return {self.op.value: self.value.to_json()}


def _condition(value: Any, kind: type[Uint]) -> FilterCondition:
    """Turn a bare value into an equality condition, converting it to ``kind``."""
    if isinstance(value, FilterCondition):
        return FilterCondition(value.op, kind(value.value))
    return FilterCondition(FilterOp.EQUAL, kind(value))


@dataclass(frozen=True)
class ToFilter:
    """Match a recipient address, or contract creation when ``target`` is None."""

    target: H160 | None = None

    @classmethod
    def address(cls, address: H160) -> ToFilter:
        return cls(target=address)

    @classmethod
    def action(cls) -> ToFilter:
        return cls()

    @property
    def is_action(self) -> bool:
        return self.target is None

    def to_json(self) -> dict[str, str]:
        if self.target is None:
            return {"action": "contract_creation"}
        return {"eq": self.target.to_json()}


@dataclass(frozen=True)
class ParityPendingTransactionFilter:
    """Conditions a pending transaction must meet; unset fields match anything."""

    from_address: FilterCondition | None = None
    to: ToFilter | None = None
    gas: FilterCondition | None = None
    gas_price: FilterCondition | None = None
    value: FilterCondition | None = None
    nonce: FilterCondition | None = None

    @classmethod
    def builder(cls) -> ParityPendingTransactionFilterBuilder:
        return ParityPendingTransactionFilterBuilder()

    def to_json(self) -> dict[str, Any]:
        fields = {
            "from": self.from_address,
            "to": self.to,
            "gas": self.gas,
            "gas_price": self.gas_price,
            "value": self.value,
            "nonce": self.nonce,
        }
        return {key: item.to_json() for key, item in fields.items() if item is not None}


@dataclass(frozen=True)
class ParityPendingTransactionFilterBuilder:
    """Builds a pending transaction filter; every step returns a new builder."""

    filter: ParityPendingTransactionFilter = field(
        default_factory=ParityPendingTransactionFilter
    )

    def _with(self, **changes: Any) -> ParityPendingTransactionFilterBuilder:
        return ParityPendingTransactionFilterBuilder(replace(self.filter, **changes))

    def from_address(self, address: H160) -> ParityPendingTransactionFilterBuilder:
        """Match transactions sent from ``address``."""
        return self._with(from_address=FilterCondition(FilterOp.EQUAL, address))

    def to(self, to_or_action: ToFilter) -> ParityPendingTransactionFilterBuilder:
        return self._with(to=to_or_action)

    def gas(self, gas: Any) -> ParityPendingTransactionFilterBuilder:
        """A bare number means equality."""
        return self._with(gas=_condition(gas, U64))

    def gas_price(self, gas_price: Any) -> ParityPendingTransactionFilterBuilder:
        """A bare number means equality."""
        return self._with(gas_price=_condition(gas_price, U64))

    def value(self, value: Any) -> ParityPendingTransactionFilterBuilder:
        """A bare number means equality."""
        return self._with(value=_condition(value, U256))

    def nonce(self, nonce: Any) -> ParityPendingTransactionFilterBuilder:
        """A bare number means equality."""
        return self._with(nonce=_condition(nonce, U256))

    def build(self) -> ParityPendingTransactionFilter:
        return self.filter