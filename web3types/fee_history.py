"""The result of an ``eth_feeHistory`` call."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

from web3types.block import BlockNumber, _list_of, _mapping, _optional, _required
from web3types.primitives import U256


def _ratio(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"invalid type: {type(value).__name__}, expected a number")
    return float(value)


@dataclass
class FeeHistory:
    """Base fees, gas use ratios and rewards for a range of blocks."""

    oldest_block: BlockNumber
    base_fee_per_gas: list[U256]
    gas_used_ratio: list[float]
    reward: list[list[U256]] | None = None

    @classmethod
    def from_json(cls, data: Any) -> FeeHistory:
        data = _mapping(data)
        return cls(
            oldest_block=_required(data, "oldestBlock", BlockNumber.from_json),
            base_fee_per_gas=_required(data, "baseFeePerGas", _list_of(U256.from_json)),
            gas_used_ratio=_required(data, "gasUsedRatio", _list_of(_ratio)),
            reward=_optional(data, "reward", _list_of(_list_of(U256.from_json))),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "baseFeePerGas": [fee.to_json() for fee in self.base_fee_per_gas],
            "gasUsedRatio": [float(ratio) for ratio in self.gas_used_ratio],
            "oldestBlock": self.oldest_block.to_json(),
            "reward": (
                None
                if self.reward is None
                else [[value.to_json() for value in row] for row in self.reward]
            ),
        }

    def to_json_string(self) -> str:
        """Compact JSON text with keys in sorted order."""
        return json.dumps(self.to_json(), separators=(",", ":"), sort_keys=True)