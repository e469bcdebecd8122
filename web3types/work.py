"""A miner's work package."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from web3types.primitives import H256, U256

_U64_LIMIT = 1 << 64


def _u64(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type: {type(value).__name__}, expected u64")
    if not 0 <= value < _U64_LIMIT:
        raise ValueError(f"invalid value: integer {value}, expected u64")
    return value


@dataclass(frozen=True)
class Work:
    """Proof-of-work hash, seed hash, target and, when known, the block number."""

    pow_hash: H256
    seed_hash: H256
    target: H256
    number: int | None = None

    @classmethod
    def from_json(cls, value: Any) -> Work:
        """Decode a three-element array, or four with a numeric block number."""
        try:
            if not isinstance(value, list):
                raise ValueError(f"invalid type: {type(value).__name__}, expected a tuple")
            if len(value) not in (3, 4):
                raise ValueError(f"invalid length {len(value)}, expected a tuple of size 3 or 4")
            pow_hash, seed_hash, target = (H256.from_json(item) for item in value[:3])
            number = _u64(value[3]) if len(value) == 4 else None
        except ValueError as exc:
            raise ValueError(f"Cannot deserialize Work: {exc}") from exc
        return cls(pow_hash, seed_hash, target, number)

    def to_json(self) -> list[str]:
        """Encode as an array; a known block number is written as a hex quantity."""
        out = [self.pow_hash.to_json(), self.seed_hash.to_json(), self.target.to_json()]
        if self.number is not None:
            out.append(U256(self.number).to_json())
        return out