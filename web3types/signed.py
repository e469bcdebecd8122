"""Signed data and the parameters of transactions to be signed offline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from web3types.block import _mapping, _required
from web3types.primitives import H160, H256, U64, U256, Bytes, BytesArray
from web3types.transaction import AccessListItem
from web3types.transaction_request import CallRequest

TRANSACTION_DEFAULT_GAS = U256(100_000)


def _u8(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"invalid type: {type(value).__name__}, expected u8")
    if not 0 <= value < 256:
        raise ValueError(f"invalid value: integer {value}, expected u8")
    return value


@dataclass
class SignedData:
    """A signed message, its hash, the signature parts and the whole signature."""

    message: bytes
    message_hash: H256
    v: int
    r: H256
    s: H256
    signature: Bytes

    @classmethod
    def from_json(cls, data: Any) -> SignedData:
        data = _mapping(data)
        return cls(
            message=bytes(_required(data, "message", BytesArray.from_json)),
            message_hash=_required(data, "messageHash", H256.from_json),
            v=_required(data, "v", _u8),
            r=_required(data, "r", H256.from_json),
            s=_required(data, "s", H256.from_json),
            signature=_required(data, "signature", Bytes.from_json),
        )

    def to_json(self) -> dict[str, Any]:
        return {
            "message": list(self.message),
            "messageHash": self.message_hash.to_json(),
            "v": self.v,
            "r": self.r.to_json(),
            "s": self.s.to_json(),
            "signature": Bytes(self.signature).to_json(),
        }


@dataclass(kw_only=True)
class TransactionParameters:
    """Transaction data for signing; unset optional fields are filled in by the signer."""

    nonce: U256 | None = None
    to: H160 | None = None
    gas: U256 = TRANSACTION_DEFAULT_GAS
    gas_price: U256 | None = None
    value: U256 = field(default_factory=U256)
    data: Bytes = field(default_factory=Bytes)
    chain_id: int | None = None
    transaction_type: U64 | None = None
    access_list: list[AccessListItem] | None = None
    max_fee_per_gas: U256 | None = None
    max_priority_fee_per_gas: U256 | None = None

    @classmethod
    def from_call_request(cls, call: CallRequest) -> TransactionParameters:
        """Take the fields a call request shares; missing gas gets the default."""
        return cls(
            to=call.to,
            gas=TRANSACTION_DEFAULT_GAS if call.gas is None else call.gas,
            gas_price=call.gas_price,
            value=U256() if call.value is None else call.value,
            data=Bytes() if call.data is None else call.data,
            transaction_type=call.transaction_type,
            access_list=call.access_list,
            max_fee_per_gas=call.max_fee_per_gas,
            max_priority_fee_per_gas=call.max_priority_fee_per_gas,
        )

    def to_call_request(self) -> CallRequest:
        return CallRequest(
            to=self.to,
            gas=self.gas,
            gas_price=self.gas_price,
            value=self.value,
            data=self.data,
            transaction_type=self.transaction_type,
            access_list=self.access_list,
            max_fee_per_gas=self.max_fee_per_gas,
            max_priority_fee_per_gas=self.max_priority_fee_per_gas,
        )


@dataclass
class SignedTransaction:
    """An offline-signed transaction ready to be sent raw."""

    message_hash: H256
    v: int
    r: H256
    s: H256
    raw_transaction: Bytes
    transaction_hash: H256