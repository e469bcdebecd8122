"""Data needed to recover the address that signed a message or transaction."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from web3types.primitives import H256
from web3types.signed import SignedData, SignedTransaction

_SIGNATURE_LENGTH = 65


class ParseSignatureError(ValueError):
    """A raw signature did not have the expected length."""

    def __init__(
        self, message: str = "error parsing raw signature: wrong number of bytes, expected 65"
    ) -> None:
        super().__init__(message)


@dataclass(frozen=True)
class RecoveryMessage:
    """Either message bytes, hashed before recovery, or a precomputed hash."""

    data: bytes | None = None
    hash: H256 | None = None

    def __post_init__(self) -> None:
        if (self.data is None) == (self.hash is None):
            raise ValueError("a recovery message is either data or a hash")
        if self.data is not None:
            object.__setattr__(self, "data", bytes(self.data))

    @property
    def is_hash(self) -> bool:
        return self.hash is not None

    @classmethod
    def of(cls, value: Any) -> RecoveryMessage:
        """Wrap a hash as a hash, and text or bytes as message data."""
        if isinstance(value, RecoveryMessage):
            return value
        if isinstance(value, H256):
            return cls(hash=value)
        if isinstance(value, str):
            return cls(data=value.encode("utf-8"))
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls(data=bytes(value))
        raise TypeError(f"cannot make a recovery message from {type(value).__name__}")


MessageLike = Union[RecoveryMessage, H256, str, bytes, bytearray, memoryview]


@dataclass(frozen=True)
class Recovery:
    """A message with a signature in Electrum notation (``v`` is 27, 28 or 35 + 2 * chain id + parity)."""

    message: RecoveryMessage
    v: int
    r: H256
    s: H256

    @classmethod
    def create(cls, message: MessageLike, v: int, r: H256, s: H256) -> Recovery:
        return cls(RecoveryMessage.of(message), int(v), r, s)

    @classmethod
    def from_raw_signature(cls, message: MessageLike, raw_signature: bytes) -> Recovery:
        """Split a 65-byte signature into ``r``, ``s`` and a trailing ``v`` byte."""
        raw = bytes(raw_signature)
        if len(raw) != _SIGNATURE_LENGTH:
            raise ParseSignatureError()
        return cls.create(message, raw[64], H256(raw[:32]), H256(raw[32:64]))

    @classmethod
    def from_signed(cls, signed: SignedData | SignedTransaction) -> Recovery:
        """Recover from signed data or a signed transaction by its message hash."""
        return cls(RecoveryMessage(hash=signed.message_hash), int(signed.v), signed.r, signed.s)

    def recovery_id(self) -> int | None:
        """The standard recovery id, or None if ``v`` is not valid."""
        if self.v == 27:
            return 0
        if self.v == 28:
            return 1
        if self.v >= 35:
            return (self.v - 1) % 2
        return None

    def as_signature(self) -> tuple[bytes, int] | None:
        """The 64-byte compact signature and the recovery id, or None if ``v`` is not valid."""
        recovery_id = self.recovery_id()
        if recovery_id is None:
            return None
        return self.r.data + self.s.data, recovery_id