"""Fixed-size hashes, unsigned integers and byte strings with their JSON-RPC encodings."""

from __future__ import annotations

import operator
import os
import re
from dataclasses import dataclass
from typing import Any, ClassVar

_HEX_DIGITS = re.compile(r"[0-9a-fA-F]*\Z")


def _hex_digits(value: Any, expected: str) -> str:
    """Return the digits after the ``0x`` prefix of ``value``, checking they are hex."""
    if not isinstance(value, str):
        raise ValueError(f"invalid type: {type(value).__name__}, expected {expected}")
    if not value.startswith("0x"):
        raise ValueError(f"invalid value: string {value!r}, expected {expected}")
    digits = value[2:]
    if not _HEX_DIGITS.match(digits):
        raise ValueError(f"Invalid hex: invalid character in {value!r}")
    return digits


@dataclass(frozen=True, order=True, repr=False)
class FixedHash:
    """A hash of a fixed number of bytes, ordered as a big-endian number."""

    data: bytes | None = None
    SIZE: ClassVar[int] = 0

    def __post_init__(self) -> None:
        raw = bytes(self.SIZE) if self.data is None else bytes(self.data)
        if len(raw) != self.SIZE:
            raise ValueError(
                f"{type(self).__name__} takes {self.SIZE} bytes, got {len(raw)}"
            )
        object.__setattr__(self, "data", raw)

    @classmethod
    def from_hex(cls, text: str) -> FixedHash:
        """Parse a 0x-prefixed hex string of exactly ``SIZE`` bytes."""
        digits = _hex_digits(text, f"a 0x-prefixed hex string of {cls.SIZE} bytes")
        if len(digits) != 2 * cls.SIZE:
            raise ValueError(
                f"invalid length {len(digits)}, expected {2 * cls.SIZE} hex digits"
            )
        return cls(bytes.fromhex(digits))

    @classmethod
    def from_json(cls, value: Any) -> FixedHash:
        """Decode the JSON representation of the hash."""
        return cls.from_hex(value)

    @classmethod
    def from_low_u64_be(cls, value: int) -> FixedHash:
        """Build a hash whose last eight bytes hold ``value`` big-endian."""
        low = int(value).to_bytes(8, "big")
        if cls.SIZE >= 8:
            return cls(bytes(cls.SIZE - 8) + low)
        return cls(low[8 - cls.SIZE:])

    @classmethod
    def from_uint(cls, value: int) -> FixedHash:
        """Build a hash holding ``value`` as a big-endian number."""
        return cls(int(value).to_bytes(cls.SIZE, "big"))

    @classmethod
    def random(cls) -> FixedHash:
        """Return a hash of random bytes."""
        return cls(os.urandom(cls.SIZE))

    def to_json(self) -> str:
        return "0x" + self.data.hex()

    def to_int(self) -> int:
        return int.from_bytes(self.data, "big")

    def __str__(self) -> str:
        digits = self.data.hex()
        return f"0x{digits[:4]}\u2026{digits[-4:]}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.to_json()!r})"

    def __format__(self, spec: str) -> str:
        if spec == "":
            return str(self)
        if spec == "x":
            return self.data.hex()
        if spec == "#x":
            return self.to_json()
        raise ValueError(f"unsupported format specifier {spec!r} for {type(self).__name__}")


class H64(FixedHash):
    """An 8-byte hash."""

    SIZE = 8


class H128(FixedHash):
    """A 16-byte hash."""

    SIZE = 16


class H160(FixedHash):
    """A 20-byte hash, used for addresses."""

    SIZE = 20


class H256(FixedHash):
    """A 32-byte hash."""

    SIZE = 32


class H512(FixedHash):
    """A 64-byte hash."""

    SIZE = 64


class H520(FixedHash):
    """A 65-byte hash."""

    SIZE = 65


class H2048(FixedHash):
    """A 256-byte logs bloom."""

    SIZE = 256


class Uint(int):
    """An unsigned integer limited to ``BITS`` bits."""

    BITS: ClassVar[int] = 0

    def __new__(cls, value: Any = 0) -> Uint:
        number = int.__new__(cls, operator.index(value))
        if not 0 <= number < 1 << cls.BITS:
            raise OverflowError(f"{int(number)} does not fit in {cls.__name__}")
        return number

    @classmethod
    def from_json(cls, value: Any) -> Uint:
        """Decode a 0x-prefixed hex quantity."""
        digits = _hex_digits(value, "a 0x-prefixed hex number")
        if not digits:
            raise ValueError("invalid value: '0x', expected a non-empty hex number")
        if len(digits) > cls.BITS // 4:
            raise ValueError(
                f"invalid length {len(digits)}, expected at most {cls.BITS // 4} hex digits"
            )
        return cls(int(digits, 16))

    @classmethod
    def from_bytes_be(cls, data: bytes) -> Uint:
        """Read a big-endian number of at most ``BITS / 8`` bytes."""
        raw = bytes(data)
        if len(raw) > cls.BITS // 8:
            raise OverflowError(f"{len(raw)} bytes do not fit in {cls.__name__}")
        return cls(int.from_bytes(raw, "big"))

    def to_json(self) -> str:
        return f"0x{int(self):x}"

    def low_u64(self) -> int:
        return int(self) & 0xFFFF_FFFF_FFFF_FFFF

    def __str__(self) -> str:
        return int.__repr__(int(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({int(self)})"

    def __format__(self, spec: str) -> str:
        return int.__format__(int(self), spec)


class U64(Uint):
    """A 64-bit unsigned integer."""

    BITS = 64


class U128(Uint):
    """A 128-bit unsigned integer."""

    BITS = 128


class U256(Uint):
    """A 256-bit unsigned integer."""

    BITS = 256


class Bytes(bytes):
    """Raw bytes encoded as a 0x-prefixed hex string."""

    @classmethod
    def from_json(cls, value: Any) -> Bytes:
        digits = _hex_digits(value, "0x prefix")
        if len(digits) % 2:
            raise ValueError("Invalid hex: odd number of digits")
        return cls(bytes.fromhex(digits))

    def to_json(self) -> str:
        return "0x" + self.hex()


class BytesArray(bytes):
    """Bytes encoded as a JSON array of numbers."""

    @classmethod
    def from_json(cls, value: Any) -> BytesArray:
        if not isinstance(value, list):
            raise ValueError(f"invalid type: {type(value).__name__}, expected a sequence")
        if not all(isinstance(item, int) and not isinstance(item, bool) for item in value):
            raise ValueError("invalid type: expected a sequence of integers")
        return cls(bytes(value))

    def to_json(self) -> list[int]:
        return list(self)


Address = H160
Index = U64