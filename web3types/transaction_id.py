"""Ways of naming a transaction."""

from __future__ import annotations

from dataclasses import dataclass

from web3types.block import BlockId, BlockNumber, BlockTag
from web3types.primitives import H256, U64


@dataclass(frozen=True)
class TransactionId:
    """A transaction named by its hash or by block and position in it."""

    tx_hash: H256 | None = None
    block: BlockId | None = None
    index: U64 | None = None

    def __post_init__(self) -> None:
        by_hash = self.tx_hash is not None
        by_block = self.block is not None and self.index is not None
        partial_block = (self.block is None) != (self.index is None)
        if by_hash == by_block or partial_block:
            raise ValueError("a transaction id is either a hash or a block and an index")
        if by_block:
            object.__setattr__(self, "index", U64(self.index))

    @classmethod
    def from_hash(cls, tx_hash: H256) -> TransactionId:
        return cls(tx_hash=tx_hash)

    @classmethod
    def from_block(
        cls, block: BlockId | BlockNumber | BlockTag | int, index: int
    ) -> TransactionId:
        if not isinstance(block, BlockId):
            block = BlockId.from_number(block)
        return cls(block=block, index=U64(index))