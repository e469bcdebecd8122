import copy

import pytest

from web3types.block import Block, BlockHeader, BlockId, BlockNumber, BlockTag
from web3types.primitives import H160, H256, U64, U256, Bytes

_BLOOM_CHUNK = "0e670ec64341771606e55d6b4ca35a1a6b75ee3d5145a99d05921026d1527331"

BLOCK_JSON = {
    "miner": "0x0000000000000000000000000000000000000001",
    "number": "0x1b4",
    "hash": "0x0e670ec64341771606e55d6b4ca35a1a6b75ee3d5145a99d05921026d1527331",
    "parentHash": "0x9646252be9520f6e71339a8df9c55e4d7619deeb018d2a3f2d21fc165dde5eb5",
    "mixHash": "0x1010101010101010101010101010101010101010101010101010101010101010",
    "nonce": "0x0000000000000000",
    "sealFields": [
        "0xe04d296d2460cfb8472af2c5fd05b5a214109c25688d3704aed5484f9a7792f2",
        "0x00000000000000aa",
    ],
    "sha3Uncles": "0x1dcc4de8dec75d7aab85b567b6ccd41ad312451b948a7413f0a142fd40d49347",
    "logsBloom": "0x" + _BLOOM_CHUNK * 8,
    "transactionsRoot": "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421",
    "receiptsRoot": "0x56e81f171bcc55a6ff8345e692c0f86e5b48e01b996cadc001622fb5e363b421",
    "stateRoot": "0xd5855eb08b3387c0af375e9cdb6acfc05eb8f519e419b874b6ff2ffda7ed1dff",
    "difficulty": "0x27f07",
    "totalDifficulty": "0x27f07",
    "extraData": "0x0000000000000000000000000000000000000000000000000000000000000000",
    "size": "0x27f07",
    "gasLimit": "0x9f759",
    "minGasPrice": "0x9f759",
    "gasUsed": "0x9f759",
    "timestamp": "0x54e34e8e",
    "transactions": [],
    "uncles": [],
}


@pytest.fixture
def block_json():
    return copy.deepcopy(BLOCK_JSON)


def test_block_miner(block_json):
    block = Block.from_json(block_json)
    assert block.author == H160.from_low_u64_be(1)
    assert block.base_fee_per_gas is None

    block_json["miner"] = None
    block = Block.from_json(block_json)
    assert block.author == H160()

    del block_json["miner"]
    block = Block.from_json(block_json)
    assert block.author == H160()


def test_post_london_block(block_json):
    block_json["baseFeePerGas"] = "0x7"
    block = Block.from_json(block_json)
    assert block.base_fee_per_gas == U256(7)


def test_block_fields(block_json):
    block = Block.from_json(block_json)
    assert block.number == U64(0x1B4)
    assert block.gas_used == U256(0x9F759)
    assert block.total_difficulty == U256(0x27F07)
    assert block.seal_fields[1] == Bytes(b"\x00" * 7 + b"\xaa")
    assert block.extra_data == bytes(32)
    assert block.logs_bloom.to_json() == "0x" + _BLOOM_CHUNK * 8


def test_block_round_trip(block_json):
    block = Block.from_json(block_json)
    encoded = block.to_json()
    assert "baseFeePerGas" not in encoded
    assert "minGasPrice" not in encoded
    assert encoded["miner"] == "0x0000000000000000000000000000000000000001"
    assert Block.from_json(encoded) == block


def test_block_with_hash_transactions(block_json):
    tx_hash = H256.from_low_u64_be(9)
    block_json["transactions"] = [tx_hash.to_json()]
    block = Block.from_json(block_json, transaction_parser=H256.from_json)
    assert block.transactions == [tx_hash]
    assert block.to_json()["transactions"] == [tx_hash.to_json()]


def test_block_without_seal_fields_defaults_to_empty(block_json):
    del block_json["sealFields"]
    assert Block.from_json(block_json).seal_fields == []


def test_block_missing_required_field(block_json):
    del block_json["parentHash"]
    with pytest.raises(ValueError, match="missing field `parentHash`"):
        Block.from_json(block_json)


def test_default_block():
    block = Block()
    assert block.author == H160()
    assert block.transactions == []
    assert block.gas_used == 0


def test_block_header_round_trip(block_json):
    header = BlockHeader.from_json(block_json)
    assert header.author == H160.from_low_u64_be(1)
    assert header.number == U64(0x1B4)
    encoded = header.to_json()
    assert "totalDifficulty" not in encoded
    assert BlockHeader.from_json(encoded) == header


def test_block_header_requires_bloom(block_json):
    block_json["logsBloom"] = None
    with pytest.raises(ValueError):
        BlockHeader.from_json(block_json)


def test_serialize_deserialize_block_number():
    for tag, text in [
        (BlockTag.LATEST, "latest"),
        (BlockTag.EARLIEST, "earliest"),
        (BlockTag.PENDING, "pending"),
    ]:
        serialized = BlockNumber(tag=tag).to_json()
        assert serialized == text
        assert BlockNumber.from_json(serialized) == BlockNumber(tag=tag)

    serialized = BlockNumber.number(100).to_json()
    assert serialized == "0x64"
    assert BlockNumber.from_json(serialized) == BlockNumber.number(100)

    with pytest.raises(ValueError) as excinfo:
        BlockNumber.from_json("64")
    assert str(excinfo.value) == "invalid block number: missing 0x prefix"


def test_block_number_rejects_bad_hex():
    with pytest.raises(ValueError, match="invalid block number"):
        BlockNumber.from_json("0xzz")
    with pytest.raises(ValueError, match="invalid block number"):
        BlockNumber.from_json("0x" + "f" * 17)


def test_block_number_needs_one_kind():
    with pytest.raises(ValueError):
        BlockNumber()
    with pytest.raises(ValueError):
        BlockNumber(tag=BlockTag.LATEST, value=1)


def test_block_id_by_hash():
    block_hash = H256.from_low_u64_be(2)
    assert BlockId.from_hash(block_hash).to_json() == {
        "blockHash": "0x0000000000000000000000000000000000000000000000000000000000000002"
    }


def test_block_id_by_number():
    assert BlockId.from_number(100).to_json() == "0x64"
    assert BlockId.from_number(BlockTag.PENDING).to_json() == "pending"
    assert BlockId.from_number(BlockNumber(tag=BlockTag.LATEST)) == BlockId(
        number=BlockNumber(tag=BlockTag.LATEST)
    )