import json

import pytest

from web3types.primitives import H160, H256, H2048, U64, U256, Bytes
from web3types.transaction import AccessListItem, RawTransaction, Receipt, Transaction

ZERO_BLOOM = "0x" + "00" * 256

RECEIPT_BLOCK_HASH = "0x83eaba432089a0bfe99e9fc9022d1cfcb78f95f407821be81737c84ae0b439c5"
RECEIPT_TX_HASH = "0x422fb0d5953c0c48cbb42fb58e1c30f5e150441c68374d70ca7d4f191fd56f26"
CONTRACT = "0x03d8c4566478a6e1bf75650248accce16a98509f"
SENDER = "0x407d73d8a49eeb85d32cf465507dd71d507100c1"
RECIPIENT = "0x853f43d8a49eeb85d32cf465507dd71d507100c1"


def receipt_json(**changes):
    data = dict(
        blockHash=RECEIPT_BLOCK_HASH,
        blockNumber="0x38",
        contractAddress=CONTRACT,
        cumulativeGasUsed="0x927c0",
        gasUsed="0x927c0",
        logs=[],
        logsBloom=ZERO_BLOOM,
        root=None,
        transactionHash=RECEIPT_TX_HASH,
        transactionIndex="0x0",
        status="0x1",
        effectiveGasPrice="0x100",
    )
    data["from"] = SENDER
    data["to"] = RECIPIENT
    for key, value in changes.items():
        if value is ...:
            del data[key]
        else:
            data[key] = value
    return data


def test_deserialize_receipt():
    text = json.dumps(receipt_json(status=...))
    receipt = Receipt.from_json(json.loads(text))
    assert receipt.from_address == H160.from_hex(SENDER)
    assert receipt.to == H160.from_hex(RECIPIENT)
    assert receipt.gas_used == 0x927C0
    assert receipt.cumulative_gas_used == 0x927C0
    assert receipt.block_number == 0x38
    assert receipt.effective_gas_price == 0x100
    assert receipt.root is None
    assert receipt.status is None
    assert receipt.logs_bloom == H2048()


def test_deserialize_receipt_without_from_to():
    receipt = Receipt.from_json(receipt_json(**{"from": ..., "to": ...}))
    assert receipt.from_address == H160()
    assert receipt.to is None
    assert receipt.status == 1


def test_deserialize_receipt_with_status():
    receipt = Receipt.from_json(receipt_json())
    assert receipt.status == U64(1)
    assert receipt.transaction_index == 0
    assert receipt.contract_address == H160.from_hex(CONTRACT)


def test_deserialize_receipt_without_to():
    receipt = Receipt.from_json(receipt_json(to=None))
    assert receipt.to is None
    assert receipt.from_address == H160.from_hex(SENDER)


def test_deserialize_receipt_without_gas():
    receipt = Receipt.from_json(receipt_json(gasUsed=None))
    assert receipt.gas_used is None


def test_receipt_missing_effective_gas_price_defaults_to_zero():
    receipt = Receipt.from_json(receipt_json(effectiveGasPrice=...))
    assert receipt.effective_gas_price == U256(0)


def test_receipt_missing_required_field():
    with pytest.raises(ValueError, match="cumulativeGasUsed"):
        Receipt.from_json(receipt_json(cumulativeGasUsed=...))


def test_receipt_round_trip():
    receipt = Receipt.from_json(receipt_json(type="0x2"))
    encoded = receipt.to_json()
    assert encoded["type"] == "0x2"
    assert Receipt.from_json(encoded) == receipt


def test_receipt_omits_missing_type():
    receipt = Receipt.from_json(receipt_json())
    assert "type" not in receipt.to_json()


PARITY_RAW = (
    "0xd46e8dd67c5d32be8d46e8dd67c5d32be8058bb8eb970870f072445675058bb8eb970870f072445675"
)
PARITY_HASH = "0xc6ef2fc5426d6ad6fd9e2a26abeab0aa2411b7ab17f30a99d3cb96aed1d1055b"
PARITY_BLOCK = "0xbeab0aa2411b7ab17f30a99d3cb9c6ef2fc5426d6ad6fd9e2a26a6aed1d1055b"
PARITY_INPUT = "0x603880600c6000396000f300603880600c6000396000f3603880600c6000396000f360"

PARITY_TX_BODY = dict(
    hash=PARITY_HASH,
    nonce="0x0",
    blockHash=PARITY_BLOCK,
    blockNumber="0x15df",
    transactionIndex="0x1",
    to=RECIPIENT,
    value="0x7f110",
    gas="0x7f110",
    gasPrice="0x09184e72a000",
    input=PARITY_INPUT,
    s="0x777",
)
PARITY_TX_BODY["from"] = SENDER
PARITY_TX = {"raw": PARITY_RAW, "tx": PARITY_TX_BODY}

GETH_RAW = (
    "0xf85d01018094f3b3138e5eb1c75b43994d1bb760e2f9f735789680801ca0"
    "6484d00575e961a7db35ebe5badaaca5cb7ee65d1f2f22f22da87c238b99d30d"
    "a07a85d65797e4b555c1d3f64beebb2cb6f16a6fbd40c43cc48451eaf85305f66e"
)
GETH_R = "0x6484d00575e961a7db35ebe5badaaca5cb7ee65d1f2f22f22da87c238b99d30d"
GETH_S = "0x7a85d65797e4b555c1d3f64beebb2cb6f16a6fbd40c43cc48451eaf85305f66e"
GETH_TX = {
    "raw": GETH_RAW,
    "tx": dict(
        gas="0x0",
        gasPrice="0x1",
        hash="0x0a32fb4e18bc6f7266a164579237b1b5c74271d453c04eab70444ca367d38418",
        input="0x",
        nonce="0x1",
        to="0xf3b3138e5eb1c75b43994d1bb760e2f9f7357896",
        r=GETH_R,
        s=GETH_S,
        v="0x1c",
        value="0x0",
    ),
}


def test_deserialize_signed_tx_parity():
    raw_tx = RawTransaction.from_json(PARITY_TX)
    tx = raw_tx.tx
    assert raw_tx.raw == Bytes.from_json(PARITY_RAW)
    assert tx.nonce == 0
    assert tx.block_number == 0x15DF
    assert tx.transaction_index == 1
    assert tx.s == 0x777
    assert tx.v is None
    assert tx.r is None
    assert tx.from_address == H160.from_hex(SENDER)
    assert tx.gas_price == 0x09184E72A000


def test_deserialize_signed_tx_geth():
    tx = RawTransaction.from_json(GETH_TX).tx
    assert tx.v == 0x1C
    assert tx.block_hash is None
    assert tx.from_address is None
    assert tx.input == b""
    assert tx.r == int(GETH_R, 16)


def test_transaction_to_json_skips_absent_fields():
    encoded = Transaction.from_json(GETH_TX["tx"]).to_json()
    assert "from" not in encoded
    assert "raw" not in encoded
    assert "accessList" not in encoded
    assert encoded["blockHash"] is None
    assert encoded["v"] == "0x1c"


def test_raw_transaction_round_trip():
    for sample in (PARITY_TX, GETH_TX):
        raw_tx = RawTransaction.from_json(sample)
        assert RawTransaction.from_json(raw_tx.to_json()) == raw_tx


def test_transaction_with_access_list_round_trip():
    item = AccessListItem(
        address=H160.from_low_u64_be(7), storage_keys=[H256.from_low_u64_be(1)]
    )
    tx = Transaction(
        hash=H256.from_low_u64_be(9),
        transaction_type=U64(1),
        access_list=[item],
        max_fee_per_gas=U256(10),
        max_priority_fee_per_gas=U256(2),
    )
    encoded = tx.to_json()
    assert encoded["accessList"] == [item.to_json()]
    assert encoded["accessList"][0]["storageKeys"] == [H256.from_low_u64_be(1).to_json()]
    assert Transaction.from_json(encoded) == tx


def test_access_list_item_requires_storage_keys():
    with pytest.raises(ValueError, match="storageKeys"):
        AccessListItem.from_json({"address": H160.from_low_u64_be(1).to_json()})


def test_transaction_rejects_bad_hex():
    data = dict(GETH_TX["tx"], gas="5")
    with pytest.raises(ValueError):
        Transaction.from_json(data)