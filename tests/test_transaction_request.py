import json

import pytest

from web3types.primitives import H160, H256, U256, Bytes
from web3types.transaction import AccessListItem
from web3types.transaction_request import (
    CallRequest,
    CallRequestBuilder,
    TransactionCondition,
    TransactionRequest,
    TransactionRequestBuilder,
)

CALL_JSON = """{
  "to": "0x0000000000000000000000000000000000000005",
  "gas": "0x5208",
  "value": "0x4c4b40",
  "data": "0x010203"
}"""

TX_JSON = """{
  "from": "0x0000000000000000000000000000000000000005",
  "gas": "0x5208",
  "value": "0x4c4b40",
  "data": "0x010203",
  "condition": {
    "block": 5
  }
}"""


def _call_request():
    return CallRequest(
        to=H160.from_low_u64_be(5),
        gas=U256(21_000),
        value=U256(5_000_000),
        data=Bytes(bytes.fromhex("010203")),
    )


def _tx_request():
    return TransactionRequest(
        from_address=H160.from_low_u64_be(5),
        gas=U256(21_000),
        value=U256(5_000_000),
        data=Bytes(bytes.fromhex("010203")),
        condition=TransactionCondition(block=5),
    )


def test_should_serialize_call_request():
    assert json.dumps(_call_request().to_json(), indent=2) == CALL_JSON


def test_should_deserialize_call_request():
    request = CallRequest.from_json(json.loads(CALL_JSON))
    assert request.from_address is None
    assert request.to == H160.from_low_u64_be(5)
    assert request.gas == 21_000
    assert request.gas_price is None
    assert request.value == 5_000_000
    assert request.data == bytes.fromhex("010203")


def test_should_serialize_transaction_request():
    assert json.dumps(_tx_request().to_json(), indent=2) == TX_JSON


def test_should_deserialize_transaction_request():
    request = TransactionRequest.from_json(json.loads(TX_JSON))
    assert request.from_address == H160.from_low_u64_be(5)
    assert request.to is None
    assert request.gas == 21_000
    assert request.gas_price is None
    assert request.value == 5_000_000
    assert request.data == bytes.fromhex("010203")
    assert request.nonce is None
    assert request.condition == TransactionCondition(block=5)


def test_should_build_default_call_request():
    assert CallRequestBuilder().build() == CallRequest()
    assert CallRequest.builder().build() == CallRequest()


def test_should_build_call_request():
    built = (
        CallRequestBuilder()
        .to(H160.from_low_u64_be(5))
        .gas(21_000)
        .value(5_000_000)
        .data(bytes.fromhex("010203"))
        .build()
    )
    assert built == _call_request()


def test_should_build_default_transaction_request():
    assert TransactionRequestBuilder().build() == TransactionRequest()
    assert TransactionRequest.builder().build() == TransactionRequest()


def test_should_build_transaction_request():
    builder = (
        TransactionRequestBuilder()
        .from_address(H160.from_low_u64_be(5))
        .gas(21_000)
        .value(5_000_000)
        .data(bytes.fromhex("010203"))
        .condition(TransactionCondition(block=5))
    )
    assert builder.build() == _tx_request()


def test_builder_steps_leave_earlier_builder_unchanged():
    base = CallRequestBuilder()
    base.gas(1)
    assert base.build().gas is None


def test_transaction_request_requires_from():
    with pytest.raises(ValueError, match="missing field `from`"):
        TransactionRequest.from_json({"gas": "0x1"})


def test_call_request_access_list_round_trip():
    item = AccessListItem(address=H160.from_low_u64_be(7), storage_keys=[H256.from_low_u64_be(1)])
    request = CallRequestBuilder().access_list([item]).transaction_type(1).build()
    encoded = request.to_json()
    assert encoded["type"] == "0x1"
    assert encoded["accessList"][0]["address"] == "0x" + "00" * 19 + "07"
    assert CallRequest.from_json(encoded) == request


def test_condition_time_round_trip():
    condition = TransactionCondition.from_json({"time": 1234})
    assert condition.timestamp == 1234
    assert condition.to_json() == {"time": 1234}


@pytest.mark.parametrize(
    "data",
    [{"height": 5}, {"block": 1, "time": 2}, {}, {"block": -1}, {"block": "5"}],
)
def test_condition_rejects_invalid(data):
    with pytest.raises(ValueError):
        TransactionCondition.from_json(data)


def test_condition_needs_exactly_one_value():
    with pytest.raises(ValueError):
        TransactionCondition(block=1, timestamp=2)