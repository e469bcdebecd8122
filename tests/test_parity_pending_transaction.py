import pytest

from web3types.parity_pending_transaction import (
    FilterCondition,
    FilterOp,
    ParityPendingTransactionFilter,
    ParityPendingTransactionFilterBuilder,
    ToFilter,
)
from web3types.primitives import H160, U64, U256


def test_empty_filter_serializes_to_empty_object():
    assert ParityPendingTransactionFilter.builder().build().to_json() == {}


def test_builder_starts_from_default_filter():
    built = ParityPendingTransactionFilter.builder().build()
    assert built == ParityPendingTransactionFilter()
    assert ParityPendingTransactionFilterBuilder().build() == built


def test_from_address_is_equality():
    address = H160.from_low_u64_be(5)
    built = ParityPendingTransactionFilter.builder().from_address(address).build()
    assert built.to_json() == {"from": {"eq": address.to_json()}}


def test_to_address_and_action():
    address = H160.from_low_u64_be(9)
    by_address = ParityPendingTransactionFilter.builder().to(ToFilter.address(address)).build()
    assert by_address.to_json() == {"to": {"eq": address.to_json()}}
    by_action = ParityPendingTransactionFilter.builder().to(ToFilter.action()).build()
    assert by_action.to_json() == {"to": {"action": "contract_creation"}}
    assert ToFilter.action().is_action
    assert not ToFilter.address(address).is_action


def test_bare_values_become_equal_conditions():
    built = (
        ParityPendingTransactionFilter.builder()
        .gas(21)
        .gas_price(3)
        .value(1000)
        .nonce(7)
        .build()
    )
    assert built.gas == FilterCondition(FilterOp.EQUAL, U64(21))
    assert built.value == FilterCondition(FilterOp.EQUAL, U256(1000))
    assert built.to_json() == {
        "gas": {"eq": U64(21).to_json()},
        "gas_price": {"eq": U64(3).to_json()},
        "value": {"eq": U256(1000).to_json()},
        "nonce": {"eq": U256(7).to_json()},
    }


def test_explicit_conditions_keep_their_operator():
    built = (
        ParityPendingTransactionFilter.builder()
        .gas(FilterCondition(FilterOp.GREATER_THAN, 5))
        .value(FilterCondition(FilterOp.LOWER_THAN, 100))
        .build()
    )
    assert built.to_json() == {
        "gas": {"gt": U64(5).to_json()},
        "value": {"lt": U256(100).to_json()},
    }


def test_operator_accepts_wire_names():
    condition = FilterCondition("lt", U64(1))
    assert condition.op is FilterOp.LOWER_THAN
    assert condition.to_json() == {"lt": U64(1).to_json()}


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        FilterCondition("ne", U64(1))


def test_builder_steps_do_not_change_earlier_builders():
    base = ParityPendingTransactionFilter.builder()
    with_gas = base.gas(10)
    assert base.build().gas is None
    assert with_gas.build().gas == FilterCondition(FilterOp.EQUAL, U64(10))


def test_gas_must_fit_u64():
    with pytest.raises(OverflowError):
        ParityPendingTransactionFilter.builder().gas(1 << 64)


def test_negative_value_is_rejected():
    with pytest.raises(OverflowError):
        ParityPendingTransactionFilter.builder().value(-1)