import pytest

from hmy_sdk.errors import OutOfGas
from hmy_sdk.tx.build import (MAX_UINT64, TX_GAS, TX_GAS_CONTRACT_CREATION,
                              intrinsic_gas, intrinsic_gas_for_counts)


@pytest.mark.parametrize(
    "contract_creation,homestead,base",
    [
        (False, False, TX_GAS),
        (False, True, TX_GAS),
        (True, False, TX_GAS),
        (True, True, TX_GAS_CONTRACT_CREATION),
    ],
)
def test_empty_payload_costs_base(contract_creation, homestead, base):
    assert intrinsic_gas(b"", contract_creation, homestead) == base


def test_non_zero_and_zero_bytes_are_priced_differently():
    data = b"\x00\x01\x00\xff\x7f"
    assert intrinsic_gas(data) == 21000 + 3 * 68 + 2 * 4


def test_text_payload_is_utf8_encoded():
    assert intrinsic_gas("hi") == 21000 + 2 * 68
    # two UTF-8 bytes, both non-zero
    assert intrinsic_gas("é") == 21000 + 2 * 68


def test_gas_is_monotonic_in_payload_length():
    payload = bytes([0, 1, 2, 0, 0, 9, 255, 0])
    costs = [intrinsic_gas(payload[:n]) for n in range(len(payload) + 1)]
    assert costs == sorted(costs)


def test_non_zero_overflow_raises_before_adding():
    too_many = (MAX_UINT64 - TX_GAS) // 68 + 1
    with pytest.raises(OutOfGas) as exc:
        intrinsic_gas_for_counts(too_many, 0)
    assert exc.value.gas == TX_GAS
    assert exc.value.per_byte == 68


def test_zero_byte_overflow_checked_after_non_zero_contribution():
    non_zero = 10
    gas_after_non_zero = TX_GAS + non_zero * 68
    too_many = (MAX_UINT64 - gas_after_non_zero) // 4 + 1
    with pytest.raises(OutOfGas) as exc:
        intrinsic_gas_for_counts(non_zero, too_many)
    assert exc.value.gas == gas_after_non_zero
    assert exc.value.per_byte == 4


def test_largest_fitting_payload_is_accepted():
    fits = (MAX_UINT64 - TX_GAS) // 68
    assert intrinsic_gas_for_counts(fits, 0) == TX_GAS + fits * 68
    assert intrinsic_gas_for_counts(fits, 0) <= MAX_UINT64
