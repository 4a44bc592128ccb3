from decimal import Decimal

import pytest

from hmy_sdk.utils.bytes import from_hex, quantity_to_int, to_hex
from hmy_sdk.utils.units import NANO, ONE, from_base_units, to_base_units, to_nano_units


def test_denominations():
    assert NANO == 10**9
    assert ONE == 10**18


@pytest.mark.parametrize(
    "amount,expected",
    [
        ("1", ONE),
        ("0.5", ONE // 2),
        ("0.000000000000000001", 1),
        ("123456789.123456789123456789", 123456789123456789123456789),
        (3, 3 * ONE),
        (Decimal("2.25"), 2 * ONE + ONE // 4),
    ],
)
def test_to_base_units_is_exact(amount, expected):
    assert to_base_units(amount) == expected


def test_sub_unit_precision_is_truncated():
    assert to_base_units("0.0000000000000000019") == 1


def test_floats_are_refused():
    with pytest.raises(TypeError):
        to_base_units(0.1)


def test_garbage_amount():
    with pytest.raises(ValueError):
        to_base_units("one")


def test_gas_price_is_quoted_in_nano():
    assert to_nano_units(1) == NANO
    assert to_nano_units("2.5") == 2_500_000_000


def test_display_string():
    assert from_base_units(ONE + ONE // 2) == "1.5"
    assert from_base_units(0) == "0"


def test_quantities():
    assert quantity_to_int("0x0") == 0
    assert quantity_to_int("0xde0b6b3a7640000") == ONE
    assert quantity_to_int("0x") == 0
    assert quantity_to_int(7) == 7
    with pytest.raises(TypeError):
        quantity_to_int(None)


def test_hex_helpers():
    assert to_hex(b"\x01\xff") == "0x01ff"
    assert from_hex("0x01ff") == b"\x01\xff"
    with pytest.raises(ValueError):
        from_hex("0x123")
