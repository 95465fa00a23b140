"""
Tests for raw/decimal unit conversion
"""

import pytest

from buywatch.pricing.units import one_unit, to_decimal_units, to_raw_units


@pytest.mark.parametrize("raw, decimals, expected", [
    (1_500_000, 6, 1.5),
    (1_000_000_000_000, 9, 1000.0),
    (500_000_000_000_000_000_000, 18, 500.0),
    (0, 18, 0.0),
    (7, 0, 7.0),
])
def test_to_decimal_units(raw, decimals, expected):
    assert to_decimal_units(raw, decimals) == expected


@pytest.mark.parametrize("raw, decimals", [
    (123_456_789, 6),
    (987_654_321_000, 9),
    (42 * 10 ** 18, 18),
    (1, 6),
])
def test_round_trip_recovers_raw_amount(raw, decimals):
    assert to_raw_units(to_decimal_units(raw, decimals), decimals) == pytest.approx(raw, rel=1e-12)


def test_one_unit_is_exact_integer():
    assert one_unit(9) == 1_000_000_000
    assert one_unit(18) == 10 ** 18
