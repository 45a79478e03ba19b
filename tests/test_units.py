"""Tests for exact amount conversion."""

from decimal import Decimal

import pytest

from sendether import ETHER_BASE, GWEI_BASE, InvalidAmountError, to_smallest_unit
from sendether.units import MAX_UINT256


class TestToSmallestUnit:
    """Amounts scale by 10**base with no precision loss."""

    def test_base_defaults_to_wei(self):
        assert to_smallest_unit(500) == 500

    def test_one_ether(self):
        assert to_smallest_unit(1, ETHER_BASE) == 10**18

    def test_one_gwei(self):
        assert to_smallest_unit("1", GWEI_BASE) == 10**9

    def test_fractional_ether(self):
        assert to_smallest_unit("0.5", 18) == 5 * 10**17

    def test_large_value_is_exact(self):
        amount = "123456789012345678901234567890.123456789012345678"
        assert to_smallest_unit(amount, 18) == 123456789012345678901234567890123456789012345678

    def test_scientific_notation(self):
        assert to_smallest_unit("1e18") == 10**18
        assert to_smallest_unit("2.5E3", 0) == 2500

    def test_decimal_input(self):
        assert to_smallest_unit(Decimal("0.000000001"), 18) == 10**9

    def test_float_goes_through_repr(self):
        assert to_smallest_unit(0.1, 18) == 10**17

    def test_trailing_zeros_are_integral(self):
        assert to_smallest_unit("10.000", 0) == 10

    def test_zero(self):
        assert to_smallest_unit(0) == 0
        assert to_smallest_unit("-0", 18) == 0

    def test_whitespace_and_underscores(self):
        assert to_smallest_unit(" 1_000 ") == 1000


class TestInvalidAmounts:
    """Bad amounts fail with InvalidAmountError."""

    def test_negative(self):
        with pytest.raises(InvalidAmountError, match=">= 0"):
            to_smallest_unit(-1)

    def test_largest_uint256(self):
        assert to_smallest_unit(str(MAX_UINT256)) == MAX_UINT256

    def test_above_uint256(self):
        with pytest.raises(InvalidAmountError, match="exceeds"):
            to_smallest_unit(MAX_UINT256 + 1)

    def test_huge_exponent_rejected_without_expanding(self):
        with pytest.raises(InvalidAmountError, match="exceeds"):
            to_smallest_unit("1e999999999")
        with pytest.raises(InvalidAmountError, match="exceeds"):
            to_smallest_unit(1, 10**9)

    def test_tiny_exponent_rejected_without_expanding(self):
        with pytest.raises(InvalidAmountError, match="whole number"):
            to_smallest_unit("1e-999999999", 18)

    def test_non_integral_wei(self):
        with pytest.raises(InvalidAmountError, match="whole number of wei"):
            to_smallest_unit("1.5")

    def test_too_many_decimals_for_base(self):
        with pytest.raises(InvalidAmountError):
            to_smallest_unit("0.0000000000000000001", 18)

    def test_non_numeric_string(self):
        with pytest.raises(InvalidAmountError, match="not a decimal"):
            to_smallest_unit("ten")

    def test_nan_and_infinity(self):
        for value in ("NaN", "Infinity", float("inf")):
            with pytest.raises(InvalidAmountError):
                to_smallest_unit(value)

    def test_bool_rejected(self):
        with pytest.raises(InvalidAmountError):
            to_smallest_unit(True)

    def test_unsupported_type(self):
        with pytest.raises(InvalidAmountError):
            to_smallest_unit([1])

    def test_negative_base(self):
        with pytest.raises(InvalidAmountError) as excinfo:
            to_smallest_unit(1, -1)
        assert excinfo.value.field == "base"

    def test_non_int_base(self):
        with pytest.raises(InvalidAmountError):
            to_smallest_unit(1, 1.5)

    def test_error_stage(self):
        with pytest.raises(InvalidAmountError) as excinfo:
            to_smallest_unit(-5)
        assert excinfo.value.stage == "amount"
        assert excinfo.value.field == "amount"
