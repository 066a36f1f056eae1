"""Tests for units, quantities and unit converters.

Covers display rounding (including negative zero), number rendering,
same-unit arithmetic and length conversion in both directions.
"""

from __future__ import annotations

import math

import pytest

from path_export.units import (
    Quantity,
    UnitConverter,
    UnitMismatchError,
    UnitOfLength,
    UnitOfSpeed,
    format_number,
    round_to,
)


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class TestUnits:
    def test_length_from_symbol(self) -> None:
        assert UnitOfLength.from_symbol("cm") is UnitOfLength.CENTIMETER
        assert UnitOfLength.from_symbol("in") is UnitOfLength.INCH

    def test_speed_from_symbol(self) -> None:
        assert UnitOfSpeed.from_symbol("rpm") is UnitOfSpeed.RPM

    def test_unknown_symbol_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unknown unit of length"):
            UnitOfLength.from_symbol("furlong")
        with pytest.raises(ValueError, match="Unknown unit of speed"):
            UnitOfSpeed.from_symbol("knots")

    def test_precision_per_unit(self) -> None:
        assert UnitOfLength.METER.precision == 5
        assert UnitOfLength.INCH.precision == 3
        assert UnitOfSpeed.RPM.precision == 3


# ---------------------------------------------------------------------------
# Rounding / formatting
# ---------------------------------------------------------------------------


class TestFormatting:
    def test_round_to_folds_negative_zero(self) -> None:
        value = round_to(-0.000001, 5)
        assert value == 0.0
        assert math.copysign(1.0, value) == 1.0

    def test_integral_values_have_no_decimal_point(self) -> None:
        assert format_number(5.0) == "5"
        assert format_number(100) == "100"
        assert format_number(-3.0) == "-3"

    def test_fractional_values_use_repr(self) -> None:
        assert format_number(1.5) == "1.5"
        assert format_number(0.125) == "0.125"

    def test_negative_zero_renders_as_zero(self) -> None:
        assert format_number(-0.0) == "0"
        assert format_number(-0.000001, 5) == "0"

    def test_small_values_stay_fixed_point(self) -> None:
        assert format_number(0.00005, 5) == "0.00005"
        assert format_number(-0.00012, 5) == "-0.00012"
        assert "e" not in format_number(1e-7)

    def test_precision_limits_decimals(self) -> None:
        assert format_number(1.23456, 3) == "1.235"
        assert format_number(2.5, 0) == "2"
        assert format_number(120.0, 0) == "120"

    def test_user_string_of_tiny_meter_value(self) -> None:
        assert Quantity(0.00005, UnitOfLength.METER).to_user_string() == "0.00005"

    @pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
    def test_non_finite_rejected(self, value: float) -> None:
        with pytest.raises(ValueError, match="non-finite"):
            format_number(value)


# ---------------------------------------------------------------------------
# Quantity
# ---------------------------------------------------------------------------


class TestQuantity:
    def test_to_user_rounds_to_unit_precision(self) -> None:
        assert Quantity(1.23456, UnitOfLength.CENTIMETER).to_user() == 1.235
        assert Quantity(5.4000001, UnitOfSpeed.RPM).to_user() == 5.4

    def test_to_user_string(self) -> None:
        assert Quantity(2.0, UnitOfLength.METER).to_user_string() == "2"
        assert str(Quantity(2.5, UnitOfLength.METER)) == "2.5 m"

    def test_add_same_unit(self) -> None:
        total = Quantity(1.0, UnitOfLength.CENTIMETER) + Quantity(
            2.0, UnitOfLength.CENTIMETER,
        )
        assert total == Quantity(3.0, UnitOfLength.CENTIMETER)

    def test_sub_same_unit(self) -> None:
        diff = Quantity(5.0, UnitOfSpeed.RPM) - Quantity(2.0, UnitOfSpeed.RPM)
        assert diff == Quantity(3.0, UnitOfSpeed.RPM)

    def test_mixed_units_rejected(self) -> None:
        with pytest.raises(UnitMismatchError):
            Quantity(1.0, UnitOfLength.CENTIMETER) + Quantity(1.0, UnitOfLength.METER)

    def test_adding_plain_number_rejected(self) -> None:
        with pytest.raises(TypeError):
            Quantity(1.0, UnitOfLength.CENTIMETER) + 1.0  # type: ignore[operator]

    def test_scalar_multiply_and_divide(self) -> None:
        q = Quantity(3.0, UnitOfLength.INCH)
        assert q * 2 == Quantity(6.0, UnitOfLength.INCH)
        assert 2 * q == Quantity(6.0, UnitOfLength.INCH)
        assert q / 2 == Quantity(1.5, UnitOfLength.INCH)

    def test_to_other_length(self) -> None:
        assert Quantity(1.0, UnitOfLength.FOOT).to(UnitOfLength.INCH) == pytest.approx(12.0)

    def test_speed_cannot_convert_to_length(self) -> None:
        with pytest.raises(UnitMismatchError):
            Quantity(1.0, UnitOfSpeed.RPM).to(UnitOfLength.METER)

    def test_frozen(self) -> None:
        q = Quantity(1.0, UnitOfLength.METER)
        with pytest.raises(AttributeError):
            q.value = 2.0  # type: ignore[misc]


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


class TestUnitConverter:
    def test_cm_to_m(self) -> None:
        uc = UnitConverter(UnitOfLength.CENTIMETER, UnitOfLength.METER)
        q = uc.from_a_to_b(123.4)
        assert q.unit is UnitOfLength.METER
        assert q.to_user() == 1.234

    def test_cm_to_inch(self) -> None:
        uc = UnitConverter(UnitOfLength.CENTIMETER, UnitOfLength.INCH)
        assert uc.from_a_to_b(254.0).to_user() == 100.0

    def test_b_to_a(self) -> None:
        uc = UnitConverter(UnitOfLength.CENTIMETER, UnitOfLength.METER)
        back = uc.from_b_to_a(1.0)
        assert back.unit is UnitOfLength.CENTIMETER
        assert back.to_user() == 100.0

    def test_identity(self) -> None:
        uc = UnitConverter(UnitOfLength.MILLIMETER, UnitOfLength.MILLIMETER)
        assert uc.convert(7.25) == 7.25
