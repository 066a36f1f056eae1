"""Units of length and speed, tagged quantities, and unit converters.

Lengths are stored internally in the editor's unit of length (``uol``,
centimetres by default).  Export converts them at the format boundary::

    uc = UnitConverter(UnitOfLength.CENTIMETER, UnitOfLength.METER)
    uc.from_a_to_b(123.4).to_user()   # -> 1.234

``to_user()`` rounds to the display precision of the unit.  The rounded
value is what every exported number is derived from, so identical input
always renders identical text.

Speeds carry their own unit but are never converted by the encoder; the
configured speed unit is already the user representation.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Union


class UnitMismatchError(Exception):
    """Raised when two quantities with different units are combined."""

    pass


# ---------------------------------------------------------------------------
# Units
# ---------------------------------------------------------------------------


class UnitOfLength(Enum):
    """Unit of length.

    Each member's value is ``(symbol, size_in_mm, user_precision)``.
    """

    MILLIMETER = ("mm", 1.0, 2)
    CENTIMETER = ("cm", 10.0, 3)
    METER = ("m", 1000.0, 5)
    INCH = ("in", 25.4, 3)
    FOOT = ("ft", 304.8, 5)

    def __init__(self, symbol: str, size_mm: float, precision: int) -> None:
        self.symbol = symbol
        self.size_mm = size_mm
        self.precision = precision

    @classmethod
    def from_symbol(cls, symbol: str) -> UnitOfLength:
        for unit in cls:
            if unit.symbol == symbol:
                return unit
        raise ValueError(
            f"Unknown unit of length {symbol!r}. "
            f"Available: {[u.symbol for u in cls]}"
        )


class UnitOfSpeed(Enum):
    """Unit of speed, ``(symbol, user_precision)``."""

    METER_PER_SECOND = ("m/s", 3)
    CENTIMETER_PER_SECOND = ("cm/s", 3)
    INCH_PER_SECOND = ("in/s", 3)
    RPM = ("rpm", 3)

    def __init__(self, symbol: str, precision: int) -> None:
        self.symbol = symbol
        self.precision = precision

    @classmethod
    def from_symbol(cls, symbol: str) -> UnitOfSpeed:
        for unit in cls:
            if unit.symbol == symbol:
                return unit
        raise ValueError(
            f"Unknown unit of speed {symbol!r}. "
            f"Available: {[u.symbol for u in cls]}"
        )


Unit = Union[UnitOfLength, UnitOfSpeed]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def round_to(value: float, precision: int) -> float:
    """Round *value* to *precision* decimals, folding ``-0.0`` into ``0.0``."""
    return round(value, precision) + 0.0


def format_number(value: float, precision: int = 12) -> str:
    """Render a number the way the exported text expects it.

    Plain fixed-point at *precision* decimals with trailing zeros removed:
    ``5`` not ``5.0``, ``0.00005`` not ``5e-05``.
    """
    if not math.isfinite(value):
        raise ValueError(f"Cannot format non-finite number {value!r}")
    text = f"{float(value) + 0.0:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


# ---------------------------------------------------------------------------
# Quantity
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Quantity:
    """A number tagged with its unit.

    Parameters
    ----------
    value : float
        Magnitude expressed in ``unit``.
    unit : UnitOfLength | UnitOfSpeed
        Unit of ``value``.
    """

    value: float
    unit: Unit

    def to(self, unit: UnitOfLength) -> float:
        """Return the raw value converted to another unit of length."""
        if not isinstance(self.unit, UnitOfLength) or not isinstance(
            unit, UnitOfLength
        ):
            raise UnitMismatchError(
                f"Cannot convert {self.unit.symbol} to {unit.symbol}"
            )
        return UnitConverter(self.unit, unit).convert(self.value)

    def to_user(self) -> float:
        """Return the value rounded to the unit's display precision."""
        return round_to(self.value, self.unit.precision)

    def to_user_string(self) -> str:
        return format_number(self.to_user(), self.unit.precision)

    def _check(self, other: Quantity) -> None:
        if not isinstance(other, Quantity):
            raise TypeError(
                f"Expected Quantity, got {type(other).__name__}"
            )
        if other.unit is not self.unit:
            raise UnitMismatchError(
                f"Unit mismatch: {self.unit.symbol} vs {other.unit.symbol}"
            )

    def __add__(self, other: Quantity) -> Quantity:
        self._check(other)
        return Quantity(self.value + other.value, self.unit)

    def __sub__(self, other: Quantity) -> Quantity:
        self._check(other)
        return Quantity(self.value - other.value, self.unit)

    def __mul__(self, factor: float) -> Quantity:
        return Quantity(self.value * factor, self.unit)

    __rmul__ = __mul__

    def __truediv__(self, divisor: float) -> Quantity:
        return Quantity(self.value / divisor, self.unit)

    def __str__(self) -> str:
        return f"{self.to_user_string()} {self.unit.symbol}"


# ---------------------------------------------------------------------------
# Converter
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class UnitConverter:
    """Stateless length converter for one ``(from_unit, to_unit)`` pair.

    Parameters
    ----------
    from_unit : UnitOfLength
        Unit "A", usually the editor's unit of length.
    to_unit : UnitOfLength
        Unit "B", the unit required by the output format.
    """

    from_unit: UnitOfLength
    to_unit: UnitOfLength

    def convert(self, value: float) -> float:
        return value * self.from_unit.size_mm / self.to_unit.size_mm

    def from_a_to_b(self, value: float) -> Quantity:
        """Convert a raw value in ``from_unit`` to a ``to_unit`` quantity."""
        return Quantity(self.convert(value), self.to_unit)

    def from_b_to_a(self, value: float) -> Quantity:
        """Convert a raw value in ``to_unit`` back to ``from_unit``."""
        return Quantity(
            value * self.to_unit.size_mm / self.from_unit.size_mm,
            self.from_unit,
        )
