"""
Units module.

Length and speed units, tagged quantities and unit converters used at the
export boundary.
"""

from path_export.units.quantity import (
    Quantity,
    UnitConverter,
    UnitMismatchError,
    UnitOfLength,
    UnitOfSpeed,
    format_number,
    round_to,
)

__all__ = [
    "Quantity",
    "UnitConverter",
    "UnitMismatchError",
    "UnitOfLength",
    "UnitOfSpeed",
    "format_number",
    "round_to",
]
