"""
Unit conversion for recipe quantities and temperatures.
Covers the volume, weight and temperature pairs recipes most often need.
"""
from typing import Callable, Dict, Tuple

from recipekit.errors import UnsupportedConversionError


# Volume and weight factors relative to the metric unit
ML_PER_CUP = 236.588
G_PER_OZ = 28.34952

CONVERSIONS: Dict[Tuple[str, str], Callable[[float], float]] = {
    # Volume
    ('ml', 'cups'): lambda ml: ml / ML_PER_CUP,
    ('cups', 'ml'): lambda cups: cups * ML_PER_CUP,
    # Weight
    ('g', 'oz'): lambda g: g / G_PER_OZ,
    ('oz', 'g'): lambda oz: oz * G_PER_OZ,
    # Temperature
    ('c', 'f'): lambda c: (c * 9) / 5 + 32,
    ('f', 'c'): lambda f: ((f - 32) * 5) / 9,
}


def can_convert(from_unit: str, to_unit: str) -> bool:
    """Check whether a conversion between two units exists."""
    return (from_unit.strip().lower(), to_unit.strip().lower()) in CONVERSIONS


def convert(value: float, from_unit: str, to_unit: str) -> float:
    """
    Convert a value from one unit to another.

    Examples:
        convert(1, "cups", "ml") -> 236.588
        convert(100, "C", "F") -> 212.0

    Args:
        value: Numeric amount
        from_unit: Unit to convert from (case-insensitive)
        to_unit: Unit to convert to (case-insensitive)

    Returns:
        The converted value

    Raises:
        UnsupportedConversionError: If the unit pair is not supported
    """
    conversion = CONVERSIONS.get((from_unit.strip().lower(), to_unit.strip().lower()))
    if conversion is None:
        raise UnsupportedConversionError(from_unit, to_unit)
    return conversion(value)
