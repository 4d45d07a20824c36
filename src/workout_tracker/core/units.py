"""
Mass unit conversion.

Conversions use the fixed factor 1 kg = 2.205 lbs and round half up to one
decimal place, so kg_to_lbs(10) == 22.1 and lbs_to_kg(22.1) == 10.0.
Decimal arithmetic keeps the half-up rounding exact for inputs such as
10 * 2.205 = 22.05 that binary floats cannot represent.
"""

from decimal import ROUND_HALF_UP, Decimal

from .config import KG_TO_LBS_FACTOR, WEIGHT_DECIMALS
from .models import Unit

_FACTOR = Decimal(str(KG_TO_LBS_FACTOR))
_QUANTUM = Decimal(1).scaleb(-WEIGHT_DECIMALS)


def _round_half_up(value: Decimal) -> float:
    return float(value.quantize(_QUANTUM, rounding=ROUND_HALF_UP))


def kg_to_lbs(kg: float) -> float:
    """
    Convert kilograms to pounds.

    Args:
        kg: Mass in kilograms

    Returns:
        Mass in pounds, rounded half up to one decimal
    """
    return _round_half_up(Decimal(str(kg)) * _FACTOR)


def lbs_to_kg(lbs: float) -> float:
    """
    Convert pounds to kilograms.

    Args:
        lbs: Mass in pounds

    Returns:
        Mass in kilograms, rounded half up to one decimal
    """
    return _round_half_up(Decimal(str(lbs)) / _FACTOR)


def to_kg(value: float, from_unit: Unit) -> float:
    """Convert a weight entered in *from_unit* to kilograms (no-op for kg)."""
    if from_unit == "lbs":
        return lbs_to_kg(value)
    return value


def from_kg(weight_kg: float, to_unit: Unit) -> float:
    """Convert a kilogram weight for display in *to_unit* (no-op for kg)."""
    if to_unit == "lbs":
        return kg_to_lbs(weight_kg)
    return weight_kg


def format_number(value: float) -> str:
    """Render a weight without a trailing '.0' (60.0 -> '60', 22.1 -> '22.1')."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)
