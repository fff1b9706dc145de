"""Display-unit ↔ internal-unit conversion.

Documents store measurable values in internal (SI base) units; parameters
declare the unit their values are displayed and entered in.
"""

from __future__ import annotations

from foundry.core.errors import ValidationError

# display unit id -> (factor to internal, display symbol)
UNIT_FACTORS: dict[str, tuple[float, str]] = {
    # length
    "meters": (1.0, "m"),
    "millimeters": (0.001, "mm"),
    "centimeters": (0.01, "cm"),
    "feet": (0.3048, "ft"),
    "inches": (0.0254, "in"),
    # electrical potential
    "volts": (1.0, "V"),
    "kilovolts": (1000.0, "kV"),
    # electrical current
    "amperes": (1.0, "A"),
    "milliamperes": (0.001, "mA"),
    # power
    "watts": (1.0, "W"),
    "kilowatts": (1000.0, "kW"),
    "volt_amperes": (1.0, "VA"),
    "kilovolt_amperes": (1000.0, "kVA"),
}


def _factor(unit: str) -> float:
    try:
        return UNIT_FACTORS[unit][0]
    except KeyError:
        raise ValidationError(f"Unknown unit '{unit}'", field="unit", value=unit) from None


def to_internal(value: float, unit: str | None) -> float:
    """Convert a value entered in ``unit`` to internal units."""
    if unit is None:
        return float(value)
    return float(value) * _factor(unit)


def from_internal(value: float, unit: str | None) -> float:
    """Convert an internal value to ``unit`` for display."""
    if unit is None:
        return float(value)
    return float(value) / _factor(unit)


def format_value(value: float, unit: str | None) -> str:
    """Display string for an internal value, e.g. ``"2.500 m"``."""
    display = from_internal(value, unit)
    if unit is None:
        return f"{display:.3f}"
    return f"{display:.3f} {UNIT_FACTORS[unit][1]}"
