"""Fixed-precision number formatting."""

from __future__ import annotations

import math

from airveil.utils import units
from airveil.utils.constants import MAX_OUTPUT_PRECISION


def clamp_precision(precision: int) -> int:
    """Clamp a requested number of decimal places to [0, 15]."""
    return max(0, min(MAX_OUTPUT_PRECISION, int(precision)))


def fm_precision(value: float, precision: int) -> str:
    """Format ``value`` with exactly ``precision`` decimal places.

    Negative zero is printed without its sign and NaN is printed as ``NaN``.
    """
    if math.isnan(value):
        return "NaN"
    text = f"{value:.{clamp_precision(precision)}f}"
    if text.startswith("-") and float(text) == 0.0:
        text = text[1:]
    return text


def fm_units(unit: str, value: float, precision: int) -> str:
    """Format an internal-unit value converted to ``unit``, e.g. ``0.6600 [nmi]``."""
    name = units.clean(unit)
    return f"{fm_precision(units.to_unit(name, value), precision)} [{name}]"
