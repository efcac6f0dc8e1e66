"""Unit conversion between named units and internal SI units.

Internal units are meters, radians, seconds and meters per second. Every
public operation that accepts a unit name goes through this module, so an
unknown or misspelled unit fails loudly here instead of being silently
misinterpreted downstream.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from scipy import constants as sc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unit:
    """A named unit.

    Attributes:
        name: Canonical unit name.
        factor: Multiplier converting a value in this unit to internal units.
        dimension: Physical dimension (``length``, ``angle``, ``time``,
            ``speed`` or ``unitless``).
    """

    name: str
    factor: float
    dimension: str


_UNITS: dict[str, Unit] = {}


def _register(dimension: str, factor: float, *names: str) -> None:
    for name in names:
        _UNITS[name] = Unit(name=names[0], factor=factor, dimension=dimension)


_register("length", 1.0, "m", "meter", "meters")
_register("length", sc.kilo, "km", "kilometer", "kilometers")
_register("length", sc.foot, "ft", "foot", "feet")
_register("length", sc.nautical_mile, "nmi", "NM", "nm")
_register("length", sc.mile, "mi", "mile", "miles")
_register("angle", 1.0, "rad", "radian", "radians")
_register("angle", sc.degree, "deg", "degree", "degrees")
_register("time", 1.0, "s", "sec", "second", "seconds")
_register("time", sc.minute, "min", "minute", "minutes")
_register("time", sc.hour, "h", "hr", "hour", "hours")
_register("speed", 1.0, "m/s", "mps")
_register("speed", sc.knot, "knot", "kn", "kts", "knots")
_register("speed", sc.foot / sc.minute, "fpm", "ft/min")
_register("speed", sc.kilo / sc.hour, "kph", "km/h")
_register("unitless", 1.0, "unitless", "unspecified")


def clean(name: str) -> str:
    """Strip whitespace and surrounding brackets from a unit token, e.g. ``[nmi]`` -> ``nmi``."""
    return name.strip().strip("[]").strip()


def is_unit(name: str) -> bool:
    """Return True if ``name`` (after cleaning) is a recognized unit."""
    return clean(name) in _UNITS


def get_unit(name: str) -> Unit:
    """Look up a unit by name.

    Args:
        name: Unit name, optionally wrapped in brackets.

    Returns:
        The matching Unit.

    Raises:
        ValueError: If the unit is not recognized.
    """
    key = clean(name)
    try:
        return _UNITS[key]
    except KeyError:
        logger.error("Unknown unit: %r", name)
        raise ValueError(f"Unknown unit: {name!r}") from None


def dimension(name: str) -> str:
    """Return the physical dimension of a unit."""
    return get_unit(name).dimension


def is_compatible(name1: str, name2: str) -> bool:
    """Return True if both names are known units of the same dimension."""
    if not (is_unit(name1) and is_unit(name2)):
        return False
    return dimension(name1) == dimension(name2)


def from_unit(name: str, value: float) -> float:
    """Convert ``value`` expressed in unit ``name`` to internal units."""
    return value * get_unit(name).factor


def to_unit(name: str, value: float) -> float:
    """Convert ``value`` in internal units to unit ``name``."""
    return value / get_unit(name).factor


def to_180(deg: float) -> float:
    """Normalize an angle in degrees to [-180, 180)."""
    return ((deg + 180.0) % 360.0) - 180.0


def to_pi(rad: float) -> float:
    """Normalize an angle in radians to [-pi, pi)."""
    return ((rad + math.pi) % (2.0 * math.pi)) - math.pi


def to_2pi(rad: float) -> float:
    """Normalize an angle in radians to [0, 2pi)."""
    result = rad % (2.0 * math.pi)
    # float modulo can round up to exactly 2pi for tiny negative inputs
    return 0.0 if result >= 2.0 * math.pi else result
