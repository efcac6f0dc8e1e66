"""Generic key/value parameter store with units.

Values are held in internal units together with the unit they are preferably
displayed in. The text form is one ``KEY = value [unit]`` entry per line,
the same key-value notation used by conjunction data messages; blank lines
and ``COMMENT`` lines are ignored.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from airveil.utils import units
from airveil.utils.constants import DEFAULT_OUTPUT_PRECISION
from airveil.utils.formatting import fm_precision

logger = logging.getLogger(__name__)

_UNIT_SUFFIX = re.compile(r"^(?P<value>.*?)\s*\[(?P<unit>[^\]]*)\]\s*$")


@dataclass
class ParameterEntry:
    """A single stored parameter.

    Attributes:
        value: Value in internal units.
        unit: Preferred display unit.
    """

    value: float
    unit: str = "unitless"


class ParameterData:
    """Case-insensitive mapping of parameter names to values with units."""

    def __init__(self) -> None:
        self._entries: dict[str, ParameterEntry] = {}
        self._names: dict[str, str] = {}

    def __repr__(self) -> str:
        return f"ParameterData({self.keys()!r})"

    @staticmethod
    def _key(name: str) -> str:
        return name.strip().upper()

    def set_internal(self, name: str, value: float, unit: str = "unitless") -> None:
        """Store ``value`` already in internal units, displayed in ``unit``.

        Raises:
            ValueError: If ``unit`` is not recognized.
        """
        unit = units.get_unit(unit).name
        key = self._key(name)
        self._entries[key] = ParameterEntry(value=value, unit=unit)
        self._names.setdefault(key, name.strip())

    def set_value(self, name: str, value: float, unit: str = "unitless") -> None:
        """Store ``value`` expressed in ``unit``.

        Raises:
            ValueError: If ``unit`` is not recognized.
        """
        self.set_internal(name, units.from_unit(unit, value), unit)

    def contains(self, name: str) -> bool:
        return self._key(name) in self._entries

    def __contains__(self, name: str) -> bool:
        return self.contains(name)

    def __len__(self) -> int:
        return len(self._entries)

    def keys(self) -> list[str]:
        """Parameter names in insertion order, as first written."""
        return [self._names[k] for k in self._entries]

    def get_value(self, name: str, unit: str | None = None) -> float:
        """Return a value in internal units, or converted to ``unit`` if given.

        Raises:
            KeyError: If the parameter is not present.
            ValueError: If ``unit`` is not recognized.
        """
        try:
            entry = self._entries[self._key(name)]
        except KeyError:
            logger.error("Unknown parameter: %r", name)
            raise KeyError(name) from None
        if unit is None:
            return entry.value
        return units.to_unit(unit, entry.value)

    def get_unit(self, name: str) -> str:
        """Return the display unit of a parameter.

        Raises:
            KeyError: If the parameter is not present.
        """
        return self._entries[self._key(name)].unit

    def copy_from(self, other: ParameterData) -> None:
        """Add or overwrite every entry of ``other``."""
        for key, entry in other._entries.items():
            self._entries[key] = ParameterEntry(entry.value, entry.unit)
            self._names.setdefault(key, other._names[key])

    @classmethod
    def from_kvn(cls, text: str) -> ParameterData:
        """Parse ``KEY = value [unit]`` lines.

        Args:
            text: Parameter text, one entry per line.

        Returns:
            A populated ParameterData.

        Raises:
            ValueError: If a line is malformed or names an unknown unit.
        """
        data = cls()
        for line in text.strip().splitlines():
            line = line.strip()
            if not line or line.startswith("COMMENT"):
                continue
            if "=" not in line:
                logger.error("Malformed parameter line: %r", line)
                raise ValueError(f"Malformed parameter line: {line!r}")

            key, _, raw = line.partition("=")
            raw = raw.strip()
            unit = "unitless"
            match = _UNIT_SUFFIX.match(raw)
            if match:
                raw = match.group("value")
                unit = match.group("unit")
            try:
                value = float(raw)
            except ValueError:
                logger.error("Invalid value for parameter %s: %r", key.strip(), raw)
                raise ValueError(f"Invalid value for parameter {key.strip()}: {raw!r}") from None
            data.set_value(key, value, unit)

        logger.debug("Parsed %d parameters", len(data))
        return data

    def to_kvn(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> str:
        """Export as ``KEY = value [unit]`` lines, values in their display units."""
        lines = []
        for key, entry in self._entries.items():
            text = fm_precision(units.to_unit(entry.unit, entry.value), precision)
            lines.append(f"{self._names[key]} = {text} [{entry.unit}]")
        return "\n".join(lines)
