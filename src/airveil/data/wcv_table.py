"""Well-clear volume thresholds."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from airveil.data.parameters import ParameterData
from airveil.utils import units
from airveil.utils.constants import DEFAULT_OUTPUT_PRECISION
from airveil.utils.formatting import fm_units

logger = logging.getLogger(__name__)

# parameter name -> (attribute, display unit)
_FIELDS: dict[str, tuple[str, str]] = {
    "WCV_DTHR": ("dthr", "nmi"),
    "WCV_ZTHR": ("zthr", "ft"),
    "WCV_TTHR": ("tthr", "s"),
    "WCV_TCOA": ("tcoa", "s"),
}


def _get(value: float, unit: str | None) -> float:
    return value if unit is None else units.to_unit(unit, value)


def _set(value: float, unit: str | None) -> float:
    return value if unit is None else units.from_unit(unit, value)


@dataclass
class WCVTable:
    """Thresholds defining a well-clear volume.

    Attributes:
        dthr: Horizontal distance threshold in m.
        zthr: Vertical distance threshold in m.
        tthr: Horizontal time threshold in s.
        tcoa: Time to co-altitude threshold in s.

    All getters and setters take an optional unit name; without one they
    work in internal units.
    """

    dthr: float = units.from_unit("nmi", 0.66)
    zthr: float = units.from_unit("ft", 450.0)
    tthr: float = 35.0
    tcoa: float = 0.0

    @classmethod
    def nasa(cls) -> WCVTable:
        """Thresholds used by NASA's well-clear definition."""
        return cls()

    @classmethod
    def mitll(cls) -> WCVTable:
        """Thresholds used by MIT Lincoln Laboratory, adding a time to co-altitude."""
        return cls(tcoa=20.0)

    def copy(self) -> WCVTable:
        return replace(self)

    def copy_values(self, t: WCVTable) -> None:
        """Overwrite every threshold with the one from ``t``."""
        self.dthr = t.dthr
        self.zthr = t.zthr
        self.tthr = t.tthr
        self.tcoa = t.tcoa

    def get_dthr(self, unit: str | None = None) -> float:
        return _get(self.dthr, unit)

    def get_zthr(self, unit: str | None = None) -> float:
        return _get(self.zthr, unit)

    def get_tthr(self, unit: str | None = None) -> float:
        return _get(self.tthr, unit)

    def get_tcoa(self, unit: str | None = None) -> float:
        return _get(self.tcoa, unit)

    def set_dthr(self, value: float, unit: str | None = None) -> None:
        self.dthr = _set(value, unit)

    def set_zthr(self, value: float, unit: str | None = None) -> None:
        self.zthr = _set(value, unit)

    def set_tthr(self, value: float, unit: str | None = None) -> None:
        self.tthr = _set(value, unit)

    def set_tcoa(self, value: float, unit: str | None = None) -> None:
        self.tcoa = _set(value, unit)

    def contains(self, tab: WCVTable) -> bool:
        """True if every threshold of this table is at least the one in ``tab``."""
        return (
            self.dthr >= tab.dthr
            and self.zthr >= tab.zthr
            and self.tthr >= tab.tthr
            and self.tcoa >= tab.tcoa
        )

    def update_parameter_data(self, p: ParameterData) -> None:
        """Write the thresholds into ``p``."""
        for name, (attr, unit) in _FIELDS.items():
            p.set_internal(name, getattr(self, attr), unit)

    def get_parameters(self) -> ParameterData:
        p = ParameterData()
        self.update_parameter_data(p)
        return p

    def set_parameters(self, p: ParameterData) -> None:
        """Read any thresholds present in ``p``; absent ones are left unchanged."""
        for name, (attr, _) in _FIELDS.items():
            if p.contains(name):
                setattr(self, attr, p.get_value(name))
        logger.debug("Updated well-clear thresholds: %s", self)

    def __str__(self) -> str:
        return "; ".join(
            f"{name.removeprefix('WCV_')}: {fm_units(unit, getattr(self, attr), DEFAULT_OUTPUT_PRECISION)}"
            for name, (attr, unit) in _FIELDS.items()
        )
