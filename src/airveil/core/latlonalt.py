"""Geodetic latitude/longitude/altitude triple.

Latitude and longitude are stored in radians and altitude in meters. Use
:meth:`LatLonAlt.make` for the conventional degrees/feet form.
"""

from __future__ import annotations

import logging
import math
import re
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, ClassVar

from airveil.utils import units
from airveil.utils.constants import DEFAULT_OUTPUT_PRECISION, WGS84_EQUATORIAL_RADIUS_M
from airveil.utils.formatting import fm_precision, fm_units

if TYPE_CHECKING:
    from airveil.core.vectors import Velocity

logger = logging.getLogger(__name__)

TOKEN_SEPARATORS = re.compile(r"[\s,;()\[\]]+")
"""Separators between numbers and unit names in a coordinate string."""


def split_tokens(text: str) -> list[str]:
    """Split a coordinate string such as ``(1.0 [deg], 2.0 [deg], 3 [ft])`` into tokens."""
    return [tok for tok in TOKEN_SEPARATORS.split(text) if tok]


def has_known_units(fields: list[str]) -> bool:
    """True if every unit token of a value/unit field list is a recognized unit."""
    return all(units.is_unit(name) for name in fields[1::2])


@dataclass(frozen=True)
class LatLonAlt:
    """A geodetic position.

    Attributes:
        lat: Latitude in radians (north positive).
        lon: Longitude in radians (east positive).
        alt: Altitude in meters.
    """

    lat: float
    lon: float
    alt: float

    ZERO: ClassVar[LatLonAlt]
    INVALID: ClassVar[LatLonAlt]

    @classmethod
    def mk(cls, lat: float, lon: float, alt: float) -> LatLonAlt:
        """Create a position from internal units (radians, radians, meters)."""
        return cls(lat, lon, alt)

    @classmethod
    def make(cls, lat: float, lon: float, alt: float) -> LatLonAlt:
        """Create a position from degrees north, degrees east and feet."""
        return cls(
            units.from_unit("deg", lat),
            units.from_unit("deg", lon),
            units.from_unit("ft", alt),
        )

    @classmethod
    def make_units(
        cls, lat: float, lat_unit: str, lon: float, lon_unit: str, alt: float, alt_unit: str
    ) -> LatLonAlt:
        """Create a position from values in the named units.

        Raises:
            ValueError: If any unit name is not recognized.
        """
        return cls(
            units.from_unit(lat_unit, lat),
            units.from_unit(lon_unit, lon),
            units.from_unit(alt_unit, alt),
        )

    def mk_alt(self, alt: float) -> LatLonAlt:
        return replace(self, alt=alt)

    def make_alt(self, alt_ft: float) -> LatLonAlt:
        return replace(self, alt=units.from_unit("ft", alt_ft))

    def zero_alt(self) -> LatLonAlt:
        return replace(self, alt=0.0)

    @property
    def latitude(self) -> float:
        """Latitude in degrees north, normalized to [-180, 180)."""
        return units.to_180(units.to_unit("deg", self.lat))

    @property
    def longitude(self) -> float:
        """Longitude in degrees east, normalized to [-180, 180)."""
        return units.to_180(units.to_unit("deg", self.lon))

    @property
    def altitude(self) -> float:
        """Altitude in feet."""
        return units.to_unit("ft", self.alt)

    def linear_est(self, dn: float, de: float) -> LatLonAlt:
        """Offset this position by ``dn`` meters north and ``de`` meters east.

        This is a flat-earth estimate, only suitable for short distances away
        from the poles. It is not a substitute for a great-circle projection.
        """
        r = WGS84_EQUATORIAL_RADIUS_M
        new_lat = self.lat + dn / r
        new_lon = self.lon + de / (r * math.cos(self.lat))
        return LatLonAlt(new_lat, units.to_pi(new_lon), self.alt)

    def linear_est_velocity(self, v: Velocity, t: float) -> LatLonAlt:
        """Flat-earth estimate of the position reached moving with ``v`` for ``t`` seconds."""
        return self.linear_est(v.y * t, v.x * t).mk_alt(self.alt + v.z * t)

    def antipode(self) -> LatLonAlt:
        return LatLonAlt(-self.lat, units.to_pi(self.lon + math.pi), self.alt)

    def is_invalid(self) -> bool:
        return math.isnan(self.lat) or math.isnan(self.lon) or math.isnan(self.alt)

    def to_string(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> str:
        """String representation in degrees, degrees, feet."""
        return f"({self.to_string_np(precision)})"

    def to_string_np(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> str:
        return ", ".join(self.to_string_list(precision))

    def to_string_list(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> list[str]:
        return [
            fm_precision(self.latitude, precision),
            fm_precision(self.longitude, precision),
            fm_precision(self.altitude, precision),
        ]

    def to_string_np_units(
        self,
        lat_unit: str = "deg",
        lon_unit: str = "deg",
        alt_unit: str = "ft",
        precision: int = DEFAULT_OUTPUT_PRECISION,
    ) -> str:
        """Like :meth:`to_string_np` with the unit of each value chosen by the caller."""
        lat = units.from_unit("deg", self.latitude)
        lon = units.from_unit("deg", self.longitude)
        return ", ".join(
            [
                fm_precision(units.to_unit(lat_unit, lat), precision),
                fm_precision(units.to_unit(lon_unit, lon), precision),
                fm_precision(units.to_unit(alt_unit, self.alt), precision),
            ]
        )

    def to_string_units(
        self, alt_unit: str = "ft", precision: int = DEFAULT_OUTPUT_PRECISION
    ) -> str:
        """String representation with explicit units; latitude and longitude are always degrees."""
        return "({}, {}, {})".format(
            fm_units("deg", units.from_unit("deg", self.latitude), precision),
            fm_units("deg", units.from_unit("deg", self.longitude), precision),
            fm_units(alt_unit, self.alt, precision),
        )

    def __str__(self) -> str:
        return self.to_string()

    @classmethod
    def parse(cls, text: str) -> LatLonAlt:
        """Parse the inverse of :meth:`to_string` or :meth:`to_string_units`.

        Three bare numbers are read as degrees, degrees, feet. Three
        value/unit pairs are read in their given units. Anything else
        yields :attr:`INVALID`.
        """
        fields = split_tokens(text)
        try:
            if len(fields) == 3:
                return cls.make(float(fields[0]), float(fields[1]), float(fields[2]))
            if len(fields) == 6:
                if not has_known_units(fields):
                    logger.debug("Unknown unit in %r", text)
                    return cls.INVALID
                return cls.make_units(
                    float(fields[0]), fields[1],
                    float(fields[2]), fields[3],
                    float(fields[4]), fields[5],
                )
        except ValueError:
            logger.debug("Unable to parse lat/lon/alt from %r", text)
            return cls.INVALID
        logger.debug("Unexpected number of fields (%d) in %r", len(fields), text)
        return cls.INVALID


LatLonAlt.ZERO = LatLonAlt(0.0, 0.0, 0.0)
LatLonAlt.INVALID = LatLonAlt(math.nan, math.nan, math.nan)
