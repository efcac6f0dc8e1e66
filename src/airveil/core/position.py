"""A single position in either geodetic or Euclidean coordinates.

A :class:`Position` is immutable. It always carries both a geodetic
(:class:`LatLonAlt`) and a Euclidean (:class:`Vect3`) representation plus a
flag saying which one is authoritative. The other one is a plain mirror of
the same three numbers with no projection applied:

* latitude <-> y
* longitude <-> x
* altitude <-> z

so ``x`` of a geodetic position is its longitude in radians and ``lat`` of a
Euclidean position is its ``y`` in meters. Accessors therefore never fail on
the "wrong" kind of position, which lets code that does not care about the
coordinate system call either family.

Geometric operations follow the authoritative representation: great circles
for geodetic positions, straight lines for Euclidean ones. Degenerate results
(parallel paths, unparsable strings) are reported with :data:`INVALID` rather
than an exception; check :meth:`Position.is_invalid`.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import ClassVar

from airveil.core import great_circle
from airveil.core.latlonalt import LatLonAlt, has_known_units, split_tokens
from airveil.core.vectors import Vect2, Vect3, Velocity
from airveil.utils import units
from airveil.utils.constants import (
    ALMOST_EQUALS_HORIZONTAL_M,
    ALMOST_EQUALS_VERTICAL_M,
    COLLINEAR_EPSILON,
    DEFAULT_OUTPUT_PRECISION,
    PARALLEL_EPSILON,
)
from airveil.utils.formatting import fm_precision, fm_units

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Position:
    """An immutable geodetic or Euclidean position.

    Attributes:
        lla: Geodetic representation (radians, radians, meters).
        point: Euclidean representation (meters).
        latlon: True if ``lla`` is authoritative, False if ``point`` is.
    """

    lla: LatLonAlt
    point: Vect3
    latlon: bool

    ZERO_LL: ClassVar[Position]
    ZERO_XYZ: ClassVar[Position]
    INVALID: ClassVar[Position]

    # --- construction ---

    @classmethod
    def from_lla(cls, lla: LatLonAlt) -> Position:
        """Wrap a LatLonAlt as a geodetic position."""
        return cls(lla, Vect3(lla.lon, lla.lat, lla.alt), True)

    @classmethod
    def from_vect3(cls, v: Vect3) -> Position:
        """Wrap a vector as a Euclidean position."""
        return cls(LatLonAlt.mk(v.y, v.x, v.z), Vect3(v.x, v.y, v.z), False)

    @classmethod
    def mk_lat_lon_alt(cls, lat: float, lon: float, alt: float) -> Position:
        """Geodetic position from radians, radians, meters."""
        return cls.from_lla(LatLonAlt.mk(lat, lon, alt))

    @classmethod
    def make_lat_lon_alt(cls, lat: float, lon: float, alt: float) -> Position:
        """Geodetic position from degrees north, degrees east, feet."""
        return cls.from_lla(LatLonAlt.make(lat, lon, alt))

    @classmethod
    def make_lat_lon_alt_units(
        cls, lat: float, lat_unit: str, lon: float, lon_unit: str, alt: float, alt_unit: str
    ) -> Position:
        """Geodetic position from values in the named units.

        Raises:
            ValueError: If any unit name is not recognized.
        """
        return cls.from_lla(LatLonAlt.make_units(lat, lat_unit, lon, lon_unit, alt, alt_unit))

    @classmethod
    def mk_xyz(cls, x: float, y: float, z: float) -> Position:
        """Euclidean position from meters."""
        return cls.from_vect3(Vect3(x, y, z))

    @classmethod
    def make_xyz(cls, x: float, y: float, z: float) -> Position:
        """Euclidean position from nautical miles, nautical miles, feet."""
        return cls.make_xyz_units(x, "nmi", y, "nmi", z, "ft")

    @classmethod
    def make_xyz_units(
        cls, x: float, x_unit: str, y: float, y_unit: str, z: float, z_unit: str
    ) -> Position:
        """Euclidean position from values in the named units.

        Raises:
            ValueError: If any unit name is not recognized.
        """
        return cls.from_vect3(Vect3.make_xyz(x, x_unit, y, y_unit, z, z_unit))

    # --- accessors ---

    @property
    def is_lat_lon(self) -> bool:
        return self.latlon

    @property
    def x(self) -> float:
        return self.point.x

    @property
    def y(self) -> float:
        return self.point.y

    @property
    def z(self) -> float:
        return self.point.z

    @property
    def lat(self) -> float:
        return self.lla.lat

    @property
    def lon(self) -> float:
        return self.lla.lon

    @property
    def alt(self) -> float:
        return self.lla.alt

    @property
    def latitude(self) -> float:
        """Latitude in degrees north."""
        return self.lla.latitude

    @property
    def longitude(self) -> float:
        """Longitude in degrees east."""
        return self.lla.longitude

    @property
    def altitude(self) -> float:
        """Altitude in feet."""
        return self.lla.altitude

    @property
    def x_coordinate(self) -> float:
        """x in nautical miles."""
        return units.to_unit("nmi", self.point.x)

    @property
    def y_coordinate(self) -> float:
        """y in nautical miles."""
        return units.to_unit("nmi", self.point.y)

    @property
    def z_coordinate(self) -> float:
        """z in feet."""
        return units.to_unit("ft", self.point.z)

    def vect2(self) -> Vect2:
        """Horizontal part, (x, y) or equivalently (lon, lat)."""
        return self.point.vect2()

    def is_invalid(self) -> bool:
        return self.lla.is_invalid() or self.point.is_invalid()

    # --- derived positions ---

    def mk_x(self, x: float) -> Position:
        return Position(LatLonAlt.mk(self.lla.lat, x, self.lla.alt), self.point.mk_x(x), self.latlon)

    def mk_lon(self, lon: float) -> Position:
        return self.mk_x(lon)

    def mk_y(self, y: float) -> Position:
        return Position(LatLonAlt.mk(y, self.lla.lon, self.lla.alt), self.point.mk_y(y), self.latlon)

    def mk_lat(self, lat: float) -> Position:
        return self.mk_y(lat)

    def mk_z(self, z: float) -> Position:
        return Position(self.lla.mk_alt(z), self.point.mk_z(z), self.latlon)

    def mk_alt(self, alt: float) -> Position:
        return self.mk_z(alt)

    def zero_alt(self) -> Position:
        return self.mk_z(0.0)

    # --- comparison ---

    def almost_equals(
        self,
        p: Position,
        epsilon_horiz: float = ALMOST_EQUALS_HORIZONTAL_M,
        epsilon_vert: float = ALMOST_EQUALS_VERTICAL_M,
    ) -> bool:
        """True if ``p`` is within the given horizontal and vertical distances [m].

        The comparison happens in this position's coordinate system and reads
        the matching representation of ``p``; no conversion between geodetic
        and Euclidean coordinates is attempted.
        """
        if self.latlon:
            return great_circle.almost_equals(self.lla, p.lla, epsilon_horiz, epsilon_vert)
        return self.point.almost_equals(p.point, epsilon_horiz, epsilon_vert)

    # --- distance and track ---

    def distance_h(self, p: Position) -> float:
        """Horizontal distance [m]: great circle if both are geodetic, planar otherwise."""
        if self.latlon and p.latlon:
            return great_circle.distance(self.lla, p.lla)
        return self.point.vect2().sub(p.point.vect2()).norm()

    def distance_v(self, p: Position) -> float:
        return abs(self.z - p.z)

    def signed_distance_v(self, p: Position) -> float:
        """Vertical distance [m], positive when this position is above ``p``."""
        return self.z - p.z

    def track(self, p: Position) -> float:
        """Initial course [rad] from this position towards ``p``."""
        if self.latlon:
            return great_circle.initial_course(self.lla, p.lla)
        delta = p.point.vect2().sub(self.point.vect2())
        if delta.x == 0.0 and delta.y == 0.0:
            return 0.0
        return units.to_2pi(math.atan2(delta.x, delta.y))

    def representative_track(self, p: Position) -> float:
        """Course [rad] summarizing the whole path to ``p``, taken at the arc midpoint."""
        if self.latlon:
            return great_circle.representative_course(self.lla, p.lla)
        return self.track(p)

    # --- projection ---

    def linear(self, v: Velocity, t: float) -> Position:
        """Project along ``v`` for ``t`` seconds.

        Geodetic positions follow the great circle whose initial velocity is
        ``v``; when used stepwise near the poles remember that the track of
        such a path changes along the way. A negative ``t`` moves backwards.
        """
        if self.latlon:
            return Position.from_lla(great_circle.linear_velocity(self.lla, v, t))
        return Position.from_vect3(self.point.linear(v, t))

    def linear_est(self, v: Velocity, t: float) -> Position:
        """Cheap approximation of :meth:`linear`.

        For geodetic positions this applies a flat-earth displacement, which
        drifts from the great-circle result as distance grows. It is meant
        for short hops where speed matters more than accuracy.
        """
        if self.latlon:
            return Position.from_lla(self.lla.linear_est_velocity(v, t))
        return self.linear(v, t)

    def linear_est_offset(self, dn: float, de: float) -> Position:
        """Offset by ``dn`` meters north and ``de`` meters east (flat-earth for geodetic)."""
        if self.latlon:
            return Position.from_lla(self.lla.linear_est(dn, de))
        return Position.mk_xyz(self.x + de, self.y + dn, self.z)

    def mid_point(self, p2: Position) -> Position:
        if self.latlon or p2.latlon:
            return Position.from_lla(great_circle.midpoint(self.lla, p2.lla))
        return Position.from_vect3(self.point.add(p2.point).scal(0.5))

    # --- velocity recovery ---

    def initial_velocity(self, p2: Position, t: float) -> Velocity:
        """Velocity which :meth:`linear` would use to reach ``p2`` in ``t`` seconds.

        Returns :attr:`Velocity.ZERO` if ``t`` is not positive.
        """
        if t <= 0.0:
            return Velocity.ZERO
        if self.latlon:
            return great_circle.velocity_initial(self.lla, p2.lla, t)
        return Velocity.mk(p2.point.sub(self.point).scal(1.0 / t))

    def final_velocity(self, p2: Position, t: float) -> Velocity:
        """Velocity on arrival at ``p2`` after ``t`` seconds.

        Returns :attr:`Velocity.ZERO` if ``t`` is not positive.
        """
        if t <= 0.0:
            return Velocity.ZERO
        if self.latlon:
            return great_circle.velocity_final(self.lla, p2.lla, t)
        return Velocity.mk(p2.point.sub(self.point).scal(1.0 / t))

    # --- intersection ---

    @staticmethod
    def intersection(so: Position, vo: Velocity, si: Position, vi: Velocity) -> tuple[Position, float]:
        """Crossing point of two trajectories and the time ``so`` reaches it.

        A negative time means the crossing is behind ``so``'s direction of
        travel. Parallel or coincident trajectories give ``(INVALID, 0.0)``.
        """
        if so.latlon:
            lla, t = great_circle.intersection(so.lla, vo, si.lla, vi)
            if lla.is_invalid():
                return INVALID, 0.0
            return Position.from_lla(lla), t

        vo2 = vo.vect2()
        vi2 = vi.vect2()
        denom = vo2.det(vi2)
        if abs(denom) <= PARALLEL_EPSILON * vo2.norm() * vi2.norm() or denom == 0.0:
            logger.debug("Intersection undefined for parallel trajectories")
            return INVALID, 0.0
        t = si.point.vect2().sub(so.point.vect2()).det(vi2) / denom
        return Position.from_vect3(so.point.linear(vo, t)), t

    @staticmethod
    def intersection_points(
        so: Position, so2: Position, dto: float, si: Position, si2: Position
    ) -> tuple[Position, float]:
        """Like :meth:`intersection`, with each trajectory given by two samples.

        One aircraft travels from ``so`` to ``so2`` in ``dto`` seconds and the
        other from ``si`` to ``si2`` over the same interval.
        """
        vo = so.initial_velocity(so2, dto)
        vi = si.initial_velocity(si2, dto)
        return Position.intersection(so, vo, si, vi)

    # --- predicates ---

    def los(self, p2: Position, d: float, h: float) -> bool:
        """True if ``p2`` is closer than ``d`` horizontally and ``h`` vertically [m]."""
        return self.distance_h(p2) < d and self.distance_v(p2) < h

    def collinear(self, p1: Position, p2: Position) -> bool:
        """True if this position, ``p1`` and ``p2`` lie on one line (or great circle)."""
        if self.latlon:
            return great_circle.collinear(self.lla, p1.lla, p2.lla)
        a = p1.vect2().sub(self.vect2())
        b = p2.vect2().sub(self.vect2())
        return abs(a.det(b)) <= COLLINEAR_EPSILON * max(1.0, a.norm() * b.norm())

    # --- formatting ---

    def to_string(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> str:
        """``(lat, lon, alt)`` in deg/deg/ft or ``(x, y, z)`` in nmi/nmi/ft."""
        return f"({self.to_string_np(precision)})"

    def to_string_np(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> str:
        """Same as :meth:`to_string` without the parentheses."""
        return ", ".join(self.to_string_list(precision))

    def to_string_list(self, precision: int = DEFAULT_OUTPUT_PRECISION) -> list[str]:
        if self.latlon:
            return self.lla.to_string_list(precision)
        return [
            fm_precision(self.x_coordinate, precision),
            fm_precision(self.y_coordinate, precision),
            fm_precision(self.z_coordinate, precision),
        ]

    def to_string_units(
        self,
        x_unit: str = "NM",
        y_unit: str = "NM",
        z_unit: str = "ft",
        precision: int = DEFAULT_OUTPUT_PRECISION,
    ) -> str:
        """String with an explicit unit after each value.

        Latitude and longitude are always written in degrees, so only
        ``z_unit`` applies to geodetic positions.
        """
        if self.latlon:
            return self.lla.to_string_units(z_unit, precision)
        return "({}, {}, {})".format(
            fm_units(x_unit, self.x, precision),
            fm_units(y_unit, self.y, precision),
            fm_units(z_unit, self.z, precision),
        )

    def __str__(self) -> str:
        return self.to_string()

    # --- parsing ---

    @staticmethod
    def parse_ll(text: str) -> Position:
        """Parse a geodetic position: three bare numbers (deg, deg, ft) or three value/unit pairs."""
        lla = LatLonAlt.parse(text)
        if lla.is_invalid():
            return INVALID
        return Position.from_lla(lla)

    @staticmethod
    def parse_xyz(text: str) -> Position:
        """Parse a Euclidean position: three bare numbers (nmi, nmi, ft) or three value/unit pairs."""
        fields = split_tokens(text)
        try:
            if len(fields) == 3:
                return Position.make_xyz(float(fields[0]), float(fields[1]), float(fields[2]))
            if len(fields) == 6:
                if not has_known_units(fields):
                    logger.debug("Unknown unit in %r", text)
                    return INVALID
                return Position.make_xyz_units(
                    float(fields[0]), fields[1],
                    float(fields[2]), fields[3],
                    float(fields[4]), fields[5],
                )
        except ValueError:
            logger.debug("Unable to parse x/y/z from %r", text)
            return INVALID
        logger.debug("Unexpected number of fields (%d) in %r", len(fields), text)
        return INVALID

    @staticmethod
    def parse(text: str) -> Position:
        """Parse a position whose kind is given by its units.

        The input must contain three value/unit pairs. Angle, angle, length
        units give a geodetic position; length, length, length give a
        Euclidean one. Anything else, including bare numbers, is
        :data:`INVALID`.
        """
        fields = split_tokens(text)
        if len(fields) != 6:
            logger.debug("Position %r does not carry units", text)
            return INVALID
        u1, u2, u3 = fields[1], fields[3], fields[5]
        if units.is_compatible(u1, "deg") and units.is_compatible(u2, "deg") and units.is_compatible(u3, "ft"):
            return Position.parse_ll(text)
        if units.is_compatible(u1, "ft") and units.is_compatible(u2, "ft") and units.is_compatible(u3, "ft"):
            return Position.parse_xyz(text)
        logger.debug("Unrecognized units in %r", text)
        return INVALID


ZERO_LL = Position(LatLonAlt.ZERO, Vect3.ZERO, True)
"""Zero latitude, longitude and altitude."""

ZERO_XYZ = Position(LatLonAlt.ZERO, Vect3.ZERO, False)
"""Zero x, y and z."""

INVALID = Position(LatLonAlt.INVALID, Vect3.INVALID, False)
"""Result of undefined geometric operations. Test for it with ``is_invalid()``."""

Position.ZERO_LL = ZERO_LL
Position.ZERO_XYZ = ZERO_XYZ
Position.INVALID = INVALID
