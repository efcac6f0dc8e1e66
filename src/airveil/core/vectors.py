"""Immutable 2D/3D vectors and aircraft velocity.

Horizontal axes follow the aviation convention: ``x`` points east, ``y``
points north and ``z`` is altitude (up). All values are in internal units.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from typing import ClassVar

import numpy as np
from numpy.typing import NDArray

from airveil.utils import units


@dataclass(frozen=True)
class Vect2:
    """A horizontal vector."""

    x: float
    y: float

    def add(self, v: Vect2) -> Vect2:
        return Vect2(self.x + v.x, self.y + v.y)

    def sub(self, v: Vect2) -> Vect2:
        return Vect2(self.x - v.x, self.y - v.y)

    def scal(self, k: float) -> Vect2:
        return Vect2(self.x * k, self.y * k)

    def dot(self, v: Vect2) -> float:
        return self.x * v.x + self.y * v.y

    def det(self, v: Vect2) -> float:
        """Return the 2D cross product (determinant) of ``self`` and ``v``."""
        return self.x * v.y - self.y * v.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)


@dataclass(frozen=True)
class Vect3:
    """A three dimensional vector (or point)."""

    x: float
    y: float
    z: float

    ZERO: ClassVar[Vect3]
    INVALID: ClassVar[Vect3]

    @classmethod
    def from_array(cls, arr: NDArray[np.float64]) -> Vect3:
        return cls(float(arr[0]), float(arr[1]), float(arr[2]))

    @classmethod
    def make_xyz(cls, x: float, x_unit: str, y: float, y_unit: str, z: float, z_unit: str) -> Vect3:
        """Create a vector from values given in the named units."""
        return cls(
            units.from_unit(x_unit, x),
            units.from_unit(y_unit, y),
            units.from_unit(z_unit, z),
        )

    def as_array(self) -> NDArray[np.float64]:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    def add(self, v: Vect3) -> Vect3:
        return Vect3(self.x + v.x, self.y + v.y, self.z + v.z)

    def sub(self, v: Vect3) -> Vect3:
        return Vect3(self.x - v.x, self.y - v.y, self.z - v.z)

    def scal(self, k: float) -> Vect3:
        return Vect3(self.x * k, self.y * k, self.z * k)

    def linear(self, v: Vect3, t: float) -> Vect3:
        """Return ``self + v * t``."""
        return Vect3(self.x + v.x * t, self.y + v.y * t, self.z + v.z * t)

    def dot(self, v: Vect3) -> float:
        return float(np.dot(self.as_array(), v.as_array()))

    def cross(self, v: Vect3) -> Vect3:
        return Vect3.from_array(np.cross(self.as_array(), v.as_array()))

    def norm(self) -> float:
        return float(np.linalg.norm(self.as_array()))

    def norm2d(self) -> float:
        return math.hypot(self.x, self.y)

    def vect2(self) -> Vect2:
        return Vect2(self.x, self.y)

    def mk_x(self, x: float) -> Vect3:
        return replace(self, x=x)

    def mk_y(self, y: float) -> Vect3:
        return replace(self, y=y)

    def mk_z(self, z: float) -> Vect3:
        return replace(self, z=z)

    def is_invalid(self) -> bool:
        return math.isnan(self.x) or math.isnan(self.y) or math.isnan(self.z)

    def almost_equals(self, v: Vect3, epsilon_horiz: float, epsilon_vert: float) -> bool:
        """True if ``v`` lies within the given horizontal and vertical distances [m]."""
        return (
            self.vect2().sub(v.vect2()).norm() <= epsilon_horiz
            and abs(self.z - v.z) <= epsilon_vert
        )


Vect3.ZERO = Vect3(0.0, 0.0, 0.0)
Vect3.INVALID = Vect3(math.nan, math.nan, math.nan)


@dataclass(frozen=True)
class Velocity(Vect3):
    """A velocity as east/north/up components in m/s.

    Track angles are in radians, measured clockwise from true north.
    """

    ZERO: ClassVar[Velocity]

    @classmethod
    def mk(cls, v: Vect3) -> Velocity:
        return cls(v.x, v.y, v.z)

    @classmethod
    def mk_trk_gs_vs(cls, trk: float, gs: float, vs: float) -> Velocity:
        """Create a velocity from track [rad], ground speed [m/s] and vertical speed [m/s]."""
        return cls(gs * math.sin(trk), gs * math.cos(trk), vs)

    @classmethod
    def make_trk_gs_vs(cls, trk_deg: float, gs_knots: float, vs_fpm: float) -> Velocity:
        """Create a velocity from track [deg], ground speed [knot] and vertical speed [fpm]."""
        return cls.mk_trk_gs_vs(
            units.from_unit("deg", trk_deg),
            units.from_unit("knot", gs_knots),
            units.from_unit("fpm", vs_fpm),
        )

    @classmethod
    def make_vxyz(cls, vx_knots: float, vy_knots: float, vz_fpm: float) -> Velocity:
        """Create a velocity from east/north components [knot] and vertical speed [fpm]."""
        return cls(
            units.from_unit("knot", vx_knots),
            units.from_unit("knot", vy_knots),
            units.from_unit("fpm", vz_fpm),
        )

    @property
    def track(self) -> float:
        """Track angle in [0, 2pi). A stationary velocity has track 0."""
        if self.x == 0.0 and self.y == 0.0:
            return 0.0
        return units.to_2pi(math.atan2(self.x, self.y))

    @property
    def gs(self) -> float:
        return self.norm2d()

    @property
    def vs(self) -> float:
        return self.z

    def mk_track(self, trk: float) -> Velocity:
        return Velocity.mk_trk_gs_vs(trk, self.gs, self.vs)

    def mk_gs(self, gs: float) -> Velocity:
        return Velocity.mk_trk_gs_vs(self.track, gs, self.vs)

    def mk_vs(self, vs: float) -> Velocity:
        return Velocity(self.x, self.y, vs)


Velocity.ZERO = Velocity(0.0, 0.0, 0.0)
