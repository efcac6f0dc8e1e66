"""Great-circle geometry on a spherical earth.

All functions take and return internal units: radians for angles and
courses, meters for distances and altitudes, seconds for times. Courses are
measured clockwise from true north in [0, 2pi).

The earth radius is :data:`~airveil.utils.constants.SPHERICAL_EARTH_RADIUS_M`,
for which one arc-minute of a great circle is exactly one nautical mile.
Altitude is carried along but does not affect horizontal distances.

Distances, courses and destinations are solved by :class:`pyproj.Geod` on
that sphere. Path crossings, interpolation and collinearity work on
earth-centered unit vectors with numpy.
"""

from __future__ import annotations

import logging
import math

import numpy as np
from numpy.typing import NDArray
from pyproj import Geod

from airveil.core.latlonalt import LatLonAlt
from airveil.core.vectors import Velocity
from airveil.utils import units
from airveil.utils.constants import (
    ALMOST_EQUALS_HORIZONTAL_M,
    COLLINEAR_EPSILON,
    PARALLEL_EPSILON,
    SPHERICAL_EARTH_RADIUS_M,
)

logger = logging.getLogger(__name__)

# Spherical geodesic solver (1 arc-minute == 1 nmi)
_SPHERE = Geod(a=SPHERICAL_EARTH_RADIUS_M, f=0.0)


def angle_from_distance(distance: float, h: float = 0.0) -> float:
    """Central angle [rad] subtended by ``distance`` meters at height ``h``."""
    return distance / (SPHERICAL_EARTH_RADIUS_M + h)


def distance_from_angle(angle: float, h: float = 0.0) -> float:
    """Arc length [m] of a central ``angle`` at height ``h``."""
    return (SPHERICAL_EARTH_RADIUS_M + h) * angle


def _inverse(p1: LatLonAlt, p2: LatLonAlt) -> tuple[float, float, float]:
    """Forward azimuth at ``p1``, back azimuth at ``p2`` and distance [m]."""
    az12, az21, dist = _SPHERE.inv(p1.lon, p1.lat, p2.lon, p2.lat, radians=True)
    return float(az12), float(az21), float(dist)


def distance(p1: LatLonAlt, p2: LatLonAlt) -> float:
    """Great-circle distance between two positions in meters."""
    return _inverse(p1, p2)[2]


def almost_equals(p1: LatLonAlt, p2: LatLonAlt, epsilon_horiz: float, epsilon_vert: float) -> bool:
    """True if the positions lie within the given horizontal and vertical distances [m]."""
    return distance(p1, p2) <= epsilon_horiz and abs(p1.alt - p2.alt) <= epsilon_vert


def almost_equals_horiz(
    p1: LatLonAlt, p2: LatLonAlt, epsilon_horiz: float = ALMOST_EQUALS_HORIZONTAL_M
) -> bool:
    """True if the positions lie within ``epsilon_horiz`` meters, ignoring altitude."""
    return distance(p1, p2) <= epsilon_horiz


def to_unit_vector(p: LatLonAlt) -> NDArray[np.float64]:
    """Earth-centered unit vector of a position."""
    cos_lat = math.cos(p.lat)
    return np.array(
        [cos_lat * math.cos(p.lon), cos_lat * math.sin(p.lon), math.sin(p.lat)],
        dtype=np.float64,
    )


def from_unit_vector(vec: NDArray[np.float64], alt: float) -> LatLonAlt:
    """Position of an earth-centered vector (any length) at altitude ``alt``."""
    x, y, z = (float(c) for c in vec)
    lat = math.atan2(z, math.hypot(x, y))
    lon = math.atan2(y, x)
    return LatLonAlt.mk(lat, units.to_pi(lon), alt)


def _direction_vector(p: LatLonAlt, course: float) -> NDArray[np.float64]:
    """Unit tangent vector at ``p`` pointing along ``course``."""
    sin_lat, cos_lat = math.sin(p.lat), math.cos(p.lat)
    sin_lon, cos_lon = math.sin(p.lon), math.cos(p.lon)
    north = np.array([-sin_lat * cos_lon, -sin_lat * sin_lon, cos_lat])
    east = np.array([-sin_lon, cos_lon, 0.0])
    return math.sin(course) * east + math.cos(course) * north


def initial_course(p1: LatLonAlt, p2: LatLonAlt) -> float:
    """Course at ``p1`` of the great circle from ``p1`` to ``p2``.

    Coincident points have course 0.
    """
    az12, _, dist = _inverse(p1, p2)
    if dist == 0.0:
        return 0.0
    return units.to_2pi(az12)


def final_course(p1: LatLonAlt, p2: LatLonAlt) -> float:
    """Course at ``p2`` when arriving along the great circle from ``p1``."""
    _, az21, dist = _inverse(p1, p2)
    if dist == 0.0:
        return 0.0
    return units.to_2pi(az21 + math.pi)


def interpolate(p1: LatLonAlt, p2: LatLonAlt, f: float) -> LatLonAlt:
    """Point a fraction ``f`` of the way along the great circle from ``p1`` to ``p2``.

    Altitude is interpolated linearly. For antipodal points the path is not
    unique and the result is :attr:`LatLonAlt.INVALID`.
    """
    alt = p1.alt + f * (p2.alt - p1.alt)
    u1 = to_unit_vector(p1)
    u2 = to_unit_vector(p2)
    sin_omega = float(np.linalg.norm(np.cross(u1, u2)))
    cos_omega = float(np.dot(u1, u2))
    if sin_omega < PARALLEL_EPSILON:
        if cos_omega > 0.0:
            return p1.mk_alt(alt)
        logger.debug("Interpolation between antipodal points is undefined")
        return LatLonAlt.INVALID
    omega = math.atan2(sin_omega, cos_omega)
    vec = (math.sin((1.0 - f) * omega) * u1 + math.sin(f * omega) * u2) / math.sin(omega)
    return from_unit_vector(vec, alt)


def midpoint(p1: LatLonAlt, p2: LatLonAlt) -> LatLonAlt:
    return interpolate(p1, p2, 0.5)


def representative_course(p1: LatLonAlt, p2: LatLonAlt) -> float:
    """Course of the great circle from ``p1`` to ``p2`` measured at the arc midpoint.

    Over long arcs this is a better summary of the overall direction of
    travel than the initial course.
    """
    mid = midpoint(p1, p2)
    if mid.is_invalid() or distance(p1, mid) == 0.0:
        return initial_course(p1, p2)
    return initial_course(mid, p2)


def linear_initial(p: LatLonAlt, course: float, dist: float) -> LatLonAlt:
    """Point reached by travelling ``dist`` meters from ``p`` along ``course``.

    A negative distance travels backwards along the same great circle.
    Altitude is unchanged.
    """
    lon, lat, _ = _SPHERE.fwd(p.lon, p.lat, course, dist, radians=True)
    return LatLonAlt.mk(float(lat), units.to_pi(float(lon)), p.alt)


def linear_velocity(p: LatLonAlt, v: Velocity, t: float) -> LatLonAlt:
    """Project ``p`` along the great circle given by initial velocity ``v`` for ``t`` seconds."""
    return linear_initial(p, v.track, v.gs * t).mk_alt(p.alt + v.vs * t)


def velocity_initial(p1: LatLonAlt, p2: LatLonAlt, t: float) -> Velocity:
    """Initial velocity which carries ``p1`` to ``p2`` along a great circle in ``t`` seconds.

    Returns :attr:`Velocity.ZERO` if ``t`` is not positive.
    """
    if t <= 0.0:
        return Velocity.ZERO
    gs = distance(p1, p2) / t
    vs = (p2.alt - p1.alt) / t
    return Velocity.mk_trk_gs_vs(initial_course(p1, p2), gs, vs)


def velocity_final(p1: LatLonAlt, p2: LatLonAlt, t: float) -> Velocity:
    """Velocity on arrival at ``p2`` after travelling from ``p1`` for ``t`` seconds.

    Returns :attr:`Velocity.ZERO` if ``t`` is not positive.
    """
    if t <= 0.0:
        return Velocity.ZERO
    gs = distance(p1, p2) / t
    vs = (p2.alt - p1.alt) / t
    return Velocity.mk_trk_gs_vs(final_course(p1, p2), gs, vs)


def intersection(
    so: LatLonAlt, vo: Velocity, si: LatLonAlt, vi: Velocity
) -> tuple[LatLonAlt, float]:
    """Crossing point of two great-circle paths and the time ``so`` reaches it.

    Of the two antipodal crossings the one nearer ``so`` is returned. The
    time is negative when the crossing lies behind ``so``'s direction of
    travel. Altitude follows ``vo``'s vertical speed.

    Returns:
        ``(LatLonAlt.INVALID, 0.0)`` if either path is stationary or the
        two great circles coincide.
    """
    if vo.gs == 0.0 or vi.gs == 0.0:
        logger.debug("Intersection undefined for stationary path")
        return LatLonAlt.INVALID, 0.0

    a = to_unit_vector(so)
    n1 = np.cross(a, _direction_vector(so, vo.track))
    n2 = np.cross(to_unit_vector(si), _direction_vector(si, vi.track))
    cand = np.cross(n1, n2)
    norm = float(np.linalg.norm(cand))
    if norm < PARALLEL_EPSILON:
        logger.debug("Intersection undefined for coincident great circles")
        return LatLonAlt.INVALID, 0.0

    x = cand / norm
    if float(np.dot(x, a)) < 0.0:
        x = -x

    # signed central angle from so to x, positive in the direction of travel
    theta = math.atan2(float(np.dot(np.cross(a, x), n1)), float(np.dot(a, x)))
    t = distance_from_angle(theta) / vo.gs
    return from_unit_vector(x, so.alt + vo.vs * t), t


def collinear(p1: LatLonAlt, p2: LatLonAlt, p3: LatLonAlt) -> bool:
    """True if the three positions lie on a common great circle.

    Compares the angle at ``p1`` between the arcs to ``p2`` and ``p3``, so the
    test does not depend on how far apart the points are. Coincident or
    antipodal points are always collinear.
    """
    u1 = to_unit_vector(p1)
    n12 = np.cross(u1, to_unit_vector(p2))
    n13 = np.cross(u1, to_unit_vector(p3))
    scale = float(np.linalg.norm(n12)) * float(np.linalg.norm(n13))
    if scale == 0.0:
        return True
    return float(np.linalg.norm(np.cross(n12, n13))) / scale < COLLINEAR_EPSILON
