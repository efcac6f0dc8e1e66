"""Tests for spherical great-circle geometry."""

from __future__ import annotations

import math

import numpy as np
import pytest

from airveil.core import great_circle as gc
from airveil.core.latlonalt import LatLonAlt
from airveil.core.vectors import Velocity
from airveil.utils import units

NMI = units.from_unit("nmi", 1.0)


class TestDistance:
    def test_arc_minute_is_one_nautical_mile(self) -> None:
        p1 = LatLonAlt.make(0.0, 0.0, 0.0)
        p2 = LatLonAlt.make(1.0 / 60.0, 0.0, 0.0)
        assert gc.distance(p1, p2) == pytest.approx(NMI)

    def test_one_degree_on_equator(self) -> None:
        p1 = LatLonAlt.make(0.0, 0.0, 0.0)
        p2 = LatLonAlt.make(0.0, 1.0, 0.0)
        assert gc.distance(p1, p2) == pytest.approx(60.0 * NMI)

    def test_symmetric_and_altitude_independent(self) -> None:
        p1 = LatLonAlt.make(40.0, -75.0, 0.0)
        p2 = LatLonAlt.make(51.5, -0.1, 35000.0)
        assert gc.distance(p1, p2) == pytest.approx(gc.distance(p2, p1))
        assert gc.distance(p1, p2) == pytest.approx(gc.distance(p1, p2.zero_alt()))

    def test_angle_distance_conversions(self) -> None:
        assert gc.distance_from_angle(gc.angle_from_distance(1234.5)) == pytest.approx(1234.5)

    def test_almost_equals(self) -> None:
        p1 = LatLonAlt.make(10.0, 10.0, 1000.0)
        assert gc.almost_equals(p1, p1.mk_alt(p1.alt + 0.01), 0.5, 0.05)
        assert not gc.almost_equals(p1, LatLonAlt.make(10.001, 10.0, 1000.0), 0.5, 0.05)

    def test_almost_equals_horiz_ignores_altitude(self) -> None:
        p1 = LatLonAlt.make(10.0, 10.0, 1000.0)
        assert gc.almost_equals_horiz(p1, p1.mk_alt(0.0))
        assert not gc.almost_equals_horiz(p1, LatLonAlt.make(10.001, 10.0, 1000.0))
        assert gc.almost_equals_horiz(p1, LatLonAlt.make(10.001, 10.0, 0.0), 200.0)

    def test_long_arc(self) -> None:
        # SFO to LHR, central angle from the spherical law of cosines
        p1 = LatLonAlt.make(37.6188, -122.375, 0.0)
        p2 = LatLonAlt.make(51.47, -0.4543, 0.0)
        cos_c = math.sin(p1.lat) * math.sin(p2.lat) + math.cos(p1.lat) * math.cos(p2.lat) * math.cos(
            p2.lon - p1.lon
        )
        assert gc.distance(p1, p2) == pytest.approx(gc.distance_from_angle(math.acos(cos_c)))


class TestCourse:
    @pytest.mark.parametrize(
        ("lat2", "lon2", "expected_deg"),
        [(10.0, 0.0, 0.0), (0.0, 10.0, 90.0), (-10.0, 0.0, 180.0), (0.0, -10.0, 270.0)],
    )
    def test_initial_course_cardinal(self, lat2: float, lon2: float, expected_deg: float) -> None:
        origin = LatLonAlt.ZERO
        course = gc.initial_course(origin, LatLonAlt.make(lat2, lon2, 0.0))
        expected = units.from_unit("deg", expected_deg)
        assert units.to_pi(course - expected) == pytest.approx(0.0, abs=1e-9)
        assert 0.0 <= course < 2 * math.pi

    def test_coincident_points(self) -> None:
        p = LatLonAlt.make(12.0, 34.0, 0.0)
        assert gc.initial_course(p, p) == 0.0
        assert gc.final_course(p, p) == 0.0

    def test_high_latitude_east_west(self) -> None:
        p1 = LatLonAlt.make(60.0, 0.0, 0.0)
        p2 = LatLonAlt.make(60.0, 30.0, 0.0)
        initial = gc.initial_course(p1, p2)
        final = gc.final_course(p1, p2)
        assert initial < math.pi / 2
        assert final == pytest.approx(math.pi - initial)
        # arc vertex is at the midpoint, where the course is due east
        assert gc.representative_course(p1, p2) == pytest.approx(math.pi / 2)

    def test_final_course_along_meridian(self) -> None:
        p1 = LatLonAlt.make(10.0, 20.0, 0.0)
        p2 = LatLonAlt.make(-10.0, 20.0, 0.0)
        assert gc.initial_course(p1, p2) == pytest.approx(math.pi)
        assert gc.final_course(p1, p2) == pytest.approx(math.pi)
        assert math.cos(gc.final_course(p2, p1)) == pytest.approx(1.0)


class TestProjection:
    def test_linear_initial_along_equator(self) -> None:
        p = LatLonAlt.ZERO
        q = gc.linear_initial(p, math.pi / 2, 60.0 * NMI)
        assert q.latitude == pytest.approx(0.0, abs=1e-9)
        assert q.longitude == pytest.approx(1.0)

    def test_negative_distance_goes_backwards(self) -> None:
        p = LatLonAlt.ZERO
        q = gc.linear_initial(p, math.pi / 2, -60.0 * NMI)
        assert q.longitude == pytest.approx(-1.0)

    def test_linear_initial_inverts_course_and_distance(self) -> None:
        p = LatLonAlt.make(35.0, 139.0, 0.0)
        q = LatLonAlt.make(37.6, -122.4, 0.0)
        r = gc.linear_initial(p, gc.initial_course(p, q), gc.distance(p, q))
        assert gc.distance(q, r) < 1e-3

    def test_linear_velocity_altitude(self) -> None:
        v = Velocity.mk_trk_gs_vs(0.0, 100.0, 5.0)
        q = gc.linear_velocity(LatLonAlt.mk(0.0, 0.0, 1000.0), v, 10.0)
        assert q.alt == pytest.approx(1050.0)
        assert gc.distance(LatLonAlt.ZERO, q) == pytest.approx(1000.0)


class TestInterpolation:
    def test_endpoints(self) -> None:
        p1 = LatLonAlt.make(10.0, 20.0, 0.0)
        p2 = LatLonAlt.make(-5.0, 40.0, 1000.0)
        assert gc.almost_equals(gc.interpolate(p1, p2, 0.0), p1, 1e-6, 1e-9)
        assert gc.almost_equals(gc.interpolate(p1, p2, 1.0), p2, 1e-6, 1e-9)

    def test_midpoint_equator(self) -> None:
        mid = gc.midpoint(LatLonAlt.make(0.0, 0.0, 0.0), LatLonAlt.make(0.0, 10.0, 2000.0))
        assert mid.latitude == pytest.approx(0.0, abs=1e-9)
        assert mid.longitude == pytest.approx(5.0)
        assert mid.altitude == pytest.approx(1000.0)

    def test_antipodal_is_invalid(self) -> None:
        p = LatLonAlt.make(20.0, 30.0, 0.0)
        assert gc.interpolate(p, p.antipode(), 0.5).is_invalid()

    def test_unit_vector_round_trip(self) -> None:
        p = LatLonAlt.make(-33.9, 151.2, 50.0)
        vec = gc.to_unit_vector(p)
        assert np.linalg.norm(vec) == pytest.approx(1.0)
        back = gc.from_unit_vector(vec * 3.0, p.alt)
        assert back.lat == pytest.approx(p.lat)
        assert back.lon == pytest.approx(p.lon)


class TestVelocityRecovery:
    def test_initial_velocity(self) -> None:
        p1 = LatLonAlt.make(0.0, 0.0, 0.0)
        p2 = LatLonAlt.make(0.0, 1.0, 600.0)
        v = gc.velocity_initial(p1, p2, 60.0)
        assert v.track == pytest.approx(math.pi / 2)
        assert v.gs == pytest.approx(NMI)
        assert v.vs == pytest.approx(units.from_unit("ft", 10.0))

    @pytest.mark.parametrize("t", [0.0, -5.0])
    def test_non_positive_time_gives_zero(self, t: float) -> None:
        p1 = LatLonAlt.make(0.0, 0.0, 0.0)
        p2 = LatLonAlt.make(1.0, 1.0, 0.0)
        assert gc.velocity_initial(p1, p2, t) == Velocity.ZERO
        assert gc.velocity_final(p1, p2, t) == Velocity.ZERO


class TestIntersection:
    def test_equator_and_meridian(self) -> None:
        so = LatLonAlt.make(0.0, 0.0, 0.0)
        vo = Velocity.make_trk_gs_vs(90.0, 600.0, 0.0)
        si = LatLonAlt.make(-10.0, 5.0, 0.0)
        vi = Velocity.make_trk_gs_vs(0.0, 400.0, 0.0)
        x, t = gc.intersection(so, vo, si, vi)
        assert x.latitude == pytest.approx(0.0, abs=1e-9)
        assert x.longitude == pytest.approx(5.0)
        assert t == pytest.approx(1800.0)

    def test_coincident_great_circles(self) -> None:
        so = LatLonAlt.make(0.0, 0.0, 0.0)
        si = LatLonAlt.make(0.0, 20.0, 0.0)
        v = Velocity.make_trk_gs_vs(90.0, 300.0, 0.0)
        x, t = gc.intersection(so, v, si, v)
        assert x.is_invalid()
        assert t == 0.0

    def test_stationary(self) -> None:
        so = LatLonAlt.make(0.0, 0.0, 0.0)
        si = LatLonAlt.make(-10.0, 5.0, 0.0)
        x, t = gc.intersection(so, Velocity.ZERO, si, Velocity.make_trk_gs_vs(0.0, 400.0, 0.0))
        assert x.is_invalid()
        assert t == 0.0


class TestCollinear:
    def test_points_on_equator(self) -> None:
        pts = [LatLonAlt.make(0.0, lon, 0.0) for lon in (0.0, 10.0, 25.0)]
        assert gc.collinear(*pts)

    def test_points_on_meridian(self) -> None:
        pts = [LatLonAlt.make(lat, 30.0, 0.0) for lat in (-20.0, 5.0, 60.0)]
        assert gc.collinear(*pts)

    def test_triangle(self) -> None:
        assert not gc.collinear(
            LatLonAlt.make(0.0, 0.0, 0.0),
            LatLonAlt.make(0.0, 10.0, 0.0),
            LatLonAlt.make(10.0, 5.0, 0.0),
        )

    def test_short_right_angle(self) -> None:
        p0 = LatLonAlt.ZERO
        east = p0.linear_est(0.0, 50.0)
        north = p0.linear_est(50.0, 0.0)
        assert not gc.collinear(p0, east, north)

    def test_short_range_on_equator(self) -> None:
        p0 = LatLonAlt.ZERO
        assert gc.collinear(p0, p0.linear_est(0.0, 50.0), p0.linear_est(0.0, 100.0))

    def test_oblique_arc(self) -> None:
        p0 = LatLonAlt.make(40.0, -100.0, 0.0)
        course = units.from_unit("deg", 37.0)
        p1 = gc.linear_initial(p0, course, 5000.0)
        p2 = gc.linear_initial(p0, course, 10000.0)
        assert gc.collinear(p0, p1, p2)
        assert not gc.collinear(p0, p1, gc.linear_initial(p0, course + 0.01, 10000.0))

    def test_coincident_points(self) -> None:
        p = LatLonAlt.make(5.0, 5.0, 0.0)
        assert gc.collinear(p, p, LatLonAlt.make(20.0, -30.0, 0.0))
