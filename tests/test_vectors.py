"""Tests for vectors and velocities."""

from __future__ import annotations

import math

import numpy as np
import pytest

from airveil.core.vectors import Vect2, Vect3, Velocity
from airveil.utils import units


class TestVect3:
    def test_arithmetic(self) -> None:
        a = Vect3(1.0, 2.0, 3.0)
        b = Vect3(4.0, 5.0, 6.0)
        assert a.add(b) == Vect3(5.0, 7.0, 9.0)
        assert b.sub(a) == Vect3(3.0, 3.0, 3.0)
        assert a.scal(2.0) == Vect3(2.0, 4.0, 6.0)
        assert a.linear(b, 0.5) == Vect3(3.0, 4.5, 6.0)

    def test_products(self) -> None:
        a = Vect3(1.0, 0.0, 0.0)
        b = Vect3(0.0, 1.0, 0.0)
        assert a.dot(b) == 0.0
        np.testing.assert_array_almost_equal(a.cross(b).as_array(), [0.0, 0.0, 1.0])

    def test_norms(self) -> None:
        v = Vect3(3.0, 4.0, 12.0)
        assert v.norm() == pytest.approx(13.0)
        assert v.norm2d() == pytest.approx(5.0)
        assert v.vect2() == Vect2(3.0, 4.0)

    def test_with_field(self) -> None:
        v = Vect3(1.0, 2.0, 3.0)
        assert v.mk_x(9.0) == Vect3(9.0, 2.0, 3.0)
        assert v.mk_y(9.0) == Vect3(1.0, 9.0, 3.0)
        assert v.mk_z(9.0) == Vect3(1.0, 2.0, 9.0)
        assert v == Vect3(1.0, 2.0, 3.0)

    def test_invalid(self) -> None:
        assert Vect3.INVALID.is_invalid()
        assert not Vect3.ZERO.is_invalid()

    def test_make_with_units(self) -> None:
        v = Vect3.make_xyz(1.0, "nmi", 2.0, "km", 100.0, "ft")
        assert v.x == pytest.approx(1852.0)
        assert v.y == pytest.approx(2000.0)
        assert v.z == pytest.approx(30.48)


class TestVect2:
    def test_det(self) -> None:
        assert Vect2(1.0, 0.0).det(Vect2(0.0, 1.0)) == 1.0
        assert Vect2(2.0, 2.0).det(Vect2(1.0, 1.0)) == 0.0

    def test_norm(self) -> None:
        assert Vect2(3.0, 4.0).norm() == 5.0


class TestVelocity:
    def test_track_gs_vs(self) -> None:
        v = Velocity.make_trk_gs_vs(90.0, 100.0, 500.0)
        assert v.x == pytest.approx(units.from_unit("knot", 100.0))
        assert v.y == pytest.approx(0.0, abs=1e-9)
        assert v.track == pytest.approx(math.pi / 2)
        assert v.gs == pytest.approx(units.from_unit("knot", 100.0))
        assert v.vs == pytest.approx(units.from_unit("fpm", 500.0))

    def test_track_is_clockwise_from_north(self) -> None:
        assert Velocity(0.0, 1.0, 0.0).track == pytest.approx(0.0)
        assert Velocity(0.0, -1.0, 0.0).track == pytest.approx(math.pi)
        assert Velocity(-1.0, 0.0, 0.0).track == pytest.approx(3 * math.pi / 2)

    def test_zero_velocity_track(self) -> None:
        assert Velocity.ZERO.track == 0.0
        assert Velocity.ZERO.gs == 0.0

    def test_make_vxyz(self) -> None:
        v = Velocity.make_vxyz(10.0, -10.0, 0.0)
        assert v.track == pytest.approx(3 * math.pi / 4)

    def test_with_component(self) -> None:
        v = Velocity.mk_trk_gs_vs(1.0, 200.0, 5.0)
        assert v.mk_gs(100.0).gs == pytest.approx(100.0)
        assert v.mk_gs(100.0).track == pytest.approx(1.0)
        assert v.mk_track(2.0).track == pytest.approx(2.0)
        assert v.mk_vs(-3.0).vs == -3.0

    def test_mk_from_vector(self) -> None:
        v = Velocity.mk(Vect3(1.0, 2.0, 3.0))
        assert isinstance(v, Velocity)
        assert (v.x, v.y, v.z) == (1.0, 2.0, 3.0)
