"""
Unit tests for vector math, angle helpers and Chebyshev evaluation.
"""

import math

import pytest

from ephemcore.utils import degnorm, difdeg2n, difrad2n, radnorm
from ephemcore.vectors import (
    angle_between,
    cart_pol,
    cart_pol_sp,
    coortrf,
    cross,
    dot,
    echeb,
    edcheb,
    norm,
    pol_cart,
    pol_cart_sp,
    unit,
)


@pytest.mark.unit
class TestBasicOperations:
    def test_dot_and_cross(self):
        a = [1.0, 2.0, 3.0]
        b = [-2.0, 0.5, 4.0]
        c = cross(a, b)
        assert dot(a, b) == pytest.approx(-2.0 + 1.0 + 12.0)
        assert dot(c, a) == pytest.approx(0.0, abs=1e-12)
        assert dot(c, b) == pytest.approx(0.0, abs=1e-12)

    def test_unit_vector(self):
        u = unit([3.0, 4.0, 12.0])
        assert norm(u) == pytest.approx(1.0)
        assert u[0] == pytest.approx(3.0 / 13.0)

    def test_unit_of_zero_vector(self):
        """A zero vector stays zero instead of dividing by zero."""
        assert unit([0.0, 0.0, 0.0]) == [0.0, 0.0, 0.0]

    def test_angle_between(self):
        assert angle_between([1, 0, 0], [0, 1, 0]) == pytest.approx(math.pi / 2)
        assert angle_between([1, 0, 0], [-1, 0, 0]) == pytest.approx(math.pi)
        assert angle_between([1, 1, 0], [2, 2, 0]) == pytest.approx(0.0, abs=1e-7)


@pytest.mark.unit
class TestPolarConversion:
    def test_round_trip(self):
        """cartesian -> polar -> cartesian within 1e-12 relative."""
        for x in ([1.0, 2.0, 3.0], [-0.5, 0.1, -2.0], [1e-3, -4.0, 0.0]):
            back = pol_cart(cart_pol(x))
            r = norm(x)
            for i in range(3):
                assert abs(back[i] - x[i]) < 1e-12 * r

    def test_longitude_range(self):
        lon, lat, r = cart_pol([0.0, -1.0, 0.0])
        assert lon == pytest.approx(1.5 * math.pi)
        assert lat == pytest.approx(0.0)
        assert r == pytest.approx(1.0)

    def test_pole(self):
        lon, lat, r = cart_pol([0.0, 0.0, 2.0])
        assert lon == 0.0
        assert lat == pytest.approx(math.pi / 2)
        assert r == pytest.approx(2.0)

    def test_origin(self):
        assert cart_pol([0.0, 0.0, 0.0]) == [0.0, 0.0, 0.0]

    def test_state_round_trip(self):
        xx = [0.3, -1.2, 0.05, 0.01, 0.002, -0.0004]
        back = pol_cart_sp(cart_pol_sp(xx))
        for i in range(6):
            assert back[i] == pytest.approx(xx[i], abs=1e-12)

    def test_polar_speed_matches_difference(self):
        """Longitude speed equals the change of longitude over a short step."""
        xx = [0.8, 0.6, 0.1, -0.01, 0.015, 0.0]
        dt = 1e-6
        lon0 = cart_pol(xx[0:3])[0]
        lon1 = cart_pol([xx[i] + xx[i + 3] * dt for i in range(3)])[0]
        assert cart_pol_sp(xx)[3] == pytest.approx((lon1 - lon0) / dt, rel=1e-5)


@pytest.mark.unit
class TestRotation:
    def test_coortrf_inverse(self):
        x = [0.2, 0.7, -0.4]
        eps = math.radians(23.4392911)
        back = coortrf(coortrf(x, eps), -eps)
        for i in range(3):
            assert back[i] == pytest.approx(x[i], abs=1e-15)

    def test_coortrf_keeps_x(self):
        x = coortrf([1.0, 2.0, 3.0], 0.3)
        assert x[0] == 1.0
        assert norm(x) == pytest.approx(math.sqrt(14.0))


@pytest.mark.unit
class TestChebyshev:
    def test_echeb_polynomial(self):
        """T0 + 2 T1 + 3 T2 at x, with T2 = 2x^2 - 1."""
        coef = [1.0, 2.0, 3.0]
        for x in (-1.0, -0.3, 0.0, 0.5, 1.0):
            expected = 1.0 + 2.0 * x + 3.0 * (2 * x * x - 1)
            assert echeb(x, coef) == pytest.approx(expected)

    def test_edcheb_derivative(self):
        coef = [1.0, 2.0, 3.0, -0.5]
        x = 0.37
        h = 1e-6
        numeric = (echeb(x + h, coef) - echeb(x - h, coef)) / (2 * h)
        assert edcheb(x, coef) == pytest.approx(numeric, rel=1e-6)


@pytest.mark.unit
class TestAngleHelpers:
    def test_degnorm(self):
        assert degnorm(370.0) == pytest.approx(10.0)
        assert degnorm(-10.0) == pytest.approx(350.0)
        assert 0.0 <= degnorm(-1e-18) < 360.0

    def test_radnorm(self):
        assert radnorm(-math.pi / 2) == pytest.approx(1.5 * math.pi)

    def test_difdeg2n(self):
        assert difdeg2n(10.0, 350.0) == pytest.approx(20.0)
        assert difdeg2n(350.0, 10.0) == pytest.approx(-20.0)
        assert difdeg2n(180.0, 0.0) in (180.0, -180.0)

    def test_difrad2n(self):
        assert difrad2n(0.1, 2 * math.pi - 0.1) == pytest.approx(0.2)
