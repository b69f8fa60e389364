"""
Unit tests for frame bias, precession, obliquity and nutation.
"""

import math

import pytest

from ephemcore.constants import *
from ephemcore.exceptions import UnsupportedCombinationError
from ephemcore.frames import (
    J2000_TO_J,
    J_TO_J2000,
    OBLIQUITY_MODELS,
    PRECESSION_MODELS,
    frame_bias,
    mean_obliquity,
    nutation_angles,
    nutation_data,
    precess,
    precess_state,
)
from ephemcore.vectors import angle_between, norm

ARCSEC = math.pi / 180.0 / 3600.0
JD_2100 = 2488070.0


@pytest.mark.unit
class TestFrameBias:
    def test_bias_is_small_rotation(self):
        x = [0.3, -0.8, 0.5]
        xb = frame_bias(x)
        assert norm(xb) == pytest.approx(norm(x), rel=1e-15)
        assert angle_between(x, xb) < 0.05 * ARCSEC

    def test_bias_round_trip(self):
        xx = [0.3, -0.8, 0.5, 0.001, 0.002, -0.003]
        back = frame_bias(frame_bias(xx), backward=True)
        for i in range(6):
            assert back[i] == pytest.approx(xx[i], abs=1e-15)

    def test_no_bias_model(self):
        x = [1.0, 2.0, 3.0]
        assert frame_bias(x, SEMOD_BIAS_NONE) == x


@pytest.mark.unit
class TestPrecession:
    def test_identity_at_j2000(self):
        x = [0.1, 0.2, 0.3]
        assert precess(x, J2000, J2000_TO_J) == x

    def test_round_trip(self):
        x = [0.6, -0.2, 0.77]
        back = precess(precess(x, JD_2100, J2000_TO_J), JD_2100, J_TO_J2000)
        for i in range(3):
            assert back[i] == pytest.approx(x[i], abs=1e-14)

    def test_pole_moves_by_theta(self):
        """The celestial pole precesses by theta = 2004.19" per century."""
        pole = precess([0.0, 0.0, 1.0], JD_2100, J_TO_J2000)
        theta = angle_between(pole, [0.0, 0.0, 1.0]) / ARCSEC
        assert theta == pytest.approx(2004.19, abs=0.5)

    @pytest.mark.parametrize("model", PRECESSION_MODELS)
    def test_models_agree(self, model):
        x = [0.6, -0.2, 0.77]
        ref = precess(x, JD_2100, J2000_TO_J, SEMOD_PREC_IAU_2006)
        other = precess(x, JD_2100, J2000_TO_J, model)
        assert angle_between(ref, other) < 5.0 * ARCSEC

    def test_state_precession_rotates_velocity(self):
        xx = [1.0, 0.0, 0.0, 0.0, 0.01, 0.0]
        out = precess_state(xx, JD_2100, J2000_TO_J)
        assert norm(out[3:6]) == pytest.approx(0.01)

    def test_unknown_model(self):
        with pytest.raises(UnsupportedCombinationError):
            precess([1.0, 0.0, 0.0], JD_2100, J2000_TO_J, 999)


@pytest.mark.unit
class TestObliquity:
    def test_j2000_value(self):
        eps = math.degrees(mean_obliquity(J2000, SEMOD_PREC_IAU_2006))
        assert eps == pytest.approx(84381.406 / 3600.0, abs=1e-9)

    @pytest.mark.parametrize("model", OBLIQUITY_MODELS)
    def test_models_near_j2000(self, model):
        eps = mean_obliquity(J2000, model) / ARCSEC
        assert abs(eps - 84381.4) < 1.0

    def test_obliquity_decreases(self):
        assert mean_obliquity(JD_2100) < mean_obliquity(J2000)


@pytest.mark.unit
class TestNutation:
    def test_j2000_angles(self):
        dpsi, deps = nutation_angles(J2000)
        assert -14.1 < dpsi / ARCSEC < -13.7
        assert -5.9 < deps / ARCSEC < -5.5

    def test_2000a_and_2000b_agree(self):
        a = nutation_angles(J2000, SEMOD_NUT_IAU_2000A)
        b = nutation_angles(J2000, SEMOD_NUT_IAU_2000B)
        assert abs(a[0] - b[0]) < 0.01 * ARCSEC
        assert abs(a[1] - b[1]) < 0.01 * ARCSEC

    def test_matrix_is_orthogonal(self):
        nut = nutation_data(J2000, mean_obliquity(J2000))
        m = nut.matrix
        for i in range(3):
            for j in range(3):
                s = sum(m[i][k] * m[j][k] for k in range(3))
                assert s == pytest.approx(1.0 if i == j else 0.0, abs=1e-14)
