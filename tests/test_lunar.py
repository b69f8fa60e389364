"""
Unit tests for the mean lunar node and apogee (Black Moon Lilith).
"""

import math

import pytest

from ephemcore.constants import *
from ephemcore.exceptions import EphemerisUnavailableError
from ephemcore.utils import difdeg2n
from ephemcore.lunar import (
    CORR_DAYSCTY,
    CORR_JD_T0GREG,
    MEAN_APSIS_CORR,
    MEAN_NODE_CORR,
    MOON_MEAN_INCL,
    corr_mean_apog,
    corr_mean_node,
    mean_apogee,
    mean_focal_distance,
    mean_lunar_elements,
    mean_node,
    mean_perigee_distance,
)


@pytest.mark.unit
class TestMeanNode:
    def test_mean_node_j2000(self, standard_jd):
        lon, lat, dist = mean_node(standard_jd)
        assert math.degrees(lon) == pytest.approx(125.0445, abs=0.001)
        assert lat == 0.0
        assert dist * AUNIT / 1000.0 == pytest.approx(384400.0)

    def test_retrograde_motion(self, standard_jd):
        """The node regresses by about 19.34 degrees per year."""
        lon0 = math.degrees(mean_node(standard_jd)[0])
        lon1 = math.degrees(mean_node(standard_jd + 365.25)[0])
        motion = (lon1 - lon0 + 180.0) % 360.0 - 180.0
        assert motion == pytest.approx(-19.34, abs=0.01)

    def test_out_of_range(self):
        with pytest.raises(EphemerisUnavailableError):
            mean_node(MOSHNDEPH_END + 1.0)


@pytest.mark.unit
class TestMeanApogee:
    def test_lilith_j2000(self, standard_jd):
        lon, lat, _ = mean_apogee(standard_jd)
        assert math.degrees(lon) == pytest.approx(263.4, abs=0.2)
        assert abs(math.degrees(lat)) <= MOON_MEAN_INCL + 1e-9

    def test_latitude_follows_inclination(self):
        """Latitude is set by the distance of the apogee from the node."""
        for jd in (2451545.0, 2455000.0, 2460000.0):
            lon, lat, _ = mean_apogee(jd)
            node = mean_node(jd)[0]
            expected = math.asin(math.sin(math.radians(MOON_MEAN_INCL)) * math.sin(lon - node))
            assert lat == pytest.approx(expected, abs=2e-3)

    def test_distances(self):
        perigee_km = mean_perigee_distance() * AUNIT / 1000.0
        focus_km = mean_focal_distance() * AUNIT / 1000.0
        assert perigee_km == pytest.approx(363296.0, abs=10.0)
        assert focus_km == pytest.approx(42207.0, abs=10.0)


@pytest.mark.unit
class TestFundamentalArguments:
    def test_elements_in_arcseconds(self, standard_jd):
        swelp, nf, mp, d, m = mean_lunar_elements(standard_jd)
        assert swelp / 3600.0 == pytest.approx(218.3165, abs=0.001)
        assert (swelp - nf) / 3600.0 == pytest.approx(125.0445, abs=0.001)


JD_1000_BC = 1355807.5  # -1000-01-01 0h (Julian calendar)
JD_AD_1000 = 2086307.5  # 1000-01-01 0h (Julian calendar)


def _bin(jd):
    return int((jd - CORR_JD_T0GREG) // CORR_DAYSCTY)


@pytest.mark.unit
class TestCenturyCorrections:
    def test_tables_cover_every_century(self):
        assert len(MEAN_NODE_CORR) == len(MEAN_APSIS_CORR) == 304
        assert MEAN_NODE_CORR[0] == -2.56
        assert MEAN_APSIS_CORR[0] == 7.525

    def test_no_correction_in_modern_era(self, standard_jd):
        assert corr_mean_node(standard_jd) == 0.0
        assert corr_mean_apog(standard_jd) == 0.0

    def test_interpolated_within_bin(self):
        i = _bin(JD_1000_BC)
        node = corr_mean_node(JD_1000_BC)
        apog = corr_mean_apog(JD_1000_BC)
        assert node != 0.0 and apog != 0.0
        lo, hi = sorted(MEAN_NODE_CORR[i:i + 2])
        assert lo <= node <= hi
        lo, hi = sorted(MEAN_APSIS_CORR[i:i + 2])
        assert lo <= apog <= hi

    def test_outside_de431_range(self):
        assert corr_mean_node(JPL_DE431_START - 1.0) == 0.0
        assert corr_mean_apog(JPL_DE431_END + 1.0) == 0.0

    def test_mean_node_applies_correction(self):
        """The node is shifted by the correction, about 5.6" at -1000."""
        swelp, nf = mean_lunar_elements(JD_1000_BC)[0:2]
        uncorrected = ((swelp - nf) / 3600.0) % 360.0
        lon = math.degrees(mean_node(JD_1000_BC)[0])
        shift = difdeg2n(uncorrected, lon)
        assert shift == pytest.approx(corr_mean_node(JD_1000_BC), abs=1e-9)
        assert abs(shift) * 3600.0 > 5.0

    def test_mean_apogee_applies_correction(self):
        swelp, nf, mp = mean_lunar_elements(JD_1000_BC)[0:3]
        node = mean_node(JD_1000_BC)[0]
        lon, lat, _ = mean_apogee(JD_1000_BC)
        # Apogee on the lunar orbit, measured from the corrected node
        apog = math.radians(((swelp - mp) / 3600.0 + 180.0 - corr_mean_apog(JD_1000_BC)) % 360.0)
        u = apog - node
        expected = node + math.atan2(math.sin(u) * math.cos(math.radians(MOON_MEAN_INCL)), math.cos(u))
        assert difdeg2n(math.degrees(lon), math.degrees(expected)) == pytest.approx(0.0, abs=1e-8)


@pytest.mark.integration
class TestAgainstSwisseph:
    @pytest.mark.parametrize("jd", [JD_1000_BC, JD_AD_1000, 2451545.0])
    @pytest.mark.parametrize("body", [SE_MEAN_NODE, SE_MEAN_APOG])
    def test_mean_points(self, ctx, swe, jd, body):
        ours, _ = ctx.calc(jd, body, SEFLG_MOSEPH)
        ref, _ = swe.calc(jd, body, swe.FLG_MOSEPH)
        assert abs(difdeg2n(ours[0], ref[0])) * 3600.0 < 1.5
        assert abs(ours[1] - ref[1]) * 3600.0 < 1.5
