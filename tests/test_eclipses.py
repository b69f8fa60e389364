"""
Tests for lunar eclipse search, local solar eclipse search and eclipse
circumstances.

Reference eclipses:
    2000-01-21  total lunar eclipse, maximum 04:44 UT, Saros 124
    1999-08-11  total solar eclipse over central Europe, Saros 145
"""

import pytest

import ephemcore as ephem
import ephemcore.eclipses as eclipses
from ephemcore.constants import *
from ephemcore.eclipses import (
    find_maximum,
    find_zero,
    lun_eclipse_how,
    lun_eclipse_when,
    sol_eclipse_how,
    sol_eclipse_when_loc,
)
from ephemcore.exceptions import EclipseSearchError, UnsupportedCombinationError
from ephemcore.saros import SAROS_DATA_LUNAR, SAROS_DATA_SOLAR, SAROS_UNKNOWN, saros_member

JAN_2000_LUNAR_MAX = 2451564.6969
AUG_1999_SOLAR_MAX = 2451401.944

NEW_YORK = (-74.006, 40.7128, 0.0)
SYDNEY = (151.2093, -33.8688, 0.0)
ULM = (9.99, 48.40, 480.0)


@pytest.mark.unit
class TestParabolaHelpers:
    def test_find_maximum(self):
        # y = 2 - (x - 0.3)^2 sampled at -1, 0, 1
        dx, ymax = find_maximum(0.31, 1.91, 1.51, 1.0)
        assert dx == pytest.approx(0.3)
        assert ymax == pytest.approx(2.0)

    def test_find_maximum_flat(self):
        assert find_maximum(1.0, 1.0, 1.0, 0.5) == (0.0, 1.0)

    def test_find_zero_scales_with_step(self):
        # y = (x / 2)^2 - 0.25 sampled at -2, 0, 2
        assert find_zero(0.75, -0.25, 0.75, 2.0) == pytest.approx((-1.0, 1.0))

    def test_find_zero_without_real_root(self, caplog):
        with caplog.at_level("WARNING", logger="ephemcore.eclipses"):
            x1, x2 = find_zero(1.0, 0.5, 1.0, 1.0)
        assert x1 == x2 == pytest.approx(0.0)
        assert "no real zero" in caplog.text


@pytest.mark.unit
class TestLunarEclipseWhen:
    def test_total_eclipse_january_2000(self, ctx, moseph):
        retflag, tret = lun_eclipse_when(ctx, 2451545.0, moseph)
        assert retflag & SE_ECL_TOTAL
        assert tret[0] == pytest.approx(JAN_2000_LUNAR_MAX, abs=10.0 / 1440.0)

    def test_contact_order(self, ctx, moseph):
        _, tret = lun_eclipse_when(ctx, 2451545.0, moseph)
        order = [tret[6], tret[2], tret[4], tret[0], tret[5], tret[3], tret[7]]
        assert order == sorted(order)
        # Totality lasted about 77 minutes
        assert (tret[5] - tret[4]) * 1440.0 == pytest.approx(77.0, abs=5.0)

    def test_backward_search(self, ctx, moseph):
        retflag, tret = lun_eclipse_when(ctx, 2451560.0, moseph, backward=True)
        # Partial eclipse of 1999-07-28
        assert retflag & SE_ECL_PARTIAL
        assert tret[0] == pytest.approx(2451387.98, abs=0.02)
        assert tret[4] == 0.0 and tret[5] == 0.0

    def test_start_date_is_excluded(self, ctx, moseph):
        _, first = lun_eclipse_when(ctx, 2451545.0, moseph)
        _, second = lun_eclipse_when(ctx, first[0], moseph)
        assert second[0] > first[0] + 20.0

    def test_type_filter(self, ctx, moseph):
        retflag, tret = lun_eclipse_when(ctx, 2451570.0, moseph, SE_ECL_TOTAL)
        # Total eclipse of 2000-07-16
        assert retflag & SE_ECL_TOTAL
        assert tret[0] == pytest.approx(2451742.08, abs=0.02)

    def test_annular_only_rejected(self, ctx, moseph):
        with pytest.raises(UnsupportedCombinationError):
            lun_eclipse_when(ctx, 2451545.0, moseph, SE_ECL_ANNULAR)

    def test_annular_bit_ignored_with_other_types(self, ctx, moseph):
        retflag, _ = lun_eclipse_when(ctx, 2451545.0, moseph, SE_ECL_ANNULAR | SE_ECL_TOTAL)
        assert retflag & SE_ECL_TOTAL

    def test_search_exhausted(self, ctx, moseph, monkeypatch):
        monkeypatch.setattr(eclipses, "MAX_LUNATIONS", 3)
        with pytest.raises(EclipseSearchError) as excinfo:
            lun_eclipse_when(ctx, 2451576.0, moseph)
        assert excinfo.value.context["lunations"] == 3


@pytest.mark.unit
class TestLunarEclipseHow:
    def test_magnitudes_at_maximum(self, ctx, moseph):
        retflag, attr = lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph)
        assert retflag == SE_ECL_TOTAL
        assert attr[0] == pytest.approx(1.33, abs=0.03)
        assert attr[1] == pytest.approx(2.34, abs=0.05)
        assert attr[8] == attr[0]
        assert attr[7] < 1.0

    def test_saros(self, ctx, moseph):
        _, attr = lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph)
        assert attr[9] == 124
        assert attr[10] == 48

    def test_no_eclipse_at_new_moon(self, ctx, moseph):
        retflag, attr = lun_eclipse_how(ctx, 2451550.26, moseph)
        assert retflag == 0
        assert attr[7] == 0.0

    def test_moon_above_horizon(self, ctx, moseph):
        retflag, attr = lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph, NEW_YORK)
        assert retflag == SE_ECL_TOTAL
        assert attr[5] > 30.0

    def test_moon_below_horizon(self, ctx, moseph):
        retflag, attr = lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph, SYDNEY)
        assert retflag == 0
        assert attr[6] < 0.0

    def test_context_not_modified(self, ctx, moseph):
        lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph, NEW_YORK)
        assert ctx.get_topo() is None

    def test_height_out_of_range(self, ctx, moseph):
        with pytest.raises(UnsupportedCombinationError):
            lun_eclipse_how(ctx, JAN_2000_LUNAR_MAX, moseph, (0.0, 0.0, 30000.0))


@pytest.mark.unit
class TestSolarEclipseLocal:
    def test_europe_august_1999(self, ctx, moseph):
        retflag, tret, attr = sol_eclipse_when_loc(ctx, 2451391.5, moseph, ULM)
        assert retflag & SE_ECL_VISIBLE
        assert retflag & SE_ECL_MAX_VISIBLE
        assert tret[0] == pytest.approx(AUG_1999_SOLAR_MAX, abs=0.01)
        assert attr[0] > 0.95

    def test_contact_order(self, ctx, moseph):
        _, tret, _ = sol_eclipse_when_loc(ctx, 2451391.5, moseph, ULM)
        assert tret[1] < tret[0] < tret[4]
        if tret[2] != 0.0:
            assert tret[1] < tret[2] < tret[0] < tret[3] < tret[4]
        # Partial phases lasted about 2 h 45 min
        assert (tret[4] - tret[1]) * 24.0 == pytest.approx(2.7, abs=0.3)

    def test_backward_search(self, ctx, moseph):
        _, tret, _ = sol_eclipse_when_loc(ctx, 2451420.0, moseph, ULM, backward=True)
        assert tret[0] < 2451420.0
        assert tret[0] == pytest.approx(AUG_1999_SOLAR_MAX, abs=0.01)

    def test_context_not_modified(self, ctx, moseph):
        sol_eclipse_when_loc(ctx, 2451391.5, moseph, ULM)
        assert ctx.get_topo() is None

    def test_height_out_of_range(self, ctx, moseph):
        with pytest.raises(UnsupportedCombinationError):
            sol_eclipse_when_loc(ctx, 2451391.5, moseph, (10.0, 48.0, -1000.0))

    def test_search_exhausted(self, ctx, moseph, monkeypatch):
        monkeypatch.setattr(eclipses, "MAX_LUNATIONS", 2)
        with pytest.raises(EclipseSearchError):
            sol_eclipse_when_loc(ctx, 2451420.0, moseph, ULM)


@pytest.mark.unit
class TestSolarEclipseHow:
    def test_circumstances_at_maximum(self, ctx, moseph):
        _, tret, _ = sol_eclipse_when_loc(ctx, 2451391.5, moseph, ULM)
        retflag, attr = sol_eclipse_how(ctx, tret[0], moseph, ULM)
        assert retflag & SE_ECL_VISIBLE
        assert attr[1] > 1.0  # Moon larger than the Sun
        assert attr[2] > 0.9
        assert attr[5] > 50.0
        assert attr[9] == 145
        assert attr[10] == 21

    def test_sun_below_horizon(self, ctx, moseph):
        retflag, attr = sol_eclipse_how(ctx, AUG_1999_SOLAR_MAX, moseph, SYDNEY)
        assert retflag == 0
        assert attr[0] == 0.0
        assert attr[9] == 0.0

    def test_no_eclipse(self, ctx, moseph):
        retflag, _ = sol_eclipse_how(ctx, AUG_1999_SOLAR_MAX + 5.0, moseph, ULM)
        assert retflag == 0


@pytest.mark.unit
class TestSaros:
    def test_members(self):
        assert saros_member(JAN_2000_LUNAR_MAX, SAROS_DATA_LUNAR) == (124, 48)
        assert saros_member(AUG_1999_SOLAR_MAX, SAROS_DATA_SOLAR) == (145, 21)

    def test_unknown(self):
        assert saros_member(JAN_2000_LUNAR_MAX + 3.0, SAROS_DATA_LUNAR) == (
            SAROS_UNKNOWN,
            SAROS_UNKNOWN,
        )


@pytest.mark.unit
class TestModuleApi:
    def test_default_context_wrappers(self, moseph):
        retflag, tret = ephem.swe_lun_eclipse_when(2451545.0, moseph, 0)
        assert retflag & SE_ECL_TOTAL
        assert isinstance(tret, tuple)
        retflag, attr = ephem.swe_lun_eclipse_how(tret[0], moseph)
        assert retflag == SE_ECL_TOTAL
        assert len(attr) == 20


@pytest.mark.integration
@pytest.mark.slow
class TestAgainstSwisseph:
    def test_lunar_eclipse_when(self, swe):
        ctx = ephem.ComputationContext()
        for start in (2451545.0, 2455000.0, 2460000.0):
            _, tret = lun_eclipse_when(ctx, start, SEFLG_MOSEPH)
            _, ref = swe.lun_eclipse_when(start, swe.FLG_MOSEPH, 0)
            assert tret[0] == pytest.approx(ref[0], abs=2.0 / 1440.0)
