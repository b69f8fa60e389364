"""
Unit tests for time functions (Julian Day, Delta T, conversions).
"""

import pytest

import ephemcore as ephem
from ephemcore.constants import *
from ephemcore.time_utils import tt_to_ut, ut_to_tt


@pytest.mark.unit
class TestJulianDay:
    """Tests for Julian Day calculation functions."""

    def test_julday_j2000(self):
        assert ephem.swe_julday(2000, 1, 1, 12.0) == pytest.approx(2451545.0, abs=1e-10)

    def test_julday_boundaries(self):
        """Test Julian Day at month/year boundaries."""
        assert ephem.swe_julday(2000, 2, 1, 0.0) > ephem.swe_julday(2000, 1, 31, 23.99)
        assert ephem.swe_julday(2000, 1, 1, 0.0) > ephem.swe_julday(1999, 12, 31, 23.99)

    def test_julday_leap_year(self):
        jd_feb29 = ephem.swe_julday(2000, 2, 29, 12.0)
        jd_mar1 = ephem.swe_julday(2000, 3, 1, 12.0)
        assert jd_mar1 - jd_feb29 == pytest.approx(1.0, abs=1e-10)

    def test_gregorian_reform(self):
        """1582-10-04 (Julian) is followed by 1582-10-15 (Gregorian)."""
        last_julian = ephem.swe_julday(1582, 10, 4, 0.0, SE_JUL_CAL)
        first_gregorian = ephem.swe_julday(1582, 10, 15, 0.0, SE_GREG_CAL)
        assert first_gregorian - last_julian == pytest.approx(1.0)
        assert first_gregorian == pytest.approx(2299160.5)

    def test_epoch_of_julian_days(self):
        assert ephem.swe_julday(-4712, 1, 1, 12.0, SE_JUL_CAL) == pytest.approx(0.0, abs=1e-10)


@pytest.mark.unit
class TestReverseJulianDay:
    """Tests for reverse Julian Day (JD to calendar date) functions."""

    def test_revjul_j2000(self):
        year, month, day, hour = ephem.swe_revjul(2451545.0)
        assert (year, month, day) == (2000, 1, 1)
        assert hour == pytest.approx(12.0)

    def test_revjul_round_trip(self, test_dates):
        for year, month, day, hour, name in test_dates:
            jd = ephem.swe_julday(year, month, day, hour)
            y, m, d, h = ephem.swe_revjul(jd)
            assert (y, m, d) == (year, month, day), name
            assert h == pytest.approx(hour, abs=1e-6), name

    def test_revjul_julian_calendar(self):
        assert ephem.swe_revjul(0.0, SE_JUL_CAL)[:3] == (-4712, 1, 1)


@pytest.mark.unit
class TestDeltaT:
    def test_deltat_j2000(self, standard_jd):
        assert ephem.swe_deltat(standard_jd) * 86400.0 == pytest.approx(63.83, abs=0.1)

    def test_deltat_recent(self):
        jd = ephem.swe_julday(2024, 1, 1, 0.0)
        assert 68.0 < ephem.swe_deltat(jd) * 86400.0 < 71.0

    def test_ut_tt_round_trip(self, test_dates):
        for year, month, day, hour, name in test_dates:
            jd_ut = ephem.swe_julday(year, month, day, hour)
            assert tt_to_ut(ut_to_tt(jd_ut)) == pytest.approx(jd_ut, abs=1e-9), name

    def test_tt_ahead_of_ut(self, standard_jd):
        assert ut_to_tt(standard_jd) > standard_jd


@pytest.mark.integration
class TestAgainstSwisseph:
    def test_julday(self, swe, test_dates):
        for year, month, day, hour, _ in test_dates:
            assert ephem.swe_julday(year, month, day, hour) == pytest.approx(
                swe.julday(year, month, day, hour), abs=1e-10
            )

    def test_deltat(self, swe, test_dates):
        for year, month, day, hour, _ in test_dates:
            jd = swe.julday(year, month, day, hour)
            assert ephem.swe_deltat(jd) * 86400.0 == pytest.approx(swe.deltat(jd) * 86400.0, abs=1.0)
