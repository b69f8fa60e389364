"""
Time conversion utilities for ephemcore.

Implements standard astronomical time functions for conversions between:
- Calendar dates and Julian Day numbers
- Gregorian and Julian calendar systems
- UT1 (Universal Time) and TT (Terrestrial Time)

Functions match the Swiss Ephemeris API for compatibility.
Calendar algorithms follow Meeus "Astronomical Algorithms" (1998); Delta T
comes from Skyfield's timescale (IERS tables, long-term parabola outside).
"""

import math
from typing import Tuple

from .constants import SE_GREG_CAL
from .state import get_timescale

SECONDS_PER_DAY = 86400.0
UT_TT_ITERATIONS = 3

# First Gregorian day, 1582-10-15
GREGORIAN_REFORM_JD = 2299161


def swe_julday(
    year: int, month: int, day: int, hour: float = 12.0, gregflag: int = SE_GREG_CAL
) -> float:
    """
    Convert calendar date to Julian Day number.

    Args:
        year: Calendar year (astronomical numbering, 0 = 1 BCE)
        month: Month (1-12)
        day: Day of month (1-31)
        hour: Decimal hour (0.0-23.999...)
        gregflag: SE_GREG_CAL (1) for Gregorian, SE_JUL_CAL (0) for Julian

    Returns:
        float: Julian Day number (days since JD 0.0 = noon Jan 1, 4713 BCE)

    Note:
        Transition date: Oct 15, 1582 (Gregorian) = Oct 5, 1582 (Julian)
        JD 2451545.0 = Jan 1, 2000 12:00 TT (J2000.0 epoch)
    """
    if month <= 2:
        year -= 1
        month += 12

    if gregflag == SE_GREG_CAL:
        a = math.floor(year / 100)
        b = 2 - a + math.floor(a / 4)
    else:
        b = 0

    jd = (
        math.floor(365.25 * (year + 4716))
        + math.floor(30.6001 * (month + 1))
        + day
        + hour / 24.0
        + b
        - 1524.5
    )
    return float(jd)


def swe_revjul(jd: float, gregflag: int = SE_GREG_CAL) -> Tuple[int, int, int, float]:
    """
    Convert Julian Day number to calendar date.

    Args:
        jd: Julian Day number
        gregflag: SE_GREG_CAL (1) for Gregorian, SE_JUL_CAL (0) for Julian

    Returns:
        tuple: (year, month, day, hour) with hour in decimal hours
    """
    jd = jd + 0.5
    z = math.floor(jd)
    f = jd - z

    if gregflag == SE_GREG_CAL and z >= GREGORIAN_REFORM_JD:
        alpha = math.floor((z - 1867216.25) / 36524.25)
        a = z + 1 + alpha - math.floor(alpha / 4)
    else:
        a = z

    b = a + 1524
    c = math.floor((b - 122.1) / 365.25)
    d = math.floor(365.25 * c)
    e = math.floor((b - d) / 30.6001)

    day = b - d - math.floor(30.6001 * e) + f
    month = e - 1 if e < 14 else e - 13
    year = c - 4716 if month > 2 else c - 4715

    d_int = math.floor(day)
    hour = (day - d_int) * 24.0
    return int(year), int(month), int(d_int), hour


def swe_deltat(tjd: float) -> float:
    """
    Delta T (TT - UT1) for a given Julian Day.

    Args:
        tjd: Julian Day number in UT1

    Returns:
        float: Delta T in days

    Note:
        For modern dates about 0.0008 days (69 seconds in 2024).
    """
    t = get_timescale().ut1_jd(tjd)
    return float(t.delta_t) / SECONDS_PER_DAY


def ut_to_tt(tjd_ut: float) -> float:
    """Julian Day UT1 -> TT."""
    return tjd_ut + swe_deltat(tjd_ut)


def tt_to_ut(tjd_tt: float) -> float:
    """
    Julian Day TT -> UT1.

    Delta T is a function of UT, so the inverse is found by fixed-point
    iteration; three rounds converge far below a microsecond.
    """
    tjd_ut = tjd_tt - swe_deltat(tjd_tt)
    for _ in range(UT_TT_ITERATIONS - 1):
        tjd_ut = tjd_tt - swe_deltat(tjd_ut)
    return tjd_ut
