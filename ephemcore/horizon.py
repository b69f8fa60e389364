"""
Horizontal coordinates and atmospheric refraction for ephemcore.

Used by the eclipse engine to decide the visibility of contacts, and exposed
with the Swiss Ephemeris signatures:

- swe_azalt(): ecliptic/equatorial -> azimuth and altitude
- swe_azalt_rev(): azimuth and altitude -> ecliptic/equatorial
- swe_refrac(): Bennett / Saemundsson refraction
- swe_refrac_extended(): refraction with observer height and horizon dip

Azimuth is measured from the south point, westward (Swiss Ephemeris
convention).

References:
- Bennett, G.G. 1982, J. Navigation 35, 255 (refraction)
- Saemundsson, T. 1986, Sky & Telescope 72, 70
- Meeus, "Astronomical Algorithms" (1998), ch. 16
"""

import math
from typing import Sequence, Tuple

from .constants import (
    DEGTORAD,
    EARTH_RADIUS,
    RADTODEG,
    SE_ECL2HOR,
    SE_HOR2ECL,
    SE_LAPSE_RATE,
    SE_TRUE_TO_APP,
    STANDARD_PRESSURE,
)
from .state import get_timescale
from .utils import degnorm
from .vectors import cart_pol, coortrf, pol_cart

# Refraction formulas switch to the cotangent law above this altitude (deg)
BENNETT_HIGH_ALTITUDE = 15.0
REFRACTION_MIN_ALTITUDE = -5.0
EXTENDED_HIGH_ALTITUDE = 17.904104638432
EXTENDED_MIN_ALTITUDE = -10.0
REFRACTION_ITERATIONS = 5

# Standard atmosphere: pressure scale with height
PRESSURE_HEIGHT_FACTOR = 0.0065 / 288.0
PRESSURE_EXPONENT = 5.255


def cotrans(xpo: Sequence[float], eps: float) -> Tuple[float, float, float]:
    """
    Rotate polar coordinates about the x axis by eps degrees.

    Positive eps turns equatorial into ecliptic coordinates, negative eps
    the reverse.

    Args:
        xpo: (lon, lat, dist) in degrees
        eps: Rotation angle in degrees
    """
    x = pol_cart([xpo[0] * DEGTORAD, xpo[1] * DEGTORAD, xpo[2]])
    p = cart_pol(coortrf(x, eps * DEGTORAD))
    return degnorm(p[0] * RADTODEG), p[1] * RADTODEG, p[2]


def sidereal_time(tjd_ut: float) -> float:
    """Greenwich apparent sidereal time in hours."""
    return float(get_timescale().ut1_jd(tjd_ut).gast)


def _true_obliquity(ctx, tjd_ut: float) -> float:
    from .time_utils import ut_to_tt

    jd_tt = ut_to_tt(tjd_ut)
    return (ctx.obliquity(jd_tt).eps + ctx.nutation(jd_tt).deps) * RADTODEG


def standard_pressure(altitude_m: float) -> float:
    """Atmospheric pressure in hPa at a height above sea level."""
    return STANDARD_PRESSURE * (1.0 - PRESSURE_HEIGHT_FACTOR * altitude_m) ** PRESSURE_EXPONENT


def azalt(ctx, tjd_ut: float, calc_flag: int, geopos: Sequence[float],
          atpress: float, attemp: float, xin: Sequence[float]) -> Tuple[float, float, float]:
    """
    Horizontal coordinates of a point.

    Args:
        ctx: ComputationContext (obliquity and nutation for SE_ECL2HOR)
        tjd_ut: Julian Day (UT)
        calc_flag: SE_ECL2HOR (xin is ecliptic of date) or SE_EQU2HOR
        geopos: (lon, lat, alt) of the observer, degrees and meters
        atpress: Pressure in hPa; 0 derives it from the altitude
        attemp: Temperature in degrees Celsius
        xin: (lon, lat) or (ra, dec) in degrees, true equinox of date

    Returns:
        (azimuth, true altitude, apparent altitude) in degrees
    """
    xra = [xin[0], xin[1], 1.0]
    if calc_flag == SE_ECL2HOR:
        xra = list(cotrans(xra, -_true_obliquity(ctx, tjd_ut)))

    armc = degnorm(sidereal_time(tjd_ut) * 15.0 + geopos[0])
    mdd = degnorm(xra[0] - armc)
    x = cotrans([degnorm(mdd - 90.0), xra[1], 1.0], 90.0 - geopos[1])
    azimuth = degnorm(360.0 - degnorm(x[0] + 90.0))
    true_alt = x[1]

    if atpress == 0.0:
        atpress = standard_pressure(geopos[2])
    app_alt, _ = swe_refrac_extended(true_alt, geopos[2], atpress, attemp,
                                     SE_LAPSE_RATE, SE_TRUE_TO_APP)
    return azimuth, true_alt, app_alt


def azalt_rev(ctx, tjd_ut: float, calc_flag: int, geopos: Sequence[float],
              xin: Sequence[float]) -> Tuple[float, float]:
    """
    Inverse of azalt() for true (unrefracted) altitudes.

    Returns:
        (lon, lat) for SE_HOR2ECL or (ra, dec) for SE_HOR2EQU, degrees
    """
    armc = degnorm(sidereal_time(tjd_ut) * 15.0 + geopos[0])
    az = degnorm(360.0 - xin[0] - 90.0)
    x = cotrans([az, xin[1], 1.0], geopos[1] - 90.0)
    x = [degnorm(x[0] + armc + 90.0), x[1], 1.0]
    if calc_flag == SE_HOR2ECL:
        x = list(cotrans(x, _true_obliquity(ctx, tjd_ut)))
    return x[0], x[1]


def swe_azalt(tjd_ut: float, calc_flag: int, geopos: Sequence[float],
              atpress: float, attemp: float, xin: Sequence[float]) -> Tuple[float, float, float]:
    """Swiss Ephemeris compatible azalt() on the default context."""
    from .state import get_default_context

    return azalt(get_default_context(), tjd_ut, calc_flag, geopos, atpress, attemp, xin)


def swe_azalt_rev(tjd_ut: float, calc_flag: int, geopos: Sequence[float],
                  xin: Sequence[float]) -> Tuple[float, float]:
    from .state import get_default_context

    return azalt_rev(get_default_context(), tjd_ut, calc_flag, geopos, xin)


def swe_refrac(inalt: float, atpress: float, attemp: float, calc_flag: int) -> float:
    """
    Atmospheric refraction.

    Args:
        inalt: True altitude (SE_TRUE_TO_APP) or apparent altitude
            (SE_APP_TO_TRUE) in degrees
        atpress: Pressure in hPa
        attemp: Temperature in degrees Celsius
        calc_flag: SE_TRUE_TO_APP or SE_APP_TO_TRUE

    Returns:
        Converted altitude in degrees. Bodies below the horizon are returned
        unchanged.

    Note:
        True -> apparent uses Saemundsson's formula (cotangent series above
        15 deg), apparent -> true uses Bennett's formula.
    """
    pt_factor = atpress / 1010.0 * 283.0 / (273.0 + attemp)
    if calc_flag == SE_TRUE_TO_APP:
        if inalt > BENNETT_HIGH_ALTITUDE:
            a = math.tan((90.0 - inalt) * DEGTORAD)
            refr = (58.276 * a - 0.0824 * a * a * a) * pt_factor / 3600.0
        elif inalt > REFRACTION_MIN_ALTITUDE:
            a = inalt + 10.3 / (inalt + 5.11)
            if a + 1e-10 >= 90.0:
                refr = 0.0
            else:
                refr = 1.02 / math.tan(a * DEGTORAD) * pt_factor / 60.0
        else:
            refr = 0.0
        if inalt + refr > 0:
            return inalt + refr
        return inalt

    a = inalt + 7.31 / (inalt + 4.4)
    if a + 1e-10 >= 90.0:
        refr = 0.0
    else:
        refr = 1.0 / math.tan(a * DEGTORAD)
        refr -= 0.06 * math.sin(14.7 * refr + 13.0)
    refr *= pt_factor / 60.0
    if inalt - refr > 0:
        return inalt - refr
    return inalt


def _astronomical_refraction(inalt: float, atpress: float, attemp: float) -> float:
    if inalt > EXTENDED_HIGH_ALTITUDE:
        r = 0.97 / math.tan(inalt * DEGTORAD)
    else:
        r = (34.46 + 4.23 * inalt + 0.004 * inalt * inalt) / (
            1.0 + 0.505 * inalt + 0.0845 * inalt * inalt
        )
    return (atpress - 80.0) / 930.0 / (1.0 + 0.00008 * (r + 39.0) * (attemp - 10.0)) * r / 60.0


def horizon_dip(geoalt: float, atpress: float, attemp: float, lapse_rate: float) -> float:
    """Dip of the horizon in degrees (negative) for an observer at geoalt meters."""
    krefr = (0.0342 + lapse_rate) / (0.154 * 0.0238)
    d = 1.0 - 1.8480 * krefr * atpress / (273.15 + attemp) / (273.15 + attemp)
    return -RADTODEG * math.acos(1.0 / (1.0 + geoalt / EARTH_RADIUS)) * math.sqrt(max(0.0, d))


def swe_refrac_extended(inalt: float, geoalt: float, atpress: float, attemp: float,
                        lapse_rate: float, calc_flag: int):
    """
    Refraction for an observer above sea level.

    Returns:
        (altitude, (true alt, apparent alt, refraction, horizon dip))
    """
    dip = horizon_dip(geoalt, atpress, attemp, lapse_rate)
    if inalt > 90.0:
        inalt = 180.0 - inalt

    if calc_flag == SE_TRUE_TO_APP:
        if inalt < EXTENDED_MIN_ALTITUDE:
            return inalt, (inalt, inalt, 0.0, dip)
        # Secant iteration for the apparent altitude whose refraction
        # brings it down to inalt
        y = inalt
        d = 0.0
        yy0 = 0.0
        d0 = 0.0
        for _ in range(REFRACTION_ITERATIONS):
            d = _astronomical_refraction(y, atpress, attemp)
            n = y - yy0
            yy0 = d - d0 - n
            if n != 0.0 and yy0 != 0.0:
                n = y - n * (inalt + d - y) / yy0
            else:
                n = inalt + d
            yy0 = y
            d0 = d
            y = n
        if inalt + d < dip:
            return inalt, (inalt, inalt, 0.0, dip)
        return inalt + d, (inalt, inalt + d, d, dip)

    refr = _astronomical_refraction(inalt, atpress, attemp)
    trualt = inalt - refr
    if inalt >= dip:
        return trualt, (trualt, inalt, refr, dip)
    return inalt, (inalt, inalt, 0.0, dip)
