"""
Planetary position calculations for ephemcore.

This is the entry point of the position API: swe_calc() / swe_calc_ut() and
ComputationContext.calc() decode the SEFLG_* bitmask into a CalcConfig and
dispatch on the body.

Supported Bodies:
- Sun, Moon, Mercury .. Pluto, Earth: provider state through the apparent
  position pipeline
- SE_MEAN_NODE, SE_MEAN_APOG: mean lunar node and apogee (Black Moon Lilith)
- SE_TRUE_NODE, SE_OSCU_APOG: osculating lunar node and apogee
- SE_ECL_NUT: obliquity and nutation

Coordinate Systems:
- Geocentric tropical (default)
- Heliocentric (SEFLG_HELCTR) and barycentric (SEFLG_BARYCTR)
- Topocentric (requires set_topo)
- Sidereal (requires set_sid_mode)
"""

import logging
from typing import Tuple

from .config import CalcConfig, ReferenceCenter
from .constants import (
    RADTODEG,
    SE_ECL_NUT,
    SE_MEAN_APOG,
    SE_MEAN_NODE,
    SE_MOON,
    SE_NODBIT_MEAN,
    SE_NODBIT_OSCU,
    SE_OSCU_APOG,
    SE_TRUE_NODE,
)
from .exceptions import UnsupportedCombinationError
from .pipeline import compute_apparent
from .providers import PROVIDER_BODIES

logger = logging.getLogger(__name__)

Position = Tuple[float, float, float, float, float, float]

# Lunar points served by the orbital elements engine:
# body -> (SE_NODBIT_* method, index in the nodes/apsides result)
_LUNAR_POINTS = {
    SE_MEAN_NODE: (SE_NODBIT_MEAN, 0),
    SE_MEAN_APOG: (SE_NODBIT_MEAN, 3),
    SE_TRUE_NODE: (SE_NODBIT_OSCU, 0),
    SE_OSCU_APOG: (SE_NODBIT_OSCU, 3),
}


def _ecl_nut(ctx, jd_tt: float) -> Position:
    """(true obliquity, mean obliquity, dpsi, deps, 0, 0) in degrees."""
    eps = ctx.obliquity(jd_tt).eps
    nut = ctx.nutation(jd_tt)
    return (
        (eps + nut.deps) * RADTODEG,
        eps * RADTODEG,
        nut.dpsi * RADTODEG,
        nut.deps * RADTODEG,
        0.0,
        0.0,
    )


def calc_with_context(ctx, tjd: float, ipl: int, iflag: int) -> Tuple[Position, int]:
    """
    Position of a body for Ephemeris Time, using an explicit context.

    Args:
        ctx: ComputationContext
        tjd: Julian Day (TT)
        ipl: Body (SE_SUN .. SE_PLUTO, SE_EARTH, lunar nodes/apogees, SE_ECL_NUT)
        iflag: Calculation flags (SEFLG_*)

    Returns:
        (position, retflag)

    Raises:
        UnsupportedCombinationError: Unknown body or invalid flag combination
        EphemerisUnavailableError: No provider covers body and date
    """
    config = CalcConfig.from_flags(iflag)

    if ipl == SE_ECL_NUT:
        return _ecl_nut(ctx, tjd), config.to_flags()

    if ipl in PROVIDER_BODIES:
        xx, retflag = compute_apparent(ctx, tjd, ipl, config)
        return tuple(float(c) for c in xx), retflag

    if ipl in _LUNAR_POINTS:
        if config.center in (ReferenceCenter.HELIO, ReferenceCenter.BARY):
            raise UnsupportedCombinationError(
                "heliocentric or barycentric lunar nodes and apsides are not supported",
                body=ipl,
            )
        from .nodes_apsides import compute_nodes_apsides

        method, index = _LUNAR_POINTS[ipl]
        result, retflag = compute_nodes_apsides(ctx, tjd, SE_MOON, config, method)
        return tuple(float(c) for c in result[index]), retflag

    raise UnsupportedCombinationError("unknown body", body=ipl)


def swe_calc_ut(tjd_ut: float, ipl: int, iflag: int) -> Tuple[Position, int]:
    """
    Calculate planetary position for Universal Time.

    Swiss Ephemeris compatible function.

    Args:
        tjd_ut: Julian Day in Universal Time (UT1)
        ipl: Planet/body ID (SE_SUN, SE_MOON, etc.)
        iflag: Calculation flags (SEFLG_SPEED, SEFLG_HELCTR, etc.)

    Returns:
        Tuple containing:
            - Position tuple: (longitude, latitude, distance, speed_lon, speed_lat, speed_dist)
            - Return flag: flags actually used, with the ephemeris bit of the
              provider that served the request

    Coordinate Output:
        - longitude: Ecliptic longitude in degrees (0-360)
        - latitude: Ecliptic latitude in degrees
        - distance: Distance in AU
        - speed_*: Daily motion in respective coordinates (zero without SEFLG_SPEED)

    Example:
        >>> pos, retflag = swe_calc_ut(2451545.0, SE_MARS, SEFLG_SPEED)
        >>> lon, lat, dist = pos[0], pos[1], pos[2]
    """
    from .state import get_default_context

    return get_default_context().calc_ut(tjd_ut, ipl, iflag)


def swe_calc(tjd: float, ipl: int, iflag: int) -> Tuple[Position, int]:
    """
    Calculate planetary position for Ephemeris Time (ET/TT).

    Swiss Ephemeris compatible function. Similar to swe_calc_ut() but takes
    Terrestrial Time (TT, also known as Ephemeris Time) instead of Universal Time.

    Note:
        TT (Terrestrial Time) differs from UT (Universal Time) by Delta T,
        which varies from ~32 seconds (year 1950) to minutes (historical times).

    Example:
        >>> pos, retflag = swe_calc(2451545.0, SE_JUPITER, SEFLG_SPEED)
    """
    from .state import get_default_context

    return calc_with_context(get_default_context(), tjd, ipl, iflag)
