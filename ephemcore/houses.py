"""
Astrological house cusps for ephemcore.

Only a handful of systems are provided; they exercise the same inputs every
house system consumes (ARMC, geographic latitude, true obliquity, Ascendant
and MC):

- Placidus (P): time-based trisection of the semi-arcs, fails near the poles
- Porphyry (O): space-based trisection of the quadrants
- Equal (E/A): 30 deg divisions from the Ascendant
- Whole Sign (W): whole zodiac signs from the Ascendant's sign

Main Functions:
- swe_houses(): cusps and angles (ASCMC) for a time and place
- swe_houses_ex(): same, with SEFLG_SIDEREAL support
- swe_houses_armc(): cusps from ARMC and obliquity
- swe_house_name(): name of a house system

Polar Latitudes:
FIXME: Precision - Placidus is undefined inside the polar circle
(|lat| >= 90 - eps) where some ecliptic points never rise or set. It falls
back to Porphyry there, as Swiss Ephemeris does, and a warning is logged.

References:
- Meeus "Astronomical Algorithms" Ch. 13 (coordinate systems)
- Swiss Ephemeris documentation (house systems)
- Hand "Astrological Houses"
"""

import logging
import math
from typing import List, Tuple, Union

from .config import CalcConfig
from .constants import RADTODEG
from .exceptions import UnsupportedCombinationError
from .horizon import sidereal_time
from .utils import degnorm, difdeg2n

logger = logging.getLogger(__name__)

# Placidus semi-arc iteration
PLACIDUS_MAX_ITERATIONS = 100
PLACIDUS_CONVERGENCE = 1.0 / 3600000.0  # 1 mas, degrees

# Smallest |lat| used where tan(lat) is a divisor (vertex at the equator)
VERY_SMALL = 1e-10

_NAMES = {
    "P": "Placidus",
    "O": "Porphyry",
    "E": "Equal",
    "A": "Equal",
    "W": "Whole Sign",
}

HouseSystem = Union[int, str, bytes]


def _hsys_char(hsys: HouseSystem) -> str:
    if isinstance(hsys, int):
        return chr(hsys)
    if isinstance(hsys, bytes):
        return hsys.decode("utf-8")
    return hsys


def swe_house_name(hsys: HouseSystem) -> str:
    """Get the name of a house system ("Unknown" if not provided)."""
    return _NAMES.get(_hsys_char(hsys), "Unknown")


# =============================================================================
# ANGLES
# =============================================================================


def ecliptic_from_ra(ra: float, eps: float) -> float:
    """Longitude of the ecliptic point with right ascension ra (degrees)."""
    ra_r = math.radians(ra)
    return degnorm(math.degrees(math.atan2(math.sin(ra_r), math.cos(ra_r) * math.cos(math.radians(eps)))))


def midheaven(armc: float, eps: float) -> float:
    return ecliptic_from_ra(armc, eps)


def ascendant(armc: float, lat: float, eps: float) -> float:
    """
    Ecliptic longitude rising in the east.

    tan(Asc) = cos(ARMC) / -(sin(ARMC) cos(eps) + tan(lat) sin(eps))
    """
    armc_r = math.radians(armc)
    eps_r = math.radians(eps)
    num = math.cos(armc_r)
    den = -(math.sin(armc_r) * math.cos(eps_r) + math.tan(math.radians(lat)) * math.sin(eps_r))
    return degnorm(math.degrees(math.atan2(num, den)))


def _vertex(armc: float, eps: float, lat: float) -> float:
    """Intersection of the prime vertical and the ecliptic in the west."""
    if abs(lat) < VERY_SMALL:
        lat = VERY_SMALL
    armc_r = math.radians(armc)
    eps_r = math.radians(eps)
    num = -math.cos(armc_r)
    den = math.sin(armc_r) * math.cos(eps_r) - math.sin(eps_r) / math.tan(math.radians(lat))
    vtx = degnorm(math.degrees(math.atan2(num, den)))
    # West of the meridian
    if (vtx - armc) % 360.0 < 180.0:
        vtx = degnorm(vtx + 180.0)
    return vtx


def _angles(armc: float, lat: float, eps: float) -> List[float]:
    """ASCMC: Asc, MC, ARMC, Vertex, Equatorial Asc, co-Asc (Koch), co-Asc (Munkasey), polar Asc."""
    asc = ascendant(armc, lat, eps)
    mc = midheaven(armc, eps)
    if lat >= 0:
        co_asc2 = ascendant(armc, 90.0 - lat, eps)
    else:
        co_asc2 = ascendant(armc, -90.0 - lat, eps)
    return [
        asc,
        mc,
        armc,
        _vertex(armc, eps, lat),
        ecliptic_from_ra(armc + 90.0, eps),
        degnorm(ascendant(armc - 180.0, lat, eps) + 180.0),
        co_asc2,
        ascendant(armc - 180.0, lat, eps),
    ]


# =============================================================================
# HOUSE SYSTEMS
# =============================================================================


def _opposites(cusps: List[float]) -> List[float]:
    for i in (1, 2, 3, 10, 11, 12):
        cusps[(i + 5) % 12 + 1] = degnorm(cusps[i] + 180.0)
    return cusps


def _houses_equal(asc: float) -> List[float]:
    cusps = [0.0] * 13
    for i in range(1, 13):
        cusps[i] = degnorm(asc + (i - 1) * 30.0)
    return cusps


def _houses_whole_sign(asc: float) -> List[float]:
    """Each house is one sign; house 1 starts at 0 deg of the Ascendant's sign."""
    return _houses_equal(math.floor(asc / 30.0) * 30.0)


def _houses_porphyry(asc: float, mc: float) -> List[float]:
    """
    Porphyry house system.

    Trisects the ecliptic arcs MC -> Asc and Asc -> IC; the other cusps are
    the opposite points.
    """
    cusps = [0.0] * 13
    cusps[1] = asc
    cusps[10] = mc
    step = degnorm(asc - mc) / 3.0
    cusps[11] = degnorm(mc + step)
    cusps[12] = degnorm(mc + 2 * step)
    step = degnorm(mc + 180.0 - asc) / 3.0
    cusps[2] = degnorm(asc + step)
    cusps[3] = degnorm(asc + 2 * step)
    return _opposites(cusps)


def _placidus_cusp(armc: float, lat: float, eps: float, fraction: float,
                   below_horizon: bool):
    """
    Right ascension of a Placidus cusp by fixed-point iteration.

    The cusp is the ecliptic point whose hour angle is the given fraction of
    its semi-arc: above the horizon RA = ARMC + f (90 + AD), below it
    RA = ARMC + 180 - f (90 - AD), with AD = asin(tan(lat) tan(dec)).

    Returns:
        Ecliptic longitude, or None if the point is circumpolar
    """
    tan_lat = math.tan(math.radians(lat))
    tan_eps = math.tan(math.radians(eps))
    if below_horizon:
        ra = degnorm(armc + 180.0 - fraction * 90.0)
    else:
        ra = degnorm(armc + fraction * 90.0)

    for _ in range(PLACIDUS_MAX_ITERATIONS):
        tan_dec = math.sin(math.radians(ra)) * tan_eps
        prod = tan_lat * tan_dec
        if abs(prod) > 1.0:
            return None
        ad = math.degrees(math.asin(prod))
        if below_horizon:
            new_ra = degnorm(armc + 180.0 - fraction * (90.0 - ad))
        else:
            new_ra = degnorm(armc + fraction * (90.0 + ad))
        converged = abs(difdeg2n(new_ra, ra)) < PLACIDUS_CONVERGENCE
        ra = new_ra
        if converged:
            break
    return ecliptic_from_ra(ra, eps)


def _houses_placidus(armc: float, lat: float, eps: float, asc: float, mc: float) -> List[float]:
    """
    Placidus house system (time-based divisions of diurnal/nocturnal arcs).

    Args:
        armc: Local sidereal time in degrees
        lat: Geographic latitude in degrees
        eps: True obliquity of ecliptic in degrees
        asc: Ascendant longitude in degrees (house 1)
        mc: Midheaven longitude in degrees (house 10)

    Returns:
        List of 13 house cusp longitudes (index 0 unused)
    """
    if abs(lat) >= 90.0 - eps:
        logger.warning("Placidus undefined at latitude %.4f, using Porphyry", lat)
        return _houses_porphyry(asc, mc)

    c11 = _placidus_cusp(armc, lat, eps, 1.0 / 3.0, False)
    c12 = _placidus_cusp(armc, lat, eps, 2.0 / 3.0, False)
    c2 = _placidus_cusp(armc, lat, eps, 2.0 / 3.0, True)
    c3 = _placidus_cusp(armc, lat, eps, 1.0 / 3.0, True)
    if None in (c11, c12, c2, c3):
        logger.warning("Placidus cusp circumpolar at latitude %.4f, using Porphyry", lat)
        return _houses_porphyry(asc, mc)

    cusps = [0.0] * 13
    cusps[1] = asc
    cusps[10] = mc
    cusps[11] = c11
    cusps[12] = c12
    cusps[2] = c2
    cusps[3] = c3
    return _opposites(cusps)


# =============================================================================
# API
# =============================================================================


def houses_armc(armc: float, lat: float, eps: float,
                hsys: HouseSystem) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """
    House cusps from ARMC, latitude and true obliquity (all degrees).

    Returns:
        (cusps, ascmc): 12 cusps (houses 1-12) and 8 angles

    Raises:
        UnsupportedCombinationError: Unknown house system or latitude out of range
    """
    if not -90.0 <= lat <= 90.0:
        raise UnsupportedCombinationError("latitude out of range", lat=lat)
    code = _hsys_char(hsys)
    ascmc = _angles(degnorm(armc), lat, eps)
    asc, mc = ascmc[0], ascmc[1]

    if code == "P":
        cusps = _houses_placidus(ascmc[2], lat, eps, asc, mc)
    elif code == "O":
        cusps = _houses_porphyry(asc, mc)
    elif code in ("E", "A"):
        cusps = _houses_equal(asc)
    elif code == "W":
        cusps = _houses_whole_sign(asc)
    else:
        raise UnsupportedCombinationError("house system not supported", hsys=code)
    return tuple(cusps[1:13]), tuple(ascmc)


def houses_with_context(ctx, tjd_ut: float, lat: float, lon: float, hsys: HouseSystem,
                        iflag: int = 0) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """
    House cusps for a time and place.

    ARMC comes from Greenwich apparent sidereal time (Skyfield), the
    obliquity is the true obliquity of date from the context's models.
    With SEFLG_SIDEREAL the ayanamsha (including nutation) is subtracted
    from cusps and from the ecliptic angles.
    """
    from .sidereal import get_ayanamsa
    from .time_utils import ut_to_tt

    config = CalcConfig.from_flags(iflag)
    jd_tt = ut_to_tt(tjd_ut)
    eps = (ctx.obliquity(jd_tt).eps + ctx.nutation(jd_tt).deps) * RADTODEG
    armc = degnorm(sidereal_time(tjd_ut) * 15.0 + lon)
    cusps, ascmc = houses_armc(armc, lat, eps, hsys)

    if config.sidereal:
        ayan = get_ayanamsa(ctx, jd_tt, nutation=True, source=config.source)
        cusps = tuple(degnorm(c - ayan) for c in cusps)
        ascmc = tuple(
            a if i == 2 else degnorm(a - ayan) for i, a in enumerate(ascmc)
        )
    return cusps, ascmc


def swe_houses(tjdut: float, lat: float, lon: float,
               hsys: HouseSystem) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """
    Computes house cusps and ascmc.

    Returns (cusps, ascmc): cusps is a tuple of 12 floats (houses 1-12),
    ascmc a tuple of 8 floats.
    """
    from .state import get_default_context

    return houses_with_context(get_default_context(), tjdut, lat, lon, hsys)


def swe_houses_ex(tjdut: float, lat: float, lon: float, hsys: HouseSystem,
                  flags: int = 0) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    """
    Extended house calculation (supports sidereal).

    Args:
        tjdut: Julian Day in UT
        lat: Latitude in degrees
        lon: Longitude in degrees
        hsys: House system (int, str or bytes)
        flags: Calculation flags (e.g., SEFLG_SIDEREAL)
    """
    from .state import get_default_context

    return houses_with_context(get_default_context(), tjdut, lat, lon, hsys, flags)


def swe_houses_armc(armc: float, lat: float, eps: float,
                    hsys: HouseSystem) -> Tuple[Tuple[float, ...], Tuple[float, ...]]:
    return houses_armc(armc, lat, eps, hsys)
