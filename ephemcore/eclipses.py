"""
Solar and lunar eclipse search for ephemcore.

Main Functions:
- lun_eclipse_when(): next/previous lunar eclipse (global)
- lun_eclipse_how(): type, magnitudes and Saros membership at a given time
- sol_eclipse_when_loc(): next/previous solar eclipse visible from a place
- sol_eclipse_how(): local circumstances of a solar eclipse at a given time

Search strategy:
1. Meeus' lunation number K gives a start estimate for each syzygy; lunations
   whose argument of latitude is far from a node are skipped without any
   ephemeris call.
2. The time of greatest eclipse is found by fitting parabolas through three
   samples and shrinking the step geometrically.
3. Contacts are found as zeros of the same parabola and refined by linear
   (secant) steps at shrinking intervals.
4. The loop over lunations is bounded by MAX_LUNATIONS; exhausting it raises
   EclipseSearchError.

All times passed in and returned are Julian Days in UT.

References:
- Meeus, "Astronomical Algorithms" (1998), ch. 49 and 54
- Explanatory Supplement to the Astronomical Almanac (1992), ch. 8
- Danjon, A. 1951 (enlargement of the Earth's shadow)
"""

import copy
import logging
import math
from typing import List, Optional, Sequence, Tuple

from .constants import (
    AUNIT,
    DEGTORAD,
    EARTH_RADIUS,
    J2000,
    RADTODEG,
    SE_ECL_1ST_VISIBLE,
    SE_ECL_2ND_VISIBLE,
    SE_ECL_3RD_VISIBLE,
    SE_ECL_4TH_VISIBLE,
    SE_ECL_ANNULAR,
    SE_ECL_ANNULAR_TOTAL,
    SE_ECL_CENTRAL,
    SE_ECL_MAX_VISIBLE,
    SE_ECL_NONCENTRAL,
    SE_ECL_PARTIAL,
    SE_ECL_PENUMBRAL,
    SE_ECL_TOTAL,
    SE_ECL_VISIBLE,
    SE_EQU2HOR,
    SE_MOON,
    SE_SUN,
    SEFLG_EPHMASK,
    SEFLG_EQUATORIAL,
    SEFLG_TOPOCTR,
    SEFLG_XYZ,
)
from .exceptions import EclipseSearchError, UnsupportedCombinationError
from .horizon import azalt
from .saros import SAROS_DATA_LUNAR, SAROS_DATA_SOLAR, saros_member
from .time_utils import tt_to_ut, ut_to_tt
from .utils import degnorm
from .vectors import dot, norm

logger = logging.getLogger(__name__)

# Radii in AU
RSUN = 696000000.0 / AUNIT
RMOON = 1737400.0 / AUNIT
REARTH = EARTH_RADIUS / AUNIT
DMOON = 2.0 * RMOON
DSUN = 2.0 * RSUN
DEARTH = 2.0 * REARTH

# Upper bound on the lunations examined by one search
MAX_LUNATIONS = 1500

# Observer heights accepted for local circumstances, meters
ECL_GEOALT_MIN = -500.0
ECL_GEOALT_MAX = 25000.0

# Lunations with |F| (argument of latitude mod 180) between these limits
# cannot produce an eclipse
NODE_DISTANCE_MIN = 21.0
NODE_DISTANCE_MAX = 159.0

# Shadow cones: atmosphere enlarges the Earth's shadow by 1/50 (Danjon),
# the oblate Earth shrinks it again
SHADOW_ENLARGEMENT = 1.0 + 1.0 / 50.0
UMBRA_OBLATENESS = 0.99405
PENUMBRA_OBLATENESS = 0.98813

# Refinement steps, days
TWO_HOURS = 2.0 / 24.0
TEN_MINUTES = 10.0 / 24.0 / 60.0
TWO_MINUTES = 2.0 / 24.0 / 60.0
TEN_SECONDS = 10.0 / 24.0 / 60.0 / 60.0
START_MARGIN = 0.0001

# Conventional atmosphere for the eclipse visibility test
ECL_ATPRESS = 0.0
ECL_ATTEMP = 10.0

ATTR_SIZE = 20
TRET_SIZE = 10


# =============================================================================
# NUMERICAL HELPERS
# =============================================================================


def find_maximum(y0: float, y1: float, y2: float, dx: float) -> Tuple[float, float]:
    """
    Vertex of the parabola through (-dx, y0), (0, y1), (dx, y2).

    Returns:
        (offset of the vertex from the middle sample, value at the vertex)
    """
    c = y1
    b = (y2 - y0) / 2.0
    a = (y2 + y0) / 2.0 - c
    if a == 0.0:
        return 0.0, y1
    x = -b / 2.0 / a
    return x * dx, (4.0 * a * c - b * b) / 4.0 / a


def find_zero(y0: float, y1: float, y2: float, dx: float) -> Tuple[float, float]:
    """
    Zeros of the parabola through (-dx, y0), (0, y1), (dx, y2).

    Returns:
        (earlier, later) offsets from the middle sample
    """
    c = y1
    b = (y2 - y0) / 2.0
    a = (y2 + y0) / 2.0 - c
    if a == 0.0:
        return 0.0, 0.0
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        logger.warning("contact parabola has no real zero, using its vertex")
        disc = 0.0
    sq = math.sqrt(disc)
    x1 = (-b + sq) / 2.0 / a * dx
    x2 = (-b - sq) / 2.0 / a * dx
    return min(x1, x2), max(x1, x2)


def _meeus_syzygy(k: float) -> Tuple[float, float]:
    """
    Approximate time (TT) of the new moon (integer k) or full moon (k + 0.5).

    Returns:
        (Julian Day TT, argument of latitude F in degrees)
    """
    t = k / 1236.85
    t2 = t * t
    t3 = t2 * t
    t4 = t3 * t
    f = degnorm(160.7108 + 390.67050274 * k - 0.0016341 * t2
                - 0.00000227 * t3 + 0.000000011 * t4)
    tjd = (2451550.09765 + 29.530588853 * k + 0.0001337 * t2
           - 0.000000150 * t3 + 0.00000000073 * t4)
    m = degnorm(2.5534 + 29.10535669 * k - 0.0000218 * t2 - 0.00000011 * t3) * DEGTORAD
    mm = degnorm(201.5643 + 385.81693528 * k + 0.1017438 * t2
                 + 0.00001239 * t3 + 0.000000058 * t4) * DEGTORAD
    om = degnorm(124.7746 - 1.56375580 * k + 0.0020691 * t2 + 0.00000215 * t3) * DEGTORAD
    e = 1.0 - 0.002516 * t - 0.0000074 * t2
    a1 = degnorm(299.77 + 0.107408 * k - 0.009173 * t2) * DEGTORAD
    f1 = f * DEGTORAD - 0.02665 * math.sin(om) * DEGTORAD

    tjd += (-0.4075 * math.sin(mm)
            + 0.1721 * e * math.sin(m)
            + 0.0161 * math.sin(2 * mm)
            - 0.0097 * math.sin(2 * f1)
            + 0.0073 * e * math.sin(mm - m)
            - 0.0050 * e * math.sin(mm + m)
            - 0.0023 * math.sin(mm - 2 * f1)
            + 0.0021 * e * math.sin(2 * m)
            + 0.0012 * math.sin(mm + 2 * f1)
            + 0.0006 * e * math.sin(2 * mm + m)
            - 0.0004 * math.sin(3 * mm)
            - 0.0003 * e * math.sin(m + 2 * f1)
            + 0.0003 * math.sin(a1)
            - 0.0002 * e * math.sin(m - 2 * f1)
            - 0.0002 * e * math.sin(2 * mm - m)
            - 0.0002 * math.sin(om))
    return tjd, f


def _near_node(f: float) -> bool:
    ff = f - 180.0 if f > 180.0 else f
    return not NODE_DISTANCE_MIN < ff < NODE_DISTANCE_MAX


def _start_lunation(tjd_start: float, direction: int) -> int:
    return int((tjd_start - J2000) / 365.2425 * 12.3685) - direction


def _check_geopos(geopos: Sequence[float]) -> None:
    if len(geopos) < 3:
        raise UnsupportedCombinationError("geopos must be (lon, lat, alt)")
    if not ECL_GEOALT_MIN <= geopos[2] <= ECL_GEOALT_MAX:
        raise UnsupportedCombinationError(
            "location for eclipses must be between %.0f and %.0f m above sea"
            % (ECL_GEOALT_MIN, ECL_GEOALT_MAX),
            alt=geopos[2],
        )


def _local_context(ctx, geopos: Sequence[float]):
    """Copy of ctx observing from geopos; the caller's context is untouched."""
    local = copy.copy(ctx)
    local.set_topo(geopos[0], geopos[1], geopos[2])
    return local


def _xyz(ctx, tjd_tt: float, body: int, iflag: int) -> List[float]:
    pos, _ = ctx.calc(tjd_tt, body, iflag | SEFLG_EQUATORIAL | SEFLG_XYZ)
    return list(pos[0:3])


def _angle_deg(a: Sequence[float], b: Sequence[float]) -> float:
    c = dot(a, b) / norm(a) / norm(b)
    return math.acos(max(-1.0, min(1.0, c))) * RADTODEG


def _exhausted(kind: str, tjd_start: float) -> EclipseSearchError:
    return EclipseSearchError(
        "no %s eclipse found within %d lunations" % (kind, MAX_LUNATIONS),
        jd=tjd_start,
        lunations=MAX_LUNATIONS,
    )


# =============================================================================
# LUNAR ECLIPSES
# =============================================================================


def _lunar_geometry(ctx, tjd_ut: float, ifl: int):
    """
    Moon position relative to the Earth's shadow cones.

    Returns:
        (r0, d0, D0, cosf1, cosf2, dctr): distance of the Moon from the
        shadow axis, umbra and penumbra diameters at the Moon (AU), cosines
        of the cone half-angles and the Sun-Moon elongation (deg)
    """
    tjd = ut_to_tt(tjd_ut)
    rm = _xyz(ctx, tjd, SE_MOON, ifl)
    rs = _xyz(ctx, tjd, SE_SUN, ifl)
    dm = norm(rm)
    dctr = _angle_deg(rs, rm)

    # Selenocentric Sun and Earth
    rs = [rs[i] - rm[i] for i in range(3)]
    rm = [-c for c in rm]
    e = [rm[i] - rs[i] for i in range(3)]
    dsm = norm(e)
    e = [c / dsm for c in e]

    f1 = (RSUN - REARTH) / dsm
    cosf1 = math.sqrt(1.0 - f1 * f1)
    f2 = (RSUN + REARTH) / dsm
    cosf2 = math.sqrt(1.0 - f2 * f2)

    s0 = -dot(rm, e)
    r0 = math.sqrt(max(0.0, dm * dm - s0 * s0))
    d0 = abs(s0 / dsm * (DSUN - DEARTH) - DEARTH) * SHADOW_ENLARGEMENT / cosf1
    big_d0 = (s0 / dsm * (DSUN + DEARTH) + DEARTH) * SHADOW_ENLARGEMENT / cosf2
    d0 *= UMBRA_OBLATENESS
    big_d0 *= PENUMBRA_OBLATENESS
    return r0, d0, big_d0, cosf1, cosf2, dctr


def _lunar_eclipse_attributes(ctx, tjd_ut: float, ifl: int) -> Tuple[int, List[float]]:
    r0, d0, big_d0, cosf1, cosf2, dctr = _lunar_geometry(ctx, tjd_ut, ifl)
    attr = [0.0] * ATTR_SIZE

    if d0 / 2.0 >= r0 + RMOON / cosf1:
        retc = SE_ECL_TOTAL
        attr[0] = (d0 / 2.0 - r0 + RMOON) / DMOON
    elif d0 / 2.0 >= r0 - RMOON / cosf1:
        retc = SE_ECL_PARTIAL
        attr[0] = (d0 / 2.0 - r0 + RMOON) / DMOON
    elif big_d0 / 2.0 >= r0 - RMOON / cosf2:
        retc = SE_ECL_PENUMBRAL
    else:
        retc = 0
    attr[8] = attr[0]
    attr[1] = (big_d0 / 2.0 - r0 + RMOON) / DMOON
    if retc:
        attr[7] = 180.0 - abs(dctr)
    series, member = saros_member(tjd_ut, SAROS_DATA_LUNAR)
    attr[9] = float(series)
    attr[10] = float(member)
    return retc, attr


def lun_eclipse_how(ctx, tjd_ut: float, iflag: int,
                    geopos: Optional[Sequence[float]] = None) -> Tuple[int, List[float]]:
    """
    Circumstances of a lunar eclipse at a given time.

    Args:
        ctx: ComputationContext
        tjd_ut: Julian Day (UT)
        iflag: Ephemeris flag (other bits are ignored)
        geopos: Optional (lon, lat, alt) of an observer; adds the Moon's
            horizontal coordinates and returns 0 when the Moon is below the
            horizon

    Returns:
        (retflag, attr) with retflag SE_ECL_TOTAL, SE_ECL_PARTIAL,
        SE_ECL_PENUMBRAL or 0, and attr:
            [0] umbral magnitude, [1] penumbral magnitude,
            [4] azimuth, [5] true altitude, [6] apparent altitude of the Moon,
            [7] distance of the Moon from opposition (deg),
            [8] umbral magnitude, [9] Saros series, [10] Saros member

    Raises:
        UnsupportedCombinationError: Observer height out of range
    """
    if geopos is not None:
        _check_geopos(geopos)
    ifl = iflag & SEFLG_EPHMASK
    retc, attr = _lunar_eclipse_attributes(ctx, tjd_ut, ifl)
    if geopos is None:
        return retc, attr

    local = _local_context(ctx, geopos)
    lm, _ = local.calc(ut_to_tt(tjd_ut), SE_MOON, ifl | SEFLG_TOPOCTR | SEFLG_EQUATORIAL)
    az, true_alt, app_alt = azalt(local, tjd_ut, SE_EQU2HOR, geopos, ECL_ATPRESS, ECL_ATTEMP, lm)
    attr[4] = az
    attr[5] = true_alt
    attr[6] = app_alt
    if app_alt <= 0:
        retc = 0
    return retc, attr


def _shadow_contact_function(n: int):
    """dc(t) > 0 while the Moon is inside penumbra (0), umbra (1), totality (2)."""
    def penumbral(g):
        return g[2] / 2.0 + RMOON / g[4] - g[0]

    def partial(g):
        return g[1] / 2.0 + RMOON / g[3] - g[0]

    def total(g):
        return g[1] / 2.0 - RMOON / g[3] - g[0]

    return (penumbral, partial, total)[n]


def lun_eclipse_when(ctx, tjd_start: float, iflag: int, eclipse_type: int = 0,
                     backward: bool = False) -> Tuple[int, List[float]]:
    """
    Find the next (or previous) lunar eclipse.

    Args:
        ctx: ComputationContext
        tjd_start: Julian Day (UT) to search from
        iflag: Ephemeris flag (other bits are ignored)
        eclipse_type: SE_ECL_TOTAL | SE_ECL_PARTIAL | SE_ECL_PENUMBRAL, 0 for any
        backward: Search into the past

    Returns:
        (retflag, tret) with tret (UT):
            [0] maximum, [2] partial begin, [3] partial end,
            [4] totality begin, [5] totality end,
            [6] penumbral begin, [7] penumbral end
        Contacts that do not occur are 0.

    Raises:
        UnsupportedCombinationError: Only annular types requested
        EclipseSearchError: No eclipse within MAX_LUNATIONS
    """
    ifl = iflag & SEFLG_EPHMASK
    direction = -1 if backward else 1

    eclipse_type &= ~(SE_ECL_CENTRAL | SE_ECL_NONCENTRAL)
    if eclipse_type & (SE_ECL_ANNULAR | SE_ECL_ANNULAR_TOTAL):
        eclipse_type &= ~(SE_ECL_ANNULAR | SE_ECL_ANNULAR_TOTAL)
        if eclipse_type == 0:
            raise UnsupportedCombinationError("annular lunar eclipses don't exist")
    if eclipse_type == 0:
        eclipse_type = SE_ECL_TOTAL | SE_ECL_PENUMBRAL | SE_ECL_PARTIAL

    k = _start_lunation(tjd_start, direction)
    for _ in range(MAX_LUNATIONS):
        k += direction
        tjd, f = _meeus_syzygy(k + 0.5)
        if not _near_node(f):
            continue

        # Greatest eclipse: minimum of the angle between the selenocentric
        # Sun and Earth, less the sum of their radii
        dt = 0.1 if 2100000 <= tjd <= 2500000 else 5.0
        while dt > 0.001:
            dc = []
            for t in (tjd - dt, tjd, tjd + dt):
                xs = _xyz(ctx, t, SE_SUN, ifl)
                xm = _xyz(ctx, t, SE_MOON, ifl)
                xs = [xs[i] - xm[i] for i in range(3)]
                xm = [-c for c in xm]
                dctr = _angle_deg(xs, xm)
                rearth = math.asin(REARTH / norm(xm)) * RADTODEG
                rsun = math.asin(RSUN / norm(xs)) * RADTODEG
                dc.append(dctr - (rearth + rsun))
            tjd += find_maximum(dc[0], dc[1], dc[2], dt)[0]
            dt /= 4.0

        tjd_ut = tt_to_ut(tjd)
        retflag, _ = _lunar_eclipse_attributes(ctx, tjd_ut, ifl)
        if retflag == 0:
            continue
        if backward and tjd_ut >= tjd_start - START_MARGIN:
            continue
        if not backward and tjd_ut <= tjd_start + START_MARGIN:
            continue
        if not retflag & eclipse_type:
            continue

        tret = [0.0] * TRET_SIZE
        tret[0] = tjd_ut
        _lunar_contacts(ctx, tjd_ut, ifl, retflag, tret)
        return retflag, tret

    raise _exhausted("lunar", tjd_start)


def _lunar_contacts(ctx, tjd_ut: float, ifl: int, retflag: int, tret: List[float]) -> None:
    if retflag & SE_ECL_PENUMBRAL:
        levels = 1
    elif retflag & SE_ECL_PARTIAL:
        levels = 2
    else:
        levels = 3
    slots = ((6, 7), (2, 3), (4, 5))

    for n in range(levels):
        func = _shadow_contact_function(n)
        i1, i2 = slots[n]
        dc = [func(_lunar_geometry(ctx, t, ifl))
              for t in (tjd_ut - TWO_HOURS, tjd_ut, tjd_ut + TWO_HOURS)]
        dt1, dt2 = find_zero(dc[0], dc[1], dc[2], TWO_HOURS)
        tret[i1] = tjd_ut + dt1
        tret[i2] = tjd_ut + dt2

        dt = abs(dt1) / 4.0 or TEN_MINUTES
        for _ in range(3):
            for j in (i1, i2):
                y0 = func(_lunar_geometry(ctx, tret[j] - dt, ifl))
                y1 = func(_lunar_geometry(ctx, tret[j], ifl))
                if y1 != y0:
                    tret[j] -= y1 / ((y1 - y0) / dt)
            dt /= 2.0


# =============================================================================
# SOLAR ECLIPSES (LOCAL)
# =============================================================================


def _solar_discs(ctx, tjd_tt: float, ifl: int) -> Tuple[float, float, float]:
    """Topocentric (dctr, rsun, rmoon): center distance and radii in degrees."""
    xs = _xyz(ctx, tjd_tt, SE_SUN, ifl | SEFLG_TOPOCTR)
    xm = _xyz(ctx, tjd_tt, SE_MOON, ifl | SEFLG_TOPOCTR)
    dctr = _angle_deg(xs, xm)
    rsun = math.asin(RSUN / norm(xs)) * RADTODEG
    rmoon = math.asin(RMOON / norm(xm)) * RADTODEG
    return dctr, rsun, rmoon


def _obscuration(dctr: float, rsun: float, rmoon: float, retc: int) -> float:
    """Fraction of the solar disc area covered by the Moon."""
    if retc == 0 or rsun == 0.0:
        return 1.0
    if retc & (SE_ECL_TOTAL | SE_ECL_ANNULAR):
        return rmoon * rmoon / rsun / rsun
    a = 2.0 * dctr * rmoon
    b = 2.0 * dctr * rsun
    if a < 1e-9:
        return rmoon * rmoon / rsun / rsun
    a = max(-1.0, min(1.0, (dctr * dctr + rmoon * rmoon - rsun * rsun) / a))
    b = max(-1.0, min(1.0, (dctr * dctr + rsun * rsun - rmoon * rmoon) / b))
    a = math.acos(a)
    b = math.acos(b)
    sc1 = (a - math.cos(a) * math.sin(a)) * rmoon * rmoon / 2.0
    sc2 = (b - math.cos(b) * math.sin(b)) * rsun * rsun / 2.0
    return (sc1 + sc2) * 2.0 / math.pi / rsun / rsun


def _solar_eclipse_attributes(local, tjd_ut: float, ifl: int,
                              geopos: Sequence[float]) -> Tuple[int, List[float]]:
    tjd = ut_to_tt(tjd_ut)
    attr = [0.0] * ATTR_SIZE
    dctr, rsun, rmoon = _solar_discs(local, tjd, ifl)
    rsplusrm = rsun + rmoon
    rsminusrm = rsun - rmoon

    if dctr < rsminusrm:
        retc = SE_ECL_ANNULAR
    elif dctr < abs(rsminusrm):
        retc = SE_ECL_TOTAL
    elif dctr < rsplusrm:
        retc = SE_ECL_PARTIAL
    else:
        retc = 0

    attr[0] = (rsplusrm - dctr) / rsun / 2.0 if rsun > 0 else 1.0
    attr[1] = rmoon / rsun if rsun > 0 else 0.0
    attr[2] = _obscuration(dctr, rsun, rmoon, retc)
    attr[7] = dctr

    ls, _ = local.calc(tjd, SE_SUN, ifl | SEFLG_TOPOCTR | SEFLG_EQUATORIAL)
    az, true_alt, app_alt = azalt(local, tjd_ut, SE_EQU2HOR, geopos, ECL_ATPRESS, ECL_ATTEMP, ls)
    # Lowest altitude at which the upper limb can still be seen
    hmin_appr = -(34.4556 + (1.75 + 0.37) * math.sqrt(max(0.0, geopos[2]))) / 60.0
    if retc and true_alt + rsun + abs(hmin_appr) >= 0:
        retc |= SE_ECL_VISIBLE
    attr[4] = az
    attr[5] = true_alt
    attr[6] = app_alt

    attr[8] = attr[1] if retc & (SE_ECL_TOTAL | SE_ECL_ANNULAR) else attr[0]
    series, member = saros_member(tjd_ut, SAROS_DATA_SOLAR)
    attr[9] = float(series)
    attr[10] = float(member)
    return retc, attr


def sol_eclipse_how(ctx, tjd_ut: float, iflag: int,
                    geopos: Sequence[float]) -> Tuple[int, List[float]]:
    """
    Local circumstances of a solar eclipse at a given time.

    Args:
        ctx: ComputationContext (not modified)
        tjd_ut: Julian Day (UT)
        iflag: Ephemeris flag (other bits are ignored)
        geopos: (lon, lat, alt) of the observer, degrees and meters

    Returns:
        (retflag, attr) with retflag SE_ECL_TOTAL, SE_ECL_ANNULAR or
        SE_ECL_PARTIAL (| SE_ECL_VISIBLE), 0 if there is no eclipse or the
        Sun is below the horizon, and attr:
            [0] fraction of the solar diameter covered, [1] ratio of the
            lunar to the solar diameter, [2] fraction of the disc area
            covered, [4] azimuth, [5] true altitude, [6] apparent altitude
            of the Sun, [7] elongation of the Moon (deg), [8] NASA
            magnitude, [9] Saros series, [10] Saros member

    Raises:
        UnsupportedCombinationError: Observer height out of range
    """
    _check_geopos(geopos)
    ifl = iflag & SEFLG_EPHMASK
    local = _local_context(ctx, geopos)
    retc, attr = _solar_eclipse_attributes(local, tjd_ut, ifl, geopos)
    if attr[6] <= 0:
        retc = 0
    if retc == 0:
        for i in (0, 1, 2, 3, 8, 9, 10):
            attr[i] = 0.0
    return retc, attr


def sol_eclipse_when_loc(ctx, tjd_start: float, iflag: int, geopos: Sequence[float],
                         backward: bool = False) -> Tuple[int, List[float], List[float]]:
    """
    Find the next (or previous) solar eclipse visible from a place.

    Args:
        ctx: ComputationContext (not modified)
        tjd_start: Julian Day (UT) to search from
        iflag: Ephemeris flag (other bits are ignored)
        geopos: (lon, lat, alt) of the observer
        backward: Search into the past

    Returns:
        (retflag, tret, attr); tret (UT): [0] maximum, [1] first contact,
        [2] second contact, [3] third contact, [4] fourth contact (second and
        third are 0 for a partial eclipse); attr as in sol_eclipse_how() at
        the maximum. retflag carries the eclipse type and the
        SE_ECL_*_VISIBLE bits of the contacts above the horizon.

    Raises:
        UnsupportedCombinationError: Observer height out of range
        EclipseSearchError: No visible eclipse within MAX_LUNATIONS
    """
    _check_geopos(geopos)
    ifl = iflag & SEFLG_EPHMASK
    local = _local_context(ctx, geopos)
    direction = -1 if backward else 1

    k = _start_lunation(tjd_start, direction)
    for _ in range(MAX_LUNATIONS):
        k += direction
        tjd, f = _meeus_syzygy(float(k))
        if not _near_node(f):
            continue

        # Greatest eclipse: minimum topocentric distance of the disc centers
        dt = 0.5 if 1900000 <= tjd <= 2500000 else 2.0
        dtdiv = 2.0
        while dt > 0.00001:
            if dt < 0.1:
                dtdiv = 3.0
            dc = [_solar_discs(local, t, ifl)[0] for t in (tjd - dt, tjd, tjd + dt)]
            tjd += find_maximum(dc[0], dc[1], dc[2], dt)[0]
            dt /= dtdiv

        dctr, rsun, rmoon = _solar_discs(local, tjd, ifl)
        if dctr > rsun + rmoon:
            continue
        tjd_ut = tt_to_ut(tjd)
        if backward and tjd_ut >= tjd_start - START_MARGIN:
            continue
        if not backward and tjd_ut <= tjd_start + START_MARGIN:
            continue

        rsminusrm = rsun - rmoon
        if dctr < rsminusrm:
            retflag = SE_ECL_ANNULAR
        elif dctr < abs(rsminusrm):
            retflag = SE_ECL_TOTAL
        else:
            retflag = SE_ECL_PARTIAL

        tret = [0.0] * TRET_SIZE
        tret[0] = tjd
        _solar_contacts(local, tjd, ifl, dctr, rsun, rmoon, tret)
        for i in range(5):
            if tret[i] != 0.0:
                tret[i] = tt_to_ut(tret[i])

        visible_bits = (SE_ECL_MAX_VISIBLE, SE_ECL_1ST_VISIBLE, SE_ECL_2ND_VISIBLE,
                        SE_ECL_3RD_VISIBLE, SE_ECL_4TH_VISIBLE)
        attr = None
        for i in range(4, -1, -1):
            if tret[i] == 0.0:
                continue
            _, attr = _solar_eclipse_attributes(local, tret[i], ifl, geopos)
            if attr[6] > 0:
                retflag |= SE_ECL_VISIBLE | visible_bits[i]
        if not retflag & SE_ECL_VISIBLE:
            continue
        return retflag, tret, attr

    raise _exhausted("visible solar", tjd_start)


def _solar_contacts(local, tjd: float, ifl: int, dctr: float, rsun: float,
                    rmoon: float, tret: List[float]) -> None:
    """Fill tret[1..4] with contact times (TT) around the maximum tjd."""
    def inner(t):
        d, rs, rm = _solar_discs(local, t, ifl)
        return abs(rs - rm) - d

    def outer(t):
        d, rs, rm = _solar_discs(local, t, ifl)
        return rs + rm - d

    if dctr <= abs(rsun - rmoon):
        dc = [inner(tjd - TWO_MINUTES), abs(rsun - rmoon) - dctr, inner(tjd + TWO_MINUTES)]
        dt1, dt2 = find_zero(dc[0], dc[1], dc[2], TWO_MINUTES)
        tret[2] = tjd + dt1
        tret[3] = tjd + dt2
        _refine_contacts(inner, tret, (2, 3), TEN_SECONDS, 2, 10.0)

    dc = [outer(tjd - TWO_HOURS), rsun + rmoon - dctr, outer(tjd + TWO_HOURS)]
    dt1, dt2 = find_zero(dc[0], dc[1], dc[2], TWO_HOURS)
    tret[1] = tjd + dt1
    tret[4] = tjd + dt2
    _refine_contacts(outer, tret, (1, 4), TEN_MINUTES, 3, 10.0)


def _refine_contacts(func, tret: List[float], slots: Sequence[int], dt: float,
                     rounds: int, shrink: float) -> None:
    """Secant refinement of zeros of func at shrinking steps."""
    for _ in range(rounds):
        for j in slots:
            y0 = func(tret[j] - dt)
            y1 = func(tret[j])
            if y1 != y0:
                tret[j] -= y1 / ((y1 - y0) / dt)
        dt /= shrink


# =============================================================================
# DEFAULT-CONTEXT API
# =============================================================================


def swe_lun_eclipse_when(tjd_start: float, ifl: int, ifltype: int = 0,
                         backward: bool = False) -> Tuple[int, Tuple[float, ...]]:
    """Swiss Ephemeris compatible lun_eclipse_when() on the default context."""
    from .state import get_default_context

    retflag, tret = lun_eclipse_when(get_default_context(), tjd_start, ifl, ifltype, backward)
    return retflag, tuple(tret)


def swe_lun_eclipse_how(tjd_ut: float, ifl: int,
                        geopos: Optional[Sequence[float]] = None) -> Tuple[int, Tuple[float, ...]]:
    from .state import get_default_context

    retflag, attr = lun_eclipse_how(get_default_context(), tjd_ut, ifl, geopos)
    return retflag, tuple(attr)


def swe_sol_eclipse_when_loc(tjd_start: float, ifl: int, geopos: Sequence[float],
                             backward: bool = False):
    """Swiss Ephemeris compatible sol_eclipse_when_loc() on the default context."""
    from .state import get_default_context

    retflag, tret, attr = sol_eclipse_when_loc(
        get_default_context(), tjd_start, ifl, geopos, backward
    )
    return retflag, tuple(tret), tuple(attr)


def swe_sol_eclipse_how(tjd_ut: float, ifl: int,
                        geopos: Sequence[float]) -> Tuple[int, Tuple[float, ...]]:
    from .state import get_default_context

    retflag, attr = sol_eclipse_how(get_default_context(), tjd_ut, ifl, geopos)
    return retflag, tuple(attr)
