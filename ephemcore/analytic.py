"""
Analytic ephemeris for ephemcore (SEFLG_MOSEPH).

Planets follow Keplerian orbits with linearly varying elements (Standish,
"Keplerian Elements for Approximate Positions of the Major Planets",
heliocentric ecliptic J2000). Table 1 is used from 1800 to 2050, where it
is the better fit. Table 2a, with the Table 2b mean anomaly terms of Jupiter
through Pluto, covers the rest of -3000 .. +3000. The Moon follows a
truncated version of the ELP-2000/82 series as given by Meeus, Astronomical
Algorithms ch. 47. The Sun's barycentric offset is computed from the four
giant planets.

Accuracy is of the order of arcminutes for the planets and ~10" for the
Moon, enough for eclipse prediction, search start values and tests that must
run without a JPL kernel. Velocities come from central differences.

Output frame is the dynamical J2000 equator ("J2000"), so no frame bias is
applied downstream.
"""

import math
from typing import List, Optional, Tuple

from .constants import (
    AUNIT,
    DEGTORAD,
    EARTH_MOON_MRAT,
    J2000,
    PLANET_MASS_RATIOS,
    SE_EARTH,
    SE_JUPITER,
    SE_MARS,
    SE_MERCURY,
    SE_MOON,
    SE_NEPTUNE,
    SE_PLUTO,
    SE_SATURN,
    SE_SUN,
    SE_URANUS,
    SE_VENUS,
    SEFLG_MOSEPH,
    SEMOD_PREC_IAU_2006,
)
from .exceptions import EphemerisUnavailableError
from .frames import J_TO_J2000, mean_obliquity, precess
from .providers import EphemerisProvider
from .vectors import Vector, coortrf2

# Date range served by the analytic theory (-3000 .. +3000)
ANALYTIC_START = 625673.5
ANALYTIC_END = 2817151.5

ANALYTIC_SPEED_INTV = 0.001  # days

KEPLER_MAX_ITER = 50
KEPLER_TOL = 1e-12

_EPS_J2000 = mean_obliquity(J2000, SEMOD_PREC_IAU_2006)
_SEPS_J2000 = math.sin(_EPS_J2000)
_CEPS_J2000 = math.cos(_EPS_J2000)

# Standish Table 1 holds for 1800 .. 2050; Table 2a/2b covers -3000 .. +3000
TABLE1_START = 2378496.5  # 1800-01-01
TABLE1_END = 2470172.5  # 2051-01-01

# a [AU], e, I, L, long.peri, long.node [deg], each followed by its rate per century
_EMB = "emb"
_ELEMENTS_1800_2050 = {
    SE_MERCURY: (0.38709927, 0.00000037, 0.20563593, 0.00001906, 7.00497902, -0.00594749,
                 252.25032350, 149472.67411175, 77.45779628, 0.16047689, 48.33076593, -0.12534081),
    SE_VENUS: (0.72333566, 0.00000390, 0.00677672, -0.00004107, 3.39467605, -0.00078890,
               181.97909950, 58517.81538729, 131.60246718, 0.00268329, 76.67984255, -0.27769418),
    _EMB: (1.00000261, 0.00000562, 0.01671123, -0.00004392, -0.00001531, -0.01294668,
           100.46457166, 35999.37244981, 102.93768193, 0.32327364, 0.0, 0.0),
    SE_MARS: (1.52371034, 0.00001847, 0.09339410, 0.00007882, 1.84969142, -0.00813131,
              -4.55343205, 19140.30268499, -23.94362959, 0.44441088, 49.55953891, -0.29257343),
    SE_JUPITER: (5.20288700, -0.00011607, 0.04838624, -0.00013253, 1.30439695, -0.00183714,
                 34.39644051, 3034.74612775, 14.72847983, 0.21252668, 100.47390909, 0.20469106),
    SE_SATURN: (9.53667594, -0.00125060, 0.05386179, -0.00050991, 2.48599187, 0.00193609,
                49.95424423, 1222.49362201, 92.59887831, -0.41897216, 113.66242448, -0.28867794),
    SE_URANUS: (19.18916464, -0.00196176, 0.04725744, -0.00004397, 0.77263783, -0.00242939,
                313.23810451, 428.48202785, 170.95427630, 0.40805281, 74.01692503, 0.04240589),
    SE_NEPTUNE: (30.06992276, 0.00026291, 0.00859048, 0.00005105, 1.77004347, 0.00035372,
                 -55.12002969, 218.45945325, 44.96476227, -0.32241464, 131.78422574, -0.00508664),
    SE_PLUTO: (39.48211675, -0.00031596, 0.24882730, 0.00005170, 17.14001206, 0.00004818,
               238.92903833, 145.20780515, 224.06891629, -0.04062942, 110.30393684, -0.01183482),
}

_ELEMENTS_3000BC_3000AD = {
    SE_MERCURY: (0.38709843, 0.00000000, 0.20563661, 0.00002123, 7.00559432, -0.00590158,
                 252.25166724, 149472.67486623, 77.45771895, 0.15940013, 48.33961819, -0.12214182),
    SE_VENUS: (0.72332102, -0.00000026, 0.00676399, -0.00005107, 3.39777545, 0.00043494,
               181.97970850, 58517.81560260, 131.76755713, 0.05679648, 76.67261496, -0.27274174),
    _EMB: (1.00000018, -0.00000003, 0.01673163, -0.00003661, -0.00054346, -0.01337178,
           100.46691572, 35999.37306329, 102.93005885, 0.31795260, -5.11260389, -0.24123856),
    SE_MARS: (1.52371243, 0.00000097, 0.09336511, 0.00009149, 1.85181869, -0.00724757,
              -4.56813164, 19140.29934243, -23.91744784, 0.45223625, 49.71320984, -0.26852431),
    SE_JUPITER: (5.20248019, -0.00002864, 0.04853590, 0.00018026, 1.29861416, -0.00322699,
                 34.33479152, 3034.90371757, 14.27495244, 0.18199196, 100.29282654, 0.13024619),
    SE_SATURN: (9.54149883, -0.00003065, 0.05550825, -0.00032044, 2.49424102, 0.00451969,
                50.07571329, 1222.11494724, 92.86136063, 0.54179478, 113.63998702, -0.25015002),
    SE_URANUS: (19.18797948, -0.00020455, 0.04685740, -0.00001550, 0.77298127, -0.00180155,
                314.20276625, 428.49512595, 172.43404441, 0.09266985, 73.96250215, 0.05739699),
    SE_NEPTUNE: (30.06952752, 0.00006447, 0.00895439, 0.00000818, 1.77005520, 0.00022400,
                 304.22289287, 218.46515314, 46.68158724, 0.01009938, 131.78635853, -0.00606302),
    SE_PLUTO: (39.48686035, 0.00449751, 0.24885238, 0.00006016, 17.14104260, 0.00000501,
               238.96535011, 145.18042903, 224.09702598, -0.00968827, 110.30167986, -0.00809981),
}

# Extra mean anomaly terms of Table 2b: b T^2 + c cos(fT) + s sin(fT), degrees
_MEAN_ANOMALY_TERMS = {
    SE_JUPITER: (-0.00012452, 0.06064060, -0.35635438, 38.35125000),
    SE_SATURN: (0.00025899, -0.13434469, 0.87320147, 38.35125000),
    SE_URANUS: (0.00058331, -0.97731848, 0.17689245, 7.67025000),
    SE_NEPTUNE: (-0.00041348, 0.68346318, -0.10162547, 7.67025000),
    SE_PLUTO: (-0.01262724, 0.0, 0.0, 0.0),
}

_GIANTS = (SE_JUPITER, SE_SATURN, SE_URANUS, SE_NEPTUNE)
_MASS_RATIO = {
    SE_JUPITER: PLANET_MASS_RATIOS[4],
    SE_SATURN: PLANET_MASS_RATIOS[5],
    SE_URANUS: PLANET_MASS_RATIOS[6],
    SE_NEPTUNE: PLANET_MASS_RATIOS[7],
}


def solve_kepler(M: float, e: float) -> float:
    """
    Eccentric anomaly E from mean anomaly M (radians) by Newton iteration.

    Stops when the correction drops below KEPLER_TOL or after KEPLER_MAX_ITER
    steps.
    """
    E = M + e * math.sin(M)
    for _ in range(KEPLER_MAX_ITER):
        dE = (E - e * math.sin(E) - M) / (1.0 - e * math.cos(E))
        E -= dE
        if abs(dE) < KEPLER_TOL:
            break
    return E


def elements_table(jd_tt: float):
    """Element set for a date: Table 1 inside 1800 .. 2050, Table 2a otherwise."""
    if TABLE1_START <= jd_tt < TABLE1_END:
        return _ELEMENTS_1800_2050, None
    return _ELEMENTS_3000BC_3000AD, _MEAN_ANOMALY_TERMS


def _heliocentric_ecliptic(key, jd_tt: float, table_jd: Optional[float] = None) -> List[float]:
    table, extra = elements_table(jd_tt if table_jd is None else table_jd)
    el = table[key]
    T = (jd_tt - J2000) / 36525.0
    a = el[0] + el[1] * T
    e = el[2] + el[3] * T
    incl = (el[4] + el[5] * T) * DEGTORAD
    L = el[6] + el[7] * T
    varpi = el[8] + el[9] * T
    node = (el[10] + el[11] * T) * DEGTORAD
    omega = varpi * DEGTORAD - node
    M = L - varpi
    if extra is not None and key in extra:
        b, c, s, f = extra[key]
        fT = f * T * DEGTORAD
        M += b * T * T + c * math.cos(fT) + s * math.sin(fT)
    M = math.fmod(M * DEGTORAD, 2 * math.pi)
    if M > math.pi:
        M -= 2 * math.pi
    elif M < -math.pi:
        M += 2 * math.pi
    E = solve_kepler(M, e)
    xp = a * (math.cos(E) - e)
    yp = a * math.sqrt(1.0 - e * e) * math.sin(E)
    cw, sw = math.cos(omega), math.sin(omega)
    cn, sn = math.cos(node), math.sin(node)
    ci, si = math.cos(incl), math.sin(incl)
    return [
        (cw * cn - sw * sn * ci) * xp + (-sw * cn - cw * sn * ci) * yp,
        (cw * sn + sw * cn * ci) * xp + (-sw * sn + cw * cn * ci) * yp,
        (sw * si) * xp + (cw * si) * yp,
    ]


# =============================================================================
# MOON (Meeus ch. 47, truncated ELP-2000/82)
# =============================================================================

# D, M, M', F, sum_l [1e-6 deg], sum_r [1e-3 km]
_MOON_LR = (
    (0, 0, 1, 0, 6288774, -20905355),
    (2, 0, -1, 0, 1274027, -3699111),
    (2, 0, 0, 0, 658314, -2955968),
    (0, 0, 2, 0, 213618, -569925),
    (0, 1, 0, 0, -185116, 48888),
    (0, 0, 0, 2, -114332, -3149),
    (2, 0, -2, 0, 58793, 246158),
    (2, -1, -1, 0, 57066, -152138),
    (2, 0, 1, 0, 53322, -170733),
    (2, -1, 0, 0, 45758, -204586),
    (0, 1, -1, 0, -40923, -129620),
    (1, 0, 0, 0, -34720, 108743),
    (0, 1, 1, 0, -30383, 104755),
    (2, 0, 0, -2, 15327, 10321),
    (0, 0, 1, 2, -12528, 0),
    (0, 0, 1, -2, 10980, 79661),
    (4, 0, -1, 0, 10675, -34782),
    (0, 0, 3, 0, 10034, -23210),
    (4, 0, -2, 0, 8548, -21636),
    (2, 1, -1, 0, -7888, 24208),
    (2, 1, 0, 0, -6766, 30824),
    (1, 0, -1, 0, -5163, -8379),
    (1, 1, 0, 0, 4987, -16675),
    (2, -1, 1, 0, 4036, -12831),
    (2, 0, 2, 0, 3994, -10445),
    (4, 0, 0, 0, 3861, -11650),
    (2, 0, -3, 0, 3665, 14403),
    (0, 1, -2, 0, -2689, -7003),
    (2, 0, -1, 2, -2602, 0),
    (2, -1, -2, 0, 2390, 10056),
    (1, 0, 1, 0, -2348, 6322),
    (2, -2, 0, 0, 2236, -9884),
)

# D, M, M', F, sum_b [1e-6 deg]
_MOON_B = (
    (0, 0, 0, 1, 5128122),
    (0, 0, 1, 1, 280602),
    (0, 0, 1, -1, 277693),
    (2, 0, 0, -1, 173237),
    (2, 0, -1, 1, 55413),
    (2, 0, -1, -1, 46271),
    (2, 0, 0, 1, 32573),
    (0, 0, 2, 1, 17198),
    (2, 0, 1, -1, 9266),
    (0, 0, 2, -1, 8822),
    (2, -1, 0, -1, 8216),
    (2, 0, -2, -1, 4324),
    (2, 0, 1, 1, 4200),
    (2, 1, 0, -1, -3359),
    (2, -1, -1, 1, 2463),
    (2, -1, 0, 1, 2211),
    (2, -1, -1, -1, 2065),
    (0, 1, -1, -1, -1870),
    (4, 0, -1, -1, 1828),
    (0, 1, 0, 1, -1794),
)


def moon_ecliptic_of_date(jd_tt: float) -> Tuple[float, float, float]:
    """
    Geocentric Moon, mean ecliptic and equinox of date.

    Returns:
        (longitude, latitude) in degrees and distance in km
    """
    T = (jd_tt - J2000) / 36525.0
    T2 = T * T
    T3 = T2 * T
    T4 = T3 * T
    Lp = 218.3164477 + 481267.88123421 * T - 0.0015786 * T2 + T3 / 538841.0 - T4 / 65194000.0
    D = 297.8501921 + 445267.1114034 * T - 0.0018819 * T2 + T3 / 545868.0 - T4 / 113065000.0
    M = 357.5291092 + 35999.0502909 * T - 0.0001536 * T2 + T3 / 24490000.0
    Mp = 134.9633964 + 477198.8675055 * T + 0.0087414 * T2 + T3 / 69699.0 - T4 / 14712000.0
    F = 93.2720950 + 483202.0175233 * T - 0.0036539 * T2 - T3 / 3526000.0 + T4 / 863310000.0
    A1 = (119.75 + 131.849 * T) * DEGTORAD
    A2 = (53.09 + 479264.290 * T) * DEGTORAD
    A3 = (313.45 + 481266.484 * T) * DEGTORAD
    E = 1.0 - 0.002516 * T - 0.0000074 * T2
    ecorr = (1.0, E, E * E)

    D_r, M_r, Mp_r, F_r = D * DEGTORAD, M * DEGTORAD, Mp * DEGTORAD, F * DEGTORAD
    Lp_r = Lp * DEGTORAD

    sl = 0.0
    sr = 0.0
    for d, m, mp, f, cl, cr in _MOON_LR:
        arg = d * D_r + m * M_r + mp * Mp_r + f * F_r
        fac = ecorr[abs(m)]
        sl += cl * fac * math.sin(arg)
        sr += cr * fac * math.cos(arg)
    sb = 0.0
    for d, m, mp, f, cb in _MOON_B:
        arg = d * D_r + m * M_r + mp * Mp_r + f * F_r
        sb += cb * ecorr[abs(m)] * math.sin(arg)

    sl += 3958.0 * math.sin(A1) + 1962.0 * math.sin(Lp_r - F_r) + 318.0 * math.sin(A2)
    sb += (-2235.0 * math.sin(Lp_r) + 382.0 * math.sin(A3)
           + 175.0 * math.sin(A1 - F_r) + 175.0 * math.sin(A1 + F_r)
           + 127.0 * math.sin(Lp_r - Mp_r) - 115.0 * math.sin(Lp_r + Mp_r))

    lon = math.fmod(Lp + sl / 1e6, 360.0)
    if lon < 0.0:
        lon += 360.0
    lat = sb / 1e6
    dist = 385000.56 + sr / 1000.0
    return lon, lat, dist


def _moon_geocentric_j2000(jd_tt: float) -> List[float]:
    """Geocentric Moon, equatorial J2000, AU."""
    lon, lat, dist = moon_ecliptic_of_date(jd_tt)
    r = dist * 1000.0 / AUNIT
    lon *= DEGTORAD
    lat *= DEGTORAD
    x = [r * math.cos(lat) * math.cos(lon), r * math.cos(lat) * math.sin(lon), r * math.sin(lat)]
    eps = mean_obliquity(jd_tt, SEMOD_PREC_IAU_2006)
    x = coortrf2(x, -math.sin(eps), math.cos(eps))
    return precess(x, jd_tt, J_TO_J2000, SEMOD_PREC_IAU_2006)


# =============================================================================
# PROVIDER
# =============================================================================


def _ecl_to_equ(x: List[float]) -> List[float]:
    return coortrf2(x, -_SEPS_J2000, _CEPS_J2000)


class AnalyticProvider(EphemerisProvider):
    """
    Keplerian planets, truncated ELP Moon. Barycentric equatorial J2000.
    """

    name = "analytic"
    frame = "J2000"
    flag = SEFLG_MOSEPH

    _BODIES = (
        SE_SUN, SE_MOON, SE_MERCURY, SE_VENUS, SE_MARS, SE_JUPITER,
        SE_SATURN, SE_URANUS, SE_NEPTUNE, SE_PLUTO, SE_EARTH,
    )

    def supports(self, body: int, jd_tt: float) -> bool:
        return body in self._BODIES and ANALYTIC_START <= jd_tt <= ANALYTIC_END

    def position(self, body: int, jd_tt: float, table_jd: Optional[float] = None) -> List[float]:
        """
        Barycentric equatorial J2000 position in AU.

        table_jd picks the element set; it defaults to jd_tt.
        """
        if body not in self._BODIES:
            raise EphemerisUnavailableError("body not in analytic ephemeris", body=body)
        sun = self._sun_barycentric(jd_tt, table_jd)
        if body == SE_SUN:
            return sun
        if body in (SE_EARTH, SE_MOON):
            emb = _ecl_to_equ(_heliocentric_ecliptic(_EMB, jd_tt, table_jd))
            moon = _moon_geocentric_j2000(jd_tt)
            earth = [sun[i] + emb[i] - moon[i] / (EARTH_MOON_MRAT + 1.0) for i in range(3)]
            if body == SE_EARTH:
                return earth
            return [earth[i] + moon[i] for i in range(3)]
        helio = _ecl_to_equ(_heliocentric_ecliptic(body, jd_tt, table_jd))
        return [sun[i] + helio[i] for i in range(3)]

    def _sun_barycentric(self, jd_tt: float, table_jd: Optional[float] = None) -> List[float]:
        acc = [0.0, 0.0, 0.0]
        msum = 0.0
        for body in _GIANTS:
            ratio = _MASS_RATIO[body]
            x = _heliocentric_ecliptic(body, jd_tt, table_jd)
            for i in range(3):
                acc[i] += x[i] / ratio
            msum += 1.0 / ratio
        return _ecl_to_equ([-acc[i] / (1.0 + msum) for i in range(3)])

    def state(self, body: int, jd_tt: float) -> Vector:
        if not self.supports(body, jd_tt):
            raise EphemerisUnavailableError(
                "date or body outside the analytic ephemeris", body=body, jd=jd_tt
            )
        h = ANALYTIC_SPEED_INTV
        # One element set for all three samples, also next to a table boundary
        x0 = self.position(body, jd_tt)
        xm = self.position(body, jd_tt - h, jd_tt)
        xp = self.position(body, jd_tt + h, jd_tt)
        return x0 + [(xp[i] - xm[i]) / (2.0 * h) for i in range(3)]
