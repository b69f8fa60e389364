"""
Mean lunar node and apogee (Black Moon Lilith) for ephemcore.

Mean elements of the Moon follow Moshier's fit to DE404 (the same
polynomials the analytic lunar theory is built on), valid over
MOSHNDEPH_START .. MOSHNDEPH_END. Positions are polar coordinates on the
mean ecliptic and equinox of date; ephemcore.nodes_apsides takes them to the
frame requested by the caller.

References:
- Moshier, S.L. "Lunar ephemeris fitted to DE404" (1995)
- Chapront-Touze & Chapront, ELP 2000-85 (mean arguments)
"""

import math
from typing import List, Sequence, Tuple

from .constants import (
    AUNIT,
    DEGTORAD,
    J2000,
    JPL_DE431_END,
    JPL_DE431_START,
    MOSHNDEPH_END,
    MOSHNDEPH_START,
)
from .exceptions import EphemerisUnavailableError
from .utils import radnorm
from .vectors import cart_pol, coortrf2, pol_cart

STR = 4.8481368110953599359e-6  # radians per arc second

MOON_MEAN_DIST = 384400000.0  # m
MOON_MEAN_ECC = 0.054900489
MOON_MEAN_INCL = 5.1453964  # degrees

ARCSEC_PER_CIRCLE = 1296000.0

# Century-bin corrections of the mean node and apogee (degrees), one value
# per Gregorian century from CORR_JD_T0GREG (-13100 .. +17200), fitted
# against DE431. The bins around the present are zero, where the Moshier
# polynomials already agree with DE431.
CORR_JD_T0GREG = -3063616.5  # 1 Jan -13100 (Gregorian)
CORR_DAYSCTY = 36524.25
MEAN_NODE_CORR: Tuple[float, ...] = (
    -2.56, -2.473, -2.392347, -2.316425, -2.239639, -2.167764, -2.0951, -2.02481,
    -1.957622, -1.890097, -1.826389, -1.763335, -1.701047, -1.643016, -1.584186, -1.527309,
    -1.473352, -1.418917, -1.367736, -1.317202, -1.267269, -1.221121, -1.174218, -1.128862,
    -1.086214, -1.042998, -1.002491, -0.962635, -0.923176, -0.887191, -0.850403, -0.814929,
    -0.782117, -0.748462, -0.717241, -0.686598, -0.656013, -0.628726, -0.60046, -0.573219,
    -0.548634, -0.522931, -0.499285, -0.476273, -0.452978, -0.432663, -0.411386, -0.390788,
    -0.372825, -0.353681, -0.33623, -0.31952, -0.302343, -0.287794, -0.272262, -0.257166,
    -0.244534, -0.230635, -0.218126, -0.206365, -0.194, -0.183876, -0.172782, -0.161877,
    -0.153254, -0.143371, -0.134501, -0.126552, -0.117932, -0.111199, -0.103716, -0.09616,
    -0.090718, -0.084046, -0.078007, -0.072959, -0.067235, -0.06299, -0.058102, -0.05307,
    -0.049786, -0.045381, -0.041317, -0.038165, -0.034501, -0.031871, -0.028844, -0.025701,
    -0.024018, -0.021427, -0.018881, -0.017291, -0.015186, -0.013755, -0.012098, -0.010261,
    -0.009688, -0.008218, -0.00667, -0.005979, -0.004756, -0.003991, -0.002996, -0.001974,
    -0.001975, -0.001213, -0.000377, -0.000356, 0.00005779, 0.000378, 0.00071, 0.001092,
    0.000767, 0.000985, 0.001443, 0.001069, 0.001141, 0.001321, 0.001462, 0.001695,
    0.001319, 0.001567, 0.001873, 0.001376, 0.001336, 0.001347, 0.00133, 0.001256,
    0.000813, 0.000946, 0.001079, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, -0.000364, -0.000452, -0.001091, -0.001159, -0.001136, -0.001798, -0.002249,
    -0.002622, -0.00299, -0.003555, -0.004425, -0.004758, -0.005134, -0.006065, -0.006839,
    -0.007474, -0.008283, -0.009411, -0.010786, -0.01181, -0.012989, -0.014825, -0.016426,
    -0.017922, -0.019774, -0.021881, -0.024194, -0.02619, -0.02844, -0.031285, -0.033817,
    -0.036318, -0.039212, -0.042456, -0.045799, -0.048994, -0.05271, -0.056948, -0.061017,
    -0.065181, -0.069843, -0.074922, -0.079976, -0.085052, -0.090755, -0.09684, -0.102797,
    -0.108939, -0.115568, -0.122636, -0.129593, -0.136683, -0.144641, -0.152825, -0.161044,
    -0.169758, -0.178916, -0.188712, -0.198401, -0.208312, -0.219395, -0.230407, -0.241577,
    -0.253508, -0.26564, -0.278556, -0.29133, -0.304353, -0.318815, -0.332882, -0.347316,
    -0.362895, -0.378421, -0.395061, -0.411748, -0.428666, -0.447477, -0.465636, -0.484277,
    -0.5046, -0.524405, -0.545533, -0.56702, -0.588404, -0.612099, -0.634965, -0.658262,
    -0.683866, -0.708526, -0.734719, -0.7618, -0.788562, -0.818092, -0.846885, -0.876177,
    -0.908385, -0.939371, -0.972027, -1.006149, -1.039634, -1.076135, -1.112156, -1.14849,
    -1.188312, -1.226761, -1.266821, -1.309156, -1.350583, -1.395223, -1.440028, -1.485047,
    -1.534104, -1.582023, -1.631506, -1.684031, -1.735687, -1.790421, -1.846039, -1.901951,
    -1.961872, -2.021179, -2.081987, -2.146259, -2.210031, -2.276609, -2.344904, -2.413795,
    -2.486559, -2.559564, -2.634215, -2.712692, -2.791289, -2.872533, -2.956217, -3.040965,
    -3.129234, -3.218545, -3.309805, -3.404827, -3.5008, -3.601, -3.7, -3.8,
)

MEAN_APSIS_CORR: Tuple[float, ...] = (
    7.525, 7.29, 7.057295, 6.830813, 6.611723, 6.396775, 6.189569, 5.985968,
    5.788342, 5.597304, 5.410167, 5.229946, 5.053389, 4.882187, 4.716494, 4.553532,
    4.396734, 4.243718, 4.094282, 3.950865, 3.810366, 3.674978, 3.543284, 3.41427,
    3.290526, 3.168775, 3.050904, 2.937541, 2.826189, 2.719822, 2.616193, 2.515431,
    2.419193, 2.323782, 2.232545, 2.143635, 2.056803, 1.974913, 1.893874, 1.816201,
    1.741957, 1.668083, 1.598335, 1.529645, 1.463016, 1.399693, 1.336905, 1.278097,
    1.220965, 1.165092, 1.113071, 1.060858, 1.011007, 0.963701, 0.916523, 0.872887,
    0.829596, 0.788486, 0.750017, 0.711177, 0.675589, 0.640303, 0.605303, 0.57349,
    0.541113, 0.511482, 0.483159, 0.45521, 0.430305, 0.404643, 0.380782, 0.358524,
    0.335405, 0.315244, 0.295131, 0.275766, 0.259223, 0.241586, 0.22589, 0.210404,
    0.194775, 0.181573, 0.167246, 0.154514, 0.143435, 0.131131, 0.121648, 0.111835,
    0.102474, 0.094284, 0.085204, 0.07824, 0.070697, 0.063696, 0.058894, 0.05239,
    0.047632, 0.043129, 0.037823, 0.034143, 0.029188, 0.025648, 0.021972, 0.018348,
    0.017127, 0.013989, 0.011967, 0.011003, 0.007865, 0.007033, 0.005574, 0.00406,
    0.003699, 0.002465, 0.002889, 0.002144, 0.001018, 0.001757, -0.0000967, -0.000734,
    -0.000392, -0.001546, -0.000863, -0.001266, -0.000933, -0.000503, -0.001304, 0.000238,
    -0.000507, -0.000897, 0.000647, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.000514, 0.000683, 0.002228, 0.001974, 0.003485, 0.00428, 0.005409,
    0.007468, 0.007938, 0.011012, 0.012525, 0.013757, 0.016757, 0.017932, 0.02078,
    0.023416, 0.026386, 0.030428, 0.033512, 0.038789, 0.043126, 0.047778, 0.054175,
    0.058891, 0.065878, 0.072345, 0.079668, 0.088238, 0.095307, 0.104873, 0.113533,
    0.122336, 0.133205, 0.142922, 0.154871, 0.166488, 0.179234, 0.193928, 0.207262,
    0.223089, 0.238736, 0.254907, 0.273232, 0.291085, 0.311046, 0.331025, 0.351955,
    0.374422, 0.396341, 0.420772, 0.444867, 0.469984, 0.497448, 0.524717, 0.554752,
    0.584581, 0.616272, 0.649744, 0.682947, 0.719405, 0.755834, 0.79378, 0.833875,
    0.873893, 0.91734, 0.960429, 1.005471, 1.052384, 1.099317, 1.149508, 1.20013,
    1.253038, 1.307672, 1.36348, 1.422592, 1.4819, 1.544111, 1.607982, 1.672954,
    1.741025, 1.809727, 1.882038, 1.955243, 2.029956, 2.108428, 2.186805, 2.268697,
    2.352071, 2.43737, 2.525903, 2.615415, 2.709082, 2.804198, 2.901704, 3.002606,
    3.104412, 3.210406, 3.317733, 3.428386, 3.541634, 3.656634, 3.775988, 3.896306,
    4.02048, 4.146814, 4.275356, 4.408257, 4.542282, 4.681174, 4.822524, 4.966424,
    5.114948, 5.264973, 5.419906, 5.577056, 5.737688, 5.902347, 6.069138, 6.241065,
    6.415155, 6.593317, 6.774853, 6.959322, 7.148845, 7.340334, 7.537156, 7.737358,
    7.940882, 8.149932, 8.361576, 8.57915, 8.799591, 9.024378, 9.254584, 9.487362,
    9.726535, 9.968784, 10.216089, 10.467716, 10.725293, 10.986, 11.25, 11.52,
)


def _mods3600(x: float) -> float:
    return x - ARCSEC_PER_CIRCLE * math.floor(x / ARCSEC_PER_CIRCLE)


def mean_lunar_elements(jd_tt: float) -> Tuple[float, float, float, float, float]:
    """
    Fundamental arguments of the Moon and the Sun.

    Args:
        jd_tt: Julian Day (TT)

    Returns:
        (L, F, l, D, l') in arc seconds: mean longitude of the Moon, mean
        argument of latitude, mean anomaly of the Moon, mean elongation,
        mean anomaly of the Sun
    """
    t = (jd_tt - J2000) / 36525.0
    frac_t = math.fmod(t, 1.0)
    t2 = t * t

    # Mean anomaly of the Sun (Laskar)
    sun_m = _mods3600(129600000.0 * frac_t - 3418.961646 * t + 1287104.76154)
    poly = 1.62e-20
    for c in (-1.0390e-17, -3.83508e-15, 4.237343e-13, 8.8555011e-11,
              -4.77258489e-8, -1.1297037031e-5, 1.4732069041e-4, -0.552891801772):
        poly = poly * t + c
    sun_m += poly * t2

    nf = _mods3600(1739232000.0 * frac_t + 295263.0983 * t
                   - 2.079419901760e-01 * t + 335779.55755)
    mp = _mods3600(1717200000.0 * frac_t + 715923.4728 * t
                   - 2.035946368532e-01 * t + 485868.28096)
    d = _mods3600(1601856000.0 * frac_t + 1105601.4603 * t
                  + 3.962893294503e-01 * t + 1072260.73512)
    swelp = _mods3600(1731456000.0 * frac_t + 1108372.83264 * t
                      - 6.784914260953e-01 * t + 785939.95571)

    t3 = t2 * t
    t4 = t2 * t2
    nf += -1.312045233711e+01 * t2 - 1.138215912580e-03 * t3 - 9.646018347184e-06 * t4
    mp += 3.146734198839e+01 * t2 + 4.768357585780e-02 * t3 - 3.421689790404e-04 * t4
    d += -6.847070905410e+00 * t2 - 5.834100476561e-03 * t3 - 2.905334122698e-04 * t4
    swelp += -5.663161722088e+00 * t2 + 5.722859298199e-03 * t3 - 8.466472828815e-05 * t4
    return swelp, nf, mp, d, sun_m


def _century_correction(table: Sequence[float], jd_tt: float) -> float:
    """Linear interpolation in a century-bin correction table (degrees)."""
    if jd_tt < JPL_DE431_START or jd_tt > JPL_DE431_END:
        return 0.0
    dj = jd_tt - CORR_JD_T0GREG
    i = int(math.floor(dj / CORR_DAYSCTY))
    if i < 0 or i + 1 >= len(table):
        return 0.0
    frac = (dj - i * CORR_DAYSCTY) / CORR_DAYSCTY
    return table[i] + frac * (table[i + 1] - table[i])


def corr_mean_node(jd_tt: float) -> float:
    return _century_correction(MEAN_NODE_CORR, jd_tt)


def corr_mean_apog(jd_tt: float) -> float:
    return _century_correction(MEAN_APSIS_CORR, jd_tt)


def _check_range(jd_tt: float) -> None:
    if jd_tt < MOSHNDEPH_START or jd_tt > MOSHNDEPH_END:
        raise EphemerisUnavailableError(
            "date outside mean lunar node range", jd=jd_tt,
            start=MOSHNDEPH_START, end=MOSHNDEPH_END,
        )


def mean_node(jd_tt: float) -> List[float]:
    """
    Mean ascending node of the Moon.

    Returns:
        Polar [lon, lat, r] on the mean ecliptic of date, radians and AU

    Raises:
        EphemerisUnavailableError: Outside MOSHNDEPH_START .. MOSHNDEPH_END
    """
    _check_range(jd_tt)
    swelp, nf = mean_lunar_elements(jd_tt)[0:2]
    dcor = corr_mean_node(jd_tt) * 3600.0
    return [radnorm((swelp - nf - dcor) * STR), 0.0, MOON_MEAN_DIST / AUNIT]


def mean_apogee(jd_tt: float) -> List[float]:
    """
    Mean lunar apogee ("Black Moon Lilith").

    The apogee of the mean lunar ellipse lies on the inclined lunar orbit;
    it is rotated about the mean node by the mean inclination, so it has a
    small ecliptic latitude.

    Returns:
        Polar [lon, lat, r] on the mean ecliptic of date, radians and AU
    """
    _check_range(jd_tt)
    swelp, nf, mp = mean_lunar_elements(jd_tt)[0:3]
    apog = radnorm((swelp - mp) * STR + math.pi - corr_mean_apog(jd_tt) * DEGTORAD)
    node = radnorm((swelp - nf) * STR - corr_mean_node(jd_tt) * DEGTORAD)
    dist = MOON_MEAN_DIST * (1.0 + MOON_MEAN_ECC) / AUNIT

    x = pol_cart([radnorm(apog - node), 0.0, dist])
    x = coortrf2(x, math.sin(-MOON_MEAN_INCL * DEGTORAD), math.cos(-MOON_MEAN_INCL * DEGTORAD))
    pol = cart_pol(x)
    pol[0] = radnorm(pol[0] + node)
    return pol


def mean_perigee_distance() -> float:
    return MOON_MEAN_DIST * (1.0 - MOON_MEAN_ECC) / AUNIT


def mean_focal_distance() -> float:
    """Distance of the empty focus of the mean lunar ellipse from the Earth, AU."""
    return MOON_MEAN_DIST * MOON_MEAN_ECC * 2.0 / AUNIT
