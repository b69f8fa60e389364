"""
Sidereal zodiac support: ayanamsha computation.

The ayanamsha is the longitude difference tropical - sidereal. Three ways of
obtaining it are implemented:

- Traditional method: the ayanamsha is defined by its value ayan_t0 at an
  epoch t0. The vernal point of the date is precessed back to t0 and its
  longitude on the ecliptic of t0 is subtracted from ayan_t0. A small
  correction compensates the difference between the precession model the
  ayanamsha was defined with and the one in use.
- SE_SIDBIT_ECL_DATE: the point at longitude ayan_t0 on the ecliptic of t0
  is precessed to the date and measured on the ecliptic of date.
- Star-anchored ("true") modes: a star (or the galactic centre / pole) is
  held at a fixed sidereal longitude. The star is taken at its apparent
  geocentric place (space motion, parallax, light deflection, aberration),
  so these modes depend on the ephemeris source that supplies the Earth.

The values returned are mean ayanamshas (referred to the mean equinox of
date). Nutation in longitude is added only when the caller asks for it, so
that the ayanamsha can be subtracted from nutated and non-nutated positions
alike.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .config import CalcConfig, EphemerisSource
from .constants import (
    B1950,
    DEGTORAD,
    J2000,
    RADTODEG,
    SE_EARTH,
    SE_SIDBIT_ECL_DATE,
    SE_SIDBIT_NO_PREC_OFFSET,
    SE_SIDBIT_USER_UT,
    SE_SIDM_ALDEBARAN_15TAU,
    SE_SIDM_ARYABHATA,
    SE_SIDM_ARYABHATA_522,
    SE_SIDM_ARYABHATA_MSUN,
    SE_SIDM_B1950,
    SE_SIDM_BABYL_BRITTON,
    SE_SIDM_BABYL_ETPSC,
    SE_SIDM_BABYL_HUBER,
    SE_SIDM_BABYL_KUGLER1,
    SE_SIDM_BABYL_KUGLER2,
    SE_SIDM_BABYL_KUGLER3,
    SE_SIDM_DELUCE,
    SE_SIDM_DJWHAL_KHUL,
    SE_SIDM_FAGAN_BRADLEY,
    SE_SIDM_GALALIGN_MARDYKS,
    SE_SIDM_GALCENT_0SAG,
    SE_SIDM_GALCENT_COCHRANE,
    SE_SIDM_GALCENT_MULA_WILHELM,
    SE_SIDM_GALCENT_RGILBRAND,
    SE_SIDM_GALEQU_FIORENZA,
    SE_SIDM_GALEQU_IAU1958,
    SE_SIDM_GALEQU_MULA,
    SE_SIDM_GALEQU_TRUE,
    SE_SIDM_HIPPARCHOS,
    SE_SIDM_J1900,
    SE_SIDM_J2000,
    SE_SIDM_JN_BHASIN,
    SE_SIDM_KRISHNAMURTI,
    SE_SIDM_KRISHNAMURTI_VP291,
    SE_SIDM_LAHIRI,
    SE_SIDM_LAHIRI_1940,
    SE_SIDM_LAHIRI_ICRC,
    SE_SIDM_LAHIRI_VP285,
    SE_SIDM_RAMAN,
    SE_SIDM_SASSANIAN,
    SE_SIDM_SS_CITRA,
    SE_SIDM_SS_REVATI,
    SE_SIDM_SURYASIDDHANTA,
    SE_SIDM_SURYASIDDHANTA_MSUN,
    SE_SIDM_TRUE_CITRA,
    SE_SIDM_TRUE_MULA,
    SE_SIDM_TRUE_PUSHYA,
    SE_SIDM_TRUE_REVATI,
    SE_SIDM_TRUE_SHEORAN,
    SE_SIDM_USER,
    SE_SIDM_USHASHASHI,
    SE_SIDM_VALENS_MOON,
    SE_SIDM_YUKTESHWAR,
    SE_SUN,
    SEFLG_EPHMASK,
    SEFLG_NONUT,
    SEMOD_PREC_IAU_1976,
    SEMOD_PREC_NEWCOMB,
)
from .frames import J2000_TO_J, J_TO_J2000, frame_bias, precess
from .pipeline import aberr_light, deflect_light
from .time_utils import swe_deltat, ut_to_tt
from .utils import degnorm, difdeg2n
from .vectors import cart_pol, coortrf2, pol_cart, pol_cart_sp

logger = logging.getLogger(__name__)

AYANAMSA_SPEED_INTV = 1.0  # days

# Epochs closer than this to J2000 are treated as J2000
EPOCH_TOLERANCE = 0.001  # days

# Corrections above this are wrapped to a small negative value
CORRECTION_WRAP = 350.0

PARSEC_TO_AUNIT = 206264.806  # AU per parsec
KM_S_TO_AU_CTY = 21.095  # km/s -> AU/century

# Distance given to stars without parallax
STAR_NO_PARALLAX_DIST = 1.0e9  # AU


# =============================================================================
# AYANAMSHA DEFINITIONS
# =============================================================================


@dataclass(frozen=True)
class AyanamsaDef:
    """
    Traditional ayanamsha definition.

    Attributes:
        t0: Reference epoch (Julian Day)
        ayan_t0: Ayanamsha at t0 in degrees
        t0_is_ut: t0 is given in UT and must be converted to TT
        prec_offset: Precession model the definition was made with
            (SEMOD_PREC_*), 0 or -1 for none
    """

    t0: float
    ayan_t0: float
    t0_is_ut: bool = False
    prec_offset: int = 0


AYANAMSA_DATA = (
    AyanamsaDef(2433282.42346, 24.042044444, False, SEMOD_PREC_NEWCOMB),  # Fagan/Bradley
    AyanamsaDef(2435553.5, 23.250182778 - 0.004658035, False, SEMOD_PREC_IAU_1976),  # Lahiri
    AyanamsaDef(1721057.5, 0.0, True),  # De Luce
    AyanamsaDef(2415020.0, 360.0 - 338.98556, False, SEMOD_PREC_NEWCOMB),  # Raman
    AyanamsaDef(2415020.0, 360.0 - 341.33904, False, -1),  # Usha/Shashi
    AyanamsaDef(2415020.0, 360.0 - 337.636111, False, SEMOD_PREC_NEWCOMB),  # Krishnamurti
    AyanamsaDef(2415020.0, 360.0 - 333.0369024, False, 0),  # Djwhal Khul
    AyanamsaDef(2415020.0, 360.0 - 338.917778, False, -1),  # Yukteshwar
    AyanamsaDef(2415020.0, 360.0 - 338.634444, False, -1),  # J.N. Bhasin
    AyanamsaDef(1684532.5, -5.66667, True, -1),  # Babylonian, Kugler 1
    AyanamsaDef(1684532.5, -4.26667, True, -1),  # Babylonian, Kugler 2
    AyanamsaDef(1684532.5, -3.41667, True, -1),  # Babylonian, Kugler 3
    AyanamsaDef(1684532.5, -4.46667, True, -1),  # Babylonian, Huber
    AyanamsaDef(1673941.0, -5.079167, True, -1),  # Babylonian, eta Piscium
    AyanamsaDef(1684532.5, -4.44138598, True, 0),  # Babylonian, Aldebaran = 15 Tau
    AyanamsaDef(1674484.0, -9.33333, True, -1),  # Hipparchos
    AyanamsaDef(1927135.8747793, 0.0, True, -1),  # Sassanian
    AyanamsaDef(0.0, 0.0),  # Galactic centre at 0 Sag (star-anchored)
    AyanamsaDef(J2000, 0.0),  # J2000
    AyanamsaDef(2415020.0, 0.0),  # J1900
    AyanamsaDef(B1950, 0.0),  # B1950
    AyanamsaDef(1903396.8128654, 0.0, True),  # Suryasiddhanta
    AyanamsaDef(1903396.8128654, -0.21463395, True),  # Suryasiddhanta, mean Sun
    AyanamsaDef(1903396.7895321, 0.0, True),  # Aryabhata
    AyanamsaDef(1903396.7895321, -0.23763238, True),  # Aryabhata, mean Sun
    AyanamsaDef(1903396.8128654, -0.79167046, True),  # SS Revati
    AyanamsaDef(1903396.8128654, 2.11070444, True),  # SS Citra
    AyanamsaDef(0.0, 0.0),  # True Citra (star-anchored)
    AyanamsaDef(0.0, 0.0),  # True Revati (star-anchored)
    AyanamsaDef(0.0, 0.0),  # True Pushya (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Galactic centre, Gil Brand (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Galactic equator IAU 1958 (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Galactic equator (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Galactic equator mid-Mula (star-anchored)
    AyanamsaDef(2451079.734892, 30.0),  # Skydram / Mardyks
    AyanamsaDef(0.0, 0.0),  # True Mula (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Galactic centre at mid-Mula, Wilhelm (star-anchored)
    AyanamsaDef(1911797.740782065, 0.0, True),  # Aryabhata 522
    AyanamsaDef(1721057.5, -3.2, True, -1),  # Babylonian, Britton
    AyanamsaDef(0.0, 0.0),  # "Vedic" / Sheoran (star-anchored)
    AyanamsaDef(0.0, 0.0),  # Cochrane, galactic centre at 0 Cap (star-anchored)
    AyanamsaDef(2451544.5, 25.0, True),  # Galactic equator, Fiorenza
    AyanamsaDef(1775845.5, -2.9422, True, -1),  # Vettius Valens
    AyanamsaDef(2415020.0, 22.44597222, False, SEMOD_PREC_NEWCOMB),  # Lahiri 1940
    AyanamsaDef(1825235.2458513028, 0.0),  # Lahiri VP285
    AyanamsaDef(1827424.752255678, 0.0),  # Krishnamurti VP291
    AyanamsaDef(2435553.5, 23.25 - 0.00464207, False, SEMOD_PREC_NEWCOMB),  # Lahiri ICRC
)


_NAMES = {
    SE_SIDM_FAGAN_BRADLEY: "Fagan/Bradley",
    SE_SIDM_LAHIRI: "Lahiri",
    SE_SIDM_DELUCE: "De Luce",
    SE_SIDM_RAMAN: "Raman",
    SE_SIDM_USHASHASHI: "Usha/Shashi",
    SE_SIDM_KRISHNAMURTI: "Krishnamurti",
    SE_SIDM_DJWHAL_KHUL: "Djwhal Khul",
    SE_SIDM_YUKTESHWAR: "Yukteshwar",
    SE_SIDM_JN_BHASIN: "J.N. Bhasin",
    SE_SIDM_BABYL_KUGLER1: "Babylonian/Kugler 1",
    SE_SIDM_BABYL_KUGLER2: "Babylonian/Kugler 2",
    SE_SIDM_BABYL_KUGLER3: "Babylonian/Kugler 3",
    SE_SIDM_BABYL_HUBER: "Babylonian/Huber",
    SE_SIDM_BABYL_ETPSC: "Babylonian/Eta Piscium",
    SE_SIDM_ALDEBARAN_15TAU: "Babylonian/Aldebaran = 15 Tau",
    SE_SIDM_HIPPARCHOS: "Hipparchos",
    SE_SIDM_SASSANIAN: "Sassanian",
    SE_SIDM_GALCENT_0SAG: "Galact. Center = 0 Sag",
    SE_SIDM_J2000: "J2000",
    SE_SIDM_J1900: "J1900",
    SE_SIDM_B1950: "B1950",
    SE_SIDM_SURYASIDDHANTA: "Suryasiddhanta",
    SE_SIDM_SURYASIDDHANTA_MSUN: "Suryasiddhanta, mean Sun",
    SE_SIDM_ARYABHATA: "Aryabhata",
    SE_SIDM_ARYABHATA_MSUN: "Aryabhata, mean Sun",
    SE_SIDM_SS_REVATI: "SS Revati",
    SE_SIDM_SS_CITRA: "SS Citra",
    SE_SIDM_TRUE_CITRA: "True Citra",
    SE_SIDM_TRUE_REVATI: "True Revati",
    SE_SIDM_TRUE_PUSHYA: "True Pushya (PVRN Rao)",
    SE_SIDM_GALCENT_RGILBRAND: "Galactic Center (Gil Brand)",
    SE_SIDM_GALEQU_IAU1958: "Galactic Equator (IAU1958)",
    SE_SIDM_GALEQU_TRUE: "Galactic Equator",
    SE_SIDM_GALEQU_MULA: "Galactic Equator mid-Mula",
    SE_SIDM_GALALIGN_MARDYKS: "Skydram (Mardyks)",
    SE_SIDM_TRUE_MULA: "True Mula (Chandra Hari)",
    SE_SIDM_GALCENT_MULA_WILHELM: "Dhruva/Gal.Center/Mula (Wilhelm)",
    SE_SIDM_ARYABHATA_522: "Aryabhata 522",
    SE_SIDM_BABYL_BRITTON: "Babylonian/Britton",
    SE_SIDM_TRUE_SHEORAN: '"Vedic"/Sheoran',
    SE_SIDM_GALCENT_COCHRANE: "Cochrane (Gal.Center = 0 Cap)",
    SE_SIDM_GALEQU_FIORENZA: "Galactic Equator (Fiorenza)",
    SE_SIDM_VALENS_MOON: "Vettius Valens",
    SE_SIDM_LAHIRI_1940: "Lahiri 1940",
    SE_SIDM_LAHIRI_VP285: "Lahiri VP285",
    SE_SIDM_KRISHNAMURTI_VP291: "Krishnamurti-Senthilathiban",
    SE_SIDM_LAHIRI_ICRC: "Lahiri ICRC",
    SE_SIDM_USER: "User-defined",
}


# =============================================================================
# ANCHOR STARS
# =============================================================================


@dataclass(frozen=True)
class StarData:
    """
    Catalogue record of an anchor star.

    Attributes:
        ra: Right ascension in degrees
        dec: Declination in degrees
        pm_ra: Proper motion in RA * cos(dec), mas/year
        pm_dec: Proper motion in declination, mas/year
        radvel: Radial velocity, km/s
        parallax: Parallax, mas (0 for objects treated as infinitely distant)
        equinox: Equinox of the coordinates; J2000 means ICRS
    """

    ra: float
    dec: float
    pm_ra: float = 0.0
    pm_dec: float = 0.0
    radvel: float = 0.0
    parallax: float = 0.0
    equinox: float = J2000


def _hms(h: float, m: float, s: float) -> float:
    return (h + m / 60.0 + s / 3600.0) * 15.0


def _dms(d: float, m: float, s: float) -> float:
    sign = -1.0 if d < 0 else 1.0
    return sign * (abs(d) + m / 60.0 + s / 3600.0)


STARS = {
    "SPICA": StarData(
        _hms(13, 25, 11.57937), _dms(-11, 9, 40.7501), -42.35, -30.67, 1.0, 13.06
    ),
    "REVATI": StarData(
        _hms(1, 13, 43.88735), _dms(7, 34, 31.2745), 145.0, -55.69, 15.0, 18.76
    ),
    "PUSHYA": StarData(
        _hms(8, 44, 41.09921), _dms(18, 9, 15.5034), -17.67, -229.26, 17.14, 24.98
    ),
    "MULA": StarData(
        _hms(17, 33, 36.52012), _dms(-37, 6, 13.7648), -8.53, -30.8, -3.0, 5.71
    ),
    "GAL_CENTER": StarData(
        _hms(17, 45, 40.03599), _dms(-29, 0, 28.1699), -2.755718425, -5.547, 0.0, 0.125
    ),
    "GAL_POLE": StarData(_hms(12, 51, 36.7151981), _dms(27, 6, 11.193172)),
    "GAL_POLE_IAU1958": StarData(_hms(12, 49, 0.0), _dms(27, 24, 0.0), equinox=B1950),
}

# Sidereal longitude at which each anchor is held
_STAR_ANCHORS = {
    SE_SIDM_TRUE_CITRA: ("SPICA", 180.0),
    SE_SIDM_TRUE_REVATI: ("REVATI", 359.8333333333),
    SE_SIDM_TRUE_PUSHYA: ("PUSHYA", 106.0),
    SE_SIDM_TRUE_MULA: ("MULA", 240.0),
    SE_SIDM_TRUE_SHEORAN: ("SPICA", 178.607),
    SE_SIDM_GALCENT_0SAG: ("GAL_CENTER", 240.0),
    SE_SIDM_GALCENT_RGILBRAND: ("GAL_CENTER", 244.371482),
    SE_SIDM_GALCENT_MULA_WILHELM: ("GAL_CENTER", 246.801354),
    SE_SIDM_GALCENT_COCHRANE: ("GAL_CENTER", 270.0),
}

# Sidereal longitude of the ascending node of the galactic equator
_GALACTIC_EQUATOR_ANCHORS = {
    SE_SIDM_GALEQU_IAU1958: ("GAL_POLE_IAU1958", 240.0),
    SE_SIDM_GALEQU_TRUE: ("GAL_POLE", 240.0),
    SE_SIDM_GALEQU_MULA: ("GAL_POLE", 246.62),
}


def is_star_anchored(sid_mode: int) -> bool:
    return sid_mode in _STAR_ANCHORS or sid_mode in _GALACTIC_EQUATOR_ANCHORS


def star_space_motion(star: StarData) -> List[float]:
    """
    Barycentric position (AU) and velocity (AU/day) of a star at its epoch.

    Proper motion, radial velocity and parallax are combined into a linear
    space motion; stars without parallax are placed at STAR_NO_PARALLAX_DIST.
    """
    dec = star.dec * DEGTORAD
    if star.parallax > 0.0:
        dist = PARSEC_TO_AUNIT / (star.parallax / 1000.0)
    else:
        dist = STAR_NO_PARALLAX_DIST
    # mas/year -> radians/day, RA motion as a great-circle rate
    mas_per_day = DEGTORAD / 3600000.0 / 365.25
    pol = [
        star.ra * DEGTORAD,
        dec,
        dist,
        star.pm_ra * mas_per_day / math.cos(dec),
        star.pm_dec * mas_per_day,
        star.radvel * KM_S_TO_AU_CTY / 36525.0,
    ]
    return pol_cart_sp(pol)


def star_longitude(
    ctx, star: StarData, jd_tt: float, source: EphemerisSource = EphemerisSource.SWISS
) -> float:
    """
    Apparent geocentric longitude of a catalogue star, mean ecliptic of date.

    The star is moved along its space motion to jd_tt and seen from the
    barycentric Earth of the source's provider, with light deflection by
    the Sun and annual aberration. Nutation is not applied.

    Args:
        ctx: ComputationContext (providers, precession, bias and obliquity models)
        star: Catalogue entry
        jd_tt: Julian Day (TT)
        source: Ephemeris family for the Earth and Sun

    Returns:
        Longitude in degrees, [0, 360)

    Raises:
        EphemerisUnavailableError: If no provider of source covers jd_tt

    FIXME: Precision - The IAU 1958 pole is an FK4 B1950 position, precessed
    without the E-terms.
    """
    x = star_space_motion(star)
    x = [x[i] + (jd_tt - star.equinox) * x[i + 3] for i in range(3)] + x[3:6]
    if star.equinox != J2000:
        x = precess(x[0:3], star.equinox, J_TO_J2000, ctx.prec_model) + precess(
            x[3:6], star.equinox, J_TO_J2000, ctx.prec_model
        )
        x = frame_bias(x, ctx.bias_model, backward=True)

    provider = ctx.select_provider(source, SE_EARTH, jd_tt)
    earth = provider.state(SE_EARTH, jd_tt)
    sun = provider.state(SE_SUN, jd_tt)
    if provider.frame == "J2000":
        earth = frame_bias(earth, ctx.bias_model, backward=True)
        sun = frame_bias(sun, ctx.bias_model, backward=True)

    xx = [x[i] - earth[i] for i in range(6)]
    xx = deflect_light(xx, 0.0, earth, sun, False)
    xx = aberr_light(xx, earth, False)

    x = frame_bias(xx[0:3], ctx.bias_model)
    x = precess(x, jd_tt, J2000_TO_J, ctx.prec_model)
    oe = ctx.obliquity(jd_tt)
    x = coortrf2(x, oe.seps, oe.ceps)
    return degnorm(cart_pol(x)[0] * RADTODEG)


def _star_ayanamsa(ctx, sid_mode: int, jd_tt: float, source: EphemerisSource) -> float:
    if sid_mode in _STAR_ANCHORS:
        name, sidereal_lon = _STAR_ANCHORS[sid_mode]
        return degnorm(star_longitude(ctx, STARS[name], jd_tt, source) - sidereal_lon)
    name, sidereal_lon = _GALACTIC_EQUATOR_ANCHORS[sid_mode]
    node = star_longitude(ctx, STARS[name], jd_tt, source) + 90.0
    return degnorm(node - sidereal_lon)


# =============================================================================
# TRADITIONAL AND ECLIPTIC-OF-DATE METHODS
# =============================================================================


def _definition(ctx) -> AyanamsaDef:
    if ctx.sid_mode == SE_SIDM_USER:
        return AyanamsaDef(
            ctx.sid_t0, ctx.sid_ayan_t0, bool(ctx.sid_bits & SE_SIDBIT_USER_UT), 0
        )
    return AYANAMSA_DATA[ctx.sid_mode]


def _ecliptic_longitude(ctx, x, jd_tt: float) -> float:
    """Longitude (radians) of an equatorial vector on the mean ecliptic of jd_tt."""
    oe = ctx.obliquity(jd_tt)
    return cart_pol(coortrf2(x, oe.seps, oe.ceps))[0]


def precession_offset_correction(ctx, t0: float, prec_offset: int) -> float:
    """
    Correction for an ayanamsha defined with another precession model.

    The vernal point of t0 is precessed to J2000 with the model in use and
    back to t0 with the model of the definition; its longitude on the
    ecliptic of t0 is the correction in degrees, close to zero.
    """
    if abs(t0 - J2000) < EPOCH_TOLERANCE:
        return 0.0
    if ctx.sid_bits & SE_SIDBIT_NO_PREC_OFFSET:
        return 0.0
    if prec_offset <= 0 or prec_offset == ctx.prec_model:
        return 0.0
    x = precess([1.0, 0.0, 0.0], t0, J_TO_J2000, ctx.prec_model)
    x = precess(x, t0, J2000_TO_J, prec_offset)
    corr = _ecliptic_longitude(ctx, x, t0) * RADTODEG
    if corr > CORRECTION_WRAP:
        corr -= 360.0
    return corr


def _traditional_ayanamsa(ctx, aya: AyanamsaDef, t0: float, jd_tt: float) -> float:
    x = [1.0, 0.0, 0.0]
    x = precess(x, jd_tt, J_TO_J2000, ctx.prec_model)
    x = precess(x, t0, J2000_TO_J, ctx.prec_model)
    return aya.ayan_t0 - _ecliptic_longitude(ctx, x, t0) * RADTODEG


def _ecl_date_ayanamsa(ctx, aya: AyanamsaDef, t0: float, jd_tt: float) -> float:
    x = pol_cart([degnorm(aya.ayan_t0) * DEGTORAD, 0.0, 1.0])
    oe = ctx.obliquity(t0)
    x = coortrf2(x, -oe.seps, oe.ceps)
    x = precess(x, t0, J_TO_J2000, ctx.prec_model)
    x = precess(x, jd_tt, J2000_TO_J, ctx.prec_model)
    return _ecliptic_longitude(ctx, x, jd_tt) * RADTODEG


def mean_ayanamsa(
    ctx, jd_tt: float, source: EphemerisSource = EphemerisSource.SWISS
) -> float:
    """
    Ayanamsha of the context's sidereal mode, referred to the mean equinox.

    Args:
        ctx: ComputationContext
        jd_tt: Julian Day (TT)
        source: Ephemeris family for the Earth of star-anchored modes

    Returns:
        Ayanamsha in degrees, [0, 360)
    """
    if is_star_anchored(ctx.sid_mode):
        return _star_ayanamsa(ctx, ctx.sid_mode, jd_tt, source)

    aya = _definition(ctx)
    t0 = aya.t0
    if aya.t0_is_ut:
        t0 += swe_deltat(t0)

    if ctx.sid_bits & SE_SIDBIT_ECL_DATE:
        ayan = _ecl_date_ayanamsa(ctx, aya, t0, jd_tt)
    else:
        ayan = _traditional_ayanamsa(ctx, aya, t0, jd_tt)
    return degnorm(ayan - precession_offset_correction(ctx, t0, aya.prec_offset))


def get_ayanamsa(
    ctx,
    jd_tt: float,
    nutation: bool = False,
    source: EphemerisSource = EphemerisSource.SWISS,
) -> float:
    """
    Ayanamsha in degrees, optionally including nutation in longitude.

    Args:
        ctx: ComputationContext
        jd_tt: Julian Day (TT)
        nutation: Add dpsi (the value to subtract from nutated positions)
        source: Ephemeris family for the Earth of star-anchored modes
    """
    ayan = mean_ayanamsa(ctx, jd_tt, source)
    if nutation:
        ayan = degnorm(ayan + ctx.nutation(jd_tt).dpsi * RADTODEG)
    return ayan


def ayanamsa_with_speed(
    ctx, jd_tt: float, nutation: bool, source: EphemerisSource = EphemerisSource.SWISS
) -> Tuple[float, float]:
    """
    Ayanamsha and its rate.

    Returns:
        (ayanamsha in degrees, rate in degrees/day); the rate is a central
        difference over AYANAMSA_SPEED_INTV
    """
    ayan = get_ayanamsa(ctx, jd_tt, nutation, source)
    before = get_ayanamsa(ctx, jd_tt - AYANAMSA_SPEED_INTV, nutation, source)
    after = get_ayanamsa(ctx, jd_tt + AYANAMSA_SPEED_INTV, nutation, source)
    return ayan, difdeg2n(after, before) / (2.0 * AYANAMSA_SPEED_INTV)


def get_ayanamsa_ex(ctx, jd_tt: float, iflag: int) -> Tuple[int, float]:
    """
    Ayanamsha for a flag set, with the flag actually used.

    Nutation is included unless SEFLG_NONUT is set. Star-anchored modes
    report the ephemeris that served the Earth position.

    Returns:
        (retflag, ayanamsha in degrees)

    Raises:
        UnsupportedCombinationError: For invalid flag combinations
    """
    config = CalcConfig.from_flags(iflag)
    source = config.source
    if is_star_anchored(ctx.sid_mode):
        source = EphemerisSource(ctx.select_provider(source, SE_EARTH, jd_tt).flag)
    retflag = (iflag & ~SEFLG_EPHMASK) | int(source)
    ayan = get_ayanamsa(ctx, jd_tt, not (iflag & SEFLG_NONUT), config.source)
    return retflag, ayan


# =============================================================================
# PUBLIC API (DEFAULT CONTEXT)
# =============================================================================


def swe_set_sid_mode(sid_mode: int, t0: float = 0.0, ayan_t0: float = 0.0) -> None:
    """
    Set the sidereal zodiac mode for calculations.

    Args:
        sid_mode: Sidereal mode constant (SE_SIDM_LAHIRI, SE_SIDM_FAGAN_BRADLEY,
            etc.), optionally OR-ed with SE_SIDBIT_ECL_DATE,
            SE_SIDBIT_NO_PREC_OFFSET or SE_SIDBIT_USER_UT
        t0: Reference time (JD) for SE_SIDM_USER
        ayan_t0: Ayanamsha at t0 in degrees for SE_SIDM_USER

    Example:
        >>> swe_set_sid_mode(SE_SIDM_LAHIRI)
        >>> pos, _ = swe_calc_ut(2451545.0, SE_SUN, SEFLG_SIDEREAL)

        >>> # Custom ayanamsha: 24 degrees at J2000.0, precessing from there
        >>> swe_set_sid_mode(SE_SIDM_USER, t0=2451545.0, ayan_t0=24.0)
    """
    from .state import set_sid_mode

    set_sid_mode(sid_mode, t0, ayan_t0)


def swe_get_ayanamsa(tjd_et: float) -> float:
    """Mean ayanamsha (no nutation) for a Julian Day in TT."""
    from .state import get_default_context

    return get_ayanamsa(get_default_context(), tjd_et, nutation=False)


def swe_get_ayanamsa_ut(tjd_ut: float) -> float:
    """
    Mean ayanamsha for a Julian Day in UT.

    Example:
        >>> swe_set_sid_mode(SE_SIDM_LAHIRI)
        >>> ayanamsa = swe_get_ayanamsa_ut(2451545.0)
    """
    return swe_get_ayanamsa(ut_to_tt(tjd_ut))


def swe_get_ayanamsa_ex(tjd_et: float, iflag: int) -> Tuple[int, float]:
    """Ayanamsha including nutation unless SEFLG_NONUT; returns (retflag, ayan)."""
    from .state import get_default_context

    return get_ayanamsa_ex(get_default_context(), tjd_et, iflag)


def swe_get_ayanamsa_ex_ut(tjd_ut: float, iflag: int) -> Tuple[int, float]:
    return swe_get_ayanamsa_ex(ut_to_tt(tjd_ut), iflag)


def swe_get_ayanamsa_name(sid_mode: int) -> Optional[str]:
    """
    Get the name of a sidereal mode.
    Compatible with pyswisseph's swe.get_ayanamsa_name().
    """
    return _NAMES.get(sid_mode & 255)
