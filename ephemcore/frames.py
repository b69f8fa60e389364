"""
Reference-frame transforms for ephemcore.

This module implements the rotations that carry a J2000 (ICRS) state vector
to the true equator and equinox of date:

- Frame bias: small fixed rotation between ICRS and dynamical J2000
  (IAU 2000 and IAU 2006 matrices)
- Precession: J2000 <-> mean equator of date using the three-angle
  (zeta, z, theta) formulation of IAU 1976, IAU 2000, IAU 2006,
  Bretagnon 2003 and Newcomb (Kinoshita 1975)
- Mean obliquity of the ecliptic: IAU 1976, IAU 2000, IAU 2006, Newcomb,
  Bretagnon 2003, Simon 1994, Williams 1994, Laskar 1986 and the long-term
  Vondrak 2011 series
- Nutation: IAU 2000A / 2000B series from Skyfield, turned into the
  classical nutation matrix

Angles are in radians. Position vectors are 3-element lists.

References:
    - Capitaine, Wallace & Chapront 2003, A&A 412, 567 (IAU 2006 precession)
    - Vondrak, Capitaine & Wallace 2011, A&A 534, A22
    - Lieske et al. 1977 (IAU 1976)
    - IERS Conventions 2010, ch. 5
"""

import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from skyfield.nutationlib import iau2000a_radians, iau2000b_radians

from .constants import (
    J2000,
    SEMOD_BIAS_IAU2000,
    SEMOD_BIAS_IAU2006,
    SEMOD_BIAS_NONE,
    SEMOD_NUT_IAU_2000A,
    SEMOD_NUT_IAU_2000B,
    SEMOD_PREC_BRETAGNON_2003,
    SEMOD_PREC_IAU_1976,
    SEMOD_PREC_IAU_2000,
    SEMOD_PREC_IAU_2006,
    SEMOD_PREC_LASKAR_1986,
    SEMOD_PREC_NEWCOMB,
    SEMOD_PREC_SIMON_1994,
    SEMOD_PREC_VONDRAK_2011,
    SEMOD_PREC_WILL_EPS_LASK,
    SEMOD_PREC_WILLIAMS_1994,
)
from .exceptions import UnsupportedCombinationError
from .state import get_timescale
from .vectors import mat_apply, mat_apply_transposed

J2000_TO_J = -1
J_TO_J2000 = 1

AS2R = math.pi / 180.0 / 3600.0
B1850 = 2396758.203

PRECESSION_MODELS = (
    SEMOD_PREC_IAU_1976,
    SEMOD_PREC_IAU_2000,
    SEMOD_PREC_IAU_2006,
    SEMOD_PREC_BRETAGNON_2003,
    SEMOD_PREC_NEWCOMB,
)

OBLIQUITY_MODELS = PRECESSION_MODELS + (
    SEMOD_PREC_SIMON_1994,
    SEMOD_PREC_WILLIAMS_1994,
    SEMOD_PREC_LASKAR_1986,
    SEMOD_PREC_WILL_EPS_LASK,
    SEMOD_PREC_VONDRAK_2011,
)


@dataclass(frozen=True)
class ObliquityData:
    """Mean obliquity of the ecliptic at one instant."""

    eps: float
    seps: float
    ceps: float


@dataclass(frozen=True)
class NutationData:
    """Nutation angles and the mean-to-true equator matrix at one instant."""

    dpsi: float
    deps: float
    snut: float
    cnut: float
    matrix: Tuple[Tuple[float, float, float], ...]


# =============================================================================
# FRAME BIAS
# =============================================================================

_BIAS_IAU2006 = (
    (+0.99999999999999412, +0.00000007078368695, -0.00000008056214212),
    (-0.00000007078368961, +0.99999999999999700, -0.00000003306427981),
    (+0.00000008056213978, +0.00000003306428553, +0.99999999999999634),
)

_BIAS_IAU2000 = (
    (+0.9999999999999942, +0.0000000707827948, -0.0000000805621738),
    (-0.0000000707827974, +0.9999999999999969, -0.0000000330604088),
    (+0.0000000805621715, +0.0000000330604145, +0.9999999999999962),
)


def frame_bias(
    xx: Sequence[float], model: int = SEMOD_BIAS_IAU2006, backward: bool = False
) -> List[float]:
    """
    Rotate a state vector between ICRS and dynamical J2000.

    Args:
        xx: Equatorial state [x, y, z] or [x, y, z, vx, vy, vz]
        model: SEMOD_BIAS_IAU2006 (default), SEMOD_BIAS_IAU2000 or SEMOD_BIAS_NONE
        backward: False for ICRS -> J2000, True for J2000 -> ICRS

    Returns:
        Rotated vector with the same length as the input
    """
    if model == SEMOD_BIAS_NONE:
        return list(xx)
    rb = _BIAS_IAU2000 if model == SEMOD_BIAS_IAU2000 else _BIAS_IAU2006
    apply = mat_apply if backward else mat_apply_transposed
    out = apply(rb, xx[0:3])
    if len(xx) >= 6:
        out += apply(rb, xx[3:6])
    return out


# =============================================================================
# PRECESSION
# =============================================================================


def _precession_angles(tjd: float, model: int) -> Tuple[float, float, float]:
    """Equatorial precession angles (zeta, z, theta) in radians."""
    T = (tjd - J2000) / 36525.0
    if model == SEMOD_PREC_IAU_1976:
        Z = ((0.017998 * T + 0.30188) * T + 2306.2181) * T
        z = ((0.018203 * T + 1.09468) * T + 2306.2181) * T
        TH = ((-0.041833 * T - 0.42665) * T + 2004.3109) * T
    elif model == SEMOD_PREC_IAU_2000:
        Z = (((((-0.0000002 * T - 0.0000327) * T + 0.0179663) * T + 0.3019015) * T
              + 2306.0809506) * T + 2.5976176)
        z = (((((-0.0000003 * T - 0.000047) * T + 0.0182237) * T + 1.0947790) * T
              + 2306.0803226) * T - 2.5976176)
        TH = ((((-0.0000001 * T - 0.0000601) * T - 0.0418251) * T - 0.4269353) * T
              + 2004.1917476) * T
    elif model == SEMOD_PREC_IAU_2006:
        Z = (((((-0.0000003173 * T - 0.000005971) * T + 0.01801828) * T + 0.2988499) * T
              + 2306.083227) * T + 2.650545)
        z = (((((-0.0000002904 * T - 0.000028596) * T + 0.01826837) * T + 1.0927348) * T
              + 2306.077181) * T - 2.650545)
        TH = ((((-0.00000011274 * T - 0.000007089) * T - 0.04182264) * T - 0.4294934) * T
              + 2004.191903) * T
    elif model == SEMOD_PREC_BRETAGNON_2003:
        Z = ((((((-0.00000000013 * T - 0.0000003040) * T - 0.000005708) * T + 0.01801752) * T
               + 0.3023262) * T + 2306.080472) * T + 2.72767)
        z = ((((((-0.00000000005 * T - 0.0000002486) * T - 0.000028276) * T + 0.01826676) * T
               + 1.0956768) * T + 2306.076070) * T - 2.72767)
        TH = ((((((0.000000000009 * T + 0.00000000036) * T - 0.0000001127) * T - 0.000007291) * T
                - 0.04182364) * T - 0.4266980) * T + 2004.190936) * T
    elif model == SEMOD_PREC_NEWCOMB:
        # Newcomb according to Kinoshita 1975, in tropical millennia from B1850
        mills = 365242.198782
        t1 = (J2000 - B1850) / mills
        t2 = (tjd - B1850) / mills
        Tn = t2 - t1
        T2 = Tn * Tn
        T3 = T2 * Tn
        Z1 = 23035.5548 + 139.720 * t1 + 0.069 * t1 * t1
        Z = Z1 * Tn + (30.242 - 0.269 * t1) * T2 + 17.996 * T3
        z = Z1 * Tn + (109.478 - 0.387 * t1) * T2 + 18.324 * T3
        TH = (20051.125 - 85.294 * t1 - 0.365 * t1 * t1) * Tn + (-42.647 - 0.365 * t1) * T2 - 41.802 * T3
    else:
        raise UnsupportedCombinationError(
            "precession model not supported", model=model
        )
    return Z * AS2R, z * AS2R, TH * AS2R


def precession_matrix(tjd: float, model: int = SEMOD_PREC_IAU_2006):
    """
    Rotation matrix from the J2000 mean equator to the mean equator of date.

    The inverse direction is the transpose.
    """
    Z, z, TH = _precession_angles(tjd, model)
    sinth, costh = math.sin(TH), math.cos(TH)
    sinZ, cosZ = math.sin(Z), math.cos(Z)
    sinz, cosz = math.sin(z), math.cos(z)
    A = cosZ * costh
    B = sinZ * costh
    return (
        (A * cosz - sinZ * sinz, -(B * cosz + cosZ * sinz), -sinth * cosz),
        (A * sinz + sinZ * cosz, -(B * sinz - cosZ * cosz), -sinth * sinz),
        (cosZ * sinth, -sinZ * sinth, costh),
    )


def precess(
    r: Sequence[float], tjd: float, direction: int, model: int = SEMOD_PREC_IAU_2006
) -> List[float]:
    """
    Precess an equatorial position vector.

    Args:
        r: Cartesian equatorial [x, y, z]
        tjd: Julian Day (TT) of the mean equator of date
        direction: J2000_TO_J (-1) or J_TO_J2000 (+1)
        model: Precession model (SEMOD_PREC_*)

    Returns:
        Precessed [x, y, z]
    """
    if tjd == J2000:
        return list(r[0:3])
    m = precession_matrix(tjd, model)
    if direction == J2000_TO_J:
        return mat_apply(m, r)
    return mat_apply_transposed(m, r)


def precess_state(
    xx: Sequence[float], tjd: float, direction: int, model: int = SEMOD_PREC_IAU_2006
) -> List[float]:
    """
    Precess position and velocity with the same rotation.

    The time derivative of the precession matrix is neglected; this is the
    classical approximation (error below 0.14 arcsec/day in longitude speed).
    """
    if tjd == J2000:
        return list(xx)
    m = precession_matrix(tjd, model)
    apply = mat_apply if direction == J2000_TO_J else mat_apply_transposed
    return apply(m, xx[0:3]) + apply(m, xx[3:6])


# =============================================================================
# OBLIQUITY
# =============================================================================

_VONDRAK_PEPOL = (
    (+8134.017132, +84028.206305),
    (+5043.0520035, +0.3624445),
    (-0.00710733, -0.00004039),
    (+0.000000271, -0.000000110),
)

_VONDRAK_PEPER = (
    (+409.90, +396.15, +537.22, +402.90, +417.15, +288.92, +4043.00, +306.00, +277.00, +203.00),
    (-6908.287473, -3198.706291, +1453.674527, -857.748557, +1173.231614,
     -156.981465, +371.836550, -216.619040, +193.691479, +11.891524),
    (+753.872780, -247.805823, +379.471484, -53.880558, -90.109153,
     -353.600190, -63.115353, -28.248187, +17.703387, +38.911307),
    (-2845.175469, +449.844989, -1255.915323, +886.736783, +418.887514,
     +997.912441, -240.979710, +76.541307, -36.788069, -170.964086),
    (-1704.720302, -862.308358, +447.832178, -889.571909, +190.402846,
     -56.564991, -296.222622, -75.859952, +67.473503, +3.014055),
)


def vondrak_precession_obliquity(tjd: float) -> Tuple[float, float]:
    """
    Long-term general precession in longitude and mean obliquity.

    Vondrak, Capitaine & Wallace 2011, valid for +-200 millennia.

    Returns:
        (p_A, eps_A) in radians
    """
    t = (tjd - J2000) / 36525.0
    p = 0.0
    q = 0.0
    w = 2.0 * math.pi * t
    periods, c_p, c_q, s_p, s_q = _VONDRAK_PEPER
    for i in range(len(periods)):
        a = w / periods[i]
        s = math.sin(a)
        c = math.cos(a)
        p += c * c_p[i] + s * s_p[i]
        q += c * c_q[i] + s * s_q[i]
    w = 1.0
    for p_coef, q_coef in _VONDRAK_PEPOL:
        p += p_coef * w
        q += q_coef * w
        w *= t
    return p * AS2R, q * AS2R


def mean_obliquity(tjd: float, model: int = SEMOD_PREC_VONDRAK_2011) -> float:
    """
    Mean obliquity of the ecliptic.

    Args:
        tjd: Julian Day (TT)
        model: Obliquity model (SEMOD_PREC_*); Vondrak 2011 by default

    Returns:
        Obliquity in radians
    """
    T = (tjd - J2000) / 36525.0
    if model == SEMOD_PREC_IAU_1976:
        eps = (((1.813e-3 * T - 5.9e-4) * T - 46.8150) * T + 84381.448)
    elif model == SEMOD_PREC_IAU_2000:
        eps = (((1.813e-3 * T - 5.9e-4) * T - 46.84024) * T + 84381.406)
    elif model == SEMOD_PREC_IAU_2006:
        eps = (((((-4.34e-8 * T - 5.76e-7) * T + 2.0034e-3) * T - 1.831e-4) * T
                - 46.836769) * T + 84381.406)
    elif model == SEMOD_PREC_NEWCOMB:
        Tn = (tjd - 2396758.0) / 36525.0
        eps = 0.0017 * Tn ** 3 - 0.0085 * Tn * Tn - 46.837 * Tn + 84451.68
    elif model == SEMOD_PREC_BRETAGNON_2003:
        eps = ((((((-3e-11 * T - 2.48e-8) * T - 5.23e-7) * T + 1.99911e-3) * T - 1.667e-4) * T
                - 46.836051) * T + 84381.40880)
    elif model == SEMOD_PREC_SIMON_1994:
        eps = (((((2.5e-8 * T - 5.1e-7) * T + 1.9989e-3) * T - 1.52e-4) * T - 46.80927) * T
               + 84381.412)
    elif model == SEMOD_PREC_WILLIAMS_1994:
        eps = ((((-1.0e-6 * T + 2.0e-3) * T - 1.74e-4) * T - 46.833960) * T + 84381.409)
    elif model in (SEMOD_PREC_LASKAR_1986, SEMOD_PREC_WILL_EPS_LASK):
        T /= 10.0
        eps = (2.45e-10 * T + 5.79e-9) * T + 2.787e-7
        eps = (eps * T + 7.12e-7) * T - 3.905e-5
        eps = (eps * T - 2.4967e-3) * T - 5.138e-3
        eps = (eps * T + 1.99925) * T - 0.0155
        eps = (eps * T - 468.093) * T + 84381.448
    elif model == SEMOD_PREC_VONDRAK_2011:
        return vondrak_precession_obliquity(tjd)[1]
    else:
        raise UnsupportedCombinationError("obliquity model not supported", model=model)
    return eps * AS2R


def obliquity_data(tjd: float, model: int = SEMOD_PREC_VONDRAK_2011) -> ObliquityData:
    eps = mean_obliquity(tjd, model)
    return ObliquityData(eps, math.sin(eps), math.cos(eps))


# =============================================================================
# NUTATION
# =============================================================================


def nutation_angles(tjd: float, model: int = SEMOD_NUT_IAU_2000B) -> Tuple[float, float]:
    """
    Nutation in longitude and obliquity.

    Args:
        tjd: Julian Day (TT)
        model: SEMOD_NUT_IAU_2000B (77 terms, default) or SEMOD_NUT_IAU_2000A

    Returns:
        (dpsi, deps) in radians

    Note:
        Both series come from skyfield.nutationlib. IAU 2000B is accurate to
        about 1 mas between 1995 and 2050; IAU 2000A to about 0.1 mas.
    """
    t = get_timescale().tt_jd(tjd)
    if model == SEMOD_NUT_IAU_2000A:
        dpsi, deps = iau2000a_radians(t)
    elif model == SEMOD_NUT_IAU_2000B:
        dpsi, deps = iau2000b_radians(t)
    else:
        raise UnsupportedCombinationError("nutation model not supported", model=model)
    return float(dpsi), float(deps)


def nutation_matrix(dpsi: float, deps: float, eps: float):
    """
    Rotation from mean equator of date to true equator of date.

    R = R1(-(eps + deps)) * R3(-dpsi) * R1(eps), applied as ``x_true = R x_mean``.
    """
    sinpsi, cospsi = math.sin(dpsi), math.cos(dpsi)
    sineps0, coseps0 = math.sin(eps), math.cos(eps)
    sineps, coseps = math.sin(eps + deps), math.cos(eps + deps)
    return (
        (cospsi, -sinpsi * coseps0, -sinpsi * sineps0),
        (sinpsi * coseps, cospsi * coseps * coseps0 + sineps * sineps0,
         cospsi * coseps * sineps0 - sineps * coseps0),
        (sinpsi * sineps, cospsi * sineps * coseps0 - coseps * sineps0,
         cospsi * sineps * sineps0 + coseps * coseps0),
    )


def nutation_data(tjd: float, eps: float, model: int = SEMOD_NUT_IAU_2000B) -> NutationData:
    dpsi, deps = nutation_angles(tjd, model)
    return NutationData(
        dpsi, deps, math.sin(deps), math.cos(deps), nutation_matrix(dpsi, deps, eps)
    )
