"""
Vector primitives for ephemcore.

Dot/cross products, polar <-> cartesian conversion (with speeds), rotation
about the x axis and Chebyshev series evaluation. State vectors are plain
6-element lists ``[x, y, z, vx, vy, vz]``; polar vectors are
``[lon, lat, r, dlon, dlat, dr]`` with angles in radians.

Functions never mutate their inputs; they return new lists.
"""

import logging
import math
from typing import List, Sequence

from .constants import VECTOR_EPSILON

logger = logging.getLogger(__name__)

Vector = List[float]


def dot(a: Sequence[float], b: Sequence[float]) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def cross(a: Sequence[float], b: Sequence[float]) -> Vector:
    return [
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    ]


def norm(a: Sequence[float]) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def unit(a: Sequence[float]) -> Vector:
    """
    Unit vector of the first three components.

    A vector shorter than VECTOR_EPSILON is returned as the zero vector and
    a warning is logged; callers reach this only when a body coincides with
    the observer.
    """
    r = norm(a)
    if r < VECTOR_EPSILON:
        logger.warning("unit(): zero-length vector %r", list(a[:3]))
        return [0.0, 0.0, 0.0]
    return [a[0] / r, a[1] / r, a[2] / r]


def add(a: Sequence[float], b: Sequence[float]) -> Vector:
    return [x + y for x, y in zip(a, b)]


def sub(a: Sequence[float], b: Sequence[float]) -> Vector:
    return [x - y for x, y in zip(a, b)]


def scale(a: Sequence[float], f: float) -> Vector:
    return [x * f for x in a]


def angle_between(a: Sequence[float], b: Sequence[float]) -> float:
    """Angle between two vectors in radians, clamped against rounding."""
    ra = norm(a)
    rb = norm(b)
    if ra < VECTOR_EPSILON or rb < VECTOR_EPSILON:
        logger.warning("angle_between(): zero-length vector")
        return 0.0
    c = dot(a, b) / ra / rb
    return math.acos(max(-1.0, min(1.0, c)))


# =============================================================================
# POLAR <-> CARTESIAN
# =============================================================================


def cart_pol(x: Sequence[float]) -> Vector:
    """Cartesian [x, y, z] to polar [lon, lat, r]; lon in [0, 2pi)."""
    if x[0] == 0.0 and x[1] == 0.0 and x[2] == 0.0:
        return [0.0, 0.0, 0.0]
    rxy2 = x[0] * x[0] + x[1] * x[1]
    r = math.sqrt(rxy2 + x[2] * x[2])
    rxy = math.sqrt(rxy2)
    if rxy > 0.0:
        lon = math.atan2(x[1], x[0])
        if lon < 0.0:
            lon += 2 * math.pi
        lat = math.atan(x[2] / rxy)
    else:
        lon = 0.0
        lat = math.pi / 2 if x[2] >= 0.0 else -math.pi / 2
    return [lon, lat, r]


def pol_cart(l: Sequence[float]) -> Vector:
    """Polar [lon, lat, r] to cartesian [x, y, z]."""
    cosb = math.cos(l[1])
    return [
        l[2] * cosb * math.cos(l[0]),
        l[2] * cosb * math.sin(l[0]),
        l[2] * math.sin(l[1]),
    ]


def cart_pol_sp(x: Sequence[float]) -> Vector:
    """
    Cartesian state [x, y, z, vx, vy, vz] to polar state.

    Returns:
        [lon, lat, r, dlon, dlat, dr] with angles in radians and angular
        speeds in radians per unit time
    """
    pos = cart_pol(x)
    if len(x) < 6 or (x[3] == 0.0 and x[4] == 0.0 and x[5] == 0.0):
        return pos + [0.0, 0.0, 0.0]
    r = pos[2]
    if r == 0.0:
        # Body at the origin: direction given by the velocity
        vpol = cart_pol(x[3:6])
        return [vpol[0], vpol[1], 0.0, 0.0, 0.0, vpol[2]]
    rxy2 = x[0] * x[0] + x[1] * x[1]
    rxy = math.sqrt(rxy2)
    dr = dot(x, x[3:6]) / r
    if rxy < VECTOR_EPSILON:
        logger.debug("cart_pol_sp(): position on the polar axis, speeds undefined")
        return pos + [0.0, 0.0, dr]
    dlon = (x[0] * x[4] - x[1] * x[3]) / rxy2
    dlat = (x[5] * rxy2 - x[2] * (x[0] * x[3] + x[1] * x[4])) / (r * r * rxy)
    return pos + [dlon, dlat, dr]


def pol_cart_sp(l: Sequence[float]) -> Vector:
    """Polar state [lon, lat, r, dlon, dlat, dr] to cartesian state."""
    pos = pol_cart(l)
    if len(l) < 6 or (l[3] == 0.0 and l[4] == 0.0 and l[5] == 0.0):
        return pos + [0.0, 0.0, 0.0]
    cosl, sinl = math.cos(l[0]), math.sin(l[0])
    cosb, sinb = math.cos(l[1]), math.sin(l[1])
    r, dl, db, dr = l[2], l[3], l[4], l[5]
    return pos + [
        dr * cosb * cosl - r * sinb * cosl * db - r * cosb * sinl * dl,
        dr * cosb * sinl - r * sinb * sinl * db + r * cosb * cosl * dl,
        dr * sinb + r * cosb * db,
    ]


# =============================================================================
# ROTATIONS
# =============================================================================


def coortrf2(x: Sequence[float], sina: float, cosa: float) -> Vector:
    """
    Rotate [x, y, z] about the x axis.

    With sina/cosa of the obliquity this turns equatorial into ecliptic
    coordinates; pass -sina for the inverse direction.
    """
    return [
        x[0],
        x[1] * cosa + x[2] * sina,
        -x[1] * sina + x[2] * cosa,
    ]


def coortrf(x: Sequence[float], eps: float) -> Vector:
    return coortrf2(x, math.sin(eps), math.cos(eps))


def rotate_state(xx: Sequence[float], sina: float, cosa: float) -> Vector:
    """coortrf2 applied to both the position and velocity halves."""
    return coortrf2(xx[0:3], sina, cosa) + coortrf2(xx[3:6], sina, cosa)


def mat_apply(m: Sequence[Sequence[float]], x: Sequence[float]) -> Vector:
    return [
        m[0][0] * x[0] + m[0][1] * x[1] + m[0][2] * x[2],
        m[1][0] * x[0] + m[1][1] * x[1] + m[1][2] * x[2],
        m[2][0] * x[0] + m[2][1] * x[1] + m[2][2] * x[2],
    ]


def mat_apply_transposed(m: Sequence[Sequence[float]], x: Sequence[float]) -> Vector:
    return [
        m[0][0] * x[0] + m[1][0] * x[1] + m[2][0] * x[2],
        m[0][1] * x[0] + m[1][1] * x[1] + m[2][1] * x[2],
        m[0][2] * x[0] + m[1][2] * x[1] + m[2][2] * x[2],
    ]


# =============================================================================
# CHEBYSHEV SERIES
# =============================================================================


def echeb(x: float, coef: Sequence[float]) -> float:
    """
    Evaluate a Chebyshev series with Clenshaw's recurrence.

    Args:
        x: Normalized argument in [-1, 1]
        coef: Coefficients c0..cn; the series is c0/2 + sum(ck * Tk(x))

    Returns:
        Series value
    """
    x2 = x * 2.0
    br = 0.0
    brp2 = 0.0
    brpp = 0.0
    for c in reversed(coef):
        brp2 = brpp
        brpp = br
        br = x2 * brpp - brp2 + c
    return (br - brp2) * 0.5


def edcheb(x: float, coef: Sequence[float]) -> float:
    """
    Derivative of a Chebyshev series with respect to the normalized argument.

    Multiply by 2 / segment_length to obtain a rate per unit time.
    """
    x2 = x * 2.0
    bf = 0.0
    bjpl = 0.0
    bjp2 = 0.0
    xjpl = 0.0
    xjp2 = 0.0
    for j in range(len(coef) - 1, 0, -1):
        dj = float(j + j)
        xj = coef[j] * dj + xjp2
        bj = x2 * bjpl - bjp2 + xj
        bf = bjp2
        bjp2 = bjpl
        bjpl = bj
        xjp2 = xjpl
        xjpl = xj
    return (bjpl - bf) * 0.5
