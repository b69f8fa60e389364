"""
Apparent-position pipeline for ephemcore.

compute_apparent() turns the raw barycentric state vector of a provider into
the position requested by a CalcConfig:

1. Observer: Earth (geocentric), Earth + WGS84 site (topocentric), Sun
   (heliocentric) or the origin (barycentric)
2. Light-time: body re-sampled at t - dt, dt from the observer distance
3. Gravitational light deflection by the Sun (with the effective-mass
   reduction behind the solar limb)
4. Annual aberration (relativistic formula)
5. Frame bias ICRS -> J2000, precession J2000 -> date
6. finish(): nutation, ecliptic projection, sidereal offset, polar packing,
   degrees

finish() is shared with the nodes/apsides engine, which feeds it its own
equatorial vectors.

References:
    - Explanatory Supplement to the Astronomical Almanac (1992), ch. 3
    - Kaplan et al. 1989, AJ 97, 1197 (deflection and aberration formulas)
"""

import logging
import math
from typing import List, Sequence, Tuple

from skyfield.api import wgs84

from .config import CalcConfig, EphemerisSource, ReferenceCenter
from .constants import (
    AUNIT,
    CLIGHT,
    DEFL_SPEED_INTV,
    HELGRAVCONST,
    J2000,
    LIGHT_TIME_ITERATIONS,
    NUT_SPEED_INTV,
    PLAN_SPEED_INTV,
    RADTODEG,
    SE_EARTH,
    SE_MOON,
    SE_SUN,
    SUN_RADIUS,
)
from .exceptions import UnsupportedCombinationError
from .frames import J2000_TO_J, frame_bias, precess_state
from .state import get_timescale
from .vectors import (
    Vector,
    cart_pol_sp,
    dot,
    mat_apply,
    norm,
    pol_cart_sp,
    rotate_state,
)

logger = logging.getLogger(__name__)

ZERO_STATE = [0.0, 0.0, 0.0, 0.0, 0.0, 0.0]

# Effective solar mass for a ray passing at r solar radii from the center,
# r = 1.00, 0.99, ..., 0.00 (mass enclosed by the ray's impact parameter)
_EFFECTIVE_MASS = (
    1.000, .999979, .999940, .999881, .999811, .999724, .999622, .999497,
    .999354, .999192, .999000, .998786, .998535, .998242, .997919, .997571,
    .997198, .996792, .996316, .995791, .995226, .994625, .993991, .993326,
    .992598, .991770, .990873, .989919, .988912, .987856, .986755, .985610,
    .984398, .982986, .981437, .979779, .978024, .976182, .974256, .972253,
    .970174, .968024, .965594, .962797, .959758, .956515, .953088, .949495,
    .945741, .941838, .937790, .933563, .928668, .923288, .917527, .911432,
    .905035, .898353, .891022, .882940, .874312, .865206, .855423, .844619,
    .833074, .820876, .808031, .793962, .778931, .763021, .745815, .727557,
    .708234, .687583, .665741, .642597, .618252, .592586, .565747, .537697,
    .508554, .478420, .447322, .415454, .382892, .349955, .316691, .283565,
    .250431, .218327, .186794, .156287, .128421, .102237, .077393, .054833,
    .036361, .020953, .009645, .002767, 0.0,
)


def effective_solar_mass(r: float) -> float:
    """
    Fraction of the solar mass inside radius r (in solar radii).

    Linear interpolation of the tabulated values; 1 outside the disc,
    0 at the center.
    """
    if r <= 0.0:
        return 0.0
    if r >= 1.0:
        return 1.0
    pos = (1.0 - r) * 100.0
    i = int(pos)
    f = pos - i
    return _EFFECTIVE_MASS[i] + f * (_EFFECTIVE_MASS[i + 1] - _EFFECTIVE_MASS[i])


def light_time(x: Sequence[float]) -> float:
    """Light travel time in days over the length of x (AU)."""
    return norm(x) * AUNIT / CLIGHT / 86400.0


# =============================================================================
# OBSERVER
# =============================================================================


def topocentric_offset(ctx, jd_tt: float) -> Vector:
    """
    Geocentric state of the context's observer site, AU and AU/day.

    Raises:
        UnsupportedCombinationError: If no observer location is set
    """
    topo = ctx.get_topo()
    if topo is None:
        raise UnsupportedCombinationError("SEFLG_TOPOCTR requires set_topo()")
    lon, lat, alt = topo
    t = get_timescale().tt_jd(jd_tt)
    site = wgs84.latlon(lat, lon, elevation_m=alt).at(t)
    x = site.position.au
    v = site.velocity.au_per_d
    return [float(x[0]), float(x[1]), float(x[2]),
            float(v[0]), float(v[1]), float(v[2])]


def observer_state(ctx, provider, jd_tt: float, center: ReferenceCenter) -> Vector:
    """Barycentric state of the observer for a reference center."""
    if center is ReferenceCenter.BARY:
        return list(ZERO_STATE)
    if center is ReferenceCenter.HELIO:
        return provider.state(SE_SUN, jd_tt)
    earth = provider.state(SE_EARTH, jd_tt)
    if center is ReferenceCenter.TOPO:
        off = topocentric_offset(ctx, jd_tt)
        return [earth[i] + off[i] for i in range(6)]
    return earth


def _center_body(center: ReferenceCenter):
    if center is ReferenceCenter.GEO:
        return SE_EARTH
    if center is ReferenceCenter.HELIO:
        return SE_SUN
    return None


# =============================================================================
# LIGHT DEFLECTION AND ABERRATION
# =============================================================================


def _deflected(u: Sequence[float], q: Sequence[float], e: Sequence[float]) -> Vector:
    ru = norm(u)
    rq = norm(q)
    re = norm(e)
    un = [c / ru for c in u]
    qn = [c / rq for c in q]
    en = [c / re for c in e]
    uq = dot(un, qn)
    ue = dot(un, en)
    qe = dot(qn, en)
    # Ray passing behind the solar disc: only the enclosed mass deflects
    sina = math.sqrt(max(0.0, 1.0 - ue * ue))
    sin_sunr = SUN_RADIUS / re
    if sina < sin_sunr:
        meff_fact = effective_solar_mass(sina / sin_sunr)
    else:
        meff_fact = 1.0
    g1 = 2.0 * HELGRAVCONST * meff_fact / CLIGHT / CLIGHT / AUNIT / re
    g2 = 1.0 + qe
    return [ru * (un[i] + g1 / g2 * (uq * en[i] - ue * qn[i])) for i in range(3)]


def deflect_light(xx: Sequence[float], dt: float, xobs: Sequence[float],
                  xsun: Sequence[float], speed: bool) -> Vector:
    """
    Apply gravitational light deflection by the Sun.

    Args:
        xx: Observer-centric state of the body (light-time corrected)
        dt: Light time in days
        xobs: Barycentric observer state at t
        xsun: Barycentric Sun state at t
        speed: Also correct the velocity (finite difference)

    Returns:
        Deflected state
    """
    xsun_dt = [xsun[i] - dt * xsun[i + 3] for i in range(3)]
    u = list(xx[0:3])
    e = [xobs[i] - xsun[i] for i in range(3)]
    q = [xx[i] + xobs[i] - xsun_dt[i] for i in range(3)]
    xx2 = _deflected(u, q, e)
    out = xx2 + list(xx[3:6])
    if speed:
        dtsp = -DEFL_SPEED_INTV
        dv = [dtsp * (xobs[i + 3] - xsun[i + 3]) for i in range(3)]
        u2 = [xx[i] - dtsp * xx[i + 3] for i in range(3)]
        e2 = [e[i] - dv[i] for i in range(3)]
        q2 = [u2[i] + xobs[i] - xsun_dt[i] - dv[i] for i in range(3)]
        xx3 = _deflected(u2, q2, e2)
        for i in range(3):
            d1 = xx2[i] - xx[i]
            d2 = xx3[i] - u2[i]
            out[i + 3] += (d1 - d2) / dtsp
    return out


def _aberrated(u: Sequence[float], v: Sequence[float], b_1: float) -> Vector:
    ru = norm(u)
    f1 = dot(u, v) / ru
    f2 = 1.0 + f1 / (1.0 + b_1)
    return [(b_1 * u[i] + f2 * ru * v[i]) / (1.0 + f1) for i in range(3)]


def aberr_light(xx: Sequence[float], xobs: Sequence[float], speed: bool) -> Vector:
    """
    Apply annual (and diurnal, for a topocentric observer) aberration.

    Args:
        xx: Observer-centric state of the body
        xobs: Barycentric observer state
        speed: Also correct the velocity (finite difference)
    """
    v = [xobs[i + 3] / 86400.0 / CLIGHT * AUNIT for i in range(3)]
    b_1 = math.sqrt(1.0 - dot(v, v))
    xx2 = _aberrated(xx[0:3], v, b_1)
    out = xx2 + list(xx[3:6])
    if speed:
        u = [xx[i] - PLAN_SPEED_INTV * xx[i + 3] for i in range(3)]
        xx3 = _aberrated(u, v, b_1)
        for i in range(3):
            d1 = xx2[i] - xx[i]
            d2 = xx3[i] - u[i]
            out[i + 3] += (d1 - d2) / PLAN_SPEED_INTV
    return out


# =============================================================================
# PIPELINE
# =============================================================================


def compute_apparent(ctx, jd_tt: float, body: int, config: CalcConfig) -> Tuple[Vector, int]:
    """
    Position of a provider body as requested by config.

    Args:
        ctx: ComputationContext
        jd_tt: Julian Day (TT)
        body: SE_SUN .. SE_PLUTO or SE_EARTH
        config: Decoded calculation flags

    Returns:
        (position[6], retflag) where retflag names the ephemeris source that
        actually served the request

    Raises:
        EphemerisUnavailableError: If no provider covers body and date
    """
    provider = ctx.select_provider(config.source, body, jd_tt)
    retflag = config.with_source(EphemerisSource(provider.flag)).to_flags()

    if body == _center_body(config.center):
        return list(ZERO_STATE), retflag

    xx = equatorial_state(ctx, provider, jd_tt, body, config)
    return finish(ctx, jd_tt, xx, config), retflag


def equatorial_state(ctx, provider, jd_tt: float, body: int, config: CalcConfig) -> Vector:
    """
    Observer-centric equatorial state, mean equator of date (or J2000).

    Light-time, deflection, aberration, frame bias and precession are
    applied according to config; nutation is left to finish().
    """
    xobs = observer_state(ctx, provider, jd_tt, config.center)
    xx = provider.state(body, jd_tt)
    dt = 0.0

    if not config.true_position:
        for _ in range(LIGHT_TIME_ITERATIONS):
            dt = light_time([xx[i] - xobs[i] for i in range(3)])
            xx = provider.state(body, jd_tt - dt)
        if config.speed:
            # dt changes with time: d(apparent)/dt = v (1 - d(dt)/dt)
            xprev = [xx[i] - xx[i + 3] - (xobs[i] - xobs[i + 3]) for i in range(3)]
            dt_prev = light_time(xprev)
            for i in range(3, 6):
                xx[i] -= (dt - dt_prev) * xx[i]

    xx = [xx[i] - xobs[i] for i in range(6)]

    if config.light_deflection and body not in (SE_SUN, SE_MOON):
        xsun = provider.state(SE_SUN, jd_tt)
        xx = deflect_light(xx, dt, xobs, xsun, config.speed)

    if config.aberration:
        xx = aberr_light(xx, xobs, config.speed)
        if config.speed:
            xobs_dt = observer_state(ctx, provider, jd_tt - dt, config.center)
            for i in range(3, 6):
                xx[i] += xobs[i] - xobs_dt[i]

    if not config.speed:
        xx[3:6] = [0.0, 0.0, 0.0]

    xx = output_frame(ctx, provider, xx, config)

    if not config.j2000:
        xx = precess_state(xx, jd_tt, J2000_TO_J, ctx.prec_model)
    return xx


def finish(ctx, jd_tt: float, xx: Sequence[float], config: CalcConfig) -> List[float]:
    """
    Common tail of every position calculation.

    Args:
        ctx: ComputationContext
        jd_tt: Julian Day (TT)
        xx: Cartesian equatorial state referred to the mean equator of date
            (or J2000 when config.j2000)
        config: Decoded calculation flags

    Returns:
        Position and speeds packed as requested (polar/cartesian,
        ecliptic/equatorial, degrees/radians)
    """
    xx = list(xx)
    nut = None
    if config.nutation:
        nut = ctx.nutation(jd_tt)
        pos = mat_apply(nut.matrix, xx[0:3])
        vel = mat_apply(nut.matrix, xx[3:6])
        if config.speed:
            nut2 = ctx.nutation(jd_tt - NUT_SPEED_INTV)
            prev = mat_apply(nut2.matrix, xx[0:3])
            vel = [vel[i] + (pos[i] - prev[i]) / NUT_SPEED_INTV for i in range(3)]
        xx = pos + vel

    if not config.equatorial:
        oe = ctx.obliquity(J2000 if config.j2000 else jd_tt)
        xx = rotate_state(xx, oe.seps, oe.ceps)
        if nut is not None:
            xx = rotate_state(xx, nut.snut, nut.cnut)

        if config.sidereal:
            from .sidereal import ayanamsa_with_speed

            ayan, ayan_speed = ayanamsa_with_speed(
                ctx, jd_tt, config.nutation, config.source
            )
            pol = cart_pol_sp(xx)
            pol[0] -= ayan / RADTODEG
            if config.speed:
                pol[3] -= ayan_speed / RADTODEG
            if config.cartesian:
                xx = pol_cart_sp(pol)
            else:
                return _pack_polar(pol, config)

    if config.cartesian:
        if not config.speed:
            xx[3:6] = [0.0, 0.0, 0.0]
        return xx
    return _pack_polar(cart_pol_sp(xx), config)


def _pack_polar(pol: List[float], config: CalcConfig) -> List[float]:
    lon = pol[0] % (2 * math.pi)
    if not config.speed:
        pol[3:6] = [0.0, 0.0, 0.0]
    if config.radians:
        return [lon] + pol[1:]
    out = [lon * RADTODEG, pol[1] * RADTODEG, pol[2],
           pol[3] * RADTODEG, pol[4] * RADTODEG, pol[5]]
    if out[0] >= 360.0:
        out[0] -= 360.0
    return out


def output_frame(ctx, provider, xx: Sequence[float], config: CalcConfig) -> Vector:
    """
    Rotate a provider vector into the J2000 frame the output is built in.

    Dynamical J2000 by default (frame bias applied to ICRS providers), ICRS
    when config.icrs (bias removed from J2000 providers).
    """
    if provider.frame == "ICRS" and not config.icrs:
        return frame_bias(xx, ctx.bias_model)
    if provider.frame == "J2000" and config.icrs:
        return frame_bias(xx, ctx.bias_model, backward=True)
    return list(xx)
