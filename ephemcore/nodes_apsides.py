"""
Planetary and lunar nodes and apsides for ephemcore.

Two families of results are provided:

- Osculating: the Keplerian ellipse fitted to the instantaneous position and
  velocity of the body (two-body problem with the Sun, or the Earth for the
  Moon). Three pipeline samples at t - dt, t, t + dt give the points and their
  speeds.
- Mean: secular polynomials of the orbital elements (Mercury..Neptune, the
  Earth-Moon barycenter for Earth and Sun) and Moshier's mean lunar elements
  for the Moon. Pluto has no mean elements and falls back to osculating.

Every result is a cartesian state on the ecliptic of date relative to the
central body; transform_mean_to_true() takes it back to J2000, moves it to
the requested observer and hands it to pipeline.finish().

Nodes and apsides are geometric points: no light-time, deflection or
aberration is applied.

Main Functions:
- swe_nod_aps(): Nodes and apsides for Ephemeris Time
- swe_nod_aps_ut(): Nodes and apsides for Universal Time

References:
- Simon et al. 1994, A&A 282, 663 (mean elements, via Meeus ch. 31)
- Swiss Ephemeris documentation, section 2.2.6 "Planetary nodes and apsides"
"""

import logging
import math
from dataclasses import replace
from typing import List, NamedTuple, Optional, Sequence, Tuple

from .config import CalcConfig, EphemerisSource, FrameEpoch, ReferenceCenter
from .constants import (
    AUNIT,
    EARTH_MOON_MRAT,
    GEOGCONST,
    HELGRAVCONST,
    J2000,
    MEAN_NODE_SPEED_INTV,
    NODE_CALC_INTV,
    NODE_DZ_MIN,
    PLANET_MASS_RATIOS,
    SE_EARTH,
    SE_JUPITER,
    SE_MARS,
    SE_MERCURY,
    SE_MOON,
    SE_NEPTUNE,
    SE_NODBIT_FOPOINT,
    SE_NODBIT_MEAN,
    SE_NODBIT_OSCU_BAR,
    SE_PLUTO,
    SE_SATURN,
    SE_SUN,
    SE_URANUS,
    SE_VENUS,
    VECTOR_EPSILON,
)
from .exceptions import UnsupportedCombinationError
from .frames import J2000_TO_J, J_TO_J2000, precess_state
from .lunar import mean_apogee, mean_focal_distance, mean_node, mean_perigee_distance
from .pipeline import (
    ZERO_STATE,
    compute_apparent,
    finish,
    observer_state,
    output_frame,
    topocentric_offset,
)
from .utils import radnorm
from .vectors import (
    Vector,
    cart_pol,
    coortrf2,
    cross,
    dot,
    mat_apply,
    mat_apply_transposed,
    norm,
    pol_cart,
    rotate_state,
)

logger = logging.getLogger(__name__)

NODAPS_BODIES = (
    SE_SUN, SE_MOON, SE_MERCURY, SE_VENUS, SE_MARS, SE_JUPITER,
    SE_SATURN, SE_URANUS, SE_NEPTUNE, SE_PLUTO, SE_EARTH,
)

# Largest eccentricity an osculating ellipse is allowed to take
ECCE_MAX = 1.0 - 1e-12
# Smallest eccentricity/inclination sine used as a divisor
ECCE_MIN = 1e-12
SININCL_MIN = 1e-12

SECONDS_PER_DAY = 86400.0

# =============================================================================
# MEAN ORBITAL ELEMENTS
# =============================================================================

# Polynomials a0 + a1 T + a2 T^2 + a3 T^3, T in Julian centuries from J2000,
# mean ecliptic and equinox of date. Rows: Mercury, Venus, Earth (EMB), Mars,
# Jupiter, Saturn, Uranus, Neptune.
EL_NODE = (
    (48.330893, 1.1861890, 0.00017587, 0.000000211),
    (76.679920, 0.9011190, 0.00040665, -0.000000080),
    (0.0, 0.0, 0.0, 0.0),
    (49.558093, 0.7720923, 0.00001605, 0.000002325),
    (100.464441, 1.0209550, 0.00040117, 0.000000569),
    (113.665524, 0.8770970, -0.00012067, -0.000002380),
    (74.005947, 0.5211258, 0.00133982, 0.000018516),
    (131.784057, 1.1022057, 0.00026006, -0.000000636),
)
EL_PERI = (
    (77.456119, 1.5564775, 0.00029589, 0.000000056),
    (131.563707, 1.4022188, -0.00107337, -0.000005315),
    (102.937348, 1.7195269, 0.00045962, 0.000000499),
    (336.060234, 1.8410331, 0.00013515, 0.000000318),
    (14.331309, 1.6126668, 0.00103127, -0.000004569),
    (93.056787, 1.9637694, 0.00083757, 0.000004899),
    (173.005159, 1.4863784, 0.00021450, 0.000000433),
    (48.123691, 1.4262677, 0.00037918, -0.000000003),
)
EL_INCL = (
    (7.004986, 0.0018215, -0.00001809, 0.000000053),
    (3.394662, 0.0010037, -0.00000088, -0.000000007),
    (0.0, 0.0, 0.0, 0.0),
    (1.849726, -0.0006010, 0.00001276, -0.000000006),
    (1.303270, -0.0054966, 0.00000465, -0.000000004),
    (2.488878, -0.0037363, -0.00001516, 0.000000089),
    (0.773196, 0.0007744, 0.00003749, -0.000000092),
    (1.769952, -0.0093082, -0.00000708, 0.000000028),
)
EL_ECCE = (
    (0.20563175, 0.000020406, -0.0000000284, -0.00000000017),
    (0.00677188, -0.000047766, 0.0000000975, 0.00000000044),
    (0.01670862, -0.000042037, -0.0000001236, 0.00000000004),
    (0.09340062, 0.000090483, -0.0000000806, -0.00000000035),
    (0.04849485, 0.000163244, -0.0000004719, -0.00000000197),
    (0.05550862, -0.000346818, -0.0000006456, 0.00000000338),
    (0.04629590, -0.000027337, 0.0000000790, 0.00000000025),
    (0.00898809, 0.000006408, -0.0000000008, -0.00000000005),
)
EL_SEMA = (
    (0.387098310, 0.0, 0.0, 0.0),
    (0.723329820, 0.0, 0.0, 0.0),
    (1.000001018, 0.0, 0.0, 0.0),
    (1.523679342, 0.0, 0.0, 0.0),
    (5.202603191, 0.0000001913, 0.0, 0.0),
    (9.554909596, 0.0000021389, 0.0, 0.0),
    (19.218446062, -0.0000000372, 0.00000000098, 0.0),
    (30.110386869, -0.0000001663, 0.00000000069, 0.0),
)

_MEAN_ELEMENT_ROW = {
    SE_MERCURY: 0,
    SE_VENUS: 1,
    SE_SUN: 2,
    SE_EARTH: 2,
    SE_MARS: 3,
    SE_JUPITER: 4,
    SE_SATURN: 5,
    SE_URANUS: 6,
    SE_NEPTUNE: 7,
}

_MASS_RATIO_INDEX = {
    SE_MERCURY: 0,
    SE_VENUS: 1,
    SE_SUN: 2,
    SE_EARTH: 2,
    SE_MARS: 3,
    SE_JUPITER: 4,
    SE_SATURN: 5,
    SE_URANUS: 6,
    SE_NEPTUNE: 7,
    SE_PLUTO: 8,
}


class OrbitalElements(NamedTuple):
    """Keplerian elements; angles in radians, a in AU."""

    a: float
    e: float
    i: float
    node: float
    arg_peri: float


class NodesApsides(NamedTuple):
    ascending: List[float]
    descending: List[float]
    perihelion: List[float]
    aphelion: List[float]


def _poly(c: Sequence[float], t: float) -> float:
    return c[0] + t * (c[1] + t * (c[2] + t * c[3]))


def mean_orbital_elements(body: int, jd_tt: float) -> OrbitalElements:
    """
    Mean elements of a planet on the mean ecliptic and equinox of date.

    Args:
        body: SE_MERCURY .. SE_NEPTUNE, SE_EARTH or SE_SUN (Earth-Moon
            barycenter orbit)
        jd_tt: Julian Day (TT)

    Raises:
        UnsupportedCombinationError: If the body has no mean elements
    """
    row = _MEAN_ELEMENT_ROW.get(body)
    if row is None:
        raise UnsupportedCombinationError("no mean orbital elements for body", body=body)
    t = (jd_tt - J2000) / 36525.0
    node = math.radians(_poly(EL_NODE[row], t))
    peri = math.radians(_poly(EL_PERI[row], t))
    return OrbitalElements(
        a=_poly(EL_SEMA[row], t),
        e=_poly(EL_ECCE[row], t),
        i=math.radians(_poly(EL_INCL[row], t)),
        node=radnorm(node),
        arg_peri=radnorm(peri - node),
    )


def radius_at_true_anomaly(a: float, e: float, nu: float) -> float:
    """Distance on the ellipse at true anomaly nu, via the eccentric anomaly."""
    cos_e = math.cos(2.0 * math.atan(math.tan(nu / 2.0) / math.sqrt((1.0 + e) / (1.0 - e))))
    return a * (1.0 - e * cos_e)


def _mean_planet_points(body: int, jd_tt: float, focal_point: bool) -> List[Vector]:
    el = mean_orbital_elements(body, jd_tt)
    omega = el.arg_peri

    asc = [el.node, 0.0, radius_at_true_anomaly(el.a, el.e, -omega)]
    dsc = [radnorm(el.node + math.pi), 0.0,
           radius_at_true_anomaly(el.a, el.e, math.pi - omega)]

    peri = pol_cart([omega, 0.0, 1.0])
    peri = coortrf2(peri, -math.sin(el.i), math.cos(el.i))
    peri = cart_pol(peri)
    peri[0] = radnorm(peri[0] + el.node)
    peri[2] = el.a * (1.0 - el.e)

    if focal_point:
        aphe_r = 2.0 * el.a * el.e
    else:
        aphe_r = el.a * (1.0 + el.e)
    aphe = [radnorm(peri[0] + math.pi), -peri[1], aphe_r]

    return [pol_cart(p) for p in (asc, dsc, peri, aphe)]


def _mean_moon_points(jd_tt: float, focal_point: bool) -> List[Vector]:
    asc = mean_node(jd_tt)
    dsc = [radnorm(asc[0] + math.pi), 0.0, asc[2]]
    apog = mean_apogee(jd_tt)
    peri = [radnorm(apog[0] + math.pi), -apog[1], mean_perigee_distance()]
    aphe = list(apog)
    if focal_point:
        aphe[2] = mean_focal_distance()
    return [pol_cart(p) for p in (asc, dsc, peri, aphe)]


def _mean_points_with_speed(body: int, jd_tt: float, focal_point: bool,
                            speed: bool) -> List[Vector]:
    if body == SE_MOON:
        points = lambda t: _mean_moon_points(t, focal_point)  # noqa: E731
    else:
        points = lambda t: _mean_planet_points(body, t, focal_point)  # noqa: E731

    x0 = points(jd_tt)
    if not speed:
        return [x + [0.0, 0.0, 0.0] for x in x0]
    h = MEAN_NODE_SPEED_INTV
    xm = points(jd_tt - h)
    xp = points(jd_tt + h)
    return [
        x0[k] + [(xp[k][i] - xm[k][i]) / (2.0 * h) for i in range(3)]
        for k in range(4)
    ]


# =============================================================================
# OSCULATING ELEMENTS
# =============================================================================


def gravitational_parameter(body: int) -> float:
    """
    G * (M_central + M_body) in AU^3/day^2.

    The Moon orbits the Earth; all other bodies orbit the Sun.
    """
    if body == SE_MOON:
        gm = GEOGCONST * (1.0 + 1.0 / EARTH_MOON_MRAT)
    else:
        ratio = PLANET_MASS_RATIOS[_MASS_RATIO_INDEX[body]]
        gm = HELGRAVCONST * (1.0 + 1.0 / ratio)
    return gm / AUNIT / AUNIT / AUNIT * SECONDS_PER_DAY * SECONDS_PER_DAY


def osculating_points(xx: Sequence[float], gm: float, dzmin: float,
                      focal_point: bool = False) -> List[Vector]:
    """
    Nodes and apsides of the osculating ellipse of one state vector.

    Args:
        xx: Cartesian ecliptic state relative to the central body, AU and
            AU/day
        gm: Gravitational parameter, AU^3/day^2
        dzmin: Floor for |vz| in the extrapolation to the ecliptic
        focal_point: Return the second focus instead of the aphelion

    Returns:
        [ascending node, descending node, perihelion, aphelion] positions

    Note:
        Circular and equatorial orbits have undefined apsides or nodes. The
        divisors are floored (ECCE_MIN, SININCL_MIN) and a warning is logged;
        the returned points are then meaningless but finite.
    """
    x = list(xx[0:3])
    v = list(xx[3:6])

    # Node: linear extrapolation of the motion to z = 0
    vz = v[2]
    if abs(vz) < dzmin:
        vz = dzmin
    fac = x[2] / vz
    sgn = 1.0 if vz > 0 else -1.0
    vv = [v[0], v[1], vz]
    xn = [(x[i] - fac * vv[i]) * sgn for i in range(3)]
    xs = [-c for c in xn]

    rxy = math.hypot(xn[0], xn[1])
    if rxy < VECTOR_EPSILON:
        logger.warning("node vector vanishes, node direction undefined")
        rxy = VECTOR_EPSILON
    cosnode = xn[0] / rxy
    sinnode = xn[1] / rxy

    xnorm = cross(x, v)
    c2 = dot(xnorm, xnorm)
    sinincl = math.hypot(xnorm[0], xnorm[1]) / math.sqrt(c2)
    cosincl = math.sqrt(1.0 - sinincl * sinincl)
    if xnorm[2] < 0:
        cosincl = -cosincl
    if sinincl < SININCL_MIN:
        logger.warning("orbit lies in the ecliptic, argument of latitude undefined")
        sinincl = SININCL_MIN

    # Argument of latitude
    cosu = x[0] * cosnode + x[1] * sinnode
    sinu = x[2] / sinincl
    uu = math.atan2(sinu, cosu)

    r = norm(x)
    sema = 1.0 / (2.0 / r - dot(v, v) / gm)
    pp = c2 / gm
    ecce = math.sqrt(max(0.0, 1.0 - pp / sema)) if sema > 0 else ECCE_MAX
    if ecce >= ECCE_MAX or sema <= 0:
        logger.warning("osculating orbit is not elliptic (e = %.6f), clamping", ecce)
        ecce = ECCE_MAX
        sema = abs(sema)
    elif ecce < ECCE_MIN:
        logger.warning("osculating orbit is circular, apsides undefined")
        ecce = ECCE_MIN

    cos_e = (1.0 - r / sema) / ecce
    sin_e = dot(x, v) / (ecce * math.sqrt(sema * gm))
    ny = 2.0 * math.atan(math.sqrt((1.0 + ecce) / (1.0 - ecce)) * sin_e / (1.0 + cos_e))

    # Perihelion: rotate out of the orbital plane, then add the node
    xq = pol_cart([radnorm(uu - ny), 0.0, sema * (1.0 - ecce)])
    xq = coortrf2(xq, -sinincl, cosincl)
    xq = cart_pol(xq)
    xq[0] += math.atan2(sinnode, cosnode)
    if focal_point:
        aphe_r = sema * ecce * 2.0
    else:
        aphe_r = sema * (1.0 + ecce)
    xa = [radnorm(xq[0] + math.pi), -xq[1], aphe_r]

    # Node distances on the ellipse
    ny_node = radnorm(ny - uu)
    rn = radius_at_true_anomaly(sema, ecce, ny_node)
    rn2 = radius_at_true_anomaly(sema, ecce, radnorm(ny_node + math.pi))
    ro = norm(xn)
    if ro < VECTOR_EPSILON:
        ro = VECTOR_EPSILON
    xn = [c * rn / ro for c in xn]
    xs = [c * rn2 / ro for c in xs]

    return [xn, xs, pol_cart(xq), pol_cart(xa)]


def _to_ecliptic_of_date(ctx, jd_tt: float, xx: Sequence[float], nutated: bool) -> Vector:
    """J2000 equatorial state -> ecliptic of date (true ecliptic if nutated)."""
    xx = precess_state(xx, jd_tt, J2000_TO_J, ctx.prec_model)
    nut = ctx.nutation(jd_tt) if nutated else None
    if nut is not None:
        xx = mat_apply(nut.matrix, xx[0:3]) + mat_apply(nut.matrix, xx[3:6])
    oe = ctx.obliquity(jd_tt)
    xx = rotate_state(xx, oe.seps, oe.ceps)
    if nut is not None:
        xx = rotate_state(xx, nut.snut, nut.cnut)
    return xx


def _osculating_sample(ctx, jd_tt: float, body: int, source: EphemerisSource,
                       center: ReferenceCenter, icrs: bool) -> Tuple[Vector, int]:
    sample_config = CalcConfig(
        source=source,
        center=center,
        epoch=FrameEpoch.J2000,
        speed=True,
        true_position=True,
        light_deflection=False,
        aberration=False,
        nutation=False,
        equatorial=True,
        cartesian=True,
        icrs=icrs,
    )
    xx, retflag = compute_apparent(ctx, jd_tt, body, sample_config)
    if body == SE_EARTH:
        # Earth-Moon barycenter orbit
        moon_config = replace(sample_config, center=ReferenceCenter.GEO)
        xm, _ = compute_apparent(ctx, jd_tt, SE_MOON, moon_config)
        xx = [xx[i] + xm[i] / (EARTH_MOON_MRAT + 1.0) for i in range(6)]
    return xx, retflag


def _osculating_with_speed(ctx, jd_tt: float, body: int, config: CalcConfig,
                           use_bary: bool, focal_point: bool) -> Tuple[List[Vector], int]:
    if body == SE_MOON:
        center = ReferenceCenter.GEO
    elif use_bary:
        center = ReferenceCenter.BARY
    else:
        center = ReferenceCenter.HELIO
    sample_body = SE_EARTH if body == SE_SUN else body

    gm = gravitational_parameter(body)
    x0, retflag = _osculating_sample(ctx, jd_tt, sample_body, config.source, center, config.icrs)
    if body == SE_MOON:
        dt = NODE_CALC_INTV
        dzmin = NODE_DZ_MIN
    else:
        dt = NODE_CALC_INTV * 10.0 * norm(x0[0:3])
        dzmin = NODE_DZ_MIN * dt / NODE_CALC_INTV

    def points(t: float, xx: Optional[Vector] = None) -> List[Vector]:
        if xx is None:
            xx, _ = _osculating_sample(ctx, t, sample_body, config.source, center, config.icrs)
        xx = _to_ecliptic_of_date(ctx, jd_tt, xx, config.nutation)
        return osculating_points(xx, gm, dzmin, focal_point)

    p0 = points(jd_tt, x0)
    if not config.speed:
        return [p + [0.0, 0.0, 0.0] for p in p0], retflag
    pm = points(jd_tt - dt)
    pp = points(jd_tt + dt)
    result = [
        p0[k] + [(pp[k][i] - pm[k][i]) / (2.0 * dt) for i in range(3)]
        for k in range(4)
    ]
    return result, retflag


# =============================================================================
# OUTPUT FRAME
# =============================================================================


def transform_mean_to_true(ctx, provider, jd_tt: float, xx: Sequence[float],
                           config: CalcConfig, central: Optional[int],
                           nutated: bool = False, invert: bool = False) -> List[float]:
    """
    Take an ecliptic point relative to its central body to the requested output.

    The point is rotated back to the mean equator of date and precessed to
    J2000, moved to the barycenter by adding the central body, referred to the
    observer and then precessed forward and nutated by pipeline.finish().

    Args:
        ctx: ComputationContext
        provider: Provider serving the central body and the observer, or None
            for a geocentric point that needs neither
        jd_tt: Julian Day (TT)
        xx: Cartesian state on the ecliptic of date (true ecliptic if nutated)
        config: Output configuration
        central: SE_SUN, SE_EARTH or None (already barycentric)
        nutated: xx is referred to the true ecliptic and equinox of date
        invert: Point belongs to the Earth's orbit and the Sun is requested
            from the Earth; the geocentric point is the reversed heliocentric one

    Returns:
        Position packed as requested by config
    """
    nut = ctx.nutation(jd_tt) if nutated else None
    oe = ctx.obliquity(jd_tt)
    xx = list(xx)
    if nut is not None:
        xx = rotate_state(xx, -nut.snut, nut.cnut)
    xx = rotate_state(xx, -oe.seps, oe.ceps)
    if nut is not None:
        xx = mat_apply_transposed(nut.matrix, xx[0:3]) + mat_apply_transposed(nut.matrix, xx[3:6])
    xx = precess_state(xx, jd_tt, J_TO_J2000, ctx.prec_model)

    if provider is None:
        # Geocentric point: the central body and the observer coincide
        if config.center is ReferenceCenter.TOPO:
            off = topocentric_offset(ctx, jd_tt)
            xx = [xx[i] - off[i] for i in range(6)]
    elif invert:
        xx = [-c for c in xx]
        if config.center is ReferenceCenter.TOPO:
            off = output_frame(ctx, provider, topocentric_offset(ctx, jd_tt), config)
            xx = [xx[i] - off[i] for i in range(6)]
    else:
        if central is not None:
            xc = output_frame(ctx, provider, provider.state(central, jd_tt), config)
            xx = [xx[i] + xc[i] for i in range(6)]
        xobs = output_frame(
            ctx, provider, observer_state(ctx, provider, jd_tt, config.center), config
        )
        xx = [xx[i] - xobs[i] for i in range(6)]

    if not config.speed:
        xx[3:6] = [0.0, 0.0, 0.0]
    if not config.j2000:
        xx = precess_state(xx, jd_tt, J2000_TO_J, ctx.prec_model)
    return finish(ctx, jd_tt, xx, config)


# =============================================================================
# ENGINE
# =============================================================================


def _validate(body: int) -> None:
    if body not in NODAPS_BODIES:
        raise UnsupportedCombinationError("nodes and apsides not available for body", body=body)


def compute_nodes_apsides(ctx, jd_tt: float, body: int, config: CalcConfig,
                          method: int) -> Tuple[NodesApsides, int]:
    """
    Nodes and apsides of a body.

    Args:
        ctx: ComputationContext
        jd_tt: Julian Day (TT)
        body: SE_SUN .. SE_PLUTO or SE_EARTH
        config: Output configuration
        method: SE_NODBIT_* bits; 0 means SE_NODBIT_MEAN

    Returns:
        (NodesApsides, retflag); each point is packed like a calc() result

    Raises:
        UnsupportedCombinationError: Unsupported body
        EphemerisUnavailableError: No provider or mean-element range for the date
    """
    _validate(body)
    focal_point = bool(method & SE_NODBIT_FOPOINT)
    use_mean = method == 0 or bool(method & SE_NODBIT_MEAN)
    if use_mean and body == SE_PLUTO:
        logger.debug("no mean elements for Pluto, using osculating elements")
        use_mean = False

    central = SE_EARTH if body == SE_MOON else SE_SUN
    if use_mean:
        points = _mean_points_with_speed(body, jd_tt, focal_point, config.speed)
        nutated = False
        if body == SE_MOON and config.center in (ReferenceCenter.GEO, ReferenceCenter.TOPO):
            # Mean lunar elements are analytic and already geocentric
            provider = None
            retflag = config.to_flags()
        else:
            provider = ctx.select_provider(config.source, central, jd_tt)
            retflag = config.with_source(EphemerisSource(provider.flag)).to_flags()
    else:
        use_bary = bool(method & SE_NODBIT_OSCU_BAR) and body != SE_MOON
        points, retflag = _osculating_with_speed(
            ctx, jd_tt, body, config, use_bary, focal_point
        )
        nutated = config.nutation
        provider = ctx.select_provider(config.source, central, jd_tt)
        if use_bary:
            central = None

    invert = body == SE_SUN and config.center in (ReferenceCenter.GEO, ReferenceCenter.TOPO)
    results = []
    for k, xx in enumerate(points):
        if k < 2 and body in (SE_SUN, SE_EARTH):
            # The Earth's orbit defines the ecliptic: no nodes
            results.append(list(ZERO_STATE))
            continue
        results.append(
            transform_mean_to_true(ctx, provider, jd_tt, xx, config, central, nutated, invert)
        )
    return NodesApsides(*results), retflag


def nod_aps_with_context(ctx, tjd: float, ipl: int, iflag: int, method: int):
    """
    Flag-level entry point used by ComputationContext.nod_aps().

    Returns:
        (xnasc, xndsc, xperi, xaphe), each a 6-tuple
    """
    config = CalcConfig.from_flags(iflag)
    result, _ = compute_nodes_apsides(ctx, tjd, ipl, config, method)
    return tuple(tuple(float(c) for c in x) for x in result)


def swe_nod_aps(tjd_et: float, ipl: int, iflag: int, method: int):
    """
    Planetary nodes and apsides for Ephemeris Time (TT).

    Swiss Ephemeris compatible function.

    Args:
        tjd_et: Julian Day (TT)
        ipl: Body (SE_SUN .. SE_PLUTO, SE_EARTH)
        iflag: Calculation flags (SEFLG_*)
        method: SE_NODBIT_MEAN, SE_NODBIT_OSCU, SE_NODBIT_OSCU_BAR, optionally
            OR-ed with SE_NODBIT_FOPOINT

    Returns:
        Tuple (ascending node, descending node, perihelion, aphelion), each
        (lon, lat, dist, speed_lon, speed_lat, speed_dist)

    Example:
        >>> asc, dsc, peri, aphe = swe_nod_aps(2451545.0, SE_MARS, SEFLG_SPEED, SE_NODBIT_MEAN)
    """
    from .state import get_default_context

    return nod_aps_with_context(get_default_context(), tjd_et, ipl, iflag, method)


def swe_nod_aps_ut(tjd_ut: float, ipl: int, iflag: int, method: int):
    """Same as swe_nod_aps() for Universal Time."""
    from .state import get_default_context

    return get_default_context().nod_aps_ut(tjd_ut, ipl, iflag, method)
