"""
Thread-safe computation context for ephemcore.

A ComputationContext carries everything a calculation needs besides its
arguments: observer location, sidereal mode, precession/nutation/bias model
choices, the ordered provider list for each ephemeris source and a bounded
memo of obliquity and nutation values keyed by (jd, model).

Each thread should use its own context. The module-level swe_* functions use
the default context from ephemcore.state, which reproduces the stateful
pyswisseph behaviour.

Example:
    >>> ctx = ComputationContext()
    >>> ctx.set_topo(12.5, 41.9, 0)
    >>> pos, flag = ctx.calc_ut(2451545.0, SE_SUN, SEFLG_TOPOCTR)
"""

import logging
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple, Union

from .config import EphemerisSource
from .constants import (
    SE_SIDBIT_ECL_T0,
    SE_SIDBIT_SSY_PLANE,
    SE_SIDBITS,
    SE_SIDM_FAGAN_BRADLEY,
    SE_SIDM_USER,
    SE_NSIDM_PREDEF,
    SEMOD_BIAS_DEFAULT,
    SEMOD_BIAS_IAU2000,
    SEMOD_BIAS_IAU2006,
    SEMOD_BIAS_NONE,
    SEMOD_NUT_DEFAULT,
    SEMOD_NUT_IAU_2000A,
    SEMOD_NUT_IAU_2000B,
    SEMOD_OBLIQ_DEFAULT,
    SEMOD_PREC_DEFAULT,
)
from .exceptions import EphemerisUnavailableError, UnsupportedCombinationError
from .frames import (
    OBLIQUITY_MODELS,
    PRECESSION_MODELS,
    NutationData,
    ObliquityData,
    nutation_data,
    obliquity_data,
)
from .state import get_planets, get_timescale

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE = 256


class ComputationContext:
    """
    Per-caller calculation state.

    Args:
        topo: Observer (lon, lat, alt) in degrees/meters, or None
        sid_mode: Sidereal mode (SE_SIDM_*), optionally OR-ed with SE_SIDBIT_*
        prec_model: Precession model (SEMOD_PREC_*)
        obliq_model: Obliquity model (SEMOD_PREC_*, Vondrak 2011 by default)
        nut_model: SEMOD_NUT_IAU_2000B (default) or SEMOD_NUT_IAU_2000A
        bias_model: SEMOD_BIAS_IAU2006 (default), SEMOD_BIAS_IAU2000 or SEMOD_BIAS_NONE
        providers: Optional {EphemerisSource: [provider, ...]} overriding the
            default provider lists
        cache_size: Maximum number of entries in each memo
    """

    def __init__(
        self,
        topo: Optional[Tuple[float, float, float]] = None,
        sid_mode: int = SE_SIDM_FAGAN_BRADLEY,
        prec_model: int = SEMOD_PREC_DEFAULT,
        obliq_model: int = SEMOD_OBLIQ_DEFAULT,
        nut_model: int = SEMOD_NUT_DEFAULT,
        bias_model: int = SEMOD_BIAS_DEFAULT,
        providers: Optional[Dict[EphemerisSource, Sequence]] = None,
        cache_size: int = DEFAULT_CACHE_SIZE,
    ):
        self._topo: Optional[Tuple[float, float, float]] = None
        if topo is not None:
            self.set_topo(*topo)

        self.sid_mode = SE_SIDM_FAGAN_BRADLEY
        self.sid_bits = 0
        self.sid_t0 = 0.0
        self.sid_ayan_t0 = 0.0
        self.set_sid_mode(sid_mode)

        self.prec_model = SEMOD_PREC_DEFAULT
        self.obliq_model = SEMOD_OBLIQ_DEFAULT
        self.nut_model = SEMOD_NUT_DEFAULT
        self.bias_model = SEMOD_BIAS_DEFAULT
        self.set_astro_models(prec_model, obliq_model, nut_model, bias_model)

        self._providers: Dict[EphemerisSource, List] = {}
        if providers:
            for source, plist in providers.items():
                self.set_providers(source, plist)

        self._cache_size = cache_size
        self._obliquity_cache: "OrderedDict[tuple, ObliquityData]" = OrderedDict()
        self._nutation_cache: "OrderedDict[tuple, NutationData]" = OrderedDict()

    # =========================================================================
    # OBSERVER AND SIDEREAL MODE
    # =========================================================================

    def set_topo(self, lon: float, lat: float, alt: float = 0.0) -> None:
        """
        Set observer location for SEFLG_TOPOCTR and eclipse visibility.

        Args:
            lon: Geographic longitude in degrees (East positive)
            lat: Geographic latitude in degrees (North positive)
            alt: Elevation above sea level in meters
        """
        if not -90.0 <= lat <= 90.0:
            raise UnsupportedCombinationError("latitude out of range", lat=lat)
        self._topo = (float(lon), float(lat), float(alt))

    def get_topo(self) -> Optional[Tuple[float, float, float]]:
        return self._topo

    def set_sid_mode(self, mode: int, t0: float = 0.0, ayan_t0: float = 0.0) -> None:
        """
        Set the sidereal mode (ayanamsha system).

        Args:
            mode: SE_SIDM_* value, optionally OR-ed with SE_SIDBIT_* option bits
            t0: Reference epoch (JD) for SE_SIDM_USER
            ayan_t0: Ayanamsha in degrees at t0 for SE_SIDM_USER
        """
        bits = mode & ~(SE_SIDBITS - 1)
        base = mode & (SE_SIDBITS - 1)
        if base != SE_SIDM_USER and not 0 <= base < SE_NSIDM_PREDEF:
            raise UnsupportedCombinationError("unknown sidereal mode", mode=mode)
        if bits & (SE_SIDBIT_ECL_T0 | SE_SIDBIT_SSY_PLANE):
            raise UnsupportedCombinationError(
                "projection onto the ecliptic of t0 or the solar system plane is not supported",
                mode=mode,
            )
        self.sid_mode = base
        self.sid_bits = bits
        self.sid_t0 = t0
        self.sid_ayan_t0 = ayan_t0

    def get_sid_mode(self, full: bool = False) -> Union[int, Tuple[int, float, float]]:
        if full:
            return self.sid_mode, self.sid_t0, self.sid_ayan_t0
        return self.sid_mode

    # =========================================================================
    # ASTRONOMICAL MODELS
    # =========================================================================

    def set_astro_models(
        self,
        prec_model: Optional[int] = None,
        obliq_model: Optional[int] = None,
        nut_model: Optional[int] = None,
        bias_model: Optional[int] = None,
    ) -> None:
        """
        Select precession, obliquity, nutation and frame-bias models.

        Arguments left as None keep their current value. Changing any model
        clears the obliquity/nutation memo.

        Raises:
            UnsupportedCombinationError: If a model is not implemented
        """
        if prec_model is not None:
            if prec_model not in PRECESSION_MODELS:
                raise UnsupportedCombinationError(
                    "precession model not supported", model=prec_model
                )
            self.prec_model = prec_model
        if obliq_model is not None:
            if obliq_model not in OBLIQUITY_MODELS:
                raise UnsupportedCombinationError(
                    "obliquity model not supported", model=obliq_model
                )
            self.obliq_model = obliq_model
        if nut_model is not None:
            if nut_model not in (SEMOD_NUT_IAU_2000A, SEMOD_NUT_IAU_2000B):
                raise UnsupportedCombinationError(
                    "nutation model not supported", model=nut_model
                )
            self.nut_model = nut_model
        if bias_model is not None:
            if bias_model not in (SEMOD_BIAS_NONE, SEMOD_BIAS_IAU2000, SEMOD_BIAS_IAU2006):
                raise UnsupportedCombinationError(
                    "bias model not supported", model=bias_model
                )
            self.bias_model = bias_model
        self.clear_cache()

    def obliquity(self, jd_tt: float) -> ObliquityData:
        """Mean obliquity at jd_tt with the context's model, memoized."""
        key = (jd_tt, self.obliq_model)
        cache = self._obliquity_cache
        value = cache.get(key)
        if value is None:
            value = obliquity_data(jd_tt, self.obliq_model)
            self._store(cache, key, value)
        else:
            cache.move_to_end(key)
        return value

    def nutation(self, jd_tt: float) -> NutationData:
        """Nutation angles and matrix at jd_tt, memoized."""
        key = (jd_tt, self.nut_model, self.obliq_model)
        cache = self._nutation_cache
        value = cache.get(key)
        if value is None:
            value = nutation_data(jd_tt, self.obliquity(jd_tt).eps, self.nut_model)
            self._store(cache, key, value)
        else:
            cache.move_to_end(key)
        return value

    def _store(self, cache: OrderedDict, key: tuple, value) -> None:
        cache[key] = value
        if len(cache) > self._cache_size:
            cache.popitem(last=False)

    def clear_cache(self) -> None:
        self._obliquity_cache = OrderedDict()
        self._nutation_cache = OrderedDict()

    # =========================================================================
    # PROVIDERS
    # =========================================================================

    def providers(self, source: EphemerisSource) -> List:
        """Ordered provider list for an ephemeris source, built on first use."""
        plist = self._providers.get(source)
        if plist is None:
            from .providers import default_providers

            plist = default_providers(source)
            self._providers[source] = plist
        return plist

    def set_providers(self, source: EphemerisSource, providers: Sequence) -> None:
        self._providers[EphemerisSource(source)] = list(providers)

    def reset_providers(self) -> None:
        self._providers = {}

    def select_provider(self, source: EphemerisSource, body: int, jd_tt: float):
        """
        First provider of the source's list that supports (body, jd_tt).

        Raises:
            EphemerisUnavailableError: If no provider can serve the request
        """
        plist = self.providers(source)
        for i, provider in enumerate(plist):
            if provider.supports(body, jd_tt):
                if i > 0:
                    logger.debug(
                        "falling back to %s for body %d at jd %.6f",
                        provider.name, body, jd_tt,
                    )
                return provider
        raise EphemerisUnavailableError(
            "no ephemeris provider covers this body and date",
            body=body,
            jd=jd_tt,
            source=source.name,
        )

    # =========================================================================
    # SHARED RESOURCES
    # =========================================================================

    def get_timescale(self):
        return get_timescale()

    def get_planets(self):
        return get_planets()

    # =========================================================================
    # CALCULATION API
    # =========================================================================

    def calc(self, tjd: float, ipl: int, iflag: int):
        from .planets import calc_with_context

        return calc_with_context(self, tjd, ipl, iflag)

    def calc_ut(self, tjd_ut: float, ipl: int, iflag: int):
        from .planets import calc_with_context
        from .time_utils import ut_to_tt

        return calc_with_context(self, ut_to_tt(tjd_ut), ipl, iflag)

    def nod_aps(self, tjd: float, ipl: int, iflag: int, method: int):
        from .nodes_apsides import nod_aps_with_context

        return nod_aps_with_context(self, tjd, ipl, iflag, method)

    def nod_aps_ut(self, tjd_ut: float, ipl: int, iflag: int, method: int):
        from .nodes_apsides import nod_aps_with_context
        from .time_utils import ut_to_tt

        return nod_aps_with_context(self, ut_to_tt(tjd_ut), ipl, iflag, method)

    def get_ayanamsa(self, tjd: float) -> float:
        from .sidereal import get_ayanamsa

        return get_ayanamsa(self, tjd, nutation=False)

    def get_ayanamsa_ut(self, tjd_ut: float) -> float:
        from .sidereal import get_ayanamsa
        from .time_utils import ut_to_tt

        return get_ayanamsa(self, ut_to_tt(tjd_ut), nutation=False)

    def get_ayanamsa_ex(self, tjd: float, iflag: int) -> Tuple[int, float]:
        from .sidereal import get_ayanamsa_ex

        return get_ayanamsa_ex(self, tjd, iflag)


# pyswisseph-compatible context name
EphemerisContext = ComputationContext
