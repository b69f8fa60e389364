"""
Ephemeris providers for ephemcore.

A provider turns (body, jd_tt) into a raw barycentric equatorial state vector
[x, y, z, vx, vy, vz] in AU and AU/day. The frame of the vector is named by
the provider's ``frame`` attribute ("ICRS" for JPL kernels, "J2000" for the
analytic theory); the pipeline applies the frame bias only to ICRS output.

Providers are consulted as an ordered list per ephemeris source: the first
one whose ``supports()`` returns True serves the request.

- JplProvider: JPL DE kernels read by Skyfield (SEFLG_JPLEPH)
- ChebyshevSegmentProvider: segmented Chebyshev fits over another provider,
  the compressed-file representation behind SEFLG_SWIEPH
- AnalyticProvider (ephemcore.analytic): Keplerian planets and a truncated
  lunar theory, available for any date (SEFLG_MOSEPH)
"""

import logging
import math
import threading
from collections import OrderedDict
from typing import Dict, List, Optional, Tuple

import numpy as np
from skyfield.errors import EphemerisRangeError

from .config import EphemerisSource
from .constants import (
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
    SEFLG_JPLEPH,
    SEFLG_SWIEPH,
)
from .exceptions import EphemerisUnavailableError
from .state import get_planets, get_timescale
from .vectors import Vector, echeb, edcheb

logger = logging.getLogger(__name__)

PROVIDER_BODIES = (
    SE_SUN, SE_MOON, SE_MERCURY, SE_VENUS, SE_MARS, SE_JUPITER,
    SE_SATURN, SE_URANUS, SE_NEPTUNE, SE_PLUTO, SE_EARTH,
)


class EphemerisProvider:
    """
    Interface of an ephemeris source.

    Attributes:
        name: Short identifier used in log messages
        frame: "ICRS" or "J2000", orientation of the returned vectors
        flag: SEFLG_* ephemeris bit reported in the return flag
    """

    name = "provider"
    frame = "ICRS"
    flag = SEFLG_SWIEPH

    def supports(self, body: int, jd_tt: float) -> bool:
        raise NotImplementedError

    def state(self, body: int, jd_tt: float) -> Vector:
        raise NotImplementedError


# =============================================================================
# JPL KERNELS (SKYFIELD)
# =============================================================================

# FIXME: Precision - DE kernels only carry system barycenters for the outer
# planets; the difference from the planet center is < 0.01" from Earth.
_JPL_TARGETS = {
    SE_SUN: "sun",
    SE_MOON: "moon",
    SE_MERCURY: "mercury",
    SE_VENUS: "venus",
    SE_MARS: "mars barycenter",
    SE_JUPITER: "jupiter barycenter",
    SE_SATURN: "saturn barycenter",
    SE_URANUS: "uranus barycenter",
    SE_NEPTUNE: "neptune barycenter",
    SE_PLUTO: "pluto barycenter",
    SE_EARTH: "earth",
}


class JplProvider(EphemerisProvider):
    """
    JPL DE ephemeris read through Skyfield.

    Args:
        kernel: An already loaded SpiceKernel; by default the kernel selected
            with set_ephemeris_file() is loaded on first use
        download: Allow downloading the kernel when it is not on disk
    """

    name = "jpl"
    frame = "ICRS"
    flag = SEFLG_JPLEPH

    def __init__(self, kernel=None, download: bool = True):
        self._kernel = kernel
        self._download = download
        self._failed = False
        self._range: Optional[Tuple[float, float]] = None

    def kernel(self):
        """
        The SpiceKernel, loaded on first use.

        Raises:
            EphemerisUnavailableError: If the file cannot be loaded
        """
        if self._kernel is None:
            try:
                self._kernel = get_planets(download=self._download)
            except (OSError, ValueError) as exc:
                self._failed = True
                raise EphemerisUnavailableError(
                    f"cannot load JPL ephemeris: {exc}"
                ) from exc
        return self._kernel

    def coverage(self) -> Tuple[float, float]:
        """(start, end) TDB Julian days covered by every segment of the kernel."""
        if self._range is None:
            kernel = self.kernel()
            start = -math.inf
            end = math.inf
            for segment in kernel.segments:
                spk = segment.spk_segment
                start = max(start, spk.start_jd)
                end = min(end, spk.end_jd)
            self._range = (start, end)
        return self._range

    def supports(self, body: int, jd_tt: float) -> bool:
        if body not in _JPL_TARGETS or self._failed:
            return False
        try:
            start, end = self.coverage()
        except EphemerisUnavailableError as exc:
            logger.debug("JPL provider unavailable: %s", exc)
            return False
        return start <= jd_tt <= end

    def state(self, body: int, jd_tt: float) -> Vector:
        target = _JPL_TARGETS.get(body)
        if target is None:
            raise EphemerisUnavailableError("body not in JPL ephemeris", body=body)
        kernel = self.kernel()
        t = get_timescale().tt_jd(jd_tt)
        try:
            pos = kernel[target].at(t)
        except EphemerisRangeError as exc:
            raise EphemerisUnavailableError(
                f"date outside JPL ephemeris range: {exc}", body=body, jd=jd_tt
            ) from exc
        x = pos.position.au
        v = pos.velocity.au_per_d
        return [float(x[0]), float(x[1]), float(x[2]),
                float(v[0]), float(v[1]), float(v[2])]


# =============================================================================
# SEGMENTED CHEBYSHEV FITS
# =============================================================================

CHEBYSHEV_EPOCH = 2451536.5  # 1999-12-23, segment boundaries are multiples of the length from here

# Segment length in days and number of coefficients per coordinate
CHEBYSHEV_SEGMENTS = {
    SE_MOON: (4.0, 14),
    SE_EARTH: (4.0, 14),
    SE_SUN: (32.0, 12),
    SE_MERCURY: (8.0, 12),
    SE_VENUS: (16.0, 12),
    SE_MARS: (32.0, 12),
    SE_JUPITER: (64.0, 10),
    SE_SATURN: (64.0, 10),
    SE_URANUS: (128.0, 10),
    SE_NEPTUNE: (128.0, 10),
    SE_PLUTO: (128.0, 10),
}

DEFAULT_SEGMENT_CACHE_SIZE = 512


class ChebyshevSegmentProvider(EphemerisProvider):
    """
    Piecewise Chebyshev representation of another provider.

    Time is cut into fixed-length segments per body; inside each segment the
    three position coordinates are fitted at the Chebyshev nodes of the first
    kind and the velocity is the analytic derivative of the fit. Fitted
    segments are kept in an LRU cache shared by all threads and guarded by a
    lock.

    Args:
        source: Provider sampled to build the fits
        segments: Optional {body: (length_days, n_coefficients)} override
        cache_size: Maximum number of fitted segments kept in memory
    """

    name = "chebyshev"
    flag = SEFLG_SWIEPH

    def __init__(
        self,
        source: EphemerisProvider,
        segments: Optional[Dict[int, Tuple[float, int]]] = None,
        cache_size: int = DEFAULT_SEGMENT_CACHE_SIZE,
    ):
        self.source = source
        self.frame = source.frame
        self.segments = dict(CHEBYSHEV_SEGMENTS)
        if segments:
            self.segments.update(segments)
        self._cache: "OrderedDict[Tuple[int, int], Tuple[float, float, List[List[float]]]]" = OrderedDict()
        self._cache_size = cache_size
        self._lock = threading.Lock()

    def _segment_bounds(self, body: int, jd_tt: float) -> Tuple[int, float, float]:
        length = self.segments[body][0]
        index = int(math.floor((jd_tt - CHEBYSHEV_EPOCH) / length))
        start = CHEBYSHEV_EPOCH + index * length
        return index, start, start + length

    def supports(self, body: int, jd_tt: float) -> bool:
        if body not in self.segments:
            return False
        _, start, end = self._segment_bounds(body, jd_tt)
        return self.source.supports(body, start) and self.source.supports(body, end)

    def _fit(self, body: int, start: float, end: float) -> List[List[float]]:
        ncoef = self.segments[body][1]
        k = np.arange(ncoef)
        nodes = np.cos(math.pi * (k + 0.5) / ncoef)
        mid = (start + end) / 2.0
        half = (end - start) / 2.0
        samples = np.array(
            [self.source.state(body, mid + half * x)[0:3] for x in nodes]
        )
        basis = np.cos(math.pi * np.outer(k, k + 0.5) / ncoef)
        coef = (2.0 / ncoef) * basis.dot(samples)
        return [coef[:, i].tolist() for i in range(3)]

    def coefficients(self, body: int, jd_tt: float) -> Tuple[float, float, List[List[float]]]:
        """(start, end, [cx, cy, cz]) of the segment containing jd_tt."""
        index, start, end = self._segment_bounds(body, jd_tt)
        key = (body, index)
        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                self._cache.move_to_end(key)
                return entry
        logger.debug("fitting Chebyshev segment body=%d start=%.1f", body, start)
        entry = (start, end, self._fit(body, start, end))
        with self._lock:
            self._cache[key] = entry
            if len(self._cache) > self._cache_size:
                self._cache.popitem(last=False)
        return entry

    def state(self, body: int, jd_tt: float) -> Vector:
        if body not in self.segments:
            raise EphemerisUnavailableError("body not in Chebyshev ephemeris", body=body)
        start, end, coefs = self.coefficients(body, jd_tt)
        length = end - start
        x = 2.0 * (jd_tt - start) / length - 1.0
        pos = [echeb(x, c) for c in coefs]
        vel = [edcheb(x, c) * 2.0 / length for c in coefs]
        return pos + vel


# =============================================================================
# DEFAULT PROVIDER LISTS
# =============================================================================


def default_providers(source: EphemerisSource) -> List[EphemerisProvider]:
    """
    Ordered provider list for an ephemeris source.

    - JPL: the JPL kernel only (downloaded if missing)
    - SWISS: Chebyshev fits of a local JPL kernel, then the analytic theory
    - MOSHIER: the analytic theory only
    """
    from .analytic import AnalyticProvider

    if source == EphemerisSource.JPL:
        return [JplProvider()]
    if source == EphemerisSource.SWISS:
        return [ChebyshevSegmentProvider(JplProvider(download=False)), AnalyticProvider()]
    return [AnalyticProvider()]
