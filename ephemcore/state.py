"""
Process-wide resources and the default context of ephemcore.

Two kinds of state live here. The Skyfield loader, the timescale and the
JPL kernel are created lazily, once per process, and are shared by every
ComputationContext: JplProvider reads the kernel through get_planets() and
the time and frame code reads the timescale. The default context is the one
the module-level swe_* functions and the set_topo()/set_sid_mode() wrappers
operate on.

Code that wants its own observer, sidereal mode or providers builds a
ComputationContext and calls its methods; the default context is never
touched on that path.
"""

import logging
import os
import threading
from typing import Optional, Tuple, Union

from skyfield.api import Loader
from skyfield.jpllib import SpiceKernel
from skyfield.timelib import Timescale

logger = logging.getLogger(__name__)

# =============================================================================
# SHARED RESOURCES
# =============================================================================

DATA_DIR_ENV = "EPHEMCORE_DATA_DIR"

_EPHEMERIS_PATH: Optional[str] = None  # set_ephe_path() directory
_EPHEMERIS_FILE: str = "de421.bsp"
_LOADER: Optional[Loader] = None
_PLANETS: Optional[SpiceKernel] = None
_TS: Optional[Timescale] = None
_DEFAULT_CONTEXT = None
_LOCK = threading.Lock()  # lazy creation of the four objects above


def get_data_dir() -> str:
    """
    Cache directory of the Skyfield loader.

    EPHEMCORE_DATA_DIR when set, else the directory holding the package.
    """
    env = os.environ.get(DATA_DIR_ENV)
    if env:
        return env
    return os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))


def get_loader() -> Loader:
    global _LOADER
    with _LOCK:
        if _LOADER is None:
            _LOADER = Loader(get_data_dir(), verbose=False)
    return _LOADER


def get_timescale() -> Timescale:
    """
    Shared Skyfield timescale.

    Built from the delta T and leap-second data that ship with Skyfield;
    creating it never hits the network.
    """
    global _TS
    if _TS is None:
        load = get_loader()
        with _LOCK:
            if _TS is None:
                _TS = load.timescale()
    return _TS


def get_planets(download: bool = True) -> SpiceKernel:
    """
    Kernel behind JplProvider, loaded on first use.

    Lookup order for the configured file (get_ephemeris_file()): the
    set_ephe_path() directory, the data directory, then a download from JPL.

    Args:
        download: Allow the download step. The SWISS provider list passes
            False so that a missing kernel makes it fall back to the
            analytic theory instead.

    Raises:
        FileNotFoundError: If the file is absent and download is False
        OSError: If the download fails
    """
    global _PLANETS
    if _PLANETS is None:
        load = get_loader()
        with _LOCK:
            if _PLANETS is None:
                _PLANETS = _load_kernel(load, download)
    return _PLANETS


def _load_kernel(load: Loader, download: bool) -> SpiceKernel:
    if _EPHEMERIS_PATH:
        bsp_path = os.path.join(_EPHEMERIS_PATH, _EPHEMERIS_FILE)
        if os.path.exists(bsp_path):
            logger.debug("loading kernel %s", bsp_path)
            return load(bsp_path)

    bsp_path = os.path.join(get_data_dir(), _EPHEMERIS_FILE)
    if os.path.exists(bsp_path):
        logger.debug("loading kernel %s", bsp_path)
        return load(bsp_path)

    if not download:
        raise FileNotFoundError(f"ephemeris file {_EPHEMERIS_FILE} not found in {get_data_dir()}")
    logger.info("kernel %s not found locally, downloading", _EPHEMERIS_FILE)
    return load(_EPHEMERIS_FILE)


def set_ephe_path(path: Optional[str]) -> None:
    """
    Directory searched first for the kernel; None removes it.

    The loaded kernel is dropped and the default context rebuilds its
    provider lists on the next calculation. Contexts created by the caller
    keep the providers they already hold.
    """
    global _EPHEMERIS_PATH, _PLANETS
    _EPHEMERIS_PATH = path
    _PLANETS = None
    if _DEFAULT_CONTEXT is not None:
        _DEFAULT_CONTEXT.reset_providers()


def set_ephemeris_file(filename: str) -> None:
    """
    Switch the kernel file name, e.g. "de440.bsp".

    The JPL providers only answer inside the kernel's own span (de421 covers
    1900-2050), so a longer kernel widens the range served by the JPL and
    SWISS sources. Like set_ephe_path(), this drops the loaded kernel and
    the default context's providers.
    """
    global _EPHEMERIS_FILE, _PLANETS
    _EPHEMERIS_FILE = filename
    _PLANETS = None
    if _DEFAULT_CONTEXT is not None:
        _DEFAULT_CONTEXT.reset_providers()


def get_ephemeris_file() -> str:
    return _EPHEMERIS_FILE


# =============================================================================
# DEFAULT CONTEXT
# =============================================================================


def get_default_context():
    """ComputationContext shared by the module-level API, created on demand."""
    global _DEFAULT_CONTEXT
    if _DEFAULT_CONTEXT is None:
        from .context import ComputationContext

        with _LOCK:
            if _DEFAULT_CONTEXT is None:
                _DEFAULT_CONTEXT = ComputationContext()
    return _DEFAULT_CONTEXT


def reset_default_context() -> None:
    global _DEFAULT_CONTEXT
    _DEFAULT_CONTEXT = None


def set_topo(lon: float, lat: float, alt: float = 0.0) -> None:
    """
    Observer site of the default context, used by SEFLG_TOPOCTR.

    Args:
        lon: East longitude in degrees
        lat: Geodetic latitude in degrees
        alt: Height above the WGS84 ellipsoid in meters
    """
    get_default_context().set_topo(lon, lat, alt)


def get_topo() -> Optional[Tuple[float, float, float]]:
    return get_default_context().get_topo()


def set_sid_mode(mode: int, t0: float = 0.0, ayan_t0: float = 0.0) -> None:
    """
    Sidereal mode of the default context; see ComputationContext.set_sid_mode.

    t0 and ayan_t0 only matter for SE_SIDM_USER.
    """
    get_default_context().set_sid_mode(mode, t0, ayan_t0)


def get_sid_mode(full: bool = False) -> Union[int, Tuple[int, float, float]]:
    """Mode of the default context, or (mode, t0, ayan_t0) when full."""
    return get_default_context().get_sid_mode(full)
