from .constants import *
from .time_utils import swe_julday, swe_revjul, swe_deltat
from .planets import swe_calc_ut, swe_calc
from .nodes_apsides import swe_nod_aps, swe_nod_aps_ut
from .sidereal import (
    swe_get_ayanamsa_ut,
    swe_get_ayanamsa,
    swe_get_ayanamsa_ex,
    swe_get_ayanamsa_ex_ut,
    swe_get_ayanamsa_name,
    swe_set_sid_mode,
)
from .eclipses import (
    swe_lun_eclipse_when,
    swe_lun_eclipse_how,
    swe_sol_eclipse_when_loc,
    swe_sol_eclipse_how,
)
from .horizon import swe_azalt, swe_azalt_rev, swe_refrac, swe_refrac_extended
from .houses import swe_houses, swe_houses_ex, swe_houses_armc, swe_house_name
from .state import (
    set_topo as swe_set_topo,
    set_ephe_path as swe_set_ephe_path,
    set_ephemeris_file as swe_set_ephemeris_file,
    get_default_context,
)
from .utils import difdeg2n, degnorm
from .config import CalcConfig
from .context import ComputationContext
from .providers import EphemerisProvider, JplProvider, ChebyshevSegmentProvider
from .analytic import AnalyticProvider
from .exceptions import (
    EphemerisError,
    EphemerisUnavailableError,
    UnsupportedCombinationError,
    EclipseSearchError,
)


# =============================================================================
# PYSWISSEPH-COMPATIBLE FUNCTION ALIASES (without swe_ prefix)
# =============================================================================

# Time functions
julday = swe_julday
revjul = swe_revjul
deltat = swe_deltat

# Planet calculation
calc_ut = swe_calc_ut
calc = swe_calc

# Nodes and apsides
nod_aps = swe_nod_aps
nod_aps_ut = swe_nod_aps_ut

# Eclipses
lun_eclipse_when = swe_lun_eclipse_when
lun_eclipse_how = swe_lun_eclipse_how
sol_eclipse_when_loc = swe_sol_eclipse_when_loc
sol_eclipse_how = swe_sol_eclipse_how

# Horizon
azalt = swe_azalt
azalt_rev = swe_azalt_rev
refrac = swe_refrac
refrac_extended = swe_refrac_extended

# Houses
houses = swe_houses
houses_ex = swe_houses_ex
houses_armc = swe_houses_armc
house_name = swe_house_name

# Ayanamsa (sidereal)
get_ayanamsa_ut = swe_get_ayanamsa_ut
get_ayanamsa = swe_get_ayanamsa
get_ayanamsa_ex = swe_get_ayanamsa_ex
get_ayanamsa_ex_ut = swe_get_ayanamsa_ex_ut
get_ayanamsa_name = swe_get_ayanamsa_name
set_sid_mode = swe_set_sid_mode

# Observer location and ephemeris files
set_topo = swe_set_topo
set_ephe_path = swe_set_ephe_path
set_ephemeris_file = swe_set_ephemeris_file


__version__ = "0.1.0"

__all__ = [
    # Context API
    "ComputationContext",
    "CalcConfig",
    "get_default_context",
    # Providers
    "EphemerisProvider",
    "JplProvider",
    "ChebyshevSegmentProvider",
    "AnalyticProvider",
    # Errors
    "EphemerisError",
    "EphemerisUnavailableError",
    "UnsupportedCombinationError",
    "EclipseSearchError",
    # Time functions
    "swe_julday",
    "julday",
    "swe_revjul",
    "revjul",
    "swe_deltat",
    "deltat",
    # Planet calculation
    "swe_calc_ut",
    "calc_ut",
    "swe_calc",
    "calc",
    # Nodes and apsides
    "swe_nod_aps",
    "nod_aps",
    "swe_nod_aps_ut",
    "nod_aps_ut",
    # Eclipses
    "swe_lun_eclipse_when",
    "lun_eclipse_when",
    "swe_lun_eclipse_how",
    "lun_eclipse_how",
    "swe_sol_eclipse_when_loc",
    "sol_eclipse_when_loc",
    "swe_sol_eclipse_how",
    "sol_eclipse_how",
    # Horizon
    "swe_azalt",
    "azalt",
    "swe_azalt_rev",
    "azalt_rev",
    "swe_refrac",
    "refrac",
    "swe_refrac_extended",
    "refrac_extended",
    # Houses
    "swe_houses",
    "houses",
    "swe_houses_ex",
    "houses_ex",
    "swe_houses_armc",
    "houses_armc",
    "swe_house_name",
    "house_name",
    # Ayanamsa (sidereal)
    "swe_set_sid_mode",
    "set_sid_mode",
    "swe_get_ayanamsa_ut",
    "get_ayanamsa_ut",
    "swe_get_ayanamsa",
    "get_ayanamsa",
    "swe_get_ayanamsa_ex",
    "get_ayanamsa_ex",
    "swe_get_ayanamsa_ex_ut",
    "get_ayanamsa_ex_ut",
    "swe_get_ayanamsa_name",
    "get_ayanamsa_name",
    # Observer location
    "swe_set_topo",
    "set_topo",
    "swe_set_ephe_path",
    "set_ephe_path",
    "swe_set_ephemeris_file",
    "set_ephemeris_file",
    # Utilities
    "difdeg2n",
    "degnorm",
]
